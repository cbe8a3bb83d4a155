"""Task collection ownership and lifecycle."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from ..utils.logger import EventLogger
from .persistence import KeyValueStore

STORE_KEY = "todo_tasks"
MAX_TEXT_LENGTH = 120


def normalize_text(raw: Optional[str]) -> str:
    """Trim and clip task text; an empty result means "no text"."""
    text = (raw or "").strip()
    return text[:MAX_TEXT_LENGTH].rstrip()


class RenameResult(Enum):
    UPDATED = "updated"
    CANCELLED = "cancelled"
    NOT_FOUND = "not-found"


@dataclass(frozen=True)
class Task:
    """Represents a single to-do item."""

    id: int
    text: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the stored JSON shape."""
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @staticmethod
    def from_dict(data: Any) -> "Task":
        """Create from a stored entry, raising ValueError on any shape mismatch."""
        if not isinstance(data, dict):
            raise ValueError(f"task entry is not an object: {data!r}")
        missing = [name for name in ("id", "text", "completed") if name not in data]
        if missing:
            raise ValueError(f"task entry missing {', '.join(missing)}")

        task_id, text, completed = data["id"], data["text"], data["completed"]
        # bool is an int subclass; reject it explicitly.
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise ValueError(f"task id must be an integer: {task_id!r}")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"task {task_id} has empty or non-string text")
        if normalize_text(text) != text:
            raise ValueError(f"task {task_id} text is not trimmed or exceeds {MAX_TEXT_LENGTH} characters")
        if not isinstance(completed, bool):
            raise ValueError(f"task {task_id} completed flag must be a boolean")
        return Task(id=task_id, text=text, completed=completed)


def serialize_tasks(tasks: List[Task]) -> str:
    """Encode tasks as the JSON array written to the durable store."""
    return json.dumps([task.to_dict() for task in tasks], ensure_ascii=False)


def parse_tasks(raw: str) -> List[Task]:
    """Decode and validate a stored task array."""
    try:
        data = json.loads(raw)
    except RecursionError as exc:
        raise ValueError("stored tasks are nested too deeply to decode") from exc
    if not isinstance(data, list):
        raise ValueError("stored tasks are not a JSON array")

    tasks: List[Task] = []
    seen: set[int] = set()
    for entry in data:
        task = Task.from_dict(entry)
        if task.id in seen:
            raise ValueError(f"duplicate task id {task.id}")
        seen.add(task.id)
        tasks.append(task)
    return tasks


class TaskStore:
    """Owns the ordered task collection and persists it after every change.

    Blank text and unknown ids never raise: create returns ``None``, rename
    reports ``CANCELLED``/``NOT_FOUND``, toggle returns ``None`` and delete
    returns ``False``, leaving the collection untouched.
    """

    def __init__(
        self,
        store: KeyValueStore,
        key: str = STORE_KEY,
        logger: Optional[EventLogger] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.store = store
        self.key = key
        self.logger = logger or EventLogger()
        self._clock = clock
        self._tasks: List[Task] = []
        self._next_id = 1
        self.load()

    # ------------------------------------------------------------------ #
    # Persistence
    # ------------------------------------------------------------------ #
    def load(self) -> List[Task]:
        """Load tasks from the durable store; anything unreadable yields []."""
        tasks: List[Task] = []
        try:
            raw = self.store.get(self.key)
        except (OSError, ValueError, RecursionError) as exc:
            self.logger.log_store_read_failed(f"read error: {exc}")
            raw = None

        if raw:
            try:
                tasks = parse_tasks(raw)
            except ValueError as exc:
                self.logger.log_store_read_failed(str(exc), raw)
                tasks = []

        self._tasks = tasks
        # Ids stay above both the stored ids and the millisecond timestamps
        # older versions used as ids.
        highest = max((task.id for task in tasks), default=0)
        self._next_id = max(highest + 1, int(self._clock() * 1000))
        self.logger.log_store_loaded(len(tasks))
        return list(tasks)

    def persist(self) -> bool:
        """Write the collection to the durable store; False if the write failed."""
        try:
            self.store.set(self.key, serialize_tasks(self._tasks))
        except (OSError, ValueError) as exc:
            self.logger.log_store_write_failed(str(exc))
            return False
        return True

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def get(self, task_id: int) -> Optional[Task]:
        """Get task by ID."""
        return next((task for task in self._tasks if task.id == task_id), None)

    def list_all(self) -> List[Task]:
        """List all tasks in insertion order."""
        return list(self._tasks)

    def counts(self) -> Dict[str, int]:
        completed = sum(1 for task in self._tasks if task.completed)
        return {
            "total": len(self._tasks),
            "active": len(self._tasks) - completed,
            "completed": completed,
        }

    def __len__(self) -> int:
        return len(self._tasks)

    # ------------------------------------------------------------------ #
    # Mutations
    # ------------------------------------------------------------------ #
    def _allocate_id(self) -> int:
        task_id = self._next_id
        self._next_id += 1
        return task_id

    def _index_of(self, task_id: int) -> Optional[int]:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        return None

    def create(self, raw_text: str) -> Optional[Task]:
        """Append a new task; blank text is ignored."""
        text = normalize_text(raw_text)
        if not text:
            return None
        task = Task(id=self._allocate_id(), text=text)
        self._tasks.append(task)
        self.logger.log_task_created(task.id, task.text)
        self.persist()
        return task

    def rename(self, task_id: int, raw_text: str) -> RenameResult:
        """Replace a task's text. Blank text cancels the edit."""
        text = normalize_text(raw_text)
        if not text:
            return RenameResult.CANCELLED
        index = self._index_of(task_id)
        if index is None:
            return RenameResult.NOT_FOUND
        self._tasks[index] = replace(self._tasks[index], text=text)
        self.logger.log_task_renamed(task_id, text)
        self.persist()
        return RenameResult.UPDATED

    def toggle_complete(self, task_id: int) -> Optional[Task]:
        """Flip the completed flag and return the updated task."""
        index = self._index_of(task_id)
        if index is None:
            return None
        task = replace(self._tasks[index], completed=not self._tasks[index].completed)
        self._tasks[index] = task
        self.logger.log_task_toggled(task_id, task.completed)
        self.persist()
        return task

    def delete(self, task_id: int) -> bool:
        """Delete a task."""
        index = self._index_of(task_id)
        if index is None:
            return False
        del self._tasks[index]
        self.logger.log_task_deleted(task_id)
        self.persist()
        return True
