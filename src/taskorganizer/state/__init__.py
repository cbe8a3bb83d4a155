"""State management modules."""

from .persistence import JsonFileStore, KeyValueStore, MemoryStore, Persistence
from .tasks import MAX_TEXT_LENGTH, STORE_KEY, RenameResult, Task, TaskStore
from .view import FilterMode, visible

__all__ = [
    "Persistence",
    "KeyValueStore",
    "JsonFileStore",
    "MemoryStore",
    "Task",
    "TaskStore",
    "RenameResult",
    "STORE_KEY",
    "MAX_TEXT_LENGTH",
    "FilterMode",
    "visible",
]
