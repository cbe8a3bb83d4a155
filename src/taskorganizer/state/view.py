"""Visible-task derivation for the list views."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Union

from .tasks import Task


class FilterMode(Enum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"

    @classmethod
    def coerce(cls, value: Union["FilterMode", str]) -> "FilterMode":
        """Accept an enum member or its string value ("all", "active", "completed")."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown filter mode {value!r} (expected one of: {choices})") from None

    def matches(self, task: Task) -> bool:
        if self is FilterMode.ACTIVE:
            return not task.completed
        if self is FilterMode.COMPLETED:
            return task.completed
        return True


def visible(
    tasks: Iterable[Task],
    mode: Union[FilterMode, str] = FilterMode.ALL,
    search_text: str = "",
) -> List[Task]:
    """Tasks passing both the filter mode and the case-insensitive search, in input order."""
    filter_mode = FilterMode.coerce(mode)
    needle = (search_text or "").strip().lower()
    return [
        task
        for task in tasks
        if filter_mode.matches(task) and (not needle or needle in task.text.lower())
    ]
