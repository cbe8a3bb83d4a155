"""Task Organizer - personal task list manager."""

__version__ = "0.1.0"
__author__ = "Task Organizer Contributors"

from .config import Config
from .state.tasks import RenameResult, Task, TaskStore
from .state.view import FilterMode, visible

__all__ = ["Config", "Task", "TaskStore", "RenameResult", "FilterMode", "visible"]
