"""Interactive mode widgets."""

from .edit_task_modal import EditTaskModal
from .filter_bar import FilterBar
from .task_list import TaskListWidget

__all__ = [
    "EditTaskModal",
    "FilterBar",
    "TaskListWidget",
]
