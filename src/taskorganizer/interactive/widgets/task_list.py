"""Task list widget for interactive mode."""

from __future__ import annotations

from typing import List, Optional

from rich.text import Text
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Vertical
from textual.message import Message
from textual.reactive import reactive
from textual.widget import Widget
from textual.widgets import Label, ListItem, ListView

from ...state.tasks import Task

STATUS_SYMBOLS = {False: "○", True: "✓"}
STATUS_COLORS = {False: "#1976d2", True: "#ffb300"}


class TaskListWidget(Widget):
    """Widget displaying the visible tasks."""

    DEFAULT_CSS = """
    TaskListWidget Vertical {
        height: 100%;
    }

    TaskListWidget ListView {
        height: 1fr;
    }

    TaskListWidget #empty-label {
        width: 100%;
        content-align: center middle;
        color: $text-muted;
        text-style: italic;
        margin: 2 0;
    }
    """

    BINDINGS = [
        Binding("space", "toggle", "Toggle"),
        Binding("e", "edit", "Edit"),
        Binding("delete", "delete", "Delete"),
    ]

    tasks: List[Task] = reactive(list, always_update=True, init=False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.border_title = "Tasks"

    def compose(self) -> ComposeResult:
        with Vertical():
            yield Label("No tasks found.", id="empty-label")
            yield ListView(id="task-list-view")

    @staticmethod
    def _render_task(task: Task) -> ListItem:
        text = Text()
        text.append(f"{STATUS_SYMBOLS[task.completed]} ", style=STATUS_COLORS[task.completed])
        text.append(f"[{task.id}] ", style="dim")
        text.append(task.text, style="strike dim" if task.completed else "")
        return ListItem(Label(text))

    async def watch_tasks(self, tasks: List[Task]) -> None:
        list_view = self.query_one("#task-list-view", ListView)
        previous_index = list_view.index or 0

        await list_view.clear()
        await list_view.extend([self._render_task(task) for task in tasks])

        self.query_one("#empty-label", Label).display = not tasks
        list_view.display = bool(tasks)
        # clear() drops the cursor; keep it on the same row, clamped to the new length.
        if tasks:
            list_view.index = min(previous_index, len(tasks) - 1)

    def update_tasks(self, tasks: List[Task]) -> None:
        self.tasks = tasks

    @property
    def selected_task(self) -> Optional[Task]:
        """Task under the list cursor, if any."""
        index = self.query_one("#task-list-view", ListView).index
        if index is None or index >= len(self.tasks):
            return None
        return self.tasks[index]

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Enter on a row toggles it."""
        event.stop()
        self.action_toggle()

    def action_toggle(self) -> None:
        task = self.selected_task
        if task:
            self.post_message(self.ToggleRequested(task))

    def action_edit(self) -> None:
        task = self.selected_task
        if task:
            self.post_message(self.EditRequested(task))

    def action_delete(self) -> None:
        task = self.selected_task
        if task:
            self.post_message(self.DeleteRequested(task))

    class ToggleRequested(Message):
        """Sent when the selected task should flip its completed flag."""

        def __init__(self, task: Task) -> None:
            super().__init__()
            self.task = task

    class EditRequested(Message):
        """Sent when the selected task should be edited."""

        def __init__(self, task: Task) -> None:
            super().__init__()
            self.task = task

    class DeleteRequested(Message):
        """Sent when the selected task should be deleted."""

        def __init__(self, task: Task) -> None:
            super().__init__()
            self.task = task
