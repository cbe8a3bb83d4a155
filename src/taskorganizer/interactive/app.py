"""Textual application for interactive mode."""

from __future__ import annotations

from typing import List, Optional

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Header, Input

from .widgets import EditTaskModal, FilterBar, TaskListWidget
from ..state.tasks import MAX_TEXT_LENGTH, RenameResult, Task, TaskStore
from ..state.view import FilterMode, visible


class TaskOrganizerApp(App):
    """Task Organizer interactive mode TUI."""

    TITLE = "Personal Task Organizer"

    CSS = """
    Screen {
        layout: vertical;
    }

    #add-input {
        margin: 1 0 0 0;
        border: tall #ffb300;
    }

    #filter-bar {
        margin: 1 0;
    }

    #task-list-widget {
        height: 1fr;
        border: tall $primary;
        padding: 0;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "focus_add", "New Task"),
        Binding("ctrl+f", "focus_search", "Search"),
        Binding("ctrl+l", "focus_list", "List"),
        Binding("ctrl+c", "quit", "Quit"),
    ]

    def __init__(self, task_store: TaskStore, default_filter: FilterMode | str = FilterMode.ALL, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.task_store = task_store
        self.filter_mode = FilterMode.coerce(default_filter)
        self.search_text = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(
            placeholder="What needs to be done?",
            max_length=MAX_TEXT_LENGTH,
            id="add-input",
        )
        self.filter_bar = FilterBar(self.filter_mode, id="filter-bar")
        self.task_list = TaskListWidget(id="task-list-widget")
        yield self.filter_bar
        yield self.task_list
        yield Footer()

    def on_mount(self) -> None:
        self.refresh_tasks()
        self.query_one("#add-input", Input).focus()

    # ------------------------------------------------------------------ #
    # Rendering
    # ------------------------------------------------------------------ #
    def visible_tasks(self) -> List[Task]:
        return visible(self.task_store.list_all(), self.filter_mode, self.search_text)

    def refresh_tasks(self) -> None:
        """Re-derive the visible list from the store and current filters."""
        self.task_list.update_tasks(self.visible_tasks())
        counts = self.task_store.counts()
        self.sub_title = f"{counts['active']} active · {counts['completed']} completed"

    # ------------------------------------------------------------------ #
    # Input / filter events
    # ------------------------------------------------------------------ #
    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "add-input":
            return
        task = self.task_store.create(event.value)
        event.input.value = ""
        if task:
            self.refresh_tasks()

    def on_filter_bar_filter_changed(self, event: FilterBar.FilterChanged) -> None:
        self.filter_mode = event.mode
        self.refresh_tasks()

    def on_filter_bar_search_changed(self, event: FilterBar.SearchChanged) -> None:
        self.search_text = event.text
        self.refresh_tasks()

    # ------------------------------------------------------------------ #
    # Task list events
    # ------------------------------------------------------------------ #
    def on_task_list_widget_toggle_requested(self, event: TaskListWidget.ToggleRequested) -> None:
        self.task_store.toggle_complete(event.task.id)
        self.refresh_tasks()

    def on_task_list_widget_delete_requested(self, event: TaskListWidget.DeleteRequested) -> None:
        if self.task_store.delete(event.task.id):
            self.notify(f"Deleted: {event.task.text}")
        self.refresh_tasks()

    def on_task_list_widget_edit_requested(self, event: TaskListWidget.EditRequested) -> None:
        self.run_worker(self._edit_task(event.task))

    async def _edit_task(self, task: Task) -> None:
        """Show the edit modal and apply its result."""
        result: Optional[str] = await self.push_screen_wait(EditTaskModal(task))
        if result is None:
            return
        outcome = self.task_store.rename(task.id, result)
        if outcome is RenameResult.NOT_FOUND:
            self.notify("Task no longer exists", severity="warning")
        self.refresh_tasks()

    # ------------------------------------------------------------------ #
    # Actions
    # ------------------------------------------------------------------ #
    def action_focus_add(self) -> None:
        self.query_one("#add-input", Input).focus()

    def action_focus_search(self) -> None:
        self.query_one("#search-input", Input).focus()

    def action_focus_list(self) -> None:
        self.query_one("#task-list-view").focus()
