"""Modal for editing a task's text."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Vertical
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Label

from ...state.tasks import MAX_TEXT_LENGTH, Task


class EditTaskModal(ModalScreen):
    """Dismisses with the new text, or None when cancelled."""

    DEFAULT_CSS = """
    EditTaskModal {
        align: center middle;
    }

    EditTaskModal > Vertical {
        width: 80;
        height: auto;
        background: $panel;
        border: thick $primary;
        padding: 1 2;
    }

    EditTaskModal Label {
        width: 100%;
        content-align: center middle;
        text-style: bold;
        color: $text;
        margin-bottom: 1;
    }

    EditTaskModal Input {
        width: 100%;
        margin-bottom: 1;
    }

    EditTaskModal Grid {
        width: 100%;
        height: auto;
        grid-size: 2;
        grid-gutter: 1;
    }

    EditTaskModal Button {
        width: 100%;
    }
    """

    BINDINGS = [Binding("escape", "cancel", "Cancel")]

    def __init__(self, task: Task) -> None:
        super().__init__()
        self.edited_task = task

    def compose(self) -> ComposeResult:
        """Compose the modal layout."""
        with Vertical():
            yield Label(f"Edit Task [{self.edited_task.id}]")
            yield Input(
                value=self.edited_task.text,
                max_length=MAX_TEXT_LENGTH,
                id="edit-input",
            )
            with Grid():
                yield Button("Cancel", variant="default", id="cancel-button")
                yield Button("Save", variant="primary", id="save-button")

    def on_mount(self) -> None:
        """Focus the input when mounted."""
        self.query_one("#edit-input", Input).focus()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        event.stop()
        self.dismiss(event.value)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button presses."""
        if event.button.id == "cancel-button":
            self.dismiss(None)
        elif event.button.id == "save-button":
            self.dismiss(self.query_one("#edit-input", Input).value)

    def action_cancel(self) -> None:
        self.dismiss(None)
