"""Filter buttons and search box."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Horizontal
from textual.message import Message
from textual.widget import Widget
from textual.widgets import Button, Input

from ...state.view import FilterMode

SEARCH_MAX_LENGTH = 60


class FilterBar(Widget):
    """All / Active / Completed buttons plus a search input."""

    DEFAULT_CSS = """
    FilterBar {
        height: auto;
    }

    FilterBar Horizontal {
        height: auto;
    }

    FilterBar Button {
        min-width: 12;
        margin-right: 1;
    }

    FilterBar Input {
        width: 1fr;
    }
    """

    def __init__(self, mode: FilterMode = FilterMode.ALL, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.mode = mode

    def compose(self) -> ComposeResult:
        with Horizontal():
            for mode in FilterMode:
                yield Button(
                    mode.value.capitalize(),
                    id=f"filter-{mode.value}",
                    variant="primary" if mode is self.mode else "default",
                )
            yield Input(
                placeholder="Search tasks...",
                max_length=SEARCH_MAX_LENGTH,
                id="search-input",
            )

    def set_mode(self, mode: FilterMode) -> None:
        self.mode = mode
        for candidate in FilterMode:
            button = self.query_one(f"#filter-{candidate.value}", Button)
            button.variant = "primary" if candidate is mode else "default"

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button_id = event.button.id or ""
        if not button_id.startswith("filter-"):
            return
        event.stop()
        mode = FilterMode.coerce(button_id[len("filter-") :])
        self.set_mode(mode)
        self.post_message(self.FilterChanged(mode))

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "search-input":
            return
        event.stop()
        self.post_message(self.SearchChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "search-input":
            event.stop()

    class FilterChanged(Message):
        """Sent when a filter button is pressed."""

        def __init__(self, mode: FilterMode) -> None:
            super().__init__()
            self.mode = mode

    class SearchChanged(Message):
        """Sent on every edit of the search box."""

        def __init__(self, text: str) -> None:
            super().__init__()
            self.text = text
