"""Modal screens used by the demo composer host."""

from __future__ import annotations

from typing import Any

from textual.app import ComposeResult
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class LanguagePromptScreen(ModalScreen[bool]):
    """Ask whether the whole message should be transliterated."""

    CSS = """
    LanguagePromptScreen {
        align: center middle;
    }

    #language-dialog {
        width: 60;
        height: auto;
        padding: 1 2;
        border: round $panel;
        background: $surface;
    }

    #language-body {
        padding-bottom: 1;
    }

    #language-actions {
        height: 3;
        align: right middle;
    }

    #language-no {
        margin-left: 1;
    }
    """

    def __init__(self, language: str) -> None:
        super().__init__()
        self.language = language

    def compose(self) -> ComposeResult:
        with Container(id="language-dialog"):
            yield Static(
                f"It looks like you are typing in {self.language!r}. "
                "Transliterate the message?",
                id="language-body",
            )
            with Horizontal(id="language-actions"):
                yield Button("Yes", id="language-yes", variant="primary")
                yield Button("No", id="language-no", variant="default")

    def on_button_pressed(self, event: Button.Pressed) -> None:
        event.stop()
        self.dismiss(event.button.id == "language-yes")

    def on_key(self, event: Any) -> None:  # noqa: ANN401
        if str(getattr(event, "key", "")).lower() == "escape":
            self.dismiss(False)
