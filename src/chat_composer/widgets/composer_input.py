"""Textual composer: message input with a transliteration suggestion list."""

from __future__ import annotations

from typing import Any

from textual import events
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.widgets import Input, OptionList

from ..engine import ComposerEngine
from ..selection import KeyEvent, SuggestionSet
from ..state import ComposerState


class ComposerTextInput(Input):
    """Single-line input that lets the engine see keys before Textual does.

    Also acts as the engine's text surface for committed replacements.
    """

    def __init__(self, engine: ComposerEngine, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.engine = engine

    @property
    def composer_state(self) -> ComposerState:
        return ComposerState(self.value, min(self.cursor_position, len(self.value)))

    def set_value(self, text: str) -> None:
        self.value = text

    def set_caret(self, caret: int) -> None:
        self.cursor_position = caret

    async def _on_key(self, event: events.Key) -> None:
        # Textual runs Input._on_key after this one unless the default is prevented.
        result = self.engine.on_key_event(
            KeyEvent(key=event.key, character=event.character), self.composer_state
        )
        if result.handled:
            event.stop()
            event.prevent_default()
            return
        # Cursor keys move the caret through bindings without a Changed message.
        self.call_later(self._sync_caret)

    def _sync_caret(self) -> None:
        state = self.composer_state
        if state != self.engine.value:
            self.engine.on_text_change(state)


class ComposerInput(Vertical):
    """Suggestion list stacked above the message input."""

    DEFAULT_CSS = """
    ComposerInput {
        height: auto;
    }

    ComposerInput #suggestions {
        max-height: 5;
        width: 40;
    }

    ComposerInput #suggestions.hidden {
        display: none;
    }
    """

    def __init__(self, engine: ComposerEngine, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.engine = engine
        self._rendered: tuple[str, ...] = ()

    def compose(self) -> ComposeResult:
        yield OptionList(id="suggestions", classes="hidden")
        yield ComposerTextInput(
            self.engine,
            placeholder="Type your message...",
            id="message_input",
        )

    def on_mount(self) -> None:
        text_input = self.query_one(ComposerTextInput)
        self.engine.attach_surface(text_input)
        self.engine.on_suggestions_changed(self._render_suggestions)

    def _render_suggestions(self, suggestions: SuggestionSet) -> None:
        menu = self.query_one("#suggestions", OptionList)
        if suggestions.candidates != self._rendered:
            self._rendered = suggestions.candidates
            menu.clear_options()
            menu.add_options(list(suggestions.candidates))
        if suggestions.candidates:
            if menu.highlighted != suggestions.active_index:
                menu.highlighted = suggestions.active_index
            menu.remove_class("hidden")
        else:
            menu.add_class("hidden")

    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id != "message_input":
            return
        self.engine.on_text_change(self.query_one(ComposerTextInput).composer_state)

    def on_option_list_option_highlighted(
        self, event: OptionList.OptionHighlighted
    ) -> None:
        if event.option_list.id != "suggestions":
            return
        event.stop()
        self.engine.hover(event.option_index)

    def on_option_list_option_selected(self, event: OptionList.OptionSelected) -> None:
        if event.option_list.id != "suggestions":
            return
        event.stop()
        text_input = self.query_one(ComposerTextInput)
        self.engine.on_suggestion_pick(event.option_index, text_input.composer_state)
