"""Orchestrator wiring word lookup, suggestions, replacement, and language detection."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from dataclasses import dataclass
import logging
from typing import Protocol

from .config import SuggestionConfig
from .exceptions import NetworkError, RemoteError
from .language_detection import LanguageDetectionConfig, LanguageDetectionTrigger
from .selection import (
    KeyAction,
    KeyEvent,
    SuggestionSelectionController,
    SuggestionSet,
)
from .state import ComposerState, SuggestionState
from .suggestion_client import CancellationToken, SuggestionClient
from .task_manager import TaskManager
from .word_locator import SEPARATOR, Word, locate
from .word_replacer import replace

LOGGER = logging.getLogger(__name__)

LOOKUP_TASK = "suggestion_lookup"
DETECTION_TASK = "language_detection"
FULL_TRANSLITERATION_TASK = "full_transliteration"


class TextSurface(Protocol):
    """Host text widget the engine writes accepted replacements into."""

    def set_value(self, text: str) -> None: ...

    def set_caret(self, caret: int) -> None: ...

    def focus(self) -> object: ...


@dataclass(frozen=True)
class KeyResult:
    """Outcome of a keystroke; ``handled`` means suppress the host default."""

    handled: bool
    state: ComposerState | None = None


class ComposerEngine:
    """Suggestion state machine driven by the host's text, key, and pick events.

    All methods run on the event loop thread. Lookups are superseded, never
    queued: each one gets a fresh :class:`CancellationToken` and only the
    result carrying the current token is applied.
    """

    def __init__(
        self,
        suggestion_config: SuggestionConfig | None,
        client: SuggestionClient | None = None,
        language_detection: LanguageDetectionConfig | None = None,
        surface: TextSurface | None = None,
    ) -> None:
        self.suggestion_config = suggestion_config
        self._owns_client = client is None
        self.client = client or SuggestionClient()
        self.selection = SuggestionSelectionController()
        self.language_trigger = LanguageDetectionTrigger(language_detection)
        self.tasks = TaskManager()
        self.value = ComposerState()
        self._surface = surface
        self._token: CancellationToken | None = None
        self._word: Word | None = None
        self._echo: ComposerState | None = None
        self._state = SuggestionState.IDLE
        self._listeners: list[Callable[[SuggestionSet], None]] = []

    @property
    def state(self) -> SuggestionState:
        return self._state

    @property
    def suggestions(self) -> SuggestionSet:
        return self.selection.snapshot()

    def attach_surface(self, surface: TextSurface | None) -> None:
        self._surface = surface

    def on_suggestions_changed(self, callback: Callable[[SuggestionSet], None]) -> None:
        """Register a callback receiving every new suggestion set."""
        self._listeners.append(callback)

    # -- text changes ------------------------------------------------------

    def on_text_change(self, state: ComposerState) -> asyncio.Task[None] | None:
        """Start a lookup for the word under the caret when it changed."""
        self.value = state
        if self._echo is not None:
            echo, self._echo = self._echo, None
            if echo == state:
                return None

        config = self.suggestion_config
        word = locate(state.text, state.caret) if config is not None else None
        if word is None:
            self._reset()
            return None
        if word == self._word:
            return None
        return self._start_lookup(word, config)

    def _start_lookup(self, word: Word, config: SuggestionConfig) -> asyncio.Task[None]:
        self._cancel_pending()
        self._word = word
        self._set_candidates(())
        token = CancellationToken()
        self._token = token
        task = asyncio.create_task(self._lookup(word, config, token))
        token.attach(task)
        self.tasks.replace(LOOKUP_TASK, task)
        self._transition(SuggestionState.PENDING)
        return task

    async def _lookup(
        self, word: Word, config: SuggestionConfig, token: CancellationToken
    ) -> None:
        candidates = await self.client.suggest(word.text, config, token)
        if candidates is None or token.cancelled or token is not self._token:
            LOGGER.debug(
                "suggestion.discarded",
                extra={"event": "suggestion.discarded", "word": word.text},
            )
            return
        self._token = None
        self._set_candidates(candidates)
        self._transition(
            SuggestionState.SUGGESTING if candidates else SuggestionState.IDLE
        )

    def _cancel_pending(self) -> None:
        if self._token is not None:
            self._token.cancel()
            self._token = None

    def _reset(self) -> None:
        self._cancel_pending()
        self._word = None
        if self.selection.has_candidates:
            self._set_candidates(())
        self._transition(SuggestionState.IDLE)

    # -- keys and picks ----------------------------------------------------

    def on_key_event(self, event: KeyEvent, state: ComposerState) -> KeyResult:
        """Route a keystroke; the host suppresses its default when handled."""
        self.value = state
        action = self.selection.route_key(event)
        if action is KeyAction.MOVE_UP:
            self.selection.move_up()
            self._notify()
            return KeyResult(handled=True)
        if action is KeyAction.MOVE_DOWN:
            self.selection.move_down()
            self._notify()
            return KeyResult(handled=True)
        if action is KeyAction.CONFIRM:
            candidate = self.selection.confirm()
            self._notify()
            new_state = self._replace_word(candidate, state) if candidate else None
            if new_state is None:
                new_state = self._insert_separator(state)
            return KeyResult(handled=True, state=new_state)
        if action is KeyAction.SEPARATOR:
            self._schedule_detection(state.text)
        return KeyResult(handled=False)

    def on_suggestion_pick(
        self, candidate: str | int, state: ComposerState | None = None
    ) -> ComposerState | None:
        """Accept a candidate chosen by pointer, by value or by list index."""
        state = state or self.value
        if isinstance(candidate, int):
            candidates = self.selection.candidates
            if not 0 <= candidate < len(candidates):
                return None
            candidate = candidates[candidate]
        return self._replace_word(candidate, state)

    def hover(self, index: int) -> None:
        if self.selection.hover(index):
            self._notify()

    def _replace_word(self, candidate: str, state: ComposerState) -> ComposerState | None:
        word = locate(state.text, state.caret)
        if word is None:
            return None
        result = replace(state.text, word, candidate)
        new_state = ComposerState(result.text, result.caret)
        self._reset()
        LOGGER.info(
            "suggestion.picked",
            extra={"event": "suggestion.picked", "word": word.text, "candidate": candidate},
        )
        self._commit(new_state)
        return new_state

    def _insert_separator(self, state: ComposerState) -> ComposerState:
        text = state.text[: state.caret] + SEPARATOR + state.text[state.caret :]
        new_state = ComposerState(text, state.caret + len(SEPARATOR))
        self._reset()
        self._commit(new_state)
        return new_state

    def _commit(self, state: ComposerState) -> None:
        # Text first, caret second: the widget recomputes its caret on value change.
        self._echo = state
        self.value = state
        if self._surface is None:
            return
        self._surface.set_value(state.text)
        self._surface.set_caret(state.caret)
        self._surface.focus()

    # -- language detection ------------------------------------------------

    def _schedule_detection(self, text: str) -> asyncio.Task[bool] | None:
        if not self.language_trigger.should_check(text):
            return None
        task = asyncio.create_task(self.language_trigger.on_separator(text))
        # Every separator gets its own detection; the trigger itself is one-shot.
        self.tasks.track(DETECTION_TASK, task)
        return task

    def on_transliterate_signal(
        self, state: ComposerState | None = None
    ) -> asyncio.Task[None] | None:
        """Transliterate the whole input when the host raised the signal flag."""
        config = self.language_trigger.config
        suggestion_config = self.suggestion_config
        if config is None or not config.transliterate or suggestion_config is None:
            return None
        if state is not None:
            self.value = state
        text = self.value.text
        task = asyncio.create_task(
            self._transliterate_all(text, suggestion_config, config)
        )
        self.tasks.replace(FULL_TRANSLITERATION_TASK, task)
        return task

    async def _transliterate_all(
        self,
        text: str,
        suggestion_config: SuggestionConfig,
        config: LanguageDetectionConfig,
    ) -> None:
        try:
            candidates = await self.client.fetch(text, suggestion_config)
        except (RemoteError, NetworkError) as exc:
            LOGGER.warning(
                "transliteration.full.failed",
                extra={
                    "event": "transliteration.full.failed",
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return

        if self.value.text == text:
            self._reset()
            self._commit(ComposerState.at_end(candidates[0] if candidates else text))
        else:
            LOGGER.info(
                "transliteration.full.stale",
                extra={"event": "transliteration.full.stale"},
            )
        if config.set_transliterate is not None:
            config.set_transliterate(False)
        else:
            config.transliterate = False

    # -- plumbing ----------------------------------------------------------

    def _set_candidates(self, candidates: list[str] | tuple[str, ...]) -> None:
        self.selection.set_candidates(candidates)
        self._notify()

    def _notify(self) -> None:
        snapshot = self.selection.snapshot()
        for callback in self._listeners:
            try:
                callback(snapshot)
            except Exception as e:
                LOGGER.error(f"Suggestion listener error: {e}")

    def _transition(self, new_state: SuggestionState) -> None:
        if new_state is self._state:
            return
        LOGGER.debug(
            "composer.state.transition",
            extra={
                "event": "composer.state.transition",
                "from_state": self._state.value,
                "to_state": new_state.value,
            },
        )
        self._state = new_state

    async def settle(self) -> None:
        """Wait until no lookup or detection task is running."""
        await self.tasks.await_all()

    async def aclose(self) -> None:
        self._cancel_pending()
        await self.tasks.cancel_all()
        if self._owns_client:
            await self.client.aclose()
