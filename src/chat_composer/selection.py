"""Candidate list, highlighted index, and keyboard routing for suggestions."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

# Reserved key code browsers and IMEs report while a composition is in progress.
IME_COMPOSITION_KEY_CODE = 229

SEPARATOR_KEYS = frozenset({"space"})


@dataclass(frozen=True)
class KeyEvent:
    """A keystroke as seen by the composer, using Textual key names."""

    key: str
    character: str | None = None
    key_code: int | None = None

    @property
    def is_composing(self) -> bool:
        return self.key_code == IME_COMPOSITION_KEY_CODE

    @property
    def is_separator(self) -> bool:
        return self.key in SEPARATOR_KEYS or self.character == " "


class KeyAction(str, Enum):
    """What the controller wants done with a keystroke."""

    IGNORE = "ignore"
    PASS = "pass"
    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    CONFIRM = "confirm"
    SEPARATOR = "separator"


@dataclass(frozen=True)
class SuggestionSet:
    candidates: tuple[str, ...] = ()
    active_index: int = 0

    @property
    def active(self) -> str | None:
        if not self.candidates:
            return None
        return self.candidates[self.active_index]


class SuggestionSelectionController:
    """Hold the candidates for the current word and the highlighted index."""

    def __init__(self) -> None:
        self._candidates: tuple[str, ...] = ()
        self._active_index = 0

    @property
    def candidates(self) -> tuple[str, ...]:
        return self._candidates

    @property
    def active_index(self) -> int:
        return self._active_index

    @property
    def has_candidates(self) -> bool:
        return bool(self._candidates)

    def snapshot(self) -> SuggestionSet:
        return SuggestionSet(self._candidates, self._active_index)

    def set_candidates(self, candidates: Iterable[str]) -> None:
        self._candidates = tuple(candidates)
        self._active_index = 0

    def clear(self) -> None:
        self.set_candidates(())

    def move_up(self) -> None:
        self._active_index = max(0, self._active_index - 1)

    def move_down(self) -> None:
        self._active_index = max(0, min(len(self._candidates) - 1, self._active_index + 1))

    def hover(self, index: int) -> bool:
        """Highlight ``index`` directly; return whether the highlight moved.

        Out-of-range indices are ignored.
        """
        if not 0 <= index < len(self._candidates) or index == self._active_index:
            return False
        self._active_index = index
        return True

    def confirm(self) -> str | None:
        """Return the highlighted candidate and clear the set."""
        if not self._candidates:
            return None
        chosen = self._candidates[self._active_index]
        self.clear()
        return chosen

    def route_key(self, event: KeyEvent) -> KeyAction:
        if event.is_composing:
            return KeyAction.IGNORE
        if self._candidates:
            if event.key == "up":
                return KeyAction.MOVE_UP
            if event.key == "down":
                return KeyAction.MOVE_DOWN
            if event.is_separator:
                return KeyAction.CONFIRM
        elif event.is_separator:
            return KeyAction.SEPARATOR
        return KeyAction.PASS
