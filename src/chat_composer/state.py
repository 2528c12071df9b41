"""Composer value types and the suggestion lifecycle state machine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SuggestionState(str, Enum):
    """Lifecycle of the suggestion engine for the word under the caret."""

    IDLE = "IDLE"
    PENDING = "PENDING"
    SUGGESTING = "SUGGESTING"


@dataclass(frozen=True)
class ComposerState:
    """Text value and caret offset owned by the host widget."""

    text: str = ""
    caret: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.caret <= len(self.text):
            raise ValueError(
                f"caret {self.caret} outside of text bounds 0..{len(self.text)}"
            )

    @classmethod
    def at_end(cls, text: str) -> ComposerState:
        """Build a state with the caret placed after the last character."""
        return cls(text=text, caret=len(text))
