"""Locate the space-delimited word under the caret."""

from __future__ import annotations

from dataclasses import dataclass

SEPARATOR = " "


@dataclass(frozen=True)
class Word:
    """A token of the composed text; ``end`` is exclusive."""

    text: str
    start: int
    end: int


def locate(text: str, caret: int) -> Word | None:
    """Return the word whose span contains ``caret``, or ``None``.

    Spans are inclusive on both ends, so a caret sitting just before or just
    after a word still selects it.  The first matching word wins.
    """
    if not text or not 0 <= caret <= len(text):
        return None

    start = 0
    for token in text.split(SEPARATOR):
        end = start + len(token)
        if start <= caret <= end:
            if not token:
                return None
            return Word(text=token, start=start, end=end)
        start = end + len(SEPARATOR)
    return None
