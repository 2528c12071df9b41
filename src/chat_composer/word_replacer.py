"""In-place substitution of an accepted suggestion."""

from __future__ import annotations

from typing import NamedTuple

from .word_locator import SEPARATOR, Word


class Replacement(NamedTuple):
    text: str
    caret: int


def replace(text: str, word: Word, replacement: str) -> Replacement:
    """Swap ``word`` for ``replacement`` and place the caret after a separator.

    A separator is inserted unless the word is already followed by one, in
    which case the caret simply steps over the existing separator.
    """
    head = text[: word.start]
    tail = text[word.end :]
    separator = "" if tail.startswith(SEPARATOR) else SEPARATOR
    new_text = head + replacement + separator + tail
    return Replacement(text=new_text, caret=word.start + len(replacement) + len(SEPARATOR))
