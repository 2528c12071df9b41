"""Tests for in-place suggestion replacement."""

from __future__ import annotations

import unittest

from chat_composer.word_locator import Word, locate
from chat_composer.word_replacer import Replacement, replace


class ReplaceTests(unittest.TestCase):
    """Validate text and caret after accepting a suggestion."""

    def test_last_word_gets_trailing_separator(self) -> None:
        result = replace("I want pyaar", Word("pyaar", 7, 12), "प्यार")
        self.assertEqual(result.text, "I want प्यार ")
        # "प्यार" is five code points, so the caret lands at the end of the text.
        self.assertEqual(result.caret, 13)
        self.assertEqual(result.caret, len(result.text))

    def test_word_followed_by_separator_reuses_it(self) -> None:
        result = replace("pyaar is here", Word("pyaar", 0, 5), "प्यार")
        self.assertEqual(result, Replacement("प्यार is here", 6))
        self.assertEqual(result.text[result.caret - 1], " ")

    def test_multiple_spaces_are_preserved(self) -> None:
        result = replace("a  b", Word("a", 0, 1), "xyz")
        self.assertEqual(result, Replacement("xyz  b", 4))

    def test_word_at_start_of_text_without_tail(self) -> None:
        text = "namaste"
        result = replace(text, locate(text, 3), "नमस्ते")
        self.assertEqual(result.text, "नमस्ते ")
        self.assertEqual(result.caret, len(result.text))

    def test_replace_is_idempotent_and_pure(self) -> None:
        text = "I want pyaar"
        word = locate(text, 10)
        first = replace(text, word, "प्यार")
        second = replace(text, word, "प्यार")
        self.assertEqual(first, second)
        self.assertEqual(text, "I want pyaar")


if __name__ == "__main__":
    unittest.main()
