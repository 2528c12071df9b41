"""Tests for locating the word under the caret."""

from __future__ import annotations

import unittest

from chat_composer.word_locator import Word, locate


class LocateTests(unittest.TestCase):
    """Validate word boundaries around the caret."""

    def test_caret_inside_word(self) -> None:
        self.assertEqual(locate("I want pyaar", 10), Word("pyaar", 7, 12))

    def test_caret_at_word_end_is_inclusive(self) -> None:
        self.assertEqual(locate("I want pyaar", 12), Word("pyaar", 7, 12))
        self.assertEqual(locate("I want pyaar", 6), Word("want", 2, 6))

    def test_caret_at_word_start_is_inclusive(self) -> None:
        self.assertEqual(locate("I want pyaar", 0), Word("I", 0, 1))
        self.assertEqual(locate("I want pyaar", 7), Word("pyaar", 7, 12))

    def test_repeated_word_uses_the_occurrence_under_the_caret(self) -> None:
        self.assertEqual(locate("ab ab", 4), Word("ab", 3, 5))

    def test_caret_between_two_spaces_has_no_word(self) -> None:
        self.assertIsNone(locate("a  b", 2))

    def test_caret_after_trailing_space_has_no_word(self) -> None:
        self.assertIsNone(locate("hello ", 6))

    def test_empty_text_has_no_word(self) -> None:
        self.assertIsNone(locate("", 0))

    def test_out_of_range_caret_has_no_word(self) -> None:
        self.assertIsNone(locate("hello", 6))
        self.assertIsNone(locate("hello", -1))

    def test_result_span_always_contains_caret(self) -> None:
        for text in ("I want pyaar", "a  b", " lead", "trail ", "x", "ab ab  c"):
            for caret in range(len(text) + 1):
                word = locate(text, caret)
                if word is None:
                    continue
                self.assertTrue(0 <= word.start <= caret <= word.end <= len(text))
                self.assertEqual(text[word.start : word.end], word.text)
                self.assertNotEqual(word.text, "")


if __name__ == "__main__":
    unittest.main()
