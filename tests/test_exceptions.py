"""Tests for domain exception hierarchy."""

from __future__ import annotations

import unittest

from chat_composer.exceptions import (
    ComposerError,
    ConfigValidationError,
    NetworkError,
    RemoteError,
    RequestCancelled,
    SuggestionError,
)


class ExceptionHierarchyTests(unittest.TestCase):
    """Validate exception inheritance contract."""

    def test_exception_hierarchy(self) -> None:
        for exc_type in (RemoteError, NetworkError, RequestCancelled):
            self.assertTrue(issubclass(exc_type, SuggestionError))
        self.assertTrue(issubclass(SuggestionError, ComposerError))
        self.assertTrue(issubclass(ConfigValidationError, ComposerError))

    def test_remote_error_carries_status(self) -> None:
        error = RemoteError("Error fetching transliteration: Bad Gateway", 502)
        self.assertEqual(error.status_code, 502)
        self.assertIn("Bad Gateway", str(error))


if __name__ == "__main__":
    unittest.main()
