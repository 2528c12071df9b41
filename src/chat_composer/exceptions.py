"""Domain exception hierarchy for the chat composer."""

from __future__ import annotations


class ComposerError(RuntimeError):
    """Base class for all composer errors."""


class SuggestionError(ComposerError):
    """Base class for transliteration lookup failures."""


class RemoteError(SuggestionError):
    """Raised when the transliteration endpoint answers with a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NetworkError(SuggestionError):
    """Raised when the transliteration endpoint cannot be reached."""


class RequestCancelled(SuggestionError):
    """Raised when a lookup was superseded by a newer one."""


class ConfigValidationError(ComposerError):
    """Raised when configuration cannot be validated safely."""
