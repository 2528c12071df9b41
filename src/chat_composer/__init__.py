"""Top-level package for chat-composer."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from .app import ComposerApp
    from .config import SuggestionConfig, ensure_config_dir, load_config
    from .engine import ComposerEngine, KeyResult
    from .exceptions import (
        ComposerError,
        ConfigValidationError,
        NetworkError,
        RemoteError,
        RequestCancelled,
        SuggestionError,
    )
    from .language_detection import LanguageDetectionConfig
    from .selection import KeyEvent, SuggestionSet
    from .state import ComposerState
    from .suggestion_client import SuggestionClient

__all__ = [
    "ComposerApp",
    "ComposerEngine",
    "ComposerError",
    "ComposerState",
    "ConfigValidationError",
    "KeyEvent",
    "KeyResult",
    "LanguageDetectionConfig",
    "NetworkError",
    "RemoteError",
    "RequestCancelled",
    "SuggestionClient",
    "SuggestionConfig",
    "SuggestionError",
    "SuggestionSet",
    "ensure_config_dir",
    "load_config",
]

_EXCEPTIONS = {
    "ComposerError",
    "ConfigValidationError",
    "NetworkError",
    "RemoteError",
    "RequestCancelled",
    "SuggestionError",
}


def __getattr__(name: str) -> Any:
    """Lazily import symbols to keep the Textual UI optional at import time."""
    if name in {"ComposerEngine", "KeyResult"}:
        from . import engine

        return getattr(engine, name)
    if name in {"SuggestionConfig", "ensure_config_dir", "load_config"}:
        from . import config

        return getattr(config, name)
    if name in _EXCEPTIONS:
        from . import exceptions

        return getattr(exceptions, name)
    if name in {"KeyEvent", "SuggestionSet"}:
        from . import selection

        return getattr(selection, name)
    if name == "ComposerState":
        from .state import ComposerState

        return ComposerState
    if name == "LanguageDetectionConfig":
        from .language_detection import LanguageDetectionConfig

        return LanguageDetectionConfig
    if name == "SuggestionClient":
        from .suggestion_client import SuggestionClient

        return SuggestionClient
    if name == "ComposerApp":
        from .app import ComposerApp

        return ComposerApp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
