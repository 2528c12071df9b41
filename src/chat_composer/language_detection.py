"""One-shot "did you mean another language?" trigger on separator keystrokes."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
import inspect
import logging
from typing import Any

import httpx

from .exceptions import NetworkError, RemoteError

LOGGER = logging.getLogger(__name__)

Detector = Callable[[str], Any]


@dataclass
class LanguageDetectionConfig:
    """Host-owned detection settings and callbacks.

    ``language_check`` is the host's arming flag and ``language`` the language
    the host currently believes is being typed.  ``transliterate`` is the
    external "convert the whole input" signal, reset via ``set_transliterate``.
    """

    enabled: bool
    active_locale: str
    match_locale: str
    detect: Detector
    show_popup: Callable[[bool], None]
    language_check: bool = True
    language: str | None = None
    transliterate: bool = False
    set_transliterate: Callable[[bool], None] | None = None


def _detected_language(result: Any) -> str | None:
    if isinstance(result, dict):
        value = result.get("language")
    else:
        value = getattr(result, "language", None)
    return value if isinstance(value, str) else None


def last_token(text: str) -> str:
    """Last space-delimited token of the trimmed text ("" when blank)."""
    return text.strip().split(" ")[-1]


class LanguageDetectionTrigger:
    """Ask the detector about the last word and request the popup at most once."""

    def __init__(self, config: LanguageDetectionConfig | None) -> None:
        self.config = config
        self._fired = False

    @property
    def fired(self) -> bool:
        return self._fired

    def rearm(self) -> None:
        self._fired = False

    def should_check(self, text: Any) -> bool:
        config = self.config
        if config is None or self._fired:
            return False
        return (
            config.enabled
            and isinstance(text, str)
            and config.language_check
            and config.language != config.active_locale
        )

    async def on_separator(self, text: str) -> bool:
        """Run detection for ``text``; return whether the popup was requested."""
        config = self.config
        if config is None or not self.should_check(text):
            return False
        word = last_token(text)
        try:
            result = config.detect(word)
            if inspect.isawaitable(result):
                result = await result
        except Exception as exc:  # noqa: BLE001 - host detector failures must not break typing.
            LOGGER.warning(
                "language.detect.failed",
                extra={
                    "event": "language.detect.failed",
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return False

        language = _detected_language(result)
        LOGGER.debug(
            "language.detected",
            extra={"event": "language.detected", "word": word, "language": language},
        )
        if language != config.match_locale or self._fired:
            return False
        self._fired = True
        config.show_popup(True)
        LOGGER.info(
            "language.popup.requested",
            extra={"event": "language.popup.requested", "language": language},
        )
        return True


class HttpLanguageDetector:
    """Detector callable backed by a JSON endpoint answering ``{"language": ...}``."""

    def __init__(
        self,
        endpoint: str,
        timeout_seconds: float = 5.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout_seconds = timeout_seconds
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient()

    async def __call__(self, word: str) -> dict[str, str]:
        try:
            response = await self._http.post(
                self.endpoint, json={"text": word}, timeout=self.timeout_seconds
            )
        except httpx.RequestError as exc:
            raise NetworkError(
                f"Unable to reach language detector {self.endpoint}: {exc}"
            ) from exc
        if not response.is_success:
            raise RemoteError(
                f"Error detecting language: {response.reason_phrase}",
                response.status_code,
            )
        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteError(f"Invalid detector payload: {exc}") from exc
        language = _detected_language(data)
        if language is None:
            raise RemoteError("Detector payload has no language field.")
        return {"language": language}

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()
