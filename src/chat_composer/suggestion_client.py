"""Cancelable transliteration lookups against the remote suggestion endpoint."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from .config import SuggestionConfig
from .exceptions import NetworkError, RemoteError, RequestCancelled

LOGGER = logging.getLogger(__name__)


class CancellationToken:
    """Per-request token; once cancelled it never becomes current again.

    Cancelling also cancels the attached task, but the flag is what the
    continuation checks, so responses from calls that could not be aborted
    in flight are still discarded.
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._task: asyncio.Task[Any] | None = None

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def attach(self, task: asyncio.Task[Any]) -> None:
        self._task = task
        if self._cancelled:
            task.cancel()

    def cancel(self) -> None:
        self._cancelled = True
        if self._task is not None and not self._task.done():
            self._task.cancel()

    def raise_if_cancelled(self) -> None:
        if self._cancelled:
            raise RequestCancelled("Lookup was superseded by a newer request.")


def build_payload(text: str, config: SuggestionConfig) -> dict[str, Any]:
    """Request body understood by the transliteration endpoint."""
    return {
        "inputLanguage": config.input_language,
        "outputLanguage": config.output_language,
        "input": text,
        "provider": config.provider or "bhashini",
        "numSuggestions": config.max_suggestions or 3,
    }


def _parse_suggestions(response: httpx.Response) -> list[str]:
    try:
        data = response.json()
    except ValueError as exc:
        raise RemoteError(
            f"Invalid transliteration payload: {exc}", response.status_code
        ) from exc
    suggestions = data.get("suggestions") if isinstance(data, dict) else None
    if not isinstance(suggestions, list):
        raise RemoteError(
            "Transliteration payload has no suggestions list.", response.status_code
        )
    return [item for item in suggestions if isinstance(item, str)]


class SuggestionClient:
    """Thin async wrapper over ``httpx.AsyncClient`` for transliteration lookups."""

    def __init__(self, http_client: httpx.AsyncClient | None = None) -> None:
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient()

    async def fetch(
        self,
        text: str,
        config: SuggestionConfig,
        token: CancellationToken | None = None,
    ) -> list[str]:
        """Return candidates for ``text`` or raise a ``SuggestionError``."""
        if token is not None:
            token.raise_if_cancelled()
        try:
            response = await self._http.post(
                config.endpoint,
                json=build_payload(text, config),
                timeout=config.timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise NetworkError(
                f"Unable to reach transliteration endpoint {config.endpoint}: {exc}"
            ) from exc
        if token is not None:
            token.raise_if_cancelled()
        if not response.is_success:
            raise RemoteError(
                f"Error fetching transliteration: {response.reason_phrase}",
                response.status_code,
            )
        return _parse_suggestions(response)

    async def suggest(
        self,
        text: str,
        config: SuggestionConfig,
        token: CancellationToken | None = None,
    ) -> list[str] | None:
        """Error boundary around :meth:`fetch`.

        Returns ``None`` when the lookup was superseded and an empty list when
        it failed; failures are logged, never raised.
        """
        try:
            return await self.fetch(text, config, token)
        except RequestCancelled:
            LOGGER.debug(
                "suggestion.cancelled",
                extra={"event": "suggestion.cancelled", "input": text},
            )
            return None
        except (RemoteError, NetworkError) as exc:
            LOGGER.warning(
                "suggestion.failed",
                extra={
                    "event": "suggestion.failed",
                    "error_type": type(exc).__name__,
                    "error": str(exc),
                },
            )
            return []

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def __aenter__(self) -> SuggestionClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
