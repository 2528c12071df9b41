"""Demo Textual application hosting a single transliterating composer."""

from __future__ import annotations

import logging
from pathlib import Path
import sys
from typing import Any

from textual.app import App, ComposeResult
from textual.containers import Container, VerticalScroll
from textual.widgets import Footer, Header, Input, Static

from .config import load_config, suggestion_config_from
from .engine import ComposerEngine
from .language_detection import HttpLanguageDetector, LanguageDetectionConfig
from .logging_utils import configure_logging
from .screens import LanguagePromptScreen
from .suggestion_client import SuggestionClient
from .widgets.composer_input import ComposerInput

LOGGER = logging.getLogger(__name__)


class ComposerApp(App[None]):
    """Chat window with a sent-message log and the composer at the bottom."""

    CSS = """
    #app-root {
        layout: vertical;
        width: 100%;
        height: 1fr;
        background: $background;
    }

    #sent {
        height: 1fr;
        padding: 1;
    }

    .sent-message {
        margin: 0 0 1 0;
    }

    ComposerInput {
        padding: 0 1 1 1;
        border-top: solid $panel;
        background: $surface;
    }
    """

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, config_path: Path | None = None) -> None:
        super().__init__()
        self.config = load_config(config_path)
        configure_logging(self.config["logging"])
        LOGGER.info(
            "app.python",
            extra={
                "event": "app.python",
                "executable": sys.executable,
                "version": sys.version.split()[0],
            },
        )
        self.title = str(self.config["app"]["title"])
        self.language_config = self._build_language_config(
            self.config["language_detection"]
        )
        self.engine = ComposerEngine(
            suggestion_config_from(self.config),
            client=SuggestionClient(),
            language_detection=self.language_config,
        )

    def _build_language_config(
        self, section: dict[str, Any]
    ) -> LanguageDetectionConfig | None:
        if not section["enabled"] or not section["endpoint"]:
            return None
        self._detector = HttpLanguageDetector(
            section["endpoint"], timeout_seconds=float(section["timeout_seconds"])
        )
        return LanguageDetectionConfig(
            enabled=True,
            active_locale=section["active_locale"],
            match_locale=section["match_locale"],
            detect=self._detector,
            show_popup=self._show_language_popup,
            set_transliterate=self._set_transliterate,
        )

    def compose(self) -> ComposeResult:
        yield Header()
        with Container(id="app-root"):
            yield VerticalScroll(id="sent")
            yield ComposerInput(self.engine, id="composer")
        yield Footer()

    def on_mount(self) -> None:
        self.query_one("#message_input", Input).focus()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "message_input":
            return
        text = event.value.strip()
        if not text:
            return
        await self.query_one("#sent", VerticalScroll).mount(
            Static(text, classes="sent-message")
        )
        event.input.value = ""
        # A fresh message gets a fresh chance at the language prompt.
        self.engine.language_trigger.rearm()

    def _show_language_popup(self, show: bool) -> None:
        if not show or self.language_config is None:
            return
        self.push_screen(
            LanguagePromptScreen(self.language_config.match_locale),
            self._on_language_prompt_dismissed,
        )

    def _on_language_prompt_dismissed(self, accepted: bool | None) -> None:
        if not accepted or self.language_config is None:
            return
        self._set_transliterate(True)
        self.engine.on_transliterate_signal()

    def _set_transliterate(self, value: bool) -> None:
        if self.language_config is not None:
            self.language_config.transliterate = value

    async def on_unmount(self) -> None:
        await self.engine.aclose()
        await self.engine.client.aclose()
        if self.language_config is not None:
            await self._detector.aclose()
