"""Tests for logging bootstrap."""

from __future__ import annotations

import logging
from pathlib import Path
import tempfile
import unittest

import structlog

from chat_composer.logging_utils import app_only_filter, configure_logging


class LoggingConfigurationTests(unittest.TestCase):
    """Validate handler setup for the TUI-friendly logging layout."""

    def setUp(self) -> None:
        root = logging.getLogger()
        self._saved_handlers = list(root.handlers)
        self._saved_level = root.level

    def tearDown(self) -> None:
        root = logging.getLogger()
        for handler in root.handlers:
            if handler not in self._saved_handlers:
                handler.close()
        root.handlers[:] = self._saved_handlers
        root.setLevel(self._saved_level)

    def test_structured_stderr_handler(self) -> None:
        configure_logging({"level": "DEBUG", "structured": True})
        root = logging.getLogger()
        self.assertEqual(root.level, logging.DEBUG)
        self.assertEqual(len(root.handlers), 1)
        handler = root.handlers[0]
        self.assertEqual(handler.level, logging.WARNING)
        self.assertIsInstance(handler.formatter, structlog.stdlib.ProcessorFormatter)
        self.assertIn(app_only_filter, handler.filters)

    def test_plain_formatter_when_not_structured(self) -> None:
        configure_logging({"level": "INFO", "structured": False})
        handler = logging.getLogger().handlers[0]
        self.assertNotIsInstance(handler.formatter, structlog.stdlib.ProcessorFormatter)

    def test_noisy_libraries_are_quietened(self) -> None:
        configure_logging({"level": "DEBUG"})
        self.assertEqual(logging.getLogger("httpx").level, logging.WARNING)
        self.assertEqual(logging.getLogger("httpcore").level, logging.WARNING)

    def test_file_handler_writes_records(self) -> None:
        with tempfile.TemporaryDirectory() as temp_dir:
            log_path = Path(temp_dir) / "nested" / "app.log"
            configure_logging(
                {
                    "level": "INFO",
                    "structured": True,
                    "log_to_file": True,
                    "log_file_path": str(log_path),
                }
            )
            logging.getLogger("chat_composer.test").info(
                "composer.test", extra={"event_detail": "written"}
            )
            for handler in logging.getLogger().handlers:
                handler.flush()
            content = log_path.read_text(encoding="utf-8")
            self.assertIn("composer.test", content)
            self.assertIn("written", content)
            for handler in list(logging.getLogger().handlers):
                handler.close()
            logging.getLogger().handlers.clear()

    def test_app_only_filter(self) -> None:
        app_record = logging.LogRecord(
            "chat_composer.engine", logging.WARNING, __file__, 1, "x", None, None
        )
        other_record = logging.LogRecord(
            "httpx", logging.WARNING, __file__, 1, "x", None, None
        )
        self.assertTrue(app_only_filter(app_record))
        self.assertFalse(app_only_filter(other_record))


if __name__ == "__main__":
    unittest.main()
