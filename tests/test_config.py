"""Tests for configuration loading and validation."""

from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from pydantic import ValidationError

from chat_composer.config import (
    DEFAULT_CONFIG,
    SuggestionConfig,
    load_config,
    suggestion_config_from,
)


class ConfigTests(unittest.TestCase):
    """Validate config defaults, merge behavior, and fallbacks."""

    def _load(self, body: str | None) -> dict:
        with tempfile.TemporaryDirectory() as temp_dir:
            config_path = Path(temp_dir) / "config.toml"
            if body is not None:
                config_path.write_text(body, encoding="utf-8")
            return load_config(config_path)

    def test_missing_file_returns_defaults(self) -> None:
        config = self._load(None)
        self.assertEqual(config, DEFAULT_CONFIG)
        self.assertFalse(config["transliteration"]["enabled"])
        self.assertEqual(config["transliteration"]["max_suggestions"], 3)
        self.assertEqual(config["language_detection"]["active_locale"], "en")

    def test_partial_file_is_merged_onto_defaults(self) -> None:
        config = self._load(
            """
[transliteration]
enabled = true
endpoint = "https://api.example.com/transliterate"
output_language = "ta"
"""
        )
        section = config["transliteration"]
        self.assertTrue(section["enabled"])
        self.assertEqual(section["endpoint"], "https://api.example.com/transliterate")
        self.assertEqual(section["output_language"], "ta")
        self.assertEqual(section["input_language"], "en")
        self.assertEqual(config["app"]["title"], "Chat Composer")

    def test_invalid_values_fall_back_to_defaults(self) -> None:
        with self.assertLogs("chat_composer.config", level="WARNING"):
            config = self._load(
                """
[transliteration]
max_suggestions = 50
"""
            )
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_enabled_without_endpoint_is_rejected(self) -> None:
        with self.assertLogs("chat_composer.config", level="WARNING"):
            config = self._load("[transliteration]\nenabled = true\n")
        self.assertFalse(config["transliteration"]["enabled"])

    def test_malformed_toml_uses_defaults(self) -> None:
        with self.assertLogs("chat_composer.config", level="WARNING"):
            config = self._load("[transliteration\n")
        self.assertEqual(config, DEFAULT_CONFIG)

    def test_logging_level_is_normalized(self) -> None:
        config = self._load('[logging]\nlevel = "debug"\n')
        self.assertEqual(config["logging"]["level"], "DEBUG")

    def test_window_class_uses_alias(self) -> None:
        config = self._load('[app]\nclass = "composer-test"\n')
        self.assertEqual(config["app"]["class"], "composer-test")


class SuggestionConfigTests(unittest.TestCase):
    """Validate the immutable lookup parameters."""

    def test_disabled_section_yields_none(self) -> None:
        self.assertIsNone(suggestion_config_from(DEFAULT_CONFIG))

    def test_enabled_section_builds_config(self) -> None:
        config = {
            "transliteration": {
                "enabled": True,
                "endpoint": "https://api.example.com/t",
                "input_language": "en",
                "output_language": "hi",
                "provider": "bhashini",
                "max_suggestions": 5,
                "timeout_seconds": 2.5,
            }
        }
        result = suggestion_config_from(config)
        self.assertEqual(
            result,
            SuggestionConfig(
                endpoint="https://api.example.com/t",
                input_language="en",
                output_language="hi",
                max_suggestions=5,
                timeout_seconds=2.5,
            ),
        )

    def test_endpoint_must_be_http(self) -> None:
        with self.assertRaises(ValidationError):
            SuggestionConfig(
                endpoint="ftp://example.com", input_language="en", output_language="hi"
            )
        with self.assertRaises(ValidationError):
            SuggestionConfig(endpoint="", input_language="en", output_language="hi")

    def test_config_is_frozen(self) -> None:
        config = SuggestionConfig(
            endpoint="http://localhost:8000", input_language="en", output_language="hi"
        )
        with self.assertRaises(ValidationError):
            config.max_suggestions = 4  # type: ignore[misc]


if __name__ == "__main__":
    unittest.main()
