"""Textual widgets hosting the composer engine."""

from .composer_input import ComposerInput, ComposerTextInput

__all__ = ["ComposerInput", "ComposerTextInput"]
