"""Markup rendering for resolved controls."""

from .lib import NON_TEXT_TYPES, Choice, ControlRenderer, normalize_choices

__all__ = ["NON_TEXT_TYPES", "Choice", "ControlRenderer", "normalize_choices"]
