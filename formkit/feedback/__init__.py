"""Validation feedback style resolution."""

from formkit.feedback.lib import (
    TOOLTIP_ERROR_TEMPLATE,
    FeedbackResolution,
    FeedbackStyle,
    FormGroupPosition,
    resolve_feedback,
)

__all__ = [
    "TOOLTIP_ERROR_TEMPLATE",
    "FeedbackResolution",
    "FeedbackStyle",
    "FormGroupPosition",
    "resolve_feedback",
]
