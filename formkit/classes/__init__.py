"""CSS class injection helpers."""

from .lib import (
    BUTTON_STYLES,
    OUTLINE_BUTTON_STYLES,
    apply_button_classes,
    has_any_class,
    inject_classes,
    split_classes,
)

__all__ = [
    "BUTTON_STYLES",
    "OUTLINE_BUTTON_STYLES",
    "apply_button_classes",
    "has_any_class",
    "inject_classes",
    "split_classes",
]
