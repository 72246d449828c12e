"""Form alignment modes and per-form alignment context."""

from .lib import (
    ALIGN_TYPES,
    DEFAULT_GRID,
    AlignmentContext,
    AlignmentError,
    AlignmentMode,
    AlignmentState,
    AlignmentStateError,
    detect_alignment,
    form_classes,
    parse_alignment,
)

__all__ = [
    "ALIGN_TYPES",
    "DEFAULT_GRID",
    "AlignmentContext",
    "AlignmentError",
    "AlignmentMode",
    "AlignmentState",
    "AlignmentStateError",
    "detect_alignment",
    "form_classes",
    "parse_alignment",
]
