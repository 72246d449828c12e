"""Grid spec model and responsive grid class calculation."""

from .lib import (
    DEFAULT_BREAKPOINT,
    GridPosition,
    GridSpec,
    grid_class,
    offset_group_class,
)

__all__ = [
    "DEFAULT_BREAKPOINT",
    "GridPosition",
    "GridSpec",
    "grid_class",
    "offset_group_class",
]
