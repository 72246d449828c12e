"""Responsive grid class calculation for horizontal forms.

A grid spec is either flat, a single implicit `md` breakpoint:

    {"left": 2, "middle": 10, "right": 0}

or a per-breakpoint table, iterated in insertion order:

    {"sm": {"left": 12, "middle": 12}, "md": {"left": 4, "middle": 8}}
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_BREAKPOINT = "md"


class GridPosition(str, Enum):
    """Column regions of a horizontal form row."""

    LEFT = "left"
    MIDDLE = "middle"
    RIGHT = "right"


@dataclass(frozen=True)
class GridSpec:
    """Column counts for the label, input and trailing regions.

    Attributes:
        columns: Flat `{position: count}` mapping or a
            `{breakpoint: {position: count}}` table.
    """

    columns: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_value(cls, value: "GridSpec | Mapping[str, Any] | None") -> "GridSpec | None":
        """Coerce a grid value into a GridSpec.

        Args:
            value: Existing spec, raw mapping, or None.

        Returns:
            GridSpec, or None when no grid was given.
        """
        if value is None or isinstance(value, GridSpec):
            return value
        columns: dict[str, Any] = {}
        for key, entry in value.items():
            columns[str(key)] = dict(entry) if isinstance(entry, Mapping) else entry
        return cls(columns=columns)

    @property
    def is_flat(self) -> bool:
        """True when positions are held directly (implicit breakpoint)."""
        return any(not isinstance(entry, Mapping) for entry in self.columns.values())

    def breakpoints(self) -> list[str]:
        """Breakpoint names in table order."""
        if self.is_flat:
            return [DEFAULT_BREAKPOINT]
        return list(self.columns)

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping representation."""
        return {
            key: dict(entry) if isinstance(entry, Mapping) else entry
            for key, entry in self.columns.items()
        }


def grid_class(
    grid: GridSpec | Mapping[str, Any] | None,
    position: GridPosition | str,
    offset: bool = False,
) -> str:
    """Build the responsive class string for a grid position.

    Args:
        grid: Grid spec (or raw mapping); None yields an empty string.
        position: One of `left`, `middle` or `right`.
        offset: Build `offset-*` classes instead of `col-*`.

    Returns:
        Space-joined class string, e.g. `"col-md-2"` or
        `"col-sm-12 col-md-4"`. Breakpoints without the position are skipped.

    Example:
        >>> grid_class({"left": 2, "middle": 10, "right": 0}, "left", offset=True)
        'offset-md-2'
    """
    spec = GridSpec.from_value(grid)
    if spec is None:
        return ""

    key = position.value if isinstance(position, GridPosition) else str(position)
    prefix = "offset" if offset else "col"

    value = spec.columns.get(key)
    if value is not None and not isinstance(value, Mapping):
        return f"{prefix}-{DEFAULT_BREAKPOINT}-{value}"

    classes = []
    for breakpoint, positions in spec.columns.items():
        if not isinstance(positions, Mapping):
            continue
        count = positions.get(key)
        if count is not None:
            classes.append(f"{prefix}-{breakpoint}-{count}")

    return " ".join(classes)


def offset_group_class(grid: GridSpec | Mapping[str, Any] | None) -> str:
    """Class string for groups that sit under the input column.

    Combines the left offset with the middle column, e.g.
    `"offset-md-2 col-md-10"`.
    """
    parts = [
        grid_class(grid, GridPosition.LEFT, offset=True),
        grid_class(grid, GridPosition.MIDDLE),
    ]
    return " ".join(part for part in parts if part)


__all__ = [
    "DEFAULT_BREAKPOINT",
    "GridPosition",
    "GridSpec",
    "grid_class",
    "offset_group_class",
]
