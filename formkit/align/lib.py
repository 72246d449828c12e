"""Form alignment modes and the per-form alignment context.

An `AlignmentContext` belongs to one form session. It is opened when the
form starts, read by every control of that form through immutable
`AlignmentState` snapshots, and closed when the form ends.
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any

from formkit.classes import has_any_class, inject_classes
from formkit.core.log import get_logger
from formkit.grid import GridPosition, GridSpec, grid_class, offset_group_class

logger = get_logger("align")

DEFAULT_GRID: dict[str, int] = {"left": 2, "middle": 10, "right": 0}


class AlignmentMode(str, Enum):
    """Layout regime of a form.

    - DEFAULT: Labels stacked above inputs
    - HORIZONTAL: Label and input side by side in grid columns
    - INLINE: All controls on a single row, labels visually hidden
    """

    DEFAULT = "default"
    HORIZONTAL = "horizontal"
    INLINE = "inline"


ALIGN_TYPES: tuple[str, ...] = tuple(mode.value for mode in AlignmentMode)


class AlignmentError(ValueError):
    """Requested alignment is not one of the supported modes."""


class AlignmentStateError(RuntimeError):
    """Alignment context used outside of an open form."""


def parse_alignment(value: "AlignmentMode | str") -> AlignmentMode:
    """Validate an alignment value.

    Args:
        value: Alignment mode or its string value.

    Returns:
        The matching AlignmentMode.

    Raises:
        AlignmentError: If the value is not a supported alignment.
    """
    if isinstance(value, AlignmentMode):
        return value
    try:
        return AlignmentMode(value)
    except ValueError:
        raise AlignmentError(
            f"Invalid value for `align` option: {value!r}. "
            f"Valid values are: {', '.join(ALIGN_TYPES)}"
        ) from None


def detect_alignment(classes: Any, default: "AlignmentMode | str" = AlignmentMode.DEFAULT) -> AlignmentMode:
    """Detect the alignment implied by a form's CSS classes.

    Args:
        classes: Class value of the form element.
        default: Alignment used when no alignment class is present.

    Returns:
        HORIZONTAL for `form-horizontal`, INLINE for `form-inline`,
        otherwise the default.
    """
    for mode in (AlignmentMode.HORIZONTAL, AlignmentMode.INLINE):
        if has_any_class(f"form-{mode.value}", classes):
            return mode
    return parse_alignment(default)


def form_classes(mode: AlignmentMode, attrs: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Inject the classes a form element needs for its alignment.

    Args:
        mode: Alignment of the form.
        attrs: Form element attributes.

    Returns:
        New attribute mapping; default forms are returned unchanged.
    """
    result = dict(attrs or {})
    if mode is AlignmentMode.DEFAULT:
        return result
    result = inject_classes(f"form-{mode.value}", result)
    if mode is AlignmentMode.INLINE:
        result = inject_classes("row g-3 align-items-center", result)
    return result


@dataclass(frozen=True)
class AlignmentState:
    """Immutable snapshot of an open form's alignment.

    Attributes:
        mode: Alignment mode of the form.
        grid: Grid spec; set only for horizontal forms.
    """

    mode: AlignmentMode
    grid: GridSpec | None = None

    @property
    def is_horizontal(self) -> bool:
        return self.mode is AlignmentMode.HORIZONTAL

    @property
    def is_inline(self) -> bool:
        return self.mode is AlignmentMode.INLINE

    def grid_class(self, position: GridPosition | str, offset: bool = False) -> str:
        """Grid class for a position, empty outside horizontal forms."""
        return grid_class(self.grid, position, offset)

    def offset_group_class(self) -> str:
        """Left offset plus middle column, empty outside horizontal forms."""
        return offset_group_class(self.grid)


class AlignmentContext:
    """Mutable alignment state bound to one form's open/close lifecycle.

    Example:
        >>> context = AlignmentContext()
        >>> context.open("horizontal")
        <AlignmentMode.HORIZONTAL: 'horizontal'>
        >>> context.state().grid_class("left")
        'col-md-2'
        >>> context.close()
        >>> context.is_open
        False
    """

    def __init__(
        self,
        default_align: AlignmentMode | str = AlignmentMode.DEFAULT,
        default_grid: GridSpec | Mapping[str, Any] | None = None,
    ):
        self._default_align = parse_alignment(default_align)
        self._default_grid = GridSpec.from_value(
            default_grid if default_grid is not None else DEFAULT_GRID
        )
        self._mode: AlignmentMode | None = None
        self._grid: GridSpec | None = None

    @property
    def is_open(self) -> bool:
        """True between `open()` and `close()`."""
        return self._mode is not None

    @property
    def mode(self) -> AlignmentMode:
        """Current alignment mode.

        Raises:
            AlignmentStateError: If no form is open.
        """
        if self._mode is None:
            raise AlignmentStateError("Alignment read outside of an open form")
        return self._mode

    @property
    def grid(self) -> GridSpec | None:
        """Current grid spec (None unless horizontal).

        Raises:
            AlignmentStateError: If no form is open.
        """
        if self._mode is None:
            raise AlignmentStateError("Grid read outside of an open form")
        return self._grid

    def open(
        self,
        requested: AlignmentMode | str | Mapping[str, Any] | None = None,
        explicit_grid: GridSpec | Mapping[str, Any] | None = None,
        classes: Any = None,
    ) -> AlignmentMode:
        """Resolve and store the alignment for a new form.

        Args:
            requested: Requested alignment. None auto-detects from `classes`.
                A grid mapping forces horizontal alignment with that grid.
            explicit_grid: Grid table; forces horizontal alignment.
            classes: Form element classes used for auto-detection.

        Returns:
            The resolved alignment mode.

        Raises:
            AlignmentStateError: If the context is already open.
            AlignmentError: If the requested alignment is invalid.
        """
        if self.is_open:
            raise AlignmentStateError("Alignment context is already open")

        if isinstance(requested, (Mapping, GridSpec)):
            explicit_grid = requested
            requested = AlignmentMode.HORIZONTAL

        if explicit_grid is not None:
            mode = AlignmentMode.HORIZONTAL
            grid = GridSpec.from_value(explicit_grid)
        else:
            if not requested:
                mode = detect_alignment(classes, self._default_align)
            else:
                mode = parse_alignment(requested)
            grid = self._default_grid if mode is AlignmentMode.HORIZONTAL else None

        self._mode = mode
        self._grid = grid
        logger.debug(f"Opened {mode.value} form (grid={grid.to_dict() if grid else None})")
        return mode

    def close(self) -> None:
        """Reset the alignment; safe to call on a closed context."""
        if self._mode is not None:
            logger.debug(f"Closed {self._mode.value} form")
        self._mode = None
        self._grid = None

    def state(self) -> AlignmentState:
        """Snapshot of the open form's alignment.

        Raises:
            AlignmentStateError: If no form is open.
        """
        return AlignmentState(mode=self.mode, grid=self._grid)

    @contextmanager
    def opened(
        self,
        requested: AlignmentMode | str | Mapping[str, Any] | None = None,
        explicit_grid: GridSpec | Mapping[str, Any] | None = None,
        classes: Any = None,
    ) -> Iterator[AlignmentState]:
        """Open the context for the duration of a block, closing on any exit."""
        self.open(requested, explicit_grid, classes)
        try:
            yield self.state()
        finally:
            self.close()


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
