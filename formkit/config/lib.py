"""Environment configuration for formkit.

Every FORMKIT_* variable is declared once on `EnvVar` together with its
default and type; `get_environment()` reads it and `FormSettings` gathers
the ones that shape a form.

Example:
    >>> from formkit.config import EnvVar, get_environment
    >>> left = get_environment(EnvVar.GRID_LEFT)  # int, 2 unless set
    >>> style = get_environment(EnvVar.FEEDBACK_STYLE)  # str | None
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, overload

# =============================================================================
# Environment Variable Configuration
# =============================================================================


@dataclass(frozen=True)
class EnvConfig:
    """Declaration of one FORMKIT_* variable.

    Attributes:
        name: Variable name, e.g. "FORMKIT_ALIGN".
        default: Value used when the variable is unset or unparseable.
        var_type: str, int or Path.
        description: Shown by `formkit env -v`.
        category: form, grid, templates or logging.
    """

    name: str
    default: Any
    var_type: type
    description: str = ""
    category: str = "form"


class EnvVar(Enum):
    """Variables read by formkit, grouped by category."""

    # -------------------------------------------------------------------------
    # Form Defaults
    # -------------------------------------------------------------------------
    ALIGN = EnvConfig(
        name="FORMKIT_ALIGN",
        default="default",
        var_type=str,
        description="Alignment used when a form neither requests nor implies one",
        category="form",
    )
    FEEDBACK_STYLE = EnvConfig(
        name="FORMKIT_FEEDBACK_STYLE",
        default=None,
        var_type=str,
        description="Default error feedback style: 'default' or 'tooltip'",
        category="form",
    )
    FORM_GROUP_POSITION = EnvConfig(
        name="FORMKIT_FORM_GROUP_POSITION",
        default=None,
        var_type=str,
        description="Default CSS position of form groups (absolute, fixed, relative, static, sticky)",
        category="form",
    )
    ERROR_CLASS = EnvConfig(
        name="FORMKIT_ERROR_CLASS",
        default="is-invalid",
        var_type=str,
        description="Class injected on inputs that carry a validation error",
        category="form",
    )

    # -------------------------------------------------------------------------
    # Horizontal Grid
    # -------------------------------------------------------------------------
    GRID_LEFT = EnvConfig(
        name="FORMKIT_GRID_LEFT",
        default=2,
        var_type=int,
        description="Label column count of the default horizontal grid",
        category="grid",
    )
    GRID_MIDDLE = EnvConfig(
        name="FORMKIT_GRID_MIDDLE",
        default=10,
        var_type=int,
        description="Input column count of the default horizontal grid",
        category="grid",
    )
    GRID_RIGHT = EnvConfig(
        name="FORMKIT_GRID_RIGHT",
        default=0,
        var_type=int,
        description="Trailing column count of the default horizontal grid",
        category="grid",
    )
    OFFSET_GRID_CLASS = EnvConfig(
        name="FORMKIT_OFFSET_GRID_CLASS",
        default=None,  # Computed from the grid if not set
        var_type=str,
        description="Class string for offset groups (checkbox, submit) in horizontal forms",
        category="grid",
    )

    # -------------------------------------------------------------------------
    # Templates
    # -------------------------------------------------------------------------
    TEMPLATES_FILE = EnvConfig(
        name="FORMKIT_TEMPLATES_FILE",
        default=None,
        var_type=Path,
        description="JSON file of template overrides installed over the base set",
        category="templates",
    )

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    LOG_LEVEL = EnvConfig(
        name="FORMKIT_LOG_LEVEL",
        default="INFO",
        var_type=str,
        description="Log level used by the command line interface",
        category="logging",
    )


# =============================================================================
# Value Conversion
# =============================================================================


def _to_int(raw: str) -> int:
    return int(raw.strip())


# Converters keyed by EnvConfig.var_type. A converter raising ValueError
# makes the variable fall back to its default.
_CONVERTERS: dict[type, Callable[[str], Any]] = {
    str: str,
    int: _to_int,
    Path: Path,
}


def _convert_value(raw: str | None, config: EnvConfig) -> Any:
    """Turn a raw environment string into the variable's declared type.

    Unset and empty values yield the default, as do values the converter
    rejects.
    """
    if not raw:
        return config.default
    convert = _CONVERTERS.get(config.var_type, str)
    try:
        return convert(raw)
    except ValueError:
        return config.default


# =============================================================================
# Main Interface
# =============================================================================


@overload
def get_environment(env_var: EnvVar, override: int) -> int: ...
@overload
def get_environment(env_var: EnvVar, override: str) -> str: ...
@overload
def get_environment(env_var: EnvVar, override: Path) -> Path: ...
@overload
def get_environment(env_var: EnvVar, override: None = None) -> Any: ...


def get_environment(env_var: EnvVar, override: Any = None) -> Any:
    """Read a formkit variable.

    A non-None override wins, then the process environment, then the
    EnvConfig default.

    Args:
        env_var: Variable to read.
        override: Value returned as-is when given.

    Returns:
        The value as `var_type` (str, int or Path), or the default.

    Example:
        >>> get_environment(EnvVar.GRID_LEFT)
        2
        >>> get_environment(EnvVar.GRID_LEFT, override=3)
        3
    """
    if override is not None:
        return override
    config: EnvConfig = env_var.value
    return _convert_value(os.environ.get(config.name), config)


def get_environment_info(env_var: EnvVar) -> EnvConfig:
    """Metadata (name, default, type, description) of a variable."""
    return env_var.value


def list_environment_variables(category: str | None = None) -> list[EnvVar]:
    """Variables in declaration order.

    Args:
        category: One of form, grid, templates, logging. None lists all.
    """
    return [var for var in EnvVar if category is None or var.value.category == category]


def get_default_grid() -> dict[str, int]:
    """Get the default horizontal grid from the environment.

    Returns:
        Flat grid mapping with `left`, `middle` and `right` column counts.
    """
    return {
        "left": get_environment(EnvVar.GRID_LEFT),
        "middle": get_environment(EnvVar.GRID_MIDDLE),
        "right": get_environment(EnvVar.GRID_RIGHT),
    }


# =============================================================================
# Form Settings
# =============================================================================


@dataclass
class FormSettings:
    """Form-level defaults consulted by every control of a form.

    Attributes:
        align: Alignment used when a form neither requests nor implies one.
        grid: Grid applied to horizontal forms without an explicit grid.
        feedback_style: Default error feedback style (None lets alignment decide).
        form_group_position: Default CSS position of form groups.
        error_class: Class injected on inputs with validation errors.
        offset_grid_class: Class string for offset groups in horizontal forms.
            None computes it from the grid (left offset + middle column).
        templates_file: Optional JSON file installed over the base templates.
        template_set: Extra per-alignment template overlays, deep-merged
            over the built-in overlays.
    """

    align: str = "default"
    grid: dict[str, Any] = field(
        default_factory=lambda: {"left": 2, "middle": 10, "right": 0}
    )
    feedback_style: str | None = None
    form_group_position: str | None = None
    error_class: str = "is-invalid"
    offset_grid_class: str | None = None
    templates_file: Path | None = None
    template_set: dict[str, dict[str, str]] = field(default_factory=dict)

    @classmethod
    def from_environment(cls, **overrides: Any) -> "FormSettings":
        """Build settings from environment variables.

        Args:
            **overrides: Field values that take precedence over the environment.

        Returns:
            FormSettings instance.
        """
        values: dict[str, Any] = {
            "align": get_environment(EnvVar.ALIGN),
            "grid": get_default_grid(),
            "feedback_style": get_environment(EnvVar.FEEDBACK_STYLE),
            "form_group_position": get_environment(EnvVar.FORM_GROUP_POSITION),
            "error_class": get_environment(EnvVar.ERROR_CLASS),
            "offset_grid_class": get_environment(EnvVar.OFFSET_GRID_CLASS),
            "templates_file": get_environment(EnvVar.TEMPLATES_FILE),
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


__all__ = [
    "EnvConfig",
    "EnvVar",
    "FormSettings",
    "get_default_grid",
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
]
