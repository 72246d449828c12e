"""Validation feedback style resolution.

Decides whether a control's error message is rendered as an inline block
or as a tooltip, and which CSS position class its form group needs for
the tooltip to anchor correctly.
"""

from dataclasses import dataclass, field
from enum import Enum

from formkit.align import AlignmentMode


class FeedbackStyle(str, Enum):
    """How validation errors are displayed."""

    DEFAULT = "default"
    TOOLTIP = "tooltip"


class FormGroupPosition(str, Enum):
    """CSS positioning applied to a form group."""

    ABSOLUTE = "absolute"
    FIXED = "fixed"
    RELATIVE = "relative"
    STATIC = "static"
    STICKY = "sticky"


# Template used for error messages in tooltip style
TOOLTIP_ERROR_TEMPLATE = "errorTooltip"


@dataclass(frozen=True)
class FeedbackResolution:
    """Outcome of feedback resolution for one control.

    Attributes:
        style: Effective feedback style, None when nothing applies.
        position: Effective form group position, None when unset.
        error_template: Name of the template to use for `error`, None to
            keep the current one.
        template_vars: Variables to merge into the control's templateVars.
    """

    style: str | None = None
    position: str | None = None
    error_template: str | None = None
    template_vars: dict[str, str] = field(default_factory=dict)

    @property
    def position_var(self) -> str | None:
        """Value emitted for `formGroupPosition`, if any."""
        return self.template_vars.get("formGroupPosition")


def _value(option) -> str | None:
    if not option:
        return None
    return option.value if isinstance(option, Enum) else str(option)


def resolve_feedback(
    style: FeedbackStyle | str | None = None,
    position: FormGroupPosition | str | None = None,
    alignment: AlignmentMode | str | None = None,
    default_style: FeedbackStyle | str | None = None,
    default_position: FormGroupPosition | str | None = None,
) -> FeedbackResolution:
    """Resolve feedback style and form group position for a control.

    Style: per-call value, else form default, else `tooltip` for inline
    forms. Position: per-call value, else form default, else `relative` for
    tooltip style. Falsy values count as unset.

    Args:
        style: Per-call feedback style.
        position: Per-call form group position.
        alignment: Alignment of the enclosing form.
        default_style: Form-level feedback style.
        default_position: Form-level form group position.

    Returns:
        FeedbackResolution with the effective values.

    Example:
        >>> result = resolve_feedback(alignment="inline")
        >>> result.style, result.position, result.position_var
        ('tooltip', 'relative', 'position-relative ')
    """
    effective_style = _value(style) or _value(default_style)
    if effective_style is None and _value(alignment) == AlignmentMode.INLINE.value:
        effective_style = FeedbackStyle.TOOLTIP.value

    is_tooltip = effective_style == FeedbackStyle.TOOLTIP.value

    effective_position = _value(position) or _value(default_position)
    if effective_position is None and is_tooltip:
        effective_position = FormGroupPosition.RELATIVE.value

    template_vars: dict[str, str] = {}
    if effective_position:
        # Concatenated straight into a class attribute by the container templates
        template_vars["formGroupPosition"] = f"position-{effective_position} "

    return FeedbackResolution(
        style=effective_style,
        position=effective_position,
        error_template=TOOLTIP_ERROR_TEMPLATE if is_tooltip else None,
        template_vars=template_vars,
    )


__all__ = [
    "TOOLTIP_ERROR_TEMPLATE",
    "FeedbackResolution",
    "FeedbackStyle",
    "FormGroupPosition",
    "resolve_feedback",
]
