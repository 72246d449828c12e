"""Per-field-type option resolution.

Every control goes through one transform chosen by its FieldType (see
FIELD_TRANSFORMS), followed by the same post-dispatch steps for all types:

    container -> feedback -> help -> tooltip -> input group error class

The transforms only compute rendering directives (classes, template
overrides, template variables); markup is produced by the renderer.
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from formkit.align import AlignmentState
from formkit.classes import inject_classes
from formkit.config import FormSettings
from formkit.container import compose_container
from formkit.core.log import get_logger
from formkit.feedback import resolve_feedback
from formkit.grid import GridPosition
from formkit.templater import StringTemplater, escape_html

from .models import DATETIME_TYPES, FieldDescriptor, FieldType, ResolvedOptions, group_id

logger = get_logger("fields")


@dataclass(frozen=True)
class ControlContext:
    """Form-level state visible to option transforms.

    Attributes:
        alignment: Alignment of the open form.
        templater: Templater with the currently effective template layers.
        settings: Form-level defaults.
    """

    alignment: AlignmentState
    templater: StringTemplater
    settings: FormSettings

    def template(self, name: str) -> str | None:
        return self.templater.get(name)


Transform = Callable[[ResolvedOptions, ControlContext], ResolvedOptions]


# =============================================================================
# Shared Helpers
# =============================================================================


def _inject_label_classes(options: ResolvedOptions, classes: Any) -> None:
    if options.label is not False:
        options.label = inject_classes(classes, options.label)


def _inject_input_classes(options: ResolvedOptions, classes: Any) -> None:
    options.attrs = inject_classes(classes, options.attrs)


def _use_nesting_label(options: ResolvedOptions, ctx: ControlContext) -> None:
    if options.nested_input:
        options.templates["nestingLabel"] = ctx.template("nestingLabelNestedInput")


def _use_switch(options: ResolvedOptions) -> None:
    if options.switch:
        options.template_vars["variant"] = " form-switch"


def _wire_group_label(options: ResolvedOptions) -> None:
    """Tie the group label to the container through a shared id."""
    gid = group_id(options.name)
    options.template_vars["groupId"] = gid
    if options.label is not False:
        options.label_vars()["groupId"] = gid
        options.label["id"] = gid


def _group_label_classes(options: ResolvedOptions, ctx: ControlContext) -> None:
    if not ctx.alignment.is_inline:
        _inject_label_classes(options, "d-block")
    if ctx.alignment.is_horizontal:
        _inject_label_classes(options, "pt-0")


def label_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Label classes shared by most control types.

    Default and inline forms get `form-label`; horizontal forms get
    `col-form-label` plus the left grid column; inline forms also hide the
    label visually.
    """
    if options.label is False:
        return options

    if ctx.alignment.is_horizontal:
        classes = f"col-form-label {ctx.alignment.grid_class(GridPosition.LEFT)}"
    else:
        classes = "form-label"
    _inject_label_classes(options, classes)

    if ctx.alignment.is_inline:
        _inject_label_classes(options, "visually-hidden")
    return options


# =============================================================================
# Type Transforms
# =============================================================================


def default_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Text-like controls: label classes only."""
    return label_options(options, ctx)


def checkbox_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Single checkbox.

    The label sits after the input and only carries `form-check-label`.
    Horizontal forms never render inline checkboxes; inline forms and
    `inline=True` swap in the inline checkbox containers.
    """
    _inject_label_classes(options, "form-check-label")
    _inject_input_classes(options, "form-check-input")

    if ctx.alignment.is_horizontal:
        options.inline = False

    if options.inline or ctx.alignment.is_inline:
        options.templates["checkboxContainer"] = ctx.template("checkboxInlineContainer")
        options.templates["checkboxContainerError"] = ctx.template("checkboxInlineContainerError")

    _use_nesting_label(options, ctx)
    _use_switch(options)
    return options


def radio_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Radio button set with a group label referenced by the container."""
    label_options(options, ctx)
    _inject_input_classes(options, "form-check-input")
    _wire_group_label(options)
    _group_label_classes(options, ctx)

    options.templates["label"] = ctx.template("radioLabel")
    if options.inline or ctx.alignment.is_inline:
        options.templates["radioWrapper"] = ctx.template("radioInlineWrapper")

    _use_nesting_label(options, ctx)
    return options


def multicheckbox_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Checkbox set rendered from a select with `multiple="checkbox"`."""
    label_options(options, ctx)
    options.type = FieldType.MULTICHECKBOX.value
    _inject_input_classes(options, "form-check-input")
    _wire_group_label(options)
    _group_label_classes(options, ctx)

    options.templates["label"] = ctx.template("multicheckboxLabel")
    if options.inline or ctx.alignment.is_inline:
        options.templates["checkboxWrapper"] = ctx.template("checkboxInlineWrapper")

    _use_nesting_label(options, ctx)
    _use_switch(options)
    return options


def select_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Select box styled with `form-select` instead of `form-control`."""
    label_options(options, ctx)
    options.inject_form_control = False
    _inject_input_classes(options, "form-select")
    return options


def range_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Range slider styled with `form-range` instead of `form-control`."""
    label_options(options, ctx)
    options.inject_form_control = False
    if ctx.alignment.is_horizontal:
        _inject_label_classes(options, "pt-0")
    _inject_input_classes(options, "form-range")
    return options


def datetime_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Date and time inputs use the datetime label and container templates."""
    label_options(options, ctx)
    gid = group_id(options.name)
    options.template_vars["groupId"] = gid
    if options.label is not False:
        options.label_vars()["groupId"] = gid

    options.templates["label"] = ctx.template("datetimeLabel")
    options.templates["inputContainer"] = ctx.template("datetimeContainer")
    options.templates["inputContainerError"] = ctx.template("datetimeContainerError")
    return options


FIELD_TRANSFORMS: dict[FieldType, Transform] = {
    FieldType.DEFAULT: default_options,
    FieldType.CHECKBOX: checkbox_options,
    FieldType.RADIO: radio_options,
    FieldType.SELECT: select_options,
    FieldType.MULTICHECKBOX: multicheckbox_options,
    FieldType.RANGE: range_options,
    **{field_type: datetime_options for field_type in DATETIME_TYPES},
}


# =============================================================================
# Post-dispatch Steps
# =============================================================================


def container_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Move the `container` option into container template variables."""
    container_vars = compose_container(
        options.container,
        typed=bool(options.type),
        alignment=ctx.alignment.mode,
        format_attributes=ctx.templater.format_attributes,
    )
    options.template_vars.update(container_vars)
    options.container = None
    return options


def feedback_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Pick the error template and form group position for the control."""
    resolution = resolve_feedback(
        options.feedback_style,
        options.form_group_position,
        ctx.alignment.mode,
        ctx.settings.feedback_style,
        ctx.settings.form_group_position,
    )
    if resolution.error_template:
        pattern = ctx.template(resolution.error_template)
        if pattern is not None:
            options.templates["error"] = pattern
    options.template_vars.update(resolution.template_vars)
    return options


def help_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Render the help option through the `help` template.

    A mapping supplies `content` plus attributes for the help element; its
    `class` is ignored because the template owns the classes.
    """
    raw = options.help
    if not raw:
        options.help = None
        return options

    if isinstance(raw, Mapping):
        content = raw.get("content", "")
        attrs = ctx.templater.format_attributes(raw, exclude=("class", "content"))
    else:
        content = raw
        attrs = ""

    options.help = ctx.templater.format("help", {"content": content, "attrs": attrs})
    return options


def tooltip_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Append the tooltip marker to the label."""
    if options.tooltip and options.label is not False:
        marker = ctx.templater.format("tooltip", {"content": escape_html(options.tooltip)})
        options.label_vars()["tooltip"] = f" {marker}"
    options.tooltip = None
    return options


def input_group_options(options: ResolvedOptions, ctx: ControlContext) -> ResolvedOptions:
    """Inputs inside an input group still get the error class."""
    if options.prepend or options.append:
        options.inject_error_class = ctx.settings.error_class
    return options


POST_DISPATCH: tuple[Transform, ...] = (
    container_options,
    feedback_options,
    help_options,
    tooltip_options,
    input_group_options,
)


def resolve_control(
    descriptor: FieldDescriptor, ctx: ControlContext
) -> ResolvedOptions:
    """Resolve a field descriptor into rendering directives.

    Must run while the control's own template overrides are in effect so
    that transforms see them.

    Args:
        descriptor: Field options.
        ctx: Alignment, templates and settings of the open form.

    Returns:
        ResolvedOptions ready for the renderer.
    """
    options = ResolvedOptions.from_descriptor(descriptor)
    transform = FIELD_TRANSFORMS[options.field_type]
    options = transform(options, ctx)
    for step in POST_DISPATCH:
        options = step(options, ctx)

    # Drop overrides whose source template was removed
    options.templates = {k: v for k, v in options.templates.items() if v is not None}
    logger.debug(
        f"Resolved {options.name} as {options.field_type.value} "
        f"({ctx.alignment.mode.value}, overrides={sorted(options.templates)})"
    )
    return options


# =============================================================================
# Template Fallbacks
# =============================================================================


def group_template_name(control_type: str, get: Callable[[str], str | None]) -> str:
    """Group template for a control type: `{type}FormGroup`, else `formGroup`."""
    candidate = f"{control_type}FormGroup"
    return candidate if get(candidate) is not None else "formGroup"


def container_template_name(
    control_type: str, get: Callable[[str], str | None], has_error: bool = False
) -> str:
    """Container template for a control type.

    Tries `{type}Container` (with an `Error` suffix when the control has
    errors), else `inputContainer` with the same suffix.
    """
    suffix = "Error" if has_error else ""
    candidate = f"{control_type}Container{suffix}"
    return candidate if get(candidate) is not None else f"inputContainer{suffix}"


__all__ = [
    "FIELD_TRANSFORMS",
    "POST_DISPATCH",
    "ControlContext",
    "container_options",
    "container_template_name",
    "feedback_options",
    "group_template_name",
    "help_options",
    "input_group_options",
    "label_options",
    "resolve_control",
    "tooltip_options",
]
