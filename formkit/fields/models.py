"""Field descriptor and resolved option models."""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FieldType(str, Enum):
    """Control variants with their own option transform.

    HTML input types without dedicated rules (text, email, password,
    textarea, ...) are classified as DEFAULT.
    """

    DEFAULT = "default"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"
    MULTICHECKBOX = "multicheckbox"
    RANGE = "range"
    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"
    DATETIME_LOCAL = "datetime-local"

    @classmethod
    def classify(cls, control_type: str | None, multiple: Any = None) -> "FieldType":
        """Map a control type to its field type.

        Args:
            control_type: HTML/control type of the field.
            multiple: The field's `multiple` option; `"checkbox"` turns a
                select into a multicheckbox.

        Returns:
            The matching FieldType, DEFAULT for unknown types.
        """
        if control_type == cls.SELECT.value and multiple == "checkbox":
            return cls.MULTICHECKBOX
        try:
            return cls(control_type)
        except ValueError:
            return cls.DEFAULT


DATETIME_TYPES = frozenset(
    {FieldType.DATE, FieldType.TIME, FieldType.DATETIME, FieldType.DATETIME_LOCAL}
)


def dom_id(value: str) -> str:
    """Build a DOM id from a field path.

    Example:
        >>> dom_id("User.first_name-group-label")
        'user-first-name-group-label'
    """
    return re.sub(r"[\W_]+", "-", value.lower()).strip("-")


def group_id(name: str) -> str:
    """DOM id tying a control group's label to its container."""
    return dom_id(f"{name}-group-label")


def humanize(name: str) -> str:
    """Default label text for a field path.

    Example:
        >>> humanize("user.country_id")
        'Country'
    """
    field_name = name.split(".")[-1]
    if field_name.endswith("_id") and field_name != "_id":
        field_name = field_name[:-3]
    words = re.sub(r"[_\-]+", " ", field_name).split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def input_name(name: str) -> str:
    """HTML `name` attribute for a dot path.

    Example:
        >>> input_name("user.address.city")
        'user[address][city]'
    """
    head, *rest = name.split(".")
    return head + "".join(f"[{part}]" for part in rest)


class FieldDescriptor(BaseModel):
    """Options of a single form control.

    Known options are declared as fields (camelCase aliases are accepted);
    anything else is kept as an extra HTML attribute of the input.

    Attributes:
        name: Dot path of the field (e.g. "user.email").
        type: Control type (text, checkbox, radio, select, range, date, ...).
        label: False to disable, a string for the text, or label attributes.
        error: Validation error message(s) to render.
        required: Mark the control as required.
        help: Help text or `{content, ...attributes}` mapping.
        tooltip: Tooltip text appended to the label.
        container: Container attributes; `class` is prepended.
        prepend: Input group addon(s) before the input.
        append: Input group addon(s) after the input.
        inline: Inline checkbox/radio layout.
        switch: Switch-style checkbox.
        nested_input: Render the input inside its label.
        templates: Per-call template overrides (mapping or JSON file path).
        template_vars: Extra template variables.
        feedback_style: Error feedback style for this control.
        form_group_position: CSS position of this control's group.
        options: Choices for select, radio and multicheckbox controls.
        multiple: Multiple selection; `"checkbox"` renders checkboxes.
        value: Current value.
        id: DOM id; derived from the name when omitted.

    Example:
        >>> field = FieldDescriptor(name="user.email", type="email", placeholder="you@example.com")
        >>> field.html_attributes()
        {'placeholder': 'you@example.com'}
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str = Field(..., description="Dot path identifying the field")
    type: str = Field(default="text", description="Control type")
    label: Any = Field(default=None, description="Label text, attributes, or False")
    error: Any = Field(default=None, description="Validation error message(s)")
    required: Any = Field(default=None, description="Required flag")
    help: Any = Field(default=None, description="Help text or attribute mapping")
    tooltip: str | None = Field(default=None, description="Label tooltip text")
    container: dict[str, Any] | None = Field(default=None, description="Container attributes")
    prepend: Any = Field(default=None, description="Addon(s) before the input")
    append: Any = Field(default=None, description="Addon(s) after the input")
    inline: Any = Field(default=None, description="Inline checkbox/radio layout")
    switch: Any = Field(default=None, description="Switch-style checkbox")
    nested_input: Any = Field(default=False, alias="nestedInput", description="Input inside label")
    templates: dict[str, str] | str | None = Field(default=None, description="Per-call templates")
    template_vars: dict[str, Any] = Field(
        default_factory=dict, alias="templateVars", description="Extra template variables"
    )
    feedback_style: str | None = Field(default=None, alias="feedbackStyle", description="Feedback style")
    form_group_position: str | None = Field(
        default=None, alias="formGroupPosition", description="Form group CSS position"
    )
    options: Any = Field(default=None, description="Choices for select/radio/multicheckbox")
    multiple: Any = Field(default=None, description="Multiple selection mode")
    value: Any = Field(default=None, description="Current value")
    id: str | None = Field(default=None, description="DOM id")

    @field_validator("tooltip", "feedback_style", "form_group_position", "id", mode="before")
    @classmethod
    def _coerce_text_option(cls, value: Any) -> str | None:
        """Accept any scalar as text; None and False mean unset."""
        if value is None or value is False:
            return None
        return str(value)

    @classmethod
    def from_options(cls, name: str, options: Mapping[str, Any] | None = None) -> "FieldDescriptor":
        """Build a descriptor from keyword-style options.

        `class_` is accepted for the reserved `class` attribute and other
        underscores in unknown option names become dashes (`data_role` ->
        `data-role`).
        """
        data: dict[str, Any] = {"name": name}
        known = set(cls.model_fields) | {
            info.alias for info in cls.model_fields.values() if info.alias
        }
        for key, value in (options or {}).items():
            if key == "class_":
                key = "class"
            elif key not in known:
                key = key.replace("_", "-")
            data[key] = value
        return cls.model_validate(data)

    @property
    def field_type(self) -> FieldType:
        """Field type used to pick the option transform."""
        return FieldType.classify(self.type, self.multiple)

    def html_attributes(self) -> dict[str, Any]:
        """Extra options passed through as input attributes."""
        return dict(self.model_extra or {})


@dataclass
class ResolvedOptions:
    """Rendering directives for one control.

    Produced by the field dispatcher and consumed by the renderer.

    Attributes:
        name: Dot path of the field.
        type: Control type after resolution (`multicheckbox` for checkbox
            selects).
        field_type: Field type that selected the transform.
        attrs: Input attributes, including `id` and `class`.
        label: False, or label attributes with optional `text` and a
            nested `templateVars` mapping.
        templates: Template overrides for this call only.
        template_vars: Variables for the group and container templates.
        help: Rendered help markup.
        error: Validation error message(s).
        required: Required flag.
        inline: Inline layout flag after alignment rules.
        nested_input: Input rendered inside its label.
        switch: Switch-style checkbox.
        options: Choices for multi-option controls.
        multiple: Multiple selection mode.
        value: Current value.
        prepend: Input group addon(s) before the input.
        append: Input group addon(s) after the input.
        feedback_style: Per-call feedback style.
        form_group_position: Per-call form group position.
        container: Raw container option, consumed by container composition.
        tooltip: Raw tooltip text, consumed by tooltip composition.
        inject_form_control: Add `form-control` to text-like inputs.
        inject_error_class: Error class to add to the input when invalid;
            None uses the renderer default.
    """

    name: str
    type: str
    field_type: FieldType
    attrs: dict[str, Any] = field(default_factory=dict)
    label: dict[str, Any] | Literal[False] = field(default_factory=dict)
    templates: dict[str, str] = field(default_factory=dict)
    template_vars: dict[str, Any] = field(default_factory=dict)
    help: str | None = None
    error: Any = None
    required: bool = False
    inline: bool = False
    nested_input: bool = False
    switch: bool = False
    options: Any = None
    multiple: Any = None
    value: Any = None
    prepend: Any = None
    append: Any = None
    feedback_style: str | None = None
    form_group_position: str | None = None
    container: dict[str, Any] | None = None
    tooltip: str | None = None
    inject_form_control: bool = True
    inject_error_class: str | None = None

    @classmethod
    def from_descriptor(cls, descriptor: FieldDescriptor) -> "ResolvedOptions":
        """Initial options for a descriptor, before any transform runs."""
        label: dict[str, Any] | Literal[False]
        raw_label = descriptor.label
        if raw_label is False:
            label = False
        elif isinstance(raw_label, Mapping):
            label = dict(raw_label)
        elif raw_label is None or raw_label is True:
            label = {}
        else:
            label = {"text": str(raw_label)}

        attrs = descriptor.html_attributes()
        attrs["id"] = descriptor.id or dom_id(descriptor.name)

        return cls(
            name=descriptor.name,
            type=descriptor.type,
            field_type=descriptor.field_type,
            attrs=attrs,
            label=label,
            template_vars=dict(descriptor.template_vars),
            help=descriptor.help,
            error=descriptor.error,
            required=bool(descriptor.required),
            inline=bool(descriptor.inline),
            nested_input=bool(descriptor.nested_input),
            switch=bool(descriptor.switch),
            options=descriptor.options,
            multiple=descriptor.multiple,
            value=descriptor.value,
            prepend=descriptor.prepend,
            append=descriptor.append,
            feedback_style=descriptor.feedback_style,
            form_group_position=descriptor.form_group_position,
            container=dict(descriptor.container) if descriptor.container else None,
            tooltip=descriptor.tooltip,
        )

    @property
    def has_error(self) -> bool:
        """True when there is an error message to render."""
        return bool(self.error)

    @property
    def group_id(self) -> str | None:
        """Group label id, when the control type wires one."""
        return self.template_vars.get("groupId")

    def label_vars(self) -> dict[str, Any]:
        """Mutable templateVars of the label (label must be enabled)."""
        if self.label is False:
            raise ValueError("Label is disabled")
        return self.label.setdefault("templateVars", {})
