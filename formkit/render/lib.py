"""Markup rendering for resolved controls.

Turns ResolvedOptions into HTML through the templater: widget, label,
error, group template, then container template. The templater passed in
must already carry the control's template overrides.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from formkit.classes import inject_classes
from formkit.core.log import get_logger
from formkit.fields import (
    FieldType,
    ResolvedOptions,
    container_template_name,
    dom_id,
    group_template_name,
    humanize,
    input_name,
)
from formkit.templater import StringTemplater, escape_html

logger = get_logger("render")

# Types that never receive `form-control`
NON_TEXT_TYPES = frozenset({"checkbox", "radio", "multicheckbox", "hidden", "select"})

# Input attribute keys consumed by the renderer itself
_CONTROL_KEYS = ("empty", "hiddenField", "hidden-field")


@dataclass
class Choice:
    """One entry of a select, radio or multicheckbox option list.

    Attributes:
        value: Submitted value.
        text: Display text.
        attrs: Extra attributes of the option element.
        children: Nested choices when this entry is a group.
    """

    value: str
    text: str
    attrs: dict[str, Any] = field(default_factory=dict)
    children: list["Choice"] = field(default_factory=list)

    @property
    def is_group(self) -> bool:
        return bool(self.children)


def normalize_choices(options: Any) -> list[Choice]:
    """Normalize the supported option list formats.

    Accepts a `{value: text}` mapping (a mapping value makes a group), a
    list of scalars, or a list of `{value, text, ...attrs}` mappings.

    Example:
        >>> [c.value for c in normalize_choices({"r": "Red", "g": "Green"})]
        ['r', 'g']
    """
    if not options:
        return []

    choices: list[Choice] = []
    if isinstance(options, Mapping):
        for value, text in options.items():
            if isinstance(text, Mapping) and "value" not in text:
                choices.append(Choice(str(value), str(value), children=normalize_choices(text)))
            else:
                choices.append(_choice(value, text))
        return choices

    for item in options:
        if isinstance(item, Mapping):
            attrs = {k: v for k, v in item.items() if k not in ("value", "text")}
            value = item.get("value", "")
            choices.append(Choice(str(value), str(item.get("text", value)), attrs))
        else:
            choices.append(Choice(str(item), str(item)))
    return choices


def _choice(value: Any, text: Any) -> Choice:
    if isinstance(text, Mapping):
        attrs = {k: v for k, v in text.items() if k not in ("value", "text")}
        return Choice(str(text.get("value", value)), str(text.get("text", value)), attrs)
    return Choice(str(value), str(text))


def _selected_values(value: Any) -> set[str]:
    if value is None:
        return set()
    if isinstance(value, (list, tuple, set)):
        return {str(item) for item in value}
    return {str(value)}


class ControlRenderer:
    """Renders resolved controls with the active template set."""

    def __init__(self, templater: StringTemplater, error_class: str = "is-invalid"):
        self.templater = templater
        self.error_class = error_class

    def _format(self, template: str, /, **data: Any) -> str:
        return self.templater.format(template, data)

    def _attrs(self, attrs: Mapping[str, Any] | None, exclude: Iterable[str] = ()) -> str:
        return self.templater.format_attributes(attrs, exclude)

    # =========================================================================
    # Entry point
    # =========================================================================

    def render(self, options: ResolvedOptions) -> str:
        """Render a complete control: widget, label, error, group, container."""
        attrs = self.input_attributes(options)

        if options.type == "hidden":
            return self._format(
                "hidden",
                name=input_name(options.name),
                value=escape_html(_text(options.value)),
                attrs=self._attrs(attrs, exclude=_CONTROL_KEYS),
            )

        error = self.error(options)
        nested = options.field_type is FieldType.CHECKBOX and options.nested_input

        if options.field_type is FieldType.CHECKBOX:
            hidden, widget = self.checkbox(options, attrs)
            label = self.label(options, hidden=hidden, input_html=widget) if nested else self.label(options)
            widget = "" if nested else hidden + widget
        else:
            widget = self.widget(options, attrs)
            label = self.label(options)

        widget = self.input_group(options, widget)

        group = self.templater.format(
            group_template_name(options.type, self.templater.get),
            {
                "input": widget,
                "label": label,
                "error": error,
                "help": options.help,
                "templateVars": options.template_vars,
            },
        )
        markup = self.container(options, group, error)
        logger.debug(f"Rendered {options.type} control {options.name}")
        return markup

    # =========================================================================
    # Pieces
    # =========================================================================

    def input_attributes(self, options: ResolvedOptions) -> dict[str, Any]:
        """Input attributes with form-control, error and required state applied."""
        attrs = dict(options.attrs)
        if options.inject_form_control and options.type not in NON_TEXT_TYPES:
            attrs = inject_classes("form-control", attrs)
        if options.has_error:
            attrs = inject_classes(options.inject_error_class or self.error_class, attrs)
            attrs["aria-invalid"] = "true"
        if options.required:
            attrs["required"] = True
        return attrs

    def widget(self, options: ResolvedOptions, attrs: dict[str, Any]) -> str:
        """Widget markup for every type except single checkboxes."""
        if options.type == "multicheckbox":
            return self.multicheckbox(options, attrs)
        if options.type == "radio":
            return self.radio(options, attrs)
        if options.type == "select":
            return self.select(options, attrs)
        if options.type == "textarea":
            return self._format(
                "textarea",
                name=input_name(options.name),
                value=escape_html(_text(options.value)),
                attrs=self._attrs(attrs, exclude=("value", *_CONTROL_KEYS)),
            )

        if options.value is not None:
            attrs["value"] = options.value
        return self._format(
            "input",
            type=options.type,
            name=input_name(options.name),
            attrs=self._attrs(attrs, exclude=_CONTROL_KEYS),
        )

    def checkbox(self, options: ResolvedOptions, attrs: dict[str, Any]) -> tuple[str, str]:
        """Hidden fallback field and checkbox input of a single checkbox."""
        name = input_name(options.name)
        hidden = ""
        if _hidden_field(attrs):
            hidden = self._format("hidden", name=name, value="0", attrs="")
        value = options.value if options.value is not None else "1"
        widget = self._format(
            "checkbox", name=name, value=escape_html(_text(value)), attrs=self._attrs(attrs, exclude=_CONTROL_KEYS)
        )
        return hidden, widget

    def select(self, options: ResolvedOptions, attrs: dict[str, Any]) -> str:
        """Select box with options and optgroups."""
        selected = _selected_values(options.value)
        content = ""
        empty = attrs.get("empty")
        if empty:
            content += self._format("option", value="", attrs="", text=escape_html(empty if isinstance(empty, str) else ""))
        content += self._options(normalize_choices(options.options), selected)

        template = "selectMultiple" if options.multiple else "select"
        return self._format(
            template,
            name=input_name(options.name),
            content=content,
            attrs=self._attrs(attrs, exclude=("value", "multiple", *_CONTROL_KEYS)),
        )

    def _options(self, choices: list[Choice], selected: set[str]) -> str:
        parts = []
        for choice in choices:
            if choice.is_group:
                parts.append(
                    self._format(
                        "optgroup",
                        label=escape_html(choice.text),
                        attrs=self._attrs(choice.attrs),
                        content=self._options(choice.children, selected),
                    )
                )
                continue
            attrs = dict(choice.attrs)
            if choice.value in selected:
                attrs["selected"] = True
            parts.append(
                self._format(
                    "option",
                    value=escape_html(choice.value),
                    attrs=self._attrs(attrs),
                    text=escape_html(choice.text),
                )
            )
        return "".join(parts)

    def radio(self, options: ResolvedOptions, attrs: dict[str, Any]) -> str:
        """Radio button set, one wrapper per choice."""
        name = input_name(options.name)
        selected = _selected_values(options.value)
        hidden = ""
        if _hidden_field(attrs):
            hidden = self._format("hidden", name=name, value="", attrs="")

        parts = [hidden]
        used_ids: set[str] = set()
        for choice in normalize_choices(options.options):
            _, choice_label = self._choice_markup("radio", name, choice, attrs, selected, used_ids)
            parts.append(
                self._format("radioWrapper", label=choice_label, hidden="", templateVars=options.template_vars)
            )
        return "".join(parts)

    def multicheckbox(self, options: ResolvedOptions, attrs: dict[str, Any]) -> str:
        """Checkbox set for a select with `multiple="checkbox"`."""
        name = input_name(options.name)
        selected = _selected_values(options.value)
        hidden = ""
        if _hidden_field(attrs):
            hidden = self._format("hidden", name=name, value="", attrs="")
        return hidden + self._checkbox_items(
            normalize_choices(options.options), f"{name}[]", attrs, selected, options.template_vars, set()
        )

    def _checkbox_items(
        self,
        choices: list[Choice],
        name: str,
        attrs: dict[str, Any],
        selected: set[str],
        template_vars: Mapping[str, Any],
        used_ids: set[str],
    ) -> str:
        parts = []
        for choice in choices:
            if choice.is_group:
                content = self._format("multicheckboxTitle", text=escape_html(choice.text))
                content += self._checkbox_items(choice.children, name, attrs, selected, template_vars, used_ids)
                parts.append(self._format("multicheckboxWrapper", content=content))
                continue
            _, choice_label = self._choice_markup("checkbox", name, choice, attrs, selected, used_ids)
            parts.append(self._format("checkboxWrapper", label=choice_label, templateVars=template_vars))
        return "".join(parts)

    def _choice_markup(
        self,
        template: str,
        name: str,
        choice: Choice,
        attrs: Mapping[str, Any],
        selected: set[str],
        used_ids: set[str],
    ) -> tuple[str, str]:
        """Input and nesting label of one radio or checkbox choice.

        Values that map to an id already used in the set get the set's
        running position appended.
        """
        base_id = f"{attrs['id']}-{dom_id(choice.value)}" if choice.value else f"{attrs['id']}-"
        choice_id = base_id
        position = len(used_ids)
        while choice_id in used_ids:
            choice_id = f"{base_id}-{position}"
            position += 1
        used_ids.add(choice_id)
        input_attrs = {
            k: v for k, v in attrs.items() if k not in ("id", "value", *_CONTROL_KEYS)
        }
        input_attrs.update(choice.attrs)
        input_attrs["id"] = choice_id
        if choice.value in selected:
            input_attrs["checked"] = True

        choice_input = self._format(
            template, name=name, value=escape_html(choice.value), attrs=self._attrs(input_attrs)
        )
        label_attrs = {"class": "form-check-label", "for": choice_id}
        if choice.value in selected:
            label_attrs = inject_classes("selected", label_attrs)
        choice_label = self._format(
            "nestingLabel",
            hidden="",
            input=choice_input,
            attrs=self._attrs(label_attrs),
            text=escape_html(choice.text),
        )
        return choice_input, choice_label

    def label(self, options: ResolvedOptions, hidden: str = "", input_html: str | None = None) -> str:
        """Control label; nests the input when `input_html` is given."""
        if options.label is False:
            return ""

        label = dict(options.label)
        text = label.pop("text", None)
        template_vars = label.pop("templateVars", {})
        if text is None:
            text = humanize(options.name)
        if options.group_id is None or "id" not in label:
            label.setdefault("for", options.attrs["id"])
        escape = label.pop("escape", True)
        text = escape_html(str(text)) if escape else str(text)

        if input_html is not None:
            return self.templater.format(
                "nestingLabel",
                {
                    "hidden": hidden,
                    "input": input_html,
                    "attrs": self._attrs(label),
                    "text": text,
                    "templateVars": template_vars,
                },
            )
        return self.templater.format(
            "label", {"attrs": self._attrs(label), "text": text, "templateVars": template_vars}
        )

    def error(self, options: ResolvedOptions) -> str:
        """Error feedback markup, empty without an error."""
        if not options.has_error:
            return ""
        messages = options.error
        if isinstance(messages, (list, tuple)):
            if len(messages) == 1:
                content = escape_html(str(messages[0]))
            else:
                items = "".join(self._format("errorItem", text=escape_html(str(m))) for m in messages)
                content = self._format("errorList", content=items)
        else:
            content = escape_html(str(messages))
        return self._format("error", content=content, id=f"{options.attrs['id']}-error")

    def input_group(self, options: ResolvedOptions, widget: str) -> str:
        """Wrap the widget with prepend/append addons when present."""
        if not options.prepend and not options.append:
            return widget
        attrs = {"class": "input-group"}
        if options.has_error:
            attrs = inject_classes("has-validation", attrs)
        return self._format(
            "inputGroupContainer",
            attrs=self._attrs(attrs),
            prepend=self._addons(options.prepend),
            content=widget,
            append=self._addons(options.append),
        )

    def _addons(self, addons: Any) -> str:
        if not addons:
            return ""
        if isinstance(addons, str):
            addons = [addons]
        parts = []
        for addon in addons:
            addon = str(addon)
            # Markup such as buttons is placed as-is
            if addon.lstrip().startswith("<"):
                parts.append(addon)
            else:
                parts.append(self._format("inputGroupText", content=addon))
        return "".join(parts)

    def container(self, options: ResolvedOptions, content: str, error: str = "") -> str:
        """Wrap a rendered group in its container template."""
        name = container_template_name(options.type, self.templater.get, options.has_error)
        return self.templater.format(
            name,
            {
                "content": content,
                "error": error,
                "required": " required" if options.required else "",
                "type": options.type,
                "help": options.help,
                "templateVars": options.template_vars,
            },
        )


def _text(value: Any) -> str:
    if value is None or value is False:
        return ""
    if value is True:
        return "1"
    return str(value)


def _hidden_field(attrs: Mapping[str, Any]) -> bool:
    value = attrs.get("hiddenField", attrs.get("hidden-field", True))
    return value not in (False, "false", "0", 0)


__all__ = ["NON_TEXT_TYPES", "Choice", "ControlRenderer", "normalize_choices"]
