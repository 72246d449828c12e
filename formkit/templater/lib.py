"""String template engine used to turn resolved options into markup.

Patterns use `{{name}}` placeholders and are rendered with jinja2. Unknown
placeholders render as an empty string, so a pattern can reference
optional variables such as `{{containerAttrs}}` or `{{formGroupPosition}}`
without every caller having to supply them.

Values are inserted as-is: callers pass markup that is already built and
escape user text with `escape_html()`.

The templater keeps a stack of template layers: `push()` snapshots the
current set and `pop()` restores it, which is how form-level and per-call
overrides are scoped.
"""

import json
from collections.abc import Iterable, Mapping
from functools import lru_cache
from pathlib import Path
from typing import Any

import jinja2
from markupsafe import escape

from formkit.core.log import get_logger

logger = get_logger("templater")

# Patterns hold prebuilt markup, so autoescaping stays off
_environment = jinja2.Environment(autoescape=False, keep_trailing_newline=True)

# Attributes rendered in minimized form (`required="required"`) when truthy
BOOLEAN_ATTRIBUTES = frozenset(
    {
        "allowfullscreen",
        "async",
        "autofocus",
        "autoplay",
        "checked",
        "compact",
        "controls",
        "declare",
        "default",
        "defaultchecked",
        "defaultmuted",
        "defaultselected",
        "defer",
        "disabled",
        "enabled",
        "formnovalidate",
        "hidden",
        "indeterminate",
        "inert",
        "ismap",
        "itemscope",
        "loop",
        "multiple",
        "muted",
        "nohref",
        "noresize",
        "noshade",
        "novalidate",
        "nowrap",
        "open",
        "pauseonexit",
        "readonly",
        "required",
        "reversed",
        "scoped",
        "seamless",
        "selected",
        "sortable",
        "truespeed",
        "typemustmatch",
        "visible",
    }
)

# Option keys that never become HTML attributes
NON_ATTRIBUTE_KEYS = frozenset({"escape", "templateVars"})


class TemplateError(LookupError):
    """Template could not be found or loaded."""


class TemplateStackError(RuntimeError):
    """Template layers were popped without a matching push."""


def load_templates_file(path: str | Path) -> dict[str, str]:
    """Read a JSON file holding a `{name: pattern}` object.

    Args:
        path: Path to the JSON file.

    Returns:
        Mapping of template name to pattern.

    Raises:
        TemplateError: If the file cannot be read or is not a mapping of
            strings.
    """
    file_path = Path(path)
    try:
        data = json.loads(file_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise TemplateError(f"Could not read templates from {file_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise TemplateError(f"Invalid JSON in template file {file_path}: {e}") from e

    if not isinstance(data, dict) or not all(
        isinstance(key, str) and isinstance(value, str) for key, value in data.items()
    ):
        raise TemplateError(
            f"Template file {file_path} must contain an object of string patterns"
        )
    return data


def escape_html(value: Any) -> str:
    """HTML-escape text for element content or attribute values.

    Example:
        >>> escape_html('<b title="x">')
        '&lt;b title=&#34;x&#34;&gt;'
    """
    return str(escape(value))


@lru_cache(maxsize=512)
def _compile(pattern: str) -> jinja2.Template:
    try:
        return _environment.from_string(pattern)
    except jinja2.TemplateSyntaxError as e:
        raise TemplateError(f"Invalid template pattern {pattern!r}: {e}") from e


def _stringify(value: Any) -> str:
    if value is None or value is False:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, Iterable):
        return "".join(_stringify(item) for item in value)
    return str(value)


def format_attributes(
    attrs: Mapping[str, Any] | None,
    exclude: Iterable[str] = (),
    escape: bool = True,
) -> str:
    """Serialize an attribute mapping to an HTML attribute string.

    Args:
        attrs: Attribute mapping. None and False values are skipped,
            sequences are space-joined (useful for `class`).
        exclude: Keys to leave out.
        escape: HTML-escape attribute values.

    Returns:
        Attribute string with a leading space (e.g. ` id="name"`), or ""
        when nothing is rendered.

    Example:
        >>> format_attributes({"id": "a", "required": True, "class": ["x", "y"]})
        ' id="a" required="required" class="x y"'
    """
    if not attrs:
        return ""

    skip = set(exclude) | NON_ATTRIBUTE_KEYS
    parts: list[str] = []
    for key, value in attrs.items():
        if key in skip or value is None or value is False:
            continue
        if key.lower() in BOOLEAN_ATTRIBUTES:
            if value is True or (isinstance(value, str) and value.lower() in (key.lower(), "1", "true")):
                parts.append(f'{key}="{key}"')
            continue
        if value is True:
            value = key
        elif isinstance(value, (list, tuple, set)):
            value = " ".join(str(item) for item in value)
        text = str(value)
        if escape:
            text = escape_html(text)
        parts.append(f'{key}="{text}"')

    return " " + " ".join(parts) if parts else ""


class StringTemplater:
    """Layered set of named `{{placeholder}}` templates.

    Example:
        >>> templater = StringTemplater({"error": "<div>{{content}}</div>"})
        >>> templater.format("error", {"content": "Required"})
        '<div>Required</div>'
        >>> templater.get("missing") is None
        True
    """

    def __init__(self, templates: Mapping[str, str] | None = None):
        self._templates: dict[str, str] = dict(templates or {})
        self._stack: list[dict[str, str]] = []

    @property
    def depth(self) -> int:
        """Number of layers pushed on top of the base set."""
        return len(self._stack)

    def templates(self) -> dict[str, str]:
        """Snapshot of the currently effective templates."""
        return dict(self._templates)

    def get(self, name: str) -> str | None:
        """Look up a pattern by name.

        Returns:
            The pattern, or None when the name is unknown.
        """
        return self._templates.get(name)

    def add(self, templates: Mapping[str, str]) -> None:
        """Install templates into the current layer, replacing by name."""
        for name, pattern in templates.items():
            if pattern is None:
                continue
            self._templates[name] = pattern

    def remove(self, name: str) -> None:
        """Remove a template from the current layer if present."""
        self._templates.pop(name, None)

    def load(self, path: str | Path) -> None:
        """Install templates read from a JSON file into the current layer."""
        templates = load_templates_file(path)
        logger.debug(f"Loaded {len(templates)} templates from {path}")
        self.add(templates)

    def push(self) -> None:
        """Save the current template set so later changes can be undone."""
        self._stack.append(dict(self._templates))

    def pop(self) -> None:
        """Restore the template set saved by the matching `push()`.

        Raises:
            TemplateStackError: If there is no layer to pop.
        """
        if not self._stack:
            raise TemplateStackError("Template stack is empty; pop() without push()")
        self._templates = self._stack.pop()

    def format(self, name: str, data: Mapping[str, Any] | None = None) -> str:
        """Render a named template.

        Args:
            name: Template name.
            data: Placeholder values. A `templateVars` entry is merged in
                as additional placeholders; explicit entries win over it.

        Returns:
            The rendered markup.

        Raises:
            TemplateError: If no template with that name exists, or its
                pattern does not render.
        """
        pattern = self.get(name)
        if pattern is None:
            raise TemplateError(f"Cannot find template named '{name}'")

        values: dict[str, Any] = {}
        if data:
            template_vars = data.get("templateVars") or {}
            values.update(template_vars)
            values.update({k: v for k, v in data.items() if k != "templateVars"})

        template = _compile(pattern)
        try:
            return template.render({key: _stringify(value) for key, value in values.items()})
        except jinja2.TemplateError as e:
            raise TemplateError(f"Could not render template '{name}': {e}") from e

    def format_attributes(
        self, attrs: Mapping[str, Any] | None, exclude: Iterable[str] = ()
    ) -> str:
        """Serialize attributes; see `format_attributes()`."""
        return format_attributes(attrs, exclude)


__all__ = [
    "BOOLEAN_ATTRIBUTES",
    "StringTemplater",
    "TemplateError",
    "TemplateStackError",
    "escape_html",
    "format_attributes",
    "load_templates_file",
]
