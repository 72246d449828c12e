"""Named-placeholder template engine."""

from .lib import (
    BOOLEAN_ATTRIBUTES,
    StringTemplater,
    TemplateError,
    TemplateStackError,
    escape_html,
    format_attributes,
    load_templates_file,
)

__all__ = [
    "BOOLEAN_ATTRIBUTES",
    "StringTemplater",
    "TemplateError",
    "TemplateStackError",
    "escape_html",
    "format_attributes",
    "load_templates_file",
]
