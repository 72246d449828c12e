"""Container option composition.

Turns a control's `container` option into the `containerClass` and
`containerAttrs` template variables consumed by the container templates.
"""

from collections.abc import Callable, Mapping
from typing import Any

from formkit.align import AlignmentMode
from formkit.classes import inject_classes
from formkit.templater import format_attributes as _format_attributes

# Spacing class given to every typed control container outside inline forms
CONTAINER_SPACING_CLASS = "mb-3"


def compose_container(
    container: Mapping[str, Any] | None,
    *,
    typed: bool,
    alignment: AlignmentMode | str | None,
    format_attributes: Callable[[Mapping[str, Any]], str] = _format_attributes,
) -> dict[str, str]:
    """Build container template variables.

    Args:
        container: Container attributes; `class` is prepended to the
            template's own classes instead of replacing them.
        typed: Whether the control has a type (submit buttons do not).
        alignment: Alignment of the enclosing form.
        format_attributes: Attribute serializer for the remaining attributes.

    Returns:
        Mapping with `containerClass` (with a trailing space) and/or
        `containerAttrs`; empty when there is nothing to emit.

    Example:
        >>> compose_container({"id": "wrap"}, typed=True, alignment="default")
        {'containerClass': 'mb-3 ', 'containerAttrs': ' id="wrap"'}
    """
    options = dict(container) if container else None

    if typed and alignment != AlignmentMode.INLINE:
        options = inject_classes(CONTAINER_SPACING_CLASS, options)

    if options is None:
        return {}

    template_vars: dict[str, str] = {}
    if "class" in options:
        container_class = options.pop("class")
        if container_class is not None:
            template_vars["containerClass"] = f"{container_class} "

    if options:
        template_vars["containerAttrs"] = format_attributes(options)

    return template_vars


__all__ = ["CONTAINER_SPACING_CLASS", "compose_container"]
