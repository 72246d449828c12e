"""CSS class list helpers.

Every helper here is pure: the attribute mapping passed in is never mutated,
a new mapping is returned instead. Class values may be given as a
whitespace-separated string or as any sequence of strings.
"""

from collections.abc import Iterable, Mapping
from typing import Any

# Bootstrap button styles recognized as shorthands in a button's class list
BUTTON_STYLES: tuple[str, ...] = (
    "primary",
    "secondary",
    "success",
    "danger",
    "warning",
    "info",
    "light",
    "dark",
    "link",
)

OUTLINE_BUTTON_STYLES: tuple[str, ...] = tuple(
    f"outline-{style}" for style in BUTTON_STYLES if style != "link"
)


def split_classes(value: Any) -> list[str]:
    """Normalize a class value into a flat list of class names.

    Args:
        value: None, a whitespace-separated string, or an iterable of strings
            (which may themselves contain whitespace).

    Returns:
        List of individual class names in their original order.
    """
    if value is None or value is False:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, Iterable):
        names: list[str] = []
        for item in value:
            names.extend(split_classes(item))
        return names
    return str(value).split()


def _unique(names: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        if name not in seen:
            seen.add(name)
            result.append(name)
    return result


def inject_classes(classes: Any, attrs: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Merge classes into the `class` attribute of an attribute mapping.

    Existing classes keep their order and come first; new classes are
    appended in the order given. Classes already present are not repeated.

    Args:
        classes: Class names to inject (string or sequence of strings).
        attrs: Attribute mapping that may already carry a `class` entry.

    Returns:
        A new attribute mapping whose `class` is a space-joined string.

    Example:
        >>> inject_classes("b", {"class": "a"})
        {'class': 'a b'}
    """
    result = dict(attrs or {})
    merged = _unique(split_classes(result.get("class")) + split_classes(classes))
    result["class"] = " ".join(merged)
    return result


def has_any_class(candidates: Any, attrs: Mapping[str, Any] | Any) -> bool:
    """Check whether any candidate class is present.

    Args:
        candidates: Class names to look for.
        attrs: Either an attribute mapping with a `class` entry or a bare
            class value.

    Returns:
        True if at least one candidate is present.
    """
    existing = attrs.get("class") if isinstance(attrs, Mapping) else attrs
    present = set(split_classes(existing))
    return any(name in present for name in split_classes(candidates))


def apply_button_classes(attrs: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Expand Bootstrap style shorthands in a button's class list.

    Style shorthands (`primary`, `outline-danger`, ...) are rewritten to
    their `btn-*` form and `btn` is placed first. Buttons without any style
    get `btn-secondary`.

    Args:
        attrs: Button attribute mapping.

    Returns:
        A new attribute mapping with the expanded `class`.

    Example:
        >>> apply_button_classes({"class": "primary block"})
        {'class': 'btn btn-primary block'}
    """
    result = dict(attrs or {})
    styles = set(BUTTON_STYLES) | set(OUTLINE_BUTTON_STYLES)
    names = []
    has_style = False
    for name in split_classes(result.get("class")):
        if name in styles:
            name = f"btn-{name}"
        if name != "btn" and name.startswith("btn-"):
            has_style = True
        names.append(name)

    if not has_style:
        names.append("btn-secondary")

    result["class"] = " ".join(_unique(["btn", *names]))
    return result


__all__ = [
    "BUTTON_STYLES",
    "OUTLINE_BUTTON_STYLES",
    "apply_button_classes",
    "has_any_class",
    "inject_classes",
    "split_classes",
]
