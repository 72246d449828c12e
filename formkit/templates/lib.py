"""Bootstrap template sets and their layering.

Templates are resolved in three layers, later layers winning key by key:

1. BASE_TEMPLATES, installed when the templater is created.
2. The alignment overlay (ALIGNMENT_TEMPLATES[mode]) plus any form-level
   templates, pushed when a form opens and popped when it closes.
3. Per-control overrides, pushed for one control call through a
   `TemplateScope` and popped when that call returns or fails.

Horizontal overlay patterns contain a single `%s` slot that is filled with
grid classes once per form open (see GRID_SLOTS).
"""

from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass
from itertools import count
from pathlib import Path
from typing import Any

from formkit.align import AlignmentMode, AlignmentState
from formkit.core.log import get_logger
from formkit.grid import GridPosition, GridSpec, grid_class, offset_group_class
from formkit.templater import StringTemplater, load_templates_file

logger = get_logger("templates")

# =============================================================================
# Template Sets
# =============================================================================

BASE_TEMPLATES: dict[str, str] = {
    # Form elements
    "formStart": "<form{{attrs}}>",
    "formEnd": "</form>",
    "button": "<button{{attrs}}>{{text}}</button>",
    "inputSubmit": '<input type="{{type}}"{{attrs}}>',
    "submitContainer": '<div{{containerAttrs}} class="{{containerClass}}submit">{{content}}</div>',
    "staticControl": '<p class="form-control-plaintext">{{content}}</p>',
    # Widgets
    "input": '<input type="{{type}}" name="{{name}}"{{attrs}}>',
    "textarea": '<textarea name="{{name}}"{{attrs}}>{{value}}</textarea>',
    "select": '<select name="{{name}}"{{attrs}}>{{content}}</select>',
    "selectMultiple": '<select name="{{name}}[]" multiple="multiple"{{attrs}}>{{content}}</select>',
    "option": '<option value="{{value}}"{{attrs}}>{{text}}</option>',
    "optgroup": '<optgroup label="{{label}}"{{attrs}}>{{content}}</optgroup>',
    "checkbox": '<input type="checkbox" name="{{name}}" value="{{value}}"{{attrs}}>',
    "radio": '<input type="radio" name="{{name}}" value="{{value}}"{{attrs}}>',
    "hidden": '<input type="hidden" name="{{name}}" value="{{value}}"{{attrs}}>',
    "inputGroupContainer": "<div{{attrs}}>{{prepend}}{{content}}{{append}}</div>",
    "inputGroupText": '<span class="input-group-text">{{content}}</span>',
    # Feedback
    "error": '<div class="invalid-feedback">{{content}}</div>',
    "errorTooltip": '<div class="invalid-tooltip">{{content}}</div>',
    "errorList": "<ul>{{content}}</ul>",
    "errorItem": "<li>{{text}}</li>",
    "help": '<small{{attrs}} class="d-block form-text text-muted">{{content}}</small>',
    "tooltip": '<span data-bs-toggle="tooltip" title="{{content}}" class="fas fa-info-circle"></span>',
    # Labels
    "label": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
    "nestingLabel": "{{hidden}}{{input}}<label{{attrs}}>{{text}}{{tooltip}}</label>",
    "nestingLabelNestedInput": "{{hidden}}<label{{attrs}}>{{input}}{{text}}{{tooltip}}</label>",
    "datetimeLabel": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
    "radioLabel": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
    "multicheckboxLabel": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
    # Groups
    "formGroup": "{{label}}{{input}}",
    "checkboxFormGroup": "{{input}}{{label}}",
    # Containers
    "inputContainer": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group {{type}}{{required}}">'
        "{{content}}{{help}}</div>"
    ),
    "inputContainerError": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group '
        '{{formGroupPosition}}{{type}}{{required}} is-invalid">'
        "{{content}}{{error}}{{help}}</div>"
    ),
    "datetimeContainer": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group {{type}}{{required}}">'
        "{{content}}{{help}}</div>"
    ),
    "datetimeContainerError": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group '
        '{{formGroupPosition}}{{type}}{{required}} is-invalid">'
        "{{content}}{{error}}{{help}}</div>"
    ),
    "checkboxContainer": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group form-check{{variant}} '
        '{{type}}{{required}}">{{content}}{{help}}</div>'
    ),
    "checkboxContainerError": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group form-check{{variant}} '
        '{{formGroupPosition}}{{type}}{{required}} is-invalid">{{content}}{{error}}{{help}}</div>'
    ),
    "checkboxInlineContainer": (
        '<div{{containerAttrs}} class="{{containerClass}}form-check{{variant}} '
        'form-check-inline {{type}}{{required}}">{{content}}</div>'
    ),
    "checkboxInlineContainerError": (
        '<div{{containerAttrs}} class="{{containerClass}}form-check{{variant}} '
        'form-check-inline {{type}}{{required}} is-invalid">{{content}}</div>'
    ),
    "radioContainer": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group {{type}}{{required}}" '
        'role="group" aria-labelledby="{{groupId}}">{{content}}{{help}}</div>'
    ),
    "radioContainerError": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group '
        '{{formGroupPosition}}{{type}}{{required}} is-invalid" '
        'role="group" aria-labelledby="{{groupId}}">{{content}}{{error}}{{help}}</div>'
    ),
    "multicheckboxContainer": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group {{type}}{{required}}" '
        'role="group" aria-labelledby="{{groupId}}">{{content}}{{help}}</div>'
    ),
    "multicheckboxContainerError": (
        '<div{{containerAttrs}} class="{{containerClass}}form-group '
        '{{formGroupPosition}}{{type}}{{required}} is-invalid" '
        'role="group" aria-labelledby="{{groupId}}">{{content}}{{error}}{{help}}</div>'
    ),
    # Option wrappers
    "checkboxWrapper": '<div class="form-check{{variant}}">{{label}}</div>',
    "checkboxInlineWrapper": '<div class="form-check{{variant}} form-check-inline">{{label}}</div>',
    "radioWrapper": '<div class="form-check">{{hidden}}{{label}}</div>',
    "radioInlineWrapper": '<div class="form-check form-check-inline">{{label}}</div>',
    "multicheckboxWrapper": '<fieldset class="mb-3 form-group">{{content}}</fieldset>',
    "multicheckboxTitle": '<legend class="col-form-label pt-0">{{text}}</legend>',
}

ALIGNMENT_TEMPLATES: dict[AlignmentMode, dict[str, str]] = {
    AlignmentMode.DEFAULT: {},
    AlignmentMode.INLINE: {
        "elementWrapper": '<div class="col-auto">{{content}}</div>',
        "help": '<small{{attrs}} class="visually-hidden form-text text-muted">{{content}}</small>',
        "checkboxInlineContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-check{{variant}} '
            '{{type}}{{required}}">{{content}}{{help}}</div>'
        ),
        "checkboxInlineContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-check{{variant}} '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid">{{content}}{{error}}{{help}}</div>'
        ),
        "datetimeContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group '
            '{{formGroupPosition}}{{type}}{{required}}">{{content}}{{help}}</div>'
        ),
        "datetimeContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid">{{content}}{{error}}{{help}}</div>'
        ),
        "datetimeLabel": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
        "radioContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group '
            '{{formGroupPosition}}{{type}}{{required}}" role="group" '
            'aria-labelledby="{{groupId}}">{{content}}{{help}}</div>'
        ),
        "radioContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid" role="group" '
            'aria-labelledby="{{groupId}}">{{content}}{{error}}{{help}}</div>'
        ),
        "radioLabel": "<span{{attrs}}>{{text}}{{tooltip}}</span>",
        "multicheckboxContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group d-flex '
            '{{formGroupPosition}}{{type}}{{required}}" role="group" '
            'aria-labelledby="{{groupId}}">{{content}}{{help}}</div>'
        ),
        "multicheckboxContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group d-flex '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid" role="group" '
            'aria-labelledby="{{groupId}}">{{content}}{{error}}{{help}}</div>'
        ),
        "multicheckboxLabel": "<span{{attrs}}>{{text}}{{tooltip}}</span>",
        "multicheckboxWrapper": '<fieldset class="form-group">{{content}}</fieldset>',
        "multicheckboxTitle": '<legend class="col-form-label float-none pt-0">{{text}}</legend>',
    },
    AlignmentMode.HORIZONTAL: {
        "label": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
        "formGroup": '{{label}}<div class="%s">{{input}}{{error}}{{help}}</div>',
        "checkboxFormGroup": (
            '<div class="%s"><div class="form-check{{variant}}">'
            "{{input}}{{label}}{{error}}{{help}}</div></div>"
        ),
        "checkboxInlineFormGroup": (
            '<div class="%s"><div class="form-check{{variant}} form-check-inline">'
            "{{input}}{{label}}</div></div>"
        ),
        "submitContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row">'
            '<div class="%s">{{content}}</div></div>'
        ),
        "datetimeContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{type}}{{required}}">{{content}}</div>'
        ),
        "datetimeContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid">{{content}}</div>'
        ),
        "datetimeLabel": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
        "inputContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{type}}{{required}}">{{content}}</div>'
        ),
        "inputContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid">{{content}}</div>'
        ),
        "checkboxContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{type}}{{required}}">{{content}}</div>'
        ),
        "checkboxContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid">{{content}}</div>'
        ),
        "radioContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{type}}{{required}}" role="group" aria-labelledby="{{groupId}}">{{content}}</div>'
        ),
        "radioContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid" role="group" '
            'aria-labelledby="{{groupId}}">{{content}}</div>'
        ),
        "radioLabel": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
        "multicheckboxContainer": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{type}}{{required}}" role="group" aria-labelledby="{{groupId}}">{{content}}</div>'
        ),
        "multicheckboxContainerError": (
            '<div{{containerAttrs}} class="{{containerClass}}form-group row '
            '{{formGroupPosition}}{{type}}{{required}} is-invalid" role="group" '
            'aria-labelledby="{{groupId}}">{{content}}</div>'
        ),
        "multicheckboxLabel": "<label{{attrs}}>{{text}}{{tooltip}}</label>",
    },
}

# Horizontal templates whose `%s` slot takes a grid class, keyed by slot kind:
# a grid position, or "offset" for the left offset plus middle column.
GRID_SLOTS: dict[str, str] = {
    "label": GridPosition.LEFT.value,
    "datetimeLabel": GridPosition.LEFT.value,
    "radioLabel": GridPosition.LEFT.value,
    "multicheckboxLabel": GridPosition.LEFT.value,
    "formGroup": GridPosition.MIDDLE.value,
    "checkboxFormGroup": "offset",
    "checkboxInlineFormGroup": "offset",
    "submitContainer": "offset",
}

_SLOT = "%s"


# =============================================================================
# Layer Helpers
# =============================================================================


def merge_layers(*layers: Mapping[str, str] | None) -> dict[str, str]:
    """Merge template layers; later layers win key by key.

    Example:
        >>> merge_layers({"a": "1", "b": "1"}, {"b": "2"}, None, {"c": "3"})
        {'a': '1', 'b': '2', 'c': '3'}
    """
    merged: dict[str, str] = {}
    for layer in layers:
        if layer:
            merged.update(layer)
    return merged


def fill_grid_slots(
    templates: Mapping[str, str],
    grid: GridSpec | Mapping[str, Any] | None,
    offset_grid_class: str | None = None,
) -> dict[str, str]:
    """Fill the single `%s` slot of horizontal templates with grid classes.

    Args:
        templates: Overlay templates.
        grid: Grid of the open form.
        offset_grid_class: Replacement for the computed offset group class.

    Returns:
        New mapping; templates without exactly one slot are left unchanged.
    """
    offset = offset_grid_class if offset_grid_class is not None else offset_group_class(grid)
    filled = dict(templates)
    for name, kind in GRID_SLOTS.items():
        pattern = filled.get(name)
        if pattern is None or pattern.count(_SLOT) != 1:
            continue
        value = offset if kind == "offset" else grid_class(grid, kind)
        filled[name] = pattern.replace(_SLOT, value)
    return filled


def _resolve_layer(templates: Mapping[str, str] | str | Path | None) -> dict[str, str]:
    if templates is None:
        return {}
    if isinstance(templates, (str, Path)):
        return load_templates_file(templates)
    return dict(templates)


# =============================================================================
# Resolver
# =============================================================================


class TemplateScopeError(RuntimeError):
    """Template scopes were released out of order."""


@dataclass(frozen=True)
class TemplateScope:
    """Handle for one pushed layer of per-control overrides.

    Attributes:
        serial: Unique scope number within the resolver.
        names: Template names overridden by this scope.
    """

    serial: int
    names: frozenset[str]


class TemplateSetResolver:
    """Maintains the base, alignment and per-control template layers.

    Example:
        >>> resolver = TemplateSetResolver()
        >>> with resolver.scoped({"error": "X"}):
        ...     resolver.get("error")
        'X'
        >>> resolver.get("error")
        '<div class="invalid-feedback">{{content}}</div>'
    """

    def __init__(
        self,
        templater: StringTemplater | None = None,
        template_set: Mapping[str, Mapping[str, str]] | None = None,
    ):
        """Create a resolver.

        Args:
            templater: Templater holding the base layer. A new one with
                BASE_TEMPLATES is created when omitted.
            template_set: Extra overlays keyed by alignment, merged over the
                built-in overlays template by template.
        """
        self.templater = templater if templater is not None else StringTemplater(BASE_TEMPLATES)
        self._base = self.templater.templates()
        self._overlays = {
            mode: merge_layers(overlay, (template_set or {}).get(mode.value))
            for mode, overlay in ALIGNMENT_TEMPLATES.items()
        }
        self._scopes: list[TemplateScope] = []
        self._serials = count(1)
        self._installed = False

    @property
    def scope_depth(self) -> int:
        """Number of per-control scopes currently active."""
        return len(self._scopes)

    def overlay(self, mode: AlignmentMode | str) -> dict[str, str]:
        """Raw overlay for an alignment, slots unfilled."""
        return dict(self._overlays[AlignmentMode(mode)])

    def alignment_layer(
        self,
        state: AlignmentState,
        offset_grid_class: str | None = None,
    ) -> dict[str, str]:
        """Overlay for an open form with its grid slots filled."""
        overlay = self.overlay(state.mode)
        if state.is_horizontal:
            overlay = fill_grid_slots(overlay, state.grid, offset_grid_class)
        return overlay

    def effective_templates(
        self,
        mode: AlignmentMode | str,
        grid: GridSpec | Mapping[str, Any] | None = None,
        offset_grid_class: str | None = None,
    ) -> dict[str, str]:
        """Base templates merged with the alignment overlay.

        Args:
            mode: Alignment mode.
            grid: Grid used to fill horizontal slots.
            offset_grid_class: Replacement for the computed offset class.

        Returns:
            Complete template set for a form with that alignment.
        """
        mode = AlignmentMode(mode)
        state = AlignmentState(mode, GridSpec.from_value(grid) if mode is AlignmentMode.HORIZONTAL else None)
        return merge_layers(self._base, self.alignment_layer(state, offset_grid_class))

    def install(
        self,
        state: AlignmentState,
        templates: Mapping[str, str] | str | Path | None = None,
        offset_grid_class: str | None = None,
    ) -> None:
        """Push the alignment layer for a form that is opening.

        Args:
            state: Alignment of the form.
            templates: Form-level templates (mapping or JSON file) that win
                over the alignment overlay.
            offset_grid_class: Replacement for the computed offset class.

        Raises:
            TemplateScopeError: If a form layer is already installed.
        """
        if self._installed:
            raise TemplateScopeError("A form template layer is already installed")

        layer = merge_layers(self.alignment_layer(state, offset_grid_class), _resolve_layer(templates))
        self.templater.push()
        self.templater.add(layer)
        self._installed = True
        logger.debug(f"Installed {state.mode.value} template layer ({len(layer)} templates)")

    def uninstall(self) -> None:
        """Pop the form layer; a no-op when nothing is installed."""
        if not self._installed:
            return
        try:
            while self._scopes:
                # Scopes left open by a failed control must not leak into the
                # next form.
                self.pop_scope(self._scopes[-1])
            self.templater.pop()
        finally:
            self._scopes.clear()
            self._installed = False
        logger.debug("Uninstalled form template layer")

    def push_scope(self, overrides: Mapping[str, str] | str | Path) -> TemplateScope:
        """Push per-control overrides.

        Args:
            overrides: Template mapping or path of a JSON template file.

        Returns:
            Scope handle that must be passed to `pop_scope()`.
        """
        layer = _resolve_layer(overrides)
        self.templater.push()
        self.templater.add(layer)
        scope = TemplateScope(serial=next(self._serials), names=frozenset(layer))
        self._scopes.append(scope)
        logger.debug(f"Pushed template scope {scope.serial}: {sorted(scope.names)}")
        return scope

    def pop_scope(self, scope: TemplateScope) -> None:
        """Restore the layer below `scope`.

        Raises:
            TemplateScopeError: If `scope` is not the innermost active scope.
        """
        if not self._scopes or self._scopes[-1] != scope:
            raise TemplateScopeError(
                f"Template scope {scope.serial} is not the innermost active scope"
            )
        self._scopes.pop()
        self.templater.pop()
        logger.debug(f"Popped template scope {scope.serial}")

    @contextmanager
    def scoped(
        self, overrides: Mapping[str, str] | str | Path | None
    ) -> Iterator[TemplateScope | None]:
        """Apply overrides for the duration of a block.

        Empty overrides push nothing and yield None.
        """
        if not overrides:
            yield None
            return
        scope = self.push_scope(overrides)
        try:
            yield scope
        finally:
            self.pop_scope(scope)

    def get(self, name: str) -> str | None:
        """Currently effective pattern for a name, or None."""
        return self.templater.get(name)


__all__ = [
    "ALIGNMENT_TEMPLATES",
    "BASE_TEMPLATES",
    "GRID_SLOTS",
    "TemplateScope",
    "TemplateScopeError",
    "TemplateSetResolver",
    "fill_grid_slots",
    "merge_layers",
]
