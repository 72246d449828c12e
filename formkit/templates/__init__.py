"""Bootstrap template sets, layering and scoped overrides."""

from .lib import (
    ALIGNMENT_TEMPLATES,
    BASE_TEMPLATES,
    GRID_SLOTS,
    TemplateScope,
    TemplateScopeError,
    TemplateSetResolver,
    fill_grid_slots,
    merge_layers,
)

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
