"""Field descriptors and per-type option resolution."""

from .lib import (
    FIELD_TRANSFORMS,
    POST_DISPATCH,
    ControlContext,
    container_template_name,
    group_template_name,
    label_options,
    resolve_control,
)
from .models import (
    DATETIME_TYPES,
    FieldDescriptor,
    FieldType,
    ResolvedOptions,
    dom_id,
    group_id,
    humanize,
    input_name,
)

__all__ = [
    # Models
    "DATETIME_TYPES",
    "FieldDescriptor",
    "FieldType",
    "ResolvedOptions",
    # Naming
    "dom_id",
    "group_id",
    "humanize",
    "input_name",
    # Dispatch
    "FIELD_TRANSFORMS",
    "POST_DISPATCH",
    "ControlContext",
    "label_options",
    "resolve_control",
    # Template fallbacks
    "container_template_name",
    "group_template_name",
]
