"""formkit: Bootstrap 5 form markup with alignment-aware controls."""

from formkit.align import AlignmentError, AlignmentMode, AlignmentStateError
from formkit.config import FormSettings
from formkit.fields import FieldDescriptor, FieldType
from formkit.form import FormBuilder, FormDocument
from formkit.templater import StringTemplater, TemplateError
from formkit.templates import TemplateScopeError, TemplateSetResolver

__all__ = [
    # Builder
    "FormBuilder",
    "FormDocument",
    "FormSettings",
    # Fields
    "FieldDescriptor",
    "FieldType",
    # Alignment
    "AlignmentMode",
    "AlignmentError",
    "AlignmentStateError",
    # Templates
    "StringTemplater",
    "TemplateSetResolver",
    "TemplateError",
    "TemplateScopeError",
]
