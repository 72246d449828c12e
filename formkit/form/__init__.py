"""Form builder and form documents."""

from .lib import DEFAULT_SUBMIT_CAPTION, FormBuilder, FormSession
from .models import FormDocument, SubmitButton

__all__ = [
    "DEFAULT_SUBMIT_CAPTION",
    "FormBuilder",
    "FormDocument",
    "FormSession",
    "SubmitButton",
]
