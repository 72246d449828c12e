"""Input document describing a whole form."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from formkit.fields import FieldDescriptor


class SubmitButton(BaseModel):
    """Submit button of a form document.

    Attributes:
        caption: Button caption; "Submit" when omitted.
        options: Button attributes and `container` option.
    """

    caption: str | None = Field(default=None, description="Button caption")
    options: dict[str, Any] = Field(default_factory=dict, description="Button attributes")


class FormDocument(BaseModel):
    """A form and its controls, as read by the `render` command.

    Example:
        >>> doc = FormDocument.model_validate({
        ...     "align": "horizontal",
        ...     "controls": [{"name": "email", "type": "email"}],
        ...     "submit": "Save",
        ... })
        >>> doc.submit.caption
        'Save'
    """

    align: str | dict[str, Any] | None = Field(default=None, description="Alignment or grid table")
    grid: dict[str, Any] | None = Field(default=None, description="Explicit horizontal grid")
    templates: dict[str, str] | str | None = Field(default=None, description="Form-level templates")
    attrs: dict[str, Any] = Field(default_factory=dict, description="Form element attributes")
    controls: list[FieldDescriptor] = Field(default_factory=list, description="Controls in order")
    submit: SubmitButton | None = Field(default=None, description="Submit button")

    @field_validator("submit", mode="before")
    @classmethod
    def _caption_shorthand(cls, value: Any) -> Any:
        if isinstance(value, str):
            return {"caption": value}
        return value
