"""End-to-end form rendering across alignments and control types."""

import re

import pytest

from formkit import FormBuilder, FormDocument, FormSettings
from formkit.align import AlignmentStateError

CONTROL_TYPES = [
    {"type": "text"},
    {"type": "email"},
    {"type": "textarea"},
    {"type": "checkbox"},
    {"type": "radio", "options": {"a": "A", "b": "B"}},
    {"type": "select", "options": {"a": "A"}},
    {"type": "select", "multiple": "checkbox", "options": {"a": "A", "b": "B"}},
    {"type": "range"},
    {"type": "date"},
    {"type": "time"},
    {"type": "datetime-local"},
]


def _tags(markup: str) -> list[str]:
    return re.findall(r"</?([a-z]+)", markup)


def _balanced(markup: str) -> bool:
    """Check that non-void elements open and close in order."""
    void = {"input"}
    stack = []
    for match in re.finditer(r"<(/?)([a-z]+)[^>]*>", markup):
        closing, tag = match.groups()
        if tag in void:
            continue
        if closing:
            if not stack or stack.pop() != tag:
                return False
        else:
            stack.append(tag)
    return not stack


@pytest.mark.integration
@pytest.mark.parametrize("align", ["default", "horizontal", "inline"])
@pytest.mark.parametrize("options", CONTROL_TYPES, ids=lambda o: o["type"] + str(o.get("multiple", "")))
def test_every_type_renders_balanced_markup(form_builder, align, options):
    """Each control type renders well-formed markup in every alignment, with and without errors."""
    with form_builder.form(align=align) as form:
        plain = form.control("field", **options)
        invalid = form.control("other", error="Bad value", help="Help", tooltip="Tip", **options)

    assert _balanced(form.html)
    assert _balanced(plain)
    assert "is-invalid" in invalid
    assert "Bad value" in invalid
    assert "{{" not in form.html
    assert "%s" not in form.html
    assert form_builder.templater.depth == 0


@pytest.mark.integration
@pytest.mark.parametrize("align", ["default", "inline"])
def test_group_label_is_referenced_by_container(form_builder, align):
    """Radio and multicheckbox groups expose one id on the label and the container."""
    with form_builder.form(align=align) as form:
        radio = form.control("color", type="radio", options=["r", "g"])
        checks = form.control("tags", type="select", multiple="checkbox", options=["x"])

    for markup, group_id in ((radio, "color-group-label"), (checks, "tags-group-label")):
        assert f'aria-labelledby="{group_id}"' in markup
        assert f'id="{group_id}"' in markup


@pytest.mark.integration
def test_horizontal_checkbox_never_inline(form_builder):
    """Horizontal forms ignore inline=True on checkboxes."""
    form_builder.create(align="horizontal")
    markup = form_builder.control("agree", type="checkbox", inline=True)
    form_builder.end()
    assert "form-check-inline" not in markup
    assert '<div class="offset-md-2 col-md-10">' in markup


@pytest.mark.integration
def test_breakpoint_grid(form_builder):
    """Grid tables produce one class per breakpoint in the given order."""
    grid = {"sm": {"left": 12, "middle": 12}, "md": {"left": 4, "middle": 8}}
    form_builder.create(grid=grid)
    markup = form_builder.control("email") + form_builder.submit("Go")
    form_builder.end()
    assert 'class="col-form-label col-sm-12 col-md-4"' in markup
    assert '<div class="col-sm-12 col-md-8">' in markup
    assert '<div class="offset-sm-12 offset-md-4 col-sm-12 col-md-8">' in markup


@pytest.mark.integration
def test_consecutive_forms_are_independent(form_builder):
    """State from one form never leaks into the next."""
    with form_builder.form(align="inline", templates={"formEnd": "</form><!-- inline -->"}) as first:
        first.control("q")
    with form_builder.form() as second:
        second.control("q")

    assert first.html.endswith("<!-- inline -->")
    assert second.html.endswith("</form>")
    assert "col-auto" not in second.html
    assert 'class="mb-3 form-group text"' in second.html


@pytest.mark.integration
def test_templates_file_settings(templates_file):
    """A templates file installs below the alignment layer."""
    builder = FormBuilder(FormSettings(templates_file=templates_file))
    with builder.form() as form:
        form.control("email", help="Never shared")
    assert '<div class="form-text">Never shared</div>' in form.html
    assert form.html.endswith("</form><!-- formkit -->")


@pytest.mark.integration
def test_control_after_failed_form_raises(form_builder):
    """A form closed by an exception rejects further controls."""
    with pytest.raises(ValueError):
        with form_builder.form(align="horizontal"):
            raise ValueError("stop")
    with pytest.raises(AlignmentStateError):
        form_builder.control("email")


@pytest.mark.integration
def test_document_round_trip(form_builder):
    """Documents validated from JSON render like direct builder calls."""
    document = FormDocument.model_validate_json(
        '{"align": "inline", "controls": [{"name": "q", "placeholder": "Search"}], "submit": "Go"}'
    )
    markup = form_builder.render_document(document)

    with form_builder.form(align="inline") as form:
        form.control("q", placeholder="Search")
        form.submit("Go")

    assert markup == form.html
    assert _tags(markup)[0] == "form"
