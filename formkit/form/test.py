"""Unit tests for the form builder."""

import json

import pytest

from formkit.align import AlignmentError, AlignmentStateError
from formkit.config import FormSettings
from formkit.templater import TemplateStackError

from .lib import FormBuilder
from .models import FormDocument


@pytest.fixture
def builder() -> FormBuilder:
    return FormBuilder()


# =============================================================================
# Lifecycle
# =============================================================================


class TestCreate:
    """Tests for opening forms."""

    @pytest.mark.unit
    def test_default_form(self, builder):
        assert builder.create() == '<form method="post" accept-charset="utf-8" role="form">'

    @pytest.mark.unit
    def test_horizontal_form(self, builder):
        markup = builder.create(align="horizontal", action="/save")
        assert markup == (
            '<form action="/save" class="form-horizontal" method="post" accept-charset="utf-8" role="form">'
        )

    @pytest.mark.unit
    def test_inline_form(self, builder):
        markup = builder.create(align="inline")
        assert 'class="form-inline row g-3 align-items-center"' in markup

    @pytest.mark.unit
    def test_alignment_detected_from_class(self, builder):
        builder.create(class_="form-horizontal mt-2")
        assert builder.context.mode.value == "horizontal"

    @pytest.mark.unit
    def test_grid_as_align_forces_horizontal(self, builder):
        builder.create(align={"left": 3, "middle": 9})
        markup = builder.control("email")
        assert 'class="col-form-label col-md-3"' in markup
        assert '<div class="col-md-9">' in markup

    @pytest.mark.unit
    def test_invalid_alignment(self, builder):
        with pytest.raises(AlignmentError):
            builder.create(align="diagonal")
        assert not builder.context.is_open
        assert builder.templater.depth == 0

    @pytest.mark.unit
    def test_double_create_raises(self, builder):
        builder.create()
        with pytest.raises(AlignmentStateError):
            builder.create()

    @pytest.mark.unit
    def test_form_templates_apply_until_end(self, builder):
        builder.create(templates={"inputContainer": "<p>{{content}}</p>"})
        assert builder.control("email").startswith("<p>")
        builder.end()
        builder.create()
        assert builder.control("email").startswith("<div")


class TestEnd:
    """Tests for closing forms."""

    @pytest.mark.unit
    def test_end_resets_state(self, builder):
        builder.create(align="inline")
        assert builder.end() == "</form>"
        assert not builder.context.is_open
        assert builder.templater.depth == 0

    @pytest.mark.unit
    def test_controls_after_end_raise(self, builder):
        builder.create()
        builder.end()
        with pytest.raises(AlignmentStateError):
            builder.control("email")

    @pytest.mark.unit
    def test_control_without_form_raises(self, builder):
        with pytest.raises(AlignmentStateError):
            builder.control("email")
        with pytest.raises(AlignmentStateError):
            builder.submit()

    @pytest.mark.unit
    def test_end_clears_alignment_when_layer_removal_fails(self, builder):
        builder.create(align="horizontal")
        builder.templater.pop()
        with pytest.raises(TemplateStackError):
            builder.end()
        assert not builder.context.is_open
        builder.create(align="inline")
        assert builder.context.mode.value == "inline"

    @pytest.mark.unit
    def test_form_context_manager(self, builder):
        with builder.form(align="horizontal") as form:
            form.control("email", type="email")
            form.submit("Save")
        assert form.html.startswith('<form class="form-horizontal"')
        assert form.html.endswith("</form>")
        assert not builder.context.is_open

    @pytest.mark.unit
    def test_form_context_manager_closes_on_error(self, builder):
        with pytest.raises(RuntimeError):
            with builder.form(align="inline"):
                raise RuntimeError("boom")
        assert not builder.context.is_open
        assert builder.templater.depth == 0


# =============================================================================
# Elements
# =============================================================================


class TestControl:
    """Tests for control rendering through the builder."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "options",
        [
            {"type": "text"},
            {"type": "email"},
            {"type": "number"},
            {"type": "date"},
            {"type": "range"},
            {"type": "textarea"},
            {"type": "hidden"},
            {"type": "checkbox"},
            {"type": "select", "options": {"a": "A"}},
            {"type": "radio", "options": {"a": "A"}},
            {"type": "select", "multiple": "checkbox", "options": {"a": "A"}},
        ],
        ids=lambda o: o["type"] + ("-checkbox" if o.get("multiple") else ""),
    )
    def test_every_type_renders_through_control(self, builder, options):
        builder.create()
        markup = builder.control("user.field", **options)
        assert 'name="user[field]' in markup

    @pytest.mark.unit
    def test_inline_control_is_wrapped(self, builder):
        builder.create(align="inline")
        assert builder.control("q") == (
            '<div class="col-auto"><div class="form-group text">'
            '<label class="form-label visually-hidden" for="q">Q</label>'
            '<input type="text" name="q" id="q" class="form-control">'
            "</div></div>"
        )

    @pytest.mark.unit
    def test_inline_error_uses_tooltip(self, builder):
        builder.create(align="inline")
        markup = builder.control("q", error="Required")
        assert 'class="form-group position-relative text is-invalid"' in markup
        assert '<div class="invalid-tooltip">Required</div>' in markup

    @pytest.mark.unit
    def test_per_call_templates_do_not_leak(self, builder):
        builder.create()
        first = builder.control("a", templates={"inputContainer": "<p>{{content}}</p>"})
        second = builder.control("b")
        assert first.startswith("<p>")
        assert second.startswith('<div class="mb-3 form-group text">')
        assert builder.resolver.scope_depth == 0

    @pytest.mark.unit
    def test_scopes_released_when_rendering_fails(self, builder, monkeypatch):
        builder.create()

        def fail(options):
            raise RuntimeError("render failed")

        monkeypatch.setattr(builder.renderer, "render", fail)
        with pytest.raises(RuntimeError):
            builder.control("a", type="checkbox", templates={"checkboxContainer": "{{content}}"})
        assert builder.resolver.scope_depth == 0
        assert builder.templater.depth == 1

    @pytest.mark.unit
    def test_class_keyword(self, builder):
        builder.create()
        assert 'class="wide form-control"' in builder.control("a", class_="wide")

    @pytest.mark.unit
    def test_numeric_tooltip_and_id(self, builder):
        builder.create()
        markup = builder.control("age", type="number", tooltip=5, id=7)
        assert 'title="5"' in markup
        assert 'id="7"' in markup
        assert 'for="7"' in markup

    @pytest.mark.unit
    def test_settings_feedback_style(self):
        builder = FormBuilder(FormSettings(feedback_style="tooltip"))
        builder.create()
        assert "invalid-tooltip" in builder.control("a", error="Bad")


class TestButtons:
    """Tests for submit and button."""

    @pytest.mark.unit
    def test_submit_default(self, builder):
        builder.create()
        assert builder.submit("Save") == (
            '<div class="submit"><input type="submit" class="btn btn-primary" value="Save"></div>'
        )

    @pytest.mark.unit
    def test_submit_default_caption_and_style(self, builder):
        builder.create()
        markup = builder.submit(class_="outline-danger")
        assert 'class="btn btn-outline-danger" value="Submit"' in markup

    @pytest.mark.unit
    def test_submit_container(self, builder):
        builder.create()
        markup = builder.submit("Go", container={"class": "mt-2", "id": "actions"})
        assert markup.startswith('<div id="actions" class="mt-2 submit">')

    @pytest.mark.unit
    def test_horizontal_submit_is_offset(self, builder):
        builder.create(align="horizontal")
        assert builder.submit("Save") == (
            '<div class="form-group row"><div class="offset-md-2 col-md-10">'
            '<input type="submit" class="btn btn-primary" value="Save"></div></div>'
        )

    @pytest.mark.unit
    def test_offset_class_override(self):
        builder = FormBuilder(FormSettings(offset_grid_class="col-12"))
        builder.create(align="horizontal")
        assert '<div class="col-12">' in builder.submit("Save")

    @pytest.mark.unit
    def test_inline_submit_is_wrapped(self, builder):
        builder.create(align="inline")
        assert builder.submit("Go").startswith('<div class="col-auto"><div class="submit">')

    @pytest.mark.unit
    def test_button(self, builder):
        builder.create()
        assert builder.button("Go & see") == '<button type="submit">Go &amp; see</button>'
        assert builder.button("Reset", type="reset") == '<button type="reset">Reset</button>'


class TestStaticControl:
    """Tests for static_control."""

    @pytest.mark.unit
    def test_with_hidden_field(self, builder):
        builder.create()
        assert builder.static_control("user.name", "Bob <3") == (
            '<p class="form-control-plaintext">Bob &lt;3</p>'
            '<input type="hidden" name="user[name]" value="Bob &lt;3" id="user-name">'
        )

    @pytest.mark.unit
    def test_without_hidden_field(self, builder):
        builder.create()
        assert builder.static_control("x", "1", hidden_field=False) == (
            '<p class="form-control-plaintext">1</p>'
        )


# =============================================================================
# Configuration and documents
# =============================================================================


class TestConfiguration:
    """Tests for settings-driven builders."""

    @pytest.mark.unit
    def test_templates_file(self, tmp_path):
        path = tmp_path / "templates.json"
        path.write_text(json.dumps({"formEnd": "</form><!-- end -->"}))
        builder = FormBuilder(FormSettings(templates_file=path))
        builder.create()
        assert builder.end() == "</form><!-- end -->"

    @pytest.mark.unit
    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("FORMKIT_ALIGN", "horizontal")
        monkeypatch.setenv("FORMKIT_GRID_LEFT", "4")
        monkeypatch.setenv("FORMKIT_GRID_MIDDLE", "8")
        builder = FormBuilder.from_environment()
        builder.create()
        assert 'class="col-form-label col-md-4"' in builder.control("a")

    @pytest.mark.unit
    def test_custom_template_set(self):
        settings = FormSettings(template_set={"inline": {"elementWrapper": "<span>{{content}}</span>"}})
        builder = FormBuilder(settings)
        builder.create(align="inline")
        assert builder.button("Go").startswith("<span><button")


class TestRenderDocument:
    """Tests for whole-document rendering."""

    @pytest.mark.unit
    def test_document(self, builder):
        document = FormDocument.model_validate(
            {
                "align": "horizontal",
                "attrs": {"action": "/signup"},
                "controls": [
                    {"name": "email", "type": "email", "required": True},
                    {"name": "agree", "type": "checkbox"},
                ],
                "submit": "Sign up",
            }
        )
        markup = builder.render_document(document)
        assert markup.startswith('<form action="/signup" class="form-horizontal"')
        assert 'name="email"' in markup
        assert 'name="agree"' in markup
        assert 'value="Sign up"' in markup
        assert markup.endswith("</form>")
        assert not builder.context.is_open

    @pytest.mark.unit
    def test_submit_options(self):
        document = FormDocument.model_validate(
            {"submit": {"caption": "Go", "options": {"class": "success"}}}
        )
        assert document.submit.options == {"class": "success"}
