"""Unit tests for control markup rendering."""

import pytest

from formkit.align import AlignmentMode, AlignmentState
from formkit.config import FormSettings
from formkit.fields import ControlContext, FieldDescriptor, resolve_control
from formkit.grid import GridSpec
from formkit.templates import TemplateSetResolver

from .lib import ControlRenderer, normalize_choices


def render(name: str, mode: str = "default", **options) -> str:
    """Resolve and render one control the way FormBuilder does."""
    mode = AlignmentMode(mode)
    grid = GridSpec.from_value({"left": 2, "middle": 10}) if mode is AlignmentMode.HORIZONTAL else None
    state = AlignmentState(mode, grid)
    resolver = TemplateSetResolver()
    resolver.install(state)
    renderer = ControlRenderer(resolver.templater)
    descriptor = FieldDescriptor.from_options(name, options)
    ctx = ControlContext(state, resolver.templater, FormSettings())
    with resolver.scoped(descriptor.templates):
        resolved = resolve_control(descriptor, ctx)
        with resolver.scoped(resolved.templates):
            return renderer.render(resolved)


class TestNormalizeChoices:
    """Tests for option list normalization."""

    @pytest.mark.unit
    def test_mapping(self):
        choices = normalize_choices({"r": "Red", 1: "One"})
        assert [(c.value, c.text) for c in choices] == [("r", "Red"), ("1", "One")]

    @pytest.mark.unit
    def test_scalar_list(self):
        choices = normalize_choices(["a", "b"])
        assert [(c.value, c.text) for c in choices] == [("a", "a"), ("b", "b")]

    @pytest.mark.unit
    def test_list_of_mappings_keeps_attributes(self):
        (choice,) = normalize_choices([{"value": "x", "text": "X", "disabled": True}])
        assert choice.attrs == {"disabled": True}

    @pytest.mark.unit
    def test_nested_mapping_is_group(self):
        (group,) = normalize_choices({"Warm": {"r": "Red", "o": "Orange"}})
        assert group.is_group
        assert [c.value for c in group.children] == ["r", "o"]

    @pytest.mark.unit
    def test_empty(self):
        assert normalize_choices(None) == []


class TestTextControls:
    """Tests for text-like controls."""

    @pytest.mark.unit
    def test_default_text(self):
        assert render("email", type="email") == (
            '<div class="mb-3 form-group email">'
            '<label class="form-label" for="email">Email</label>'
            '<input type="email" name="email" id="email" class="form-control">'
            "</div>"
        )

    @pytest.mark.unit
    def test_error_state(self):
        markup = render("email", type="email", error="Required")
        assert 'class="mb-3 form-group email is-invalid"' in markup
        assert 'class="form-control is-invalid" aria-invalid="true"' in markup
        assert markup.endswith('<div class="invalid-feedback">Required</div></div>')

    @pytest.mark.unit
    def test_error_list(self):
        markup = render("email", error=["Too short", "Not an address"])
        assert "<ul><li>Too short</li><li>Not an address</li></ul>" in markup

    @pytest.mark.unit
    def test_required_and_value(self):
        markup = render("user.name", required=True, value='A "quoted" name')
        assert 'name="user[name]"' in markup
        assert 'value="A &#34;quoted&#34; name"' in markup
        assert 'required="required"' in markup
        assert 'form-group text required"' in markup

    @pytest.mark.unit
    def test_horizontal_grid(self):
        assert render("email", "horizontal", type="email") == (
            '<div class="mb-3 form-group row email">'
            '<label class="col-form-label col-md-2" for="email">Email</label>'
            '<div class="col-md-10">'
            '<input type="email" name="email" id="email" class="form-control">'
            "</div></div>"
        )

    @pytest.mark.unit
    def test_horizontal_error_inside_column(self):
        markup = render("email", "horizontal", error="Bad")
        assert '<div class="invalid-feedback">Bad</div></div></div>' in markup

    @pytest.mark.unit
    def test_textarea_escapes_value(self):
        markup = render("bio", type="textarea", value="<b>hi</b>")
        assert '<textarea name="bio" id="bio" class="form-control">&lt;b&gt;hi&lt;/b&gt;</textarea>' in markup

    @pytest.mark.unit
    def test_label_text_and_disabled_label(self):
        assert '>Your email</label>' in render("email", label="Your email")
        assert "<label" not in render("email", label=False)

    @pytest.mark.unit
    def test_help_in_container(self):
        markup = render("email", help="Never shared")
        assert markup.endswith('<small class="d-block form-text text-muted">Never shared</small></div>')

    @pytest.mark.unit
    def test_tooltip_after_label_text(self):
        markup = render("email", tooltip="Work address")
        assert 'Email <span data-bs-toggle="tooltip" title="Work address"' in markup

    @pytest.mark.unit
    def test_hidden_renders_bare_input(self):
        assert render("token", type="hidden", value="abc") == (
            '<input type="hidden" name="token" value="abc" id="token">'
        )


class TestInputGroups:
    """Tests for prepend/append addons."""

    @pytest.mark.unit
    def test_prepend_and_append(self):
        markup = render("price", prepend="$", append=".00")
        assert (
            '<div class="input-group"><span class="input-group-text">$</span>'
            '<input type="text" name="price" id="price" class="form-control">'
            '<span class="input-group-text">.00</span></div>'
        ) in markup

    @pytest.mark.unit
    def test_markup_addon_is_kept(self):
        markup = render("q", append='<button class="btn">Go</button>')
        assert '<button class="btn">Go</button></div>' in markup

    @pytest.mark.unit
    def test_error_in_group(self):
        markup = render("price", prepend="$", error="Bad")
        assert 'class="input-group has-validation"' in markup
        assert 'class="form-control is-invalid"' in markup


class TestCheckbox:
    """Tests for single checkboxes."""

    @pytest.mark.unit
    def test_default(self):
        assert render("agree", type="checkbox") == (
            '<div class="mb-3 form-group form-check checkbox">'
            '<input type="hidden" name="agree" value="0">'
            '<input type="checkbox" name="agree" value="1" id="agree" class="form-check-input">'
            '<label class="form-check-label" for="agree">Agree</label>'
            "</div>"
        )

    @pytest.mark.unit
    def test_without_hidden_field(self):
        markup = render("agree", type="checkbox", hidden_field=False)
        assert 'type="hidden"' not in markup
        assert "hidden-field" not in markup

    @pytest.mark.unit
    def test_inline(self):
        markup = render("agree", type="checkbox", inline=True)
        assert markup.startswith('<div class="mb-3 form-check form-check-inline checkbox">')

    @pytest.mark.unit
    def test_switch(self):
        markup = render("agree", type="checkbox", switch=True)
        assert 'form-check form-switch checkbox"' in markup

    @pytest.mark.unit
    def test_nested_input(self):
        markup = render("agree", type="checkbox", nested_input=True)
        assert (
            '<input type="hidden" name="agree" value="0">'
            '<label class="form-check-label" for="agree">'
            '<input type="checkbox" name="agree" value="1" id="agree" class="form-check-input">Agree</label>'
        ) in markup

    @pytest.mark.unit
    def test_horizontal_offset(self):
        markup = render("agree", "horizontal", type="checkbox", inline=True)
        assert markup.startswith(
            '<div class="mb-3 form-group row checkbox">'
            '<div class="offset-md-2 col-md-10"><div class="form-check">'
        )


class TestChoiceControls:
    """Tests for select, radio and multicheckbox controls."""

    @pytest.mark.unit
    def test_select(self):
        markup = render("color", type="select", options={"r": "Red", "g": "Green"}, value="g")
        assert (
            '<select name="color" id="color" class="form-select">'
            '<option value="r">Red</option>'
            '<option value="g" selected="selected">Green</option>'
            "</select>"
        ) in markup

    @pytest.mark.unit
    def test_select_empty_and_groups(self):
        markup = render("color", type="select", empty="Pick one", options={"Warm": {"r": "Red"}})
        assert '<option value="">Pick one</option><optgroup label="Warm"><option value="r">Red</option></optgroup>' in markup
        assert "empty=" not in markup

    @pytest.mark.unit
    def test_select_multiple(self):
        markup = render("tags", type="select", multiple=True, options=["a", "b"], value=["a", "b"])
        assert '<select name="tags[]" multiple="multiple" id="tags" class="form-select">' in markup
        assert markup.count('selected="selected"') == 2

    @pytest.mark.unit
    def test_radio_set(self):
        markup = render("color", type="radio", options={"r": "Red"}, value="r")
        assert markup.startswith(
            '<div class="mb-3 form-group radio" role="group" aria-labelledby="color-group-label">'
            '<label class="form-label d-block" id="color-group-label">Color</label>'
            '<input type="hidden" name="color" value="">'
        )
        assert (
            '<div class="form-check">'
            '<input type="radio" name="color" value="r" class="form-check-input" id="color-r" checked="checked">'
            '<label class="form-check-label selected" for="color-r">Red</label></div>'
        ) in markup

    @pytest.mark.unit
    def test_radio_inline_wrapper(self):
        markup = render("color", type="radio", inline=True, options=["a"])
        assert '<div class="form-check form-check-inline"><input type="radio"' in markup

    @pytest.mark.unit
    def test_multicheckbox(self):
        markup = render("tags", type="select", multiple="checkbox", options={"a": "A"})
        assert markup.startswith(
            '<div class="mb-3 form-group multicheckbox" role="group" aria-labelledby="tags-group-label">'
            '<label class="form-label d-block" id="tags-group-label">Tags</label>'
            '<input type="hidden" name="tags" value="">'
        )
        assert (
            '<div class="form-check"><input type="checkbox" name="tags[]" value="a" '
            'class="form-check-input" id="tags-a"><label class="form-check-label" for="tags-a">A</label></div>'
        ) in markup

    @pytest.mark.unit
    def test_colliding_choice_ids_are_suffixed(self):
        radio = render("color", type="radio", options=["a b", "a_b"])
        assert 'id="color-a-b"' in radio
        assert 'id="color-a-b-1"' in radio
        assert 'for="color-a-b-1"' in radio

        checks = render("tags", type="select", multiple="checkbox", options={"G": {"a b": "1"}, "a_b": "2"})
        assert checks.count('id="tags-a-b"') == 1
        assert 'id="tags-a-b-1"' in checks

    @pytest.mark.unit
    def test_multicheckbox_groups(self):
        markup = render("tags", type="select", multiple="checkbox", options={"Letters": {"a": "A"}})
        assert '<fieldset class="mb-3 form-group"><legend class="col-form-label pt-0">Letters</legend>' in markup

    @pytest.mark.unit
    def test_range_has_no_form_control(self):
        markup = render("volume", type="range")
        assert 'class="form-range"' in markup
        assert "form-control" not in markup

    @pytest.mark.unit
    def test_date_uses_datetime_container(self):
        markup = render("starts", type="date")
        assert markup.startswith('<div class="mb-3 form-group date">')
        assert 'class="form-control"' in markup


class TestTemplateFallbacks:
    """Tests for group/container template selection during rendering."""

    @pytest.mark.unit
    def test_type_specific_container_override(self):
        markup = render("email", type="email", templates={"emailContainer": "<section>{{content}}</section>"})
        assert markup.startswith("<section><label")

    @pytest.mark.unit
    def test_type_specific_group_override(self):
        markup = render("email", type="email", templates={"emailFormGroup": "{{input}}|{{label}}"})
        assert 'class="form-control">|<label' in markup
