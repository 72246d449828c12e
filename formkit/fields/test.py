"""Unit tests for field descriptors and per-type option resolution."""

import pytest
from pydantic import ValidationError

from formkit.align import DEFAULT_GRID, AlignmentMode, AlignmentState
from formkit.config import FormSettings
from formkit.grid import GridSpec
from formkit.templates import TemplateSetResolver

from .lib import (
    FIELD_TRANSFORMS,
    ControlContext,
    container_template_name,
    group_template_name,
    resolve_control,
)
from .models import FieldDescriptor, FieldType, ResolvedOptions, dom_id, humanize, input_name

# =============================================================================
# Helpers
# =============================================================================


def make_context(mode: str = "default", settings: FormSettings | None = None) -> ControlContext:
    mode = AlignmentMode(mode)
    grid = GridSpec.from_value(DEFAULT_GRID) if mode is AlignmentMode.HORIZONTAL else None
    state = AlignmentState(mode, grid)
    resolver = TemplateSetResolver()
    resolver.install(state)
    return ControlContext(state, resolver.templater, settings or FormSettings())


def resolve(name: str, mode: str = "default", **options) -> ResolvedOptions:
    return resolve_control(FieldDescriptor.from_options(name, options), make_context(mode))


def classes(value) -> list[str]:
    return value["class"].split()


# =============================================================================
# Models
# =============================================================================


class TestFieldType:
    """Tests for FieldType classification."""

    @pytest.mark.unit
    def test_known_types(self):
        assert FieldType.classify("checkbox") is FieldType.CHECKBOX
        assert FieldType.classify("datetime-local") is FieldType.DATETIME_LOCAL

    @pytest.mark.unit
    def test_unknown_types_are_default(self):
        assert FieldType.classify("email") is FieldType.DEFAULT
        assert FieldType.classify(None) is FieldType.DEFAULT

    @pytest.mark.unit
    def test_checkbox_select_is_multicheckbox(self):
        assert FieldType.classify("select", "checkbox") is FieldType.MULTICHECKBOX
        assert FieldType.classify("select", True) is FieldType.SELECT

    @pytest.mark.unit
    def test_transform_table_is_exhaustive(self):
        assert set(FIELD_TRANSFORMS) == set(FieldType)


class TestNaming:
    """Tests for id, label and name derivation."""

    @pytest.mark.unit
    def test_dom_id(self):
        assert dom_id("user.first_name") == "user-first-name"
        assert dom_id("Tags[]-group-label") == "tags-group-label"

    @pytest.mark.unit
    def test_humanize(self):
        assert humanize("first_name") == "First Name"
        assert humanize("user.country_id") == "Country"
        assert humanize("email") == "Email"

    @pytest.mark.unit
    def test_input_name(self):
        assert input_name("email") == "email"
        assert input_name("user.address.city") == "user[address][city]"


class TestFieldDescriptor:
    """Tests for FieldDescriptor parsing."""

    @pytest.mark.unit
    def test_extra_options_become_attributes(self):
        field = FieldDescriptor(name="email", placeholder="you@example.com", maxlength=40)
        assert field.html_attributes() == {"placeholder": "you@example.com", "maxlength": 40}

    @pytest.mark.unit
    def test_camel_case_aliases(self):
        field = FieldDescriptor.model_validate(
            {"name": "a", "nestedInput": True, "feedbackStyle": "tooltip", "templateVars": {"x": "1"}}
        )
        assert field.nested_input is True
        assert field.feedback_style == "tooltip"
        assert field.template_vars == {"x": "1"}

    @pytest.mark.unit
    def test_from_options_maps_keyword_names(self):
        field = FieldDescriptor.from_options("a", {"class_": "wide", "data_role": "x", "nested_input": True})
        assert field.html_attributes() == {"class": "wide", "data-role": "x"}
        assert field.nested_input is True

    @pytest.mark.unit
    def test_name_is_required(self):
        with pytest.raises(ValidationError):
            FieldDescriptor.model_validate({"type": "text"})

    @pytest.mark.unit
    def test_non_string_text_options_are_coerced(self):
        field = FieldDescriptor.from_options("age", {"tooltip": 5, "id": 7, "feedback_style": False})
        assert field.tooltip == "5"
        assert field.id == "7"
        assert field.feedback_style is None

    @pytest.mark.unit
    def test_numeric_tooltip_and_id_resolve(self):
        options = resolve("age", type="number", tooltip=5, id=7)
        assert options.attrs["id"] == "7"
        assert 'title="5"' in options.label["templateVars"]["tooltip"]

    @pytest.mark.unit
    def test_resolved_label_forms(self):
        assert ResolvedOptions.from_descriptor(FieldDescriptor(name="a", label=False)).label is False
        assert ResolvedOptions.from_descriptor(FieldDescriptor(name="a", label="Name")).label == {"text": "Name"}
        assert ResolvedOptions.from_descriptor(FieldDescriptor(name="a")).label == {}

    @pytest.mark.unit
    def test_resolved_id_defaults_to_dom_id(self):
        options = ResolvedOptions.from_descriptor(FieldDescriptor(name="user.email"))
        assert options.attrs["id"] == "user-email"


# =============================================================================
# Type Transforms
# =============================================================================


class TestLabelOptions:
    """Tests for the shared label classes."""

    @pytest.mark.unit
    def test_default_alignment(self):
        options = resolve("email")
        assert classes(options.label) == ["form-label"]

    @pytest.mark.unit
    def test_horizontal_uses_left_column(self):
        options = resolve("email", "horizontal")
        assert classes(options.label) == ["col-form-label", "col-md-2"]

    @pytest.mark.unit
    def test_inline_hides_label(self):
        options = resolve("email", "inline")
        assert classes(options.label) == ["form-label", "visually-hidden"]

    @pytest.mark.unit
    def test_disabled_label_untouched(self):
        options = resolve("email", "horizontal", label=False)
        assert options.label is False


class TestCheckboxOptions:
    """Tests for single checkboxes."""

    @pytest.mark.unit
    def test_classes(self):
        options = resolve("agree", type="checkbox")
        assert classes(options.label) == ["form-check-label"]
        assert classes(options.attrs) == ["form-check-input"]

    @pytest.mark.unit
    def test_horizontal_forces_inline_off(self):
        options = resolve("agree", "horizontal", type="checkbox", inline=True)
        assert options.inline is False
        assert "checkboxContainer" not in options.templates

    @pytest.mark.unit
    def test_inline_option_swaps_container(self):
        ctx = make_context()
        options = resolve_control(FieldDescriptor(name="agree", type="checkbox", inline=True), ctx)
        assert options.templates["checkboxContainer"] == ctx.templater.get("checkboxInlineContainer")
        assert options.templates["checkboxContainerError"] == ctx.templater.get("checkboxInlineContainerError")

    @pytest.mark.unit
    def test_inline_alignment_swaps_container(self):
        options = resolve("agree", "inline", type="checkbox")
        assert "checkboxContainer" in options.templates

    @pytest.mark.unit
    def test_switch_and_nested_input(self):
        ctx = make_context()
        descriptor = FieldDescriptor(name="agree", type="checkbox", switch=True, nested_input=True)
        options = resolve_control(descriptor, ctx)
        assert options.template_vars["variant"] == " form-switch"
        assert options.templates["nestingLabel"] == ctx.templater.get("nestingLabelNestedInput")


class TestGroupedOptions:
    """Tests for radio sets and multicheckboxes."""

    @pytest.mark.unit
    def test_radio_group_label(self):
        options = resolve("color", type="radio", options={"r": "Red"})
        assert options.template_vars["groupId"] == "color-group-label"
        assert options.label["id"] == "color-group-label"
        assert options.label["templateVars"]["groupId"] == "color-group-label"
        assert classes(options.label) == ["form-label", "d-block"]

    @pytest.mark.unit
    def test_radio_horizontal_label(self):
        options = resolve("color", "horizontal", type="radio")
        assert classes(options.label) == ["col-form-label", "col-md-2", "d-block", "pt-0"]

    @pytest.mark.unit
    def test_radio_inline_wrapper(self):
        ctx = make_context()
        options = resolve_control(FieldDescriptor(name="color", type="radio", inline=True), ctx)
        assert options.templates["radioWrapper"] == ctx.templater.get("radioInlineWrapper")

    @pytest.mark.unit
    def test_multicheckbox_shares_group_id(self):
        options = resolve("tags", type="select", multiple="checkbox")
        assert options.type == "multicheckbox"
        assert options.field_type is FieldType.MULTICHECKBOX
        assert options.group_id == "tags-group-label"
        assert options.label["id"] == options.group_id
        assert classes(options.attrs) == ["form-check-input"]
        assert options.inject_form_control is True

    @pytest.mark.unit
    def test_multicheckbox_inline_alignment(self):
        options = resolve("tags", "inline", type="select", multiple="checkbox")
        assert "d-block" not in classes(options.label)
        assert "visually-hidden" in classes(options.label)
        assert "checkboxWrapper" in options.templates


class TestOtherTypes:
    """Tests for select, range and date/time controls."""

    @pytest.mark.unit
    def test_select(self):
        options = resolve("country", type="select")
        assert options.inject_form_control is False
        assert classes(options.attrs) == ["form-select"]

    @pytest.mark.unit
    def test_range(self):
        options = resolve("volume", "horizontal", type="range")
        assert options.inject_form_control is False
        assert classes(options.attrs) == ["form-range"]
        assert "pt-0" in classes(options.label)

    @pytest.mark.unit
    def test_datetime(self):
        ctx = make_context()
        options = resolve_control(FieldDescriptor(name="starts", type="date"), ctx)
        assert options.templates["label"] == ctx.templater.get("datetimeLabel")
        assert options.templates["inputContainer"] == ctx.templater.get("datetimeContainer")
        assert options.template_vars["groupId"] == "starts-group-label"


# =============================================================================
# Post-dispatch Steps
# =============================================================================


class TestPostDispatch:
    """Tests for container, feedback, help, tooltip and input groups."""

    @pytest.mark.unit
    def test_container_class_and_spacing(self):
        options = resolve("email", container={"class": "wide", "data-x": "1"})
        assert options.template_vars["containerClass"] == "wide mb-3 "
        assert options.template_vars["containerAttrs"] == ' data-x="1"'

    @pytest.mark.unit
    def test_inline_form_has_no_spacing(self):
        options = resolve("email", "inline")
        assert "containerClass" not in options.template_vars

    @pytest.mark.unit
    def test_inline_form_uses_tooltip_feedback(self):
        ctx = make_context("inline")
        options = resolve_control(FieldDescriptor(name="email"), ctx)
        assert options.templates["error"] == ctx.templater.get("errorTooltip")
        assert options.template_vars["formGroupPosition"] == "position-relative "

    @pytest.mark.unit
    def test_settings_feedback_default(self):
        ctx = make_context(settings=FormSettings(feedback_style="tooltip", form_group_position="absolute"))
        options = resolve_control(FieldDescriptor(name="email"), ctx)
        assert "error" in options.templates
        assert options.template_vars["formGroupPosition"] == "position-absolute "

    @pytest.mark.unit
    def test_help_string(self):
        options = resolve("email", help="We never share it")
        assert options.help == '<small class="d-block form-text text-muted">We never share it</small>'

    @pytest.mark.unit
    def test_help_mapping_ignores_class(self):
        options = resolve("email", help={"content": "Hint", "id": "email-help", "class": "x"})
        assert options.help == '<small id="email-help" class="d-block form-text text-muted">Hint</small>'

    @pytest.mark.unit
    def test_tooltip_goes_to_label(self):
        options = resolve("email", tooltip="Work address")
        marker = options.label["templateVars"]["tooltip"]
        assert marker.startswith(' <span data-bs-toggle="tooltip" title="Work address"')

    @pytest.mark.unit
    def test_tooltip_dropped_without_label(self):
        options = resolve("email", tooltip="Work address", label=False)
        assert options.label is False
        assert options.tooltip is None

    @pytest.mark.unit
    def test_input_group_gets_error_class(self):
        options = resolve("price", prepend="$")
        assert options.inject_error_class == "is-invalid"
        assert resolve("price").inject_error_class is None

    @pytest.mark.unit
    def test_call_overrides_visible_to_transforms(self):
        resolver = TemplateSetResolver()
        state = AlignmentState(AlignmentMode.DEFAULT)
        resolver.install(state)
        ctx = ControlContext(state, resolver.templater, FormSettings())
        with resolver.scoped({"radioLabel": "<b>{{text}}</b>"}):
            options = resolve_control(FieldDescriptor(name="c", type="radio"), ctx)
        assert options.templates["label"] == "<b>{{text}}</b>"


# =============================================================================
# Template Fallbacks
# =============================================================================


class TestTemplateFallbacks:
    """Tests for group and container template name fallbacks."""

    @pytest.mark.unit
    def test_group_template(self):
        templates = {"checkboxFormGroup": "x", "formGroup": "y"}
        assert group_template_name("checkbox", templates.get) == "checkboxFormGroup"
        assert group_template_name("text", templates.get) == "formGroup"

    @pytest.mark.unit
    def test_container_template(self):
        templates = {"radioContainer": "x", "radioContainerError": "x"}
        assert container_template_name("radio", templates.get) == "radioContainer"
        assert container_template_name("radio", templates.get, has_error=True) == "radioContainerError"
        assert container_template_name("email", templates.get, has_error=True) == "inputContainerError"
