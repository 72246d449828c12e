"""Unit tests for template layering and scoped overrides."""

import json

import pytest

from formkit.align import AlignmentMode, AlignmentState
from formkit.grid import GridSpec
from formkit.templater import StringTemplater, TemplateError
from formkit.templates import (
    ALIGNMENT_TEMPLATES,
    BASE_TEMPLATES,
    TemplateScopeError,
    TemplateSetResolver,
    fill_grid_slots,
    merge_layers,
)

DEFAULT_GRID = {"left": 2, "middle": 10, "right": 0}


@pytest.fixture
def resolver() -> TemplateSetResolver:
    return TemplateSetResolver()


def horizontal_state(grid=None) -> AlignmentState:
    return AlignmentState(AlignmentMode.HORIZONTAL, GridSpec.from_value(grid or DEFAULT_GRID))


class TestMergeLayers:
    """Tests for key-by-key layer merging."""

    @pytest.mark.unit
    def test_later_layers_win_per_key(self):
        merged = merge_layers({"a": "1", "b": "1"}, {"b": "2"}, {"c": "3"})
        assert merged == {"a": "1", "b": "2", "c": "3"}

    @pytest.mark.unit
    def test_empty_layers_are_skipped(self):
        assert merge_layers(None, {}, {"a": "1"}) == {"a": "1"}

    @pytest.mark.unit
    def test_inputs_are_not_mutated(self):
        first = {"a": "1"}
        merge_layers(first, {"a": "2"})
        assert first == {"a": "1"}


class TestFillGridSlots:
    """Tests for horizontal slot instantiation."""

    @pytest.mark.unit
    def test_default_grid(self):
        filled = fill_grid_slots(ALIGNMENT_TEMPLATES[AlignmentMode.HORIZONTAL], DEFAULT_GRID)
        assert filled["formGroup"] == (
            '{{label}}<div class="col-md-10">{{input}}{{error}}{{help}}</div>'
        )
        assert '<div class="offset-md-2 col-md-10">' in filled["checkboxFormGroup"]
        assert '<div class="offset-md-2 col-md-10">' in filled["checkboxInlineFormGroup"]
        assert '<div class="offset-md-2 col-md-10">' in filled["submitContainer"]

    @pytest.mark.unit
    def test_templates_without_slot_are_unchanged(self):
        overlay = ALIGNMENT_TEMPLATES[AlignmentMode.HORIZONTAL]
        filled = fill_grid_slots(overlay, DEFAULT_GRID)
        assert filled["label"] == overlay["label"]
        assert filled["inputContainer"] == overlay["inputContainer"]

    @pytest.mark.unit
    def test_label_slot_takes_left_class(self):
        filled = fill_grid_slots({"label": '<label class="%s">{{text}}</label>'}, DEFAULT_GRID)
        assert filled["label"] == '<label class="col-md-2">{{text}}</label>'

    @pytest.mark.unit
    def test_breakpoint_table(self):
        grid = {"sm": {"left": 4, "middle": 8}, "lg": {"left": 2, "middle": 10}}
        filled = fill_grid_slots(ALIGNMENT_TEMPLATES[AlignmentMode.HORIZONTAL], grid)
        assert 'class="col-sm-8 col-lg-10"' in filled["formGroup"]
        assert 'class="offset-sm-4 offset-lg-2 col-sm-8 col-lg-10"' in filled["submitContainer"]

    @pytest.mark.unit
    def test_offset_class_override(self):
        filled = fill_grid_slots(
            ALIGNMENT_TEMPLATES[AlignmentMode.HORIZONTAL], DEFAULT_GRID, "col-12"
        )
        assert '<div class="col-12">' in filled["checkboxFormGroup"]
        assert 'class="col-md-10"' in filled["formGroup"]


class TestEffectiveTemplates:
    """Tests for base + overlay resolution."""

    @pytest.mark.unit
    def test_default_is_base(self, resolver):
        assert resolver.effective_templates("default") == BASE_TEMPLATES

    @pytest.mark.unit
    def test_inline_overlay_wins(self, resolver):
        templates = resolver.effective_templates(AlignmentMode.INLINE)
        assert templates["radioLabel"] == "<span{{attrs}}>{{text}}{{tooltip}}</span>"
        assert templates["elementWrapper"] == '<div class="col-auto">{{content}}</div>'
        assert templates["error"] == BASE_TEMPLATES["error"]

    @pytest.mark.unit
    def test_horizontal_slots_filled(self, resolver):
        templates = resolver.effective_templates("horizontal", DEFAULT_GRID)
        assert "%s" not in "".join(templates.values())
        assert 'class="col-md-10"' in templates["formGroup"]

    @pytest.mark.unit
    def test_custom_template_set_merges_per_key(self):
        resolver = TemplateSetResolver(template_set={"inline": {"help": "<i>{{content}}</i>"}})
        templates = resolver.effective_templates("inline")
        assert templates["help"] == "<i>{{content}}</i>"
        assert "elementWrapper" in templates


class TestInstall:
    """Tests for the form-level layer."""

    @pytest.mark.unit
    def test_install_and_uninstall(self, resolver):
        resolver.install(horizontal_state())
        assert 'class="col-md-10"' in resolver.get("formGroup")
        resolver.uninstall()
        assert resolver.get("formGroup") == BASE_TEMPLATES["formGroup"]
        assert resolver.templater.depth == 0

    @pytest.mark.unit
    def test_form_templates_win_over_overlay(self, resolver):
        resolver.install(
            AlignmentState(AlignmentMode.INLINE),
            templates={"radioLabel": "<b>{{text}}</b>"},
        )
        assert resolver.get("radioLabel") == "<b>{{text}}</b>"
        assert resolver.get("elementWrapper") is not None

    @pytest.mark.unit
    def test_form_templates_from_file(self, resolver, tmp_path):
        path = tmp_path / "form.json"
        path.write_text(json.dumps({"error": "<em>{{content}}</em>"}))
        resolver.install(AlignmentState(AlignmentMode.DEFAULT), templates=path)
        assert resolver.get("error") == "<em>{{content}}</em>"

    @pytest.mark.unit
    def test_double_install_raises(self, resolver):
        resolver.install(AlignmentState(AlignmentMode.DEFAULT))
        with pytest.raises(TemplateScopeError):
            resolver.install(AlignmentState(AlignmentMode.DEFAULT))

    @pytest.mark.unit
    def test_uninstall_releases_leftover_scopes(self, resolver):
        resolver.install(AlignmentState(AlignmentMode.DEFAULT))
        resolver.push_scope({"error": "X"})
        resolver.uninstall()
        assert resolver.scope_depth == 0
        assert resolver.templater.depth == 0
        assert resolver.get("error") == BASE_TEMPLATES["error"]

    @pytest.mark.unit
    def test_uninstall_without_install(self, resolver):
        resolver.uninstall()
        assert resolver.templater.depth == 0


class TestScopes:
    """Tests for per-control scoped overrides."""

    @pytest.mark.unit
    def test_scope_applies_only_inside(self, resolver):
        before = resolver.get("error")
        scope = resolver.push_scope({"error": "X"})
        assert resolver.get("error") == "X"
        resolver.pop_scope(scope)
        assert resolver.get("error") == before

    @pytest.mark.unit
    def test_scopes_nest_lifo(self, resolver):
        outer = resolver.push_scope({"error": "outer"})
        inner = resolver.push_scope({"error": "inner", "help": "h"})
        assert resolver.get("error") == "inner"
        assert inner.names == frozenset({"error", "help"})
        resolver.pop_scope(inner)
        assert resolver.get("error") == "outer"
        assert resolver.get("help") == BASE_TEMPLATES["help"]
        resolver.pop_scope(outer)
        assert resolver.scope_depth == 0

    @pytest.mark.unit
    def test_out_of_order_pop_raises(self, resolver):
        outer = resolver.push_scope({"error": "outer"})
        inner = resolver.push_scope({"error": "inner"})
        with pytest.raises(TemplateScopeError):
            resolver.pop_scope(outer)
        resolver.pop_scope(inner)
        resolver.pop_scope(outer)

    @pytest.mark.unit
    def test_scoped_restores_on_error(self, resolver):
        with pytest.raises(ValueError):
            with resolver.scoped({"error": "X"}):
                raise ValueError("render failed")
        assert resolver.scope_depth == 0
        assert resolver.get("error") == BASE_TEMPLATES["error"]

    @pytest.mark.unit
    def test_scoped_without_overrides(self, resolver):
        with resolver.scoped({}) as scope:
            assert scope is None
        assert resolver.templater.depth == 0

    @pytest.mark.unit
    def test_scope_from_file(self, resolver, tmp_path):
        path = tmp_path / "call.json"
        path.write_text(json.dumps({"label": "<b>{{text}}</b>"}))
        with resolver.scoped(str(path)):
            assert resolver.get("label") == "<b>{{text}}</b>"
        assert resolver.get("label") == BASE_TEMPLATES["label"]

    @pytest.mark.unit
    def test_bad_scope_file_pushes_nothing(self, resolver, tmp_path):
        with pytest.raises(TemplateError):
            resolver.push_scope(tmp_path / "missing.json")
        assert resolver.scope_depth == 0
        assert resolver.templater.depth == 0

    @pytest.mark.unit
    def test_unknown_name_returns_none(self, resolver):
        assert resolver.get("textFormGroup") is None

    @pytest.mark.unit
    def test_shared_templater(self):
        templater = StringTemplater({"error": "E"})
        resolver = TemplateSetResolver(templater)
        assert resolver.templater is templater
        assert resolver.effective_templates("default") == {"error": "E"}
