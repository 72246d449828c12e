"""Unit tests for class injection helpers."""

import pytest

from formkit.classes import (
    apply_button_classes,
    has_any_class,
    inject_classes,
    split_classes,
)


class TestSplitClasses:
    """Tests for class value normalization."""

    @pytest.mark.unit
    def test_string(self):
        assert split_classes(" a  b ") == ["a", "b"]

    @pytest.mark.unit
    def test_nested_sequence(self):
        assert split_classes(["a b", ["c"]]) == ["a", "b", "c"]

    @pytest.mark.unit
    def test_empty_values(self):
        assert split_classes(None) == []
        assert split_classes(False) == []
        assert split_classes("") == []


class TestInjectClasses:
    """Tests for inject_classes."""

    @pytest.mark.unit
    def test_existing_class_is_not_duplicated(self):
        """Injecting a class already present is a no-op."""
        assert inject_classes("a", {"class": "a"})["class"] == "a"

    @pytest.mark.unit
    def test_new_class_is_appended(self):
        """New classes are appended after existing ones."""
        assert inject_classes("b", {"class": "a"})["class"] == "a b"

    @pytest.mark.unit
    def test_order_of_first_seen_is_preserved(self):
        """Existing order first, then new classes in given order."""
        result = inject_classes(["c", "a", "d"], {"class": ["b", "a"]})
        assert result["class"] == "b a c d"

    @pytest.mark.unit
    def test_idempotent(self):
        """Repeated injection gives the same result."""
        once = inject_classes("x y", {"class": "a"})
        twice = inject_classes("x y", once)
        assert once == twice

    @pytest.mark.unit
    def test_input_mapping_is_not_mutated(self):
        """The caller's mapping is left untouched."""
        attrs = {"class": "a", "id": "f"}
        result = inject_classes("b", attrs)
        assert attrs == {"class": "a", "id": "f"}
        assert result == {"class": "a b", "id": "f"}

    @pytest.mark.unit
    def test_missing_target(self):
        """A missing attribute mapping is treated as empty."""
        assert inject_classes("form-label") == {"class": "form-label"}


class TestHasAnyClass:
    """Tests for has_any_class."""

    @pytest.mark.unit
    def test_present(self):
        assert has_any_class(["form-inline", "x"], {"class": "a form-inline"})

    @pytest.mark.unit
    def test_absent(self):
        assert not has_any_class("form-inline", {"class": "form-inline-ish"})

    @pytest.mark.unit
    def test_bare_class_value(self):
        assert has_any_class("b", ["a", "b"])
        assert not has_any_class("b", None)


class TestApplyButtonClasses:
    """Tests for Bootstrap button class expansion."""

    @pytest.mark.unit
    def test_style_shorthand(self):
        assert apply_button_classes({"class": "primary"})["class"] == "btn btn-primary"

    @pytest.mark.unit
    def test_outline_style(self):
        result = apply_button_classes({"class": "outline-danger lg"})
        assert result["class"] == "btn btn-outline-danger lg"

    @pytest.mark.unit
    def test_default_style(self):
        assert apply_button_classes({})["class"] == "btn btn-secondary"

    @pytest.mark.unit
    def test_explicit_btn_classes_are_kept(self):
        result = apply_button_classes({"class": "btn btn-success"})
        assert result["class"] == "btn btn-success"
