"""Unit tests for container composition."""

import pytest

from formkit.align import AlignmentMode
from formkit.container import compose_container


class TestComposeContainer:
    """Tests for compose_container."""

    @pytest.mark.unit
    def test_typed_control_gets_spacing(self):
        result = compose_container(None, typed=True, alignment=AlignmentMode.DEFAULT)
        assert result == {"containerClass": "mb-3 "}

    @pytest.mark.unit
    def test_inline_has_no_spacing(self):
        assert compose_container(None, typed=True, alignment=AlignmentMode.INLINE) == {}

    @pytest.mark.unit
    def test_untyped_without_container(self):
        assert compose_container(None, typed=False, alignment=AlignmentMode.DEFAULT) == {}

    @pytest.mark.unit
    def test_class_is_prepended_with_trailing_space(self):
        result = compose_container(
            {"class": "wrapper"}, typed=False, alignment=AlignmentMode.DEFAULT
        )
        assert result == {"containerClass": "wrapper "}

    @pytest.mark.unit
    def test_empty_class_is_still_emitted(self):
        result = compose_container({"class": ""}, typed=False, alignment=AlignmentMode.DEFAULT)
        assert result == {"containerClass": " "}
        result = compose_container({"class": ""}, typed=True, alignment=AlignmentMode.INLINE)
        assert result == {"containerClass": " "}

    @pytest.mark.unit
    def test_none_class_is_skipped(self):
        result = compose_container({"class": None, "id": "x"}, typed=False, alignment=AlignmentMode.DEFAULT)
        assert result == {"containerAttrs": ' id="x"'}

    @pytest.mark.unit
    def test_class_merges_with_spacing(self):
        result = compose_container(
            {"class": "wrapper mb-3"}, typed=True, alignment=AlignmentMode.HORIZONTAL
        )
        assert result["containerClass"] == "wrapper mb-3 "

    @pytest.mark.unit
    def test_remaining_attributes(self):
        result = compose_container(
            {"class": "c", "id": "wrap", "data-role": "x"},
            typed=False,
            alignment=AlignmentMode.INLINE,
        )
        assert result == {
            "containerClass": "c ",
            "containerAttrs": ' id="wrap" data-role="x"',
        }

    @pytest.mark.unit
    def test_custom_attribute_formatter(self):
        result = compose_container(
            {"id": "wrap"},
            typed=False,
            alignment="inline",
            format_attributes=lambda attrs: "|".join(attrs),
        )
        assert result == {"containerAttrs": "id"}

    @pytest.mark.unit
    def test_container_option_is_not_mutated(self):
        container = {"class": "c", "id": "w"}
        compose_container(container, typed=True, alignment="default")
        assert container == {"class": "c", "id": "w"}
