"""Unit tests for alignment resolution and lifecycle."""

import pytest

from formkit.align import (
    AlignmentContext,
    AlignmentError,
    AlignmentMode,
    AlignmentState,
    AlignmentStateError,
    detect_alignment,
    form_classes,
    parse_alignment,
)
from formkit.grid import GridSpec


class TestParseAlignment:
    """Tests for alignment validation."""

    @pytest.mark.unit
    def test_valid_values(self):
        assert parse_alignment("inline") is AlignmentMode.INLINE
        assert parse_alignment(AlignmentMode.DEFAULT) is AlignmentMode.DEFAULT

    @pytest.mark.unit
    def test_invalid_value_lists_valid_values(self):
        with pytest.raises(AlignmentError, match="default, horizontal, inline"):
            parse_alignment("vertical")

    @pytest.mark.unit
    def test_alignment_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_alignment("diagonal")


class TestDetectAlignment:
    """Tests for class-based detection."""

    @pytest.mark.unit
    def test_horizontal(self):
        assert detect_alignment("x form-horizontal") is AlignmentMode.HORIZONTAL

    @pytest.mark.unit
    def test_inline(self):
        assert detect_alignment(["form-inline"]) is AlignmentMode.INLINE

    @pytest.mark.unit
    def test_fallback_to_default(self):
        assert detect_alignment(None) is AlignmentMode.DEFAULT
        assert detect_alignment("x", default="inline") is AlignmentMode.INLINE


class TestFormClasses:
    """Tests for form element class injection."""

    @pytest.mark.unit
    def test_default_unchanged(self):
        assert form_classes(AlignmentMode.DEFAULT, {"class": "x"}) == {"class": "x"}

    @pytest.mark.unit
    def test_horizontal(self):
        assert form_classes(AlignmentMode.HORIZONTAL)["class"] == "form-horizontal"

    @pytest.mark.unit
    def test_inline(self):
        result = form_classes(AlignmentMode.INLINE, {"class": "form-inline"})
        assert result["class"] == "form-inline row g-3 align-items-center"


class TestAlignmentContext:
    """Tests for the open/close lifecycle."""

    @pytest.mark.unit
    def test_unset_before_open(self):
        context = AlignmentContext()
        assert not context.is_open
        with pytest.raises(AlignmentStateError):
            _ = context.mode
        with pytest.raises(AlignmentStateError):
            _ = context.grid
        with pytest.raises(AlignmentStateError):
            context.state()

    @pytest.mark.unit
    def test_open_default(self):
        context = AlignmentContext()
        assert context.open("default") is AlignmentMode.DEFAULT
        assert context.grid is None

    @pytest.mark.unit
    def test_open_horizontal_uses_default_grid(self):
        context = AlignmentContext()
        context.open("horizontal")
        assert context.grid == GridSpec.from_value({"left": 2, "middle": 10, "right": 0})
        assert context.state().grid_class("left") == "col-md-2"

    @pytest.mark.unit
    def test_custom_default_grid(self):
        context = AlignmentContext(default_grid={"left": 4, "middle": 8})
        context.open("horizontal")
        assert context.state().grid_class("middle") == "col-md-8"

    @pytest.mark.unit
    def test_explicit_grid_forces_horizontal(self):
        context = AlignmentContext()
        mode = context.open("inline", explicit_grid={"sm": {"left": 3}})
        assert mode is AlignmentMode.HORIZONTAL
        assert context.state().grid_class("left") == "col-sm-3"

    @pytest.mark.unit
    def test_grid_as_requested_alignment(self):
        context = AlignmentContext()
        assert context.open({"lg": {"left": 2, "middle": 10}}) is AlignmentMode.HORIZONTAL
        assert context.state().offset_group_class() == "offset-lg-2 col-lg-10"

    @pytest.mark.unit
    def test_auto_detect_from_classes(self):
        context = AlignmentContext()
        assert context.open(None, classes="form-inline") is AlignmentMode.INLINE
        assert context.grid is None

    @pytest.mark.unit
    def test_auto_detect_falls_back_to_configured_default(self):
        context = AlignmentContext(default_align="horizontal")
        assert context.open() is AlignmentMode.HORIZONTAL
        assert context.grid is not None

    @pytest.mark.unit
    def test_invalid_alignment_leaves_context_closed(self):
        context = AlignmentContext()
        with pytest.raises(AlignmentError):
            context.open("sideways")
        assert not context.is_open

    @pytest.mark.unit
    def test_double_open_raises(self):
        context = AlignmentContext()
        context.open()
        with pytest.raises(AlignmentStateError):
            context.open()

    @pytest.mark.unit
    def test_close_resets_state(self):
        context = AlignmentContext()
        context.open("horizontal")
        context.close()
        assert not context.is_open
        context.close()
        assert not context.is_open

    @pytest.mark.unit
    def test_opened_closes_on_error(self):
        context = AlignmentContext()
        with pytest.raises(RuntimeError, match="boom"):
            with context.opened("horizontal") as state:
                assert state.is_horizontal
                raise RuntimeError("boom")
        assert not context.is_open

    @pytest.mark.unit
    def test_contexts_are_independent(self):
        first = AlignmentContext()
        second = AlignmentContext()
        first.open("inline")
        second.open("horizontal")
        assert first.mode is AlignmentMode.INLINE
        assert second.mode is AlignmentMode.HORIZONTAL


class TestAlignmentState:
    """Tests for the immutable state snapshot."""

    @pytest.mark.unit
    def test_flags(self):
        state = AlignmentState(AlignmentMode.INLINE)
        assert state.is_inline
        assert not state.is_horizontal
        assert state.grid_class("left") == ""

    @pytest.mark.unit
    def test_frozen(self):
        state = AlignmentState(AlignmentMode.DEFAULT)
        with pytest.raises(AttributeError):
            state.mode = AlignmentMode.INLINE  # type: ignore[misc]
