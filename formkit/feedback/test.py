"""Unit tests for feedback resolution."""

import pytest

from formkit.align import AlignmentMode
from formkit.feedback import FeedbackStyle, FormGroupPosition, resolve_feedback


class TestResolveFeedback:
    """Tests for resolve_feedback."""

    @pytest.mark.unit
    def test_inline_defaults_to_tooltip_relative(self):
        result = resolve_feedback(None, None, AlignmentMode.INLINE)
        assert result.style == "tooltip"
        assert result.position == "relative"
        assert result.error_template == "errorTooltip"
        assert result.template_vars == {"formGroupPosition": "position-relative "}

    @pytest.mark.unit
    def test_default_alignment_emits_nothing(self):
        result = resolve_feedback(alignment=AlignmentMode.DEFAULT)
        assert result.style is None
        assert result.position is None
        assert result.error_template is None
        assert result.template_vars == {}
        assert result.position_var is None

    @pytest.mark.unit
    def test_per_call_style_wins_over_inline(self):
        result = resolve_feedback("default", None, "inline")
        assert result.style == "default"
        assert result.error_template is None
        assert result.position is None

    @pytest.mark.unit
    def test_form_default_style(self):
        result = resolve_feedback(alignment="horizontal", default_style=FeedbackStyle.TOOLTIP)
        assert result.error_template == "errorTooltip"
        assert result.position_var == "position-relative "

    @pytest.mark.unit
    def test_per_call_style_wins_over_form_default(self):
        result = resolve_feedback("default", alignment="default", default_style="tooltip")
        assert result.style == "default"

    @pytest.mark.unit
    def test_explicit_position_wins_over_tooltip_default(self):
        result = resolve_feedback("tooltip", FormGroupPosition.ABSOLUTE, "default")
        assert result.position_var == "position-absolute "

    @pytest.mark.unit
    def test_form_default_position(self):
        result = resolve_feedback(alignment="default", default_position="sticky")
        assert result.style is None
        assert result.position_var == "position-sticky "

    @pytest.mark.unit
    def test_falsy_values_count_as_unset(self):
        result = resolve_feedback("", "", "inline")
        assert result.style == "tooltip"
        assert result.position == "relative"

    @pytest.mark.unit
    def test_no_alignment(self):
        assert resolve_feedback().template_vars == {}
