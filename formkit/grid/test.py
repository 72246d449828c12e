"""Unit tests for grid class calculation."""

import pytest

from formkit.grid import GridPosition, GridSpec, grid_class, offset_group_class

DEFAULT_GRID = {"left": 2, "middle": 10, "right": 0}

TABLE_GRID = {
    "sm": {"left": 12, "middle": 12},
    "md": {"left": 4, "middle": 8, "right": 0},
    "lg": {"middle": 6},
}


class TestGridSpec:
    """Tests for GridSpec coercion."""

    @pytest.mark.unit
    def test_from_none(self):
        assert GridSpec.from_value(None) is None

    @pytest.mark.unit
    def test_from_spec_is_identity(self):
        spec = GridSpec.from_value(DEFAULT_GRID)
        assert GridSpec.from_value(spec) is spec

    @pytest.mark.unit
    def test_flat_detection(self):
        assert GridSpec.from_value(DEFAULT_GRID).is_flat
        assert not GridSpec.from_value(TABLE_GRID).is_flat

    @pytest.mark.unit
    def test_breakpoints(self):
        assert GridSpec.from_value(DEFAULT_GRID).breakpoints() == ["md"]
        assert GridSpec.from_value(TABLE_GRID).breakpoints() == ["sm", "md", "lg"]

    @pytest.mark.unit
    def test_source_mapping_is_copied(self):
        source = {"md": {"left": 3}}
        spec = GridSpec.from_value(source)
        source["md"]["left"] = 5
        assert spec.to_dict() == {"md": {"left": 3}}


class TestGridClass:
    """Tests for grid_class."""

    @pytest.mark.unit
    def test_no_grid(self):
        assert grid_class(None, "left") == ""

    @pytest.mark.unit
    def test_flat_left(self):
        assert grid_class(DEFAULT_GRID, "left") == "col-md-2"

    @pytest.mark.unit
    def test_flat_left_offset(self):
        assert grid_class(DEFAULT_GRID, "left", offset=True) == "offset-md-2"

    @pytest.mark.unit
    def test_flat_accepts_enum(self):
        assert grid_class(DEFAULT_GRID, GridPosition.MIDDLE) == "col-md-10"

    @pytest.mark.unit
    def test_flat_zero_columns(self):
        assert grid_class(DEFAULT_GRID, "right") == "col-md-0"

    @pytest.mark.unit
    def test_table_order(self):
        assert grid_class(TABLE_GRID, "middle") == "col-sm-12 col-md-8 col-lg-6"

    @pytest.mark.unit
    def test_table_skips_missing_positions(self):
        assert grid_class(TABLE_GRID, "left") == "col-sm-12 col-md-4"
        assert grid_class(TABLE_GRID, "right") == "col-md-0"

    @pytest.mark.unit
    def test_table_offset(self):
        assert grid_class(TABLE_GRID, "left", offset=True) == "offset-sm-12 offset-md-4"

    @pytest.mark.unit
    def test_unknown_position(self):
        assert grid_class(TABLE_GRID, "center") == ""


class TestOffsetGroupClass:
    """Tests for the offset group class."""

    @pytest.mark.unit
    def test_default_grid(self):
        assert offset_group_class(DEFAULT_GRID) == "offset-md-2 col-md-10"

    @pytest.mark.unit
    def test_no_grid(self):
        assert offset_group_class(None) == ""
