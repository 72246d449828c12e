"""Tests for configuration management."""

from pathlib import Path

import pytest

from .lib import (
    EnvConfig,
    EnvVar,
    FormSettings,
    _convert_value,
    get_default_grid,
    get_environment,
    get_environment_info,
    list_environment_variables,
)

# =============================================================================
# Tests for get_environment (main interface)
# =============================================================================


class TestGetEnvironment:
    """Tests for the unified get_environment interface."""

    @pytest.mark.unit
    def test_returns_default_when_not_set(self, monkeypatch):
        """Returns default value when env var is not set."""
        monkeypatch.delenv("FORMKIT_GRID_LEFT", raising=False)
        assert get_environment(EnvVar.GRID_LEFT) == 2

    @pytest.mark.unit
    def test_override_takes_priority(self, monkeypatch):
        """Override parameter takes highest priority."""
        monkeypatch.setenv("FORMKIT_GRID_LEFT", "4")
        assert get_environment(EnvVar.GRID_LEFT, override=3) == 3

    @pytest.mark.unit
    def test_env_var_overrides_default(self, monkeypatch):
        """Environment variable overrides default value."""
        monkeypatch.setenv("FORMKIT_ALIGN", "horizontal")
        assert get_environment(EnvVar.ALIGN) == "horizontal"

    @pytest.mark.unit
    def test_int_type_conversion(self, monkeypatch):
        """Integer type conversion from string."""
        monkeypatch.setenv("FORMKIT_GRID_MIDDLE", "8")
        result = get_environment(EnvVar.GRID_MIDDLE)
        assert result == 8
        assert isinstance(result, int)

    @pytest.mark.unit
    def test_invalid_int_falls_back_to_default(self, monkeypatch):
        """Unparseable integers use the default."""
        monkeypatch.setenv("FORMKIT_GRID_MIDDLE", "wide")
        assert get_environment(EnvVar.GRID_MIDDLE) == 10

    @pytest.mark.unit
    def test_empty_value_falls_back_to_default(self, monkeypatch):
        """Empty strings are treated as unset."""
        monkeypatch.setenv("FORMKIT_ERROR_CLASS", "")
        assert get_environment(EnvVar.ERROR_CLASS) == "is-invalid"

    @pytest.mark.unit
    def test_path_type_conversion(self, monkeypatch):
        """Path variables convert to Path objects."""
        monkeypatch.setenv("FORMKIT_TEMPLATES_FILE", "/tmp/templates.json")
        assert get_environment(EnvVar.TEMPLATES_FILE) == Path("/tmp/templates.json")


class TestConvertValue:
    """Tests for raw value conversion."""

    @pytest.mark.unit
    def test_int_with_whitespace(self):
        config = EnvConfig(name="FORMKIT_X", default=0, var_type=int)
        assert _convert_value(" 6 ", config) == 6

    @pytest.mark.unit
    def test_unknown_type_keeps_string(self):
        config = EnvConfig(name="FORMKIT_X", default=None, var_type=float)
        assert _convert_value("1.5", config) == "1.5"

    @pytest.mark.unit
    def test_unset_uses_default(self):
        config = EnvConfig(name="FORMKIT_X", default="fallback", var_type=str)
        assert _convert_value(None, config) == "fallback"


class TestIntrospection:
    """Tests for variable metadata helpers."""

    @pytest.mark.unit
    def test_environment_info(self):
        """Metadata is exposed as EnvConfig."""
        info = get_environment_info(EnvVar.ERROR_CLASS)
        assert isinstance(info, EnvConfig)
        assert info.name == "FORMKIT_ERROR_CLASS"
        assert info.default == "is-invalid"

    @pytest.mark.unit
    def test_all_variables_are_prefixed(self):
        """Every variable lives in the FORMKIT_ namespace."""
        for var in list_environment_variables():
            assert var.value.name.startswith("FORMKIT_")

    @pytest.mark.unit
    def test_filter_by_category(self):
        """Category filter returns only matching variables."""
        grid_vars = list_environment_variables("grid")
        assert EnvVar.GRID_LEFT in grid_vars
        assert EnvVar.ALIGN not in grid_vars


class TestFormSettings:
    """Tests for FormSettings resolution."""

    @pytest.mark.unit
    def test_defaults(self):
        """Dataclass defaults match the documented form defaults."""
        settings = FormSettings()
        assert settings.align == "default"
        assert settings.grid == {"left": 2, "middle": 10, "right": 0}
        assert settings.feedback_style is None
        assert settings.error_class == "is-invalid"

    @pytest.mark.unit
    def test_default_grid_from_environment(self, monkeypatch):
        """Grid column counts are read from the environment."""
        monkeypatch.setenv("FORMKIT_GRID_LEFT", "3")
        monkeypatch.setenv("FORMKIT_GRID_MIDDLE", "9")
        assert get_default_grid() == {"left": 3, "middle": 9, "right": 0}

    @pytest.mark.unit
    def test_from_environment(self, monkeypatch):
        """Environment values populate settings."""
        monkeypatch.setenv("FORMKIT_FEEDBACK_STYLE", "tooltip")
        monkeypatch.setenv("FORMKIT_ALIGN", "inline")
        settings = FormSettings.from_environment()
        assert settings.feedback_style == "tooltip"
        assert settings.align == "inline"

    @pytest.mark.unit
    def test_from_environment_overrides(self, monkeypatch):
        """Explicit overrides win over the environment."""
        monkeypatch.setenv("FORMKIT_ALIGN", "inline")
        settings = FormSettings.from_environment(align="horizontal")
        assert settings.align == "horizontal"
