"""Tests for core logging module."""

import logging
from io import StringIO

import pytest

from .lib import get_logger, setup_logging


class TestLogging:
    """Test core logging API."""

    @pytest.mark.unit
    def test_get_logger(self) -> None:
        """Verify logger instance creation under the package namespace."""
        logger = get_logger("test")
        assert logger.name == "formkit.test"
        assert isinstance(logger, logging.Logger)

    @pytest.mark.unit
    def test_get_logger_default_name(self) -> None:
        """Verify default logger name."""
        logger = get_logger()
        assert logger.name == "formkit"

    @pytest.mark.unit
    def test_get_logger_keeps_qualified_name(self) -> None:
        """Already-qualified names are not prefixed twice."""
        assert get_logger("formkit.align").name == "formkit.align"

    @pytest.mark.unit
    def test_module_loggers_propagate_to_package(self, caplog) -> None:
        """Records from module loggers reach handlers on the package logger."""
        with caplog.at_level(logging.INFO, logger="formkit"):
            get_logger("form").info("Form opened")
        assert [r.name for r in caplog.records] == ["formkit.form"]

    @pytest.mark.unit
    @pytest.mark.parametrize("level", ["debug", "WARNING", 10, "not-a-level"])
    def test_setup_logging_accepts_levels(self, level) -> None:
        """Level names, numbers and unknown names are all accepted."""
        setup_logging(level=level, stream=StringIO())
