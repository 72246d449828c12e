"""Root pytest configuration and fixtures.

This module provides:
- Environment setup (loads .env)
- Isolation from FORMKIT_* variables set in the developer's shell
- Shared builder and templates-file fixtures
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Generator

import pytest
from dotenv import load_dotenv

from formkit.config import list_environment_variables
from formkit.form import FormBuilder

# Load environment variables from .env file
load_dotenv()


# =============================================================================
# Configuration Constants
# =============================================================================

PROJECT_ROOT = Path(__file__).parent
FORMKIT_VARIABLES = [var.value.name for var in list_environment_variables()]


# =============================================================================
# Pytest Hooks
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]):
    """Mark tests under tests/integration and tests/cli as integration tests."""
    integration = pytest.mark.integration
    for item in items:
        path = Path(str(item.fspath))
        if "tests" in path.parts and "integration" not in item.keywords:
            item.add_marker(integration)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_formkit_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Run every test without FORMKIT_* variables from the outer environment.

    Tests that need a variable set it through monkeypatch.
    """
    for name in FORMKIT_VARIABLES:
        if name in os.environ:
            monkeypatch.delenv(name)
    yield


# =============================================================================
# Builder Fixtures
# =============================================================================


@pytest.fixture
def form_builder() -> FormBuilder:
    """FormBuilder with library defaults."""
    return FormBuilder()


@pytest.fixture
def templates_file(tmp_path: Path) -> Path:
    """JSON template overrides file.

    Returns:
        Path to a file overriding `help` and `formEnd`.
    """
    path = tmp_path / "templates.json"
    path.write_text(
        json.dumps(
            {
                "help": '<div class="form-text"{{attrs}}>{{content}}</div>',
                "formEnd": "</form><!-- formkit -->",
            }
        ),
        encoding="utf-8",
    )
    return path
