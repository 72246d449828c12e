"""FORMKIT_* environment variables and form-level settings.

Example:
    >>> from formkit.config import FormSettings
    >>> settings = FormSettings.from_environment(feedback_style="tooltip")

Categories:
    form: alignment, feedback style, group position, error class
    grid: default horizontal grid and offset class
    templates: template override file
    logging: CLI log level
"""

from .lib import (
    EnvConfig,
    EnvVar,
    FormSettings,
    get_default_grid,
    get_environment,
    get_environment_info,
    list_environment_variables,
)

__all__ = [
    "EnvConfig",
    "EnvVar",
    "FormSettings",
    "get_default_grid",
    "get_environment",
    "get_environment_info",
    "list_environment_variables",
]
