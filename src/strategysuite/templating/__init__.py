"""Jinja2 templating over the packaged templates."""

from strategysuite.templating._environment import (
    EnvironmentConfig,
    create_environment,
    get_environment,
    render_template,
)

__all__ = [
    "EnvironmentConfig",
    "create_environment",
    "get_environment",
    "render_template",
]
