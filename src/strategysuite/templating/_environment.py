"""Jinja2 Environment factory."""

from dataclasses import dataclass
from functools import cache

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape


@dataclass(slots=True, frozen=True)
class EnvironmentConfig:
    """Configuration for Jinja2 Environment.

    Attributes:
        trim_blocks: Remove first newline after a block tag.
        lstrip_blocks: Strip leading whitespace before block tags.
        keep_trailing_newline: Preserve trailing newline in templates.
    """

    trim_blocks: bool = True
    lstrip_blocks: bool = True
    keep_trailing_newline: bool = True


def create_environment(config: EnvironmentConfig | None = None) -> Environment:
    """Create a Jinja2 Environment over the packaged templates.

    Templates ending in ``.html.j2`` are autoescaped; text templates such as
    prompts are not. Undefined variables raise instead of rendering empty.

    Args:
        config: Optional environment configuration. If None, uses defaults.

    Returns:
        Configured Jinja2 Environment.
    """
    if config is None:
        config = EnvironmentConfig()

    return Environment(
        loader=PackageLoader("strategysuite", "templates"),
        autoescape=select_autoescape(
            enabled_extensions=("html.j2", "html"), default_for_string=False
        ),
        undefined=StrictUndefined,
        trim_blocks=config.trim_blocks,
        lstrip_blocks=config.lstrip_blocks,
        keep_trailing_newline=config.keep_trailing_newline,
    )


@cache
def get_environment() -> Environment:
    """Shared environment with the default configuration."""
    return create_environment()


def render_template(name: str, **context: object) -> str:
    """Render a packaged template by name."""
    return get_environment().get_template(name).render(**context)
