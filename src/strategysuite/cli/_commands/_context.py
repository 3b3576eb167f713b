# pyright: reportUnusedCallResult=false
"""CLI context for global state management.

The CLIContext is set once when the CLI starts and is made available to all
commands via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from structlog.typing import FilteringBoundLogger

from strategysuite.config import Settings


class OutputFormat(StrEnum):
    """Supported output formats for listing commands."""

    JSON = "json"
    TABLE = "table"


_current_cli_context: "contextvars.ContextVar[CLIContext | None]" = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with settings and options.

    Attributes:
        settings: Loaded settings.
        verbose: Enable verbose output with additional details.
        config_path: Explicit config file given with --config.
        logger: Structured logger for CLI commands.
    """

    settings: Settings = field(repr=False)
    verbose: bool = False
    config_path: Path | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> "CLIContext":  # noqa: UP037
        """Get the active CLIContext, or build one from the environment.

        Raises:
            ConfigLoadError: If no context is set and settings cannot be loaded.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(settings=Settings.load())

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:  # noqa: UP037
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to the default context."""
        _current_cli_context.set(None)
