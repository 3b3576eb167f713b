"""Logging utilities for StrategySuite.

This module provides standalone structlog logger factories that write
JSON-formatted or text-formatted logs to stderr or to a log file. Each logger
is self-contained and does not modify global structlog configuration.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Final, Literal, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

DEBUG_ENV_VAR = "STRATEGYSUITE_DEBUG"

DEFAULT_MAX_BYTES: Final = 10 * 1024 * 1024
DEFAULT_BACKUP_COUNT: Final = 5


def _log_level_from_string(level: str, *, respect_env: bool = True) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, STRATEGYSUITE_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv(DEBUG_ENV_VAR, None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def _file_logger(
    log_file: str, *, max_bytes: int, backup_count: int
) -> logging.Logger:
    """Return the stdlib logger writing to a file, creating its handler once.

    Every structlog logger for the same path shares this logger and its
    RotatingFileHandler. Level filtering happens in the structlog wrapper.
    """
    log_path = Path(log_file).resolve()
    file_logger = logging.getLogger(f"strategysuite.file.{log_path}")
    if not file_logger.handlers:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_path, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        file_logger.addHandler(handler)
        file_logger.setLevel(logging.DEBUG)
        file_logger.propagate = False
    return file_logger


def create_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    max_bytes: int = DEFAULT_MAX_BYTES,
    backup_count: int = DEFAULT_BACKUP_COUNT,
    **context: object,
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger.

    The log level can be overridden by the STRATEGYSUITE_DEBUG environment
    variable, which forces DEBUG regardless of ``level``.

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to a log file, rotated at ``max_bytes``. Logs go to
            stderr when empty.
        max_bytes: Size in bytes at which the log file is rotated.
        backup_count: Number of rotated log files to keep.
        **context: Key/value pairs bound to every entry.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = _log_level_from_string(level)

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    raw_logger = (
        _file_logger(log_file, max_bytes=max_bytes, backup_count=backup_count)
        if log_file
        else structlog.WriteLoggerFactory(file=sys.stderr)()
    )

    logger = cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            raw_logger,
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(effective_level),
            context_class=dict,
        ),
    )
    if context:
        return logger.bind(**context)
    return logger


def create_server_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for the API server, bound to ``component=server``."""
    return create_logger(
        level=level, log_format=log_format, log_file=log_file, component="server"
    )


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands, bound to ``command`` when one is given."""
    logger = create_logger(level=level, log_format=log_format, log_file=log_file)
    if command:
        return logger.bind(command=command)
    return logger
