"""StrategySuite CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._context import CLIContext, OutputFormat
from ._projects import app as projects_app
from ._serve import app as serve_app
from ._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    format_project_table,
    get_error_console,
    summarize_project,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "exit_with_error",
    "format_json",
    "format_project_table",
    "get_error_console",
    "projects_app",
    "register_commands",
    "serve_app",
    "summarize_project",
]


def register_commands(app: "App") -> None:  # noqa: UP037
    app.command(projects_app)
    app.command(serve_app)
