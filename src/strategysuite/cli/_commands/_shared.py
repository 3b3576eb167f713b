# pyright: reportExplicitAny=false
"""Exit codes, project listings and error reporting shared by CLI commands."""

from collections.abc import Sequence
from enum import IntEnum
from typing import TYPE_CHECKING, Any, Final, Never

import orjson
import pendulum
from pytablewriter import MarkdownTableWriter

from strategysuite.project import ProjectState

if TYPE_CHECKING:
    from rich.console import Console

__all__ = [
    "PROJECT_TABLE_HEADERS",
    "ExitCode",
    "exit_with_error",
    "format_json",
    "format_project_table",
    "format_timestamp",
    "get_error_console",
    "summarize_project",
]

PROJECT_TABLE_HEADERS: Final = ("ID", "Name", "Last Updated", "Selected Ideas")


class ExitCode(IntEnum):
    """Process exit codes of StrategySuite commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2
    NOT_FOUND = 3
    IO_ERROR = 4
    INTERNAL_ERROR = 5


def format_timestamp(millis: int) -> str:
    """Render an epoch-millisecond timestamp as a UTC date and time."""
    return pendulum.from_timestamp(millis / 1000, tz="UTC").to_datetime_string()


def summarize_project(project: ProjectState) -> dict[str, Any]:
    """Build the camelCase listing entry for one project."""
    return {
        "id": project.id,
        "name": project.name,
        "lastUpdated": project.last_updated,
        "selectedIdeas": sum(1 for idea in project.ideas.values() if idea.is_selected),
    }


def format_json(data: Any) -> str:
    return orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8")


def format_project_table(projects: Sequence[ProjectState]) -> str:
    """Format projects as a Markdown table, one row per project.

    Args:
        projects: Projects in display order.

    Returns:
        The table, with timestamps shown in UTC.
    """
    rows: list[list[str]] = []
    for project in projects:
        summary = summarize_project(project)
        rows.append(
            [
                project.id,
                project.name,
                format_timestamp(project.last_updated),
                str(summary["selectedIdeas"]),
            ]
        )
    writer = MarkdownTableWriter(
        headers=list(PROJECT_TABLE_HEADERS), value_matrix=rows, margin=1
    )
    return writer.dumps()


def get_error_console() -> "Console":  # noqa: UP037
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,  # noqa: UP037
) -> Never:
    """Report a failure and leave with the given exit code.

    Raises:
        SystemExit: Always.
    """
    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {message}")
    raise SystemExit(code)
