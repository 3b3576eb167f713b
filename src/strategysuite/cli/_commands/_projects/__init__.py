# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: D415, TC003
"""Commands for listing, creating, deleting, exporting and migrating projects."""

from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import Annotated

import anyio
from cyclopts import Parameter
from structlog.typing import FilteringBoundLogger

from strategysuite.exceptions import (
    ConfigLoadError,
    LegacyCacheError,
    PersistenceError,
    ProjectValidationError,
)
from strategysuite.export import render_report
from strategysuite.project import ProjectState
from strategysuite.storage import create_document_store
from strategysuite.store import ProjectStore
from strategysuite.sync import (
    DocumentStoreGateway,
    LegacyProjectCache,
    migrate_legacy_cache,
)
from strategysuite.utils import create_cli_logger

from .._context import CLIContext, OutputFormat
from .._shared import (
    ExitCode,
    exit_with_error,
    format_json,
    format_project_table,
    summarize_project,
)
from ._app import app

__all__ = ["app"]

UserOption = Annotated[
    str, Parameter(name=["--user", "-u"], help="User whose projects to operate on")
]


def _current_context() -> CLIContext:
    try:
        return CLIContext.get_current()
    except ConfigLoadError as e:
        exit_with_error(str(e), ExitCode.LOAD_ERROR)


def _logger(ctx: CLIContext, command: str) -> FilteringBoundLogger:
    if ctx.logger is not None:
        return ctx.logger.bind(command=command)
    logging = ctx.settings.logging
    return create_cli_logger(
        level="debug" if ctx.verbose else logging.level.value,
        log_format=logging.format.value,
        log_file=logging.file,
        command=command,
    )


def _with_gateway[T](
    command: str, operation: Callable[[DocumentStoreGateway], Awaitable[T]]
) -> T:
    """Run an async operation against the configured document store.

    Exits with LOAD_ERROR if the store cannot be initialized.
    """
    ctx = _current_context()
    logger = _logger(ctx, command)
    document_store = create_document_store(ctx.settings.storage, logger)
    if document_store is None:
        exit_with_error("Storage is not configured", ExitCode.LOAD_ERROR)

    gateway = DocumentStoreGateway(
        document_store, load_timeout=ctx.settings.sync.load_timeout, logger=logger
    )

    async def _main() -> T:
        try:
            return await operation(gateway)
        finally:
            await document_store.close()

    return anyio.run(_main)


def _find(projects: list[ProjectState], project_id: str) -> ProjectState:
    project = next((p for p in projects if p.id == project_id), None)
    if project is None:
        exit_with_error(f"Project not found: {project_id}", ExitCode.NOT_FOUND)
    return project


@app.command(name="list")
def _list(
    *,
    user: UserOption,
    output_format: Annotated[
        OutputFormat, Parameter(name="--format", help="Output format")
    ] = OutputFormat.TABLE,
) -> None:
    """List a user's projects, newest first

    Args:
        user: User whose projects to list
        output_format: Output format (table or json)
    """
    projects = _with_gateway("projects list", lambda gateway: gateway.load(user))

    if output_format is OutputFormat.JSON:
        print(format_json([summarize_project(p) for p in projects]))
        return

    if not projects:
        print("No projects found")
        return

    print(format_project_table(projects))


@app.command(name="create")
def _create(name: str, /, *, user: UserOption) -> None:
    """Create a project with the empty framework catalog

    Args:
        name: Project name
        user: Owner of the project
    """
    store = ProjectStore()
    try:
        project = store.create_project(name)
    except ProjectValidationError as e:
        exit_with_error(str(e), ExitCode.VALIDATION_ERROR)

    try:
        _with_gateway("projects create", lambda gateway: gateway.save(user, project))
    except PersistenceError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR)

    print(f"Created project '{project.name}' ({project.id})")


@app.command(name="delete")
def _delete(project_id: str, /, *, user: UserOption) -> None:
    """Delete a project

    Args:
        project_id: Id of the project to delete
        user: Owner of the project
    """

    async def _operation(gateway: DocumentStoreGateway) -> bool:
        projects = await gateway.load(user)
        if not any(p.id == project_id for p in projects):
            return False
        await gateway.delete(user, project_id)
        return True

    try:
        deleted = _with_gateway("projects delete", _operation)
    except PersistenceError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR)

    if not deleted:
        exit_with_error(f"Project not found: {project_id}", ExitCode.NOT_FOUND)
    print(f"Deleted project {project_id}")


@app.command(name="export")
def _export(
    project_id: str,
    /,
    *,
    user: UserOption,
    output: Annotated[
        Path | None,
        Parameter(help="Output file or directory (defaults to the current directory)"),
    ] = None,
) -> None:
    """Export a project's selected ideas as an HTML report

    Args:
        project_id: Id of the project to export
        user: Owner of the project
        output: Output file or directory
    """
    projects = _with_gateway("projects export", lambda gateway: gateway.load(user))
    report = render_report(_find(projects, project_id))

    target = output if output is not None else Path.cwd()
    if target.is_dir():
        target = target / report.filename

    try:
        target.write_text(report.content, encoding="utf-8")
    except OSError as e:
        exit_with_error(f"Failed to write {target}: {e}", ExitCode.IO_ERROR)

    print(f"Exported {report.filename} to {target}")


@app.command(name="migrate")
def _migrate(
    *,
    user: UserOption,
    cache: Annotated[
        Path | None,
        Parameter(help="Legacy cache file or directory (defaults to the data dir)"),
    ] = None,
) -> None:
    """Upload projects from a legacy local cache and clear it

    Args:
        user: User to upload the cached projects for
        cache: Legacy cache file or directory
    """
    legacy = LegacyProjectCache(cache)
    if not legacy.exists():
        print(f"No legacy cache found at {legacy.path}")
        return

    try:
        cached = legacy.read()
    except LegacyCacheError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR)

    if not cached:
        print(f"Legacy cache at {legacy.path} is empty")
        return

    logger = _logger(_current_context(), "projects migrate")
    migrated = _with_gateway(
        "projects migrate",
        lambda gateway: migrate_legacy_cache(user, legacy, gateway, logger=logger),
    )
    if not migrated:
        exit_with_error(
            f"Legacy cache was not migrated and has been kept at {legacy.path}",
            ExitCode.IO_ERROR,
        )
    print(f"Migrated {len(migrated)} project(s) for {user}")
