"""Legacy local project cache and its one-time migration.

Before projects were stored per user on the server they lived in a single
local cache entry holding a JSON array of project documents. On first open
those projects are uploaded and the cache is cleared.
"""

from pathlib import Path

from pydantic import ValidationError
from structlog.typing import FilteringBoundLogger

from strategysuite.exceptions import LegacyCacheError, PersistenceError
from strategysuite.project import (
    ProjectDocument,
    ProjectState,
    dump_document,
    from_document,
)
from strategysuite.sync._gateway import PersistenceGateway
from strategysuite.utils import (
    LEGACY_CACHE_FILE_NAME,
    create_logger,
    dump_json,
    get_default_legacy_cache_path,
    load_json_file,
)

__all__ = ["LegacyProjectCache", "migrate_legacy_cache"]


class LegacyProjectCache:
    """A JSON file holding an array of project documents."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the cache.

        Args:
            path: Cache file, or a directory containing
                ``strategysuite_projects_v1.json``. Defaults to the user data
                directory.
        """
        if path is None:
            path = get_default_legacy_cache_path()
        elif path.is_dir():
            path = path / LEGACY_CACHE_FILE_NAME
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def read(self) -> list[ProjectState]:
        """Read every cached project.

        Returns:
            The cached projects in file order; empty if the file is absent.

        Raises:
            LegacyCacheError: If the file is not a JSON array of valid
                project documents.
        """
        if not self.exists():
            return []
        try:
            data = load_json_file(self._path)
        except OSError as e:
            msg = f"Cannot read legacy cache: {e}"
            raise LegacyCacheError(msg, path=self._path) from e
        if not isinstance(data, list):
            msg = "Legacy cache is not a JSON array"
            raise LegacyCacheError(msg, path=self._path)
        try:
            return [
                from_document(ProjectDocument.model_validate(item)) for item in data
            ]
        except ValidationError as e:
            msg = f"Legacy cache holds an invalid project: {e.error_count()} error(s)"
            raise LegacyCacheError(msg, path=self._path) from e

    def write(self, projects: list[ProjectState]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        _ = self._path.write_text(dump_json([dump_document(p) for p in projects]))

    def clear(self) -> None:
        self._path.unlink(missing_ok=True)


async def migrate_legacy_cache(
    user_id: str,
    cache: LegacyProjectCache,
    gateway: PersistenceGateway,
    *,
    logger: FilteringBoundLogger | None = None,
) -> list[ProjectState]:
    """Upload cached projects once, then clear the cache.

    Projects are saved one at a time. If the cache cannot be decoded or any
    save fails, the cache is left in place so the next open retries.

    Returns:
        The migrated projects, or an empty list if nothing was migrated.
    """
    log = (logger if logger is not None else create_logger()).bind(user_id=user_id)

    try:
        projects = cache.read()
    except LegacyCacheError as e:
        log.warning("legacy_cache_unreadable", path=str(e.path), reason=str(e))
        return []

    if not projects:
        return []

    try:
        for project in projects:
            await gateway.save(user_id, project)
    except PersistenceError as e:
        log.warning(
            "legacy_cache_migration_failed", project_id=e.project_id, reason=str(e)
        )
        return []

    cache.clear()
    log.info("legacy_cache_migrated", count=len(projects))
    return projects
