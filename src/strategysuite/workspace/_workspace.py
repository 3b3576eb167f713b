"""User session context.

A Workspace wires one ProjectStore to a persistence gateway and a
suggestion gateway for a single user, replacing global application state
with an object the caller constructs and owns.
"""

from collections.abc import Awaitable, Callable
from types import TracebackType
from typing import Self

import httpx
from structlog.typing import FilteringBoundLogger

from strategysuite.config import Settings
from strategysuite.exceptions import ProjectNotFoundError
from strategysuite.export import ExportedReport, render_report
from strategysuite.project import (
    FrameworkKey,
    MoveDirection,
    ProjectState,
    Updater,
    build_business_context,
    merge_suggestions,
    normalize_suggestions,
)
from strategysuite.store import ProjectStore
from strategysuite.suggest import HttpSuggestionGateway, SuggestionGateway
from strategysuite.sync import (
    DEFAULT_DEBOUNCE_SECONDS,
    HttpPersistenceGateway,
    LegacyProjectCache,
    PersistenceGateway,
    PersistenceSync,
    SyncFailure,
    migrate_legacy_cache,
)
from strategysuite.utils import create_logger

__all__ = ["Workspace"]


class Workspace:
    """One user's editing session.

    Use as an async context manager. Entering starts the persistence
    synchronizer; leaving flushes pending saves.

    Example:
        >>> async with Workspace("user-1", persistence=gw, suggestions=sg) as ws:
        ...     await ws.open()
        ...     project = ws.create_project("Acme")
        ...     await ws.generate_ideas("swot", "strengths")
    """

    def __init__(  # noqa: PLR0913
        self,
        user_id: str,
        *,
        persistence: PersistenceGateway,
        suggestions: SuggestionGateway,
        store: ProjectStore | None = None,
        legacy_cache: LegacyProjectCache | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_failure: Callable[[SyncFailure], None] | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the workspace.

        Args:
            user_id: Owner of every project in the session.
            persistence: Gateway to the user's remote project collection.
            suggestions: Gateway to the idea generator.
            store: Store to use; a new empty store when None.
            legacy_cache: Local cache to migrate on open, if any.
            debounce_seconds: Quiet period before a change is saved.
            on_failure: Called with every failed remote write.
            logger: Structured logger. If None, a stderr logger is created.
        """
        self._user_id = user_id
        self._logger = (logger if logger is not None else create_logger()).bind(
            user_id=user_id
        )
        self._persistence = persistence
        self._suggestions = suggestions
        self._store = store if store is not None else ProjectStore(logger=self._logger)
        self._legacy_cache = legacy_cache
        self._sync = PersistenceSync(
            self._store,
            persistence,
            user_id,
            debounce_seconds=debounce_seconds,
            on_failure=on_failure,
            logger=self._logger,
        )
        self._closers: list[Callable[[], Awaitable[None]]] = []

    @classmethod
    def from_settings(  # noqa: PLR0913
        cls,
        user_id: str,
        settings: Settings,
        *,
        legacy_cache: LegacyProjectCache | None = None,
        on_failure: Callable[[SyncFailure], None] | None = None,
        logger: FilteringBoundLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Workspace":
        """Create a workspace talking to the API server named in settings.

        Both gateways get their own HTTP client, closed when the workspace
        context exits.

        Args:
            user_id: Owner of every project in the session.
            settings: Source of the server URL, timeouts and debounce period.
            legacy_cache: Local cache to migrate on open, if any.
            on_failure: Called with every failed remote write.
            logger: Structured logger. If None, a stderr logger is created.
            transport: HTTP transport for both clients; the network when None.

        Returns:
            The workspace, not yet entered.
        """
        persistence = HttpPersistenceGateway.connect(
            settings.client.base_url,
            timeout=settings.client.timeout,
            load_timeout=settings.sync.load_timeout,
            logger=logger,
            transport=transport,
        )
        suggestions = HttpSuggestionGateway.connect(
            settings.client.base_url,
            timeout=settings.client.timeout,
            logger=logger,
            transport=transport,
        )
        workspace = cls(
            user_id,
            persistence=persistence,
            suggestions=suggestions,
            legacy_cache=legacy_cache,
            debounce_seconds=settings.sync.debounce_seconds,
            on_failure=on_failure,
            logger=logger,
        )
        workspace._closers = [persistence.aclose, suggestions.aclose]  # noqa: SLF001
        return workspace

    async def __aenter__(self) -> Self:
        _ = await self._sync.__aenter__()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        try:
            return await self._sync.__aexit__(exc_type, exc_val, exc_tb)
        finally:
            for close in self._closers:
                await close()
            self._closers.clear()

    @property
    def user_id(self) -> str:
        return self._user_id

    @property
    def store(self) -> ProjectStore:
        return self._store

    @property
    def sync(self) -> PersistenceSync:
        return self._sync

    @property
    def projects(self) -> tuple[ProjectState, ...]:
        return self._store.projects

    @property
    def active_project(self) -> ProjectState | None:
        return self._store.active_project

    async def open(self) -> tuple[ProjectState, ...]:
        """Hydrate the store for this user.

        Migrates the legacy cache first; when that migrates anything, the
        migrated projects are used as is. Otherwise the user's projects are
        loaded from the persistence gateway.

        Returns:
            The projects now in the store, newest first.
        """
        migrated: list[ProjectState] = []
        if self._legacy_cache is not None:
            migrated = await migrate_legacy_cache(
                self._user_id,
                self._legacy_cache,
                self._persistence,
                logger=self._logger,
            )
        projects = migrated or await self._persistence.load(self._user_id)
        self._store.replace_all(projects)
        self._logger.info(
            "workspace_opened", count=len(projects), migrated=bool(migrated)
        )
        return self._store.projects

    # -------------------------------------------------------------------------
    # Project operations
    # -------------------------------------------------------------------------

    def create_project(self, name: str) -> ProjectState:
        return self._store.create_project(name)

    def select(self, project_id: str) -> ProjectState:
        return self._store.select(project_id)

    def clear_selection(self) -> None:
        self._store.clear_selection()

    def delete_project(self, project_id: str) -> bool:
        return self._store.delete_project(project_id)

    def update(
        self, updater: Updater, project_id: str | None = None
    ) -> ProjectState | None:
        """Apply an updater to a project, the active one by default."""
        if project_id is None:
            return self._store.update_active(updater)
        return self._store.update_project(project_id, updater)

    def reorder_idea(
        self,
        framework_key: FrameworkKey | str,
        item_id: str,
        idea_id: str,
        direction: MoveDirection | str,
    ) -> ProjectState | None:
        return self._store.reorder_idea(framework_key, item_id, idea_id, direction)

    async def generate_ideas(
        self,
        framework_key: FrameworkKey | str,
        item_id: str,
        *,
        focus: str | None = None,
    ) -> tuple[str, ...]:
        """Request suggestions for a category of the active project and merge them.

        The store is read again after the request returns, so edits made
        while waiting are kept. When no usable suggestion comes back the
        project is left untouched.

        Returns:
            The suggestion texts merged, without the AI marker.

        Raises:
            CategoryNotFoundError: If the framework or category is unknown.
            SuggestionError: If the suggestion request fails.
        """
        project = self._store.active_project
        if project is None:
            return ()
        item = project.item(framework_key, item_id)

        suggestions = await self._suggestions.suggest(
            framework_key,
            item.title,
            build_business_context(project),
            focus,
        )
        usable = normalize_suggestions(suggestions)
        if not usable:
            self._logger.info(
                "no_usable_suggestions",
                framework_key=str(framework_key),
                item_id=item_id,
            )
            return ()

        _ = self._store.update_project(
            project.id, merge_suggestions(framework_key, item_id, usable)
        )
        return usable

    def export(self, project_id: str | None = None) -> ExportedReport:
        """Render a project, the active one by default.

        Raises:
            ProjectNotFoundError: If there is no such project or none is active.
        """
        if project_id is None:
            project = self._store.active_project
            if project is None:
                msg = "No active project to export"
                raise ProjectNotFoundError(msg)
        else:
            project = self._store.require(project_id)
        return render_report(project)

    async def save_now(self, project_id: str | None = None) -> None:
        """Save a project immediately, the active one by default.

        Raises:
            ProjectNotFoundError: If there is no such project or none is active.
            PersistenceError: If the write fails.
        """
        target = project_id if project_id is not None else self._store.active_project_id
        if target is None:
            msg = "No active project to save"
            raise ProjectNotFoundError(msg)
        await self._sync.save_now(target)
