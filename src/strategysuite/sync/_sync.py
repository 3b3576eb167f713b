"""Store-to-remote persistence synchronizer."""

from collections.abc import Callable
from dataclasses import dataclass
from functools import partial
from types import TracebackType
from typing import Self

import anyio
from anyio.abc import TaskGroup
from structlog.typing import FilteringBoundLogger

from strategysuite.exceptions import PersistenceError
from strategysuite.store import ProjectStore, StoreEvent, StoreEventKind
from strategysuite.sync._debounce import KeyedDebouncer
from strategysuite.sync._gateway import PersistenceGateway
from strategysuite.utils import create_logger

__all__ = ["DEFAULT_DEBOUNCE_SECONDS", "PersistenceSync", "SyncFailure"]

DEFAULT_DEBOUNCE_SECONDS = 1.0


@dataclass(frozen=True, slots=True)
class SyncFailure:
    """A remote write that did not go through.

    Attributes:
        project_id: The project involved.
        operation: "save" or "delete".
        message: Description of the failure.
    """

    project_id: str
    operation: str
    message: str


class PersistenceSync:
    """Mirror store changes into a persistence gateway.

    Created and updated projects are saved after a quiet period of
    ``debounce_seconds``; the snapshot written is the one current when the
    window elapses. Deletions cancel any pending save and are sent at once.
    Failures are logged and reported, never rolled back.

    Use as an async context manager; pending saves are flushed on exit.

    Example:
        >>> async with PersistenceSync(store, gateway, "user-1") as sync:
        ...     store.update_project(project_id, set_business_details("Cafe"))
    """

    def __init__(
        self,
        store: ProjectStore,
        gateway: PersistenceGateway,
        user_id: str,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        on_failure: Callable[[SyncFailure], None] | None = None,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._user_id = user_id
        self._debounce_seconds = debounce_seconds
        self._on_failure = on_failure
        self._logger = (logger if logger is not None else create_logger()).bind(
            user_id=user_id
        )
        self._failures: list[SyncFailure] = []
        self._task_group: TaskGroup | None = None
        self._debouncer: KeyedDebouncer | None = None
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def failures(self) -> tuple[SyncFailure, ...]:
        return tuple(self._failures)

    def pending(self, project_id: str) -> bool:
        return self._debouncer is not None and self._debouncer.pending(project_id)

    async def __aenter__(self) -> Self:
        task_group = anyio.create_task_group()
        _ = await task_group.__aenter__()
        self._task_group = task_group
        self._debouncer = KeyedDebouncer(
            task_group, self._debounce_seconds, logger=self._logger
        )
        self._unsubscribe = self._store.subscribe(self._on_event)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> bool | None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        task_group = self._task_group
        debouncer = self._debouncer
        self._task_group = None
        self._debouncer = None
        if task_group is None:
            return None

        if exc_type is None and debouncer is not None:
            await debouncer.flush()
        return await task_group.__aexit__(exc_type, exc_val, exc_tb)

    # -------------------------------------------------------------------------
    # Store events
    # -------------------------------------------------------------------------

    def _on_event(self, event: StoreEvent) -> None:
        if event.project_id is None:
            return
        if self._debouncer is None or self._task_group is None:
            return
        match event.kind:
            case StoreEventKind.CREATED | StoreEventKind.UPDATED:
                self._debouncer.schedule(
                    event.project_id, partial(self._save_current, event.project_id)
                )
            case StoreEventKind.DELETED:
                _ = self._debouncer.cancel(event.project_id)
                self._task_group.start_soon(self._delete, event.project_id)
            case StoreEventKind.LOADED:
                pass

    async def _save_current(self, project_id: str) -> None:
        project = self._store.get(project_id)
        if project is None:
            return
        try:
            await self._gateway.save(self._user_id, project)
        except PersistenceError as e:
            self._record_failure(project_id, "save", e)
            return
        self._logger.info(
            "project_saved", project_id=project_id, last_updated=project.last_updated
        )

    async def _delete(self, project_id: str) -> None:
        try:
            await self._delete_remote(project_id)
        except Exception:
            self._logger.exception("delete_task_failed", project_id=project_id)

    async def _delete_remote(self, project_id: str) -> None:
        try:
            await self._gateway.delete(self._user_id, project_id)
        except PersistenceError as e:
            self._record_failure(project_id, "delete", e)
            return
        self._logger.info("project_deleted", project_id=project_id)

    def _record_failure(
        self, project_id: str, operation: str, error: Exception
    ) -> None:
        failure = SyncFailure(
            project_id=project_id, operation=operation, message=str(error)
        )
        self._failures.append(failure)
        self._logger.error(
            f"{operation}_failed", project_id=project_id, reason=failure.message
        )
        if self._on_failure is not None:
            self._on_failure(failure)

    # -------------------------------------------------------------------------
    # Explicit saves
    # -------------------------------------------------------------------------

    async def save_now(self, project_id: str) -> None:
        """Save a project immediately, dropping any pending debounced save.

        Raises:
            ProjectNotFoundError: If the store has no such project.
            PersistenceError: If the write fails.
        """
        if self._debouncer is not None:
            _ = self._debouncer.cancel(project_id)
        project = self._store.require(project_id)
        await self._gateway.save(self._user_id, project)
        self._logger.info("project_saved", project_id=project_id, explicit=True)

    async def flush(self) -> None:
        """Run every pending save now."""
        if self._debouncer is not None:
            await self._debouncer.flush()

