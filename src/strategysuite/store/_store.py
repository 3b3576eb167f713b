"""In-memory project store.

The ProjectStore holds the authoritative list of projects for the current
user together with the active selection, and is the only place project state
is mutated. Every change replaces the project tuple in one synchronous step
and then notifies subscribers.
"""

from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import Final

from structlog.typing import FilteringBoundLogger

from strategysuite.exceptions import ProjectNotFoundError, ProjectValidationError
from strategysuite.project import (
    FrameworkKey,
    MoveDirection,
    ProjectState,
    Updater,
    current_millis,
    move_idea,
    new_id,
    new_project,
    swap_target,
)
from strategysuite.store._events import StoreEvent, StoreEventKind, StoreListener
from strategysuite.utils import create_logger

__all__ = ["ProjectStore"]


class ProjectStore:
    """Authoritative in-memory collection of projects.

    Attributes:
        _projects: Current projects, newest first.
        _active_id: Id of the active project, if any.
        _listeners: Subscribers notified after every change.
        _clock: Source of epoch-millisecond timestamps.
        _logger: Structured logger.
    """

    __slots__: Final = ("_active_id", "_clock", "_listeners", "_logger", "_projects")

    _projects: tuple[ProjectState, ...]
    _active_id: str | None
    _listeners: list[StoreListener]
    _clock: Callable[[], int]
    _logger: FilteringBoundLogger

    def __init__(
        self,
        projects: Iterable[ProjectState] = (),
        *,
        clock: Callable[[], int] = current_millis,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            projects: Initial projects, in display order.
            clock: Timestamp source in epoch milliseconds. Tests substitute
                a controllable clock.
            logger: Structured logger. If None, a stderr logger is created.
        """
        self._projects = tuple(projects)
        self._active_id = None
        self._listeners = []
        self._clock = clock
        self._logger = logger if logger is not None else create_logger()

    # -------------------------------------------------------------------------
    # Subscription
    # -------------------------------------------------------------------------

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a change listener.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _notify(self, event: StoreEvent) -> None:
        for listener in tuple(self._listeners):
            try:
                listener(event)
            except Exception:
                self._logger.exception(
                    "store_listener_failed",
                    kind=event.kind.value,
                    project_id=event.project_id,
                )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def projects(self) -> tuple[ProjectState, ...]:
        """Snapshot of all projects, newest first."""
        return self._projects

    @property
    def active_project_id(self) -> str | None:
        return self._active_id

    @property
    def active_project(self) -> ProjectState | None:
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    def get(self, project_id: str) -> ProjectState | None:
        return next((p for p in self._projects if p.id == project_id), None)

    def require(self, project_id: str) -> ProjectState:
        """Get a project or raise.

        Raises:
            ProjectNotFoundError: If no project has this id.
        """
        project = self.get(project_id)
        if project is None:
            msg = f"Project not found: {project_id}"
            raise ProjectNotFoundError(msg, project_id=project_id)
        return project

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, project_id: str) -> ProjectState:
        """Make a project the active one.

        Raises:
            ProjectNotFoundError: If no project has this id.
        """
        project = self.require(project_id)
        self._active_id = project_id
        return project

    def clear_selection(self) -> None:
        self._active_id = None

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def replace_all(self, projects: Iterable[ProjectState]) -> None:
        """Hydrate the store from a load, newest first.

        The active selection is kept only if the project is still present.
        Emits a ``loaded`` event, which does not trigger remote writes.
        """
        self._projects = tuple(
            sorted(projects, key=lambda p: p.last_updated, reverse=True)
        )
        if self._active_id is not None and self.get(self._active_id) is None:
            self._active_id = None
        self._notify(StoreEvent(StoreEventKind.LOADED))

    def create_project(self, name: str) -> ProjectState:
        """Create a project from the catalog and make it active.

        Args:
            name: Display name; surrounding whitespace is removed.

        Returns:
            The new project.

        Raises:
            ProjectValidationError: If the name is blank.
        """
        clean_name = name.strip()
        if not clean_name:
            msg = "Project name cannot be empty"
            raise ProjectValidationError(msg, field="name", expected="non-empty string")

        project = new_project(new_id(), clean_name, self._clock())
        self._projects = (project, *self._projects)
        self._active_id = project.id
        self._logger.debug("project_created", project_id=project.id)
        self._notify(StoreEvent(StoreEventKind.CREATED, project.id, project))
        return project

    def update_project(self, project_id: str, updater: Updater) -> ProjectState | None:
        """Apply a pure transformation to one project.

        The updater runs first; if it raises, the store is left untouched.
        ``last_updated`` is then refreshed unconditionally and never moves
        backwards.

        Args:
            project_id: The project to update.
            updater: Pure ``ProjectState -> ProjectState`` function.

        Returns:
            The updated project, or None if no project has this id.
        """
        index = next(
            (i for i, p in enumerate(self._projects) if p.id == project_id), None
        )
        if index is None:
            return None

        current = self._projects[index]
        updated = updater(current)
        updated = replace(
            updated, last_updated=max(current.last_updated, self._clock())
        )
        self._projects = (
            *self._projects[:index],
            updated,
            *self._projects[index + 1 :],
        )
        self._notify(StoreEvent(StoreEventKind.UPDATED, project_id, updated))
        return updated

    def update_active(self, updater: Updater) -> ProjectState | None:
        """Apply an updater to the active project, if there is one."""
        if self._active_id is None:
            return None
        return self.update_project(self._active_id, updater)

    def delete_project(self, project_id: str) -> bool:
        """Remove a project; clears the selection if it was active.

        Returns:
            True if a project was removed.
        """
        remaining = tuple(p for p in self._projects if p.id != project_id)
        if len(remaining) == len(self._projects):
            return False
        self._projects = remaining
        if self._active_id == project_id:
            self._active_id = None
        self._logger.debug("project_deleted", project_id=project_id)
        self._notify(StoreEvent(StoreEventKind.DELETED, project_id))
        return True

    def reorder_idea(
        self,
        framework_key: FrameworkKey | str,
        item_id: str,
        idea_id: str,
        direction: MoveDirection | str,
    ) -> ProjectState | None:
        """Swap an idea of the active project with its neighbor.

        At the boundary (or when the idea is absent) nothing happens: no
        update, no timestamp refresh and no event.

        Returns:
            The updated project, or None if nothing changed.
        """
        project = self.active_project
        if project is None:
            return None
        if swap_target(project, framework_key, item_id, idea_id, direction) is None:
            return None
        return self.update_project(
            project.id, move_idea(framework_key, item_id, idea_id, direction)
        )
