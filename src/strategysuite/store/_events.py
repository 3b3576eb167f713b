"""Change notifications emitted by the project store."""

from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from strategysuite.project import ProjectState

__all__ = ["StoreEvent", "StoreEventKind", "StoreListener"]


class StoreEventKind(StrEnum):
    """Kinds of store change."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    LOADED = "loaded"


@dataclass(frozen=True, slots=True)
class StoreEvent:
    """A single store change.

    Attributes:
        kind: What happened.
        project_id: The affected project, or None for a bulk load.
        project: Snapshot after the change (None for deletions and loads).
    """

    kind: StoreEventKind
    project_id: str | None = None
    project: ProjectState | None = None


type StoreListener = Callable[[StoreEvent], None]
