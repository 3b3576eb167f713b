"""In-memory project store and its change events."""

from strategysuite.store._events import StoreEvent, StoreEventKind, StoreListener
from strategysuite.store._store import ProjectStore

__all__ = ["ProjectStore", "StoreEvent", "StoreEventKind", "StoreListener"]
