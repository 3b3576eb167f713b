"""Persistence: gateways, debounced synchronization and legacy migration."""

from strategysuite.sync._cache import LegacyProjectCache, migrate_legacy_cache
from strategysuite.sync._debounce import DebouncedCallback, KeyedDebouncer
from strategysuite.sync._gateway import (
    DEFAULT_LOAD_TIMEOUT,
    DocumentStoreGateway,
    HttpPersistenceGateway,
    PersistenceGateway,
    decode_projects,
)
from strategysuite.sync._sync import (
    DEFAULT_DEBOUNCE_SECONDS,
    PersistenceSync,
    SyncFailure,
)

__all__ = [
    "DEFAULT_DEBOUNCE_SECONDS",
    "DEFAULT_LOAD_TIMEOUT",
    "DebouncedCallback",
    "DocumentStoreGateway",
    "HttpPersistenceGateway",
    "KeyedDebouncer",
    "LegacyProjectCache",
    "PersistenceGateway",
    "PersistenceSync",
    "SyncFailure",
    "decode_projects",
    "migrate_legacy_cache",
]
