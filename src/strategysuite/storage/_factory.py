"""Document store construction from settings."""

import sqlite3
from typing import TYPE_CHECKING

from google.auth.exceptions import DefaultCredentialsError

from strategysuite.config import StorageBackend
from strategysuite.storage._memory import MemoryDocumentStore
from strategysuite.storage._sqlite import SqliteDocumentStore

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from strategysuite.config import StorageConfig
    from strategysuite.storage._protocol import DocumentStore


def create_document_store(
    config: "StorageConfig",  # noqa: UP037
    logger: "FilteringBoundLogger",  # noqa: UP037
) -> "DocumentStore | None":  # noqa: UP037
    """Build the configured document store.

    Returns:
        The store, or None when the backend cannot be initialized (missing
        credentials or an unwritable database). The caller treats None as
        storage not configured.
    """
    match config.backend:
        case StorageBackend.MEMORY:
            logger.warning("storage_ephemeral", backend=config.backend.value)
            return MemoryDocumentStore(collection=config.collection)
        case StorageBackend.SQLITE:
            try:
                store = SqliteDocumentStore(
                    config.database_path, collection=config.collection
                )
            except (OSError, sqlite3.Error) as e:
                logger.warning(
                    "storage_disabled",
                    backend=config.backend.value,
                    path=str(config.database_path),
                    reason=str(e),
                )
                return None
            logger.info("storage_enabled", backend="sqlite", path=str(store.path))
            return store
        case StorageBackend.FIRESTORE:
            from strategysuite.storage._firestore import (  # noqa: PLC0415
                FirestoreDocumentStore,
            )

            try:
                store = FirestoreDocumentStore.from_credentials(
                    project=config.firestore_project,
                    credentials_file=config.credentials_file,
                    collection=config.collection,
                )
            except DefaultCredentialsError as e:
                logger.warning(
                    "storage_disabled", backend=config.backend.value, reason=str(e)
                )
                return None
            logger.info("storage_enabled", backend="firestore")
            return store
