# pyright: reportExplicitAny=false
"""SQLite-backed document store.

Each project document is one row keyed by (user id, project id), with the
JSON body stored as text and ``lastUpdated`` mirrored into a column for
ordering. Blocking SQLite calls run in a worker thread.
"""

import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from functools import partial
from pathlib import Path
from typing import Any, Final, cast

import anyio.to_thread
import orjson
from pydantic import BaseModel

from strategysuite.config import deep_merge
from strategysuite.storage._protocol import StoreMetadata, document_path

__all__ = ["SqliteDocumentStore"]

_SCHEMA: Final = """
CREATE TABLE IF NOT EXISTS documents (
    user_id TEXT NOT NULL,
    project_id TEXT NOT NULL,
    last_updated INTEGER NOT NULL DEFAULT 0,
    body TEXT NOT NULL,
    PRIMARY KEY (user_id, project_id)
);
CREATE INDEX IF NOT EXISTS idx_documents_user_updated
    ON documents (user_id, last_updated DESC);
"""

_SELECT_ONE: Final = "SELECT * FROM documents WHERE user_id = ? AND project_id = ?"
_SELECT_USER: Final = (
    "SELECT * FROM documents WHERE user_id = ? ORDER BY last_updated DESC"
)
_UPSERT: Final = """
INSERT INTO documents (user_id, project_id, last_updated, body)
VALUES (:user_id, :project_id, :last_updated, :body)
ON CONFLICT (user_id, project_id) DO UPDATE SET
    last_updated = excluded.last_updated,
    body = excluded.body
"""
_DELETE: Final = "DELETE FROM documents WHERE user_id = ? AND project_id = ?"


class _DocumentRow(BaseModel):
    user_id: str
    project_id: str
    last_updated: int = 0
    body: str

    @classmethod
    def from_document(
        cls, user_id: str, project_id: str, document: dict[str, Any]
    ) -> "_DocumentRow":
        last_updated = document.get("lastUpdated", 0)
        return cls(
            user_id=user_id,
            project_id=project_id,
            last_updated=last_updated if isinstance(last_updated, int) else 0,
            body=orjson.dumps(document).decode(),
        )

    def document(self) -> dict[str, Any]:
        return orjson.loads(self.body)


@contextmanager
def _connect(path: Path) -> Iterator[sqlite3.Connection]:
    """Open a WAL-mode connection that commits on success and rolls back on error."""
    conn = sqlite3.connect(str(path), timeout=30.0, isolation_level="IMMEDIATE")
    conn.row_factory = sqlite3.Row
    with suppress(sqlite3.OperationalError):
        _ = conn.execute("PRAGMA journal_mode=WAL")
    _ = conn.execute("PRAGMA busy_timeout=10000")

    try:
        yield conn
        conn.commit()
    except BaseException:
        with suppress(sqlite3.Error):
            conn.rollback()
        raise
    finally:
        conn.close()


def _fetch_row(
    conn: sqlite3.Connection, user_id: str, project_id: str
) -> _DocumentRow | None:
    cursor = conn.execute(_SELECT_ONE, (user_id, project_id))
    row = cast("sqlite3.Row | None", cursor.fetchone())
    return _DocumentRow.model_validate(dict(row)) if row is not None else None


class SqliteDocumentStore:
    """Document store persisted in a single SQLite file."""

    def __init__(self, path: Path | str, *, collection: str = "users") -> None:
        """Initialize the store, creating the database and its directory if needed.

        Args:
            path: Database file path.
            collection: Collection name reported in document paths.

        Raises:
            OSError: If the parent directory cannot be created.
            sqlite3.Error: If the database cannot be opened or initialized.
        """
        self._path = Path(path)
        self._collection = collection
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with _connect(self._path) as conn:
            _ = conn.executescript(_SCHEMA)

    @property
    def collection(self) -> str:
        return self._collection

    @property
    def path(self) -> Path:
        return self._path

    # Synchronous implementations, run through anyio.to_thread

    def _list(self, user_id: str) -> list[dict[str, Any]]:
        with _connect(self._path) as conn:
            rows = cast(
                "list[sqlite3.Row]", conn.execute(_SELECT_USER, (user_id,)).fetchall()
            )
        return [_DocumentRow.model_validate(dict(row)).document() for row in rows]

    def _get(self, user_id: str, project_id: str) -> _DocumentRow | None:
        with _connect(self._path) as conn:
            return _fetch_row(conn, user_id, project_id)

    def _save(self, user_id: str, project_id: str, document: dict[str, Any]) -> None:
        with _connect(self._path) as conn:
            existing = _fetch_row(conn, user_id, project_id)
            merged = deep_merge(existing.document(), document) if existing else document
            row = _DocumentRow.from_document(user_id, project_id, merged)
            _ = conn.execute(_UPSERT, row.model_dump())

    def _delete(self, user_id: str, project_id: str) -> bool:
        with _connect(self._path) as conn:
            cursor = conn.execute(_DELETE, (user_id, project_id))
        return cursor.rowcount > 0

    # DocumentStore protocol

    async def list_documents(self, user_id: str) -> list[dict[str, Any]]:
        return await anyio.to_thread.run_sync(self._list, user_id)

    async def get_document(
        self, user_id: str, project_id: str
    ) -> dict[str, Any] | None:
        row = await anyio.to_thread.run_sync(self._get, user_id, project_id)
        return row.document() if row is not None else None

    async def save_document(
        self, user_id: str, project_id: str, document: dict[str, Any]
    ) -> StoreMetadata:
        await anyio.to_thread.run_sync(
            partial(self._save, user_id, project_id, document)
        )
        return StoreMetadata(
            project_id=project_id,
            path=document_path(self._collection, user_id, project_id),
        )

    async def delete_document(self, user_id: str, project_id: str) -> bool:
        return await anyio.to_thread.run_sync(self._delete, user_id, project_id)

    async def close(self) -> None:
        pass
