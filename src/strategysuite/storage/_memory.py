# pyright: reportExplicitAny=false
"""In-memory document store for tests and ephemeral servers."""

from typing import Any

from strategysuite.config import copy_value, deep_merge
from strategysuite.storage._protocol import StoreMetadata, document_path

__all__ = ["MemoryDocumentStore"]


def _last_updated(document: dict[str, Any]) -> int:
    value = document.get("lastUpdated", 0)
    return value if isinstance(value, int) else 0


class MemoryDocumentStore:
    """Document store backed by nested dictionaries.

    Documents are copied on the way in and out, so callers never share
    state with the store.
    """

    def __init__(self, *, collection: str = "users") -> None:
        self._collection = collection
        self._documents: dict[str, dict[str, dict[str, Any]]] = {}

    @property
    def collection(self) -> str:
        return self._collection

    async def list_documents(self, user_id: str) -> list[dict[str, Any]]:
        documents = self._documents.get(user_id, {}).values()
        return [
            copy_value(doc)
            for doc in sorted(documents, key=_last_updated, reverse=True)
        ]

    async def get_document(
        self, user_id: str, project_id: str
    ) -> dict[str, Any] | None:
        document = self._documents.get(user_id, {}).get(project_id)
        return copy_value(document) if document is not None else None

    async def save_document(
        self, user_id: str, project_id: str, document: dict[str, Any]
    ) -> StoreMetadata:
        user_documents = self._documents.setdefault(user_id, {})
        existing = user_documents.get(project_id, {})
        user_documents[project_id] = deep_merge(existing, document)
        return StoreMetadata(
            project_id=project_id,
            path=document_path(self._collection, user_id, project_id),
        )

    async def delete_document(self, user_id: str, project_id: str) -> bool:
        return self._documents.get(user_id, {}).pop(project_id, None) is not None

    async def close(self) -> None:
        pass
