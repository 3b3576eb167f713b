# pyright: reportExplicitAny=false
"""Document store protocol.

A document store holds one JSON document per project, grouped per user
under ``<collection>/<user id>/projects/<project id>``. Documents are plain
camelCase dictionaries; validation happens at the edges.
"""

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

__all__ = ["DocumentStore", "StoreMetadata", "document_path"]


@dataclass(frozen=True, slots=True)
class StoreMetadata:
    """Where a document lives in the store.

    Attributes:
        project_id: The document id.
        path: Slash-separated location of the document.
    """

    project_id: str
    path: str


def document_path(collection: str, user_id: str, project_id: str | None = None) -> str:
    """Build the location of a user's project collection or one document."""
    base = f"{collection}/{user_id}/projects"
    return base if project_id is None else f"{base}/{project_id}"


@runtime_checkable
class DocumentStore(Protocol):
    """Per-user project document collection.

    Implementations:
        - MemoryDocumentStore: process-local dictionaries
        - SqliteDocumentStore: a single SQLite file
        - FirestoreDocumentStore: Google Cloud Firestore
    """

    @property
    def collection(self) -> str:
        """Top-level collection name."""
        ...

    async def list_documents(self, user_id: str) -> list[dict[str, Any]]:
        """List every project document of a user, newest first."""
        ...

    async def get_document(
        self, user_id: str, project_id: str
    ) -> dict[str, Any] | None:
        """Fetch one project document, or None if it does not exist."""
        ...

    async def save_document(
        self, user_id: str, project_id: str, document: dict[str, Any]
    ) -> StoreMetadata:
        """Upsert a document, merging it into any existing fields.

        Nested dictionaries merge recursively; lists and scalars replace.
        """
        ...

    async def delete_document(self, user_id: str, project_id: str) -> bool:
        """Delete one document.

        Returns:
            True if a document was removed.
        """
        ...

    async def close(self) -> None:
        """Release any held resources."""
        ...
