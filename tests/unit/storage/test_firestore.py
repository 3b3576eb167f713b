# pyright: reportExplicitAny=false
from collections.abc import AsyncIterator
from typing import Any, cast

import pytest
from google.cloud import firestore

from strategysuite.config import deep_merge
from strategysuite.storage._firestore import FirestoreDocumentStore

pytestmark = pytest.mark.anyio


class _Snapshot:
    def __init__(self, data: dict[str, Any] | None) -> None:
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return dict(self._data) if self._data is not None else None


class _Document:
    def __init__(self, collection: "_Collection", document_id: str) -> None:
        self._collection = collection
        self._id = document_id

    async def get(self) -> _Snapshot:
        return _Snapshot(self._collection.documents.get(self._id))

    async def set(self, data: dict[str, Any], *, merge: bool = False) -> None:
        existing = self._collection.documents.get(self._id, {})
        self._collection.documents[self._id] = (
            deep_merge(existing, data) if merge else dict(data)
        )

    async def delete(self) -> None:
        _ = self._collection.documents.pop(self._id, None)


class _Query:
    def __init__(self, documents: list[dict[str, Any]]) -> None:
        self._documents = documents

    async def stream(self) -> AsyncIterator[_Snapshot]:
        for document in self._documents:
            yield _Snapshot(document)


class _Collection:
    def __init__(self) -> None:
        self.documents: dict[str, dict[str, Any]] = {}
        self.ordering: tuple[str, str] | None = None

    def document(self, document_id: str) -> _Document:
        return _Document(self, document_id)

    def order_by(self, field: str, *, direction: str) -> _Query:
        self.ordering = (field, direction)
        reverse = direction == firestore.Query.DESCENDING
        ordered = sorted(
            self.documents.values(), key=lambda d: d.get(field, 0), reverse=reverse
        )
        return _Query(ordered)


class _Client:
    def __init__(self) -> None:
        self.collections: dict[str, _Collection] = {}

    def collection(self, path: str) -> _Collection:
        return self.collections.setdefault(path, _Collection())


@pytest.fixture
def client() -> _Client:
    return _Client()


@pytest.fixture
def document_store(client: _Client) -> FirestoreDocumentStore:
    return FirestoreDocumentStore(
        cast("firestore.AsyncClient", client), collection="users"
    )


class TestFirestoreDocumentStore:
    async def test_writes_under_user_projects_collection(
        self, client: _Client, document_store: FirestoreDocumentStore
    ) -> None:
        metadata = await document_store.save_document(
            "u1", "p1", {"id": "p1", "lastUpdated": 1}
        )

        assert metadata.path == "users/u1/projects/p1"
        assert client.collections["users/u1/projects"].documents == {
            "p1": {"id": "p1", "lastUpdated": 1}
        }

    async def test_save_merges(self, document_store: FirestoreDocumentStore) -> None:
        _ = await document_store.save_document("u1", "p1", {"id": "p1", "name": "A"})
        _ = await document_store.save_document("u1", "p1", {"name": "B"})

        assert await document_store.get_document("u1", "p1") == {"id": "p1", "name": "B"}

    async def test_lists_newest_first(
        self, client: _Client, document_store: FirestoreDocumentStore
    ) -> None:
        _ = await document_store.save_document("u1", "a", {"id": "a", "lastUpdated": 1})
        _ = await document_store.save_document("u1", "b", {"id": "b", "lastUpdated": 2})

        documents = await document_store.list_documents("u1")

        assert [d["id"] for d in documents] == ["b", "a"]
        assert client.collections["users/u1/projects"].ordering == (
            "lastUpdated",
            firestore.Query.DESCENDING,
        )

    async def test_delete_reports_existence(
        self, document_store: FirestoreDocumentStore
    ) -> None:
        _ = await document_store.save_document("u1", "p1", {"id": "p1"})

        assert await document_store.delete_document("u1", "p1") is True
        assert await document_store.delete_document("u1", "p1") is False
        assert await document_store.get_document("u1", "p1") is None
