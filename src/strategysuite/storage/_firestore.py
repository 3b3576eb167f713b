# pyright: reportExplicitAny=false, reportUnknownMemberType=false
"""Google Cloud Firestore document store.

Documents live at ``<collection>/<user id>/projects/<project id>``, the same
layout the hosted application uses.
"""

from pathlib import Path
from typing import Any, Final

from google.auth import default as google_auth_default
from google.auth.credentials import Credentials
from google.cloud import firestore
from google.oauth2 import service_account

from strategysuite.storage._protocol import StoreMetadata, document_path

__all__ = ["FirestoreDocumentStore", "build_credentials"]

_SCOPES: Final = ["https://www.googleapis.com/auth/datastore"]


def build_credentials(credentials_file: str = "") -> Credentials:
    """Load a service account key file, else application default credentials."""
    if credentials_file and Path(credentials_file).exists():
        return service_account.Credentials.from_service_account_file(
            credentials_file, scopes=_SCOPES
        )
    credentials, _ = google_auth_default(scopes=_SCOPES)
    return credentials


class FirestoreDocumentStore:
    """Document store backed by a Firestore AsyncClient."""

    def __init__(
        self,
        client: firestore.AsyncClient,
        *,
        collection: str = "users",
    ) -> None:
        self._client = client
        self._collection = collection

    @classmethod
    def from_credentials(
        cls,
        *,
        project: str = "",
        credentials_file: str = "",
        collection: str = "users",
    ) -> "FirestoreDocumentStore":
        """Create a store with a client built from the given credentials."""
        client = firestore.AsyncClient(
            project=project or None,
            credentials=build_credentials(credentials_file),
        )
        return cls(client, collection=collection)

    @property
    def collection(self) -> str:
        return self._collection

    def _projects(self, user_id: str) -> firestore.AsyncCollectionReference:
        return self._client.collection(document_path(self._collection, user_id))

    async def list_documents(self, user_id: str) -> list[dict[str, Any]]:
        query = self._projects(user_id).order_by(
            "lastUpdated", direction=firestore.Query.DESCENDING
        )
        return [snapshot.to_dict() or {} async for snapshot in query.stream()]

    async def get_document(
        self, user_id: str, project_id: str
    ) -> dict[str, Any] | None:
        snapshot = await self._projects(user_id).document(project_id).get()
        if not snapshot.exists:
            return None
        return snapshot.to_dict()

    async def save_document(
        self, user_id: str, project_id: str, document: dict[str, Any]
    ) -> StoreMetadata:
        _ = await self._projects(user_id).document(project_id).set(document, merge=True)
        return StoreMetadata(
            project_id=project_id,
            path=document_path(self._collection, user_id, project_id),
        )

    async def delete_document(self, user_id: str, project_id: str) -> bool:
        reference = self._projects(user_id).document(project_id)
        snapshot = await reference.get()
        if not snapshot.exists:
            return False
        _ = await reference.delete()
        return True

    async def close(self) -> None:
        pass
