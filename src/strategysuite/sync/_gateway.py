# pyright: reportAny=false, reportExplicitAny=false
"""Persistence gateways.

A gateway moves ProjectState to and from a user's remote document
collection. ``load`` never raises: an unreachable, unconfigured or slow
backend yields an empty list. ``save`` and ``delete`` raise
PersistenceError so the caller can report the failure.
"""

from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable
from urllib.parse import quote

import anyio
import httpx
from pydantic import ValidationError
from structlog.typing import FilteringBoundLogger

from strategysuite.exceptions import PersistenceError
from strategysuite.project import (
    ProjectDocument,
    ProjectState,
    dump_document,
    from_document,
)
from strategysuite.storage import DocumentStore
from strategysuite.utils import create_logger, error_message, load_json, send_with_retry

__all__ = [
    "DEFAULT_LOAD_TIMEOUT",
    "DocumentStoreGateway",
    "HttpPersistenceGateway",
    "PersistenceGateway",
    "decode_projects",
]

DEFAULT_LOAD_TIMEOUT = 10.0


@runtime_checkable
class PersistenceGateway(Protocol):
    """Remote create/read/update/delete for one user's projects."""

    async def load(self, user_id: str) -> list[ProjectState]:
        """Load all projects for a user, newest first; empty on any failure."""
        ...

    async def save(self, user_id: str, project: ProjectState) -> None:
        """Upsert a project.

        Raises:
            PersistenceError: If the write fails.
        """
        ...

    async def delete(self, user_id: str, project_id: str) -> None:
        """Remove a project.

        Raises:
            PersistenceError: If the delete fails.
        """
        ...


def decode_projects(
    documents: Iterable[object], logger: FilteringBoundLogger
) -> list[ProjectState]:
    """Validate raw documents into projects, newest first.

    Malformed documents are skipped with a warning.
    """
    projects: list[ProjectState] = []
    for raw in documents:
        try:
            document = ProjectDocument.model_validate(raw)
        except ValidationError as e:
            project_id = raw.get("id") if isinstance(raw, dict) else None
            logger.warning(
                "project_document_skipped",
                project_id=project_id,
                errors=e.error_count(),
            )
            continue
        projects.append(from_document(document))
    return sorted(projects, key=lambda p: p.last_updated, reverse=True)


# -----------------------------------------------------------------------------
# HTTP gateway
# -----------------------------------------------------------------------------


class HttpPersistenceGateway:
    """Gateway talking to the project API of the StrategySuite server."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        load_timeout: float = DEFAULT_LOAD_TIMEOUT,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            client: HTTP client whose base URL points at the server.
            load_timeout: Upper bound in seconds for ``load``.
            logger: Structured logger. If None, a stderr logger is created.
        """
        self._client = client
        self._load_timeout = load_timeout
        self._logger = logger if logger is not None else create_logger()

    @classmethod
    def connect(
        cls,
        base_url: str,
        *,
        timeout: float = 10.0,
        load_timeout: float = DEFAULT_LOAD_TIMEOUT,
        logger: FilteringBoundLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "HttpPersistenceGateway":
        """Create a gateway with its own HTTP client."""
        client = httpx.AsyncClient(
            base_url=base_url, timeout=timeout, transport=transport
        )
        return cls(client, load_timeout=load_timeout, logger=logger)

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _collection_url(user_id: str) -> str:
        return f"/api/v1/projects/{quote(user_id, safe='')}"

    async def load(self, user_id: str) -> list[ProjectState]:
        response: httpx.Response | None = None
        with anyio.move_on_after(self._load_timeout) as scope:
            try:
                response = await send_with_retry(
                    self._client, "GET", self._collection_url(user_id)
                )
            except httpx.HTTPError as e:
                self._logger.warning("load_failed", user_id=user_id, reason=str(e))
                return []

        if scope.cancelled_caught or response is None:
            self._logger.warning(
                "load_timed_out", user_id=user_id, timeout=self._load_timeout
            )
            return []

        if not response.is_success:
            self._logger.warning(
                "load_failed",
                user_id=user_id,
                status_code=response.status_code,
                reason=error_message(response),
            )
            return []

        payload = load_json(response.content)
        documents = payload.get("projects") if isinstance(payload, dict) else None
        if not isinstance(documents, list):
            self._logger.warning(
                "load_failed", user_id=user_id, reason="malformed payload"
            )
            return []

        projects = decode_projects(documents, self._logger)
        self._logger.info("projects_loaded", user_id=user_id, count=len(projects))
        return projects

    async def save(self, user_id: str, project: ProjectState) -> None:
        try:
            response = await send_with_retry(
                self._client,
                "POST",
                self._collection_url(user_id),
                dump_document(project),
            )
        except httpx.HTTPError as e:
            msg = f"Failed to save project {project.id}: {e}"
            raise PersistenceError(
                msg, operation="save", user_id=user_id, project_id=project.id
            ) from e

        if not response.is_success:
            msg = f"Failed to save project {project.id}: {error_message(response)}"
            raise PersistenceError(
                msg, operation="save", user_id=user_id, project_id=project.id
            )
        self._logger.debug("project_saved", user_id=user_id, project_id=project.id)

    async def delete(self, user_id: str, project_id: str) -> None:
        url = f"{self._collection_url(user_id)}/{quote(project_id, safe='')}"
        try:
            response = await send_with_retry(self._client, "DELETE", url)
        except httpx.HTTPError as e:
            msg = f"Failed to delete project {project_id}: {e}"
            raise PersistenceError(
                msg, operation="delete", user_id=user_id, project_id=project_id
            ) from e

        if not response.is_success:
            msg = f"Failed to delete project {project_id}: {error_message(response)}"
            raise PersistenceError(
                msg, operation="delete", user_id=user_id, project_id=project_id
            )
        self._logger.debug("project_deleted", user_id=user_id, project_id=project_id)


# -----------------------------------------------------------------------------
# Direct document store gateway
# -----------------------------------------------------------------------------


class DocumentStoreGateway:
    """Gateway writing straight to a DocumentStore, without the HTTP hop."""

    def __init__(
        self,
        document_store: DocumentStore | None,
        *,
        load_timeout: float = DEFAULT_LOAD_TIMEOUT,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            document_store: Backing store, or None when storage is not
                configured (loads return nothing and writes fail).
            load_timeout: Upper bound in seconds for ``load``.
            logger: Structured logger. If None, a stderr logger is created.
        """
        self._store = document_store
        self._load_timeout = load_timeout
        self._logger = logger if logger is not None else create_logger()

    def _require_store(
        self, operation: str, user_id: str, project_id: str
    ) -> DocumentStore:
        if self._store is None:
            msg = "Storage is not configured"
            raise PersistenceError(
                msg, operation=operation, user_id=user_id, project_id=project_id
            )
        return self._store

    async def load(self, user_id: str) -> list[ProjectState]:
        if self._store is None:
            self._logger.warning("storage_disabled", user_id=user_id)
            return []

        documents: list[dict[str, Any]] | None = None
        with anyio.move_on_after(self._load_timeout) as scope:
            try:
                documents = await self._store.list_documents(user_id)
            except Exception:
                self._logger.exception("load_failed", user_id=user_id)
                return []

        if scope.cancelled_caught or documents is None:
            self._logger.warning(
                "load_timed_out", user_id=user_id, timeout=self._load_timeout
            )
            return []
        return decode_projects(documents, self._logger)

    async def save(self, user_id: str, project: ProjectState) -> None:
        store = self._require_store("save", user_id, project.id)
        try:
            _ = await store.save_document(user_id, project.id, dump_document(project))
        except Exception as e:
            msg = f"Failed to save project {project.id}: {e}"
            raise PersistenceError(
                msg, operation="save", user_id=user_id, project_id=project.id
            ) from e
        self._logger.debug("project_saved", user_id=user_id, project_id=project.id)

    async def delete(self, user_id: str, project_id: str) -> None:
        store = self._require_store("delete", user_id, project_id)
        try:
            _ = await store.delete_document(user_id, project_id)
        except Exception as e:
            msg = f"Failed to delete project {project_id}: {e}"
            raise PersistenceError(
                msg, operation="delete", user_id=user_id, project_id=project_id
            ) from e
        self._logger.debug("project_deleted", user_id=user_id, project_id=project_id)
