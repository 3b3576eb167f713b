# pyright: reportExplicitAny=false
"""Per-user project document endpoints."""

from typing import Annotated, Any
from urllib.parse import quote

from fastapi import APIRouter, Depends, Response
from pydantic import ValidationError
from structlog.typing import FilteringBoundLogger

from strategysuite.config import Settings
from strategysuite.exceptions import ProjectNotFoundError, StorageError
from strategysuite.export import render_report
from strategysuite.project import ProjectDocument, from_document
from strategysuite.server._api._deps import (
    get_document_store,
    get_logger,
    get_settings,
    storage_call,
)
from strategysuite.server._schemas import (
    DeleteProjectResponse,
    DocumentMetadata,
    ProjectListMetadata,
    ProjectListResponse,
    SaveProjectResponse,
)
from strategysuite.storage import DocumentStore, document_path

router = APIRouter(prefix="/v1/projects", tags=["projects"])


def _content_disposition(filename: str) -> str:
    fallback = filename.encode("ascii", "replace").decode().replace("\"", "_")
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


StoreDep = Annotated[DocumentStore, Depends(get_document_store)]
LoggerDep = Annotated[FilteringBoundLogger, Depends(get_logger)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


@router.get("/{user_id}")
async def list_projects(
    user_id: str, store: StoreDep, settings: SettingsDep, logger: LoggerDep
) -> ProjectListResponse:
    documents = await storage_call("list", store.list_documents(user_id))
    logger.info("projects_listed", user_id=user_id, count=len(documents))
    return ProjectListResponse(
        projects=documents,
        metadata=ProjectListMetadata(
            project_id=(
                settings.storage.firestore_project or settings.storage.backend.value
            ),
            path=document_path(store.collection, user_id),
            count=len(documents),
        ),
    )


@router.post("/{user_id}")
async def save_project(
    user_id: str, document: ProjectDocument, store: StoreDep, logger: LoggerDep
) -> SaveProjectResponse:
    """Upsert one project, merging it into the stored document.

    Only fields present in the request body are written.
    """
    body: dict[str, Any] = document.model_dump(
        by_alias=True, mode="json", exclude_unset=True
    )
    metadata = await storage_call(
        "save", store.save_document(user_id, document.id, body)
    )
    logger.info("project_saved", user_id=user_id, project_id=document.id)
    return SaveProjectResponse(
        metadata=DocumentMetadata(project_id=metadata.project_id, path=metadata.path)
    )


@router.delete("/{user_id}/{project_id}")
async def delete_project(
    user_id: str, project_id: str, store: StoreDep, logger: LoggerDep
) -> DeleteProjectResponse:
    removed = await storage_call("delete", store.delete_document(user_id, project_id))
    logger.info(
        "project_deleted", user_id=user_id, project_id=project_id, removed=removed
    )
    return DeleteProjectResponse()


@router.get("/{user_id}/{project_id}/export", response_class=Response)
async def export_project(
    user_id: str, project_id: str, store: StoreDep, logger: LoggerDep
) -> Response:
    """Render a stored project as a downloadable HTML report."""
    raw = await storage_call("get", store.get_document(user_id, project_id))
    if raw is None:
        msg = f"Project not found: {project_id}"
        raise ProjectNotFoundError(msg, project_id=project_id)
    try:
        project = from_document(ProjectDocument.model_validate(raw))
    except ValidationError as e:
        msg = f"Stored project {project_id} is malformed"
        raise StorageError(msg) from e

    report = render_report(project)
    logger.info("project_exported", user_id=user_id, project_id=project_id)
    return Response(
        content=report.content,
        media_type=report.media_type,
        headers={"Content-Disposition": _content_disposition(report.filename)},
    )
