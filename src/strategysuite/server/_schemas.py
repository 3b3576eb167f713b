# pyright: reportExplicitAny=false
"""Response bodies of the API."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _ApiModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        alias_generator=to_camel, populate_by_name=True
    )


class ErrorResponse(_ApiModel):
    error: str
    message: str


class HealthResponse(_ApiModel):
    status: str
    ai_enabled: bool
    storage_enabled: bool
    timestamp: str


class DocumentMetadata(_ApiModel):
    project_id: str
    path: str


class ProjectListMetadata(_ApiModel):
    """Where a user's projects were read from.

    Attributes:
        project_id: Storage project label (Firestore project or backend name).
        path: Collection path of the user's projects.
        count: Number of documents returned.
    """

    project_id: str
    path: str
    count: int


class ProjectListResponse(_ApiModel):
    projects: list[dict[str, Any]]
    metadata: ProjectListMetadata


class SaveProjectResponse(_ApiModel):
    success: bool = True
    metadata: DocumentMetadata


class DeleteProjectResponse(_ApiModel):
    success: bool = True
