from collections.abc import Callable

import pytest

from strategysuite.exceptions import PersistenceError
from strategysuite.project import ProjectState


class RecordingGateway:
    """In-memory PersistenceGateway that records every call."""

    def __init__(self, projects: list[ProjectState] | None = None) -> None:
        self.projects: list[ProjectState] = list(projects or [])
        self.saves: list[ProjectState] = []
        self.deletes: list[str] = []
        self.fail_saves = False
        self.fail_deletes = False

    async def load(self, user_id: str) -> list[ProjectState]:
        return list(self.projects)

    async def save(self, user_id: str, project: ProjectState) -> None:
        if self.fail_saves:
            msg = f"Failed to save project {project.id}: offline"
            raise PersistenceError(
                msg, operation="save", user_id=user_id, project_id=project.id
            )
        self.saves.append(project)

    async def delete(self, user_id: str, project_id: str) -> None:
        if self.fail_deletes:
            msg = f"Failed to delete project {project_id}: offline"
            raise PersistenceError(
                msg, operation="delete", user_id=user_id, project_id=project_id
            )
        self.deletes.append(project_id)


@pytest.fixture
def gateway() -> RecordingGateway:
    return RecordingGateway()


@pytest.fixture
def make_gateway() -> Callable[..., RecordingGateway]:
    return RecordingGateway
