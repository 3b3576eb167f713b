from collections.abc import Callable

import pytest
from fastapi.testclient import TestClient
from structlog.typing import FilteringBoundLogger

from strategysuite.config import Settings
from strategysuite.exceptions import SuggestionError
from strategysuite.server import create_app
from strategysuite.storage import DocumentStore, MemoryDocumentStore
from strategysuite.suggest import SuggestionRequest


class FakeSuggestionService:
    """SuggestionService returning canned ideas or a canned error."""

    def __init__(
        self, ideas: list[str] | None = None, error: SuggestionError | None = None
    ) -> None:
        if ideas is None:
            ideas = ["Idea one", "Idea two", "Idea three"]
        self.ideas = ideas
        self.error = error
        self.requests: list[SuggestionRequest] = []

    async def generate(self, request: SuggestionRequest) -> list[str]:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.ideas


@pytest.fixture
def settings() -> Settings:
    return Settings.from_dict({"storage": {"backend": "memory"}})


@pytest.fixture
def document_store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@pytest.fixture
def suggestion_service() -> FakeSuggestionService:
    return FakeSuggestionService()


@pytest.fixture
def make_client(
    settings: Settings, logger: FilteringBoundLogger
) -> Callable[..., TestClient]:
    """Build a TestClient with injected services (None leaves one disabled)."""

    def _make(
        document_store: DocumentStore | None = None,
        suggestion_service: FakeSuggestionService | None = None,
    ) -> TestClient:
        app = create_app(
            settings,
            document_store=document_store,
            suggestion_service=suggestion_service,
            logger=logger,
        )
        return TestClient(app)

    return _make


@pytest.fixture
def client(
    make_client: Callable[..., TestClient],
    document_store: MemoryDocumentStore,
    suggestion_service: FakeSuggestionService,
) -> TestClient:
    return make_client(document_store, suggestion_service)
