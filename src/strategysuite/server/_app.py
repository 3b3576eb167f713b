# pyright: reportAny=false
"""FastAPI application factory.

The server proxies per-user project documents to the configured document
store and generates AI idea suggestions, keeping credentials server-side.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from structlog.typing import FilteringBoundLogger

from strategysuite.config import Settings
from strategysuite.exceptions import (
    ProjectNotFoundError,
    ProjectValidationError,
    StorageError,
    StorageNotConfiguredError,
    SuggestionError,
    SuggestionNotConfiguredError,
)
from strategysuite.server._api import api_router
from strategysuite.server._schemas import ErrorResponse
from strategysuite.storage import DocumentStore, create_document_store
from strategysuite.suggest import GeminiSuggestionService, SuggestionService
from strategysuite.utils import create_server_logger


def _error(status_code: int, error: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def _build_missing_services(app: FastAPI) -> DocumentStore | None:
    """Create the store and suggestion service the caller did not inject.

    Returns:
        The document store created here (and owned by the app), if any.
    """
    settings: Settings = app.state.settings
    logger: FilteringBoundLogger = app.state.logger
    owned: DocumentStore | None = None

    if app.state.document_store is None:
        owned = create_document_store(settings.storage, logger)
        app.state.document_store = owned
        if owned is None:
            logger.warning(
                "storage_not_configured", backend=settings.storage.backend.value
            )

    if app.state.suggestion_service is None:
        if settings.ai.enabled:
            app.state.suggestion_service = GeminiSuggestionService.from_api_key(
                settings.ai.api_key, model=settings.ai.model, logger=logger
            )
            logger.info("ai_enabled", model=settings.ai.model)
        else:
            logger.warning("ai_disabled", reason="GEMINI_API_KEY not set")

    return owned


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Build missing services on startup and close owned ones on shutdown."""
    owned_store = _build_missing_services(app)
    try:
        yield
    finally:
        if owned_store is not None:
            await owned_store.close()


def _install_exception_handlers(app: FastAPI) -> None:
    logger: FilteringBoundLogger = app.state.logger

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(  # pyright: ignore[reportUnusedFunction]
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        return _error(400, "Invalid request", details)

    @app.exception_handler(ProjectValidationError)
    async def _invalid_project(  # pyright: ignore[reportUnusedFunction]
        _request: Request, exc: ProjectValidationError
    ) -> JSONResponse:
        return _error(400, "Invalid project", str(exc))

    @app.exception_handler(ProjectNotFoundError)
    async def _project_not_found(  # pyright: ignore[reportUnusedFunction]
        _request: Request, exc: ProjectNotFoundError
    ) -> JSONResponse:
        return _error(404, "Project not found", str(exc))

    @app.exception_handler(StorageNotConfiguredError)
    async def _storage_not_configured(  # pyright: ignore[reportUnusedFunction]
        _request: Request, exc: StorageNotConfiguredError
    ) -> JSONResponse:
        return _error(503, "Storage not configured", str(exc))

    @app.exception_handler(StorageError)
    async def _storage_failed(  # pyright: ignore[reportUnusedFunction]
        request: Request, exc: StorageError
    ) -> JSONResponse:
        logger.error("storage_failed", path=request.url.path, reason=str(exc))
        return _error(500, "Storage operation failed", str(exc))

    @app.exception_handler(SuggestionNotConfiguredError)
    async def _ai_not_configured(  # pyright: ignore[reportUnusedFunction]
        _request: Request, exc: SuggestionNotConfiguredError
    ) -> JSONResponse:
        return _error(503, "AI service not configured", str(exc))

    @app.exception_handler(SuggestionError)
    async def _ai_failed(  # pyright: ignore[reportUnusedFunction]
        _request: Request, exc: SuggestionError
    ) -> JSONResponse:
        logger.error(
            "ai_generation_failed", reason=str(exc), status_code=exc.status_code
        )
        return _error(500, "AI generation failed", str(exc))


def create_app(
    settings: Settings | None = None,
    *,
    document_store: DocumentStore | None = None,
    suggestion_service: SuggestionService | None = None,
    logger: FilteringBoundLogger | None = None,
) -> FastAPI:
    """Create the API application.

    Injected services are used as given. Anything not injected is built from
    settings when the application starts; a backend that cannot be built
    stays disabled and its endpoints answer 503.

    Args:
        settings: Configuration. Loaded from the environment when None.
        document_store: Store for project documents.
        suggestion_service: Generator for idea suggestions.
        logger: Structured logger. Built from the logging settings when None.

    Returns:
        The configured FastAPI application.
    """
    if settings is None:
        settings = Settings.load()
    if logger is None:
        logger = create_server_logger(
            level=settings.logging.level.value,
            log_format=settings.logging.format.value,
            log_file=settings.logging.file,
        )

    app = FastAPI(
        title="StrategySuite",
        docs_url=None,
        redoc_url="/api-docs",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.logger = logger
    app.state.document_store = document_store
    app.state.suggestion_service = suggestion_service

    _install_exception_handlers(app)
    app.include_router(router=api_router)
    return app
