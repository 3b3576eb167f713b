"""Request-scoped access to application state."""

from collections.abc import Awaitable
from typing import cast

from fastapi import Request
from structlog.typing import FilteringBoundLogger

from strategysuite.config import Settings
from strategysuite.exceptions import (
    StorageError,
    StorageNotConfiguredError,
    SuggestionNotConfiguredError,
)
from strategysuite.storage import DocumentStore
from strategysuite.suggest import SuggestionService


def get_settings(request: Request) -> Settings:
    return cast("Settings", request.app.state.settings)


def get_logger(request: Request) -> FilteringBoundLogger:
    return cast("FilteringBoundLogger", request.app.state.logger)


def get_document_store(request: Request) -> DocumentStore:
    """Get the document store.

    Raises:
        StorageNotConfiguredError: If no store is available.
    """
    store = cast(
        "DocumentStore | None", getattr(request.app.state, "document_store", None)
    )
    if store is None:
        msg = "Project storage is not configured on this server"
        raise StorageNotConfiguredError(msg)
    return store


def get_suggestion_service(request: Request) -> SuggestionService:
    """Get the suggestion service.

    Raises:
        SuggestionNotConfiguredError: If no API key was configured.
    """
    service = cast(
        "SuggestionService | None",
        getattr(request.app.state, "suggestion_service", None),
    )
    if service is None:
        msg = "GEMINI_API_KEY environment variable not set"
        raise SuggestionNotConfiguredError(msg)
    return service


async def storage_call[T](operation: str, call: Awaitable[T]) -> T:
    """Await a document store call, wrapping backend failures in StorageError."""
    try:
        return await call
    except StorageError:
        raise
    except Exception as e:
        msg = f"Storage {operation} failed: {e}"
        raise StorageError(msg) from e
