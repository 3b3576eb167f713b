import pendulum
from fastapi import APIRouter, Request

from strategysuite.server._schemas import HealthResponse

router = APIRouter(prefix="", tags=["health"])


@router.get("/health")
async def get_health(request: Request) -> HealthResponse:
    state = request.app.state
    return HealthResponse(
        status="ok",
        ai_enabled=getattr(state, "suggestion_service", None) is not None,
        storage_enabled=getattr(state, "document_store", None) is not None,
        timestamp=pendulum.now("UTC").to_iso8601_string(),
    )
