"""AI idea generation endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from structlog.typing import FilteringBoundLogger

from strategysuite.server._api._deps import get_logger, get_suggestion_service
from strategysuite.server._schemas import ErrorResponse
from strategysuite.suggest import IdeasResponse, SuggestionRequest, SuggestionService

router = APIRouter(prefix="/v1", tags=["ideas"])


@router.post("/generate-ideas", response_model=IdeasResponse)
async def generate_ideas(
    request: SuggestionRequest,
    service: Annotated[SuggestionService, Depends(get_suggestion_service)],
    logger: Annotated[FilteringBoundLogger, Depends(get_logger)],
) -> IdeasResponse | JSONResponse:
    """Generate three short ideas for one framework category.

    Responds 503 when no API key is configured and 400 when
    ``frameworkKey`` or ``itemTitle`` is missing.
    """
    if not request.is_complete:
        body = ErrorResponse(
            error="Missing required fields",
            message="frameworkKey and itemTitle are required",
        )
        return JSONResponse(status_code=400, content=body.model_dump())

    ideas = await service.generate(request)
    logger.debug(
        "ideas_returned", framework_key=request.framework_key, count=len(ideas)
    )
    return IdeasResponse(ideas=ideas)
