from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from strategysuite.server._schemas import ErrorResponse

router = APIRouter(prefix="", include_in_schema=False)


@router.api_route(
    "/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]
)
async def api_not_found(path: str, request: Request) -> JSONResponse:
    body = ErrorResponse(
        error="API endpoint not found",
        message=f"No API endpoint for {request.method} /api/{path}",
    )
    return JSONResponse(status_code=404, content=body.model_dump())
