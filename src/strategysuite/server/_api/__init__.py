from fastapi import APIRouter

from ._fallback import router as fallback_router
from ._health import router as health_router
from ._ideas import router as ideas_router
from ._projects import router as projects_router

api_router = APIRouter(prefix="/api")

api_router.include_router(health_router)
api_router.include_router(projects_router)
api_router.include_router(ideas_router)
# Must stay last: it matches every remaining /api path
api_router.include_router(fallback_router)

__all__ = ["api_router"]
