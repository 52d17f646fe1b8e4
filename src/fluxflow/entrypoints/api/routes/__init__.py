"""API route modules."""

from fastapi import APIRouter

from fluxflow.entrypoints.api.routes.auth import router as auth_router
from fluxflow.entrypoints.api.routes.navigation import router as navigation_router
from fluxflow.entrypoints.api.routes.tasks import router as tasks_router

# Create main API router
api_router = APIRouter()

# Include all route modules
api_router.include_router(auth_router)
api_router.include_router(navigation_router)
api_router.include_router(tasks_router)

__all__ = ["api_router"]
