"""API v1 routers."""

from fastapi import APIRouter

from eventarchitect.api.routers.assets import router as assets_router
from eventarchitect.api.routers.chat import router as chat_router
from eventarchitect.api.routers.dossier import router as dossier_router
from eventarchitect.api.routers.environments import router as environments_router
from eventarchitect.api.routers.generate import router as generate_router
from eventarchitect.api.routers.production import router as production_router
from eventarchitect.api.routers.projects import router as projects_router

# Create main v1 router
api_router = APIRouter(prefix="/api/v1")

api_router.include_router(projects_router)
api_router.include_router(environments_router)
api_router.include_router(assets_router)
api_router.include_router(production_router)
api_router.include_router(generate_router)
api_router.include_router(dossier_router)
api_router.include_router(chat_router)

__all__ = ["api_router"]
