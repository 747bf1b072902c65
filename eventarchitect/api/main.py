"""
Main FastAPI application for EventArchitect.

A thin HTTP surface over the Project Store, the invariant layer and
the Generation Workflow Engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from eventarchitect import __version__
from eventarchitect.api.dependencies import clear_services, set_services
from eventarchitect.api.error_handlers import register_error_handlers
from eventarchitect.api.routers import api_router
from eventarchitect.core.config import settings
from eventarchitect.core.logging import configure_logging
from eventarchitect.domain.services.project_store import ProjectStore
from eventarchitect.llm import AIGateway, create_gateway
from eventarchitect.persistence import create_project_repository

logger = logging.getLogger(__name__)


def create_app(
    store: Optional[ProjectStore] = None,
    gateway: Optional[AIGateway] = None,
    configure_logs: bool = True,
) -> FastAPI:
    """
    Build the application.

    A store passed in is used as-is (already loaded); otherwise the
    configured storage backend is opened and loaded at startup.
    """
    if configure_logs:
        configure_logging(settings.LOG_LEVEL, settings.LOG_FORMAT)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting EventArchitect API")
        repository = None
        active_store = store
        if active_store is None:
            repository = create_project_repository()
            active_store = ProjectStore(repository)
            await active_store.load()
            for warning in active_store.warnings:
                logger.warning(f"Startup: {warning.message}")
        set_services(active_store, gateway or create_gateway())
        logger.info(f"EventArchitect API started with {len(active_store.projects)} projects")
        try:
            yield
        finally:
            logger.info("Shutting down EventArchitect API...")
            clear_services()
            close = getattr(repository, "close", None)
            if close is not None:
                await close()

    app = FastAPI(
        title="EventArchitect",
        description="Event design planning: briefings, boards, crests and dossiers",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_router)

    @app.get("/health", tags=["health"])
    async def health():
        return {"status": "healthy", "version": __version__}

    @app.get("/")
    async def root():
        """Root endpoint - API information."""
        return {
            "name": "EventArchitect API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        create_app(),
        host=settings.API_HOST,
        port=settings.API_PORT,
    )
