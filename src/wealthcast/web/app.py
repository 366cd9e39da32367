"""FastAPI application factory for the wealthcast API."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wealthcast.config import Settings

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: log startup and shutdown."""
    settings = app.state.settings
    logger.info(
        "Starting wealthcast API (demo: %d paths, seed %d)...",
        settings.projection_path_count, settings.projection_seed,
    )
    yield
    logger.info("wealthcast API shutdown complete")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = Settings()

    app = FastAPI(
        title="wealthcast API",
        description="Net-worth projection API - seeded Monte Carlo paths and percentile bands",
        version=API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
    )

    _register_routers(app)

    return app


def _register_routers(app: FastAPI):
    """Register all API routers."""
    from wealthcast.web.routers.projection import router as projection_router
    from wealthcast.web.routers.system import router as system_router

    app.include_router(projection_router, prefix="/api/v1")
    app.include_router(system_router, prefix="/api/v1")
