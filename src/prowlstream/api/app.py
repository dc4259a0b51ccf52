"""FastAPI application factory and lifecycle management."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prowlstream import __version__
from prowlstream.api.deps import set_service
from prowlstream.api.v1.router import router as v1_router
from prowlstream.config.settings import Settings
from prowlstream.core.service import StreamService
from prowlstream.observability.logging import setup_logging

logger = logging.getLogger(__name__)

CONFIG_FILE = Path("prowlstream-config.yaml")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Application settings. If None, loads ``prowlstream-config.yaml``
            from the working directory when present, else the environment.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        if CONFIG_FILE.exists():
            settings = Settings.from_yaml(CONFIG_FILE)
        else:
            settings = Settings()
        setup_logging(settings.observability)
        logger.info("Loaded configuration (%s)", CONFIG_FILE if CONFIG_FILE.exists() else "environment")

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Manage application lifecycle (startup/shutdown)."""
        logger.info("Starting prowlstream v%s", __version__)

        service = StreamService(settings)
        await service.initialize()
        set_service(service)

        app.state.settings = settings
        app.state.service = service

        logger.info("prowlstream is ready to serve requests on port %d", settings.server.port)
        yield

        logger.info("Shutting down prowlstream...")
        await service.shutdown()
        set_service(None)
        logger.info("prowlstream shutdown complete")

    app = FastAPI(
        title="prowlstream",
        description="Prowlarr search results as normalized streams.",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.server.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(v1_router, prefix="/v1")

    return app
