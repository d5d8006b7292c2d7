"""FastAPI application factory and bootstrap helpers."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog_search.api.routes import include_api_routes
from catalog_search.config import settings
from catalog_search.errors import SearchConfigurationError
from catalog_search.services.search.service import create_search_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Build the upstream clients on startup and close them on shutdown."""
    try:
        app.state.search_service = create_search_service()
    except SearchConfigurationError as exc:
        logger.error("Search disabled: %s", exc)
        app.state.search_service = None

    try:
        yield
    finally:
        service = app.state.search_service
        if service is not None:
            await service.aclose()
            logger.info("Closed search upstream clients")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Catalog Search",
        description="Storefront product search backed by Meilisearch and Medusa",
        version="1.0.0",
        lifespan=lifespan,
    )

    _configure_cors(app)
    include_api_routes(app)

    return app


def _configure_cors(app: FastAPI) -> None:
    """Allow broad access in non-production environments."""

    if settings.is_production:
        return

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
