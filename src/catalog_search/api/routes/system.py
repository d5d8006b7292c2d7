"""System-level routes such as health checks."""

from __future__ import annotations

from fastapi import APIRouter

from catalog_search.config import settings
from catalog_search.services.search.service import SearchServiceDependency

router = APIRouter(tags=["system"])


@router.get("/health")
async def health_check(service: SearchServiceDependency) -> dict[str, str]:
    """Health check endpoint with Meilisearch connectivity check."""

    if service is None:
        index_status = "not_configured"
    else:
        index_status = (
            "connected" if await service.index.is_healthy() else "disconnected"
        )

    return {
        "status": "healthy",
        "search_index": index_status,
        "environment": settings.ENVIRONMENT,
    }
