"""Routes reading canonical product data straight from the catalog."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from catalog_search.models.search import HydrateRequest, HydrateResponse
from catalog_search.services.search.service import (
    NOT_CONFIGURED_MESSAGE,
    SearchServiceDependency,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.post(
    "/hydrate",
    response_model=HydrateResponse,
    status_code=status.HTTP_200_OK,
    summary="Resolve product handles to canonical hits from the catalog",
)
async def hydrate_products(
    payload: HydrateRequest,
    service: SearchServiceDependency,
) -> HydrateResponse:
    """Look up each handle in the catalog; unknown or failed handles are omitted."""

    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=NOT_CONFIGURED_MESSAGE,
        )

    hits = await service.hydrate(payload.handles)
    logger.info("Hydrated %d/%d requested handles", len(hits), len(payload.handles))
    return HydrateResponse(hits=hits)
