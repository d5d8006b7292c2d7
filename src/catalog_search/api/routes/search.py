"""Storefront product search route."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from catalog_search.errors import SearchIndexError
from catalog_search.models.search import SearchRequest, SearchResponse
from catalog_search.services.search.service import (
    NOT_CONFIGURED_MESSAGE,
    SearchServiceDependency,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/store/search", tags=["search"])


@router.post(
    "/products",
    response_model=SearchResponse,
    status_code=status.HTTP_200_OK,
    summary="Search the product index and hydrate stale hits",
)
async def search_products(
    payload: SearchRequest,
    service: SearchServiceDependency,
) -> SearchResponse:
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=NOT_CONFIGURED_MESSAGE,
        )

    try:
        return await service.search(payload)
    except SearchIndexError:
        logger.exception("Product search failed for query '%s'", payload.query)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Unable to perform search",
        ) from None
