"""Product search pipeline: plan, query, normalize and hydrate."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Annotated

from fastapi import Depends, Request

from catalog_search.config import Settings, settings
from catalog_search.errors import SearchConfigurationError
from catalog_search.models.product import SearchHit
from catalog_search.models.search import SearchRequest, SearchResponse
from catalog_search.services.catalog.transformers import to_canonical_hit
from catalog_search.services.clients.catalog_client import (
    CatalogClient,
    create_catalog_client,
)
from catalog_search.services.clients.search_client import (
    SearchIndexClient,
    create_search_index_client,
)
from catalog_search.services.search.enrich import (
    enrich_search_response,
    hydrate_handles,
    normalize_handle,
)
from catalog_search.services.search.normalize import (
    extract_facet_maps,
    normalize_search_hit,
    resolve_total,
)
from catalog_search.services.search.planner import build_search_params

logger = logging.getLogger(__name__)

__all__ = ["SearchService", "to_canonical_hit"]

NOT_CONFIGURED_MESSAGE = (
    "Search is not configured. Ensure MEILI_HOST, MEILI_SEARCH_KEY, "
    "MEDUSA_BACKEND_URL and MEDUSA_PUBLISHABLE_KEY are set."
)


class SearchService:
    """Runs searches against the index and reconciles hits with the catalog."""

    def __init__(self, *, index: SearchIndexClient, catalog: CatalogClient) -> None:
        self.index = index
        self.catalog = catalog

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Issue one index query and return hydrated canonical hits.

        Index failures propagate; catalog failures only leave hits un-hydrated.
        """
        params = build_search_params(request)
        payload = await self.index.search(params)

        raw_hits = payload.get("hits")
        raw_hits = raw_hits if isinstance(raw_hits, list) else []
        documents = [doc for doc in raw_hits if isinstance(doc, Mapping)]
        hits = [normalize_search_hit(doc) for doc in documents]
        hits = [hit for hit in hits if hit.handle]

        # paging follows the index, including documents dropped above
        consumed = len(raw_hits)
        total = resolve_total(payload, consumed)
        next_offset = request.offset + consumed
        response = SearchResponse(
            hits=hits,
            total=total,
            offset=request.offset,
            facets=extract_facet_maps(payload.get("facetDistribution")),
            has_more=total > next_offset,
            next_offset=next_offset,
        )

        logger.info(
            "Search '%s' returned %d/%d hits (offset=%d)",
            request.query,
            len(hits),
            total,
            request.offset,
        )
        return await enrich_search_response(response, self.catalog)

    async def hydrate(self, handles: list[str]) -> list[SearchHit]:
        """Canonical hits for the given handles, straight from the catalog."""
        normalized: dict[str, None] = {}
        for handle in handles:
            key = normalize_handle(handle)
            if key:
                normalized[key] = None
        hydrated = await hydrate_handles(self.catalog, list(normalized))
        return [hydrated[handle] for handle in normalized if handle in hydrated]

    async def aclose(self) -> None:
        await self.index.aclose()
        await self.catalog.aclose()


def create_search_service(config: Settings = settings) -> SearchService:
    """Build the service from settings; raises SearchConfigurationError when unconfigured."""
    if not config.search_configured or not config.catalog_configured:
        raise SearchConfigurationError(NOT_CONFIGURED_MESSAGE)
    return SearchService(
        index=create_search_index_client(config=config),
        catalog=create_catalog_client(config=config),
    )


def get_search_service(request: Request) -> SearchService | None:
    """FastAPI dependency returning the service built at startup, if any."""

    return getattr(request.app.state, "search_service", None)


SearchServiceDependency = Annotated[SearchService | None, Depends(get_search_service)]
