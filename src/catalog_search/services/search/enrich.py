"""Hydrate stale or incomplete search hits from the live catalog."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from catalog_search.models.product import SearchHit
from catalog_search.models.search import SearchResponse
from catalog_search.services.catalog.transformers import to_canonical_hit
from catalog_search.services.clients.catalog_client import CatalogClient

logger = logging.getLogger(__name__)

# Fields where a fresh catalog value replaces a null/blank/unknown index value.
FRESH_PREFERRED_FIELDS = ("default_variant", "collection_title", "stock_status")

# Remaining fields: the index value wins unless it is empty.
LIST_FIELDS = (
    "formats",
    "genres",
    "metal_genres",
    "categories",
    "category_handles",
    "category_facets",
    "variant_titles",
)
SCALAR_FIELDS = (
    "format",
    "price_amount",
    "subtitle",
    "thumbnail",
    "created_at",
    "product_type",
)


def normalize_handle(handle: str | None) -> str | None:
    if not isinstance(handle, str):
        return None
    return handle.strip().lower() or None


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def needs_hydration(hit: SearchHit) -> bool:
    """True when the hit is missing fields the catalog can fill in."""
    if not normalize_handle(hit.handle):
        return False

    variant = hit.default_variant
    return (
        not hit.formats
        or variant is None
        or _is_blank(hit.collection_title)
        or (not hit.genres and not hit.metal_genres)
        or hit.stock_status in (None, "unknown")
        or variant.inventory_quantity is None
        or variant.stock_status == "unknown"
    )


def _is_stale(field_name: str, value: Any) -> bool:
    if _is_blank(value):
        return True
    if field_name == "stock_status":
        return value == "unknown"
    if field_name == "default_variant":
        return value.stock_status == "unknown"
    return False


def merge_hits(original: SearchHit, fresh: SearchHit) -> SearchHit:
    """Patch an index hit with catalog values, field by field.

    Index-only fields and identity (id, handle, title, slug) always come from
    the original hit.
    """
    updates: dict[str, Any] = {}

    for field_name in FRESH_PREFERRED_FIELDS:
        fresh_value = getattr(fresh, field_name)
        if _is_stale(field_name, getattr(original, field_name)) and not _is_blank(fresh_value):
            updates[field_name] = fresh_value

    for field_name in LIST_FIELDS:
        if not getattr(original, field_name):
            updates[field_name] = getattr(fresh, field_name)

    for field_name in SCALAR_FIELDS:
        if _is_blank(getattr(original, field_name)):
            updates[field_name] = getattr(fresh, field_name)

    return original.model_copy(update=updates)


async def _lookup(catalog: CatalogClient, handle: str) -> SearchHit | None:
    record = await catalog.get_product_by_handle(handle)
    if not record:
        return None
    return to_canonical_hit(record)


async def hydrate_handles(
    catalog: CatalogClient, handles: list[str]
) -> dict[str, SearchHit]:
    """Look up distinct handles concurrently; failed lookups are left out."""
    results = await asyncio.gather(
        *[_lookup(catalog, handle) for handle in handles],
        return_exceptions=True,
    )

    hydrated: dict[str, SearchHit] = {}
    for handle, result in zip(handles, results):
        if isinstance(result, BaseException):
            logger.warning("Catalog hydration failed for %s: %s", handle, result)
            continue
        if result is not None:
            hydrated[handle] = result
    return hydrated


async def enrich_search_response(
    response: SearchResponse, catalog: CatalogClient
) -> SearchResponse:
    """Refetch incomplete hits from the catalog and merge the fresh fields in.

    Returns the same response object when nothing could be hydrated.
    """
    handles: dict[str, None] = {}
    for hit in response.hits:
        if needs_hydration(hit):
            handles[normalize_handle(hit.handle)] = None

    if not handles:
        return response

    hydrated = await hydrate_handles(catalog, list(handles))
    if not hydrated:
        return response

    logger.debug("Hydrated %d/%d handles from the catalog", len(hydrated), len(handles))

    hits = []
    for hit in response.hits:
        fresh = hydrated.get(normalize_handle(hit.handle) or "")
        hits.append(merge_hits(hit, fresh) if fresh and needs_hydration(hit) else hit)

    return response.model_copy(update={"hits": hits})
