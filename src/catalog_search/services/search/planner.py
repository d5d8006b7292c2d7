"""Translate search requests into Meilisearch filter, sort and facet parameters."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from catalog_search.models.search import SearchFilters, SearchRequest

logger = logging.getLogger(__name__)

# SearchFilters field -> filterable index attribute
FILTER_ATTRIBUTES: tuple[tuple[str, str], ...] = (
    ("genres", "genres"),
    ("formats", "format"),
    ("categories", "category_handles"),
    ("variants", "variant_titles"),
    ("product_types", "product_type"),
)

SORT_DIRECTIVES: dict[str, str | None] = {
    "alphabetical": None,
    "newest": "created_at:desc",
    "price-low": "price_amount:asc",
    "price-high": "price_amount:desc",
    "title-asc": "title:asc",
    "title-desc": "title:desc",
}

FACET_ATTRIBUTES: tuple[str, ...] = (
    "genres",
    "metalGenres",
    "format",
    "category_handles",
    "variant_titles",
    "product_type",
)

IN_STOCK_CLAUSE = 'stock_status != "sold_out"'


def _normalize_values(values: Iterable[str] | None) -> list[str]:
    return [value.strip() for value in values or () if value and value.strip()]


def _quote(value: str) -> str:
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def build_filter_expression(
    filters: SearchFilters | None, in_stock_only: bool = False
) -> str | None:
    """AND together one IN clause per non-empty filter, plus the stock clause."""
    filters = filters or SearchFilters()
    clauses: list[str] = []

    for field_name, attribute in FILTER_ATTRIBUTES:
        values = _normalize_values(getattr(filters, field_name))
        if values:
            joined = ", ".join(_quote(value) for value in values)
            clauses.append(f"{attribute} IN [{joined}]")

    if in_stock_only:
        clauses.append(IN_STOCK_CLAUSE)

    return " AND ".join(clauses) if clauses else None


def resolve_sort(sort: str | None) -> list[str] | None:
    """Map a sort option to index sort directives; unknown options keep default order."""
    if not sort:
        return None
    directive = SORT_DIRECTIVES.get(sort.strip().lower())
    return [directive] if directive else None


def build_search_params(request: SearchRequest) -> dict[str, Any]:
    """Build the Meilisearch search body for one request; paging passes straight through."""
    params: dict[str, Any] = {
        "q": request.query or "",
        "limit": request.limit,
        "offset": request.offset,
        "facets": list(FACET_ATTRIBUTES),
    }

    filter_expression = build_filter_expression(request.filters, request.in_stock_only)
    if filter_expression:
        params["filter"] = filter_expression

    sort = resolve_sort(request.sort)
    if sort:
        params["sort"] = sort

    logger.debug("Planned search query: %s", params)
    return params
