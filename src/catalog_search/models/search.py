"""Models for product search requests and responses."""

from __future__ import annotations

from pydantic import BaseModel, Field

from catalog_search.config import settings
from catalog_search.models.product import SearchHit

FacetMap = dict[str, int]


class SearchFilters(BaseModel):
    """Facet filters; each non-empty list becomes one IN clause."""

    genres: list[str] = Field(default_factory=list)
    formats: list[str] = Field(default_factory=list)
    categories: list[str] = Field(default_factory=list)
    variants: list[str] = Field(default_factory=list)
    product_types: list[str] = Field(default_factory=list)


class SearchRequest(BaseModel):
    """Structured search request handed to the query planner."""

    query: str = Field(default="", description="Free-form query text")
    limit: int = Field(
        default=settings.SEARCH_DEFAULT_LIMIT, ge=1, le=settings.SEARCH_MAX_LIMIT
    )
    offset: int = Field(default=0, ge=0)
    filters: SearchFilters = Field(default_factory=SearchFilters)
    sort: str | None = Field(
        default=None,
        description="alphabetical, newest, price-low, price-high, title-asc or title-desc",
    )
    in_stock_only: bool = False


class SearchFacets(BaseModel):
    """Value-to-count distribution for every filterable dimension."""

    genres: FacetMap = Field(default_factory=dict)
    metal_genres: FacetMap = Field(default_factory=dict)
    format: FacetMap = Field(default_factory=dict)
    categories: FacetMap = Field(default_factory=dict)
    variants: FacetMap = Field(default_factory=dict)
    product_types: FacetMap = Field(default_factory=dict)


class SearchResponse(BaseModel):
    """Hits, facets and paging state returned by the search pipeline."""

    hits: list[SearchHit] = Field(default_factory=list)
    total: int = Field(default=0, ge=0)
    offset: int = Field(default=0, ge=0)
    facets: SearchFacets = Field(default_factory=SearchFacets)
    has_more: bool = False
    next_offset: int = 0


class HydrateRequest(BaseModel):
    """Request body for POST /catalog/hydrate."""

    handles: list[str] = Field(..., max_length=settings.HYDRATE_MAX_HANDLES)


class HydrateResponse(BaseModel):
    """Canonical hits rebuilt from the live catalog."""

    hits: list[SearchHit] = Field(default_factory=list)
