"""Product view models shared by the catalog transformer and the search pipeline."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

StockStatus = Literal["in_stock", "low_stock", "sold_out", "unknown"]


class ProductSlug(BaseModel):
    """Artist/album identity pair and the URL-safe slugs derived from it."""

    artist: str
    album: str
    artist_slug: str
    album_slug: str


class VariantOption(BaseModel):
    """Purchasable variant summary used as a hit's default variant."""

    id: str
    title: str = "Variant"
    currency: str = "usd"
    amount: float = 0
    has_price: bool = False
    in_stock: bool = True
    stock_status: StockStatus = "unknown"
    inventory_quantity: int | None = None


class CategoryDescriptor(BaseModel):
    """A category handle with its display label."""

    handle: str
    label: str


class CategoryFacet(CategoryDescriptor):
    """A filterable category grouped under its taxonomy root."""

    root_handle: str
    root_label: str


class CategoryGroups(BaseModel):
    """Categories classified into semantic type and genre groups."""

    types: list[CategoryDescriptor] = Field(default_factory=list)
    genres: list[CategoryDescriptor] = Field(default_factory=list)


class SearchHit(BaseModel):
    """Canonical search result, built from a catalog record or an index document."""

    id: str
    handle: str = Field(..., description="Catalog handle the hit is traceable to")
    title: str
    artist: str
    album: str
    slug: ProductSlug
    subtitle: str | None = None
    thumbnail: str | None = None
    collection_title: str | None = None
    default_variant: VariantOption | None = None
    formats: list[str] = Field(default_factory=list)
    genres: list[str] = Field(default_factory=list)
    metal_genres: list[str] = Field(default_factory=list)
    categories: list[str] = Field(
        default_factory=list,
        description="Labels of the non-artist categories",
    )
    category_handles: list[str] = Field(default_factory=list)
    category_facets: list[CategoryFacet] = Field(default_factory=list)
    variant_titles: list[str] = Field(default_factory=list)
    format: str | None = None
    price_amount: float | None = None
    created_at: str | None = None
    stock_status: StockStatus | None = None
    product_type: str | None = None
