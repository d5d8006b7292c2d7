"""Normalize raw Meilisearch documents and facet distributions.

Index documents are written by a separate ingestion process and lag the
catalog, so nothing here validates: every field is coerced on its own and
falls back to an empty default. A partially indexed document still becomes a
usable hit.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

from catalog_search.models.product import SearchHit, VariantOption
from catalog_search.models.search import FacetMap, SearchFacets
from catalog_search.services.catalog.coerce import (
    as_list,
    as_mapping,
    coerce_string,
    coerce_text,
    parse_boolean,
    parse_number,
)
from catalog_search.services.catalog.formats import (
    canonical_formats,
    normalize_format_value,
)
from catalog_search.services.catalog.slug import build_product_slug
from catalog_search.services.catalog.stock import resolve_variant_stock
from catalog_search.services.catalog.transformers import DEFAULT_CURRENCY, UNTITLED

# SearchFacets field -> distribution keys, preferred first
FACET_ALIASES: dict[str, tuple[str, ...]] = {
    "genres": ("genres", "genre"),
    "metal_genres": ("metalGenres", "metal_genres"),
    "format": ("format", "formats"),
    "categories": ("category_handles", "categories"),
    "variants": ("variant_titles", "variants"),
    "product_types": ("product_type", "productTypes", "product_types"),
}


def _first(document: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        value = document.get(key)
        if value is not None:
            return value
    return None


def _first_string(document: Mapping[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = coerce_string(document.get(key))
        if value:
            return value
    return None


def as_string_list(value: Any) -> list[str]:
    """Strings from a list, or from a comma-separated string; anything else is empty."""
    if isinstance(value, str):
        return [entry.strip() for entry in value.split(",") if entry.strip()]
    return [entry for entry in as_list(value) if isinstance(entry, str) and entry]


def _thumbnail(document: Mapping[str, Any]) -> str | None:
    direct = _first_string(document, "thumbnail", "image")
    if direct:
        return direct
    images = as_list(document.get("images"))
    if not images:
        return None
    first = images[0]
    if isinstance(first, str):
        return coerce_string(first)
    return coerce_string(as_mapping(first).get("url"))


def normalize_search_hit(document: Mapping[str, Any]) -> SearchHit:
    """Map an arbitrary index document onto the canonical hit shape; never raises."""
    document = as_mapping(document)

    hit_id = (
        coerce_text(_first(document, "id", "product_id", "uid")) or uuid.uuid4().hex
    )
    handle = coerce_string(document.get("handle")) or ""
    title = _first_string(document, "title", "name") or UNTITLED
    metadata = as_mapping(document.get("metadata"))
    collection_title = _first_string(
        document, "collectionTitle", "collection_title", "collection"
    )

    slug = build_product_slug(
        {
            "title": title if title != UNTITLED else None,
            "metadata": metadata,
            "collection_title": collection_title,
            "handle": handle,
        }
    )
    artist = _first_string(document, "artist") or slug.artist

    genres = as_string_list(_first(document, "genres", "genre"))
    metal_genres = as_string_list(_first(document, "metalGenres", "metal_genres"))
    category_handles = as_string_list(_first(document, "category_handles", "categories"))
    category_labels = as_string_list(document.get("category_labels"))
    variant_titles = as_string_list(_first(document, "variant_titles", "variants"))

    raw_format = coerce_string(document.get("format"))
    raw_formats = as_string_list(document.get("formats"))
    formats = canonical_formats(
        [raw_format, *raw_formats, *variant_titles, *category_handles],
        fallback=[raw_format, *raw_formats],
    )
    format_label = normalize_format_value(raw_format) or (formats[0] if formats else raw_format)

    price_amount = parse_number(_first(document, "price_amount", "price", "amount"))
    currency = (
        _first_string(document, "price_currency", "currency", "currency_code")
        or DEFAULT_CURRENCY
    )

    quantity = parse_number(_first(document, "inventory_quantity", "quantity"))
    in_stock_flag = parse_boolean(document.get("in_stock"))
    status_hint = coerce_string(document.get("stock_status"))
    if status_hint is None and in_stock_flag is not None:
        status_hint = "in_stock" if in_stock_flag else "sold_out"
    stock = resolve_variant_stock(inventory_quantity=quantity, stock_status=status_hint)

    variant_id = _first_string(document, "default_variant_id", "variant_id", "variantId")
    default_variant = None
    if variant_id and price_amount is not None:
        default_variant = VariantOption(
            id=variant_id,
            title=format_label or "Variant",
            currency=currency.lower(),
            amount=price_amount,
            has_price=True,
            in_stock=stock.in_stock,
            stock_status=stock.status,
            inventory_quantity=int(quantity) if quantity is not None else None,
        )

    return SearchHit(
        id=hit_id,
        handle=handle,
        title=title,
        artist=artist,
        album=slug.album,
        slug=slug,
        subtitle=_first_string(document, "subtitle", "subTitle"),
        thumbnail=_thumbnail(document),
        collection_title=collection_title,
        default_variant=default_variant,
        formats=formats,
        genres=genres,
        metal_genres=metal_genres,
        categories=category_labels,
        category_handles=category_handles,
        variant_titles=variant_titles,
        format=format_label,
        price_amount=price_amount,
        created_at=_first_string(document, "created_at", "createdAt"),
        stock_status=stock.status,
        product_type=_first_string(document, "product_type", "productType"),
    )


def _coerce_facet_record(value: Any) -> FacetMap:
    if not isinstance(value, Mapping):
        return {}
    facet: FacetMap = {}
    for key, count in value.items():
        parsed = parse_number(count)
        if parsed is not None:
            facet[str(key)] = int(parsed)
    return facet


def extract_facet_maps(distribution: Any) -> SearchFacets:
    """Copy the index facet distribution into one typed map per dimension."""
    distribution = as_mapping(distribution)
    maps = {
        field_name: _coerce_facet_record(_first(distribution, *aliases))
        for field_name, aliases in FACET_ALIASES.items()
    }
    return SearchFacets(**maps)


def resolve_total(payload: Mapping[str, Any], hit_count: int) -> int:
    """Exact total, then the estimate, then the number of hits returned."""
    for key in ("totalHits", "estimatedTotalHits"):
        total = payload.get(key)
        if isinstance(total, int) and not isinstance(total, bool) and total >= 0:
            return total
    return hit_count
