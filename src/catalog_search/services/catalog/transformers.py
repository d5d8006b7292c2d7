"""Transform Medusa store products into canonical search hits."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import Any

from catalog_search.models.product import SearchHit, VariantOption
from catalog_search.services.catalog.categories import (
    collect_metal_genre_labels,
    extract_non_artist_category_facets,
    extract_product_category_groups,
)
from catalog_search.services.catalog.coerce import (
    as_list,
    as_mapping,
    coerce_string,
    coerce_text,
    parse_number,
    unique,
)
from catalog_search.services.catalog.formats import (
    canonical_formats,
    normalize_format_value,
)
from catalog_search.services.catalog.slug import build_product_slug
from catalog_search.services.catalog.stock import (
    resolve_variant_stock,
    summarize_stock_status,
)

UNTITLED = "Untitled Release"
DEFAULT_CURRENCY = "usd"


def _variant_price(variant: Mapping[str, Any]) -> tuple[float | None, str]:
    price = as_mapping(variant.get("calculated_price"))
    amount = None
    for key in ("calculated_amount", "calculated_amount_with_tax", "original_amount"):
        amount = parse_number(price.get(key))
        if amount is not None:
            break
    currency = coerce_string(price.get("currency_code")) or DEFAULT_CURRENCY
    return amount, currency.lower()


def to_variant_option(variant: Any) -> VariantOption | None:
    """Map a store variant to a VariantOption; variants without an id are skipped."""
    variant = as_mapping(variant)
    variant_id = coerce_text(variant.get("id"))
    if not variant_id:
        return None

    amount, currency = _variant_price(variant)
    quantity = parse_number(variant.get("inventory_quantity"))
    stock = resolve_variant_stock(
        inventory_quantity=quantity,
        manage_inventory=variant.get("manage_inventory"),
        allow_backorder=variant.get("allow_backorder"),
        stock_status=variant.get("stock_status"),
    )

    return VariantOption(
        id=variant_id,
        title=coerce_string(variant.get("title")) or "Variant",
        currency=currency,
        amount=amount or 0,
        has_price=amount is not None,
        in_stock=stock.in_stock,
        stock_status=stock.status,
        inventory_quantity=int(quantity) if quantity is not None else None,
    )


def derive_variant_options(variants: Any) -> list[VariantOption]:
    options = (to_variant_option(variant) for variant in as_list(variants))
    return [option for option in options if option is not None]


def _format_option_values(record: Mapping[str, Any]) -> list[str]:
    for option in as_list(record.get("options")):
        option = as_mapping(option)
        title = coerce_string(option.get("title"))
        if not title or title.lower() != "format":
            continue
        values = (
            coerce_string(as_mapping(value).get("value"))
            for value in as_list(option.get("values"))
        )
        return [value for value in values if value]
    return []


def _metadata_formats(metadata: Mapping[str, Any]) -> list[str]:
    candidates = [metadata.get("format"), metadata.get("packaging")]
    candidates.extend(as_list(metadata.get("formats")))
    return [value for value in (coerce_string(entry) for entry in candidates) if value]


def _thumbnail(record: Mapping[str, Any]) -> str | None:
    thumbnail = coerce_string(record.get("thumbnail"))
    if thumbnail:
        return thumbnail
    for image in as_list(record.get("images")):
        url = coerce_string(as_mapping(image).get("url"))
        if url:
            return url
    return None


def _timestamp(value: Any) -> str | None:
    if isinstance(value, datetime):
        return value.isoformat()
    return coerce_string(value)


def _product_type(metadata: Mapping[str, Any]) -> str | None:
    legacy = as_mapping(metadata.get("legacy_import"))
    return coerce_string(legacy.get("product_type")) or coerce_string(
        metadata.get("product_type")
    )


def to_canonical_hit(record: Mapping[str, Any]) -> SearchHit:
    """Build the canonical search hit for an authoritative catalog record.

    Total over partial records: a product without variants, options or
    categories still yields a hit with ``default_variant=None``, empty lists
    and ``price_amount=None``.
    """
    record = as_mapping(record)
    metadata = as_mapping(record.get("metadata"))
    categories = record.get("categories")

    slug = build_product_slug(record)
    handle = coerce_string(record.get("handle")) or ""
    variants = derive_variant_options(record.get("variants"))
    default_variant = variants[0] if variants else None

    groups = extract_product_category_groups(
        categories, exclude_handles=(slug.artist_slug, slug.album_slug)
    )
    category_facets = extract_non_artist_category_facets(categories)
    type_labels = [entry.label for entry in groups.types]

    variant_titles = unique(
        [
            title
            for title in (
                coerce_string(as_mapping(variant).get("title"))
                for variant in as_list(record.get("variants"))
            )
            if title
        ]
    )
    format_values = _format_option_values(record)
    raw_format = (format_values[0] if format_values else None) or (
        default_variant.title if default_variant else None
    )
    format_candidates = [
        *variant_titles,
        *format_values,
        *_metadata_formats(metadata),
        *type_labels,
    ]

    genres = [entry.label for entry in groups.genres]
    if not genres:
        tag_values = (
            coerce_string(as_mapping(tag).get("value"))
            for tag in as_list(record.get("tags"))
        )
        genres = unique([value for value in tag_values if value])

    collection_title = coerce_string(as_mapping(record.get("collection")).get("title"))

    return SearchHit(
        id=coerce_text(record.get("id")) or handle,
        handle=handle,
        title=coerce_string(record.get("title")) or UNTITLED,
        artist=slug.artist,
        album=slug.album,
        slug=slug,
        subtitle=coerce_string(record.get("subtitle")) or slug.artist,
        thumbnail=_thumbnail(record),
        collection_title=collection_title,
        default_variant=default_variant,
        formats=canonical_formats(format_candidates, fallback=format_candidates),
        genres=genres,
        metal_genres=collect_metal_genre_labels(categories),
        categories=[facet.label for facet in category_facets],
        category_handles=[facet.handle for facet in category_facets],
        category_facets=category_facets,
        variant_titles=variant_titles,
        format=normalize_format_value(raw_format) or raw_format,
        price_amount=(
            default_variant.amount
            if default_variant is not None and default_variant.has_price
            else None
        ),
        created_at=_timestamp(record.get("created_at")),
        stock_status=summarize_stock_status(variant.stock_status for variant in variants),
        product_type=_product_type(metadata),
    )
