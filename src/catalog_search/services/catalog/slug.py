"""Artist/album identity and URL slugs for catalog releases.

Slugs are never stored: they are recomputed from the record every time, so
``build_product_slug`` must stay pure, deterministic and total.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Mapping
from typing import Any

from catalog_search.models.product import ProductSlug
from catalog_search.services.catalog.categories import select_artist_category
from catalog_search.services.catalog.coerce import as_mapping, coerce_string

DEFAULT_BRAND = "Remorseless Records"
EMPTY_SLUG = "release"

_SEPARATOR = " - "
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_FORMAT_SUFFIX = re.compile(
    r'^(?:2lp|3lp|7"|cd|mc|lp|cassette|vinyl|tape|digital|bundle|box)',
    re.IGNORECASE,
)


def slugify_segment(value: str) -> str:
    """Strip diacritics, lowercase and hyphenate; never returns an empty string."""
    decomposed = unicodedata.normalize("NFKD", value)
    ascii_only = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    slug = _NON_ALNUM.sub("-", ascii_only.lower()).strip("-")
    return slug or EMPTY_SLUG


def _first_string(mapping: Mapping[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = coerce_string(mapping.get(key))
        if value:
            return value
    return None


def _collection_title(source: Mapping[str, Any]) -> str | None:
    return (
        _first_string(source, "collection_title", "collectionTitle")
        or coerce_string(as_mapping(source.get("collection")).get("title"))
    )


def parse_artist_album_from_title(
    title: str,
    collection_title: str | None = None,
) -> tuple[str, str]:
    """Split ``Artist - Album[ - Format]`` into its artist and album parts."""
    working = title.strip()
    if not working:
        fallback = collection_title or DEFAULT_BRAND
        return fallback, fallback

    last = working.rfind(_SEPARATOR)
    if last != -1:
        suffix = working[last + len(_SEPARATOR):].strip()
        if _FORMAT_SUFFIX.match(suffix):
            working = working[:last].strip()

    first = working.find(_SEPARATOR)
    if first == -1:
        return collection_title or working, working

    artist = working[:first].strip()
    album = working[first + len(_SEPARATOR):].strip()
    return artist or collection_title or working, album or working


def parse_artist_album_from_handle(handle: str) -> tuple[str, str]:
    parts = [part.strip() for part in handle.replace("_", "-").split("-")]
    parts = [part for part in parts if part]
    if not parts:
        return handle, handle
    if len(parts) == 1:
        return parts[0], parts[0]
    return parts[0], " ".join(parts[1:])


def build_product_slug(source: Mapping[str, Any]) -> ProductSlug:
    """Derive the artist/album pair and slugs from a record-like mapping.

    Metadata artist/album win, then the title, then the handle, then the
    collection title (or the brand name). Explicit slug sources (an artist
    category, ``metadata.artist_slug``/``album_slug``) only affect the slugs,
    never the human-readable names.
    """
    source = as_mapping(source)
    title = coerce_string(source.get("title"))
    handle = coerce_string(source.get("handle"))
    collection_title = _collection_title(source)
    metadata = as_mapping(source.get("metadata"))

    meta_artist = _first_string(metadata, "artist", "Artist", "artist_name")
    meta_album = _first_string(metadata, "album", "Album", "release")

    if meta_artist and meta_album:
        artist, album = meta_artist, meta_album
    elif title:
        artist, album = parse_artist_album_from_title(title, collection_title)
    elif handle:
        artist, album = parse_artist_album_from_handle(handle)
    else:
        artist = album = collection_title or DEFAULT_BRAND

    artist_category = select_artist_category(source.get("categories"))
    artist_slug_base = (
        (artist_category.handle if artist_category else None)
        or _first_string(metadata, "artist_slug", "artistSlug")
        or artist
    )
    album_slug_base = _first_string(metadata, "album_slug", "albumSlug") or album

    return ProductSlug(
        artist=artist,
        album=album,
        artist_slug=slugify_segment(artist_slug_base),
        album_slug=slugify_segment(album_slug_base),
    )


def matches_product_slug(
    source: Mapping[str, Any], artist_slug: str, album_slug: str
) -> bool:
    slug = build_product_slug(source)
    return slug.artist_slug == artist_slug and slug.album_slug == album_slug


def decode_slug_segment(segment: str) -> str:
    return segment.replace("-", " ").strip()
