"""Category classification and facet extraction over Medusa category trees.

Categories arrive as plain mappings carrying an optional ``parent_category``
back-reference. Trees coming from the store API are not guaranteed to be
well formed, so every ancestry walk is bounded by ``MAX_ANCESTRY_DEPTH`` hops;
a category whose walk is still going after the bound is treated as its own
root.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from catalog_search.models.product import (
    CategoryDescriptor,
    CategoryFacet,
    CategoryGroups,
)
from catalog_search.services.catalog.coerce import as_list, coerce_string

MAX_ANCESTRY_DEPTH = 16

ARTISTS_ROOT_HANDLE = "artists"
METAL_ROOT_HANDLE = "metal"
TYPE_HANDLES = frozenset({"music", "bundles", "merch"})
GENRE_HANDLES = frozenset({"metal", "death", "doom", "grind", "sludge"})
STRUCTURAL_HANDLES = frozenset({"artists", "genres"})

Category = Mapping[str, Any]


def humanize_category_handle(handle: str) -> str:
    """Title-case each hyphen-separated segment: ``death-metal`` -> ``Death Metal``."""
    return " ".join(segment[:1].upper() + segment[1:] for segment in handle.split("-"))


def category_handle(category: Any) -> str | None:
    if not isinstance(category, Mapping):
        return None
    handle = coerce_string(category.get("handle"))
    return handle.lower() if handle else None


def category_label(category: Any, fallback_handle: str) -> str:
    name = coerce_string(category.get("name")) if isinstance(category, Mapping) else None
    return name or humanize_category_handle(fallback_handle)


def collect_ancestors(category: Any) -> tuple[list[Category], bool]:
    """Return the category followed by its ancestors and whether the walk terminated."""
    chain: list[Category] = []
    current = category if isinstance(category, Mapping) else None
    while current is not None and len(chain) < MAX_ANCESTRY_DEPTH:
        chain.append(current)
        parent = current.get("parent_category")
        current = parent if isinstance(parent, Mapping) else None
    return chain, current is None


def find_root_category(category: Any) -> Category | None:
    chain, terminated = collect_ancestors(category)
    if not chain:
        return None
    if not terminated:
        # cyclic or pathologically deep: the node is its own root
        return chain[0]
    return chain[-1]


def has_ancestor(category: Any, handle: str) -> bool:
    """True when the category or any ancestor within the bound carries ``handle``."""
    chain, _ = collect_ancestors(category)
    return any(category_handle(node) == handle for node in chain)


def _is_excluded_facet(category: Any) -> bool:
    handle = category_handle(category)
    if not handle or handle in STRUCTURAL_HANDLES:
        return True
    return category_handle(find_root_category(category)) == ARTISTS_ROOT_HANDLE


def extract_product_category_groups(
    categories: Any,
    exclude_handles: Iterable[str | None] = (),
) -> CategoryGroups:
    """Collect type and genre categories into deduplicated descriptor lists."""
    excluded = {
        handle.strip().lower()
        for handle in exclude_handles
        if isinstance(handle, str) and handle.strip()
    }

    types: dict[str, CategoryDescriptor] = {}
    genres: dict[str, CategoryDescriptor] = {}
    for category in as_list(categories):
        handle = category_handle(category)
        if not handle or handle in excluded:
            continue
        if handle in TYPE_HANDLES:
            types.setdefault(
                handle, CategoryDescriptor(handle=handle, label=category_label(category, handle))
            )
        elif handle in GENRE_HANDLES:
            genres.setdefault(
                handle, CategoryDescriptor(handle=handle, label=category_label(category, handle))
            )

    return CategoryGroups(types=list(types.values()), genres=list(genres.values()))


def extract_non_artist_category_facets(categories: Any) -> list[CategoryFacet]:
    """Build filterable facets for every category outside the artists taxonomy."""
    facets: dict[str, CategoryFacet] = {}
    for category in as_list(categories):
        if _is_excluded_facet(category):
            continue
        handle = category_handle(category)
        if not handle or handle in facets:
            continue

        root = find_root_category(category)
        root_handle = category_handle(root) or handle
        facets[handle] = CategoryFacet(
            handle=handle,
            label=category_label(category, handle),
            root_handle=root_handle,
            root_label=category_label(root, root_handle),
        )

    return list(facets.values())


def collect_metal_genre_labels(categories: Any) -> list[str]:
    """Labels of categories that sit under the metal genre tree."""
    labels: dict[str, None] = {}
    for category in as_list(categories):
        handle = category_handle(category)
        if not handle or not has_ancestor(category, METAL_ROOT_HANDLE):
            continue
        labels[category_label(category, handle)] = None
    return list(labels)


def select_artist_category(categories: Any) -> CategoryDescriptor | None:
    """First category filed under the artists root, if any."""
    for category in as_list(categories):
        handle = category_handle(category)
        if not handle or handle == ARTISTS_ROOT_HANDLE:
            continue
        if has_ancestor(category, ARTISTS_ROOT_HANDLE):
            return CategoryDescriptor(handle=handle, label=category_label(category, handle))
    return None
