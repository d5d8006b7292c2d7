"""Tests for artist/album slug derivation."""

import pytest

from catalog_search.services.catalog.slug import (
    DEFAULT_BRAND,
    build_product_slug,
    decode_slug_segment,
    matches_product_slug,
    slugify_segment,
)

ARTIST_CATEGORY = {
    "handle": "evoken",
    "name": "Evoken",
    "parent_category": {"handle": "artists", "name": "Artists"},
}


def test_metadata_artist_and_album_take_precedence_over_title():
    slug = build_product_slug(
        {
            "title": "Something - Else",
            "metadata": {"artist": "Mournful Congregation", "album": "The June Frost"},
        }
    )

    assert slug.artist == "Mournful Congregation"
    assert slug.album == "The June Frost"
    assert slug.artist_slug == "mournful-congregation"
    assert slug.album_slug == "the-june-frost"


def test_metadata_aliases_are_accepted():
    slug = build_product_slug(
        {"metadata": {"Artist": "Thergothon", "release": "Stream from the Heavens"}}
    )

    assert (slug.artist, slug.album) == ("Thergothon", "Stream from the Heavens")


def test_metadata_needs_both_artist_and_album():
    slug = build_product_slug(
        {"title": "Evoken - Quietus", "metadata": {"artist": "Someone Else"}}
    )

    assert (slug.artist, slug.album) == ("Evoken", "Quietus")


@pytest.mark.parametrize(
    ("title", "expected"),
    [
        ("Evoken - Quietus - 2LP", ("Evoken", "Quietus")),
        ("Evoken - Quietus - cd", ("Evoken", "Quietus")),
        ('Evoken - Quietus - 7" Single', ("Evoken", "Quietus")),
        ("Evoken - Quietus - Cassette (pro-dub)", ("Evoken", "Quietus")),
        ("Evoken - Quietus - Deluxe", ("Evoken", "Quietus - Deluxe")),
        ("Evoken - Quietus - Boxset", ("Evoken", "Quietus")),
        ("Evoken - Quietus - CDr", ("Evoken", "Quietus")),
        ("Evoken - Quietus - Tapes", ("Evoken", "Quietus")),
        ('Evoken - Quietus - 7"EP', ("Evoken", "Quietus")),
        ("Evoken - Quietus - Remastered", ("Evoken", "Quietus - Remastered")),
    ],
)
def test_title_format_suffix_is_stripped_when_it_starts_with_a_format(title, expected):
    slug = build_product_slug({"title": title})

    assert (slug.artist, slug.album) == expected


def test_title_without_separator_uses_collection_as_artist():
    slug = build_product_slug(
        {"title": "Quietus", "collection": {"title": "Evoken"}}
    )

    assert (slug.artist, slug.album) == ("Evoken", "Quietus")


def test_title_without_separator_or_collection_is_both_parts():
    slug = build_product_slug({"title": "Quietus"})

    assert (slug.artist, slug.album) == ("Quietus", "Quietus")


def test_handle_fallback_splits_on_hyphens_and_underscores():
    slug = build_product_slug({"handle": "evoken_quietus-reissue"})

    assert slug.artist == "evoken"
    assert slug.album == "quietus reissue"
    assert slug.album_slug == "quietus-reissue"


def test_single_token_handle_is_both_parts():
    slug = build_product_slug({"handle": "evoken"})

    assert (slug.artist, slug.album) == ("evoken", "evoken")


def test_collection_title_is_the_last_resort_before_brand():
    assert build_product_slug({"collectionTitle": "Profound Lore"}).artist == "Profound Lore"

    slug = build_product_slug({})
    assert (slug.artist, slug.album) == (DEFAULT_BRAND, DEFAULT_BRAND)
    assert slug.artist_slug == "remorseless-records"


def test_artist_category_overrides_artist_slug_only():
    slug = build_product_slug(
        {
            "title": "EVOKEN (US) - Quietus",
            "metadata": {"artist_slug": "ignored"},
            "categories": [{"handle": "doom"}, ARTIST_CATEGORY],
        }
    )

    assert slug.artist == "EVOKEN (US)"
    assert slug.artist_slug == "evoken"


def test_metadata_slug_overrides_keep_human_readable_names():
    slug = build_product_slug(
        {
            "title": "Evoken - Quietus",
            "metadata": {"artistSlug": "evoken-nj", "album_slug": "Quietus Reissue"},
        }
    )

    assert (slug.artist, slug.album) == ("Evoken", "Quietus")
    assert slug.artist_slug == "evoken-nj"
    assert slug.album_slug == "quietus-reissue"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("Mötley Crüe", "motley-crue"),
        ("  Bell Witch / Aerial Ruin  ", "bell-witch-aerial-ruin"),
        ("Ævangelist", "vangelist"),
        ("!!!", "release"),
        ("", "release"),
    ],
)
def test_slugify_segment(value, expected):
    assert slugify_segment(value) == expected


def test_slugify_is_idempotent():
    once = slugify_segment("Esoteric: The Pernicious Enigma")

    assert slugify_segment(once) == once


@pytest.mark.parametrize(
    "source",
    [
        {},
        {"title": 5, "metadata": "oops", "handle": None},
        {"title": "   ", "handle": "---"},
        {"title": " - ", "collection": "not a mapping"},
        {"categories": [None, 3, {"handle": None}]},
    ],
)
def test_build_product_slug_is_total(source):
    slug = build_product_slug(source)

    assert slug.artist and slug.album
    assert slug.artist_slug and slug.album_slug
    assert build_product_slug(source) == slug


def test_matches_product_slug():
    record = {"title": "Evoken - Quietus - 2LP", "categories": [ARTIST_CATEGORY]}

    assert matches_product_slug(record, "evoken", "quietus")
    assert not matches_product_slug(record, "evoken", "antithesis-of-light")


def test_decode_slug_segment():
    assert decode_slug_segment("funeral-doom-") == "funeral doom"
