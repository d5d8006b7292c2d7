"""Tests for physical format normalization."""

import pytest

from catalog_search.services.catalog.formats import (
    canonical_formats,
    normalize_format_value,
)


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("pro-dub cassette", "Cassette"),
        ("MC", "Cassette"),
        ("Tape", "Cassette"),
        ('12" vinyl', "Vinyl"),
        ("2LP Black Vinyl", "Vinyl"),
        ('7"', "Vinyl"),
        ("clear shell cd-r", "CD"),
        ("Digipak", "CD"),
        ("Compact Disc", "CD"),
        ("Digital download", "Digital"),
        ("T-Shirt", None),
        ("   ", None),
        (None, None),
    ],
)
def test_normalize_format_value(value, expected):
    assert normalize_format_value(value) == expected


def test_canonical_formats_deduplicates_recognized_labels():
    formats = canonical_formats(["LP", '12" vinyl', "CD", "Longsleeve"])

    assert formats == ["Vinyl", "CD"]


def test_canonical_formats_falls_back_to_raw_values():
    formats = canonical_formats(
        ["Longsleeve"], fallback=["Longsleeve", "  ", None, "Patch", "Patch"]
    )

    assert formats == ["Longsleeve", "Patch"]


def test_canonical_formats_empty_without_candidates():
    assert canonical_formats([]) == []
