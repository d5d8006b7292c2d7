"""Canonical physical-format labels for free-form variant and option titles."""

from __future__ import annotations

import re
from collections.abc import Iterable
from typing import Any

from catalog_search.services.catalog.coerce import coerce_string, unique

# Checked in order; cassette first so "tape" never falls through to another bucket.
_FORMAT_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = (
    ("Cassette", re.compile(r"\b(?:cassettes?|tapes?|mc)\b")),
    ("Vinyl", re.compile(r'\bvinyl\b|\b\d?lp\b|\b\d{1,2}"|\b\d{1,2}-inch\b')),
    ("CD", re.compile(r"\bcd(?:-?r)?s?\b|\bcompact disc\b|\bdigipak\b")),
    ("Digital", re.compile(r"\bdigital\b|\bdownload\b|\bflac\b|\bmp3\b")),
)


def normalize_format_value(value: Any) -> str | None:
    """Map a free-form format string onto Vinyl, CD, Cassette or Digital."""
    text = coerce_string(value)
    if not text:
        return None
    lowered = text.lower()
    for label, pattern in _FORMAT_PATTERNS:
        if pattern.search(lowered):
            return label
    return None


def canonical_formats(
    candidates: Iterable[Any], fallback: Iterable[Any] = ()
) -> list[str]:
    """Canonical labels for the recognized candidates, in first-seen order.

    When nothing is recognized the trimmed ``fallback`` strings are returned
    instead, so merch and oddities still surface a label.
    """
    recognized = [
        label
        for label in (normalize_format_value(candidate) for candidate in candidates)
        if label
    ]
    if recognized:
        return unique(recognized)
    return unique([text for text in (coerce_string(entry) for entry in fallback) if text])
