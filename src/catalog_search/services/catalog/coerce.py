"""Total coercion helpers for untyped catalog and index payloads."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any


def coerce_string(value: Any) -> str | None:
    """Return the trimmed string, or None for blanks and non-strings."""
    if isinstance(value, str):
        cleaned = value.strip()
        return cleaned or None
    return None


def coerce_text(value: Any) -> str | None:
    """Like coerce_string but also accepts numbers (ids are sometimes numeric)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return str(value)
    return coerce_string(value)


def as_mapping(value: Any) -> Mapping[str, Any]:
    if isinstance(value, Mapping):
        return value
    return {}


def as_list(value: Any) -> list[Any]:
    if isinstance(value, list | tuple):
        return list(value)
    return []


def parse_number(value: Any) -> float | None:
    """Parse finite numbers and numeric strings; booleans are not numbers."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int | float):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str) and value.strip():
        try:
            parsed = float(value.strip())
        except ValueError:
            return None
        return parsed if math.isfinite(parsed) else None
    return None


def parse_boolean(value: Any) -> bool | None:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
    return None


def unique(values: list[str]) -> list[str]:
    """Deduplicate while preserving first-seen order."""
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        if value in seen:
            continue
        seen.add(value)
        result.append(value)
    return result
