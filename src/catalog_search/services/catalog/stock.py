"""Variant stock resolution and product-level aggregation."""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Any, NamedTuple

from catalog_search.models.product import StockStatus

LOW_STOCK_THRESHOLD = 5

_STATUS_ALIASES: dict[str, StockStatus] = {
    "in_stock": "in_stock",
    "instock": "in_stock",
    "available": "in_stock",
    "backorder": "in_stock",
    "low_stock": "low_stock",
    "low": "low_stock",
    "limited": "low_stock",
    "scarce": "low_stock",
    "sold_out": "sold_out",
    "sold": "sold_out",
    "out": "sold_out",
    "out_of_stock": "sold_out",
    "out-of-stock": "sold_out",
    "oos": "sold_out",
    "unavailable": "sold_out",
}


class VariantStock(NamedTuple):
    status: StockStatus
    in_stock: bool


def normalize_stock_status(value: Any) -> StockStatus | None:
    """Map a status string onto a known bucket; None when unrecognized."""
    if not isinstance(value, str):
        return None
    return _STATUS_ALIASES.get(value.strip().lower())


def _finite_quantity(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return value if math.isfinite(value) else None


def resolve_variant_stock(
    inventory_quantity: Any = None,
    manage_inventory: Any = None,
    allow_backorder: Any = None,
    stock_status: Any = None,
) -> VariantStock:
    """Resolve one variant's availability.

    Precedence: a finite inventory quantity, then an explicit status string,
    then the backorder flag, then unmanaged inventory. Anything else is
    ``unknown`` and still reported as purchasable.
    """
    quantity = _finite_quantity(inventory_quantity)
    if quantity is not None:
        if quantity <= 0:
            return VariantStock("sold_out", False)
        if quantity <= LOW_STOCK_THRESHOLD:
            return VariantStock("low_stock", True)
        return VariantStock("in_stock", True)

    normalized = normalize_stock_status(stock_status)
    if normalized is not None:
        return VariantStock(normalized, normalized != "sold_out")

    if allow_backorder is True:
        return VariantStock("in_stock", True)

    if manage_inventory is False:
        return VariantStock("in_stock", True)

    return VariantStock("unknown", True)


def summarize_stock_status(statuses: Iterable[StockStatus | None]) -> StockStatus:
    """Aggregate variant statuses into a single product status.

    Unknown variants are ignored. A product is sold out only when every known
    variant is; one low-stock variant makes the whole product low stock.
    """
    known = [status for status in statuses if status and status != "unknown"]
    if not known:
        return "unknown"
    if all(status == "sold_out" for status in known):
        return "sold_out"
    if any(status == "low_stock" for status in known):
        return "low_stock"
    return "in_stock"
