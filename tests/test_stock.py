"""Tests for variant stock resolution and product-level aggregation."""

import pytest

from catalog_search.services.catalog.stock import (
    normalize_stock_status,
    resolve_variant_stock,
    summarize_stock_status,
)


@pytest.mark.parametrize(
    ("quantity", "status", "in_stock"),
    [
        (-2, "sold_out", False),
        (0, "sold_out", False),
        (1, "low_stock", True),
        (5, "low_stock", True),
        (6, "in_stock", True),
        (120.0, "in_stock", True),
    ],
)
def test_inventory_quantity_buckets(quantity, status, in_stock):
    result = resolve_variant_stock(inventory_quantity=quantity)

    assert result.status == status
    assert result.in_stock is in_stock


def test_quantity_wins_over_every_other_signal():
    result = resolve_variant_stock(
        inventory_quantity=0,
        manage_inventory=False,
        allow_backorder=True,
        stock_status="in_stock",
    )

    assert result.status == "sold_out"
    assert result.in_stock is False


@pytest.mark.parametrize("quantity", [True, float("nan"), float("inf"), "4"])
def test_non_finite_or_non_numeric_quantities_are_ignored(quantity):
    assert resolve_variant_stock(inventory_quantity=quantity).status == "unknown"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (" Available ", "in_stock"),
        ("BACKORDER", "in_stock"),
        ("limited", "low_stock"),
        ("scarce", "low_stock"),
        ("OOS", "sold_out"),
        ("out-of-stock", "sold_out"),
        ("unavailable", "sold_out"),
        ("preorder", None),
        (None, None),
        (3, None),
    ],
)
def test_normalize_stock_status(raw, expected):
    assert normalize_stock_status(raw) == expected


def test_status_string_wins_over_flags():
    result = resolve_variant_stock(stock_status="sold_out", allow_backorder=True)

    assert result.status == "sold_out"
    assert result.in_stock is False


def test_low_stock_status_is_still_purchasable():
    result = resolve_variant_stock(stock_status="low")

    assert result.status == "low_stock"
    assert result.in_stock is True


def test_backorder_flag_must_be_exactly_true():
    assert resolve_variant_stock(allow_backorder=True).status == "in_stock"
    assert resolve_variant_stock(allow_backorder="true").status == "unknown"


def test_unmanaged_inventory_is_in_stock():
    assert resolve_variant_stock(manage_inventory=False).status == "in_stock"
    assert resolve_variant_stock(manage_inventory=True).status == "unknown"


def test_unknown_defaults_to_purchasable():
    result = resolve_variant_stock()

    assert result.status == "unknown"
    assert result.in_stock is True


@pytest.mark.parametrize(
    ("statuses", "expected"),
    [
        ([], "unknown"),
        (["unknown", None], "unknown"),
        (["sold_out", "sold_out", "unknown"], "sold_out"),
        (["in_stock", "low_stock", "sold_out"], "low_stock"),
        (["in_stock", "sold_out"], "in_stock"),
        (["in_stock", "unknown"], "in_stock"),
    ],
)
def test_summarize_stock_status(statuses, expected):
    assert summarize_stock_status(statuses) == expected
