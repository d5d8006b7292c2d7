"""Run one query through the full search pipeline against the configured services.

Usage::

    python -m catalog_search.scripts.debug_search "doom" --genre doom --in-stock
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from catalog_search.errors import SearchConfigurationError, SearchIndexError
from catalog_search.models.search import SearchFilters, SearchRequest, SearchResponse
from catalog_search.services.search.planner import build_search_params
from catalog_search.services.search.service import create_search_service

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the debug search CLI; returns the process exit code."""
    args = _build_arg_parser().parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    request = SearchRequest(
        query=args.query,
        limit=args.limit,
        offset=args.offset,
        sort=args.sort,
        in_stock_only=args.in_stock,
        filters=SearchFilters(
            genres=args.genre,
            formats=args.format,
            categories=args.category,
            variants=args.variant,
            product_types=args.product_type,
        ),
    )

    if args.plan_only:
        print(json.dumps(build_search_params(request), indent=2))
        return 0

    try:
        response = asyncio.run(_run(request))
    except SearchConfigurationError as exc:
        logger.error("%s", exc)
        return 2
    except SearchIndexError as exc:
        logger.error("Search failed: %s", exc)
        return 1

    print(json.dumps(_summarize(response), indent=2))
    return 0


async def _run(request: SearchRequest) -> SearchResponse:
    service = create_search_service()
    try:
        return await service.search(request)
    finally:
        await service.aclose()


def _summarize(response: SearchResponse) -> dict:
    return {
        "total": response.total,
        "offset": response.offset,
        "has_more": response.has_more,
        "next_offset": response.next_offset,
        "hits": [
            {
                "handle": hit.handle,
                "artist": hit.artist,
                "album": hit.album,
                "slug": f"{hit.slug.artist_slug}/{hit.slug.album_slug}",
                "formats": hit.formats,
                "stock_status": hit.stock_status,
                "price_amount": hit.price_amount,
            }
            for hit in response.hits
        ],
        "facets": response.facets.model_dump(),
    }


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="debug-search",
        description="Query the product index and print the hydrated results.",
    )
    parser.add_argument("query", nargs="?", default="", help="Free-form query text.")
    parser.add_argument("--limit", type=int, default=10)
    parser.add_argument("--offset", type=int, default=0)
    parser.add_argument(
        "--sort",
        default=None,
        help="alphabetical, newest, price-low, price-high, title-asc or title-desc.",
    )
    parser.add_argument("--genre", action="append", default=[])
    parser.add_argument("--format", action="append", default=[])
    parser.add_argument("--category", action="append", default=[])
    parser.add_argument("--variant", action="append", default=[])
    parser.add_argument("--product-type", action="append", default=[])
    parser.add_argument(
        "--in-stock",
        action="store_true",
        help="Exclude sold out products.",
    )
    parser.add_argument(
        "--plan-only",
        action="store_true",
        help="Print the index query without sending it.",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


if __name__ == "__main__":
    sys.exit(main())
