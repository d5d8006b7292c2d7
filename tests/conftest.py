"""Pytest configuration and fixtures for the catalog search service."""

from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from catalog_search.models.product import ProductSlug, SearchHit, VariantOption
from catalog_search.models.search import SearchResponse
from catalog_search.services.search.service import get_search_service


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "asyncio: marks tests as async tests")


@pytest.fixture()
def make_hit():
    """Build a fully populated hit; keyword overrides replace single fields."""

    def _make(**overrides) -> SearchHit:
        fields = {
            "id": "prod_quietus",
            "handle": "evoken-quietus",
            "title": "Evoken - Quietus",
            "artist": "Evoken",
            "album": "Quietus",
            "slug": ProductSlug(
                artist="Evoken",
                album="Quietus",
                artist_slug="evoken",
                album_slug="quietus",
            ),
            "collection_title": "Profound Lore",
            "default_variant": VariantOption(
                id="var_quietus_lp",
                title="Vinyl",
                amount=30,
                has_price=True,
                in_stock=True,
                stock_status="in_stock",
                inventory_quantity=8,
            ),
            "formats": ["Vinyl"],
            "genres": ["Doom"],
            "format": "Vinyl",
            "price_amount": 30,
            "stock_status": "in_stock",
        }
        fields.update(overrides)
        return SearchHit(**fields)

    return _make


@pytest.fixture()
def catalog_client():
    """Catalog client double; configure ``get_product_by_handle`` per test."""
    catalog = MagicMock()
    catalog.get_product_by_handle = AsyncMock(return_value=None)
    catalog.list_products = AsyncMock(return_value=[])
    catalog.aclose = AsyncMock()
    return catalog


@pytest.fixture()
def index_client():
    """Search index double returning an empty result page by default."""
    index = MagicMock()
    index.search = AsyncMock(return_value={"hits": [], "estimatedTotalHits": 0})
    index.is_healthy = AsyncMock(return_value=True)
    index.aclose = AsyncMock()
    return index


@pytest.fixture()
def search_service_stub():
    """Replace the startup-built search service for route tests."""
    from catalog_search.main import app

    stub = MagicMock()
    stub.search = AsyncMock(return_value=SearchResponse())
    stub.hydrate = AsyncMock(return_value=[])
    stub.index.is_healthy = AsyncMock(return_value=True)
    app.dependency_overrides[get_search_service] = lambda: stub
    yield stub
    app.dependency_overrides.pop(get_search_service, None)


@pytest.fixture()
def unconfigured_search():
    """Simulate a deployment started without index or catalog credentials."""
    from catalog_search.main import app

    app.dependency_overrides[get_search_service] = lambda: None
    yield
    app.dependency_overrides.pop(get_search_service, None)


@pytest_asyncio.fixture()
async def client():
    """Return an HTTPX async client pointing at the FastAPI app."""
    from catalog_search.main import app

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://testserver",
    ) as test_client:
        yield test_client
