"""Catalog client abstractions and the Medusa store API implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from catalog_search.config import Settings, settings
from catalog_search.errors import CatalogServiceError, SearchConfigurationError

logger = logging.getLogger(__name__)

PRODUCT_DETAIL_FIELDS = ",".join(
    [
        "id",
        "handle",
        "title",
        "subtitle",
        "description",
        "thumbnail",
        "metadata",
        "created_at",
        "*collection",
        "*categories",
        "*categories.parent_category",
        "*categories.parent_category.parent_category",
        "*variants",
        "*variants.calculated_price",
        "+variants.inventory_quantity",
        "*options",
        "*images",
        "*tags",
    ]
)


class CatalogClient(ABC):
    """Read-only interface over the authoritative product catalog."""

    @abstractmethod
    async def get_product_by_handle(self, handle: str) -> dict[str, Any] | None:
        """Return the catalog record for ``handle`` or None when it does not exist."""

    @abstractmethod
    async def list_products(self, **filters: Any) -> list[dict[str, Any]]:
        """Return catalog records matching the store API filters."""

    async def aclose(self) -> None:
        """Release transport resources held by the client."""


class MedusaCatalogClient(CatalogClient):
    """Catalog client backed by the Medusa store API."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        publishable_key: str,
        region_id: str | None = None,
    ) -> None:
        if not publishable_key:
            raise SearchConfigurationError("Medusa publishable key is required")

        self._client = http_client
        self._headers = {"x-publishable-api-key": publishable_key}
        self._region_id = region_id

    async def get_product_by_handle(self, handle: str) -> dict[str, Any] | None:
        products = await self.list_products(handle=handle, limit=1)
        return products[0] if products else None

    async def list_products(self, **filters: Any) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"fields": PRODUCT_DETAIL_FIELDS}
        if self._region_id:
            params["region_id"] = self._region_id
        params.update({key: value for key, value in filters.items() if value is not None})

        try:
            response = await self._client.get(
                "/store/products", params=params, headers=self._headers
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise CatalogServiceError(
                f"Medusa returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise CatalogServiceError(f"Medusa unreachable: {exc}") from exc

        payload = response.json()
        products = payload.get("products") if isinstance(payload, dict) else None
        if not isinstance(products, list):
            logger.warning("Medusa product list payload missing 'products'")
            return []
        return [product for product in products if isinstance(product, dict)]

    async def aclose(self) -> None:
        await self._client.aclose()


def create_catalog_client(
    http_client: httpx.AsyncClient | None = None,
    config: Settings = settings,
) -> MedusaCatalogClient:
    """Factory for the Medusa client; fails fast when unconfigured."""
    if not config.catalog_configured:
        raise SearchConfigurationError(
            "Medusa configuration missing. Ensure MEDUSA_BACKEND_URL and "
            "MEDUSA_PUBLISHABLE_KEY are set."
        )

    client = http_client or httpx.AsyncClient(
        base_url=config.MEDUSA_BACKEND_URL.rstrip("/"),
        timeout=config.HTTP_TIMEOUT_SECONDS,
    )
    logger.info("Medusa catalog client configured for %s", config.MEDUSA_BACKEND_URL)
    return MedusaCatalogClient(
        http_client=client,
        publishable_key=config.MEDUSA_PUBLISHABLE_KEY,
        region_id=config.MEDUSA_REGION_ID,
    )
