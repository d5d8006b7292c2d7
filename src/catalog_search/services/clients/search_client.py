"""Search index client abstractions and the Meilisearch implementation."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx

from catalog_search.config import Settings, settings
from catalog_search.errors import SearchConfigurationError, SearchIndexError

logger = logging.getLogger(__name__)


class SearchIndexClient(ABC):
    """Abstract read-only interface over the products search index."""

    @abstractmethod
    async def search(self, params: dict[str, Any]) -> dict[str, Any]:
        """Run one search query and return the raw response payload."""

    @abstractmethod
    async def is_healthy(self) -> bool:
        """Return True when the index service answers its health probe."""

    async def aclose(self) -> None:
        """Release transport resources held by the client."""


class MeilisearchIndexClient(SearchIndexClient):
    """Index client backed by the Meilisearch HTTP API."""

    def __init__(
        self,
        *,
        http_client: httpx.AsyncClient,
        api_key: str,
        index_uid: str,
    ) -> None:
        if not api_key:
            raise SearchConfigurationError("Meilisearch search key is required")
        if not index_uid:
            raise SearchConfigurationError("Meilisearch index uid must be provided")

        self._client = http_client
        self._headers = {"Authorization": f"Bearer {api_key}"}
        self.index_uid = index_uid

    async def search(self, params: dict[str, Any]) -> dict[str, Any]:
        path = f"/indexes/{self.index_uid}/search"
        try:
            response = await self._client.post(path, json=params, headers=self._headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "Meilisearch search failed with HTTP %s: %s",
                exc.response.status_code,
                exc.response.text[:500],
            )
            raise SearchIndexError(
                f"Meilisearch returned HTTP {exc.response.status_code}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Meilisearch request failed: %s", exc)
            raise SearchIndexError(f"Meilisearch unreachable: {exc}") from exc

        payload = response.json()
        if not isinstance(payload, dict):
            raise SearchIndexError("Meilisearch returned a non-object payload")
        return payload

    async def is_healthy(self) -> bool:
        try:
            response = await self._client.get("/health")
        except httpx.HTTPError:
            return False
        return response.status_code == 200

    async def aclose(self) -> None:
        await self._client.aclose()


def create_search_index_client(
    http_client: httpx.AsyncClient | None = None,
    config: Settings = settings,
) -> MeilisearchIndexClient:
    """Factory for the Meilisearch client; fails fast when unconfigured."""
    if not config.search_configured:
        raise SearchConfigurationError(
            "Meilisearch configuration missing. Ensure MEILI_HOST and "
            "MEILI_SEARCH_KEY are set."
        )

    client = http_client or httpx.AsyncClient(
        base_url=config.MEILI_HOST.rstrip("/"),
        timeout=config.HTTP_TIMEOUT_SECONDS,
    )
    logger.info(
        "Meilisearch client configured for %s (index=%s)",
        config.MEILI_HOST,
        config.MEILI_PRODUCTS_INDEX,
    )
    return MeilisearchIndexClient(
        http_client=client,
        api_key=config.MEILI_SEARCH_KEY,
        index_uid=config.MEILI_PRODUCTS_INDEX,
    )
