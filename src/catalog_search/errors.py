"""Exceptions raised by the search pipeline and its upstream clients."""

from __future__ import annotations


class SearchConfigurationError(RuntimeError):
    """Raised when the index or catalog endpoints are not configured."""


class SearchIndexError(RuntimeError):
    """Raised when a Meilisearch request fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class CatalogServiceError(RuntimeError):
    """Raised when a Medusa store API request fails."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
