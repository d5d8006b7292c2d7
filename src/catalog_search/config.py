"""
Configuration settings for the application.
"""

import logging
import os

from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Application settings loaded from environment variables."""

    # Environment
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

    # Meilisearch settings
    MEILI_HOST: str | None = os.getenv("MEILI_HOST")
    MEILI_SEARCH_KEY: str | None = os.getenv("MEILI_SEARCH_KEY")
    MEILI_PRODUCTS_INDEX: str = os.getenv("MEILI_PRODUCTS_INDEX", "products")

    # Medusa store API settings
    MEDUSA_BACKEND_URL: str | None = os.getenv("MEDUSA_BACKEND_URL")
    MEDUSA_PUBLISHABLE_KEY: str | None = os.getenv("MEDUSA_PUBLISHABLE_KEY")
    MEDUSA_REGION_ID: str | None = os.getenv("MEDUSA_REGION_ID")

    # Server settings
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))

    # Upstream HTTP settings
    HTTP_TIMEOUT_SECONDS: float = float(os.getenv("HTTP_TIMEOUT_SECONDS", "10"))

    # Search request bounds
    SEARCH_DEFAULT_LIMIT: int = int(os.getenv("SEARCH_DEFAULT_LIMIT", "24"))
    SEARCH_MAX_LIMIT: int = int(os.getenv("SEARCH_MAX_LIMIT", "200"))
    HYDRATE_MAX_HANDLES: int = int(os.getenv("HYDRATE_MAX_HANDLES", "50"))

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.
        """
        return self.ENVIRONMENT.lower() == "production"

    @property
    def search_configured(self) -> bool:
        """Return True when a Meilisearch client can be initialized."""
        return bool(self.MEILI_HOST and self.MEILI_SEARCH_KEY)

    @property
    def catalog_configured(self) -> bool:
        """Return True when a Medusa store client can be initialized."""
        return bool(self.MEDUSA_BACKEND_URL and self.MEDUSA_PUBLISHABLE_KEY)

    def __init__(self):
        self.log_level = os.getenv("LOG_LEVEL", "INFO")
        logging.basicConfig(level=self.log_level)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(
            "Config initialized with environment=%s, log_level=%s",
            self.ENVIRONMENT,
            self.log_level,
        )


# Create a global settings instance for import
settings = Settings()
