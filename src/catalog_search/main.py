"""FastAPI application entry point."""

import uvicorn

from catalog_search.application import create_app
from catalog_search.config import settings

app = create_app()


def run() -> None:
    """Serve the application with uvicorn; reloads outside production."""
    uvicorn.run(
        "catalog_search.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=not settings.is_production,
    )


if __name__ == "__main__":
    run()

__all__ = ["app", "run"]
