"""API route registration."""

from fastapi import FastAPI

from catalog_search.api.routes import catalog, search, system


def include_api_routes(app: FastAPI) -> None:
    """Attach all API routers to the application."""

    app.include_router(system.router)
    app.include_router(search.router)
    app.include_router(catalog.router)
