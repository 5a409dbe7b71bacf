"""FastAPI application factory."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from photobrowse.api.catalog import PhotoCatalog
from photobrowse.api.routes.health import router as health_router
from photobrowse.api.routes.photos import router as photos_router
from photobrowse.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    catalog: PhotoCatalog | None = None,
) -> FastAPI:
    """
    Build and return the reference gallery API.

    Without an explicit catalog, the one at ``settings.catalog_path`` is
    loaded when it exists; otherwise the API starts with an empty catalog.
    """
    settings = settings or get_settings()

    if catalog is None:
        if settings.catalog_path.exists():
            catalog = PhotoCatalog.from_json_file(settings.catalog_path)
        else:
            logger.warning("No catalog at %s; serving an empty gallery", settings.catalog_path)
            catalog = PhotoCatalog()

    app = FastAPI(
        title="photobrowse reference API",
        version="0.1.0",
        description="Paginated photo metadata with opaque cursor links",
    )

    # Shared state, read by routes through request.app.state
    app.state.settings = settings
    app.state.catalog = catalog

    app.include_router(health_router)
    app.include_router(photos_router)

    return app
