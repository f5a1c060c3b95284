"""
motzkin_store.api.app

FastAPI app factory for the dummy catalog API.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Attach the in-memory catalog to app.state.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from motzkin_store.api.mock_db import Catalog, default_catalog
from motzkin_store.api.routers.catalog import router as catalog_router
from motzkin_store.api.routers.health import router as health_router
from motzkin_store.observability.logging import configure_logging, get_logger
from motzkin_store.observability.middleware import RequestContextMiddleware
from motzkin_store.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings, catalog: Catalog | None = None) -> FastAPI:
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    app = FastAPI(
        title="Motzkin Store Catalog",
        version="0.1.0",
        docs_url="/docs",
        openapi_url="/openapi.json",
    )
    app.state.catalog = catalog or default_catalog()

    app.add_middleware(RequestContextMiddleware)
    if settings.env != "prod":
        # Browser front-ends run on another origin during development.
        app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["GET"])
    app.include_router(health_router, tags=["health"])
    app.include_router(catalog_router)

    log.info("catalog_ready", env=settings.env, schools=len(app.state.catalog.schools))
    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; lookups live in `mock_db`, HTTP shapes in routers.
