"""
motzkin_store.pipeline.factory

Composition root for a pipeline talking to a real catalog API.

Responsibilities:
- Build the httpx-backed catalog client from settings.
- Start a controller and dispose client + controller together on exit.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from motzkin_store.catalog_clients.http import CatalogApiClient
from motzkin_store.pipeline.controller import CascadeController
from motzkin_store.settings import Settings, get_settings


@asynccontextmanager
async def open_pipeline(
    settings: Settings | None = None,
    *,
    client: CatalogApiClient | None = None,
) -> AsyncIterator[CascadeController[Any]]:
    settings = settings or get_settings()
    owned = client is None
    client = client or CatalogApiClient.from_settings(settings)
    try:
        async with CascadeController(client=client) as controller:
            yield controller
    finally:
        if owned:
            await client.aclose()
