"""
motzkin_store.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (the in-memory catalog).
"""

from __future__ import annotations

from fastapi import Request

from motzkin_store.api.mock_db import Catalog


def catalog_from_app(request: Request) -> Catalog:
    # The catalog is attached in `motzkin_store.api.app.create_app`.
    return request.app.state.catalog  # type: ignore[attr-defined]
