"""
tests.test_settings

Env-driven settings and the client built from them.
"""

from __future__ import annotations

import pytest

from motzkin_store.catalog_clients.http import CatalogApiClient
from motzkin_store.pipeline.models import RequestDescriptor
from motzkin_store.settings import Settings


def test_defaults() -> None:
    s = Settings()
    assert s.api_base_url == "http://localhost:8080"
    assert s.request_timeout_s == 10.0


def test_env_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MOTZKIN_API_BASE_URL", "http://catalog.internal:9000")
    monkeypatch.setenv("MOTZKIN_REQUEST_TIMEOUT_S", "2.5")
    s = Settings()
    assert s.api_base_url == "http://catalog.internal:9000"
    assert s.request_timeout_s == 2.5


@pytest.mark.asyncio
async def test_client_from_settings_uses_base_url() -> None:
    client = CatalogApiClient.from_settings(Settings(api_base_url="http://catalog.internal:9000"))
    try:
        url = client.url_for(RequestDescriptor("/api/grades", (("school_id", "1"),)))
        assert url == "http://catalog.internal:9000/api/grades?school_id=1"
    finally:
        await client.aclose()
