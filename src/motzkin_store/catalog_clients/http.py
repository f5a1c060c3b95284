"""
motzkin_store.catalog_clients.http

HTTP client boundary used by the pipeline to call the catalog API.

Responsibilities:
- Issue `GET` requests for a `RequestDescriptor` against a configured base URL.
- Translate httpx outcomes into the pipeline's `FetchError` taxonomy.
"""

from __future__ import annotations

from typing import Any

import httpx

from motzkin_store.pipeline.errors import HttpError, NetworkError, ParseError
from motzkin_store.pipeline.models import RequestDescriptor
from motzkin_store.settings import Settings


class CatalogApiClient:
    def __init__(self, *, http: httpx.AsyncClient) -> None:
        self._http = http

    @classmethod
    def from_settings(cls, settings: Settings) -> CatalogApiClient:
        http = httpx.AsyncClient(
            base_url=settings.api_base_url,
            timeout=httpx.Timeout(settings.request_timeout_s),
        )
        return cls(http=http)

    def url_for(self, request: RequestDescriptor) -> str:
        return request.url(str(self._http.base_url))

    async def fetch_json(self, request: RequestDescriptor) -> Any:
        url = self.url_for(request)
        try:
            # httpx applies standard query escaping to the parameter values.
            r = await self._http.get(request.path, params=list(request.query_params))
        except httpx.DecodingError as e:
            # Body arrived but its Content-Encoding could not be undone.
            raise ParseError(f"undecodable body: {e}", url=url) from e
        except httpx.RequestError as e:
            raise NetworkError(f"{type(e).__name__}: {e}", url=url) from e

        if not r.is_success:
            raise HttpError(
                f"Failed to fetch data from {request.path}. Status: {r.status_code}",
                status_code=r.status_code,
                url=url,
            )
        try:
            return r.json()
        except (ValueError, httpx.DecodingError) as e:
            raise ParseError(f"invalid JSON body: {e}", url=url) from e

    async def aclose(self) -> None:
        await self._http.aclose()


# --- Module Notes -----------------------------------------------------------
# Timeouts and redirect loops surface as httpx.RequestError and are reported as
# NetworkError; only undecodable bodies become ParseError.
