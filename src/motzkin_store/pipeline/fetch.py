"""
motzkin_store.pipeline.fetch

Failure-contained fetch execution with a shared loading flag.

Responsibilities:
- Run one catalog request and hand the body to a success callback.
- Collapse every failure into `FetchFailed` for a failure callback.
- Track in-flight requests so the pipeline can expose a single `loading` flag.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Protocol

from motzkin_store.observability.logging import get_logger
from motzkin_store.pipeline.errors import FetchError, FetchFailed
from motzkin_store.pipeline.models import RequestDescriptor

log = get_logger(__name__)


class JsonFetcher(Protocol):
    def url_for(self, request: RequestDescriptor) -> str: ...

    async def fetch_json(self, request: RequestDescriptor) -> Any: ...


class FetchOrchestrator:
    """
    Does not de-duplicate or cancel requests: overlapping calls for the same
    stage all complete, and staleness is the caller's concern.
    """

    def __init__(
        self,
        *,
        client: JsonFetcher,
        on_loading_change: Callable[[bool], None] | None = None,
    ) -> None:
        self._client = client
        self._on_loading_change = on_loading_change
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def in_flight(self) -> int:
        return self._in_flight

    async def run(
        self,
        request: RequestDescriptor,
        on_success: Callable[[Any], None],
        on_failure: Callable[[FetchFailed], None],
        *,
        stage: str,
        parse: Callable[[Any], Any] | None = None,
    ) -> bool:
        """
        Returns True when `on_success` was called, False when `on_failure` was.

        Only task cancellation propagates out of this method.
        """

        url = self._client.url_for(request)
        self._enter()
        try:
            log.info("fetch_started", stage=stage, url=url)
            try:
                body = await self._client.fetch_json(request)
                if parse is not None:
                    body = parse(body)
            except FetchError as e:
                if e.url is None:
                    e.url = url
                log.warning(
                    "fetch_failed",
                    stage=stage,
                    url=url,
                    error_type=type(e).__name__,
                    reason=str(e),
                )
                on_failure(FetchFailed(stage=stage, reason=str(e), error=e))
                return False
            log.info("fetch_succeeded", stage=stage, url=url)
            on_success(body)
            return True
        finally:
            self._leave()

    def _enter(self) -> None:
        self._in_flight += 1
        if self._in_flight == 1:
            self._notify(True)

    def _leave(self) -> None:
        self._in_flight -= 1
        if self._in_flight == 0:
            self._notify(False)

    def _notify(self, loading: bool) -> None:
        if self._on_loading_change is not None:
            self._on_loading_change(loading)
