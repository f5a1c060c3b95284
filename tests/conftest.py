"""
tests.conftest

Shared fixtures: a scripted catalog backend served through httpx.MockTransport.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from motzkin_store.catalog_clients.http import CatalogApiClient

Params = tuple[tuple[str, str], ...]


class ScriptedBackend:
    """
    Answers `GET path?params` from a table of canned replies.

    `hold()` returns an event the matching request waits on before replying, which
    lets a test decide the order in which overlapping responses arrive.
    """

    def __init__(self) -> None:
        self._replies: dict[tuple[str, Params], Callable[[httpx.Request], httpx.Response]] = {}
        self._gates: dict[tuple[str, Params], asyncio.Event] = {}
        self.requests: list[httpx.Request] = []
        self.on_request: Callable[[httpx.Request], None] | None = None

    def reply(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        *,
        json: Any = None,
        status: int = 200,
        content: bytes | None = None,
        error: type[httpx.RequestError] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        def _respond(request: httpx.Request) -> httpx.Response:
            if error is not None:
                raise error("backend unreachable", request=request)
            if content is not None:
                return httpx.Response(status, content=content, headers=headers)
            return httpx.Response(status, json=json)

        self._replies[(path, _key(params))] = _respond

    def hold(self, path: str, params: dict[str, Any] | None = None) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[(path, _key(params))] = gate
        return gate

    def requests_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.on_request is not None:
            self.on_request(request)
        key = (request.url.path, tuple(request.url.params.multi_items()))
        gate = self._gates.get(key)
        if gate is not None:
            await gate.wait()
        respond = self._replies.get(key)
        if respond is None:
            return httpx.Response(404, json={"detail": "Not found"})
        return respond(request)


def _key(params: dict[str, Any] | None) -> Params:
    return tuple((k, str(v)) for k, v in (params or {}).items())


@pytest.fixture
def backend() -> ScriptedBackend:
    b = ScriptedBackend()
    b.reply(
        "/api/schools",
        json=[{"id": 1, "label": "Lincoln HS"}, {"id": 2, "label": "Roosevelt MS"}],
    )
    b.reply("/api/grades", {"school_id": 1}, json=[{"id": 9, "label": "Grade 9"}])
    b.reply("/api/grades", {"school_id": 2}, json=[{"id": 6, "label": "Grade 6"}])
    b.reply(
        "/api/classes",
        {"school_id": 1, "grade_id": 9},
        json=[{"id": "A", "label": "Class 9A"}, {"id": "B", "label": "Class 9B"}],
    )
    b.reply(
        "/api/equipment",
        {"school_id": 1, "grade_id": 9, "class_id": "A"},
        json=[{"name": "Calculator", "quantity": 30}],
    )
    b.reply(
        "/api/equipment",
        {"school_id": 1, "grade_id": 9, "class_id": "B"},
        json=[{"name": "Lab goggles", "quantity": 28}],
    )
    return b


@pytest.fixture
def client(backend: ScriptedBackend) -> CatalogApiClient:
    http = httpx.AsyncClient(
        transport=httpx.MockTransport(backend.handler),
        base_url="http://catalog.test",
    )
    return CatalogApiClient(http=http)


async def settle(predicate: Callable[[], bool], *, max_ticks: int = 200) -> None:
    # Let other tasks run until `predicate` holds (without waiting on held requests).
    for _ in range(max_ticks):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")
