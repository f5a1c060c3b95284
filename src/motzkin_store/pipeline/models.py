"""
motzkin_store.pipeline.models

Value types shared by every pipeline component.

Responsibilities:
- Selectable items and terminal equipment entries (plus their JSON parsers).
- Request descriptors produced by the resolver and consumed by the transport.
- Per-stage status enum exposed to renderers.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import urlencode

from motzkin_store.pipeline.errors import ParseError

ItemId = int | str


class StageStatus(str, enum.Enum):
    DISABLED = "disabled"
    IDLE_EMPTY = "idle-empty"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SelectItem:
    """
    One selectable option at a stage.

    Items are matched by `id` only; `label` and `extra` are display data.
    """

    id: ItemId
    label: str = field(compare=False)
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_json(cls, raw: Any) -> SelectItem:
        if not isinstance(raw, Mapping):
            raise ParseError(f"expected an object, got {type(raw).__name__}")
        if "id" not in raw or "label" not in raw:
            raise ParseError("item is missing 'id' or 'label'")
        item_id = raw["id"]
        if isinstance(item_id, bool) or not isinstance(item_id, (int, str)):
            raise ParseError(f"item id must be a string or integer, got {item_id!r}")
        extra = {k: v for k, v in raw.items() if k not in ("id", "label")}
        return cls(id=item_id, label=str(raw["label"]), extra=extra)


@dataclass(frozen=True, slots=True)
class EquipmentEntry:
    name: str
    quantity: int | float


@dataclass(frozen=True, slots=True)
class RequestDescriptor:
    """
    Endpoint path plus ordered query parameters for one stage fetch.
    """

    path: str
    query_params: tuple[tuple[str, str], ...] = ()

    @property
    def query_string(self) -> str:
        return urlencode(self.query_params)

    def url(self, base_url: str) -> str:
        url = f"{base_url.rstrip('/')}{self.path}"
        if self.query_params:
            url = f"{url}?{self.query_string}"
        return url


def parse_select_items(body: Any) -> tuple[SelectItem, ...]:
    if not isinstance(body, list):
        raise ParseError(f"expected a JSON array of items, got {type(body).__name__}")
    return tuple(SelectItem.from_json(raw) for raw in body)


def parse_equipment(body: Any) -> Any:
    """
    Equipment lists become a tuple of `EquipmentEntry`; anything else stays opaque.

    A JSON `null` body is rejected because `None` means "resource unset".
    """

    if body is None:
        raise ParseError("equipment response body is null")
    if not isinstance(body, list):
        return body
    entries: list[EquipmentEntry] = []
    for raw in body:
        if not isinstance(raw, Mapping) or "name" not in raw or "quantity" not in raw:
            # Not the equipment shape; keep the payload as the server sent it.
            return body
        quantity = raw["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, (int, float)):
            return body
        entries.append(EquipmentEntry(name=str(raw["name"]), quantity=quantity))
    return tuple(entries)
