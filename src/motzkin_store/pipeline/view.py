"""
motzkin_store.pipeline.view

Read-only snapshots handed to renderers.

Responsibilities:
- Describe each stage as items + disabled flag + placeholder hint + select hook.
- Carry the pipeline-wide loading flag and the terminal resource.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from motzkin_store.pipeline.models import EquipmentEntry, SelectItem, StageStatus
from motzkin_store.pipeline.stages import StageSpec

ResourceT = TypeVar("ResourceT")


@dataclass(frozen=True, slots=True)
class StageView:
    index: int
    name: str
    label: str
    items: tuple[SelectItem, ...]
    selected: SelectItem | None
    status: StageStatus
    disabled: bool
    placeholder: str
    on_select: Callable[[SelectItem], Any] = field(compare=False, repr=False)


@dataclass(frozen=True, slots=True)
class PipelineView(Generic[ResourceT]):
    stages: tuple[StageView, ...]
    loading: bool
    resource: ResourceT | None
    resource_status: StageStatus

    @property
    def resource_ready(self) -> bool:
        return self.resource_status is StageStatus.READY and self.resource is not None

    @property
    def resource_entries(self) -> tuple[EquipmentEntry, ...]:
        # Empty when unset or when the server sent something other than an equipment list.
        value: Any = self.resource
        if isinstance(value, tuple) and all(isinstance(v, EquipmentEntry) for v in value):
            return value
        return ()

    def stage(self, name: str) -> StageView:
        for s in self.stages:
            if s.name == name:
                return s
        raise KeyError(name)


def is_disabled(index: int, status: StageStatus, has_items: bool) -> bool:
    if index == 0:
        # The root list stays usable while a refresh runs over existing items.
        return status is StageStatus.LOADING and not has_items
    return status in (StageStatus.DISABLED, StageStatus.LOADING)


def placeholder_for(
    index: int,
    stages: tuple[StageSpec, ...],
    status: StageStatus,
    has_items: bool,
) -> str:
    spec = stages[index]
    if status is StageStatus.FAILED:
        return f"Could not load {spec.plural}"
    if index == 0:
        if status is StageStatus.LOADING and not has_items:
            return f"Loading {spec.plural}..."
        return f"Search {spec.label}"
    if status is StageStatus.DISABLED:
        return f"Select {stages[index - 1].label} First"
    return f"Search {spec.label}"
