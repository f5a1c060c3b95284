"""
motzkin_store.pipeline.resolver

Pure mapping from ancestor selections to request descriptors.

Responsibilities:
- Build the endpoint path and cumulative query parameters for each stage and
  for the terminal resource.
"""

from __future__ import annotations

from collections.abc import Sequence

from motzkin_store.pipeline.models import RequestDescriptor, SelectItem
from motzkin_store.pipeline.stages import EQUIPMENT_RESOURCE, SCHOOL_CHAIN, ResourceSpec, StageSpec


class StageResolver:
    def __init__(
        self,
        *,
        stages: Sequence[StageSpec] = SCHOOL_CHAIN,
        resource: ResourceSpec = EQUIPMENT_RESOURCE,
    ) -> None:
        self._stages = tuple(stages)
        self._resource = resource

    @property
    def stages(self) -> tuple[StageSpec, ...]:
        return self._stages

    @property
    def resource(self) -> ResourceSpec:
        return self._resource

    @property
    def terminal_index(self) -> int:
        return len(self._stages)

    def name_of(self, stage_index: int) -> str:
        if stage_index == self.terminal_index:
            return self._resource.name
        return self._stages[stage_index].name

    def build_request(
        self, stage_index: int, ancestor_selections: Sequence[SelectItem | None]
    ) -> RequestDescriptor:
        """
        Every deeper request carries the ids of *all* shallower stages, in stage
        order. Sending only the parent id yields a broader result set from the
        backend without any error.
        """

        if not 0 <= stage_index <= self.terminal_index:
            raise IndexError(f"stage index out of range: {stage_index}")
        if len(ancestor_selections) != stage_index:
            raise ValueError(
                f"stage {stage_index} needs {stage_index} ancestors, "
                f"got {len(ancestor_selections)}"
            )

        params: list[tuple[str, str]] = []
        for spec, item in zip(self._stages, ancestor_selections):
            if item is None:
                raise ValueError(f"ancestor stage {spec.name!r} has no selection")
            params.append((spec.param, str(item.id)))

        if stage_index == self.terminal_index:
            path = self._resource.path
        else:
            path = self._stages[stage_index].path
        return RequestDescriptor(path=path, query_params=tuple(params))
