"""
motzkin_store.pipeline.controller

Cascade state machine for the school -> grade -> class -> equipment chain.

Responsibilities:
- Own the selection store, candidate sets, terminal resource and per-stage status.
- React to selection changes: reset descendants first, then fetch the next stage.
- Discard responses superseded by a newer request for the same stage.
- Publish read-only `PipelineView` snapshots to renderers.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from functools import partial
from typing import Any, Generic, TypeVar

from motzkin_store.observability.logging import get_logger
from motzkin_store.pipeline.errors import FetchFailed
from motzkin_store.pipeline.fetch import FetchOrchestrator, JsonFetcher
from motzkin_store.pipeline.models import (
    SelectItem,
    StageStatus,
    parse_equipment,
    parse_select_items,
)
from motzkin_store.pipeline.resolver import StageResolver
from motzkin_store.pipeline.store import Selection, SelectionChange, SelectionStore
from motzkin_store.pipeline.view import PipelineView, StageView, is_disabled, placeholder_for

log = get_logger(__name__)

ResourceT = TypeVar("ResourceT")

ViewListener = Callable[[PipelineView[Any]], None]


class CascadeController(Generic[ResourceT]):
    """
    Stage indexes run 0..N-1 for the selectable stages; index N is the terminal
    resource. Every mutation must happen on the event loop thread.

    Re-selecting the item a stage already holds is a no-op: deeper selections,
    candidates and the resource are kept and nothing is re-fetched.
    """

    def __init__(
        self,
        *,
        client: JsonFetcher,
        resolver: StageResolver | None = None,
        parse_resource: Callable[[Any], ResourceT] = parse_equipment,
    ) -> None:
        self._resolver = resolver or StageResolver()
        depth = len(self._resolver.stages)

        self._store = SelectionStore(depth)
        self._store.subscribe(self._on_selection_changed)
        self._fetcher = FetchOrchestrator(client=client, on_loading_change=self._on_loading_change)
        self._parse_resource = parse_resource

        self._candidates: list[tuple[SelectItem, ...]] = [()] * depth
        self._resource: ResourceT | None = None
        # One entry per stage plus one for the terminal resource.
        self._status: list[StageStatus] = [StageStatus.IDLE_EMPTY] + [StageStatus.DISABLED] * depth
        self._generations: list[int] = [0] * (depth + 1)

        self._tasks: set[asyncio.Task[bool]] = set()
        self._listeners: list[ViewListener] = []
        self._started = False
        self._closed = False

    # -- read side ---------------------------------------------------------

    @property
    def terminal_index(self) -> int:
        return self._resolver.terminal_index

    @property
    def loading(self) -> bool:
        # Pipeline-wide flag: any request in flight, including superseded ones.
        return self._fetcher.loading or StageStatus.LOADING in self._status

    @property
    def selection(self) -> Selection:
        return self._store.snapshot()

    @property
    def resource(self) -> ResourceT | None:
        return self._resource

    def status(self, stage_index: int) -> StageStatus:
        return self._status[self._check_stage(stage_index, allow_terminal=True)]

    def candidates(self, stage_index: int) -> tuple[SelectItem, ...]:
        return self._candidates[self._check_stage(stage_index)]

    def view(self) -> PipelineView[ResourceT]:
        specs = self._resolver.stages
        stages: list[StageView] = []
        for i, spec in enumerate(specs):
            items = self._candidates[i]
            status = self._status[i]
            stages.append(
                StageView(
                    index=i,
                    name=spec.name,
                    label=spec.label,
                    items=items,
                    selected=self._store.get(i),
                    status=status,
                    disabled=is_disabled(i, status, bool(items)),
                    placeholder=placeholder_for(i, specs, status, bool(items)),
                    on_select=partial(self.select, i),
                )
            )
        return PipelineView(
            stages=tuple(stages),
            loading=self.loading,
            resource=self._resource,
            resource_status=self._status[self.terminal_index],
        )

    def subscribe(self, listener: ViewListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # -- user events -------------------------------------------------------

    def start(self) -> None:
        """
        Issue the root stage fetch. Needs a running event loop; calling it twice is harmless.
        """

        self._check_open()
        if self._started:
            return
        self._started = True
        self._issue(0)
        self._publish()

    def select(self, stage_index: int, item: SelectItem) -> bool:
        self._check_open()
        idx = self._check_stage(stage_index)
        if self._status[idx] is StageStatus.DISABLED:
            raise ValueError(f"stage {self._resolver.name_of(idx)!r} is disabled")
        if self._store.get(idx) == item:
            log.debug("selection_unchanged", stage=self._resolver.name_of(idx), item_id=item.id)
            return False
        return self._store.set_selection(idx, item)

    def clear(self, stage_index: int) -> bool:
        self._check_open()
        return self._store.clear_from(self._check_stage(stage_index))

    def retry(self, stage_index: int) -> bool:
        """
        Re-issue the fetch for a failed stage (or the resource). Returns False if not failed.
        """

        self._check_open()
        idx = self._check_stage(stage_index, allow_terminal=True)
        if self._status[idx] is not StageStatus.FAILED:
            return False
        self._issue(idx)
        self._publish()
        return True

    # -- lifecycle ---------------------------------------------------------

    async def wait_idle(self) -> None:
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def aclose(self) -> None:
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()
        self._listeners.clear()

    async def __aenter__(self) -> CascadeController[ResourceT]:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # -- reactions ---------------------------------------------------------

    def _on_selection_changed(self, change: SelectionChange) -> None:
        k = change.stage_index
        item = change.current[k]
        log.info(
            "selection_changed",
            stage=self._resolver.name_of(k),
            item_id=item.id if item is not None else None,
        )
        # Reset strictly before fetching so no stale descendant data survives the change.
        self._reset_below(k)
        if item is not None:
            self._issue(k + 1)
        self._publish()

    def _reset_below(self, stage_index: int) -> None:
        for j in range(stage_index + 1, self.terminal_index + 1):
            # Bumping the generation orphans any in-flight response for stage j.
            self._generations[j] += 1
            self._status[j] = StageStatus.DISABLED
            if j < self.terminal_index:
                self._candidates[j] = ()
        self._resource = None
        log.debug("cascade_reset", below=self._resolver.name_of(stage_index))

    def _issue(self, stage_index: int) -> None:
        self._generations[stage_index] += 1
        generation = self._generations[stage_index]
        is_terminal = stage_index == self.terminal_index

        if is_terminal:
            self._resource = None
            parse: Callable[[Any], Any] = self._parse_resource
        else:
            self._candidates[stage_index] = ()
            parse = parse_select_items
        self._status[stage_index] = StageStatus.LOADING

        request = self._resolver.build_request(stage_index, self._store.ancestors(stage_index))
        coro = self._fetcher.run(
            request,
            partial(self._deliver, stage_index, generation),
            partial(self._fail, stage_index, generation),
            stage=self._resolver.name_of(stage_index),
            parse=parse,
        )
        task = asyncio.get_running_loop().create_task(coro)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    def _is_current(self, stage_index: int, generation: int) -> bool:
        latest = self._generations[stage_index]
        if self._closed or generation != latest:
            log.debug(
                "stale_response_discarded",
                stage=self._resolver.name_of(stage_index),
                generation=generation,
                latest=latest,
            )
            return False
        return True

    def _deliver(self, stage_index: int, generation: int, body: Any) -> None:
        if not self._is_current(stage_index, generation):
            return
        if stage_index == self.terminal_index:
            self._resource = body
        else:
            self._candidates[stage_index] = body
        self._status[stage_index] = StageStatus.READY
        self._publish()

    def _fail(self, stage_index: int, generation: int, failure: FetchFailed) -> None:
        if not self._is_current(stage_index, generation):
            return
        if stage_index == self.terminal_index:
            self._resource = None
        else:
            self._candidates[stage_index] = ()
        self._status[stage_index] = StageStatus.FAILED
        self._publish()

    def _on_loading_change(self, loading: bool) -> None:
        if not self._closed:
            self._publish()

    def _publish(self) -> None:
        if not self._listeners:
            return
        view = self.view()
        for listener in list(self._listeners):
            try:
                listener(view)
            except Exception:
                # A broken renderer must not stop the cascade or other listeners.
                log.exception("listener_failed", listener=repr(listener))

    def _check_stage(self, stage_index: int, *, allow_terminal: bool = False) -> int:
        upper = self.terminal_index + (1 if allow_terminal else 0)
        if not 0 <= stage_index < upper:
            raise IndexError(f"stage index out of range: {stage_index}")
        return stage_index

    def _check_open(self) -> None:
        if self._closed:
            raise RuntimeError("pipeline is closed")
        # Fetch tasks need the loop; fail before the store is touched.
        asyncio.get_running_loop()


# --- Module Notes -----------------------------------------------------------
# A failed stage keeps an empty candidate set and waits for `retry`; nothing
# retries automatically.
