"""
motzkin_store.pipeline.store

Current selection per stage.

Responsibilities:
- Hold one `SelectItem | None` per stage.
- Enforce "no stage set while an ancestor is empty" on every mutation.
- Notify observers once per committed change.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from motzkin_store.pipeline.models import SelectItem

Selection = tuple[SelectItem | None, ...]


@dataclass(frozen=True, slots=True)
class SelectionChange:
    stage_index: int
    previous: Selection
    current: Selection


SelectionObserver = Callable[[SelectionChange], None]


class SelectionStore:
    def __init__(self, depth: int) -> None:
        if depth < 1:
            raise ValueError("a selection chain needs at least one stage")
        self._values: Selection = (None,) * depth
        self._observers: list[SelectionObserver] = []

    @property
    def depth(self) -> int:
        return len(self._values)

    def get(self, stage_index: int) -> SelectItem | None:
        return self._values[self._check_index(stage_index)]

    def snapshot(self) -> Selection:
        return self._values

    def ancestors(self, stage_index: int) -> Selection:
        # Valid for stage_index == depth too (the terminal resource's ancestors).
        if not 0 <= stage_index <= self.depth:
            raise IndexError(f"stage index out of range: {stage_index}")
        return self._values[:stage_index]

    def subscribe(self, observer: SelectionObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def _unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return _unsubscribe

    def set_selection(self, stage_index: int, item: SelectItem) -> bool:
        """
        Set `stage_index` to `item` and clear every deeper stage in one step.

        Returns False (and notifies nobody) when the state is unchanged.
        """

        idx = self._check_index(stage_index)
        if any(v is None for v in self._values[:idx]):
            raise ValueError(f"cannot select stage {idx} while an ancestor is empty")
        current = self._values[:idx] + (item,) + (None,) * (self.depth - idx - 1)
        return self._commit(idx, current)

    def clear_from(self, stage_index: int) -> bool:
        idx = self._check_index(stage_index)
        current = self._values[:idx] + (None,) * (self.depth - idx)
        return self._commit(idx, current)

    def _commit(self, stage_index: int, current: Selection) -> bool:
        previous = self._values
        if _same_selection(previous, current):
            return False
        # Single tuple swap: observers never see a half-cleared state.
        self._values = current
        change = SelectionChange(stage_index=stage_index, previous=previous, current=current)
        for observer in list(self._observers):
            observer(change)
        return True

    def _check_index(self, stage_index: int) -> int:
        if not 0 <= stage_index < self.depth:
            raise IndexError(f"stage index out of range: {stage_index}")
        return stage_index


def _same_selection(a: Selection, b: Selection) -> bool:
    # SelectItem equality is by id; None only equals None.
    return all(x == y for x, y in zip(a, b, strict=True))
