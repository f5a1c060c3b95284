"""
tests.test_store

SelectionStore mutations and the no-orphaned-stage invariant.
"""

from __future__ import annotations

import random

import pytest

from motzkin_store.pipeline.models import SelectItem
from motzkin_store.pipeline.store import SelectionChange, SelectionStore


def _monotone(selection) -> bool:
    seen_empty = False
    for value in selection:
        if value is None:
            seen_empty = True
        elif seen_empty:
            return False
    return True


def test_set_selection_clears_deeper_stages_in_one_change() -> None:
    store = SelectionStore(3)
    changes: list[SelectionChange] = []
    store.subscribe(changes.append)

    store.set_selection(0, SelectItem(1, "Lincoln HS"))
    store.set_selection(1, SelectItem(9, "Grade 9"))
    store.set_selection(2, SelectItem("A", "Class 9A"))
    store.set_selection(0, SelectItem(2, "Roosevelt MS"))

    assert store.snapshot() == (SelectItem(2, "Roosevelt MS"), None, None)
    assert len(changes) == 4
    last = changes[-1]
    assert last.stage_index == 0
    assert last.previous[2] == SelectItem("A", "Class 9A")
    assert last.current == (SelectItem(2, "Roosevelt MS"), None, None)


def test_cannot_select_below_an_empty_ancestor() -> None:
    store = SelectionStore(3)
    with pytest.raises(ValueError):
        store.set_selection(1, SelectItem(9, "Grade 9"))
    assert store.snapshot() == (None, None, None)


def test_unchanged_state_does_not_notify() -> None:
    store = SelectionStore(3)
    changes: list[SelectionChange] = []
    store.subscribe(changes.append)

    assert store.clear_from(0) is False
    store.set_selection(0, SelectItem(1, "Lincoln HS"))
    # Same id, different label: still the same selection.
    assert store.set_selection(0, SelectItem(1, "Lincoln High")) is False
    assert len(changes) == 1


def test_clear_from_keeps_shallower_stages() -> None:
    store = SelectionStore(3)
    store.set_selection(0, SelectItem(1, "Lincoln HS"))
    store.set_selection(1, SelectItem(9, "Grade 9"))
    store.set_selection(2, SelectItem("A", "Class 9A"))

    assert store.clear_from(1) is True
    assert store.snapshot() == (SelectItem(1, "Lincoln HS"), None, None)
    assert store.ancestors(3) == (SelectItem(1, "Lincoln HS"), None, None)


def test_out_of_range_stage_raises() -> None:
    store = SelectionStore(3)
    with pytest.raises(IndexError):
        store.get(3)
    with pytest.raises(IndexError):
        store.clear_from(-1)


def test_unsubscribe_stops_notifications() -> None:
    store = SelectionStore(2)
    changes: list[SelectionChange] = []
    unsubscribe = store.subscribe(changes.append)
    unsubscribe()
    store.set_selection(0, SelectItem(1, "Lincoln HS"))
    assert changes == []


def test_random_operation_sequences_never_orphan_a_stage() -> None:
    rng = random.Random(1234)
    store = SelectionStore(3)
    observed: list[bool] = []
    store.subscribe(lambda change: observed.append(_monotone(change.current)))

    for _ in range(500):
        stage = rng.randrange(3)
        if rng.random() < 0.3:
            store.clear_from(stage)
        else:
            try:
                store.set_selection(stage, SelectItem(rng.randrange(3), "x"))
            except ValueError:
                pass
        assert _monotone(store.snapshot())

    assert observed and all(observed)
