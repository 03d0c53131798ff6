# tests/test_task_move.py

from __future__ import annotations

import itertools

import pytest

from tasker.prefs.record import AddTaskPosition
from tasker.tasks.task_store import TaskStore


def _store(titles: list[str]) -> TaskStore:
    s = TaskStore()
    for t in titles:
        s.add(t, AddTaskPosition.BOTTOM)
    return s


def _ids(store: TaskStore) -> dict[str, str]:
    return {t.title: t.id for t in store.tasks}


def _titles(store: TaskStore) -> list[str]:
    return [t.title for t in store.tasks]


def _reference_move(titles: list[str], src: str, tgt: str, above: bool) -> list[str]:
    """Remove the source, then reinsert it right above or below the target."""
    if src == tgt:
        return list(titles)
    rest = [t for t in titles if t != src]
    at = rest.index(tgt)
    rest.insert(at if above else at + 1, src)
    return rest


@pytest.mark.parametrize(
    ("src", "tgt", "above", "expected"),
    [
        ("A", "C", False, ["B", "C", "A"]),
        ("C", "A", True, ["C", "A", "B"]),
        ("A", "B", True, ["A", "B", "C"]),
        ("A", "B", False, ["B", "A", "C"]),
        ("C", "B", True, ["A", "C", "B"]),
        ("B", "A", True, ["B", "A", "C"]),
    ],
)
def test_move_examples(src: str, tgt: str, above: bool, expected: list[str]) -> None:
    store = _store(["A", "B", "C"])
    ids = _ids(store)

    store.move(ids[src], ids[tgt], above)
    assert _titles(store) == expected


def test_move_that_lands_in_place_does_not_notify() -> None:
    store = _store(["A", "B", "C"])
    ids = _ids(store)
    calls: list[int] = []
    store.subscribe(lambda snap: calls.append(1))

    assert store.move(ids["A"], ids["B"], True) is False
    assert store.move(ids["C"], ids["B"], False) is False
    assert calls == []


def test_move_onto_itself_is_noop() -> None:
    store = _store(["A", "B", "C"])
    ids = _ids(store)

    for above in (True, False):
        assert store.move(ids["B"], ids["B"], above) is False
    assert _titles(store) == ["A", "B", "C"]


def test_move_with_unknown_ids_is_noop() -> None:
    store = _store(["A", "B"])
    ids = _ids(store)

    assert store.move("missing", ids["A"], True) is False
    assert store.move(ids["A"], "missing", False) is False
    assert store.move("missing", "also-missing", True) is False
    assert _titles(store) == ["A", "B"]


def test_move_keeps_task_objects_and_completion() -> None:
    store = _store(["A", "B", "C"])
    ids = _ids(store)
    store.toggle_completion(ids["A"])
    before = {t.id: t for t in store.tasks}

    assert store.move(ids["A"], ids["C"], False) is True
    after = {t.id: t for t in store.tasks}
    assert after.keys() == before.keys()
    assert all(after[k] is before[k] for k in before)
    assert store.get(ids["A"]).is_completed is True


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5])
def test_move_matches_reference_for_every_combination(n: int) -> None:
    titles = [chr(ord("A") + i) for i in range(n)]

    for src, tgt, above in itertools.product(titles, titles, (True, False)):
        store = _store(titles)
        ids = _ids(store)

        store.move(ids[src], ids[tgt], above)

        result = _titles(store)
        assert result == _reference_move(titles, src, tgt, above), (src, tgt, above)
        assert sorted(result) == titles
        assert len({t.id for t in store.tasks}) == n
