# tests/test_task_models.py

from __future__ import annotations

import uuid

import pytest

from tasker.tasks.task_models import Task, new_task_id


def test_new_task_id_is_uppercase_uuid() -> None:
    tid = new_task_id()
    assert tid == tid.upper()
    assert str(uuid.UUID(tid)).upper() == tid


def test_new_task_has_fresh_id_and_is_incomplete() -> None:
    a = Task.new("a")
    b = Task.new("a")
    assert a.id != b.id
    assert a.is_completed is False


def test_to_dict_uses_persisted_key_names() -> None:
    task = Task(id="ID-1", title="Buy milk", is_completed=True)
    assert task.to_dict() == {"id": "ID-1", "title": "Buy milk", "isCompleted": True}


def test_from_dict_reads_persisted_entry() -> None:
    task = Task.from_dict({"id": "ID-1", "title": " Buy milk ", "isCompleted": True})
    assert task == Task(id="ID-1", title="Buy milk", is_completed=True)


def test_from_dict_missing_completion_flag_defaults_false() -> None:
    task = Task.from_dict({"id": "ID-1", "title": "t"})
    assert task is not None
    assert task.is_completed is False


def test_from_dict_non_bool_completion_flag_reads_false() -> None:
    task = Task.from_dict({"id": "ID-1", "title": "t", "isCompleted": "yes"})
    assert task is not None
    assert task.is_completed is False


@pytest.mark.parametrize(
    "raw",
    [
        None,
        "task",
        ["ID-1", "t"],
        {"title": "no id"},
        {"id": "", "title": "blank id"},
        {"id": "   ", "title": "blank id"},
        {"id": 7, "title": "numeric id"},
        {"id": "ID-1"},
        {"id": "ID-1", "title": 5},
        {"id": "ID-1", "title": ""},
        {"id": "ID-1", "title": " \t\n "},
    ],
)
def test_from_dict_rejects_untrustworthy_entries(raw) -> None:
    assert Task.from_dict(raw) is None
