# tests/test_autosave.py

from __future__ import annotations

import logging
import threading

import pytest

from tasker.prefs.record import AddTaskPosition, SettingsRecord
from tasker.storage.autosave import Autosaver, DebouncedWriter
from tasker.tasks.task_store import TaskStore

from .fakes import FakeGateway


def _autosaver(
    settings: SettingsRecord,
    store: TaskStore,
    *,
    delay: float = 0.0,
) -> tuple[Autosaver, FakeGateway, DebouncedWriter]:
    gw = FakeGateway()
    writer = DebouncedWriter(delay)
    saver = Autosaver(gw, store, settings, writer)
    saver.attach()
    return saver, gw, writer


# ---- DebouncedWriter ----


def test_inline_writer_runs_jobs_immediately() -> None:
    writer = DebouncedWriter(0)
    ran: list[str] = []

    writer.submit("k", lambda: ran.append("a"))
    writer.submit("k", lambda: ran.append("b"))

    assert ran == ["a", "b"]
    assert writer.has_pending is False


def test_debounced_writer_keeps_only_latest_job_per_key() -> None:
    writer = DebouncedWriter(60)
    ran: list[str] = []

    writer.submit("tasks", lambda: ran.append("t1"))
    writer.submit("settings", lambda: ran.append("s1"))
    writer.submit("tasks", lambda: ran.append("t2"))
    assert ran == []
    assert writer.has_pending is True

    writer.flush()
    assert ran == ["s1", "t2"]
    assert writer.has_pending is False


def test_debounced_writer_fires_after_delay() -> None:
    writer = DebouncedWriter(0.05)
    done = threading.Event()

    writer.submit("k", done.set)

    assert done.wait(timeout=5.0)
    assert writer.has_pending is False


def test_close_flushes_and_switches_to_inline() -> None:
    writer = DebouncedWriter(60)
    ran: list[str] = []

    writer.submit("k", lambda: ran.append("before"))
    writer.close()
    assert ran == ["before"]

    writer.submit("k", lambda: ran.append("after"))
    assert ran == ["before", "after"]


def test_failing_job_is_logged_and_others_still_run(caplog: pytest.LogCaptureFixture) -> None:
    writer = DebouncedWriter(60, name="autosave-test")
    ran: list[str] = []

    def boom() -> None:
        raise OSError("disk full")

    writer.submit("a", boom)
    writer.submit("b", lambda: ran.append("b"))
    with caplog.at_level(logging.ERROR, logger="tasker.storage.autosave"):
        writer.flush()

    assert ran == ["b"]
    assert "autosave-test job failed key=a" in caplog.text


def test_flush_with_nothing_pending_is_noop() -> None:
    writer = DebouncedWriter(60)
    writer.flush()
    assert writer.has_pending is False


# ---- Autosaver ----


def test_task_change_is_saved(settings: SettingsRecord, store: TaskStore) -> None:
    _, gw, _ = _autosaver(settings, store)

    store.add("Buy milk")

    assert [s.titles for s in gw.task_saves] == [["Buy milk"]]
    assert gw.task_saves[-1].retain is True
    assert [t.title for t in gw.saved_tasks or []] == ["Buy milk"]


def test_debounced_task_changes_coalesce(settings: SettingsRecord, store: TaskStore) -> None:
    _, gw, writer = _autosaver(settings, store, delay=60)

    store.add("a")
    store.add("b")
    store.add("c")
    assert gw.task_saves == []

    writer.flush()
    assert [s.titles for s in gw.task_saves] == [["c", "b", "a"]]


def test_saved_snapshot_is_not_affected_by_later_edits(
    settings: SettingsRecord, store: TaskStore
) -> None:
    _, gw, writer = _autosaver(settings, store, delay=60)

    task = store.add("original")
    assert task is not None
    snapshot_job_pending = writer.has_pending
    task.title = "mutated behind the store's back"
    writer.flush()

    assert snapshot_job_pending is True
    assert gw.task_saves[-1].titles == ["original"]


def test_retention_flag_is_read_at_change_time(settings: SettingsRecord, store: TaskStore) -> None:
    _, gw, writer = _autosaver(settings, store, delay=60)

    store.add("kept")
    # Silent change: no resubmission, so the pending job keeps what it captured.
    with settings.loading():
        settings.retain_tasks_on_close = False
    writer.flush()

    assert [(s.titles, s.retain) for s in gw.task_saves] == [(["kept"], True)]


def test_retention_change_replaces_pending_task_save(
    settings: SettingsRecord, store: TaskStore
) -> None:
    _, gw, writer = _autosaver(settings, store, delay=60)

    store.add("kept")
    settings.retain_tasks_on_close = False
    writer.flush()

    assert [s.retain for s in gw.task_saves] == [False]
    assert gw.saved_tasks is None


def test_disabling_retention_purges_saved_tasks(settings: SettingsRecord, store: TaskStore) -> None:
    _, gw, _ = _autosaver(settings, store)

    store.add("a")
    assert gw.saved_tasks is not None

    settings.retain_tasks_on_close = False
    assert gw.task_saves[-1].retain is False
    assert gw.saved_tasks is None

    store.add("b")
    assert gw.task_saves[-1].retain is False
    assert gw.saved_tasks is None


def test_settings_change_is_saved(settings: SettingsRecord, store: TaskStore) -> None:
    _, gw, _ = _autosaver(settings, store)

    settings.add_task_position = AddTaskPosition.BOTTOM

    assert gw.settings_saves[-1]["addTaskPosition"] == 1
    assert gw.task_saves == []


def test_loading_settings_does_not_save(settings: SettingsRecord, store: TaskStore) -> None:
    _, gw, _ = _autosaver(settings, store)

    settings.update_from_dict({"fontSize": 20, "retainTasksOnClose": False})

    assert gw.settings_saves == []
    assert gw.task_saves == []


def test_close_writes_pending_and_later_changes_inline(
    settings: SettingsRecord, store: TaskStore
) -> None:
    saver, gw, writer = _autosaver(settings, store, delay=60)
    assert saver.attached
    store.add("pending")

    saver.close()
    assert saver.closed
    assert [s.titles for s in gw.task_saves] == [["pending"]]

    store.add("late")
    assert writer.has_pending is False
    assert gw.task_saves[-1].titles == ["late", "pending"]


def test_attach_twice_does_not_double_save(settings: SettingsRecord, store: TaskStore) -> None:
    saver, gw, _ = _autosaver(settings, store)
    saver.attach()

    store.add("once")
    assert len(gw.task_saves) == 1


def test_checkpoint_writes_both_records_now(settings: SettingsRecord, store: TaskStore) -> None:
    saver, gw, writer = _autosaver(settings, store, delay=60)
    store.add("a")

    saver.checkpoint()

    assert writer.has_pending is False
    assert [s.titles for s in gw.task_saves] == [["a"]]
    assert gw.settings_saves == [settings.to_dict()]
