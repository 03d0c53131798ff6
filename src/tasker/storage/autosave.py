# src/tasker/storage/autosave.py

from __future__ import annotations

"""
Autosave.

Store/settings mutations happen on the UI thread and must not block on disk.
`DebouncedWriter` coalesces bursts of save requests into one trailing write
per key and runs writes one at a time (last write wins). `Autosaver` wires the
task store and the settings record to the persistence gateway through it.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import replace

from ..core.ports import Persistence
from ..prefs.record import SettingsRecord
from ..tasks.task_models import Task
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

Job = Callable[[], object]

TASKS_KEY = "tasks"
SETTINGS_KEY = "settings"


class DebouncedWriter:
    """
    Single-writer queue with a trailing debounce.

    - submit(key, job): remember the latest job for `key`, restart the timer
    - on timer expiry, pending jobs run on the timer thread
    - flush(): run pending jobs now, in the calling thread
    - close(): flush; later submissions run inline

    Jobs never run concurrently with each other. A delay of 0 runs jobs inline.
    """

    def __init__(self, delay_seconds: float = 0.5, *, name: str = "autosave") -> None:
        self._delay = max(0.0, float(delay_seconds))
        self._name = name
        self._lock = threading.Lock()
        self._run_lock = threading.Lock()
        self._pending: dict[str, Job] = {}
        self._timer: threading.Timer | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    @property
    def has_pending(self) -> bool:
        with self._lock:
            return bool(self._pending)

    def submit(self, key: str, job: Job) -> None:
        with self._lock:
            # Re-insert so keys run in the order they were last touched.
            self._pending.pop(key, None)
            self._pending[key] = job
            inline = self._closed or self._delay == 0.0
            if not inline:
                if self._timer is not None:
                    self._timer.cancel()
                self._timer = threading.Timer(self._delay, self._drain)
                self._timer.name = f"{self._name}-timer"
                self._timer.daemon = True
                self._timer.start()

        if inline:
            self._drain()

    def flush(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
        self._drain()

    def close(self) -> None:
        with self._lock:
            self._closed = True
        self.flush()

    def _drain(self) -> None:
        with self._run_lock:
            with self._lock:
                jobs = self._pending
                self._pending = {}
                if self._timer is threading.current_thread():
                    self._timer = None

            for key, job in jobs.items():
                try:
                    job()
                except Exception:
                    logger.exception("%s job failed key=%s", self._name, key)


class Autosaver:
    """
    Persist the task list and the settings record whenever they change.

    The retention flag is read when a task change happens, not when the write
    runs. Changing the flag itself re-saves the task list, which writes it or
    purges the saved file.
    """

    def __init__(
        self,
        gateway: Persistence,
        store: TaskStore,
        settings: SettingsRecord,
        writer: DebouncedWriter,
    ) -> None:
        self._gateway = gateway
        self._store = store
        self._settings = settings
        self._writer = writer
        self._unsubscribers: list[Callable[[], None]] = []

    @property
    def attached(self) -> bool:
        return bool(self._unsubscribers)

    def attach(self) -> None:
        if self._unsubscribers:
            return
        self._unsubscribers = [
            self._store.subscribe(self._on_tasks_changed),
            self._settings.subscribe(self._on_settings_changed),
        ]
        logger.debug("Autosave attached.")

    def _submit_tasks(self, snapshot: tuple[Task, ...]) -> None:
        # Copies: tasks are edited in place after this point.
        snapshot = tuple(replace(t) for t in snapshot)
        retain = self._settings.retain_tasks_on_close
        gateway = self._gateway
        self._writer.submit(TASKS_KEY, lambda: gateway.save_tasks(snapshot, retain=retain))

    def _submit_settings(self) -> None:
        snapshot = self._settings.snapshot()
        gateway = self._gateway
        self._writer.submit(SETTINGS_KEY, lambda: gateway.save_settings(snapshot))

    def _on_tasks_changed(self, snapshot: tuple[Task, ...]) -> None:
        self._submit_tasks(snapshot)

    def _on_settings_changed(self, field: str) -> None:
        self._submit_settings()
        if field == "retain_tasks_on_close":
            self._submit_tasks(self._store.tasks)

    def checkpoint(self) -> None:
        """Save both records now (e.g. when the task window closes or on exit)."""
        self._submit_settings()
        self._submit_tasks(self._store.tasks)
        self._writer.flush()

    def close(self) -> None:
        """Write what is pending; later changes are written synchronously."""
        self._writer.close()

    @property
    def closed(self) -> bool:
        return self._writer.closed
