# src/tasker/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

from ..prefs.record import AddTaskPosition
from .task_models import Task

if TYPE_CHECKING:
    from ..prefs.record import SettingsRecord

logger = logging.getLogger(__name__)

TaskListener = Callable[[tuple[Task, ...]], None]


class TaskStore:
    """
    In-memory ordered task list.

    Invariants after every operation:
    - ids are unique
    - list order is display order and changes only through add/move/removal

    Every operation is a silent no-op on invalid input (blank title, unknown id,
    moving a task onto itself). Listeners are called with the new snapshot after
    each operation that actually changed the list.

    Threading:
    - not thread-safe; all calls are expected from the single UI/event thread
    """

    def __init__(
        self,
        settings: SettingsRecord | None = None,
        tasks: Iterable[Task] | None = None,
    ) -> None:
        self._settings = settings
        self._tasks: list[Task] = []
        self._listeners: list[TaskListener] = []
        self.draft = ""

        seen: set[str] = set()
        for task in tasks or ():
            if task.id in seen:
                logger.warning("Dropping task with duplicate id=%s", task.id)
                continue
            seen.add(task.id)
            self._tasks.append(task)

    # ---- queries ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Read-only snapshot of the list (the Task objects themselves are shared)."""
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.tasks)

    def index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def get(self, task_id: str) -> Task | None:
        idx = self.index_of(task_id)
        return None if idx is None else self._tasks[idx]

    @property
    def completed_count(self) -> int:
        return sum(1 for t in self._tasks if t.is_completed)

    # ---- subscription ----

    def subscribe(self, listener: TaskListener) -> Callable[[], None]:
        """Register a change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    def _changed(self, reason: str) -> None:
        snapshot = self.tasks
        logger.debug("Task list changed (%s) size=%d", reason, len(snapshot))
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Task listener failed after %s", reason)

    # ---- mutations ----

    def _default_position(self) -> AddTaskPosition:
        if self._settings is None:
            return AddTaskPosition.TOP
        return self._settings.add_task_position

    def add(self, title: str, position: AddTaskPosition | None = None) -> Task | None:
        """
        Insert a new task with the trimmed `title`.

        Blank titles are ignored (returns None and leaves `draft` untouched).
        Position defaults to the settings' add-task position.
        """
        clean = (title or "").strip()
        if not clean:
            return None

        if position is None:
            position = self._default_position()

        task = Task.new(clean)
        if position == AddTaskPosition.BOTTOM:
            self._tasks.append(task)
        else:
            self._tasks.insert(0, task)

        self.draft = ""
        self._changed("add")
        return task

    def submit_draft(self) -> Task | None:
        return self.add(self.draft)

    def delete(self, task_id: str) -> bool:
        idx = self.index_of(task_id)
        if idx is None:
            return False
        del self._tasks[idx]
        self._changed("delete")
        return True

    def toggle_completion(self, task_id: str) -> bool:
        task = self.get(task_id)
        if task is None:
            return False
        task.is_completed = not task.is_completed
        self._changed("toggle")
        return True

    def edit_title(self, task_id: str, new_title: str) -> bool:
        """
        Commit an in-place title edit.

        An edit that trims to an empty string is rejected and the previous
        title is kept.
        """
        task = self.get(task_id)
        if task is None:
            return False

        clean = (new_title or "").strip()
        if not clean:
            logger.debug("Empty title commit for id=%s; keeping %r", task_id, task.title)
            return False
        if clean == task.title:
            return False

        task.title = clean
        self._changed("edit")
        return True

    def clear_completed(self) -> int:
        remaining = [t for t in self._tasks if not t.is_completed]
        removed = len(self._tasks) - len(remaining)
        if removed:
            self._tasks = remaining
            self._changed("clear_completed")
        return removed

    def clear_all(self) -> int:
        removed = len(self._tasks)
        if removed:
            self._tasks.clear()
            self._changed("clear_all")
        return removed

    def move(self, source_id: str, target_id: str, place_above: bool) -> bool:
        """
        Move the source task just above or below the target task.

        The destination is computed against the list before removal
        (target for above, target + 1 for below) and shifted down by one when
        the source sits before it, so the result matches a stable array move.
        """
        src = self.index_of(source_id)
        tgt = self.index_of(target_id)
        if src is None or tgt is None or src == tgt:
            return False

        dest = tgt if place_above else tgt + 1
        if src < dest:
            dest -= 1
        if dest == src:
            return False

        task = self._tasks.pop(src)
        self._tasks.insert(dest, task)
        self._changed("move")
        return True
