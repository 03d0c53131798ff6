# src/tasker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

Autosave, bootstrap and the console depend on Protocols instead of the
concrete gateway/reporter. This keeps storage and transport swappable and
makes testing easier.
"""

from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..bugreport.reporter import EnvironmentInfo, ReportOutcome
    from ..prefs.record import SettingsRecord
    from ..tasks.task_models import Task


class TaskPersistence(Protocol):
    def load_tasks(self) -> list[Task]: ...
    def save_tasks(self, tasks: Sequence[Task], *, retain: bool) -> bool: ...


class SettingsPersistence(Protocol):
    def load_settings(self, into: SettingsRecord | None = None) -> SettingsRecord: ...
    def save_settings(self, record: SettingsRecord) -> bool: ...


class Persistence(TaskPersistence, SettingsPersistence, Protocol):
    """Both records behind one owner (the gateway)."""


class BugReportSender(Protocol):
    """
    Fire-and-forget bug report submission.

    The outcome is delivered to `on_done` (from a background thread); the
    caller decides how to show it.
    """

    def send(self, description: str, env: EnvironmentInfo) -> ReportOutcome: ...

    def send_in_background(
            self,
            description: str,
            env: EnvironmentInfo,
            on_done: Callable[[ReportOutcome], None] | None = None,
    ) -> object: ...
