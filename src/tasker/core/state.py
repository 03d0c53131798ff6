# src/tasker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..prefs.record import SettingsRecord
from ..storage.autosave import Autosaver
from ..tasks.task_store import TaskStore
from .ports import BugReportSender, Persistence


@dataclass
class AppState:
    """
    Everything one running instance owns.

    There is exactly one SettingsRecord per process; it is shared by reference
    with the store and the autosaver instead of being a module-level global.
    """

    # Process config (AppConfig or a test stand-in).
    config: Any

    settings: SettingsRecord
    store: TaskStore
    gateway: Persistence
    autosaver: Autosaver
    reporter: BugReportSender
