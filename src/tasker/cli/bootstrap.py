# src/tasker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads config once,
- ensures the local data directory exists,
- loads the settings record, then the saved tasks (only if retention is on),
- wires store/settings to the gateway through the autosaver.
"""

from __future__ import annotations

import logging

from ..bugreport.reporter import BugReporter
from ..config import get_config
from ..core.state import AppState
from ..prefs.record import SettingsRecord
from ..storage.autosave import Autosaver, DebouncedWriter
from ..storage.gateway import PersistenceGateway
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(config) -> None:
    config.data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, config=None) -> AppState:
    """
    Create AppState from the provided config.

    Keeping config injectable makes the app easier to test and avoids hidden global reads.
    If config is None, falls back to get_config().
    """
    if config is None:
        config = get_config()

    try:
        _ensure_local_dirs(config)
    except OSError:
        # Persistence is best-effort; the session still works in memory.
        logger.exception("Could not create data dir %s", config.data_dir)

    gateway = PersistenceGateway(
        config.data_dir,
        tasks_filename=config.tasks_path.name,
        settings_filename=config.settings_path.name,
    )

    settings = SettingsRecord()
    gateway.load_settings(into=settings)

    restored = gateway.load_tasks() if settings.retain_tasks_on_close else []
    store = TaskStore(settings=settings, tasks=restored)

    writer = DebouncedWriter(config.autosave_delay_seconds)
    autosaver = Autosaver(gateway, store, settings, writer)
    autosaver.attach()

    reporter = BugReporter(config.bug_report_url, timeout=config.bug_report_timeout)

    logger.info(
        "State ready data_dir=%s tasks=%d retain=%s",
        config.data_dir,
        len(store),
        settings.retain_tasks_on_close,
    )
    return AppState(
        config=config,
        settings=settings,
        store=store,
        gateway=gateway,
        autosaver=autosaver,
        reporter=reporter,
    )


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.autosaver.checkpoint()
    except Exception:
        logger.exception("Final save failed.")

    # Changes after the final checkpoint are written inline.
    try:
        state.autosaver.close()
    except Exception:
        logger.exception("Autosave close failed.")
