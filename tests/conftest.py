# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from tasker.cli.bootstrap import create_initial_state
from tasker.core.state import AppState
from tasker.prefs.record import SettingsRecord
from tasker.storage.gateway import PersistenceGateway
from tasker.tasks.task_store import TaskStore


@pytest.fixture()
def config(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal config object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than AppConfig.from_env(),
    to keep unit tests isolated from the developer's environment and .env file.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="Tasker",
        app_version="9.9.9",
        build_number="42",
        data_dir=data_dir,
        log_dir=data_dir / "logs",
        tasks_path=data_dir / "tasks.json",
        settings_path=data_dir / "settings.json",
        # Inline writes keep tests deterministic.
        autosave_delay_seconds=0.0,
        bug_report_url="",
        bug_report_timeout=1.0,
    )


@pytest.fixture()
def settings() -> SettingsRecord:
    return SettingsRecord()


@pytest.fixture()
def store(settings: SettingsRecord) -> TaskStore:
    return TaskStore(settings=settings)


@pytest.fixture()
def gateway(tmp_path: Path) -> PersistenceGateway:
    return PersistenceGateway(tmp_path / "data")


@pytest.fixture()
def state(config: SimpleNamespace) -> AppState:
    """AppState wired exactly like the CLI does, on a temp data dir."""
    return create_initial_state(config=config)
