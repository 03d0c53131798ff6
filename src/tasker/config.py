# src/tasker/config.py

"""Process configuration loaded from environment variables (+ optional .env).

Design goals:
- One AppConfig object for the whole process, built once and passed down.
- Only deployment concerns live here (paths, log level, endpoints, timings).
  User preferences are the SettingsRecord, persisted by the storage gateway.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKER"
APP_DIR_NAME = "Tasker"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def default_data_dir() -> Path:
    """Per-user application data directory for this app."""
    home = Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_DIR_NAME
    if sys.platform.startswith("win"):
        base = os.getenv("APPDATA")
        return (Path(base) if base else home / "AppData" / "Roaming") / APP_DIR_NAME
    xdg = os.getenv("XDG_DATA_HOME")
    return (Path(xdg) if xdg else home / ".local" / "share") / APP_DIR_NAME


@dataclass(frozen=True, slots=True)
class AppConfig:
    # ---- App / logging ----
    app_name: str
    app_version: str
    build_number: str
    log_level: str

    # ---- Local data paths ----
    data_dir: Path
    log_dir: Path

    # ---- Persistence ----
    autosave_delay_seconds: float

    # ---- Bug reports ----
    bug_report_url: str
    bug_report_timeout: float

    @property
    def tasks_path(self) -> Path:
        return self.data_dir / "tasks.json"

    @property
    def settings_path(self) -> Path:
        return self.data_dir / "settings.json"

    @staticmethod
    def from_env() -> AppConfig:
        data_dir = _env_path(_k("DATA_DIR"), default_data_dir())

        return AppConfig(
            app_name=_env(_k("APP_NAME"), "Tasker"),
            app_version=_env(_k("APP_VERSION"), "0.1.0"),
            build_number=_env(_k("BUILD_NUMBER"), "1"),
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            data_dir=data_dir,
            log_dir=_env_path(_k("LOG_DIR"), data_dir / "logs"),
            autosave_delay_seconds=max(0.0, _env_float(_k("AUTOSAVE_DELAY_SECONDS"), 0.5)),
            bug_report_url=_env(_k("BUG_REPORT_URL"), "").strip(),
            bug_report_timeout=max(1.0, _env_float(_k("BUG_REPORT_TIMEOUT_SECONDS"), 10.0)),
        )


_CONFIG: AppConfig | None = None


def get_config() -> AppConfig:
    global _CONFIG
    if _CONFIG is None:
        _CONFIG = AppConfig.from_env()
    return _CONFIG
