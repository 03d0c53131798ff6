# src/tasker/storage/gateway.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import threading
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from ..prefs.record import SettingsRecord
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)


class PersistenceGateway:
    """
    JSON file storage for the task list and the settings record.

    Two independent files live in `data_dir`:
    - tasks.json    : [{"id", "title", "isCompleted"}, ...] in list order
    - settings.json : {"fontSize", "colorScheme", "theme", "accentColorHex",
                       "addTaskPosition", "retainTasksOnClose"}

    Failure policy:
    - loads never raise; missing/corrupt files read as "nothing saved"
    - writes are atomic (temp file + os.replace) and serialized by a lock;
      failures are logged and reported through the boolean return value
    """

    def __init__(
        self,
        data_dir: str | Path,
        *,
        tasks_filename: str = "tasks.json",
        settings_filename: str = "settings.json",
    ) -> None:
        self._data_dir = Path(data_dir)
        self.tasks_path = self._data_dir / tasks_filename
        self.settings_path = self._data_dir / settings_filename
        self._write_lock = threading.Lock()

    # ---- low-level helpers ----

    def _read_json(self, path: Path) -> Any | None:
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text("utf-8"))
        except (OSError, UnicodeDecodeError):
            logger.exception("Failed to read %s", path)
            return None
        except (ValueError, RecursionError) as e:
            # JSONDecodeError, int digit limit, or nesting too deep
            logger.warning("Ignoring corrupt file %s: %s", path, e)
            return None

    def _write_json(self, path: Path, payload: Any) -> bool:
        with self._write_lock:
            tmp = path.with_suffix(path.suffix + ".tmp")
            try:
                path.parent.mkdir(parents=True, exist_ok=True)
                tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), "utf-8")
                os.replace(tmp, path)
            except (OSError, TypeError, ValueError):
                logger.exception("Failed to write %s", path)
                with contextlib.suppress(OSError):
                    tmp.unlink()
                return False

            with contextlib.suppress(OSError):
                os.chmod(path, 0o600)
            return True

    # ---- tasks ----

    def load_tasks(self) -> list[Task]:
        data = self._read_json(self.tasks_path)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Ignoring %s: expected a list, got %s", self.tasks_path, type(data).__name__)
            return []

        out: list[Task] = []
        for raw in data:
            task = Task.from_dict(raw)
            if task is None:
                logger.warning("Skipping invalid task entry in %s: %r", self.tasks_path, raw)
                continue
            out.append(task)

        logger.info("Loaded %d tasks from %s", len(out), self.tasks_path)
        return out

    def save_tasks(self, tasks: Sequence[Task], *, retain: bool) -> bool:
        """
        Persist `tasks` when retention is enabled.

        With retention disabled the previously saved file is deleted, so that
        turning retention off never leaves stale tasks behind.
        """
        if not retain:
            return self.purge_tasks()

        ok = self._write_json(self.tasks_path, [t.to_dict() for t in tasks])
        if ok:
            logger.debug("Saved %d tasks to %s", len(tasks), self.tasks_path)
        return ok

    def purge_tasks(self) -> bool:
        with self._write_lock:
            try:
                self.tasks_path.unlink(missing_ok=True)
            except OSError:
                logger.exception("Failed to delete %s", self.tasks_path)
                return False
        logger.debug("Purged saved tasks at %s", self.tasks_path)
        return True

    # ---- settings ----

    def load_settings(self, into: SettingsRecord | None = None) -> SettingsRecord:
        """
        Read the settings file.

        Missing or corrupt files give the defaults; invalid fields fall back
        one by one. With `into`, values are applied to that record without
        triggering its change listeners.
        """
        data = self._read_json(self.settings_path)
        if data is not None and not isinstance(data, dict):
            logger.warning("Ignoring %s: expected an object", self.settings_path)
            data = None

        record = into if into is not None else SettingsRecord()
        record.update_from_dict(data or {})
        logger.info("Loaded settings from %s: %s", self.settings_path, record.to_dict())
        return record

    def save_settings(self, record: SettingsRecord) -> bool:
        ok = self._write_json(self.settings_path, record.to_dict())
        if ok:
            logger.debug("Saved settings to %s", self.settings_path)
        return ok
