# src/tasker/tasks/task_models.py

from __future__ import annotations

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


def new_task_id() -> str:
    """Fresh opaque task id (uppercase canonical UUID string)."""
    return str(uuid.uuid4()).upper()


@dataclass(slots=True)
class Task:
    """
    A single to-do item.

    Equality compares every field (id, title, completion), so two versions of the
    same task are not equal. Lookups must always go through `id`.
    """

    id: str
    title: str
    is_completed: bool = False

    @classmethod
    def new(cls, title: str) -> Task:
        return cls(id=new_task_id(), title=title)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "isCompleted": self.is_completed}

    @classmethod
    def from_dict(cls, raw: Any) -> Task | None:
        """
        Build a Task from a persisted entry.

        Returns None for entries that cannot be trusted (blank id or blank title).
        A missing or malformed completion flag is read as False.
        """
        if not isinstance(raw, Mapping):
            return None

        task_id = raw.get("id")
        if not isinstance(task_id, str) or not task_id.strip():
            return None

        title = raw.get("title")
        if not isinstance(title, str) or not title.strip():
            return None

        done = raw.get("isCompleted", False)
        return cls(
            id=task_id.strip(),
            title=title.strip(),
            is_completed=done if isinstance(done, bool) else False,
        )
