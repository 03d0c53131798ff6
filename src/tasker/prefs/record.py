# src/tasker/prefs/record.py

"""
User preferences (the settings record).

One SettingsRecord is created per process and injected wherever it is needed
(task store, autosave). It validates every assignment and tells subscribers
which field changed, except while a persisted record is being applied
(see `loading()`), so that loading never triggers a save of the file being read.
"""

from __future__ import annotations

import contextlib
import logging
import math
from collections.abc import Callable, Iterator, Mapping
from enum import IntEnum, StrEnum
from typing import Any

from .colors import DEFAULT_ACCENT, RGBColor

logger = logging.getLogger(__name__)

FONT_SIZE_MIN = 10.0
FONT_SIZE_MAX = 30.0
DEFAULT_FONT_SIZE = 13.0

SettingsListener = Callable[[str], None]


class Theme(StrEnum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_raw(cls, raw: Any) -> Theme:
        try:
            return cls(raw)
        except ValueError:
            return cls.SYSTEM


class ColorScheme(StrEnum):
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_raw(cls, raw: Any) -> ColorScheme:
        try:
            return cls(raw)
        except ValueError:
            return cls.LIGHT


class AddTaskPosition(IntEnum):
    """
    Where new tasks are inserted.

    Persisted as a small integer (not the name) so renaming members never
    invalidates stored files.
    """

    TOP = 0
    BOTTOM = 1

    @classmethod
    def from_raw(cls, raw: Any) -> AddTaskPosition:
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            return cls.__members__.get(raw.strip().upper(), cls.TOP)
        if isinstance(raw, bool) or not isinstance(raw, int):
            return cls.TOP
        try:
            return cls(raw)
        except ValueError:
            return cls.TOP


def clamp_font_size(raw: Any) -> float | None:
    """Clamp a numeric font size into range; None if `raw` is not a usable number."""
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        return None
    try:
        value = float(raw)
    except OverflowError:
        # int too large for a float
        value = math.inf if raw > 0 else -math.inf
    if math.isnan(value):
        return None
    return max(FONT_SIZE_MIN, min(FONT_SIZE_MAX, value))


def _coerce_color(raw: Any) -> RGBColor | None:
    if isinstance(raw, RGBColor):
        return raw
    return RGBColor.parse(raw)


class SettingsRecord:
    def __init__(
        self,
        *,
        font_size: float = DEFAULT_FONT_SIZE,
        accent_color: RGBColor | str = DEFAULT_ACCENT,
        theme: Theme | str = Theme.SYSTEM,
        color_scheme: ColorScheme | str = ColorScheme.LIGHT,
        add_task_position: AddTaskPosition | int = AddTaskPosition.TOP,
        retain_tasks_on_close: bool = True,
    ) -> None:
        size = clamp_font_size(font_size)
        self._font_size = DEFAULT_FONT_SIZE if size is None else size
        self._accent_color = _coerce_color(accent_color) or DEFAULT_ACCENT
        self._theme = Theme.from_raw(theme)
        self._color_scheme = ColorScheme.from_raw(color_scheme)
        self._add_task_position = AddTaskPosition.from_raw(add_task_position)
        self._retain_tasks_on_close = bool(retain_tasks_on_close)

        self._listeners: list[SettingsListener] = []
        self._loading_depth = 0

    # ---- fields ----

    @property
    def font_size(self) -> float:
        return self._font_size

    @font_size.setter
    def font_size(self, value: float) -> None:
        size = clamp_font_size(value)
        if size is None:
            logger.warning("Ignoring invalid font size %r", value)
            return
        self._set("font_size", size)

    @property
    def accent_color(self) -> RGBColor:
        return self._accent_color

    @accent_color.setter
    def accent_color(self, value: RGBColor | str) -> None:
        color = _coerce_color(value)
        if color is None:
            logger.warning("Ignoring invalid accent color %r", value)
            return
        self._set("accent_color", color)

    @property
    def theme(self) -> Theme:
        return self._theme

    @theme.setter
    def theme(self, value: Theme | str) -> None:
        self._set("theme", Theme.from_raw(value))

    @property
    def color_scheme(self) -> ColorScheme:
        return self._color_scheme

    @color_scheme.setter
    def color_scheme(self, value: ColorScheme | str) -> None:
        self._set("color_scheme", ColorScheme.from_raw(value))

    @property
    def add_task_position(self) -> AddTaskPosition:
        return self._add_task_position

    @add_task_position.setter
    def add_task_position(self, value: AddTaskPosition | int) -> None:
        self._set("add_task_position", AddTaskPosition.from_raw(value))

    @property
    def retain_tasks_on_close(self) -> bool:
        return self._retain_tasks_on_close

    @retain_tasks_on_close.setter
    def retain_tasks_on_close(self, value: bool) -> None:
        self._set("retain_tasks_on_close", bool(value))

    # ---- change notification ----

    def subscribe(self, listener: SettingsListener) -> Callable[[], None]:
        """Register a listener called with the changed field name. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            with contextlib.suppress(ValueError):
                self._listeners.remove(listener)

        return _unsubscribe

    @contextlib.contextmanager
    def loading(self) -> Iterator[None]:
        """Suppress change notifications while persisted values are applied."""
        self._loading_depth += 1
        try:
            yield
        finally:
            self._loading_depth -= 1

    @property
    def is_loading(self) -> bool:
        return self._loading_depth > 0

    def _set(self, name: str, value: Any) -> None:
        attr = f"_{name}"
        if getattr(self, attr) == value:
            return
        setattr(self, attr, value)

        if self.is_loading:
            return
        logger.debug("Setting changed %s=%r", name, value)
        for listener in list(self._listeners):
            try:
                listener(name)
            except Exception:
                logger.exception("Settings listener failed for field=%s", name)

    # ---- persistence mapping ----

    def to_dict(self) -> dict[str, Any]:
        return {
            "fontSize": self._font_size,
            "colorScheme": self._color_scheme.value,
            "theme": self._theme.value,
            "accentColorHex": self._accent_color.to_hex(),
            "addTaskPosition": int(self._add_task_position),
            "retainTasksOnClose": self._retain_tasks_on_close,
        }

    def update_from_dict(self, raw: Any) -> None:
        """
        Replace every field from a persisted mapping.

        Fields that are missing or invalid fall back to their defaults one by one;
        the rest of the record is still applied. Subscribers are not notified.
        """
        data: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
        retain = data.get("retainTasksOnClose", True)

        with self.loading():
            self.font_size = clamp_font_size(data.get("fontSize")) or DEFAULT_FONT_SIZE
            self.accent_color = _coerce_color(data.get("accentColorHex")) or DEFAULT_ACCENT
            self.theme = Theme.from_raw(data.get("theme"))
            self.color_scheme = ColorScheme.from_raw(data.get("colorScheme"))
            self.add_task_position = AddTaskPosition.from_raw(data.get("addTaskPosition"))
            self.retain_tasks_on_close = retain if isinstance(retain, bool) else True

    @classmethod
    def from_dict(cls, raw: Any) -> SettingsRecord:
        record = cls()
        record.update_from_dict(raw)
        return record

    def snapshot(self) -> SettingsRecord:
        """Detached copy with the same values and no subscribers."""
        return SettingsRecord(
            font_size=self._font_size,
            accent_color=self._accent_color,
            theme=self._theme,
            color_scheme=self._color_scheme,
            add_task_position=self._add_task_position,
            retain_tasks_on_close=self._retain_tasks_on_close,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SettingsRecord):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SettingsRecord({self.to_dict()!r})"
