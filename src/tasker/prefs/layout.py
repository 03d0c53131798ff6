# src/tasker/prefs/layout.py

from __future__ import annotations

from dataclasses import dataclass

from .record import DEFAULT_FONT_SIZE, clamp_font_size

POPOVER_MIN_HEIGHT = 110.0
SCREEN_MARGIN = 50.0
DEFAULT_SCREEN_HEIGHT = 700.0
LIST_TOP_PADDING = 5.0
DIVIDER_HEIGHT = 1.0


@dataclass(frozen=True, slots=True)
class LayoutMetrics:
    """Sizes that scale with the font size chosen in settings."""

    font_size: float
    row_padding: float
    list_width: float
    input_area_height: float
    task_row_height: float
    footer_height: float
    empty_state_height: float
    button_vertical_padding: float
    button_horizontal_padding: float

    @classmethod
    def for_font_size(cls, font_size: float) -> LayoutMetrics:
        fs = clamp_font_size(font_size) or DEFAULT_FONT_SIZE
        return cls(
            font_size=fs,
            row_padding=fs * 0.7,
            list_width=fs * 24,
            input_area_height=fs * 2.7,
            task_row_height=fs * 1.7,
            footer_height=fs * 2.5,
            empty_state_height=fs * 4,
            button_vertical_padding=fs * 0.40,
            button_horizontal_padding=fs * 0.7,
        )


def popover_size(
    task_count: int,
    metrics: LayoutMetrics,
    *,
    screen_height: float | None = None,
) -> tuple[float, float]:
    """
    (width, height) of the task popover for `task_count` rows.

    Height grows with the row count and is clamped between a fixed minimum
    and the visible screen height minus a margin.
    """
    base = metrics.input_area_height + 2 * DIVIDER_HEIGHT + metrics.footer_height
    if task_count <= 0:
        height = base + metrics.empty_state_height
    else:
        height = base + LIST_TOP_PADDING + task_count * metrics.task_row_height

    max_height = (screen_height or DEFAULT_SCREEN_HEIGHT) - SCREEN_MARGIN
    height = max(min(height, max_height), POPOVER_MIN_HEIGHT)
    return metrics.list_width, height
