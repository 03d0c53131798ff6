from .colors import ACCENT_PALETTE, DEFAULT_ACCENT, RGBColor
from .record import AddTaskPosition, ColorScheme, SettingsRecord, Theme

__all__ = [
    "ACCENT_PALETTE",
    "DEFAULT_ACCENT",
    "RGBColor",
    "AddTaskPosition",
    "ColorScheme",
    "SettingsRecord",
    "Theme",
]
