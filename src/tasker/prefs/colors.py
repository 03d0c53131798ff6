# src/tasker/prefs/colors.py

from __future__ import annotations

import re
from dataclasses import dataclass

_HEX6 = re.compile(r"^#?([0-9a-fA-F]{6})$")
_HEX3 = re.compile(r"^#?([0-9a-fA-F]{3})$")


@dataclass(frozen=True, slots=True)
class RGBColor:
    """24-bit sRGB color. Hex form is `#RRGGBB` (uppercase)."""

    r: int
    g: int
    b: int

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b):
            if not isinstance(channel, int) or isinstance(channel, bool) or not 0 <= channel <= 255:
                raise ValueError(f"color channel out of range: {channel!r}")

    @classmethod
    def parse(cls, text: object) -> RGBColor | None:
        """
        Parse `#RRGGBB`, `RRGGBB` or `#RGB`.

        Returns None for anything else (callers fall back to a default).
        """
        if not isinstance(text, str):
            return None
        s = text.strip()

        m = _HEX6.match(s)
        if m:
            digits = m.group(1)
            return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))

        m = _HEX3.match(s)
        if m:
            r, g, b = (int(ch * 2, 16) for ch in m.group(1))
            return cls(r, g, b)

        return None

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def __str__(self) -> str:
        return self.to_hex()


DEFAULT_ACCENT = RGBColor(0x6D, 0x72, 0xC3)

# Swatches offered by the accent color picker.
ACCENT_PALETTE: dict[str, RGBColor] = {
    "yellow": RGBColor(0xFF, 0xCC, 0x00),
    "blue": RGBColor(0x00, 0x7A, 0xFF),
    "green": RGBColor(0x28, 0xCD, 0x41),
    "orange": RGBColor(0xFF, 0x95, 0x00),
    "pink": RGBColor(0xFF, 0x2D, 0x55),
    "purple": RGBColor(0xAF, 0x52, 0xDE),
}
