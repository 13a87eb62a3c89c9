from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Sequence

from umplot.errors import PlotDataError


RGBA = tuple[int, int, int, int]


@dataclass(frozen=True)
class Color:
    r: int
    g: int
    b: int
    a: int = 255

    def __post_init__(self) -> None:
        for name in ("r", "g", "b", "a"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise PlotDataError(f"color channel {name} must be an int, got {value!r}")
            if value < 0 or value > 255:
                raise PlotDataError(f"color channel {name} out of range: {value}")

    def as_rgba(self) -> RGBA:
        return (self.r, self.g, self.b, self.a)

    @classmethod
    def from_hex(cls, text: str) -> "Color":
        raw = text.strip().lstrip("#")
        if len(raw) not in (6, 8):
            raise PlotDataError(f"hex color must be #rrggbb or #rrggbbaa: {text!r}")
        try:
            channels = [int(raw[i : i + 2], 16) for i in range(0, len(raw), 2)]
        except ValueError as exc:
            raise PlotDataError(f"invalid hex color: {text!r}") from exc
        return cls(*channels)


def coerce_color(value: Any) -> Color:
    """Accept a Color, a `#rrggbb[aa]` string, or an (r, g, b[, a]) sequence."""
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        return Color.from_hex(value)
    if isinstance(value, Sequence) and len(value) in (3, 4):
        try:
            channels = [int(v) for v in value]
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"invalid color channels: {value!r}") from exc
        return Color(*channels)
    raise PlotDataError(f"unsupported color value: {value!r}")


WHITE = Color(255, 255, 255)
BLACK = Color(0, 0, 0)
GRAY = Color(130, 130, 130)
LIGHT_GRAY = Color(200, 200, 200)
BLUE = Color(0, 121, 241)
RED = Color(230, 41, 55)
