from __future__ import annotations

from dataclasses import dataclass
import math
import re
from typing import Any, Sequence, TypeAlias


RGBA: TypeAlias = tuple[int, int, int, int]
Vec2: TypeAlias = tuple[float, float]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in a node's local pixel space (origin top-left)."""

    x: float
    y: float
    width: float
    height: float

    def __post_init__(self) -> None:
        for name in ("x", "y", "width", "height"):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or not math.isfinite(value):
                raise ValueError(f"Rect `{name}` must be a finite number")
        if self.width < 0 or self.height < 0:
            raise ValueError("Rect width/height must be >= 0")

    @property
    def position(self) -> Vec2:
        return (float(self.x), float(self.y))

    @property
    def size(self) -> Vec2:
        return (float(self.width), float(self.height))

    @property
    def right(self) -> float:
        return float(self.x + self.width)

    @property
    def bottom(self) -> float:
        return float(self.y + self.height)

    @property
    def bottom_left(self) -> Vec2:
        return (float(self.x), self.bottom)

    @property
    def bottom_right(self) -> Vec2:
        return (self.right, self.bottom)

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.right and self.y <= y <= self.bottom


def coerce_vec2(value: Sequence[float], *, label: str = "point") -> Vec2:
    if isinstance(value, (str, bytes)) or len(value) != 2:
        raise ValueError(f"{label} must be an (x, y) pair")
    x, y = float(value[0]), float(value[1])
    if not (math.isfinite(x) and math.isfinite(y)):
        raise ValueError(f"{label} must be finite")
    return (x, y)


def parse_hex_color(value: str) -> RGBA:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise ValueError(f"color `{value}` must be a hex color (#RRGGBB or #RRGGBBAA)")
    raw = value[1:]
    r, g, b = int(raw[0:2], 16), int(raw[2:4], 16), int(raw[4:6], 16)
    a = int(raw[6:8], 16) if len(raw) == 8 else 255
    return (r, g, b, a)


def coerce_color(value: Any) -> RGBA:
    """Accept `#RRGGBB[AA]`, an RGB triple or an RGBA quadruple."""

    if isinstance(value, str):
        return parse_hex_color(value)
    try:
        channels = tuple(int(c) for c in value)
    except TypeError as exc:
        raise ValueError(f"unsupported color value: {value!r}") from exc
    if len(channels) == 3:
        channels = channels + (255,)
    if len(channels) != 4:
        raise ValueError("color must have 3 or 4 channels")
    if any(c < 0 or c > 255 for c in channels):
        raise ValueError("color channels must be in [0, 255]")
    return channels  # type: ignore[return-value]
