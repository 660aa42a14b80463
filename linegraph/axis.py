from __future__ import annotations

from decimal import Decimal, InvalidOperation
import math
from typing import Literal

from linegraph.errors import InvalidArgument, OutOfRange


AxisName = Literal["x", "y"]
BoundName = Literal["min", "max"]


class AxisRange:
    """Validated [min, max] span of one axis; `min < max` always holds."""

    __slots__ = ("axis", "_min", "_max")

    def __init__(self, axis: AxisName = "y", min_value: float = 0.0, max_value: float = 1.0) -> None:
        self.axis = axis
        lo = _finite(min_value, bound=f"{axis}_min", limit=max_value)
        hi = _finite(max_value, bound=f"{axis}_max", limit=min_value)
        if lo >= hi:
            raise OutOfRange(f"{axis}_max", hi, lo)
        self._min = lo
        self._max = hi

    @property
    def min(self) -> float:
        return self._min

    @property
    def max(self) -> float:
        return self._max

    @property
    def span(self) -> float:
        return self._max - self._min

    def bounds(self) -> tuple[float, float]:
        return (self._min, self._max)

    def set_min(self, value: float) -> bool:
        """Store a new minimum. Returns False when `value` equals the current one."""
        value = _finite(value, bound=f"{self.axis}_min", limit=self._max)
        if value == self._min:
            return False
        if value >= self._max:
            raise OutOfRange(f"{self.axis}_min", value, self._max)
        self._min = value
        return True

    def set_max(self, value: float) -> bool:
        """Store a new maximum. Returns False when `value` equals the current one."""
        value = _finite(value, bound=f"{self.axis}_max", limit=self._min)
        if value == self._max:
            return False
        if value <= self._min:
            raise OutOfRange(f"{self.axis}_max", value, self._min)
        self._max = value
        return True

    def set_bound(self, which: BoundName, value: float) -> bool:
        if which == "min":
            return self.set_min(value)
        if which == "max":
            return self.set_max(value)
        raise InvalidArgument(f"bound must be 'min' or 'max', got {which!r}")

    def __repr__(self) -> str:
        return f"AxisRange(axis={self.axis!r}, min={self._min!r}, max={self._max!r})"


def format_bound(value: float) -> str:
    """Decimal text for a value label: `10`, `0.25`, `-3.5`."""
    if not math.isfinite(value):
        return str(value)
    abs_v = abs(value)
    if abs_v != 0 and (abs_v >= 1e9 or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(repr(float(value)))
    try:
        q = d.quantize(Decimal("1e-6"))
    except InvalidOperation:
        q = d
    out = format(q, "f")
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def _finite(value: float, *, bound: str, limit: float) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"{bound} must be a number, got {value!r}") from exc
    if not math.isfinite(out):
        raise OutOfRange(bound, out, limit)
    return out
