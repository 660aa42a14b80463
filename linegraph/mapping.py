from __future__ import annotations

from typing import Any, Iterable, Literal, Protocol

import numpy as np

from linegraph.adapters import normalize_points, normalize_values
from linegraph.axis import AxisName, AxisRange
from linegraph.errors import InvalidArgument
from linegraph_scene.geometry import Rect, Vec2


MappingKind = Literal["continuous", "indexed"]


def map_point(
    point: Vec2,
    x_bounds: tuple[float, float],
    y_bounds: tuple[float, float],
    area: Rect,
) -> Vec2:
    xs, ys = map_points(
        np.asarray([point[0]], dtype=np.float64),
        np.asarray([point[1]], dtype=np.float64),
        x_bounds=x_bounds,
        y_bounds=y_bounds,
        area=area,
    )
    return (float(xs[0]), float(ys[0]))


def map_points(
    xs: np.ndarray,
    ys: np.ndarray,
    *,
    x_bounds: tuple[float, float],
    y_bounds: tuple[float, float],
    area: Rect,
    allow_flat_x: bool = False,
) -> tuple[np.ndarray, np.ndarray]:
    """Project data coordinates into `area`; screen y grows downward.

    With `allow_flat_x` a zero X span collapses every point onto `area.x`
    instead of being rejected.
    """

    x_min, x_max = x_bounds
    y_min, y_max = y_bounds
    x_span = x_max - x_min
    y_span = y_max - y_min
    if y_span <= 0:
        raise RuntimeError(f"non-positive y span {y_span}; axis range invariant violated")
    if x_span < 0 or (x_span == 0 and not allow_flat_x):
        raise RuntimeError(f"non-positive x span {x_span}; axis range invariant violated")

    x_scale = 0.0 if x_span == 0 else area.width / x_span
    y_scale = area.height / y_span
    sx = area.x + (xs - x_min) * x_scale
    sy = area.y + area.height - (ys - y_min) * y_scale
    return sx, sy


class AxisMapping(Protocol):
    """Axis-mapping strategy a chart surface is parameterised by."""

    kind: MappingKind

    @property
    def x_bounds(self) -> tuple[float, float]:
        ...

    @property
    def y_bounds(self) -> tuple[float, float]:
        ...

    def axis(self, name: AxisName) -> AxisRange:
        ...

    def prepare(self, data: Any) -> np.ndarray:
        ...

    def project(self, buffer: np.ndarray, area: Rect) -> np.ndarray:
        ...

    def observe(self, buffer: np.ndarray) -> bool:
        ...

    def refit(self, buffers: Iterable[np.ndarray]) -> bool:
        ...


class ContinuousMapping:
    """Both axes numeric; buffers are (N, 2) arrays kept sorted by x."""

    kind: MappingKind = "continuous"

    def __init__(self, x_range: AxisRange | None = None, y_range: AxisRange | None = None) -> None:
        self.x_range = x_range or AxisRange("x")
        self.y_range = y_range or AxisRange("y")

    @property
    def x_bounds(self) -> tuple[float, float]:
        return self.x_range.bounds()

    @property
    def y_bounds(self) -> tuple[float, float]:
        return self.y_range.bounds()

    def axis(self, name: AxisName) -> AxisRange:
        if name == "x":
            return self.x_range
        if name == "y":
            return self.y_range
        raise InvalidArgument(f"axis must be 'x' or 'y', got {name!r}")

    def prepare(self, data: Any) -> np.ndarray:
        points = normalize_points(data)
        # Stable: equal x keep their input order.
        order = np.argsort(points[:, 0], kind="stable")
        buffer = points[order]
        buffer.flags.writeable = False
        return buffer

    def project(self, buffer: np.ndarray, area: Rect) -> np.ndarray:
        if buffer.shape[0] == 0:
            return np.empty((0, 2), dtype=np.float64)
        sx, sy = map_points(buffer[:, 0], buffer[:, 1], x_bounds=self.x_bounds, y_bounds=self.y_bounds, area=area)
        return np.column_stack((sx, sy))

    def observe(self, buffer: np.ndarray) -> bool:
        return False

    def refit(self, buffers: Iterable[np.ndarray]) -> bool:
        return False


class IndexedMapping:
    """X is the 0-based sample position, shared across series; Y is numeric.

    `index_max` only grows through `observe`; `refit` recomputes it from scratch.
    """

    kind: MappingKind = "indexed"

    def __init__(self, y_range: AxisRange | None = None) -> None:
        self.y_range = y_range or AxisRange("y")
        self.index_max = 0

    @property
    def x_bounds(self) -> tuple[float, float]:
        return (0.0, float(self.index_max))

    @property
    def y_bounds(self) -> tuple[float, float]:
        return self.y_range.bounds()

    def axis(self, name: AxisName) -> AxisRange:
        if name == "y":
            return self.y_range
        if name == "x":
            raise InvalidArgument("x axis of an indexed chart is derived from series length and cannot be set")
        raise InvalidArgument(f"axis must be 'x' or 'y', got {name!r}")

    def prepare(self, data: Any) -> np.ndarray:
        buffer = normalize_values(data)
        buffer.flags.writeable = False
        return buffer

    def project(self, buffer: np.ndarray, area: Rect) -> np.ndarray:
        if buffer.shape[0] == 0:
            return np.empty((0, 2), dtype=np.float64)
        xs = np.arange(buffer.shape[0], dtype=np.float64)
        sx, sy = map_points(
            xs,
            buffer,
            x_bounds=self.x_bounds,
            y_bounds=self.y_bounds,
            area=area,
            allow_flat_x=True,
        )
        return np.column_stack((sx, sy))

    def observe(self, buffer: np.ndarray) -> bool:
        """Grow `index_max` to fit `buffer`. Returns True when it changed."""
        needed = buffer.shape[0] - 1
        if needed > self.index_max:
            self.index_max = needed
            return True
        return False

    def refit(self, buffers: Iterable[np.ndarray]) -> bool:
        """Recompute `index_max` as the longest remaining series. Returns True when it changed."""
        new_max = max((b.shape[0] - 1 for b in buffers), default=0)
        new_max = max(0, new_max)
        if new_max == self.index_max:
            return False
        self.index_max = new_max
        return True
