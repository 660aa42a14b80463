from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any

import numpy as np

from linegraph.errors import InvalidArgument
from linegraph.mapping import AxisMapping
from linegraph_scene.geometry import RGBA, coerce_color
from linegraph_scene.nodes import LineNode

if TYPE_CHECKING:
    from linegraph.surface import ChartSurface


LOGGER = logging.getLogger(__name__)


def build_segments(points: np.ndarray, *, color: RGBA, thickness: float) -> tuple[LineNode, ...]:
    """Fresh segment primitives for an (N, 2) polyline.

    No points give no segments, one point gives a single zero-length segment,
    otherwise segment i joins point i and point i + 1.
    """

    count = points.shape[0]
    if count == 0:
        return ()
    if count == 1:
        p = (float(points[0, 0]), float(points[0, 1]))
        return (LineNode(point1=p, point2=p, color=color, thickness=thickness),)
    return tuple(
        LineNode(
            point1=(float(points[i, 0]), float(points[i, 1])),
            point2=(float(points[i + 1, 0]), float(points[i + 1, 1])),
            color=color,
            thickness=thickness,
        )
        for i in range(count - 1)
    )


class LineSeries:
    """One plotted dataset attached to at most one chart.

    Geometry is rebuilt lazily: data, bounds and area changes only set the dirty
    flag, and `flush()` replaces the whole segment tuple in one step. Color and
    thickness are pushed to the live segments immediately.
    """

    def __init__(self, mapping: AxisMapping, buffer: np.ndarray, *, color: RGBA, thickness: float) -> None:
        self._mapping = mapping
        self._buffer = buffer
        self._color = validate_color(color)
        self._thickness = validate_thickness(thickness)
        self._chart: ChartSurface | None = None
        self._segments: tuple[LineNode, ...] = ()
        self._dirty = True
        self._rebuilding = False

    @property
    def chart(self) -> ChartSurface | None:
        return self._chart

    @property
    def attached(self) -> bool:
        return self._chart is not None

    @property
    def kind(self) -> str:
        return self._mapping.kind

    @property
    def data(self) -> np.ndarray:
        """Read-only view of the stored buffer (sorted by x for continuous series)."""
        return self._buffer

    @data.setter
    def data(self, value: Any) -> None:
        self.set_data(value)

    def __len__(self) -> int:
        return int(self._buffer.shape[0])

    @property
    def color(self) -> RGBA:
        return self._color

    @color.setter
    def color(self, value: Any) -> None:
        self.set_color(value)

    @property
    def thickness(self) -> float:
        return self._thickness

    @thickness.setter
    def thickness(self, value: float) -> None:
        self.set_thickness(value)

    @property
    def segments(self) -> tuple[LineNode, ...]:
        return self._segments

    @property
    def dirty(self) -> bool:
        return self._dirty

    def set_data(self, data: Any) -> None:
        buffer = self._mapping.prepare(data)
        self._buffer = buffer
        if self._chart is not None:
            self._chart._series_data_changed(self)
        self.mark_dirty()

    def set_color(self, color: Any) -> None:
        color = validate_color(color)
        if color == self._color:
            return
        self._color = color
        for segment in self._segments:
            segment.color = color

    def set_thickness(self, thickness: float) -> None:
        thickness = validate_thickness(thickness)
        if thickness == self._thickness:
            return
        self._thickness = thickness
        for segment in self._segments:
            segment.thickness = thickness

    def mark_dirty(self) -> None:
        self._dirty = True

    def flush(self) -> bool:
        """Rebuild geometry if dirty. Returns True when a rebuild ran."""
        if not self._dirty or self._chart is None:
            return False
        self._rebuild(self._chart)
        return True

    def _rebuild(self, chart: ChartSurface) -> None:
        if self._rebuilding:
            raise RuntimeError("series rebuild re-entered while already rebuilding")
        self._rebuilding = True
        try:
            points = self._mapping.project(self._buffer, chart.graph_area)
            segments = build_segments(points, color=self._color, thickness=self._thickness)
            background = chart.background
            for segment in self._segments:
                background.remove_child(segment)
            for segment in segments:
                background.add_child(segment)
            self._segments = segments
            self._dirty = False
        finally:
            self._rebuilding = False
        LOGGER.debug("rebuilt %s series: %d points -> %d segments", self.kind, len(self), len(segments))

    def _detach(self, chart: ChartSurface) -> None:
        for segment in self._segments:
            chart.background.remove_child(segment)
        self._segments = ()
        self._chart = None
        self._dirty = True

    def __repr__(self) -> str:
        state = "attached" if self._chart is not None else "detached"
        return f"LineSeries(kind={self.kind!r}, points={len(self)}, {state}, dirty={self._dirty})"


def validate_color(value: Any) -> RGBA:
    try:
        return coerce_color(value)
    except ValueError as exc:
        raise InvalidArgument(str(exc)) from exc


def validate_thickness(value: Any) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"thickness must be a number, got {value!r}") from exc
    if not math.isfinite(out) or out < 0:
        raise InvalidArgument(f"thickness must be a finite number >= 0, got {value!r}")
    return out
