from __future__ import annotations

from typing import Any, Sequence

from linegraph.mapping import ContinuousMapping, IndexedMapping
from linegraph.series import LineSeries
from linegraph.style import ChartStyle
from linegraph.surface import ChartSurface
from linegraph_scene.geometry import Rect, Vec2


class ContinuousChart(ChartSurface):
    """Line chart with numeric x and y; series data is stored sorted by x."""

    mapping: ContinuousMapping

    def __init__(
        self,
        *,
        style: ChartStyle | None = None,
        graph_area: Rect | Sequence[float] | None = None,
        size: Vec2 | None = None,
        position: Vec2 = (0.0, 0.0),
    ) -> None:
        super().__init__(ContinuousMapping(), style=style, graph_area=graph_area, size=size, position=position)

    def add_series(self, data: Any, color: Any = None, thickness: float | None = None) -> LineSeries:
        """Attach (x, y) pairs in any order; they are stable-sorted by x."""
        return super().add_series(data, color=color, thickness=thickness)

    @property
    def min_x(self) -> float:
        return self.mapping.x_range.min

    @min_x.setter
    def min_x(self, value: float) -> None:
        self.set_axis_bound("x", "min", value)

    @property
    def max_x(self) -> float:
        return self.mapping.x_range.max

    @max_x.setter
    def max_x(self, value: float) -> None:
        self.set_axis_bound("x", "max", value)

    @property
    def min_y(self) -> float:
        return self.mapping.y_range.min

    @min_y.setter
    def min_y(self, value: float) -> None:
        self.set_axis_bound("y", "min", value)

    @property
    def max_y(self) -> float:
        return self.mapping.y_range.max

    @max_y.setter
    def max_y(self, value: float) -> None:
        self.set_axis_bound("y", "max", value)


class IndexedChart(ChartSurface):
    """Line chart of scalar samples plotted against their 0-based index.

    The x maximum is shared by every series: it grows to fit the longest
    attached series and is only recomputed downward when a series is removed
    or `refit_x_range()` is called.
    """

    mapping: IndexedMapping

    def __init__(
        self,
        *,
        style: ChartStyle | None = None,
        graph_area: Rect | Sequence[float] | None = None,
        size: Vec2 | None = None,
        position: Vec2 = (0.0, 0.0),
    ) -> None:
        super().__init__(IndexedMapping(), style=style, graph_area=graph_area, size=size, position=position)

    def add_series(self, data: Any, color: Any = None, thickness: float | None = None) -> LineSeries:
        """Attach scalar samples; x is each sample's position."""
        return super().add_series(data, color=color, thickness=thickness)

    @property
    def max_x(self) -> int:
        return self.mapping.index_max

    @property
    def min_y(self) -> float:
        return self.mapping.y_range.min

    @min_y.setter
    def min_y(self, value: float) -> None:
        self.set_axis_bound("y", "min", value)

    @property
    def max_y(self) -> float:
        return self.mapping.y_range.max

    @max_y.setter
    def max_y(self, value: float) -> None:
        self.set_axis_bound("y", "max", value)

    def refit_x_range(self) -> bool:
        """Shrink or grow the shared x maximum to the longest attached series."""
        if not self.mapping.refit(s.data for s in self.series):
            return False
        self._x_range_changed()
        return True
