from __future__ import annotations

from typing import Any, Mapping, Sequence

from linegraph.charts import ContinuousChart, IndexedChart
from linegraph.style import validate_chart_style
from linegraph_scene.geometry import Rect, Vec2


def continuous_chart(
    *,
    x_range: tuple[float, float] | None = None,
    y_range: tuple[float, float] | None = None,
    graph_area: Rect | Sequence[float] | None = None,
    size: Vec2 | None = None,
    style: Mapping[str, Any] | None = None,
) -> ContinuousChart:
    chart = ContinuousChart(style=validate_chart_style(style), graph_area=graph_area, size=size)
    if x_range is not None:
        _apply_range(chart, "x", x_range)
    if y_range is not None:
        _apply_range(chart, "y", y_range)
    return chart


def indexed_chart(
    *,
    y_range: tuple[float, float] | None = None,
    graph_area: Rect | Sequence[float] | None = None,
    size: Vec2 | None = None,
    style: Mapping[str, Any] | None = None,
) -> IndexedChart:
    chart = IndexedChart(style=validate_chart_style(style), graph_area=graph_area, size=size)
    if y_range is not None:
        _apply_range(chart, "y", y_range)
    return chart


def _apply_range(chart: ContinuousChart | IndexedChart, axis: str, bounds: tuple[float, float]) -> None:
    lo, hi = bounds
    current_lo, _ = chart.axis_bounds(axis)  # type: ignore[arg-type]
    # Order the two writes so the intermediate range stays valid.
    if hi > current_lo:
        chart.set_axis_bound(axis, "max", hi)  # type: ignore[arg-type]
        chart.set_axis_bound(axis, "min", lo)  # type: ignore[arg-type]
    else:
        chart.set_axis_bound(axis, "min", lo)  # type: ignore[arg-type]
        chart.set_axis_bound(axis, "max", hi)  # type: ignore[arg-type]
