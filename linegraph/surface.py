from __future__ import annotations

import logging
from typing import Any, Sequence

from linegraph.axis import AxisName, BoundName, format_bound
from linegraph.errors import InvalidArgument, NotFound
from linegraph.mapping import AxisMapping
from linegraph.series import LineSeries, validate_color, validate_thickness
from linegraph.style import DEFAULT_STYLE, ChartStyle
from linegraph_scene.geometry import RGBA, Rect, Vec2, coerce_vec2
from linegraph_scene.nodes import LineNode, Node, RectangleNode, TextNode
from linegraph_scene.text import FontSpec


LOGGER = logging.getLogger(__name__)

DEFAULT_GRAPH_AREA = Rect(100.0, 50.0, 250.0, 250.0)
DEFAULT_SIZE: Vec2 = (400.0, 400.0)
# Horizontal gap between the vertical axis and the y value labels.
VALUE_LABEL_GAP_PX = 10.0


class ChartSurface(Node):
    """Background panel, axes, labels and attached series of one line chart.

    The surface is parameterised by an axis-mapping strategy which owns the
    axis ranges and turns series buffers into screen points. Every mutation that
    moves plotted geometry only marks series dirty; `flush()` does the work.
    """

    def __init__(
        self,
        mapping: AxisMapping,
        *,
        style: ChartStyle | None = None,
        graph_area: Rect | Sequence[float] | None = None,
        size: Vec2 | None = None,
        position: Vec2 = (0.0, 0.0),
    ) -> None:
        super().__init__()
        style = style or DEFAULT_STYLE
        self.mapping = mapping
        self._style = style
        self._series: list[LineSeries] = []

        self.background = RectangleNode(
            position=_coerce_vec(position, label="position"),
            size=_coerce_vec(size or DEFAULT_SIZE, label="size"),
            color=style.rgba("back_color"),
        )
        label_color = style.rgba("label_color")
        value_color = style.rgba("value_color")
        self._label_x = TextNode(text=style.label_x, font=style.label_font, color=label_color, pivot=(0.5, 0.0), z_order=1)
        self._label_y = TextNode(
            text=style.label_y,
            font=style.label_font,
            color=label_color,
            pivot=(0.5, 0.5),
            angle=90,
            z_order=1,
        )
        axis_color = style.rgba("axis_color")
        self._horizontal_line = LineNode(color=axis_color, thickness=style.axis_thickness, z_order=1)
        self._vertical_line = LineNode(color=axis_color, thickness=style.axis_thickness, z_order=1)
        self._text_max_x = TextNode(font=style.value_font, color=value_color, pivot=(1.0, 0.0), z_order=1)
        self._text_max_y = TextNode(font=style.value_font, color=value_color, pivot=(1.0, 0.0), z_order=1)
        self._text_min_x = TextNode(font=style.value_font, color=value_color, pivot=(0.0, 0.0), z_order=1)
        self._text_min_y = TextNode(font=style.value_font, color=value_color, pivot=(1.0, 1.0), z_order=1)
        self._value_labels: dict[tuple[str, str], TextNode] = {
            ("x", "min"): self._text_min_x,
            ("x", "max"): self._text_max_x,
            ("y", "min"): self._text_min_y,
            ("y", "max"): self._text_max_y,
        }

        self.add_child(self.background)
        for node in (
            self._label_x,
            self._label_y,
            self._horizontal_line,
            self._vertical_line,
            self._text_max_x,
            self._text_max_y,
            self._text_min_x,
            self._text_min_y,
        ):
            self.background.add_child(node)

        self._label_x.adjust_size()
        self._label_y.adjust_size()
        self._refresh_value_labels()
        self._graph_area = _coerce_rect(DEFAULT_GRAPH_AREA if graph_area is None else graph_area)
        self._layout()

    # -- series -------------------------------------------------------------

    @property
    def series(self) -> tuple[LineSeries, ...]:
        return tuple(self._series)

    @property
    def style(self) -> ChartStyle:
        return self._style

    def has_series(self, series: LineSeries) -> bool:
        return any(s is series for s in self._series)

    def add_series(self, data: Any, color: Any = None, thickness: float | None = None) -> LineSeries:
        """Attach a new series built from `data`. An empty sequence is valid."""
        if data is None:
            raise InvalidArgument("data must not be None")
        buffer = self.mapping.prepare(data)
        series = LineSeries(
            self.mapping,
            buffer,
            color=self._style.line_color if color is None else color,
            thickness=self._style.line_thickness if thickness is None else thickness,
        )
        series._chart = self
        self._series.append(series)
        LOGGER.debug("attached %s series with %d points", self.mapping.kind, len(series))
        if self.mapping.observe(buffer):
            self._x_range_changed()
        return series

    def remove_series(self, series: LineSeries, *, missing_ok: bool = True) -> bool:
        """Detach `series` and release its segments.

        Returns False for a series not attached to this chart, or raises
        `NotFound` when `missing_ok` is False.
        """
        if not self.has_series(series):
            if missing_ok:
                return False
            raise NotFound("series is not attached to this chart")
        self._series = [s for s in self._series if s is not series]
        series._detach(self)
        LOGGER.debug("detached %s series with %d points", self.mapping.kind, len(series))
        if self.mapping.refit(s.data for s in self._series):
            self._x_range_changed()
        return True

    def _series_data_changed(self, series: LineSeries) -> None:
        if self.mapping.observe(series.data):
            self._x_range_changed()

    def _x_range_changed(self) -> None:
        LOGGER.debug("x range of %s chart changed to %s", self.mapping.kind, self.mapping.x_bounds)
        self._refresh_value_labels(axis="x")
        self.mark_all_dirty()

    # -- update protocol ----------------------------------------------------

    def mark_all_dirty(self) -> None:
        for series in self._series:
            series.mark_dirty()

    @property
    def dirty_series(self) -> tuple[LineSeries, ...]:
        return tuple(s for s in self._series if s.dirty)

    def flush(self) -> None:
        """Rebuild every dirty series; call once per tick before rendering."""
        for series in tuple(self._series):
            series.flush()

    # -- bounds -------------------------------------------------------------

    def set_axis_bound(self, axis: AxisName, which: BoundName, value: float) -> None:
        axis_range = self.mapping.axis(axis)
        if not axis_range.set_bound(which, value):
            return
        self._set_label_text(self._value_labels[(axis, which)], format_bound(getattr(axis_range, which)))
        self.mark_all_dirty()

    def axis_bounds(self, axis: AxisName) -> tuple[float, float]:
        if axis == "x":
            return self.mapping.x_bounds
        if axis == "y":
            return self.mapping.y_bounds
        raise InvalidArgument(f"axis must be 'x' or 'y', got {axis!r}")

    @property
    def graph_area(self) -> Rect:
        return self._graph_area

    @graph_area.setter
    def graph_area(self, value: Rect | Sequence[float]) -> None:
        self.set_graph_area(value)

    def set_graph_area(self, value: Rect | Sequence[float]) -> None:
        """Move the plotting rectangle; invalidates every series.

        Prefer one call per frame over many small adjustments.
        """
        area = _coerce_rect(value)
        if area == self._graph_area:
            return
        self._graph_area = area
        self._layout()
        self.mark_all_dirty()

    def _layout(self) -> None:
        area = self._graph_area
        thickness = self._horizontal_line.thickness
        self._vertical_line.point1 = area.position
        self._vertical_line.point2 = area.bottom_left
        self._horizontal_line.point1 = area.bottom_left
        self._horizontal_line.point2 = area.bottom_right
        self._layout_label_x()
        self._label_y.position = (area.x / 2.0, area.y + area.height / 2.0)
        self._text_min_x.position = (area.x, area.bottom + thickness)
        self._text_max_x.position = (area.right, area.bottom + thickness)
        self._text_max_y.position = (area.x - thickness - VALUE_LABEL_GAP_PX, area.y)
        self._text_min_y.position = (area.x - thickness - VALUE_LABEL_GAP_PX, area.bottom)

    def _layout_label_x(self) -> None:
        area = self._graph_area
        self._label_x.position = (area.x + area.width / 2.0, (self.background.size[1] + area.bottom) / 2.0)

    def _refresh_value_labels(self, axis: AxisName | None = None) -> None:
        axes = ("x", "y") if axis is None else (axis,)
        for name in axes:
            lo, hi = self.axis_bounds(name)
            self._set_label_text(self._value_labels[(name, "min")], format_bound(lo))
            self._set_label_text(self._value_labels[(name, "max")], format_bound(hi))

    @staticmethod
    def _set_label_text(label: TextNode, text: str) -> None:
        label.text = text
        label.adjust_size()

    # -- appearance ---------------------------------------------------------

    @property
    def axis_color(self) -> RGBA:
        return self._horizontal_line.color

    @axis_color.setter
    def axis_color(self, value: Any) -> None:
        color = validate_color(value)
        self._horizontal_line.color = color
        self._vertical_line.color = color

    @property
    def axis_thickness(self) -> float:
        return self._horizontal_line.thickness

    @axis_thickness.setter
    def axis_thickness(self, value: float) -> None:
        thickness = validate_thickness(value)
        self._horizontal_line.thickness = thickness
        self._vertical_line.thickness = thickness
        self._layout()

    @property
    def back_color(self) -> RGBA:
        return self.background.color

    @back_color.setter
    def back_color(self, value: Any) -> None:
        self.background.color = validate_color(value)

    @property
    def label_color(self) -> RGBA:
        return self._label_x.color

    @label_color.setter
    def label_color(self, value: Any) -> None:
        color = validate_color(value)
        self._label_x.color = color
        self._label_y.color = color

    @property
    def label_font(self) -> FontSpec:
        return self._label_x.font

    @label_font.setter
    def label_font(self, value: FontSpec) -> None:
        if not isinstance(value, FontSpec):
            raise InvalidArgument("label_font must be a FontSpec")
        if value == self._label_x.font:
            return
        for label in (self._label_x, self._label_y):
            label.font = value
            label.adjust_size()

    @property
    def label_x(self) -> str:
        return self._label_x.text

    @label_x.setter
    def label_x(self, value: str) -> None:
        self._set_label_text(self._label_x, str(value))

    @property
    def label_y(self) -> str:
        return self._label_y.text

    @label_y.setter
    def label_y(self, value: str) -> None:
        self._set_label_text(self._label_y, str(value))

    @property
    def value_color(self) -> RGBA:
        return self._text_max_x.color

    @value_color.setter
    def value_color(self, value: Any) -> None:
        color = validate_color(value)
        for label in self._value_labels.values():
            label.color = color

    @property
    def value_font(self) -> FontSpec:
        return self._text_max_x.font

    @value_font.setter
    def value_font(self, value: FontSpec) -> None:
        if not isinstance(value, FontSpec):
            raise InvalidArgument("value_font must be a FontSpec")
        if value == self._text_max_x.font:
            return
        for label in self._value_labels.values():
            label.font = value
            label.adjust_size()

    @property
    def position(self) -> Vec2:
        return self.background.position

    @position.setter
    def position(self, value: Vec2) -> None:
        self.background.position = _coerce_vec(value, label="position")

    @property
    def size(self) -> Vec2:
        return self.background.size

    @size.setter
    def size(self, value: Vec2) -> None:
        size = _coerce_vec(value, label="size")
        if size[0] < 0 or size[1] < 0:
            raise InvalidArgument("size must be >= 0")
        self.background.size = size
        self._layout_label_x()

    def label_nodes(self) -> dict[str, TextNode]:
        """Title and value label primitives keyed by role, for inspection."""
        return {
            "label_x": self._label_x,
            "label_y": self._label_y,
            "min_x": self._text_min_x,
            "max_x": self._text_max_x,
            "min_y": self._text_min_y,
            "max_y": self._text_max_y,
        }

    def axis_nodes(self) -> tuple[LineNode, LineNode]:
        """(horizontal, vertical) axis line primitives."""
        return (self._horizontal_line, self._vertical_line)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.mapping.kind!r}, series={len(self._series)}, graph_area={self._graph_area})"


def _coerce_rect(value: Rect | Sequence[float]) -> Rect:
    if isinstance(value, Rect):
        return value
    try:
        x, y, w, h = value
        return Rect(float(x), float(y), float(w), float(h))
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(f"graph area must be a Rect or (x, y, width, height), got {value!r}") from exc


def _coerce_vec(value: Vec2, *, label: str) -> Vec2:
    try:
        return coerce_vec2(value, label=label)
    except (TypeError, ValueError) as exc:
        raise InvalidArgument(str(exc)) from exc
