from linegraph.api import continuous_chart, indexed_chart
from linegraph.axis import AxisRange, format_bound
from linegraph.charts import ContinuousChart, IndexedChart
from linegraph.errors import ChartError, InvalidArgument, NotFound, OutOfRange
from linegraph.mapping import ContinuousMapping, IndexedMapping, map_point, map_points
from linegraph.series import LineSeries, build_segments
from linegraph.style import DEFAULT_STYLE, ChartStyle, validate_chart_style
from linegraph.surface import ChartSurface

__all__ = [
    "AxisRange",
    "ChartError",
    "ChartStyle",
    "ChartSurface",
    "ContinuousChart",
    "ContinuousMapping",
    "DEFAULT_STYLE",
    "IndexedChart",
    "IndexedMapping",
    "InvalidArgument",
    "LineSeries",
    "NotFound",
    "OutOfRange",
    "build_segments",
    "continuous_chart",
    "format_bound",
    "indexed_chart",
    "map_point",
    "map_points",
    "validate_chart_style",
]
