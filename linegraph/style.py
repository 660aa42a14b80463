from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Any, Mapping

from linegraph_scene.geometry import RGBA, parse_hex_color
from linegraph_scene.text import FontSpec


_COLOR_TOKENS = ("back_color", "axis_color", "label_color", "value_color", "line_color")
_THICKNESS_TOKENS = ("axis_thickness", "line_thickness")
_FONT_TOKENS = ("label_font", "value_font")


@dataclass(frozen=True)
class ChartStyle:
    """Appearance tokens injected into a chart at construction."""

    back_color: str = "#000000"
    axis_color: str = "#FFFFFF"
    axis_thickness: float = 3.0
    label_color: str = "#FFFFFF"
    value_color: str = "#FFFFFF"
    line_color: str = "#FFFFFF"
    line_thickness: float = 3.0
    label_font: FontSpec = field(default_factory=FontSpec)
    value_font: FontSpec = field(default_factory=FontSpec)
    label_x: str = "X"
    label_y: str = "Y"

    def rgba(self, token: str) -> RGBA:
        if token not in _COLOR_TOKENS:
            raise ValueError(f"Unknown color token: {token}")
        return parse_hex_color(getattr(self, token))


DEFAULT_STYLE = ChartStyle()


def validate_chart_style(overrides: Mapping[str, Any] | None = None) -> ChartStyle:
    """Validate and merge user token overrides against the defaults.

    Fonts may be given as `FontSpec` or as a mapping of `FontSpec` fields.
    """

    raw: dict[str, Any] = {f.name: getattr(DEFAULT_STYLE, f.name) for f in fields(ChartStyle)}
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown style token: {key}")
            raw[key] = value

    for key in _COLOR_TOKENS:
        parse_hex_color(raw[key])

    for key in _THICKNESS_TOKENS:
        value = raw[key]
        if isinstance(value, bool) or not isinstance(value, (int, float)) or float(value) <= 0:
            raise ValueError(f"Token `{key}` must be a positive number")
        raw[key] = float(value)

    for key in _FONT_TOKENS:
        value = raw[key]
        if isinstance(value, Mapping):
            unknown = set(value) - set(asdict(FontSpec()))
            if unknown:
                raise ValueError(f"Token `{key}` has unknown font fields: {sorted(unknown)}")
            raw[key] = FontSpec(**value)
        elif not isinstance(value, FontSpec):
            raise ValueError(f"Token `{key}` must be a FontSpec or a mapping of its fields")

    for key in ("label_x", "label_y"):
        if not isinstance(raw[key], str):
            raise ValueError(f"Token `{key}` must be a string")

    return ChartStyle(**raw)
