"""Retained-mode scene primitives used by the line graph engine."""

from .geometry import RGBA, Rect, Vec2, coerce_color, coerce_vec2, parse_hex_color
from .nodes import LineNode, Node, RectangleNode, TextNode
from .text import FontSpec, load_font, text_size

__all__ = [
    "FontSpec",
    "LineNode",
    "Node",
    "RGBA",
    "Rect",
    "RectangleNode",
    "TextNode",
    "Vec2",
    "coerce_color",
    "coerce_vec2",
    "load_font",
    "parse_hex_color",
    "text_size",
]
