from __future__ import annotations

import math

import numpy as np

from linegraph_scene.geometry import RGBA, Vec2
from linegraph_scene.nodes import LineNode, Node, RectangleNode, TextNode
from linegraph_scene.raster.canvas import fill_rect, new_canvas
from linegraph_scene.raster.draw_lines import draw_segment
from linegraph_scene.raster.draw_text import draw_text


def render_scene(
    root: Node,
    width: int,
    height: int,
    *,
    background: RGBA = (0, 0, 0, 0),
) -> np.ndarray:
    """Rasterize a node tree into a fresh (height, width, 4) uint8 RGBA array."""
    canvas = new_canvas(width, height, background)
    _draw_node(canvas, root, (0.0, 0.0))
    return canvas


def _draw_node(canvas: np.ndarray, node: Node, origin: Vec2) -> None:
    ox, oy = origin
    if isinstance(node, RectangleNode):
        x0 = int(math.floor(ox + node.position[0]))
        y0 = int(math.floor(oy + node.position[1]))
        fill_rect(
            canvas,
            x0=x0,
            y0=y0,
            x1=x0 + int(round(node.size[0])),
            y1=y0 + int(round(node.size[1])),
            color=node.color,
        )
        origin = (ox + node.position[0], oy + node.position[1])
    elif isinstance(node, LineNode):
        draw_segment(
            canvas,
            (ox + node.point1[0], oy + node.point1[1]),
            (ox + node.point2[0], oy + node.point2[1]),
            color=node.color,
            width=node.thickness,
        )
    elif isinstance(node, TextNode):
        bounds = node.bounds()
        draw_text(
            canvas,
            int(round(ox + bounds.x)),
            int(round(oy + bounds.y)),
            node.text,
            node.color,
            font=node.font,
            rotate_deg=node.angle,
        )

    # Stable sort keeps insertion order among equal z_order.
    for child in sorted(node.children, key=lambda c: c.z_order):
        _draw_node(canvas, child, origin)
