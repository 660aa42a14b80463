from __future__ import annotations

import math

import numpy as np

from linegraph_scene.geometry import RGBA, Vec2
from linegraph_scene.raster.canvas import blend_region


def draw_segment(dst: np.ndarray, p0: Vec2, p1: Vec2, color: RGBA, width: float = 1.0) -> None:
    """Paint every pixel whose centre lies within `width / 2` of the segment p0-p1.

    Pixel (x, y) has its centre at integer (x, y). Widths under one pixel are
    drawn one pixel wide, and a zero-length segment paints a dot.
    """
    x0, y0 = float(p0[0]), float(p0[1])
    x1, y1 = float(p1[0]), float(p1[1])
    radius = max(1.0, float(width)) / 2.0

    left = max(0, math.floor(min(x0, x1) - radius))
    right = min(dst.shape[1] - 1, math.ceil(max(x0, x1) + radius))
    top = max(0, math.floor(min(y0, y1) - radius))
    bottom = min(dst.shape[0] - 1, math.ceil(max(y0, y1) + radius))
    if right < left or bottom < top:
        return

    ys, xs = np.mgrid[top : bottom + 1, left : right + 1]
    px = xs.astype(np.float64) - x0
    py = ys.astype(np.float64) - y0
    dx, dy = x1 - x0, y1 - y0
    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        t = np.zeros_like(px)
    else:
        t = np.clip((px * dx + py * dy) / length_sq, 0.0, 1.0)
    dist_sq = (px - t * dx) ** 2 + (py - t * dy) ** 2
    blend_region(dst, left=left, top=top, mask=dist_sq <= radius * radius + 1e-9, color=color)
