from __future__ import annotations

import numpy as np

from linegraph_scene.geometry import RGBA


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend_region(dst: np.ndarray, *, left: int, top: int, mask: np.ndarray, color: RGBA) -> None:
    """Source-over `color` onto the pixels selected by a boolean `mask` placed at (left, top).

    The mask is clipped to the canvas; touched pixels become opaque.
    """
    h, w = mask.shape
    x0, y0 = max(0, left), max(0, top)
    x1, y1 = min(dst.shape[1], left + w), min(dst.shape[0], top + h)
    if x1 <= x0 or y1 <= y0:
        return
    sel = mask[y0 - top : y1 - top, x0 - left : x1 - left]
    if not sel.any():
        return
    patch = dst[y0:y1, x0:x1]
    picked = patch[sel]
    a = color[3] / 255.0
    src = np.asarray(color[:3], dtype=np.float32) * a
    picked[:, :3] = (src + picked[:, :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    picked[:, 3] = 255
    patch[sel] = picked


def fill_rect(dst: np.ndarray, *, x0: int, y0: int, x1: int, y1: int, color: RGBA) -> None:
    """Fill the half-open pixel box [x0, x1) x [y0, y1), clipped to the canvas."""
    left, right = min(x0, x1), max(x0, x1)
    top, bottom = min(y0, y1), max(y0, y1)
    if right <= left or bottom <= top:
        return
    blend_region(dst, left=left, top=top, mask=np.ones((bottom - top, right - left), dtype=bool), color=color)
