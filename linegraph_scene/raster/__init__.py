from .canvas import blend_region, fill_rect, new_canvas
from .draw_lines import draw_segment
from .draw_text import draw_text
from .render import render_scene

__all__ = [
    "blend_region",
    "draw_segment",
    "draw_text",
    "fill_rect",
    "new_canvas",
    "render_scene",
]
