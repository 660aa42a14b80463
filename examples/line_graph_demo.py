from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from linegraph import continuous_chart, indexed_chart
from linegraph_scene.raster import render_scene


LIGHT_STYLE = {
    "back_color": "#FFFFFF",
    "axis_color": "#000000",
    "label_color": "#000000",
    "value_color": "#000000",
}


def _render_indexed() -> np.ndarray:
    samples = np.sqrt(np.arange(20, dtype=np.float64))
    chart = indexed_chart(
        y_range=(float(samples.min()), float(samples.max())),
        graph_area=(100, 50, 450, 450),
        size=(600, 600),
        style={**LIGHT_STYLE, "label_x": "Index", "label_y": "Value"},
    )
    chart.add_series(samples, color=(255, 100, 100), thickness=3)
    chart.flush()
    return render_scene(chart, 600, 600)


def _render_continuous() -> np.ndarray:
    chart = continuous_chart(
        x_range=(0.0, 20.0),
        y_range=(0.0, 20.0),
        graph_area=(100, 50, 450, 450),
        size=(600, 600),
        style=LIGHT_STYLE,
    )
    # Stored sorted by x, so the curve is drawn left to right.
    chart.add_series(
        [(15, 0), (14, 4), (12, 7), (10, 10), (7, 12), (4, 14), (0, 15)],
        color=(255, 100, 100),
        thickness=3,
    )
    chart.flush()
    return render_scene(chart, 600, 600)


def _save_rgba(path: Path, frame: np.ndarray) -> None:
    Image.fromarray(frame, mode="RGBA").save(path)


def main() -> None:
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)

    indexed_path = out_dir / "line_graph_indexed.png"
    continuous_path = out_dir / "line_graph_continuous.png"
    _save_rgba(indexed_path, _render_indexed())
    _save_rgba(continuous_path, _render_continuous())

    print(f"wrote {indexed_path}")
    print(f"wrote {continuous_path}")


if __name__ == "__main__":
    main()
