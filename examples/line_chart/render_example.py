from __future__ import annotations

from pathlib import Path

import numpy as np

from crumble_core.render.raster import save_png
from crumble_plot import create, load_chart_options


HERE = Path(__file__).resolve().parent


def render_from_toml(out_dir: Path = HERE) -> tuple[Path, Path]:
    paper = create(load_chart_options(HERE / "options.toml"))
    return paper.save(out_dir / "visits.svg"), save_png(paper, out_dir / "visits.png")


def render_sine(out_dir: Path = HERE) -> Path:
    # Two phase-shifted waves, lifted above zero so the bands stay readable.
    x = np.linspace(0.0, 2.0 * np.pi, 24)
    paper = create(
        {
            "container": "waves",
            "width": 480,
            "height": 200,
            "padding": 12,
            "shades": True,
            "valuesy": [np.sin(x) * 4 + 10, np.cos(x) * 2 + 5],
            "colors": ["#2ca02c", "#9467bd"],
        }
    )
    return paper.save(out_dir / "waves.svg")


if __name__ == "__main__":
    for path in (*render_from_toml(), render_sine()):
        print(path)
