from __future__ import annotations

from typing import Sequence

from crumble_core.render.paper import Element, Paper
from crumble_plot.geometry import Point
from crumble_plot.style import DEFAULT_STYLE, ChartStyle


def shade_polygon(upper: Sequence[Point], lower: Sequence[Point]) -> list[Point]:
    """Closed boundary of the band between two series: `upper` then `lower` reversed."""

    return list(upper) + list(reversed(lower))


def shade_path(points: Sequence[Point]) -> str:
    return "M" + "".join(point.to_key() + " " for point in points) + "Z"


def draw_shade(paper: Paper, points: Sequence[Point], color: str, style: ChartStyle = DEFAULT_STYLE) -> Element:
    shade = paper.path(shade_path(points)).attr(
        {"fill": color, "fill-opacity": style.shade_opacity, "stroke-width": 0}
    )
    return shade.to_back()
