from __future__ import annotations

from typing import Any, Sequence

import numpy as np

from crumble_core.render.paper import Element, Paper
from crumble_plot.adapters.normalize import normalize_series
from crumble_plot.geometry import Point, format_coordinate
from crumble_plot.metadata import ChartMetadata
from crumble_plot.style import DEFAULT_STYLE, ChartStyle


def value_to_y(value: float, metadata: ChartMetadata) -> float:
    """Unpadded y for `value`: the floor maps to `height`, the top to 0."""

    dy = metadata.height / metadata.value_range
    return metadata.height - (value - metadata.bottom_value) * dy


def inset(point: Point, metadata: ChartMetadata) -> Point:
    return point.scale(metadata.shrink_x, metadata.shrink_y).translate(metadata.padding)


def map_values(
    paper: Paper | None,
    values: Sequence[Any] | np.ndarray,
    color: str | None,
    metadata: ChartMetadata,
    style: ChartStyle = DEFAULT_STYLE,
) -> tuple[Point, ...]:
    """Map one series to pixel points, in input order.

    With a color, each segment and marker is drawn on `paper` as it is mapped.
    With `color=None` only the geometry is computed.
    """

    arr = normalize_series(values)
    count = arr.size
    dx = metadata.width / (count - 1) if count > 1 else 0.0

    points: list[Point] = []
    last_point: Point | None = None
    markers: tuple[Element, Element] | None = None
    for i, value in enumerate(arr.tolist()):
        point = inset(Point(i * dx, value_to_y(value, metadata)), metadata)

        if color is not None:
            if paper is None:
                raise ValueError("a paper is required to draw a colored series")
            draw_line(paper, last_point, point, color, style)
            if markers is not None:
                markers[0].to_front()
                markers[1].to_front()
            markers = draw_marker(paper, point, color, metadata, style)
            set_user_values(markers[0], value)

        last_point = point
        points.append(point)
    return tuple(points)


def svg_line(paper: Paper, p0: Point, p1: Point) -> Element:
    return paper.path(
        f"M{format_coordinate(p0.x)} {format_coordinate(p0.y)}L{format_coordinate(p1.x)} {format_coordinate(p1.y)}"
    )


def draw_line(paper: Paper, p0: Point | None, p1: Point, color: str, style: ChartStyle = DEFAULT_STYLE) -> Element | None:
    if p0 is None:
        return None
    return svg_line(paper, p0, p1).attr({"stroke-width": style.line_width, "stroke": color})


def draw_marker(
    paper: Paper,
    point: Point,
    color: str,
    metadata: ChartMetadata,
    style: ChartStyle = DEFAULT_STYLE,
) -> tuple[Element, Element]:
    """Draw the inner hover dot and the outer ring for one value."""

    inner = (
        paper.circle(point.x, point.y, style.marker_radius)
        .attr({"fill": style.marker_fill, "stroke-width": style.marker_stroke_width, "stroke": color})
        .hover(
            lambda el: el.attr({"fill": color}),
            lambda el: el.attr({"fill": style.marker_fill}),
        )
    )
    outer = paper.circle(point.x, point.y, style.ring_radius).attr(
        {"stroke": style.ring_stroke, "stroke-width": style.ring_stroke_width}
    )
    if metadata.shades:
        outer.attr({"stroke-opacity": 0})
    return inner, outer


def set_user_values(element: Element, value: float) -> None:
    element.node.set_attribute("data-point", 1)
    element.node.set_attribute("data-point-y", value)
