from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

import numpy as np

from crumble_core.render.paper import Paper
from crumble_plot.geometry import Point
from crumble_plot.gridlines import draw_gridlines
from crumble_plot.mapper import map_values
from crumble_plot.metadata import build_metadata
from crumble_plot.options import ChartOptions, validate_options
from crumble_plot.shades import draw_shade, shade_polygon
from crumble_plot.style import DEFAULT_STYLE, ChartStyle


LOGGER = logging.getLogger(__name__)

PaperFactory = Callable[[str, float, float], Paper]


def create(
    options: ChartOptions | Mapping[str, Any],
    *,
    style: ChartStyle = DEFAULT_STYLE,
    paper_factory: PaperFactory = Paper,
) -> Paper:
    """Render a line chart and return the populated paper.

    Options are validated before the paper is created, so a rejected call
    draws nothing. Gridlines are drawn last but sit behind every series.
    """

    if not isinstance(options, ChartOptions):
        options = ChartOptions.from_mapping(options)
    series = validate_options(options)

    paper = paper_factory(options.container, options.width, options.height)
    metadata = build_metadata(options, series)
    LOGGER.debug(
        "rendering %d series into %r: range [%s, %s], %d gridlines, shades=%s",
        len(series),
        options.container,
        metadata.bottom_value,
        metadata.top_value,
        metadata.segments,
        metadata.shades,
    )

    points_last: list[Point] | None = None
    bands = 0
    for index, values in enumerate(series):
        color = options.colors[index] if options.colors else style.series_color
        points = map_values(paper, values, color, metadata, style)

        if options.shades:
            if points_last is not None:
                draw_shade(paper, shade_polygon(points_last, points), _shade_color(options, index - 1, style), style)
                bands += 1
            points_last = list(points)

    if options.shades and points_last is not None:
        floor = np.full(len(points_last), metadata.bottom_value, dtype=np.float64)
        baseline = map_values(None, floor, None, metadata, style)
        draw_shade(paper, shade_polygon(points_last, baseline), _shade_color(options, len(series) - 1, style), style)
        bands += 1

    draw_gridlines(paper, metadata, style)
    LOGGER.debug("rendered %d elements (%d shade bands)", len(paper.elements), bands)
    return paper


def _shade_color(options: ChartOptions, index: int, style: ChartStyle) -> str:
    if options.shade_colors:
        return options.shade_colors[index]
    return style.shade_color
