from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
import logging
import math

from crumble_core.render.paper import Element, Paper
from crumble_plot.geometry import Point
from crumble_plot.mapper import svg_line, value_to_y
from crumble_plot.metadata import ChartMetadata
from crumble_plot.style import DEFAULT_STYLE, ChartStyle


LOGGER = logging.getLogger(__name__)


def gridline_values(metadata: ChartMetadata) -> list[float]:
    """Offsets above the floor, one per gridline, bottom first.

    A single segment puts its only gridline at the top of the range.
    """

    if metadata.segments <= 1:
        return [metadata.value_range]
    step = metadata.value_range / (metadata.segments - 1)
    return [step * i for i in range(metadata.segments)]


def draw_gridlines(paper: Paper, metadata: ChartMetadata, style: ChartStyle = DEFAULT_STYLE) -> list[Element]:
    drawn: list[Element] = []
    for offset in gridline_values(metadata):
        y = value_to_y(metadata.bottom_value + offset, metadata)
        p0 = Point(0.0, y).scale(1.0, metadata.shrink_y).translate(0.0, metadata.padding)
        p1 = Point(metadata.width, y).scale(1.0, metadata.shrink_y).translate(0.0, metadata.padding)

        line = svg_line(paper, p0, p1).attr({"stroke": style.gridline_stroke}).to_back()
        label = paper.text(
            p0.x + metadata.padding / 4,
            p0.y - style.label_lift,
            format_label(metadata.bottom_value + offset),
        ).attr(
            {
                "font-size": style.label_font_size,
                "font-weight": style.label_font_weight,
                "fill": style.label_fill,
            }
        )
        reset_label_baseline_shift(label)
        drawn.extend((line, label))
    return drawn


def format_label(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    try:
        out = format(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP), "f")
    except InvalidOperation:
        out = f"{value:.0f}"
    if out == "-0":
        out = "0"
    return out


def reset_label_baseline_shift(label: Element) -> bool:
    """Zero the `dy` shift some text engines put on a label's first line.

    Returns False, without touching anything, when the node has no such shift.
    """

    children = getattr(label.node, "children", None)
    if not children:
        LOGGER.debug("label node exposes no text spans; baseline shift left as is")
        return False
    attributes = getattr(children[0], "attributes", None)
    if not attributes or not isinstance(attributes[0], list) or len(attributes[0]) != 2:
        return False
    if attributes[0][0] != "dy":
        return False
    attributes[0][1] = 0
    return True
