from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Mapping


@dataclass(frozen=True)
class ChartStyle:
    """Styling knobs for line charts.

    Series and shade colors are only fallbacks: per-series `colors` and
    `shade_colors` on the chart options take precedence.
    """

    series_color: str = "black"
    shade_color: str = "red"
    line_width: float = 4.0
    marker_radius: float = 4.0
    marker_stroke_width: float = 3.0
    marker_fill: str = "#fff"
    ring_radius: float = 6.0
    ring_stroke: str = "#fff"
    ring_stroke_width: float = 2.0
    shade_opacity: float = 0.2
    gridline_stroke: str = "#ccc"
    label_font_size: float = 12.0
    label_font_weight: str = "bold"
    label_fill: str = "#bbb"
    label_lift: float = 6.0


DEFAULT_STYLE = ChartStyle()

_COLOR_KEYS = ("series_color", "shade_color", "marker_fill", "ring_stroke", "gridline_stroke", "label_fill")
_POSITIVE_KEYS = ("line_width", "marker_radius", "ring_radius", "label_font_size")
_NON_NEGATIVE_KEYS = ("marker_stroke_width", "ring_stroke_width", "label_lift")


def validate_chart_style(overrides: Mapping[str, Any] | None = None) -> ChartStyle:
    """Merge style overrides onto the defaults, rejecting unknown keys and bad values."""

    raw: dict[str, Any] = asdict(DEFAULT_STYLE)
    if overrides:
        for key, value in overrides.items():
            if key not in raw:
                raise ValueError(f"Unknown chart style key: {key}")
            raw[key] = value

    for key in _COLOR_KEYS + ("label_font_weight",):
        if not isinstance(raw[key], str) or not raw[key].strip():
            raise ValueError(f"Style `{key}` must be a non-empty string")

    for key in _POSITIVE_KEYS:
        if not _is_number(raw[key]) or float(raw[key]) <= 0:
            raise ValueError(f"Style `{key}` must be a positive number")

    for key in _NON_NEGATIVE_KEYS:
        if not _is_number(raw[key]) or float(raw[key]) < 0:
            raise ValueError(f"Style `{key}` must be a non-negative number")

    if not _is_number(raw["shade_opacity"]) or not 0.0 <= float(raw["shade_opacity"]) <= 1.0:
        raise ValueError("Style `shade_opacity` must be in [0, 1]")

    return ChartStyle(
        **{key: (float(value) if key in _POSITIVE_KEYS + _NON_NEGATIVE_KEYS + ("shade_opacity",) else str(value)) for key, value in raw.items()}
    )


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
