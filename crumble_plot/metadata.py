from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from crumble_plot.adapters.normalize import normalize_valuesy
from crumble_plot.options import ChartOptions


AUTO_SEGMENTS = 3
FLAT_RANGE_WIDENING = 10.0


@dataclass(frozen=True)
class ChartMetadata:
    top_value: float
    bottom_value: float
    width: float
    height: float
    padding: float
    colors: tuple[str, ...] | None
    segments: int
    shades: bool
    auto_segments: bool = True

    @property
    def value_range(self) -> float:
        return self.top_value - self.bottom_value

    @property
    def shrink_x(self) -> float:
        return (self.width - 2 * self.padding) / self.width

    @property
    def shrink_y(self) -> float:
        return (self.height - 2 * self.padding) / self.height


def build_metadata(options: ChartOptions, series: Sequence[np.ndarray] | None = None) -> ChartMetadata:
    """Derive the value range and pass-through geometry for one render.

    `series` may carry the already-normalized values from validation; otherwise
    they are read from `options.valuesy`. Options are assumed valid.
    """

    auto_segments = options.segments is None
    top: float | None = options.top_value
    bottom: float | None = options.bottom_value

    if top is None or bottom is None:
        arrays = list(series) if series is not None else normalize_valuesy(options.valuesy)
        scanned_max, scanned_min = scan_extremes(arrays)
        if bottom is None:
            bottom = scanned_min
        if top is None:
            top = scanned_max
            # Flat data is widened below instead.
            if top != bottom:
                top = round_odd_top_for_auto_segments(top, auto_segments=auto_segments)

    top = float(top)
    bottom = float(bottom)
    if top == bottom:
        top += FLAT_RANGE_WIDENING

    return ChartMetadata(
        top_value=top,
        bottom_value=bottom,
        width=float(options.width),
        height=float(options.height),
        padding=float(options.padding or 0.0),
        colors=tuple(options.colors) if options.colors is not None else None,
        segments=AUTO_SEGMENTS if auto_segments else int(options.segments),
        shades=bool(options.shades),
        auto_segments=auto_segments,
    )


def scan_extremes(series: Sequence[np.ndarray]) -> tuple[float, float]:
    stacked = np.concatenate([np.asarray(values, dtype=np.float64) for values in series])
    return float(np.max(stacked)), float(np.min(stacked))


def round_odd_top_for_auto_segments(value: float, *, auto_segments: bool) -> float:
    """Bump an odd integral maximum to the next even number.

    Only applies when the gridline count is automatic: with the default three
    gridlines an even range puts the middle label on a whole number.
    """

    if auto_segments and float(value).is_integer() and int(value) % 2:
        return value + 1
    return value
