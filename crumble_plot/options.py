from __future__ import annotations

from dataclasses import dataclass, fields
import logging
import numbers
from pathlib import Path
import tomllib
from typing import Any, Mapping, Sequence

import numpy as np

from crumble_plot.adapters.normalize import normalize_valuesy
from crumble_plot.errors import ChartOptionsError, require


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChartOptions:
    """Caller input for one line chart render. Never mutated by the renderer."""

    width: float | None = None
    height: float | None = None
    container: str | None = None
    valuesy: Any = None
    padding: float = 0.0
    colors: Sequence[str] | None = None
    segments: int | None = None
    shades: bool = False
    shade_colors: Sequence[str] | None = None
    top_value: float | None = None
    bottom_value: float | None = None

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "ChartOptions":
        known = {f.name for f in fields(cls)}
        unknown = sorted(str(key) for key in raw if key not in known)
        if unknown:
            raise ChartOptionsError(f"unknown chart option(s): {', '.join(unknown)}")
        values = dict(raw)
        for key in ("colors", "shade_colors"):
            if values.get(key) is not None:
                values[key] = tuple(values[key])
        return cls(**values)


def validate_options(options: ChartOptions) -> list[np.ndarray]:
    """Check `options` and return its series as float arrays.

    Raises ChartOptionsError for the first problem found.
    """

    require(_is_positive(options.width), "option `width` is required and must be a positive number")
    require(_is_positive(options.height), "option `height` is required and must be a positive number")
    require(options.container, "option `container` is required")
    require(options.valuesy is not None, "option `valuesy` is required")

    series = normalize_valuesy(options.valuesy)
    require(len(series) >= 1, "option `valuesy` must contain at least one series")

    if options.colors is not None:
        require(
            len(options.colors) == len(series),
            f"option `colors` has {len(options.colors)} entries but there are {len(series)} series",
        )

    expected = series[0].size
    for index, values in enumerate(series):
        require(
            values.size == expected,
            f"series {index} has {values.size} values but series 0 has {expected}",
        )

    if options.shades and options.shade_colors is not None:
        require(
            len(options.shade_colors) == len(series),
            f"option `shade_colors` has {len(options.shade_colors)} entries but there are {len(series)} series",
        )

    if options.segments is not None:
        require(
            isinstance(options.segments, numbers.Integral)
            and not isinstance(options.segments, (bool, np.bool_))
            and options.segments >= 1,
            "option `segments` must be a positive integer",
        )

    require(_is_number(options.padding) and options.padding >= 0, "option `padding` must be a non-negative number")
    for key in ("top_value", "bottom_value"):
        value = getattr(options, key)
        require(value is None or _is_number(value), f"option `{key}` must be a number")

    top, bottom = _effective_bounds(options, series)
    require(
        top >= bottom,
        f"effective top value {top} is below effective bottom value {bottom}",
    )
    return series


def load_chart_options(path: str | Path) -> ChartOptions:
    """Read chart options from the `[chart]` table of a TOML file."""

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart options file not found: {config_path}")
    with config_path.open("rb") as f:
        raw = tomllib.load(f)
    chart = raw.get("chart")
    if not isinstance(chart, dict):
        raise ChartOptionsError(f"{config_path}: missing [chart] table")
    LOGGER.debug("loaded chart options from %s (%d keys)", config_path, len(chart))
    return ChartOptions.from_mapping(chart)


def _effective_bounds(options: ChartOptions, series: list[np.ndarray]) -> tuple[float, float]:
    top = options.top_value
    bottom = options.bottom_value
    if top is None or bottom is None:
        stacked = np.concatenate(series)
        if top is None:
            top = float(np.max(stacked))
        if bottom is None:
            bottom = float(np.min(stacked))
    return float(top), float(bottom)


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, (bool, np.bool_))


def _is_positive(value: Any) -> bool:
    return _is_number(value) and value > 0
