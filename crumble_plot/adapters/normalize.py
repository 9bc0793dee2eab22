from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np

from crumble_plot.errors import ChartOptionsError


def normalize_series(values: Any, *, label: str = "series") -> np.ndarray:
    """Coerce one series into a 1-D float64 array.

    Missing values (`None` or NaN) read as 0, so a gap drops to zero instead of
    poisoning the value range.
    """

    if isinstance(values, np.ndarray):
        arr = _series_from_array(values, label=label)
    elif isinstance(values, Sequence) and not isinstance(values, (str, bytes, bytearray)):
        arr = _series_from_items(values, label=label)
    else:
        raise ChartOptionsError(f"unsupported {label} input type: {type(values)!r}")
    if arr.size == 0:
        raise ChartOptionsError(f"{label} is empty")
    arr[np.isnan(arr)] = 0.0
    return arr


def normalize_valuesy(valuesy: Any) -> list[np.ndarray]:
    """Split `valuesy` into one float array per series.

    Accepts a sequence of series or a 2-D array with one series per row.
    """

    if isinstance(valuesy, np.ndarray):
        if valuesy.ndim != 2:
            raise ChartOptionsError("valuesy array must be 2-D (one row per series)")
        return [normalize_series(row, label=f"valuesy[{i}]") for i, row in enumerate(valuesy)]
    if not isinstance(valuesy, Sequence) or isinstance(valuesy, (str, bytes, bytearray)):
        raise ChartOptionsError(f"unsupported valuesy input type: {type(valuesy)!r}")
    return [normalize_series(series, label=f"valuesy[{i}]") for i, series in enumerate(valuesy)]


def _series_from_array(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise ChartOptionsError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=True)
    return _series_from_items(arr.tolist(), label=label)


def _series_from_items(items: Sequence[Any], *, label: str) -> np.ndarray:
    out = np.empty(len(items), dtype=np.float64)
    for i, raw in enumerate(items):
        if raw is None:
            out[i] = 0.0
            continue
        if isinstance(raw, (str, bytes, bytearray)):
            raise ChartOptionsError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError, OverflowError) as exc:
            raise ChartOptionsError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
