from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A pixel coordinate. Transforms return a new point."""

    x: float
    y: float

    def translate(self, dx: float, dy: float | None = None) -> "Point":
        if dy is None:
            dy = dx
        return Point(self.x + dx, self.y + dy)

    def scale(self, sx: float, sy: float | None = None) -> "Point":
        if sy is None:
            sy = sx
        return Point(self.x * sx, self.y * sy)

    def to_key(self) -> str:
        return f"{format_coordinate(self.x)},{format_coordinate(self.y)}"


def format_coordinate(value: float) -> str:
    out = f"{value:.6f}".rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out
