from __future__ import annotations


class ChartOptionsError(ValueError):
    """Raised when chart options fail validation. Nothing has been drawn yet."""


def require(condition: object, message: str = "The passed options are incorrect") -> None:
    if not condition:
        raise ChartOptionsError(message)
