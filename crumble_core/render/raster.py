from __future__ import annotations

from pathlib import Path
import re
from typing import Any, Optional

from PIL import Image, ImageColor, ImageDraw, ImageFont

from .paper import Element, Paper


Color = tuple[int, int, int, int]

_PATH_TOKEN = re.compile(r"[MLZmlz]|-?\d*\.?\d+(?:[eE][-+]?\d+)?")


def rasterize(paper: Paper, *, background: Color = (255, 255, 255, 255), scale: float = 1.0) -> Image.Image:
    """Rasterize every element of `paper` in z-order onto an RGBA image."""

    if scale <= 0:
        raise ValueError("scale must be > 0")
    size = (max(1, int(round(paper.width * scale))), max(1, int(round(paper.height * scale))))
    image = Image.new("RGBA", size, background)
    for element in paper.elements:
        overlay = Image.new("RGBA", size, (0, 0, 0, 0))
        draw = ImageDraw.Draw(overlay)
        if element.kind == "path":
            _draw_path(draw, element, scale)
        elif element.kind == "circle":
            _draw_circle(draw, element, scale)
        elif element.kind == "text":
            _draw_text(draw, element, scale)
        image = Image.alpha_composite(image, overlay)
    return image


def save_png(paper: Paper, path: str | Path, *, scale: float = 1.0) -> Path:
    out = Path(path)
    rasterize(paper, scale=scale).save(out, format="PNG")
    return out


def parse_path(d: str) -> list[tuple[list[tuple[float, float]], bool]]:
    """Split an `M`/`L`/`Z` path string into `(points, closed)` subpaths.

    Coordinates may be separated by commas or whitespace.
    """

    subpaths: list[tuple[list[tuple[float, float]], bool]] = []
    current: list[tuple[float, float]] = []
    numbers: list[float] = []
    for token in _PATH_TOKEN.findall(d):
        if token in {"M", "m"}:
            if current:
                subpaths.append((current, False))
            current = []
            numbers = []
        elif token in {"L", "l"}:
            numbers = []
        elif token in {"Z", "z"}:
            if current:
                subpaths.append((current, True))
            current = []
            numbers = []
        else:
            numbers.append(float(token))
            if len(numbers) == 2:
                current.append((numbers[0], numbers[1]))
                numbers = []
    if current:
        subpaths.append((current, False))
    return subpaths


def _draw_path(draw: ImageDraw.ImageDraw, element: Element, scale: float) -> None:
    fill = _paint(element.attrs.get("fill"), element.attrs.get("fill-opacity"))
    stroke = _paint(element.attrs.get("stroke"), element.attrs.get("stroke-opacity"))
    width = _stroke_width(element, scale)
    for points, closed in parse_path(str(element.geometry["d"])):
        pts = [(x * scale, y * scale) for x, y in points]
        if closed and fill and len(pts) >= 3:
            draw.polygon(pts, fill=fill)
        if stroke and width > 0 and len(pts) >= 2:
            if closed:
                pts = pts + pts[:1]
            draw.line(pts, fill=stroke, width=width)


def _draw_circle(draw: ImageDraw.ImageDraw, element: Element, scale: float) -> None:
    cx = float(element.geometry["cx"]) * scale
    cy = float(element.geometry["cy"]) * scale
    r = float(element.geometry["r"]) * scale
    fill = _paint(element.attrs.get("fill"), element.attrs.get("fill-opacity"))
    stroke = _paint(element.attrs.get("stroke"), element.attrs.get("stroke-opacity"))
    width = _stroke_width(element, scale)
    box = (cx - r, cy - r, cx + r, cy + r)
    draw.ellipse(box, fill=fill, outline=stroke if width > 0 else None, width=max(width, 1))


def _draw_text(draw: ImageDraw.ImageDraw, element: Element, scale: float) -> None:
    fill = _paint(element.attrs.get("fill"), element.attrs.get("fill-opacity"))
    if fill is None:
        return
    size = float(element.attrs.get("font-size", 10)) * scale
    font = ImageFont.load_default(size=size)
    x = float(element.geometry["x"]) * scale
    y = float(element.geometry["y"]) * scale
    anchor = {"start": "lm", "middle": "mm", "end": "rm"}.get(str(element.attrs.get("text-anchor", "middle")), "mm")
    if not isinstance(font, ImageFont.FreeTypeFont):
        # Bitmap fallback fonts cannot anchor; draw from the top-left corner.
        draw.text((x, y), str(element.geometry["text"]), fill=fill, font=font)
        return
    draw.text((x, y), str(element.geometry["text"]), fill=fill, font=font, anchor=anchor)


def _stroke_width(element: Element, scale: float) -> int:
    raw = element.attrs.get("stroke-width", 1)
    try:
        width = float(raw)
    except (TypeError, ValueError):
        return 1
    if width <= 0:
        return 0
    return max(1, int(round(width * scale)))


def _paint(value: Any, opacity: Any = None) -> Optional[Color]:
    color = _parse_color(value)
    if color is None:
        return None
    if opacity is None:
        return color
    alpha = max(0.0, min(1.0, float(opacity)))
    r, g, b, a = color
    if alpha <= 0.0:
        return None
    return (r, g, b, int(a * alpha))


def _parse_color(value: Any) -> Optional[Color]:
    if value is None:
        return None
    text = str(value).strip()
    if not text or text == "none":
        return None
    try:
        parsed = ImageColor.getrgb(text)
    except ValueError:
        return None
    if len(parsed) == 3:
        return (parsed[0], parsed[1], parsed[2], 255)
    return (parsed[0], parsed[1], parsed[2], parsed[3])
