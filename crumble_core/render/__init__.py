from .paper import Element, Node, Paper, TextSpan
from .raster import parse_path, rasterize, save_png

__all__ = [
    "Element",
    "Node",
    "Paper",
    "TextSpan",
    "parse_path",
    "rasterize",
    "save_png",
]
