from crumble_plot.chart import create
from crumble_plot.errors import ChartOptionsError
from crumble_plot.geometry import Point
from crumble_plot.gridlines import draw_gridlines, gridline_values
from crumble_plot.mapper import map_values
from crumble_plot.metadata import ChartMetadata, build_metadata
from crumble_plot.options import ChartOptions, load_chart_options, validate_options
from crumble_plot.shades import draw_shade, shade_polygon
from crumble_plot.style import DEFAULT_STYLE, ChartStyle, validate_chart_style

__all__ = [
    "ChartMetadata",
    "ChartOptions",
    "ChartOptionsError",
    "ChartStyle",
    "DEFAULT_STYLE",
    "Point",
    "build_metadata",
    "create",
    "draw_gridlines",
    "draw_shade",
    "gridline_values",
    "load_chart_options",
    "map_values",
    "shade_polygon",
    "validate_chart_style",
    "validate_options",
]
