from termchart.adapters import series_from_arrays, series_from_records
from termchart.chart import Chart
from termchart.compose import merge_buffers, render_crosshair, render_grid
from termchart.config import (
    AxisConfig,
    BoundsOverride,
    ChartConfig,
    Margins,
    chart_config_from_mapping,
    load_chart_config,
    resolve_render_mode,
)
from termchart.errors import ChartConfigError
from termchart.raster import CanvasBuffer, create_canvas, draw_line
from termchart.render import palette_color, render, render_bar_series, render_line_series
from termchart.ticks import generate_ticks, generate_time_ticks, parse_time_value
from termchart.transform import data_to_screen, screen_to_data
from termchart.types import Bounds, DataPoint, Series, Viewport
from termchart.viewport import ViewportManager, compute_data_bounds, initial_viewport

__all__ = [
    "AxisConfig",
    "Bounds",
    "BoundsOverride",
    "CanvasBuffer",
    "Chart",
    "ChartConfig",
    "ChartConfigError",
    "DataPoint",
    "Margins",
    "Series",
    "Viewport",
    "ViewportManager",
    "chart_config_from_mapping",
    "compute_data_bounds",
    "create_canvas",
    "data_to_screen",
    "draw_line",
    "generate_ticks",
    "generate_time_ticks",
    "initial_viewport",
    "load_chart_config",
    "merge_buffers",
    "palette_color",
    "parse_time_value",
    "render",
    "render_bar_series",
    "render_crosshair",
    "render_grid",
    "render_line_series",
    "resolve_render_mode",
    "screen_to_data",
    "series_from_arrays",
    "series_from_records",
]
