from __future__ import annotations

import math
from typing import Sequence

from termchart.compose import merge_buffers, render_crosshair, render_grid
from termchart.raster import CanvasBuffer, create_canvas, draw_polyline
from termchart.transform import data_to_screen
from termchart.types import ASCII_BAR, HALF_BLOCKS, SERIES_COLORS, ChartType, DataPoint, RenderMode, Series, Viewport


def palette_color(index: int, specified: str | None = None) -> str:
    if specified:
        return specified
    return SERIES_COLORS[index % len(SERIES_COLORS)]


def render_line_series(
    series: Series,
    viewport: Viewport,
    width: int,
    height: int,
    mode: RenderMode,
    color: str | None = None,
) -> CanvasBuffer:
    canvas = create_canvas(mode, width, height)

    def set_unit(x: int, y: int) -> None:
        canvas.set_unit(x, y, color)

    # Non-finite points split the line instead of being connected across.
    for run in _finite_runs(series.data):
        xs: list[int] = []
        ys: list[int] = []
        for point in run:
            px, py = data_to_screen(point.x, point.y, viewport, canvas.unit_width, canvas.unit_height)
            xs.append(px)
            ys.append(py)
        draw_polyline(set_unit, xs, ys)
    return canvas.to_buffer()


def render_bar_series(
    series: Series,
    series_index: int,
    total_series: int,
    viewport: Viewport,
    width: int,
    height: int,
    mode: RenderMode,
    color: str | None = None,
) -> CanvasBuffer:
    """Grouped bars: one group per data index, one slot per sibling series."""
    buffer = CanvasBuffer.blank(width, height)
    bar_count = len(series.data)
    if bar_count == 0 or width <= 0 or height <= 0:
        return buffer.freeze()

    group_width = width // bar_count
    # Floors to 1 column when siblings outnumber the group's columns, so bars can overlap.
    bar_width = max(1, (group_width - 1) // max(1, total_series))
    glyph = ASCII_BAR if mode == "ascii" else HALF_BLOCKS["full"]

    for i, point in enumerate(series.data):
        if not math.isfinite(point.y):
            continue
        bar_height = int(math.floor((point.y - viewport.min_y) / viewport.y_range * height + 0.5))
        bar_x = i * group_width + series_index * bar_width
        bar_top = max(0, height - bar_height)
        for y in range(bar_top, height):
            for x in range(bar_x, min(bar_x + bar_width, width)):
                buffer.set_cell(x, y, glyph, color)
    return buffer.freeze()


def render(
    series: Sequence[Series],
    chart_type: ChartType,
    viewport: Viewport,
    width: int,
    height: int,
    render_mode: RenderMode,
    show_grid: bool = False,
    crosshair: tuple[int, int] | None = None,
) -> CanvasBuffer:
    """Render every series into one frame, then apply the grid and crosshair overlays."""
    result = CanvasBuffer.blank(width, height).freeze()
    total = len(series)
    for index, s in enumerate(series):
        kind = s.type or chart_type
        color = palette_color(index, s.color)
        if kind == "bar":
            layer = render_bar_series(s, index, total, viewport, width, height, render_mode, color)
        else:
            layer = render_line_series(s, viewport, width, height, render_mode, color)
        result = merge_buffers(result, layer)

    if show_grid:
        result = render_grid(result)
    if crosshair is not None:
        result = render_crosshair(result, crosshair[0], crosshair[1])
    return result


def _finite_runs(points: Sequence[DataPoint]) -> list[list[DataPoint]]:
    runs: list[list[DataPoint]] = []
    current: list[DataPoint] = []
    for point in points:
        if math.isfinite(point.x) and math.isfinite(point.y):
            current.append(point)
            continue
        if current:
            runs.append(current)
            current = []
    if current:
        runs.append(current)
    return runs
