from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Sequence

from termchart.axis import chart_area_size, crosshair_tooltip, legend_items, status_line, x_axis_lines, y_axis_lines
from termchart.config import ChartConfig
from termchart.paint import ansi_wrap, to_ansi_lines
from termchart.raster import CanvasBuffer
from termchart.render import render
from termchart.ticks import is_time_series
from termchart.transform import find_closest_point, scale_series, screen_to_data
from termchart.types import RenderMode, Series, Viewport
from termchart.viewport import ViewportManager


@dataclass
class Chart:
    """One chart session: config, scaled series and the viewport that pans/zooms over them."""

    config: ChartConfig
    _manager: ViewportManager = field(init=False)
    _series: tuple[Series, ...] = field(init=False)
    _cursor: tuple[int, int] | None = None
    _show_crosshair: bool = False

    def __post_init__(self) -> None:
        self._series = tuple(scale_series(self.config.series, self.config.scale))
        self._manager = ViewportManager(self._series, self.config)
        self._show_crosshair = self.config.crosshair

    @property
    def viewport(self) -> Viewport:
        return self._manager.viewport

    @property
    def viewport_manager(self) -> ViewportManager:
        return self._manager

    @property
    def series(self) -> tuple[Series, ...]:
        return self._series

    @property
    def is_time_series(self) -> bool:
        if not self._series:
            return False
        return is_time_series([p.x for p in self._series[0].data])

    def update_series(self, series: Sequence[Series]) -> "Chart":
        self.config = replace(self.config, series=tuple(series))
        self._series = tuple(scale_series(self.config.series, self.config.scale))
        self._manager.update_series(self._series)
        return self

    def pan(self, dx: float, dy: float) -> Viewport:
        return self._manager.pan(dx, dy)

    def zoom(self, factor: float, anchor_x: float | None = None, anchor_y: float | None = None) -> Viewport:
        return self._manager.zoom(factor, anchor_x, anchor_y)

    def zoom_at_cell(self, factor: float, col: int, row: int, width: int, height: int) -> Viewport:
        """Scroll-style zoom anchored at a chart-area cell."""
        anchor_x, anchor_y = screen_to_data(col, row, self.viewport, width, height)
        return self._manager.zoom(factor, anchor_x, anchor_y)

    def reset(self) -> Viewport:
        return self._manager.reset()

    def fit_to_data(self) -> Viewport:
        return self._manager.fit_to_data()

    def set_crosshair(self, enabled: bool) -> None:
        self._show_crosshair = enabled

    def toggle_crosshair(self) -> bool:
        self._show_crosshair = not self._show_crosshair
        return self._show_crosshair

    def move_cursor(self, cell: tuple[int, int] | None) -> None:
        self._cursor = cell

    def cursor_data(self, width: int, height: int) -> tuple[float, float] | None:
        if self._cursor is None:
            return None
        return screen_to_data(self._cursor[0], self._cursor[1], self.viewport, width, height)

    def render_area(self, width: int, height: int, mode: RenderMode) -> CanvasBuffer:
        crosshair = self._cursor if self._show_crosshair else None
        return render(
            self._series,
            self.config.chart_type,
            self.viewport,
            width,
            height,
            mode,
            show_grid=self.config.show_grid,
            crosshair=crosshair,
        )

    def render_frame(self, term_width: int, term_height: int, mode: RenderMode, *, color: bool = False) -> list[str]:
        """Title, y gutter + plot area, x axis, legend and status bar as text rows."""
        cfg = self.config
        width, height = chart_area_size(term_width, term_height, cfg)
        gutter = cfg.margins.left
        is_time = self.is_time_series
        plot_height = height - 1 if cfg.y_axis.label else height

        area = self.render_area(width, plot_height, mode)
        area_lines = to_ansi_lines(area) if color else area.to_lines()
        gutter_lines = y_axis_lines(self.viewport, height, gutter, cfg.y_axis)
        if cfg.y_axis.label:
            area_lines = [" " * width] + area_lines

        pad = " " * (gutter + 1)
        lines: list[str] = []
        if cfg.title:
            lines.append(cfg.title.center(gutter + 1 + width))
        lines.extend(left + right for left, right in zip(gutter_lines, area_lines, strict=False))
        lines.extend(pad + row for row in x_axis_lines(self.viewport, width, cfg.x_axis, is_time=is_time))

        if cfg.show_legend and self._series:
            items = legend_items(self._series, width)
            lines.append(pad + "  ".join(ansi_wrap(text, c) if color else text for c, text in items))

        cursor = self.cursor_data(width, plot_height) if self._show_crosshair else None
        lines.append(pad + status_line(self.viewport, cursor, is_time=is_time))
        if cursor is not None and self._cursor is not None:
            name = None
            if self._series:
                hit = find_closest_point(self._cursor[0], self._cursor[1], self._series[0].data, self.viewport, width, plot_height)
                name = self._series[0].name if hit is not None else None
            col, text = crosshair_tooltip(self._cursor[0] + gutter, cursor[0], cursor[1], term_width, series_name=name, is_time=is_time)
            lines.append(" " * col + text)
        return lines
