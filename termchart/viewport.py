from __future__ import annotations

import logging
import math
from typing import Sequence

from termchart.config import ChartConfig
from termchart.types import Bounds, Series, Viewport


LOGGER = logging.getLogger(__name__)

MIN_ZOOM = 0.1
MAX_ZOOM = 100.0
DEFAULT_PADDING = 0.05
DEFAULT_BOUNDS = Bounds(min_x=0.0, max_x=100.0, min_y=0.0, max_y=100.0)


def compute_data_bounds(series: Sequence[Series]) -> Bounds:
    """Extent of every finite coordinate across all series.

    An axis with no finite values falls back to [0, 100]; an axis whose min
    equals its max is widened by 1 on each side.
    """
    min_x = math.inf
    max_x = -math.inf
    min_y = math.inf
    max_y = -math.inf
    for s in series:
        for point in s.data:
            if math.isfinite(point.x):
                min_x = min(min_x, point.x)
                max_x = max(max_x, point.x)
            if math.isfinite(point.y):
                min_y = min(min_y, point.y)
                max_y = max(max_y, point.y)

    if not math.isfinite(min_x):
        min_x, max_x = DEFAULT_BOUNDS.min_x, DEFAULT_BOUNDS.max_x
    if not math.isfinite(min_y):
        min_y, max_y = DEFAULT_BOUNDS.min_y, DEFAULT_BOUNDS.max_y
    return _widen_degenerate(Bounds(min_x=float(min_x), max_x=float(max_x), min_y=float(min_y), max_y=float(max_y)))


def add_padding(bounds: Bounds, padding: float = DEFAULT_PADDING) -> Bounds:
    pad_x = bounds.x_range * padding
    pad_y = bounds.y_range * padding
    return Bounds(
        min_x=bounds.min_x - pad_x,
        max_x=bounds.max_x + pad_x,
        min_y=bounds.min_y - pad_y,
        max_y=bounds.max_y + pad_y,
    )


def apply_config_bounds(bounds: Bounds, config: ChartConfig) -> Bounds:
    """Explicit endpoints win over computed ones; axis min/max win over ``bounds``."""
    min_x, max_x, min_y, max_y = bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y
    override = config.bounds
    if override.min_x is not None:
        min_x = float(override.min_x)
    if override.max_x is not None:
        max_x = float(override.max_x)
    if override.min_y is not None:
        min_y = float(override.min_y)
    if override.max_y is not None:
        max_y = float(override.max_y)

    if config.y_axis.min is not None:
        min_y = float(config.y_axis.min)
    if config.y_axis.max is not None:
        max_y = float(config.y_axis.max)
    if config.x_axis.min is not None:
        min_x = float(config.x_axis.min)
    if config.x_axis.max is not None:
        max_x = float(config.x_axis.max)
    return _widen_degenerate(Bounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y))


def initial_viewport(bounds: Bounds, config: ChartConfig | None = None) -> Viewport:
    cfg = config or ChartConfig()
    padded = add_padding(bounds) if cfg.auto_bounds else bounds
    return Viewport.from_bounds(apply_config_bounds(padded, cfg), zoom_level=1.0)


class ViewportManager:
    """Owns the chart's one mutable Viewport.

    Every operation replaces the held viewport with a new immutable value and
    returns it. Callers must serialize input events; there is no locking.
    """

    def __init__(self, series: Sequence[Series], config: ChartConfig | None = None) -> None:
        self._config = config or ChartConfig()
        self._series: tuple[Series, ...] = tuple(series)
        self._data_bounds = compute_data_bounds(self._series)
        self._initial = initial_viewport(self._data_bounds, self._config)
        self._viewport = self._initial

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def initial(self) -> Viewport:
        return self._initial

    @property
    def data_bounds(self) -> Bounds:
        return self._data_bounds

    @property
    def series(self) -> tuple[Series, ...]:
        return self._series

    def update_series(self, series: Sequence[Series]) -> Bounds:
        """Swap in new data; the visible viewport is left untouched."""
        self._series = tuple(series)
        self._data_bounds = compute_data_bounds(self._series)
        return self._data_bounds

    def set_viewport(self, viewport: Viewport) -> Viewport:
        self._viewport = Viewport(
            min_x=viewport.min_x,
            max_x=viewport.max_x,
            min_y=viewport.min_y,
            max_y=viewport.max_y,
            zoom_level=_clamp(viewport.zoom_level, MIN_ZOOM, MAX_ZOOM),
        )
        return self._viewport

    def pan(self, dx: float, dy: float) -> Viewport:
        """Shift by fractions of the current x/y ranges."""
        prev = self._viewport
        shift_x = dx * prev.x_range
        shift_y = dy * prev.y_range
        self._viewport = Viewport(
            min_x=prev.min_x + shift_x,
            max_x=prev.max_x + shift_x,
            min_y=prev.min_y + shift_y,
            max_y=prev.max_y + shift_y,
            zoom_level=prev.zoom_level,
        )
        LOGGER.debug("pan dx=%s dy=%s -> %s", dx, dy, self._viewport)
        return self._viewport

    def zoom(self, factor: float, anchor_x: float | None = None, anchor_y: float | None = None) -> Viewport:
        """Scale ranges around an anchor (default: center) that keeps its relative position."""
        prev = self._viewport
        new_zoom = _clamp(prev.zoom_level * factor, MIN_ZOOM, MAX_ZOOM)
        actual_factor = new_zoom / prev.zoom_level

        x_range = prev.x_range
        y_range = prev.y_range
        cx = prev.min_x + x_range / 2.0 if anchor_x is None else float(anchor_x)
        cy = prev.min_y + y_range / 2.0 if anchor_y is None else float(anchor_y)
        x_ratio = (cx - prev.min_x) / x_range
        y_ratio = (cy - prev.min_y) / y_range
        new_x_range = x_range / actual_factor
        new_y_range = y_range / actual_factor

        self._viewport = Viewport(
            min_x=cx - new_x_range * x_ratio,
            max_x=cx + new_x_range * (1.0 - x_ratio),
            min_y=cy - new_y_range * y_ratio,
            max_y=cy + new_y_range * (1.0 - y_ratio),
            zoom_level=new_zoom,
        )
        LOGGER.debug("zoom factor=%s actual=%s -> %s", factor, actual_factor, self._viewport)
        return self._viewport

    def reset(self) -> Viewport:
        self._viewport = self._initial
        LOGGER.debug("reset -> %s", self._viewport)
        return self._viewport

    def fit_to_data(self) -> Viewport:
        self._viewport = Viewport.from_bounds(add_padding(self._data_bounds), zoom_level=1.0)
        LOGGER.debug("fit to data -> %s", self._viewport)
        return self._viewport


def _widen_degenerate(bounds: Bounds) -> Bounds:
    min_x, max_x, min_y, max_y = bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y
    if max_x == min_x:
        min_x -= 1.0
        max_x += 1.0
    if max_y == min_y:
        min_y -= 1.0
        max_y += 1.0
    return Bounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)


def _clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))
