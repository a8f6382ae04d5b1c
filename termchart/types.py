from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ChartType = Literal["line", "bar"]
RenderMode = Literal["braille", "halfblock", "ascii"]
RequestedRenderMode = Literal["braille", "halfblock", "ascii", "auto"]
ScaleType = Literal["linear", "log"]
AxisFormat = Literal["number", "date", "time", "datetime", "auto"]

CHART_TYPES: tuple[str, ...] = ("line", "bar")
RENDER_MODES: tuple[str, ...] = ("braille", "halfblock", "ascii")
REQUESTED_RENDER_MODES: tuple[str, ...] = RENDER_MODES + ("auto",)
SCALE_TYPES: tuple[str, ...] = ("linear", "log")
AXIS_FORMATS: tuple[str, ...] = ("number", "date", "time", "datetime", "auto")

SERIES_COLORS: tuple[str, ...] = (
    "cyan",
    "magenta",
    "yellow",
    "green",
    "blue",
    "red",
    "white",
    "gray",
)

# Braille dots in a cell, numbered:
# 1 4
# 2 5
# 3 6
# 7 8
BRAILLE_BASE = 0x2800

HALF_BLOCKS: dict[str, str] = {
    "empty": " ",
    "upper": "▀",
    "lower": "▄",
    "full": "█",
}

ASCII_POINT = "*"
ASCII_BAR = "#"
GRID_CHAR = "·"
CROSSHAIR_H = "─"
CROSSHAIR_V = "│"
CROSSHAIR_CENTER = "┼"
EMPTY = " "


@dataclass(frozen=True)
class DataPoint:
    x: float
    y: float


@dataclass(frozen=True)
class Series:
    id: str
    name: str
    data: tuple[DataPoint, ...] = ()
    color: str | None = None
    type: ChartType | None = None

    def __post_init__(self) -> None:
        # Accept any sequence of points; store an immutable snapshot in input order.
        if not isinstance(self.data, tuple):
            object.__setattr__(self, "data", tuple(self.data))


@dataclass(frozen=True)
class Bounds:
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def x_range(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class Viewport:
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    zoom_level: float = 1.0

    @classmethod
    def from_bounds(cls, bounds: Bounds, zoom_level: float = 1.0) -> "Viewport":
        return cls(
            min_x=bounds.min_x,
            max_x=bounds.max_x,
            min_y=bounds.min_y,
            max_y=bounds.max_y,
            zoom_level=zoom_level,
        )

    @property
    def bounds(self) -> Bounds:
        return Bounds(min_x=self.min_x, max_x=self.max_x, min_y=self.min_y, max_y=self.max_y)

    @property
    def x_range(self) -> float:
        return self.max_x - self.min_x

    @property
    def y_range(self) -> float:
        return self.max_y - self.min_y


@dataclass(frozen=True)
class ScreenSize:
    width: int
    height: int
