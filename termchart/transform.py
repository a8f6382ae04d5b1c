from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Sequence

from termchart.types import DataPoint, ScaleType, Series, Viewport


@dataclass(frozen=True)
class ClosestPoint:
    point: DataPoint
    index: int
    distance: float


def data_to_screen(x: float, y: float, viewport: Viewport, width: int, height: int) -> tuple[int, int]:
    # Row 0 is the top of the terminal, so y is inverted.
    sx = _round_half_up((x - viewport.min_x) / viewport.x_range * (width - 1))
    sy = _round_half_up((1.0 - (y - viewport.min_y) / viewport.y_range) * (height - 1))
    return sx, sy


def screen_to_data(sx: float, sy: float, viewport: Viewport, width: int, height: int) -> tuple[float, float]:
    x = viewport.min_x + (sx / max(1, width - 1)) * viewport.x_range
    y = viewport.min_y + (1.0 - sy / max(1, height - 1)) * viewport.y_range
    return x, y


def apply_scale(value: float, scale: ScaleType) -> float:
    if scale == "log":
        if math.isnan(value):
            return value
        # Non-positive values collapse onto 0 rather than being dropped.
        return math.log10(value) if value > 0 else 0.0
    return value


def reverse_scale(value: float, scale: ScaleType) -> float:
    if scale == "log":
        return 10.0**value
    return value


def scale_series(series: Sequence[Series], scale: ScaleType) -> list[Series]:
    if scale == "linear":
        return list(series)
    return [
        replace(s, data=tuple(DataPoint(x=p.x, y=apply_scale(p.y, scale)) for p in s.data))
        for s in series
    ]


def find_closest_point(
    sx: int,
    sy: int,
    points: Sequence[DataPoint],
    viewport: Viewport,
    width: int,
    height: int,
) -> ClosestPoint | None:
    closest: ClosestPoint | None = None
    for i, point in enumerate(points):
        if not (math.isfinite(point.x) and math.isfinite(point.y)):
            continue
        px, py = data_to_screen(point.x, point.y, viewport, width, height)
        distance = math.hypot(px - sx, py - sy)
        if closest is None or distance < closest.distance:
            closest = ClosestPoint(point=point, index=i, distance=distance)
    return closest


def _round_half_up(value: float) -> int:
    # Ties round toward +inf, not to even.
    return int(math.floor(value + 0.5))
