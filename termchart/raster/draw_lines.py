from __future__ import annotations

from typing import Callable


SetUnit = Callable[[int, int], None]


def draw_line(set_unit: SetUnit, x0: int, y0: int, x1: int, y1: int) -> None:
    """Plot the integer Bresenham segment from (x0, y0) to (x1, y1), both ends included.

    Endpoints are ordered first so a segment and its reverse visit the same units.
    """
    if (x1, y1) < (x0, y0):
        x0, y0, x1, y1 = x1, y1, x0, y0
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        set_unit(x0, y0)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def draw_polyline(set_unit: SetUnit, xs: list[int], ys: list[int]) -> None:
    if not xs:
        return
    if len(xs) == 1:
        set_unit(xs[0], ys[0])
        return
    for i in range(len(xs) - 1):
        draw_line(set_unit, xs[i], ys[i], xs[i + 1], ys[i + 1])
