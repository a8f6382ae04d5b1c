from __future__ import annotations

import numpy as np

from termchart.raster import CanvasBuffer
from termchart.types import CROSSHAIR_CENTER, CROSSHAIR_H, CROSSHAIR_V, EMPTY, GRID_CHAR


GRID_COLOR = "gray"
CROSSHAIR_COLOR = "white"

_has_color = np.vectorize(bool, otypes=[bool])


def merge_buffers(base: CanvasBuffer, overlay: CanvasBuffer) -> CanvasBuffer:
    """Non-space overlay cells win; everything else keeps the base cell.

    The result has the base's size; overlay cells outside it are dropped.
    """
    cells = base.cells.copy()
    colors = base.colors.copy()
    h = min(base.height, overlay.height)
    w = min(base.width, overlay.width)
    if h and w:
        over_cells = overlay.cells[:h, :w]
        over_colors = overlay.colors[:h, :w]
        wins = over_cells != EMPTY
        cells[:h, :w] = np.where(wins, over_cells, cells[:h, :w])
        # An uncolored overlay mark inherits the base color.
        recolor = wins & _has_color(over_colors)
        colors[:h, :w][recolor] = over_colors[recolor]
    return CanvasBuffer(cells, colors).freeze()


def render_grid(buffer: CanvasBuffer, color: str = GRID_COLOR) -> CanvasBuffer:
    """Dotted rows every height//5 and columns every width//10, drawn only into blank cells."""
    out = buffer.copy()
    height, width = out.height, out.width
    if not height or not width:
        return out.freeze()
    lines = np.zeros((height, width), dtype=bool)
    lines[max(1, height // 5) :: max(1, height // 5), :] = True
    lines[:, max(1, width // 10) :: max(1, width // 10)] = True
    lines &= out.cells == EMPTY
    out.cells[lines] = GRID_CHAR
    out.colors[lines] = color
    return out.freeze()


def render_crosshair(buffer: CanvasBuffer, x: int, y: int, color: str = CROSSHAIR_COLOR) -> CanvasBuffer:
    """Full-width/height cursor lines through (x, y).

    The arms skip occupied cells; the center glyph always overwrites.
    """
    out = buffer.copy()
    if 0 <= y < out.height:
        for cx in range(out.width):
            if cx != x and out.cells[y, cx] == EMPTY:
                out.set_cell(cx, y, CROSSHAIR_H, color)
    if 0 <= x < out.width:
        for cy in range(out.height):
            if cy != y and out.cells[cy, x] == EMPTY:
                out.set_cell(x, cy, CROSSHAIR_V, color)
    out.set_cell(x, y, CROSSHAIR_CENTER, color)
    return out.freeze()
