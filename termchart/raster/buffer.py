from __future__ import annotations

import numpy as np

from termchart.types import EMPTY


class CanvasBuffer:
    """Character grid plus a parallel grid of optional color tags.

    Renderers fill a buffer through ``set_cell`` and call ``freeze`` before
    handing it out; a frozen buffer rejects further writes.
    """

    def __init__(self, cells: np.ndarray, colors: np.ndarray) -> None:
        if cells.ndim != 2 or cells.shape != colors.shape:
            raise ValueError("cells and colors must be 2-D grids of the same shape")
        self.cells = cells
        self.colors = colors

    @classmethod
    def blank(cls, width: int, height: int) -> "CanvasBuffer":
        width = max(0, int(width))
        height = max(0, int(height))
        cells = np.full((height, width), EMPTY, dtype="<U1")
        colors = np.full((height, width), None, dtype=object)
        return cls(cells, colors)

    @property
    def width(self) -> int:
        return int(self.cells.shape[1])

    @property
    def height(self) -> int:
        return int(self.cells.shape[0])

    @property
    def frozen(self) -> bool:
        return not self.cells.flags.writeable

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_cell(self, x: int, y: int, char: str, color: str | None = None) -> None:
        if not self.in_bounds(x, y):
            return
        self.cells[y, x] = char
        if color:
            self.colors[y, x] = color

    def char_at(self, x: int, y: int) -> str:
        return str(self.cells[y, x])

    def color_at(self, x: int, y: int) -> str | None:
        return self.colors[y, x]

    def occupied(self) -> np.ndarray:
        return self.cells != EMPTY

    def copy(self) -> "CanvasBuffer":
        return CanvasBuffer(self.cells.copy(), self.colors.copy())

    def freeze(self) -> "CanvasBuffer":
        self.cells.flags.writeable = False
        self.colors.flags.writeable = False
        return self

    def to_lines(self) -> list[str]:
        return ["".join(row) for row in self.cells.tolist()]

    def __str__(self) -> str:
        return "\n".join(self.to_lines())

    def __repr__(self) -> str:
        return f"CanvasBuffer(width={self.width}, height={self.height})"
