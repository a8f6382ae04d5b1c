from __future__ import annotations

from typing import Protocol

import numpy as np

from termchart.raster.buffer import CanvasBuffer
from termchart.types import ASCII_POINT, BRAILLE_BASE, EMPTY, HALF_BLOCKS, RenderMode


# Bit for the dot at [row, column] inside one braille cell.
# Left column holds dots 1,2,3,7; right column holds dots 4,5,6,8.
BRAILLE_DOT_BITS = np.asarray(
    [
        [0x01, 0x08],
        [0x02, 0x10],
        [0x04, 0x20],
        [0x40, 0x80],
    ],
    dtype=np.int32,
)

_BRAILLE_GLYPHS = np.asarray([EMPTY] + [chr(BRAILLE_BASE + p) for p in range(1, 256)], dtype="<U1")
# Indexed by top_filled + 2 * bottom_filled.
_HALF_BLOCK_GLYPHS = np.asarray(
    [HALF_BLOCKS["empty"], HALF_BLOCKS["upper"], HALF_BLOCKS["lower"], HALF_BLOCKS["full"]],
    dtype="<U1",
)


class SubcellCanvas(Protocol):
    width: int
    height: int
    unit_width: int
    unit_height: int

    def set_unit(self, x: int, y: int, color: str | None = None) -> None:
        ...

    def to_buffer(self) -> CanvasBuffer:
        ...


class _OversampledCanvas:
    cell_w: int = 1
    cell_h: int = 1

    def __init__(self, width: int, height: int) -> None:
        self.width = max(0, int(width))
        self.height = max(0, int(height))
        self.unit_width = self.width * self.cell_w
        self.unit_height = self.height * self.cell_h
        self.units = np.zeros((self.unit_height, self.unit_width), dtype=bool)
        self.colors = np.full((self.height, self.width), None, dtype=object)

    def set_unit(self, x: int, y: int, color: str | None = None) -> None:
        if x < 0 or x >= self.unit_width or y < 0 or y >= self.unit_height:
            return
        self.units[y, x] = True
        if color:
            # Last write wins for the whole character cell.
            self.colors[y // self.cell_h, x // self.cell_w] = color

    def to_buffer(self) -> CanvasBuffer:
        return CanvasBuffer(self._glyphs(), self.colors.copy()).freeze()

    def _cell_view(self) -> np.ndarray:
        # (rows, cell_h, cols, cell_w)
        return self.units.reshape(self.height, self.cell_h, self.width, self.cell_w)

    def _glyphs(self) -> np.ndarray:
        raise NotImplementedError


class BrailleCanvas(_OversampledCanvas):
    """2 dots wide by 4 dots tall per character."""

    cell_w = 2
    cell_h = 4

    def patterns(self) -> np.ndarray:
        dots = self._cell_view().astype(np.int32)
        return (dots * BRAILLE_DOT_BITS[None, :, None, :]).sum(axis=(1, 3))

    def _glyphs(self) -> np.ndarray:
        return _BRAILLE_GLYPHS[self.patterns()]


class HalfBlockCanvas(_OversampledCanvas):
    """2 pixels wide by 2 pixels tall per character."""

    cell_w = 2
    cell_h = 2

    def _glyphs(self) -> np.ndarray:
        pixels = self._cell_view()
        top = pixels[:, 0, :, :].any(axis=2)
        bottom = pixels[:, 1, :, :].any(axis=2)
        return _HALF_BLOCK_GLYPHS[top.astype(np.int32) + 2 * bottom.astype(np.int32)]


class AsciiCanvas(_OversampledCanvas):
    """One unit per character; every filled unit becomes the same marker."""

    def _glyphs(self) -> np.ndarray:
        return np.where(self.units, ASCII_POINT, EMPTY).astype("<U1")


_CANVAS_TYPES: dict[str, type[_OversampledCanvas]] = {
    "braille": BrailleCanvas,
    "halfblock": HalfBlockCanvas,
    "ascii": AsciiCanvas,
}


def create_canvas(mode: RenderMode, width: int, height: int) -> SubcellCanvas:
    try:
        canvas_type = _CANVAS_TYPES[mode]
    except KeyError as exc:
        raise ValueError(f"unsupported render mode: {mode}") from exc
    return canvas_type(width, height)
