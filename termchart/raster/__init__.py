from .buffer import CanvasBuffer
from .draw_lines import draw_line, draw_polyline
from .encoders import AsciiCanvas, BrailleCanvas, HalfBlockCanvas, SubcellCanvas, create_canvas

__all__ = [
    "AsciiCanvas",
    "BrailleCanvas",
    "CanvasBuffer",
    "HalfBlockCanvas",
    "SubcellCanvas",
    "create_canvas",
    "draw_line",
    "draw_polyline",
]
