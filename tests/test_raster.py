from __future__ import annotations

import unittest

import numpy as np

from termchart.raster import AsciiCanvas, BrailleCanvas, CanvasBuffer, HalfBlockCanvas, create_canvas, draw_line, draw_polyline


def _collect(x0: int, y0: int, x1: int, y1: int) -> list[tuple[int, int]]:
    units: list[tuple[int, int]] = []
    draw_line(lambda x, y: units.append((x, y)), x0, y0, x1, y1)
    return units


class DrawLineTests(unittest.TestCase):
    def test_endpoints_are_plotted(self) -> None:
        units = _collect(2, 7, 9, 1)
        self.assertIn((2, 7), units)
        self.assertIn((9, 1), units)

    def test_segment_and_reverse_cover_same_units(self) -> None:
        self.assertEqual(set(_collect(0, 0, 7, 3)), set(_collect(7, 3, 0, 0)))
        self.assertEqual(set(_collect(0, 5, 4, 0)), set(_collect(4, 0, 0, 5)))

    def test_diagonal_and_axis_aligned_lines(self) -> None:
        self.assertEqual(_collect(0, 0, 3, 3), [(0, 0), (1, 1), (2, 2), (3, 3)])
        self.assertEqual(len(_collect(0, 4, 9, 4)), 10)
        self.assertEqual(_collect(5, 5, 5, 5), [(5, 5)])

    def test_polyline_single_point_and_segments(self) -> None:
        units: list[tuple[int, int]] = []
        draw_polyline(lambda x, y: units.append((x, y)), [3], [4])
        self.assertEqual(units, [(3, 4)])
        units.clear()
        draw_polyline(lambda x, y: units.append((x, y)), [0, 2, 2], [0, 0, 2])
        self.assertEqual(set(units), {(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)})


class CanvasBufferTests(unittest.TestCase):
    def test_blank_buffer_and_out_of_range_writes(self) -> None:
        buf = CanvasBuffer.blank(3, 2)
        buf.set_cell(5, 0, "x")
        buf.set_cell(-1, 1, "x")
        self.assertEqual(buf.to_lines(), ["   ", "   "])
        buf.set_cell(1, 1, "x", "red")
        self.assertEqual(str(buf), "   \n x ")
        self.assertEqual(buf.color_at(1, 1), "red")
        self.assertIsNone(buf.color_at(0, 0))

    def test_frozen_buffer_rejects_writes_but_copies_are_writable(self) -> None:
        buf = CanvasBuffer.blank(2, 2).freeze()
        self.assertTrue(buf.frozen)
        with self.assertRaises(ValueError):
            buf.set_cell(0, 0, "x")
        clone = buf.copy()
        clone.set_cell(0, 0, "x")
        self.assertEqual(clone.char_at(0, 0), "x")
        self.assertEqual(buf.char_at(0, 0), " ")


class EncoderTests(unittest.TestCase):
    def test_braille_top_left_dot(self) -> None:
        canvas = BrailleCanvas(2, 1)
        canvas.set_unit(0, 0)
        self.assertEqual(canvas.to_buffer().to_lines(), ["⠁ "])

    def test_braille_dot_bits(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_unit(1, 3)
        canvas.set_unit(0, 3)
        self.assertEqual(int(canvas.patterns()[0, 0]), 0xC0)
        full = BrailleCanvas(1, 1)
        for y in range(4):
            for x in range(2):
                full.set_unit(x, y)
        self.assertEqual(full.to_buffer().char_at(0, 0), "⣿")

    def test_half_blocks(self) -> None:
        upper = HalfBlockCanvas(1, 1)
        upper.set_unit(1, 0)
        lower = HalfBlockCanvas(1, 1)
        lower.set_unit(0, 1)
        full = HalfBlockCanvas(1, 1)
        full.set_unit(0, 0)
        full.set_unit(1, 1)
        self.assertEqual(upper.to_buffer().char_at(0, 0), "▀")
        self.assertEqual(lower.to_buffer().char_at(0, 0), "▄")
        self.assertEqual(full.to_buffer().char_at(0, 0), "█")
        self.assertEqual(HalfBlockCanvas(1, 1).to_buffer().char_at(0, 0), " ")

    def test_ascii_marks_and_unit_sizes(self) -> None:
        canvas = AsciiCanvas(3, 2)
        self.assertEqual((canvas.unit_width, canvas.unit_height), (3, 2))
        canvas.set_unit(2, 1)
        self.assertEqual(canvas.to_buffer().to_lines(), ["   ", "  *"])
        braille = create_canvas("braille", 3, 2)
        self.assertEqual((braille.unit_width, braille.unit_height), (6, 8))

    def test_out_of_range_units_are_ignored(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_unit(2, 0)
        canvas.set_unit(0, -1)
        canvas.set_unit(0, 4)
        self.assertFalse(np.any(canvas.units))

    def test_last_color_wins_per_cell(self) -> None:
        canvas = BrailleCanvas(1, 1)
        canvas.set_unit(0, 0, "cyan")
        canvas.set_unit(1, 1, "red")
        canvas.set_unit(1, 2)
        self.assertEqual(canvas.to_buffer().color_at(0, 0), "red")

    def test_unknown_mode_rejected(self) -> None:
        with self.assertRaises(ValueError):
            create_canvas("sixel", 2, 2)  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
