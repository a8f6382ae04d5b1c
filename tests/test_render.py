from __future__ import annotations

import math
import unittest

from termchart.compose import merge_buffers, render_crosshair, render_grid
from termchart.raster import CanvasBuffer
from termchart.render import palette_color, render, render_bar_series, render_line_series
from termchart.types import CROSSHAIR_CENTER, CROSSHAIR_H, CROSSHAIR_V, GRID_CHAR, DataPoint, Series, Viewport


def _series(sid: str, *points: tuple[float, float], color: str | None = None) -> Series:
    return Series(id=sid, name=sid, data=[DataPoint(x, y) for x, y in points], color=color)


class LineRenderTests(unittest.TestCase):
    def test_ascii_diagonal_touches_both_corners(self) -> None:
        vp = Viewport(0.0, 10.0, 0.0, 10.0)
        buf = render([_series("d", (0, 0), (10, 10))], "line", vp, 11, 11, "ascii")
        self.assertEqual(buf.char_at(0, 10), "*")
        self.assertEqual(buf.char_at(10, 0), "*")
        for i in range(11):
            self.assertEqual(buf.char_at(i, 10 - i), "*")
        self.assertEqual(int(buf.occupied().sum()), 11)

    def test_braille_line_uses_subcell_resolution(self) -> None:
        vp = Viewport(0.0, 1.0, 0.0, 1.0)
        buf = render_line_series(_series("h", (0, 0), (1, 0)), vp, 4, 2, "braille", "cyan")
        # Bottom dot row of every cell in the last row: dots 7 and 8.
        self.assertEqual(buf.to_lines(), ["    ", "⣀⣀⣀⣀"])
        self.assertEqual(buf.color_at(3, 1), "cyan")
        self.assertTrue(buf.frozen)

    def test_halfblock_lines_use_two_by_two_units(self) -> None:
        vp = Viewport(0.0, 1.0, 0.0, 1.0)
        low = _series("low", (0, 0), (1, 0))
        high = _series("high", (0, 1), (1, 1), color="red")
        buf = render([low, high], "line", vp, 4, 2, "halfblock")
        self.assertEqual(buf.to_lines(), ["▀▀▀▀", "▄▄▄▄"])
        self.assertEqual(buf.color_at(0, 0), "red")
        self.assertEqual(buf.color_at(0, 1), "cyan")
        diagonal = render_line_series(_series("d", (0, 0), (1, 1)), vp, 2, 2, "halfblock")
        self.assertEqual(diagonal.to_lines(), [" █", "█ "])

    def test_non_finite_points_split_the_line(self) -> None:
        vp = Viewport(0.0, 10.0, 0.0, 10.0)
        s = _series("gap", (0, 5), (2, 5), (4, math.nan), (8, 5), (10, 5))
        buf = render_line_series(s, vp, 11, 11, "ascii")
        row = buf.to_lines()[5]
        self.assertEqual(row, "***     ***")

    def test_empty_data_renders_blank(self) -> None:
        vp = Viewport(0.0, 100.0, 0.0, 100.0)
        buf = render([_series("none")], "line", vp, 6, 3, "braille")
        self.assertEqual(buf.to_lines(), ["      "] * 3)
        self.assertEqual(render([], "bar", vp, 2, 1, "ascii").to_lines(), ["  "])


class BarRenderTests(unittest.TestCase):
    def test_grouped_bars_do_not_share_columns(self) -> None:
        vp = Viewport(0.0, 3.0, 0.0, 10.0)
        series = [
            _series("a", (0, 2), (1, 4), (2, 6), (3, 8)),
            _series("b", (0, 3), (1, 5), (2, 7), (3, 9)),
            _series("c", (0, 10), (1, 10), (2, 10), (3, 10)),
        ]
        columns: list[set[int]] = []
        for index, s in enumerate(series):
            buf = render_bar_series(s, index, len(series), vp, 40, 10, "halfblock")
            occupied = buf.occupied()
            columns.append({x for x in range(40) if occupied[:, x].any()})
        self.assertFalse(columns[0] & columns[1])
        self.assertFalse(columns[1] & columns[2])
        self.assertFalse(columns[0] & columns[2])
        # group width 10, bar width (10 - 1) // 3
        self.assertEqual(sorted(columns[1])[:3], [3, 4, 5])

    def test_bar_height_and_glyph(self) -> None:
        vp = Viewport(0.0, 1.0, 0.0, 10.0)
        ascii_buf = render_bar_series(_series("a", (0, 5)), 0, 1, vp, 4, 10, "ascii")
        heights = ascii_buf.occupied()[:, 0]
        self.assertEqual(int(heights.sum()), 5)
        self.assertTrue(heights[-1])
        self.assertEqual(ascii_buf.char_at(0, 9), "#")
        block_buf = render_bar_series(_series("a", (0, 10)), 0, 1, vp, 4, 10, "braille")
        self.assertEqual(block_buf.char_at(0, 0), "█")

    def test_mixed_series_types_override_chart_type(self) -> None:
        vp = Viewport(0.0, 1.0, 0.0, 10.0)
        bar = _series("bar", (0, 10))
        line = Series(id="line", name="line", data=[DataPoint(0, 0), DataPoint(1, 0)], type="line")
        buf = render([bar, line], "bar", vp, 10, 5, "ascii")
        self.assertEqual(buf.char_at(9, 4), "*")
        self.assertEqual(buf.char_at(0, 0), "#")


class CompositionTests(unittest.TestCase):
    def test_spaces_never_erase(self) -> None:
        base = CanvasBuffer.blank(3, 1)
        base.set_cell(0, 0, "a", "red")
        overlay = CanvasBuffer.blank(3, 1)
        overlay.set_cell(1, 0, "b", "blue")
        merged = merge_buffers(base.freeze(), overlay.freeze())
        self.assertEqual(merged.to_lines(), ["ab "])
        self.assertEqual(merged.color_at(0, 0), "red")
        self.assertEqual(merged.color_at(1, 0), "blue")

    def test_overlay_wins_and_size_follows_base(self) -> None:
        base = CanvasBuffer.blank(2, 1)
        base.set_cell(0, 0, "a", "red")
        overlay = CanvasBuffer.blank(4, 2)
        overlay.set_cell(0, 0, "z")
        overlay.set_cell(3, 1, "q")
        merged = merge_buffers(base, overlay)
        self.assertEqual(merged.to_lines(), ["z "])
        self.assertEqual(merged.color_at(0, 0), "red")

    def test_grid_fills_only_blank_cells(self) -> None:
        buf = CanvasBuffer.blank(10, 5)
        buf.set_cell(1, 1, "*")
        out = render_grid(buf)
        self.assertEqual(out.char_at(1, 1), "*")
        self.assertEqual(out.char_at(0, 0), " ")
        self.assertEqual(out.char_at(0, 1), GRID_CHAR)
        self.assertEqual(out.char_at(1, 0), GRID_CHAR)
        self.assertEqual(out.color_at(0, 1), "gray")
        self.assertEqual(buf.char_at(0, 1), " ")

    def test_crosshair_center_overwrites_arms_do_not(self) -> None:
        buf = CanvasBuffer.blank(5, 5)
        buf.set_cell(2, 2, "*")
        buf.set_cell(0, 2, "*")
        buf.set_cell(2, 4, "*")
        out = render_crosshair(buf, 2, 2)
        self.assertEqual(out.char_at(2, 2), CROSSHAIR_CENTER)
        self.assertEqual(out.char_at(0, 2), "*")
        self.assertEqual(out.char_at(1, 2), CROSSHAIR_H)
        self.assertEqual(out.char_at(2, 4), "*")
        self.assertEqual(out.char_at(2, 0), CROSSHAIR_V)

    def test_render_applies_grid_then_crosshair(self) -> None:
        vp = Viewport(0.0, 10.0, 0.0, 10.0)
        buf = render([], "line", vp, 10, 5, "ascii", show_grid=True, crosshair=(4, 2))
        self.assertEqual(buf.char_at(4, 2), CROSSHAIR_CENTER)
        self.assertEqual(buf.char_at(0, 1), GRID_CHAR)

    def test_palette_cycles_unless_color_given(self) -> None:
        self.assertEqual(palette_color(0), "cyan")
        self.assertEqual(palette_color(8), "cyan")
        self.assertEqual(palette_color(1, "orange"), "orange")


if __name__ == "__main__":
    unittest.main()
