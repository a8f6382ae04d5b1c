from __future__ import annotations

from typing import Sequence

from termchart.config import AxisConfig, ChartConfig
from termchart.render import palette_color
from termchart.ticks import format_tick_label, generate_ticks, generate_time_ticks
from termchart.transform import data_to_screen
from termchart.types import AxisFormat, Series, Viewport


AXIS_RULE = "─"
AXIS_TICK = "┴"
AXIS_EDGE = " │"
LEGEND_SWATCH = "■"
HELP_TEXT = "←→↑↓ pan  +/- zoom  r reset  f fit  c crosshair  q quit"
DEFAULT_TICK_COUNT = 6
MAX_CHART_HEIGHT = 20
MIN_CHART_WIDTH = 20
MIN_CHART_HEIGHT = 8


def _resolve_format(config: AxisConfig | None, *, is_time: bool) -> AxisFormat:
    fmt = config.format if config is not None else "auto"
    if fmt == "auto":
        return "datetime" if is_time else "number"
    return fmt


def y_tick_values(viewport: Viewport, rows: int, config: AxisConfig | None = None) -> list[float]:
    count = min(rows, (config.tick_count if config else None) or DEFAULT_TICK_COUNT)
    return generate_ticks(viewport.min_y, viewport.max_y, count)


def x_tick_values(
    viewport: Viewport,
    width: int,
    config: AxisConfig | None = None,
    *,
    is_time: bool = False,
) -> list[float]:
    count = min(width // 10, (config.tick_count if config else None) or DEFAULT_TICK_COUNT)
    if count < 1:
        return []
    if is_time:
        return generate_time_ticks(viewport.min_x, viewport.max_x, count)
    return generate_ticks(viewport.min_x, viewport.max_x, count)


def y_axis_lines(viewport: Viewport, height: int, width: int = 8, config: AxisConfig | None = None) -> list[str]:
    """Left gutter rows: optional label row, then one right-aligned tick label per chart row."""
    lines: list[str] = []
    label = config.label if config is not None else None
    if label:
        lines.append(label[: max(0, width - 1)].rjust(width - 1) + " " * len(AXIS_EDGE))
    rows = height - 1 if label else height
    if rows <= 0:
        return lines
    if config is not None and not config.show_ticks:
        ticks: list[float] = []
    else:
        ticks = y_tick_values(viewport, rows, config)
    fmt = _resolve_format(config, is_time=False)
    span = max(1, rows - 1)
    tick_rows: dict[int, float] = {}
    for tick in ticks:
        _, row = data_to_screen(viewport.min_x, tick, viewport, 1, span + 1)
        tick_rows.setdefault(row, tick)
    for y in range(rows):
        text = format_tick_label(tick_rows[y], fmt) if y in tick_rows else ""
        lines.append(text.rjust(width - 1) + AXIS_EDGE)
    return lines


def x_axis_lines(
    viewport: Viewport,
    width: int,
    config: AxisConfig | None = None,
    *,
    is_time: bool = False,
) -> list[str]:
    """Rule with tick marks, a row of centered tick labels, and the optional axis label."""
    if config is not None and not config.show_ticks:
        ticks: list[float] = []
    else:
        ticks = x_tick_values(viewport, width, config, is_time=is_time)
    fmt = _resolve_format(config, is_time=is_time)

    rule = [AXIS_RULE] * width
    labels = [" "] * width
    for tick in ticks:
        x, _ = data_to_screen(tick, viewport.min_y, viewport, width, 1)
        if 0 <= x < width:
            rule[x] = AXIS_TICK
        text = format_tick_label(tick, fmt)
        start = min(max(0, x - len(text) // 2), width - len(text))
        if start >= 0:
            labels[start : start + len(text)] = list(text)

    lines = ["".join(rule), "".join(labels)]
    if config is not None and config.label:
        lines.append(config.label.center(width))
    return lines


def legend_items(series: Sequence[Series], max_width: int | None = None) -> list[tuple[str, str]]:
    """(color, text) per series, names clipped so the row fits ``max_width``."""
    items: list[tuple[str, str]] = []
    for index, s in enumerate(series):
        name = s.name
        if max_width is not None:
            name = name[: max(0, max_width // len(series) - 4)]
        items.append((palette_color(index, s.color), f"{LEGEND_SWATCH} {name}"))
    return items


def legend_line(series: Sequence[Series], max_width: int | None = None) -> str:
    return "  ".join(text for _, text in legend_items(series, max_width))


def status_line(
    viewport: Viewport,
    cursor: tuple[float, float] | None = None,
    *,
    is_time: bool = False,
    show_help: bool = True,
) -> str:
    parts = [f"Zoom: {int(round(viewport.zoom_level * 100))}%"]
    if cursor is not None:
        x_fmt: AxisFormat = "datetime" if is_time else "number"
        parts.append(f"X: {format_tick_label(cursor[0], x_fmt)}")
        parts.append(f"Y: {format_tick_label(cursor[1], 'number')}")
    text = "  ".join(parts)
    if show_help:
        text = f"{text}    {HELP_TEXT}"
    return text


def crosshair_tooltip(
    x: int,
    data_x: float,
    data_y: float,
    screen_width: int,
    *,
    series_name: str | None = None,
    is_time: bool = False,
) -> tuple[int, str]:
    """Tooltip text and the column it starts at, pulled left to stay on screen."""
    x_fmt: AxisFormat = "datetime" if is_time else "number"
    coords = f"({format_tick_label(data_x, x_fmt)}, {format_tick_label(data_y, 'number')})"
    body = f"{series_name}: {coords}" if series_name else coords
    return max(0, min(x, screen_width - len(body) - 2)), f" {body} "


def chart_area_size(term_width: int, term_height: int, config: ChartConfig | None = None) -> tuple[int, int]:
    cfg = config or ChartConfig()
    margins = cfg.margins
    width = max(MIN_CHART_WIDTH, term_width - margins.left - margins.right)
    max_height = min(MAX_CHART_HEIGHT, term_height // 2)
    available = term_height - margins.top - margins.bottom - (2 if cfg.show_legend else 0) - 4
    height = max(MIN_CHART_HEIGHT, min(max_height, available))
    return width, height
