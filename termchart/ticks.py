from __future__ import annotations

import datetime as dt
import logging
import math
from typing import Sequence

import numpy as np

from termchart.types import AxisFormat


LOGGER = logging.getLogger(__name__)

MS_PER_MINUTE = 60 * 1000
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR
# 2000-01-01T00:00:00Z in epoch milliseconds.
EPOCH_MS_Y2K = 946684800000

# (range must exceed, tick interval), checked top to bottom.
TIME_TICK_LADDER: tuple[tuple[int, int], ...] = (
    (365 * MS_PER_DAY, 30 * MS_PER_DAY),
    (30 * MS_PER_DAY, 7 * MS_PER_DAY),
    (7 * MS_PER_DAY, MS_PER_DAY),
    (MS_PER_DAY, 6 * MS_PER_HOUR),
    (6 * MS_PER_HOUR, MS_PER_HOUR),
    (MS_PER_HOUR, 15 * MS_PER_MINUTE),
)
TIME_TICK_FALLBACK = 5 * MS_PER_MINUTE


def nice_step(vmin: float, vmax: float, count: int) -> float:
    rough_step = (vmax - vmin) / max(1, count - 1)
    magnitude = 10.0 ** math.floor(math.log10(rough_step))
    residual = rough_step / magnitude
    if residual <= 1.5:
        nice = 1.0
    elif residual <= 3.0:
        nice = 2.0
    elif residual <= 7.0:
        nice = 5.0
    else:
        nice = 10.0
    return nice * magnitude


def generate_ticks(vmin: float, vmax: float, count: int) -> list[float]:
    """Multiples of a 1/2/5/10 step that fall inside [vmin, vmax]."""
    if vmax < vmin:
        return []
    if vmax == vmin:
        return [float(vmin)]
    step = nice_step(vmin, vmax, max(2, count))
    first = math.floor(vmin / step)
    last = math.ceil(vmax / step)
    ticks = np.arange(first, last + 1, dtype=np.float64) * step
    eps = step * 1e-9
    ticks = ticks[(ticks >= vmin - eps) & (ticks <= vmax + eps)]
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=eps)] = 0.0
    return ticks.tolist()


def time_tick_interval(range_ms: float) -> int:
    for threshold, interval in TIME_TICK_LADDER:
        if range_ms > threshold:
            return interval
    return TIME_TICK_FALLBACK


def generate_time_ticks(vmin: float, vmax: float, count: int) -> list[float]:
    interval = time_tick_interval(vmax - vmin)
    tick = math.ceil(vmin / interval) * interval
    ticks: list[float] = []
    while tick <= vmax and len(ticks) < count:
        ticks.append(float(tick))
        tick += interval
    return ticks


def format_tick_label(value: float, fmt: AxisFormat = "number") -> str:
    if fmt == "date":
        return format_date(value)
    if fmt == "time":
        return format_time(value)
    if fmt == "datetime":
        return format_datetime(value)
    return format_number(value)


def format_number(value: float) -> str:
    abs_v = abs(value)
    if abs_v == 0:
        return "0"
    if abs_v >= 1_000_000:
        return f"{value / 1_000_000:.1f}M"
    if abs_v >= 1_000:
        return f"{value / 1_000:.1f}K"
    if abs_v >= 1:
        return f"{value:.1f}"
    if abs_v >= 0.01:
        return f"{value:.2f}"
    mantissa, _, exponent = f"{value:.1e}".partition("e")
    return f"{mantissa}e{int(exponent):+d}"


def _utc(timestamp_ms: float) -> dt.datetime:
    return dt.datetime.fromtimestamp(timestamp_ms / 1000.0, tz=dt.timezone.utc)


def format_date(timestamp_ms: float) -> str:
    return _utc(timestamp_ms).strftime("%m/%d")


def format_time(timestamp_ms: float) -> str:
    return _utc(timestamp_ms).strftime("%H:%M")


def format_datetime(timestamp_ms: float) -> str:
    return f"{format_date(timestamp_ms)} {format_time(timestamp_ms)}"


def parse_time_value(value: float | int | str) -> float:
    """Epoch milliseconds for a number or ISO-8601 string; unparseable strings map to 0."""
    if not isinstance(value, str):
        return float(value)
    parsed = _parse_iso(value)
    if parsed is None:
        LOGGER.warning("Invalid date value: %s", value)
        return 0.0
    return parsed.timestamp() * 1000.0


def is_time_series(x_values: Sequence[float | int | str]) -> bool:
    if not x_values:
        return False
    first = x_values[0]
    if isinstance(first, str):
        return _parse_iso(first) is not None
    return float(first) > EPOCH_MS_Y2K


def _parse_iso(text: str) -> dt.datetime | None:
    try:
        parsed = dt.datetime.fromisoformat(text.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed
