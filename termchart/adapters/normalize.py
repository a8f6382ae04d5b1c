from __future__ import annotations

from collections.abc import Sequence
import datetime as dt
from decimal import Decimal
from typing import Any, Mapping

import numpy as np
import torch

from termchart.errors import ChartConfigError
from termchart.ticks import parse_time_value
from termchart.types import CHART_TYPES, DataPoint, Series


try:
    import pandas as pd
except Exception:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]


_SERIES_KEYS = {"id", "name", "data", "color", "type"}


def series_from_arrays(
    y: Any,
    *,
    x: Any = None,
    series_id: str,
    name: str | None = None,
    color: str | None = None,
    chart_type: str | None = None,
) -> Series:
    """Build a Series from parallel x/y columns (lists, numpy, torch or pandas).

    Missing x means sample index. Date-like x values are resolved to epoch
    milliseconds. Point order is kept exactly as given.
    """
    y_arr = _coerce_1d_numeric(y, label="y")
    if x is None:
        x_arr = np.arange(y_arr.size, dtype=np.float64)
    else:
        x_arr = _coerce_1d_x(x)
    if x_arr.shape != y_arr.shape:
        raise ChartConfigError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    if chart_type is not None and chart_type not in CHART_TYPES:
        raise ChartConfigError(f"Unsupported chart type for series {series_id}: {chart_type}")
    points = tuple(DataPoint(x=float(xv), y=float(yv)) for xv, yv in zip(x_arr.tolist(), y_arr.tolist(), strict=True))
    return Series(id=series_id, name=name or series_id, data=points, color=color, type=chart_type)  # type: ignore[arg-type]


def series_from_records(raw: Mapping[str, Any], *, index: int = 0) -> Series:
    """Build a Series from a ``{id, name, data: [{x, y}, ...], color?, type?}`` mapping."""
    if not isinstance(raw, Mapping):
        raise ChartConfigError(f"series #{index} must be a table/object")
    unknown = sorted(set(raw) - _SERIES_KEYS)
    if unknown:
        raise ChartConfigError(f"Unknown series keys: {', '.join(unknown)}")
    series_id = str(raw.get("id") or f"series-{index + 1}")
    name = str(raw.get("name") or series_id)
    chart_type = raw.get("type")
    if chart_type is not None and chart_type not in CHART_TYPES:
        raise ChartConfigError(f"Unsupported chart type for series {series_id}: {chart_type}")
    color = raw.get("color")
    rows = raw.get("data", [])
    if not isinstance(rows, list):
        raise ChartConfigError(f"series {series_id}: `data` must be a list")
    points = tuple(_coerce_point(row, series_id=series_id, i=i) for i, row in enumerate(rows))
    return Series(
        id=series_id,
        name=name,
        data=points,
        color=None if color is None else str(color),
        type=chart_type,
    )


def _coerce_point(row: Any, *, series_id: str, i: int) -> DataPoint:
    if isinstance(row, Mapping):
        if "x" not in row or "y" not in row:
            raise ChartConfigError(f"series {series_id}: point {i} needs `x` and `y`")
        x_raw, y_raw = row["x"], row["y"]
    elif isinstance(row, Sequence) and not isinstance(row, (str, bytes)) and len(row) == 2:
        x_raw, y_raw = row[0], row[1]
    else:
        raise ChartConfigError(f"series {series_id}: point {i} must be {{x, y}} or [x, y]")
    return DataPoint(x=_coerce_x_scalar(x_raw, label=f"series {series_id} x[{i}]"), y=_coerce_scalar(y_raw, label=f"series {series_id} y[{i}]"))


def _as_1d_array(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, torch.Tensor):
        tensor = value.detach().cpu()
        arr = tensor.numpy() if tensor.dtype == torch.bool else tensor.to(torch.float64).numpy()
    elif pd is not None and isinstance(value, (pd.Series, pd.Index)):
        arr = value.to_numpy()
    elif isinstance(value, np.ndarray):
        arr = value
    elif isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        arr = np.asarray(value, dtype=object)
    else:
        raise ChartConfigError(f"unsupported {label} input type: {type(value)!r}")
    if arr.ndim != 1:
        raise ChartConfigError(f"{label} must be 1-D")
    if arr.dtype.kind == "b":
        raise ChartConfigError(f"{label} must be numeric, got a boolean array")
    return arr


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    arr = _as_1d_array(value, label=label)
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=False)
    return np.asarray([_coerce_scalar(raw, label=f"{label}[{i}]") for i, raw in enumerate(arr.tolist())], dtype=np.float64)


def _coerce_1d_x(value: Any) -> np.ndarray:
    arr = _as_1d_array(value, label="x")
    if arr.dtype.kind == "M":
        return arr.astype("datetime64[ms]").astype(np.int64).astype(np.float64)
    if arr.dtype.kind in {"i", "u", "f"}:
        return arr.astype(np.float64, copy=False)
    # Object columns may mix numbers with ISO strings, datetimes and Timestamps.
    return np.asarray([_coerce_x_scalar(raw, label=f"x[{i}]") for i, raw in enumerate(arr.tolist())], dtype=np.float64)


def _coerce_x_scalar(raw: Any, *, label: str) -> float:
    if isinstance(raw, dt.datetime):
        if raw.tzinfo is None:
            raw = raw.replace(tzinfo=dt.timezone.utc)
        return raw.timestamp() * 1000.0
    if isinstance(raw, dt.date):
        return dt.datetime(raw.year, raw.month, raw.day, tzinfo=dt.timezone.utc).timestamp() * 1000.0
    if isinstance(raw, str):
        return parse_time_value(raw)
    return _coerce_scalar(raw, label=label)


def _coerce_scalar(raw: Any, *, label: str) -> float:
    if raw is None:
        return float("nan")
    if isinstance(raw, Decimal):
        return float(raw)
    if isinstance(raw, bool) or not isinstance(raw, (int, float, np.number)):
        raise ChartConfigError(f"{label} is not numeric: {raw!r}")
    return float(raw)
