from __future__ import annotations

from dataclasses import dataclass, field, fields
import json
import logging
from pathlib import Path
import re
import tomllib
from typing import Any, Mapping

from termchart.adapters.normalize import series_from_records
from termchart.errors import ChartConfigError
from termchart.types import (
    AXIS_FORMATS,
    CHART_TYPES,
    REQUESTED_RENDER_MODES,
    SCALE_TYPES,
    AxisFormat,
    ChartType,
    RenderMode,
    RequestedRenderMode,
    ScaleType,
    Series,
)


LOGGER = logging.getLogger(__name__)

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


@dataclass(frozen=True)
class AxisConfig:
    label: str | None = None
    show_ticks: bool = True
    tick_count: int | None = None
    format: AxisFormat = "auto"
    min: float | None = None
    max: float | None = None

    def __post_init__(self) -> None:
        if self.tick_count is not None and self.tick_count < 2:
            raise ChartConfigError("AxisConfig.tick_count must be >= 2")
        if self.format not in AXIS_FORMATS:
            raise ChartConfigError(f"Unsupported axis format: {self.format}")


@dataclass(frozen=True)
class BoundsOverride:
    min_x: float | None = None
    max_x: float | None = None
    min_y: float | None = None
    max_y: float | None = None


@dataclass(frozen=True)
class Margins:
    top: int = 2
    right: int = 2
    bottom: int = 3
    left: int = 8

    def __post_init__(self) -> None:
        for name in ("top", "right", "bottom", "left"):
            if getattr(self, name) < 0:
                raise ChartConfigError(f"Margins.{name} must be >= 0")


@dataclass(frozen=True)
class ChartConfig:
    series: tuple[Series, ...] = ()
    title: str | None = None
    chart_type: ChartType = "line"
    x_axis: AxisConfig = field(default_factory=AxisConfig)
    y_axis: AxisConfig = field(default_factory=AxisConfig)
    show_grid: bool = True
    show_legend: bool = True
    scale: ScaleType = "linear"
    auto_bounds: bool = True
    bounds: BoundsOverride = field(default_factory=BoundsOverride)
    render_mode: RequestedRenderMode = "auto"
    crosshair: bool = False
    margins: Margins = field(default_factory=Margins)

    def __post_init__(self) -> None:
        if not isinstance(self.series, tuple):
            object.__setattr__(self, "series", tuple(self.series))
        if self.chart_type not in CHART_TYPES:
            raise ChartConfigError(f"Unsupported chart type: {self.chart_type}")
        if self.scale not in SCALE_TYPES:
            raise ChartConfigError(f"Unsupported scale: {self.scale}")
        if self.render_mode not in REQUESTED_RENDER_MODES:
            raise ChartConfigError(f"Unsupported render mode: {self.render_mode}")
        seen: set[str] = set()
        for s in self.series:
            if s.id in seen:
                raise ChartConfigError(f"Duplicate series id: {s.id}")
            seen.add(s.id)
            if s.type is not None and s.type not in CHART_TYPES:
                raise ChartConfigError(f"Unsupported chart type for series {s.id}: {s.type}")


def resolve_render_mode(mode: RequestedRenderMode, *, unicode: bool) -> RenderMode:
    """Pick a concrete mode for ``auto`` from what the host knows about its terminal."""
    if mode == "auto":
        return "braille" if unicode else "ascii"
    return mode


def chart_config_from_mapping(raw: Mapping[str, Any]) -> ChartConfig:
    """Build a ChartConfig from a parsed TOML/JSON document (camelCase or snake_case keys)."""
    data = _snake_keys(raw, "chart")
    _reject_unknown(data, {f.name for f in fields(ChartConfig)}, "chart")
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == "series":
            if not isinstance(value, list):
                raise ChartConfigError("`series` must be a list")
            kwargs["series"] = tuple(series_from_records(entry, index=i) for i, entry in enumerate(value))
        elif key in ("x_axis", "y_axis"):
            kwargs[key] = _build(AxisConfig, value, key)
        elif key == "bounds":
            kwargs[key] = _build(BoundsOverride, value, key)
        elif key == "margins":
            kwargs[key] = _build(Margins, value, key)
        else:
            kwargs[key] = value
    config = ChartConfig(**kwargs)
    LOGGER.debug("chart config loaded: %d series, type=%s", len(config.series), config.chart_type)
    return config


def load_chart_config(path: str | Path) -> ChartConfig:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"chart config not found: {config_path}")
    suffix = config_path.suffix.lower()
    if suffix == ".toml":
        with config_path.open("rb") as f:
            raw = tomllib.load(f)
    elif suffix == ".json":
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    else:
        raise ChartConfigError(f"unsupported config format: {config_path.suffix}")
    if not isinstance(raw, dict):
        raise ChartConfigError("chart config root must be a table/object")
    return chart_config_from_mapping(raw)


def _build(cls: type, value: Any, label: str) -> Any:
    if not isinstance(value, Mapping):
        raise ChartConfigError(f"`{label}` must be a table/object")
    data = _snake_keys(value, label)
    _reject_unknown(data, {f.name for f in fields(cls)}, label)
    try:
        return cls(**data)
    except TypeError as exc:
        raise ChartConfigError(f"invalid `{label}`: {exc}") from exc


def _snake_keys(raw: Mapping[str, Any], label: str) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in raw.items():
        if not isinstance(key, str):
            raise ChartConfigError(f"`{label}` keys must be strings")
        out[_CAMEL_BOUNDARY.sub("_", key).lower()] = value
    return out


def _reject_unknown(data: Mapping[str, Any], allowed: set[str], label: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ChartConfigError(f"Unknown `{label}` keys: {', '.join(unknown)}")
