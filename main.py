from __future__ import annotations

import argparse
from dataclasses import asdict
import json
import logging
import os
from pathlib import Path
import shutil
import sys

from termchart import Chart, ChartConfigError, load_chart_config, resolve_render_mode
from termchart.types import REQUESTED_RENDER_MODES


def main() -> None:
    parser = argparse.ArgumentParser(prog="termchart")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render", help="Render a chart config (.toml or .json) to stdout.")
    render.add_argument("config", type=Path)
    render.add_argument("--width", type=int, default=None, help="Terminal columns. Default: detected size.")
    render.add_argument("--height", type=int, default=None, help="Terminal rows. Default: detected size.")
    render.add_argument(
        "--mode",
        choices=list(REQUESTED_RENDER_MODES),
        default=None,
        help="Override the config's render mode.",
    )
    render.add_argument(
        "--unicode",
        choices=["auto", "yes", "no"],
        default="auto",
        help="Whether the terminal can draw braille/block glyphs when the mode is auto.",
    )
    render.add_argument("--ansi", action="store_true", help="Emit ANSI color escapes.")
    render.add_argument("--zoom", type=float, default=None, help="Zoom factor applied before drawing.")
    render.add_argument("--pan", type=float, nargs=2, metavar=("DX", "DY"), default=None)
    render.add_argument(
        "--crosshair",
        type=int,
        nargs=2,
        metavar=("COL", "ROW"),
        default=None,
        help="Chart-area cell to draw the crosshair and tooltip at.",
    )

    bounds = sub.add_parser("bounds", help="Print the data bounds and initial viewport as JSON.")
    bounds.add_argument("config", type=Path)

    args = parser.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        config = load_chart_config(args.config)
    except (ChartConfigError, FileNotFoundError) as exc:
        raise SystemExit(f"termchart: {exc}") from exc

    chart = Chart(config)

    if args.command == "bounds":
        manager = chart.viewport_manager
        print(
            json.dumps(
                {"data_bounds": asdict(manager.data_bounds), "viewport": asdict(manager.viewport)},
                indent=2,
                sort_keys=True,
            )
        )
        return

    if args.command == "render":
        term_width, term_height = _resolve_terminal_size(args.width, args.height)
        requested = args.mode or config.render_mode
        mode = resolve_render_mode(requested, unicode=_resolve_unicode(args.unicode))
        if args.pan is not None:
            chart.pan(args.pan[0], args.pan[1])
        if args.zoom is not None:
            chart.zoom(args.zoom)
        if args.crosshair is not None:
            chart.set_crosshair(True)
            chart.move_cursor((args.crosshair[0], args.crosshair[1]))
        for line in chart.render_frame(term_width, term_height, mode, color=args.ansi):
            print(line)
        return

    raise RuntimeError(f"unsupported command: {args.command}")


def _resolve_terminal_size(width: int | None, height: int | None) -> tuple[int, int]:
    detected = shutil.get_terminal_size(fallback=(80, 24))
    return (width or detected.columns, height or detected.lines)


def _resolve_unicode(choice: str) -> bool:
    if choice != "auto":
        return choice == "yes"
    encoding = (getattr(sys.stdout, "encoding", None) or "").lower()
    if "utf" not in encoding:
        return False
    return os.environ.get("TERM", "") != "linux"


if __name__ == "__main__":
    main()
