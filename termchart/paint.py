from __future__ import annotations

from termchart.raster import CanvasBuffer


ANSI_RESET = "\x1b[0m"
ANSI_FOREGROUND: dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
    "gray": 90,
    "grey": 90,
}


def ansi_wrap(text: str, color: str | None) -> str:
    code = ANSI_FOREGROUND.get(color or "")
    if code is None or not text:
        return text
    return f"\x1b[{code}m{text}{ANSI_RESET}"


def color_runs(buffer: CanvasBuffer, row: int) -> list[tuple[str | None, str]]:
    """Group one buffer row into (color, text) spans of equal color."""
    runs: list[tuple[str | None, str]] = []
    current_color: str | None = None
    current: list[str] = []
    for x in range(buffer.width):
        color = buffer.color_at(x, row)
        if current and color != current_color:
            runs.append((current_color, "".join(current)))
            current = []
        current_color = color
        current.append(buffer.char_at(x, row))
    if current:
        runs.append((current_color, "".join(current)))
    return runs


def to_ansi_lines(buffer: CanvasBuffer) -> list[str]:
    return ["".join(ansi_wrap(text, color) for color, text in color_runs(buffer, y)) for y in range(buffer.height)]
