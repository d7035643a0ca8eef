"""Painting -- turn styled lines into ANSI SGR strings."""

from __future__ import annotations

from typing import Iterable

from pi.md.style import Color, Rgb, Style
from pi.md.text import Line

RESET = "\x1b[0m"

_NAMED_FG = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "gray": 37,
    "dark_gray": 90,
    "light_red": 91,
    "light_green": 92,
    "light_yellow": 93,
    "light_blue": 94,
    "light_magenta": 95,
    "light_cyan": 96,
    "white": 97,
}

_ATTRIBUTES = (
    ("bold", 1),
    ("dim", 2),
    ("italic", 3),
    ("underline", 4),
    ("crossed_out", 9),
)


def _color_params(color: Color, background: bool) -> str:
    if isinstance(color, Rgb):
        return f"{48 if background else 38};2;{color.r};{color.g};{color.b}"
    code = _NAMED_FG[color]
    return str(code + 10 if background else code)


def sgr(style: Style) -> str:
    """The escape sequence selecting *style*, or ``""`` for the empty style."""
    params: list[str] = []
    for name, code in _ATTRIBUTES:
        if getattr(style, name):
            params.append(str(code))
    if style.fg is not None:
        params.append(_color_params(style.fg, background=False))
    if style.bg is not None:
        params.append(_color_params(style.bg, background=True))
    if not params:
        return ""
    return f"\x1b[{';'.join(params)}m"


def paint_line(line: Line, color: bool = True) -> str:
    """Render *line* as a string; each styled run is reset after itself."""
    if not color:
        return line.plain
    parts: list[str] = []
    for run in line.runs:
        prefix = sgr(run.style)
        if prefix:
            parts.append(f"{prefix}{run.text}{RESET}")
        else:
            parts.append(run.text)
    return "".join(parts)


def paint_lines(lines: Iterable[Line], color: bool = True) -> list[str]:
    return [paint_line(line, color) for line in lines]
