"""Style model -- colours and text attributes for rendered runs.

A ``Style`` only records what it sets.  Every field defaults to ``None``
("unset"), so styles can be layered: ``merge(outer, inner)`` keeps the outer
value wherever the inner one is unset.  ``Style()`` is the identity of
``merge`` and merging is associative, which lets the renderer keep a stack of
pre-merged styles.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Literal

NamedColor = Literal[
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "gray",
    "dark_gray",
    "light_red",
    "light_green",
    "light_yellow",
    "light_blue",
    "light_magenta",
    "light_cyan",
    "white",
]


@dataclass(frozen=True)
class Rgb:
    """24-bit colour."""

    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> Rgb:
        """Parse ``"#rrggbb"`` / ``"rrggbb"`` (the form Pygments styles use)."""
        value = value.lstrip("#")
        if len(value) == 3:
            value = "".join(ch * 2 for ch in value)
        if len(value) != 6:
            raise ValueError(f"Invalid hex colour: {value!r}")
        return cls(int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


Color = NamedColor | Rgb


@dataclass(frozen=True)
class Style:
    """Foreground/background colour plus optional text attributes."""

    fg: Color | None = None
    bg: Color | None = None
    bold: bool | None = None
    dim: bool | None = None
    italic: bool | None = None
    underline: bool | None = None
    crossed_out: bool | None = None

    def patch(self, overlay: Style) -> Style:
        """Return this style with every field *overlay* sets taken from it."""
        return merge(self, overlay)

    def is_empty(self) -> bool:
        return self == _EMPTY


_EMPTY = Style()
_FIELD_NAMES = tuple(f.name for f in fields(Style))


def merge(base: Style, overlay: Style) -> Style:
    """Combine two styles; explicit values in *overlay* override *base*."""
    if overlay == _EMPTY:
        return base
    if base == _EMPTY:
        return overlay
    values = {}
    for name in _FIELD_NAMES:
        value = getattr(overlay, name)
        values[name] = getattr(base, name) if value is None else value
    return Style(**values)
