"""Layout primitives -- styled runs and lines, the renderer's output unit."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from pi.md.style import Style
from pi.md.utils import visible_width


@dataclass(frozen=True)
class StyledRun:
    """A piece of text sharing one resolved style."""

    text: str
    style: Style = Style()

    @property
    def width(self) -> int:
        return visible_width(self.text)


@dataclass(frozen=True)
class Line:
    """An ordered sequence of runs making up one physical terminal line."""

    runs: tuple[StyledRun, ...] = ()

    @classmethod
    def from_runs(cls, runs: Iterable[StyledRun]) -> Line:
        return cls(tuple(runs))

    @classmethod
    def raw(cls, text: str, style: Style = Style()) -> Line:
        if not text:
            return cls()
        return cls((StyledRun(text, style),))

    @property
    def plain(self) -> str:
        """The line's text with all styling dropped."""
        return "".join(run.text for run in self.runs)

    @property
    def width(self) -> int:
        return sum(run.width for run in self.runs)

    def is_blank(self) -> bool:
        return not self.plain.strip()

    def __len__(self) -> int:
        return len(self.runs)

    def __iter__(self):
        return iter(self.runs)


def runs_text(runs: Iterable[StyledRun]) -> str:
    return "".join(run.text for run in runs)


def runs_width(runs: Iterable[StyledRun]) -> int:
    return sum(run.width for run in runs)
