"""Table layout with box-drawing borders.

Tables are buffered whole (column widths depend on every row) and laid out
once the table closes.  ``TableAccumulator`` does the buffering for the
renderer; ``layout_table`` turns the collected cells into lines.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from pi.md.events import Alignment
from pi.md.style import Style, merge
from pi.md.text import Line, StyledRun, runs_width
from pi.md.theme import Theme

Cell = list[StyledRun]

MIN_COLUMN_WIDTH = 3


# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------


def _border(widths: Sequence[int], left: str, join: str, right: str) -> str:
    return left + join.join("─" * (w + 2) for w in widths) + right


def _separator_segment(width: int, alignment: Alignment) -> str:
    total = width + 2
    match alignment:
        case "left":
            return ":" + "─" * (total - 1)
        case "right":
            return "─" * (total - 1) + ":"
        case "center":
            return ":" + "─" * (total - 2) + ":"
        case _:
            return "─" * total


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def column_widths(rows: Sequence[Sequence[Cell]], column_count: int) -> list[int]:
    """Max display width per column, at least ``MIN_COLUMN_WIDTH``."""
    widths = [MIN_COLUMN_WIDTH] * column_count
    for row in rows:
        for col, cell in enumerate(row[:column_count]):
            widths[col] = max(widths[col], runs_width(cell))
    return widths


def _pad(alignment: Alignment, slack: int) -> tuple[int, int]:
    match alignment:
        case "right":
            return slack, 0
        case "center":
            return slack // 2, slack - slack // 2
        case _:
            return 0, slack


def layout_table(
    rows: Sequence[Sequence[Cell]],
    alignments: Sequence[Alignment],
    column_count: int,
    theme: Theme,
) -> list[Line]:
    """Lay out *rows* (the first one is the header) as bordered lines."""
    if not rows or column_count <= 0:
        return []

    widths = column_widths(rows, column_count)
    border_style = theme.table_border
    lines: list[Line] = [Line.raw(_border(widths, "┌", "┬", "┐"), border_style)]

    for index, row in enumerate(rows):
        base = theme.table_header if index == 0 else theme.table_cell
        lines.append(_layout_row(row, widths, alignments, base, border_style))
        if index == 0:
            segments = [
                _separator_segment(w, alignments[col] if col < len(alignments) else "default")
                for col, w in enumerate(widths)
            ]
            lines.append(Line.raw("├" + "┼".join(segments) + "┤", border_style))

    lines.append(Line.raw(_border(widths, "└", "┴", "┘"), border_style))
    return lines


def _layout_row(
    row: Sequence[Cell],
    widths: Sequence[int],
    alignments: Sequence[Alignment],
    base: Style,
    border_style: Style,
) -> Line:
    runs: list[StyledRun] = [StyledRun("│ ", border_style)]
    for col, width in enumerate(widths):
        cell = row[col] if col < len(row) else []
        alignment = alignments[col] if col < len(alignments) else "default"
        left, right = _pad(alignment, max(width - runs_width(cell), 0))

        if left:
            runs.append(StyledRun(" " * left, base))
        runs.extend(StyledRun(run.text, merge(base, run.style)) for run in cell if run.text)
        if right:
            runs.append(StyledRun(" " * right, base))

        separator = " │ " if col < len(widths) - 1 else " │"
        runs.append(StyledRun(separator, border_style))
    return Line.from_runs(runs)


# ---------------------------------------------------------------------------
# Accumulator
# ---------------------------------------------------------------------------


@dataclass
class TableAccumulator:
    """Collects table cells from the event stream until the table closes."""

    rows: list[list[Cell]] = field(default_factory=list)
    alignments: list[Alignment] = field(default_factory=list)
    column_count: int = 0
    _row: list[Cell] | None = None
    _cell: Cell | None = None

    @property
    def in_cell(self) -> bool:
        return self._cell is not None

    def start(self, column_count: int = 0) -> None:
        self.clear()
        self.column_count = column_count

    def start_row(self) -> None:
        self._row = []

    def start_cell(self, alignment: Alignment = "default") -> None:
        if self._row is None:
            self._row = []
        if not self.rows:
            self.alignments.append(alignment)
        self._cell = []

    def push_run(self, run: StyledRun) -> None:
        if self._cell is not None and run.text:
            self._cell.append(run)

    def end_cell(self) -> None:
        if self._cell is None:
            return
        if self._row is None:
            self._row = []
        self._row.append(self._cell)
        self._cell = None

    def end_row(self) -> None:
        self.end_cell()
        if self._row is not None:
            self.rows.append(self._row)
        self._row = None

    def render(self, theme: Theme) -> list[Line]:
        """Lay out everything collected so far, then reset."""
        self.end_row()
        column_count = self.column_count or max((len(r) for r in self.rows), default=0)
        lines = layout_table(self.rows, self.alignments, column_count, theme)
        self.clear()
        return lines

    def clear(self) -> None:
        self.rows = []
        self.alignments = []
        self.column_count = 0
        self._row = None
        self._cell = None
