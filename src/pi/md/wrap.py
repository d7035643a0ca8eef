"""Word wrapping for lines of styled runs.

``wrap_line`` greedily packs runs into physical lines of at most ``max_width``
display columns.  Breaks prefer the last whitespace that fits, fall back to
the last grapheme cluster that fits, and as a last resort force a single
cluster onto an otherwise empty line so the loop always makes progress.
"""

from __future__ import annotations

from typing import Sequence

from pi.md.text import Line, StyledRun
from pi.md.utils import grapheme_width, graphemes, visible_width

# Whitespace that must not be used as a break opportunity.
_NO_BREAK_SPACES = frozenset("\u00a0\u2007\u202f")


def _is_break_space(g: str) -> bool:
    return g.isspace() and g not in _NO_BREAK_SPACES


def _lstrip_break_spaces(text: str) -> str:
    i = 0
    while i < len(text) and _is_break_space(text[i]):
        i += 1
    return text[i:]


def _find_break(text: str, available: int) -> tuple[int, int | None]:
    """Scan *text* for the longest prefix fitting in *available* columns.

    Returns ``(fit_end, last_space)``: the character index just past the last
    cluster that fits, and the character index of the last breakable
    whitespace inside that prefix or directly after it (or ``None``).
    """
    pos = 0
    used = 0
    last_space: int | None = None
    for g in graphemes(text):
        w = grapheme_width(g)
        if used + w > available:
            if _is_break_space(g):
                last_space = pos
            break
        if _is_break_space(g):
            last_space = pos
        used += w
        pos += len(g)
    return pos, last_space


def wrap_line(runs: Sequence[StyledRun], max_width: int, indent: int = 0) -> list[Line]:
    """Wrap *runs* to *max_width* columns.

    A *max_width* of 0 disables wrapping.  Continuation lines start with
    *indent* blank columns, and whitespace at a break is dropped from the
    start of the continuation line.  Empty input yields one empty line.
    """
    if max_width <= 0:
        return [Line.from_runs(runs)]

    indent = max(indent, 0)
    pad = StyledRun(" " * indent) if indent else None

    result: list[Line] = []
    current: list[StyledRun] = []
    current_width = 0
    has_content = False

    def start_continuation() -> None:
        nonlocal current, current_width, has_content
        result.append(Line.from_runs(current))
        current = [pad] if pad is not None else []
        current_width = indent
        has_content = False

    for run in runs:
        remaining = run.text
        style = run.style

        while remaining:
            if result and not has_content:
                remaining = _lstrip_break_spaces(remaining)
                if not remaining:
                    break

            width = visible_width(remaining)
            if current_width + width <= max_width:
                current.append(StyledRun(remaining, style))
                current_width += width
                has_content = True
                break

            available = max(max_width - current_width, 0)
            fit_end, last_space = _find_break(remaining, available)

            if last_space is not None and (last_space > 0 or has_content):
                break_at = last_space
            elif has_content and _is_break_space(current[-1].text[-1]):
                # The previous run ended on a space: move this word down whole.
                break_at = 0
            elif fit_end > 0:
                break_at = fit_end
            elif has_content:
                # Break points are searched within this run only, so a word
                # spanning styled runs can split at the run boundary.
                break_at = 0
            else:
                # Nothing fits on an empty line: force one cluster through.
                break_at = len(graphemes(remaining)[0])

            before = remaining[:break_at]
            if before:
                current.append(StyledRun(before, style))
                has_content = True
            start_continuation()
            remaining = remaining[break_at:]

    if has_content or not result:
        result.append(Line.from_runs(current))

    return result
