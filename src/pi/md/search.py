"""Search highlighting over a line of styled runs."""

from __future__ import annotations

import re
from typing import Sequence

from pi.md.style import Style, merge
from pi.md.text import StyledRun


def highlight_search(
    runs: Sequence[StyledRun],
    needle: str,
    match_style: Style,
) -> tuple[list[StyledRun], list[tuple[int, int]]]:
    """Split *runs* around case-insensitive occurrences of *needle*.

    Matched text keeps its own style with *match_style* layered on top.
    Returns the new runs and the ``(start, end)`` character offsets of every
    match, measured from the start of the line.  Matching happens inside a
    single run: an occurrence straddling two runs is not reported.
    """
    if not needle:
        return list(runs), []

    pattern = re.compile(re.escape(needle), re.IGNORECASE)
    out: list[StyledRun] = []
    matches: list[tuple[int, int]] = []
    offset = 0

    for run in runs:
        text = run.text
        pos = 0
        for m in pattern.finditer(text):
            if m.start() == m.end():
                continue
            if m.start() > pos:
                out.append(StyledRun(text[pos:m.start()], run.style))
            out.append(StyledRun(m.group(), merge(run.style, match_style)))
            matches.append((offset + m.start(), offset + m.end()))
            pos = m.end()
        if pos == 0:
            out.append(run)
        elif pos < len(text):
            out.append(StyledRun(text[pos:], run.style))
        offset += len(text)

    return out, matches
