"""Display-width measurement for terminal output.

A string's width is what the terminal shows: ANSI escape sequences are
invisible, East-Asian wide characters and emoji take two columns, control and
combining characters take none, and a tab counts as ``TAB_WIDTH`` columns.
Width is measured per grapheme cluster, never per code point.
"""

from __future__ import annotations

import re
import unicodedata
from functools import lru_cache

import grapheme
import wcwidth

TAB_WIDTH = 3

_ANSI_RE = re.compile(
    r"\x1b\[[0-9;]*[mGKHJ]"    # CSI
    r"|\x1b\]8;;[^\x07]*\x07"   # OSC 8 hyperlinks
)

# Code points that make a multi-codepoint cluster render as a wide emoji.
_EMOJI_JOINERS = frozenset({0xFE0F, 0x200D})  # VS16, ZWJ
_EMOJI_RANGES = (
    (0x1F3FB, 0x1F3FF),  # skin tones
    (0x1F1E6, 0x1F1FF),  # regional indicators
)


def strip_ansi(text: str) -> str:
    return _ANSI_RE.sub("", text)


def graphemes(text: str) -> list[str]:
    """Split *text* into grapheme clusters."""
    return list(grapheme.graphemes(text))


def _is_emoji_cluster(cluster: str) -> bool:
    for ch in cluster:
        cp = ord(ch)
        if cp in _EMOJI_JOINERS:
            return True
        if any(lo <= cp <= hi for lo, hi in _EMOJI_RANGES):
            return True
    first = ord(cluster[0])
    return first >= 0x1F000 or 0x2600 <= first <= 0x27BF


def grapheme_width(cluster: str) -> int:
    """Terminal columns taken by one grapheme *cluster* (0, 1, 2 or ``TAB_WIDTH``)."""
    if not cluster:
        return 0
    if cluster == "\t":
        return TAB_WIDTH
    if len(cluster) > 1 and _is_emoji_cluster(cluster):
        return 2

    first = cluster[0]
    category = unicodedata.category(first)
    if category == "Cc" or category.startswith("M") or category == "Cf":
        return 0
    return max(wcwidth.wcwidth(first), 0)


@lru_cache(maxsize=512)
def _cluster_width_sum(text: str) -> int:
    return sum(grapheme_width(cluster) for cluster in grapheme.graphemes(text))


def visible_width(text: str) -> int:
    """Visible width of *text*, ignoring ANSI escapes."""
    if "\x1b" in text:
        text = strip_ansi(text)
    if not text:
        return 0
    if text.isascii() and text.isprintable():
        return len(text)
    return _cluster_width_sum(text)
