"""Pygments-backed syntax highlighting for fenced code blocks."""

from __future__ import annotations

import logging

from pygments import lex
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.styles import get_all_styles, get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

from pi.md.style import Rgb, Style
from pi.md.text import Line, StyledRun

logger = logging.getLogger(__name__)

DEFAULT_THEME = "monokai"


def available_themes() -> list[str]:
    return sorted(get_all_styles())


class SyntaxHighlighter:
    """Turns source code into styled lines using a Pygments style.

    Instances are callable as ``highlighter(code, lang)`` so they can be
    handed straight to the renderer.  Unknown languages are lexed as plain
    text.
    """

    def __init__(self, theme_name: str = DEFAULT_THEME) -> None:
        try:
            self._style = get_style_by_name(theme_name)
        except ClassNotFound as exc:
            raise ValueError(f"Unknown syntax theme {theme_name!r}") from exc
        self.theme_name = theme_name
        self._token_styles: dict[_TokenType, Style] = {}

    def __call__(self, code: str, lang: str) -> list[Line]:
        return self.highlight(code, lang)

    def highlight(self, code: str, lang: str) -> list[Line]:
        lexer = self._lexer_for(lang)
        lines: list[Line] = []
        current: list[StyledRun] = []
        for ttype, value in lex(code, lexer):
            style = self._style_for(ttype)
            parts = value.split("\n")
            for n, part in enumerate(parts):
                if n:
                    lines.append(Line.from_runs(current))
                    current = []
                if part:
                    current.append(StyledRun(part, style))
        if not code:
            return lines
        # The lexer adds no newline, so the last source line is always open here.
        lines.append(Line.from_runs(current))
        return lines

    # -- internals ----------------------------------------------------------

    @staticmethod
    def _lexer_for(lang: str) -> Lexer:
        try:
            return get_lexer_by_name(lang.strip(), stripnl=False, ensurenl=False)
        except ClassNotFound:
            logger.debug("No lexer for %r, using plain text", lang)
            return TextLexer(stripnl=False, ensurenl=False)

    def _style_for(self, ttype: _TokenType) -> Style:
        cached = self._token_styles.get(ttype)
        if cached is not None:
            return cached
        token_style = self._style.style_for_token(ttype)
        style = Style(
            fg=Rgb.from_hex(token_style["color"]) if token_style.get("color") else None,
            bg=Rgb.from_hex(token_style["bgcolor"]) if token_style.get("bgcolor") else None,
            bold=True if token_style.get("bold") else None,
            italic=True if token_style.get("italic") else None,
            underline=True if token_style.get("underline") else None,
        )
        self._token_styles[ttype] = style
        return style
