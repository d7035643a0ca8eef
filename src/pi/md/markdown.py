"""Markdown component -- markdown text in, painted and padded terminal lines out.

The component owns a text, a theme and render options, and keeps the last
rendering keyed by (text, width).  Changing the theme or options, or calling
``invalidate``, drops it; the next ``render`` redoes the whole document.
"""

from __future__ import annotations

from pi.md.ansi import paint_lines
from pi.md.options import RenderOptions
from pi.md.renderer import RenderedDocument, render
from pi.md.theme import Theme
from pi.md.utils import visible_width


class Markdown:
    """Renders a markdown string to a list of terminal lines.

    Every output line is exactly *width* columns: ``padding_x`` blank columns
    on the left, content wrapped to ``width - 2 * padding_x``, and spaces on
    the right.  ``padding_y`` blank lines go above and below.
    """

    def __init__(
        self,
        text: str = "",
        *,
        padding_x: int = 1,
        padding_y: int = 0,
        theme: Theme | None = None,
        options: RenderOptions | None = None,
        color: bool = True,
    ) -> None:
        self._text = text
        self._padding_x = max(padding_x, 0)
        self._padding_y = max(padding_y, 0)
        self._theme = theme or Theme()
        self._options = options or RenderOptions()
        self._color = color

        self._cache_key: tuple[str, int] | None = None
        self._lines: list[str] = []
        self._document: RenderedDocument | None = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def document(self) -> RenderedDocument | None:
        """Headings, links and matches from the last ``render``; None when stale."""
        return self._document

    def set_text(self, text: str) -> None:
        if text != self._text:
            self._text = text
            self.invalidate()

    def set_theme(self, theme: Theme) -> None:
        self._theme = theme
        self.invalidate()

    def set_options(self, options: RenderOptions) -> None:
        self._options = options
        self.invalidate()

    def invalidate(self) -> None:
        self._cache_key = None
        self._document = None

    def render(self, width: int) -> list[str]:
        key = (self._text, width)
        if key != self._cache_key:
            self._lines = self._layout(width)
            self._cache_key = key
        return self._lines

    def _layout(self, width: int) -> list[str]:
        if not self._text.strip():
            self._document = RenderedDocument()
            return []

        inner = max(1, width - 2 * self._padding_x)
        self._document = render(self._text, self._theme, self._options.with_width(inner))

        margin = " " * self._padding_x
        blank = [" " * width] * self._padding_y
        body = []
        for painted in paint_lines(self._document.lines, self._color):
            line = margin + painted
            body.append(line + " " * max(0, width - visible_width(line)))
        return [*blank, *body, *blank]
