"""Render options -- layout width, spacing, search and highlighting knobs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from pi.md.highlight import DEFAULT_THEME
from pi.md.parser import ParserFlags
from pi.md.style import Style

DEFAULT_SEARCH_STYLE = Style(fg="black", bg="yellow", bold=True)


@dataclass(frozen=True)
class RenderOptions:
    """Options for a single render call.

    ``width`` is the wrap width in terminal columns; 0 disables wrapping.
    The ``*_space`` flags add a blank line after the corresponding block.
    """

    width: int = 0
    parser_flags: ParserFlags = field(default_factory=ParserFlags.github)
    heading_space: bool = True
    paragraph_space: bool = True
    code_block_space: bool = True
    list_space: bool = True
    search_pattern: str | None = None
    search_highlight_style: Style = DEFAULT_SEARCH_STYLE
    syntax_highlighting: bool = True
    syntax_theme: str | None = None

    def __post_init__(self) -> None:
        if self.width < 0:
            raise ValueError(f"width must be >= 0, got {self.width}")

    # -- presets ----------------------------------------------------------------

    @classmethod
    def commonmark(cls) -> RenderOptions:
        return cls(parser_flags=ParserFlags.commonmark())

    @classmethod
    def github(cls) -> RenderOptions:
        return cls(parser_flags=ParserFlags.github())

    # -- builders ---------------------------------------------------------------

    def with_width(self, width: int) -> RenderOptions:
        return replace(self, width=width)

    def with_parser_flags(self, flags: ParserFlags) -> RenderOptions:
        return replace(self, parser_flags=flags)

    def with_search(self, pattern: str) -> RenderOptions:
        return replace(self, search_pattern=pattern)

    def clear_search(self) -> RenderOptions:
        return replace(self, search_pattern=None)

    def with_search_style(self, style: Style) -> RenderOptions:
        return replace(self, search_highlight_style=style)

    def with_syntax_highlighting(self, enabled: bool) -> RenderOptions:
        return replace(self, syntax_highlighting=enabled)

    def with_syntax_theme(self, theme: str) -> RenderOptions:
        return replace(self, syntax_theme=theme)

    @property
    def effective_syntax_theme(self) -> str:
        return self.syntax_theme or DEFAULT_THEME
