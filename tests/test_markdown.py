"""Tests for the Markdown component."""

from __future__ import annotations

import re

from pi.md.markdown import Markdown
from pi.md.options import RenderOptions
from pi.md.theme import Theme
from pi.md.utils import visible_width

_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def _strip_ansi(text: str) -> str:
    """Remove all ANSI escape codes from text."""
    return _ANSI_RE.sub("", text)


def _plain_lines(md_text: str, width: int = 80) -> list[str]:
    """Render markdown and return lines with ANSI stripped for easy assertion."""
    md = Markdown(md_text, padding_x=0, padding_y=0)
    raw_lines = md.render(width)
    return [_strip_ansi(line).rstrip() for line in raw_lines]


def _raw_lines(md_text: str, width: int = 80) -> list[str]:
    """Render markdown and return raw lines (ANSI preserved)."""
    md = Markdown(md_text, padding_x=0, padding_y=0)
    return md.render(width)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestMarkdownRendering:
    """The component paints the renderer's output."""

    def test_heading_text(self) -> None:
        assert _plain_lines("### Sub Section") == ["### Sub Section"]

    def test_heading_has_bold_cyan_ansi(self) -> None:
        joined = "".join(_raw_lines("# Bold Heading"))
        assert "\x1b[1;36m" in joined

    def test_heading_followed_by_blank_line(self) -> None:
        assert _plain_lines("# Heading\n\nParagraph text") == ["# Heading", "", "Paragraph text"]

    def test_list(self) -> None:
        assert _plain_lines("- one\n- two") == ["• one", "• two"]

    def test_empty_text_renders_nothing(self) -> None:
        assert Markdown("").render(40) == []

    def test_whitespace_only_renders_nothing(self) -> None:
        assert Markdown("  \n\n  ").render(40) == []

    def test_color_off(self) -> None:
        md = Markdown("**bold**", padding_x=0, color=False)
        assert md.render(20) == ["bold".ljust(20)]

    def test_theme(self) -> None:
        md = Markdown("- a", padding_x=0, theme=Theme.plain(), color=False)
        assert md.render(10)[0].rstrip() == "* a"

    def test_options_are_used(self) -> None:
        md = Markdown("find me", padding_x=0, options=RenderOptions(search_pattern="find"))
        md.render(20)
        assert md.document is not None
        assert len(md.document.search_matches) == 1


# ---------------------------------------------------------------------------
# Width and padding
# ---------------------------------------------------------------------------


class TestMarkdownPadding:
    def test_lines_fill_width(self) -> None:
        lines = Markdown("Some text\n\nmore", padding_x=1).render(30)
        assert all(visible_width(line) == 30 for line in lines)

    def test_padding_x_indents(self) -> None:
        lines = Markdown("text", padding_x=2, color=False).render(10)
        assert lines == ["  text    "]

    def test_padding_y_adds_blank_lines(self) -> None:
        lines = Markdown("text", padding_x=0, padding_y=1, color=False).render(6)
        assert lines == ["      ", "text  ", "      "]

    def test_wraps_to_content_width(self) -> None:
        lines = Markdown("aaa bbb ccc", padding_x=1, color=False).render(9)
        assert [line.rstrip() for line in lines] == [" aaa bbb", " ccc"]

    def test_tiny_width_still_renders(self) -> None:
        lines = Markdown("ab", padding_x=1, color=False).render(1)
        assert "".join(line.strip() for line in lines) == "ab"


# ---------------------------------------------------------------------------
# Caching
# ---------------------------------------------------------------------------


class TestMarkdownCache:
    def test_same_width_returns_cached_lines(self) -> None:
        md = Markdown("Hello")
        assert md.render(20) is md.render(20)

    def test_width_change_rerenders(self) -> None:
        md = Markdown("Hello")
        first = md.render(20)
        assert md.render(30) is not first

    def test_set_text_invalidates(self) -> None:
        md = Markdown("Hello", padding_x=0, color=False)
        md.render(20)
        md.set_text("World")
        assert md.text == "World"
        assert md.render(20)[0].rstrip() == "World"

    def test_set_same_text_keeps_cache(self) -> None:
        md = Markdown("Hello")
        first = md.render(20)
        md.set_text("Hello")
        assert md.render(20) is first

    def test_set_theme_invalidates(self) -> None:
        md = Markdown("- a", padding_x=0, color=False)
        md.render(10)
        md.set_theme(Theme.plain())
        assert md.render(10)[0].rstrip() == "* a"

    def test_set_options_invalidates(self) -> None:
        md = Markdown("hello", padding_x=0)
        md.render(10)
        md.set_options(RenderOptions(search_pattern="hello"))
        md.render(10)
        assert md.document is not None
        assert md.document.search_matches

    def test_invalidate_clears_document(self) -> None:
        md = Markdown("Hello")
        md.render(20)
        md.invalidate()
        assert md.document is None
