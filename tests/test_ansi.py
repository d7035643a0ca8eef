"""Tests for pi.md.ansi -- SGR painting of styled lines."""

from __future__ import annotations

from pi.md.ansi import RESET, paint_line, paint_lines, sgr
from pi.md.style import Rgb, Style
from pi.md.text import Line, StyledRun
from pi.md.utils import strip_ansi


class TestSgr:
    def test_empty_style(self) -> None:
        assert sgr(Style()) == ""

    def test_attributes_then_colours(self) -> None:
        assert sgr(Style(fg="red", bold=True, underline=True)) == "\x1b[1;4;31m"

    def test_bright_and_background(self) -> None:
        assert sgr(Style(fg="light_cyan", bg="yellow")) == "\x1b[96;43m"

    def test_dark_gray_background(self) -> None:
        assert sgr(Style(bg="dark_gray")) == "\x1b[100m"

    def test_rgb(self) -> None:
        assert sgr(Style(fg=Rgb(1, 2, 3), bg=Rgb(4, 5, 6))) == "\x1b[38;2;1;2;3;48;2;4;5;6m"

    def test_false_attributes_are_skipped(self) -> None:
        assert sgr(Style(bold=False, italic=True)) == "\x1b[3m"


class TestPaintLine:
    def test_plain_run_is_unwrapped(self) -> None:
        assert paint_line(Line.raw("hello")) == "hello"

    def test_styled_run_is_reset(self) -> None:
        line = Line.from_runs([StyledRun("a", Style(italic=True)), StyledRun("b")])
        assert paint_line(line) == f"\x1b[3ma{RESET}b"

    def test_color_off_gives_plain_text(self) -> None:
        line = Line.raw("hi", Style(bold=True))
        assert paint_line(line, color=False) == "hi"

    def test_visible_text_is_unchanged(self) -> None:
        line = Line.from_runs([StyledRun("x", Style(fg="red")), StyledRun(" y", Style(bg=Rgb(0, 0, 0)))])
        assert strip_ansi(paint_line(line)) == line.plain

    def test_paint_lines(self) -> None:
        lines = [Line.raw("a"), Line()]
        assert paint_lines(lines) == ["a", ""]
