"""Tests for pi.md.wrap -- word wrapping of styled runs."""

from __future__ import annotations

from pi.md.style import Style
from pi.md.text import Line, StyledRun
from pi.md.wrap import wrap_line

BOLD = Style(bold=True)
ITALIC = Style(italic=True)


def _wrap(text: str, width: int, indent: int = 0) -> list[str]:
    return [line.plain for line in wrap_line([StyledRun(text)], width, indent)]


# ---------------------------------------------------------------------------
# Basic behaviour
# ---------------------------------------------------------------------------


class TestWrapBasics:
    """Greedy packing at whitespace."""

    def test_zero_width_disables_wrapping(self) -> None:
        runs = [StyledRun("a very long line that would wrap", BOLD)]
        assert wrap_line(runs, 0) == [Line.from_runs(runs)]

    def test_empty_input_gives_one_empty_line(self) -> None:
        assert wrap_line([], 10) == [Line()]

    def test_short_text_is_untouched(self) -> None:
        assert _wrap("hello", 10) == ["hello"]

    def test_breaks_at_space(self) -> None:
        assert _wrap("hello world", 5) == ["hello", "world"]

    def test_breaks_at_last_fitting_space(self) -> None:
        assert _wrap("aaa bbb ccc", 7) == ["aaa bbb", "ccc"]

    def test_exact_fit_stays_on_one_line(self) -> None:
        assert _wrap("abc def", 7) == ["abc def"]

    def test_no_break_space_is_not_a_break(self) -> None:
        lines = _wrap("aa\u00a0bb cc", 4)
        assert lines == ["aa\u00a0b", "b cc"]


# ---------------------------------------------------------------------------
# Indentation and long tokens
# ---------------------------------------------------------------------------


class TestWrapIndentAndOverflow:
    def test_continuation_lines_are_indented(self) -> None:
        assert _wrap("aaa bbb ccc", 7, indent=2) == ["aaa bbb", "  ccc"]

    def test_leading_space_trimmed_on_continuation(self) -> None:
        lines = _wrap("one   two", 4)
        assert lines[1] == "two"

    def test_long_token_is_split_at_cluster_boundary(self) -> None:
        assert _wrap("abcdefghij", 4) == ["abcd", "efgh", "ij"]

    def test_wide_characters_never_split(self) -> None:
        assert _wrap("你好世界", 4) == ["你好", "世界"]

    def test_wide_character_wider_than_width_overflows_alone(self) -> None:
        lines = wrap_line([StyledRun("你好")], 1)
        assert [line.plain for line in lines] == ["你", "好"]

    def test_indent_wider_than_width_still_progresses(self) -> None:
        lines = _wrap("abc", 2, indent=5)
        assert "".join(line.strip() for line in lines) == "abc"
        assert lines[0] == "ab"

    def test_width_bound_holds(self) -> None:
        text = "The quick brown fox jumps over the lazy dog and keeps on running far away"
        for width in (5, 8, 13, 21):
            for line in wrap_line([StyledRun(text)], width):
                assert line.width <= width


# ---------------------------------------------------------------------------
# Styles and invariants
# ---------------------------------------------------------------------------


class TestWrapStyles:
    def test_styles_survive_wrapping(self) -> None:
        runs = [StyledRun("hello ", BOLD), StyledRun("world", ITALIC)]
        lines = wrap_line(runs, 8)
        assert [line.plain for line in lines] == ["hello ", "world"]
        assert lines[0].runs[0].style == BOLD
        assert lines[1].runs[0].style == ITALIC

    def test_word_moves_down_whole_after_space(self) -> None:
        runs = [StyledRun("hi ", BOLD), StyledRun("there", ITALIC)]
        lines = wrap_line(runs, 5)
        assert [line.plain for line in lines] == ["hi ", "there"]

    def test_word_spanning_runs_splits_at_run_boundary(self) -> None:
        runs = [StyledRun("ab "), StyledRun("cd", BOLD), StyledRun("ef")]
        assert [line.plain for line in wrap_line(runs, 5)] == ["ab cd", "ef"]

    def test_text_is_preserved(self) -> None:
        text = "Lorem ipsum dolor sit amet, consectetur adipiscing elit"
        runs = [StyledRun(text[:20], BOLD), StyledRun(text[20:], ITALIC)]
        joined = "".join(line.plain for line in wrap_line(runs, 11))
        assert joined.replace(" ", "") == text.replace(" ", "")

    def test_rewrapping_is_idempotent(self) -> None:
        text = "alpha beta gamma delta epsilon zeta eta theta iota kappa"
        for width in (6, 10, 17):
            for line in wrap_line([StyledRun(text, BOLD)], width):
                assert wrap_line(list(line.runs), width) == [line]
