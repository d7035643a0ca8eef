"""Tests for pi.md.search -- match highlighting over styled runs."""

from __future__ import annotations

from pi.md.search import highlight_search
from pi.md.style import Style
from pi.md.text import StyledRun

MATCH = Style(fg="black", bg="yellow", bold=True)


class TestHighlightSearch:
    """Case-insensitive, per-run, left-to-right matching."""

    def test_finds_all_matches_with_offsets(self) -> None:
        runs = [StyledRun("Hello world, hello there!")]
        new_runs, matches = highlight_search(runs, "hello", MATCH)
        assert matches == [(0, 5), (13, 18)]
        assert [run.text for run in new_runs] == ["Hello", " world, ", "hello", " there!"]

    def test_matched_runs_carry_match_style(self) -> None:
        runs = [StyledRun("Hello world, hello there!")]
        new_runs, _ = highlight_search(runs, "hello", MATCH)
        assert new_runs[0].style == MATCH
        assert new_runs[1].style == Style()

    def test_match_style_layers_over_run_style(self) -> None:
        runs = [StyledRun("find me", Style(italic=True, fg="red"))]
        new_runs, _ = highlight_search(runs, "find", Style(bg="yellow"))
        assert new_runs[0].style == Style(fg="red", bg="yellow", italic=True)

    def test_empty_needle_is_identity(self) -> None:
        runs = [StyledRun("abc", Style(bold=True))]
        assert highlight_search(runs, "", MATCH) == (runs, [])

    def test_no_match_leaves_runs_alone(self) -> None:
        runs = [StyledRun("abc"), StyledRun("def")]
        new_runs, matches = highlight_search(runs, "xyz", MATCH)
        assert new_runs == runs
        assert matches == []

    def test_case_insensitive(self) -> None:
        _, matches = highlight_search([StyledRun("aBc ABC abc")], "ABC", MATCH)
        assert matches == [(0, 3), (4, 7), (8, 11)]

    def test_matches_do_not_overlap(self) -> None:
        _, matches = highlight_search([StyledRun("aaaa")], "aa", MATCH)
        assert matches == [(0, 2), (2, 4)]

    def test_needle_is_literal_not_regex(self) -> None:
        _, matches = highlight_search([StyledRun("axb a.b")], "a.b", MATCH)
        assert matches == [(4, 7)]

    def test_offsets_accumulate_across_runs(self) -> None:
        runs = [StyledRun("abc ", Style(bold=True)), StyledRun("xabc", Style(italic=True))]
        new_runs, matches = highlight_search(runs, "abc", MATCH)
        assert matches == [(0, 3), (5, 8)]
        assert new_runs[-1].text == "abc"
        assert new_runs[-1].style == Style(fg="black", bg="yellow", bold=True, italic=True)

    def test_match_split_across_runs_is_not_found(self) -> None:
        runs = [StyledRun("hel", Style(bold=True)), StyledRun("lo world")]
        new_runs, matches = highlight_search(runs, "hello", MATCH)
        assert matches == []
        assert new_runs == runs

    def test_text_is_preserved(self) -> None:
        runs = [StyledRun("one two one"), StyledRun(" three one")]
        new_runs, _ = highlight_search(runs, "one", MATCH)
        assert "".join(run.text for run in new_runs) == "one two one three one"
