"""Tests for the pi-md command line."""

from __future__ import annotations

from pathlib import Path

from click.testing import CliRunner

from pi.md.cli import main


def _invoke(*args: str, input: str | None = None):
    return CliRunner().invoke(main, list(args), input=input)


class TestCli:
    def test_renders_stdin(self) -> None:
        result = _invoke("-w", "40", input="# Title\n\n- a\n- b\n")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["# Title", "", "• a", "• b"]

    def test_renders_file(self, tmp_path: Path) -> None:
        path = tmp_path / "doc.md"
        path.write_text("Hello *world*\n", encoding="utf-8")
        result = _invoke("-w", "0", str(path))
        assert result.exit_code == 0
        assert result.output == "Hello world\n"

    def test_color_is_stripped_when_not_a_tty(self) -> None:
        result = _invoke("-w", "0", input="**bold**")
        assert "\x1b[" not in result.output

    def test_force_color(self) -> None:
        result = _invoke("-w", "0", "--color", input="**bold**")
        assert "\x1b[1mbold\x1b[0m" in result.output

    def test_plain_theme(self) -> None:
        result = _invoke("-w", "0", "-t", "plain", input="- a")
        assert result.output == "* a\n"

    def test_unknown_theme_is_usage_error(self) -> None:
        result = _invoke("-t", "neon", input="x")
        assert result.exit_code == 2

    def test_negative_width_is_usage_error(self) -> None:
        result = _invoke("-w", "-1", input="x")
        assert result.exit_code == 2
        assert "width must be >= 0" in result.output

    def test_unknown_syntax_theme_is_usage_error(self) -> None:
        result = _invoke("--syntax-theme", "nope", input="x")
        assert result.exit_code == 2
        assert "Unknown syntax theme" in result.output

    def test_outline(self) -> None:
        result = _invoke("--outline", input="# A\n\n## B\n")
        assert result.exit_code == 0
        assert result.output.splitlines() == ["A  (line 1)", "  B  (line 3)"]

    def test_links(self) -> None:
        result = _invoke("--links", input="Intro\n\n[home](https://example.com)\n")
        assert result.output.splitlines() == ["3: home <https://example.com>"]

    def test_show_urls(self) -> None:
        result = _invoke("-w", "0", "--show-urls", input="[home](https://example.com)")
        assert result.output == "home (https://example.com)\n"

    def test_search_reports_count(self) -> None:
        result = _invoke("-w", "0", "-s", "hello", input="hello Hello")
        assert result.exit_code == 0
        assert "2 match(es) for 'hello'" in result.output

    def test_commonmark_disables_tables(self) -> None:
        result = _invoke("-w", "0", "--commonmark", input="| a |\n|---|\n| b |")
        assert "┌" not in result.output

    def test_wikilinks_flag(self) -> None:
        result = _invoke("--links", "--wikilinks", input="[[Home|start]]")
        assert result.output.splitlines() == ["1: start <Home>"]

    def test_math_flag(self) -> None:
        result = _invoke("-w", "0", "--math", input="$x$")
        assert result.output == "x\n"
