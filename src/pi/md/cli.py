"""CLI entry point for pi-md. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import shutil
from dataclasses import replace

import click

from pi.md.theme import THEME_NAMES

logger = logging.getLogger(__name__)


def _terminal_width() -> int:
    return shutil.get_terminal_size(fallback=(80, 24)).columns


@click.command()
@click.argument("file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("-w", "--width", type=int, default=None, help="Wrap width (default: terminal width, 0 = no wrap)")
@click.option(
    "-t",
    "--theme",
    "theme_name",
    type=click.Choice(THEME_NAMES, case_sensitive=False),
    default="default",
    help="Colour theme",
)
@click.option("-s", "--search", default=None, help="Highlight case-insensitive matches")
@click.option("--syntax-theme", default=None, help="Pygments style for code blocks (default: monokai)")
@click.option("--no-highlight", is_flag=True, help="Disable syntax highlighting")
@click.option("--commonmark", is_flag=True, help="Plain CommonMark, no GitHub extensions")
@click.option("--math/--no-math", default=False, help="Parse $inline$ and $$display$$ math")
@click.option("--wikilinks/--no-wikilinks", default=False, help="Parse [[target|label]] links")
@click.option("--show-urls", is_flag=True, help="Print link targets after link text")
@click.option("--outline", is_flag=True, help="Print the heading outline instead of the document")
@click.option("--links", "list_links", is_flag=True, help="Print the links instead of the document")
@click.option("--color/--no-color", default=None, help="Force or disable ANSI colours (default: auto)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(
    file,
    width,
    theme_name,
    search,
    syntax_theme,
    no_highlight,
    commonmark,
    math,
    wikilinks,
    show_urls,
    outline,
    list_links,
    color,
    verbose,
):
    """Render a markdown FILE (or stdin) to the terminal."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from pi.md.ansi import paint_line
    from pi.md.options import RenderOptions
    from pi.md.parser import ParserFlags
    from pi.md.renderer import render
    from pi.md.theme import Theme

    flags = ParserFlags.commonmark() if commonmark else ParserFlags.github()
    if math or wikilinks:
        flags = replace(flags, latex_math=math, wikilinks=wikilinks)

    try:
        theme = Theme.by_name(theme_name)
        if show_urls:
            theme = theme.with_link_urls(True)
        options = RenderOptions(
            width=_terminal_width() if width is None else width,
            parser_flags=flags,
            search_pattern=search or None,
            syntax_highlighting=not no_highlight,
            syntax_theme=syntax_theme,
        )
        source = file.read()
        document = render(source, theme, options)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc

    logger.debug("Rendered %d lines", document.line_count)

    if outline:
        for heading in document.headings:
            click.echo(f"{'  ' * (heading.level - 1)}{heading.text}  (line {heading.line + 1})")
        return

    if list_links:
        for link in document.links:
            click.echo(f"{link.line + 1}: {link.text} <{link.url}>")
        return

    for line in document.lines:
        click.echo(paint_line(line), color=color)

    if search:
        click.echo(f"{len(document.search_matches)} match(es) for {search!r}", err=True)


if __name__ == "__main__":
    main()
