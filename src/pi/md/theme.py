"""Theme -- the style table for every markdown element kind.

``Theme()`` gives sensible defaults for a dark-on-light-agnostic terminal.
``Theme.plain()``, ``Theme.dark()`` and ``Theme.light()`` are the built-in
presets; ``Theme.by_name()`` looks them up by name (used by the CLI).
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from pi.md.style import Style

THEME_NAMES = ("default", "plain", "dark", "light")


@dataclass(frozen=True)
class Theme:
    """Colour / style theme for the markdown renderer."""

    text: Style = Style()
    emphasis: Style = Style(italic=True)
    strong: Style = Style(bold=True)
    strikethrough: Style = Style(crossed_out=True)
    underline: Style = Style(underline=True)
    code_inline: Style = Style(fg="yellow")
    code_block: Style = Style(fg="white")
    code_block_info: Style = Style(fg="dark_gray", italic=True)
    link: Style = Style(fg="cyan", underline=True)
    link_url: Style = Style(fg="dark_gray")
    image: Style = Style(fg="magenta")
    heading1: Style = Style(fg="cyan", bold=True)
    heading2: Style = Style(fg="green", bold=True)
    heading3: Style = Style(fg="yellow", bold=True)
    heading4: Style = Style(fg="blue", bold=True)
    heading5: Style = Style(fg="magenta", bold=True)
    heading6: Style = Style(fg="red", bold=True)
    blockquote: Style = Style(fg="gray")
    blockquote_marker: Style = Style(fg="dark_gray")
    horizontal_rule: Style = Style(fg="dark_gray")
    list_bullet: Style = Style(fg="cyan")
    list_number: Style = Style(fg="cyan")
    task_unchecked: Style = Style(fg="dark_gray")
    task_checked: Style = Style(fg="green")
    table_header: Style = Style(bold=True)
    table_cell: Style = Style()
    table_border: Style = Style(fg="dark_gray")
    html_entity: Style = Style(fg="yellow")
    raw_html: Style = Style(fg="dark_gray")
    latex_math: Style = Style(fg="magenta")
    wiki_link: Style = Style(fg="blue", underline=True)

    # -- rendering knobs ------------------------------------------------------

    bullet_char: str = "•"
    hr_char: str = "─"
    blockquote_prefix: str = "│ "
    show_link_urls: bool = False
    show_heading_markers: bool = True
    list_indent: int = 2
    task_unchecked_char: str = "☐"
    task_checked_char: str = "☑"

    # -- presets --------------------------------------------------------------

    @classmethod
    def default(cls) -> Theme:
        return cls()

    @classmethod
    def plain(cls) -> Theme:
        """No colours, ASCII markers; for dumb terminals and piping."""
        return cls(
            code_inline=Style(),
            code_block=Style(),
            code_block_info=Style(dim=True),
            link=Style(underline=True),
            link_url=Style(dim=True),
            image=Style(),
            heading1=Style(bold=True),
            heading2=Style(bold=True),
            heading3=Style(bold=True),
            heading4=Style(bold=True),
            heading5=Style(bold=True),
            heading6=Style(bold=True),
            blockquote=Style(dim=True),
            blockquote_marker=Style(),
            horizontal_rule=Style(),
            list_bullet=Style(),
            list_number=Style(),
            task_unchecked=Style(),
            task_checked=Style(),
            table_border=Style(),
            html_entity=Style(),
            raw_html=Style(dim=True),
            latex_math=Style(),
            wiki_link=Style(underline=True),
            bullet_char="*",
            hr_char="-",
            blockquote_prefix="> ",
            show_link_urls=True,
            task_unchecked_char=" ",
            task_checked_char="x",
        )

    @classmethod
    def dark(cls) -> Theme:
        """Bright foregrounds for dark terminal backgrounds."""
        return cls(
            text=Style(fg="white"),
            emphasis=Style(fg="white", italic=True),
            strong=Style(fg="white", bold=True),
            strikethrough=Style(fg="gray", crossed_out=True),
            underline=Style(fg="white", underline=True),
            code_inline=Style(fg="light_yellow", bg="dark_gray"),
            code_block=Style(fg="light_yellow"),
            code_block_info=Style(fg="gray", italic=True),
            link=Style(fg="light_cyan", underline=True),
            link_url=Style(fg="gray"),
            image=Style(fg="light_magenta"),
            heading1=Style(fg="light_cyan", bold=True),
            heading2=Style(fg="light_green", bold=True),
            heading3=Style(fg="light_yellow", bold=True),
            heading4=Style(fg="light_blue", bold=True),
            heading5=Style(fg="light_magenta", bold=True),
            heading6=Style(fg="light_red", bold=True),
            list_bullet=Style(fg="light_cyan"),
            list_number=Style(fg="light_cyan"),
            task_unchecked=Style(fg="gray"),
            task_checked=Style(fg="light_green"),
            table_header=Style(fg="white", bold=True),
            table_cell=Style(fg="white"),
            html_entity=Style(fg="light_yellow"),
            raw_html=Style(fg="gray"),
            latex_math=Style(fg="light_magenta"),
            wiki_link=Style(fg="light_blue", underline=True),
        )

    @classmethod
    def light(cls) -> Theme:
        """Dark foregrounds for light terminal backgrounds."""
        return cls(
            text=Style(fg="black"),
            emphasis=Style(fg="black", italic=True),
            strong=Style(fg="black", bold=True),
            strikethrough=Style(fg="dark_gray", crossed_out=True),
            underline=Style(fg="black", underline=True),
            code_inline=Style(fg="red"),
            code_block=Style(fg="black"),
            link=Style(fg="blue", underline=True),
            heading1=Style(fg="blue", bold=True),
            heading2=Style(fg="green", bold=True),
            heading3=Style(fg="magenta", bold=True),
            heading4=Style(fg="cyan", bold=True),
            heading5=Style(fg="red", bold=True),
            heading6=Style(fg="yellow", bold=True),
            blockquote=Style(fg="dark_gray"),
            blockquote_marker=Style(fg="gray"),
            horizontal_rule=Style(fg="gray"),
            list_bullet=Style(fg="blue"),
            list_number=Style(fg="blue"),
            table_header=Style(fg="black", bold=True),
            table_cell=Style(fg="black"),
            table_border=Style(fg="gray"),
            html_entity=Style(fg="red"),
        )

    @classmethod
    def by_name(cls, name: str) -> Theme:
        presets = {
            "default": cls.default,
            "plain": cls.plain,
            "dark": cls.dark,
            "light": cls.light,
        }
        factory = presets.get(name.lower())
        if factory is None:
            raise ValueError(f"Unknown theme {name!r} (expected one of: {', '.join(THEME_NAMES)})")
        return factory()

    # -- lookups / builders ---------------------------------------------------

    def heading_style(self, level: int) -> Style:
        """Style for heading *level*; out-of-range levels clamp to 1..6."""
        level = min(max(level, 1), 6)
        return (
            self.heading1,
            self.heading2,
            self.heading3,
            self.heading4,
            self.heading5,
            self.heading6,
        )[level - 1]

    def with_link_urls(self, show: bool) -> Theme:
        return replace(self, show_link_urls=show)

    def with_bullet(self, char: str) -> Theme:
        return replace(self, bullet_char=char)

    def with_list_indent(self, indent: int) -> Theme:
        return replace(self, list_indent=max(indent, 0))


def style_for_heading(theme: Theme, level: int) -> Style:
    return theme.heading_style(level)
