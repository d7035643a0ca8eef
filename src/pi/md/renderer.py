"""Event-driven markdown renderer.

``render_events`` feeds a stream of document events (see ``pi.md.events``)
through a per-call state machine and returns a ``RenderedDocument``: styled
terminal lines plus the headings, links and search matches found on the
way.  ``render`` is the convenience wrapper that parses markdown source with
``pi.md.parser`` first.

Inline text accumulates in a line buffer that is flushed (search first, then
word wrap) at block and hard-break boundaries.  Code blocks and tables are
buffered separately and emitted when they close.  Metadata records the
index of the output line it refers to at capture time.

Malformed streams never raise: unbalanced leaves are ignored and unknown
kinds fall through to a generic handler.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable

from pi.md.events import (
    BlockDetail,
    BlockKind,
    CodeBlockDetail,
    EnterBlock,
    EnterSpan,
    Event,
    HeadingDetail,
    ImageDetail,
    LeaveBlock,
    LeaveSpan,
    LinkDetail,
    ListItemDetail,
    OrderedListDetail,
    SpanDetail,
    SpanKind,
    TableCellDetail,
    TableDetail,
    TaskState,
    Text,
    TextKind,
    WikiLinkDetail,
)
from pi.md.highlight import SyntaxHighlighter
from pi.md.options import RenderOptions
from pi.md.parser import parse_events
from pi.md.search import highlight_search
from pi.md.style import Style, merge
from pi.md.table import TableAccumulator
from pi.md.text import Line, StyledRun, runs_width
from pi.md.theme import Theme
from pi.md.utils import TAB_WIDTH, visible_width
from pi.md.wrap import wrap_line

logger = logging.getLogger(__name__)

Highlighter = Callable[[str, str], list[Line]]  # (code, language) -> lines

HR_FALLBACK_WIDTH = 40

# Separator lines are shared so trailing/duplicate separators can be told
# apart from empty lines that belong to the content (e.g. inside code).
_SEPARATOR = Line()

# Blocks that start on a line of their own when they open a list item.
_OWN_LINE_BLOCKS = frozenset(
    {"quote", "unordered_list", "ordered_list", "horizontal_rule", "code_block", "table"}
)


# ---------------------------------------------------------------------------
# Result types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HeadingInfo:
    line: int
    level: int
    text: str


@dataclass(frozen=True)
class LinkInfo:
    line: int
    url: str
    text: str
    is_autolink: bool = False


@dataclass(frozen=True)
class SearchMatch:
    """A search hit: *start*/*end* are character offsets into the logical line."""

    line: int
    start: int
    end: int


@dataclass
class RenderedDocument:
    """Output of one render call."""

    lines: list[Line] = field(default_factory=list)
    headings: list[HeadingInfo] = field(default_factory=list)
    links: list[LinkInfo] = field(default_factory=list)
    search_matches: list[SearchMatch] = field(default_factory=list)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def plain_lines(self) -> list[str]:
        return [line.plain for line in self.lines]


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------


def render(
    source: str,
    theme: Theme | None = None,
    options: RenderOptions | None = None,
) -> RenderedDocument:
    """Parse and render markdown *source*."""
    options = options or RenderOptions()
    highlighter = (
        SyntaxHighlighter(options.effective_syntax_theme) if options.syntax_highlighting else None
    )
    events = parse_events(source, options.parser_flags)
    return render_events(events, theme, options, highlighter)


def render_events(
    events: Iterable[Event],
    theme: Theme | None = None,
    options: RenderOptions | None = None,
    highlighter: Highlighter | None = None,
) -> RenderedDocument:
    """Render an arbitrary event stream."""
    state = _RendererState(theme or Theme(), options or RenderOptions(), highlighter)
    for event in events:
        state.handle(event)
    return state.finish()


def render_default(source: str) -> list[Line]:
    return render(source).lines


def to_text(
    source: str,
    theme: Theme | None = None,
    options: RenderOptions | None = None,
) -> str:
    """Render *source* and return the plain text, one line per output line."""
    return "\n".join(render(source, theme, options).plain_lines)


# ---------------------------------------------------------------------------
# State machine
# ---------------------------------------------------------------------------


@dataclass
class _ListLevel:
    ordered: bool
    counter: int = 1
    delimiter: str = "."
    in_item: bool = False
    task: TaskState = "not_task"
    marker_emitted: bool = False
    marker_width: int = 0


class _RendererState:
    def __init__(self, theme: Theme, options: RenderOptions, highlighter: Highlighter | None) -> None:
        self.theme = theme
        self.options = options
        self.highlighter = highlighter if options.syntax_highlighting else None

        self.doc = RenderedDocument()
        self.lines = self.doc.lines

        self.styles: list[Style] = [theme.text]
        self.spans: list[StyledRun] = []
        self.pending_newline = False

        self.lists: list[_ListLevel] = []
        self.quote_depth = 0

        self.table = TableAccumulator()
        self.in_table = False

        self.heading_level: int | None = None
        self.heading_text: list[str] = []

        self.link: LinkDetail | None = None
        self.link_text: list[str] = []

        self.wiki_target: str | None = None
        self.wiki_text: list[str] = []

        self.image: ImageDetail | None = None
        self.image_alt: list[str] = []

        self.code_lang = ""
        self.code_text: list[str] | None = None

    # -- dispatch -------------------------------------------------------------

    def handle(self, event: Event) -> None:
        match event:
            case EnterBlock(kind=kind, detail=detail):
                self._enter_block(kind, detail)
            case LeaveBlock(kind=kind):
                self._leave_block(kind)
            case EnterSpan(kind=kind, detail=detail):
                self._enter_span(kind, detail)
            case LeaveSpan(kind=kind):
                self._leave_span(kind)
            case Text(kind=kind, content=content):
                self._text(kind, content)
            case _:
                logger.debug("Ignoring unknown event %r", event)

    def finish(self) -> RenderedDocument:
        if self.code_text is not None:
            logger.debug("Unclosed code block at end of stream")
            self._leave_code_block()
        if self.in_table:
            logger.debug("Unclosed table at end of stream")
            self._leave_table()
        self.pending_newline = False
        self._finish_line()
        while self.lines and self.lines[-1] is _SEPARATOR:
            self.lines.pop()
        return self.doc

    # -- blocks ---------------------------------------------------------------

    def _enter_block(self, kind: BlockKind, detail: BlockDetail | None) -> None:
        if self.spans:
            self._finish_line()
        item = self._current_item()
        if kind in _OWN_LINE_BLOCKS and item is not None and not item.marker_emitted:
            self.spans.extend(self._list_marker(item))
            self._finish_line()

        match kind:
            case "heading":
                level = detail.level if isinstance(detail, HeadingDetail) else 1
                self.heading_level = level
                self.heading_text = []
                self._push_style(self.theme.heading_style(level))
                if self.theme.show_heading_markers:
                    self._push_text("#" * level + " ", record=False)
            case "quote":
                self.quote_depth += 1
                self._push_style(self.theme.blockquote)
            case "unordered_list":
                self.lists.append(_ListLevel(ordered=False))
            case "ordered_list":
                if isinstance(detail, OrderedListDetail):
                    level = _ListLevel(ordered=True, counter=detail.start, delimiter=detail.delimiter)
                else:
                    level = _ListLevel(ordered=True)
                self.lists.append(level)
            case "list_item":
                if not self.lists:
                    logger.debug("List item outside of a list")
                    return
                level = self.lists[-1]
                level.in_item = True
                level.marker_emitted = False
                level.marker_width = 0
                level.task = detail.task_state if isinstance(detail, ListItemDetail) else "not_task"
            case "horizontal_rule":
                self._horizontal_rule()
            case "code_block":
                lang = detail.lang if isinstance(detail, CodeBlockDetail) else ""
                self.code_lang = lang
                if lang:
                    label = merge(self.styles[-1], self.theme.code_block_info)
                    self._emit_block_line([StyledRun(f"{lang}:", label)])
                self.code_text = []
            case "html_block":
                self._push_style(self.theme.raw_html)
            case "table":
                self.in_table = True
                columns = detail.column_count if isinstance(detail, TableDetail) else 0
                self.table.start(columns)
            case "table_row":
                self.table.start_row()
            case "table_header_cell" | "table_cell":
                alignment = detail.alignment if isinstance(detail, TableCellDetail) else "default"
                self.table.start_cell(alignment)
            case _:
                pass

    def _leave_block(self, kind: BlockKind) -> None:
        match kind:
            case "paragraph":
                self.pending_newline = False
                self._finish_line()
                if self.options.paragraph_space and not self.lists:
                    self._add_blank_line()
            case "heading":
                level = self.heading_level or 1
                self.doc.headings.append(
                    HeadingInfo(len(self.lines), level, "".join(self.heading_text).strip())
                )
                self.heading_level = None
                self.heading_text = []
                self.pending_newline = False
                self._finish_line()
                self._pop_style()
                if self.options.heading_space:
                    self._add_blank_line()
            case "quote":
                self._finish_line()
                self.quote_depth = max(self.quote_depth - 1, 0)
                self._pop_style()
                self._add_blank_line()
            case "unordered_list" | "ordered_list":
                self._finish_line()
                if not self.lists:
                    logger.debug("Unbalanced list leave ignored")
                    return
                self.lists.pop()
                if not self.lists and self.options.list_space:
                    self._add_blank_line()
            case "list_item":
                self._finish_line()
                item = self._current_item()
                if item is None:
                    return
                if not item.marker_emitted:
                    self.spans.extend(self._list_marker(item))
                    self._finish_line()
                item.counter += 1
                item.in_item = False
            case "horizontal_rule":
                pass
            case "code_block":
                if self.code_text is not None:
                    self._leave_code_block()
            case "html_block":
                self._finish_line()
                self._pop_style()
                if self.options.paragraph_space and not self.lists:
                    self._add_blank_line()
            case "table":
                if self.in_table:
                    self._leave_table()
            case "table_row":
                self.table.end_row()
            case "table_header_cell" | "table_cell":
                self.table.end_cell()
            case _:
                pass

    def _horizontal_rule(self) -> None:
        if self.options.width:
            used = runs_width(self._quote_prefix()) + self._list_content_indent()
            count = max(self.options.width - used, 1)
        else:
            count = HR_FALLBACK_WIDTH
        style = merge(self.styles[-1], self.theme.horizontal_rule)
        self._emit_block_line([StyledRun(self.theme.hr_char * count, style)])
        self._add_blank_line()

    def _leave_code_block(self) -> None:
        code = "".join(self.code_text or [])
        self.code_text = None
        lang = self.code_lang
        self.code_lang = ""

        if code.endswith("\n"):
            code = code[:-1]
        code = code.replace("\t", " " * TAB_WIDTH)

        lines: list[Line] | None = None
        if code and lang and self.highlighter is not None:
            try:
                lines = self.highlighter(code, lang)
            except Exception:
                logger.warning("Syntax highlighting failed for %r, using plain style", lang, exc_info=True)
                lines = None
        if lines is None and code:
            style = merge(self.styles[-1], self.theme.code_block)
            lines = [Line.raw(text, style) for text in code.split("\n")]

        for line in lines or []:
            self._emit_block_line(list(line.runs))
        if self.options.code_block_space:
            self._add_blank_line()

    def _leave_table(self) -> None:
        self.in_table = False
        for line in self.table.render(self.theme):
            self._emit_block_line(list(line.runs))
        self._add_blank_line()

    # -- spans ----------------------------------------------------------------

    def _enter_span(self, kind: SpanKind, detail: SpanDetail | None) -> None:
        theme = self.theme
        match kind:
            case "emphasis":
                self._push_style(theme.emphasis)
            case "strong":
                self._push_style(theme.strong)
            case "strikethrough":
                self._push_style(theme.strikethrough)
            case "underline":
                self._push_style(theme.underline)
            case "code":
                self._push_style(theme.code_inline)
            case "latex_math" | "latex_math_display":
                self._push_style(theme.latex_math)
            case "link":
                self.link = detail if isinstance(detail, LinkDetail) else LinkDetail(href="")
                self.link_text = []
                self._push_style(theme.link)
            case "image":
                self.image = detail if isinstance(detail, ImageDetail) else ImageDetail(src="")
                self.image_alt = []
                self._push_style(theme.image)
            case "wiki_link":
                self.wiki_target = detail.target if isinstance(detail, WikiLinkDetail) else ""
                self.wiki_text = []
                self._push_style(theme.wiki_link)
            case _:
                self._push_style(Style())

    def _leave_span(self, kind: SpanKind) -> None:
        match kind:
            case "link" if self.link is not None:
                link = self.link
                text = "".join(self.link_text)
                self.link = None
                self.link_text = []
                self.doc.links.append(LinkInfo(len(self.lines), link.href, text, link.is_autolink))
                self._pop_style()
                if self.theme.show_link_urls and link.href and not link.is_autolink:
                    self._push_text(f" ({link.href})", self.theme.link_url, record=False)
            case "image" if self.image is not None:
                image = self.image
                alt = "".join(self.image_alt) or image.title or "image"
                self.image = None
                self.image_alt = []
                self._push_text(f"[{alt}]")
                self._pop_style()
                if image.src:
                    self._push_text(f"({image.src})", self.theme.link_url, record=False)
            case "wiki_link" if self.wiki_target is not None:
                target = self.wiki_target
                text = "".join(self.wiki_text) or target
                self.wiki_target = None
                self.wiki_text = []
                self.doc.links.append(LinkInfo(len(self.lines), target, text, False))
                self._pop_style()
            case _:
                self._pop_style()

    # -- text -----------------------------------------------------------------

    def _text(self, kind: TextKind, content: str) -> None:
        match kind:
            case "hard_break":
                if self.code_text is not None:
                    self.code_text.append("\n")
                elif self.image is not None or self.in_table:
                    self._push_text(" ")
                else:
                    self._finish_line()
                    self.pending_newline = True
            case "soft_break":
                if self.code_text is not None:
                    self.code_text.append("\n")
                else:
                    self._push_text(" ")
            case "entity":
                self._push_text(content, self.theme.html_entity)
            case "html":
                self._push_html(content)
            case "null_char":
                self._push_text("\ufffd")
            case _:
                self._push_text(content)

    def _push_html(self, content: str) -> None:
        if self.code_text is not None or self.in_table or "\n" not in content:
            self._push_text(content, self.theme.raw_html)
            return
        for n, part in enumerate(content.split("\n")):
            if n:
                self._finish_line()
            if part:
                self._push_text(part, self.theme.raw_html)

    def _push_text(self, text: str, style: Style | None = None, *, record: bool = True) -> None:
        if not text:
            return
        if self.code_text is not None:
            self.code_text.append(text)
            return
        if self.image is not None and record:
            self.image_alt.append(text)
            return

        resolved = merge(self.styles[-1], style) if style is not None else self.styles[-1]
        if record:
            if self.heading_level is not None:
                self.heading_text.append(text)
            if self.link is not None:
                self.link_text.append(text)
            if self.wiki_target is not None:
                self.wiki_text.append(text)

        run = StyledRun(text, resolved)
        if self.in_table:
            self.table.push_run(run)
            return
        if not self.spans:
            self._seed_line()
        self.spans.append(run)

    # -- style stack ----------------------------------------------------------

    def _push_style(self, style: Style) -> None:
        self.styles.append(merge(self.styles[-1], style))

    def _pop_style(self) -> None:
        if len(self.styles) > 1:
            self.styles.pop()
        else:
            logger.debug("Style stack underflow ignored")

    # -- lists and quotes -----------------------------------------------------

    def _current_item(self) -> _ListLevel | None:
        if self.lists and self.lists[-1].in_item:
            return self.lists[-1]
        return None

    def _list_marker(self, item: _ListLevel) -> list[StyledRun]:
        theme = self.theme
        if item.task == "checked":
            text, style = f"{theme.task_checked_char} ", theme.task_checked
        elif item.task == "unchecked":
            text, style = f"{theme.task_unchecked_char} ", theme.task_unchecked
        elif item.ordered:
            text, style = f"{item.counter}{item.delimiter} ", theme.list_number
        else:
            text, style = f"{theme.bullet_char} ", theme.list_bullet

        item.marker_emitted = True
        item.marker_width = visible_width(text)
        runs: list[StyledRun] = []
        indent = (len(self.lists) - 1) * theme.list_indent
        if indent:
            runs.append(StyledRun(" " * indent))
        runs.append(StyledRun(text, merge(self.styles[-1], style)))
        return runs

    def _list_content_indent(self) -> int:
        if not self.lists:
            return 0
        return (len(self.lists) - 1) * self.theme.list_indent + self.lists[-1].marker_width

    def _seed_line(self) -> None:
        """Start a fresh line inside a list item with its marker or indentation."""
        item = self._current_item()
        if item is not None and not item.marker_emitted:
            self.spans.extend(self._list_marker(item))
            return
        indent = self._list_content_indent()
        if indent:
            self.spans.append(StyledRun(" " * indent))

    def _quote_prefix(self) -> list[StyledRun]:
        if not self.quote_depth:
            return []
        return [StyledRun(self.theme.blockquote_prefix * self.quote_depth, self.theme.blockquote_marker)]

    # -- line output ----------------------------------------------------------

    def _finish_line(self) -> None:
        if self.in_table or self.code_text is not None:
            return
        if not self.spans and not self.pending_newline:
            return
        runs, self.spans = self.spans, []
        self.pending_newline = False
        if not runs:
            self.lines.append(Line.from_runs(self._quote_prefix()))
            return
        self._emit(runs, self._list_content_indent())

    def _add_blank_line(self) -> None:
        self._finish_line()
        if self.lines and self.lines[-1] is not _SEPARATOR:
            self.lines.append(_SEPARATOR)

    def _emit_block_line(self, runs: list[StyledRun]) -> None:
        """Emit a pre-laid-out line (code, table, rule) without wrapping."""
        indent = self._list_content_indent()
        if indent:
            runs = [StyledRun(" " * indent), *runs]
        self._emit(runs, wrap=False)

    def _emit(self, runs: list[StyledRun], indent: int = 0, *, wrap: bool = True) -> None:
        prefix = self._quote_prefix()
        runs = prefix + runs

        needle = self.options.search_pattern
        if needle:
            runs, matches = highlight_search(runs, needle, self.options.search_highlight_style)
            line_index = len(self.lines)
            self.doc.search_matches.extend(SearchMatch(line_index, start, end) for start, end in matches)

        if not wrap or not self.options.width:
            self.lines.append(Line.from_runs(runs))
            return

        pad = runs_width(prefix) + indent
        for n, line in enumerate(wrap_line(runs, self.options.width, pad)):
            if n and prefix:
                rest = line.runs[1:] if pad else line.runs
                lead = [StyledRun(" " * indent)] if indent else []
                line = Line.from_runs([*prefix, *lead, *rest])
            self.lines.append(line)
