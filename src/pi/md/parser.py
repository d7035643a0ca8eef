"""markdown-it-py adapter -- turns markdown source into renderer events.

markdown-it-py produces a flat token list with ``*_open`` / ``*_close``
pairs for blocks and an ``inline`` token whose ``children`` hold the span
tokens.  The walker below maps both levels onto the event vocabulary in
``pi.md.events``:

- Tight-list paragraphs (``hidden`` tokens) produce no paragraph events.
- ``[ ]`` / ``[x]`` at the start of a list item marks a task item.
- ``$...$`` / ``$$...$$`` come from the ``dollarmath`` plugin.
- ``[[target|label]]`` wiki links come from a small inline rule.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterator

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token
from mdit_py_plugins.dollarmath import dollarmath_plugin

from pi.md.events import (
    Alignment,
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
    TableCellDetail,
    TableDetail,
    TaskState,
    Text,
    UnorderedListDetail,
    WikiLinkDetail,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# ParserFlags
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ParserFlags:
    """Markdown dialect switches."""

    tables: bool = False
    strikethrough: bool = False
    tasklists: bool = False
    permissive_autolinks: bool = False
    latex_math: bool = False
    wikilinks: bool = False
    html: bool = True

    @classmethod
    def commonmark(cls) -> ParserFlags:
        return cls()

    @classmethod
    def github(cls) -> ParserFlags:
        return cls(tables=True, strikethrough=True, tasklists=True, permissive_autolinks=True)


# ---------------------------------------------------------------------------
# Wiki links
# ---------------------------------------------------------------------------

_WIKILINK_RE = re.compile(r"\[\[([^\[\]|\n]+)(?:\|([^\[\]\n]*))?\]\]")


def _wikilink_rule(state: StateInline, silent: bool) -> bool:
    if not state.src.startswith("[[", state.pos):
        return False
    m = _WIKILINK_RE.match(state.src, state.pos)
    if m is None or not m.group(1).strip():
        return False
    if not silent:
        token = state.push("wikilink", "", 0)
        token.meta = {"target": m.group(1).strip()}
        token.content = (m.group(2) or "").strip()
    state.pos = m.end()
    return True


def wikilink_plugin(md: MarkdownIt) -> None:
    """Parse ``[[target]]`` and ``[[target|label]]`` into ``wikilink`` tokens."""
    md.inline.ruler.before("link", "wikilink", _wikilink_rule)


# ---------------------------------------------------------------------------
# Parser construction (cached per flag set)
# ---------------------------------------------------------------------------

_parsers: dict[ParserFlags, MarkdownIt] = {}


def build_parser(flags: ParserFlags) -> MarkdownIt:
    cached = _parsers.get(flags)
    if cached is not None:
        return cached

    md = MarkdownIt("commonmark", {"html": flags.html, "linkify": flags.permissive_autolinks})
    if flags.tables:
        md.enable("table")
    if flags.strikethrough:
        md.enable("strikethrough")
    if flags.permissive_autolinks:
        md.enable("linkify")
    if flags.latex_math:
        md.use(dollarmath_plugin, allow_labels=False, allow_space=True, double_inline=True)
    if flags.wikilinks:
        md.use(wikilink_plugin)

    _parsers[flags] = md
    return md


def parse_events(source: str, flags: ParserFlags | None = None) -> Iterator[Event]:
    """Parse *source* and yield the document as a stream of events."""
    flags = flags or ParserFlags.github()
    tokens = build_parser(flags).parse(source)
    logger.debug("Parsed %d block tokens", len(tokens))

    yield EnterBlock("document")
    yield from _block_events(tokens, flags)
    yield LeaveBlock("document")


# ---------------------------------------------------------------------------
# Block-level tokens
# ---------------------------------------------------------------------------

_TASK_RE = re.compile(r"\[([ xX])\](?:[ \t]+|$)")

_SIMPLE_BLOCKS = {
    "blockquote": "quote",
    "thead": "table_head",
    "tbody": "table_body",
    "tr": "table_row",
}


def _block_events(tokens: list[Token], flags: ParserFlags) -> Iterator[Event]:
    for i, tok in enumerate(tokens):
        t = tok.type

        if t == "inline":
            yield from _inline_events(tok.children or [])
            continue

        if t.endswith("_open") and t[:-5] in _SIMPLE_BLOCKS:
            yield EnterBlock(_SIMPLE_BLOCKS[t[:-5]])
            continue
        if t.endswith("_close") and t[:-6] in _SIMPLE_BLOCKS:
            yield LeaveBlock(_SIMPLE_BLOCKS[t[:-6]])
            continue

        match t:
            case "paragraph_open":
                if not tok.hidden:
                    yield EnterBlock("paragraph")
            case "paragraph_close":
                if not tok.hidden:
                    yield LeaveBlock("paragraph")
            case "heading_open":
                yield EnterBlock("heading", HeadingDetail(int(tok.tag[1:])))
            case "heading_close":
                yield LeaveBlock("heading")
            case "bullet_list_open":
                yield EnterBlock(
                    "unordered_list",
                    UnorderedListDetail(is_tight=_is_tight(tokens, i), mark=tok.markup or "-"),
                )
            case "bullet_list_close":
                yield LeaveBlock("unordered_list")
            case "ordered_list_open":
                yield EnterBlock(
                    "ordered_list",
                    OrderedListDetail(
                        start=int(tok.attrGet("start") or 1),
                        is_tight=_is_tight(tokens, i),
                        delimiter=tok.markup or ".",
                    ),
                )
            case "ordered_list_close":
                yield LeaveBlock("ordered_list")
            case "list_item_open":
                state = _take_task_marker(tokens, i) if flags.tasklists else "not_task"
                yield EnterBlock("list_item", ListItemDetail(state))
            case "list_item_close":
                yield LeaveBlock("list_item")
            case "hr":
                yield EnterBlock("horizontal_rule")
                yield LeaveBlock("horizontal_rule")
            case "fence" | "code_block":
                info = tok.info.strip() if t == "fence" else ""
                lang = info.split(maxsplit=1)[0] if info else ""
                fence_char = tok.markup[:1] if t == "fence" else ""
                yield EnterBlock("code_block", CodeBlockDetail(info, lang, fence_char))
                if tok.content:
                    yield Text("code", tok.content)
                yield LeaveBlock("code_block")
            case "html_block":
                yield EnterBlock("html_block")
                yield Text("html", tok.content)
                yield LeaveBlock("html_block")
            case "math_block":
                yield from _math_block_events(tok.content)
            case "table_open":
                yield EnterBlock("table", _table_detail(tokens, i))
            case "table_close":
                yield LeaveBlock("table")
            case "th_open":
                yield EnterBlock("table_header_cell", TableCellDetail(_alignment(tok)))
            case "th_close":
                yield LeaveBlock("table_header_cell")
            case "td_open":
                yield EnterBlock("table_cell", TableCellDetail(_alignment(tok)))
            case "td_close":
                yield LeaveBlock("table_cell")
            case _:
                logger.debug("Skipping unsupported block token %s", t)


def _is_tight(tokens: list[Token], start: int) -> bool:
    """A list is tight when its direct paragraphs are hidden."""
    list_level = tokens[start].level
    close_type = tokens[start].type.replace("_open", "_close")
    for tok in tokens[start + 1:]:
        if tok.type == close_type and tok.level == list_level:
            break
        if tok.type == "paragraph_open" and tok.level == list_level + 2:
            return tok.hidden
    return True


def _take_task_marker(tokens: list[Token], item: int) -> TaskState:
    """Detect ``[ ]`` / ``[x]`` at the start of the item and strip it."""
    if item + 2 >= len(tokens):
        return "not_task"
    if tokens[item + 1].type != "paragraph_open" or tokens[item + 2].type != "inline":
        return "not_task"
    children = tokens[item + 2].children or []
    if not children or children[0].type != "text":
        return "not_task"
    first = children[0]
    m = _TASK_RE.match(first.content)
    if m is None:
        return "not_task"
    first.content = first.content[m.end():]
    return "unchecked" if m.group(1) == " " else "checked"


def _table_detail(tokens: list[Token], start: int) -> TableDetail:
    columns = 0
    head_rows = 0
    body_rows = 0
    in_head = False
    for tok in tokens[start + 1:]:
        match tok.type:
            case "table_close":
                break
            case "thead_open":
                in_head = True
            case "thead_close":
                in_head = False
            case "th_open" if head_rows == 0:
                columns += 1
            case "tr_close":
                if in_head:
                    head_rows += 1
                else:
                    body_rows += 1
    return TableDetail(column_count=columns, head_row_count=head_rows, body_row_count=body_rows)


def _alignment(tok: Token) -> Alignment:
    style = str(tok.attrGet("style") or "")
    match style.removeprefix("text-align:").strip():
        case "left":
            return "left"
        case "center":
            return "center"
        case "right":
            return "right"
        case _:
            return "default"


def _math_block_events(content: str) -> Iterator[Event]:
    yield EnterBlock("paragraph")
    yield EnterSpan("latex_math_display")
    for n, line in enumerate(content.strip("\n").split("\n")):
        if n:
            yield Text("hard_break")
        if line:
            yield Text("latex_math", line)
    yield LeaveSpan("latex_math_display")
    yield LeaveBlock("paragraph")


# ---------------------------------------------------------------------------
# Inline tokens
# ---------------------------------------------------------------------------

_SIMPLE_SPANS = {
    "em": "emphasis",
    "strong": "strong",
    "s": "strikethrough",
}


def _inline_events(children: list[Token]) -> Iterator[Event]:
    for tok in children:
        t = tok.type

        if t.endswith("_open") and t[:-5] in _SIMPLE_SPANS:
            yield EnterSpan(_SIMPLE_SPANS[t[:-5]])
            continue
        if t.endswith("_close") and t[:-6] in _SIMPLE_SPANS:
            yield LeaveSpan(_SIMPLE_SPANS[t[:-6]])
            continue

        match t:
            case "text":
                if tok.content:
                    yield Text("normal", tok.content)
            case "text_special":
                yield Text("normal", tok.content)
            case "softbreak":
                yield Text("soft_break", "\n")
            case "hardbreak":
                yield Text("hard_break", "\n")
            case "code_inline":
                yield EnterSpan("code")
                yield Text("code", tok.content)
                yield LeaveSpan("code")
            case "link_open":
                yield EnterSpan(
                    "link",
                    LinkDetail(
                        href=str(tok.attrGet("href") or ""),
                        title=str(tok.attrGet("title") or ""),
                        is_autolink=tok.info == "auto",
                    ),
                )
            case "link_close":
                yield LeaveSpan("link")
            case "image":
                yield EnterSpan(
                    "image",
                    ImageDetail(src=str(tok.attrGet("src") or ""), title=str(tok.attrGet("title") or "")),
                )
                yield from _inline_events(tok.children or [])
                yield LeaveSpan("image")
            case "html_inline":
                yield Text("html", tok.content)
            case "math_inline":
                yield EnterSpan("latex_math")
                yield Text("latex_math", tok.content)
                yield LeaveSpan("latex_math")
            case "math_inline_double":
                yield EnterSpan("latex_math_display")
                yield Text("latex_math", tok.content)
                yield LeaveSpan("latex_math_display")
            case "wikilink":
                target = tok.meta["target"]
                yield EnterSpan("wiki_link", WikiLinkDetail(target))
                yield Text("normal", tok.content or target)
                yield LeaveSpan("wiki_link")
            case _:
                logger.debug("Unsupported inline token %s rendered as text", t)
                if tok.content:
                    yield Text("normal", tok.content)
