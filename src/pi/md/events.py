"""Document event vocabulary consumed by the renderer.

A document is a flat stream of events: blocks and spans are opened and
closed in properly nested order, and text arrives in between.  Any producer
may feed the renderer; ``pi.md.parser`` is the markdown-it-py backed one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

# --- Kinds ---

BlockKind = Literal[
    "document",
    "quote",
    "unordered_list",
    "ordered_list",
    "list_item",
    "horizontal_rule",
    "heading",
    "code_block",
    "html_block",
    "paragraph",
    "table",
    "table_head",
    "table_body",
    "table_row",
    "table_header_cell",
    "table_cell",
]

SpanKind = Literal[
    "emphasis",
    "strong",
    "link",
    "image",
    "code",
    "strikethrough",
    "latex_math",
    "latex_math_display",
    "wiki_link",
    "underline",
]

TextKind = Literal[
    "normal",
    "hard_break",
    "soft_break",
    "entity",
    "code",
    "html",
    "latex_math",
    "null_char",
]

Alignment = Literal["default", "left", "center", "right"]
TaskState = Literal["not_task", "unchecked", "checked"]


# --- Block details ---


@dataclass(frozen=True)
class HeadingDetail:
    level: int


@dataclass(frozen=True)
class UnorderedListDetail:
    is_tight: bool = True
    mark: str = "-"


@dataclass(frozen=True)
class OrderedListDetail:
    start: int = 1
    is_tight: bool = True
    delimiter: str = "."


@dataclass(frozen=True)
class ListItemDetail:
    task_state: TaskState = "not_task"


@dataclass(frozen=True)
class CodeBlockDetail:
    info: str = ""
    lang: str = ""
    fence_char: str = ""


@dataclass(frozen=True)
class TableDetail:
    column_count: int
    head_row_count: int = 1
    body_row_count: int = 0


@dataclass(frozen=True)
class TableCellDetail:
    alignment: Alignment = "default"


BlockDetail = (
    HeadingDetail
    | UnorderedListDetail
    | OrderedListDetail
    | ListItemDetail
    | CodeBlockDetail
    | TableDetail
    | TableCellDetail
)


# --- Span details ---


@dataclass(frozen=True)
class LinkDetail:
    href: str
    title: str = ""
    is_autolink: bool = False


@dataclass(frozen=True)
class ImageDetail:
    src: str
    title: str = ""


@dataclass(frozen=True)
class WikiLinkDetail:
    target: str


SpanDetail = LinkDetail | ImageDetail | WikiLinkDetail


# --- Events ---


@dataclass(frozen=True)
class EnterBlock:
    kind: BlockKind
    detail: BlockDetail | None = None
    type: Literal["enter_block"] = "enter_block"


@dataclass(frozen=True)
class LeaveBlock:
    kind: BlockKind
    type: Literal["leave_block"] = "leave_block"


@dataclass(frozen=True)
class EnterSpan:
    kind: SpanKind
    detail: SpanDetail | None = None
    type: Literal["enter_span"] = "enter_span"


@dataclass(frozen=True)
class LeaveSpan:
    kind: SpanKind
    type: Literal["leave_span"] = "leave_span"


@dataclass(frozen=True)
class Text:
    kind: TextKind
    content: str = ""
    type: Literal["text"] = "text"


Event = EnterBlock | LeaveBlock | EnterSpan | LeaveSpan | Text
