"""pi-md: Event-driven markdown rendering to styled terminal lines."""

# Painting
from pi.md.ansi import paint_line, paint_lines

# Events
from pi.md.events import (
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
    Text,
    UnorderedListDetail,
    WikiLinkDetail,
)

# Highlighting
from pi.md.highlight import SyntaxHighlighter, available_themes

# Component
from pi.md.markdown import Markdown

# Configuration
from pi.md.options import RenderOptions
from pi.md.parser import ParserFlags, parse_events

# Rendering
from pi.md.renderer import (
    HeadingInfo,
    LinkInfo,
    RenderedDocument,
    SearchMatch,
    render,
    render_default,
    render_events,
    to_text,
)

# Layout primitives
from pi.md.search import highlight_search
from pi.md.style import Rgb, Style, merge
from pi.md.table import TableAccumulator, layout_table
from pi.md.text import Line, StyledRun
from pi.md.theme import Theme, style_for_heading
from pi.md.utils import visible_width
from pi.md.wrap import wrap_line

__all__ = [
    # Painting
    "paint_line",
    "paint_lines",
    # Events
    "CodeBlockDetail",
    "EnterBlock",
    "EnterSpan",
    "Event",
    "HeadingDetail",
    "ImageDetail",
    "LeaveBlock",
    "LeaveSpan",
    "LinkDetail",
    "ListItemDetail",
    "OrderedListDetail",
    "TableCellDetail",
    "TableDetail",
    "Text",
    "UnorderedListDetail",
    "WikiLinkDetail",
    # Highlighting
    "SyntaxHighlighter",
    "available_themes",
    # Component
    "Markdown",
    # Configuration
    "ParserFlags",
    "RenderOptions",
    "parse_events",
    # Rendering
    "HeadingInfo",
    "LinkInfo",
    "RenderedDocument",
    "SearchMatch",
    "render",
    "render_default",
    "render_events",
    "to_text",
    # Layout primitives
    "Line",
    "Rgb",
    "Style",
    "StyledRun",
    "TableAccumulator",
    "Theme",
    "highlight_search",
    "layout_table",
    "merge",
    "style_for_heading",
    "visible_width",
    "wrap_line",
]
