"""Positioned Markdown syntax tree.

Wraps markdown-it-py so that every node zhlint cares about carries absolute
character offsets into the (masked) source text. markdown-it-py reports
block positions as line ranges only, so two things are layered on top:

- Every inline rule is wrapped once to stamp the ``[start, end)`` range it
  consumed (in inline-content coordinates) onto the tokens it pushed.
- Each inline content string is aligned back to its source lines, which
  maps content offsets to absolute offsets through container prefixes
  (``> ``, list indentation, table pipes).

Nodes whose text cannot be aligned exactly are returned without positions
and the extractor skips them.

Node types:
    Blocks: ROOT, CONTAINER, LEAF, FRONT_MATTER, PARAGRAPH, HEADING,
        TABLE_CELL
    Wrappers: EMPHASIS, STRONG, DELETE, LINK, LINK_REFERENCE
    Atoms: INLINE_CODE, BREAK, SOFT_BREAK, IMAGE, IMAGE_REFERENCE,
        FOOTNOTE_REFERENCE, HTML, AUTOLINK
    TEXT: plain text, never positioned

Thread Safety:
The wrapped MarkdownIt instance is built once and only read afterwards.
Parsing creates a fresh state per call and is safe to share.

"""

from __future__ import annotations

import re
from bisect import bisect_right
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from functools import cache

from markdown_it import MarkdownIt
from markdown_it.rules_inline import StateInline
from markdown_it.token import Token
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.footnote import footnote_plugin
from mdit_py_plugins.front_matter import front_matter_plugin

__all__ = [
    "NodeType",
    "SyntaxNode",
    "parse_tree",
]

InlineRule = Callable[[StateInline, bool], bool]

_SPAN = "zhlint_span"
_LABEL_END = "zhlint_label_end"

# Rules that push delimiter text tokens later rewritten to *_open/*_close
_DELIMITER_RULES = frozenset({"emphasis", "strikethrough"})

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class NodeType(Enum):
    """Kinds of positioned syntax nodes."""

    ROOT = "root"
    CONTAINER = "container"
    LEAF = "leaf"
    FRONT_MATTER = "yaml"
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TABLE_CELL = "tableCell"
    EMPHASIS = "emphasis"
    STRONG = "strong"
    DELETE = "delete"
    LINK = "link"
    LINK_REFERENCE = "linkReference"
    INLINE_CODE = "inlineCode"
    BREAK = "break"
    SOFT_BREAK = "softBreak"
    IMAGE = "image"
    IMAGE_REFERENCE = "imageReference"
    FOOTNOTE_REFERENCE = "footnoteReference"
    HTML = "html"
    AUTOLINK = "autolink"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class SyntaxNode:
    """A syntax node with optional absolute offsets.

    For wrapper nodes ``inner_start``/``inner_end`` delimit the content
    between the opening and closing delimiters.
    """

    type: NodeType
    start: int | None = None
    end: int | None = None
    children: tuple[SyntaxNode, ...] = ()
    inner_start: int | None = None
    inner_end: int | None = None

    @property
    def has_position(self) -> bool:
        return self.start is not None and self.end is not None


def parse_tree(text: str) -> SyntaxNode:
    """Parse ``text`` into a positioned syntax tree.

    Args:
        text: Markdown source (usually already masked)

    Returns:
        ROOT node whose descendants carry absolute offsets into ``text``
    """
    tree = SyntaxTreeNode(_markdown().parse(text))
    lines = _Lines(text)
    return SyntaxNode(
        NodeType.ROOT,
        0,
        len(text),
        tuple(_block(child, lines) for child in tree.children),
    )


# =============================================================================
# Parser setup
# =============================================================================


@cache
def _markdown() -> MarkdownIt:
    md = (
        MarkdownIt("commonmark")
        .enable(["table", "strikethrough"])
        .use(front_matter_plugin)
        .use(footnote_plugin)
    )
    for rule in list(md.inline.ruler.__rules__):
        if rule.name == "text":
            continue
        md.inline.ruler.at(rule.name, _track(rule.name, rule.fn), {"alt": rule.alt})
    return md


def _track(name: str, rule: InlineRule) -> InlineRule:
    def tracked(state: StateInline, silent: bool) -> bool:
        start = state.pos
        first = len(state.tokens)
        if not rule(state, silent):
            return False
        if not silent:
            if name in _DELIMITER_RULES:
                _stamp_delimiters(state, first, start)
            else:
                _stamp_span(state, first, start, name)
        return True

    return tracked


def _stamp_delimiters(state: StateInline, first: int, start: int) -> None:
    # One text token per delimiter character, pushed right before state.pos.
    # Anything earlier is flushed pending text.
    end = state.pos
    for token in reversed(state.tokens[first:]):
        if end <= start:
            break
        token.meta[_SPAN] = (end - len(token.content), end)
        end -= len(token.content)


def _stamp_span(state: StateInline, first: int, start: int, name: str) -> None:
    label_end: int | None = None
    if name == "link":
        label_end = state.md.helpers.parseLinkLabel(state, start, True)
    elif name == "image":
        label_end = state.md.helpers.parseLinkLabel(state, start + 1, False)
    span = (start, state.pos)
    for token in state.tokens[first:]:
        if token.type == "text" or _SPAN in token.meta:
            continue
        token.meta[_SPAN] = span
        if label_end is not None:
            token.meta[_LABEL_END] = label_end


# =============================================================================
# Offset alignment
# =============================================================================


@dataclass(frozen=True, slots=True)
class _OffsetMap:
    """Maps offsets in an inline content string to absolute offsets."""

    content_starts: tuple[int, ...]
    source_starts: tuple[int, ...]

    def __call__(self, offset: int) -> int:
        k = bisect_right(self.content_starts, offset) - 1
        return self.source_starts[k] + offset - self.content_starts[k]


class _Lines:
    """Line table of the source text."""

    __slots__ = ("text", "starts", "ends")

    def __init__(self, text: str) -> None:
        self.text = text
        self.starts = [0]
        self.ends: list[int] = []
        for match in _LINE_BREAK.finditer(text):
            self.ends.append(match.start())
            self.starts.append(match.end())
        self.ends.append(len(text))

    def line(self, lineno: int) -> str:
        return self.text[self.starts[lineno] : self.ends[lineno]]

    def align(self, first_line: int, content: str) -> _OffsetMap | None:
        """Locate each line of ``content`` in consecutive source lines."""
        content_starts: list[int] = []
        source_starts: list[int] = []
        offset = 0
        for i, piece in enumerate(content.split("\n")):
            lineno = first_line + i
            if lineno >= len(self.starts):
                return None
            line = self.line(lineno).rstrip()
            core = piece.strip()
            found = line.rfind(core) if core else len(line)
            if found < 0:
                return None
            column = found - (len(piece) - len(piece.lstrip()))
            if column < 0 or not line.startswith(piece.rstrip(), column):
                return None
            content_starts.append(offset)
            source_starts.append(self.starts[lineno] + column)
            offset += len(piece) + 1
        return _OffsetMap(tuple(content_starts), tuple(source_starts))

    def block_span(self, node: SyntaxTreeNode) -> tuple[int | None, int | None]:
        line_map = node.map
        if line_map is None:
            return None, None
        first, last = line_map
        if last <= first or last > len(self.starts):
            return None, None
        return self.starts[first], self.ends[last - 1]


def _cell_spans(line: str) -> list[tuple[int, int]]:
    """Stripped ``[start, end)`` spans of the cells of a table row line."""
    pipes = [
        i for i, ch in enumerate(line) if ch == "|" and (i == 0 or line[i - 1] != "\\")
    ]
    edges = [-1, *pipes, len(line)]
    segments = [(edges[k] + 1, edges[k + 1]) for k in range(len(edges) - 1)]
    if segments and not line[slice(*segments[0])].strip():
        segments.pop(0)
    if segments and not line[slice(*segments[-1])].strip():
        segments.pop()
    spans: list[tuple[int, int]] = []
    for start, end in segments:
        while start < end and line[start].isspace():
            start += 1
        while end > start and line[end - 1].isspace():
            end -= 1
        spans.append((start, end))
    return spans


# =============================================================================
# Block conversion
# =============================================================================


def _block(node: SyntaxTreeNode, lines: _Lines) -> SyntaxNode:
    match node.type:
        case "paragraph":
            return _prose(node, lines, NodeType.PARAGRAPH)
        case "heading":
            return _prose(node, lines, NodeType.HEADING)
        case "tr":
            start, end = lines.block_span(node)
            return SyntaxNode(NodeType.CONTAINER, start, end, _row(node, lines))
        case "front_matter":
            start, end = lines.block_span(node)
            return SyntaxNode(NodeType.FRONT_MATTER, start, end)
        case _:
            start, end = lines.block_span(node)
            if node.children and node.type != "inline":
                children = tuple(_block(child, lines) for child in node.children)
                return SyntaxNode(NodeType.CONTAINER, start, end, children)
            return SyntaxNode(NodeType.LEAF, start, end)


def _prose(node: SyntaxTreeNode, lines: _Lines, kind: NodeType) -> SyntaxNode:
    inline = next((c for c in node.children if c.type == "inline"), None)
    if inline is None or inline.map is None or not inline.content:
        return SyntaxNode(kind)
    at = lines.align(inline.map[0], inline.content)
    if at is None:
        return SyntaxNode(kind)
    context = _InlineContext(inline.content, at)
    return SyntaxNode(
        kind,
        at(0),
        at(len(inline.content)),
        tuple(_inline(child, context) for child in inline.children),
    )


def _row(row: SyntaxTreeNode, lines: _Lines) -> tuple[SyntaxNode, ...]:
    if row.map is None:
        return ()
    lineno = row.map[0]
    line = lines.line(lineno)
    spans = _cell_spans(line)
    cells: list[SyntaxNode] = []
    for index, cell in enumerate(row.children):
        inline = next((c for c in cell.children if c.type == "inline"), None)
        content = inline.content if inline is not None else ""
        if inline is None or not content or index >= len(spans):
            cells.append(SyntaxNode(NodeType.TABLE_CELL))
            continue
        start, end = spans[index]
        if line[start:end] != content:
            cells.append(SyntaxNode(NodeType.TABLE_CELL))
            continue
        at = _OffsetMap((0,), (lines.starts[lineno] + start,))
        context = _InlineContext(content, at)
        cells.append(
            SyntaxNode(
                NodeType.TABLE_CELL,
                at(0),
                at(len(content)),
                tuple(_inline(child, context) for child in inline.children),
            )
        )
    return tuple(cells)


# =============================================================================
# Inline conversion
# =============================================================================


@dataclass(frozen=True, slots=True)
class _InlineContext:
    content: str
    at: _OffsetMap


_WRAPPER_TYPES = {
    "em": NodeType.EMPHASIS,
    "strong": NodeType.STRONG,
    "s": NodeType.DELETE,
}

_ATOM_TYPES = {
    "code_inline": NodeType.INLINE_CODE,
    "html_inline": NodeType.HTML,
    "footnote_ref": NodeType.FOOTNOTE_REFERENCE,
}


def _inline(node: SyntaxTreeNode, context: _InlineContext) -> SyntaxNode:
    match node.type:
        case "em" | "strong" | "s":
            return _delimited(node, context, _WRAPPER_TYPES[node.type])
        case "link":
            if node.nester_tokens.opening.markup == "autolink":
                return _atom(node.nester_tokens.opening, context, NodeType.AUTOLINK)
            return _link(node, context)
        case "image":
            return _image(node, context)
        case "code_inline" | "html_inline" | "footnote_ref":
            return _atom(node.token, context, _ATOM_TYPES[node.type])
        case "hardbreak":
            return _hardbreak(node, context)
        case "softbreak":
            return _atom(node.token, context, NodeType.SOFT_BREAK)
        case _:
            return SyntaxNode(NodeType.TEXT)


def _delimited(
    node: SyntaxTreeNode, context: _InlineContext, kind: NodeType
) -> SyntaxNode:
    opening, closing = node.nester_tokens
    open_span = opening.meta.get(_SPAN)
    close_span = closing.meta.get(_SPAN)
    children = tuple(_inline(child, context) for child in node.children)
    if open_span is None or close_span is None:
        return SyntaxNode(kind, children=children)
    inner_start = open_span[1]
    inner_end = close_span[0]
    at = context.at
    return SyntaxNode(
        kind,
        at(inner_start - len(opening.markup)),
        at(inner_end + len(closing.markup)),
        children,
        at(inner_start),
        at(inner_end),
    )


def _link(node: SyntaxTreeNode, context: _InlineContext) -> SyntaxNode:
    opening = node.nester_tokens.opening
    span = opening.meta.get(_SPAN)
    label_end = opening.meta.get(_LABEL_END, -1)
    children = tuple(_inline(child, context) for child in node.children)
    if span is None or label_end < 0:
        return SyntaxNode(NodeType.LINK, children=children)
    start, end = span
    inline_form = context.content[label_end + 1 : label_end + 2] == "("
    at = context.at
    return SyntaxNode(
        NodeType.LINK if inline_form else NodeType.LINK_REFERENCE,
        at(start),
        at(end),
        children,
        at(start + 1),
        at(label_end),
    )


def _image(node: SyntaxTreeNode, context: _InlineContext) -> SyntaxNode:
    token = node.token
    label_end = token.meta.get(_LABEL_END, -1)
    inline_form = context.content[label_end + 1 : label_end + 2] == "("
    inline = label_end >= 0 and inline_form
    kind = NodeType.IMAGE if inline else NodeType.IMAGE_REFERENCE
    return _atom(token, context, kind)


def _hardbreak(node: SyntaxTreeNode, context: _InlineContext) -> SyntaxNode:
    span = node.token.meta.get(_SPAN)
    if span is None:
        return SyntaxNode(NodeType.BREAK)
    start, end = span
    while start > 0 and context.content[start - 1] == " ":
        start -= 1
    return SyntaxNode(NodeType.BREAK, context.at(start), context.at(end))


def _atom(token: Token, context: _InlineContext, kind: NodeType) -> SyntaxNode:
    span = token.meta.get(_SPAN)
    if span is None:
        return SyntaxNode(kind)
    return SyntaxNode(kind, context.at(span[0]), context.at(span[1]))
