"""Structural extraction of lintable blocks.

Parses the masked text, collects every leaf prose node as a Block and
records its inline marks. Offsets come from the masked text, which has the
same length as the original, so block text and mark literals are sliced
from the original.

Steps:
1. Block discovery: depth-first over the tree. Paragraphs, headings and
   table cells become blocks; front matter is skipped entirely.
2. Mark discovery: depth-first over each block's children. Hyper nodes
   yield a HyperMark and are descended into; raw nodes yield a RawMark and
   are not.
3. HTML wrappers: an opening code-like tag and its closing tag arrive as two
   separate raw marks. Openers are stacked and each closer is merged with
   the most recent opener. An orphan closer is dropped.
4. Masked spans that lie fully inside a block are reinjected as raw marks.

"""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence

from zhlint.blocks import (
    Block,
    BlockKind,
    HyperKind,
    HyperMark,
    Mark,
    RawKind,
    RawMark,
    classify,
)
from zhlint.masking import MaskedSpan
from zhlint.syntax import NodeType, SyntaxNode, parse_tree
from zhlint.utils.logger import get_logger

__all__ = ["extract"]

logger = get_logger(__name__)

_WRAPPER_OPEN = re.compile(r"<(?:code|kbd|samp|pre)(?:\s[^>]*)?>", re.IGNORECASE)
_WRAPPER_CLOSE = re.compile(r"</(?:code|kbd|samp|pre)\s*>", re.IGNORECASE)


def extract(
    masked_text: str, original_text: str, spans: Sequence[MaskedSpan]
) -> list[Block]:
    """Extract lintable blocks in document order.

    Args:
        masked_text: Text after masking, parsed for structure
        original_text: Unmasked text, source of block and mark literals
        spans: Masked spans to reinject

    Returns:
        Non-overlapping blocks sorted by start offset
    """
    tree = parse_tree(masked_text)
    pending = list(spans)
    blocks: list[Block] = []
    for node, kind in _leaf_blocks(tree):
        if node.start is None or node.end is None:
            logger.debug("skipping %s without position", node.type.value)
            continue
        start, end = node.start, node.end
        marks = _MarkCollector(original_text, start).collect(node)
        inside = [s for s in pending if start <= s.index and s.end <= end]
        for span in inside:
            marks.append(
                RawMark(
                    RawKind.MASKED,
                    span.name,
                    span.index - start,
                    span.end - start,
                    span.original_text,
                )
            )
            pending.remove(span)
        blocks.append(
            Block(kind, start, end, original_text[start:end], tuple(marks))
        )
    blocks = _ordered(blocks)
    logger.debug(
        "extracted %d block(s), %d masked span(s) outside blocks",
        len(blocks),
        len(pending),
    )
    return blocks


def _ordered(blocks: list[Block]) -> list[Block]:
    # Footnote definitions arrive last whatever their position in the source
    ordered: list[Block] = []
    for block in sorted(blocks, key=lambda b: b.start):
        if ordered and block.start < ordered[-1].end:
            logger.debug("dropping block overlapping %d-%d", block.start, block.end)
            continue
        ordered.append(block)
    return ordered


def _leaf_blocks(node: SyntaxNode) -> Iterator[tuple[SyntaxNode, BlockKind]]:
    for child in node.children:
        if child.type is NodeType.FRONT_MATTER:
            continue
        kind = classify(child.type)
        if isinstance(kind, BlockKind):
            yield child, kind
        else:
            yield from _leaf_blocks(child)


class _MarkCollector:
    """Collects marks of one block, pairing HTML wrappers on a stack."""

    __slots__ = ("_text", "_base", "_marks", "_openers")

    def __init__(self, text: str, base: int) -> None:
        self._text = text
        self._base = base
        self._marks: list[Mark] = []
        self._openers: list[int] = []

    def collect(self, block: SyntaxNode) -> list[Mark]:
        self._walk(block)
        return self._marks

    def _walk(self, node: SyntaxNode) -> None:
        for child in node.children:
            kind = classify(child.type)
            if isinstance(kind, HyperKind):
                self._hyper(child, kind)
                self._walk(child)
            elif isinstance(kind, RawKind):
                self._raw(child, kind)

    def _hyper(self, node: SyntaxNode, kind: HyperKind) -> None:
        if (
            node.start is None
            or node.end is None
            or node.inner_start is None
            or node.inner_end is None
        ):
            logger.debug("skipping %s without position", kind.value)
            return
        self._marks.append(
            HyperMark(
                kind,
                kind.value,
                node.start - self._base,
                self._text[node.start : node.inner_start],
                node.end - self._base,
                self._text[node.inner_end : node.end],
            )
        )

    def _raw(self, node: SyntaxNode, kind: RawKind) -> None:
        if node.start is None or node.end is None:
            logger.debug("skipping %s without position", kind.value)
            return
        literal = self._text[node.start : node.end]
        mark = RawMark(
            kind,
            kind.value,
            node.start - self._base,
            node.end - self._base,
            literal,
        )
        if kind is not RawKind.HTML:
            self._marks.append(mark)
        elif _WRAPPER_OPEN.fullmatch(literal):
            self._openers.append(len(self._marks))
            self._marks.append(mark)
        elif _WRAPPER_CLOSE.fullmatch(literal):
            if not self._openers:
                logger.debug("dropping unmatched closing tag %r", literal)
                return
            index = self._openers.pop()
            opener = self._marks[index]
            start = self._base + opener.start_offset
            self._marks[index] = RawMark(
                kind,
                kind.value,
                opener.start_offset,
                mark.end_offset,
                self._text[start : node.end],
            )
        else:
            self._marks.append(mark)
