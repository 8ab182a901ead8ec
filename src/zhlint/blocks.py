"""Lintable blocks and their inline marks.

A Block is a leaf span of prose (paragraph, heading, table cell) in absolute
document offsets. Marks record inline boundaries inside a block, with
offsets relative to the block start:

- HyperMark: a nestable construct. Only the delimiters are recorded; the
  enclosed content stays lintable.
- RawMark: an atomic construct kept verbatim (inline code, images, breaks,
  inline HTML, masked regions).

Classification of syntax node types into these kinds is exhaustive so a new
NodeType fails type checking until it is placed.

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import assert_never

from zhlint.syntax import NodeType

__all__ = [
    "BlockKind",
    "HyperKind",
    "RawKind",
    "HyperMark",
    "RawMark",
    "Mark",
    "Block",
    "classify",
]


class BlockKind(Enum):
    PARAGRAPH = "paragraph"
    HEADING = "heading"
    TABLE_CELL = "tableCell"


class HyperKind(Enum):
    EMPHASIS = "emphasis"
    STRONG = "strong"
    DELETE = "delete"
    LINK = "link"
    LINK_REFERENCE = "linkReference"


class RawKind(Enum):
    INLINE_CODE = "inlineCode"
    BREAK = "break"
    SOFT_BREAK = "softBreak"
    IMAGE = "image"
    IMAGE_REFERENCE = "imageReference"
    FOOTNOTE_REFERENCE = "footnoteReference"
    HTML = "html"
    AUTOLINK = "autolink"
    MASKED = "masked"


@dataclass(frozen=True, slots=True)
class HyperMark:
    """Delimiters of a nestable inline construct.

    ``start_offset``/``end_offset`` are the block-relative bounds of the
    whole construct; ``start_delim``/``end_delim`` are the delimiter texts
    at either edge.
    """

    kind: HyperKind
    label: str
    start_offset: int
    start_delim: str
    end_offset: int
    end_delim: str

    @property
    def start_delim_end(self) -> int:
        return self.start_offset + len(self.start_delim)

    @property
    def end_delim_start(self) -> int:
        return self.end_offset - len(self.end_delim)


@dataclass(frozen=True, slots=True)
class RawMark:
    """An atomic inline span kept verbatim."""

    kind: RawKind
    label: str
    start_offset: int
    end_offset: int
    literal: str


type Mark = HyperMark | RawMark


@dataclass(frozen=True, slots=True)
class Block:
    """A lintable leaf span.

    Invariant: ``text == original_text[start:end]``.
    """

    kind: BlockKind
    start: int
    end: int
    text: str
    marks: tuple[Mark, ...] = ()


def classify(node_type: NodeType) -> BlockKind | HyperKind | RawKind | None:
    """Place a syntax node type into a block, hyper or raw kind.

    Returns None for structural nodes that are neither (root, containers,
    leaves without prose, front matter, plain text).
    """
    match node_type:
        case NodeType.PARAGRAPH:
            return BlockKind.PARAGRAPH
        case NodeType.HEADING:
            return BlockKind.HEADING
        case NodeType.TABLE_CELL:
            return BlockKind.TABLE_CELL
        case NodeType.EMPHASIS:
            return HyperKind.EMPHASIS
        case NodeType.STRONG:
            return HyperKind.STRONG
        case NodeType.DELETE:
            return HyperKind.DELETE
        case NodeType.LINK:
            return HyperKind.LINK
        case NodeType.LINK_REFERENCE:
            return HyperKind.LINK_REFERENCE
        case NodeType.INLINE_CODE:
            return RawKind.INLINE_CODE
        case NodeType.BREAK:
            return RawKind.BREAK
        case NodeType.SOFT_BREAK:
            return RawKind.SOFT_BREAK
        case NodeType.IMAGE:
            return RawKind.IMAGE
        case NodeType.IMAGE_REFERENCE:
            return RawKind.IMAGE_REFERENCE
        case NodeType.FOOTNOTE_REFERENCE:
            return RawKind.FOOTNOTE_REFERENCE
        case NodeType.HTML:
            return RawKind.HTML
        case NodeType.AUTOLINK:
            return RawKind.AUTOLINK
        case (
            NodeType.ROOT
            | NodeType.CONTAINER
            | NodeType.LEAF
            | NodeType.FRONT_MATTER
            | NodeType.TEXT
        ):
            return None
        case _:
            assert_never(node_type)
