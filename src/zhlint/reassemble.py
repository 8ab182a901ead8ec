"""Document reassembly.

Partitions the original text into fixed block pieces and verbatim gaps,
joins them into the final text and shifts block validations to absolute
offsets.

Invariant:
    The pieces are sorted, contiguous and cover ``[0, len(text))`` exactly,
    so ``"".join`` over verbatim pieces alone reproduces the original.

"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from zhlint.engine import BlockResult
from zhlint.validation import Validation

__all__ = ["Piece", "Reassembly", "reassemble"]


@dataclass(frozen=True, slots=True)
class Piece:
    """A contiguous span of the document.

    Attributes:
        start: Absolute start offset in the original text
        end: Absolute end offset in the original text
        value: Output text for the span (fixed for blocks, verbatim otherwise)
        is_block: Whether the span is a linted block
    """

    start: int
    end: int
    value: str
    is_block: bool


@dataclass(frozen=True, slots=True)
class Reassembly:
    pieces: tuple[Piece, ...]
    text: str
    validations: tuple[Validation, ...]


def reassemble(text: str, results: Sequence[BlockResult]) -> Reassembly:
    """Join fixed blocks and untouched gaps.

    Args:
        text: Original document text
        results: Lint results of non-overlapping blocks

    Returns:
        Reassembly with pieces, final text and absolute validations
    """
    pieces: list[Piece] = []
    validations: list[Validation] = []
    pos = 0
    for result in sorted(results, key=lambda r: r.block.start):
        block = result.block
        if block.start > pos:
            pieces.append(Piece(pos, block.start, text[pos : block.start], False))
        pieces.append(Piece(block.start, block.end, result.fixed, True))
        validations.extend(v.shifted(block.start) for v in result.validations)
        pos = block.end
    if pos < len(text) or not pieces:
        pieces.append(Piece(pos, len(text), text[pos:], False))
    return Reassembly(
        tuple(pieces),
        "".join(piece.value for piece in pieces),
        tuple(validations),
    )
