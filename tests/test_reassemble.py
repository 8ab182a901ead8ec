"""Tests for document reassembly."""

from hypothesis import given, settings
from hypothesis import strategies as st

from zhlint.blocks import Block, BlockKind
from zhlint.engine import BlockResult
from zhlint.reassemble import Piece, reassemble
from zhlint.validation import Validation, ValidationTarget


def _result(
    text: str, start: int, end: int, fixed: str | None = None, validations=()
) -> BlockResult:
    block = Block(BlockKind.PARAGRAPH, start, end, text[start:end])
    fixed = block.text if fixed is None else fixed
    return BlockResult(block, fixed, tuple(validations))


class TestReassemble:
    def test_no_blocks_is_one_verbatim_piece(self) -> None:
        assembled = reassemble("```\ncode\n```", [])
        assert assembled.pieces == (Piece(0, 12, "```\ncode\n```", False),)
        assert assembled.text == "```\ncode\n```"

    def test_empty_document(self) -> None:
        assembled = reassemble("", [])
        assert assembled.pieces == (Piece(0, 0, "", False),)
        assert assembled.text == ""

    def test_fixed_block_between_gaps(self) -> None:
        text = "> 你好,世界\n"
        validation = Validation(
            "punctuation-width", 2, 1, ValidationTarget.VALUE, "msg", "，"
        )
        assembled = reassemble(text, [_result(text, 2, 7, "你好，世界", [validation])])
        assert assembled.pieces == (
            Piece(0, 2, "> ", False),
            Piece(2, 7, "你好，世界", True),
            Piece(7, 8, "\n", False),
        )
        assert assembled.text == "> 你好，世界\n"
        [shifted] = assembled.validations
        assert shifted.offset == 4
        assert shifted.length == 1

    def test_results_are_sorted_by_start(self) -> None:
        text = "ab\n\ncd"
        assembled = reassemble(text, [_result(text, 4, 6, "CD"), _result(text, 0, 2)])
        assert [p.is_block for p in assembled.pieces] == [True, False, True]
        assert assembled.text == "ab\n\nCD"

    def test_block_at_end_leaves_no_trailing_piece(self) -> None:
        text = "# 标题"
        assembled = reassemble(text, [_result(text, 2, 4)])
        assert assembled.pieces[-1] == Piece(2, 4, "标题", True)


@st.composite
def partitions(draw):
    text = draw(st.text(alphabet="ab中 \n,", max_size=30))
    cuts = sorted(
        draw(st.sets(st.integers(min_value=0, max_value=len(text)), max_size=8))
    )
    ranges = [
        (cuts[i], cuts[i + 1])
        for i in range(0, len(cuts) - 1, 2)
        if cuts[i] < cuts[i + 1]
    ]
    return text, ranges


class TestReassembleProperties:
    @given(partitions())
    @settings(max_examples=200)
    def test_pieces_cover_document(self, case) -> None:
        text, ranges = case
        assembled = reassemble(text, [_result(text, s, e) for s, e in ranges])
        pos = 0
        for piece in assembled.pieces:
            assert piece.start == pos
            assert piece.end >= piece.start
            pos = piece.end
        assert pos == len(text)
        assert assembled.text == text
        assert [(p.start, p.end) for p in assembled.pieces if p.is_block] == ranges
