"""Rule engine for a single block.

Runs every handler over the block's token tree and synthesizes the fixed
block text from the intended values the handlers left behind.

Traversal is rule-major: the first handler visits every token (depth-first,
left to right, a group before its children) before the second handler
starts, so each handler sees the complete result of the ones before it.

Thread Safety:
The token tree is created per call and owned by it. Handlers are shared
but stateless.

"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass

from zhlint.blocks import Block
from zhlint.ignore import IgnoredRange, is_ignored
from zhlint.rules import Handler
from zhlint.tokenizer import tokenize
from zhlint.tokens import GroupToken, Token
from zhlint.validation import Validation, ValidationTarget

__all__ = ["BlockResult", "lint_block", "render"]


@dataclass(frozen=True, slots=True)
class BlockResult:
    """Outcome of linting one block.

    Attributes:
        block: The block that was linted
        fixed: Fixed block text
        validations: Block-relative validations, ordered by edit offset
    """

    block: Block
    fixed: str
    validations: tuple[Validation, ...]


def lint_block(
    block: Block,
    handlers: Sequence[Handler],
    ignored: Sequence[IgnoredRange] = (),
) -> BlockResult:
    """Lint one block.

    Args:
        block: Block to lint
        handlers: Rule handlers in configured order
        ignored: Absolute ranges whose tokens must stay untouched

    Returns:
        BlockResult with the fixed text and block-relative validations
    """
    root = tokenize(block.text, block.marks)
    for handler in handlers:
        for token, index, group in _walk(root):
            handler(token, index, group)
    if ignored:
        _revert_ignored(root, block.start, ignored)
    validations = sorted(
        (v for token, _, _ in _walk(root) for v in token.validations.values()),
        key=lambda v: (v.edit_offset, v.offset),
    )
    return BlockResult(block, render(root), tuple(validations))


def render(token: Token) -> str:
    """Fixed text of a token, including anything inserted after it."""
    if isinstance(token, GroupToken):
        inner = "".join(render(child) for child in token.children)
        text = token.intended_start_value + inner + token.intended_end_value
    else:
        text = token.intended_value
    return text + token.intended_space_after


def _walk(group: GroupToken) -> Iterator[tuple[Token, int, GroupToken]]:
    for index, token in enumerate(group.children):
        yield token, index, group
        if isinstance(token, GroupToken):
            yield from _walk(token)


def _revert_ignored(
    root: GroupToken, base: int, ignored: Sequence[IgnoredRange]
) -> None:
    for token, _, _ in _walk(root):
        for target, validation in list(token.validations.items()):
            start = base + validation.offset
            if not is_ignored(ignored, start, start + validation.length):
                continue
            _revert(token, target)
            del token.validations[target]


def _revert(token: Token, target: ValidationTarget) -> None:
    match target:
        case ValidationTarget.VALUE:
            token.intended_value = token.value
            token.intended_kind = token.kind
        case ValidationTarget.SPACE_AFTER:
            token.intended_space_after = ""
        case ValidationTarget.START_VALUE:
            assert isinstance(token, GroupToken)
            token.intended_start_value = token.start_value
        case ValidationTarget.END_VALUE:
            assert isinstance(token, GroupToken)
            token.intended_end_value = token.end_value
