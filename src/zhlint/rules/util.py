"""Helpers shared by rule handlers.

The ``check_*`` helpers are the only way handlers change a token. Each one
writes the intended edit and keeps ``token.validations`` in step with it:
an edit away from the original records a validation for its target,
replacing any earlier one, and an edit back to the original withdraws it.

Neighbour helpers look through hyper-mark delimiters, which are invisible
to spacing and width decisions (``a**,**b`` reads as ``a,b``). Spaces they
insert still land outside those delimiters.

"""

from __future__ import annotations

from dataclasses import dataclass

from zhlint.tokens import PAUSE_OR_STOP, GroupToken, Token, TokenKind
from zhlint.validation import Validation, ValidationTarget

__all__ = [
    "Gap",
    "check_value",
    "check_start_value",
    "check_end_value",
    "check_space_after",
    "gap_after",
    "gap_before",
    "can_edit",
    "ensure_one_space",
    "is_pause_or_stop",
    "is_halfwidth_punctuation_without_space_around",
    "is_successive_halfwidth_punctuation",
]


def _record(token: Token, changed: bool, validation: Validation) -> None:
    if changed:
        token.validations[validation.target] = validation
    else:
        token.validations.pop(validation.target, None)


def check_value(
    token: Token,
    value: str,
    rule: str,
    message: str,
    kind: TokenKind | None = None,
) -> None:
    """Set the intended value (and optionally kind) of a token."""
    if kind is not None:
        token.intended_kind = kind
    if token.intended_value == value:
        return
    token.intended_value = value
    _record(
        token,
        value != token.value,
        Validation(
            rule, token.index, len(token.value), ValidationTarget.VALUE, message, value
        ),
    )


def check_start_value(group: GroupToken, value: str, rule: str, message: str) -> None:
    """Set the intended opening delimiter of a group."""
    if group.intended_start_value == value:
        return
    group.intended_start_value = value
    _record(
        group,
        value != group.start_value,
        Validation(
            rule,
            group.index,
            len(group.start_value),
            ValidationTarget.START_VALUE,
            message,
            value,
        ),
    )


def check_end_value(group: GroupToken, value: str, rule: str, message: str) -> None:
    """Set the intended closing delimiter of a group."""
    if group.intended_end_value == value:
        return
    group.intended_end_value = value
    _record(
        group,
        value != group.end_value,
        Validation(
            rule,
            group.end_index,
            len(group.end_value),
            ValidationTarget.END_VALUE,
            message,
            value,
        ),
    )


def check_space_after(token: Token, value: str, rule: str, message: str) -> None:
    """Set the text inserted right after a token."""
    if token.intended_space_after == value:
        return
    token.intended_space_after = value
    _record(
        token,
        value != "",
        Validation(
            rule,
            token.index,
            len(token.value),
            ValidationTarget.SPACE_AFTER,
            message,
            value,
        ),
    )


@dataclass(frozen=True, slots=True)
class Gap:
    """What lies between a token and its nearest visible neighbour.

    Attributes:
        between: Whitespace and hyper-mark tokens in between, in text order
        neighbour: The neighbour, or None at the edge of the group
    """

    between: tuple[Token, ...]
    neighbour: Token | None

    @property
    def spaces(self) -> tuple[Token, ...]:
        return tuple(t for t in self.between if t.kind is TokenKind.WHITESPACE)

    @property
    def is_empty(self) -> bool:
        return not self.spaces

    @property
    def has_line_break(self) -> bool:
        return any("\n" in t.value or "\r" in t.value for t in self.spaces)


def gap_after(group: GroupToken, index: int) -> Gap:
    return _gap(group.children, range(index + 1, len(group.children)))


def gap_before(group: GroupToken, index: int) -> Gap:
    gap = _gap(group.children, range(index - 1, -1, -1))
    return Gap(tuple(reversed(gap.between)), gap.neighbour)


def _gap(children: list[Token], indexes: range) -> Gap:
    between: list[Token] = []
    for i in indexes:
        token = children[i]
        if token.kind in (TokenKind.HYPER_MARK, TokenKind.WHITESPACE):
            between.append(token)
            continue
        return Gap(tuple(between), token)
    return Gap(tuple(between), None)


def can_edit(gap: Gap) -> bool:
    """Whitespace spanning a line break is left alone."""
    return gap.neighbour is not None and not gap.has_line_break


def ensure_one_space(token: Token, gap: Gap, rule: str, message: str) -> None:
    """Leave exactly one space between ``token`` and the neighbour after it.

    The space belongs outside every wrapper in the gap: after the last closing
    delimiter and before the next opening one, so ``**中文**English`` becomes
    ``**中文** English``. The first whitespace token in that slot is kept as
    one space. Every other whitespace token is emptied, and when the slot
    holds none a space is inserted after the last closing delimiter, or after
    ``token`` itself.

    Args:
        token: The earlier of the two tokens the gap separates
        gap: The gap after ``token`` in text order
        rule: Rule name recorded on validations
        message: Message recorded on validations
    """
    between = gap.between
    last_close = max(
        (i for i, t in enumerate(between) if _is_mark(t, closing=True)), default=-1
    )
    first_open = next(
        (
            i
            for i, t in enumerate(between)
            if i > last_close and _is_mark(t, closing=False)
        ),
        len(between),
    )
    kept = False
    for i, space in enumerate(between):
        if space.kind is not TokenKind.WHITESPACE:
            continue
        if not kept and last_close < i < first_open:
            check_value(space, " ", rule, message)
            kept = True
        else:
            check_value(space, "", rule, message)
    target = between[last_close] if last_close >= 0 else token
    check_space_after(target, "" if kept else " ", rule, message)


def _is_mark(token: Token, *, closing: bool) -> bool:
    return token.kind is TokenKind.HYPER_MARK and token.closing is closing


def is_pause_or_stop(token: Token) -> bool:
    return token.intended_kind in (
        TokenKind.PUNCTUATION_HALF,
        TokenKind.PUNCTUATION_FULL,
    ) and token.intended_value in PAUSE_OR_STOP


def _is_halfwidth_punctuation(token: Token | None) -> bool:
    return token is not None and token.intended_kind is TokenKind.PUNCTUATION_HALF


def is_halfwidth_punctuation_without_space_around(
    group: GroupToken, index: int
) -> bool:
    """Half-width punctuation sitting directly between half-width content.

    Covers ``1.5``, ``a,b`` and ``e.g``.
    """
    token = group.children[index]
    if not _is_halfwidth_punctuation(token):
        return False
    before = gap_before(group, index)
    after = gap_after(group, index)
    return (
        before.is_empty
        and after.is_empty
        and before.neighbour is not None
        and after.neighbour is not None
        and before.neighbour.kind is TokenKind.CONTENT_HALF
        and after.neighbour.kind is TokenKind.CONTENT_HALF
    )


def is_successive_halfwidth_punctuation(group: GroupToken, index: int) -> bool:
    """Half-width punctuation directly next to another, as in ``...`` or ``?!``."""
    token = group.children[index]
    if not _is_halfwidth_punctuation(token):
        return False
    before = gap_before(group, index)
    after = gap_after(group, index)
    return (before.is_empty and _is_halfwidth_punctuation(before.neighbour)) or (
        after.is_empty and _is_halfwidth_punctuation(after.neighbour)
    )
