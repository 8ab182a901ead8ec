"""Spacing between quotation or bracket groups and the content around them.

Options:
- space_outside_halfwidth_quotation: bool = True
- no_space_outside_fullwidth_quotation: bool = True
- space_outside_halfwidth_bracket: bool = True
- no_space_outside_fullwidth_bracket: bool = True

A group's width is the width of its intended opening delimiter, so brackets
converted by punctuation-width are spaced by their new width. A half-width
group gets one space from content on either side: ``中文(English)中文``
becomes ``中文 (English) 中文``. A full-width group sheds the whitespace
between it and full-width content, so ``中文 “中文”`` becomes ``中文“中文”``.

A half-width group pressed directly against half-width content on both
sides of its delimiter is left alone, as in ``f(x)`` or ``item(s)``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from zhlint.rules import Handler, register_rule
from zhlint.rules.messages import (
    BRACKET_NOSPACE_OUTSIDE,
    BRACKET_SPACE_OUTSIDE,
    QUOTATION_NOSPACE_OUTSIDE,
    QUOTATION_SPACE_OUTSIDE,
)
from zhlint.rules.util import (
    Gap,
    can_edit,
    check_value,
    ensure_one_space,
    gap_after,
    gap_before,
)
from zhlint.tokens import GroupToken, Token, TokenKind, punctuation_kind

__all__ = ["SpaceOutsideQuotationRule", "SpaceOutsideBracketRule"]


def _is_code_like(gap: Gap, inner: Token | None) -> bool:
    return (
        gap.is_empty
        and gap.neighbour is not None
        and gap.neighbour.kind is TokenKind.CONTENT_HALF
        and inner is not None
        and inner.kind is TokenKind.CONTENT_HALF
    )


def _outside_handler(
    rule: str,
    selects: Callable[[GroupToken], bool],
    space_half: bool,
    no_space_full: bool,
    messages: tuple[str, str],
) -> Handler:
    space_message, nospace_message = messages

    def handle(token: Token, index: int, group: GroupToken) -> None:
        if not isinstance(token, GroupToken) or not selects(token):
            return
        halfwidth = (
            punctuation_kind(token.intended_start_value) is TokenKind.PUNCTUATION_HALF
        )
        first = token.children[0] if token.children else None
        last = token.children[-1] if token.children else None
        before = gap_before(group, index)
        after = gap_after(group, index)
        for gap, inner, is_before in ((before, first, True), (after, last, False)):
            if not can_edit(gap) or gap.neighbour is None:
                continue
            if not gap.neighbour.kind.is_content:
                continue
            if halfwidth:
                if not space_half or _is_code_like(gap, inner):
                    continue
                earlier = gap.neighbour if is_before else token
                ensure_one_space(earlier, gap, rule, space_message)
            elif no_space_full and gap.neighbour.kind is TokenKind.CONTENT_FULL:
                for space in gap.spaces:
                    check_value(space, "", rule, nospace_message)

    return handle


@register_rule("space-outside-quotation")
class SpaceOutsideQuotationRule:
    """Spacing between a quotation and the content next to it."""

    @property
    def name(self) -> str:
        return "space-outside-quotation"

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        space_half = bool(options.get("space_outside_halfwidth_quotation"))
        no_space_full = bool(options.get("no_space_outside_fullwidth_quotation"))
        if not (space_half or no_space_full):
            return None
        return _outside_handler(
            self.name,
            lambda group: group.is_quotation,
            space_half,
            no_space_full,
            (QUOTATION_SPACE_OUTSIDE, QUOTATION_NOSPACE_OUTSIDE),
        )


@register_rule("space-outside-bracket")
class SpaceOutsideBracketRule:
    """Spacing between a bracket and the content next to it."""

    @property
    def name(self) -> str:
        return "space-outside-bracket"

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        space_half = bool(options.get("space_outside_halfwidth_bracket"))
        no_space_full = bool(options.get("no_space_outside_fullwidth_bracket"))
        if not (space_half or no_space_full):
            return None
        return _outside_handler(
            self.name,
            lambda group: group.is_bracket,
            space_half,
            no_space_full,
            (BRACKET_SPACE_OUTSIDE, BRACKET_NOSPACE_OUTSIDE),
        )
