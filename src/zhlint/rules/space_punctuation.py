"""Spacing around pause-or-stop punctuation.

Options:
- no_space_before_pause_or_stop: bool = True
- space_after_halfwidth_pause_or_stop: bool = True
- no_space_after_fullwidth_pause_or_stop: bool = True

Width is read from the intended classification, so punctuation converted
by an earlier rule is spaced by its new width.

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from zhlint.rules import Handler, register_rule
from zhlint.rules.messages import (
    PUNCTUATION_NOSPACE_AFTER,
    PUNCTUATION_NOSPACE_BEFORE,
    PUNCTUATION_SPACE_AFTER,
)
from zhlint.rules.util import (
    can_edit,
    check_value,
    ensure_one_space,
    gap_after,
    gap_before,
    is_halfwidth_punctuation_without_space_around,
    is_pause_or_stop,
    is_successive_halfwidth_punctuation,
)
from zhlint.tokens import GroupToken, Token, TokenKind

__all__ = ["SpacePunctuationRule"]

RULE = "space-punctuation"


@register_rule(RULE)
class SpacePunctuationRule:
    """No space before pause-or-stop punctuation, width-dependent space after."""

    @property
    def name(self) -> str:
        return RULE

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        no_space_before = bool(options.get("no_space_before_pause_or_stop"))
        space_after_half = bool(options.get("space_after_halfwidth_pause_or_stop"))
        no_space_after_full = bool(
            options.get("no_space_after_fullwidth_pause_or_stop")
        )
        if not (no_space_before or space_after_half or no_space_after_full):
            return None

        def handle(token: Token, index: int, group: GroupToken) -> None:
            if not is_pause_or_stop(token):
                return

            if no_space_before:
                before = gap_before(group, index)
                if can_edit(before):
                    for space in before.spaces:
                        check_value(space, "", RULE, PUNCTUATION_NOSPACE_BEFORE)

            after = gap_after(group, index)
            if not can_edit(after):
                return
            if token.intended_kind is TokenKind.PUNCTUATION_FULL:
                if no_space_after_full:
                    for space in after.spaces:
                        check_value(space, "", RULE, PUNCTUATION_NOSPACE_AFTER)
                return
            if not space_after_half:
                return
            if is_halfwidth_punctuation_without_space_around(group, index):
                return
            if is_successive_halfwidth_punctuation(group, index):
                return
            ensure_one_space(token, after, RULE, PUNCTUATION_SPACE_AFTER)

        return handle
