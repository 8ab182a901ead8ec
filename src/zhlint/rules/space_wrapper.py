"""No whitespace just inside quotation and bracket groups.

Options:
- no_space_inside_quotation: bool = True
- no_space_inside_bracket: bool = True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from zhlint.rules import Handler, register_rule
from zhlint.rules.messages import BRACKET_NOSPACE_INSIDE, QUOTATION_NOSPACE_INSIDE
from zhlint.rules.util import check_value
from zhlint.tokens import GroupToken, Token, TokenKind

__all__ = ["SpaceWrapperRule"]

RULE = "space-wrapper"


def _strip_edge(space: Token, message: str) -> None:
    if space.kind is TokenKind.WHITESPACE and "\n" not in space.value:
        check_value(space, "", RULE, message)


@register_rule(RULE)
class SpaceWrapperRule:
    """Removes whitespace right after an opening or before a closing delimiter."""

    @property
    def name(self) -> str:
        return RULE

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        quotation = bool(options.get("no_space_inside_quotation"))
        bracket = bool(options.get("no_space_inside_bracket"))
        if not (quotation or bracket):
            return None

        def handle(token: Token, index: int, group: GroupToken) -> None:
            if not isinstance(token, GroupToken) or not token.children:
                return
            if token.is_quotation and quotation:
                message = QUOTATION_NOSPACE_INSIDE
            elif token.is_bracket and bracket:
                message = BRACKET_NOSPACE_INSIDE
            else:
                return
            _strip_edge(token.children[0], message)
            _strip_edge(token.children[-1], message)

        return handle
