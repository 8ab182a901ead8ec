"""No whitespace just inside hyper-mark wrappers.

Options:
- no_space_inside_hyper_mark: bool = True

``[ 文档 ](url)`` becomes ``[文档](url)``. Emphasis never has whitespace on
its inner edges, since CommonMark would not parse it as emphasis, so links
and images are what this rule fixes in practice.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from zhlint.rules import Handler, register_rule
from zhlint.rules.messages import HYPER_MARK_NOSPACE_INSIDE
from zhlint.rules.util import check_value
from zhlint.tokens import GroupToken, Token, TokenKind

__all__ = ["SpaceHyperMarkRule"]

RULE = "space-hyper-mark"


@register_rule(RULE)
class SpaceHyperMarkRule:
    """Removes whitespace right after an opening or before a closing mark."""

    @property
    def name(self) -> str:
        return RULE

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        if not options.get("no_space_inside_hyper_mark"):
            return None

        def handle(token: Token, index: int, group: GroupToken) -> None:
            if token.kind is not TokenKind.HYPER_MARK:
                return
            inner = index - 1 if token.closing else index + 1
            if not 0 <= inner < len(group.children):
                return
            space = group.children[inner]
            if space.kind is TokenKind.WHITESPACE and "\n" not in space.value:
                check_value(space, "", RULE, HYPER_MARK_NOSPACE_INSIDE)

        return handle
