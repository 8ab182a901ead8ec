"""Punctuation width rule.

Options:
- halfwidth_punctuation: str = ``()[]{}``
- fullwidth_punctuation: str = ``，。：；？！“”‘’``
- adjusted_fullwidth_punctuation: str = ``“”‘’``

Details:
- half-width punctuation directly between half-width content is skipped
- runs of successive half-width punctuation are skipped
- quotation groups convert both delimiters together
- converted punctuation listed in the adjusted set keeps a half-width
  classification, so spacing rules treat it as half-width

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from zhlint.rules import Handler, register_rule
from zhlint.rules.messages import PUNCTUATION_FULL_WIDTH, PUNCTUATION_HALF_WIDTH
from zhlint.rules.util import (
    check_end_value,
    check_start_value,
    check_value,
    is_halfwidth_punctuation_without_space_around,
    is_successive_halfwidth_punctuation,
)
from zhlint.tokens import GroupToken, Token, TokenKind

__all__ = ["PunctuationWidthRule"]

RULE = "punctuation-width"

WIDTH_PAIRS = [
    (",", "，"),
    (".", "。"),
    (";", "；"),
    (":", "："),
    ("?", "？"),
    ("!", "！"),
    ("(", "（"),
    (")", "）"),
    ("[", "［"),
    ("]", "］"),
    ("{", "｛"),
    ("}", "｝"),
]

# Half-width quotation -> full-width opening and closing forms
WIDTH_SIDE_PAIRS = [
    ('"', "“", "”"),
    ("'", "‘", "’"),
]


@register_rule(RULE)
class PunctuationWidthRule:
    """Converts punctuation to the configured width."""

    @property
    def name(self) -> str:
        return RULE

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        halfwidth = options.get("halfwidth_punctuation") or ""
        fullwidth = options.get("fullwidth_punctuation") or ""
        adjusted = options.get("adjusted_fullwidth_punctuation") or ""
        if not halfwidth and not fullwidth:
            return None

        to_half: dict[str, str] = {}
        to_full: dict[str, str] = {}
        quote_to_full: dict[str, tuple[str, str]] = {}
        for half, full in WIDTH_PAIRS:
            if half in halfwidth:
                to_half[full] = half
            if full in fullwidth:
                to_full[half] = full
        for half, left, right in WIDTH_SIDE_PAIRS:
            if half in halfwidth:
                to_half[left] = half
                to_half[right] = half
            if left in fullwidth or right in fullwidth:
                quote_to_full[half] = (left, right)

        def convert_group(group: GroupToken) -> None:
            start = group.intended_start_value
            if start in quote_to_full:
                check_start_value(
                    group, quote_to_full[start][0], RULE, PUNCTUATION_FULL_WIDTH
                )
            elif start in to_full:
                check_start_value(group, to_full[start], RULE, PUNCTUATION_FULL_WIDTH)
            elif start in to_half:
                check_start_value(group, to_half[start], RULE, PUNCTUATION_HALF_WIDTH)
            end = group.intended_end_value
            if end in quote_to_full:
                check_end_value(
                    group, quote_to_full[end][1], RULE, PUNCTUATION_FULL_WIDTH
                )
            elif end in to_full:
                check_end_value(group, to_full[end], RULE, PUNCTUATION_FULL_WIDTH)
            elif end in to_half:
                check_end_value(group, to_half[end], RULE, PUNCTUATION_HALF_WIDTH)

        def handle(token: Token, index: int, group: GroupToken) -> None:
            if isinstance(token, GroupToken):
                convert_group(token)
                return
            if not token.kind.is_punctuation:
                return
            if is_halfwidth_punctuation_without_space_around(group, index):
                return
            if is_successive_halfwidth_punctuation(group, index):
                return
            value = token.intended_value
            if value in to_full:
                check_value(
                    token,
                    to_full[value],
                    RULE,
                    PUNCTUATION_FULL_WIDTH,
                    TokenKind.PUNCTUATION_FULL,
                )
                if token.intended_value in adjusted:
                    token.intended_kind = TokenKind.PUNCTUATION_HALF
            elif value in to_half:
                check_value(
                    token,
                    to_half[value],
                    RULE,
                    PUNCTUATION_HALF_WIDTH,
                    TokenKind.PUNCTUATION_HALF,
                )

        return handle
