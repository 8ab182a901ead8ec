"""Spacing between content runs.

Options:
- space_between_halfwidth_content: bool = True
- no_space_between_fullwidth_content: bool = True
- space_between_mixedwidth_content: bool = True

Each rule looks from a content token to the next visible token. Hyper-mark
delimiters in between are looked through; whitespace in between is edited
as a whole. A required space goes outside those delimiters, so
``**中文**English`` is fixed as ``**中文** English``. Whitespace containing
a line break is never edited.

"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from zhlint.rules import Handler, register_rule
from zhlint.rules.messages import (
    CONTENT_NOSPACE_FULL_WIDTH,
    CONTENT_NOSPACE_MIXED_WIDTH,
    CONTENT_SPACE_HALF_WIDTH,
    CONTENT_SPACE_MIXED_WIDTH,
)
from zhlint.rules.util import (
    Gap,
    can_edit,
    check_value,
    ensure_one_space,
    gap_after,
)
from zhlint.tokens import GroupToken, Token, TokenKind

__all__ = [
    "SpaceHalfwidthContentRule",
    "SpaceFullwidthContentRule",
    "SpaceMixedwidthContentRule",
]


def _content_gap(token: Token, index: int, group: GroupToken) -> Gap | None:
    if not token.kind.is_content:
        return None
    gap = gap_after(group, index)
    if not can_edit(gap) or gap.neighbour is None or not gap.neighbour.kind.is_content:
        return None
    return gap


def _remove_space(gap: Gap, rule: str, message: str) -> None:
    for space in gap.spaces:
        check_value(space, "", rule, message)


@register_rule("space-halfwidth-content")
class SpaceHalfwidthContentRule:
    """One space between two half-width content runs."""

    @property
    def name(self) -> str:
        return "space-halfwidth-content"

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        if not options.get("space_between_halfwidth_content"):
            return None

        def handle(token: Token, index: int, group: GroupToken) -> None:
            gap = _content_gap(token, index, group)
            if gap is None or gap.neighbour is None:
                return
            if (
                token.kind is TokenKind.CONTENT_HALF
                and gap.neighbour.kind is TokenKind.CONTENT_HALF
            ):
                ensure_one_space(token, gap, self.name, CONTENT_SPACE_HALF_WIDTH)

        return handle


@register_rule("space-fullwidth-content")
class SpaceFullwidthContentRule:
    """No whitespace between two full-width content runs."""

    @property
    def name(self) -> str:
        return "space-fullwidth-content"

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        if not options.get("no_space_between_fullwidth_content"):
            return None

        def handle(token: Token, index: int, group: GroupToken) -> None:
            gap = _content_gap(token, index, group)
            if gap is None or gap.neighbour is None:
                return
            if (
                token.kind is TokenKind.CONTENT_FULL
                and gap.neighbour.kind is TokenKind.CONTENT_FULL
            ):
                _remove_space(gap, self.name, CONTENT_NOSPACE_FULL_WIDTH)

        return handle


@register_rule("space-mixedwidth-content")
class SpaceMixedwidthContentRule:
    """One space, or none, between content runs of different width.

    ``True`` asks for one space, ``False`` for none and ``None`` (or a
    missing key) leaves the spacing alone.
    """

    @property
    def name(self) -> str:
        return "space-mixedwidth-content"

    def create_handler(self, options: Mapping[str, Any]) -> Handler | None:
        option = options.get("space_between_mixedwidth_content")
        if option is None:
            return None

        def handle(token: Token, index: int, group: GroupToken) -> None:
            gap = _content_gap(token, index, group)
            if gap is None or gap.neighbour is None:
                return
            if token.kind is gap.neighbour.kind:
                return
            if option:
                ensure_one_space(token, gap, self.name, CONTENT_SPACE_MIXED_WIDTH)
            else:
                _remove_space(gap, self.name, CONTENT_NOSPACE_MIXED_WIDTH)

        return handle
