"""Lint tokens produced from a block's text.

The tokenizer turns a block into a tree of Token objects that rule handlers
inspect and rewrite. Every token keeps its original literal (``value``,
``kind``, ``index``) apart from the edits rules make (``intended_*``), so
validations and fix synthesis never lose track of the source.

Token kinds:
- CONTENT_HALF / CONTENT_FULL: a run of letters, digits or symbols of one width
- WHITESPACE: a run of whitespace
- PUNCTUATION_HALF / PUNCTUATION_FULL: a single punctuation character
- HYPER_MARK: an inline delimiter such as ``**`` or ``](url)``, kept opaque
- RAW: an atomic inline span such as inline code, kept opaque
- GROUP: a matched quotation or bracket pair and the tokens it encloses

Thread Safety:
Tokens are mutable and owned by the lint pass of a single block. They are
never shared between blocks or threads.

"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from zhlint.validation import Validation, ValidationTarget

__all__ = [
    "TokenKind",
    "Token",
    "GroupToken",
    "PAUSE_OR_STOP",
    "QUOTATIONS",
    "BRACKETS",
    "PAIRS",
    "is_fullwidth",
    "is_punctuation",
    "punctuation_kind",
    "content_kind",
]


class TokenKind(Enum):
    CONTENT_HALF = "content-half"
    CONTENT_FULL = "content-full"
    WHITESPACE = "whitespace"
    PUNCTUATION_HALF = "punctuation-half"
    PUNCTUATION_FULL = "punctuation-full"
    HYPER_MARK = "hyper-mark"
    RAW = "raw"
    GROUP = "group"

    @property
    def is_content(self) -> bool:
        return self in (TokenKind.CONTENT_HALF, TokenKind.CONTENT_FULL)

    @property
    def is_punctuation(self) -> bool:
        return self in (TokenKind.PUNCTUATION_HALF, TokenKind.PUNCTUATION_FULL)


PAUSE_OR_STOP = frozenset(",.;:?!，。；：？！、")
QUOTATIONS = frozenset("\"'“”‘’「」『』")
BRACKETS = frozenset("()[]{}（）［］｛｝《》〈〉")

# Opening delimiter -> closing delimiter
PAIRS: dict[str, str] = {
    '"': '"',
    "'": "'",
    "“": "”",
    "‘": "’",
    "「": "」",
    "『": "』",
    "(": ")",
    "[": "]",
    "{": "}",
    "（": "）",
    "［": "］",
    "｛": "｝",
    "《": "》",
    "〈": "〉",
}

_OTHER_PUNCTUATION = frozenset("…—～·")
_PUNCTUATION = PAUSE_OR_STOP | QUOTATIONS | BRACKETS | _OTHER_PUNCTUATION

# Ambiguous-width characters that read as full-width in Chinese text
_FULLWIDTH_PUNCTUATION = frozenset("“”‘’…—·")


def is_fullwidth(ch: str) -> bool:
    """East Asian Wide and Fullwidth characters are full-width."""
    return unicodedata.east_asian_width(ch) in ("W", "F")


def is_punctuation(ch: str) -> bool:
    return ch in _PUNCTUATION


def punctuation_kind(ch: str) -> TokenKind:
    if ch in _FULLWIDTH_PUNCTUATION or is_fullwidth(ch):
        return TokenKind.PUNCTUATION_FULL
    return TokenKind.PUNCTUATION_HALF


def content_kind(ch: str) -> TokenKind:
    return TokenKind.CONTENT_FULL if is_fullwidth(ch) else TokenKind.CONTENT_HALF


@dataclass(slots=True, eq=False)
class Token:
    """A lint token.

    ``kind``, ``value`` and ``index`` describe the original text and are
    never reassigned. Rules write only the ``intended_*`` fields and record
    their findings in ``validations``.

    Attributes:
        kind: Original classification
        value: Original literal text
        index: Offset of the token in its block
        intended_value: Text the fixed output uses for this token
        intended_kind: Classification after rule edits
        intended_space_after: Text inserted right after the token
        validations: Current validation per edit target
        closing: For a HYPER_MARK token, whether it closes its wrapper
    """

    kind: TokenKind
    value: str
    index: int
    intended_value: str = ""
    intended_kind: TokenKind | None = None
    intended_space_after: str = ""
    validations: dict[ValidationTarget, Validation] = field(default_factory=dict)
    closing: bool = False

    def __post_init__(self) -> None:
        if not self.intended_value:
            self.intended_value = self.value
        if self.intended_kind is None:
            self.intended_kind = self.kind

    @property
    def end(self) -> int:
        return self.index + len(self.value)

    @property
    def is_opaque(self) -> bool:
        return self.kind in (TokenKind.HYPER_MARK, TokenKind.RAW)


@dataclass(slots=True, eq=False)
class GroupToken(Token):
    """A matched delimiter pair with the tokens between its delimiters.

    The root of a block is a GroupToken with empty delimiters.
    """

    start_value: str = ""
    end_value: str = ""
    intended_start_value: str = ""
    intended_end_value: str = ""
    children: list[Token] = field(default_factory=list)

    def __post_init__(self) -> None:
        Token.__post_init__(self)
        if not self.intended_start_value:
            self.intended_start_value = self.start_value
        if not self.intended_end_value:
            self.intended_end_value = self.end_value

    @property
    def end_index(self) -> int:
        """Offset of the closing delimiter."""
        return self.end - len(self.end_value)

    @property
    def is_quotation(self) -> bool:
        return self.start_value in QUOTATIONS

    @property
    def is_bracket(self) -> bool:
        return self.start_value in BRACKETS
