"""Block tokenizer.

Scans a block's text into lint tokens and nests matched quotation and
bracket pairs into groups.

Marks become opaque tokens first: a HyperMark yields one token per non-empty
delimiter and a RawMark yields one token for its whole span. A mark that
starts inside an earlier opaque span is absorbed by it. The text between
opaque spans is scanned into whitespace runs, single punctuation characters
and content runs that break whenever the character width changes.

Grouping works on the flat sequence. An opening delimiter pairs with the
nearest later closing delimiter of the same pair at the same depth of that
pair, searched only within the enclosing group, so groups always nest.
This is depth-aware: ``((a)`` leaves the outer ``(`` unmatched, where
taking the nearest unconsumed closer would pair it with the only ``)``.

Hyper-mark tokens carry ``closing`` so spacing rules can tell which side of
a wrapper they are on.

Example:
    >>> root = tokenize("他说(hi)")
    >>> [t.kind.value for t in root.children]
    ['content-full', 'group']

"""

from __future__ import annotations

from collections.abc import Sequence

from zhlint.blocks import HyperMark, Mark
from zhlint.tokens import (
    PAIRS,
    GroupToken,
    Token,
    TokenKind,
    content_kind,
    is_fullwidth,
    is_punctuation,
    punctuation_kind,
)

__all__ = ["tokenize"]


def tokenize(text: str, marks: Sequence[Mark] = ()) -> GroupToken:
    """Tokenize block text.

    Args:
        text: Block text
        marks: Block-relative marks

    Returns:
        Root group with empty delimiters whose children cover ``text``
    """
    flat = _scan(text, _opaque_spans(marks))
    root = GroupToken(TokenKind.GROUP, text, 0)
    root.children = _group(flat, 0, len(flat))
    return root


# (start, end, kind, closing)
type _Span = tuple[int, int, TokenKind, bool]


def _opaque_spans(marks: Sequence[Mark]) -> list[_Span]:
    spans: list[_Span] = []
    for mark in marks:
        if isinstance(mark, HyperMark):
            if mark.start_delim:
                end = mark.start_delim_end
                spans.append((mark.start_offset, end, TokenKind.HYPER_MARK, False))
            if mark.end_delim:
                spans.append(
                    (mark.end_delim_start, mark.end_offset, TokenKind.HYPER_MARK, True)
                )
        elif mark.end_offset > mark.start_offset:
            spans.append((mark.start_offset, mark.end_offset, TokenKind.RAW, False))
    spans.sort(key=lambda s: (s[0], -s[1]))
    kept: list[_Span] = []
    covered = 0
    for span in spans:
        if span[0] < covered:
            continue
        kept.append(span)
        covered = span[1]
    return kept


def _scan(text: str, opaque: list[_Span]) -> list[Token]:
    tokens: list[Token] = []
    pos = 0
    for start, end, kind, closing in opaque:
        _scan_plain(text, pos, start, tokens)
        tokens.append(Token(kind, text[start:end], start, closing=closing))
        pos = end
    _scan_plain(text, pos, len(text), tokens)
    return tokens


def _scan_plain(text: str, pos: int, stop: int, tokens: list[Token]) -> None:
    while pos < stop:
        ch = text[pos]
        if ch.isspace():
            end = pos + 1
            while end < stop and text[end].isspace():
                end += 1
            tokens.append(Token(TokenKind.WHITESPACE, text[pos:end], pos))
        elif is_punctuation(ch) and not _is_apostrophe(text, pos):
            end = pos + 1
            tokens.append(Token(punctuation_kind(ch), ch, pos))
        else:
            fullwidth = is_fullwidth(ch)
            end = pos + 1
            while end < stop:
                nxt = text[end]
                if nxt.isspace() or is_fullwidth(nxt) != fullwidth:
                    break
                if is_punctuation(nxt) and not _is_apostrophe(text, end):
                    break
                end += 1
            tokens.append(Token(content_kind(ch), text[pos:end], pos))
        pos = end


def _is_apostrophe(text: str, pos: int) -> bool:
    """An ASCII ``'`` between two half-width letters or digits, as in don't."""
    if text[pos] != "'" or pos == 0 or pos + 1 >= len(text):
        return False
    before, after = text[pos - 1], text[pos + 1]
    return (
        before.isalnum()
        and after.isalnum()
        and not is_fullwidth(before)
        and not is_fullwidth(after)
    )


def _group(flat: list[Token], lo: int, hi: int) -> list[Token]:
    result: list[Token] = []
    i = lo
    while i < hi:
        token = flat[i]
        close = _find_closer(flat, i, hi) if token.kind.is_punctuation else -1
        if close < 0:
            result.append(token)
            i += 1
            continue
        closer = flat[close]
        group = GroupToken(
            TokenKind.GROUP,
            "".join(t.value for t in flat[i : close + 1]),
            token.index,
            start_value=token.value,
            end_value=closer.value,
        )
        group.children = _group(flat, i + 1, close)
        result.append(group)
        i = close + 1
    return result


def _find_closer(flat: list[Token], i: int, hi: int) -> int:
    opener = flat[i].value
    closer = PAIRS.get(opener)
    if closer is None:
        return -1
    depth = 0
    for j in range(i + 1, hi):
        token = flat[j]
        if not token.kind.is_punctuation:
            continue
        if token.value == closer and depth == 0:
            return j
        if token.value == closer:
            depth -= 1
        elif token.value == opener:
            depth += 1
    return -1
