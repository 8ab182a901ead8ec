"""Tests for block tokenization and grouping."""

from hypothesis import given, settings
from hypothesis import strategies as st

from zhlint.blocks import HyperKind, HyperMark, RawKind, RawMark
from zhlint.tokenizer import tokenize
from zhlint.tokens import GroupToken, Token, TokenKind

K = TokenKind


def _flat(root: GroupToken) -> list[tuple[str, TokenKind]]:
    return [(t.value, t.kind) for t in root.children]


class TestScanning:
    def test_kinds(self) -> None:
        root = tokenize("中文English 123,好。")
        assert _flat(root) == [
            ("中文", K.CONTENT_FULL),
            ("English", K.CONTENT_HALF),
            (" ", K.WHITESPACE),
            ("123", K.CONTENT_HALF),
            (",", K.PUNCTUATION_HALF),
            ("好", K.CONTENT_FULL),
            ("。", K.PUNCTUATION_FULL),
        ]

    def test_whitespace_runs_are_merged(self) -> None:
        root = tokenize("a \t\nb")
        assert _flat(root)[1] == (" \t\n", K.WHITESPACE)

    def test_apostrophe_inside_word_is_content(self) -> None:
        root = tokenize("don't stop")
        assert _flat(root) == [
            ("don't", K.CONTENT_HALF),
            (" ", K.WHITESPACE),
            ("stop", K.CONTENT_HALF),
        ]

    def test_ambiguous_width_punctuation_is_fullwidth(self) -> None:
        root = tokenize("a…b")
        assert _flat(root)[1] == ("…", K.PUNCTUATION_FULL)

    def test_empty_text(self) -> None:
        root = tokenize("")
        assert root.children == []
        assert root.value == ""


class TestGrouping:
    def test_bracket_group(self) -> None:
        root = tokenize("他说(hi)")
        [text, group] = root.children
        assert text.value == "他说"
        assert isinstance(group, GroupToken)
        assert (group.start_value, group.end_value) == ("(", ")")
        assert group.value == "(hi)"
        assert group.index == 2
        assert group.end_index == 5
        assert [c.value for c in group.children] == ["hi"]
        assert group.is_bracket
        assert not group.is_quotation

    def test_quotation_group(self) -> None:
        [group] = tokenize("'quoted'").children
        assert isinstance(group, GroupToken)
        assert group.is_quotation
        assert [c.value for c in group.children] == ["quoted"]

    def test_nested_same_pair(self) -> None:
        [group] = tokenize("(a(b)c)").children
        assert isinstance(group, GroupToken)
        a, inner, c = group.children
        assert (a.value, c.value) == ("a", "c")
        assert isinstance(inner, GroupToken)
        assert inner.value == "(b)"
        assert inner.index == 2

    def test_outer_opener_without_own_closer_stays_flat(self) -> None:
        first, group = tokenize("((a)").children
        assert (first.value, first.kind) == ("(", K.PUNCTUATION_HALF)
        assert isinstance(group, GroupToken)
        assert group.value == "(a)"

    def test_unmatched_closer_stays_flat(self) -> None:
        root = tokenize("a)b")
        assert _flat(root) == [
            ("a", K.CONTENT_HALF),
            (")", K.PUNCTUATION_HALF),
            ("b", K.CONTENT_HALF),
        ]

    def test_pairs_never_cross_group_boundaries(self) -> None:
        root = tokenize("“a(b”c)")
        group, c, paren = root.children
        assert isinstance(group, GroupToken)
        assert group.value == "“a(b”"
        assert [t.value for t in group.children] == ["a", "(", "b"]
        assert not any(isinstance(t, GroupToken) for t in group.children)
        assert (c.value, paren.value) == ("c", ")")

    def test_fullwidth_brackets(self) -> None:
        [group] = tokenize("（中文）").children
        assert isinstance(group, GroupToken)
        assert group.start_value == "（"
        assert group.is_bracket


class TestMarks:
    def test_hyper_mark_delimiters_are_opaque(self) -> None:
        mark = HyperMark(HyperKind.STRONG, "strong", 2, "**", 7, "**")
        root = tokenize("a **b** c", [mark])
        assert _flat(root) == [
            ("a", K.CONTENT_HALF),
            (" ", K.WHITESPACE),
            ("**", K.HYPER_MARK),
            ("b", K.CONTENT_HALF),
            ("**", K.HYPER_MARK),
            (" ", K.WHITESPACE),
            ("c", K.CONTENT_HALF),
        ]
        assert [t.index for t in root.children] == [0, 1, 2, 4, 5, 7, 8]
        assert [t.closing for t in root.children] == [
            False, False, False, False, True, False, False,
        ]

    def test_link_delimiters_are_opaque(self) -> None:
        mark = HyperMark(HyperKind.LINK, "link", 0, "[", 9, "](u)")
        root = tokenize("[文档,a](u)", [mark])
        assert [t.value for t in root.children] == ["[", "文档", ",", "a", "](u)"]
        assert root.children[0].is_opaque
        assert not root.children[0].closing
        assert root.children[-1].closing

    def test_raw_mark_is_one_token(self) -> None:
        mark = RawMark(RawKind.INLINE_CODE, "inlineCode", 1, 6, "`a,b`")
        root = tokenize("用`a,b`吧", [mark])
        assert _flat(root) == [
            ("用", K.CONTENT_FULL),
            ("`a,b`", K.RAW),
            ("吧", K.CONTENT_FULL),
        ]

    def test_raw_mark_absorbs_contained_marks(self) -> None:
        outer = RawMark(RawKind.HTML, "html", 0, 15, "<kbd>Ctrl</kbd>")
        inner = RawMark(RawKind.INLINE_CODE, "inlineCode", 5, 9, "Ctrl")
        root = tokenize("<kbd>Ctrl</kbd>键", [inner, outer])
        assert _flat(root) == [("<kbd>Ctrl</kbd>", K.RAW), ("键", K.CONTENT_FULL)]

    def test_raw_mark_hides_brackets_from_grouping(self) -> None:
        mark = RawMark(RawKind.INLINE_CODE, "inlineCode", 1, 4, "`)`")
        root = tokenize("(`)`)", [mark])
        [group] = root.children
        assert isinstance(group, GroupToken)
        assert [t.kind for t in group.children] == [K.RAW]


def _check_contiguous(group: GroupToken) -> None:
    pos = group.index + len(group.start_value)
    for child in group.children:
        assert child.index == pos
        if isinstance(child, GroupToken):
            _check_contiguous(child)
        pos = child.end
    assert pos == group.end - len(group.end_value)


class TestTokenProperties:
    @given(st.text(alphabet="中文ab1 ,.()“”\"'（）\n", max_size=40))
    @settings(max_examples=200)
    def test_children_cover_the_text(self, text: str) -> None:
        root = tokenize(text)
        assert "".join(t.value for t in root.children) == text
        _check_contiguous(root)

    @given(st.text(alphabet="中a ,(", max_size=20))
    @settings(max_examples=50)
    def test_intended_defaults_to_original(self, text: str) -> None:
        def walk(token: Token) -> None:
            assert token.intended_value == token.value
            assert token.intended_kind is token.kind
            assert token.intended_space_after == ""
            assert token.validations == {}
            if isinstance(token, GroupToken):
                for child in token.children:
                    walk(child)

        walk(tokenize(text))

