"""Tests for the positioned syntax tree.

Offsets must index the parsed text exactly, through container prefixes and
inline delimiters.
"""

from zhlint.syntax import NodeType, SyntaxNode, parse_tree


def _find(node: SyntaxNode, node_type: NodeType) -> list[SyntaxNode]:
    found = [node] if node.type is node_type else []
    for child in node.children:
        found.extend(_find(child, node_type))
    return found


def _only(text: str, node_type: NodeType) -> SyntaxNode:
    [node] = _find(parse_tree(text), node_type)
    return node


def _slice(text: str, node: SyntaxNode) -> str:
    assert node.start is not None and node.end is not None
    return text[node.start : node.end]


class TestBlocks:
    def test_paragraph(self) -> None:
        node = _only("你好,世界", NodeType.PARAGRAPH)
        assert (node.start, node.end) == (0, 5)

    def test_heading_excludes_marker(self) -> None:
        text = "# 标题\n\n正文"
        assert _slice(text, _only(text, NodeType.HEADING)) == "标题"
        assert _slice(text, _only(text, NodeType.PARAGRAPH)) == "正文"

    def test_blockquote_prefix(self) -> None:
        text = "> 引用,文字"
        node = _only(text, NodeType.PARAGRAPH)
        assert (node.start, node.end) == (2, 7)

    def test_multiline_blockquote(self) -> None:
        text = "> 第一行\n> 第二行"
        node = _only(text, NodeType.PARAGRAPH)
        assert _slice(text, node) == "第一行\n> 第二行"

    def test_list_item(self) -> None:
        text = "- 第一项\n- 第二项"
        paragraphs = _find(parse_tree(text), NodeType.PARAGRAPH)
        assert [_slice(text, p) for p in paragraphs] == ["第一项", "第二项"]

    def test_table_cells(self) -> None:
        text = "| 名称 | 说明 |\n| --- | --- |\n| a,b | 中文,英文 |"
        cells = _find(parse_tree(text), NodeType.TABLE_CELL)
        assert [_slice(text, c) for c in cells] == ["名称", "说明", "a,b", "中文,英文"]

    def test_front_matter(self) -> None:
        text = "---\ntitle: 标题\n---\n\n正文"
        tree = parse_tree(text)
        assert tree.children[0].type is NodeType.FRONT_MATTER
        assert _slice(text, _only(text, NodeType.PARAGRAPH)) == "正文"

    def test_fenced_code_is_leaf(self) -> None:
        tree = parse_tree("```\n你好,世界\n```")
        assert [c.type for c in tree.children] == [NodeType.LEAF]


class TestInlines:
    def test_strong(self) -> None:
        text = "a **b** c"
        node = _only(text, NodeType.STRONG)
        assert (node.start, node.end) == (2, 7)
        assert (node.inner_start, node.inner_end) == (4, 5)

    def test_emphasis_and_delete(self) -> None:
        text = "*斜体*和~~删除~~"
        em = _only(text, NodeType.EMPHASIS)
        assert _slice(text, em) == "*斜体*"
        assert (em.inner_start, em.inner_end) == (1, 3)
        delete = _only(text, NodeType.DELETE)
        assert _slice(text, delete) == "~~删除~~"
        assert (delete.inner_start, delete.inner_end) == (7, 9)

    def test_link(self) -> None:
        text = "见[文档](http://x.y)。"
        node = _only(text, NodeType.LINK)
        assert _slice(text, node) == "[文档](http://x.y)"
        assert (node.inner_start, node.inner_end) == (2, 4)

    def test_link_reference(self) -> None:
        text = "见[文档][ref]\n\n[ref]: http://x.y"
        node = _only(text, NodeType.LINK_REFERENCE)
        assert _slice(text, node) == "[文档][ref]"

    def test_inline_code(self) -> None:
        text = "用`code`吧"
        assert _slice(text, _only(text, NodeType.INLINE_CODE)) == "`code`"

    def test_image(self) -> None:
        text = "图![示意](a.png)后"
        assert _slice(text, _only(text, NodeType.IMAGE)) == "![示意](a.png)"

    def test_autolink(self) -> None:
        text = "见<https://x.y>"
        assert _slice(text, _only(text, NodeType.AUTOLINK)) == "<https://x.y>"

    def test_inline_html(self) -> None:
        text = "a<br>b"
        assert _slice(text, _only(text, NodeType.HTML)) == "<br>"

    def test_footnote_reference(self) -> None:
        text = "正文[^1]\n\n[^1]: 注释"
        assert _slice(text, _only(text, NodeType.FOOTNOTE_REFERENCE)) == "[^1]"

    def test_hard_break_includes_trailing_spaces(self) -> None:
        text = "第一行  \n第二行"
        assert _slice(text, _only(text, NodeType.BREAK)) == "  \n"

    def test_soft_break_includes_container_prefix(self) -> None:
        text = "> 第一行\n> 第二行"
        assert _slice(text, _only(text, NodeType.SOFT_BREAK)) == "\n> "

    def test_nested_inside_link(self) -> None:
        text = "[**粗体**](u)"
        node = _only(text, NodeType.STRONG)
        assert _slice(text, node) == "**粗体**"
