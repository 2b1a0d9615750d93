"""Tests for the Markdown parser."""

from __future__ import annotations

from pathlib import Path

import pytest

from md2docx.parser import ASTNode, MarkdownParser, NodeType

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def find_nodes(root: ASTNode, ntype: NodeType) -> list[ASTNode]:
    """Recursively collect all nodes of *ntype* under *root*."""
    found: list[ASTNode] = []
    if root.type == ntype:
        found.append(root)
    for child in root.children:
        found.extend(find_nodes(child, ntype))
    return found


def first_node(root: ASTNode, ntype: NodeType) -> ASTNode:
    nodes = find_nodes(root, ntype)
    assert nodes, f"No {ntype.value} node found"
    return nodes[0]


def collect_text(node: ASTNode) -> str:
    parts: list[str] = []
    if node.text:
        parts.append(node.text)
    for child in node.children:
        parts.append(collect_text(child))
    return "".join(parts)


@pytest.fixture
def parser() -> MarkdownParser:
    return MarkdownParser()


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

class TestHeadings:
    @pytest.mark.parametrize("level", [1, 2, 3, 4, 5, 6])
    def test_heading_levels(self, parser: MarkdownParser, level: int) -> None:
        doc = parser.parse(f"{'#' * level} Heading Level {level}")
        headings = find_nodes(doc, NodeType.HEADING)
        assert len(headings) == 1
        assert headings[0].level == level

    def test_heading_text_content(self, parser: MarkdownParser) -> None:
        heading = first_node(parser.parse("# Hello World"), NodeType.HEADING)
        assert collect_text(heading) == "Hello World"

    def test_heading_with_inline(self, parser: MarkdownParser) -> None:
        heading = first_node(parser.parse("## **Bold** Heading"), NodeType.HEADING)
        assert find_nodes(heading, NodeType.BOLD)


# ---------------------------------------------------------------------------
# Paragraphs and inline formatting
# ---------------------------------------------------------------------------

class TestInlineFormatting:
    def test_multiple_paragraphs(self, parser: MarkdownParser) -> None:
        doc = parser.parse("First paragraph.\n\nSecond paragraph.\n\nThird.")
        assert len(find_nodes(doc, NodeType.PARAGRAPH)) == 3

    def test_mixed_inline(self, parser: MarkdownParser) -> None:
        para = first_node(parser.parse("Normal **bold** and *italic* and `code`."), NodeType.PARAGRAPH)
        assert find_nodes(para, NodeType.BOLD)
        assert find_nodes(para, NodeType.ITALIC)
        assert find_nodes(para, NodeType.INLINE_CODE)

    def test_strikethrough(self, parser: MarkdownParser) -> None:
        strike = first_node(parser.parse("~~struck~~"), NodeType.STRIKETHROUGH)
        assert collect_text(strike) == "struck"

    def test_inline_code_text(self, parser: MarkdownParser) -> None:
        code = first_node(parser.parse("`code here`"), NodeType.INLINE_CODE)
        assert code.text == "code here"

    def test_bold_inside_italic(self, parser: MarkdownParser) -> None:
        italic = first_node(parser.parse("*italic with **bold** inside*"), NodeType.ITALIC)
        assert find_nodes(italic, NodeType.BOLD)

    def test_hard_break(self, parser: MarkdownParser) -> None:
        doc = parser.parse("Line one  \nLine two")
        assert find_nodes(doc, NodeType.LINE_BREAK)

    def test_soft_break_keeps_one_paragraph(self, parser: MarkdownParser) -> None:
        doc = parser.parse("Line one\nLine two")
        assert len(find_nodes(doc, NodeType.PARAGRAPH)) == 1
        assert find_nodes(doc, NodeType.SOFT_BREAK)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

class TestCodeBlocks:
    def test_code_block_with_language(self, parser: MarkdownParser) -> None:
        code = first_node(parser.parse("```python\nprint('hello')\n```"), NodeType.CODE_BLOCK)
        assert code.language == "python"
        assert "print('hello')" in code.text

    def test_code_block_without_language(self, parser: MarkdownParser) -> None:
        code = first_node(parser.parse("```\nplain code\n```"), NodeType.CODE_BLOCK)
        assert code.language == ""

    def test_code_block_keeps_lines_together(self, parser: MarkdownParser) -> None:
        code = first_node(parser.parse("```js\nconst x = 1;\nconst y = 2;\n```"), NodeType.CODE_BLOCK)
        assert "const x = 1;\nconst y = 2;" in code.text


class TestLists:
    def test_unordered_list(self, parser: MarkdownParser) -> None:
        ul = first_node(parser.parse("- Item A\n- Item B\n- Item C\n"), NodeType.UNORDERED_LIST)
        assert len(find_nodes(ul, NodeType.LIST_ITEM)) == 3

    def test_ordered_list_start(self, parser: MarkdownParser) -> None:
        ol = first_node(parser.parse("3. Third\n4. Fourth\n"), NodeType.ORDERED_LIST)
        assert ol.start == 3

    def test_nested_list(self, parser: MarkdownParser) -> None:
        doc = parser.parse("- Parent\n  - Child\n    - Grandchild\n")
        assert len(find_nodes(doc, NodeType.UNORDERED_LIST)) == 3

    def test_task_items(self, parser: MarkdownParser) -> None:
        doc = parser.parse("- [x] Done\n- [ ] Not done\n")
        tasks = find_nodes(doc, NodeType.TASK_LIST_ITEM)
        assert [task.checked for task in tasks] == [True, False]


class TestTables:
    def test_rows_header_first(self, parser: MarkdownParser) -> None:
        table = first_node(parser.parse("| A | B |\n|---|---|\n| 1 | 2 |\n| 3 | 4 |\n"), NodeType.TABLE)
        rows = [child for child in table.children if child.type == NodeType.TABLE_ROW]
        assert len(rows) == 3
        assert all(cell.is_header for cell in rows[0].children)
        assert not any(cell.is_header for cell in rows[1].children)

    def test_cell_text(self, parser: MarkdownParser) -> None:
        doc = parser.parse("| Name | Age |\n|------|-----|\n| Alice | 30 |\n")
        cells = find_nodes(doc, NodeType.TABLE_CELL)
        assert [collect_text(cell) for cell in cells] == ["Name", "Age", "Alice", "30"]

    def test_alignment(self, parser: MarkdownParser) -> None:
        doc = parser.parse("| L | C | R |\n|:--|:-:|--:|\n| a | b | c |\n")
        header = [cell for cell in find_nodes(doc, NodeType.TABLE_CELL) if cell.is_header]
        assert [cell.align for cell in header] == ["left", "center", "right"]


class TestOtherBlocks:
    def test_blockquote_paragraphs(self, parser: MarkdownParser) -> None:
        bq = first_node(parser.parse("> First.\n>\n> Second.\n"), NodeType.BLOCKQUOTE)
        assert len(find_nodes(bq, NodeType.PARAGRAPH)) == 2

    def test_horizontal_rule(self, parser: MarkdownParser) -> None:
        assert find_nodes(parser.parse("Above\n\n***\n\nBelow"), NodeType.HORIZONTAL_RULE)

    def test_block_html(self, parser: MarkdownParser) -> None:
        doc = parser.parse("<div>raw</div>\n")
        assert find_nodes(doc, NodeType.HTML)


# ---------------------------------------------------------------------------
# Links and images
# ---------------------------------------------------------------------------

class TestLinksAndImages:
    def test_inline_link(self, parser: MarkdownParser) -> None:
        link = first_node(parser.parse("[Click here](https://example.com)"), NodeType.LINK)
        assert link.url == "https://example.com"
        assert collect_text(link) == "Click here"

    def test_link_with_title(self, parser: MarkdownParser) -> None:
        link = first_node(parser.parse('[Link](https://example.com "My Title")'), NodeType.LINK)
        assert link.title == "My Title"

    def test_image_alt_and_url(self, parser: MarkdownParser) -> None:
        img = first_node(parser.parse("![Alt text](https://example.com/img.png)"), NodeType.IMAGE)
        assert img.url == "https://example.com/img.png"
        assert img.alt == "Alt text"


# ---------------------------------------------------------------------------
# Edge cases
# ---------------------------------------------------------------------------

class TestEdgeCases:
    def test_empty_input(self, parser: MarkdownParser) -> None:
        doc = parser.parse("")
        assert doc.type == NodeType.DOCUMENT
        assert doc.children == []

    def test_whitespace_only(self, parser: MarkdownParser) -> None:
        doc = parser.parse("   \n\n   \n")
        assert find_nodes(doc, NodeType.PARAGRAPH) == []

    def test_sample_fixture(self, parser: MarkdownParser) -> None:
        doc = parser.parse((FIXTURES_DIR / "sample.md").read_text(encoding="utf-8"))
        for ntype in (
            NodeType.HEADING,
            NodeType.UNORDERED_LIST,
            NodeType.ORDERED_LIST,
            NodeType.BLOCKQUOTE,
            NodeType.CODE_BLOCK,
            NodeType.TABLE,
            NodeType.HORIZONTAL_RULE,
            NodeType.IMAGE,
        ):
            assert find_nodes(doc, ntype), ntype
