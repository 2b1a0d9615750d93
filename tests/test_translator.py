"""Tests for the Markdown-to-model translator and link extraction."""

from __future__ import annotations

import pytest

from md2docx.model import (
    Blockquote,
    BulletList,
    CodeBlock,
    Heading,
    HorizontalRule,
    Image,
    ListItem,
    NumberedList,
    Paragraph,
    Table,
    TableCell,
    TableRow,
    TextRun,
    extract_links,
)
from md2docx.parser import ASTNode, MarkdownParser, NodeType
from md2docx.translator import MarkdownTranslator


@pytest.fixture
def translate():
    parser = MarkdownParser()
    translator = MarkdownTranslator()

    def _translate(markdown: str) -> list:
        return translator.translate(parser.parse(markdown))

    return _translate


def texts(runs) -> list[str]:
    return [run.text for run in runs]


class TestBlocks:
    def test_heading_is_plain_text(self, translate) -> None:
        assert translate("## **Bold** and *more*") == [Heading(level=2, text="Bold and more")]

    def test_paragraph_runs(self, translate) -> None:
        (para,) = translate("This is **bold** and *italic* text.")
        assert isinstance(para, Paragraph)
        assert para.runs == (
            TextRun("This is "),
            TextRun("bold", is_bold=True),
            TextRun(" and "),
            TextRun("italic", is_italic=True),
            TextRun(" text."),
        )

    def test_code_block_keeps_language_and_text(self, translate) -> None:
        (code,) = translate("```python\nx = 1\ny = 2\n```")
        assert isinstance(code, CodeBlock)
        assert code.language == "python"
        assert code.code.startswith("x = 1\ny = 2")

    def test_code_block_without_language(self, translate) -> None:
        (code,) = translate("```\nplain\n```")
        assert code.language is None

    def test_horizontal_rule(self, translate) -> None:
        assert translate("---") == [HorizontalRule()]

    def test_document_order(self, translate) -> None:
        elements = translate("# T\n\ntext\n\n---\n\n> q\n")
        assert [type(e) for e in elements] == [Heading, Paragraph, HorizontalRule, Blockquote]

    def test_empty_input(self, translate) -> None:
        assert translate("") == []

    def test_raw_html_dropped(self, translate) -> None:
        assert translate("<div>raw</div>\n") == []

    def test_top_level_text_becomes_paragraph(self) -> None:
        doc = ASTNode(type=NodeType.DOCUMENT, children=[ASTNode(type=NodeType.TEXT, text="loose")])
        assert MarkdownTranslator().translate(doc) == [Paragraph(runs=(TextRun("loose"),))]


class TestInlineFlattening:
    def test_nested_emphasis_keeps_all_text(self, translate) -> None:
        (para,) = translate("**bold *and* more**")
        assert para.runs == (
            TextRun("bold ", is_bold=True),
            TextRun("and", is_bold=True, is_italic=True),
            TextRun(" more", is_bold=True),
        )

    def test_strikethrough(self, translate) -> None:
        (para,) = translate("~~gone~~")
        assert para.runs == (TextRun("gone", is_strikethrough=True),)

    def test_inline_code(self, translate) -> None:
        (para,) = translate("use `pip`")
        assert para.runs[-1] == TextRun("pip", is_code=True)

    def test_link_marks_every_child_run(self, translate) -> None:
        (para,) = translate("[a **b**](https://x.test)")
        assert para.runs == (
            TextRun("a ", link="https://x.test"),
            TextRun("b", is_bold=True, link="https://x.test"),
        )

    def test_line_breaks_become_spaces(self, translate) -> None:
        (para,) = translate("one\ntwo")
        assert "".join(texts(para.runs)) == "one two"

    def test_inline_image_yields_no_run(self, translate) -> None:
        (para,) = translate("see ![pic](a.png) here")
        assert isinstance(para, Paragraph)
        assert "".join(texts(para.runs)) == "see  here"


class TestLists:
    def test_bullet_list(self, translate) -> None:
        (lst,) = translate("- one\n- two\n")
        assert lst == BulletList(items=(
            ListItem(runs=(TextRun("one"),)),
            ListItem(runs=(TextRun("two"),)),
        ))

    def test_numbered_list(self, translate) -> None:
        (lst,) = translate("1. first\n2. second\n")
        assert isinstance(lst, NumberedList)
        assert [texts(item.runs) for item in lst.items] == [["first"], ["second"]]

    def test_nested_items_follow_parent_with_level(self, translate) -> None:
        (lst,) = translate("- a\n  - b\n    - c\n- d\n")
        assert [(texts(item.runs), item.level) for item in lst.items] == [
            (["a"], 0),
            (["b"], 1),
            (["c"], 2),
            (["d"], 0),
        ]

    def test_task_items_get_checkbox(self, translate) -> None:
        (lst,) = translate("- [x] done\n- [ ] todo\n")
        assert [texts(item.runs) for item in lst.items] == [["☑ ", "done"], ["☐ ", "todo"]]

    def test_loose_list_item_paragraphs_concatenate(self, translate) -> None:
        (lst,) = translate("- first\n\n  second\n")
        assert texts(lst.items[0].runs) == ["first", "second"]


class TestBlockquote:
    def test_paragraphs_flatten(self, translate) -> None:
        (quote,) = translate("> one\n>\n> **two**\n")
        assert quote == Blockquote(runs=(TextRun("one"), TextRun("two", is_bold=True)))


class TestTable:
    def test_two_by_two(self, translate) -> None:
        (table,) = translate("| A | B |\n|---|---|\n| 1 | 2 |\n")
        assert table == Table(rows=(
            TableRow(
                cells=(
                    TableCell(content=(Paragraph(runs=(TextRun("A"),)),)),
                    TableCell(content=(Paragraph(runs=(TextRun("B"),)),)),
                ),
                is_header=True,
            ),
            TableRow(cells=(
                TableCell(content=(Paragraph(runs=(TextRun("1"),)),)),
                TableCell(content=(Paragraph(runs=(TextRun("2"),)),)),
            )),
        ))
        assert table.column_count == 2


class TestImages:
    def test_image_only_paragraph(self, translate) -> None:
        assert translate("![A chart](chart.png)") == [Image(alt_text="A chart", source="chart.png")]


class TestExtractLinks:
    def test_document_order_with_duplicates(self, translate) -> None:
        elements = translate(
            "[a](https://a.test) [b](https://b.test)\n\n"
            "- [a again](https://a.test)\n\n"
            "| L |\n|---|\n| [c](https://c.test) |\n"
        )
        assert extract_links(elements) == [
            "https://a.test",
            "https://b.test",
            "https://a.test",
            "https://c.test",
        ]

    def test_no_links(self, translate) -> None:
        assert extract_links(translate("# Title\n\nplain")) == []

    def test_blockquote_links(self) -> None:
        quote = Blockquote(runs=(TextRun("x", link="https://q.test"), TextRun("y")))
        assert extract_links([quote]) == ["https://q.test"]
