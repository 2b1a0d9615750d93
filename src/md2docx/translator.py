"""Translate the parsed Markdown tree into the document model.

Block nodes map one-to-one onto :mod:`md2docx.model` elements, in
document order.  Inline formatting is flattened into :class:`TextRun`
sequences: a wrapper (bold, italic, strikethrough, link) applies its
flag to every run its children produce, so nested emphasis never loses
text.  Node kinds without a model counterpart are dropped.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from md2docx.model import (
    Blockquote,
    BulletList,
    CodeBlock,
    DocxElement,
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
)
from md2docx.parser import ASTNode, NodeType

logger = logging.getLogger(__name__)

_CHECKBOX = {True: "☑ ", False: "☐ "}

_LIST_TYPES = (NodeType.ORDERED_LIST, NodeType.UNORDERED_LIST)
_ITEM_TYPES = (NodeType.LIST_ITEM, NodeType.TASK_LIST_ITEM)

# Wrapper node -> how it marks the runs of its children
_INLINE_WRAPPERS: dict[NodeType, Callable[[TextRun, ASTNode], TextRun]] = {
    NodeType.BOLD: lambda run, _node: run.with_bold(),
    NodeType.ITALIC: lambda run, _node: run.with_italic(),
    NodeType.STRIKETHROUGH: lambda run, _node: run.with_strikethrough(),
    NodeType.LINK: lambda run, node: run.with_link(node.url or None),
}


def plain_text(node: ASTNode) -> str:
    """Concatenate the visible text below *node*, dropping all formatting."""
    if node.type in (NodeType.SOFT_BREAK, NodeType.LINE_BREAK):
        return " "
    if node.type == NodeType.IMAGE:
        return node.alt
    if node.type == NodeType.HTML:
        return ""
    return node.text + "".join(plain_text(child) for child in node.children)


class MarkdownTranslator:
    """Build a list of :data:`DocxElement` values from a DOCUMENT node."""

    def translate(self, document: ASTNode) -> list[DocxElement]:
        elements: list[DocxElement] = []
        for child in document.children:
            element = self.translate_block(child)
            if element is not None:
                elements.append(element)
        return elements

    def translate_block(self, node: ASTNode) -> Optional[DocxElement]:
        handler = getattr(self, f"_translate_{node.type.value}", None)
        if handler is None:
            logger.debug("Dropping unsupported block node %s", node.type.value)
            return None
        return handler(node)

    # -- blocks -------------------------------------------------------------

    def _translate_heading(self, node: ASTNode) -> Heading:
        return Heading(level=node.level, text=plain_text(node))

    def _translate_paragraph(self, node: ASTNode) -> DocxElement:
        image = self._sole_image(node)
        if image is not None:
            return Image(alt_text=image.alt, source=image.url or "")
        return Paragraph(runs=tuple(self.resolve_inline(node.children)))

    def _translate_text(self, node: ASTNode) -> Optional[Paragraph]:
        # Stray text at block level reads as a paragraph.
        if not node.text:
            return None
        return Paragraph(runs=(TextRun(text=node.text),))

    def _translate_unordered_list(self, node: ASTNode) -> BulletList:
        return BulletList(items=tuple(self._list_items(node, level=0)))

    def _translate_ordered_list(self, node: ASTNode) -> NumberedList:
        return NumberedList(items=tuple(self._list_items(node, level=0)))

    def _translate_code_block(self, node: ASTNode) -> CodeBlock:
        return CodeBlock(language=node.language or None, code=node.text)

    def _translate_blockquote(self, node: ASTNode) -> Blockquote:
        runs: list[TextRun] = []
        for child in node.children:
            if child.type == NodeType.PARAGRAPH:
                runs.extend(self.resolve_inline(child.children))
            elif child.type == NodeType.TEXT and child.text:
                runs.append(TextRun(text=child.text))
        return Blockquote(runs=tuple(runs))

    def _translate_table(self, node: ASTNode) -> Table:
        rows: list[TableRow] = []
        for row in node.children:
            if row.type != NodeType.TABLE_ROW:
                continue
            cells = tuple(
                TableCell(content=(Paragraph(runs=tuple(self.resolve_inline(cell.children))),))
                for cell in row.children
                if cell.type == NodeType.TABLE_CELL
            )
            is_header = bool(row.children) and all(cell.is_header for cell in row.children)
            rows.append(TableRow(cells=cells, is_header=is_header))
        return Table(rows=tuple(rows))

    def _translate_horizontal_rule(self, _node: ASTNode) -> HorizontalRule:
        return HorizontalRule()

    def _translate_image(self, node: ASTNode) -> Image:
        return Image(alt_text=node.alt, source=node.url or "")

    # -- lists --------------------------------------------------------------

    def _list_items(self, node: ASTNode, *, level: int) -> list[ListItem]:
        """Flatten a list into items, nested lists following their parent at ``level + 1``."""
        items: list[ListItem] = []
        for item in node.children:
            if item.type not in _ITEM_TYPES:
                continue
            runs: list[TextRun] = []
            if item.type == NodeType.TASK_LIST_ITEM:
                runs.append(TextRun(text=_CHECKBOX[item.checked]))
            nested: list[ListItem] = []
            for child in item.children:
                if child.type == NodeType.PARAGRAPH:
                    runs.extend(self.resolve_inline(child.children))
                elif child.type == NodeType.TEXT and child.text:
                    runs.append(TextRun(text=child.text))
                elif child.type in _LIST_TYPES:
                    nested.extend(self._list_items(child, level=level + 1))
                else:
                    runs.extend(self.resolve_inline([child]))
            items.append(ListItem(runs=tuple(runs), level=level))
            items.extend(nested)
        return items

    # -- inline -------------------------------------------------------------

    def resolve_inline(self, nodes: list[ASTNode]) -> list[TextRun]:
        """Flatten inline *nodes* into runs, preserving order."""
        runs: list[TextRun] = []
        for node in nodes:
            runs.extend(self._resolve_inline_node(node))
        return runs

    def _resolve_inline_node(self, node: ASTNode) -> list[TextRun]:
        nt = node.type

        if nt == NodeType.TEXT:
            if node.children:
                return self.resolve_inline(node.children)
            return [TextRun(text=node.text)] if node.text else []

        if nt == NodeType.INLINE_CODE:
            return [TextRun(text=node.text, is_code=True)]

        if nt in (NodeType.SOFT_BREAK, NodeType.LINE_BREAK):
            return [TextRun(text=" ")]

        mark = _INLINE_WRAPPERS.get(nt)
        if mark is not None:
            return [mark(run, node) for run in self.resolve_inline(node.children)]

        return []

    @staticmethod
    def _sole_image(node: ASTNode) -> Optional[ASTNode]:
        meaningful = [
            child for child in node.children
            if not (child.type == NodeType.TEXT and not child.text.strip() and not child.children)
        ]
        if len(meaningful) == 1 and meaningful[0].type == NodeType.IMAGE:
            return meaningful[0]
        return None
