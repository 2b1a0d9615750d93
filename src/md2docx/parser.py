"""Markdown tokenizer front end.

Runs mistune v3 in AST mode and normalises its token dictionaries into a
tree of :class:`ASTNode` objects with a closed set of :class:`NodeType`
kinds.  The translator in :mod:`md2docx.translator` consumes this tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

import mistune


# ---------------------------------------------------------------------------
# AST node definitions
# ---------------------------------------------------------------------------

class NodeType(Enum):
    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    TEXT = "text"
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    INLINE_CODE = "inline_code"
    CODE_BLOCK = "code_block"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"
    LIST_ITEM = "list_item"
    TASK_LIST_ITEM = "task_list_item"
    TABLE = "table"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    BLOCKQUOTE = "blockquote"
    HORIZONTAL_RULE = "horizontal_rule"
    LINK = "link"
    IMAGE = "image"
    HTML = "html"
    LINE_BREAK = "line_break"
    SOFT_BREAK = "soft_break"


@dataclass
class ASTNode:
    type: NodeType
    children: list[ASTNode] = field(default_factory=list)
    text: str = ""
    # Heading
    level: int = 0
    # Code block
    language: str = ""
    # Link / Image
    url: str = ""
    title: str = ""
    alt: str = ""
    # Table cell
    align: str = ""
    is_header: bool = False
    # Task list
    checked: bool = False
    # Ordered list start
    start: int = 1


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------

class MarkdownParser:
    """Parse Markdown text into an :class:`ASTNode` tree."""

    def __init__(self) -> None:
        self._md = mistune.create_markdown(
            renderer=None,  # AST mode
            plugins=["table", "strikethrough", "task_lists"],
        )

    # -- public API ---------------------------------------------------------

    def parse(self, markdown_text: str) -> ASTNode:
        """Return a *DOCUMENT* ``ASTNode`` for *markdown_text*."""
        tokens: list[dict[str, Any]] = self._md(markdown_text)  # type: ignore[assignment]
        return ASTNode(type=NodeType.DOCUMENT, children=self._convert_tokens(tokens or []))

    # -- token conversion ---------------------------------------------------

    def _convert_tokens(self, tokens: list[dict[str, Any]]) -> list[ASTNode]:
        nodes: list[ASTNode] = []
        for tok in tokens:
            node = self._convert_token(tok)
            if node is not None:
                nodes.append(node)
        return nodes

    def _convert_token(self, tok: dict[str, Any]) -> Optional[ASTNode]:
        handler = getattr(self, f"_handle_{tok.get('type', '')}", None)
        if handler:
            return handler(tok)
        # Unknown token kinds that carry text stay visible as plain text.
        raw = tok.get("raw", tok.get("text", ""))
        if isinstance(raw, str) and raw:
            return ASTNode(type=NodeType.TEXT, text=raw)
        return None

    def _convert_inline(self, children: Any) -> list[ASTNode]:
        if isinstance(children, str):
            return [ASTNode(type=NodeType.TEXT, text=children)] if children else []
        if isinstance(children, list):
            return self._convert_tokens(children)
        return []

    def _convert_blocks(self, tok: dict) -> list[ASTNode]:
        children = tok.get("children", [])
        if isinstance(children, list):
            return self._convert_tokens(children)
        return self._convert_inline(children)

    @staticmethod
    def _raw(tok: dict) -> str:
        raw = tok.get("raw", tok.get("text", tok.get("children", "")))
        return raw if isinstance(raw, str) else str(raw)

    # -- block handlers -----------------------------------------------------

    def _handle_heading(self, tok: dict) -> ASTNode:
        return ASTNode(
            type=NodeType.HEADING,
            level=tok.get("attrs", {}).get("level", tok.get("level", 1)),
            children=self._convert_inline(tok.get("children") or tok.get("text", "")),
        )

    def _handle_paragraph(self, tok: dict) -> ASTNode:
        return ASTNode(
            type=NodeType.PARAGRAPH,
            children=self._convert_inline(tok.get("children") or tok.get("text", "")),
        )

    def _handle_block_text(self, tok: dict) -> ASTNode:
        """Tight list items wrap their inline content in ``block_text``."""
        return self._handle_paragraph(tok)

    def _handle_block_code(self, tok: dict) -> ASTNode:
        attrs = tok.get("attrs", {})
        return ASTNode(
            type=NodeType.CODE_BLOCK,
            text=self._raw(tok),
            language=attrs.get("info", tok.get("info", "")) or "",
        )

    def _handle_block_quote(self, tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.BLOCKQUOTE, children=self._convert_blocks(tok))

    def _handle_thematic_break(self, _tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.HORIZONTAL_RULE)

    def _handle_block_html(self, tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.HTML, text=self._raw(tok))

    def _handle_blank_line(self, _tok: dict) -> None:
        return None

    # -- lists --------------------------------------------------------------

    def _handle_list(self, tok: dict) -> ASTNode:
        attrs = tok.get("attrs", {})
        ordered = attrs.get("ordered", False)
        return ASTNode(
            type=NodeType.ORDERED_LIST if ordered else NodeType.UNORDERED_LIST,
            children=self._convert_blocks(tok),
            start=attrs.get("start", 1) or 1,
        )

    def _handle_list_item(self, tok: dict) -> ASTNode:
        attrs = tok.get("attrs", {})
        if "checked" in attrs:
            return self._handle_task_list_item(tok)
        return ASTNode(type=NodeType.LIST_ITEM, children=self._convert_blocks(tok))

    def _handle_task_list_item(self, tok: dict) -> ASTNode:
        return ASTNode(
            type=NodeType.TASK_LIST_ITEM,
            children=self._convert_blocks(tok),
            checked=bool(tok.get("attrs", {}).get("checked", False)),
        )

    # -- table --------------------------------------------------------------

    def _handle_table(self, tok: dict) -> ASTNode:
        rows: list[ASTNode] = []
        for child in tok.get("children", []):
            ctype = child.get("type", "")
            if ctype == "table_head":
                rows.extend(self._table_section_rows(child, is_header=True))
            elif ctype == "table_body":
                rows.extend(self._table_section_rows(child, is_header=False))
            elif ctype == "table_row":
                rows.append(self._make_table_row(child.get("children", []), is_header=False))
        return ASTNode(type=NodeType.TABLE, children=rows)

    def _table_section_rows(self, tok: dict, *, is_header: bool) -> list[ASTNode]:
        children = tok.get("children", [])
        if not children:
            return []
        # table_head holds its cells directly; table_body holds table_row tokens.
        if children[0].get("type") == "table_cell":
            return [self._make_table_row(children, is_header=is_header)]
        return [
            self._make_table_row(row.get("children", []), is_header=is_header)
            for row in children
        ]

    def _make_table_row(self, cell_tokens: list[dict], *, is_header: bool) -> ASTNode:
        cells: list[ASTNode] = []
        for cell_tok in cell_tokens:
            attrs = cell_tok.get("attrs", {})
            cells.append(ASTNode(
                type=NodeType.TABLE_CELL,
                children=self._convert_inline(cell_tok.get("children", [])),
                align=attrs.get("align") or "",
                is_header=bool(attrs.get("head", is_header)),
            ))
        return ASTNode(type=NodeType.TABLE_ROW, children=cells)

    # -- inline handlers ----------------------------------------------------

    def _handle_text(self, tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.TEXT, text=self._raw(tok))

    def _handle_strong(self, tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.BOLD, children=self._convert_inline(tok.get("children")))

    def _handle_emphasis(self, tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.ITALIC, children=self._convert_inline(tok.get("children")))

    def _handle_strikethrough(self, tok: dict) -> ASTNode:
        return ASTNode(
            type=NodeType.STRIKETHROUGH,
            children=self._convert_inline(tok.get("children")),
        )

    def _handle_codespan(self, tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.INLINE_CODE, text=self._raw(tok))

    def _handle_inline_html(self, tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.HTML, text=self._raw(tok))

    def _handle_link(self, tok: dict) -> ASTNode:
        attrs = tok.get("attrs", {})
        return ASTNode(
            type=NodeType.LINK,
            url=attrs.get("url", tok.get("link", "")) or "",
            title=attrs.get("title", "") or "",
            children=self._convert_inline(tok.get("children") or tok.get("text", "")),
        )

    def _handle_image(self, tok: dict) -> ASTNode:
        attrs = tok.get("attrs", {})
        alt = attrs.get("alt", tok.get("alt", "")) or ""
        if not alt and tok.get("children"):
            alt = self._extract_text(tok["children"])
        return ASTNode(
            type=NodeType.IMAGE,
            url=attrs.get("url", tok.get("src", "")) or "",
            title=attrs.get("title", "") or "",
            alt=alt,
        )

    def _handle_linebreak(self, _tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.LINE_BREAK)

    def _handle_softbreak(self, _tok: dict) -> ASTNode:
        return ASTNode(type=NodeType.SOFT_BREAK)

    # -- helpers ------------------------------------------------------------

    def _extract_text(self, children: Any) -> str:
        if isinstance(children, str):
            return children
        parts: list[str] = []
        for child in children or []:
            if isinstance(child, dict):
                if isinstance(child.get("children"), list):
                    parts.append(self._extract_text(child["children"]))
                else:
                    parts.append(self._raw(child))
            elif isinstance(child, str):
                parts.append(child)
        return "".join(parts)
