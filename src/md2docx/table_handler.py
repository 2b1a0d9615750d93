"""WordprocessingML table generation.

Converts :class:`~md2docx.model.Table` values into ``w:tbl`` markup and
provides the ``TableGrid`` table style they reference.  Supports:

- Header rows repeated on every page (``w:tblHeader``)
- Equal column widths across the page content width
- Table borders and cell padding from :class:`~md2docx.style_manager.TableStyles`
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from md2docx.model import Table, TableCell, TableRow
from md2docx.xml_utils import border_side_xml

if TYPE_CHECKING:
    from md2docx.model import DocxElement
    from md2docx.style_manager import StylingConfig

# Renders one cell element; the second argument is the paragraph style id.
CellRenderer = Callable[["DocxElement", str], str]


class TableHandler:
    """Converts document-model tables to ``w:tbl`` XML strings."""

    TABLE_STYLE_ID = "TableGrid"
    HEADER_STYLE_ID = "TableHeader"
    BODY_STYLE_ID = "TableBody"

    def __init__(self, config: StylingConfig) -> None:
        self.config = config
        self.fallback_col_width = 2000  # twips

    def column_width(self, col_count: int) -> int:
        """Split the page content width evenly over *col_count* columns."""
        if col_count <= 0:
            return self.fallback_col_width
        width = self.config.content_width // col_count
        return width if width > 0 else self.fallback_col_width

    def render_table(self, table: Table, render_cell: CellRenderer) -> str:
        """Convert *table* to a ``w:tbl`` element.

        Args:
            table: Table with the header row (if any) first.
            render_cell: Callback producing the XML for one cell element.

        Returns:
            The table markup, or an empty string for a table without rows.
        """
        if not table.rows:
            return ""

        col_count = table.column_count or 1
        col_width = self.column_width(col_count)

        parts: list[str] = []
        a = parts.append

        a("<w:tbl>")
        a("<w:tblPr>")
        a(f'<w:tblStyle w:val="{self.TABLE_STYLE_ID}"/>')
        a(f'<w:tblW w:w="{col_width * col_count}" w:type="dxa"/>')
        a("</w:tblPr>")

        a("<w:tblGrid>")
        for _ in range(col_count):
            a(f'<w:gridCol w:w="{col_width}"/>')
        a("</w:tblGrid>")

        for row in table.rows:
            a(self._render_row(row, col_count, col_width, render_cell))

        a("</w:tbl>")
        return "".join(parts)

    def _render_row(
        self,
        row: TableRow,
        col_count: int,
        col_width: int,
        render_cell: CellRenderer,
    ) -> str:
        parts = ["<w:tr>"]
        if row.is_header:
            parts.append("<w:trPr><w:tblHeader/></w:trPr>")

        style_id = self.HEADER_STYLE_ID if row.is_header else self.BODY_STYLE_ID
        for cell in row.cells:
            parts.append(self._render_cell(cell, col_width, style_id, render_cell))

        # Pad short rows so every row spans the grid
        for _ in range(len(row.cells), col_count):
            parts.append(self._render_cell(TableCell(), col_width, style_id, render_cell))

        parts.append("</w:tr>")
        return "".join(parts)

    def _render_cell(
        self,
        cell: TableCell,
        col_width: int,
        style_id: str,
        render_cell: CellRenderer,
    ) -> str:
        content = "".join(render_cell(element, style_id) for element in cell.content)
        if not content:
            # A cell must end with a paragraph
            content = "<w:p/>"
        return (
            "<w:tc>"
            f'<w:tcPr><w:tcW w:w="{col_width}" w:type="dxa"/></w:tcPr>'
            f"{content}"
            "</w:tc>"
        )

    def render_table_style(self) -> str:
        """Return the ``TableGrid`` ``w:style`` for ``styles.xml``."""
        styles = self.config.tables
        border = styles.border
        pad = styles.cell_padding

        parts: list[str] = []
        a = parts.append

        a(f'<w:style w:type="table" w:styleId="{self.TABLE_STYLE_ID}">')
        a('<w:name w:val="Table Grid"/>')
        a("<w:tblPr>")
        if not border.is_empty:
            a("<w:tblBorders>")
            for edge, side in (
                ("top", border.top),
                ("left", border.left),
                ("bottom", border.bottom),
                ("right", border.right),
            ):
                if side is not None:
                    a(border_side_xml(edge, side))
            # A full box also draws the inner grid
            if all((border.top, border.left, border.bottom, border.right)):
                a(border_side_xml("insideH", border.top))
                a(border_side_xml("insideV", border.left))
            a("</w:tblBorders>")
        a("<w:tblCellMar>")
        a(f'<w:top w:w="{pad}" w:type="dxa"/>')
        a(f'<w:left w:w="{pad}" w:type="dxa"/>')
        a(f'<w:bottom w:w="{pad}" w:type="dxa"/>')
        a(f'<w:right w:w="{pad}" w:type="dxa"/>')
        a("</w:tblCellMar>")
        a("</w:tblPr>")
        a("</w:style>")
        return "".join(parts)

