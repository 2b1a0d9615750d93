"""Intermediate document model between Markdown and WordprocessingML.

Block elements form a closed set of frozen dataclasses (the
:data:`DocxElement` union); their text is a sequence of
:class:`TextRun` spans, each with a single formatting set.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional, Union


@dataclass(frozen=True)
class TextRun:
    text: str
    is_bold: bool = False
    is_italic: bool = False
    is_underlined: bool = False
    is_strikethrough: bool = False
    is_code: bool = False
    link: Optional[str] = None

    def with_bold(self, bold: bool = True) -> TextRun:
        return replace(self, is_bold=bold)

    def with_italic(self, italic: bool = True) -> TextRun:
        return replace(self, is_italic=italic)

    def with_strikethrough(self, strikethrough: bool = True) -> TextRun:
        return replace(self, is_strikethrough=strikethrough)

    def with_link(self, link: Optional[str]) -> TextRun:
        return replace(self, link=link)


@dataclass(frozen=True)
class ListItem:
    """One list entry; ``level`` is the nesting depth (0 = top level)."""

    runs: tuple[TextRun, ...] = ()
    level: int = 0


# ---------------------------------------------------------------------------
# Block elements
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Heading:
    level: int
    text: str


@dataclass(frozen=True)
class Paragraph:
    runs: tuple[TextRun, ...] = ()


@dataclass(frozen=True)
class BulletList:
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class NumberedList:
    items: tuple[ListItem, ...] = ()


@dataclass(frozen=True)
class CodeBlock:
    # The fence info string is kept but not used for highlighting.
    language: Optional[str]
    code: str


@dataclass(frozen=True)
class Blockquote:
    runs: tuple[TextRun, ...] = ()


@dataclass(frozen=True)
class TableCell:
    content: tuple[DocxElement, ...] = ()


@dataclass(frozen=True)
class TableRow:
    cells: tuple[TableCell, ...] = ()
    is_header: bool = False


@dataclass(frozen=True)
class Table:
    rows: tuple[TableRow, ...] = ()

    @property
    def column_count(self) -> int:
        return len(self.rows[0].cells) if self.rows else 0


@dataclass(frozen=True)
class HorizontalRule:
    pass


@dataclass(frozen=True)
class Image:
    alt_text: str
    source: str = ""


DocxElement = Union[
    Heading,
    Paragraph,
    BulletList,
    NumberedList,
    CodeBlock,
    Blockquote,
    Table,
    HorizontalRule,
    Image,
]


# ---------------------------------------------------------------------------
# Link extraction
# ---------------------------------------------------------------------------

def _runs_of(element: DocxElement) -> list[TextRun]:
    if isinstance(element, (Paragraph, Blockquote)):
        return list(element.runs)
    if isinstance(element, (BulletList, NumberedList)):
        return [run for item in element.items for run in item.runs]
    return []


def extract_links(elements: list[DocxElement]) -> list[str]:
    """Collect every non-empty run link in document order, duplicates included.

    Table cells are searched recursively.  The order seeds hyperlink
    relationship ids, so it must match the order the body is written in.
    """
    links: list[str] = []
    for element in elements:
        if isinstance(element, Table):
            for row in element.rows:
                for cell in row.cells:
                    links.extend(extract_links(list(cell.content)))
            continue
        links.extend(run.link for run in _runs_of(element) if run.link)
    return links
