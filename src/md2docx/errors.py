"""Exceptions raised while packaging a DOCX document.

Translation and XML generation never fail on odd Markdown; only the
final encoding and archiving steps can.
"""

from __future__ import annotations


class DocxError(Exception):
    """Base class for md2docx failures."""


class DocxEncodingError(DocxError):
    """An XML part could not be encoded as UTF-8."""

    def __init__(self, part_name: str) -> None:
        super().__init__(f"Cannot encode {part_name} as UTF-8")
        self.part_name = part_name


class DocxArchiveError(DocxError):
    """The ZIP container could not be written."""
