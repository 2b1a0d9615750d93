"""XML text escaping and the OOXML vocabulary shared by the part writers."""

from __future__ import annotations

import re

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>'

NS = {
    "w": "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
    "r": "http://schemas.openxmlformats.org/officeDocument/2006/relationships",
    "wp": "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing",
    "a": "http://schemas.openxmlformats.org/drawingml/2006/main",
    "pic": "http://schemas.openxmlformats.org/drawingml/2006/picture",
    "ct": "http://schemas.openxmlformats.org/package/2006/content-types",
    "rel": "http://schemas.openxmlformats.org/package/2006/relationships",
}

REL_TYPES = {
    "document": "http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument",
    "styles": "http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles",
    "settings": "http://schemas.openxmlformats.org/officeDocument/2006/relationships/settings",
    "hyperlink": "http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink",
}

CONTENT_TYPES = {
    "rels": "application/vnd.openxmlformats-package.relationships+xml",
    "xml": "application/xml",
    "document": "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml",
    "styles": "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml",
    "settings": "application/vnd.openxmlformats-officedocument.wordprocessingml.settings+xml",
}

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


def escape_xml(text: str) -> str:
    """Escape the five XML metacharacters.

    Not idempotent: escape each text node exactly once.
    """
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&apos;")
    )


# C0 controls other than tab, LF and CR, and the two noncharacters, are not XML 1.0 Chars
_INVALID_XML_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def strip_invalid_xml_chars(text: str) -> str:
    """Drop characters that cannot appear in an XML 1.0 document."""
    return _INVALID_XML_CHARS.sub("", text)


def border_side_xml(edge: str, side) -> str:
    """Render one ``BorderSide`` as a ``w:top``/``w:left``/... element."""
    return (
        f'<w:{edge} w:val="{side.style.value}" w:sz="{side.width}"'
        f' w:space="1" w:color="{side.color}"/>'
    )


def rfonts_xml(name: str) -> str:
    font = escape_xml(name)
    return (
        f'<w:rFonts w:ascii="{font}" w:eastAsia="{font}"'
        f' w:hAnsi="{font}" w:cs="{font}"/>'
    )
