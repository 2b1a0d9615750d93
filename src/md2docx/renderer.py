"""DOCX document renderer - converts the document model to OOXML parts.

This module turns a list of :data:`~md2docx.model.DocxElement` values
(produced by :mod:`md2docx.translator`) into the XML parts of a
WordprocessingML package and zips them into a ``.docx`` file.

Paragraphs refer to named styles (``Heading1``, ``CodeBlock``, ``Quote``,
``ListBullet`` ...) that are defined once in ``word/styles.xml`` from the
active :class:`~md2docx.style_manager.StylingConfig`.
"""

from __future__ import annotations

import io
import itertools
import logging
import re
import zipfile
from typing import Optional

from md2docx.errors import DocxArchiveError, DocxEncodingError
from md2docx.model import (
    Blockquote,
    BulletList,
    CodeBlock,
    DocxElement,
    Heading,
    HorizontalRule,
    Image,
    NumberedList,
    Paragraph,
    Table,
    TextRun,
    extract_links,
)
from md2docx.style_manager import (
    Border,
    FontConfig,
    HyperlinkMode,
    Indentation,
    LineSpacing,
    LineSpacingType,
    Spacing,
    StylingConfig,
    TextAlignment,
)
from md2docx.table_handler import TableHandler
from md2docx.xml_utils import (
    CONTENT_TYPES,
    NS,
    REL_TYPES,
    XML_DECLARATION,
    border_side_xml,
    escape_xml,
    rfonts_xml,
    strip_invalid_xml_chars,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Package layout
# ---------------------------------------------------------------------------

CONTENT_TYPES_PART = "[Content_Types].xml"
PACKAGE_RELS_PART = "_rels/.rels"
DOCUMENT_RELS_PART = "word/_rels/document.xml.rels"
DOCUMENT_PART = "word/document.xml"
STYLES_PART = "word/styles.xml"
SETTINGS_PART = "word/settings.xml"
SETTINGS_RELS_PART = "word/_rels/settings.xml.rels"

# Fixed entry timestamp keeps archives byte-identical across runs
_ZIP_DATE_TIME = (1980, 1, 1, 0, 0, 0)

# rId1 = styles, rId2 = settings; hyperlinks follow
_FIRST_LINK_REL_ID = 3

_BULLET_NUM_ID = 1
_NUMBERED_NUM_ID = 2

# Placeholder drawing size in EMU (6in x 3.375in)
_IMAGE_CX = 5486400
_IMAGE_CY = 3086400

_DOCUMENT_NS_DECL = "".join(
    f' xmlns:{prefix}="{NS[prefix]}"' for prefix in ("w", "r", "wp", "a", "pic")
)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")


# ---------------------------------------------------------------------------
# Property helpers
# ---------------------------------------------------------------------------

def _element_kind(element: DocxElement) -> str:
    """``BulletList`` -> ``bullet_list``."""
    return _CAMEL_RE.sub("_", type(element).__name__).lower()


def _spacing_xml(spacing: Spacing, line_spacing: Optional[LineSpacing] = None) -> str:
    """``w:spacing``; an explicit ``spacing.line`` wins over document line spacing."""
    attrs: list[str] = []
    if spacing.before > 0:
        attrs.append(f' w:before="{spacing.before}"')
    if spacing.after > 0:
        attrs.append(f' w:after="{spacing.after}"')
    if spacing.line is not None:
        attrs.append(f' w:line="{spacing.line}" w:lineRule="exactly"')
    elif (
        line_spacing is not None
        and line_spacing.value is not None
        and line_spacing.type != LineSpacingType.AUTO
    ):
        # "auto" is WordprocessingML's name for proportional spacing
        rule = "auto" if line_spacing.type == LineSpacingType.MULTIPLE else line_spacing.type.value
        attrs.append(f' w:line="{line_spacing.value}" w:lineRule="{rule}"')
    if not attrs:
        return ""
    return "<w:spacing" + "".join(attrs) + "/>"


def _indentation_xml(indentation: Indentation) -> str:
    attrs: list[str] = []
    if indentation.left > 0:
        attrs.append(f' w:left="{indentation.left}"')
    if indentation.right > 0:
        attrs.append(f' w:right="{indentation.right}"')
    if indentation.first_line is not None:
        attrs.append(f' w:firstLine="{indentation.first_line}"')
    if indentation.hanging is not None:
        attrs.append(f' w:hanging="{indentation.hanging}"')
    if not attrs:
        return ""
    return "<w:ind" + "".join(attrs) + "/>"


def _paragraph_border_xml(border: Border) -> str:
    if border.is_empty:
        return ""
    sides = (
        ("top", border.top),
        ("left", border.left),
        ("bottom", border.bottom),
        ("right", border.right),
    )
    return (
        "<w:pBdr>"
        + "".join(border_side_xml(edge, side) for edge, side in sides if side is not None)
        + "</w:pBdr>"
    )


def _font_rpr(
    font: FontConfig,
    *,
    bold: bool = False,
    italic: bool = False,
    kern: Optional[int] = None,
    extra: str = "",
) -> str:
    """Style-level ``w:rPr`` for *font*, children in schema order."""
    parts = ["<w:rPr>", rfonts_xml(font.name)]
    if bold:
        parts.append("<w:b/><w:bCs/>")
    if italic:
        parts.append("<w:i/><w:iCs/>")
    parts.append(f'<w:color w:val="{font.color}"/>')
    if kern is not None:
        parts.append(f'<w:kern w:val="{kern}"/>')
    parts.append(f'<w:sz w:val="{font.size}"/><w:szCs w:val="{font.size}"/>')
    parts.append(extra)
    parts.append("</w:rPr>")
    return "".join(parts)


def _text_xml(text: str) -> str:
    return f'<w:t xml:space="preserve">{escape_xml(strip_invalid_xml_chars(text))}</w:t>'


# ---------------------------------------------------------------------------
# Per-render state
# ---------------------------------------------------------------------------

class _RenderContext:
    """State for one :meth:`DocxRenderer.build_parts` call."""

    def __init__(self, links: list[str], mode: HyperlinkMode) -> None:
        self.link_ids: dict[str, str] = {}
        if mode == HyperlinkMode.HYPERLINK:
            for url in links:
                if url not in self.link_ids:
                    self.link_ids[url] = f"rId{_FIRST_LINK_REL_ID + len(self.link_ids)}"
        self._drawing_id = 0

    def next_drawing_id(self) -> int:
        self._drawing_id += 1
        return self._drawing_id


# ---------------------------------------------------------------------------
# DocxRenderer
# ---------------------------------------------------------------------------

class DocxRenderer:
    """Render document-model elements to DOCX parts and bytes.

    The renderer holds only its configuration; every call builds its own
    state, so one instance may serve concurrent conversions.
    """

    def __init__(self, config: Optional[StylingConfig] = None) -> None:
        self.config: StylingConfig = config or StylingConfig()
        self.tables = TableHandler(self.config)

    # ======================================================================
    # Public API
    # ======================================================================

    def build_parts(self, elements: list[DocxElement]) -> dict[str, str]:
        """Return every package part as ``{part name: XML text}``, in archive order."""
        ctx = _RenderContext(extract_links(elements), self.config.hyperlink_mode)
        return {
            CONTENT_TYPES_PART: self._build_content_types_xml(),
            PACKAGE_RELS_PART: self._build_package_rels_xml(),
            DOCUMENT_RELS_PART: self._build_document_rels_xml(ctx),
            DOCUMENT_PART: self._build_document_xml(elements, ctx),
            STYLES_PART: self._build_styles_xml(),
            SETTINGS_PART: self._build_settings_xml(),
            SETTINGS_RELS_PART: self._build_settings_rels_xml(),
        }

    def render(self, elements: list[DocxElement]) -> bytes:
        """Return a complete ``.docx`` file as *bytes* for *elements*.

        Raises:
            DocxEncodingError: A part holds text that is not encodable as UTF-8.
            DocxArchiveError: The ZIP container could not be written.
        """
        parts = self.build_parts(elements)
        payloads = {name: self._encode_part(name, xml) for name, xml in parts.items()}
        for name, data in payloads.items():
            logger.debug("Part %s: %d bytes", name, len(data))
        return self._package_docx(payloads)

    # ======================================================================
    # Element dispatch
    # ======================================================================

    def _render_element(self, element: DocxElement, ctx: _RenderContext) -> str:
        handler = getattr(self, f"_render_{_element_kind(element)}", None)
        if handler is None:
            logger.debug("No renderer for %s", type(element).__name__)
            return ""
        return handler(element, ctx)

    def _render_heading(self, element: Heading, _ctx: _RenderContext) -> str:
        level = element.level if 1 <= element.level <= 6 else 1
        return (
            f'<w:p><w:pPr><w:pStyle w:val="Heading{level}"/></w:pPr>'
            f"<w:r>{_text_xml(element.text)}</w:r></w:p>"
        )

    def _render_paragraph(self, element: Paragraph, ctx: _RenderContext) -> str:
        return self._paragraph_xml(element.runs, ctx)

    def _render_bullet_list(self, element: BulletList, ctx: _RenderContext) -> str:
        return self._list_xml(element.items, "ListBullet", _BULLET_NUM_ID, ctx)

    def _render_numbered_list(self, element: NumberedList, ctx: _RenderContext) -> str:
        return self._list_xml(element.items, "ListNumber", _NUMBERED_NUM_ID, ctx)

    def _render_code_block(self, element: CodeBlock, _ctx: _RenderContext) -> str:
        # Embedded newlines stay in one text node
        return (
            '<w:p><w:pPr><w:pStyle w:val="CodeBlock"/></w:pPr>'
            '<w:r><w:rPr><w:rStyle w:val="Code"/></w:rPr>'
            f"{_text_xml(element.code)}</w:r></w:p>"
        )

    def _render_blockquote(self, element: Blockquote, ctx: _RenderContext) -> str:
        return self._paragraph_xml(element.runs, ctx, style_id="Quote")

    def _render_table(self, element: Table, ctx: _RenderContext) -> str:
        def render_cell(cell_element: DocxElement, style_id: str) -> str:
            if isinstance(cell_element, Paragraph):
                return self._paragraph_xml(cell_element.runs, ctx, style_id=style_id)
            return self._render_element(cell_element, ctx)

        return self.tables.render_table(element, render_cell)

    def _render_horizontal_rule(self, _element: HorizontalRule, _ctx: _RenderContext) -> str:
        return (
            "<w:p><w:pPr><w:pBdr>"
            '<w:bottom w:val="single" w:sz="6" w:space="1" w:color="auto"/>'
            "</w:pBdr></w:pPr></w:p>"
        )

    def _render_image(self, element: Image, ctx: _RenderContext) -> str:
        # Placeholder drawing only; the image itself is never fetched.
        drawing_id = ctx.next_drawing_id()
        alt = escape_xml(strip_invalid_xml_chars(element.alt_text))
        return (
            "<w:p><w:r><w:drawing>"
            '<wp:inline distT="0" distB="0" distL="0" distR="0">'
            f'<wp:extent cx="{_IMAGE_CX}" cy="{_IMAGE_CY}"/>'
            f'<wp:docPr id="{drawing_id}" name="Picture {drawing_id}" descr="{alt}"/>'
            f'<a:graphic><a:graphicData uri="{NS["pic"]}">'
            "<pic:pic>"
            f'<pic:nvPicPr><pic:cNvPr id="0" name="{alt}"/><pic:cNvPicPr/></pic:nvPicPr>'
            '<pic:blipFill><a:blip r:embed="rId1"/></pic:blipFill>'
            "<pic:spPr><a:xfrm>"
            f'<a:off x="0" y="0"/><a:ext cx="{_IMAGE_CX}" cy="{_IMAGE_CY}"/>'
            "</a:xfrm></pic:spPr>"
            "</pic:pic>"
            "</a:graphicData></a:graphic>"
            "</wp:inline>"
            "</w:drawing></w:r></w:p>"
        )

    # ======================================================================
    # Paragraph and run builders
    # ======================================================================

    def _paragraph_xml(
        self,
        runs: tuple[TextRun, ...],
        ctx: _RenderContext,
        *,
        style_id: Optional[str] = None,
        num_pr: str = "",
    ) -> str:
        ppr = ""
        if style_id or num_pr:
            style = f'<w:pStyle w:val="{style_id}"/>' if style_id else ""
            ppr = f"<w:pPr>{style}{num_pr}</w:pPr>"
        return f"<w:p>{ppr}{self._runs_xml(runs, ctx)}</w:p>"

    def _list_xml(self, items, style_id: str, num_id: int, ctx: _RenderContext) -> str:
        return "".join(
            self._paragraph_xml(
                item.runs,
                ctx,
                style_id=style_id,
                num_pr=(
                    f'<w:numPr><w:ilvl w:val="{item.level}"/>'
                    f'<w:numId w:val="{num_id}"/></w:numPr>'
                ),
            )
            for item in items
        )

    def _runs_xml(self, runs: tuple[TextRun, ...], ctx: _RenderContext) -> str:
        """Render *runs*, grouping consecutive runs that share a link."""
        mode = self.config.hyperlink_mode
        parts: list[str] = []
        for link, group in itertools.groupby(runs, key=lambda run: run.link):
            body = "".join(self._run_xml(run) for run in group)
            if not link or mode == HyperlinkMode.COLORED_TEXT:
                parts.append(body)
            elif mode == HyperlinkMode.INLINE_URL:
                parts.append(body)
                parts.append(self._run_xml(TextRun(text=f" ({link})")))
            else:
                rel_id = ctx.link_ids.get(link)
                if rel_id is None:
                    parts.append(body)
                else:
                    parts.append(f'<w:hyperlink r:id="{rel_id}">{body}</w:hyperlink>')
        return "".join(parts)

    def _run_xml(self, run: TextRun) -> str:
        """One ``w:r``; properties in schema order."""
        props: list[str] = []
        if run.is_code:
            props.append('<w:rStyle w:val="Code"/>')
        if run.is_bold:
            props.append("<w:b/>")
        if run.is_italic:
            props.append("<w:i/>")
        if run.is_strikethrough:
            props.append("<w:strike/>")
        if run.link:
            props.append(f'<w:color w:val="{self.config.link_color}"/>')
        underline_link = bool(run.link) and self.config.hyperlink_mode != HyperlinkMode.COLORED_TEXT
        if run.is_underlined or underline_link:
            props.append('<w:u w:val="single"/>')
        rpr = f"<w:rPr>{''.join(props)}</w:rPr>" if props else ""
        return f"<w:r>{rpr}{_text_xml(run.text)}</w:r>"

    # ======================================================================
    # Package parts
    # ======================================================================

    def _build_content_types_xml(self) -> str:
        overrides = (
            ("/word/document.xml", CONTENT_TYPES["document"]),
            ("/word/styles.xml", CONTENT_TYPES["styles"]),
            ("/word/settings.xml", CONTENT_TYPES["settings"]),
        )
        return (
            XML_DECLARATION
            + f'<Types xmlns="{NS["ct"]}">'
            + f'<Default Extension="rels" ContentType="{CONTENT_TYPES["rels"]}"/>'
            + f'<Default Extension="xml" ContentType="{CONTENT_TYPES["xml"]}"/>'
            + "".join(
                f'<Override PartName="{name}" ContentType="{ctype}"/>'
                for name, ctype in overrides
            )
            + "</Types>"
        )

    def _build_package_rels_xml(self) -> str:
        return (
            XML_DECLARATION
            + f'<Relationships xmlns="{NS["rel"]}">'
            + f'<Relationship Id="rId1" Type="{REL_TYPES["document"]}" Target="word/document.xml"/>'
            + "</Relationships>"
        )

    def _build_document_rels_xml(self, ctx: _RenderContext) -> str:
        parts: list[str] = []
        a = parts.append

        a(XML_DECLARATION)
        a(f'<Relationships xmlns="{NS["rel"]}">')
        a(f'<Relationship Id="rId1" Type="{REL_TYPES["styles"]}" Target="styles.xml"/>')
        a(f'<Relationship Id="rId2" Type="{REL_TYPES["settings"]}" Target="settings.xml"/>')
        for url, rel_id in ctx.link_ids.items():
            a(
                f'<Relationship Id="{rel_id}" Type="{REL_TYPES["hyperlink"]}"'
                f' Target="{escape_xml(strip_invalid_xml_chars(url))}" TargetMode="External"/>'
            )
        a("</Relationships>")
        return "".join(parts)

    def _build_document_xml(self, elements: list[DocxElement], ctx: _RenderContext) -> str:
        page = self.config.page_size
        margins = self.config.page_margins

        parts: list[str] = []
        a = parts.append

        a(XML_DECLARATION)
        a(f"<w:document{_DOCUMENT_NS_DECL}>")
        a("<w:body>")
        for element in elements:
            a(self._render_element(element, ctx))
        a("<w:sectPr>")
        a(f'<w:pgSz w:w="{page.width}" w:h="{page.height}"/>')
        a(
            f'<w:pgMar w:top="{margins.top}" w:right="{margins.right}"'
            f' w:bottom="{margins.bottom}" w:left="{margins.left}"'
            f' w:header="{margins.header}" w:footer="{margins.footer}"'
            f' w:gutter="{margins.gutter}"/>'
        )
        a("</w:sectPr>")
        a("</w:body>")
        a("</w:document>")
        return "".join(parts)

    def _build_settings_xml(self) -> str:
        return (
            XML_DECLARATION
            + f'<w:settings xmlns:w="{NS["w"]}">'
            '<w:zoom w:percent="100"/>'
            '<w:defaultTabStop w:val="720"/>'
            '<w:characterSpacingControl w:val="doNotCompress"/>'
            "<w:compat/>"
            '<w:themeFontLang w:val="en-US" w:eastAsia="en-US"/>'
            '<w:clrSchemeMapping w:bg1="light1" w:t1="dark1" w:bg2="light2"'
            ' w:t2="dark2" w:accent1="accent1" w:accent2="accent2"'
            ' w:accent3="accent3" w:accent4="accent4" w:accent5="accent5"'
            ' w:accent6="accent6" w:hyperlink="hyperlink"'
            ' w:followedHyperlink="followedHyperlink"/>'
            "</w:settings>"
        )

    def _build_settings_rels_xml(self) -> str:
        return XML_DECLARATION + f'<Relationships xmlns="{NS["rel"]}"></Relationships>'

    # -- styles.xml ---------------------------------------------------------

    def _build_styles_xml(self) -> str:
        """Build ``word/styles.xml`` from the active configuration."""
        cfg = self.config
        default_font = cfg.default_font
        normal = cfg.paragraphs.normal

        L: list[str] = []  # noqa: E741
        a = L.append

        a(XML_DECLARATION)
        a(f'<w:styles xmlns:w="{NS["w"]}">')

        # ---- document defaults ----
        a("<w:docDefaults><w:rPrDefault><w:rPr>")
        a(rfonts_xml(default_font.name))
        a(f'<w:color w:val="{default_font.color}"/>')
        a(f'<w:sz w:val="{default_font.size}"/><w:szCs w:val="{default_font.size}"/>')
        a('<w:lang w:val="en-US" w:eastAsia="en-US" w:bidi="ar-SA"/>')
        a("</w:rPr></w:rPrDefault></w:docDefaults>")

        # ---- Normal ----
        a('<w:style w:type="paragraph" w:default="1" w:styleId="Normal">')
        a('<w:name w:val="Normal"/><w:qFormat/>')
        a("<w:pPr>")
        a(_spacing_xml(cfg.paragraphs.spacing, cfg.line_spacing))
        a(_indentation_xml(normal.indentation))
        if normal.alignment != TextAlignment.LEFT:
            a(f'<w:jc w:val="{normal.alignment.value}"/>')
        a("</w:pPr>")
        if normal.font is not None:
            a(_font_rpr(normal.font))
        a("</w:style>")

        # ---- headings ----
        for level, heading in enumerate(cfg.headings, start=1):
            a(f'<w:style w:type="paragraph" w:styleId="Heading{level}">')
            a(f'<w:name w:val="heading {level}"/>')
            a('<w:basedOn w:val="Normal"/><w:next w:val="Normal"/>')
            a('<w:uiPriority w:val="9"/><w:qFormat/>')
            a("<w:pPr>")
            if heading.keep_with_next:
                a("<w:keepNext/>")
            if heading.keep_lines:
                a("<w:keepLines/>")
            a(_spacing_xml(heading.spacing))
            a(f'<w:outlineLvl w:val="{level - 1}"/>')
            a("</w:pPr>")
            a(_font_rpr(heading.font, bold=True, kern=32))
            a("</w:style>")

        # ---- code block ----
        code = cfg.code_blocks
        a('<w:style w:type="paragraph" w:styleId="CodeBlock">')
        a('<w:name w:val="Code Block"/><w:basedOn w:val="Normal"/>')
        a("<w:pPr>")
        a(_paragraph_border_xml(code.border))
        a(f'<w:shd w:val="clear" w:color="auto" w:fill="{code.background}"/>')
        a(_spacing_xml(code.spacing))
        a(_indentation_xml(code.indentation))
        a("</w:pPr>")
        a(_font_rpr(code.font))
        a("</w:style>")

        # ---- quote ----
        quote = cfg.blockquotes
        a('<w:style w:type="paragraph" w:styleId="Quote">')
        a('<w:name w:val="Quote"/><w:basedOn w:val="Normal"/>')
        a("<w:pPr>")
        a(_paragraph_border_xml(quote.border))
        a(_spacing_xml(quote.spacing))
        a(_indentation_xml(quote.indentation))
        a("</w:pPr>")
        a(_font_rpr(quote.font, italic=True))
        a("</w:style>")

        # ---- lists ----
        lists = cfg.lists
        for style_id, name, font in (
            ("ListBullet", "List Bullet", lists.bullet_font),
            ("ListNumber", "List Number", lists.numbered_font),
        ):
            a(f'<w:style w:type="paragraph" w:styleId="{style_id}">')
            a(f'<w:name w:val="{name}"/><w:basedOn w:val="Normal"/>')
            a(f"<w:pPr>{_indentation_xml(Indentation(left=lists.indentation))}</w:pPr>")
            a(_font_rpr(font))
            a("</w:style>")

        # ---- table cell paragraphs ----
        tables = cfg.tables
        for style_id, name, font, bold in (
            (TableHandler.HEADER_STYLE_ID, "Table Header", tables.header_font, True),
            (TableHandler.BODY_STYLE_ID, "Table Body", tables.body_font, False),
        ):
            a(f'<w:style w:type="paragraph" w:styleId="{style_id}">')
            a(f'<w:name w:val="{name}"/><w:basedOn w:val="Normal"/>')
            a(_font_rpr(font, bold=bold))
            a("</w:style>")

        a(self.tables.render_table_style())

        # ---- inline code ----
        a('<w:style w:type="character" w:styleId="Code">')
        a('<w:name w:val="Code"/>')
        a(_font_rpr(code.font, extra='<w:shd w:val="clear" w:color="auto" w:fill="F9F2F4"/>'))
        a("</w:style>")

        a("</w:styles>")
        return "".join(L)

    # ======================================================================
    # DOCX ZIP packaging
    # ======================================================================

    @staticmethod
    def _encode_part(name: str, xml: str) -> bytes:
        try:
            return xml.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise DocxEncodingError(name) from exc

    @staticmethod
    def _package_docx(payloads: dict[str, bytes]) -> bytes:
        """Assemble encoded parts into a ZIP archive."""
        buf = io.BytesIO()
        try:
            with zipfile.ZipFile(buf, "w", zipfile.ZIP_DEFLATED) as zf:
                for name, data in payloads.items():
                    info = zipfile.ZipInfo(name, date_time=_ZIP_DATE_TIME)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    info.external_attr = 0o600 << 16
                    zf.writestr(info, data)
        except (OSError, ValueError, zipfile.LargeZipFile) as exc:
            raise DocxArchiveError(f"Cannot write DOCX archive: {exc}") from exc
        return buf.getvalue()
