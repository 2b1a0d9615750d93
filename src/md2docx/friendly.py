"""Styling configuration expressed in familiar units.

Mirrors :mod:`md2docx.style_manager` but takes :class:`Measurement`
values for page geometry, fonts, spacing, indentation and borders.
Everything lowers to the native :class:`StylingConfig` through
:meth:`FriendlyStylingConfig.to_styling_config` before rendering.

Usage::

    config = FriendlyStylingConfig(
        page_size=FriendlyPageSize.from_name("a4"),
        page_margins=FriendlyPageMargins(top=Measurement.inches(1.25)),
        default_font=FriendlyFontConfig(name="Arial", size=Measurement.points(11)),
    )
    Converter(config).convert_text("# Hello")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from md2docx.style_manager import (
    PAGE_SIZES_PT,
    BlockquoteStyles,
    Border,
    BorderSide,
    BorderStyle,
    CodeBlockStyles,
    FontConfig,
    HeadingStyles,
    HyperlinkMode,
    Indentation,
    LineSpacing,
    ListStyles,
    PageMargins,
    PageSize,
    ParagraphStyles,
    Spacing,
    StylingConfig,
    TableStyles,
)
from md2docx.units import Measurement


def _optional_twips(value: Optional[Measurement]) -> Optional[int]:
    return value.twips if value is not None else None


# ---------------------------------------------------------------------------
# System font stacks
# ---------------------------------------------------------------------------

class SystemFont(Enum):
    """Common font stacks; Word uses the primary face."""

    SYSTEM = (
        "Calibri",
        ("-apple-system", "BlinkMacSystemFont", "Segoe UI", "Roboto", "Helvetica Neue", "Arial"),
    )
    SYSTEM_MONO = (
        "Consolas",
        ("SF Mono", "Monaco", "Menlo", "Courier New"),
    )
    SERIF = (
        "Times New Roman",
        ("Georgia", "Cambria", "Times"),
    )
    SANS_SERIF = (
        "Arial",
        ("Helvetica", "Helvetica Neue", "Liberation Sans"),
    )

    @property
    def primary(self) -> str:
        return self.value[0]

    @property
    def fallbacks(self) -> tuple[str, ...]:
        return self.value[1]

    @property
    def full_font_name(self) -> str:
        return ", ".join((self.primary,) + self.fallbacks)


# ---------------------------------------------------------------------------
# Friendly building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FriendlyPageSize:
    width: Measurement = field(default_factory=lambda: Measurement.points(612.0))
    height: Measurement = field(default_factory=lambda: Measurement.points(792.0))

    @classmethod
    def from_name(cls, name: str) -> FriendlyPageSize:
        key = name.lower()
        if key not in PAGE_SIZES_PT:
            raise ValueError(
                f"Unknown page size {name!r}. Choose from: {', '.join(PAGE_SIZES_PT)}"
            )
        width_pt, height_pt = PAGE_SIZES_PT[key]
        return cls(width=Measurement.points(width_pt), height=Measurement.points(height_pt))

    def to_page_size(self) -> PageSize:
        return PageSize(width=self.width.twips, height=self.height.twips)


@dataclass(frozen=True)
class FriendlyPageMargins:
    top: Measurement = field(default_factory=lambda: Measurement.inches(1.0))
    right: Measurement = field(default_factory=lambda: Measurement.inches(1.0))
    bottom: Measurement = field(default_factory=lambda: Measurement.inches(1.0))
    left: Measurement = field(default_factory=lambda: Measurement.inches(1.0))
    header: Measurement = field(default_factory=lambda: Measurement.inches(0.5))
    footer: Measurement = field(default_factory=lambda: Measurement.inches(0.5))
    gutter: Measurement = field(default_factory=lambda: Measurement.inches(0.0))

    def to_page_margins(self) -> PageMargins:
        return PageMargins(
            top=self.top.twips,
            right=self.right.twips,
            bottom=self.bottom.twips,
            left=self.left.twips,
            header=self.header.twips,
            footer=self.footer.twips,
            gutter=self.gutter.twips,
        )


@dataclass(frozen=True)
class FriendlyFontConfig:
    name: str = "Calibri"
    size: Measurement = field(default_factory=lambda: Measurement.points(12.0))
    color: str = "000000"

    @classmethod
    def from_system_font(
        cls,
        system_font: SystemFont,
        size: Optional[Measurement] = None,
        color: str = "000000",
    ) -> FriendlyFontConfig:
        return cls(
            name=system_font.primary,
            size=size if size is not None else Measurement.points(12.0),
            color=color,
        )

    def to_font_config(self) -> FontConfig:
        # twips / 10 == half-points
        return FontConfig(name=self.name, size=self.size.half_points, color=self.color)


@dataclass(frozen=True)
class FriendlySpacing:
    before: Measurement = field(default_factory=lambda: Measurement.points(0.0))
    after: Measurement = field(default_factory=lambda: Measurement.points(0.0))
    line: Optional[Measurement] = None

    def to_spacing(self) -> Spacing:
        return Spacing(
            before=self.before.twips,
            after=self.after.twips,
            line=_optional_twips(self.line),
        )


@dataclass(frozen=True)
class FriendlyIndentation:
    left: Measurement = field(default_factory=lambda: Measurement.inches(0.0))
    right: Measurement = field(default_factory=lambda: Measurement.inches(0.0))
    first_line: Optional[Measurement] = None
    hanging: Optional[Measurement] = None

    def to_indentation(self) -> Indentation:
        return Indentation(
            left=self.left.twips,
            right=self.right.twips,
            first_line=_optional_twips(self.first_line),
            hanging=_optional_twips(self.hanging),
        )


@dataclass(frozen=True)
class FriendlyBorderSide:
    width: Measurement = field(default_factory=lambda: Measurement.points(0.5))
    color: str = "000000"
    style: BorderStyle = BorderStyle.SINGLE

    def to_border_side(self) -> BorderSide:
        return BorderSide(width=int(self.width.twips / 10), color=self.color, style=self.style)


@dataclass(frozen=True)
class FriendlyBorder:
    top: Optional[FriendlyBorderSide] = None
    right: Optional[FriendlyBorderSide] = None
    bottom: Optional[FriendlyBorderSide] = None
    left: Optional[FriendlyBorderSide] = None

    def to_border(self) -> Border:
        def lower(side: Optional[FriendlyBorderSide]) -> Optional[BorderSide]:
            return side.to_border_side() if side is not None else None

        return Border(
            top=lower(self.top),
            right=lower(self.right),
            bottom=lower(self.bottom),
            left=lower(self.left),
        )


# ---------------------------------------------------------------------------
# Root configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FriendlyStylingConfig:
    """User-facing counterpart of :class:`StylingConfig`.

    Element style blocks are native values; build their spacing,
    indentation and borders with the ``Friendly*`` helpers above.
    """

    page_size: FriendlyPageSize = field(default_factory=FriendlyPageSize)
    page_margins: FriendlyPageMargins = field(default_factory=FriendlyPageMargins)
    default_font: FriendlyFontConfig = field(default_factory=FriendlyFontConfig)
    line_spacing: LineSpacing = field(default_factory=LineSpacing)
    headings: HeadingStyles = field(default_factory=HeadingStyles)
    paragraphs: ParagraphStyles = field(default_factory=ParagraphStyles)
    code_blocks: CodeBlockStyles = field(default_factory=CodeBlockStyles)
    blockquotes: BlockquoteStyles = field(default_factory=BlockquoteStyles)
    tables: TableStyles = field(default_factory=TableStyles)
    lists: ListStyles = field(default_factory=ListStyles)
    link_color: str = "0066cc"
    hyperlink_mode: HyperlinkMode = HyperlinkMode.COLORED_TEXT

    def to_styling_config(self) -> StylingConfig:
        return StylingConfig(
            page_size=self.page_size.to_page_size(),
            page_margins=self.page_margins.to_page_margins(),
            default_font=self.default_font.to_font_config(),
            line_spacing=self.line_spacing,
            headings=self.headings,
            paragraphs=self.paragraphs,
            code_blocks=self.code_blocks,
            blockquotes=self.blockquotes,
            tables=self.tables,
            lists=self.lists,
            link_color=self.link_color,
            hyperlink_mode=self.hyperlink_mode,
        )
