"""DOCX styling configuration and named style presets.

The configuration is a tree of frozen dataclasses whose leaves are
WordprocessingML native integers: lengths in twips, font sizes in
half-points, border widths in eighths of a point.  Every field has a
default, so ``StylingConfig()`` is a plain Calibri 12pt Letter document.

:class:`StyleManager` maps preset names (default, academic, business,
minimal) to complete :class:`StylingConfig` values.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional

from md2docx.units import Measurement


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class LineSpacingType(Enum):
    AUTO = "auto"
    AT_LEAST = "atLeast"
    EXACTLY = "exactly"
    MULTIPLE = "multiple"


class BorderStyle(Enum):
    SINGLE = "single"
    DOUBLE = "double"
    DASHED = "dashed"
    DOTTED = "dotted"


class TextAlignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "both"


class HyperlinkMode(Enum):
    """How runs carrying a link are written to the document body."""

    COLORED_TEXT = "colored_text"
    INLINE_URL = "inline_url"
    HYPERLINK = "hyperlink"


# ---------------------------------------------------------------------------
# Page geometry
# ---------------------------------------------------------------------------

# Preset paper sizes in points (width, height)
PAGE_SIZES_PT: dict[str, tuple[float, float]] = {
    "letter": (612.0, 792.0),
    "legal": (612.0, 1008.0),
    "a4": (595.0, 842.0),
    "a3": (842.0, 1191.0),
    "a5": (420.0, 595.0),
    "executive": (522.0, 756.0),
    "tabloid": (792.0, 1224.0),
}


@dataclass(frozen=True)
class PageSize:
    """Page width and height in twips."""

    width: int = 12240
    height: int = 15840

    @classmethod
    def from_name(cls, name: str) -> PageSize:
        key = name.lower()
        if key not in PAGE_SIZES_PT:
            raise ValueError(
                f"Unknown page size {name!r}. Choose from: {', '.join(PAGE_SIZES_PT)}"
            )
        width_pt, height_pt = PAGE_SIZES_PT[key]
        return cls(
            width=Measurement.points(width_pt).twips,
            height=Measurement.points(height_pt).twips,
        )


PAGE_SIZES: dict[str, PageSize] = {name: PageSize.from_name(name) for name in PAGE_SIZES_PT}


@dataclass(frozen=True)
class PageMargins:
    """Page margins in twips."""

    top: int = 1440
    right: int = 1440
    bottom: int = 1440
    left: int = 1440
    header: int = 720
    footer: int = 720
    gutter: int = 0


# ---------------------------------------------------------------------------
# Shared building blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FontConfig:
    """Font name, size in half-points and hex colour without ``#``."""

    name: str = "Calibri"
    size: int = 24
    color: str = "000000"

    def derive(self, **overrides) -> FontConfig:
        """Return a copy with selected fields overridden."""
        return replace(self, **overrides)


@dataclass(frozen=True)
class LineSpacing:
    """Document-wide line spacing.

    ``value`` is in twips for *atLeast* / *exactly* and in 240ths of a
    line for *multiple*.  Without a value no line rule is written.
    """

    type: LineSpacingType = LineSpacingType.AUTO
    value: Optional[int] = None


@dataclass(frozen=True)
class Spacing:
    """Space before/after a paragraph and an optional exact line height."""

    before: int = 0
    after: int = 0
    line: Optional[int] = None

    def derive(self, **overrides) -> Spacing:
        return replace(self, **overrides)


@dataclass(frozen=True)
class Indentation:
    left: int = 0
    right: int = 0
    first_line: Optional[int] = None
    hanging: Optional[int] = None

    def derive(self, **overrides) -> Indentation:
        return replace(self, **overrides)


@dataclass(frozen=True)
class BorderSide:
    """One border edge; ``width`` is in eighths of a point."""

    width: int = 4
    color: str = "000000"
    style: BorderStyle = BorderStyle.SINGLE


@dataclass(frozen=True)
class Border:
    top: Optional[BorderSide] = None
    right: Optional[BorderSide] = None
    bottom: Optional[BorderSide] = None
    left: Optional[BorderSide] = None

    @classmethod
    def all(cls, side: BorderSide) -> Border:
        return cls(top=side, right=side, bottom=side, left=side)

    @property
    def is_empty(self) -> bool:
        return not any((self.top, self.right, self.bottom, self.left))


# ---------------------------------------------------------------------------
# Per-element style blocks
# ---------------------------------------------------------------------------

def default_heading_font(level: int) -> FontConfig:
    """Calibri, shrinking by 2pt per level from 16pt down to 8pt."""
    return FontConfig(name="Calibri", size=max(32 - (level - 1) * 4, 16), color="000000")


@dataclass(frozen=True)
class HeadingStyle:
    level: int = 1
    font: Optional[FontConfig] = None
    spacing: Spacing = field(default_factory=Spacing)
    keep_with_next: bool = True
    keep_lines: bool = True

    def __post_init__(self) -> None:
        if self.font is None:
            object.__setattr__(self, "font", default_heading_font(self.level))

    def derive(self, **overrides) -> HeadingStyle:
        return replace(self, **overrides)


@dataclass(frozen=True)
class HeadingStyles:
    h1: HeadingStyle = field(default_factory=lambda: HeadingStyle(level=1))
    h2: HeadingStyle = field(default_factory=lambda: HeadingStyle(level=2))
    h3: HeadingStyle = field(default_factory=lambda: HeadingStyle(level=3))
    h4: HeadingStyle = field(default_factory=lambda: HeadingStyle(level=4))
    h5: HeadingStyle = field(default_factory=lambda: HeadingStyle(level=5))
    h6: HeadingStyle = field(default_factory=lambda: HeadingStyle(level=6))

    def __post_init__(self) -> None:
        # the slot decides the level
        for level in range(1, 7):
            style = getattr(self, f"h{level}")
            if style.level != level:
                object.__setattr__(self, f"h{level}", replace(style, level=level))

    def style_for(self, level: int) -> HeadingStyle:
        """Return the style for heading *level*; levels outside 1-6 use ``h1``."""
        if 1 <= level <= 6:
            return getattr(self, f"h{level}")
        return self.h1

    def __iter__(self):
        return iter((self.h1, self.h2, self.h3, self.h4, self.h5, self.h6))


@dataclass(frozen=True)
class ParagraphStyle:
    # None inherits the document default font
    font: Optional[FontConfig] = None
    alignment: TextAlignment = TextAlignment.LEFT
    indentation: Indentation = field(default_factory=Indentation)


@dataclass(frozen=True)
class ParagraphStyles:
    normal: ParagraphStyle = field(default_factory=ParagraphStyle)
    spacing: Spacing = field(default_factory=Spacing)


@dataclass(frozen=True)
class CodeBlockStyles:
    font: FontConfig = field(
        default_factory=lambda: FontConfig(name="Consolas", size=20, color="C7254E")
    )
    background: str = "F5F5F5"
    border: Border = field(default_factory=Border)
    indentation: Indentation = field(default_factory=lambda: Indentation(left=720, right=720))
    spacing: Spacing = field(default_factory=lambda: Spacing(before=120, after=120))


@dataclass(frozen=True)
class BlockquoteStyles:
    font: FontConfig = field(default_factory=lambda: FontConfig(size=24, color="000000"))
    border: Border = field(
        default_factory=lambda: Border(left=BorderSide(width=8, color="CCCCCC"))
    )
    indentation: Indentation = field(default_factory=lambda: Indentation(left=720, right=720))
    spacing: Spacing = field(default_factory=lambda: Spacing(before=120, after=120))


@dataclass(frozen=True)
class TableStyles:
    border: Border = field(default_factory=Border)
    cell_padding: int = 120
    header_font: FontConfig = field(default_factory=lambda: FontConfig(size=24, color="000000"))
    body_font: FontConfig = field(default_factory=lambda: FontConfig(size=24, color="000000"))


@dataclass(frozen=True)
class ListStyles:
    bullet_font: FontConfig = field(default_factory=FontConfig)
    numbered_font: FontConfig = field(default_factory=FontConfig)
    indentation: int = 720


# ---------------------------------------------------------------------------
# Root configuration
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StylingConfig:
    """Complete styling for one conversion, in native DOCX units."""

    page_size: PageSize = field(default_factory=PageSize)
    page_margins: PageMargins = field(default_factory=PageMargins)
    default_font: FontConfig = field(default_factory=FontConfig)
    line_spacing: LineSpacing = field(default_factory=LineSpacing)
    headings: HeadingStyles = field(default_factory=HeadingStyles)
    paragraphs: ParagraphStyles = field(default_factory=ParagraphStyles)
    code_blocks: CodeBlockStyles = field(default_factory=CodeBlockStyles)
    blockquotes: BlockquoteStyles = field(default_factory=BlockquoteStyles)
    tables: TableStyles = field(default_factory=TableStyles)
    lists: ListStyles = field(default_factory=ListStyles)
    link_color: str = "0066cc"
    hyperlink_mode: HyperlinkMode = HyperlinkMode.COLORED_TEXT

    def derive(self, **overrides) -> StylingConfig:
        """Return a copy with selected top-level fields overridden."""
        return replace(self, **overrides)

    @property
    def content_width(self) -> int:
        """Usable text width between the left and right margins."""
        return self.page_size.width - self.page_margins.left - self.page_margins.right


# ---------------------------------------------------------------------------
# Preset definitions
# ---------------------------------------------------------------------------

def _build_headings(
    font: FontConfig,
    sizes: dict[int, int],
    before: dict[int, int],
    after: dict[int, int],
) -> HeadingStyles:
    styles = {
        f"h{level}": HeadingStyle(
            level=level,
            font=font.derive(size=sizes[level]),
            spacing=Spacing(before=before[level], after=after[level]),
        )
        for level in range(1, 7)
    }
    return HeadingStyles(**styles)


def _build_default_config() -> StylingConfig:
    """Plain Calibri 12pt on Letter with 1 inch margins."""
    return StylingConfig()


def _build_academic_config() -> StylingConfig:
    """Serif body, double spacing, ruled tables."""

    body_font = FontConfig(name="Times New Roman", size=24, color="000000")
    rule = BorderSide(width=4, color="000000")

    return StylingConfig(
        default_font=body_font,
        line_spacing=LineSpacing(type=LineSpacingType.MULTIPLE, value=480),
        headings=_build_headings(
            body_font,
            sizes={1: 32, 2: 28, 3: 26, 4: 24, 5: 24, 6: 24},
            before={1: 480, 2: 360, 3: 240, 4: 240, 5: 200, 6: 160},
            after={1: 240, 2: 200, 3: 160, 4: 120, 5: 120, 6: 120},
        ),
        paragraphs=ParagraphStyles(
            normal=ParagraphStyle(
                alignment=TextAlignment.JUSTIFY,
                indentation=Indentation(first_line=720),
            ),
            spacing=Spacing(after=160),
        ),
        code_blocks=CodeBlockStyles(
            font=FontConfig(name="Courier New", size=19, color="000000"),
            background="F5F5F5",
        ),
        blockquotes=BlockquoteStyles(
            font=body_font,
            border=Border(),
            indentation=Indentation(left=1080, right=1080),
            spacing=Spacing(before=120, after=120),
        ),
        tables=TableStyles(
            border=Border(top=rule, bottom=rule),
            cell_padding=100,
            header_font=body_font.derive(size=20),
            body_font=body_font.derive(size=20),
        ),
        lists=ListStyles(bullet_font=body_font, numbered_font=body_font, indentation=720),
        link_color="000080",
    )


def _build_business_config() -> StylingConfig:
    """Sans-serif, compact spacing, gridded tables on A4."""

    body_font = FontConfig(name="Arial", size=20, color="222222")
    accent = "1F3864"
    grid = BorderSide(width=4, color="A6A6A6")

    return StylingConfig(
        page_size=PageSize.from_name("a4"),
        page_margins=PageMargins(top=1134, right=1134, bottom=1134, left=1134),
        default_font=body_font,
        line_spacing=LineSpacing(type=LineSpacingType.MULTIPLE, value=276),
        headings=_build_headings(
            body_font.derive(color=accent),
            sizes={1: 40, 2: 32, 3: 26, 4: 22, 5: 21, 6: 20},
            before={1: 280, 2: 240, 3: 200, 4: 160, 5: 120, 6: 120},
            after={1: 160, 2: 120, 3: 80, 4: 80, 5: 80, 6: 80},
        ),
        paragraphs=ParagraphStyles(spacing=Spacing(after=80)),
        code_blocks=CodeBlockStyles(
            font=FontConfig(name="Consolas", size=18, color="333333"),
            background="F5F5F5",
            border=Border.all(BorderSide(width=4, color="D9D9D9")),
        ),
        blockquotes=BlockquoteStyles(
            font=body_font.derive(color="555555"),
            border=Border(left=BorderSide(width=12, color=accent)),
            indentation=Indentation(left=320, right=320),
            spacing=Spacing(before=80, after=80),
        ),
        tables=TableStyles(
            border=Border.all(grid),
            cell_padding=80,
            header_font=body_font.derive(size=18, color=accent),
            body_font=body_font.derive(size=18),
        ),
        lists=ListStyles(bullet_font=body_font, numbered_font=body_font, indentation=360),
        link_color=accent,
    )


def _build_minimal_config() -> StylingConfig:
    """Clean sans-serif with tight spacing and no decorations."""

    body_font = FontConfig(name="Helvetica Neue", size=20, color="000000")

    return StylingConfig(
        page_margins=PageMargins(top=1080, right=1080, bottom=1080, left=1080),
        default_font=body_font,
        headings=_build_headings(
            body_font,
            sizes={1: 36, 2: 30, 3: 25, 4: 22, 5: 21, 6: 20},
            before={1: 240, 2: 200, 3: 160, 4: 120, 5: 80, 6: 80},
            after={1: 120, 2: 100, 3: 80, 4: 60, 5: 60, 6: 60},
        ),
        paragraphs=ParagraphStyles(spacing=Spacing(after=60)),
        code_blocks=CodeBlockStyles(
            font=FontConfig(name="Menlo", size=18, color="000000"),
            background="FAFAFA",
            indentation=Indentation(),
            spacing=Spacing(before=60, after=60),
        ),
        blockquotes=BlockquoteStyles(
            font=body_font.derive(color="666666"),
            border=Border(),
            indentation=Indentation(left=280),
            spacing=Spacing(before=60, after=60),
        ),
        tables=TableStyles(
            cell_padding=60,
            header_font=body_font.derive(size=18),
            body_font=body_font.derive(size=18),
        ),
        lists=ListStyles(bullet_font=body_font, numbered_font=body_font, indentation=320),
        link_color="000000",
    )


# ---------------------------------------------------------------------------
# Preset registry
# ---------------------------------------------------------------------------

_PRESET_BUILDERS = {
    "default": _build_default_config,
    "academic": _build_academic_config,
    "business": _build_business_config,
    "minimal": _build_minimal_config,
}


class StyleManager:
    """Resolve a named style preset to a :class:`StylingConfig`.

    Usage::

        sm = StyleManager("academic")
        h1 = sm.config.headings.style_for(1)
    """

    PRESETS = list(_PRESET_BUILDERS.keys())

    def __init__(self, preset: str = "default") -> None:
        if preset not in _PRESET_BUILDERS:
            raise ValueError(
                f"Unknown preset {preset!r}. Choose from: {', '.join(_PRESET_BUILDERS)}"
            )
        self.preset = preset
        self.config: StylingConfig = _PRESET_BUILDERS[preset]()

    def get_heading_style(self, level: int) -> HeadingStyle:
        return self.config.headings.style_for(level)
