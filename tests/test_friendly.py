"""Tests for the Measurement-based configuration and its lowering."""

from __future__ import annotations

import pytest

from md2docx.friendly import (
    FriendlyBorder,
    FriendlyBorderSide,
    FriendlyFontConfig,
    FriendlyIndentation,
    FriendlyPageMargins,
    FriendlyPageSize,
    FriendlySpacing,
    FriendlyStylingConfig,
    SystemFont,
)
from md2docx.style_manager import (
    BorderStyle,
    HyperlinkMode,
    Indentation,
    PageMargins,
    PageSize,
    Spacing,
    StylingConfig,
)
from md2docx.units import Measurement


class TestLowering:
    def test_defaults_match_native_defaults(self) -> None:
        assert FriendlyStylingConfig().to_styling_config() == StylingConfig()

    def test_page_size(self) -> None:
        assert FriendlyPageSize.from_name("a4").to_page_size() == PageSize(width=11900, height=16840)

    def test_unknown_page_size(self) -> None:
        with pytest.raises(ValueError):
            FriendlyPageSize.from_name("postcard")

    def test_margins(self) -> None:
        margins = FriendlyPageMargins(
            top=Measurement.inches(1.25),
            left=Measurement.centimeters(2),
        ).to_page_margins()
        assert margins == PageMargins(top=1800, left=1133)

    def test_font_size_in_half_points(self) -> None:
        font = FriendlyFontConfig(name="Arial", size=Measurement.points(11)).to_font_config()
        assert (font.name, font.size) == ("Arial", 22)

    def test_spacing(self) -> None:
        spacing = FriendlySpacing(
            before=Measurement.points(6),
            after=Measurement.points(12),
            line=Measurement.points(14),
        ).to_spacing()
        assert spacing == Spacing(before=120, after=240, line=280)

    def test_indentation(self) -> None:
        ind = FriendlyIndentation(
            left=Measurement.inches(0.5),
            hanging=Measurement.inches(0.25),
        ).to_indentation()
        assert ind == Indentation(left=720, right=0, first_line=None, hanging=360)

    def test_border_width_in_eighth_points(self) -> None:
        side = FriendlyBorderSide(
            width=Measurement.points(1), color="FF0000", style=BorderStyle.DASHED
        ).to_border_side()
        assert (side.width, side.color, side.style) == (2, "FF0000", BorderStyle.DASHED)

    def test_border_keeps_missing_sides(self) -> None:
        border = FriendlyBorder(bottom=FriendlyBorderSide()).to_border()
        assert border.top is None
        assert border.bottom is not None
        assert border.bottom.width == 1

    def test_full_config(self) -> None:
        cfg = FriendlyStylingConfig(
            page_size=FriendlyPageSize.from_name("legal"),
            default_font=FriendlyFontConfig.from_system_font(SystemFont.SERIF, Measurement.points(13)),
            link_color="112233",
            hyperlink_mode=HyperlinkMode.HYPERLINK,
        ).to_styling_config()
        assert cfg.page_size == PageSize(width=12240, height=20160)
        assert (cfg.default_font.name, cfg.default_font.size) == ("Times New Roman", 26)
        assert cfg.link_color == "112233"
        assert cfg.hyperlink_mode == HyperlinkMode.HYPERLINK


class TestSystemFont:
    def test_primary_and_fallbacks(self) -> None:
        assert SystemFont.SYSTEM_MONO.primary == "Consolas"
        assert "Monaco" in SystemFont.SYSTEM_MONO.fallbacks

    def test_full_font_name(self) -> None:
        assert SystemFont.SANS_SERIF.full_font_name.startswith("Arial, Helvetica")

    def test_default_size(self) -> None:
        font = FriendlyFontConfig.from_system_font(SystemFont.SYSTEM)
        assert font.to_font_config().size == 24
