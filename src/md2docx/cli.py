"""Command-line interface for md2docx.

Usage::

    md2docx input.md                          # writes input.docx
    md2docx input.md -o output.docx           # explicit output path
    md2docx input.md --style academic         # use academic preset
    md2docx input.md --page-size a4           # override the preset's paper
    md2docx input.md --link-mode hyperlink    # clickable links
    md2docx --list-styles                     # list available presets
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from md2docx import __version__
from md2docx.converter import Converter
from md2docx.style_manager import PAGE_SIZES, HyperlinkMode, PageSize, StyleManager, StylingConfig


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="md2docx",
        description="Convert Markdown files to Word (DOCX) format.",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Path to the Markdown file to convert.",
    )
    parser.add_argument(
        "-o", "--output",
        help="Output DOCX file path. Defaults to <input>.docx.",
    )
    parser.add_argument(
        "-s", "--style",
        default="default",
        choices=StyleManager.PRESETS,
        help="Style preset (default: %(default)s).",
    )
    parser.add_argument(
        "--page-size",
        choices=list(PAGE_SIZES),
        help="Paper size; overrides the style preset.",
    )
    parser.add_argument(
        "--link-mode",
        choices=[mode.value for mode in HyperlinkMode],
        help="How links are written; overrides the style preset.",
    )
    parser.add_argument(
        "-e", "--encoding",
        default="utf-8",
        help="Input file encoding (default: %(default)s).",
    )
    parser.add_argument(
        "--list-styles",
        action="store_true",
        help="List available style presets and exit.",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Print progress information.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def _build_config(args: argparse.Namespace) -> StylingConfig:
    config = StyleManager(args.style).config
    overrides = {}
    if args.page_size:
        overrides["page_size"] = PageSize.from_name(args.page_size)
    if args.link_mode:
        overrides["hyperlink_mode"] = HyperlinkMode(args.link_mode)
    return config.derive(**overrides) if overrides else config


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.list_styles:
        print("Available style presets:")
        for preset in StyleManager.PRESETS:
            print(f"  - {preset}")
        return 0

    if not args.input:
        parser.error("the following argument is required: input")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    input_path = Path(args.input)
    if not input_path.is_file():
        print(f"Error: file not found: {input_path}", file=sys.stderr)
        return 1

    # Determine output path
    if args.output:
        output_path = Path(args.output)
    else:
        output_path = input_path.with_suffix(".docx")

    if args.verbose:
        print(f"Input:  {input_path}")
        print(f"Output: {output_path}")
        print(f"Style:  {args.style}")

    try:
        converter = Converter(_build_config(args))
        converter.convert_file(input_path, output_path, encoding=args.encoding)
    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.verbose:
        print(f"Done. {output_path.stat().st_size} bytes written.")
    else:
        print(f"Converted: {output_path}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
