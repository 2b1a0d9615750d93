"""High-level Markdown-to-DOCX conversion orchestrator.

Ties together the parser, translator and renderer into a single
public API for converting Markdown text or files to DOCX output.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

from md2docx.friendly import FriendlyStylingConfig
from md2docx.parser import MarkdownParser
from md2docx.renderer import DocxRenderer
from md2docx.style_manager import StyleManager, StylingConfig
from md2docx.translator import MarkdownTranslator

logger = logging.getLogger(__name__)

AnyStylingConfig = Union[StylingConfig, FriendlyStylingConfig]


def _resolve_config(config: Optional[AnyStylingConfig], style_preset: str) -> StylingConfig:
    if config is None:
        return StyleManager(style_preset).config
    if isinstance(config, FriendlyStylingConfig):
        return config.to_styling_config()
    return config


class Converter:
    """Convert Markdown content to DOCX format.

    Usage::

        converter = Converter(style_preset="academic")
        converter.convert_file("input.md", "output.docx")

        # or from string, with an explicit configuration
        docx_bytes = Converter(StylingConfig(page_size=PageSize.from_name("a4"))).convert_text("# Hello")

    An explicit *config* takes precedence over *style_preset*.
    """

    STYLE_PRESETS = StyleManager.PRESETS

    def __init__(
        self,
        config: Optional[AnyStylingConfig] = None,
        *,
        style_preset: str = "default",
    ) -> None:
        self.config: StylingConfig = _resolve_config(config, style_preset)
        self.parser = MarkdownParser()
        self.translator = MarkdownTranslator()
        self.renderer = DocxRenderer(self.config)

    def translate(self, markdown_text: str) -> list:
        """Parse *markdown_text* into document-model elements."""
        doc = self.parser.parse(markdown_text)
        elements = self.translator.translate(doc)
        logger.debug("Translated %d top-level elements", len(elements))
        return elements

    def convert_text(self, markdown_text: str) -> bytes:
        """Convert Markdown text to DOCX bytes.

        Args:
            markdown_text: Markdown source string.

        Returns:
            DOCX file content as bytes.

        Raises:
            DocxError: The package could not be encoded or archived.
        """
        data = self.renderer.render(self.translate(markdown_text))
        logger.debug("Rendered DOCX archive of %d bytes", len(data))
        return data

    def build_parts(self, markdown_text: str) -> dict[str, str]:
        """Return the XML parts for *markdown_text* without zipping them."""
        return self.renderer.build_parts(self.translate(markdown_text))

    def convert_path(self, input_path: str | Path, *, encoding: str = "utf-8") -> bytes:
        """Read a Markdown file in full and return DOCX bytes."""
        md_text = Path(input_path).read_text(encoding=encoding)
        return self.convert_text(md_text)

    def convert_file(
        self,
        input_path: str | Path,
        output_path: str | Path,
        *,
        encoding: str = "utf-8",
    ) -> None:
        """Read a Markdown file and write the DOCX output.

        Args:
            input_path: Path to the input ``.md`` file.
            output_path: Path for the output ``.docx`` file.
            encoding: Text encoding of the source file.
        """
        output_path = Path(output_path)
        docx_bytes = self.convert_path(input_path, encoding=encoding)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(docx_bytes)
        logger.debug("Wrote %s", output_path)


def convert(markdown_text: str, config: Optional[AnyStylingConfig] = None) -> bytes:
    """Convert *markdown_text* to DOCX bytes with *config* (default styling if omitted)."""
    return Converter(config).convert_text(markdown_text)
