"""md2docx - Markdown to Word (DOCX) converter."""

__version__ = "0.1.0"

from md2docx.converter import Converter, convert  # noqa: E402
from md2docx.errors import DocxError  # noqa: E402
from md2docx.friendly import FriendlyStylingConfig  # noqa: E402
from md2docx.style_manager import HyperlinkMode, StylingConfig  # noqa: E402
from md2docx.units import Measurement, Unit  # noqa: E402

__all__ = [
    "__version__",
    "Converter",
    "DocxError",
    "FriendlyStylingConfig",
    "HyperlinkMode",
    "Measurement",
    "StylingConfig",
    "Unit",
    "convert",
]
