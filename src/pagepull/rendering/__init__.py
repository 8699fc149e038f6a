"""Renderers that turn a ContentDocument into output formats."""

from typing import Union

from ..errors import UnsupportedFormatError
from .base import BaseRenderer, OutputFormat, detect_format, escape_html, format_date
from .html import HtmlRenderer, get_styles
from .markdown import MarkdownRenderer
from .pdf import PLAYWRIGHT_AVAILABLE, BrowserRasterizer, Rasterizer
from .text import PlainTextRenderer

RENDERERS: dict[OutputFormat, type[BaseRenderer]] = {
    OutputFormat.MARKDOWN: MarkdownRenderer,
    OutputFormat.TEXT: PlainTextRenderer,
    OutputFormat.HTML: HtmlRenderer,
    # PDF output is the styled document handed to a Rasterizer
    OutputFormat.PDF: HtmlRenderer,
}


def get_renderer(output_format: Union[str, OutputFormat]) -> BaseRenderer:
    """
    Get the text renderer for a format.

    Args:
        output_format: Format name, alias or OutputFormat

    Returns:
        Renderer instance

    Raises:
        UnsupportedFormatError: If the format is not recognized
    """
    resolved = OutputFormat.parse(output_format)
    renderer_cls = RENDERERS.get(resolved)
    if renderer_cls is None:
        raise UnsupportedFormatError(str(output_format), tuple(f.value for f in OutputFormat))
    return renderer_cls()


__all__ = [
    "PLAYWRIGHT_AVAILABLE",
    "BaseRenderer",
    "BrowserRasterizer",
    "HtmlRenderer",
    "MarkdownRenderer",
    "OutputFormat",
    "PlainTextRenderer",
    "RENDERERS",
    "Rasterizer",
    "detect_format",
    "escape_html",
    "format_date",
    "get_renderer",
    "get_styles",
]
