"""
pagepull - Extract the readable content of a web page into documents.

Usage:
    from pagepull import Exporter, PagepullConfig, RenderOptions

    config = PagepullConfig(render=RenderOptions(footer_text="Acme Corp"))

    async with Exporter(config) as exporter:
        await exporter.export("https://example.com/post", "post.pdf")

Offline extraction:
    from pagepull import extract_content, get_renderer

    doc = extract_content(html, url="https://example.com/post")
    print(get_renderer("markdown").render(doc))
"""

__version__ = "1.0.0"

from .core.exporter import Exporter, export_blocking, scrape_blocking
from .errors import FetchError, PagepullError, RasterizationError, UnsupportedFormatError
from .extraction import ContentBuilder, build_document, extract_content, parse_html
from .models.config import (
    ExtractionConfig,
    Margins,
    NetworkConfig,
    PagepullConfig,
    PageSize,
    PdfConfig,
    RenderOptions,
)
from .models.content import (
    ContentDocument,
    ContentMetadata,
    Heading,
    ItemList,
    Paragraph,
    Quote,
    Section,
    identity_key,
)
from .models.events import EventType, ExportEvent
from .rendering import OutputFormat, detect_format, get_renderer

__all__ = [
    "__version__",
    # Core
    "Exporter",
    "export_blocking",
    "scrape_blocking",
    # Extraction
    "ContentBuilder",
    "build_document",
    "extract_content",
    "parse_html",
    # Rendering
    "OutputFormat",
    "detect_format",
    "get_renderer",
    # Content model
    "ContentDocument",
    "ContentMetadata",
    "Heading",
    "ItemList",
    "Paragraph",
    "Quote",
    "Section",
    "identity_key",
    # Config
    "PagepullConfig",
    "ExtractionConfig",
    "NetworkConfig",
    "PdfConfig",
    "RenderOptions",
    "Margins",
    "PageSize",
    # Events
    "EventType",
    "ExportEvent",
    # Errors
    "PagepullError",
    "FetchError",
    "UnsupportedFormatError",
    "RasterizationError",
]
