"""Pagepull content, configuration and event models."""

from .config import (
    DEFAULT_CONTENT_SELECTORS,
    ExtractionConfig,
    Margins,
    NetworkConfig,
    PagepullConfig,
    PageSize,
    PdfConfig,
    RenderOptions,
)
from .content import (
    ContentDocument,
    ContentMetadata,
    Heading,
    ItemList,
    Paragraph,
    Quote,
    Section,
    identity_key,
    normalize_text,
)
from .events import EventType, ExportEvent

__all__ = [
    # Content
    "ContentDocument",
    "ContentMetadata",
    "Heading",
    "ItemList",
    "Paragraph",
    "Quote",
    "Section",
    "identity_key",
    "normalize_text",
    # Config
    "DEFAULT_CONTENT_SELECTORS",
    "ExtractionConfig",
    "Margins",
    "NetworkConfig",
    "PagepullConfig",
    "PageSize",
    "PdfConfig",
    "RenderOptions",
    # Events
    "EventType",
    "ExportEvent",
]
