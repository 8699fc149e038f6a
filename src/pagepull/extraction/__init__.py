"""Content extraction for pagepull (sanitize, extract sections, build documents)."""

from .builder import BuildResult, ContentBuilder, build_document, extract_content, header_charset, parse_html
from .metadata import extract_description, extract_metadata, extract_title
from .sanitizer import REMOVE_SELECTORS, Sanitizer
from .sections import SectionExtractor

__all__ = [
    "BuildResult",
    "ContentBuilder",
    "REMOVE_SELECTORS",
    "Sanitizer",
    "SectionExtractor",
    "build_document",
    "extract_content",
    "extract_description",
    "extract_metadata",
    "extract_title",
    "header_charset",
    "parse_html",
]
