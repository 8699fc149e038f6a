"""Assemble parsed markup into a ContentDocument."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Optional, Union

from bs4 import BeautifulSoup

from ..models.config import ExtractionConfig
from ..models.content import ContentDocument, ContentMetadata, Section
from .metadata import extract_metadata, extract_title
from .sanitizer import Sanitizer
from .sections import SectionExtractor

logger = logging.getLogger(__name__)

_CHARSET_RE = re.compile(rb'charset=["\']?([^"\'\s>;/]+)', re.IGNORECASE)


def header_charset(content_type: Optional[str]) -> Optional[str]:
    """Return the charset parameter of a Content-Type header value, if any."""
    if not content_type:
        return None
    for part in content_type.split(";")[1:]:
        name, _, value = part.partition("=")
        if name.strip().lower() == "charset":
            return value.strip().strip("\"'") or None
    return None


def _detect_encoding(html: bytes, content_type: Optional[str] = None) -> str:
    """Detect character encoding from the Content-Type header, then a meta charset declaration."""
    declared = header_charset(content_type)
    if declared:
        return declared
    match = _CHARSET_RE.search(html[:2048])
    if match:
        return match.group(1).decode("ascii", errors="ignore").strip() or "utf-8"
    return "utf-8"


def parse_html(markup: Union[bytes, str], content_type: Optional[str] = None) -> BeautifulSoup:
    """
    Parse markup into a queryable tree.

    Uses the lxml backend, which closes implied end tags (``<p>a<p>b``,
    ``<li>a<li>b``) the way browsers do. Malformed markup yields a
    best-effort tree; this never raises.

    Args:
        markup: Raw HTML as bytes or str
        content_type: Content-Type header of the response; its charset wins
            over a meta charset declaration

    Returns:
        BeautifulSoup tree
    """
    if isinstance(markup, bytes):
        encoding = _detect_encoding(markup, content_type)
        try:
            markup = markup.decode(encoding, errors="replace")
        except LookupError:
            markup = markup.decode("utf-8", errors="replace")
    return BeautifulSoup(markup, "lxml")


def build_document(title: str, metadata: ContentMetadata, sections: Sequence[Section]) -> ContentDocument:
    """Assemble title, metadata and sections into one immutable document."""
    return ContentDocument(title=title, metadata=metadata, sections=tuple(sections))


@dataclass(frozen=True)
class BuildResult:
    """A built document plus extraction statistics."""

    document: ContentDocument
    duplicates_dropped: int


class ContentBuilder:
    """
    Runs sanitize, extract and assemble over a piece of markup.

    Each call parses its own tree and starts with an empty dedup set, so one
    builder can be reused for any number of pages.

    Example:
        builder = ContentBuilder(ExtractionConfig(min_paragraph_length=10))
        doc = builder.build(html_bytes, "https://example.com/post")
        print(doc.title, len(doc.sections))
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """
        Initialize the builder.

        Args:
            config: Extraction settings (defaults if None)
        """
        self._config = config or ExtractionConfig()
        self._sanitizer = Sanitizer(remove_selectors=self._config.remove_selectors)
        self._extractor = SectionExtractor(
            min_paragraph_length=self._config.min_paragraph_length,
            content_selectors=self._config.content_selectors,
        )

    def build_from_tree(self, soup: BeautifulSoup, url: str) -> BuildResult:
        """
        Sanitize *soup* in place and extract a document from it.

        Args:
            soup: Parsed tree (mutated by sanitizing)
            url: Source URL

        Returns:
            BuildResult with the document and the number of duplicates dropped
        """
        metadata = extract_metadata(soup, url)
        tree = self._sanitizer.sanitize(soup)
        sections, duplicates = self._extractor.extract_counted(tree)
        document = build_document(extract_title(tree), metadata, sections)
        logger.debug(f"Built document for {url}: {len(sections)} sections, title {document.title!r}")
        return BuildResult(document=document, duplicates_dropped=duplicates)

    def build_with_stats(
        self,
        markup: Union[bytes, str],
        url: str,
        content_type: Optional[str] = None,
    ) -> BuildResult:
        """Parse *markup* and build a document, keeping extraction statistics.

        *content_type* is the response Content-Type header, used to decode byte input.
        """
        return self.build_from_tree(parse_html(markup, content_type), url)

    def build(self, markup: Union[bytes, str], url: str, content_type: Optional[str] = None) -> ContentDocument:
        """
        Parse *markup* and build a document.

        Args:
            markup: Raw HTML
            url: Source URL, recorded in the metadata unchanged
            content_type: Content-Type header used to decode byte input

        Returns:
            ContentDocument
        """
        return self.build_with_stats(markup, url, content_type).document


def extract_content(
    markup: Union[bytes, str],
    url: str = "",
    config: Optional[ExtractionConfig] = None,
) -> ContentDocument:
    """
    Extract a ContentDocument from markup without any network access.

    Args:
        markup: Raw HTML
        url: Source URL of the page (may be empty)
        config: Extraction settings

    Returns:
        ContentDocument
    """
    return ContentBuilder(config).build(markup, url)
