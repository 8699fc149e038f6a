"""Section extraction: turn a sanitized tree into typed, deduplicated sections."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..models.config import DEFAULT_CONTENT_SELECTORS
from ..models.content import (
    Heading,
    ItemList,
    Paragraph,
    Quote,
    Section,
    identity_key,
    normalize_text,
)

logger = logging.getLogger(__name__)

HEADING_TAGS = {"h1": 1, "h2": 2, "h3": 3, "h4": 4, "h5": 5, "h6": 6}

# Descendants of these are never visited on their own
CONTAINER_TAGS = {"ul", "ol", "table"}


def element_text(element: Tag) -> str:
    """Return the element's text with whitespace collapsed and trimmed."""
    return normalize_text(element.get_text())


class SectionExtractor:
    """
    Extracts headings, paragraphs, lists and quotes from the content scope.

    Sections are emitted in document order. A section whose identity key was
    already seen earlier in the same call is dropped, so verbatim repeats
    (a common symptom of templated boilerplate) appear once.

    Example:
        soup = Sanitizer().sanitize(parse_html(html))
        sections = SectionExtractor().extract(soup)
    """

    def __init__(
        self,
        min_paragraph_length: int = 3,
        content_selectors: Optional[list[str]] = None,
    ):
        """
        Initialize the extractor.

        Args:
            min_paragraph_length: Minimum trimmed length of a kept paragraph
            content_selectors: Main-content selectors in priority order
        """
        self._min_paragraph_length = min_paragraph_length
        self._content_selectors = content_selectors or list(DEFAULT_CONTENT_SELECTORS)

    def find_scope(self, soup: BeautifulSoup) -> Tag:
        """
        Find the content scope: the first landmark match in priority order.

        Falls back to the body, then to the whole tree for fragments.
        """
        for selector in self._content_selectors:
            element = soup.select_one(selector)
            if element is not None:
                logger.debug(f"Content scope matched selector {selector!r}")
                return element

        body = soup.find("body")
        if isinstance(body, Tag):
            return body
        return soup

    def _inside_container(self, element: Tag, scope: Tag) -> bool:
        """Check whether *element* sits in a list or table below *scope*."""
        for parent in element.parents:
            if parent is scope:
                return False
            if parent.name in CONTAINER_TAGS:
                return True
        return False

    def _list_items(self, element: Tag) -> tuple[str, ...]:
        """Text of the direct li children; nested list text stays in its item."""
        items = (element_text(li) for li in element.find_all("li", recursive=False))
        return tuple(item for item in items if item)

    def classify(self, element: Tag) -> Optional[Section]:
        """
        Convert a single element into a section.

        Args:
            element: Element to classify

        Returns:
            The section, or None if the element does not qualify
        """
        name = element.name
        if name in HEADING_TAGS:
            text = element_text(element)
            return Heading(level=HEADING_TAGS[name], text=text) if text else None

        if name == "p":
            text = element_text(element)
            return Paragraph(text=text) if text and len(text) >= self._min_paragraph_length else None

        if name in ("ul", "ol"):
            items = self._list_items(element)
            return ItemList(ordered=name == "ol", items=items) if items else None

        if name == "blockquote":
            text = element_text(element)
            return Quote(text=text) if text else None

        return None

    def extract(self, soup: BeautifulSoup) -> tuple[Section, ...]:
        """
        Extract sections from a sanitized tree.

        Args:
            soup: Sanitized tree

        Returns:
            Sections in document order, first occurrences only
        """
        sections, _ = self.extract_counted(soup)
        return sections

    def extract_counted(self, soup: BeautifulSoup) -> tuple[tuple[Section, ...], int]:
        """
        Extract sections and report how many duplicates were dropped.

        Args:
            soup: Sanitized tree

        Returns:
            Tuple of (sections, duplicates_dropped)
        """
        scope = self.find_scope(soup)
        sections: list[Section] = []
        seen: set[str] = set()
        duplicates = 0

        for element in scope.find_all(True):
            if self._inside_container(element, scope):
                continue

            section = self.classify(element)
            if section is None:
                continue

            key = identity_key(section)
            if key in seen:
                duplicates += 1
                continue
            seen.add(key)
            sections.append(section)

        logger.debug(f"Extracted {len(sections)} sections ({duplicates} duplicates dropped)")
        return tuple(sections), duplicates
