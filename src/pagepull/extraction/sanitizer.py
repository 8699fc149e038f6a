"""Boilerplate removal from parsed HTML trees."""

import logging
from typing import Optional

from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

# Elements to remove before extraction (scripts, chrome, navigation, controls)
REMOVE_SELECTORS = [
    # Scripts, styles and embedded media
    "script",
    "style",
    "noscript",
    "iframe",
    "svg",
    "object",
    "embed",
    # Landmarks and their class aliases
    "header",
    "footer",
    "nav",
    "menu",
    ".navigation",
    ".menu",
    ".nav",
    ".cookie-banner",
    ".announcement-bar",
    # Interactive controls
    "button",
    ".button",
    '[role="button"]',
    # Forms
    "form",
    # Duplicated chrome
    ".header",
    ".footer",
    ".sidebar",
]

# Form fields are kept when they sit inside narrative text
FORM_FIELD_TAGS = ["input", "select", "textarea"]
NARRATIVE_TAGS = ["p"]


class Sanitizer:
    """
    Removes boilerplate nodes from a parsed tree.

    The tree is mutated in place and returned, so calls can be chained.
    Removal is order-independent: a node matched by several selectors is
    removed once.

    Example:
        soup = parse_html(html_bytes)
        Sanitizer().sanitize(soup)
    """

    def __init__(self, remove_selectors: Optional[list[str]] = None):
        """
        Initialize the sanitizer.

        Args:
            remove_selectors: CSS selectors for elements to remove (extends defaults)
        """
        self._remove_selectors = list(REMOVE_SELECTORS)
        if remove_selectors:
            self._remove_selectors.extend(remove_selectors)

    @property
    def remove_selectors(self) -> list[str]:
        """Selectors removed by this sanitizer."""
        return list(self._remove_selectors)

    def _remove_selected(self, soup: BeautifulSoup) -> int:
        """Remove every element matching a removal selector."""
        removed = 0
        for el in soup.select(", ".join(self._remove_selectors)):
            # A match inside an already removed subtree is gone with its ancestor
            if el.decomposed:
                continue
            el.decompose()
            removed += 1
        return removed

    def _remove_form_fields(self, soup: BeautifulSoup) -> int:
        """Remove standalone form fields that are not part of narrative text."""
        removed = 0
        for el in soup.find_all(FORM_FIELD_TAGS):
            if not isinstance(el, Tag) or el.decomposed:
                continue
            if el.find_parent(NARRATIVE_TAGS) is not None:
                continue
            el.decompose()
            removed += 1
        return removed

    def sanitize(self, soup: BeautifulSoup) -> BeautifulSoup:
        """
        Remove boilerplate elements from *soup*.

        Args:
            soup: Parsed tree (mutated in place)

        Returns:
            The same tree, for chaining
        """
        removed = self._remove_selected(soup)
        removed += self._remove_form_fields(soup)
        logger.debug(f"Sanitizer removed {removed} elements")
        return soup
