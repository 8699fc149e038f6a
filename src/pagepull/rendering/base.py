"""Base renderer interface and shared rendering helpers."""

from __future__ import annotations

import html
import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from ..errors import UnsupportedFormatError
from ..models.config import RenderOptions
from ..models.content import ContentDocument, Section

GERMAN_MONTHS = (
    "Januar",
    "Februar",
    "März",
    "April",
    "Mai",
    "Juni",
    "Juli",
    "August",
    "September",
    "Oktober",
    "November",
    "Dezember",
)


class OutputFormat(str, Enum):
    """Output formats a document can be rendered to."""

    MARKDOWN = "markdown"
    TEXT = "text"
    HTML = "html"
    PDF = "pdf"

    @classmethod
    def parse(cls, value: Union[str, OutputFormat]) -> OutputFormat:
        """
        Resolve a format name or alias.

        Accepts the enum values plus the aliases 'md', 'txt' and 'htm'.

        Raises:
            UnsupportedFormatError: If the name is not recognized
        """
        if isinstance(value, OutputFormat):
            return value
        name = str(value).strip().lower()
        name = FORMAT_ALIASES.get(name, name)
        try:
            return cls(name)
        except ValueError:
            raise UnsupportedFormatError(str(value), tuple(f.value for f in cls)) from None


FORMAT_ALIASES = {
    "md": "markdown",
    "txt": "text",
    "htm": "html",
}

EXTENSION_FORMATS = {
    ".md": OutputFormat.MARKDOWN,
    ".markdown": OutputFormat.MARKDOWN,
    ".txt": OutputFormat.TEXT,
    ".html": OutputFormat.HTML,
    ".htm": OutputFormat.HTML,
    ".pdf": OutputFormat.PDF,
}


def detect_format(output_path: Union[str, Path]) -> OutputFormat:
    """
    Pick an output format from a file extension.

    Unknown extensions default to Markdown.
    """
    return EXTENSION_FORMATS.get(Path(output_path).suffix.lower(), OutputFormat.MARKDOWN)


def format_date(date: Optional[datetime] = None) -> str:
    """
    Format a date as day, full German month name and year.

    Example:
        >>> format_date(datetime(2025, 1, 15))
        '15. Januar 2025'
    """
    date = date or datetime.now(timezone.utc)
    return f"{date.day}. {GERMAN_MONTHS[date.month - 1]} {date.year}"


def escape_html(text: str) -> str:
    """Escape the five HTML special characters & < > " '."""
    return html.escape(text, quote=True)


class BaseRenderer(ABC):
    """
    Base class for output renderers.

    A renderer maps a ContentDocument to one text payload. Renderers are
    pure: the same document and options always give the same output, unless
    ``options.live_timestamp`` asks for the render time as generation date.
    """

    output_format: OutputFormat

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def render_section(self, section: Section) -> str:
        """
        Render one section.

        Unknown section types render as an empty string.
        """

    @abstractmethod
    def render(self, document: ContentDocument, options: Optional[RenderOptions] = None) -> str:
        """
        Render a complete document.

        Args:
            document: Document to render
            options: Footer, page and timestamp options

        Returns:
            Rendered text
        """

    @abstractmethod
    def get_file_extension(self) -> str:
        """File extension including dot (e.g. '.md')."""

    def render_sections(self, sections: Iterable[Section]) -> list[str]:
        """Render sections in order, dropping the empty output of unknown types."""
        rendered = [self.render_section(section) for section in sections]
        return [chunk for chunk in rendered if chunk]

    def generation_date(self, document: ContentDocument, options: RenderOptions) -> str:
        """Human-readable generation date for the document header."""
        if options.live_timestamp:
            return format_date()
        return format_date(document.extracted_at_datetime)
