"""Content model: extracted sections and the immutable document they form."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Union


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to single spaces and trim."""
    return " ".join(text.split())


def _require_text(text: str, kind: str) -> None:
    if not text or not text.strip():
        raise ValueError(f"{kind} text must not be empty")


@dataclass(frozen=True)
class Heading:
    """A heading of level 1 (most important) to 6."""

    level: int
    text: str

    def __post_init__(self) -> None:
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")
        _require_text(self.text, "Heading")


@dataclass(frozen=True)
class Paragraph:
    """
    A block of narrative text.

    Only non-empty text is required here. The minimum paragraph length is
    configurable (``ExtractionConfig.min_paragraph_length``), so
    SectionExtractor enforces it and never constructs a shorter paragraph.
    """

    text: str

    def __post_init__(self) -> None:
        _require_text(self.text, "Paragraph")


@dataclass(frozen=True)
class ItemList:
    """An ordered or unordered list of plain-text items."""

    ordered: bool
    items: tuple[str, ...]

    def __post_init__(self) -> None:
        # Accept any iterable but store a tuple so the section stays hashable
        object.__setattr__(self, "items", tuple(self.items))
        if not self.items:
            raise ValueError("List must have at least one item")
        for item in self.items:
            _require_text(item, "List item")


@dataclass(frozen=True)
class Quote:
    """A quoted passage."""

    text: str

    def __post_init__(self) -> None:
        _require_text(self.text, "Quote")


Section = Union[Heading, Paragraph, ItemList, Quote]

# Separator for list items in identity keys; extracted items never contain newlines
_ITEM_SEPARATOR = "\n"


def identity_key(section: Section) -> str:
    """
    Compute the deduplication key for a section.

    Two sections with the same key are considered duplicates. The key combines
    the variant tag (including heading level and list orderedness) with the
    normalized text or the joined list items.

    Args:
        section: The section to compute a key for

    Returns:
        Identity key string
    """
    match section:
        case Heading(level=level, text=text):
            return f"h{level}:{normalize_text(text)}"
        case Paragraph(text=text):
            return f"paragraph:{normalize_text(text)}"
        case ItemList(ordered=ordered, items=items):
            tag = "numbered-list" if ordered else "bullet-list"
            return f"{tag}:" + _ITEM_SEPARATOR.join(normalize_text(item) for item in items)
        case Quote(text=text):
            return f"quote:{normalize_text(text)}"
        case _:
            raise TypeError(f"Not a section: {section!r}")


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds")


@dataclass(frozen=True)
class ContentMetadata:
    """
    Metadata captured alongside the extracted sections.

    Attributes:
        source_url: The URL the markup was fetched from, unchanged
        description: Content of the description meta element (or "")
        extracted_at: ISO-8601 timestamp of the extraction
    """

    source_url: str
    description: str = ""
    extracted_at: str = field(default_factory=utc_timestamp)

    def __post_init__(self) -> None:
        try:
            datetime.fromisoformat(self.extracted_at.replace("Z", "+00:00"))
        except (TypeError, AttributeError, ValueError) as e:
            raise ValueError(f"extracted_at is not an ISO-8601 timestamp: {self.extracted_at!r}") from e


@dataclass(frozen=True)
class ContentDocument:
    """
    Immutable result of one extraction run.

    Callers that want a different section sequence derive a new document
    with :meth:`with_sections` or :meth:`filter_sections`.

    Example:
        doc = extract_content(html, "https://example.com/post")
        headings_only = doc.filter_sections(lambda s: isinstance(s, Heading))
    """

    title: str
    metadata: ContentMetadata
    sections: tuple[Section, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))

    @property
    def extracted_at_datetime(self) -> datetime:
        """The captured extraction timestamp as an aware datetime."""
        parsed = datetime.fromisoformat(self.metadata.extracted_at.replace("Z", "+00:00"))
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed

    def with_sections(self, sections: tuple[Section, ...] | list[Section]) -> ContentDocument:
        """Return a copy of this document with a different section sequence."""
        return dataclasses.replace(self, sections=tuple(sections))

    def filter_sections(self, predicate: Callable[[Section], bool]) -> ContentDocument:
        """Return a copy of this document keeping only sections matching *predicate*."""
        return self.with_sections([s for s in self.sections if predicate(s)])
