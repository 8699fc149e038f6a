"""Tests for the content model and events."""

from datetime import datetime, timezone

import pytest
from bs4 import BeautifulSoup
from pagepull.extraction import SectionExtractor
from pagepull.models.content import (
    ContentDocument,
    ContentMetadata,
    Heading,
    ItemList,
    Paragraph,
    Quote,
    identity_key,
    normalize_text,
)
from pagepull.models.events import EventType, ExportEvent


class TestSections:
    """Tests for section validation."""

    def test_heading_level_bounds(self):
        """Test that heading levels outside 1..6 are rejected."""
        Heading(level=1, text="Top")
        Heading(level=6, text="Bottom")
        with pytest.raises(ValueError):
            Heading(level=0, text="Zero")
        with pytest.raises(ValueError):
            Heading(level=7, text="Seven")

    def test_empty_text_rejected(self):
        """Test that blank text is rejected for every text section."""
        with pytest.raises(ValueError):
            Heading(level=2, text="   ")
        with pytest.raises(ValueError):
            Paragraph(text="")
        with pytest.raises(ValueError):
            Quote(text="\n")

    def test_list_requires_items(self):
        """Test that lists need at least one non-empty item."""
        with pytest.raises(ValueError):
            ItemList(ordered=False, items=())
        with pytest.raises(ValueError):
            ItemList(ordered=True, items=("ok", " "))

    def test_list_items_stored_as_tuple(self):
        """Test that list items given as a list become a tuple."""
        section = ItemList(ordered=False, items=["a", "b"])
        assert section.items == ("a", "b")
        assert hash(section) == hash(ItemList(ordered=False, items=("a", "b")))

    def test_sections_are_frozen(self):
        """Test that sections cannot be mutated."""
        section = Paragraph(text="Hello")
        with pytest.raises(AttributeError):
            section.text = "Changed"

    def test_paragraph_length_enforced_by_extractor(self):
        """Test that short paragraphs construct but the default extractor never emits them."""
        assert Paragraph(text="ab").text == "ab"

        soup = BeautifulSoup("<main><p>ab</p><p>Long enough</p></main>", "lxml")
        assert SectionExtractor().extract(soup) == (Paragraph(text="Long enough"),)


class TestIdentityKey:
    """Tests for deduplication keys."""

    def test_heading_key_includes_level(self):
        """Test that the same text at different levels gives different keys."""
        assert identity_key(Heading(2, "S")) == "h2:S"
        assert identity_key(Heading(2, "S")) != identity_key(Heading(3, "S"))

    def test_list_key_includes_orderedness(self):
        """Test that ordered and unordered lists with equal items differ."""
        bullets = identity_key(ItemList(False, ("a", "b")))
        numbered = identity_key(ItemList(True, ("a", "b")))
        assert bullets == "bullet-list:a\nb"
        assert numbered == "numbered-list:a\nb"

    def test_key_normalizes_whitespace(self):
        """Test that whitespace differences do not change the key."""
        assert identity_key(Paragraph("Hello   world")) == identity_key(Paragraph(" Hello world "))

    def test_paragraph_and_quote_differ(self):
        """Test that the variant tag is part of the key."""
        assert identity_key(Paragraph("Same")) != identity_key(Quote("Same"))

    def test_non_section_rejected(self):
        """Test that arbitrary objects are rejected."""
        with pytest.raises(TypeError):
            identity_key("not a section")


class TestNormalizeText:
    """Tests for whitespace normalization."""

    def test_collapses_runs(self):
        """Test that runs of whitespace become single spaces."""
        assert normalize_text("  a \n\t b  ") == "a b"


class TestContentDocument:
    """Tests for ContentDocument."""

    def test_sections_become_tuple(self):
        """Test that a section list is stored as a tuple."""
        doc = ContentDocument(
            title="T",
            metadata=ContentMetadata(source_url="https://example.com"),
            sections=[Paragraph("Hello")],
        )
        assert isinstance(doc.sections, tuple)

    def test_filter_sections_returns_new_document(self, sample_document):
        """Test that filtering derives a new document and leaves the original."""
        headings = sample_document.filter_sections(lambda s: isinstance(s, Heading))
        assert headings.sections == (Heading(2, "Overview"),)
        assert len(sample_document.sections) == 5
        assert headings.metadata == sample_document.metadata

    def test_with_sections(self, sample_document):
        """Test replacing the section sequence."""
        doc = sample_document.with_sections([])
        assert doc.sections == ()
        assert doc.title == sample_document.title

    def test_extracted_at_datetime(self, sample_document):
        """Test parsing the captured timestamp."""
        assert sample_document.extracted_at_datetime == datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_extracted_at_datetime_accepts_z_suffix(self):
        """Test that a trailing Z is read as UTC."""
        doc = ContentDocument(
            title="T",
            metadata=ContentMetadata(source_url="", extracted_at="2025-03-01T00:00:00Z"),
        )
        assert doc.extracted_at_datetime.tzinfo is not None
        assert doc.extracted_at_datetime.month == 3

    def test_default_timestamp_is_utc(self):
        """Test that metadata captures a UTC timestamp by default."""
        metadata = ContentMetadata(source_url="https://example.com")
        assert metadata.extracted_at.endswith("+00:00")

    def test_invalid_timestamp_rejected(self):
        """Test that a non-ISO timestamp fails when the metadata is built."""
        with pytest.raises(ValueError, match="ISO-8601"):
            ContentMetadata(source_url="https://example.com", extracted_at="15. Januar 2025")


class TestExportEvent:
    """Tests for ExportEvent."""

    def test_is_error(self):
        """Test error classification."""
        assert ExportEvent(type=EventType.FAILED).is_error
        assert ExportEvent(type=EventType.FETCH_FAILED).is_error
        assert not ExportEvent(type=EventType.COMPLETED).is_error

    def test_timestamp_is_utc(self):
        """Test that events carry an aware UTC timestamp."""
        event = ExportEvent(type=EventType.STARTED, url="https://example.com")
        assert event.timestamp.tzinfo == timezone.utc
