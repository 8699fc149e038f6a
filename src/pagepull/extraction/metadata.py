"""Title and metadata extraction."""

from typing import Optional

from bs4 import BeautifulSoup, Tag

from ..models.content import ContentMetadata, normalize_text, utc_timestamp


def extract_title(soup: BeautifulSoup) -> str:
    """
    Extract the document title.

    Uses the first h1 anywhere in the document, then the <title> element.

    Returns:
        Title text, or "" if neither yields text
    """
    h1 = soup.find("h1")
    if isinstance(h1, Tag):
        text = normalize_text(h1.get_text())
        if text:
            return text

    title_tag = soup.find("title")
    if isinstance(title_tag, Tag):
        return normalize_text(title_tag.get_text())

    return ""


def extract_description(soup: BeautifulSoup) -> str:
    """Return the content of the description meta element, or ""."""
    meta_desc = soup.find("meta", attrs={"name": "description"})
    if isinstance(meta_desc, Tag) and meta_desc.get("content"):
        return str(meta_desc["content"]).strip()
    return ""


def extract_metadata(soup: BeautifulSoup, url: str, extracted_at: Optional[str] = None) -> ContentMetadata:
    """
    Build the metadata record for a document.

    Args:
        soup: Parsed tree
        url: Source URL, passed through unchanged
        extracted_at: ISO-8601 timestamp to record (defaults to now, UTC)

    Returns:
        ContentMetadata
    """
    return ContentMetadata(
        source_url=url,
        description=extract_description(soup),
        extracted_at=extracted_at or utc_timestamp(),
    )
