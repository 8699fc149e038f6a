"""Shared fixtures for pagepull tests."""

from unittest.mock import AsyncMock

import pytest
from pagepull.http.protocols import HttpResponse
from pagepull.models.content import (
    ContentDocument,
    ContentMetadata,
    Heading,
    ItemList,
    Paragraph,
    Quote,
)

ARTICLE_HTML = """<!DOCTYPE html>
<html>
<head>
  <title>Fallback Title</title>
  <meta name="description" content="A short article about extraction.">
  <script>var tracking = true;</script>
  <style>body { color: red; }</style>
</head>
<body>
  <header><nav><a href="/">Home</a><a href="/blog">Blog</a></nav></header>
  <div class="sidebar"><p>Sidebar promo text</p></div>
  <main>
    <h1>Readable Content</h1>
    <p>Extraction keeps only the   narrative text of a page.</p>
    <h2>Why it matters</h2>
    <ul><li>Less noise</li><li>Smaller files</li></ul>
    <blockquote>Stay hungry</blockquote>
    <ol><li>Fetch</li><li>Extract</li><li>Render</li></ol>
    <button>Subscribe</button>
    <p>ok</p>
  </main>
  <footer><p>Copyright notice</p></footer>
</body>
</html>
"""

FIXED_TIMESTAMP = "2025-01-15T10:30:00.000+00:00"


@pytest.fixture
def article_html() -> str:
    """A page with boilerplate around a main content region."""
    return ARTICLE_HTML


@pytest.fixture
def sample_document() -> ContentDocument:
    """A document with one section of every kind and a fixed timestamp."""
    return ContentDocument(
        title="Sample",
        metadata=ContentMetadata(
            source_url="https://example.com/sample",
            description="Sample description",
            extracted_at=FIXED_TIMESTAMP,
        ),
        sections=(
            Heading(level=2, text="Overview"),
            Paragraph(text="First paragraph."),
            ItemList(ordered=False, items=("X", "Y")),
            ItemList(ordered=True, items=("One", "Two")),
            Quote(text="Stay hungry"),
        ),
    )


@pytest.fixture
def mock_http_client():
    """HTTP client mock returning the article page."""
    client = AsyncMock()
    client.get.return_value = HttpResponse(
        status_code=200,
        content=ARTICLE_HTML.encode("utf-8"),
        content_type="text/html; charset=utf-8",
        headers={"Content-Type": "text/html; charset=utf-8"},
        url="https://example.com/article",
    )
    return client
