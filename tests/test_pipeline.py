"""Tests for the export pipeline and its steps."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from pagepull.errors import FetchError, RasterizationError
from pagepull.extraction import ContentBuilder
from pagepull.models.config import ExtractionConfig, RenderOptions
from pagepull.models.content import Heading, Paragraph
from pagepull.models.events import EventType
from pagepull.pipeline.base import ExportPipeline, ExportStep, PageContext
from pagepull.pipeline.steps import ExtractStep, FetchStep, RasterizeStep, RenderStep, SaveStep
from pagepull.pipeline.steps import save as save_module
from pagepull.rendering import OutputFormat


class TestPageContext:
    """Tests for PageContext dataclass."""

    def test_create_context(self):
        """Test creating a page context."""
        ctx = PageContext(url="https://example.com/page", output_path=Path("/tmp/test.md"))
        assert ctx.url == "https://example.com/page"
        assert ctx.output_format == OutputFormat.MARKDOWN
        assert ctx.options == RenderOptions()
        assert ctx.html is None
        assert ctx.document is None
        assert ctx.rendered is None

    def test_steps_satisfy_protocol(self, mock_http_client):
        """Test that the built-in steps implement ExportStep."""
        for step in (FetchStep(mock_http_client), ExtractStep(), RenderStep(), SaveStep()):
            assert isinstance(step, ExportStep)


class TestFetchStep:
    """Tests for FetchStep."""

    @pytest.mark.asyncio
    async def test_fetch_populates_context(self, mock_http_client):
        """Test that a successful fetch stores the body and status."""
        events = []
        ctx = PageContext(url="https://example.com/article", output_path=Path("out.md"))
        ctx = await FetchStep(mock_http_client).execute(ctx, events.append)

        assert ctx.html.startswith(b"<!DOCTYPE html>")
        assert ctx.status_code == 200
        assert ctx.bytes_downloaded == len(ctx.html)
        assert [e.type for e in events] == [EventType.FETCH_STARTED, EventType.FETCH_COMPLETED]
        mock_http_client.get.assert_awaited_once_with("https://example.com/article", timeout=None)

    @pytest.mark.asyncio
    async def test_fetch_failure_reraised(self):
        """Test that fetch errors are reported and re-raised."""
        client = AsyncMock()
        client.get.side_effect = FetchError("HTTP 404", url="https://example.com/x", status=404)
        events = []

        with pytest.raises(FetchError):
            await FetchStep(client).execute(PageContext(url="https://example.com/x", output_path=Path("x.md")), events.append)

        assert events[-1].type == EventType.FETCH_FAILED
        assert events[-1].status_code == 404


class TestExtractStep:
    """Tests for ExtractStep."""

    @pytest.mark.asyncio
    async def test_extract(self, article_html):
        """Test that HTML becomes a document."""
        events = []
        ctx = PageContext(url="https://example.com/article", output_path=Path("out.md"))
        ctx.html = article_html.encode("utf-8")

        ctx = await ExtractStep().execute(ctx, events.append)

        assert ctx.document.title == "Readable Content"
        assert ctx.document.metadata.source_url == "https://example.com/article"
        assert events[0].type == EventType.CONTENT_EXTRACTED
        assert events[0].sections == len(ctx.document.sections)

    @pytest.mark.asyncio
    async def test_duplicates_counted(self):
        """Test that dropped duplicates are recorded."""
        ctx = PageContext(url="", output_path=Path("out.md"))
        ctx.html = b"<main><h2>S</h2><h2>S</h2></main>"

        ctx = await ExtractStep(ContentBuilder(ExtractionConfig())).execute(ctx)

        assert ctx.document.sections == (Heading(2, "S"),)
        assert ctx.duplicates_dropped == 1

    @pytest.mark.asyncio
    async def test_missing_html(self):
        """Test that extraction without fetched content fails."""
        with pytest.raises(ValueError):
            await ExtractStep().execute(PageContext(url="", output_path=Path("out.md")))

    @pytest.mark.asyncio
    async def test_response_charset_used(self):
        """Test that the fetched Content-Type charset decodes the page."""
        ctx = PageContext(url="https://example.de/", output_path=Path("out.md"))
        ctx.html = "<main><p>Grüße aus Köln</p></main>".encode("iso-8859-1")
        ctx.content_type = "text/html; charset=iso-8859-1"

        ctx = await ExtractStep().execute(ctx)

        assert ctx.document.sections == (Paragraph("Grüße aus Köln"),)


class TestRenderStep:
    """Tests for RenderStep."""

    @pytest.mark.asyncio
    async def test_render_markdown(self, sample_document):
        """Test rendering in the context's format."""
        ctx = PageContext(url="", output_path=Path("out.md"), output_format=OutputFormat.MARKDOWN)
        ctx.document = sample_document

        ctx = await RenderStep().execute(ctx)
        assert ctx.rendered.startswith("# Sample")

    @pytest.mark.asyncio
    async def test_render_pdf_produces_styled_document(self, sample_document):
        """Test that PDF output renders the styled HTML document."""
        ctx = PageContext(url="", output_path=Path("out.pdf"), output_format=OutputFormat.PDF)
        ctx.document = sample_document

        ctx = await RenderStep().execute(ctx)
        assert ctx.rendered.startswith("<!DOCTYPE html>")

    @pytest.mark.asyncio
    async def test_render_uses_options(self, sample_document):
        """Test that context options reach the renderer."""
        ctx = PageContext(
            url="",
            output_path=Path("out.txt"),
            output_format=OutputFormat.TEXT,
            options=RenderOptions(footer_text="Acme"),
        )
        ctx.document = sample_document

        ctx = await RenderStep().execute(ctx)
        assert ctx.rendered.endswith("Acme\n")


class TestSaveStep:
    """Tests for SaveStep."""

    @pytest.mark.asyncio
    async def test_save(self, tmp_path):
        """Test writing rendered content, creating directories."""
        output = tmp_path / "nested" / "out.md"
        events = []
        ctx = PageContext(url="https://example.com", output_path=output)
        ctx.rendered = "# Grüße\n"

        ctx = await SaveStep().execute(ctx, events.append)

        assert output.read_text(encoding="utf-8") == "# Grüße\n"
        assert ctx.output_path == output.resolve()
        assert events[0].type == EventType.DOCUMENT_SAVED

    @pytest.mark.asyncio
    async def test_nothing_to_save(self, tmp_path):
        """Test that saving without rendered content fails."""
        with pytest.raises(ValueError):
            await SaveStep().execute(PageContext(url="", output_path=tmp_path / "out.md"))

    @pytest.mark.asyncio
    async def test_failed_write_keeps_existing_file(self, tmp_path, monkeypatch):
        """Test that a failed save leaves the previous file intact and no temp files behind."""
        output = tmp_path / "out.md"
        output.write_text("old", encoding="utf-8")

        def fail_replace(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr(save_module.os, "replace", fail_replace)
        events = []
        ctx = PageContext(url="https://example.com", output_path=output)
        ctx.rendered = "new content"

        with pytest.raises(OSError, match="disk full"):
            await SaveStep().execute(ctx, events.append)

        assert output.read_text(encoding="utf-8") == "old"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.md"]
        assert events == []

    @pytest.mark.asyncio
    async def test_overwrites_existing_file(self, tmp_path):
        """Test that saving replaces an existing file."""
        output = tmp_path / "out.md"
        output.write_text("old", encoding="utf-8")
        ctx = PageContext(url="https://example.com", output_path=output)
        ctx.rendered = "new"

        await SaveStep().execute(ctx)

        assert output.read_text(encoding="utf-8") == "new"
        assert sorted(p.name for p in tmp_path.iterdir()) == ["out.md"]


class TestRasterizeStep:
    """Tests for RasterizeStep."""

    @pytest.mark.asyncio
    async def test_rasterize(self, tmp_path):
        """Test that the styled document is handed to the rasterizer."""
        output = tmp_path / "out.pdf"
        rasterizer = AsyncMock()
        rasterizer.rasterize.return_value = output
        options = RenderOptions(footer_text="Acme")

        ctx = PageContext(url="", output_path=output, output_format=OutputFormat.PDF, options=options)
        ctx.rendered = "<!DOCTYPE html><html></html>"
        ctx = await RasterizeStep(rasterizer).execute(ctx)

        rasterizer.rasterize.assert_awaited_once_with("<!DOCTYPE html><html></html>", output, options)
        assert ctx.output_path == output

    @pytest.mark.asyncio
    async def test_rasterize_failure(self, tmp_path):
        """Test that rasterization errors are logged and re-raised without a FAILED event."""
        rasterizer = AsyncMock()
        rasterizer.rasterize.side_effect = RasterizationError("browser crashed")
        events = []

        ctx = PageContext(url="https://example.com", output_path=tmp_path / "out.pdf")
        ctx.rendered = "<html></html>"
        with pytest.raises(RasterizationError):
            await RasterizeStep(rasterizer).execute(ctx, events.append)

        assert EventType.FAILED not in [e.type for e in events]
        assert not (tmp_path / "out.pdf").exists()


class TestExportPipeline:
    """Tests for ExportPipeline."""

    @pytest.mark.asyncio
    async def test_full_pipeline(self, mock_http_client, tmp_path):
        """Test fetch, extract, render and save in order."""
        output = tmp_path / "article.md"
        events = []
        pipeline = ExportPipeline(steps=[FetchStep(mock_http_client), ExtractStep(), RenderStep(), SaveStep()])

        ctx = await pipeline.execute(
            "https://example.com/article",
            output,
            OutputFormat.MARKDOWN,
            RenderOptions(footer_text="Acme"),
            emit=events.append,
        )

        content = output.read_text(encoding="utf-8")
        assert content.startswith("# Readable Content\n")
        assert "- Less noise" in content
        assert content.endswith("Acme\n")
        assert ctx.document is not None

        types = [e.type for e in events]
        assert types[0] == EventType.STARTED
        assert types[-1] == EventType.COMPLETED
        assert types.index(EventType.FETCH_COMPLETED) < types.index(EventType.CONTENT_EXTRACTED)
        assert types.index(EventType.DOCUMENT_RENDERED) < types.index(EventType.DOCUMENT_SAVED)

    @pytest.mark.asyncio
    async def test_failure_propagates_and_nothing_written(self, tmp_path):
        """Test that a failing step stops the pipeline and re-raises."""
        client = AsyncMock()
        client.get.side_effect = FetchError("Could not fetch", url="https://example.com")
        output = tmp_path / "out.md"
        save = SaveStep()
        save.execute = AsyncMock()
        events = []

        pipeline = ExportPipeline(steps=[FetchStep(client), ExtractStep(), RenderStep(), save])
        with pytest.raises(FetchError):
            await pipeline.execute("https://example.com", output, emit=events.append)

        save.execute.assert_not_called()
        assert not output.exists()
        assert events[-1].type == EventType.FAILED
        assert events[-1].error.startswith("fetch:")

    def test_add_step(self):
        """Test the fluent add_step API."""
        pipeline = ExportPipeline(steps=[])
        assert pipeline.add_step(RenderStep()).add_step(SaveStep()) is pipeline
        assert [step.name for step in pipeline.steps] == ["render", "save"]
