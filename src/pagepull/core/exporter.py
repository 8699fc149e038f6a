"""Main Exporter class: fetch one page and write it in a document format."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from types import TracebackType
from typing import Callable, Optional, Union

from ..extraction.builder import ContentBuilder
from ..http import AsyncHttpClient, HttpClient
from ..models.config import PagepullConfig, RenderOptions
from ..models.content import ContentDocument
from ..models.events import ExportEvent
from ..pipeline.base import ExportPipeline, ExportStep, PageContext
from ..pipeline.steps import ExtractStep, FetchStep, RasterizeStep, RenderStep, SaveStep
from ..rendering import BrowserRasterizer, OutputFormat, Rasterizer, detect_format, get_renderer

logger = logging.getLogger(__name__)

FormatLike = Union[str, OutputFormat]


class Exporter:
    """
    Primary API for pagepull.

    Owns one HTTP session (and, for PDF output, one browser) for the
    lifetime of its ``async with`` block. Collaborators passed in by the
    caller are used as-is and never opened or closed by the exporter.

    Example:
        config = PagepullConfig(render=RenderOptions(footer_text="Acme Corp"))

        async with Exporter(config) as exporter:
            doc = await exporter.scrape("https://example.com/post")
            print(exporter.render(doc, "markdown"))

            await exporter.export("https://example.com/post", Path("post.pdf"))
    """

    def __init__(
        self,
        config: Optional[PagepullConfig] = None,
        http_client: Optional[HttpClient] = None,
        rasterizer: Optional[Rasterizer] = None,
        on_event: Optional[Callable[[ExportEvent], None]] = None,
    ):
        """
        Initialize the Exporter.

        Args:
            config: Configuration (defaults if None)
            http_client: HTTP client to use instead of an owned AsyncHttpClient
            rasterizer: Rasterizer to use instead of an owned BrowserRasterizer
            on_event: Optional callback receiving every ExportEvent
        """
        self.config = config or PagepullConfig()
        self._on_event = on_event
        self._builder = ContentBuilder(self.config.extraction)

        self._http_client: HttpClient | None = http_client
        self._rasterizer: Rasterizer | None = rasterizer
        self._owned_http_client: AsyncHttpClient | None = None
        self._owned_rasterizer: BrowserRasterizer | None = None
        self._entered = False

    async def __aenter__(self) -> Exporter:
        """Enter async context and open the HTTP session if owned."""
        if self._http_client is None:
            network = self.config.network
            self._owned_http_client = AsyncHttpClient(
                max_retries=network.max_retries,
                user_agent=network.user_agent,
                accept_language=network.accept_language,
                proxy=network.proxy,
                default_timeout=network.timeout,
            )
            await self._owned_http_client.__aenter__()
            self._http_client = self._owned_http_client

        self._entered = True
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and release owned resources."""
        if self._owned_rasterizer:
            await self._owned_rasterizer.close()
            self._owned_rasterizer = None
            self._rasterizer = None

        if self._owned_http_client:
            await self._owned_http_client.__aexit__(exc_type, exc_val, exc_tb)
            self._owned_http_client = None
            self._http_client = None

        self._entered = False

    def _emit(self, event: ExportEvent) -> None:
        if self._on_event:
            self._on_event(event)

    def _require_client(self) -> HttpClient:
        if not self._entered or self._http_client is None:
            raise RuntimeError("Exporter not initialized. Use 'async with' context manager.")
        return self._http_client

    def _get_rasterizer(self) -> Rasterizer:
        if self._rasterizer is None:
            self._owned_rasterizer = BrowserRasterizer(self.config.pdf)
            self._rasterizer = self._owned_rasterizer
        return self._rasterizer

    def resolve_format(self, output_path: Path, output_format: Optional[FormatLike] = None) -> OutputFormat:
        """
        Resolve the output format from an explicit name or the file extension.

        Raises:
            UnsupportedFormatError: If an explicit name is not recognized
        """
        if output_format is None:
            return detect_format(output_path)
        return OutputFormat.parse(output_format)

    async def scrape(self, url: str) -> ContentDocument:
        """
        Fetch a page and extract its content.

        Args:
            url: Page URL

        Returns:
            ContentDocument

        Raises:
            FetchError: If the page cannot be fetched
            RuntimeError: If extraction produced no document
        """
        client = self._require_client()
        ctx = PageContext(url=url, output_path=Path())

        for step in (FetchStep(client), ExtractStep(self._builder)):
            ctx = await step.execute(ctx, self._emit)

        if ctx.document is None:
            raise RuntimeError(f"No document extracted for {url}")
        return ctx.document

    def render(
        self,
        document: ContentDocument,
        output_format: FormatLike = OutputFormat.MARKDOWN,
        options: Optional[RenderOptions] = None,
    ) -> str:
        """
        Render a document to text.

        For PDF this returns the styled HTML that would be rasterized.

        Raises:
            UnsupportedFormatError: If the format is not recognized
        """
        return get_renderer(output_format).render(document, options or self.config.render)

    async def export(
        self,
        url: str,
        output_path: Union[str, Path],
        output_format: Optional[FormatLike] = None,
        options: Optional[RenderOptions] = None,
    ) -> Path:
        """
        Fetch, extract, render and write one page.

        The format is resolved before any network access, so an unknown
        format never triggers a fetch.

        Args:
            url: Page URL
            output_path: Destination file
            output_format: Format name (detected from the extension if None)
            options: Render options (config.render if None)

        Returns:
            Path of the written file

        Raises:
            UnsupportedFormatError: Unknown format
            FetchError: Page could not be fetched
            RasterizationError: PDF generation failed
        """
        output_path = Path(output_path)
        fmt = self.resolve_format(output_path, output_format)
        client = self._require_client()

        steps: list[ExportStep] = [
            FetchStep(client),
            ExtractStep(self._builder),
            RenderStep(),
        ]
        if fmt == OutputFormat.PDF:
            steps.append(RasterizeStep(self._get_rasterizer()))
        else:
            steps.append(SaveStep())

        logger.info(f"Exporting {url} as {fmt.value} to {output_path}")

        pipeline = ExportPipeline(steps=steps)
        ctx = await pipeline.execute(
            url,
            output_path,
            output_format=fmt,
            options=options or self.config.render,
            emit=self._emit,
        )
        return ctx.output_path


def _ensure_no_running_loop(name: str) -> None:
    # Detect if we're already in an async context
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return
    raise RuntimeError(f"{name}() called from async context. Use 'async with Exporter()' instead.")


def scrape_blocking(
    url: str,
    config: Optional[PagepullConfig] = None,
    on_event: Optional[Callable[[ExportEvent], None]] = None,
) -> ContentDocument:
    """
    Blocking scrape for sync code.

    WARNING: Do not call from within an existing event loop (e.g., Jupyter,
    asyncio-based frameworks). Use the async Exporter API instead.

    Example:
        doc = scrape_blocking("https://example.com/post")
        print(doc.title)
    """
    _ensure_no_running_loop("scrape_blocking")

    async def _run() -> ContentDocument:
        async with Exporter(config, on_event=on_event) as exporter:
            return await exporter.scrape(url)

    return asyncio.run(_run())


def export_blocking(
    url: str,
    output_path: Union[str, Path],
    output_format: Optional[FormatLike] = None,
    options: Optional[RenderOptions] = None,
    config: Optional[PagepullConfig] = None,
    on_event: Optional[Callable[[ExportEvent], None]] = None,
) -> Path:
    """
    Blocking export with optional event callback.

    WARNING: Do not call from within an existing event loop. Use the async
    Exporter API instead.

    Args:
        url: Page URL
        output_path: Destination file
        output_format: Format name (detected from the extension if None)
        options: Render options
        config: Configuration
        on_event: Optional callback for events (for progress tracking)

    Returns:
        Path of the written file

    Example:
        export_blocking("https://example.com/post", "post.md", options=RenderOptions(footer_text="Acme"))
    """
    _ensure_no_running_loop("export_blocking")

    async def _run() -> Path:
        async with Exporter(config, on_event=on_event) as exporter:
            return await exporter.export(url, output_path, output_format, options)

    return asyncio.run(_run())
