"""Paginated document output through a headless browser."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import tempfile
from pathlib import Path
from types import TracebackType
from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

from ..errors import RasterizationError
from ..models.config import PdfConfig, RenderOptions

logger = logging.getLogger(__name__)

# Check for Playwright availability
PLAYWRIGHT_AVAILABLE = False
try:
    from playwright.async_api import async_playwright

    PLAYWRIGHT_AVAILABLE = True
except ImportError:
    pass

if TYPE_CHECKING:
    from playwright.async_api import Browser, Playwright


@runtime_checkable
class Rasterizer(Protocol):
    """
    Protocol for turning a styled HTML document into a paginated file.

    Implementations must not leave a partial file behind on failure.
    """

    async def rasterize(
        self,
        html: str,
        output_path: Path,
        options: Optional[RenderOptions] = None,
    ) -> Path:
        """
        Write *html* as a paginated document to *output_path*.

        Args:
            html: Complete styled HTML document
            output_path: Destination file
            options: Page size and margins

        Returns:
            The path that was written

        Raises:
            RasterizationError: If the browser fails
        """
        ...


class BrowserRasterizer:
    """
    Prints styled HTML to PDF with headless Chromium.

    The browser is launched once per ``async with`` block and each call opens
    a fresh page. Output is written to a temporary file in the target
    directory and moved into place only after the browser succeeds.

    Example:
        async with BrowserRasterizer() as rasterizer:
            await rasterizer.rasterize(html, Path("page.pdf"), RenderOptions())

    Requires: pip install pagepull[pdf]
    """

    def __init__(self, config: Optional[PdfConfig] = None) -> None:
        """
        Initialize the rasterizer.

        Args:
            config: Browser and print settings (defaults if None)
        """
        if not PLAYWRIGHT_AVAILABLE:
            raise ImportError("Playwright is required for PDF output. " "Install with: pip install pagepull[pdf]")

        self._config = config or PdfConfig()
        self._timeout = self._config.timeout * 1000  # Convert to milliseconds

        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    async def __aenter__(self) -> BrowserRasterizer:
        """Enter async context and launch the browser."""
        await self._ensure_browser()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and shut the browser down."""
        await self.close()

    async def _ensure_browser(self) -> Browser:
        async with self._lock:
            if self._browser is None:
                try:
                    self._playwright = await async_playwright().start()
                    self._browser = await self._playwright.chromium.launch(headless=self._config.headless)
                except Exception as e:
                    await self.close()
                    raise RasterizationError(f"Could not launch browser: {e}") from e
                logger.info("Browser launched for PDF output")
            return self._browser

    async def close(self) -> None:
        """Close the browser and stop Playwright."""
        if self._browser:
            try:
                await self._browser.close()
            except Exception as e:
                logger.debug(f"Error closing browser: {e}")
            self._browser = None

        if self._playwright:
            await self._playwright.stop()
            self._playwright = None

    def _pdf_options(self, options: RenderOptions) -> dict[str, object]:
        margins = options.margins
        return {
            "format": options.page_size.value,
            "margin": {
                "top": margins.top,
                "right": margins.right,
                "bottom": margins.bottom,
                "left": margins.left,
            },
            "print_background": self._config.print_background,
            "prefer_css_page_size": self._config.prefer_css_page_size,
        }

    async def rasterize(
        self,
        html: str,
        output_path: Path,
        options: Optional[RenderOptions] = None,
    ) -> Path:
        """
        Print *html* to a PDF file at *output_path*.

        Raises:
            RasterizationError: If the browser fails; no file is left behind
        """
        options = options or RenderOptions()
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        browser = await self._ensure_browser()

        fd, tmp_name = tempfile.mkstemp(suffix=".pdf.tmp", dir=output_path.parent)
        os.close(fd)
        tmp_path = Path(tmp_name)

        try:
            page = await browser.new_page()
            try:
                page.set_default_timeout(self._timeout)
                await page.set_content(html, wait_until="networkidle")
                await page.pdf(path=str(tmp_path), **self._pdf_options(options))
            finally:
                await page.close()
            os.replace(tmp_path, output_path)
        except Exception as e:
            with contextlib.suppress(OSError):
                tmp_path.unlink()
            logger.error(f"PDF generation failed for {output_path}: {e}")
            raise RasterizationError(f"PDF generation failed: {e}") from e

        logger.debug(f"Wrote PDF: {output_path}")
        return output_path
