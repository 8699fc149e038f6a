"""FetchStep - HTTP fetching pipeline step."""

import logging
from typing import Optional

from ...http.protocols import HttpClient
from ...models.events import EventType, ExportEvent
from ..base import EventEmitter, PageContext

logger = logging.getLogger(__name__)


class FetchStep:
    """
    Pipeline step that fetches page content via HTTP.

    Populates:
        ctx.html: Raw HTML content as bytes
        ctx.status_code: HTTP status code
        ctx.content_type: Content-Type header value
        ctx.bytes_downloaded: Size of downloaded content

    Raises FetchError (from the client) for network errors and HTTP
    error statuses.

    Example:
        async with AsyncHttpClient() as http_client:
            ctx = await FetchStep(http_client).execute(ctx)
            html_content = ctx.html
    """

    name = "fetch"

    def __init__(self, http_client: HttpClient, timeout: Optional[float] = None) -> None:
        """
        Initialize the fetch step.

        Args:
            http_client: HTTP client implementing HttpClient protocol
            timeout: Per-request timeout in seconds (client default if None)
        """
        self._client = http_client
        self._timeout = timeout

    async def execute(
        self,
        ctx: PageContext,
        emit: Optional[EventEmitter] = None,
    ) -> PageContext:
        """
        Execute the fetch step.

        Args:
            ctx: Page context with URL to fetch
            emit: Optional callback to emit events

        Returns:
            PageContext with html, status_code, content_type populated
        """
        url = ctx.url

        if emit:
            emit(
                ExportEvent(
                    type=EventType.FETCH_STARTED,
                    url=url,
                    message=f"Fetching {url}",
                )
            )

        try:
            response = await self._client.get(url, timeout=self._timeout)
        except Exception as e:
            logger.error(f"Fetch error for {url}: {e}")

            if emit:
                emit(
                    ExportEvent(
                        type=EventType.FETCH_FAILED,
                        url=url,
                        error=str(e),
                        status_code=getattr(e, "status", None) or None,
                        message=f"Fetch failed: {e}",
                    )
                )
            raise

        ctx.html = response.content
        ctx.status_code = response.status_code
        ctx.content_type = response.content_type
        ctx.bytes_downloaded = len(response.content)

        logger.debug(f"Fetched {url}: {len(response.content)} bytes")

        if emit:
            emit(
                ExportEvent(
                    type=EventType.FETCH_COMPLETED,
                    url=url,
                    status_code=response.status_code,
                    bytes_downloaded=len(response.content),
                    message=f"Fetched {len(response.content)} bytes",
                )
            )

        return ctx
