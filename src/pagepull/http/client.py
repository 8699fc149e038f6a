"""Async HTTP client for fetching single pages."""

from __future__ import annotations

import asyncio
import logging
import random
from types import TracebackType

import aiohttp

from ..errors import FetchError
from .protocols import HttpResponse

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)

DEFAULT_ACCEPT = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,"
    "image/avif,image/webp,image/apng,*/*;q=0.8"
)


class AsyncHttpClient:
    """
    Async HTTP client that fetches a page and reports failures as FetchError.

    Features:
    - Browser-like default headers
    - Optional exponential backoff retry for transient failures (off by default)
    - Content size limit to prevent memory exhaustion

    Example:
        async with AsyncHttpClient() as client:
            response = await client.get("https://example.com")
            print(response.status_code, response.content_type)
    """

    # Status codes that warrant a retry
    RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})

    # Exceptions that warrant a retry
    RETRYABLE_EXCEPTIONS = (
        aiohttp.ClientError,
        asyncio.TimeoutError,
        ConnectionError,
    )

    def __init__(
        self,
        max_retries: int = 0,
        retry_base_delay: float = 1.0,
        max_content_size: int = 50 * 1024 * 1024,
        user_agent: str | None = None,
        accept_language: str = "de-DE,de;q=0.9,en-US;q=0.8,en;q=0.7",
        proxy: str | None = None,
        default_timeout: float = 30.0,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            max_retries: Retry attempts for transient failures (0 = fail fast)
            retry_base_delay: Base delay for exponential backoff (seconds)
            max_content_size: Maximum response size in bytes
            user_agent: Custom User-Agent string
            accept_language: Accept-Language header value
            proxy: Proxy URL (http:// or socks5://)
            default_timeout: Default request timeout in seconds
        """
        self._max_retries = max_retries
        self._retry_base_delay = retry_base_delay
        self._max_content_size = max_content_size
        self._proxy = proxy
        self._default_timeout = default_timeout
        self._headers = {
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
            "Accept": DEFAULT_ACCEPT,
            "Accept-Language": accept_language,
            "Upgrade-Insecure-Requests": "1",
        }

        self._session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> AsyncHttpClient:
        """Enter async context and create session."""
        self._session = aiohttp.ClientSession(headers=self._headers)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit async context and close session."""
        if self._session:
            await self._session.close()
            self._session = None

    def _calculate_retry_delay(self, attempt: int) -> float:
        """Exponential backoff with jitter for the given 0-indexed attempt."""
        delay: float = self._retry_base_delay * (2**attempt)
        return delay + random.uniform(0, 1)

    async def _read_body(self, response: aiohttp.ClientResponse, url: str) -> bytes:
        content_length = response.headers.get("Content-Length")
        if content_length and content_length.isdigit() and int(content_length) > self._max_content_size:
            raise FetchError(f"Content too large: {content_length} bytes", url=url, status=response.status)

        content = b""
        async for chunk in response.content.iter_chunked(8192):
            content += chunk
            if len(content) > self._max_content_size:
                raise FetchError(
                    f"Content size limit exceeded: >{self._max_content_size} bytes",
                    url=url,
                    status=response.status,
                )
        return content

    async def get(
        self,
        url: str,
        *,
        timeout: float | None = None,
        headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """
        Perform an HTTP GET request.

        Args:
            url: The URL to fetch
            timeout: Request timeout in seconds (uses default if None)
            headers: Optional additional headers

        Returns:
            HttpResponse for a successful (status < 400) response

        Raises:
            FetchError: On network errors, HTTP error statuses, or oversized content
        """
        if self._session is None:
            raise RuntimeError("Client not initialized. Use 'async with' context manager.")

        timeout_val = timeout or self._default_timeout

        for attempt in range(self._max_retries + 1):
            try:
                async with self._session.get(
                    url,
                    timeout=aiohttp.ClientTimeout(total=timeout_val),
                    headers=headers,
                    proxy=self._proxy,
                    allow_redirects=True,
                ) as response:
                    if response.status in self.RETRYABLE_STATUS_CODES and attempt < self._max_retries:
                        delay = self._calculate_retry_delay(attempt)
                        logger.warning(
                            f"Got {response.status} for {url}, retrying in {delay:.1f}s "
                            f"(attempt {attempt + 1}/{self._max_retries + 1})"
                        )
                        await asyncio.sleep(delay)
                        continue

                    if response.status >= 400:
                        raise FetchError(
                            f"HTTP {response.status} for {url}",
                            url=url,
                            status=response.status,
                        )

                    content = await self._read_body(response, url)
                    return HttpResponse(
                        status_code=response.status,
                        content=content,
                        content_type=response.headers.get("Content-Type", ""),
                        headers=dict(response.headers),
                        url=str(response.url),
                    )

            except self.RETRYABLE_EXCEPTIONS as e:
                if attempt < self._max_retries:
                    delay = self._calculate_retry_delay(attempt)
                    logger.warning(
                        f"Error fetching {url}: {e}, retrying in {delay:.1f}s "
                        f"(attempt {attempt + 1}/{self._max_retries + 1})"
                    )
                    await asyncio.sleep(delay)
                    continue
                logger.error(f"HTTP fetch error for {url} after {attempt + 1} attempt(s): {e}")
                raise FetchError(f"Could not fetch {url}: {e}", url=url) from e

        raise FetchError(f"Could not fetch {url}", url=url)
