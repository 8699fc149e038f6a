"""Protocol definitions for HTTP client abstraction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class HttpResponse:
    """
    Immutable HTTP response returned by HttpClient.

    Attributes:
        status_code: HTTP status code (200, 404, etc.)
        content: Raw response content as bytes
        content_type: Content-Type header value
        headers: All response headers
        url: Final URL after any redirects
    """

    status_code: int
    content: bytes
    content_type: str
    headers: dict[str, str]
    url: str


class HttpClient(Protocol):
    """
    Protocol for HTTP clients.

    Implementations raise :class:`~pagepull.errors.FetchError` on network
    failures and on HTTP error statuses, so a returned response is always a
    successful one.
    """

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
            timeout: Request timeout in seconds
            headers: Optional additional headers

        Returns:
            HttpResponse with status, content, and headers

        Raises:
            FetchError: On network or HTTP errors
        """
        ...
