"""Exceptions raised by pagepull."""

from __future__ import annotations


class PagepullError(Exception):
    """Base class for all pagepull errors."""


class FetchError(PagepullError):
    """
    Raised when a page cannot be fetched.

    Attributes:
        url: The URL that failed
        status: HTTP status code (0 if no response was received)
    """

    def __init__(self, message: str, url: str = "", status: int = 0) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class UnsupportedFormatError(PagepullError, ValueError):
    """Raised when an output format is not recognized."""

    def __init__(self, output_format: str, supported: tuple[str, ...] = ()) -> None:
        message = f"Unsupported format: {output_format}."
        if supported:
            message += f" Use one of: {', '.join(supported)}."
        super().__init__(message)
        self.output_format = output_format


class RasterizationError(PagepullError):
    """Raised when the browser fails to produce a paginated document."""
