"""HTTP client for pagepull."""

from .client import AsyncHttpClient
from .protocols import HttpClient, HttpResponse

__all__ = [
    "AsyncHttpClient",
    "HttpClient",
    "HttpResponse",
]
