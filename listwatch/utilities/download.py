"""Download utilities for filter list files."""

import logging
from dataclasses import dataclass

import httpx

from ..config import REQUEST_TIMEOUT

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when a list cannot be downloaded."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url = url
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass(frozen=True)
class ResponseHeaders:
    """Response headers used for change detection and age reporting."""

    last_modified: str | None = None
    etag: str | None = None
    content_length: str | None = None
    cache_control: str | None = None


@dataclass(frozen=True)
class FetchResult:
    """Body and headers of a successful download."""

    content: bytes
    text: str
    headers: ResponseHeaders


def create_client() -> httpx.Client:
    """Create the HTTP client shared by one check cycle."""
    return httpx.Client(timeout=REQUEST_TIMEOUT, follow_redirects=True)


def fetch_list(client: httpx.Client, url: str) -> FetchResult:
    """
    Download a single list without retrying.

    Args:
        client: httpx Client instance
        url: URL to download from

    Returns:
        FetchResult with the raw body, decoded text and selected headers

    Raises:
        FetchError: On a non-2xx status or a network-level failure
    """
    try:
        response = client.get(url)
    except httpx.HTTPError as e:
        raise FetchError(url, f"Request failed: {e}") from e

    if not 200 <= response.status_code < 300:
        message = f"HTTP {response.status_code}"
        if response.reason_phrase:
            message = f"{message}: {response.reason_phrase}"
        raise FetchError(url, message, status_code=response.status_code)

    headers = ResponseHeaders(
        last_modified=response.headers.get("last-modified"),
        etag=response.headers.get("etag"),
        content_length=response.headers.get("content-length"),
        cache_control=response.headers.get("cache-control"),
    )

    return FetchResult(content=response.content, text=response.text, headers=headers)
