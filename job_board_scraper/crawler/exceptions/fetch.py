from __future__ import annotations

from .base import CrawlError, RetryableCrawlError


class FetchError(CrawlError):
    """HTTP fetch failed (transport error or non-2xx status)."""

    def __init__(self, message: str, *, url: str, status_code: int | None = None, retryable: bool = False) -> None:
        super().__init__(message, retryable=retryable)
        self.url = url
        self.status_code = status_code


class FetchTimeoutError(RetryableCrawlError):
    """Request exceeded the per-request timeout."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url


class RateLimitError(RetryableCrawlError):
    """Upstream answered 429; safe to retry after backing off."""

    def __init__(self, message: str, *, url: str) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = 429
