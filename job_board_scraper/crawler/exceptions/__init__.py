from .base import CrawlError, NonRetryableCrawlError, RetryableCrawlError
from .configuration import ConfigurationError
from .fetch import FetchError, FetchTimeoutError, RateLimitError
from .payload import MalformedPayloadError

__all__ = [
    "CrawlError",
    "RetryableCrawlError",
    "NonRetryableCrawlError",
    "ConfigurationError",
    "FetchError",
    "FetchTimeoutError",
    "MalformedPayloadError",
    "RateLimitError",
]
