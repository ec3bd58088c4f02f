from .base import NonRetryableCrawlError


class ConfigurationError(NonRetryableCrawlError):
    """Crawl input is invalid; raised before any network activity."""

    pass
