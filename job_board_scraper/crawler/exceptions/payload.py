from .base import NonRetryableCrawlError


class MalformedPayloadError(NonRetryableCrawlError):
    """Upstream response did not have the expected shape."""

    pass
