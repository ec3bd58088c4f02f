class CrawlError(Exception):
    """Base error that carries retryability information for the fetch layer."""

    def __init__(self, message: str, *, retryable: bool) -> None:  # noqa: D401
        super().__init__(message)
        self.message = message
        self.retryable = retryable


class RetryableCrawlError(CrawlError):
    """Errors the fetch layer may retry before giving up on a task."""

    def __init__(self, message: str) -> None:  # noqa: D401
        super().__init__(message, retryable=True)


class NonRetryableCrawlError(CrawlError):
    """Errors that should drop the task (or abort startup) without retry."""

    def __init__(self, message: str) -> None:  # noqa: D401
        super().__init__(message, retryable=False)
