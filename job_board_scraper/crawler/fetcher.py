from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Literal, Optional

import httpx

from ..config import runtime_config, settings
from .exceptions import CrawlError, FetchError, FetchTimeoutError, MalformedPayloadError, RateLimitError

logger = logging.getLogger("job_board_scraper.fetcher")

ResponseType = Literal["json", "html"]

RETRYABLE_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
_ACCEPT_HEADERS: Dict[str, str] = {
    "json": "application/json, text/plain;q=0.9, */*;q=0.8",
    "html": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
}


@dataclass
class FetchResponse:
    url: str
    status_code: int
    text: str
    payload: Any = None


class BaseFetcher:
    """Common interface for fetch backends used by the crawl driver."""

    async def fetch(self, url: str, *, response_type: ResponseType = "html") -> FetchResponse:
        raise NotImplementedError("fetch must be implemented by fetcher classes")

    async def aclose(self) -> None:
        return None

    async def __aenter__(self) -> "BaseFetcher":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()


class HttpxFetcher(BaseFetcher):
    """httpx-backed fetcher with a per-request timeout and retry on transient failures."""

    def __init__(
        self,
        *,
        proxy_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        max_retries: Optional[int] = None,
        backoff_seconds: Optional[float] = None,
        user_agent: Optional[str] = None,
        client: Optional[httpx.AsyncClient] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.timeout_seconds = timeout_seconds or runtime_config.http_timeout_seconds
        self.max_retries = max(0, runtime_config.fetch_max_retries if max_retries is None else max_retries)
        self.backoff_seconds = (
            runtime_config.fetch_backoff_seconds if backoff_seconds is None else backoff_seconds
        )
        self._sleep = sleep
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self.timeout_seconds,
            headers={"User-Agent": user_agent or settings.user_agent},
            proxy=proxy_url or settings.proxy_url,
            follow_redirects=True,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def fetch(self, url: str, *, response_type: ResponseType = "html") -> FetchResponse:
        attempts = self.max_retries + 1
        for attempt in range(1, attempts + 1):
            try:
                return await self._fetch_once(url, response_type)
            except CrawlError as err:
                if not err.retryable or attempt == attempts:
                    raise
                delay = self.backoff_seconds * (2 ** (attempt - 1))
                logger.warning(
                    "Fetch retry url=%s attempt=%s/%s delay=%.1fs reason=%s",
                    url,
                    attempt,
                    attempts,
                    delay,
                    err.message,
                )
                await self._sleep(delay)
        raise FetchError("No fetch attempt was made", url=url)

    async def _fetch_once(self, url: str, response_type: ResponseType) -> FetchResponse:
        try:
            resp = await self._client.get(url, headers={"Accept": _ACCEPT_HEADERS[response_type]})
        except httpx.TimeoutException as exc:
            raise FetchTimeoutError(f"Timed out after {self.timeout_seconds}s", url=url) from exc
        except httpx.TransportError as exc:
            raise FetchError(f"Transport error: {exc}", url=url, retryable=True) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            # Not retried: the same request fails the same way again.
            raise FetchError(f"Request error: {exc}", url=url) from exc

        status = resp.status_code
        if status == 429:
            raise RateLimitError("Rate limited (429)", url=url)
        if not resp.is_success:
            raise FetchError(
                f"HTTP {status}",
                url=url,
                status_code=status,
                retryable=status in RETRYABLE_STATUS_CODES,
            )

        payload: Any = None
        if response_type == "json":
            try:
                payload = resp.json()
            except ValueError as exc:
                raise MalformedPayloadError(f"Response from {url} was not valid JSON") from exc
        return FetchResponse(url=str(resp.url), status_code=status, text=resp.text, payload=payload)
