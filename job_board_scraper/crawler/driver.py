from __future__ import annotations

import asyncio
import logging
import uuid
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, List, Optional, Sequence

from ..config import runtime_config
from ..services import telemetry
from .exceptions import ConfigurationError, CrawlError
from .extraction import resolve
from .fetcher import BaseFetcher
from .helpers.link_extractors import normalize_url
from .listing import handle_list
from .models import CrawlInput, CrawlTask, DetailTask, JobRecord, JobSeed, ListTask, Query
from .sinks import BaseRecordSink
from .site_handlers import BaseSiteHandler, UrlKind, classify, default_site_handler, normalize_to_api_list
from .state import CrawlState

logger = logging.getLogger("job_board_scraper.crawler")


@dataclass
class CrawlSummary:
    run_id: str
    queued_count: int = 0
    saved_count: int = 0
    list_pages: int = 0
    failed_tasks: int = 0
    discarded_records: int = 0
    passes: int = 1


@dataclass
class _TaskOutcome:
    task: CrawlTask
    payload: Any = None
    record: Optional[JobRecord] = None
    error: Optional[CrawlError] = None


@dataclass
class _PassState:
    pass_id: int = 0
    query: Optional[Query] = None
    keyword_driven: bool = False


class CrawlDriver:
    """Bounded-concurrency list/detail crawl with a result cap.

    Each iteration takes up to ``query.concurrency`` pending tasks, runs their
    fetches concurrently, then merges the outcomes one by one. Task bodies only
    fetch and parse; every CrawlState mutation happens in the merge step.
    """

    def __init__(
        self,
        query: Query,
        fetcher: BaseFetcher,
        sink: BaseRecordSink,
        *,
        start_urls: Sequence[str] = (),
        broaden_date_window: bool = False,
        handler: Optional[BaseSiteHandler] = None,
        page_size: Optional[int] = None,
        run_id: Optional[str] = None,
    ) -> None:
        self.query = query
        self.fetcher = fetcher
        self.sink = sink
        self.start_urls = list(start_urls)
        self.broaden_date_window = broaden_date_window
        self.handler = handler or default_site_handler()
        self.page_size = page_size or runtime_config.list_page_size
        self.state = CrawlState(target_count=query.target_count)
        self.summary = CrawlSummary(run_id=run_id or uuid.uuid4().hex[:12])
        self._pass = _PassState(query=query)

    @classmethod
    def from_input(
        cls,
        crawl_input: CrawlInput,
        fetcher: BaseFetcher,
        sink: BaseRecordSink,
        **kwargs: Any,
    ) -> "CrawlDriver":
        return cls(
            crawl_input.to_query(),
            fetcher,
            sink,
            start_urls=crawl_input.start_urls,
            broaden_date_window=crawl_input.broaden_date_window,
            **kwargs,
        )

    def seed_tasks(self) -> List[CrawlTask]:
        """Initial tasks from start URLs, falling back to a keyword/location listing query."""

        tasks: List[CrawlTask] = []
        for raw_url in self.start_urls:
            url = normalize_url(raw_url)
            kind = classify(url) if url else UrlKind.UNRECOGNIZED
            if url and kind is UrlKind.DETAIL:
                if self.state.should_schedule() and self.state.mark_seen(url):
                    tasks.append(DetailTask(url=url, seed=JobSeed(url=url)))
                    self.state.record_queued()
            elif url and kind in (UrlKind.API_LIST, UrlKind.SEARCH_PAGE):
                api_url = normalize_to_api_list(url, self.page_size, self.query.date_window)
                if api_url:
                    tasks.append(ListTask(url=api_url))
            else:
                logger.warning("Ignoring unrecognized start URL: %s", raw_url)

        if tasks:
            return tasks

        if not self.query.keyword and not self.query.location:
            raise ConfigurationError(
                "No usable start URL and no keyword/location to build a listing query from"
            )
        self._pass.keyword_driven = True
        return [self._keyword_list_task(self.query, pass_id=0)]

    def _keyword_list_task(self, query: Query, *, pass_id: int) -> ListTask:
        url = self.handler.build_listing_api_uri(
            keyword=query.keyword,
            location=query.location,
            date_window=query.date_window,
            page_size=self.page_size,
        )
        return ListTask(url=url, pass_id=pass_id, page_number=1)

    async def run(self) -> CrawlSummary:
        pending: Deque[CrawlTask] = deque(self.seed_tasks())
        logger.info(
            "Crawl started run_id=%s seeds=%s target=%s concurrency=%s",
            self.summary.run_id,
            len(pending),
            self.query.target_count,
            self.query.concurrency,
        )
        telemetry.emit_crawl_event(
            "crawl.started",
            run_id=self.summary.run_id,
            data={
                "keyword": self.query.keyword,
                "location": self.query.location,
                "dateWindow": self.query.date_window.value,
                "targetCount": self.query.target_count,
                "startUrls": len(self.start_urls),
            },
        )

        while pending and not self.state.is_complete():
            batch = self._take_batch(pending)
            if batch:
                outcomes = await asyncio.gather(*(self._run_task(task) for task in batch))
                for outcome in outcomes:
                    pending.extend(self._complete(outcome))
            if not pending:
                next_task = self._next_pass_task()
                if next_task is not None:
                    pending.append(next_task)

        self.summary.queued_count = self.state.queued_count
        self.summary.saved_count = self.state.saved_count
        logger.info(
            "Crawl finished run_id=%s saved=%s/%s queued=%s list_pages=%s failed=%s passes=%s",
            self.summary.run_id,
            self.summary.saved_count,
            self.query.target_count,
            self.summary.queued_count,
            self.summary.list_pages,
            self.summary.failed_tasks,
            self.summary.passes,
        )
        telemetry.emit_crawl_event(
            "crawl.completed",
            run_id=self.summary.run_id,
            data={
                "savedCount": self.summary.saved_count,
                "queuedCount": self.summary.queued_count,
                "listPages": self.summary.list_pages,
                "failedTasks": self.summary.failed_tasks,
                "passes": self.summary.passes,
            },
        )
        return self.summary

    def _take_batch(self, pending: Deque[CrawlTask]) -> List[CrawlTask]:
        batch: List[CrawlTask] = []
        while pending and len(batch) < self.query.concurrency:
            task = pending.popleft()
            if isinstance(task, DetailTask) and not self.state.should_save():
                # Target met; the record would be discarded anyway.
                self.summary.discarded_records += 1
                continue
            batch.append(task)
        return batch

    async def _run_task(self, task: CrawlTask) -> _TaskOutcome:
        try:
            if isinstance(task, ListTask):
                response = await self.fetcher.fetch(task.url, response_type="json")
                return _TaskOutcome(task=task, payload=response.payload)
            response = await self.fetcher.fetch(task.url, response_type="html")
            return _TaskOutcome(task=task, record=resolve(response.text, task.url, task.seed))
        except CrawlError as exc:
            return _TaskOutcome(task=task, error=exc)

    def _complete(self, outcome: _TaskOutcome) -> List[CrawlTask]:
        task = outcome.task
        if outcome.error is not None:
            self.summary.failed_tasks += 1
            logger.warning(
                "Request failed and was dropped kind=%s url=%s reason=%s",
                task.kind,
                task.url,
                outcome.error.message,
            )
            telemetry.emit_crawl_event(
                "crawl.fetch_failed",
                level="warning",
                run_id=self.summary.run_id,
                data={"url": task.url, "kind": task.kind, "error": outcome.error.message},
            )
            return []

        if isinstance(task, ListTask):
            self.summary.list_pages += 1
            query = self._pass.query or self.query
            detail_tasks, next_task = handle_list(
                task, outcome.payload, self.state, query, handler=self.handler
            )
            new_tasks: List[CrawlTask] = list(detail_tasks)
            if next_task is not None:
                new_tasks.append(next_task)
            return new_tasks

        if outcome.record is None:
            return []
        if not self.state.should_save():
            self.summary.discarded_records += 1
            logger.debug("Target reached; discarding record url=%s", task.url)
            return []
        self.sink.append(outcome.record)
        self.state.record_saved()
        logger.debug(
            "Saved: %s @ %s (%s/%s)",
            outcome.record.title,
            outcome.record.company,
            self.state.saved_count,
            self.state.target_count,
        )
        return []

    def _next_pass_task(self) -> Optional[ListTask]:
        """Start another keyword pass with a wider date window while the target is unmet."""

        if not self.broaden_date_window or not self._pass.keyword_driven:
            return None
        if not self.state.should_schedule():
            return None
        current = self._pass.query or self.query
        wider = current.date_window.broader()
        if wider is None:
            return None
        self._pass.pass_id += 1
        self._pass.query = current.with_date_window(wider)
        self.summary.passes += 1
        logger.info(
            "Broadening date window pass=%s window=%s queued=%s/%s",
            self._pass.pass_id,
            wider.value,
            self.state.queued_count,
            self.state.target_count,
        )
        return self._keyword_list_task(self._pass.query, pass_id=self._pass.pass_id)
