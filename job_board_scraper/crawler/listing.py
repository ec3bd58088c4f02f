from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from pydantic import ValidationError

from .exceptions import MalformedPayloadError
from .helpers.text import clean_text
from .models import DetailTask, JobSeed, ListTask, Query, WorkableJobSummary, load_workable_list
from .site_handlers import BaseSiteHandler, default_site_handler
from .state import CrawlState

logger = logging.getLogger("job_board_scraper.listing")


def _location_label(summary: WorkableJobSummary) -> Optional[str]:
    location = summary.location
    if location is None:
        return None
    label = clean_text(location.location_str)
    if label:
        return label
    parts = [
        clean_text(part)
        for part in (location.city, location.subregion, location.country_name or location.country)
    ]
    joined = ", ".join(part for part in parts if part)
    return joined or None


def build_seed(summary: WorkableJobSummary, url: str) -> JobSeed:
    company = summary.company.title if summary.company else None
    return JobSeed(
        url=url,
        title=clean_text(summary.title),
        company=clean_text(company),
        location=_location_label(summary),
        date_posted=clean_text(summary.published_on) or clean_text(summary.created),
        id=clean_text(summary.id),
        shortcode=clean_text(summary.shortcode),
        department=clean_text(summary.department),
        workplace_type=clean_text(summary.workplace),
        employment_type=clean_text(summary.employment_type),
    )


def handle_list(
    task: ListTask,
    response_json: Any,
    state: CrawlState,
    query: Query,
    *,
    handler: BaseSiteHandler | None = None,
) -> Tuple[List[DetailTask], Optional[ListTask]]:
    """Turn one listing page into detail tasks plus (maybe) the next list task.

    Marks scheduled detail URLs as seen and bumps ``queued_count``; must run in the
    driver's completion phase.
    """

    handler = handler or default_site_handler()
    try:
        page = load_workable_list(response_json)
    except MalformedPayloadError as exc:
        logger.warning("Skipping list page url=%s reason=%s", task.url, exc.message)
        return [], None

    detail_tasks: List[DetailTask] = []
    skipped_seen = 0
    for raw_job in page.jobs:
        if not state.should_schedule():
            break
        if not isinstance(raw_job, dict):
            logger.debug("Ignoring non-object job summary on %s", task.url)
            continue
        try:
            summary = WorkableJobSummary.model_validate(raw_job)
        except ValidationError as exc:
            logger.warning(
                "Skipping job summary with unexpected shape url=%s errors=%s",
                task.url,
                exc.error_count(),
            )
            continue
        detail_url = handler.get_detail_uri(raw_job)
        if not detail_url:
            logger.debug("Job summary without url id=%s", summary.id)
            continue
        if not state.mark_seen(detail_url):
            skipped_seen += 1
            continue
        detail_tasks.append(
            DetailTask(url=detail_url, seed=build_seed(summary, detail_url), pass_id=task.pass_id)
        )
        state.record_queued()

    logger.info(
        "List page %s queued=%s skipped_seen=%s total_queued=%s/%s",
        task.page_number,
        len(detail_tasks),
        skipped_seen,
        state.queued_count,
        state.target_count,
    )

    next_task: Optional[ListTask] = None
    cursor = page.next_page.strip() if page.next_page else ""
    if cursor and state.should_schedule() and task.page_number < query.max_pages:
        next_task = ListTask(
            url=handler.get_next_page_uri(task.url, cursor),
            pass_id=task.pass_id,
            page_number=task.page_number + 1,
        )
        logger.info("Enqueuing next list page: %s", next_task.url)
    elif cursor and task.page_number >= query.max_pages:
        logger.info("Reached max_pages=%s; not following cursor", query.max_pages)
    return detail_tasks, next_task
