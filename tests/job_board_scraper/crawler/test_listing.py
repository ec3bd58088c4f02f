from __future__ import annotations

from urllib.parse import parse_qs, urlparse

from job_board_scraper.crawler.listing import handle_list
from job_board_scraper.crawler.models import DetailTask, ListTask, Query
from job_board_scraper.crawler.state import CrawlState

LIST_URL = "https://jobs.workable.com/api/v1/jobs?q=python&created_at=past_week&limit=100"


def _query(**overrides) -> Query:
    return Query(keyword="python", **overrides)


def test_list_page_schedules_details_with_seeds(workable_list_page_1):
    state = CrawlState(target_count=10)
    detail_tasks, next_task = handle_list(ListTask(url=LIST_URL), workable_list_page_1, state, _query())

    assert [task.url for task in detail_tasks] == [
        "https://jobs.workable.com/view/A1B2C3D4E5/senior-backend-engineer-at-acme",
        "https://jobs.workable.com/view/F6G7H8J9K0",
        "https://jobs.workable.com/view/ZZZZZZZZZZ",
    ]
    assert all(isinstance(task, DetailTask) for task in detail_tasks)
    assert state.queued_count == 3
    assert len(state.seen_urls) == 3

    first = detail_tasks[0].seed
    assert first.title == "Senior Backend Engineer"
    assert first.company == "Acme GmbH"
    assert first.location == "Berlin, Germany"
    assert first.date_posted == "2024-03-01"
    assert first.department == "Engineering"
    assert first.workplace_type == "hybrid"
    assert first.employment_type == "Full-time"

    second = detail_tasks[1].seed
    assert second.id == "4471"
    assert second.shortcode == "F6G7H8J9K0"
    assert second.location == "Lisbon, Lisbon, Portugal"
    assert second.department is None

    third = detail_tasks[2].seed
    assert third.location == "Remote"
    assert third.date_posted is None

    assert next_task is not None
    assert next_task.page_number == 2
    params = parse_qs(urlparse(next_task.url).query)
    assert params["page"] == ["eyJvZmZzZXQiOjN9"]
    assert "pageToken" not in params
    assert params["q"] == ["python"]


def test_already_seen_urls_are_not_rescheduled(workable_list_page_1):
    state = CrawlState(target_count=10)
    state.mark_seen("https://jobs.workable.com/view/ZZZZZZZZZZ")

    detail_tasks, _ = handle_list(ListTask(url=LIST_URL), workable_list_page_1, state, _query())

    assert len(detail_tasks) == 2
    assert state.queued_count == 2


def test_scheduling_stops_mid_page_once_target_is_queued(workable_list_page_1):
    state = CrawlState(target_count=2)
    detail_tasks, next_task = handle_list(ListTask(url=LIST_URL), workable_list_page_1, state, _query())

    assert len(detail_tasks) == 2
    assert state.queued_count == 2
    assert next_task is None


def test_last_page_has_no_next_task(workable_list_page_2):
    state = CrawlState(target_count=10)
    detail_tasks, next_task = handle_list(
        ListTask(url=LIST_URL, page_number=2), workable_list_page_2, state, _query()
    )
    assert len(detail_tasks) == 2
    assert next_task is None


def test_max_pages_stops_pagination(workable_list_page_1):
    state = CrawlState(target_count=10)
    _, next_task = handle_list(ListTask(url=LIST_URL), workable_list_page_1, state, _query(max_pages=1))
    assert next_task is None


def test_pass_id_carries_to_follow_up_tasks(workable_list_page_1):
    state = CrawlState(target_count=10)
    detail_tasks, next_task = handle_list(
        ListTask(url=LIST_URL, pass_id=2), workable_list_page_1, state, _query()
    )
    assert {task.pass_id for task in detail_tasks} == {2}
    assert next_task.pass_id == 2


def test_malformed_page_yields_nothing():
    state = CrawlState(target_count=10)
    for payload in ({"results": []}, "not json", None, ["jobs"]):
        detail_tasks, next_task = handle_list(ListTask(url=LIST_URL), payload, state, _query())
        assert detail_tasks == []
        assert next_task is None
    assert state.queued_count == 0


def test_unusable_job_entries_are_skipped():
    payload = {
        "jobs": [
            "not-a-job",
            {"title": "No url or shortcode"},
            {"title": "Bad company", "shortcode": "BAD1", "company": "Acme"},
            {"title": "Ok", "shortcode": "OK1"},
        ],
        "nextPage": None,
    }
    state = CrawlState(target_count=10)
    detail_tasks, next_task = handle_list(ListTask(url=LIST_URL), payload, state, _query())

    assert [task.url for task in detail_tasks] == ["https://jobs.workable.com/view/OK1"]
    assert next_task is None
