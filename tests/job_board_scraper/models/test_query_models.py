from __future__ import annotations

import pytest

from job_board_scraper.config import runtime_config
from job_board_scraper.crawler.exceptions import ConfigurationError
from job_board_scraper.crawler.models import CrawlInput, DateWindow, Query, load_crawl_input


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("24h", DateWindow.PAST_DAY),
        ("7D", DateWindow.PAST_WEEK),
        (" 30d ", DateWindow.PAST_MONTH),
        ("past_week", DateWindow.PAST_WEEK),
        ("any", DateWindow.NONE),
        ("", DateWindow.NONE),
        (None, DateWindow.NONE),
        (DateWindow.PAST_MONTH, DateWindow.PAST_MONTH),
    ],
)
def test_date_window_aliases(raw, expected):
    assert DateWindow.parse(raw) is expected


def test_date_window_rejects_unknown_values():
    with pytest.raises(ValueError):
        DateWindow.parse("fortnight")


def test_date_window_broadening_order():
    assert DateWindow.PAST_DAY.broader() is DateWindow.PAST_WEEK
    assert DateWindow.PAST_WEEK.broader() is DateWindow.PAST_MONTH
    assert DateWindow.PAST_MONTH.broader() is DateWindow.NONE
    assert DateWindow.NONE.broader() is None
    assert DateWindow.NONE.api_value is None
    assert DateWindow.PAST_DAY.api_value == "past_day"


def test_query_defaults_come_from_runtime_config():
    query = Query(keyword="  python  ")
    assert query.keyword == "python"
    assert query.date_window is DateWindow.PAST_WEEK
    assert query.target_count == runtime_config.default_target_count
    assert query.concurrency == runtime_config.default_concurrency
    assert query.with_date_window(DateWindow.NONE).date_window is DateWindow.NONE
    assert query.date_window is DateWindow.PAST_WEEK


def test_crawl_input_accepts_actor_style_keys():
    crawl_input = load_crawl_input(
        {
            "keyword": "data engineer",
            "location": "Berlin",
            "results_wanted": 25,
            "postedWithin": "24h",
            "maxConcurrency": 3,
            "maxPages": 4,
            "proxyUrl": "   ",
            "startUrls": [{"url": " https://jobs.workable.com/view/ABC "}, "", "https://jobs.workable.com/search"],
            "unknownKey": "ignored",
        }
    )

    assert crawl_input.target_count == 25
    assert crawl_input.date_window is DateWindow.PAST_DAY
    assert crawl_input.concurrency == 3
    assert crawl_input.max_pages == 4
    assert crawl_input.proxy_url is None
    assert crawl_input.start_urls == [
        "https://jobs.workable.com/view/ABC",
        "https://jobs.workable.com/search",
    ]

    query = crawl_input.to_query()
    assert query == Query(
        keyword="data engineer",
        location="Berlin",
        date_window=DateWindow.PAST_DAY,
        target_count=25,
        max_pages=4,
        concurrency=3,
    )


def test_single_start_url_string_is_accepted():
    crawl_input = CrawlInput(start_urls="https://jobs.workable.com/view/ABC")
    assert crawl_input.start_urls == ["https://jobs.workable.com/view/ABC"]


@pytest.mark.parametrize(
    "raw",
    [
        ["not", "an", "object"],
        {},
        {"keyword": "   "},
        {"keyword": "python", "results_wanted": 0},
        {"keyword": "python", "maxConcurrency": "many"},
        {"keyword": "python", "postedWithin": "fortnight"},
    ],
)
def test_invalid_input_is_a_configuration_error(raw):
    with pytest.raises(ConfigurationError):
        load_crawl_input(raw)
