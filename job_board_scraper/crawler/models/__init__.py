"""Pydantic models and task types shared across the crawler."""

from .query import CrawlInput, DateWindow, Query, load_crawl_input
from .records import JobRecord, JobSeed
from .tasks import CrawlTask, DetailTask, ListTask
from .workable import (
    WorkableCompany,
    WorkableJobSummary,
    WorkableListResponse,
    WorkableLocation,
    load_workable_list,
)

__all__ = [
    "CrawlInput",
    "CrawlTask",
    "DateWindow",
    "DetailTask",
    "JobRecord",
    "JobSeed",
    "ListTask",
    "Query",
    "WorkableCompany",
    "WorkableJobSummary",
    "WorkableListResponse",
    "WorkableLocation",
    "load_crawl_input",
    "load_workable_list",
]
