from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .records import JobSeed


@dataclass(frozen=True)
class ListTask:
    url: str
    pass_id: int = 0
    page_number: int = 1

    kind = "list"


@dataclass(frozen=True)
class DetailTask:
    url: str
    seed: JobSeed
    pass_id: int = 0

    kind = "detail"


CrawlTask = Union[ListTask, DetailTask]
