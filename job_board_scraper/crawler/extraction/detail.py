from __future__ import annotations

from typing import Optional, Union

from bs4 import BeautifulSoup

from ..models import JobRecord, JobSeed
from .json_ld import find_job_postings
from .resolvers import FIELD_RESOLVERS, DetailContext, first_non_empty


def parse_document(markup: Union[str, bytes, None]) -> BeautifulSoup:
    return BeautifulSoup(markup or "", "html.parser")


def resolve(
    parsed_document: Union[BeautifulSoup, str, bytes, None],
    url: str,
    seed: Optional[JobSeed] = None,
) -> JobRecord:
    """Build a JobRecord from a detail page, falling back field by field.

    Pure: reads the document and seed only. Missing data resolves to None.
    """

    soup = parsed_document if isinstance(parsed_document, BeautifulSoup) else parse_document(parsed_document)
    ctx = DetailContext(soup=soup, url=url, seed=seed, postings=find_job_postings(soup))
    for field_name, resolvers in FIELD_RESOLVERS.items():
        ctx.resolved[field_name] = first_non_empty(resolvers, ctx)
    return JobRecord(url=url, **ctx.resolved)
