"""Ordered per-field resolver chains.

Each resolver takes a :class:`DetailContext` and returns a value or None. For every
field the chain is tried in order and the first non-empty value wins; later
resolvers never overwrite it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Callable, Dict, List, Optional, Sequence

from bs4 import BeautifulSoup

from ..helpers.text import html_to_text, unescape_html_fragment
from ..models import JobSeed
from . import dom
from .json_ld import (
    employment_types_from_posting,
    location_from_posting,
    salary_from_posting,
    text_field,
)


@dataclass
class DetailContext:
    soup: BeautifulSoup
    url: str
    seed: Optional[JobSeed]
    postings: List[Dict[str, Any]]
    resolved: Dict[str, Any] = field(default_factory=dict)

    @cached_property
    def visible_text(self) -> str:
        return dom.visible_text(self.soup)


FieldResolver = Callable[[DetailContext], Any]


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, set, dict)):
        return len(value) == 0
    return False


def first_non_empty(resolvers: Sequence[FieldResolver], ctx: DetailContext) -> Any:
    for resolver in resolvers:
        value = resolver(ctx)
        if not is_empty(value):
            return value
    return None


def from_postings(getter: Callable[[Dict[str, Any]], Any]) -> FieldResolver:
    """Scan every JobPosting node in order and return the first non-empty value."""

    def _resolve(ctx: DetailContext) -> Any:
        for posting in ctx.postings:
            value = getter(posting)
            if not is_empty(value):
                return value
        return None

    return _resolve


def from_seed(attr: str) -> FieldResolver:
    def _resolve(ctx: DetailContext) -> Any:
        if ctx.seed is None:
            return None
        value = getattr(ctx.seed, attr, None)
        return value.strip() if isinstance(value, str) else value

    return _resolve


def from_selectors(selectors: Sequence[str]) -> FieldResolver:
    def _resolve(ctx: DetailContext) -> Any:
        return dom.select_first_text(ctx.soup, selectors)

    return _resolve


def from_json_ld_text(key: str) -> FieldResolver:
    return from_postings(lambda posting: text_field(posting, key))


def _posting_description(posting: Dict[str, Any]) -> Optional[str]:
    value = posting.get("description")
    if not isinstance(value, str) or not value.strip():
        return None
    return unescape_html_fragment(value.strip())


def _posting_identifier(posting: Dict[str, Any]) -> Optional[str]:
    identifier = posting.get("identifier")
    if isinstance(identifier, list):
        identifier = next((item for item in identifier if item), None)
    if isinstance(identifier, dict):
        identifier = identifier.get("value") or identifier.get("name")
    if isinstance(identifier, (int, str)) and not isinstance(identifier, bool):
        return str(identifier).strip() or None
    return None


def _posting_employment_type(posting: Dict[str, Any]) -> Optional[str]:
    types = employment_types_from_posting(posting)
    return ", ".join(types) if types else None


def _dom_description_html(ctx: DetailContext) -> Optional[str]:
    return dom.select_first_html(ctx.soup, dom.DESCRIPTION_SELECTORS)


def _text_from_resolved_html(ctx: DetailContext) -> Optional[str]:
    return html_to_text(ctx.resolved.get("description_html"))


def _visible_posted_phrase(ctx: DetailContext) -> Optional[str]:
    return dom.posted_phrase(ctx.visible_text)


def _labelled_location(ctx: DetailContext) -> Optional[str]:
    return dom.labelled_location(ctx.soup)


def _badge_job_types(ctx: DetailContext) -> Optional[List[str]]:
    return dom.badge_job_types(ctx.soup)


# Order matters: description_text reads the already-resolved description_html.
FIELD_RESOLVERS: Dict[str, Sequence[FieldResolver]] = {
    "description_html": (from_postings(_posting_description), _dom_description_html),
    "description_text": (_text_from_resolved_html, from_selectors(dom.DESCRIPTION_SELECTORS)),
    "date_posted": (from_json_ld_text("datePosted"), from_seed("date_posted"), _visible_posted_phrase),
    "location": (
        from_seed("location"),
        from_postings(location_from_posting),
        from_selectors(dom.LOCATION_SELECTORS),
        _labelled_location,
    ),
    "title": (from_seed("title"), from_selectors(dom.TITLE_SELECTORS)),
    "company": (from_seed("company"), from_selectors(dom.COMPANY_SELECTORS)),
    "job_types": (from_postings(employment_types_from_posting), _badge_job_types),
    "salary": (from_postings(salary_from_posting),),
    "employment_type": (from_postings(_posting_employment_type), from_seed("employment_type")),
    "valid_through": (from_json_ld_text("validThrough"),),
    "id": (from_seed("id"), from_postings(_posting_identifier)),
    "shortcode": (from_seed("shortcode"),),
    "department": (from_seed("department"),),
    "workplace_type": (from_seed("workplace_type"), from_json_ld_text("jobLocationType")),
    "benefits": (from_json_ld_text("jobBenefits"),),
    "qualifications": (from_json_ld_text("qualifications"),),
    "responsibilities": (from_json_ld_text("responsibilities"),),
    "industry": (from_json_ld_text("industry"),),
}
