from __future__ import annotations

import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag

from ..helpers.regex_patterns import (
    JOB_TYPE_RE,
    LOCATION_INLINE_RE,
    LOCATION_LABEL_RE,
    POSTED_AGO_RE,
)
from ..helpers.text import clean_text, collapse_whitespace

TITLE_SELECTORS = ('[data-ui="job-title"]', "h1")
COMPANY_SELECTORS = ('[data-ui="company-name"]', '[itemprop="hiringOrganization"]', '[rel="author"]')
LOCATION_SELECTORS = ('[data-ui="job-location"]', '[itemprop="jobLocation"]')
DESCRIPTION_SELECTORS = (
    '[data-ui="job-description"]',
    '[data-ui="job-content"]',
    ".job-description",
    ".JobDetails__content",
)
META_CONTAINER_SELECTORS = (".job-stats", ".JobDetails__meta")
JOB_TYPE_CONTAINER_SELECTORS = (
    '[data-ui="job-meta"]',
    '[data-ui="job-tags"]',
    ".JobDetails__tags",
    ".job-stats",
    ".job-badges",
)
_BADGE_TAGS = ("li", "span", "a", "div")
_HIDDEN_TEXT_PARENTS = {"script", "style", "noscript", "template", "head", "title"}
_JOB_TYPE_KEY_RE = re.compile(r"[^a-z]+")


def select_first_text(soup: BeautifulSoup, selectors: Iterable[str]) -> Optional[str]:
    for selector in selectors:
        for node in soup.select(selector):
            text = clean_text(node.get_text(" "))
            if text:
                return text
    return None


def select_first_html(soup: BeautifulSoup, selectors: Iterable[str]) -> Optional[str]:
    for selector in selectors:
        node = soup.select_one(selector)
        if node is None:
            continue
        markup = node.decode_contents().strip()
        if markup:
            return markup
    return None


def _next_element_text(node: Tag) -> Optional[str]:
    sibling = node.find_next_sibling()
    while sibling is not None:
        text = clean_text(sibling.get_text(" "))
        if text:
            return text
        sibling = sibling.find_next_sibling()
    return None


def labelled_location(soup: BeautifulSoup) -> Optional[str]:
    """Location from a ``Location`` label inside the job meta block (label + sibling, or ``Location: X``)."""

    for selector in META_CONTAINER_SELECTORS:
        for container in soup.select(selector):
            for node in container.find_all(("li", "dt", "span", "div", "strong", "label")):
                text = collapse_whitespace(node.get_text(" "))
                inline = LOCATION_INLINE_RE.match(text)
                if inline:
                    return clean_text(inline.group("location"))
                if LOCATION_LABEL_RE.match(text):
                    value = _next_element_text(node)
                    if value:
                        return value
    return None


def _job_type_key(value: str) -> str:
    key = _JOB_TYPE_KEY_RE.sub("", value.lower())
    return "internship" if key == "intern" else key


def badge_job_types(soup: BeautifulSoup) -> Optional[List[str]]:
    """Vocabulary matches (full-time, remote, ...) inside badge/tag containers, deduplicated case-insensitively."""

    found: List[str] = []
    seen: set[str] = set()
    for selector in JOB_TYPE_CONTAINER_SELECTORS:
        for container in soup.select(selector):
            nodes = [container, *container.find_all(_BADGE_TAGS)]
            for node in nodes:
                for match in JOB_TYPE_RE.finditer(collapse_whitespace(node.get_text(" "))):
                    label = match.group(0)
                    key = _job_type_key(label)
                    if key in seen:
                        continue
                    seen.add(key)
                    found.append(label)
    return found or None


def visible_text(soup: BeautifulSoup) -> str:
    """Page text without script/style content; the soup is left untouched."""

    chunks: List[str] = []
    for node in soup.find_all(string=True):
        if type(node) is not NavigableString:
            continue
        if node.parent is not None and node.parent.name in _HIDDEN_TEXT_PARENTS:
            continue
        chunk = node.strip()
        if chunk:
            chunks.append(chunk)
    return "\n".join(chunks)


def posted_phrase(text: str) -> Optional[str]:
    match = POSTED_AGO_RE.search(text or "")
    if not match:
        return None
    return collapse_whitespace(match.group("posted"))
