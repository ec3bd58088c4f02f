from __future__ import annotations

import json
import logging
from typing import Any, Dict, Iterator, List, Optional

from bs4 import BeautifulSoup

from ..helpers.link_extractors import dedupe_str_list
from ..helpers.text import clean_text

logger = logging.getLogger("job_board_scraper.extraction.json_ld")

_ADDRESS_KEYS = ("addressLocality", "addressRegion", "addressCountry")


def _try_parse_json(raw: str) -> Any | None:
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    # Literal newlines/tabs inside description strings are common in hand-built JSON-LD.
    try:
        return json.loads(raw, strict=False)
    except json.JSONDecodeError:
        return None


def iter_json_ld_blocks(soup: BeautifulSoup) -> Iterator[Any]:
    """Yield each parseable ``application/ld+json`` block; invalid blocks are skipped."""

    for script in soup.find_all("script", attrs={"type": True}):
        script_type = str(script.get("type") or "").split(";")[0].strip().lower()
        if script_type != "application/ld+json":
            continue
        raw = script.get_text().strip()
        if not raw:
            continue
        parsed = _try_parse_json(raw)
        if parsed is None:
            logger.debug("Skipping unparseable JSON-LD block (%s chars)", len(raw))
            continue
        yield parsed


def is_job_posting(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    raw_type = node.get("@type")
    if isinstance(raw_type, list):
        return any(str(item).strip() == "JobPosting" for item in raw_type)
    return isinstance(raw_type, str) and raw_type.strip() == "JobPosting"


def _collect_job_postings(node: Any, found: List[Dict[str, Any]]) -> None:
    if isinstance(node, list):
        for child in node:
            _collect_job_postings(child, found)
        return
    if not isinstance(node, dict):
        return
    if is_job_posting(node):
        found.append(node)
        return
    for child in node.values():
        if isinstance(child, (dict, list)):
            _collect_job_postings(child, found)


def find_job_postings(soup: BeautifulSoup) -> List[Dict[str, Any]]:
    """All JobPosting nodes in document order (array, ``@graph`` and nested wrappers included)."""

    postings: List[Dict[str, Any]] = []
    for block in iter_json_ld_blocks(soup):
        _collect_job_postings(block, postings)
    return postings


def _address_part(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        value = value.get("name") or value.get("value")
    return clean_text(value)


def format_address(address: Any) -> Optional[str]:
    """Join ``locality, region, country`` skipping empty or repeated parts."""

    if isinstance(address, str):
        return clean_text(address)
    if not isinstance(address, dict):
        return None
    parts: List[str] = []
    seen: set[str] = set()
    for key in _ADDRESS_KEYS:
        part = _address_part(address.get(key))
        if not part or part.lower() in seen:
            continue
        seen.add(part.lower())
        parts.append(part)
    return ", ".join(parts) if parts else None


def _location_from_node(node: Any) -> Optional[str]:
    if isinstance(node, str):
        return clean_text(node)
    if not isinstance(node, dict):
        return None
    address = node.get("address", node)
    return format_address(address)


def location_from_posting(posting: Dict[str, Any]) -> Optional[str]:
    job_location = posting.get("jobLocation")
    candidates = job_location if isinstance(job_location, list) else [job_location]
    for candidate in candidates:
        label = _location_from_node(candidate)
        if label:
            return label
    return None


def employment_types_from_posting(posting: Dict[str, Any]) -> Optional[List[str]]:
    raw = posting.get("employmentType")
    values = raw if isinstance(raw, list) else [raw]
    cleaned = dedupe_str_list(str(value) for value in values if value is not None and not isinstance(value, dict))
    return cleaned or None


def _format_amount(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        stripped = value.strip().replace(",", "")
        if not stripped:
            return None
        try:
            value = float(stripped)
        except ValueError:
            return value.strip()
    if isinstance(value, (int, float)):
        if float(value).is_integer():
            return str(int(value))
        return f"{value:.2f}"
    return None


def salary_from_posting(posting: Dict[str, Any]) -> Optional[str]:
    """Render ``baseSalary`` as ``"USD 90000–120000"`` or ``"EUR 50000"``."""

    base = posting.get("baseSalary")
    if isinstance(base, list):
        base = next((item for item in base if isinstance(item, dict)), None)
    if not isinstance(base, dict):
        return None
    value = base.get("value")
    currency = clean_text(base.get("currency"))
    if isinstance(value, dict):
        currency = currency or clean_text(value.get("currency"))
        single = _format_amount(value.get("value"))
        low = _format_amount(value.get("minValue"))
        high = _format_amount(value.get("maxValue"))
    else:
        single = _format_amount(value)
        low = _format_amount(base.get("minValue"))
        high = _format_amount(base.get("maxValue"))

    if single:
        amount = single
    elif low and high and low != high:
        amount = f"{low}–{high}"
    else:
        amount = low or high
    if not amount:
        return None
    return f"{currency} {amount}" if currency else amount


def text_field(posting: Dict[str, Any], key: str) -> Optional[str]:
    """Plain text value of ``key``; lists are joined with newlines, objects use their name/value."""

    value = posting.get(key)
    if isinstance(value, list):
        parts = [text for text in (_scalar_text(item) for item in value) if text]
        return "\n".join(dedupe_str_list(parts)) or None
    return _scalar_text(value)


def _scalar_text(value: Any) -> Optional[str]:
    if isinstance(value, dict):
        value = value.get("name") or value.get("value")
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value.strip() or None
    return None
