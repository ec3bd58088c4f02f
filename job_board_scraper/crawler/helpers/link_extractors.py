from __future__ import annotations

from typing import Any, Iterable
from urllib.parse import parse_qsl, urlencode, urljoin, urlparse, urlunparse


def _is_nonempty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def fix_scheme_slashes(candidate: str) -> str:
    lower = candidate.lower()
    if lower.startswith("http:/") and not lower.startswith("http://"):
        return "http://" + candidate[len("http:/") :]
    if lower.startswith("https:/") and not lower.startswith("https://"):
        return "https://" + candidate[len("https:/") :]
    return candidate


def normalize_url(url: str | None, *, base_url: str | None = None) -> str | None:
    """Return an absolute http(s) URL without fragment, or None when unusable."""

    if not _is_nonempty_string(url):
        return None
    cleaned = fix_scheme_slashes(url.strip())
    if base_url and not cleaned.startswith(("http://", "https://")):
        cleaned = urljoin(base_url, cleaned)
    try:
        parsed = urlparse(cleaned)
    except ValueError:
        return None
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        return None
    return urlunparse(parsed._replace(netloc=parsed.netloc.lower(), fragment=""))


def dedupe_str_list(values: Iterable[str], *, limit: int | None = None) -> list[str]:
    seen: set[str] = set()
    deduped: list[str] = []
    for value in values:
        if not _is_nonempty_string(value):
            continue
        cleaned = value.strip()
        if cleaned in seen:
            continue
        seen.add(cleaned)
        deduped.append(cleaned)
        if limit is not None and len(deduped) >= limit:
            break
    return deduped


def replace_query_params(
    url: str,
    *,
    set_params: dict[str, str] | None = None,
    drop_params: Iterable[str] = (),
    keep_existing: Iterable[str] = (),
) -> str:
    """Rewrite the query string of ``url``.

    ``set_params`` overrides existing values, except for keys listed in
    ``keep_existing`` which are only filled in when missing.
    """

    parsed = urlparse(url)
    dropped = set(drop_params)
    pairs = [(k, v) for k, v in parse_qsl(parsed.query, keep_blank_values=True) if k not in dropped]
    present = {k for k, _ in pairs}
    keep = set(keep_existing)
    for key, value in (set_params or {}).items():
        if key in keep and key in present:
            continue
        pairs = [(k, v) for k, v in pairs if k != key]
        pairs.append((key, value))
    return urlunparse(parsed._replace(query=urlencode(pairs)))
