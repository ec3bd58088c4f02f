from __future__ import annotations

import html as html_lib
import re

from bs4 import BeautifulSoup

from .regex_patterns import HTML_ENTITY_TAG_PATTERN, WHITESPACE_RE

_NON_CONTENT_TAGS = ("script", "style", "noscript", "template")


def collapse_whitespace(value: str | None) -> str:
    if not value:
        return ""
    return WHITESPACE_RE.sub(" ", value).strip()


def clean_text(value: object) -> str | None:
    """Return stripped, whitespace-collapsed text or None when empty."""

    if value is None or isinstance(value, (dict, list)):
        return None
    text = collapse_whitespace(str(value))
    return text or None


def unescape_html_fragment(value: str) -> str:
    """Decode entity-encoded markup (``&lt;p&gt;``) that some JSON-LD producers emit."""

    if "<" not in value and re.search(HTML_ENTITY_TAG_PATTERN, value):
        return html_lib.unescape(value)
    return value


def html_to_text(markup: str | None) -> str | None:
    if not markup or not markup.strip():
        return None
    soup = BeautifulSoup(markup, "html.parser")
    for tag in soup(_NON_CONTENT_TAGS):
        tag.decompose()
    return clean_text(soup.get_text(" "))
