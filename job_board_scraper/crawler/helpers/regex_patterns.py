from __future__ import annotations

import re

# Primitive tokens
WHITESPACE_PATTERN = r"\s+"
WHITESPACE_RE = re.compile(WHITESPACE_PATTERN)
HTML_ENTITY_TAG_PATTERN = r"&lt;\s*/?\s*[a-zA-Z]"

# URL / path patterns
WORKABLE_HOST_PATTERN = r"^(?:www\.)?jobs\.workable\.com$"
WORKABLE_DETAIL_PATH_PATTERN = r"^/view/(?P<shortcode>[A-Za-z0-9]+)(?:/.*)?$"
WORKABLE_LIST_API_PATH_PATTERN = r"^/api/v1/jobs/?$"

# Visible-text date phrasing, e.g. "Posted 3 days ago", "Posted about 1 month ago", "Posted today"
POSTED_AGO_PATTERN = (
    r"\bposted\s+(?:on\s+)?(?P<posted>"
    r"(?:about\s+|over\s+|almost\s+|more\s+than\s+)?(?:\d+\+?|an?|one)\s+"
    r"(?:second|minute|hour|day|week|month|year)s?\s+ago"
    r"|today|yesterday|just\s+now)"
)
POSTED_AGO_RE = re.compile(POSTED_AGO_PATTERN, flags=re.IGNORECASE)

# Job-type vocabulary for visible badges and tags
JOB_TYPE_PATTERN = r"full[-\s]?time|part[-\s]?time|contract|temporary|intern(?:ship)?|freelance|remote"
JOB_TYPE_RE = re.compile(r"\b(?:" + JOB_TYPE_PATTERN + r")\b", flags=re.IGNORECASE)

LOCATION_LABEL_PATTERN = r"^\s*location\s*:?\s*$"
LOCATION_LABEL_RE = re.compile(LOCATION_LABEL_PATTERN, flags=re.IGNORECASE)
LOCATION_INLINE_PATTERN = r"^\s*location\s*:\s*(?P<location>.+)$"
LOCATION_INLINE_RE = re.compile(LOCATION_INLINE_PATTERN, flags=re.IGNORECASE)
