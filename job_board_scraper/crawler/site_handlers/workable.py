from __future__ import annotations

import re
from typing import Any, Dict, Optional
from urllib.parse import urlencode, urlparse

from ..helpers.link_extractors import normalize_url, replace_query_params
from ..helpers.regex_patterns import (
    WORKABLE_DETAIL_PATH_PATTERN,
    WORKABLE_HOST_PATTERN,
    WORKABLE_LIST_API_PATH_PATTERN,
)
from ..models import DateWindow
from .base import BaseSiteHandler

_HOST_RE = re.compile(WORKABLE_HOST_PATTERN, flags=re.IGNORECASE)
_DETAIL_PATH_RE = re.compile(WORKABLE_DETAIL_PATH_PATTERN)
_LIST_API_PATH_RE = re.compile(WORKABLE_LIST_API_PATH_PATTERN)


class WorkableHandler(BaseSiteHandler):
    name = "workable"
    base_url = "https://jobs.workable.com"
    list_api_base = "https://jobs.workable.com/api/v1/jobs"
    page_size_param = "limit"
    date_window_param = "created_at"
    cursor_param = "page"
    # "pageToken" appears on some saved API URLs.
    cursor_params = ("pageToken", "page")

    @classmethod
    def matches_url(cls, url: str) -> bool:
        try:
            host = urlparse(url).hostname or ""
        except ValueError:
            return False
        return bool(_HOST_RE.match(host))

    @staticmethod
    def _path(url: str) -> str:
        try:
            return urlparse(url).path or "/"
        except ValueError:
            return "/"

    def is_detail_url(self, url: str) -> bool:
        return self.matches_url(url) and bool(_DETAIL_PATH_RE.match(self._path(url)))

    def is_listing_api_url(self, url: str) -> bool:
        return self.matches_url(url) and bool(_LIST_API_PATH_RE.match(self._path(url)))

    def get_listing_api_uri(
        self,
        uri: str,
        *,
        page_size: int,
        date_window: DateWindow = DateWindow.NONE,
    ) -> Optional[str]:
        if not self.matches_url(uri) or self.is_detail_url(uri):
            return None
        page_size_value = str(page_size)

        if self.is_listing_api_url(uri):
            return replace_query_params(
                uri,
                set_params={self.page_size_param: page_size_value},
                drop_params=self.cursor_params,
                keep_existing=(self.page_size_param,),
            )

        # Human search page: carry every query parameter over to the API endpoint.
        query = urlparse(uri).query
        api_url = f"{self.list_api_base}?{query}" if query else self.list_api_base
        overrides: Dict[str, str] = {self.page_size_param: page_size_value}
        if date_window.api_value:
            overrides[self.date_window_param] = date_window.api_value
        return replace_query_params(
            api_url,
            set_params=overrides,
            drop_params=self.cursor_params,
            keep_existing=(self.page_size_param,),
        )

    def build_listing_api_uri(
        self,
        *,
        keyword: str,
        location: str,
        date_window: DateWindow,
        page_size: int,
    ) -> str:
        params: Dict[str, str] = {}
        if keyword:
            params["q"] = keyword
        if location:
            params["location"] = location
        if date_window.api_value:
            params[self.date_window_param] = date_window.api_value
        params[self.page_size_param] = str(page_size)
        return f"{self.list_api_base}?{urlencode(params)}"

    def get_next_page_uri(self, list_url: str, cursor: str) -> str:
        return replace_query_params(
            list_url,
            set_params={self.cursor_param: cursor},
            drop_params=self.cursor_params,
        )

    def get_detail_uri(self, job: Any) -> Optional[str]:
        if not isinstance(job, dict):
            return None
        url = normalize_url(job.get("url"), base_url=self.base_url)
        if url:
            return url
        shortcode = job.get("shortcode")
        if isinstance(shortcode, str) and shortcode.strip():
            return f"{self.base_url}/view/{shortcode.strip()}"
        return None
