from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Optional

from ..models import DateWindow


class UrlKind(str, Enum):
    API_LIST = "api_list"
    SEARCH_PAGE = "search_page"
    DETAIL = "detail"
    UNRECOGNIZED = "unrecognized"


class BaseSiteHandler(ABC):
    """Base class for site-specific URL classification and listing helpers."""

    name: str = "base"
    list_api_base: str = ""
    page_size_param: str = "limit"
    cursor_params: tuple[str, ...] = ()

    @classmethod
    @abstractmethod
    def matches_url(cls, url: str) -> bool:
        """Return True when this handler is appropriate for the supplied URL."""

    @abstractmethod
    def is_detail_url(self, url: str) -> bool:
        """Return True for a single job's page."""

    @abstractmethod
    def is_listing_api_url(self, url: str) -> bool:
        """Return True for the paginated JSON listing endpoint."""

    def classify(self, url: str) -> UrlKind:
        if not self.matches_url(url):
            return UrlKind.UNRECOGNIZED
        if self.is_detail_url(url):
            return UrlKind.DETAIL
        if self.is_listing_api_url(url):
            return UrlKind.API_LIST
        return UrlKind.SEARCH_PAGE

    def get_listing_api_uri(
        self,
        uri: str,
        *,
        page_size: int,
        date_window: DateWindow = DateWindow.NONE,
    ) -> Optional[str]:
        return None

    def build_listing_api_uri(
        self,
        *,
        keyword: str,
        location: str,
        date_window: DateWindow,
        page_size: int,
    ) -> str:
        raise NotImplementedError("build_listing_api_uri must be implemented by handler classes")

    def get_next_page_uri(self, list_url: str, cursor: str) -> str:
        raise NotImplementedError("get_next_page_uri must be implemented by handler classes")

    def get_detail_uri(self, job: Any) -> Optional[str]:
        return None

