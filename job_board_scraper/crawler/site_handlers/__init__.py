from __future__ import annotations

from typing import Optional

from ..models import DateWindow
from .base import BaseSiteHandler, UrlKind
from .workable import WorkableHandler

_HANDLER_CLASSES = (WorkableHandler,)


def get_site_handler(url: str | None = None) -> BaseSiteHandler | None:
    if not url:
        return None
    for handler_cls in _HANDLER_CLASSES:
        if handler_cls.matches_url(url):
            return handler_cls()
    return None


def default_site_handler() -> BaseSiteHandler:
    return WorkableHandler()


def classify(url: str) -> UrlKind:
    handler = get_site_handler(url)
    if handler is None:
        return UrlKind.UNRECOGNIZED
    return handler.classify(url)


def normalize_to_api_list(
    url: str,
    page_size: int,
    date_window: DateWindow = DateWindow.NONE,
) -> Optional[str]:
    handler = get_site_handler(url)
    if handler is None:
        return None
    return handler.get_listing_api_uri(url, page_size=page_size, date_window=date_window)


__all__ = [
    "BaseSiteHandler",
    "UrlKind",
    "WorkableHandler",
    "classify",
    "default_site_handler",
    "get_site_handler",
    "normalize_to_api_list",
]
