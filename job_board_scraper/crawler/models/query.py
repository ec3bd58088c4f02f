from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...config import runtime_config
from ..exceptions import ConfigurationError


class DateWindow(str, Enum):
    NONE = "none"
    PAST_DAY = "past_day"
    PAST_WEEK = "past_week"
    PAST_MONTH = "past_month"

    @classmethod
    def parse(cls, value: Any) -> "DateWindow":
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.NONE
        key = str(value).strip().lower()
        if not key:
            return cls.NONE
        resolved = _DATE_WINDOW_ALIASES.get(key)
        if resolved is None:
            raise ValueError(f"unknown date window {value!r}")
        return resolved

    @property
    def api_value(self) -> Optional[str]:
        return None if self is DateWindow.NONE else self.value

    def broader(self) -> Optional["DateWindow"]:
        """Next wider window, or None once the window is already unrestricted."""

        order = _BROADENING_ORDER
        idx = order.index(self)
        return order[idx + 1] if idx + 1 < len(order) else None


_DATE_WINDOW_ALIASES = {
    "none": DateWindow.NONE,
    "any": DateWindow.NONE,
    "all": DateWindow.NONE,
    "24h": DateWindow.PAST_DAY,
    "1d": DateWindow.PAST_DAY,
    "past_day": DateWindow.PAST_DAY,
    "7d": DateWindow.PAST_WEEK,
    "past_week": DateWindow.PAST_WEEK,
    "30d": DateWindow.PAST_MONTH,
    "past_month": DateWindow.PAST_MONTH,
}

_BROADENING_ORDER = (
    DateWindow.PAST_DAY,
    DateWindow.PAST_WEEK,
    DateWindow.PAST_MONTH,
    DateWindow.NONE,
)


class Query(BaseModel):
    keyword: str = ""
    location: str = ""
    date_window: DateWindow = DateWindow.PAST_WEEK
    target_count: int = Field(default_factory=lambda: runtime_config.default_target_count, ge=1)
    max_pages: int = Field(default_factory=lambda: runtime_config.default_max_pages, ge=1)
    concurrency: int = Field(default_factory=lambda: runtime_config.default_concurrency, ge=1)

    model_config = ConfigDict(frozen=True)

    @field_validator("date_window", mode="before")
    @classmethod
    def _parse_date_window(cls, value: Any) -> DateWindow:
        return DateWindow.parse(value)

    @field_validator("keyword", "location", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str:
        return str(value or "").strip()

    def with_date_window(self, window: DateWindow) -> "Query":
        return self.model_copy(update={"date_window": window})


class CrawlInput(BaseModel):
    """Process input; camelCase keys from Apify-style input files are accepted as aliases."""

    keyword: str = ""
    location: str = ""
    date_window: DateWindow = Field(
        default=DateWindow.PAST_WEEK,
        validation_alias=AliasChoices("date_window", "postedWithin", "posted_within"),
    )
    target_count: int = Field(
        default_factory=lambda: runtime_config.default_target_count,
        ge=1,
        validation_alias=AliasChoices("target_count", "results_wanted", "resultsWanted"),
    )
    max_pages: int = Field(
        default_factory=lambda: runtime_config.default_max_pages,
        ge=1,
        validation_alias=AliasChoices("max_pages", "maxPages"),
    )
    concurrency: int = Field(
        default_factory=lambda: runtime_config.default_concurrency,
        ge=1,
        validation_alias=AliasChoices("concurrency", "maxConcurrency", "max_concurrency"),
    )
    proxy_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("proxy_url", "proxyUrl"),
    )
    start_urls: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("start_urls", "startUrls"),
    )
    broaden_date_window: bool = Field(
        default=False,
        validation_alias=AliasChoices("broaden_date_window", "broadenDateWindow"),
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @field_validator("date_window", mode="before")
    @classmethod
    def _parse_date_window(cls, value: Any) -> DateWindow:
        return DateWindow.parse(value)

    @field_validator("keyword", "location", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> str:
        return str(value or "").strip()

    @field_validator("proxy_url", mode="before")
    @classmethod
    def _blank_proxy(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        cleaned = str(value).strip()
        return cleaned or None

    @field_validator("start_urls", mode="before")
    @classmethod
    def _flatten_start_urls(cls, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, (str, dict)):
            value = [value]
        urls: List[str] = []
        for entry in value:
            if isinstance(entry, dict):
                entry = entry.get("url")
            if isinstance(entry, str) and entry.strip():
                urls.append(entry.strip())
        return urls

    def to_query(self) -> Query:
        return Query(
            keyword=self.keyword,
            location=self.location,
            date_window=self.date_window,
            target_count=self.target_count,
            max_pages=self.max_pages,
            concurrency=self.concurrency,
        )


def load_crawl_input(raw: Any) -> CrawlInput:
    """Validate raw input; any problem surfaces as ConfigurationError before network activity."""

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError("Crawl input must be a JSON object")
    try:
        crawl_input = CrawlInput.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid crawl input: {exc}") from exc
    if not crawl_input.keyword and not crawl_input.location and not crawl_input.start_urls:
        raise ConfigurationError("Provide a keyword, a location or at least one start URL")
    return crawl_input
