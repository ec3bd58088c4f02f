from .driver import CrawlDriver, CrawlSummary
from .extraction import resolve
from .fetcher import BaseFetcher, FetchResponse, HttpxFetcher
from .listing import handle_list
from .sinks import BaseRecordSink, JsonlRecordSink, MemoryRecordSink
from .state import CrawlState

__all__ = [
    "BaseFetcher",
    "BaseRecordSink",
    "CrawlDriver",
    "CrawlState",
    "CrawlSummary",
    "FetchResponse",
    "HttpxFetcher",
    "JsonlRecordSink",
    "MemoryRecordSink",
    "handle_list",
    "resolve",
]
