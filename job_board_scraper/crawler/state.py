from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class CrawlState:
    """Dedup set and result-cap counters for one run.

    Only the crawl driver mutates this object, and only in its completion phase
    between concurrent batches, so no lock is needed.
    """

    target_count: int
    queued_count: int = 0
    saved_count: int = 0
    seen_urls: set[str] = field(default_factory=set)

    def mark_seen(self, url: str) -> bool:
        if url in self.seen_urls:
            return False
        self.seen_urls.add(url)
        return True

    def should_schedule(self) -> bool:
        return self.queued_count < self.target_count

    def should_save(self) -> bool:
        return self.saved_count < self.target_count

    def record_queued(self) -> None:
        self.queued_count += 1

    def record_saved(self) -> None:
        self.saved_count += 1

    def is_complete(self) -> bool:
        return self.queued_count >= self.target_count and self.saved_count >= self.target_count
