from __future__ import annotations

from job_board_scraper.crawler.state import CrawlState


def test_mark_seen_is_first_write_wins():
    state = CrawlState(target_count=5)
    assert state.mark_seen("https://jobs.workable.com/view/A") is True
    assert state.mark_seen("https://jobs.workable.com/view/A") is False
    assert state.seen_urls == {"https://jobs.workable.com/view/A"}


def test_schedule_and_save_gates_track_separate_counters():
    state = CrawlState(target_count=2)
    assert state.should_schedule() and state.should_save()

    state.record_queued()
    state.record_queued()
    assert not state.should_schedule()
    assert state.should_save()
    assert not state.is_complete()

    state.record_saved()
    state.record_saved()
    assert not state.should_save()
    assert state.is_complete()
