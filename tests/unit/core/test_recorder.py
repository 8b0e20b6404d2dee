"""Unit tests for VisitRecorder.

Test coverage includes:

1. Logging visits
   - Explicit and clock-provided timestamps are appended in order.

2. Calendar bucketing
   - today / yesterday / total partitioned correctly on both sides of midnight.
   - Bucketing honours the configured time zone, naive timestamps count as UTC.

3. Timeline
   - Most recent visits returned oldest first, bounded by `limit`.
"""

from datetime import datetime, UTC
from zoneinfo import ZoneInfo

import pytest

from linkshortener.core import VisitRecorder
from linkshortener.models import ShortLink, VisitStats


@pytest.fixture
def link() -> ShortLink:
    return ShortLink(code='abc123', target='https://example.com', created_at=datetime(2025, 10, 1, tzinfo=UTC))


# -------------------------------
# 1. Logging visits
# -------------------------------


def test_log_visit_with_explicit_timestamp(recorder, link):
    at = datetime(2025, 10, 15, 9, 0, tzinfo=UTC)

    assert recorder.log_visit(link, at) == at
    assert link.visits == [at]


def test_log_visit_uses_clock(recorder, link, clock):
    first = recorder.log_visit(link)
    clock.advance(minutes=5)
    second = recorder.log_visit(link)

    assert first == datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
    assert second == datetime(2025, 10, 15, 12, 5, tzinfo=UTC)
    assert link.visits == [first, second]


# -------------------------------
# 2. Calendar bucketing
# -------------------------------


def test_stats_without_visits(recorder, link):
    assert recorder.stats(link) == VisitStats(total=0, today=0, yesterday=0)


def test_stats_partition_three_days(recorder, link):
    """Visits on three different days are bucketed into today/yesterday/total."""
    for at in (
        datetime(2025, 10, 13, 10, 0, tzinfo=UTC),  # two days ago
        datetime(2025, 10, 14, 8, 0, tzinfo=UTC),  # yesterday
        datetime(2025, 10, 14, 20, 0, tzinfo=UTC),  # yesterday
        datetime(2025, 10, 15, 7, 0, tzinfo=UTC),  # today
    ):
        recorder.log_visit(link, at)

    stats = recorder.stats(link, now=datetime(2025, 10, 15, 12, 0, tzinfo=UTC))
    assert stats == VisitStats(total=4, today=1, yesterday=2)


def test_stats_both_sides_of_midnight(recorder, link):
    """One second before and after midnight land in different buckets."""
    recorder.log_visit(link, datetime(2025, 10, 14, 23, 59, 59, tzinfo=UTC))
    recorder.log_visit(link, datetime(2025, 10, 15, 0, 0, 0, tzinfo=UTC))

    just_after_midnight = datetime(2025, 10, 15, 0, 0, 1, tzinfo=UTC)
    assert recorder.stats(link, now=just_after_midnight) == VisitStats(total=2, today=1, yesterday=1)

    just_before_midnight = datetime(2025, 10, 14, 23, 59, 59, 999999, tzinfo=UTC)
    assert recorder.stats(link, now=just_before_midnight) == VisitStats(total=2, today=1, yesterday=0)

    next_day = datetime(2025, 10, 16, 0, 0, 0, tzinfo=UTC)
    assert recorder.stats(link, now=next_day) == VisitStats(total=2, today=0, yesterday=1)


def test_stats_in_configured_timezone(link):
    """Calendar days follow the recorder's time zone, not UTC."""
    recorder = VisitRecorder(tz=ZoneInfo('Europe/Sofia'))  # UTC+3 in October (EEST)
    recorder.log_visit(link, datetime(2025, 10, 14, 21, 30, tzinfo=UTC))  # 2025-10-15 00:30 in Sofia
    recorder.log_visit(link, datetime(2025, 10, 14, 20, 30, tzinfo=UTC))  # 2025-10-14 23:30 in Sofia

    stats = recorder.stats(link, now=datetime(2025, 10, 15, 9, 0, tzinfo=UTC))
    assert stats == VisitStats(total=2, today=1, yesterday=1)


def test_stats_treats_naive_timestamps_as_utc(recorder, link):
    recorder.log_visit(link, datetime(2025, 10, 14, 23, 0))

    stats = recorder.stats(link, now=datetime(2025, 10, 15, 1, 0, tzinfo=UTC))
    assert stats == VisitStats(total=1, today=0, yesterday=1)


def test_stats_defaults_to_clock(recorder, link, clock):
    recorder.log_visit(link)
    clock.advance(days=1)

    assert recorder.stats(link) == VisitStats(total=1, today=0, yesterday=1)


# -------------------------------
# 3. Timeline
# -------------------------------


def test_timeline_returns_most_recent_visits(recorder, link, clock):
    visits = []
    for _ in range(15):
        visits.append(recorder.log_visit(link))
        clock.advance(minutes=1)

    assert recorder.timeline(link) == visits[-10:]
    assert recorder.timeline(link, limit=3) == visits[-3:]
    assert recorder.timeline(link, limit=50) == visits


def test_timeline_is_a_copy(recorder, link):
    recorder.log_visit(link)
    timeline = recorder.timeline(link)
    timeline.clear()

    assert len(link.visits) == 1


@pytest.mark.parametrize('limit', [0, -3])
def test_timeline_with_non_positive_limit(recorder, link, limit):
    recorder.log_visit(link)
    assert recorder.timeline(link, limit=limit) == []
