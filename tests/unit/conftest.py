from datetime import datetime, timedelta, UTC

import pytest

from linkshortener.core import CodeAllocator, LinkTable, UrlRegistry, VisitRecorder


class FakeClock:
    """Controllable clock returning timezone-aware UTC datetimes."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC))


@pytest.fixture
def table() -> LinkTable:
    return LinkTable(shards=4)


@pytest.fixture
def allocator(table: LinkTable) -> CodeAllocator:
    return CodeAllocator(table)


@pytest.fixture
def recorder(clock: FakeClock) -> VisitRecorder:
    return VisitRecorder(tz=UTC, clock=clock)


@pytest.fixture
def registry(allocator: CodeAllocator, recorder: VisitRecorder, clock: FakeClock) -> UrlRegistry:
    return UrlRegistry(allocator=allocator, recorder=recorder, clock=clock)
