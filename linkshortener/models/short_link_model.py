import threading
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class ShortLink:
    """Represent a shortened URL mapping and its visit history.

    Attributes:
        code (str):
            The unique short identifier (generated shortcode or custom alias).
        target (str):
            The original long URL that the code resolves to.
        created_at (datetime):
            Creation time as a timezone-aware UTC datetime.
        visits (list[datetime]):
            Append-only visit timestamps in chronological order.
            Only VisitRecorder mutates this list, while holding `lock`.
        lock (threading.Lock):
            Per-link lock serializing visit appends and snapshots.

    NOTE:
        `code`, `target` and `created_at` cannot be reassigned (frozen dataclass).
        `visits` itself stays a mutable list on the frozen instance.

    Example:
        >>> from datetime import datetime, UTC
        >>> link = ShortLink(
        ...     code='abc123',
        ...     target='https://example.com/article/123',
        ...     created_at=datetime(2025, 10, 15, tzinfo=UTC),
        ... )
        >>> link.code
        'abc123'
        >>> link.visits
        []
    """

    code: str
    target: str
    created_at: datetime
    visits: list[datetime] = field(default_factory=list, compare=False)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)


# fmt: off
@dataclass(frozen=True)
class VisitStats:
    total: int      # Count of all visits
    today: int      # Visits on the calendar day of `now`
    yesterday: int  # Visits on the calendar day before `now`
# fmt: on
