"""Visit recording and aggregation for ShortLink entities.

Calendar days are counted in a single configured time zone (UTC unless
configured otherwise), never in the host's local time zone.
"""

from datetime import datetime, tzinfo, UTC

from linkshortener.constants import Defaults
from linkshortener.models import ShortLink, VisitStats
from linkshortener.types import Clock
from linkshortener.utils.helpers import calendar_date, day_before, utc_now


class VisitRecorder:
    """Append visits to links and answer aggregate queries.

    The recorder keeps no state of its own. All visit data lives on the
    ShortLink it is handed; appends and reads hold that link's lock.

    Attributes:
        tz (tzinfo):
            Time zone in which calendar days are counted.
        clock (Clock):
            Source of visit timestamps when none is given explicitly.

    Example:
        >>> recorder = VisitRecorder()
        >>> recorder.log_visit(link, datetime(2025, 10, 15, 9, 0, tzinfo=UTC))
        datetime.datetime(2025, 10, 15, 9, 0, tzinfo=datetime.timezone.utc)
        >>> recorder.stats(link, now=datetime(2025, 10, 15, 18, 0, tzinfo=UTC))
        VisitStats(total=1, today=1, yesterday=0)
    """

    def __init__(self, tz: tzinfo = UTC, clock: Clock = utc_now):
        self.tz = tz
        self.clock = clock

    def log_visit(self, link: ShortLink, at: datetime | None = None) -> datetime:
        """Append a visit to `link` and return its timestamp.

        Without `at`, the timestamp is read from the clock while holding the
        link's lock, so concurrent visits are appended in clock order.
        """
        with link.lock:
            if at is None:
                at = self.clock()
            link.visits.append(at)
        return at

    def stats(self, link: ShortLink, now: datetime | None = None) -> VisitStats:
        """Count all visits and those on `now`'s calendar day and the day before.

        Args:
            link (ShortLink): link to aggregate
            now (datetime | None): reference moment, defaults to the clock

        Returns:
            VisitStats: total, today and yesterday counts
        """
        today = calendar_date(now if now is not None else self.clock(), self.tz)
        yesterday = day_before(today)

        with link.lock:
            visits = list(link.visits)

        days = [calendar_date(visit, self.tz) for visit in visits]
        return VisitStats(
            total=len(visits),
            today=days.count(today),
            yesterday=days.count(yesterday),
        )

    def timeline(self, link: ShortLink, limit: int = Defaults.TIMELINE_LIMIT) -> list[datetime]:
        """Return the `limit` most recent visits, oldest first."""
        if limit <= 0:
            return []
        with link.lock:
            return link.visits[-limit:]
