"""Helper utilities shared across the registry.

Functions:
    utc_now() -> datetime
        Current moment as a timezone-aware UTC datetime
    calendar_date(moment, tz) -> date
        Calendar date of a moment in a given time zone
    day_before(day) -> date
        The calendar day preceding a given date
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    >>> from datetime import datetime, UTC
    >>> from zoneinfo import ZoneInfo
    >>> moment = datetime(2025, 10, 15, 23, 30, tzinfo=UTC)
    >>> calendar_date(moment, ZoneInfo('UTC'))
    datetime.date(2025, 10, 15)
    >>> calendar_date(moment, ZoneInfo('Europe/Sofia'))
    datetime.date(2025, 10, 16)
"""

import os
import functools
from datetime import date, datetime, timedelta, tzinfo, UTC
from collections.abc import Callable

from linkshortener.exceptions import MissingEnvironmentVariableError


def utc_now() -> datetime:
    return datetime.now(UTC)


def calendar_date(moment: datetime, tz: tzinfo) -> date:
    """Compute the calendar date of `moment` as observed in time zone `tz`.

    Naive datetimes are interpreted as UTC so that bucketing never depends on
    the host's local time zone.

    Args:
        moment (datetime): point in time
        tz (tzinfo): time zone in which calendar days are counted

    Returns:
        date: calendar date of `moment` in `tz`
    """
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(tz).date()


def day_before(day: date) -> date:
    return day - timedelta(days=1)


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APP_NAME')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APP_NAME'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator
