"""Local calendar-day helpers.

Everything here works on naive local datetimes, the same way the entry store
keys its data: a day is over at the next local midnight.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Callable

Clock = Callable[[], dt.datetime]


def local_now() -> dt.datetime:
    return dt.datetime.now()


def date_key(moment: dt.datetime) -> str:
    """Return the YYYY-MM-DD key for the calendar day containing moment."""
    return moment.date().isoformat()


def next_midnight(moment: dt.datetime) -> dt.datetime:
    tomorrow = moment.date() + dt.timedelta(days=1)
    return dt.datetime.combine(tomorrow, dt.time.min, tzinfo=moment.tzinfo)


def seconds_until_midnight(moment: dt.datetime) -> int:
    """Whole seconds left in moment's day, clamped at zero."""
    remaining = next_midnight(moment) - moment
    return max(0, int(remaining.total_seconds()))


def format_hms(total_seconds: int) -> str:
    total_seconds = max(0, total_seconds)
    hours, rest = divmod(total_seconds, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours % 24:02d}:{minutes:02d}:{seconds:02d}"


def epoch_millis(moment: dt.datetime) -> int:
    return int(moment.timestamp() * 1000)


def format_clock_time(millis: int) -> str:
    """Render an epoch-millisecond timestamp as local HH:MM."""
    return dt.datetime.fromtimestamp(millis / 1000).strftime("%H:%M")


__all__ = [
    "Clock",
    "date_key",
    "epoch_millis",
    "format_clock_time",
    "format_hms",
    "local_now",
    "next_midnight",
    "seconds_until_midnight",
]
