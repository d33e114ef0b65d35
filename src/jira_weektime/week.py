"""Current-week window calculation.

Weeks run from Sunday 00:00 local time up to (not including) the following
Sunday 00:00. All comparisons happen in naive local wall time.
"""

from datetime import datetime, timedelta

WEEK_LENGTH = timedelta(days=7)


def to_local_time(moment: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive values are assumed local."""
    if moment.tzinfo is not None:
        return moment.astimezone().replace(tzinfo=None)
    return moment


def week_bounds(now: datetime | None = None) -> tuple[datetime, datetime]:
    """Return ``(week_start, week_end)`` for the week containing ``now``."""
    now = to_local_time(now or datetime.now())
    # Python numbers Monday as 0; shift so Sunday is day 0 of the week.
    days_since_sunday = (now.weekday() + 1) % 7
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = midnight - timedelta(days=days_since_sunday)
    return week_start, week_start + WEEK_LENGTH


def in_window(timestamp: datetime, week_start: datetime, week_end: datetime) -> bool:
    """Check ``week_start <= timestamp < week_end`` in local time."""
    return week_start <= to_local_time(timestamp) < week_end


def is_in_current_week(timestamp: datetime, now: datetime | None = None) -> bool:
    """Check whether ``timestamp`` falls in the Sunday-to-Sunday week of ``now``."""
    return in_window(timestamp, *week_bounds(now))
