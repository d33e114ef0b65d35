"""Conversion between minute counts and JIRA duration strings.

JIRA writes durations as space-separated ``<n><unit>`` tokens (``2w 4d 6h 45m``)
on a working calendar where a day is 8 hours and a week is 5 days.
"""

import re

from jira_weektime.exceptions import InvalidDurationError

MINUTES_PER_HOUR = 60
MINUTES_PER_DAY = 8 * MINUTES_PER_HOUR
MINUTES_PER_WEEK = 5 * MINUTES_PER_DAY

UNIT_MINUTES = {
    "m": 1,
    "h": MINUTES_PER_HOUR,
    "d": MINUTES_PER_DAY,
    "w": MINUTES_PER_WEEK,
}

ZERO_DURATION = "0m"

_TOKEN_RE = re.compile(r"([0-9]+)([mhdw])")


def format_duration(minutes: int) -> str:
    """Render a minute count in canonical w/d/h/m order, e.g. ``1w 2h 5m``."""
    if minutes < 0:
        raise InvalidDurationError(minutes, "negative durations cannot be logged")

    parts = (
        (minutes // MINUTES_PER_WEEK, "w"),
        (minutes // MINUTES_PER_DAY % 5, "d"),
        (minutes // MINUTES_PER_HOUR % 8, "h"),
        (minutes % MINUTES_PER_HOUR, "m"),
    )
    tokens = [f"{value}{unit}" for value, unit in parts if value > 0]
    if not tokens:
        return ZERO_DURATION
    return " ".join(tokens)


def parse_duration(text: str | None) -> int:
    """Parse a JIRA duration string into minutes.

    Tokens may come in any order and may repeat (``30m 2h`` is 150).
    ``None`` and the empty string count as zero.

    Raises:
        InvalidDurationError: If any token is not ``<digits><m|h|d|w>``
    """
    if text in (None, "", ZERO_DURATION):
        return 0

    total = 0
    for token in text.split(" "):
        match = _TOKEN_RE.fullmatch(token)
        if not match:
            raise InvalidDurationError(text, f"unrecognised token {token!r}")
        number, unit = match.groups()
        total += int(number) * UNIT_MINUTES[unit]
    return total
