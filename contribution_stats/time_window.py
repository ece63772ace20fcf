"""Parsing of the query time window."""

import re
import logging
from datetime import datetime, timezone

from .errors import TimeParseError
from .models import TimeRange


# RFC 3339 timestamps, with and without fractional seconds.
# %z accepts both 'Z' and numeric offsets such as '+02:00'.
TIMESTAMP_FORMATS = (
    '%Y-%m-%dT%H:%M:%S%z',
    '%Y-%m-%dT%H:%M:%S.%f%z',
)

# Fractional seconds of any length; strptime takes at most six digits
FRACTION_RE = re.compile(r'\.(\d+)')


def parse_timestamp(value: str, endpoint: str) -> datetime:
    """Parse one RFC 3339 timestamp.

    Args:
        value: Timestamp literal, e.g. '2022-01-01T00:00:00Z'
        endpoint: Which end of the window this is ('start' or 'end'), for error messages

    Returns:
        Timezone aware datetime

    Raises:
        TimeParseError: If the literal is not a valid RFC 3339 timestamp
    """
    if value is None or not value.strip():
        raise TimeParseError(endpoint, value or '', 'empty value')

    literal = FRACTION_RE.sub(_normalize_fraction, value.strip(), count=1)
    for fmt in TIMESTAMP_FORMATS:
        try:
            return datetime.strptime(literal, fmt)
        except ValueError:
            continue

    raise TimeParseError(endpoint, value, "expected RFC 3339 format like '2022-01-01T00:00:00Z'")


def _normalize_fraction(match) -> str:
    """Truncate or pad a fraction to microseconds."""
    return '.' + match.group(1)[:6].ljust(6, '0')


def parse_time_range(start: str, end: str) -> TimeRange:
    """Parse both ends of the time window.

    An inverted window (start after end) is not rejected; the API simply
    returns no contributions for it.

    Raises:
        TimeParseError: Naming the endpoint that failed
    """
    time_range = TimeRange(
        start=parse_timestamp(start, 'start'),
        end=parse_timestamp(end, 'end'),
    )
    logging.debug(f"Resolved time window: {time_range.describe()}")
    return time_range


def current_year_range(now: datetime = None) -> TimeRange:
    """Window covering the current calendar year in UTC."""
    now = now or datetime.now(timezone.utc)
    return TimeRange(
        start=datetime(now.year, 1, 1, tzinfo=timezone.utc),
        end=datetime(now.year, 12, 31, 23, 59, 59, tzinfo=timezone.utc),
    )
