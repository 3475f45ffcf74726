"""
Centralized date/time utilities
All clock-time and date-key conversions should use functions from this module
"""

import re
from datetime import date, datetime, timezone, timedelta
from typing import Optional, Union
from taskboard.config.settings import settings
from taskboard.config.constants import (
    MINUTES_PER_HOUR,
    MINUTES_PER_DAY,
    FALLBACK_DURATION_MINUTES,
    FALLBACK_END_TIME,
)

# Singleton timezone object
USER_TIMEZONE = timezone(timedelta(hours=settings.USER_TIMEZONE_OFFSET))

_NUMERIC_PREFIX = re.compile(r"\s*(\d+)")
_DATE_KEY = re.compile(r"\d{4}-\d{2}-\d{2}")


def get_current_datetime() -> datetime:
    """
    Get current datetime in the user's timezone

    Returns:
        Current datetime object with the configured UTC offset
    """
    return datetime.now(USER_TIMEZONE)


def current_timestamp_ms() -> int:
    """Current instant as epoch milliseconds (createdAt / updatedAt format)"""
    return int(get_current_datetime().timestamp() * 1000)


def reference_date(now: Optional[Union[date, datetime]] = None) -> date:
    """
    Calendar day used as "today" by window and KPI calculations

    Args:
        now: Injected reference instant or day, defaults to the current time

    Returns:
        The calendar date of now
    """
    if now is None:
        now = get_current_datetime()
    if isinstance(now, datetime):
        return now.date()
    return now


def _leading_int(part: str) -> int:
    match = _NUMERIC_PREFIX.match(part)
    return int(match.group(1)) if match else 0


def time_to_minutes(time_str: Optional[str]) -> int:
    """
    Convert "HH:MM" clock time to minutes since midnight

    Missing or empty input counts as midnight. Malformed components
    contribute their numeric prefix, or zero when there is none.

    Args:
        time_str: Clock time, e.g. "09:30"

    Returns:
        Minutes since midnight, e.g. 570
    """
    if not time_str:
        return 0

    parts = time_str.split(":")
    hours = _leading_int(parts[0])
    minutes = _leading_int(parts[1]) if len(parts) > 1 else 0
    return hours * MINUTES_PER_HOUR + minutes


def minutes_to_time(total_minutes: int) -> str:
    """
    Convert minutes since midnight to "HH:MM", wrapping past midnight

    Args:
        total_minutes: Minute offset, may exceed one day or be negative

    Returns:
        Zero-padded clock time, e.g. 1500 -> "01:00"
    """
    wrapped = int(total_minutes) % MINUTES_PER_DAY
    return f"{wrapped // MINUTES_PER_HOUR:02d}:{wrapped % MINUTES_PER_HOUR:02d}"


def current_time_string(now: Optional[datetime] = None) -> str:
    """Wall-clock "HH:MM" snapshot"""
    now = now or get_current_datetime()
    return f"{now.hour:02d}:{now.minute:02d}"


def date_key(value: Union[date, datetime, str]) -> str:
    """
    Canonical YYYY-MM-DD key used to group and compare days

    Args:
        value: date, datetime or ISO string

    Returns:
        Date key string. Strings are passed through (time part dropped)
        so malformed input keeps comparing as its raw value.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return str(value).split("T", 1)[0]


def date_key_from_timestamp(timestamp_ms: int, tz: Optional[timezone] = None) -> str:
    """
    Date key of an epoch-milliseconds instant (createdAt / updatedAt)

    Args:
        timestamp_ms: Milliseconds since the epoch
        tz: Timezone for the calendar day, defaults to the user's timezone

    Returns:
        Date key string
    """
    instant = datetime.fromtimestamp(timestamp_ms / 1000, tz or USER_TIMEZONE)
    return date_key(instant)


def parse_date_key(value: Optional[str]) -> Optional[date]:
    """Parse a YYYY-MM-DD key into a date, None when it is not a valid date"""
    if not value or not _DATE_KEY.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except (TypeError, ValueError):
        return None


def start_of_week(day: date) -> date:
    """Sunday on or before the given day"""
    days_since_sunday = (day.weekday() + 1) % 7
    return day - timedelta(days=days_since_sunday)


def calculate_default_end_time(start_time: Optional[str], duration_minutes: Optional[int] = None) -> str:
    """
    Default end time for a new task

    Args:
        start_time: Start clock time, may be empty
        duration_minutes: Duration to add, defaults to DEFAULT_TASK_DURATION_MINUTES

    Returns:
        End clock time, wrapped past midnight
    """
    if not start_time:
        return FALLBACK_END_TIME

    if duration_minutes is None:
        duration_minutes = settings.DEFAULT_TASK_DURATION_MINUTES

    return minutes_to_time(time_to_minutes(start_time) + duration_minutes)


def duration_between(start_time: Optional[str], end_time: Optional[str]) -> int:
    """
    Minutes from start to end, treating an earlier end as the next day

    A zero-length span yields FALLBACK_DURATION_MINUTES.
    """
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time or start_time)

    if end >= start:
        duration = end - start
    else:
        duration = MINUTES_PER_DAY - start + end

    return duration or FALLBACK_DURATION_MINUTES
