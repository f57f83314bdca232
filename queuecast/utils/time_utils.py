"""
Time conversion and duration formatting utilities.

Durations are expressed in milliseconds throughout this module. Date-like
arguments may be a datetime, an ISO-8601 string (a trailing 'Z' is accepted)
or a Unix timestamp in seconds, which is read as UTC.

Formatting is lossy: ``parse_duration(format_duration(ms))`` drops the
sub-second part and everything beyond the displayed components, so the pair
is not expected to round-trip.
"""

import calendar
import math
import re
from datetime import date, datetime, time, timedelta
from datetime import timezone as dt_timezone
from typing import Optional, Union

from django.utils import timezone

from ..enums import CalendarPeriod, TimeUnit
from ..exceptions import (
    InvalidArgumentError,
    UnsupportedPeriodError,
    UnsupportedTimeUnitError,
)
from .converters import to_enum

MS_IN_SECOND = 1000
MS_IN_MINUTE = 60 * MS_IN_SECOND
MS_IN_HOUR = 60 * MS_IN_MINUTE
MS_IN_DAY = 24 * MS_IN_HOUR
MS_IN_WEEK = 7 * MS_IN_DAY

MS_PER_UNIT = {
    TimeUnit.MILLISECONDS: 1,
    TimeUnit.SECONDS: MS_IN_SECOND,
    TimeUnit.MINUTES: MS_IN_MINUTE,
    TimeUnit.HOURS: MS_IN_HOUR,
    TimeUnit.DAYS: MS_IN_DAY,
    TimeUnit.WEEKS: MS_IN_WEEK,
}

# Suffixes understood by parse_duration
DURATION_SUFFIX_MS = {
    "ms": 1,
    "s": MS_IN_SECOND,
    "m": MS_IN_MINUTE,
    "h": MS_IN_HOUR,
    "d": MS_IN_DAY,
    "w": MS_IN_WEEK,
}

DURATION_PATTERN = re.compile(r"(\d+)(ms|[smhdw])")

DEFAULT_DATETIME_FORMAT = "{dt:%b} {dt.day}, {dt:%Y}, {dt:%I:%M %p}"

DateLike = Union[datetime, date, str, int, float]


def _time_unit(unit) -> TimeUnit:
    return to_enum(TimeUnit, unit, UnsupportedTimeUnitError)


def _period(period) -> CalendarPeriod:
    return to_enum(CalendarPeriod, period, UnsupportedPeriodError)


def _format_number(value) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def to_datetime(value: DateLike) -> datetime:
    """Coerce a date-like value to a datetime."""
    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime.combine(value, time.min)

    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            raise InvalidArgumentError(f"Unable to parse date: {value}") from None

    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=dt_timezone.utc)
        except (ValueError, OverflowError, OSError):
            raise InvalidArgumentError(f"Timestamp out of range: {value}") from None

    raise InvalidArgumentError(f"Unsupported date value: {value!r}")


def to_local(value: datetime) -> datetime:
    """Convert an aware datetime to the current time zone; naive values pass through."""
    if timezone.is_aware(value):
        return timezone.localtime(value)
    return value


def _align(first: datetime, second: datetime):
    """Make two datetimes comparable; naive values are read as UTC."""
    if timezone.is_aware(first) == timezone.is_aware(second):
        return first, second

    if timezone.is_naive(first):
        first = first.replace(tzinfo=dt_timezone.utc)
    else:
        second = second.replace(tzinfo=dt_timezone.utc)

    return first, second


def to_milliseconds(value: float, unit: Union[TimeUnit, str]) -> float:
    """Convert a time value in ``unit`` to milliseconds."""
    return value * MS_PER_UNIT[_time_unit(unit)]


def from_milliseconds(ms: float, unit: Union[TimeUnit, str]) -> float:
    """Convert milliseconds to ``unit``."""
    return ms / MS_PER_UNIT[_time_unit(unit)]


def convert_time(
    value: float, from_unit: Union[TimeUnit, str], to_unit: Union[TimeUnit, str]
) -> float:
    """Convert a time value between units."""
    return from_milliseconds(to_milliseconds(value, from_unit), to_unit)


def format_duration(ms: Union[float, timedelta], precision: int = 2) -> str:
    """
    Format a duration in milliseconds to a short human-readable string.

    Examples: "750ms", "45s", "5m 30s", "2h 15m", "3d 4h", "2w 3d".

    Args:
        ms: Duration in milliseconds, or a timedelta
        precision: Maximum number of unit components to show

    Returns:
        Formatted duration
    """
    if isinstance(ms, timedelta):
        ms = ms.total_seconds() * MS_IN_SECOND

    if ms < MS_IN_SECOND:
        return f"{_format_number(ms)}ms"

    seconds = int(ms // MS_IN_SECOND)
    if seconds < 60:
        return f"{seconds}s"

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24

    if minutes < 60:
        components = [(minutes, "m"), (seconds % 60, "s")]
    elif hours < 24:
        components = [(hours, "h"), (minutes % 60, "m")]
    elif days < 7:
        components = [(days, "d"), (hours % 24, "h")]
    else:
        components = [(days // 7, "w"), (days % 7, "d")]

    parts = [f"{amount}{suffix}" for amount, suffix in components if amount > 0]
    return " ".join(parts[: max(1, precision)])


def parse_duration(text: str) -> int:
    """
    Parse a duration string such as "2h 30m" into milliseconds.

    Every ``<integer><unit>`` token is summed, with unit one of ms, s, m, h,
    d or w. Anything else is ignored; a string without tokens yields 0.
    """
    total_ms = 0

    for amount, suffix in DURATION_PATTERN.findall(text):
        total_ms += int(amount) * DURATION_SUFFIX_MS[suffix]

    return total_ms


def time_ago(value: DateLike, now: Optional[datetime] = None) -> str:
    """
    Format a past moment relative to now, e.g. "2 hours ago".

    Months count as 30 days and years as 365 days. Moments in the future
    read as "just now".
    """
    if now is None:
        now = timezone.now()

    then, now = _align(to_datetime(value), now)
    seconds = math.floor((now - then).total_seconds())

    minutes = seconds // 60
    hours = minutes // 60
    days = hours // 24
    months = days // 30
    years = days // 365

    if years > 0:
        return f"{years} year{'s' if years > 1 else ''} ago"
    if months > 0:
        return f"{months} month{'s' if months > 1 else ''} ago"
    if days > 0:
        return f"{days} day{'s' if days > 1 else ''} ago"
    if hours > 0:
        return f"{hours} hour{'s' if hours > 1 else ''} ago"
    if minutes > 0:
        return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
    if seconds <= 0:
        return "just now"
    return f"{seconds} second{'' if seconds == 1 else 's'} ago"


def format_date_time(value: DateLike, format_str: Optional[str] = None) -> str:
    """
    Format a moment for display, by default as "Jan 1, 2023, 12:00 PM".

    ``format_str`` is a strftime pattern. Aware values are shown in the
    current time zone.
    """
    dt = to_local(to_datetime(value))

    if format_str is None:
        return DEFAULT_DATETIME_FORMAT.format(dt=dt)

    return dt.strftime(format_str)


def date_diff(
    date1: DateLike,
    date2: Optional[DateLike] = None,
    unit: Union[TimeUnit, str] = TimeUnit.MILLISECONDS,
) -> float:
    """
    Absolute difference between two moments in ``unit``.

    ``date2`` defaults to now.
    """
    unit = _time_unit(unit)
    second = timezone.now() if date2 is None else to_datetime(date2)
    first, second = _align(to_datetime(date1), second)

    diff_ms = abs((second - first).total_seconds()) * MS_IN_SECOND
    return from_milliseconds(diff_ms, unit)


def add_time(value: DateLike, amount: float, unit: Union[TimeUnit, str]) -> datetime:
    """Add ``amount`` of ``unit`` to a moment."""
    ms = to_milliseconds(amount, unit)
    return to_datetime(value) + timedelta(milliseconds=ms)


def subtract_time(
    value: DateLike, amount: float, unit: Union[TimeUnit, str]
) -> datetime:
    """Subtract ``amount`` of ``unit`` from a moment."""
    return add_time(value, -amount, unit)


def is_between(value: DateLike, start: DateLike, end: DateLike) -> bool:
    """Check if a moment falls between two others (inclusive)."""
    moment = to_datetime(value)
    moment, lower = _align(moment, to_datetime(start))
    moment, upper = _align(moment, to_datetime(end))
    return lower <= moment <= upper


def start_of(value: DateLike, period: Union[CalendarPeriod, str]) -> datetime:
    """
    Get the first moment of the calendar period containing ``value``.

    Weeks start on Monday. The timezone of ``value`` is kept.
    """
    period = _period(period)
    dt = to_datetime(value)

    if period == CalendarPeriod.SECOND:
        return dt.replace(microsecond=0)
    if period == CalendarPeriod.MINUTE:
        return dt.replace(second=0, microsecond=0)
    if period == CalendarPeriod.HOUR:
        return dt.replace(minute=0, second=0, microsecond=0)

    midnight = dt.replace(hour=0, minute=0, second=0, microsecond=0)

    if period == CalendarPeriod.DAY:
        return midnight
    if period == CalendarPeriod.WEEK:
        return midnight - timedelta(days=midnight.weekday())
    if period == CalendarPeriod.MONTH:
        return midnight.replace(day=1)
    return midnight.replace(month=1, day=1)


def end_of(value: DateLike, period: Union[CalendarPeriod, str]) -> datetime:
    """Get the last microsecond of the calendar period containing ``value``."""
    period = _period(period)
    start = start_of(value, period)

    if period == CalendarPeriod.YEAR:
        next_start = start.replace(year=start.year + 1)
    elif period == CalendarPeriod.MONTH:
        if start.month == 12:
            next_start = start.replace(year=start.year + 1, month=1)
        else:
            next_start = start.replace(month=start.month + 1)
    else:
        step = {
            CalendarPeriod.WEEK: timedelta(weeks=1),
            CalendarPeriod.DAY: timedelta(days=1),
            CalendarPeriod.HOUR: timedelta(hours=1),
            CalendarPeriod.MINUTE: timedelta(minutes=1),
            CalendarPeriod.SECOND: timedelta(seconds=1),
        }[period]
        next_start = start + step

    return next_start - timedelta(microseconds=1)


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_month(year: int, month: int) -> int:
    """Number of days in ``month`` (1-12) of ``year``."""
    return calendar.monthrange(year, month)[1]
