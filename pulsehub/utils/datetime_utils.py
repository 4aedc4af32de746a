"""Calendar helpers.

Everything here works on naive local datetimes and compares at calendar
granularity (day, week, month, year) rather than elapsed hours.
"""

import calendar
from datetime import date, datetime, timedelta
from typing import Union

DateLike = Union[date, datetime]

SUNDAY = 6


def _as_date(value: DateLike) -> date:
    return value.date() if isinstance(value, datetime) else value


def calendar_days_between(start: DateLike, end: DateLike) -> int:
    """Whole calendar days from start to end (negative when end is earlier)."""
    return (_as_date(end) - _as_date(start)).days


def start_of_week(value: DateLike, first_weekday: int = SUNDAY) -> date:
    """First day of the calendar week containing value."""
    day = _as_date(value)
    return day - timedelta(days=(day.weekday() - first_weekday) % 7)


def is_same_day(a: DateLike, b: DateLike) -> bool:
    """Same calendar date."""
    return _as_date(a) == _as_date(b)


def is_same_week(a: DateLike, b: DateLike, first_weekday: int = SUNDAY) -> bool:
    """Same calendar week for the given first weekday."""
    return start_of_week(a, first_weekday) == start_of_week(b, first_weekday)


def is_same_month(a: DateLike, b: DateLike) -> bool:
    """Same month of the same year."""
    return (a.year, a.month) == (b.year, b.month)


def is_same_year(a: DateLike, b: DateLike) -> bool:
    """Same calendar year."""
    return a.year == b.year


def is_tomorrow(value: DateLike, now: DateLike) -> bool:
    """Whether value falls on the calendar day after now."""
    return calendar_days_between(now, value) == 1


def add_months(value: datetime, months: int) -> datetime:
    """Shift by whole months, clamping the day to the target month's length."""
    y = value.year + (value.month - 1 + months) // 12
    m = (value.month - 1 + months) % 12 + 1
    day = min(value.day, calendar.monthrange(y, m)[1])
    return value.replace(year=y, month=m, day=day)


def add_years(value: datetime, years: int) -> datetime:
    """Shift by whole years; 29 February falls back to the 28th."""
    return add_months(value, 12 * years)
