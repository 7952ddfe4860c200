"""Day, week and month ranges plus day-granularity predicates.

Every component compares days through these helpers. Values may be ``date``
or naive ``datetime``; times of day are ignored unless stated otherwise.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Iterator, Union

from ..core.constants import DAYS_PER_WEEK, MONTH_GRID_DAYS

DayLike = Union[date, datetime]


def as_date(value: DayLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def start_of_day(value: DayLike) -> datetime:
    return datetime.combine(as_date(value), time.min)


def same_day(a: DayLike, b: DayLike) -> bool:
    return as_date(a) == as_date(b)


def date_in_range(d: DayLike, start: DayLike, end: DayLike) -> bool:
    """Inclusive containment at day granularity."""
    return as_date(start) <= as_date(d) <= as_date(end)


def week_of(value: DayLike) -> list[date]:
    """The ISO week (Monday first) that contains ``value``."""
    day = as_date(value)
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=i) for i in range(DAYS_PER_WEEK)]


def month_grid(value: DayLike) -> list[date]:
    """Six full weeks starting on the Monday on/before the 1st of the month."""
    first = as_date(value).replace(day=1)
    start = first - timedelta(days=first.weekday())
    return [start + timedelta(days=i) for i in range(MONTH_GRID_DAYS)]


def iter_days(start: DayLike, end: DayLike) -> Iterator[date]:
    day = as_date(start)
    last = as_date(end)
    while day <= last:
        yield day
        day += timedelta(days=1)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    # Touching endpoints do not overlap.
    return a_start < b_end and a_end > b_start


def roll_overnight(start: datetime, end: datetime) -> datetime:
    """Return an end strictly after ``start``.

    An end whose time of day is not after the start's time of day belongs
    to the next calendar day.
    """
    if end > start:
        return end
    rolled = datetime.combine(start.date(), end.time())
    if rolled <= start:
        rolled += timedelta(days=1)
    return rolled


def interval_on(day: DayLike, start: time, end: time) -> tuple[datetime, datetime]:
    """Concrete interval for a time-of-day range placed on ``day``."""
    start_dt = datetime.combine(as_date(day), start)
    end_dt = datetime.combine(as_date(day), end)
    if end <= start:
        end_dt += timedelta(days=1)
    return start_dt, end_dt
