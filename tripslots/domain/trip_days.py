"""
Calendar helpers for 0-based itinerary day indexes.
"""

from datetime import date, datetime
from typing import Union

import pendulum
from pendulum import Date

DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> Date:
    """
    Normalize a date, datetime or ISO-8601 string to a pendulum Date.

    Datetimes keep their own calendar date; no timezone conversion happens.
    """
    if isinstance(value, datetime):
        return pendulum.instance(value).date()
    if isinstance(value, date):
        return pendulum.date(value.year, value.month, value.day)
    if isinstance(value, str):
        return pendulum.parse(value).date()
    raise TypeError(f"Cannot interpret {value!r} as a date")


def day_date(start_date: DateLike, day_index: int) -> Date:
    """Calendar date of the given day of a trip starting on start_date."""
    return to_date(start_date).add(days=day_index)


def format_day_with_date(start_date: DateLike, day_index: int) -> str:
    """Format a day label like "Day 1 - Fri, Mar 15"."""
    dt = day_date(start_date, day_index)
    return f"Day {day_index + 1} - {dt.format('ddd, MMM D', locale='en')}"

