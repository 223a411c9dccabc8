"""
Time-of-day arithmetic on integer minutes since local midnight.

Strings are parsed once at the boundary; everything inside the domain works
on plain integers.
"""

import re

from .exceptions import InvalidTimeError

_TIME_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_time(value: str) -> int:
    """
    Convert an "HH:MM" 24-hour string to minutes since midnight.

    Args:
        value: Time string such as "08:00" or "9:30"

    Returns:
        Minutes since midnight in the range 0-1439

    Raises:
        InvalidTimeError: If the value is not a valid 24-hour time
    """
    if not isinstance(value, str):
        raise InvalidTimeError(f"Time must be an 'HH:MM' string, got {value!r}")

    match = _TIME_PATTERN.match(value.strip())
    if not match:
        raise InvalidTimeError(f"Time must be in 'HH:MM' format, got {value!r}")

    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        raise InvalidTimeError(f"Time out of range: {value!r}")

    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    """
    Convert minutes since midnight to a zero-padded "HH:MM" string.

    Values past the end of the day are not wrapped (1470 -> "24:30").
    """
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"


def ranges_overlap(start1: int, end1: int, start2: int, end2: int) -> bool:
    """Check whether two half-open ranges [start, end) overlap."""
    return start1 < end2 and start2 < end1
