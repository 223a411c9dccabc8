"""
Fixed lookup table from timeframe tags to candidate clock-time windows.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple, Union

from .models import TimeWindow


class Timeframe(str, Enum):
    """Coarse preference bucket for when an activity should happen."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"
    ANYTIME = "anytime"

    @classmethod
    def resolve(cls, value: Union[str, "Timeframe", None]) -> "Timeframe":
        """
        Map a caller-supplied tag onto a timeframe.

        Matching ignores case and surrounding whitespace. None, empty and
        unknown names fall back to ANYTIME.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.ANYTIME
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.ANYTIME


def _windows(*ranges: Tuple[str, str]) -> Tuple[TimeWindow, ...]:
    return tuple(TimeWindow.from_strings(start, end) for start, end in ranges)


# Windows inside a bucket overlap on purpose: narrower "typical" ranges are
# listed after the widest one and tried in declaration order.
TIMEFRAME_WINDOWS: Mapping[Timeframe, Tuple[TimeWindow, ...]] = MappingProxyType({
    Timeframe.MORNING: _windows(
        ("08:00", "12:00"),
        ("09:00", "12:00"),
        ("10:00", "12:00"),
    ),
    Timeframe.AFTERNOON: _windows(
        ("12:00", "18:00"),
        ("13:00", "17:00"),
        ("14:00", "18:00"),
        ("15:00", "18:00"),
    ),
    Timeframe.EVENING: _windows(
        ("18:00", "22:00"),
        ("19:00", "22:00"),
        ("20:00", "22:00"),
    ),
    Timeframe.NIGHT: _windows(
        ("20:00", "23:59"),
        ("21:00", "23:59"),
        ("22:00", "23:59"),
    ),
    Timeframe.ANYTIME: _windows(
        ("09:00", "18:00"),
        ("10:00", "16:00"),
        ("11:00", "17:00"),
        ("12:00", "18:00"),
        ("13:00", "19:00"),
        ("14:00", "20:00"),
    ),
})

