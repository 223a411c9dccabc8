"""
Domain value objects for slot allocation.

All times are TimePoints: integer minutes since local midnight.
"""

from dataclasses import dataclass
from datetime import date as date_type
from typing import Dict, Optional

from .time_utils import format_time, parse_time, ranges_overlap


@dataclass(frozen=True)
class BookedInterval:
    """
    An already-committed activity used as a conflict constraint.

    The end is derived on demand and may run past midnight; it is never clamped.
    """
    day_index: int
    start: int
    duration_minutes: int

    @property
    def end(self) -> int:
        return self.start + self.duration_minutes

    def overlaps(self, start: int, end: int) -> bool:
        """Check if [start, end) collides with this booking."""
        return ranges_overlap(start, end, self.start, self.end)

    @classmethod
    def from_time_string(
        cls,
        day_index: int,
        start_time: str,
        duration_minutes: int
    ) -> "BookedInterval":
        """Build a booking from an "HH:MM" start time."""
        return cls(
            day_index=day_index,
            start=parse_time(start_time),
            duration_minutes=duration_minutes
        )


@dataclass(frozen=True)
class DayRef:
    """One itinerary day, identified by its 0-based index and calendar date."""
    day_index: int
    date: date_type

    def to_dict(self) -> Dict[str, object]:
        return {"dayIndex": self.day_index, "date": self.date.isoformat()}


@dataclass(frozen=True)
class TimeWindow:
    """
    A candidate clock-time range belonging to a timeframe.

    Invariant: start must be before end.
    """
    start: int
    end: int

    def __post_init__(self):
        if self.start >= self.end:
            raise ValueError(
                f"Window start {format_time(self.start)} must be before end {format_time(self.end)}"
            )

    @property
    def span_minutes(self) -> int:
        return self.end - self.start

    def fits(self, duration_minutes: int) -> bool:
        """Check if an activity of the given length can ever fit in the window."""
        return self.span_minutes >= duration_minutes

    @classmethod
    def from_strings(cls, start: str, end: str) -> "TimeWindow":
        return cls(start=parse_time(start), end=parse_time(end))

    def __str__(self) -> str:
        return f"{format_time(self.start)}-{format_time(self.end)}"


@dataclass(frozen=True)
class CandidateSlot:
    """A proposed placement (day, start, end) for a new activity."""
    day_index: int
    start: int
    end: int

    @property
    def start_time(self) -> str:
        return format_time(self.start)

    @property
    def end_time(self) -> str:
        return format_time(self.end)

    @property
    def duration_minutes(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict[str, object]:
        """Serialize to the wire shape used by the lookup and promotion flows."""
        return {
            "dayIndex": self.day_index,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }

    def format_display(self, date: Optional[date_type] = None) -> str:
        """
        Format the slot for display.
        Format: Day N (Weekday, DD Mon) | HH:MM - HH:MM (M min)
        """
        label = f"Day {self.day_index + 1}"
        if date is not None:
            label += f" ({date.strftime('%a, %d %b')})"
        return (
            f"{label} | {self.start_time} - {self.end_time} "
            f"({self.duration_minutes} min)"
        )
