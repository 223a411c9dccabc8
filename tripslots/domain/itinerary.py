"""
Itinerary records as handed over by the store.

These mirror persisted rows; the allocator only ever sees their projections
(BookedInterval and DayRef).
"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from .models import BookedInterval, DayRef
from .trip_days import day_date


@dataclass
class WishlistItem:
    """A place a user saved for later, with suggested timeframe and duration."""
    id: str
    user_id: str
    place_name: str
    place_id: Optional[str] = None
    place_vicinity: Optional[str] = None
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    place_photo_reference: Optional[str] = None
    gpt_timeframe: Optional[str] = None
    gpt_duration: Optional[int] = None


@dataclass
class ItineraryDay:
    id: str
    day_index: int


@dataclass
class Itinerary:
    """A shared trip with its ordered days and member user ids."""
    id: str
    title: str
    start_date: date
    days: List[ItineraryDay] = field(default_factory=list)
    member_ids: List[str] = field(default_factory=list)

    def has_member(self, user_id: str) -> bool:
        return user_id in self.member_ids

    def find_day(self, day_index: int) -> ItineraryDay | None:
        for day in self.days:
            if day.day_index == day_index:
                return day
        return None

    def day_refs(self) -> List[DayRef]:
        """Project days to DayRefs in ascending day index order."""
        return [
            DayRef(day_index=day.day_index, date=day_date(self.start_date, day.day_index))
            for day in sorted(self.days, key=lambda d: d.day_index)
        ]


@dataclass
class Activity:
    """A scheduled itinerary entry."""
    id: str
    title: str
    day_id: str
    day_index: int
    start_time: Optional[str] = None
    duration: Optional[int] = None
    description: str = ""
    location: Optional[str] = None
    location_place_id: Optional[str] = None
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    place_photo_reference: Optional[str] = None
    created_by: Optional[str] = None
    is_group_activity: bool = False

    def to_booking(
        self,
        default_start_time: str = "09:00",
        default_duration: int = 60
    ) -> BookedInterval:
        """
        Project the activity to a booking for conflict checks.

        Activities without a start time or duration are assumed to occupy
        the given defaults.
        """
        return BookedInterval.from_time_string(
            day_index=self.day_index,
            start_time=self.start_time or default_start_time,
            duration_minutes=self.duration or default_duration
        )
