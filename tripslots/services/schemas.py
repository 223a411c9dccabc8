"""
Request models for the slot lookup flow.

Field names follow the camelCase wire format; snake_case names are accepted
as well.
"""

from datetime import date as date_type
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..domain.exceptions import InvalidTimeError
from ..domain.models import BookedInterval, DayRef
from ..domain.time_utils import parse_time
from ..domain.trip_days import to_date


class ActivityPayload(BaseModel):
    """An existing activity as sent by the client."""
    model_config = ConfigDict(populate_by_name=True)

    start_time: str = Field(alias="startTime")
    duration: int = Field(gt=0)
    day_index: int = Field(alias="dayIndex", ge=0)

    @field_validator("start_time")
    @classmethod
    def validate_start_time(cls, value: str) -> str:
        try:
            parse_time(value)
        except InvalidTimeError as exc:
            raise ValueError(str(exc)) from exc
        return value

    def to_booking(self) -> BookedInterval:
        return BookedInterval.from_time_string(
            day_index=self.day_index,
            start_time=self.start_time,
            duration_minutes=self.duration
        )


class DayPayload(BaseModel):
    """A trip day; the date may be an ISO date or datetime string."""
    model_config = ConfigDict(populate_by_name=True)

    day_index: int = Field(alias="dayIndex", ge=0)
    date: date_type

    @field_validator("date", mode="before")
    @classmethod
    def parse_date(cls, value):
        if isinstance(value, str):
            try:
                return to_date(value)
            except (ValueError, TypeError) as exc:
                raise ValueError(f"Invalid date: {value!r}") from exc
        return value

    def to_day_ref(self) -> DayRef:
        return DayRef(day_index=self.day_index, date=self.date)


class FindTimeSlotRequest(BaseModel):
    """Body of a slot lookup request."""
    model_config = ConfigDict(populate_by_name=True)

    gpt_timeframe: Optional[str] = Field(default=None, alias="gptTimeframe")
    gpt_duration: Optional[int] = Field(default=None, alias="gptDuration", gt=0)
    existing_activities: List[ActivityPayload] = Field(
        default_factory=list, alias="existingActivities"
    )
    days: List[DayPayload] = Field(default_factory=list)
    max_results: Optional[int] = Field(default=None, alias="maxResults", gt=0)

    def bookings(self) -> List[BookedInterval]:
        return [activity.to_booking() for activity in self.existing_activities]

    def day_refs(self) -> List[DayRef]:
        """Days in the order the client sent them."""
        return [day.to_day_ref() for day in self.days]
