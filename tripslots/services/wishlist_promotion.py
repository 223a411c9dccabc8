"""
Promote a wishlist item into a scheduled itinerary activity.

The service coordinates the itinerary store and an optional place-details
lookup, and delegates the choice of day and time to the domain-level
``SlotAllocator``. Store access goes through a protocol so the JSON adapter
or an in-test stub can be plugged in.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Protocol

from ..config import DefaultsConfig
from ..domain.exceptions import (
    InvalidDayIndexError,
    InvalidRequestError,
    ItineraryNotFoundError,
    NoAvailableSlotError,
    WishlistItemNotFoundError,
)
from ..domain.itinerary import Activity, Itinerary, WishlistItem
from ..domain.models import BookedInterval, CandidateSlot
from ..domain.slot_allocator import SlotAllocator
from ..domain.time_utils import parse_time
from ..domain.trip_days import day_date

logger = logging.getLogger(__name__)


class ItineraryStoreProtocol(Protocol):
    """Protocol describing the store behaviour needed by the service."""

    async def get_wishlist_item(self, item_id: str, user_id: str) -> Optional[WishlistItem]:
        """Return the wishlist item if it belongs to the user."""

    async def get_itinerary(self, itinerary_id: str, user_id: str) -> Optional[Itinerary]:
        """Return the itinerary if the user is a member."""

    async def list_activities(self, itinerary_id: str) -> List[Activity]:
        """Return all activities scheduled on the itinerary's days."""

    async def create_activity(self, activity: Activity) -> Activity:
        """Persist a new activity and return it with its id assigned."""


class PlaceDetailsProtocol(Protocol):
    """Protocol for the optional place description lookup."""

    async def get_editorial_summary(self, place_id: str) -> Optional[str]:
        """Return a short description of the place, if known."""


@dataclass
class PromotionResult:
    """The created activity, the slot it was placed in and that day's date."""
    activity: Activity
    time_slot: CandidateSlot
    date: date

    def to_dict(self) -> dict:
        return {
            "success": True,
            "activityId": self.activity.id,
            "timeSlot": self.time_slot.to_dict(),
        }


class WishlistPromotionService:
    """
    Turns a wishlist item into an activity on an itinerary.

    Uses explicit day/time/duration when all are supplied, otherwise asks the
    allocator for the first free slot matching the item's timeframe and
    duration hints.
    """

    def __init__(
        self,
        store: ItineraryStoreProtocol,
        allocator: SlotAllocator | None = None,
        place_details: PlaceDetailsProtocol | None = None,
        defaults: DefaultsConfig | None = None,
    ) -> None:
        self._store = store
        self._defaults = defaults or DefaultsConfig()
        self._allocator = allocator or SlotAllocator(
            default_duration_minutes=self._defaults.duration_minutes
        )
        self._place_details = place_details

    async def add_to_itinerary(
        self,
        *,
        user_id: str,
        wishlist_item_id: str,
        itinerary_id: str,
        custom_start_time: str | None = None,
        custom_day_index: int | None = None,
        custom_duration: int | None = None,
    ) -> PromotionResult:
        """
        Schedule a wishlist item on an itinerary.

        Raises:
            InvalidRequestError: If ids are missing or custom values are invalid
            WishlistItemNotFoundError: If the item is not the user's
            ItineraryNotFoundError: If the user is not a member of the itinerary
            NoAvailableSlotError: If no free slot exists; lists the days
            InvalidDayIndexError: If the target day is not on the itinerary
        """
        if not wishlist_item_id or not itinerary_id:
            raise InvalidRequestError("Wishlist item ID and itinerary ID are required")

        item = await self._store.get_wishlist_item(wishlist_item_id, user_id)
        if item is None:
            raise WishlistItemNotFoundError(f"Wishlist item not found: {wishlist_item_id}")

        itinerary = await self._store.get_itinerary(itinerary_id, user_id)
        if itinerary is None:
            raise ItineraryNotFoundError(
                f"Itinerary not found or access denied: {itinerary_id}"
            )

        if custom_day_index is not None and custom_start_time and custom_duration:
            time_slot = self._custom_slot(custom_day_index, custom_start_time, custom_duration)
        else:
            time_slot = await self._allocate_slot(item, itinerary)

        target_day = itinerary.find_day(time_slot.day_index)
        if target_day is None:
            raise InvalidDayIndexError(f"Invalid day index: {time_slot.day_index}")

        description = await self._describe_place(item)

        activity = await self._store.create_activity(Activity(
            id="",
            title=item.place_name,
            description=description,
            location=item.place_vicinity or item.place_name,
            location_place_id=item.place_id,
            location_lat=item.location_lat,
            location_lng=item.location_lng,
            place_photo_reference=item.place_photo_reference,
            start_time=time_slot.start_time,
            duration=time_slot.duration_minutes,
            day_id=target_day.id,
            day_index=time_slot.day_index,
            created_by=user_id,
            is_group_activity=True,
        ))
        logger.info(
            "Scheduled wishlist item %s on itinerary %s: day %d %s-%s",
            item.id, itinerary.id, time_slot.day_index,
            time_slot.start_time, time_slot.end_time
        )

        return PromotionResult(
            activity=activity,
            time_slot=time_slot,
            date=day_date(itinerary.start_date, time_slot.day_index)
        )

    async def _allocate_slot(self, item: WishlistItem, itinerary: Itinerary) -> CandidateSlot:
        """Ask the allocator for the first free slot on the itinerary."""
        activities = await self._store.list_activities(itinerary.id)
        bookings = self._project_bookings(activities)
        days = itinerary.day_refs()
        if item.gpt_duration is not None and item.gpt_duration <= 0:
            raise InvalidRequestError(
                f"Wishlist item {item.id} has a non-positive duration: {item.gpt_duration}"
            )
        duration = item.gpt_duration or self._defaults.duration_minutes

        slot = self._allocator.find_first_slot(item.gpt_timeframe, duration, bookings, days)
        if slot is None:
            logger.debug(
                "No %s slot of %d min on itinerary %s",
                item.gpt_timeframe or "anytime", duration, itinerary.id
            )
            raise NoAvailableSlotError(
                "No available time slots found. Please try manually selecting a time.",
                available_days=[day.to_dict() for day in days],
                start_date=itinerary.start_date
            )
        return slot

    def _project_bookings(self, activities: List[Activity]) -> List[BookedInterval]:
        for activity in activities:
            if activity.duration is not None and activity.duration <= 0:
                raise InvalidRequestError(
                    f"Activity {activity.id} has a non-positive duration: {activity.duration}"
                )
        return [
            activity.to_booking(
                default_start_time=self._defaults.unscheduled_start_time,
                default_duration=self._defaults.unscheduled_duration_minutes
            )
            for activity in activities
        ]

    @staticmethod
    def _custom_slot(day_index: int, start_time: str, duration: int) -> CandidateSlot:
        """Build the slot the user picked by hand."""
        if duration <= 0:
            raise InvalidRequestError(f"Duration must be positive, got {duration}")
        start = parse_time(start_time)
        return CandidateSlot(day_index=day_index, start=start, end=start + duration)

    async def _describe_place(self, item: WishlistItem) -> str:
        """Fetch an editorial summary; lookup failures leave the description empty."""
        if self._place_details is None or not item.place_id:
            return ""
        try:
            summary = await self._place_details.get_editorial_summary(item.place_id)
        except Exception as exc:
            logger.warning("Could not fetch place details for %s: %s", item.place_id, exc)
            return ""
        return summary or ""
