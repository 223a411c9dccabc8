"""
File-backed itinerary store.

Keeps itineraries, wishlist items and activities in memory, loaded from a
JSON document with camelCase keys, for running the promotion flow without a
database.
"""

import json
import logging
import re
import uuid
from dataclasses import asdict, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from ..domain.exceptions import StoreError
from ..domain.itinerary import Activity, Itinerary, ItineraryDay, WishlistItem
from ..domain.trip_days import to_date

logger = logging.getLogger(__name__)

T = TypeVar("T")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def _to_snake(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def _to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _build(record_type: Type[T], data: Dict[str, Any]) -> T:
    """Create a record from a camelCase mapping, ignoring unknown keys."""
    known = {f.name for f in fields(record_type)}
    values = {
        _to_snake(key): value
        for key, value in data.items()
        if _to_snake(key) in known
    }
    return record_type(**values)


def _dump(record: Any) -> Dict[str, Any]:
    return {_to_camel(key): value for key, value in asdict(record).items()}


class JsonItineraryStore:
    """
    In-memory store implementing ItineraryStoreProtocol.

    Document layout:
        {"itineraries": [...], "wishlistItems": [...], "activities": [...]}
    """

    def __init__(
        self,
        itineraries: List[Itinerary] | None = None,
        wishlist_items: List[WishlistItem] | None = None,
        activities: List[Activity] | None = None,
        path: Path | None = None
    ):
        self.itineraries = list(itineraries or [])
        self.wishlist_items = list(wishlist_items or [])
        self.activities = list(activities or [])
        self.path = path

    @classmethod
    def from_file(cls, path: Path) -> "JsonItineraryStore":
        """
        Load a store from a JSON file.

        Raises:
            StoreError: If the file is missing or malformed
        """
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            raise StoreError(f"Itinerary data file not found: {path}") from exc
        except json.JSONDecodeError as exc:
            raise StoreError(f"Invalid JSON in {path}: {exc}") from exc

        store = cls.from_dict(data)
        store.path = path
        logger.debug(
            "Loaded %d itinerary(ies), %d wishlist item(s), %d activity(ies) from %s",
            len(store.itineraries), len(store.wishlist_items), len(store.activities), path
        )
        return store

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JsonItineraryStore":
        if not isinstance(data, dict):
            raise StoreError("Itinerary data must contain a mapping at the root level.")

        try:
            itineraries = [cls._parse_itinerary(raw) for raw in data.get("itineraries", [])]
            wishlist_items = [_build(WishlistItem, raw) for raw in data.get("wishlistItems", [])]
            activities = [_build(Activity, raw) for raw in data.get("activities", [])]
        except (KeyError, TypeError, ValueError) as exc:
            raise StoreError(f"Malformed itinerary data: {exc}") from exc

        return cls(itineraries=itineraries, wishlist_items=wishlist_items, activities=activities)

    @staticmethod
    def _parse_itinerary(raw: Dict[str, Any]) -> Itinerary:
        return Itinerary(
            id=raw["id"],
            title=raw.get("title", ""),
            start_date=to_date(raw["startDate"]),
            days=[_build(ItineraryDay, day) for day in raw.get("days", [])],
            member_ids=list(raw.get("memberIds", [])),
        )

    def to_dict(self) -> Dict[str, Any]:
        itineraries = []
        for itinerary in self.itineraries:
            itineraries.append({
                "id": itinerary.id,
                "title": itinerary.title,
                "startDate": itinerary.start_date.isoformat(),
                "days": [_dump(day) for day in itinerary.days],
                "memberIds": list(itinerary.member_ids),
            })
        return {
            "itineraries": itineraries,
            "wishlistItems": [_dump(item) for item in self.wishlist_items],
            "activities": [_dump(activity) for activity in self.activities],
        }

    def save(self, path: Path | None = None) -> None:
        """Write the store back to its file (or the given path)."""
        target = path or self.path
        if target is None:
            raise StoreError("No file to save the itinerary data to.")
        try:
            with open(target, "w", encoding="utf-8") as f:
                json.dump(self.to_dict(), f, indent=2)
        except OSError as exc:
            raise StoreError(f"Could not save itinerary data to {target}: {exc}") from exc

    async def get_wishlist_item(self, item_id: str, user_id: str) -> Optional[WishlistItem]:
        for item in self.wishlist_items:
            if item.id == item_id and item.user_id == user_id:
                return item
        return None

    async def get_itinerary(self, itinerary_id: str, user_id: str) -> Optional[Itinerary]:
        for itinerary in self.itineraries:
            if itinerary.id == itinerary_id and itinerary.has_member(user_id):
                return itinerary
        return None

    async def list_activities(self, itinerary_id: str) -> List[Activity]:
        day_ids = {
            day.id
            for itinerary in self.itineraries
            if itinerary.id == itinerary_id
            for day in itinerary.days
        }
        return [activity for activity in self.activities if activity.day_id in day_ids]

    async def create_activity(self, activity: Activity) -> Activity:
        if not activity.id:
            activity.id = uuid.uuid4().hex
        self.activities.append(activity)
        return activity
