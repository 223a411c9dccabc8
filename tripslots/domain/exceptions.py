"""
Domain-specific exception hierarchy for the tripslots application.
"""

from datetime import date
from typing import Any, Dict, List


class TripslotsError(Exception):
    """Base class for all application-level errors."""


class InvalidTimeError(TripslotsError, ValueError):
    """Raised when a time-of-day string is not a valid 24-hour HH:MM value."""


class InvalidRequestError(TripslotsError):
    """Raised when a request body or argument set fails validation."""

    def __init__(self, message: str, errors: List[Dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors or []


class WishlistItemNotFoundError(TripslotsError):
    """Raised when a wishlist item does not exist for the requesting user."""


class ItineraryNotFoundError(TripslotsError):
    """Raised when an itinerary does not exist or the user is not a member."""


class InvalidDayIndexError(TripslotsError):
    """Raised when a day index does not belong to the itinerary."""


class NoAvailableSlotError(TripslotsError):
    """
    Raised by the promotion flow when the allocator finds no free slot.

    Carries the itinerary's days and start date so the caller can offer a
    manual choice.
    """

    def __init__(
        self,
        message: str,
        available_days: List[Dict[str, Any]],
        start_date: date
    ):
        super().__init__(message)
        self.available_days = available_days
        self.start_date = start_date


class StoreError(TripslotsError):
    """Raised when itinerary data cannot be loaded or saved."""
