"""
Standalone "what slots are free" lookups.

Validates a client request body, runs the allocator and returns the result
verbatim without committing anything.
"""

import logging
from typing import Any, Dict, Mapping

from pydantic import ValidationError

from ..domain.exceptions import InvalidRequestError
from ..domain.slot_allocator import DEFAULT_MAX_RESULTS, SlotAllocator
from .schemas import FindTimeSlotRequest

logger = logging.getLogger(__name__)


class SlotLookupService:
    """Exploratory slot queries over client-supplied bookings and days."""

    def __init__(
        self,
        allocator: SlotAllocator | None = None,
        default_max_results: int = DEFAULT_MAX_RESULTS
    ) -> None:
        self._allocator = allocator or SlotAllocator()
        self._default_max_results = default_max_results

    def find_time_slot(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        Find the first free slot for a request body.

        Returns:
            {"success": True, "timeSlot": {...} or None}

        Raises:
            InvalidRequestError: If the body fails validation
        """
        request = self.parse_request(payload)

        slot = self._allocator.find_first_slot(
            request.gpt_timeframe,
            request.gpt_duration,
            request.bookings(),
            request.day_refs()
        )
        logger.debug(
            "First slot for timeframe=%s duration=%s: %s",
            request.gpt_timeframe, request.gpt_duration, slot
        )

        return {"success": True, "timeSlot": slot.to_dict() if slot else None}

    def list_time_slots(self, payload: Mapping[str, Any]) -> Dict[str, Any]:
        """
        List candidate slots for a request body.

        Honours "maxResults" from the body, otherwise the configured default.

        Returns:
            {"success": True, "timeSlots": [...]}
        """
        request = self.parse_request(payload)
        max_results = request.max_results or self._default_max_results

        slots = self._allocator.find_available_slots(
            request.gpt_timeframe,
            request.gpt_duration,
            request.bookings(),
            request.day_refs(),
            max_results=max_results
        )
        logger.debug("Found %d candidate slot(s) (max %d)", len(slots), max_results)

        return {"success": True, "timeSlots": [slot.to_dict() for slot in slots]}

    @staticmethod
    def parse_request(payload: Mapping[str, Any]) -> FindTimeSlotRequest:
        """Validate a raw request body."""
        if not isinstance(payload, Mapping):
            raise InvalidRequestError("Request body must be a JSON object")
        try:
            return FindTimeSlotRequest.model_validate(dict(payload))
        except ValidationError as exc:
            raise InvalidRequestError(
                f"Invalid slot lookup request: {exc.error_count()} error(s)",
                errors=exc.errors(include_url=False)
            ) from exc
