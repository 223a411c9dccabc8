"""
Domain layer - Pure business logic without external dependencies.
"""

from .models import BookedInterval, CandidateSlot, DayRef, TimeWindow
from .slot_allocator import SlotAllocator, find_available_slots, find_first_slot
from .timeframes import TIMEFRAME_WINDOWS, Timeframe

__all__ = [
    "BookedInterval",
    "CandidateSlot",
    "DayRef",
    "TimeWindow",
    "SlotAllocator",
    "find_available_slots",
    "find_first_slot",
    "TIMEFRAME_WINDOWS",
    "Timeframe",
]
