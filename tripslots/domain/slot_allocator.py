"""
Core business logic for placing a new activity into a multi-day itinerary.

This is the heart of the application - pure domain logic without any
external dependencies (no API calls, no database, no I/O).
"""

from itertools import islice
from typing import Dict, Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Union

from .models import BookedInterval, CandidateSlot, DayRef, TimeWindow
from .timeframes import TIMEFRAME_WINDOWS, Timeframe

SEARCH_STEP_MINUTES = 30
DEFAULT_DURATION_MINUTES = 60
DEFAULT_MAX_RESULTS = 5


class SlotAllocator:
    """
    Finds free slots for an activity of fixed duration.

    Algorithm:
    1. Resolve the timeframe to its ordered list of candidate windows
    2. Walk the days in the order supplied by the caller
    3. For each window, skip it if it is shorter than the duration
    4. Try start times from the window start in 30-minute steps up to the
       latest start that still ends inside the window
    5. Emit every start whose [start, end) overlaps no booking on that day

    The order of days, windows and steps is fixed, so identical inputs always
    yield identical output.
    """

    def __init__(
        self,
        windows: Mapping[Timeframe, Sequence[TimeWindow]] = TIMEFRAME_WINDOWS,
        default_duration_minutes: int = DEFAULT_DURATION_MINUTES
    ):
        self.windows = windows
        self.default_duration_minutes = default_duration_minutes

    def find_first_slot(
        self,
        timeframe: Union[str, Timeframe, None],
        duration_minutes: Optional[int],
        bookings: Iterable[BookedInterval],
        days: Sequence[DayRef]
    ) -> CandidateSlot | None:
        """
        Find the first feasible slot under the fixed search order.

        Args:
            timeframe: Preferred timeframe tag; None or unknown means "anytime"
            duration_minutes: Length of the new activity; None falls back to 60
            bookings: Already-scheduled activities across all days
            days: Days to try, in order

        Returns:
            The first CandidateSlot found, or None if nothing fits
        """
        return next(
            self._iter_candidates(timeframe, duration_minutes, bookings, days),
            None
        )

    def find_available_slots(
        self,
        timeframe: Union[str, Timeframe, None],
        duration_minutes: Optional[int],
        bookings: Iterable[BookedInterval],
        days: Sequence[DayRef],
        max_results: int = DEFAULT_MAX_RESULTS
    ) -> List[CandidateSlot]:
        """
        Collect up to max_results feasible slots in search order.

        Each (day, start time) pair is listed at most once even when several
        windows of the timeframe cover it.
        """
        if max_results <= 0:
            return []

        return list(islice(
            self._iter_candidates(timeframe, duration_minutes, bookings, days),
            max_results
        ))

    def _iter_candidates(
        self,
        timeframe: Union[str, Timeframe, None],
        duration_minutes: Optional[int],
        bookings: Iterable[BookedInterval],
        days: Sequence[DayRef]
    ) -> Iterator[CandidateSlot]:
        """Lazily yield feasible slots in search order."""
        duration = duration_minutes or self.default_duration_minutes
        windows = self.windows[Timeframe.resolve(timeframe)]
        bookings_by_day = self._group_by_day(bookings)

        for day in days:
            day_bookings = bookings_by_day.get(day.day_index, [])
            # Feasibility of a start only depends on the day, so a start
            # already tried through an earlier window is never retried.
            tried_starts: Set[int] = set()

            for window in windows:
                if not window.fits(duration):
                    continue

                for start in self._candidate_starts(window, duration):
                    if start in tried_starts:
                        continue
                    tried_starts.add(start)

                    end = start + duration
                    if not self._has_conflict(start, end, day_bookings):
                        yield CandidateSlot(day_index=day.day_index, start=start, end=end)

    @staticmethod
    def _candidate_starts(window: TimeWindow, duration: int) -> range:
        """Start times inside the window, quantized to the search step."""
        latest_start = window.end - duration
        return range(window.start, latest_start + 1, SEARCH_STEP_MINUTES)

    @staticmethod
    def _has_conflict(start: int, end: int, day_bookings: Sequence[BookedInterval]) -> bool:
        return any(booking.overlaps(start, end) for booking in day_bookings)

    @staticmethod
    def _group_by_day(bookings: Iterable[BookedInterval]) -> Dict[int, List[BookedInterval]]:
        grouped: Dict[int, List[BookedInterval]] = {}
        for booking in bookings:
            grouped.setdefault(booking.day_index, []).append(booking)
        return grouped


_default_allocator = SlotAllocator()


def find_first_slot(
    timeframe: Union[str, Timeframe, None],
    duration_minutes: Optional[int],
    bookings: Iterable[BookedInterval],
    days: Sequence[DayRef]
) -> CandidateSlot | None:
    """Module-level shortcut for SlotAllocator().find_first_slot."""
    return _default_allocator.find_first_slot(timeframe, duration_minutes, bookings, days)


def find_available_slots(
    timeframe: Union[str, Timeframe, None],
    duration_minutes: Optional[int],
    bookings: Iterable[BookedInterval],
    days: Sequence[DayRef],
    max_results: int = DEFAULT_MAX_RESULTS
) -> List[CandidateSlot]:
    """Module-level shortcut for SlotAllocator().find_available_slots."""
    return _default_allocator.find_available_slots(
        timeframe, duration_minutes, bookings, days, max_results
    )
