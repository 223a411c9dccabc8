"""
Tests for the slot allocator.
"""

import pendulum

from tripslots.domain.models import BookedInterval, CandidateSlot, DayRef
from tripslots.domain.slot_allocator import (
    SlotAllocator,
    find_available_slots,
    find_first_slot,
)


def _days(count: int):
    start = pendulum.date(2024, 3, 15)
    return [DayRef(day_index=i, date=start.add(days=i)) for i in range(count)]


def _booking(day_index: int, start_time: str, duration: int) -> BookedInterval:
    return BookedInterval.from_time_string(day_index, start_time, duration)


class TestFindFirstSlot:
    """Tests for SlotAllocator.find_first_slot."""

    def test_empty_day_morning(self):
        """Test an empty day yields the start of the first morning window."""
        slot = SlotAllocator().find_first_slot("morning", 60, [], _days(1))

        assert slot == CandidateSlot(day_index=0, start=480, end=540)
        assert slot.to_dict() == {"dayIndex": 0, "startTime": "08:00", "endTime": "09:00"}

    def test_blocked_morning_returns_none(self):
        """Test a morning blocked 08:00-12:00 has no morning slot."""
        bookings = [_booking(0, "08:00", 240)]

        slot = SlotAllocator().find_first_slot("morning", 60, bookings, _days(1))

        assert slot is None

    def test_moves_to_next_day(self):
        """Test a fully booked first day pushes the slot to the next day."""
        bookings = [_booking(0, "08:00", 840)]  # 08:00-22:00

        slot = SlotAllocator().find_first_slot("evening", 90, bookings, _days(2))

        assert slot.to_dict() == {"dayIndex": 1, "startTime": "18:00", "endTime": "19:30"}

    def test_window_too_small(self):
        """Test a duration longer than every window yields None on an empty day."""
        slot = SlotAllocator().find_first_slot("night", 300, [], _days(3))

        assert slot is None

    def test_unknown_timeframe_behaves_like_anytime(self):
        """Test an unknown timeframe uses the anytime windows."""
        allocator = SlotAllocator()
        bookings = [_booking(0, "09:00", 90), _booking(1, "10:00", 60)]

        for duration in (30, 60, 150):
            assert allocator.find_first_slot("midnight-snack", duration, bookings, _days(2)) == \
                allocator.find_first_slot("anytime", duration, bookings, _days(2))
            assert allocator.find_available_slots("midnight-snack", duration, bookings, _days(2), 20) == \
                allocator.find_available_slots("anytime", duration, bookings, _days(2), 20)

    def test_none_timeframe_is_anytime(self):
        """Test a missing timeframe starts at the anytime window."""
        slot = SlotAllocator().find_first_slot(None, 60, [], _days(1))

        assert slot.start_time == "09:00"

    def test_back_to_back_allowed(self):
        """Test a slot may start exactly when a booking ends."""
        bookings = [_booking(0, "11:00", 60)]  # ends 12:00

        slot = SlotAllocator().find_first_slot("afternoon", 60, bookings, _days(1))

        assert slot.to_dict() == {"dayIndex": 0, "startTime": "12:00", "endTime": "13:00"}

    def test_back_to_back_before_booking(self):
        """Test a slot may end exactly when a booking starts."""
        bookings = [_booking(0, "09:00", 60)]

        slot = SlotAllocator().find_first_slot("morning", 60, bookings, _days(1))

        assert slot.start_time == "08:00"
        assert slot.end_time == "09:00"

    def test_steps_in_thirty_minutes(self):
        """Test start times advance in 30-minute steps past a conflict."""
        bookings = [_booking(0, "12:00", 90)]  # 12:00-13:30

        slot = SlotAllocator().find_first_slot("afternoon", 60, bookings, _days(1))

        assert slot.start_time == "13:30"

    def test_default_duration(self):
        """Test a missing or zero duration falls back to 60 minutes."""
        allocator = SlotAllocator()

        assert allocator.find_first_slot("morning", None, [], _days(1)).duration_minutes == 60
        assert allocator.find_first_slot("morning", 0, [], _days(1)).duration_minutes == 60

    def test_custom_default_duration(self):
        """Test the allocator's default duration can be configured."""
        slot = SlotAllocator(default_duration_minutes=45).find_first_slot("morning", None, [], _days(1))

        assert slot.duration_minutes == 45

    def test_bookings_on_other_days_ignored(self):
        """Test bookings only constrain their own day."""
        bookings = [_booking(1, "08:00", 240), _booking(7, "08:00", 240)]

        slot = SlotAllocator().find_first_slot("morning", 60, bookings, _days(1))

        assert slot.to_dict() == {"dayIndex": 0, "startTime": "08:00", "endTime": "09:00"}

    def test_caller_day_order(self):
        """Test days are tried in the order given, not by index."""
        days = list(reversed(_days(3)))

        slot = SlotAllocator().find_first_slot("morning", 60, [], days)

        assert slot.day_index == 2

    def test_earlier_day_preferred(self):
        """Test a slot on an earlier day wins over a better time on a later day."""
        bookings = [_booking(0, "08:00", 210)]  # 08:00-11:30

        slot = SlotAllocator().find_first_slot("morning", 30, bookings, _days(2))

        assert slot.day_index == 0
        assert slot.start_time == "11:30"

    def test_fully_booked_returns_none(self):
        """Test exhaustion across all days and timeframes."""
        bookings = [_booking(i, "00:00", 1440) for i in range(3)]

        for timeframe in ("morning", "afternoon", "evening", "night", "anytime"):
            assert SlotAllocator().find_first_slot(timeframe, 30, bookings, _days(3)) is None

    def test_no_days(self):
        """Test an itinerary without days has no slot."""
        assert SlotAllocator().find_first_slot("morning", 60, [], []) is None

    def test_deterministic(self):
        """Test identical inputs give identical results."""
        bookings = [_booking(0, "13:00", 120), _booking(1, "12:00", 30)]
        days = _days(2)

        first = find_first_slot("afternoon", 90, bookings, days)
        second = find_first_slot("afternoon", 90, bookings, days)

        assert first == second

    def test_late_booking_not_clamped(self):
        """Test a booking running past midnight still blocks the night windows."""
        bookings = [_booking(0, "20:00", 300)]  # 20:00-01:00

        slot = SlotAllocator().find_first_slot("night", 60, bookings, _days(2))

        assert slot.day_index == 1
        assert slot.start_time == "20:00"


class TestFindAvailableSlots:
    """Tests for SlotAllocator.find_available_slots."""

    def test_anytime_after_morning_block(self):
        """Test anytime slots start no earlier than the end of a morning block."""
        bookings = [_booking(0, "08:00", 240)]

        slots = SlotAllocator().find_available_slots("anytime", 60, bookings, _days(1))

        assert slots
        assert slots[0].start_time == "12:00"
        assert all(slot.start >= 720 for slot in slots)

    def test_default_max_results(self):
        """Test at most five slots are returned by default."""
        slots = find_available_slots("anytime", 60, [], _days(2))

        assert len(slots) == 5
        assert [slot.start_time for slot in slots] == ["09:00", "09:30", "10:00", "10:30", "11:00"]

    def test_max_results_limit(self):
        """Test the search stops once max_results slots are collected."""
        slots = SlotAllocator().find_available_slots("morning", 60, [], _days(3), max_results=2)

        assert len(slots) == 2

    def test_zero_max_results(self):
        """Test a non-positive limit yields no slots."""
        assert SlotAllocator().find_available_slots("morning", 60, [], _days(1), max_results=0) == []

    def test_each_start_listed_once(self):
        """Test overlapping windows do not repeat a start time on the same day."""
        slots = SlotAllocator().find_available_slots("morning", 60, [], _days(2), max_results=10)

        day_zero = [slot.start_time for slot in slots if slot.day_index == 0]
        assert day_zero == ["08:00", "08:30", "09:00", "09:30", "10:00", "10:30", "11:00"]
        assert [slot.start_time for slot in slots if slot.day_index == 1] == ["08:00", "08:30", "09:00"]

    def test_continues_across_days(self):
        """Test the search moves on to later days until the limit is reached."""
        bookings = [_booking(0, "18:00", 180)]  # 18:00-21:00

        slots = SlotAllocator().find_available_slots("evening", 60, bookings, _days(2), max_results=3)

        assert [(s.day_index, s.start_time) for s in slots] == [(0, "21:00"), (1, "18:00"), (1, "18:30")]

    def test_first_slot_matches_first_listed(self):
        """Test find_first_slot returns the head of the available list."""
        bookings = [_booking(0, "09:00", 120), _booking(0, "14:00", 60), _booking(1, "10:00", 30)]
        allocator = SlotAllocator()

        for timeframe in ("morning", "afternoon", "evening", "night", "anytime"):
            listed = allocator.find_available_slots(timeframe, 90, bookings, _days(2), max_results=50)
            first = allocator.find_first_slot(timeframe, 90, bookings, _days(2))
            assert first == (listed[0] if listed else None)

    def test_no_overlap_and_exact_duration(self):
        """Test returned slots never overlap bookings and have the requested length."""
        bookings = [
            _booking(0, "08:30", 45),
            _booking(0, "12:15", 100),
            _booking(0, "16:00", 30),
            _booking(1, "09:00", 300),
            _booking(1, "19:45", 80),
        ]

        for timeframe in ("morning", "afternoon", "evening", "night", "anytime"):
            for duration in (30, 45, 90, 120):
                slots = SlotAllocator().find_available_slots(
                    timeframe, duration, bookings, _days(2), max_results=100
                )
                for slot in slots:
                    assert slot.end - slot.start == duration
                    for booking in bookings:
                        if booking.day_index == slot.day_index:
                            assert not booking.overlaps(slot.start, slot.end)

    def test_empty_when_nothing_fits(self):
        """Test an exhausted search yields an empty list."""
        assert SlotAllocator().find_available_slots("night", 300, [], _days(2)) == []
