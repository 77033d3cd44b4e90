"""
Tests for space availability calculations.
"""

from datetime import date, timedelta

import pytest

from models.availability import available_space, daily_availability, overlaps


def booking(start, end, space):
    return {'start_date': start, 'end_date': end, 'reserved_space': space}


class TestOverlaps:
    """Half-open range overlap."""

    def test_touching_ranges_do_not_overlap(self):
        assert overlaps(date(2026, 3, 1), date(2026, 3, 5), date(2026, 3, 5), date(2026, 3, 8)) is False
        assert overlaps(date(2026, 3, 5), date(2026, 3, 8), date(2026, 3, 1), date(2026, 3, 5)) is False

    def test_partial_and_contained_ranges_overlap(self):
        assert overlaps(date(2026, 3, 1), date(2026, 3, 5), date(2026, 3, 4), date(2026, 3, 8)) is True
        assert overlaps(date(2026, 3, 1), date(2026, 3, 10), date(2026, 3, 4), date(2026, 3, 5)) is True


class TestAvailableSpace:
    """Space left for a range."""

    def test_no_bookings_returns_total(self):
        assert available_space([], '2026-03-01', '2026-03-05', 100) == 100

    def test_overlapping_bookings_are_summed(self):
        bookings = [
            booking('2026-03-01', '2026-03-05', 30),
            booking('2026-03-04', '2026-03-10', 20),
        ]
        assert available_space(bookings, '2026-03-03', '2026-03-06', 100) == 50

    def test_adjacent_booking_does_not_count(self):
        bookings = [booking('2026-03-01', '2026-03-05', 40)]
        assert available_space(bookings, '2026-03-05', '2026-03-08', 50) == 50

    def test_booking_ending_on_start_day_does_not_count(self):
        bookings = [booking('2026-02-20', '2026-03-01', 40)]
        assert available_space(bookings, '2026-03-01', '2026-03-02', 50) == 50

    def test_result_is_not_floored(self):
        bookings = [booking('2026-03-01', '2026-03-05', 80)]
        assert available_space(bookings, '2026-03-01', '2026-03-05', 50) == -30

    def test_accepts_date_objects_and_timestamps(self):
        bookings = [booking(date(2026, 3, 1), date(2026, 3, 5), 10)]
        result = available_space(bookings, '2026-03-02T00:00:00.000Z', '2026-03-03T00:00:00.000Z', 25)
        assert result == 15


class TestDailyAvailability:
    """Per-day availability."""

    def test_range_is_inclusive_of_end_day(self):
        days = daily_availability([], '2026-03-01', '2026-03-03', 10)
        assert [d['date'] for d in days] == ['2026-03-01', '2026-03-02', '2026-03-03']
        assert all(d['available'] == 10 for d in days)

    def test_booking_end_day_is_free(self):
        bookings = [booking('2026-03-01', '2026-03-03', 4)]
        days = daily_availability(bookings, '2026-03-01', '2026-03-03', 10)
        assert [d['available'] for d in days] == [6, 6, 10]

    def test_floored_at_zero(self):
        bookings = [booking('2026-03-01', '2026-03-02', 15)]
        days = daily_availability(bookings, '2026-03-01', '2026-03-01', 10)
        assert days == [{'date': '2026-03-01', 'available': 0.0}]

    def test_rounded_to_two_decimals(self):
        bookings = [booking('2026-03-01', '2026-03-02', 1.333)]
        days = daily_availability(bookings, '2026-03-01', '2026-03-01', 5)
        assert days[0]['available'] == 3.67

    def test_single_day_when_start_equals_end(self):
        assert len(daily_availability([], date(2026, 3, 1), date(2026, 3, 1), 1)) == 1


class TestNonOverlappingBookings:
    """Bookings outside the range never reduce its space."""

    @pytest.mark.parametrize('count', [0, 1, 5, 20])
    def test_total_unchanged(self, count):
        start, end = date(2026, 3, 10), date(2026, 3, 15)
        bookings = []
        for i in range(count):
            if i % 2:
                # after the range; the first one starts exactly on its end day
                b_start = end + timedelta(days=i)
                bookings.append(booking(b_start - timedelta(days=1), b_start + timedelta(days=3), 7 + i))
            else:
                # before the range; the first one ends exactly on its start day
                b_end = start - timedelta(days=i)
                bookings.append(booking(b_end - timedelta(days=4), b_end, 5 + i))

        assert available_space(bookings, start, end, 100) == 100
