"""
Space availability calculations.

Bookings occupy the half-open range [start_date, end_date): a booking that
ends on the day another starts does not overlap it. All functions here are
pure and work on the booking dicts returned by the data access layer.
"""

from datetime import date, timedelta

from models.pricing import round_half_up
from utils.validators import parse_iso_date


def overlaps(a_start, a_end, b_start, b_end) -> bool:
    """Strict half-open overlap test between [a_start, a_end) and [b_start, b_end)."""
    return a_start < b_end and a_end > b_start


def _booking_range(booking: dict) -> tuple:
    return parse_iso_date(booking['start_date']), parse_iso_date(booking['end_date'])


def available_space(bookings: list, start, end, total_space: float) -> float:
    """
    Space left on a listing for the range [start, end).

    Sums reserved_space of every booking overlapping the range and
    subtracts it from total_space. The result is not floored: a negative
    value means the listing is overbooked for the range.

    Args:
        bookings: Booking dicts with start_date, end_date, reserved_space
        start: Range start (date or ISO string)
        end: Range end, exclusive
        total_space: Listing capacity

    Returns:
        float: Remaining space
    """
    start = parse_iso_date(start)
    end = parse_iso_date(end)

    reserved = 0.0
    for booking in bookings:
        b_start, b_end = _booking_range(booking)
        if overlaps(b_start, b_end, start, end):
            reserved += float(booking['reserved_space'])

    return float(total_space) - reserved


def daily_availability(bookings: list, start, end, total_space: float) -> list:
    """
    Per-day availability from start to end, both inclusive.

    Each day d is evaluated over [d, d + 1 day). Values are floored at 0
    and rounded half-up to 2 decimals.

    Args:
        bookings: Booking dicts
        start: First day
        end: Last day (inclusive)
        total_space: Listing capacity

    Returns:
        List of {'date': 'YYYY-MM-DD', 'available': float}
    """
    day: date = parse_iso_date(start)
    last: date = parse_iso_date(end)
    one_day = timedelta(days=1)

    result = []
    while day <= last:
        free = available_space(bookings, day, day + one_day, total_space)
        result.append({
            'date': day.isoformat(),
            'available': round_half_up(max(0.0, free), 2),
        })
        day += one_day

    return result
