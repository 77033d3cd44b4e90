"""
Reservation cost calculation.
Price is per space-unit per day; partial days bill as whole days.
"""

import math
from datetime import date, datetime

from utils.validators import parse_iso_date

SECONDS_PER_DAY = 86400


def round_half_up(value: float, places: int = 2) -> float:
    """
    Round to the given decimal places, halves away from zero for positives.

    Python's round() uses banker's rounding (round(0.125, 2) == 0.12);
    monetary amounts here always round halves up.
    """
    factor = 10 ** places
    return math.floor(value * factor + 0.5) / factor


def _as_datetime(value) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)
    if isinstance(value, str) and len(value.strip()) > 10:
        try:
            return datetime.fromisoformat(value.strip().replace('Z', '+00:00')).replace(tzinfo=None)
        except ValueError:
            pass
    parsed = parse_iso_date(value)
    return datetime(parsed.year, parsed.month, parsed.day)


def calculate_days(start, end) -> int:
    """
    Number of billable days between start and end.

    Args:
        start: Range start (date, datetime or ISO string)
        end: Range end

    Returns:
        int: ceil of the span in days
    """
    delta = _as_datetime(end) - _as_datetime(start)
    return math.ceil(delta.total_seconds() / SECONDS_PER_DAY)


def calculate_cost(price_per_unit: float, space: float, start, end) -> float:
    """
    Total cost of reserving space for the range.

    Args:
        price_per_unit: Listing price per space-unit per day
        space: Space requested
        start: Range start
        end: Range end

    Returns:
        float: Cost rounded half-up to 2 decimals
    """
    days = calculate_days(start, end)
    return round_half_up(float(price_per_unit) * float(space) * days, 2)
