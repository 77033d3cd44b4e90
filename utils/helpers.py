"""
Miscellaneous utility helper functions.
Provides common functionality used across the application.
"""

import json
from datetime import date, datetime


def format_date(value, format_str: str = '%b %d, %Y') -> str:
    """
    Format a date for human-readable messages (e.g. 'Mar 01, 2026').

    Args:
        value: date, datetime or ISO date string
        format_str: Output format

    Returns:
        Formatted date string or original if invalid
    """
    try:
        if isinstance(value, str):
            value = datetime.strptime(value[:10], '%Y-%m-%d')
        return value.strftime(format_str)
    except (ValueError, TypeError, AttributeError):
        return value or ''


def to_iso(value):
    """Return ISO string for date/datetime values, pass anything else through."""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def serialize_row(row: dict, bool_fields: tuple = (), json_fields: tuple = ()) -> dict:
    """
    Make a database row dict JSON friendly.

    Dates become ISO strings, integer flags listed in bool_fields become
    booleans and TEXT columns listed in json_fields are decoded.

    Args:
        row: Row dictionary
        bool_fields: Keys stored as 0/1
        json_fields: Keys stored as JSON text

    Returns:
        New dict
    """
    result = {}
    for key, value in row.items():
        if key in bool_fields:
            value = bool(value)
        elif key in json_fields and isinstance(value, str):
            try:
                value = json.loads(value)
            except ValueError:
                pass
        result[key] = to_iso(value)
    return result


def parse_bool(value, default: bool = False) -> bool:
    """
    Parse a query-string style boolean.

    Args:
        value: 'true'/'1'/'yes' style string, bool or None
        default: Value returned for None

    Returns:
        bool
    """
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'yes', 'on')
