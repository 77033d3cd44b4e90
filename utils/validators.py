"""
Input validation helper functions.
Provides validation and parsing for common input types.
"""

import re
from datetime import date, datetime


def validate_email(email: str) -> bool:
    """
    Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if valid email format
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def validate_password(password: str, min_length: int = 6) -> tuple:
    """
    Validate password strength.

    Args:
        password: Password to validate
        min_length: Minimum password length

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not password:
        return False, 'Password is required'

    if len(password) < min_length:
        return False, f'Password must be at least {min_length} characters'

    if password.isdigit() or password.isalpha():
        return False, 'Password must mix letters and numbers'

    return True, ''


def parse_iso_date(value) -> date:
    """
    Parse an ISO-8601 date or timestamp into a date-only value.

    Accepts date objects, datetime objects, 'YYYY-MM-DD' strings and full
    ISO timestamps ('2026-03-01T00:00:00.000Z'); timestamps are truncated
    to their date part.

    Args:
        value: Value to parse

    Returns:
        datetime.date

    Raises:
        ValueError: If the value is empty or not an ISO date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        raise ValueError(f'Invalid date: {value!r}')

    return date.fromisoformat(value.strip()[:10])


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is an ISO date (YYYY-MM-DD, optionally with a time part).

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    try:
        parse_iso_date(date_str)
        return True
    except ValueError:
        return False


def validate_date_range(start_date: str, end_date: str) -> bool:
    """
    Validate that end date is strictly after start date.

    Args:
        start_date: Start date (ISO)
        end_date: End date (ISO)

    Returns:
        True if valid date range
    """
    try:
        return parse_iso_date(end_date) > parse_iso_date(start_date)
    except ValueError:
        return False


def validate_coordinates(latitude, longitude) -> bool:
    """
    Validate a latitude/longitude pair.

    Returns:
        True if both are numbers within range
    """
    try:
        lat = float(latitude)
        lng = float(longitude)
    except (TypeError, ValueError):
        return False
    return -90 <= lat <= 90 and -180 <= lng <= 180


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize user input by stripping whitespace and control characters.

    Args:
        text: Input text to sanitize
        max_length: Maximum length to truncate to

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    sanitized = re.sub(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]', '', str(text)).strip()

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
