"""Timezone-aware date/time helpers for the marketplace."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from flask import current_app, has_app_context


def get_timezone() -> ZoneInfo:
    """Get the configured timezone (UTC outside an app context)."""
    tz_name = current_app.config.get('TIMEZONE', 'UTC') if has_app_context() else 'UTC'
    return ZoneInfo(tz_name)


def get_today() -> date:
    """Get today's date in the configured timezone."""
    return datetime.now(get_timezone()).date()
