"""Timezone-aware "today" for the lodge, as a calendar day."""

from datetime import datetime
from zoneinfo import ZoneInfo

from flask import current_app

from utils.calendar_days import CalendarDay, normalize


def get_timezone() -> ZoneInfo:
    """Get the configured timezone."""
    tz_name = current_app.config.get('TIMEZONE', 'Europe/Paris')
    return ZoneInfo(tz_name)


def get_today() -> CalendarDay:
    """Get today's calendar day in the configured timezone."""
    return normalize(datetime.now(get_timezone()))
