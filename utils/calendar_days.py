"""
Calendar-day helpers for reservation ranges.

Every date handled by the booking engine is a calendar day: a
(year, month, day) triple with no time-of-day and no time zone. Values are
always rebuilt from explicit components, and arithmetic runs on day
ordinals, so month ends, year ends and DST transitions are ordinary days.
"""

import re
from datetime import date, timedelta
from typing import Iterator, NamedTuple


DAY_PATTERN = re.compile(r'^(\d{4})-(\d{2})-(\d{2})$')


class InvalidDateError(ValueError):
    """Raised when a value cannot be read as a calendar day."""


class CalendarDay(NamedTuple):
    """Canonical calendar day. Tuple ordering is year, month, day."""

    year: int
    month: int
    day: int

    def to_date(self) -> date:
        return date(self.year, self.month, self.day)

    def isoformat(self) -> str:
        return format_day(self)

    def __str__(self) -> str:
        return format_day(self)


# =============================================================================
# NORMALIZATION
# =============================================================================

def normalize(value) -> CalendarDay:
    """
    Convert a day string or date-like value to a CalendarDay.

    Args:
        value: 'YYYY-MM-DD' string, date, datetime or CalendarDay.
            A datetime contributes its own wall-clock day; no time zone
            conversion is applied.

    Returns:
        CalendarDay

    Raises:
        InvalidDateError: If the value is not a valid calendar day
    """
    if isinstance(value, CalendarDay):
        return value

    if isinstance(value, str):
        match = DAY_PATTERN.match(value.strip())
        if not match:
            raise InvalidDateError(f'Invalid date: {value!r} (expected YYYY-MM-DD)')
        year, month, day = (int(part) for part in match.groups())
    elif isinstance(value, date):
        year, month, day = value.year, value.month, value.day
    else:
        raise InvalidDateError(f'Invalid date input: {value!r}')

    try:
        date(year, month, day)
    except ValueError:
        raise InvalidDateError(f'Invalid date: {value!r} is not a calendar day') from None

    return CalendarDay(year, month, day)


def is_day_string(value) -> bool:
    """Check that value is a 'YYYY-MM-DD' string naming a real day."""
    if not isinstance(value, str):
        return False
    try:
        normalize(value)
        return True
    except InvalidDateError:
        return False


# =============================================================================
# COMPARISON AND ARITHMETIC
# =============================================================================

def compare(a, b) -> int:
    """
    Compare two days.

    Returns:
        -1 if a is before b, 0 if same day, 1 if a is after b
    """
    a, b = normalize(a), normalize(b)
    if a == b:
        return 0
    return -1 if a < b else 1


def add_days(day, n: int) -> CalendarDay:
    """Return the day n days after day (n may be negative)."""
    start = normalize(day).to_date()
    return normalize(date.fromordinal(start.toordinal() + n))


def diff_days(a, b) -> int:
    """
    Whole days from a to b (positive when b is after a).

    Ordinals count calendar days only, so a 23 or 25 hour wall-clock day
    still counts as one.
    """
    return normalize(b).to_date().toordinal() - normalize(a).to_date().toordinal()


def format_day(day) -> str:
    """Render a day as 'YYYY-MM-DD'."""
    year, month, dd = normalize(day)
    return f'{year:04d}-{month:02d}-{dd:02d}'


def iter_days(start, end) -> Iterator[CalendarDay]:
    """Yield every day in [start, end). Nothing when end <= start."""
    current = normalize(start).to_date()
    stop = normalize(end).to_date()
    while current < stop:
        yield normalize(current)
        current += timedelta(days=1)
