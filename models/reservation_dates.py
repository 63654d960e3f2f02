"""
Night counting and date checks for reservation ranges.
"""

from utils.calendar_days import add_days, compare, diff_days, format_day, normalize


OPTION_MAX_HOLD_DAYS = 15


def count_nights(checkin, checkout) -> int:
    """
    Number of occupied nights in a range.

    Checkout is exclusive, so a one-night stay (checkin 1st, checkout 2nd)
    counts 1.
    """
    return diff_days(checkin, checkout)


def validate_reservation_dates(checkin, checkout) -> dict:
    """
    Check that checkin is strictly before checkout.

    Returns:
        dict: {'valid': True} or {'valid': False, 'error': str}
    """
    if compare(checkin, checkout) >= 0:
        return {'valid': False, 'error': 'Checkin must be before checkout'}
    return {'valid': True}


def validate_range_within_window(reservation_range: dict, window_start, window_end) -> dict:
    """
    Validate a range shown in a calendar window.

    A stay may start before window_start or end after window_end; clamping
    it to the visible columns is done when drawing. Only the date order of
    the range itself is checked.

    Args:
        reservation_range: Dict with 'checkin' and 'checkout'
        window_start: First visible day
        window_end: Last visible day

    Returns:
        dict: Same shape as validate_reservation_dates()
    """
    return validate_reservation_dates(
        reservation_range['checkin'], reservation_range['checkout']
    )


# =============================================================================
# BOOKING FORM CHECKS
# =============================================================================

def get_max_option_expiry(checkin, max_hold_days: int = OPTION_MAX_HOLD_DAYS) -> str:
    """Latest allowed expiry for an OPTION hold (YYYY-MM-DD)."""
    return format_day(add_days(checkin, max_hold_days))


def validate_booking_dates(
    checkin,
    checkout,
    today,
    status: str = None,
    hold_expires_at=None,
    max_hold_days: int = OPTION_MAX_HOLD_DAYS
) -> dict:
    """
    Date checks run by the booking form before saving.

    Args:
        checkin: Check-in day
        checkout: Check-out day
        today: Current day in the lodge's timezone
        status: Reservation status code (optional)
        hold_expires_at: Expiry day of an OPTION hold (optional)
        max_hold_days: Longest allowed hold after checkin

    Returns:
        dict: {
            'valid': bool,
            'errors': {field: message},
            'warnings': {field: message}
        }
    """
    errors = {}
    warnings = {}

    ordering = validate_reservation_dates(checkin, checkout)
    if not ordering['valid']:
        errors['date_checkout'] = 'Check-out must be after check-in'

    if compare(checkin, today) < 0:
        warnings['date_checkin'] = 'Check-in date is in the past'

    if status == 'OPTION' and hold_expires_at:
        expiry = normalize(hold_expires_at)
        if compare(expiry, today) < 0:
            warnings['hold_expires_at'] = 'Option has already expired'
        elif compare(expiry, get_max_option_expiry(checkin, max_hold_days)) > 0:
            errors['hold_expires_at'] = (
                f'Option cannot be held more than {max_hold_days} days after check-in'
            )

    return {
        'valid': not errors,
        'errors': errors,
        'warnings': warnings
    }
