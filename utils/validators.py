"""
Input validation helper functions.
Validates JSON request payloads before they reach the reservation logic.

Validators return a tuple (is_valid, cleaned_value, error_message).
"""

from utils.calendar_days import format_day, is_day_string


def validate_date_format(date_str: str) -> bool:
    """
    Validate date is in YYYY-MM-DD format and is a real day.

    Args:
        date_str: Date string to validate

    Returns:
        True if valid format
    """
    return is_day_string(date_str)


def validate_date_field(value, field_name: str) -> tuple:
    """
    Validate a required YYYY-MM-DD field.

    Returns:
        Tuple of (is_valid, 'YYYY-MM-DD', error_message)
    """
    if not value:
        return False, None, f'{field_name} is required'
    if not validate_date_format(value):
        return False, None, f'{field_name} must be a YYYY-MM-DD date'
    return True, format_day(value), ''


def validate_identifier(value, field_name: str) -> tuple:
    """
    Validate an opaque identifier (non-empty string or integer).

    Returns:
        Tuple of (is_valid, identifier, error_message)
    """
    if isinstance(value, bool) or value is None:
        return False, None, f'{field_name} is required'
    if isinstance(value, int):
        return True, value, ''
    if isinstance(value, str) and value.strip():
        return True, value.strip(), ''
    return False, None, f'{field_name} is required'


def _room_id_of(item: dict):
    # The calendar UI sends camelCase keys
    return item.get('room_id', item.get('roomId'))


def validate_slot_list(slots, field_name: str = 'slots') -> tuple:
    """
    Validate a list of selected calendar cells.

    Accepts room_id or roomId per slot.

    Returns:
        Tuple of (is_valid, [{'room_id', 'date'}], error_message)
    """
    if not isinstance(slots, list):
        return False, None, f'{field_name} must be a list'

    cleaned = []
    for i, slot in enumerate(slots):
        if not isinstance(slot, dict):
            return False, None, f'{field_name}[{i}] must be an object'
        valid, room_id, err = validate_identifier(_room_id_of(slot), f'{field_name}[{i}].room_id')
        if not valid:
            return False, None, err
        valid, day, err = validate_date_field(slot.get('date'), f'{field_name}[{i}].date')
        if not valid:
            return False, None, err
        cleaned.append({'room_id': room_id, 'date': day})

    return True, cleaned, ''


def validate_range_list(ranges, field_name: str = 'ranges') -> tuple:
    """
    Validate a list of checkin/checkout ranges.

    Only shape and date format are checked here; date order and overlaps
    are business rules reported by the reservation functions.

    Returns:
        Tuple of (is_valid, [{'room_id', 'checkin', 'checkout'}], error_message)
    """
    if not isinstance(ranges, list):
        return False, None, f'{field_name} must be a list'

    cleaned = []
    for i, item in enumerate(ranges):
        valid, reservation_range, err = validate_range(item, f'{field_name}[{i}]')
        if not valid:
            return False, None, err
        cleaned.append(reservation_range)

    return True, cleaned, ''


def validate_range(item, field_name: str = 'range') -> tuple:
    """
    Validate one {'room_id', 'checkin', 'checkout'} object.

    Returns:
        Tuple of (is_valid, cleaned_range, error_message)
    """
    if not isinstance(item, dict):
        return False, None, f'{field_name} must be an object'

    valid, room_id, err = validate_identifier(_room_id_of(item), f'{field_name}.room_id')
    if not valid:
        return False, None, err

    cleaned = {'room_id': room_id}
    for key in ('checkin', 'checkout'):
        valid, day, err = validate_date_field(item.get(key), f'{field_name}.{key}')
        if not valid:
            return False, None, err
        cleaned[key] = day

    return True, cleaned, ''


def validate_reservation_list(reservations, field_name: str = 'reservations') -> tuple:
    """
    Validate existing reservations sent by the client.

    Each record needs a room_id and its two dates (checkin/checkout or
    date_checkin/date_checkout). Other fields are passed through untouched.

    Returns:
        Tuple of (is_valid, reservations, error_message)
    """
    if reservations is None:
        return True, [], ''
    if not isinstance(reservations, list):
        return False, None, f'{field_name} must be a list'

    for i, reservation in enumerate(reservations):
        if not isinstance(reservation, dict):
            return False, None, f'{field_name}[{i}] must be an object'
        if reservation.get('room_id') in (None, ''):
            return False, None, f'{field_name}[{i}].room_id is required'
        for key in ('checkin', 'checkout'):
            value = reservation.get(key, reservation.get(f'date_{key}'))
            if not validate_date_format(value):
                return False, None, f'{field_name}[{i}].{key} must be a YYYY-MM-DD date'

    return True, reservations, ''


def sanitize_input(text: str, max_length: int = None) -> str:
    """
    Sanitize text input by trimming and limiting length.

    Args:
        text: Text to sanitize
        max_length: Maximum length (optional)

    Returns:
        Sanitized text
    """
    if not text:
        return ''

    # Strip whitespace
    sanitized = text.strip()

    # Limit length if specified
    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length]

    return sanitized
