"""
Centralized API messages.
All user-facing text returned by the JSON endpoints.
"""

MESSAGES = {
    # Success messages
    'selection_merged': '{count} reservation range(s) selected',
    'ranges_valid': 'No overlapping reservations',
    'room_available': 'Room is available for the selected dates',
    'bulk_ready': '{count} reservation(s) ready to create',

    # Error messages
    'data_required': 'Request body must be a JSON object',
    'client_required': 'Client is required',
    'invalid_status': 'Unknown reservation status',
    'room_unavailable': (
        'Room is not available for selected dates. '
        'Conflicts with {count} existing reservation(s)'
    ),
    'invalid_date': 'Invalid date',
    'malformed_slot': 'Each slot must have room_id and date',
    'incomplete_range': 'Candidate must have room_id, checkin and checkout',
    'not_found': 'Resource not found',
    'method_not_allowed': 'Method not allowed',
    'internal_error': 'Internal server error',
}


def get_message(key: str, **kwargs) -> str:
    """
    Get message with optional formatting.

    Args:
        key: Message key
        **kwargs: Format parameters

    Returns:
        Formatted message or key if not found
    """
    message = MESSAGES.get(key, key)
    if kwargs:
        return message.format(**kwargs)
    return message
