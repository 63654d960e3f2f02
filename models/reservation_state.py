"""
Reservation status constants and helpers.
Statuses are stored as short codes by the reservation store.
"""


# =============================================================================
# CONSTANTS
# =============================================================================

CANCELLED_STATUS = 'ANNULE'

# Ordered as shown in the booking form status picker
RESERVATION_STATUSES = {
    'REQUEST': 'Request',
    'OPTION': 'Option',      # Tentative hold with an expiry date
    'RESERVE': 'Reserved',
    'CONFIRME': 'Confirmed',
    'PAYE': 'Paid',
    CANCELLED_STATUS: 'Cancelled',
}

DEFAULT_RESERVATION_STATUS = 'REQUEST'


# =============================================================================
# STATUS QUERIES
# =============================================================================

def is_valid_status(status: str) -> bool:
    """Check that status is one of the known status codes."""
    return status in RESERVATION_STATUSES


def is_cancelled(reservation: dict, cancelled_status: str = CANCELLED_STATUS) -> bool:
    """
    Check whether a reservation no longer holds its room.

    Args:
        reservation: Reservation dict with a 'status' key
        cancelled_status: Status code meaning cancelled

    Returns:
        bool: True if the reservation is cancelled
    """
    return reservation.get('status') == cancelled_status


def get_status_label(status: str) -> str:
    """Display label for a status code, or the code itself if unknown."""
    return RESERVATION_STATUSES.get(status, status)
