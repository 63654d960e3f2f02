"""
Multi-room reservation preparation.
Builds the create payloads for a calendar multi-selection once its merged
ranges have been validated. Payloads are handed to the reservation store's
bulk create; nothing is persisted here.
"""

import logging

from utils.calendar_days import format_day
from .reservation_availability import check_conflict, validate_no_overlaps
from .reservation_dates import validate_reservation_dates
from .reservation_state import (
    CANCELLED_STATUS,
    DEFAULT_RESERVATION_STATUS,
    is_valid_status
)


logger = logging.getLogger(__name__)


def range_key(reservation_range: dict) -> str:
    """Key of a range in per-room detail maps: '<room_id>_<checkin>'."""
    return f"{reservation_range['room_id']}_{format_day(reservation_range['checkin'])}"


def group_ranges_by_dates(ranges: list) -> list:
    """
    Group ranges sharing the same checkin and checkout.

    Returns:
        list: [{'checkin', 'checkout', 'ranges': [...]}, ...] in first-seen order
    """
    groups = {}
    for reservation_range in ranges:
        checkin = format_day(reservation_range['checkin'])
        checkout = format_day(reservation_range['checkout'])
        group = groups.setdefault(
            (checkin, checkout),
            {'checkin': checkin, 'checkout': checkout, 'ranges': []}
        )
        group['ranges'].append(reservation_range)
    return list(groups.values())


def _count(details: dict, field: str) -> int:
    value = details.get(field)
    return int(value) if value else 0


def prepare_bulk_reservations(
    ranges: list,
    client_id,
    existing: list,
    status: str = DEFAULT_RESERVATION_STATUS,
    room_details: dict = None,
    group_pax=None,
    cancelled_status: str = CANCELLED_STATUS
) -> dict:
    """
    Validate merged ranges and build one reservation payload per range.

    Strategy:
    - Every range must have checkin < checkout
    - Ranges of the same room must not overlap each other
    - No range may conflict with a live reservation in `existing`

    Args:
        ranges: Merged ranges [{'room_id', 'checkin', 'checkout'}, ...]
        client_id: Client the reservations are made for
        existing: Current reservations from the store
        status: Status code for every new reservation
        room_details: Per-range details keyed by range_key():
            {bed_configuration, adults_count, children_count, infants_count}
        group_pax: Group size noted in the reservation comment (optional)
        cancelled_status: Status code of cancelled reservations

    Returns:
        dict: {'success': True, 'reservations': [...], 'total': int}
            or {'success': False, 'error': str, 'conflicts': [...]}

    Raises:
        ValueError: If client_id is missing or status is unknown
    """
    if client_id in (None, ''):
        raise ValueError('client_id is required')
    if not is_valid_status(status):
        raise ValueError(f'Unknown reservation status: {status}')

    if not ranges:
        return {'success': True, 'reservations': [], 'total': 0}

    for reservation_range in ranges:
        ordering = validate_reservation_dates(
            reservation_range['checkin'], reservation_range['checkout']
        )
        if not ordering['valid']:
            return {
                'success': False,
                'error': f"Room {reservation_range['room_id']}: {ordering['error']}",
                'conflicts': []
            }

    batch = validate_no_overlaps(ranges)
    if not batch['valid']:
        return {'success': False, 'error': batch['error'], 'conflicts': []}

    conflicts = []
    for reservation_range in ranges:
        result = check_conflict(
            reservation_range, existing, cancelled_status=cancelled_status
        )
        for conflict in result['conflicts']:
            if conflict not in conflicts:
                conflicts.append(conflict)

    if conflicts:
        logger.info('Bulk reservation rejected: %d conflicting reservation(s)', len(conflicts))
        return {
            'success': False,
            'error': f'Conflicts with {len(conflicts)} existing reservation(s)',
            'conflicts': conflicts
        }

    room_details = room_details or {}
    comment = f'Group: {group_pax} pax' if group_pax else None

    reservations = []
    for reservation_range in ranges:
        details = room_details.get(range_key(reservation_range), {})
        reservations.append({
            'client_id': client_id,
            'room_id': reservation_range['room_id'],
            'date_checkin': format_day(reservation_range['checkin']),
            'date_checkout': format_day(reservation_range['checkout']),
            'status': status,
            'bed_configuration': details.get('bed_configuration') or None,
            'adults_count': _count(details, 'adults_count'),
            'children_count': _count(details, 'children_count'),
            'infants_count': _count(details, 'infants_count'),
            'comment': comment,
        })

    return {
        'success': True,
        'reservations': reservations,
        'total': len(reservations)
    }
