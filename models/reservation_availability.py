"""
Overlap validation and availability conflict checks.

Ranges are half-open [checkin, checkout): a stay checking out on the 4th and
another checking in on the 4th share a turnover day and do not conflict.
Both the batch validator and the single-candidate check use
ranges_overlap() so they cannot disagree on boundary days.
"""

import logging

from utils.calendar_days import compare, format_day, iter_days, normalize
from .reservation_state import CANCELLED_STATUS


logger = logging.getLogger(__name__)


class IncompleteRangeError(ValueError):
    """Raised when a range to check has no room, checkin or checkout."""


# =============================================================================
# OVERLAP PRIMITIVE
# =============================================================================

def ranges_overlap(a_checkin, a_checkout, b_checkin, b_checkout) -> bool:
    """
    Check whether two [checkin, checkout) ranges share at least one night.

    Returns:
        bool: True if a_checkin < b_checkout and a_checkout > b_checkin
    """
    return compare(a_checkin, b_checkout) < 0 and compare(a_checkout, b_checkin) > 0


def _reservation_bounds(reservation: dict) -> tuple:
    """
    Read (checkin, checkout) from a range or a stored reservation.
    The reservation store names its fields date_checkin / date_checkout.
    """
    checkin = reservation.get('checkin', reservation.get('date_checkin'))
    checkout = reservation.get('checkout', reservation.get('date_checkout'))
    return checkin, checkout


# =============================================================================
# BATCH VALIDATION
# =============================================================================

def validate_no_overlaps(ranges: list) -> dict:
    """
    Validate that ranges of the same room do not overlap.

    Ranges of different rooms are independent. Back-to-back ranges
    (checkout == next checkin) are allowed.

    Args:
        ranges: List of {'room_id', 'checkin', 'checkout'} dicts

    Returns:
        dict: {'valid': True} or {'valid': False, 'error': str}
            The error names the room and the overlapping days.
    """
    by_room = {}
    for reservation_range in ranges:
        by_room.setdefault(reservation_range['room_id'], []).append(reservation_range)

    for room_id, room_ranges in by_room.items():
        room_ranges = sorted(room_ranges, key=lambda r: normalize(_reservation_bounds(r)[0]))

        for current, following in zip(room_ranges, room_ranges[1:]):
            cur_in, cur_out = _reservation_bounds(current)
            next_in, next_out = _reservation_bounds(following)

            if ranges_overlap(cur_in, cur_out, next_in, next_out):
                error = (
                    f'Room {room_id}: reservations overlap between '
                    f'{format_day(next_in)} and {format_day(cur_out)}'
                )
                logger.debug(error)
                return {'valid': False, 'error': error}

    return {'valid': True}


# =============================================================================
# SINGLE CANDIDATE CHECK
# =============================================================================

def check_conflict(
    candidate: dict,
    existing: list,
    exclude_id=None,
    cancelled_status: str = CANCELLED_STATUS
) -> dict:
    """
    Check one candidate range against existing reservations.

    Args:
        candidate: {'room_id', 'checkin', 'checkout'}
        existing: Reservation dicts (id, room_id, checkin/checkout or
            date_checkin/date_checkout, status)
        exclude_id: Reservation ID to ignore (the one being edited)
        cancelled_status: Status code of cancelled reservations

    Returns:
        dict: {
            'available': bool,
            'conflicts': [reservation, ...]
        }

    Raises:
        IncompleteRangeError: If the candidate has no room_id, checkin or checkout
    """
    room_id = candidate.get('room_id')
    checkin, checkout = _reservation_bounds(candidate)

    # Room 0 is a valid room
    if room_id in (None, '') or checkin in (None, '') or checkout in (None, ''):
        raise IncompleteRangeError('Candidate must have room_id, checkin and checkout')

    conflicts = []
    for reservation in existing:
        if reservation.get('room_id') != room_id:
            continue
        if exclude_id is not None and reservation.get('id') == exclude_id:
            continue
        if reservation.get('status') == cancelled_status:
            continue

        res_in, res_out = _reservation_bounds(reservation)
        if ranges_overlap(checkin, checkout, res_in, res_out):
            conflicts.append(reservation)

    if conflicts:
        logger.debug(
            'Room %s %s..%s conflicts with %d reservation(s)',
            room_id, checkin, checkout, len(conflicts)
        )

    return {
        'available': len(conflicts) == 0,
        'conflicts': conflicts
    }


# =============================================================================
# ROOM OCCUPANCY
# =============================================================================

def get_booked_days_for_room(
    room_id,
    reservations: list,
    exclude_id=None,
    cancelled_status: str = CANCELLED_STATUS
) -> list:
    """
    List every occupied night of a room (sorted, no duplicates).

    Used by the booking form date picker to grey out taken days. The
    checkout day of each reservation is not occupied.

    Returns:
        list: ['YYYY-MM-DD', ...]
    """
    booked = set()
    for reservation in reservations:
        if reservation.get('room_id') != room_id:
            continue
        if reservation.get('status') == cancelled_status:
            continue
        if exclude_id is not None and reservation.get('id') == exclude_id:
            continue

        checkin, checkout = _reservation_bounds(reservation)
        booked.update(iter_days(checkin, checkout))

    return [format_day(day) for day in sorted(booked)]


def get_available_rooms(
    rooms: list,
    checkin,
    checkout,
    reservations: list,
    site_id=None,
    bed_configuration_id=None,
    sites: list = None,
    cancelled_status: str = CANCELLED_STATUS
) -> list:
    """
    Get active rooms free for the whole [checkin, checkout) window.

    Args:
        rooms: Room dicts (id, name, is_active, site_id, capacity_max,
            bed_configuration_ids)
        checkin: First night
        checkout: Exclusive end day
        reservations: Existing reservations of all rooms
        site_id: Only rooms of this site (optional)
        bed_configuration_id: Only rooms offering this bed setup (optional)
        sites: Site dicts (id, name) used to order the result (optional)
        cancelled_status: Status code of cancelled reservations

    Returns:
        list: Room dicts sorted by site name, larger capacity first, then name
    """
    site_names = {site['id']: site.get('name') or '' for site in (sites or [])}
    candidate = {'checkin': checkin, 'checkout': checkout}

    available = []
    for room in rooms:
        if not room.get('is_active', True):
            continue
        if site_id is not None and room.get('site_id') != site_id:
            continue
        if (bed_configuration_id is not None
                and bed_configuration_id not in (room.get('bed_configuration_ids') or [])):
            continue

        result = check_conflict(
            dict(candidate, room_id=room['id']), reservations,
            cancelled_status=cancelled_status
        )
        if result['available']:
            available.append(room)

    available.sort(key=lambda room: (
        site_names.get(room.get('site_id'), ''),
        -(room.get('capacity_max') or 0),
        room.get('name') or ''
    ))
    return available
