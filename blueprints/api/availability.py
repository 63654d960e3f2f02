"""
Availability API routes.
Overlap validation of merged ranges and conflict checks against the
reservations the caller loaded from the reservation store.
"""

from flask import current_app, request

from utils.api_response import api_success, api_error, api_conflict
from utils.calendar_days import add_days
from utils.datetime_helpers import get_today
from utils.messages import get_message
from utils.validators import (
    validate_date_field, validate_identifier, validate_range, validate_range_list,
    validate_reservation_list
)
from models.reservation_availability import (
    check_conflict, get_available_rooms, get_booked_days_for_room,
    validate_no_overlaps
)
from models.reservation_dates import validate_range_within_window


def _cancelled_status() -> str:
    return current_app.config.get('CANCELLED_STATUS', 'ANNULE')


def register_routes(bp):
    """Register availability routes on the blueprint."""

    @bp.route('/ranges/validate', methods=['POST'])
    def validate_ranges():
        """
        Check that ranges of the same room do not overlap.

        Request body:
            ranges: [{room_id, checkin, checkout}, ...]
            window_start: First visible calendar day (optional, default today)

        Returns:
            200 with valid=true, 400 if a range is not ordered,
            or 409 with the overlap error
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        valid, ranges, err = validate_range_list(data.get('ranges', []))
        if not valid:
            return api_error(err, 400)

        if data.get('window_start'):
            valid, window_start, err = validate_date_field(data['window_start'], 'window_start')
            if not valid:
                return api_error(err, 400)
        else:
            window_start = get_today()
        window_end = add_days(window_start, current_app.config.get('CALENDAR_WINDOW_DAYS', 30) - 1)

        for reservation_range in ranges:
            result = validate_range_within_window(reservation_range, window_start, window_end)
            if not result['valid']:
                return api_error(f"Room {reservation_range['room_id']}: {result['error']}", 400)

        result = validate_no_overlaps(ranges)
        if not result['valid']:
            return api_conflict(result['error'], valid=False)

        return api_success(data={'valid': True}, message=get_message('ranges_valid'))

    @bp.route('/availability/check', methods=['POST'])
    def check_availability():
        """
        Check one candidate range against existing reservations.

        Request body:
            candidate: {room_id, checkin, checkout}
            reservations: [{id, room_id, date_checkin, date_checkout, status}, ...]
            exclude_id: Reservation being edited (optional)

        Returns:
            JSON with available and the conflicting reservations
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        valid, candidate, err = validate_range(data.get('candidate'), 'candidate')
        if not valid:
            return api_error(err, 400)

        valid, reservations, err = validate_reservation_list(data.get('reservations'))
        if not valid:
            return api_error(err, 400)

        result = check_conflict(
            candidate, reservations,
            exclude_id=data.get('exclude_id'),
            cancelled_status=_cancelled_status()
        )

        if result['available']:
            message = get_message('room_available')
        else:
            message = get_message('room_unavailable', count=len(result['conflicts']))

        return api_success(data=result, message=message)

    @bp.route('/availability/booked-days', methods=['POST'])
    def booked_days():
        """
        List the occupied nights of one room.

        Request body:
            room_id: Room identifier
            reservations: Existing reservations
            exclude_id: Reservation being edited (optional)

        Returns:
            JSON with days (YYYY-MM-DD list)
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        valid, room_id, err = validate_identifier(data.get('room_id'), 'room_id')
        if not valid:
            return api_error(err, 400)

        valid, reservations, err = validate_reservation_list(data.get('reservations'))
        if not valid:
            return api_error(err, 400)

        days = get_booked_days_for_room(
            room_id, reservations,
            exclude_id=data.get('exclude_id'),
            cancelled_status=_cancelled_status()
        )
        return api_success(data={'room_id': room_id, 'days': days})

    @bp.route('/rooms/available', methods=['POST'])
    def available_rooms():
        """
        List active rooms free for a whole stay.

        Request body:
            rooms: Room dicts (id, name, is_active, site_id, capacity_max,
                bed_configuration_ids)
            reservations: Existing reservations
            checkin, checkout: Stay dates (YYYY-MM-DD)
            site_id: Only rooms of this site (optional)
            bed_configuration_id: Only rooms with this bed setup (optional)
            sites: Site dicts used for ordering (optional)

        Returns:
            JSON with rooms and count
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        rooms = data.get('rooms', [])
        if not isinstance(rooms, list) or not all(
            isinstance(room, dict) and 'id' in room for room in rooms
        ):
            return api_error('rooms must be a list of objects with an id', 400)

        valid, checkin, err = validate_date_field(data.get('checkin'), 'checkin')
        if not valid:
            return api_error(err, 400)

        valid, checkout, err = validate_date_field(data.get('checkout'), 'checkout')
        if not valid:
            return api_error(err, 400)

        valid, reservations, err = validate_reservation_list(data.get('reservations'))
        if not valid:
            return api_error(err, 400)

        result = get_available_rooms(
            rooms, checkin, checkout, reservations,
            site_id=data.get('site_id'),
            bed_configuration_id=data.get('bed_configuration_id'),
            sites=data.get('sites') or [],
            cancelled_status=_cancelled_status()
        )
        return api_success(data={'rooms': result, 'count': len(result)})
