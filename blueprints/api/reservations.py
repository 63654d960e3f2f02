"""
Reservation API routes.
Date checks for the booking form and payload preparation for multi-room
creation from the calendar selection.
"""

from flask import current_app, request

from utils.api_response import api_success, api_error, api_conflict
from utils.datetime_helpers import get_today
from utils.messages import get_message
from utils.validators import (
    validate_date_field, validate_identifier, validate_range_list,
    validate_reservation_list, sanitize_input
)
from models.reservation_dates import count_nights, validate_booking_dates, validate_reservation_dates
from models.reservation_multiday import group_ranges_by_dates, prepare_bulk_reservations
from models.reservation_state import is_valid_status


def _read_stay(data: dict) -> tuple:
    """Validate checkin/checkout fields. Returns (checkin, checkout, error)."""
    valid, checkin, err = validate_date_field(data.get('checkin'), 'checkin')
    if not valid:
        return None, None, err
    valid, checkout, err = validate_date_field(data.get('checkout'), 'checkout')
    if not valid:
        return None, None, err
    return checkin, checkout, ''


def register_routes(bp):
    """Register reservation routes on the blueprint."""

    @bp.route('/ranges/nights', methods=['POST'])
    def range_nights():
        """
        Count the nights of a stay.

        Request body:
            checkin, checkout: YYYY-MM-DD

        Returns:
            JSON with nights; 400 if checkin is not before checkout
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        checkin, checkout, err = _read_stay(data)
        if err:
            return api_error(err, 400)

        result = validate_reservation_dates(checkin, checkout)
        if not result['valid']:
            return api_error(result['error'], 400)

        return api_success(data={
            'checkin': checkin,
            'checkout': checkout,
            'nights': count_nights(checkin, checkout)
        })

    @bp.route('/reservations/check-dates', methods=['POST'])
    def check_booking_dates():
        """
        Run the booking form date checks.

        Request body:
            checkin, checkout: YYYY-MM-DD
            status: Reservation status code (optional)
            hold_expires_at: OPTION expiry YYYY-MM-DD (optional)

        Returns:
            JSON with valid, errors and warnings
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        checkin, checkout, err = _read_stay(data)
        if err:
            return api_error(err, 400)

        hold_expires_at = data.get('hold_expires_at')
        if hold_expires_at:
            valid, hold_expires_at, err = validate_date_field(hold_expires_at, 'hold_expires_at')
            if not valid:
                return api_error(err, 400)

        result = validate_booking_dates(
            checkin, checkout, get_today(),
            status=data.get('status'),
            hold_expires_at=hold_expires_at,
            max_hold_days=current_app.config.get('OPTION_MAX_HOLD_DAYS', 15)
        )
        return api_success(data=result)

    @bp.route('/reservations/prepare-bulk', methods=['POST'])
    def prepare_bulk():
        """
        Validate merged ranges and build the reservation payloads.

        Request body:
            ranges: Merged ranges [{room_id, checkin, checkout}, ...]
            client_id: Client identifier
            reservations: Existing reservations of the rooms involved
            status: Status for all new reservations (optional)
            room_details: {'<room_id>_<checkin>': {bed_configuration,
                adults_count, children_count, infants_count}} (optional)
            group_pax: Group size for the comment (optional)

        Returns:
            JSON with the payloads to bulk-create, or 409 with the
            overlap/conflict error and conflicting reservations
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        valid, client_id, err = validate_identifier(data.get('client_id'), 'client_id')
        if not valid:
            return api_error(get_message('client_required'), 400)

        valid, ranges, err = validate_range_list(data.get('ranges', []))
        if not valid:
            return api_error(err, 400)

        valid, existing, err = validate_reservation_list(data.get('reservations'))
        if not valid:
            return api_error(err, 400)

        status = data.get('status') or current_app.config.get('DEFAULT_RESERVATION_STATUS', 'REQUEST')
        if not is_valid_status(status):
            return api_error(get_message('invalid_status'), 400)

        room_details = data.get('room_details') or {}
        if not isinstance(room_details, dict):
            return api_error('room_details must be an object', 400)

        group_pax = sanitize_input(str(data.get('group_pax') or ''), max_length=20)

        try:
            result = prepare_bulk_reservations(
                ranges, client_id, existing,
                status=status,
                room_details=room_details,
                group_pax=group_pax or None,
                cancelled_status=current_app.config.get('CANCELLED_STATUS', 'ANNULE')
            )
        except ValueError as e:
            return api_error(str(e), 400)

        if not result['success']:
            return api_conflict(result['error'], result['conflicts'])

        current_app.logger.info(
            'Prepared %d reservation(s) for client %s', result['total'], client_id
        )
        return api_success(
            data={
                'reservations': result['reservations'],
                'total': result['total'],
                'groups': group_ranges_by_dates(ranges)
            },
            message=get_message('bulk_ready', count=result['total'])
        )
