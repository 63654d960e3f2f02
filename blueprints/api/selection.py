"""
Calendar multi-selection API routes.
The calendar sends its selected (room, day) cells and gets back the merged
checkin/checkout ranges to display in the selection panel.
"""

from flask import request

from utils.api_response import api_success, api_error
from utils.messages import get_message
from utils.validators import validate_date_field, validate_identifier, validate_slot_list
from models.slot_merge import merge_consecutive_slots, toggle_slot
from models.reservation_dates import count_nights


def _ranges_with_nights(ranges: list) -> list:
    return [
        dict(r, nights=count_nights(r['checkin'], r['checkout']))
        for r in ranges
    ]


def register_routes(bp):
    """Register selection routes on the blueprint."""

    @bp.route('/selection/merge', methods=['POST'])
    def merge_selection():
        """
        Merge selected slots into ranges.

        Request body:
            slots: [{room_id (or roomId), date: YYYY-MM-DD}, ...]

        Returns:
            JSON with ranges (each with its night count) and total_nights
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        valid, slots, err = validate_slot_list(data.get('slots', []))
        if not valid:
            return api_error(err, 400)

        ranges = _ranges_with_nights(merge_consecutive_slots(slots))

        return api_success(
            data={
                'ranges': ranges,
                'total_nights': sum(r['nights'] for r in ranges)
            },
            message=get_message('selection_merged', count=len(ranges))
        )

    @bp.route('/selection/toggle', methods=['POST'])
    def toggle_selection():
        """
        Toggle one calendar cell in the current selection.

        Request body:
            slots: Current selection [{room_id, date}, ...]
            room_id: Room of the clicked cell
            date: Day of the clicked cell (YYYY-MM-DD)

        Returns:
            JSON with the new selection and its merged ranges
        """
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return api_error(get_message('data_required'), 400)

        valid, slots, err = validate_slot_list(data.get('slots', []))
        if not valid:
            return api_error(err, 400)

        valid, room_id, err = validate_identifier(
            data.get('room_id', data.get('roomId')), 'room_id'
        )
        if not valid:
            return api_error(err, 400)

        valid, day, err = validate_date_field(data.get('date'), 'date')
        if not valid:
            return api_error(err, 400)

        slots = toggle_slot(slots, room_id, day)

        return api_success(data={
            'slots': slots,
            'ranges': _ranges_with_nights(merge_consecutive_slots(slots))
        })
