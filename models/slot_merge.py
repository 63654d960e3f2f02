"""
Multi-slot selection merging.
Turns the (room, day) cells picked on the calendar into checkin/checkout
ranges, one range per run of consecutive days in each room.

Checkout is exclusive: selecting the 3rd, 4th and 5th gives
checkin 3rd / checkout 6th, three nights.
"""

import logging

from utils.calendar_days import (
    add_days, diff_days, format_day, iter_days, normalize
)

logger = logging.getLogger(__name__)


class MalformedSlotError(ValueError):
    """Raised when a selected slot is missing its room or its date."""


# =============================================================================
# MERGE
# =============================================================================

def merge_consecutive_slots(slots: list) -> list:
    """
    Merge selected slots into contiguous ranges per room.

    Args:
        slots: List of {'room_id': str, 'date': 'YYYY-MM-DD'} dicts, in any
            order. Duplicate (room, date) pairs count once.

    Returns:
        list: [{'room_id': str, 'checkin': 'YYYY-MM-DD',
                'checkout': 'YYYY-MM-DD'}, ...]
            Ranges of one room are in ascending checkin order.

    Raises:
        MalformedSlotError: If a slot has no room_id or no date
        InvalidDateError: If a slot date is not a calendar day
    """
    if not slots:
        return []

    for slot in slots:
        if slot.get('room_id') in (None, '') or slot.get('date') in (None, ''):
            raise MalformedSlotError('Each slot must have room_id and date')

    # Group by room (first-seen order), collapsing duplicate days
    days_by_room = {}
    for slot in slots:
        days_by_room.setdefault(slot['room_id'], set()).add(normalize(slot['date']))

    merged = []
    for room_id, days in days_by_room.items():
        merged.extend(_merge_room_days(room_id, sorted(days)))

    logger.debug('Merged %d slots into %d ranges', len(slots), len(merged))
    return merged


def _merge_room_days(room_id, days: list) -> list:
    """Scan one room's sorted days and close a range at every gap."""
    ranges = []
    start = end = days[0]

    for current in days[1:]:
        if diff_days(end, current) == 1:
            end = current
            continue
        ranges.append(_build_range(room_id, start, end))
        start = end = current

    ranges.append(_build_range(room_id, start, end))
    return ranges


def _build_range(room_id, first_night, last_night) -> dict:
    return {
        'room_id': room_id,
        'checkin': format_day(first_night),
        'checkout': format_day(add_days(last_night, 1)),
    }


def expand_range_to_slots(room_id, checkin, checkout) -> list:
    """
    Expand a range back into one slot per occupied night.

    Args:
        room_id: Room identifier
        checkin: First night (YYYY-MM-DD)
        checkout: Exclusive end day (YYYY-MM-DD)

    Returns:
        list: [{'room_id', 'date'}, ...] for every day in [checkin, checkout)
    """
    return [
        {'room_id': room_id, 'date': format_day(day)}
        for day in iter_days(checkin, checkout)
    ]


# =============================================================================
# SELECTION STATE
# =============================================================================
# The calendar keeps its selection as a plain slot list. These helpers take
# the current list and return a new one; the input list is never modified.

def _same_slot(slot: dict, room_id, day) -> bool:
    return slot.get('room_id') == room_id and normalize(slot['date']) == day


def toggle_slot(slots: list, room_id, date) -> list:
    """Select a cell, or unselect it if it was already selected."""
    day = normalize(date)
    if is_slot_selected(slots, room_id, day):
        return remove_slot(slots, room_id, day)
    return list(slots) + [{'room_id': room_id, 'date': format_day(day)}]


def remove_slot(slots: list, room_id, date) -> list:
    day = normalize(date)
    return [s for s in slots if not _same_slot(s, room_id, day)]


def is_slot_selected(slots: list, room_id, date) -> bool:
    day = normalize(date)
    return any(_same_slot(s, room_id, day) for s in slots)


def get_slots_for_room(slots: list, room_id) -> list:
    return [s for s in slots if s.get('room_id') == room_id]
