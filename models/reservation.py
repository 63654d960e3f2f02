"""
Reservation range functions.
Single import point for the calendar and booking form logic.

This module re-exports the functions of the split modules:
- slot_merge.py: Calendar multi-selection merging and selection state
- reservation_availability.py: Overlap validation and conflict checks
- reservation_dates.py: Night counting and date checks
- reservation_multiday.py: Multi-room reservation payloads
- reservation_state.py: Status codes
"""

# =============================================================================
# RE-EXPORTS
# =============================================================================

# Selection merging
from .slot_merge import (
    MalformedSlotError,
    merge_consecutive_slots,
    expand_range_to_slots,
    toggle_slot,
    remove_slot,
    is_slot_selected,
    get_slots_for_room,
)

# Overlap and availability
from .reservation_availability import (
    IncompleteRangeError,
    ranges_overlap,
    validate_no_overlaps,
    check_conflict,
    get_booked_days_for_room,
    get_available_rooms,
)

# Dates
from .reservation_dates import (
    OPTION_MAX_HOLD_DAYS,
    count_nights,
    validate_reservation_dates,
    validate_range_within_window,
    get_max_option_expiry,
    validate_booking_dates,
)

# Multi-room creation
from .reservation_multiday import (
    range_key,
    group_ranges_by_dates,
    prepare_bulk_reservations,
)

# Statuses
from .reservation_state import (
    CANCELLED_STATUS,
    DEFAULT_RESERVATION_STATUS,
    RESERVATION_STATUSES,
    is_valid_status,
    is_cancelled,
    get_status_label,
)
