"""
Tests for calendar multi-selection merging and selection state helpers.
"""

import random
import pytest
from datetime import date

from utils.calendar_days import InvalidDateError
from models.slot_merge import (
    MalformedSlotError,
    expand_range_to_slots,
    get_slots_for_room,
    is_slot_selected,
    merge_consecutive_slots,
    remove_slot,
    toggle_slot,
)
from models.reservation_dates import count_nights


class TestMergeConsecutiveSlots:
    """Tests for merge_consecutive_slots()."""

    def test_empty_input(self):
        """Test empty selection gives no ranges."""
        assert merge_consecutive_slots([]) == []

    def test_single_day_is_one_night(self):
        """Test one selected day gives checkout the next day."""
        result = merge_consecutive_slots([{'room_id': 'R1', 'date': '2026-03-03'}])

        assert result == [{'room_id': 'R1', 'checkin': '2026-03-03', 'checkout': '2026-03-04'}]
        assert count_nights(result[0]['checkin'], result[0]['checkout']) == 1

    def test_three_consecutive_days(self):
        """Test 3rd to 5th selected gives a 3-night stay ending on the 6th."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-03'},
            {'room_id': 'R1', 'date': '2026-03-04'},
            {'room_id': 'R1', 'date': '2026-03-05'},
        ]
        result = merge_consecutive_slots(slots)

        assert result == [{'room_id': 'R1', 'checkin': '2026-03-03', 'checkout': '2026-03-06'}]
        assert count_nights('2026-03-03', '2026-03-06') == 3

    def test_week_stay(self):
        """Test 7 selected days give a single 7-night range."""
        slots = expand_range_to_slots('R1', '2026-03-01', '2026-03-08')
        result = merge_consecutive_slots(slots)

        assert result == [{'room_id': 'R1', 'checkin': '2026-03-01', 'checkout': '2026-03-08'}]
        assert count_nights(result[0]['checkin'], result[0]['checkout']) == 7

    def test_unsorted_input(self):
        """Test days are sorted before merging."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-03'},
            {'room_id': 'R1', 'date': '2026-03-01'},
            {'room_id': 'R1', 'date': '2026-03-02'},
        ]
        result = merge_consecutive_slots(slots)

        assert result == [{'room_id': 'R1', 'checkin': '2026-03-01', 'checkout': '2026-03-04'}]

    def test_gap_splits_ranges(self):
        """Test a gap of two or more days starts a new range."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-06'},
            {'room_id': 'R1', 'date': '2026-03-01'},
            {'room_id': 'R1', 'date': '2026-03-05'},
            {'room_id': 'R1', 'date': '2026-03-02'},
        ]
        result = merge_consecutive_slots(slots)

        assert result == [
            {'room_id': 'R1', 'checkin': '2026-03-01', 'checkout': '2026-03-03'},
            {'room_id': 'R1', 'checkin': '2026-03-05', 'checkout': '2026-03-07'},
        ]

    def test_one_day_gap_is_not_bridged(self):
        """Test the 1st and 3rd without the 2nd stay separate."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-01'},
            {'room_id': 'R1', 'date': '2026-03-03'},
        ]
        result = merge_consecutive_slots(slots)

        assert len(result) == 2
        assert result[0]['checkout'] == '2026-03-02'
        assert result[1]['checkin'] == '2026-03-03'

    def test_duplicates_collapse(self):
        """Test duplicate (room, day) pairs do not inflate the range."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-01'},
            {'room_id': 'R1', 'date': '2026-03-01'},
            {'room_id': 'R1', 'date': date(2026, 3, 2)},
            {'room_id': 'R1', 'date': '2026-03-02'},
        ]
        result = merge_consecutive_slots(slots)

        assert result == [{'room_id': 'R1', 'checkin': '2026-03-01', 'checkout': '2026-03-03'}]

    def test_rooms_merge_independently(self):
        """Test each room gets its own ranges."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-01'},
            {'room_id': 'R2', 'date': '2026-03-01'},
            {'room_id': 'R1', 'date': '2026-03-02'},
            {'room_id': 'R2', 'date': '2026-03-02'},
        ]
        result = merge_consecutive_slots(slots)

        assert len(result) == 2
        by_room = {r['room_id']: r for r in result}
        assert by_room['R1'] == {'room_id': 'R1', 'checkin': '2026-03-01', 'checkout': '2026-03-03'}
        assert by_room['R2'] == {'room_id': 'R2', 'checkin': '2026-03-01', 'checkout': '2026-03-03'}

    def test_month_boundary(self):
        """Test Feb 28 to Mar 2 merges into one range."""
        slots = [
            {'room_id': 'R1', 'date': '2026-02-28'},
            {'room_id': 'R1', 'date': '2026-03-01'},
            {'room_id': 'R1', 'date': '2026-03-02'},
        ]
        result = merge_consecutive_slots(slots)

        assert result == [{'room_id': 'R1', 'checkin': '2026-02-28', 'checkout': '2026-03-03'}]

    def test_year_boundary(self):
        """Test Dec 31 to Jan 1 merges into one range."""
        slots = [
            {'room_id': 'R1', 'date': '2025-12-31'},
            {'room_id': 'R1', 'date': '2026-01-01'},
        ]
        result = merge_consecutive_slots(slots)

        assert result == [{'room_id': 'R1', 'checkin': '2025-12-31', 'checkout': '2026-01-02'}]
        assert count_nights(result[0]['checkin'], result[0]['checkout']) == 2

    def test_leap_day(self):
        """Test Feb 28 to Mar 1 of a leap year goes through Feb 29."""
        slots = expand_range_to_slots('R1', '2028-02-28', '2028-03-02')
        assert len(slots) == 3

        result = merge_consecutive_slots(slots)
        assert result == [{'room_id': 'R1', 'checkin': '2028-02-28', 'checkout': '2028-03-02'}]

    def test_non_string_room_ids(self):
        """Test integer room ids are kept as given."""
        result = merge_consecutive_slots([{'room_id': 7, 'date': '2026-03-01'}])
        assert result[0]['room_id'] == 7

    def test_input_not_modified(self):
        """Test the selection list is left untouched."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-02'},
            {'room_id': 'R1', 'date': '2026-03-01'},
        ]
        snapshot = [dict(s) for s in slots]
        merge_consecutive_slots(slots)
        assert slots == snapshot


class TestMergeDST:
    """Merging across daylight saving time changes."""

    def test_spring_forward(self):
        """Test 2026-03-29 (CET -> CEST) behaves like any other day."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-28'},
            {'room_id': 'R1', 'date': '2026-03-29'},
            {'room_id': 'R1', 'date': '2026-03-30'},
        ]
        result = merge_consecutive_slots(slots)

        assert result == [{'room_id': 'R1', 'checkin': '2026-03-28', 'checkout': '2026-03-31'}]
        assert count_nights(result[0]['checkin'], result[0]['checkout']) == 3

    def test_fall_back(self):
        """Test 2026-10-25 (CEST -> CET) behaves like any other day."""
        slots = [
            {'room_id': 'R1', 'date': '2026-10-24'},
            {'room_id': 'R1', 'date': '2026-10-25'},
            {'room_id': 'R1', 'date': '2026-10-26'},
        ]
        result = merge_consecutive_slots(slots)

        assert result == [{'room_id': 'R1', 'checkin': '2026-10-24', 'checkout': '2026-10-27'}]
        assert count_nights(result[0]['checkin'], result[0]['checkout']) == 3

    def test_same_nights_as_non_dst_span(self):
        """Test a DST span and a plain span of 3 days give 3 nights each."""
        dst = merge_consecutive_slots(expand_range_to_slots('R1', '2026-03-28', '2026-03-31'))
        plain = merge_consecutive_slots(expand_range_to_slots('R1', '2026-05-10', '2026-05-13'))

        assert count_nights(dst[0]['checkin'], dst[0]['checkout']) == 3
        assert count_nights(plain[0]['checkin'], plain[0]['checkout']) == 3


class TestMergeErrors:
    """Malformed selections fail the whole merge."""

    def test_missing_room_id(self):
        """Test a slot without room_id."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-01'},
            {'date': '2026-03-02'},
        ]
        with pytest.raises(MalformedSlotError):
            merge_consecutive_slots(slots)

    def test_missing_date(self):
        """Test a slot without date."""
        with pytest.raises(MalformedSlotError):
            merge_consecutive_slots([{'room_id': 'R1'}])

    def test_empty_values(self):
        """Test empty strings count as missing."""
        with pytest.raises(MalformedSlotError):
            merge_consecutive_slots([{'room_id': '', 'date': '2026-03-01'}])
        with pytest.raises(MalformedSlotError):
            merge_consecutive_slots([{'room_id': 'R1', 'date': ''}])

    def test_room_zero_is_not_missing(self):
        """Test integer room 0 is merged like any other room."""
        ranges = merge_consecutive_slots([
            {'room_id': 0, 'date': '2026-03-01'},
            {'room_id': 0, 'date': '2026-03-02'},
        ])
        assert ranges == [{'room_id': 0, 'checkin': '2026-03-01', 'checkout': '2026-03-03'}]

    def test_unparseable_date(self):
        """Test a date that is not a calendar day."""
        with pytest.raises(InvalidDateError):
            merge_consecutive_slots([{'room_id': 'R1', 'date': '2026-02-30'}])


class TestMergeProperties:
    """Properties that hold for any selection."""

    def test_remerge_is_stable(self):
        """Test merging the expanded output again gives the same ranges."""
        rng = random.Random(42)
        for _ in range(25):
            slots = [
                {'room_id': rng.choice(['R1', 'R2', 'R3']),
                 'date': f'2026-03-{rng.randint(1, 31):02d}'}
                for _ in range(rng.randint(1, 30))
            ]
            ranges = merge_consecutive_slots(slots)

            expanded = []
            for r in ranges:
                expanded.extend(expand_range_to_slots(r['room_id'], r['checkin'], r['checkout']))

            key = lambda r: (r['room_id'], r['checkin'])
            assert sorted(merge_consecutive_slots(expanded), key=key) == sorted(ranges, key=key)

    def test_night_total_equals_distinct_days(self):
        """Test total nights equals the number of distinct selected cells."""
        rng = random.Random(7)
        slots = [
            {'room_id': rng.choice(['R1', 'R2']), 'date': f'2026-10-{rng.randint(20, 31):02d}'}
            for _ in range(40)
        ]
        distinct = {(s['room_id'], s['date']) for s in slots}

        ranges = merge_consecutive_slots(slots)
        assert sum(count_nights(r['checkin'], r['checkout']) for r in ranges) == len(distinct)


class TestExpandRangeToSlots:
    """Tests for expand_range_to_slots()."""

    def test_one_night(self):
        """Test a one-night range gives one slot."""
        assert expand_range_to_slots('R1', '2026-03-01', '2026-03-02') == [
            {'room_id': 'R1', 'date': '2026-03-01'}
        ]

    def test_week(self):
        """Test a 7-night range gives 7 slots, checkout excluded."""
        slots = expand_range_to_slots('R1', '2026-03-01', '2026-03-08')
        assert len(slots) == 7
        assert slots[0]['date'] == '2026-03-01'
        assert slots[6]['date'] == '2026-03-07'

    def test_month_boundary(self):
        """Test expansion across a month end."""
        slots = expand_range_to_slots('R1', '2026-02-28', '2026-03-02')
        assert [s['date'] for s in slots] == ['2026-02-28', '2026-03-01']


class TestSelectionState:
    """Tests for the selection list helpers."""

    def test_toggle_adds_then_removes(self):
        """Test clicking a cell twice unselects it."""
        slots = toggle_slot([], 'R1', '2026-03-03')
        assert slots == [{'room_id': 'R1', 'date': '2026-03-03'}]

        slots = toggle_slot(slots, 'R1', '2026-03-03')
        assert slots == []

    def test_toggle_does_not_modify_input(self):
        """Test toggle returns a new list."""
        original = [{'room_id': 'R1', 'date': '2026-03-03'}]
        toggle_slot(original, 'R1', '2026-03-04')
        toggle_slot(original, 'R1', '2026-03-03')
        assert original == [{'room_id': 'R1', 'date': '2026-03-03'}]

    def test_toggle_normalizes_date_objects(self):
        """Test a date object matches the same day string."""
        slots = toggle_slot([], 'R1', date(2026, 3, 3))
        assert slots == [{'room_id': 'R1', 'date': '2026-03-03'}]
        assert is_slot_selected(slots, 'R1', '2026-03-03') is True
        assert toggle_slot(slots, 'R1', '2026-03-03') == []

    def test_same_day_other_room(self):
        """Test selection is per room."""
        slots = toggle_slot([], 'R1', '2026-03-03')
        slots = toggle_slot(slots, 'R2', '2026-03-03')

        assert len(slots) == 2
        assert is_slot_selected(slots, 'R2', '2026-03-03') is True
        assert is_slot_selected(slots, 'R3', '2026-03-03') is False

    def test_remove_slot(self):
        """Test removing one slot keeps the rest."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-03'},
            {'room_id': 'R1', 'date': '2026-03-04'},
        ]
        assert remove_slot(slots, 'R1', '2026-03-03') == [{'room_id': 'R1', 'date': '2026-03-04'}]
        assert remove_slot(slots, 'R9', '2026-03-03') == slots

    def test_get_slots_for_room(self):
        """Test filtering the selection by room."""
        slots = [
            {'room_id': 'R1', 'date': '2026-03-03'},
            {'room_id': 'R2', 'date': '2026-03-03'},
            {'room_id': 'R1', 'date': '2026-03-05'},
        ]
        assert [s['date'] for s in get_slots_for_room(slots, 'R1')] == ['2026-03-03', '2026-03-05']
        assert get_slots_for_room(slots, 'R3') == []
