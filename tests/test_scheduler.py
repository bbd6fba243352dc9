#!/usr/bin/env python3
"""
Tests for the maintenance scheduler.

Covers:
1. First cycle - no history, next multiple of 250h, range C
2. Replay - position in C D C E C D C F recovered from history
3. Fast-forward - thresholds passed without a record consume cycle slots
4. Resync - out-of-sequence ranges do not crash and realign the cycle
5. Per-record projection - what falls due after a past record
"""

from itertools import product

import pytest

from gestifiltres import (
    CYCLE,
    INTERVAL_HOURS,
    InvalidArgumentError,
    MaintenanceRange,
    MaintenanceRecord,
    compute_next_maintenance,
    compute_next_range_for_record,
    first_due_hours,
    replay_sequence,
)

C, D, E, F = (
    MaintenanceRange.C,
    MaintenanceRange.D,
    MaintenanceRange.E,
    MaintenanceRange.F,
)


def rec(hours, maintenance_range, record_id=None):
    return MaintenanceRecord("m1", maintenance_range, hours, "2024-01-01", id=record_id)


def history_from(ranges, start=250):
    """Records exactly one interval apart, starting at `start` hours."""
    return [rec(start + i * INTERVAL_HOURS, r) for i, r in enumerate(ranges)]


# =============================================================================
# Empty history
# =============================================================================


class TestEmptyHistory:
    """Tests for machines with no maintenance recorded."""

    def test_brand_new_machine(self):
        """A machine at 0h is first due at 250h, not 0h."""
        result = compute_next_maintenance(0, [])
        assert result.range == C
        assert result.due_at_hours == 250
        assert result.hours_remaining == 250
        assert result.missed_intervals == 0

    def test_rounds_up_to_next_interval(self):
        result = compute_next_maintenance(610, [])
        assert result.due_at_hours == 750
        assert result.hours_remaining == 140

    def test_exact_multiple_moves_to_next_interval(self):
        """At exactly 500h the 500h threshold is not 'next'."""
        result = compute_next_maintenance(500, [])
        assert result.due_at_hours == 750
        assert result.hours_remaining == 250

    def test_fractional_hours(self):
        result = compute_next_maintenance(249.5, [])
        assert result.due_at_hours == 250
        assert result.hours_remaining == 0.5

    @pytest.mark.parametrize("hours", [0, 1, 125, 249, 250, 251, 999, 1000, 12345])
    def test_properties(self, hours):
        """Range C, positive multiple of 250, strictly ahead, at most one interval away."""
        result = compute_next_maintenance(hours, [])
        assert result.range == C
        assert result.due_at_hours > 0
        assert result.due_at_hours % INTERVAL_HOURS == 0
        assert result.due_at_hours > hours
        assert result.due_at_hours - hours <= INTERVAL_HOURS
        assert not result.is_overdue

    def test_first_due_hours_floor(self):
        assert first_due_hours(0) == 250
        assert first_due_hours(10) == 250
        assert first_due_hours(250) == 500


# =============================================================================
# Replay
# =============================================================================


class TestReplaySequence:
    """Tests for replay_sequence pointer tracking."""

    def test_empty(self):
        assert replay_sequence([]) == 0

    def test_follows_cycle(self):
        assert replay_sequence([C, D, C]) == 3

    def test_full_cycle(self):
        assert replay_sequence(list(CYCLE)) == 8

    def test_second_cycle_uses_forward_window(self):
        assert replay_sequence(list(CYCLE) + [C, D]) == 10

    def test_wraps_after_two_cycles(self):
        """Past the two-cycle window, a C resyncs to its first slot."""
        assert replay_sequence(list(CYCLE) * 2 + [C]) == 1

    def test_skipped_ranges_jump_forward(self):
        """Logging E straight after C skips the D and C slots."""
        assert replay_sequence([C, E]) == 4

    def test_out_of_sequence_f(self):
        """F after a single C lands just after F's slot."""
        pointer = replay_sequence([C, F])
        assert pointer == 8
        assert CYCLE[pointer % len(CYCLE)] == C

    def test_resync_to_first_occurrence(self):
        """From slot 15 only F is left in the window; D resyncs to slot 1."""
        pointer = replay_sequence(list(CYCLE) + [C, D, C, E, C, D, C, D])
        assert pointer == 2

    def test_unknown_tag_leaves_pointer(self):
        assert replay_sequence([C, "X"]) == 1


def forward_replay(ranges):
    """Reference: resync to the nearest occurrence at or after the pointer, mod 8."""
    pointer = 0
    for performed in ranges:
        for step in range(len(CYCLE)):
            slot = (pointer + step) % len(CYCLE)
            if CYCLE[slot] == performed:
                pointer = (slot + 1) % len(CYCLE)
                break
    return pointer


class TestResyncNeverRegresses:
    """The first-occurrence fallback must match a purely forward resync."""

    @pytest.mark.parametrize("length", [1, 2, 3, 4])
    def test_all_short_histories(self, length):
        for ranges in product(list(MaintenanceRange), repeat=length):
            assert replay_sequence(ranges) % len(CYCLE) == forward_replay(ranges), ranges

    def test_long_irregular_history(self):
        ranges = list(CYCLE) * 2 + [F, C, E, E, D, F, C, C, D, F, F, E]
        for n in range(len(ranges) + 1):
            prefix = ranges[:n]
            assert replay_sequence(prefix) % len(CYCLE) == forward_replay(prefix)


# =============================================================================
# compute_next_maintenance with history
# =============================================================================


class TestNextMaintenanceWithHistory:
    """Tests for compute_next_maintenance on machines with history."""

    def test_on_schedule(self):
        """C@250, D@500, C@750 at 900h: E due at 1000h."""
        history = [rec(250, C), rec(500, D), rec(750, C)]
        result = compute_next_maintenance(900, history)
        assert result.range == E
        assert result.due_at_hours == 1000
        assert result.hours_remaining == 100
        assert result.missed_intervals == 0
        assert not result.is_overdue

    def test_unsorted_history(self):
        """History order does not matter."""
        history = [rec(750, C), rec(250, C), rec(500, D)]
        result = compute_next_maintenance(900, history)
        assert result.range == E
        assert result.due_at_hours == 1000

    def test_anchor_is_last_record_not_schedule(self):
        """A late maintenance moves the next threshold."""
        history = [rec(250, C), rec(530, D)]
        result = compute_next_maintenance(600, history)
        assert result.range == C
        assert result.due_at_hours == 780
        assert result.hours_remaining == 180

    def test_current_hours_equal_to_last_record(self):
        result = compute_next_maintenance(750, [rec(250, C), rec(500, D), rec(750, C)])
        assert result.due_at_hours == 1000
        assert result.hours_remaining == 250

    def test_exactly_on_next_threshold_counts_as_missed(self):
        """Reaching last + 250h without a record skips that slot."""
        result = compute_next_maintenance(1000, [rec(250, C), rec(500, D), rec(750, C)])
        assert result.missed_intervals == 1
        assert result.range == C
        assert result.due_at_hours == 1250
        assert result.hours_remaining == 250

    def test_skipped_intervals(self):
        """Last record 1000h, machine at 1800h: 1250, 1500, 1750 skipped, due 2000h."""
        history = history_from([C, D, C, E])  # 250..1000, pointer 4
        result = compute_next_maintenance(1800, history)
        assert result.due_at_hours == 2000
        assert result.hours_remaining == 200
        assert result.missed_intervals == 3
        assert result.range == CYCLE[(4 + 3) % 8]  # F
        assert result.range == F

    def test_overdue_detection(self):
        """A machine past its threshold is flagged with the distance past it."""
        history = history_from([C, D, C, E])
        result = compute_next_maintenance(1800, history)
        assert result.is_overdue
        assert result.overdue_hours == 1800 - 1250

    def test_not_overdue_before_threshold(self):
        history = history_from([C, D, C, E])
        result = compute_next_maintenance(1249, history)
        assert not result.is_overdue
        assert result.overdue_hours == 0
        assert result.hours_remaining == 1

    @pytest.mark.parametrize("cycles", [1, 2, 3, 5])
    def test_monotonic_cycling(self, cycles):
        """N clean cycles from 250h: next is C at 250 * (8N + 1)."""
        history = history_from(list(CYCLE) * cycles)
        current = history[-1].service_hours
        result = compute_next_maintenance(current, history)
        assert result.range == C
        assert result.due_at_hours == 250 * (8 * cycles + 1)

    def test_out_of_sequence_resync(self):
        """F logged right after the first C: next is C."""
        result = compute_next_maintenance(600, [rec(250, C), rec(500, F)])
        assert result.range == C
        assert result.due_at_hours == 750

    def test_due_after_last_record_by_positive_multiple(self):
        """due - last is a positive multiple of 250 and due > current."""
        history = [rec(250, C), rec(510, D), rec(770, C)]
        for current in range(0, 3000, 37):
            result = compute_next_maintenance(current, history)
            delta = result.due_at_hours - 770
            assert delta > 0
            assert delta % INTERVAL_HOURS == 0
            assert result.due_at_hours > current

    def test_current_hours_below_last_record(self):
        """An odometer reading older than the history still projects forward."""
        result = compute_next_maintenance(400, [rec(250, C), rec(500, D)])
        assert result.due_at_hours == 750
        assert result.hours_remaining == 350
        assert result.missed_intervals == 0

    def test_accepts_string_ranges(self):
        result = compute_next_maintenance(900, [rec(250, "C"), rec(500, "d"), rec(750, "C")])
        assert result.range == E

    def test_idempotent(self):
        history = [rec(250, C), rec(500, D), rec(750, C)]
        assert compute_next_maintenance(1800, history) == compute_next_maintenance(
            1800, history
        )

    def test_does_not_mutate_history(self):
        history = [rec(750, C), rec(250, C), rec(500, D)]
        compute_next_maintenance(900, history)
        assert [r.service_hours for r in history] == [750, 250, 500]

    def test_accepts_generator(self):
        result = compute_next_maintenance(900, (r for r in history_from([C, D, C])))
        assert result.range == E


class TestNextMaintenanceValidation:
    """Invalid input is rejected at the boundary."""

    def test_negative_current_hours(self):
        with pytest.raises(InvalidArgumentError):
            compute_next_maintenance(-1, [])

    def test_non_numeric_current_hours(self):
        with pytest.raises(InvalidArgumentError):
            compute_next_maintenance("900", [])

    def test_bool_current_hours(self):
        with pytest.raises(InvalidArgumentError):
            compute_next_maintenance(True, [])

    def test_nan_current_hours(self):
        with pytest.raises(InvalidArgumentError):
            compute_next_maintenance(float("nan"), [])

    def test_negative_record_hours(self):
        with pytest.raises(InvalidArgumentError):
            compute_next_maintenance(900, [rec(-250, C)])

    def test_unknown_range(self):
        with pytest.raises(InvalidArgumentError, match="Unknown maintenance range"):
            compute_next_maintenance(900, [rec(250, C), rec(500, "G")])

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            compute_next_maintenance(-5, [])


# =============================================================================
# compute_next_range_for_record
# =============================================================================


class TestNextRangeForRecord:
    """Tests for compute_next_range_for_record."""

    def test_each_record_in_clean_history(self):
        history = history_from([C, D, C, E])
        expected = [D, C, E, C]
        for record, want in zip(history, expected):
            result = compute_next_range_for_record(record, history)
            assert result.range == want
            assert result.hours == record.service_hours + 250

    def test_ignores_later_records(self):
        history = history_from([C, D, C])
        result = compute_next_range_for_record(history[0], history)
        assert result.range == D
        assert result.hours == 500

    def test_unsorted_history(self):
        history = history_from([C, D, C])
        shuffled = [history[2], history[0], history[1]]
        result = compute_next_range_for_record(history[1], shuffled)
        assert result.range == C
        assert result.hours == 750

    def test_last_of_full_cycle(self):
        history = history_from(list(CYCLE))
        result = compute_next_range_for_record(history[-1], history)
        assert result.range == C
        assert result.hours == 2250

    def test_out_of_sequence_record(self):
        history = [rec(250, C), rec(500, F)]
        result = compute_next_range_for_record(history[1], history)
        assert result.range == C
        assert result.hours == 750

    def test_no_fast_forward(self):
        """Only the record matters, whatever the machine hours are now."""
        history = history_from([C, D])
        result = compute_next_range_for_record(history[-1], history)
        assert result.range == C
        assert result.hours == 750

    def test_matches_equal_record(self):
        history = [rec(250, C, "r1"), rec(500, D, "r2")]
        result = compute_next_range_for_record(rec(500, D, "r2"), history)
        assert result.range == C

    def test_matches_by_id(self):
        history = [rec(250, C, "r1"), rec(500, D, "r2")]
        probe = MaintenanceRecord("m1", D, 500, "2024-02-02", id="r2")
        result = compute_next_range_for_record(probe, history)
        assert result.range == C
        assert result.hours == 750

    def test_record_not_in_history(self):
        history = history_from([C, D])
        with pytest.raises(InvalidArgumentError):
            compute_next_range_for_record(rec(9999, C), history)

    def test_consistent_with_next_maintenance(self):
        """For the last record, both operations agree when nothing was skipped."""
        history = history_from([C, D, C, E, C])
        last = history[-1]
        following = compute_next_range_for_record(last, history)
        projection = compute_next_maintenance(last.service_hours, history)
        assert following.range == projection.range
        assert following.hours == projection.due_at_hours
