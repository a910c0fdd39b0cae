"""Tests for interval and energy classification utilities."""

import pytest

from planner.core.intervals import (
    EnergyLevel,
    Interval,
    energy_level_at,
    merge_intervals,
    time_to_minutes,
)
from planner.core.preferences import EnergyPatterns, TimeRange, UserPreferences


@pytest.fixture
def prefs():
    return UserPreferences(
        energy_patterns=EnergyPatterns(
            high_energy=[TimeRange("08:00", "11:00")],
            medium_energy=[TimeRange("11:00", "13:00")],
            low_energy=[TimeRange("13:00", "14:00"), TimeRange("16:00", "18:00")],
        )
    )


class TestTimeToMinutes:
    def test_parses_hours_and_minutes(self):
        assert time_to_minutes("09:30") == 570

    def test_midnight(self):
        assert time_to_minutes("00:00") == 0

    def test_end_of_day(self):
        assert time_to_minutes("24:00") == 1440

    @pytest.mark.parametrize("value", ["", "0930", "nine:thirty", "09:"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            time_to_minutes(value)


class TestEnergyLevelAt:
    def test_inside_ranges(self, prefs):
        assert energy_level_at(9 * 60, prefs) == EnergyLevel.HIGH
        assert energy_level_at(12 * 60, prefs) == EnergyLevel.MEDIUM
        assert energy_level_at(13 * 60 + 30, prefs) == EnergyLevel.LOW

    def test_ranges_are_half_open(self, prefs):
        assert energy_level_at(8 * 60, prefs) == EnergyLevel.HIGH
        assert energy_level_at(11 * 60, prefs) == EnergyLevel.MEDIUM
        assert energy_level_at(18 * 60 - 1, prefs) == EnergyLevel.LOW

    def test_second_range_in_list(self, prefs):
        assert energy_level_at(17 * 60, prefs) == EnergyLevel.LOW

    def test_unclassified_defaults_to_medium(self, prefs):
        assert energy_level_at(6 * 60, prefs) == EnergyLevel.MEDIUM
        assert energy_level_at(18 * 60, prefs) == EnergyLevel.MEDIUM

    def test_no_patterns(self):
        assert energy_level_at(600, UserPreferences()) == EnergyLevel.MEDIUM

    def test_high_beats_low_when_ranges_overlap(self, prefs):
        prefs.energy_patterns.low_energy.append(TimeRange("07:00", "10:00"))
        assert energy_level_at(9 * 60, prefs) == EnergyLevel.HIGH
        assert energy_level_at(7 * 60, prefs) == EnergyLevel.LOW


class TestMergeIntervals:
    def test_empty(self):
        assert merge_intervals([]) == []

    def test_disjoint_are_kept(self):
        intervals = [Interval(1, 2), Interval(4, 5)]
        assert merge_intervals(intervals) == intervals

    def test_overlapping_merge(self):
        assert merge_intervals([Interval(1, 3), Interval(2, 5)]) == [Interval(1, 5)]

    def test_touching_merge(self):
        assert merge_intervals([Interval(1, 2), Interval(2, 3)]) == [Interval(1, 3)]

    def test_contained(self):
        assert merge_intervals([Interval(1, 10), Interval(2, 3)]) == [Interval(1, 10)]

    def test_unsorted_input(self):
        intervals = [Interval(6, 8), Interval(1, 2), Interval(2, 4)]
        assert merge_intervals(intervals) == [Interval(1, 4), Interval(6, 8)]
        assert intervals[0] == Interval(6, 8)
