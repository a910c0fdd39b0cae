"""Time-range parsing, energy classification and interval merging."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .preferences import TimeRange, UserPreferences


class EnergyLevel(Enum):
    """Energy classification of a moment of the day."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Unclassified minutes are medium energy, not an error
DEFAULT_ENERGY = EnergyLevel.MEDIUM


@dataclass(frozen=True)
class Interval:
    """A half-open [start, end) span of comparable values."""

    start: Any
    end: Any


def time_to_minutes(value: str) -> int:
    """
    Minutes since midnight for an "HH:MM" string.

    Purely lexical - no timezone conversion.
    """
    hours, sep, minutes = value.strip().partition(":")
    try:
        if not sep:
            raise ValueError
        return int(hours) * 60 + int(minutes)
    except ValueError:
        raise ValueError(f"Invalid time of day: {value!r} (expected HH:MM)") from None


def _in_range(minute_of_day: int, time_range: TimeRange) -> bool:
    return time_to_minutes(time_range.start) <= minute_of_day < time_to_minutes(time_range.end)


def energy_rules(preferences: UserPreferences) -> list[tuple[EnergyLevel, list[TimeRange]]]:
    """Energy ranges as an ordered rule list: high, then medium, then low."""
    patterns = preferences.energy_patterns
    return [
        (EnergyLevel.HIGH, patterns.high_energy),
        (EnergyLevel.MEDIUM, patterns.medium_energy),
        (EnergyLevel.LOW, patterns.low_energy),
    ]


def energy_level_at(minute_of_day: int, preferences: UserPreferences) -> EnergyLevel:
    """
    Classify a minute of the day against the declared energy patterns.

    Rules are tested in order and the first matching range wins, so a minute
    covered by both a high and a low range is high.
    """
    for level, ranges in energy_rules(preferences):
        if any(_in_range(minute_of_day, r) for r in ranges):
            return level
    return DEFAULT_ENERGY


def merge_intervals(intervals: list[Interval]) -> list[Interval]:
    """
    Sort intervals by start and coalesce overlapping or touching ones.

    Pure function - the input list is not modified.
    """
    merged: list[Interval] = []
    for interval in sorted(intervals, key=lambda i: i.start):
        if merged and interval.start <= merged[-1].end:
            last = merged[-1]
            merged[-1] = Interval(last.start, max(last.end, interval.end))
        else:
            merged.append(interval)
    return merged
