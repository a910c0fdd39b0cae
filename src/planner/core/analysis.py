"""Pure schedule analysis - density, conflicts, life areas, free time.

Every public function here is a total function of its arguments: no clock,
no I/O, no shared state. Malformed events degrade instead of raising.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from .calendar import (
    CalendarEvent,
    TimeSlot,
    as_date,
    find_free_slots,
    minute_of_day,
    sort_events_by_start,
)
from .intervals import EnergyLevel, energy_level_at
from .preferences import UserPreferences


class Density(Enum):
    """How busy a day is, from total scheduled hours."""

    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    OVERLOADED = "overloaded"

    @property
    def score(self) -> int:
        return DENSITY_SCORES[self]


DENSITY_SCORES = {
    Density.LIGHT: 1,
    Density.MODERATE: 2,
    Density.HEAVY: 3,
    Density.OVERLOADED: 4,
}


class ConflictType(Enum):
    OVERLAP = "overlap"
    OVERCOMMITMENT = "overcommitment"
    ENERGY_MISMATCH = "energy_mismatch"
    HABIT_GAP = "habit_gap"


class Severity(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# Specific areas come before the broad work table; first match wins.
# Substring collisions (e.g. "run" inside "rerun") are accepted.
DEFAULT_CATEGORY_KEYWORDS: list[tuple[str, list[str]]] = [
    ("fitness", [
        "gym", "workout", "run", "running", "yoga", "exercise", "fitness",
        "swim", "cycling", "hike", "walk", "training", "crossfit", "pilates",
    ]),
    ("learning", [
        "course", "class", "lecture", "study", "learn", "tutorial",
        "workshop", "webinar", "lesson", "seminar",
    ]),
    ("hobbies", [
        "hobby", "paint", "draw", "music", "guitar", "piano", "read",
        "game", "craft", "cook", "photography", "garden",
    ]),
    ("personal", [
        "doctor", "dentist", "appointment", "errand", "haircut", "pharmacy",
        "bank", "cleaning", "shopping", "chore", "therapist", "vet",
    ]),
    ("social", [
        "dinner", "lunch with", "coffee with", "drinks", "party", "hangout",
        "catch up", "friends", "family", "date night", "birthday",
    ]),
    ("work", [
        "meeting", "standup", "sync", "review", "sprint", "work", "project",
        "deadline", "presentation", "interview", "1:1", "one-on-one",
        "planning", "retro", "demo", "scrum", "kickoff",
    ]),
]

OVERLOAD_HOURS = 8
ENERGY_MISMATCH_MIN_MINUTES = 60


@dataclass(frozen=True)
class Conflict:
    """A scheduling problem found in a day."""

    type: ConflictType
    severity: Severity
    description: str
    affected_events: list[str] = field(default_factory=list)
    suggested_resolutions: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "type": self.type.value,
            "severity": self.severity.value,
            "description": self.description,
            "affectedEvents": list(self.affected_events),
            "suggestedResolutions": list(self.suggested_resolutions),
        }


@dataclass(frozen=True)
class LifeAreaBreakdown:
    """Scheduled vs. target hours for one life area."""

    area: str
    scheduled_hours: float
    target_hours: float
    delta: float

    def to_dict(self) -> dict:
        return {
            "area": self.area,
            "scheduledHours": self.scheduled_hours,
            "targetHours": self.target_hours,
            "delta": self.delta,
        }


@dataclass(frozen=True)
class ScheduleAnalysis:
    """Analysis of a single day."""

    date: str
    density: Density
    conflicts: list[Conflict]
    life_area_breakdown: list[LifeAreaBreakdown]
    free_slots: list[TimeSlot]
    warnings: list[str]

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "density": self.density.value,
            "conflicts": [c.to_dict() for c in self.conflicts],
            "lifeAreaBreakdown": [b.to_dict() for b in self.life_area_breakdown],
            "freeSlots": [s.to_dict() for s in self.free_slots],
            "warnings": list(self.warnings),
        }


@dataclass(frozen=True)
class WeekSummary:
    total_events: int
    average_density: Density
    life_area_breakdown: list[LifeAreaBreakdown]

    def to_dict(self) -> dict:
        return {
            "totalEvents": self.total_events,
            "averageDensity": self.average_density.value,
            "lifeAreaBreakdown": [b.to_dict() for b in self.life_area_breakdown],
        }


@dataclass(frozen=True)
class WeekAnalysis:
    """Per-day analyses plus a week-level summary."""

    start_date: str
    end_date: str
    days: list[ScheduleAnalysis]
    summary: WeekSummary

    def to_dict(self) -> dict:
        return {
            "startDate": self.start_date,
            "endDate": self.end_date,
            "days": [d.to_dict() for d in self.days],
            "summary": self.summary.to_dict(),
        }


def _round1(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def _label(event: CalendarEvent) -> str:
    return event.title or "Untitled"


def _event_ids(events: list[CalendarEvent]) -> list[str]:
    return [e.id for e in events if e.id]


def total_hours(events: list[CalendarEvent], preferences: UserPreferences) -> float:
    """Sum of event durations in hours. Overlapping time is counted twice."""
    tz = preferences.zone()
    return sum(e.duration_minutes(tz) for e in events) / 60


# ============== Conflict detection ==============


def detect_overlaps(events: list[CalendarEvent], preferences: UserPreferences) -> list[Conflict]:
    """One high-severity conflict per overlapping pair. Back-to-back is fine."""
    tz = preferences.zone()
    spans = [(e, e.start_time(tz), e.end_time(tz)) for e in events]

    conflicts = []
    for i, (a, a_start, a_end) in enumerate(spans):
        for b, b_start, b_end in spans[i + 1 :]:
            if a_start < b_end and b_start < a_end:
                conflicts.append(
                    Conflict(
                        type=ConflictType.OVERLAP,
                        severity=Severity.HIGH,
                        description=f'"{_label(a)}" overlaps with "{_label(b)}"',
                        affected_events=_event_ids([a, b]),
                        suggested_resolutions=[
                            "Reschedule one of the events",
                            "Shorten one of the events",
                        ],
                    )
                )
    return conflicts


def detect_overcommitment(
    events: list[CalendarEvent], preferences: UserPreferences
) -> list[Conflict]:
    """A single conflict covering every event when the day exceeds the meeting cap."""
    limit = preferences.scheduling_rules.max_meetings_per_day
    if len(events) <= limit:
        return []
    return [
        Conflict(
            type=ConflictType.OVERCOMMITMENT,
            severity=Severity.HIGH if len(events) > limit + 2 else Severity.MEDIUM,
            description=f"{len(events)} events scheduled (max: {limit})",
            affected_events=_event_ids(events),
            suggested_resolutions=[
                "Cancel or reschedule lower-priority events",
                "Combine related meetings",
            ],
        )
    ]


def detect_energy_mismatches(
    events: list[CalendarEvent], preferences: UserPreferences
) -> list[Conflict]:
    """Flag events of an hour or more that start in a low-energy period."""
    tz = preferences.zone()
    conflicts = []
    for event in events:
        duration = event.duration_minutes(tz)
        if duration < ENERGY_MISMATCH_MIN_MINUTES:
            continue
        energy = energy_level_at(minute_of_day(event.start_time(tz)), preferences)
        if energy == EnergyLevel.LOW:
            conflicts.append(
                Conflict(
                    type=ConflictType.ENERGY_MISMATCH,
                    severity=Severity.MEDIUM,
                    description=(
                        f'"{_label(event)}" ({duration:g}min) is scheduled '
                        "during a low-energy period"
                    ),
                    affected_events=_event_ids([event]),
                    suggested_resolutions=[
                        "Move to a high-energy time slot",
                        "Break into smaller tasks",
                    ],
                )
            )
    return conflicts


# ============== Density & life areas ==============


def density_for_hours(hours: float) -> Density:
    if hours < 4:
        return Density.LIGHT
    if hours < 6:
        return Density.MODERATE
    if hours < 8:
        return Density.HEAVY
    return Density.OVERLOADED


def calculate_density(events: list[CalendarEvent], preferences: UserPreferences) -> Density:
    return density_for_hours(total_hours(events, preferences))


def category_table(preferences: UserPreferences) -> list[tuple[str, list[str]]]:
    """The keyword table in effect: the user's override, else the built-in one."""
    if preferences.category_keywords is not None:
        return preferences.category_keywords
    return DEFAULT_CATEGORY_KEYWORDS


def categorize_event(event: CalendarEvent, table: list[tuple[str, list[str]]]) -> str | None:
    """
    First life area with any keyword appearing in the title or description.

    Substring match, no scoring: table order decides ties.
    """
    text = f"{event.title or ''} {event.description or ''}".lower()
    for area, keywords in table:
        if any(kw.lower() in text for kw in keywords):
            return area
    return None


def _breakdown(hours_per_area: Mapping[str, float], preferences: UserPreferences) -> list[LifeAreaBreakdown]:
    return [
        LifeAreaBreakdown(
            area=la.name,
            scheduled_hours=_round1(hours_per_area.get(la.name, 0)),
            target_hours=la.weekly_target_hours,
            delta=_round1(hours_per_area.get(la.name, 0) - la.weekly_target_hours),
        )
        for la in preferences.life_areas
    ]


def calculate_life_area_breakdown(
    events: list[CalendarEvent], preferences: UserPreferences
) -> list[LifeAreaBreakdown]:
    """Scheduled hours per configured life area, against its weekly target."""
    tz = preferences.zone()
    table = category_table(preferences)

    hours_per_area: dict[str, float] = {}
    for event in events:
        area = categorize_event(event, table)
        if area:
            hours_per_area[area] = hours_per_area.get(area, 0) + event.duration_minutes(tz) / 60

    return _breakdown(hours_per_area, preferences)


# ============== Warnings ==============


def generate_warnings(events: list[CalendarEvent], preferences: UserPreferences) -> list[str]:
    """Advisory messages about breaks and total load."""
    tz = preferences.zone()
    min_break = preferences.scheduling_rules.min_break_between_events
    ordered = sort_events_by_start(events, tz)

    warnings = []
    back_to_back = 0
    for prev, cur in zip(ordered, ordered[1:]):
        gap = (cur.start_time(tz) - prev.end_time(tz)).total_seconds() / 60
        if 0 <= gap < min_break:
            back_to_back += 1
    if back_to_back:
        warnings.append(
            f"{back_to_back} back-to-back transition(s) with less than {min_break}min break"
        )

    hours = total_hours(events, preferences)
    if hours > OVERLOAD_HOURS:
        warnings.append(f"{hours:.1f} hours of events scheduled, consider lightening the load")

    return warnings


# ============== Day & week ==============


def analyze_day(
    events: list[CalendarEvent],
    preferences: UserPreferences,
    day: date | str,
) -> ScheduleAnalysis:
    """
    Analyze one day's events.

    Pure function - no I/O. Detectors run independently over the same list
    and their results are concatenated in a fixed order.
    """
    conflicts = [
        *detect_overlaps(events, preferences),
        *detect_overcommitment(events, preferences),
        *detect_energy_mismatches(events, preferences),
    ]

    return ScheduleAnalysis(
        date=as_date(day).isoformat(),
        density=calculate_density(events, preferences),
        conflicts=conflicts,
        life_area_breakdown=calculate_life_area_breakdown(events, preferences),
        free_slots=find_free_slots(events, preferences, day),
        warnings=generate_warnings(events, preferences),
    )


def average_density(days: list[ScheduleAnalysis]) -> Density:
    """Re-bucket the mean density score of several days."""
    score = sum(d.density.score for d in days) / len(days) if days else 0
    if score <= 1.5:
        return Density.LIGHT
    if score <= 2.5:
        return Density.MODERATE
    if score <= 3.5:
        return Density.HEAVY
    return Density.OVERLOADED


def analyze_week(
    events_by_date: Mapping[str, list[CalendarEvent]],
    preferences: UserPreferences,
    start_date: date | str,
    end_date: date | str,
) -> WeekAnalysis:
    """
    Analyze each supplied day and summarize the week.

    Days appear in the mapping's iteration order. Weekly life-area hours are
    the sum of each day's rounded scheduled hours.
    """
    days = []
    total_events = 0
    hours_per_area: dict[str, float] = {}

    for day, events in events_by_date.items():
        analysis = analyze_day(events, preferences, day)
        days.append(analysis)
        total_events += len(events)
        for item in analysis.life_area_breakdown:
            hours_per_area[item.area] = hours_per_area.get(item.area, 0) + item.scheduled_hours

    return WeekAnalysis(
        start_date=as_date(start_date).isoformat(),
        end_date=as_date(end_date).isoformat(),
        days=days,
        summary=WeekSummary(
            total_events=total_events,
            average_density=average_density(days),
            life_area_breakdown=_breakdown(hours_per_area, preferences),
        ),
    )
