"""Functional core - pure business logic with no I/O."""

from .intervals import EnergyLevel, Interval, energy_level_at, merge_intervals, time_to_minutes
from .preferences import LifeArea, SchedulingRules, TimeBlock, TimeRange, UserPreferences
from .calendar import CalendarEvent, EventTime, TimeSlot, find_free_slots, group_events_by_date
from .analysis import (
    Conflict,
    Density,
    ScheduleAnalysis,
    WeekAnalysis,
    analyze_day,
    analyze_week,
)
from .checklist import ChecklistItem, DailyChecklist, carry_over, sort_items
from .daily_log import DailyLog, HabitEntry, Reflection
from .habits import Habit, habit_completion_rate

__all__ = [
    # Intervals
    "EnergyLevel",
    "Interval",
    "energy_level_at",
    "merge_intervals",
    "time_to_minutes",
    # Preferences
    "LifeArea",
    "SchedulingRules",
    "TimeBlock",
    "TimeRange",
    "UserPreferences",
    # Calendar
    "CalendarEvent",
    "EventTime",
    "TimeSlot",
    "find_free_slots",
    "group_events_by_date",
    # Analysis
    "Conflict",
    "Density",
    "ScheduleAnalysis",
    "WeekAnalysis",
    "analyze_day",
    "analyze_week",
    # Checklist
    "ChecklistItem",
    "DailyChecklist",
    "carry_over",
    "sort_items",
    # Habits & logs
    "DailyLog",
    "HabitEntry",
    "Reflection",
    "Habit",
    "habit_completion_rate",
]
