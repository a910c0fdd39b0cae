"""Pure habit logic - no I/O dependencies."""

import math
from dataclasses import dataclass

from .daily_log import DailyLog

TIMES_OF_DAY = ("morning", "afternoon", "evening", "any")


@dataclass
class Habit:
    """A recurring habit with a weekly target."""

    id: str
    name: str
    weekly_target: int
    life_area: str
    default_duration: int
    preferred_time_of_day: str = "any"

    @classmethod
    def from_dict(cls, data: dict) -> "Habit":
        return cls(
            id=data["id"],
            name=data["name"],
            weekly_target=data.get("weeklyTarget", 0),
            life_area=data.get("lifeArea", ""),
            default_duration=data.get("defaultDuration", 0),
            preferred_time_of_day=data.get("preferredTimeOfDay", "any"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "weeklyTarget": self.weekly_target,
            "lifeArea": self.life_area,
            "defaultDuration": self.default_duration,
            "preferredTimeOfDay": self.preferred_time_of_day,
        }


@dataclass
class CompletionRate:
    completed: int
    total: int
    rate: int  # percent


def habit_completion_rate(habit_id: str, logs: list[DailyLog]) -> CompletionRate:
    """
    How often a habit was completed across the logs that track it.

    Logs without an entry for the habit don't count towards the total.
    """
    completed = 0
    total = 0
    for log in logs:
        entry = log.entry_for(habit_id)
        if entry:
            total += 1
            if entry.completed:
                completed += 1

    rate = math.floor(completed / total * 100 + 0.5) if total else 0
    return CompletionRate(completed=completed, total=total, rate=rate)
