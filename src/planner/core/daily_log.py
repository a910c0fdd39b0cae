"""Pure daily log model - no I/O dependencies."""

from dataclasses import dataclass, field

MOODS = ("great", "good", "okay", "rough", "bad")


@dataclass
class HabitEntry:
    habit_id: str
    habit_name: str
    completed: bool = False
    duration: int | None = None
    notes: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "HabitEntry":
        return cls(
            habit_id=data["habitId"],
            habit_name=data.get("habitName", ""),
            completed=bool(data.get("completed", False)),
            duration=data.get("duration"),
            notes=data.get("notes"),
        )

    def to_dict(self) -> dict:
        data = {
            "habitId": self.habit_id,
            "habitName": self.habit_name,
            "completed": self.completed,
        }
        if self.duration is not None:
            data["duration"] = self.duration
        if self.notes is not None:
            data["notes"] = self.notes
        return data


@dataclass
class Reflection:
    notes: str = ""
    mood: str | None = None
    energy_rating: int | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Reflection":
        return cls(
            notes=data.get("notes", ""),
            mood=data.get("mood"),
            energy_rating=data.get("energyRating"),
        )

    def to_dict(self) -> dict:
        data = {"notes": self.notes}
        if self.mood is not None:
            data["mood"] = self.mood
        if self.energy_rating is not None:
            data["energyRating"] = self.energy_rating
        return data


@dataclass
class DailyLog:
    """Habit check-ins and reflection for one date."""

    date: str
    habits: list[HabitEntry] = field(default_factory=list)
    reflection: Reflection = field(default_factory=Reflection)
    planned_highlights: list[str] = field(default_factory=list)
    actual_highlights: list[str] = field(default_factory=list)
    adjustments: list[str] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    def entry_for(self, habit_id: str) -> HabitEntry | None:
        return next((h for h in self.habits if h.habit_id == habit_id), None)

    @classmethod
    def from_dict(cls, data: dict) -> "DailyLog":
        return cls(
            date=data["date"],
            habits=[HabitEntry.from_dict(h) for h in data.get("habits", [])],
            reflection=Reflection.from_dict(data.get("reflection", {})),
            planned_highlights=list(data.get("plannedHighlights", [])),
            actual_highlights=list(data.get("actualHighlights", [])),
            adjustments=list(data.get("adjustments", [])),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "habits": [h.to_dict() for h in self.habits],
            "reflection": self.reflection.to_dict(),
            "plannedHighlights": list(self.planned_highlights),
            "actualHighlights": list(self.actual_highlights),
            "adjustments": list(self.adjustments),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }
