"""Habit definitions stored as a single record."""

import uuid
from collections.abc import Callable
from dataclasses import fields, replace

from .core.habits import TIMES_OF_DAY, Habit
from .errors import NotFoundError
from .ports.record_store import RecordStore

HABITS_KEY = "habits"

_EDITABLE = {f.name for f in fields(Habit)} - {"id"}


def _check_time_of_day(value: str) -> None:
    if value not in TIMES_OF_DAY:
        raise ValueError(f"Invalid time of day {value!r}; expected one of {', '.join(TIMES_OF_DAY)}")


class HabitService:
    """CRUD over the user's habits."""

    def __init__(self, store: RecordStore, new_id: Callable[[], str] = lambda: str(uuid.uuid4())):
        self.store = store
        self.new_id = new_id

    def list_habits(self) -> list[Habit]:
        """All habits; empty before any are defined."""
        return [Habit.from_dict(h) for h in self.store.read(HABITS_KEY) or []]

    def _save(self, habits: list[Habit]) -> None:
        self.store.write(HABITS_KEY, [h.to_dict() for h in habits])

    def _index_of(self, habits: list[Habit], habit_id: str) -> int:
        for i, habit in enumerate(habits):
            if habit.id == habit_id:
                return i
        raise NotFoundError(f"Habit not found: {habit_id}")

    def add_habit(
        self,
        name: str,
        weekly_target: int,
        life_area: str,
        default_duration: int,
        preferred_time_of_day: str = "any",
    ) -> Habit:
        _check_time_of_day(preferred_time_of_day)
        habits = self.list_habits()
        habit = Habit(
            id=self.new_id(),
            name=name,
            weekly_target=weekly_target,
            life_area=life_area,
            default_duration=default_duration,
            preferred_time_of_day=preferred_time_of_day,
        )
        habits.append(habit)
        self._save(habits)
        return habit

    def update_habit(self, habit_id: str, **changes) -> Habit:
        """Update fields of a habit by attribute name."""
        unknown = set(changes) - _EDITABLE
        if unknown:
            raise ValueError(f"Cannot update habit field(s): {', '.join(sorted(unknown))}")
        if "preferred_time_of_day" in changes:
            _check_time_of_day(changes["preferred_time_of_day"])

        habits = self.list_habits()
        idx = self._index_of(habits, habit_id)
        habits[idx] = replace(habits[idx], **changes)
        self._save(habits)
        return habits[idx]

    def remove_habit(self, habit_id: str) -> None:
        habits = self.list_habits()
        del habits[self._index_of(habits, habit_id)]
        self._save(habits)
