"""Daily logs - habit check-ins and end-of-day reflection."""

from collections.abc import Callable
from dataclasses import replace
from datetime import date, datetime, timezone

from .core.calendar import as_date
from .core.daily_log import MOODS, DailyLog, HabitEntry
from .core.habits import Habit
from .ports.record_store import RecordStore

COLLECTION = "daily-logs"


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class DailyLogService:
    """Read-modify-write operations on per-day logs."""

    def __init__(
        self,
        store: RecordStore,
        today: Callable[[], date] = date.today,
        now: Callable[[], str] = _utc_now_iso,
    ):
        self.store = store
        self.today = today
        self.now = now

    def _key(self, day: str) -> str:
        return f"{COLLECTION}/{as_date(day).isoformat()}"

    def save_log(self, log: DailyLog) -> None:
        self.store.write(self._key(log.date), log.to_dict())

    def get_log(self, day: str | None = None) -> DailyLog | None:
        """The log for a date (default today), or None if not started."""
        data = self.store.read(self._key(day or self.today().isoformat()))
        if data is None:
            return None
        return DailyLog.from_dict(data)

    def create_log(self, day: str, habits: list[Habit]) -> DailyLog:
        """Start a log with one unchecked entry per habit."""
        day = as_date(day).isoformat()
        now = self.now()
        log = DailyLog(
            date=day,
            habits=[HabitEntry(habit_id=h.id, habit_name=h.name) for h in habits],
            created_at=now,
            updated_at=now,
        )
        self.save_log(log)
        return log

    def update_log(
        self,
        day: str,
        habits: list[HabitEntry] | None = None,
        reflection: dict | None = None,
        planned_highlights: list[str] | None = None,
        actual_highlights: list[str] | None = None,
        adjustments: list[str] | None = None,
    ) -> DailyLog:
        """
        Apply changes to a day's log, creating an empty one if needed.

        reflection is merged field by field (keys: notes, mood, energy_rating);
        the list fields replace what was there. A mood outside MOODS raises
        ValueError.
        """
        day = as_date(day).isoformat()
        mood = (reflection or {}).get("mood")
        if mood is not None and mood not in MOODS:
            raise ValueError(f"Invalid mood {mood!r}; expected one of {', '.join(MOODS)}")

        log = self.get_log(day)
        if log is None:
            now = self.now()
            log = DailyLog(date=day, created_at=now, updated_at=now)

        if habits is not None:
            log.habits = habits
        if reflection is not None:
            log.reflection = replace(log.reflection, **reflection)
        if planned_highlights is not None:
            log.planned_highlights = planned_highlights
        if actual_highlights is not None:
            log.actual_highlights = actual_highlights
        if adjustments is not None:
            log.adjustments = adjustments

        log.updated_at = self.now()
        self.save_log(log)
        return log

    def recent_logs(self, count: int = 7) -> list[DailyLog]:
        """The most recent logs, newest first."""
        logs = []
        for day in sorted(self.store.list_keys(COLLECTION), reverse=True)[:count]:
            log = self.get_log(day)
            if log:
                logs.append(log)
        return logs
