"""Pure calendar domain logic - no I/O dependencies."""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo

from .intervals import EnergyLevel, Interval, energy_level_at, merge_intervals, time_to_minutes
from .preferences import UserPreferences

# Free-slot analysis window, local hours
DAY_START_HOUR = 7
DAY_END_HOUR = 21

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class EventTime:
    """Start or end marker of an event: a timestamp, or a date for all-day events."""

    date_time: str | None = None
    date: str | None = None

    @classmethod
    def from_api(cls, data: dict | None) -> "EventTime | None":
        if not isinstance(data, dict) or not data:
            return None
        return cls(date_time=data.get("dateTime"), date=data.get("date"))

    def to_dict(self) -> dict:
        data = {}
        if self.date_time:
            data["dateTime"] = self.date_time
        if self.date:
            data["date"] = self.date
        return data

    def parse(self) -> datetime | None:
        """The marker as a datetime, or None if missing or unparsable."""
        raw = self.date_time or self.date
        if not raw or not isinstance(raw, str):
            return None
        try:
            return datetime.fromisoformat(raw)
        except ValueError:
            return None


@dataclass
class CalendarEvent:
    """
    A calendar event as supplied by a calendar backend.

    Read-only to the analysis engine. Missing or corrupt start/end markers
    degrade to the epoch instant so one bad record cannot abort a day.
    """

    id: str | None = None
    title: str | None = None
    description: str | None = None
    start: EventTime | None = None
    end: EventTime | None = None

    @classmethod
    def from_api(cls, data: dict) -> "CalendarEvent":
        """Create an event from a Google Calendar-shaped dict."""
        return cls(
            id=data.get("id"),
            title=data.get("summary"),
            description=data.get("description"),
            start=EventTime.from_api(data.get("start")),
            end=EventTime.from_api(data.get("end")),
        )

    def to_dict(self) -> dict:
        data = {}
        if self.id:
            data["id"] = self.id
        if self.title is not None:
            data["summary"] = self.title
        if self.description is not None:
            data["description"] = self.description
        data["start"] = self.start.to_dict() if self.start else None
        data["end"] = self.end.to_dict() if self.end else None
        return data

    @property
    def all_day(self) -> bool:
        return bool(self.start and self.start.date and not self.start.date_time)

    def start_time(self, tz: tzinfo | None = None) -> datetime:
        """Wall-clock start in the analysis zone (None = process local zone)."""
        return _marker_wall_time(self.start, tz)

    def end_time(self, tz: tzinfo | None = None) -> datetime:
        """Wall-clock end in the analysis zone (None = process local zone)."""
        return _marker_wall_time(self.end, tz)

    def duration_minutes(self, tz: tzinfo | None = None) -> float:
        return (self.end_time(tz) - self.start_time(tz)).total_seconds() / 60


@dataclass(frozen=True)
class TimeSlot:
    """A free time slot within the analysis window."""

    start: datetime
    end: datetime
    duration: float
    energy_level: EnergyLevel

    def format(self) -> str:
        return (
            f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')} "
            f"({self.duration:g} min, {self.energy_level.value} energy)"
        )

    def to_dict(self) -> dict:
        return {
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "duration": self.duration,
            "energyLevel": self.energy_level.value,
        }


def to_wall_time(dt: datetime, tz: tzinfo | None = None) -> datetime:
    """
    Naive wall-clock time of dt in zone tz.

    Naive datetimes are already wall-clock times and pass through unchanged.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz).replace(tzinfo=None)


def _marker_wall_time(marker: EventTime | None, tz: tzinfo | None) -> datetime:
    parsed = marker.parse() if marker else None
    try:
        return to_wall_time(parsed or EPOCH, tz)
    except OverflowError:
        # Offsets can push timestamps near year 1 or 9999 out of range
        return to_wall_time(EPOCH, tz)


def _localize(wall: datetime, tz: tzinfo | None) -> datetime:
    if tz is None:
        return wall.astimezone()
    return wall.replace(tzinfo=tz)


def as_date(value: date | str) -> date:
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value


def weekday_name(d: date) -> str:
    """Lowercase English weekday name, independent of locale."""
    return WEEKDAYS[d.weekday()]


def minute_of_day(dt: datetime) -> int:
    return dt.hour * 60 + dt.minute


def sort_events_by_start(events: list[CalendarEvent], tz: tzinfo | None = None) -> list[CalendarEvent]:
    """Sort events by start time."""
    return sorted(events, key=lambda e: e.start_time(tz))


def group_events_by_date(
    events: list[CalendarEvent],
    start_date: date,
    end_date: date,
    tz: tzinfo | None = None,
) -> dict[str, list[CalendarEvent]]:
    """
    Bucket events by their start date, one entry per day in the range.

    Pure function - no I/O. Days are inserted in calendar order.
    """
    days: dict[str, list[CalendarEvent]] = {}
    d = start_date
    while d <= end_date:
        days[d.isoformat()] = []
        d += timedelta(days=1)

    for event in events:
        key = event.start_time(tz).date().isoformat()
        if key in days:
            days[key].append(event)
    return days


def find_free_slots(
    events: list[CalendarEvent],
    preferences: UserPreferences,
    day: date | str,
    min_duration: float = 30,
    energy_filter: EnergyLevel | str | None = None,
) -> list[TimeSlot]:
    """
    Find free time slots between 07:00 and 21:00 on a given day.

    Pure function - no I/O.

    Args:
        events: Calendar events; anything outside the window is ignored
        preferences: Energy patterns, protected blocks and analysis zone
        day: Date to find slots for
        min_duration: Minimum slot duration in minutes
        energy_filter: Keep only slots whose starting energy level matches

    Returns:
        List of free TimeSlots in chronological order
    """
    d = as_date(day)
    tz = preferences.zone()
    wanted = EnergyLevel(energy_filter) if energy_filter is not None else None

    midnight = datetime.combine(d, time(0, 0))
    window_start = datetime.combine(d, time(DAY_START_HOUR, 0))
    window_end = datetime.combine(d, time(DAY_END_HOUR, 0))

    busy = []
    for event in events:
        start, end = event.start_time(tz), event.end_time(tz)
        # Clamp to the window, skipping events entirely outside it
        if end > window_start and start < window_end:
            busy.append(Interval(max(start, window_start), min(end, window_end)))

    day_name = weekday_name(d)
    for block in preferences.scheduling_rules.protected_blocks:
        if block.day.lower() != day_name:
            continue
        start = midnight + timedelta(minutes=time_to_minutes(block.start))
        end = midnight + timedelta(minutes=time_to_minutes(block.end))
        if end > window_start and start < window_end:
            busy.append(Interval(max(start, window_start), min(end, window_end)))

    slots = []
    cursor = window_start
    # Sentinel at window end closes the trailing gap
    for period in merge_intervals(busy) + [Interval(window_end, window_end)]:
        if period.start > cursor:
            duration = (period.start - cursor).total_seconds() / 60
            energy = energy_level_at(minute_of_day(cursor), preferences)
            if duration >= min_duration and (wanted is None or energy == wanted):
                slots.append(
                    TimeSlot(
                        start=_localize(cursor, tz),
                        end=_localize(period.start, tz),
                        duration=duration,
                        energy_level=energy,
                    )
                )
        cursor = max(cursor, period.end)

    return slots
