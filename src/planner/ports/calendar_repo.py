"""Calendar repository interface."""

from datetime import datetime
from typing import Protocol

from planner.core.calendar import CalendarEvent


class CalendarRepository(Protocol):
    """Interface for fetching calendar events from any backend."""

    def get_events(self, time_min: datetime, time_max: datetime) -> list[CalendarEvent]:
        """Fetch events between two instants."""
        ...

    def get_events_multi_calendar(
        self, time_min: datetime, time_max: datetime, calendar_ids: list[str]
    ) -> list[CalendarEvent]:
        """Fetch events from several calendars, merged and sorted by start."""
        ...
