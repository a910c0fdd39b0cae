"""Composite calendar adapter - combines multiple calendar sources."""

from datetime import datetime

from planner.config import Config
from planner.core.calendar import CalendarEvent, sort_events_by_start
from planner.ports.calendar_repo import CalendarRepository

from .google_calendar import GoogleCalendarAdapter


class CompositeCalendarAdapter:
    """
    Composite calendar adapter that merges several calendar sources.

    Implements CalendarRepository protocol.
    """

    def __init__(self, sources: list[CalendarRepository]):
        self.sources = sources

    @classmethod
    def from_config(cls, config: Config) -> "CompositeCalendarAdapter":
        """One Google adapter per configured account."""
        return cls(
            [
                GoogleCalendarAdapter(
                    config_folder=account.config_folder,
                    label=account.label,
                    calendars=account.calendars or None,
                    timezone=config.timezone or None,
                )
                for account in config.google_accounts
            ]
        )

    def get_events(self, time_min: datetime, time_max: datetime) -> list[CalendarEvent]:
        """Fetch events from all sources, sorted by start."""
        events = []
        for source in self.sources:
            events.extend(source.get_events(time_min, time_max))
        return sort_events_by_start(events)

    def get_events_multi_calendar(
        self, time_min: datetime, time_max: datetime, calendar_ids: list[str]
    ) -> list[CalendarEvent]:
        """Fetch the given calendars from every source, sorted by start."""
        events = []
        for source in self.sources:
            events.extend(source.get_events_multi_calendar(time_min, time_max, calendar_ids))
        return sort_events_by_start(events)
