"""Adapters - I/O implementations of ports."""

from .json_store import FileRecordStore
from .google_calendar import GoogleCalendarAdapter
from .composite_calendar import CompositeCalendarAdapter

__all__ = [
    "FileRecordStore",
    "GoogleCalendarAdapter",
    "CompositeCalendarAdapter",
]
