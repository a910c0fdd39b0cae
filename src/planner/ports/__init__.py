"""Ports - interfaces/protocols for external dependencies."""

from .calendar_repo import CalendarRepository
from .record_store import RecordStore

__all__ = [
    "CalendarRepository",
    "RecordStore",
]
