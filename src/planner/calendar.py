"""Calendar fetching from configured accounts or an exported events file."""

import json
import logging
from datetime import date, datetime, time, timedelta
from pathlib import Path

from .adapters.composite_calendar import CompositeCalendarAdapter
from .config import Config
from .core.calendar import CalendarEvent

logger = logging.getLogger(__name__)


def load_events_file(path: Path | str) -> list[CalendarEvent]:
    """
    Load Google-shaped events from a JSON file.

    Accepts either a list of events or an API response with an "items" list.
    """
    data = json.loads(Path(path).expanduser().read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("items", [])
    return [CalendarEvent.from_api(item) for item in data]


def fetch_range(config: Config, start_date: date, end_date: date) -> list[CalendarEvent]:
    """Fetch events from every configured account for whole days."""
    if not config.google_accounts:
        logger.warning("No calendar accounts configured")
        return []
    calendar = CompositeCalendarAdapter.from_config(config)
    time_min = datetime.combine(start_date, time(0, 0))
    time_max = datetime.combine(end_date + timedelta(days=1), time(0, 0))
    return calendar.get_events(time_min, time_max)
