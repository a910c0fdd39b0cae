"""Google Calendar API adapter."""

import logging
from datetime import datetime
from pathlib import Path

from planner.core.calendar import CalendarEvent, sort_events_by_start

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/calendar.readonly"]


def _rfc3339(dt: datetime) -> str:
    """Google wants offset-aware timestamps; naive ones are taken as local time."""
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.isoformat()


class GoogleCalendarAdapter:
    """
    Fetches events from Google Calendar via the API.

    Implements CalendarRepository protocol. Uses an existing token.json in
    the account's config folder; obtaining one is outside this adapter.
    """

    def __init__(
        self,
        config_folder: str,
        label: str | None = None,
        calendars: list[str] | None = None,
        timezone: str | None = None,
    ):
        self.config_folder = config_folder
        self.label = label or Path(config_folder).name
        self.calendars = calendars
        self.timezone = timezone
        self._token_path = Path(config_folder).expanduser() / "token.json"

    def _get_credentials(self):
        """Load credentials from token.json, refreshing if needed."""
        from google.auth.transport.requests import Request
        from google.oauth2.credentials import Credentials

        if not self._token_path.exists():
            logger.warning(f"No token.json for {self.label} in {self._token_path.parent}")
            return None

        creds = Credentials.from_authorized_user_file(str(self._token_path), SCOPES)

        if creds.expired and creds.refresh_token:
            try:
                creds.refresh(Request())
                self._token_path.write_text(creds.to_json())
                self._token_path.chmod(0o600)
            except Exception as e:
                logger.warning(f"Failed to refresh token for {self.label}: {e}")
                return None

        return creds

    def _build_service(self):
        """Build a Google Calendar API service."""
        from googleapiclient.discovery import build

        creds = self._get_credentials()
        if not creds:
            return None
        return build("calendar", "v3", credentials=creds)

    def _resolve_calendar_ids(self, service) -> list[str]:
        """Resolve display name filters to calendar IDs."""
        if not self.calendars:
            return ["primary"]

        result = service.calendarList().list().execute()
        cal_map = {}
        for entry in result.get("items", []):
            cal_map[entry["summary"]] = entry["id"]

        ids = []
        for name in self.calendars:
            if name in cal_map:
                ids.append(cal_map[name])
            else:
                logger.warning(f"Calendar '{name}' not found for {self.label}")
        return ids or ["primary"]

    def get_events(self, time_min: datetime, time_max: datetime) -> list[CalendarEvent]:
        """Fetch events from the configured calendars."""
        try:
            service = self._build_service()
            if not service:
                return []
            cal_ids = self._resolve_calendar_ids(service)
            return self._fetch(service, time_min, time_max, cal_ids)
        except Exception as e:
            logger.warning(f"Google Calendar API error for {self.label}: {e}")
            return []

    def get_events_multi_calendar(
        self, time_min: datetime, time_max: datetime, calendar_ids: list[str]
    ) -> list[CalendarEvent]:
        """Fetch events from explicit calendar IDs, merged and sorted by start."""
        try:
            service = self._build_service()
            if not service:
                return []
            return self._fetch(service, time_min, time_max, calendar_ids)
        except Exception as e:
            logger.warning(f"Google Calendar API error for {self.label}: {e}")
            return []

    def _fetch(
        self, service, time_min: datetime, time_max: datetime, cal_ids: list[str]
    ) -> list[CalendarEvent]:
        events = []
        for cal_id in cal_ids:
            params = {
                "calendarId": cal_id,
                "timeMin": _rfc3339(time_min),
                "timeMax": _rfc3339(time_max),
                "singleEvents": True,
                "orderBy": "startTime",
            }
            if self.timezone:
                params["timeZone"] = self.timezone
            result = service.events().list(**params).execute()

            for item in result.get("items", []):
                if item.get("status") == "cancelled":
                    continue
                events.append(CalendarEvent.from_api(item))

        logger.debug(f"Fetched {len(events)} events for {self.label}")
        return sort_events_by_start(events)

    def list_calendars(self) -> list[tuple[str, str]]:
        """List calendars as (accessRole, summary) tuples."""
        service = self._build_service()
        if not service:
            return []

        result = service.calendarList().list().execute()
        return [
            (entry.get("accessRole", ""), entry.get("summary", ""))
            for entry in result.get("items", [])
        ]
