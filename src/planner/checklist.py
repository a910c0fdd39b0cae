"""Daily checklist storage with carry-over of unfinished items."""

import logging
import uuid
from collections.abc import Callable
from datetime import date, datetime, timezone

from .core.calendar import as_date
from .core.checklist import SIZE_RANK, ChecklistItem, DailyChecklist, carry_over, sort_items
from .errors import NotFoundError
from .ports.record_store import RecordStore
from .storage import get_preferences

logger = logging.getLogger(__name__)

COLLECTION = "checklists"


def _new_id() -> str:
    return str(uuid.uuid4())


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _check_size(size: str | None) -> None:
    if size is not None and size not in SIZE_RANK:
        raise ValueError(f"Invalid size {size!r}; expected one of {', '.join(SIZE_RANK)}")


class ChecklistService:
    """
    Read-modify-write operations on daily checklists.

    Every mutation re-sorts the items and rewrites the day's record. There is
    no locking: concurrent writers to the same day race, last write wins.
    """

    def __init__(
        self,
        store: RecordStore,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = _utc_now,
        new_id: Callable[[], str] = _new_id,
    ):
        self.store = store
        self.today = today
        self.now = now
        self.new_id = new_id

    def _key(self, day: str) -> str:
        return f"{COLLECTION}/{day}"

    def _load(self, day: str) -> DailyChecklist | None:
        data = self.store.read(self._key(day))
        if data is None:
            return None
        return DailyChecklist.from_dict(data)

    def _save(self, checklist: DailyChecklist) -> None:
        self.store.write(self._key(checklist.date), checklist.to_dict())

    def _area_priority(self) -> dict[str, int] | None:
        prefs = get_preferences(self.store)
        return prefs.area_priority() if prefs else None

    def _most_recent_before(self, day: str) -> DailyChecklist | None:
        earlier = [d for d in self.store.list_keys(COLLECTION) if d < day]
        if not earlier:
            return None
        return self._load(max(earlier))

    def get_checklist(self, day: str | None = None) -> DailyChecklist:
        """
        The checklist for a date (default today).

        A date seen for the first time starts with the unfinished items of the
        most recent earlier checklist, and is saved straight away. A day that
        is not an ISO date raises ValueError.
        """
        target = as_date(day).isoformat() if day else self.today().isoformat()
        priority = self._area_priority()

        existing = self._load(target)
        if existing:
            existing.items = sort_items(existing.items, priority)
            return existing

        prior = self._most_recent_before(target)
        items = carry_over(prior, self.new_id) if prior else []
        if items:
            logger.info(f"Carried {len(items)} item(s) from {prior.date} to {target}")

        checklist = DailyChecklist(date=target, items=sort_items(items, priority))
        self._save(checklist)
        return checklist

    def add_item(
        self,
        text: str,
        area: str,
        size: str | None = None,
        deadline: str | None = None,
        day: str | None = None,
    ) -> DailyChecklist:
        """Add a new open item."""
        _check_size(size)
        checklist = self.get_checklist(day)
        checklist.items.append(
            ChecklistItem(id=self.new_id(), area=area, text=text, size=size, deadline=deadline)
        )
        checklist.items = sort_items(checklist.items, self._area_priority())
        self._save(checklist)
        return checklist

    def update_item(
        self,
        item_id: str,
        text: str | None = None,
        area: str | None = None,
        size: str | None = None,
        deadline: str | None = None,
        completed: bool | None = None,
        completion_note: str | None = None,
        billable_hours: float | None = None,
        day: str | None = None,
    ) -> DailyChecklist:
        """Change the given fields of an item. Raises NotFoundError for unknown ids."""
        _check_size(size)
        checklist = self.get_checklist(day)
        item = checklist.find(item_id)
        if not item:
            raise NotFoundError(f"Checklist item not found: {item_id}")

        if text is not None:
            item.text = text
        if area is not None:
            item.area = area
        if size is not None:
            item.size = size
        if deadline is not None:
            item.deadline = deadline
        if completion_note is not None:
            item.completion_note = completion_note
        if billable_hours is not None:
            item.billable_hours = billable_hours
        if completed is not None:
            item.completed = completed
            item.completed_at = self.now().isoformat() if completed else None

        checklist.items = sort_items(checklist.items, self._area_priority())
        self._save(checklist)
        return checklist

    def remove_item(self, item_id: str, day: str | None = None) -> DailyChecklist:
        """Delete one item. Raises NotFoundError for unknown ids."""
        checklist = self.get_checklist(day)
        item = checklist.find(item_id)
        if not item:
            raise NotFoundError(f"Checklist item not found: {item_id}")
        checklist.items.remove(item)
        self._save(checklist)
        return checklist
