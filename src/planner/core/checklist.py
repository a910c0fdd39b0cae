"""Pure checklist logic - ordering and day-to-day carry-over."""

from collections.abc import Callable
from dataclasses import dataclass, field, replace

SIZE_RANK = {"quick": 1, "medium": 2, "long": 3}
DEFAULT_SIZE = "medium"

# Areas missing from the priority map sort after every known area
UNLISTED_AREA_PRIORITY = 999


@dataclass
class ChecklistItem:
    """A single task on a day's checklist."""

    id: str
    area: str
    text: str
    completed: bool = False
    size: str | None = None
    deadline: str | None = None
    carried_from: str | None = None
    completed_at: str | None = None
    completion_note: str | None = None
    billable_hours: float | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "ChecklistItem":
        return cls(
            id=data["id"],
            area=data.get("area", ""),
            text=data.get("text", ""),
            completed=bool(data.get("completed", False)),
            size=data.get("size"),
            deadline=data.get("deadline"),
            carried_from=data.get("carriedFrom"),
            completed_at=data.get("completedAt"),
            completion_note=data.get("completionNote"),
            billable_hours=data.get("billableHours"),
        )

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "area": self.area,
            "text": self.text,
            "completed": self.completed,
        }
        optional = {
            "size": self.size,
            "deadline": self.deadline,
            "carriedFrom": self.carried_from,
            "completedAt": self.completed_at,
            "completionNote": self.completion_note,
            "billableHours": self.billable_hours,
        }
        data.update({k: v for k, v in optional.items() if v is not None})
        return data


@dataclass
class DailyChecklist:
    """All checklist items for one date."""

    date: str
    items: list[ChecklistItem] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "DailyChecklist":
        return cls(
            date=data["date"],
            items=[ChecklistItem.from_dict(i) for i in data.get("items", [])],
        )

    def to_dict(self) -> dict:
        return {"date": self.date, "items": [i.to_dict() for i in self.items]}

    def find(self, item_id: str) -> ChecklistItem | None:
        return next((i for i in self.items if i.id == item_id), None)


def sort_items(
    items: list[ChecklistItem],
    area_priority: dict[str, int] | None = None,
) -> list[ChecklistItem]:
    """
    Incomplete items first, by area priority then size; completed items last,
    oldest completion first.

    Pure function - returns a new list. Stable for equal keys.
    """

    def open_key(item: ChecklistItem) -> tuple[int, int]:
        area = area_priority.get(item.area, UNLISTED_AREA_PRIORITY) if area_priority else 0
        size = SIZE_RANK.get(item.size or DEFAULT_SIZE, SIZE_RANK[DEFAULT_SIZE])
        return (area, size)

    incomplete = sorted((i for i in items if not i.completed), key=open_key)
    completed = sorted((i for i in items if i.completed), key=lambda i: i.completed_at or "")
    return incomplete + completed


def carry_over(prior: DailyChecklist, new_id: Callable[[], str]) -> list[ChecklistItem]:
    """
    Copy the incomplete items of a prior checklist forward.

    Each copy gets a fresh id. carried_from keeps the first day the task
    appeared, so multi-day chains point at their origin.
    """
    return [
        replace(item, id=new_id(), carried_from=item.carried_from or prior.date)
        for item in prior.items
        if not item.completed
    ]
