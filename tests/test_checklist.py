"""Tests for checklist ordering, carry-over and the checklist service."""

import itertools
import json
from datetime import date, datetime, timezone

import pytest

from planner.adapters.json_store import FileRecordStore
from planner.checklist import ChecklistService
from planner.core.checklist import ChecklistItem, DailyChecklist, carry_over, sort_items
from planner.core.preferences import LifeArea, UserPreferences
from planner.errors import NotFoundError
from planner.storage import save_preferences


def item(id, area="work", size=None, completed=False, completed_at=None, **kwargs):
    return ChecklistItem(
        id=id,
        area=area,
        text=f"task {id}",
        size=size,
        completed=completed,
        completed_at=completed_at,
        **kwargs,
    )


def ids(items):
    return [i.id for i in items]


class TestSortItems:
    def test_incomplete_before_completed(self):
        items = [item("a", completed=True, completed_at="2025-06-10T09:00:00"), item("b")]
        assert ids(sort_items(items)) == ["b", "a"]

    def test_area_priority_then_size(self):
        priority = {"work": 1, "health": 2}
        items = [
            item("1", area="health", size="quick"),
            item("2", area="work", size="long"),
            item("3", area="work", size="quick"),
            item("4", area="hobby", size="quick"),
        ]
        assert ids(sort_items(items, priority)) == ["3", "2", "1", "4"]

    def test_missing_size_counts_as_medium(self):
        items = [item("long", size="long"), item("none"), item("quick", size="quick")]
        assert ids(sort_items(items)) == ["quick", "none", "long"]

    def test_without_priority_map_areas_tie(self):
        items = [item("a", area="zzz", size="long"), item("b", area="aaa", size="quick")]
        assert ids(sort_items(items)) == ["b", "a"]

    def test_completed_oldest_first(self):
        items = [
            item("late", completed=True, completed_at="2025-06-10T18:00:00"),
            item("early", completed=True, completed_at="2025-06-10T08:00:00"),
            item("unknown", completed=True),
        ]
        assert ids(sort_items(items)) == ["unknown", "early", "late"]

    def test_stable_for_equal_keys(self):
        items = [item(str(n), size="quick") for n in range(5)]
        assert ids(sort_items(items)) == ["0", "1", "2", "3", "4"]

    def test_does_not_mutate_input(self):
        items = [item("a", size="long"), item("b", size="quick")]
        sort_items(items)
        assert ids(items) == ["a", "b"]


class TestCarryOver:
    def test_only_incomplete_items_move(self):
        counter = itertools.count(1)
        prior = DailyChecklist(
            date="2025-06-09",
            items=[item("a"), item("b", completed=True, completed_at="2025-06-09T10:00:00")],
        )
        carried = carry_over(prior, lambda: f"new-{next(counter)}")

        assert len(carried) == 1
        assert carried[0].id == "new-1"
        assert carried[0].text == "task a"
        assert carried[0].carried_from == "2025-06-09"
        # The prior day's item is untouched
        assert prior.items[0].id == "a"
        assert prior.items[0].carried_from is None

    def test_lineage_points_at_origin_day(self):
        counter = itertools.count(1)
        new_id = lambda: f"id-{next(counter)}"
        day1 = DailyChecklist(date="2025-06-09", items=[item("x")])

        day2 = DailyChecklist(date="2025-06-10", items=carry_over(day1, new_id))
        day3 = carry_over(day2, new_id)

        assert day3[0].carried_from == "2025-06-09"
        assert day3[0].id == "id-2"

    def test_preserves_other_fields(self):
        prior = DailyChecklist(
            date="2025-06-09",
            items=[item("a", size="long", deadline="2025-06-12", completion_note="half done")],
        )
        carried = carry_over(prior, lambda: "fresh")[0]
        assert carried.size == "long"
        assert carried.deadline == "2025-06-12"
        assert carried.completion_note == "half done"


class TestChecklistSerialization:
    def test_optional_fields_omitted(self):
        assert item("a").to_dict() == {
            "id": "a",
            "area": "work",
            "text": "task a",
            "completed": False,
        }

    def test_from_dict_camel_case(self):
        loaded = ChecklistItem.from_dict(
            {
                "id": "a",
                "area": "work",
                "text": "Invoice",
                "completed": True,
                "carriedFrom": "2025-06-01",
                "completedAt": "2025-06-02T10:00:00+00:00",
                "billableHours": 1.5,
            }
        )
        assert loaded.carried_from == "2025-06-01"
        assert loaded.completed_at == "2025-06-02T10:00:00+00:00"
        assert loaded.billable_hours == 1.5


@pytest.fixture
def store(tmp_path):
    return FileRecordStore(tmp_path)


@pytest.fixture
def service(store):
    counter = itertools.count(1)
    return ChecklistService(
        store,
        today=lambda: date(2025, 6, 10),
        now=lambda: datetime(2025, 6, 10, 15, 30, tzinfo=timezone.utc),
        new_id=lambda: f"item-{next(counter)}",
    )


class TestChecklistService:
    def test_new_day_is_empty_and_saved(self, service, tmp_path):
        checklist = service.get_checklist()

        assert checklist.date == "2025-06-10"
        assert checklist.items == []
        assert (tmp_path / "checklists" / "2025-06-10.json").exists()

    def test_add_item(self, service, tmp_path):
        service.add_item("Write report", "work", size="long", deadline="2025-06-12")

        saved = json.loads((tmp_path / "checklists" / "2025-06-10.json").read_text())
        assert saved["items"] == [
            {
                "id": "item-1",
                "area": "work",
                "text": "Write report",
                "completed": False,
                "size": "long",
                "deadline": "2025-06-12",
            }
        ]

    def test_add_item_rejects_unknown_size(self, service):
        with pytest.raises(ValueError):
            service.add_item("Something", "work", size="huge")

    def test_complete_and_undo(self, service):
        service.add_item("Email", "work", size="quick")

        done = service.update_item("item-1", completed=True, completion_note="sent")
        assert done.items[0].completed is True
        assert done.items[0].completed_at == "2025-06-10T15:30:00+00:00"
        assert done.items[0].completion_note == "sent"

        undone = service.update_item("item-1", completed=False)
        assert undone.items[0].completed is False
        assert undone.items[0].completed_at is None

    def test_update_unknown_item(self, service):
        with pytest.raises(NotFoundError):
            service.update_item("missing", text="x")

    def test_remove_item(self, service):
        service.add_item("One", "work")
        service.add_item("Two", "work")

        checklist = service.remove_item("item-1")
        assert ids(checklist.items) == ["item-2"]
        assert ids(service.get_checklist().items) == ["item-2"]

    def test_remove_unknown_item(self, service):
        with pytest.raises(NotFoundError):
            service.remove_item("missing")

    def test_carry_over_from_most_recent_day(self, service):
        service.add_item("Old open", "work", day="2025-06-05")
        # 06-08 starts with "Old open" carried in as item-2
        service.add_item("Recent open", "work", day="2025-06-08")
        service.add_item("Recent done", "work", day="2025-06-08")
        service.update_item("item-4", completed=True, day="2025-06-08")

        checklist = service.get_checklist("2025-06-10")

        assert [i.text for i in checklist.items] == ["Old open", "Recent open"]
        assert [i.carried_from for i in checklist.items] == ["2025-06-05", "2025-06-08"]
        assert ids(checklist.items) == ["item-5", "item-6"]

    def test_carry_over_happens_once(self, service):
        service.add_item("Open", "work", day="2025-06-09")

        first = service.get_checklist("2025-06-10")
        second = service.get_checklist("2025-06-10")
        assert ids(first.items) == ids(second.items)

    def test_later_days_are_not_a_source(self, service):
        service.add_item("Future", "work", day="2025-06-20")
        assert service.get_checklist("2025-06-10").items == []

    def test_day_must_be_an_iso_date(self, service, tmp_path):
        with pytest.raises(ValueError):
            service.add_item("Escape", "work", day="../outside")
        assert not (tmp_path / "outside.json").exists()
        assert service.get_checklist("2025-06-10").date == "2025-06-10"

    def test_sorted_by_stored_area_priority(self, service, store):
        save_preferences(
            store,
            UserPreferences(life_areas=[LifeArea("health", 3, 1), LifeArea("work", 10, 2)]),
        )
        service.add_item("Report", "work", size="quick")
        service.add_item("Run", "health", size="long")

        assert [i.text for i in service.get_checklist().items] == ["Run", "Report"]
