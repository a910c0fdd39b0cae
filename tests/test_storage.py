"""Tests for the JSON record store and preference/profile storage."""

import json

import pytest

from planner.adapters.json_store import FileRecordStore
from planner.core.preferences import SchedulingRules, TimeBlock, UserPreferences
from planner.storage import (
    deep_merge,
    get_preferences,
    get_profile,
    get_setup_status,
    mark_setup_complete,
    save_preferences,
    update_preferences,
    update_profile,
)


@pytest.fixture
def store(tmp_path):
    return FileRecordStore(tmp_path)


class TestFileRecordStore:
    def test_missing_record(self, store):
        assert store.read("nothing") is None

    def test_write_and_read(self, store, tmp_path):
        store.write("checklists/2025-06-10", {"date": "2025-06-10", "items": []})

        path = tmp_path / "checklists" / "2025-06-10.json"
        assert path.read_text().startswith("{\n    ")
        assert store.read("checklists/2025-06-10") == {"date": "2025-06-10", "items": []}

    def test_corrupt_record_reads_as_missing(self, store, tmp_path):
        (tmp_path / "preferences.json").write_text("{not json")
        assert store.read("preferences") is None

    def test_list_keys_sorted(self, store):
        for day in ["2025-06-10", "2025-06-01", "2025-06-05"]:
            store.write(f"checklists/{day}", {})
        assert store.list_keys("checklists") == ["2025-06-01", "2025-06-05", "2025-06-10"]

    def test_list_keys_missing_collection(self, store):
        assert store.list_keys("daily-logs") == []


class TestDeepMerge:
    def test_nested_dicts_merge(self):
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        assert deep_merge(base, {"a": {"y": 3}}) == {"a": {"x": 1, "y": 3}, "b": 1}

    def test_lists_replaced(self):
        assert deep_merge({"items": [1, 2]}, {"items": [3]}) == {"items": [3]}

    def test_base_untouched(self):
        base = {"a": {"x": 1}}
        deep_merge(base, {"a": {"x": 2}})
        assert base == {"a": {"x": 1}}


class TestPreferences:
    def test_absent_before_setup(self, store):
        assert get_preferences(store) is None

    def test_save_and_load(self, store):
        prefs = UserPreferences(
            scheduling_rules=SchedulingRules(
                max_meetings_per_day=4,
                protected_blocks=[TimeBlock("friday", "16:00", "18:00", "Review")],
            ),
            category_keywords=[("deep work", ["focus"]), ("admin", ["email"])],
            timezone="Europe/Berlin",
        )
        save_preferences(store, prefs)

        assert get_preferences(store) == prefs

    def test_day_names_lowercased_on_load(self, store):
        store.write(
            "preferences",
            {"schedulingRules": {"protectedBlocks": [{"day": "Monday", "start": "12:00", "end": "13:00"}]}},
        )
        assert get_preferences(store).scheduling_rules.protected_blocks[0].day == "monday"

    def test_update_merges_nested_fields(self, store):
        save_preferences(store, UserPreferences(scheduling_rules=SchedulingRules(max_meetings_per_day=4)))

        updated = update_preferences(store, {"schedulingRules": {"minBreakBetweenEvents": 5}})

        assert updated.scheduling_rules.min_break_between_events == 5
        assert updated.scheduling_rules.max_meetings_per_day == 4
        assert get_preferences(store) == updated

    def test_update_without_stored_preferences(self, store):
        updated = update_preferences(
            store,
            {"energyPatterns": {"highEnergy": [{"start": "08:00", "end": "10:00"}]}},
        )
        assert updated.energy_patterns.high_energy[0].start == "08:00"
        assert updated.scheduling_rules.max_meetings_per_day == 6

    def test_update_rejects_invalid_shape(self, store):
        with pytest.raises(KeyError):
            update_preferences(store, {"lifeAreas": [{"priority": 1}]})
        assert get_preferences(store) is None


class TestProfile:
    def test_created_on_first_update(self, store):
        profile = update_profile(store, {"name": "Sam"}, now="2025-06-10T09:00:00+00:00")

        assert profile["name"] == "Sam"
        assert profile["goals"] == []
        assert profile["createdAt"] == profile["updatedAt"] == "2025-06-10T09:00:00+00:00"
        assert get_profile(store) == profile

    def test_later_update_keeps_created_at(self, store):
        update_profile(store, {"name": "Sam"}, now="2025-06-10T09:00:00+00:00")
        profile = update_profile(
            store,
            {"planningCadence": {"dailyCheckinTime": "08:30"}},
            now="2025-06-11T09:00:00+00:00",
        )

        assert profile["createdAt"] == "2025-06-10T09:00:00+00:00"
        assert profile["updatedAt"] == "2025-06-11T09:00:00+00:00"
        assert profile["planningCadence"]["dailyCheckinTime"] == "08:30"
        assert profile["planningCadence"]["weeklyReviewTime"] == ""


class TestSetupStatus:
    def test_defaults(self, store):
        assert get_setup_status(store) == {
            "technicalSetupComplete": False,
            "personalSetupComplete": False,
        }

    def test_completed_at_stamped_when_both_done(self, store):
        mark_setup_complete(store, technical=True, now="2025-06-10T09:00:00+00:00")
        assert "completedAt" not in get_setup_status(store)

        status = mark_setup_complete(store, personal=True, now="2025-06-11T09:00:00+00:00")
        assert status["completedAt"] == "2025-06-11T09:00:00+00:00"

        again = mark_setup_complete(store, technical=True, now="2025-06-12T09:00:00+00:00")
        assert again["completedAt"] == "2025-06-11T09:00:00+00:00"

    def test_completed_at_cleared_when_undone(self, store, tmp_path):
        mark_setup_complete(store, technical=True, personal=True)
        status = mark_setup_complete(store, personal=False)

        assert "completedAt" not in status
        assert "completedAt" not in json.loads((tmp_path / "setup-status.json").read_text())
