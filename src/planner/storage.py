"""Preferences, profile and setup status on top of the record store."""

import logging
from datetime import datetime, timezone
from typing import Any

from .core.preferences import UserPreferences
from .ports.record_store import RecordStore

logger = logging.getLogger(__name__)

PREFERENCES_KEY = "preferences"
PROFILE_KEY = "profile"
SETUP_STATUS_KEY = "setup-status"

DEFAULT_PROFILE = {
    "name": "",
    "bio": "",
    "goals": [],
    "planningCadence": {
        "weeklyPlanningTime": "",
        "dailyCheckinTime": "",
        "weeklyReviewTime": "",
    },
    "notes": "",
}


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def deep_merge(base: dict, changes: dict) -> dict:
    """
    Merge changes into a copy of base.

    Nested dicts merge key by key; lists and scalars are replaced wholesale.
    """
    merged = dict(base)
    for key, value in changes.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


# ============== Preferences ==============


def get_preferences(store: RecordStore) -> UserPreferences | None:
    """Stored preferences, or None before first-run setup."""
    data = store.read(PREFERENCES_KEY)
    if data is None:
        return None
    return UserPreferences.from_dict(data)


def save_preferences(store: RecordStore, preferences: UserPreferences) -> None:
    store.write(PREFERENCES_KEY, preferences.to_dict())


def update_preferences(store: RecordStore, changes: dict[str, Any]) -> UserPreferences:
    """Deep-merge changes (JSON shape) into the stored preferences and save."""
    current = store.read(PREFERENCES_KEY) or UserPreferences().to_dict()
    # Validate before writing anything
    updated = UserPreferences.from_dict(deep_merge(current, changes))
    save_preferences(store, updated)
    logger.info(f"Updated preferences: {', '.join(changes) or 'no changes'}")
    return updated


# ============== Profile & setup ==============


def get_profile(store: RecordStore) -> dict | None:
    return store.read(PROFILE_KEY)


def update_profile(store: RecordStore, changes: dict[str, Any], now: str | None = None) -> dict:
    """Deep-merge changes into the profile, creating it on first use."""
    now = now or _now_iso()
    current = store.read(PROFILE_KEY)
    if current is None:
        current = {**DEFAULT_PROFILE, "createdAt": now}
    profile = deep_merge(current, changes)
    profile["updatedAt"] = now
    store.write(PROFILE_KEY, profile)
    return profile


def get_setup_status(store: RecordStore) -> dict:
    """Setup flags; everything is incomplete until recorded otherwise."""
    data = store.read(SETUP_STATUS_KEY) or {}
    return {
        "technicalSetupComplete": bool(data.get("technicalSetupComplete", False)),
        "personalSetupComplete": bool(data.get("personalSetupComplete", False)),
        **({"completedAt": data["completedAt"]} if data.get("completedAt") else {}),
    }


def mark_setup_complete(
    store: RecordStore,
    technical: bool | None = None,
    personal: bool | None = None,
    now: str | None = None,
) -> dict:
    """Record setup progress. completedAt is stamped once both parts are done."""
    status = get_setup_status(store)
    if technical is not None:
        status["technicalSetupComplete"] = technical
    if personal is not None:
        status["personalSetupComplete"] = personal

    if status["technicalSetupComplete"] and status["personalSetupComplete"]:
        status.setdefault("completedAt", now or _now_iso())
    else:
        status.pop("completedAt", None)

    store.write(SETUP_STATUS_KEY, status)
    return status
