"""Configuration management for planner."""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

PLANNER_HOME = Path(os.environ.get("PLANNER_HOME", Path.home() / "planner"))
CONFIG_FILE = PLANNER_HOME / "config" / "planner.conf"
DATA_DIR = PLANNER_HOME / "data"


@dataclass
class GoogleAccount:
    """A Google Calendar account configuration."""

    config_folder: str
    label: str | None = None
    calendars: list[str] = field(default_factory=list)


@dataclass
class Config:
    """Planner configuration.

    Only wiring lives here. Analysis behaviour comes from the stored
    user preferences.
    """

    data_dir: str = ""
    timezone: str = ""
    google_accounts: list[GoogleAccount] = field(default_factory=list)

    def resolve_data_dir(self) -> Path:
        if self.data_dir:
            return Path(self.data_dir).expanduser()
        return DATA_DIR


def _unquote(value: str) -> str:
    """Strip quotes, or an inline comment from an unquoted value."""
    if value[:1] in ('"', "'"):
        quote = value[0]
        end_quote = value.find(quote, 1)
        return value[1:end_quote] if end_quote != -1 else value[1:]
    if "#" in value:
        return value.split("#")[0].strip()
    return value


def _parse_accounts(value: str) -> list[GoogleAccount]:
    # JSON format: [{"config_folder": "...", "label": "...", "calendars": [...]}]
    # Simple format: "path1:label1,path2:label2"
    accounts = []
    if value.startswith("["):
        try:
            for item in json.loads(value):
                accounts.append(
                    GoogleAccount(
                        config_folder=item["config_folder"],
                        label=item.get("label"),
                        calendars=item.get("calendars", []),
                    )
                )
        except (json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning(f"Failed to parse GOOGLE_ACCOUNTS JSON: {e}")
        return accounts

    for entry in value.split(","):
        entry = entry.strip()
        if not entry:
            continue
        if ":" in entry:
            folder, label = entry.split(":", 1)
            accounts.append(GoogleAccount(folder.strip(), label.strip()))
        else:
            accounts.append(GoogleAccount(entry))
    return accounts


def load_config(path: Path | None = None) -> Config:
    """Load configuration from planner.conf file."""
    config = Config()
    path = path or CONFIG_FILE

    if not path.exists():
        return config

    for line in path.read_text().splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, _, value = line.partition("=")
        key = key.strip().lower()
        value = value.strip()
        # JSON values keep their quotes
        if not value.startswith("["):
            value = _unquote(value)

        match key:
            case "data_dir":
                config.data_dir = value
            case "timezone":
                config.timezone = value
            case "google_accounts":
                config.google_accounts = _parse_accounts(value)
            case _:
                logger.debug(f"Ignoring unknown config key: {key}")

    return config
