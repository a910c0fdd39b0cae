"""File-based JSON record store adapter."""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class FileRecordStore:
    """
    File-based record storage.

    Implements RecordStore protocol. Each record is a pretty-printed JSON
    file; collections are subdirectories.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir).expanduser()

    def _path_for_key(self, key: str) -> Path:
        return self.data_dir / f"{key}.json"

    def read(self, key: str) -> Any | None:
        """Read a record. Missing or corrupt records read as None."""
        path = self._path_for_key(key)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning(f"Ignoring unreadable record {path}: {e}")
            return None

    def write(self, key: str, data: Any) -> None:
        """Write/overwrite a record."""
        path = self._path_for_key(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=4) + "\n", encoding="utf-8")
        logger.debug(f"Wrote {path}")

    def list_keys(self, collection: str) -> list[str]:
        """Sorted record names in a collection directory."""
        directory = self.data_dir / collection
        if not directory.is_dir():
            return []
        return sorted(path.stem for path in directory.glob("*.json"))
