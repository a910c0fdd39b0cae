"""Record storage interface."""

from typing import Any, Protocol


class RecordStore(Protocol):
    """Interface for a key-value store of JSON records.

    Keys are slash-separated, e.g. "preferences" or "checklists/2025-06-09".
    """

    def read(self, key: str) -> Any | None:
        """Read a record. Returns None if not found."""
        ...

    def write(self, key: str, data: Any) -> None:
        """Write/overwrite a record."""
        ...

    def list_keys(self, collection: str) -> list[str]:
        """Sorted record names within a collection, e.g. dates under "checklists"."""
        ...
