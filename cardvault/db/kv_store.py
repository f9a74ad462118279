"""
Key-value persistence contract for the game core.

The core only needs synchronous get/set/remove of JSON-serializable values
by string key. How those values are backed is up to the caller:

- InMemoryStore: process-local dict, used by tests and simulations
- SnapshotStore: a player's keys loaded from the database, with change
  tracking so only touched keys are written back
"""

import copy
import json
from typing import Any, Protocol


class KeyValueStore(Protocol):
    """Durable get/set/remove by string key."""

    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...

    def remove(self, key: str) -> None: ...


class InMemoryStore:
    """
    Dict-backed store.

    Values are deep-copied on the way in and out so callers never share
    mutable state with the store, mirroring a serializing backend.
    Non-JSON values are rejected at write time.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = {}
        for key, value in (data or {}).items():
            self._write(key, value)

    def get(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value: Any) -> None:
        self._write(key, value)

    def _write(self, key: str, value: Any) -> None:
        # Raises TypeError for values that cannot be persisted as JSON
        json.dumps(value)
        self._data[key] = copy.deepcopy(value)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class SnapshotStore(InMemoryStore):
    """
    In-memory view of a player's persisted keys.

    Tracks which keys were written or removed since load so the database
    layer can flush only the changes.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        super().__init__(data)
        self.dirty: set[str] = set()
        self.removed: set[str] = set()

    def set(self, key: str, value: Any) -> None:
        super().set(key, value)
        self.dirty.add(key)
        self.removed.discard(key)

    def remove(self, key: str) -> None:
        super().remove(key)
        self.removed.add(key)
        self.dirty.discard(key)

    def has_changes(self) -> bool:
        return bool(self.dirty or self.removed)

    def mark_clean(self) -> None:
        self.dirty.clear()
        self.removed.clear()
