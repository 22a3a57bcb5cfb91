"""
Key/value persistence and TTL caching for the Game Deals engine.

Cached values are stored as ``{"savedAt": <epoch seconds>, "data": ...}``
JSON envelopes. A missing key, an unreadable store or a corrupt envelope
is always a cache miss, never an error for the caller.
"""

import json
import os
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from ..interfaces import IKeyValueStore
from ..utils.logging import get_logger

logger = get_logger("cache.store")


class MemoryStore:
    """In-process key/value store."""

    def __init__(self):
        self._data: Dict[str, str] = {}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileStore:
    """Key/value store persisted as a single JSON object on disk."""

    def __init__(self, path: str):
        """
        Initialize the store.

        Args:
            path: JSON file holding all keys; created on first write
        """
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Cache file {self.path} does not hold an object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)

    def get(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError:
            data = {}
        data[key] = value
        self._write_all(data)

    def remove(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class TTLCache:
    """Time-to-live envelopes on top of a key/value store."""

    def __init__(self, store: IKeyValueStore, clock: Callable[[], float] = time.time):
        """
        Initialize the cache.

        Args:
            store: Backing key/value store
            clock: Source of the current time in epoch seconds
        """
        self.store = store
        self.clock = clock

    def get(self, key: str, ttl_seconds: float) -> Optional[Any]:
        """Return cached data younger than ``ttl_seconds``, else None."""
        try:
            raw = self.store.get(key)
            if not raw:
                return None
            envelope = json.loads(raw)
            saved_at = float(envelope["savedAt"])
            data = envelope["data"]
        except (OSError, ValueError, TypeError, KeyError) as e:
            logger.debug("Cache read treated as miss", extra={"key": key, "error": str(e)})
            return None

        if self.clock() - saved_at >= ttl_seconds:
            return None
        return data

    def put(self, key: str, data: Any) -> None:
        """Store data stamped with the current time; write failures are logged."""
        try:
            self.store.set(key, json.dumps({"savedAt": self.clock(), "data": data}))
        except (OSError, ValueError, TypeError) as e:
            logger.warning("Cache write failed", extra={"key": key, "error": str(e)})

    def invalidate(self, key: str) -> None:
        """Remove a cached entry; failures are logged."""
        try:
            self.store.remove(key)
        except (OSError, ValueError) as e:
            logger.warning("Cache remove failed", extra={"key": key, "error": str(e)})
