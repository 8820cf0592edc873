"""In-process cache backend for tests, scripts, and single-process deployments."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence

from cachelayer.domain.entities import KeyValue


class MemoryCache:
    """Thread-safe dict-backed ICache. No TTL and no eviction."""

    def __init__(self, data: dict[str, bytes] | None = None) -> None:
        """Initialize the cache.

        Args:
            data: Optional backing dict, shared with the caller (useful in tests).
        """
        self._data = data if data is not None else {}
        self._lock = threading.Lock()

    def store_all(self, key_values: Sequence[KeyValue]) -> None:
        with self._lock:
            for kv in key_values:
                self._data[kv.key] = kv.value

    def get(self, key: str) -> bytes | None:
        with self._lock:
            return self._data.get(key)

    def get_all(self, keys: Iterable[str]) -> dict[str, bytes]:
        """Return payloads for the keys that are present; absent keys are omitted."""
        with self._lock:
            return {key: self._data[key] for key in keys if key in self._data}

    def delete_all(self, keys: Iterable[str]) -> int:
        """Remove keys. Returns the number of keys that were present."""
        deleted = 0
        with self._lock:
            for key in keys:
                if self._data.pop(key, None) is not None:
                    deleted += 1
        return deleted

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
