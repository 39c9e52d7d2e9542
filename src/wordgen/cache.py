from __future__ import annotations

import json
import logging
import threading
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Sequence, Tuple

logger = logging.getLogger(__name__)


class CacheStore(ABC):
    """Key/value store with per-entry TTL shared across requests."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the stored value, or None when missing or expired."""
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        """Store a JSON-serializable value for ttl_seconds."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        raise NotImplementedError

    def multi_get(self, keys: Sequence[str]) -> List[Any | None]:
        """Return values for keys in order; missing entries are None."""
        return [self.get(key) for key in keys]


class InMemoryCache(CacheStore):
    """
    Process-local TTL cache.

    Values are stored serialized so callers always receive a fresh copy and
    cannot mutate a cached entry. When ``max_entries`` is reached the entry
    closest to expiry is evicted.
    """

    def __init__(
        self,
        max_entries: int = 100_000,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._max_entries = max(1, max_entries)
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: Dict[str, Tuple[float, str]] = {}

    def __len__(self) -> int:
        with self._lock:
            self._purge_expired(self._clock())
            return len(self._entries)

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, payload = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
        return json.loads(payload)

    def multi_get(self, keys: Sequence[str]) -> List[Any | None]:
        now = self._clock()
        payloads: List[str | None] = []
        with self._lock:
            for key in keys:
                entry = self._entries.get(key)
                if entry is None or entry[0] <= now:
                    payloads.append(None)
                else:
                    payloads.append(entry[1])
        return [json.loads(p) if p is not None else None for p in payloads]

    def set(self, key: str, value: Any, ttl_seconds: int) -> None:
        payload = json.dumps(value, sort_keys=True)
        with self._lock:
            now = self._clock()
            if key not in self._entries and len(self._entries) >= self._max_entries:
                self._purge_expired(now)
                if len(self._entries) >= self._max_entries:
                    soonest = min(self._entries, key=lambda k: self._entries[k][0])
                    del self._entries[soonest]
                    logger.debug("Cache full; evicted %s", soonest)
            self._entries[key] = (now + ttl_seconds, payload)

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def _purge_expired(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]
