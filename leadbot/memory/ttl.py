"""Keyed in-memory map whose entries expire after a period of inactivity.

Expiry is lazy: every read or write first prunes entries whose last touch is
older than the TTL, and a lookup never returns an expired entry even if it is
still physically present. There is no size-based eviction and no background
timer.
"""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from typing import Callable, Generic, Iterator, TypeVar

V = TypeVar("V")

Clock = Callable[[], float]


@dataclass(slots=True)
class TTLEntry(Generic[V]):
    value: V
    last_touch: float


class TTLStore(Generic[V]):
    """Thread-safe TTL map keyed by string."""

    def __init__(self, ttl_seconds: float, clock: Clock = time.monotonic) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, TTLEntry[V]] = {}
        self.lock = threading.RLock()

    def now(self) -> float:
        return self._clock()

    def _expired(self, entry: TTLEntry[V], now: float) -> bool:
        return now - entry.last_touch > self.ttl_seconds

    def prune(self, now: float | None = None) -> int:
        """Drop every expired entry and return how many were removed."""

        now = self.now() if now is None else now
        with self.lock:
            expired = [key for key, entry in self._entries.items() if self._expired(entry, now)]
            for key in expired:
                del self._entries[key]
        return len(expired)

    def get(self, key: str, *, touch: bool = False) -> V | None:
        now = self.now()
        with self.lock:
            self.prune(now)
            entry = self._entries.get(key)
            if entry is None or self._expired(entry, now):
                return None
            if touch:
                entry.last_touch = now
            return entry.value

    def put(self, key: str, value: V) -> None:
        now = self.now()
        with self.lock:
            self.prune(now)
            self._entries[key] = TTLEntry(value=value, last_touch=now)

    def touch(self, key: str) -> bool:
        """Refresh the timestamp of a live entry; return False if it is absent."""

        now = self.now()
        with self.lock:
            self.prune(now)
            entry = self._entries.get(key)
            if entry is None:
                return False
            entry.last_touch = now
            return True

    def delete(self, key: str) -> bool:
        with self.lock:
            return self._entries.pop(key, None) is not None

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.get(key) is not None

    def __len__(self) -> int:
        with self.lock:
            self.prune()
            return len(self._entries)

    def keys(self) -> list[str]:
        with self.lock:
            self.prune()
            return list(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())
