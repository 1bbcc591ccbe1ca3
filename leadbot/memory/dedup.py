"""Idempotency checks for webhook deliveries retried by the platform."""

from __future__ import annotations

import logging
import threading
import time

from .ttl import Clock, TTLStore

logger = logging.getLogger("leadbot.dedup")


def composite_key(sender_id: str, timestamp: str | int | None, text: str | None) -> str:
    """Fingerprint an inbound message as ``sender:timestamp:text``."""

    return f"{sender_id}:{'' if timestamp is None else timestamp}:{text or ''}"


class DedupGuard:
    """Remember event ids and content fingerprints for a short window.

    The two checks are independent: the id store catches retransmission of
    the same event, the composite store catches events whose id is missing
    or reused.
    """

    def __init__(self, ttl_seconds: float = 5 * 60, clock: Clock = time.monotonic) -> None:
        self.event_ids: TTLStore[float] = TTLStore(ttl_seconds, clock)
        self.composite_keys: TTLStore[float] = TTLStore(ttl_seconds, clock)
        self._lock = threading.Lock()

    def is_duplicate(self, event_id: str | None, key: str | None) -> bool:
        """Return True if either key was already admitted; otherwise admit both."""

        with self._lock:
            if event_id and event_id in self.event_ids:
                logger.info("DUPLICATE MESSAGE ignored event_id=%s", event_id)
                return True
            if key and key in self.composite_keys:
                logger.info("DUPLICATE KEY ignored key=%s", key)
                return True

            now = self.event_ids.now()
            if event_id:
                self.event_ids.put(event_id, now)
            if key:
                self.composite_keys.put(key, now)
            return False

    def prune(self) -> None:
        self.event_ids.prune()
        self.composite_keys.prune()
