"""Lightweight in-memory metrics collector."""

from __future__ import annotations

import threading
from collections import Counter
from dataclasses import dataclass
from typing import Dict


@dataclass
class MetricSnapshot:
    total_events: int
    outcomes: Dict[str, int]
    reply_sources: Dict[str, int]
    delivery_failures: int


class MetricsCollector:
    """Thread-safe counter storage for basic service metrics."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._total_events = 0
        self._outcomes: Counter[str] = Counter()
        self._sources: Counter[str] = Counter()
        self._delivery_failures = 0

    def record_turn(self, status: str, source: str | None = None, delivered: bool | None = None) -> None:
        with self._lock:
            self._total_events += 1
            self._outcomes[status] += 1
            if source:
                self._sources[source] += 1
            if delivered is False:
                self._delivery_failures += 1

    def snapshot(self) -> MetricSnapshot:
        with self._lock:
            return MetricSnapshot(
                total_events=self._total_events,
                outcomes=dict(self._outcomes),
                reply_sources=dict(self._sources),
                delivery_failures=self._delivery_failures,
            )
