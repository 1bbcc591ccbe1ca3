"""Fallback strategy abstract base class."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .types import ReplyContext


class FallbackStrategy(ABC):
    """Chooses a deterministic follow-up question when no generated reply is usable."""

    @abstractmethod
    def choose(self, context: ReplyContext) -> str:
        """Return a non-empty question for the sender."""

    @abstractmethod
    def describe(self) -> str:
        """Human-readable summary of the strategy."""
