"""Interfaces for the outbound collaborators: completion service and message delivery."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from leadbot.planner.types import GenerationRequest


@dataclass(slots=True)
class DeliveryResult:
    """Outcome of handing one message to the messaging platform."""

    ok: bool
    status_code: int | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    error: str | None = None


class GenerationClient(ABC):
    """Produces a free-text or structured reply for a lead conversation."""

    name: str

    @abstractmethod
    async def generate(self, request: GenerationRequest) -> Any:
        """Return the raw completion result; raise ``GenerationError`` on failure."""

    def describe(self) -> str:
        return self.__doc__ or self.name


class DeliveryClient(ABC):
    """Sends reply text to a sender."""

    name: str

    @abstractmethod
    async def send(self, to: str, text: str) -> DeliveryResult:
        """Deliver ``text`` to ``to`` and report the outcome."""

    def describe(self) -> str:
        return self.__doc__ or self.name
