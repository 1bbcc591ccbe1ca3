"""Dataclasses representing inbound events, conversation turns and lead state."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Literal

Role = Literal["user", "assistant"]


@dataclass(slots=True)
class InboundEvent:
    """Normalised inbound chat message handed to the engine."""

    sender_id: str | None
    event_id: str | None = None
    timestamp: str | None = None
    text: str | None = None


@dataclass(slots=True)
class MessageTurn:
    """Single conversational turn kept in memory."""

    role: Role
    content: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_message(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(slots=True)
class LeadState:
    """Structured lead slots collected from free text across turns."""

    service: str | None = None
    timeline: str | None = None
    budget: str | None = None
    brand_name: str | None = None
    style: str | None = None
    contact_name: str | None = None
    contact_channel: str | None = None
    references: str | None = None

    def as_dict(self) -> dict[str, str | None]:
        return asdict(self)

    def filled(self) -> dict[str, str]:
        return {name: value for name, value in self.as_dict().items() if value}

    def is_empty(self) -> bool:
        return not self.filled()
