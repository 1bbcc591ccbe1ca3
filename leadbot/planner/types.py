"""Planner-related enums and data structures."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from leadbot.memory.models import LeadState, MessageTurn


class ReplySource(str, Enum):
    """Where an outbound reply came from."""

    QUICK_RULE = "quick_rule"
    GENERATED = "generated"
    FALLBACK = "fallback"


class QuickIntent(str, Enum):
    """Questions answered with a canned reply."""

    SERVICES = "services"
    COLLABORATION = "collaboration"


@dataclass(slots=True)
class ReplyContext:
    """Inputs passed to the reply selector for one inbound turn."""

    sender_id: str
    latest_text: str
    lead: LeadState | None
    missing: Sequence[str] | None
    turns: Sequence[MessageTurn] = field(default_factory=list)


@dataclass(slots=True)
class GenerationRequest:
    """Context handed to the completion service."""

    slots: dict[str, str]
    missing_slots: list[str]
    latest_text: str
    recent_turns: list[dict[str, str]]
    deadline_seconds: float

    @classmethod
    def from_context(cls, context: ReplyContext, deadline_seconds: float) -> "GenerationRequest":
        return cls(
            slots=context.lead.filled() if context.lead else {},
            missing_slots=list(context.missing or []),
            latest_text=context.latest_text,
            recent_turns=[turn.as_message() for turn in context.turns],
            deadline_seconds=deadline_seconds,
        )


@dataclass(slots=True)
class ReplyDecision:
    """Selector output describing the chosen reply."""

    text: str
    source: ReplySource
    intent: QuickIntent | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
