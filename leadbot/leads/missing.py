"""Ordered list of lead slots that are still unknown."""

from __future__ import annotations

from leadbot.memory.models import LeadState

# Index 0 is the most urgent question to ask next.
MISSING_SLOT_ORDER: tuple[str, ...] = (
    "service",
    "timeline",
    "brand_name",
    "style",
    "budget",
    "contact_name",
    "contact_channel",
)


def missing_slots(state: LeadState) -> list[str]:
    return [slot for slot in MISSING_SLOT_ORDER if not getattr(state, slot)]
