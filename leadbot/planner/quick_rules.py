"""Canned replies for the two most common, fully answerable questions."""

from __future__ import annotations

from leadbot.planner.types import QuickIntent

SERVICES_REPLY = (
    "We help with branding, logos, websites, social media, menus, and pitch decks. "
    "What do you need help with?"
)
COLLABORATION_REPLY = (
    "We'd love to hear about it. Could you share a few details about the collaboration "
    "you have in mind and your brand or business name?"
)

QUICK_RULES: tuple[tuple[QuickIntent, tuple[str, ...], str], ...] = (
    (QuickIntent.SERVICES, ("what do you offer", "services"), SERVICES_REPLY),
    (QuickIntent.COLLABORATION, ("collaboration", "collaborate", "partner"), COLLABORATION_REPLY),
)


def match_quick_rule(text: str) -> tuple[QuickIntent, str] | None:
    """Return the intent and canned reply for ``text``, if any rule applies."""

    lowered = text.lower()
    for intent, phrases, reply in QUICK_RULES:
        if any(phrase in lowered for phrase in phrases):
            return intent, reply
    return None
