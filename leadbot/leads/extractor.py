"""Heuristic extraction of lead slots from free-text messages.

Each slot owns an ordered list of rules. A slot is only evaluated while it is
still empty, and the first rule that matches wins. Keyword rules match the
lower-cased text; rules that capture a substring match the original text
case-insensitively so the capture keeps its original case.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass
from typing import Callable, Mapping, Sequence

from leadbot.memory.models import LeadState

Matcher = Callable[[str, str], "str | None"]


@dataclass(frozen=True, slots=True)
class SlotRule:
    """Named predicate that yields a slot value for an utterance, or None."""

    name: str
    matcher: Matcher

    def apply(self, text: str) -> str | None:
        return self.matcher(text, text.lower())


def _constant(pattern: str, value: str) -> Matcher:
    regex = re.compile(pattern)

    def match(text: str, lowered: str) -> str | None:
        return value if regex.search(lowered) else None

    return match


def _utterance(pattern: str) -> Matcher:
    regex = re.compile(pattern)

    def match(text: str, lowered: str) -> str | None:
        return text.strip() if regex.search(lowered) else None

    return match


def _span(pattern: str, group: int = 0) -> Matcher:
    regex = re.compile(pattern, re.IGNORECASE)

    def match(text: str, lowered: str) -> str | None:
        found = regex.search(text)
        if not found:
            return None
        start, end = found.span(group)
        captured = text[start:end].strip().rstrip(".!?,;")
        return captured or None

    return match


BRAND_DISQUALIFIERS = re.compile(
    r"\b(i need|i want|looking for|please|budget|price|cost|modern|minimal|logo|branding|website|"
    r"menu|deck|social|asap|urgent|today|tomorrow|week|weeks|month|months|email|here|"
    r"hi|hello|hey|thanks|thank you|yes|no|ok|okay)\b"
)
SENTENCE_PUNCTUATION = re.compile(r"[.,!?;:]")


def _short_bare_reply(text: str, lowered: str) -> str | None:
    candidate = text.strip()
    if not 3 <= len(candidate) <= 40:
        return None
    if SENTENCE_PUNCTUATION.search(candidate):
        return None
    if BRAND_DISQUALIFIERS.search(lowered):
        return None
    return candidate


INTRODUCTION = re.compile(
    r"\b(?:my name is|contact name is|call me)\s+([a-z][a-z'\-]*)(?:\s+([a-z][a-z'\-]*))?",
    re.IGNORECASE,
)


def _introduced_name(text: str, lowered: str) -> str | None:
    found = INTRODUCTION.search(text)
    if not found:
        return None
    first = found.group(1)
    if found.group(2) is None:
        return first
    second = found.group(2)
    # A second word only counts as a surname when it is capitalised.
    return f"{first} {second}" if second[:1].isupper() else first


STYLE_WORDS = (
    "modern",
    "minimal",
    "minimalist",
    "bold",
    "luxury",
    "luxurious",
    "traditional",
    "clean",
    "playful",
    "vintage",
    "elegant",
    "retro",
    "rustic",
    "scandinavian",
    "japandi",
    "javanese",
    "balinese",
    "mediterranean",
    "boho",
)

SLOT_RULES: Mapping[str, Sequence[SlotRule]] = {
    "service": (
        SlotRule("logo", _constant(r"\blogo(type)?s?\b", "logo")),
        SlotRule("branding", _constant(r"\bbranding\b|\bbrand identity\b|\bidentity\b", "branding")),
        SlotRule("website", _constant(r"\bweb ?sites?\b|\blanding pages?\b", "website")),
        SlotRule("social media", _constant(r"\bsocial media\b|\bsocial\b|\bcontent\b", "social media")),
        SlotRule("menu", _constant(r"\bmenus?\b", "menu")),
        SlotRule("pitch deck", _constant(r"\bpitch ?decks?\b|\bpresentations?\b", "pitch deck")),
    ),
    "timeline": (
        SlotRule("relative", _span(r"\bin\s+\d+\s+(?:days?|weeks?|months?)\b")),
        SlotRule("urgency", _utterance(r"\b(?:asap|urgent|today|tomorrow|this week|next week)\b")),
    ),
    "budget": (
        SlotRule(
            "currency",
            _utterance(r"[$€£¥]|\brp\.?\s?\d|\b(?:idr|usd|eur|gbp|sgd|aud)\b|\bmillion\b|\d\s?k\b"),
        ),
        SlotRule("range", _utterance(r"\b\d[\d,.]*\s*(?:-|–|to)\s*\d[\d,.]*\b")),
    ),
    "contact_channel": (
        SlotRule("here", _constant(r"\bhere\b|\bwhats\s?app\b", "whatsapp")),
        SlotRule("email", _constant(r"\be-?mail\b", "email")),
    ),
    "brand_name": (
        SlotRule("explicit", _span(r"\b(?:brand|business|company)\s+name\s*(?:is|:)\s*(.+)", group=1)),
        SlotRule("short reply", _short_bare_reply),
    ),
    "style": (
        SlotRule("vocabulary", _utterance(r"\b(?:" + "|".join(STYLE_WORDS) + r")\b")),
    ),
    "contact_name": (SlotRule("introduction", _introduced_name),),
    "references": (
        SlotRule("url", _utterance(r"https?://\S+|\bwww\.\S+|\b[a-z0-9-]+\.(?:com|net|org|io|co|id)\b")),
        SlotRule("portfolio site", _utterance(r"\b(?:behance|dribbble|pinterest|instagram)\b")),
    ),
}


def extract_fields(
    current: LeadState,
    utterance: str,
    rules: Mapping[str, Sequence[SlotRule]] = SLOT_RULES,
) -> LeadState:
    """Return ``current`` with any empty slot the utterance fills."""

    if not utterance or not utterance.strip():
        return dataclasses.replace(current)

    updates: dict[str, str] = {}
    for slot, slot_rules in rules.items():
        if getattr(current, slot):
            continue
        for rule in slot_rules:
            value = rule.apply(utterance)
            if value:
                updates[slot] = value
                break
    return dataclasses.replace(current, **updates)
