"""Deterministic follow-up questions used when the completion service cannot be trusted."""

from __future__ import annotations

import re

from leadbot.leads.missing import MISSING_SLOT_ORDER
from leadbot.planner.base import FallbackStrategy
from leadbot.planner.types import ReplyContext

GENERIC_OPENING = (
    "Thanks for reaching out! What can we help you with: branding, a logo, a website, "
    "social media, a menu, or a pitch deck?"
)
ALL_SET_REPLY = "Thanks, we have everything we need. Our team will follow up with you shortly."

SLOT_QUESTIONS: dict[str, str] = {
    "service": "What do you need help with: branding, a logo, a website, social media, a menu, or a pitch deck?",
    "timeline": "When do you need this ready by?",
    "brand_name": "Great. What's the brand or business name?",
    "style": "Nice. What style do you want (modern, minimal, bold, etc.) or any references?",
    "budget": "Got it. Do you have a budget range in mind for this?",
    "contact_name": "Perfect. What's the best contact name, and should we continue here or by email?",
    "contact_channel": "Should we continue here on WhatsApp or by email?",
}


class SlotFallback(FallbackStrategy):
    """Ask about the highest-priority missing lead slot."""

    def describe(self) -> str:
        return "Missing-slot priority table"

    def choose(self, context: ReplyContext) -> str:
        if context.lead is None or context.lead.is_empty() or context.missing is None:
            return GENERIC_OPENING
        for slot in context.missing:
            question = SLOT_QUESTIONS.get(slot)
            if question:
                return question
        return ALL_SET_REPLY


TOPIC_PATTERNS: dict[str, re.Pattern[str]] = {
    "service": re.compile(r"logo|branding|brand|website|web|social|pitch deck|menu"),
    "timeline": re.compile(r"tomorrow|today|week|weeks|month|months|deadline|asap|urgent|by\s"),
    "brand_name": re.compile(r"brand is|business name|brand name|we are|called|name is"),
    "style": re.compile(r"modern|minimal|bold|luxury|traditional|clean|playful|vintage|ref|reference|style"),
    "budget": re.compile(r"budget|idr|usd|rp\s?|million|\d\s?k\b|\$"),
}


class TopicFallback(FallbackStrategy):
    """Scan the dialogue for topics already mentioned and ask about the next one."""

    def describe(self) -> str:
        return "Conversation topic scan"

    def covered_topics(self, context: ReplyContext) -> set[str]:
        texts = [turn.content for turn in context.turns]
        if context.latest_text and (not texts or texts[-1] != context.latest_text):
            texts.append(context.latest_text)
        corpus = " \n".join(text.lower() for text in texts)
        return {topic for topic, pattern in TOPIC_PATTERNS.items() if pattern.search(corpus)}

    def choose(self, context: ReplyContext) -> str:
        covered = self.covered_topics(context)
        if not covered:
            return GENERIC_OPENING
        for topic in MISSING_SLOT_ORDER:
            if topic in TOPIC_PATTERNS and topic not in covered:
                return SLOT_QUESTIONS[topic]
        return SLOT_QUESTIONS["contact_name"]


def build_fallback(name: str) -> FallbackStrategy:
    if name == "topics":
        return TopicFallback()
    if name == "slots":
        return SlotFallback()
    raise ValueError(f"Unknown fallback strategy: {name}")
