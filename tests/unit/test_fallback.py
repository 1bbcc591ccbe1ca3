from itertools import combinations

import pytest

from leadbot.leads.missing import MISSING_SLOT_ORDER
from leadbot.memory.models import LeadState, MessageTurn
from leadbot.planner.fallback import (
    ALL_SET_REPLY,
    GENERIC_OPENING,
    SLOT_QUESTIONS,
    SlotFallback,
    TopicFallback,
    build_fallback,
)
from leadbot.planner.types import ReplyContext


def context(missing=None, lead=None, turns=(), latest="hello"):
    return ReplyContext(sender_id="628", latest_text=latest, lead=lead, missing=missing, turns=list(turns))


def all_missing_lists():
    for size in range(len(MISSING_SLOT_ORDER) + 1):
        for combo in combinations(MISSING_SLOT_ORDER, size):
            yield list(combo)


def test_slot_fallback_is_total():
    strategy = SlotFallback()
    for missing in all_missing_lists():
        question = strategy.choose(context(missing=missing, lead=LeadState()))
        assert isinstance(question, str) and question.strip()


def test_slot_fallback_asks_highest_priority_slot():
    strategy = SlotFallback()

    assert strategy.choose(context(missing=["brand_name", "budget"], lead=LeadState(service="logo"))) == SLOT_QUESTIONS["brand_name"]
    assert strategy.choose(context(missing=["contact_channel"], lead=LeadState(service="logo"))) == SLOT_QUESTIONS["contact_channel"]


def test_slot_fallback_without_lead_information_opens_generically():
    assert SlotFallback().choose(context()) == GENERIC_OPENING


def test_slot_fallback_with_empty_lead_opens_generically():
    missing = list(MISSING_SLOT_ORDER)

    assert SlotFallback().choose(context(missing=missing, lead=LeadState())) == GENERIC_OPENING


def test_slot_fallback_when_nothing_is_missing():
    assert SlotFallback().choose(context(missing=[], lead=LeadState(service="logo"))) == ALL_SET_REPLY


def test_topic_fallback_advances_past_covered_topics():
    turns = [
        MessageTurn(role="user", content="I need a logo"),
        MessageTurn(role="assistant", content="When do you need this ready by?"),
        MessageTurn(role="user", content="Next month"),
    ]

    question = TopicFallback().choose(context(turns=turns, latest="Next month"))

    assert question == SLOT_QUESTIONS["brand_name"]


def test_topic_fallback_never_reasks_covered_topic():
    turns = [MessageTurn(role="user", content="Logo for a brand called Acme, modern style, budget 5 million, next week")]

    question = TopicFallback().choose(context(turns=turns, latest=turns[0].content))

    assert question == SLOT_QUESTIONS["contact_name"]


def test_topic_fallback_opens_generically_for_blank_history():
    assert TopicFallback().choose(context(turns=[], latest="hello")) == GENERIC_OPENING


def test_build_fallback():
    assert isinstance(build_fallback("slots"), SlotFallback)
    assert isinstance(build_fallback("topics"), TopicFallback)
    with pytest.raises(ValueError):
        build_fallback("random")
