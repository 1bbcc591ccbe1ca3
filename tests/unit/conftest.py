"""Pytest unit test fixtures."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest

from leadbot.clients.base import DeliveryClient, DeliveryResult, GenerationClient
from leadbot.core.errors import GenerationError
from leadbot.engine import ConversationEngine
from leadbot.memory.dedup import DedupGuard
from leadbot.memory.store import ConversationMemory, LeadStateStore
from leadbot.planner.fallback import SlotFallback
from leadbot.planner.selector import ReplySelector


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeGenerator(GenerationClient):
    """Scripted completion service."""

    name = "fake-generator"

    def __init__(
        self,
        result: Any = "Sounds great. When do you need it?",
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        self.result = result
        self.delay = delay
        self.error = error
        self.requests = []

    async def generate(self, request):
        self.requests.append(request)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.result


class FakeDelivery(DeliveryClient):
    """Records every message instead of sending it."""

    name = "fake-delivery"

    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.sent: list[tuple[str, str]] = []

    async def send(self, to: str, text: str) -> DeliveryResult:
        self.sent.append((to, text))
        if self.ok:
            return DeliveryResult(ok=True, status_code=200)
        return DeliveryResult(ok=False, status_code=500, error="HTTP 500")


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def memory(clock) -> ConversationMemory:
    return ConversationMemory(ttl_seconds=30 * 60, max_turns=8, clock=clock)


@pytest.fixture()
def leads(clock) -> LeadStateStore:
    return LeadStateStore(ttl_seconds=60 * 60, clock=clock)


@pytest.fixture()
def generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture()
def delivery() -> FakeDelivery:
    return FakeDelivery()


@pytest.fixture()
def failing_generator() -> FakeGenerator:
    return FakeGenerator(error=GenerationError("boom"))


@pytest.fixture()
def make_engine(clock, delivery):
    def build(
        generator: GenerationClient,
        *,
        deadline: float = 1.0,
        deliver_to: DeliveryClient | None = None,
    ) -> ConversationEngine:
        return ConversationEngine(
            dedup=DedupGuard(5 * 60, clock),
            memory=ConversationMemory(30 * 60, 8, clock),
            leads=LeadStateStore(60 * 60, clock),
            selector=ReplySelector(generator, SlotFallback(), deadline_seconds=deadline),
            delivery=deliver_to or delivery,
            delivery_timeout_seconds=1.0,
            clock=clock,
        )

    return build


class SlowDelivery(FakeDelivery):
    name = "slow-delivery"

    async def send(self, to: str, text: str) -> DeliveryResult:
        await asyncio.sleep(0.5)
        return await super().send(to, text)


@pytest.fixture()
def failing_delivery() -> FakeDelivery:
    return FakeDelivery(ok=False)


@pytest.fixture()
def slow_delivery() -> SlowDelivery:
    return SlowDelivery()
