"""Conversation engine: one inbound message in, at most one reply out."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum

from leadbot.clients.base import DeliveryClient, DeliveryResult
from leadbot.core.config import Settings
from leadbot.leads.missing import missing_slots
from leadbot.memory.dedup import DedupGuard, composite_key
from leadbot.memory.models import InboundEvent, LeadState
from leadbot.memory.store import ConversationMemory, LeadStateStore, SenderLocks
from leadbot.memory.ttl import Clock
from leadbot.planner.selector import ReplySelector
from leadbot.planner.types import ReplyContext, ReplySource

logger = logging.getLogger("leadbot.engine")


class TurnStatus(str, Enum):
    IGNORED = "ignored"
    DUPLICATE = "duplicate"
    REPLIED = "replied"


@dataclass(slots=True)
class TurnOutcome:
    """What the engine did with one inbound event."""

    status: TurnStatus
    reply: str | None = None
    source: ReplySource | None = None
    delivered: bool | None = None
    lead: LeadState | None = None
    missing: list[str] = field(default_factory=list)


class ConversationEngine:
    """Wires dedup, memory, lead extraction, reply selection and delivery."""

    def __init__(
        self,
        *,
        dedup: DedupGuard,
        memory: ConversationMemory,
        leads: LeadStateStore,
        selector: ReplySelector,
        delivery: DeliveryClient,
        delivery_timeout_seconds: float = 6.5,
        clock: Clock = time.monotonic,
    ) -> None:
        self.dedup = dedup
        self.memory = memory
        self.leads = leads
        self.selector = selector
        self.delivery = delivery
        self.delivery_timeout_seconds = delivery_timeout_seconds
        self._locks = SenderLocks(clock=clock)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        selector: ReplySelector,
        delivery: DeliveryClient,
        clock: Clock = time.monotonic,
    ) -> "ConversationEngine":
        return cls(
            dedup=DedupGuard(settings.dedup_ttl_seconds, clock),
            memory=ConversationMemory(settings.conversation_ttl_seconds, settings.max_turns, clock),
            leads=LeadStateStore(settings.lead_ttl_seconds, clock),
            selector=selector,
            delivery=delivery,
            delivery_timeout_seconds=settings.delivery_timeout_ms / 1000,
            clock=clock,
        )

    async def handle(self, event: InboundEvent, *, deliver: bool = True) -> TurnOutcome:
        sender_id = event.sender_id
        text = event.text
        if not sender_id or not text or not text.strip():
            logger.info("Message has no sender or text body; skipping")
            return TurnOutcome(status=TurnStatus.IGNORED)

        if self.dedup.is_duplicate(event.event_id, composite_key(sender_id, event.timestamp, text)):
            return TurnOutcome(status=TurnStatus.DUPLICATE)

        logger.info("INBOUND MESSAGE sender=%s chars=%d", sender_id, len(text))

        async with self._locks.for_sender(sender_id):
            self.memory.append_turn(sender_id, "user", text)
            lead = self.leads.apply_extraction(sender_id, text)
            missing = missing_slots(lead)
            context = ReplyContext(
                sender_id=sender_id,
                latest_text=text,
                lead=lead,
                missing=missing,
                turns=self.memory.get_turns(sender_id),
            )

            decision = await self.selector.select(context)
            logger.info("AI REPLY source=%s sender=%s", decision.source.value, sender_id)
            self.memory.append_turn(sender_id, "assistant", decision.text)

            delivered: bool | None = None
            if deliver:
                result = await self._deliver(sender_id, decision.text)
                delivered = result.ok

        return TurnOutcome(
            status=TurnStatus.REPLIED,
            reply=decision.text,
            source=decision.source,
            delivered=delivered,
            lead=lead,
            missing=missing,
        )

    async def _deliver(self, sender_id: str, text: str) -> DeliveryResult:
        # Failed sends are not retried: the first attempt may have reached the platform.
        try:
            result = await asyncio.wait_for(
                self.delivery.send(sender_id, text),
                timeout=self.delivery_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.error("WhatsApp send timed out after %.1fs sender=%s", self.delivery_timeout_seconds, sender_id)
            return DeliveryResult(ok=False, error="timeout")
        except Exception as exc:  # noqa: BLE001
            logger.exception("WhatsApp send raised sender=%s", sender_id)
            return DeliveryResult(ok=False, error=str(exc) or exc.__class__.__name__)

        if not result.ok:
            logger.error("WHATSAPP SEND FAILED sender=%s error=%s", sender_id, result.error)
        else:
            logger.info("WHATSAPP SEND RESULT sender=%s status=%s", sender_id, result.status_code)
        return result

    def reset(self, sender_id: str) -> bool:
        """Forget a sender's lead slots and dialogue; return True if anything was stored."""

        cleared_lead = self.leads.reset(sender_id)
        cleared_turns = self.memory.reset(sender_id)
        return cleared_lead or cleared_turns
