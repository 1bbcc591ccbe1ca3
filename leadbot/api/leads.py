"""Operator routes for driving and inspecting conversations without WhatsApp."""

from __future__ import annotations

import time

from fastapi import APIRouter, HTTPException

from leadbot.api.schemas import ChatRequest, ChatResponse, LeadSnapshot
from leadbot.core.metrics import MetricsCollector
from leadbot.engine import ConversationEngine
from leadbot.leads.missing import missing_slots
from leadbot.memory.models import InboundEvent


def create_leads_router(engine: ConversationEngine, metrics: MetricsCollector) -> APIRouter:
    router = APIRouter(tags=["leads"])

    @router.post("/chat", response_model=ChatResponse)
    async def chat(payload: ChatRequest) -> ChatResponse:
        """Run one engine turn for a sender and return the reply instead of sending it."""

        event = InboundEvent(
            sender_id=payload.sender_id,
            event_id=payload.event_id,
            timestamp=payload.timestamp or str(int(time.time())),
            text=payload.text,
        )
        outcome = await engine.handle(event, deliver=False)
        metrics.record_turn(outcome.status.value, outcome.source.value if outcome.source else None)

        return ChatResponse(
            sender_id=payload.sender_id,
            status=outcome.status.value,
            reply=outcome.reply,
            source=outcome.source.value if outcome.source else None,
            slots=outcome.lead.filled() if outcome.lead else {},
            missing_slots=outcome.missing,
        )

    @router.get("/conversations")
    async def list_conversations() -> list[str]:
        """List senders with live dialogue history."""

        return engine.memory.senders()

    @router.get("/leads/{sender_id}", response_model=LeadSnapshot)
    async def get_lead(sender_id: str) -> LeadSnapshot:
        state = engine.leads.peek(sender_id)
        if state is None:
            raise HTTPException(status_code=404, detail="unknown sender")
        return LeadSnapshot(
            sender_id=sender_id,
            slots=state.filled(),
            missing_slots=missing_slots(state),
            turns=[turn.as_message() for turn in engine.memory.peek_turns(sender_id)],
        )

    @router.delete("/leads/{sender_id}")
    async def reset_lead(sender_id: str) -> dict[str, bool]:
        """Clear a sender's lead slots and dialogue so slots can be captured again."""

        return {"reset": engine.reset(sender_id)}

    return router
