"""WhatsApp webhook routes: verification handshake and inbound messages."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from leadbot.api.schemas import WebhookPayload
from leadbot.core.config import Settings
from leadbot.core.metrics import MetricsCollector
from leadbot.engine import ConversationEngine

logger = logging.getLogger("leadbot.webhook")


def create_webhook_router(
    engine: ConversationEngine,
    settings: Settings,
    metrics: MetricsCollector,
) -> APIRouter:
    router = APIRouter(prefix="/webhook", tags=["webhook"])

    @router.get("", response_class=PlainTextResponse)
    async def verify(
        mode: str | None = Query(default=None, alias="hub.mode"),
        token: str | None = Query(default=None, alias="hub.verify_token"),
        challenge: str | None = Query(default=None, alias="hub.challenge"),
    ) -> PlainTextResponse:
        expected = settings.meta_verify_token
        if mode == "subscribe" and expected and token == expected:
            return PlainTextResponse(challenge or "", status_code=200)
        logger.warning("Webhook verification rejected mode=%s", mode)
        return PlainTextResponse("Forbidden", status_code=403)

    @router.post("", response_class=PlainTextResponse)
    async def receive(request: Request) -> PlainTextResponse:
        logger.info("WEBHOOK POST received")
        # Every path answers 200 so the platform does not retransmit the event.
        try:
            payload = WebhookPayload.model_validate(await request.json())
        except (ValueError, ValidationError) as exc:
            logger.warning("Unreadable webhook body: %s", exc.__class__.__name__)
            return PlainTextResponse("OK")

        message = payload.first_message()
        if message is None:
            value = payload.first_value()
            logger.info(
                "No messages[] in payload (likely status event). statuses=%d",
                len(value.statuses) if value else 0,
            )
            return PlainTextResponse("OK")

        try:
            outcome = await engine.handle(message.to_event())
        except Exception:  # noqa: BLE001
            logger.exception("Webhook error event_id=%s", message.id)
            metrics.record_turn("error")
            return PlainTextResponse("OK")

        metrics.record_turn(
            outcome.status.value,
            outcome.source.value if outcome.source else None,
            outcome.delivered,
        )
        return PlainTextResponse("OK")

    return router
