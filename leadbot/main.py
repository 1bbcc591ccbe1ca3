"""FastAPI application entry point for the WhatsApp lead assistant."""

import logging
from typing import Any

from fastapi import FastAPI

from leadbot.api.leads import create_leads_router
from leadbot.api.webhook import create_webhook_router
from leadbot.clients.arliai import ArliAIClient
from leadbot.clients.whatsapp import WhatsAppClient
from leadbot.core.config import get_settings
from leadbot.core.errors import unhandled_exception_handler
from leadbot.core.logging import configure_logging, log_environment_check, request_id_middleware
from leadbot.core.metrics import MetricsCollector
from leadbot.engine import ConversationEngine
from leadbot.planner.fallback import build_fallback
from leadbot.planner.selector import ReplySelector

settings = get_settings()
logger = logging.getLogger("leadbot.app")

generation_client = ArliAIClient(
    settings.arliai_api_key,
    model=settings.effective_model,
    base_url=settings.arliai_base_url,
    business_name=settings.business_name,
    temperature=settings.generation_temperature,
    max_tokens=settings.generation_max_tokens,
    timeout_seconds=settings.http_timeout_ms / 1000,
)
delivery_client = WhatsAppClient(
    settings.meta_access_token,
    settings.phone_number_id,
    api_version=settings.graph_api_version,
    base_url=settings.graph_api_base_url,
    timeout_seconds=settings.http_timeout_ms / 1000,
)
selector = ReplySelector(
    generation_client,
    build_fallback(settings.fallback_strategy),
    deadline_seconds=settings.generation_timeout_ms / 1000,
)
engine = ConversationEngine.from_settings(settings, selector=selector, delivery=delivery_client)
metrics = MetricsCollector()

app = FastAPI(title=settings.app_name, version="0.1.0", docs_url="/docs")

app.middleware("http")(request_id_middleware)

app.include_router(create_webhook_router(engine, settings, metrics))
app.include_router(create_leads_router(engine, metrics))


@app.get("/health", tags=["health"])
async def health_check() -> dict[str, str]:
    """Return basic service status for monitoring."""

    return {"status": "ok"}


@app.get("/ready", tags=["health"])
async def readiness_probe() -> dict[str, Any]:
    """Readiness endpoint reporting which collaborators are configured.

    The service still answers without them: replies fall back to the
    deterministic questions and are not delivered.
    """

    components = {
        "generation": {
            "client": generation_client.name,
            "model": settings.effective_model,
            "ok": settings.generation_enabled,
        },
        "delivery": {
            "client": delivery_client.name,
            "ok": settings.delivery_enabled,
        },
        "webhook_verification": {"ok": bool(settings.meta_verify_token)},
    }
    overall = "ok" if all(component["ok"] for component in components.values()) else "degraded"

    return {
        "status": overall,
        "environment": settings.environment,
        "fallback_strategy": selector.fallback.describe(),
        "components": components,
    }


@app.on_event("startup")
async def startup() -> None:
    configure_logging(settings)
    log_environment_check(settings)


app.add_exception_handler(Exception, unhandled_exception_handler)


@app.get("/metrics", tags=["metrics"])
async def metrics_endpoint() -> dict:
    snapshot = metrics.snapshot()
    return {
        "total_events": snapshot.total_events,
        "outcomes": snapshot.outcomes,
        "reply_sources": snapshot.reply_sources,
        "delivery_failures": snapshot.delivery_failures,
    }
