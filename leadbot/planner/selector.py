"""Reply strategy selection: quick rules, generated reply, deterministic fallback."""

from __future__ import annotations

import asyncio
import logging

import httpx

from leadbot.clients.base import GenerationClient
from leadbot.core.errors import LeadbotError
from leadbot.planner.base import FallbackStrategy
from leadbot.planner.fallback import SlotFallback
from leadbot.planner.quick_rules import match_quick_rule
from leadbot.planner.reply_text import extract_reply_text
from leadbot.planner.types import GenerationRequest, ReplyContext, ReplyDecision, ReplySource

logger = logging.getLogger("leadbot.selector")


class ReplySelector:
    """Pick the reply for one inbound turn; always returns non-empty text."""

    def __init__(
        self,
        generator: GenerationClient,
        fallback: FallbackStrategy | None = None,
        *,
        deadline_seconds: float = 6.5,
    ) -> None:
        self.generator = generator
        self.fallback = fallback or SlotFallback()
        self.deadline_seconds = deadline_seconds

    async def select(self, context: ReplyContext) -> ReplyDecision:
        quick = match_quick_rule(context.latest_text)
        if quick is not None:
            intent, reply = quick
            return ReplyDecision(text=reply, source=ReplySource.QUICK_RULE, intent=intent)

        generated, failure = await self._generate(context)
        if generated:
            return ReplyDecision(text=generated, source=ReplySource.GENERATED)

        question = self.fallback.choose(context)
        return ReplyDecision(
            text=question,
            source=ReplySource.FALLBACK,
            metadata={"reason": failure or "empty"},
        )

    async def _generate(self, context: ReplyContext) -> tuple[str | None, str | None]:
        request = GenerationRequest.from_context(context, self.deadline_seconds)
        try:
            result = await asyncio.wait_for(self.generator.generate(request), timeout=self.deadline_seconds)
        except asyncio.TimeoutError:
            logger.warning("Generation timed out after %.1fs sender=%s", self.deadline_seconds, context.sender_id)
            return None, "timeout"
        except (LeadbotError, httpx.HTTPError) as exc:
            logger.error("Generation call failed: %s %s", exc.__class__.__name__, exc)
            return None, "error"
        except Exception:  # noqa: BLE001
            logger.exception("Unexpected generation failure sender=%s", context.sender_id)
            return None, "error"

        text = extract_reply_text(result, default=None)
        return text, None
