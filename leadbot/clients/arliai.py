"""ArliAI chat-completions client used for free-form replies."""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from leadbot.clients.base import GenerationClient
from leadbot.core.errors import GenerationError
from leadbot.planner.types import GenerationRequest

SYSTEM_PROMPT = (
    "You are the WhatsApp auto-reply assistant for {business}, a design agency. "
    "Be warm, confident, and concise. Keep replies under 3 short sentences. "
    "Ask at most ONE question per message. No emojis. Never mention you are an AI. "
    "If the user asks what you offer, list 4 to 6 core services briefly (branding, logo, "
    "social media, menus, websites, pitch decks) and ask which one they need. "
    "If the user gives you the service and timeline, ask the next missing detail "
    "(brand name, then budget range). If they ask for pricing, do not invent numbers; "
    "say you will confirm and ask what service + timeline. "
    "IMPORTANT: Output ONLY the message text to send to the user. "
    "Do NOT output JSON, keys, code blocks, or quotes."
)


class ArliAIClient(GenerationClient):
    """OpenAI-compatible completion endpoint served by ArliAI."""

    name = "arliai"

    def __init__(
        self,
        api_key: str | None,
        *,
        model: str,
        base_url: str = "https://api.arliai.com/v1",
        business_name: str = "The Third House",
        temperature: float = 0.2,
        max_tokens: int = 30,
        timeout_seconds: float = 6.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._url = base_url.rstrip("/") + "/chat/completions"
        self._business_name = business_name
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._timeout = timeout_seconds
        self._transport = transport
        self._logger = logging.getLogger("leadbot.clients.arliai")

    def build_messages(self, request: GenerationRequest) -> list[dict[str, str]]:
        lead_context = json.dumps(
            {"known": request.slots, "missing_in_priority_order": request.missing_slots},
            ensure_ascii=False,
        )
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT.format(business=self._business_name)},
            {"role": "system", "content": f"Lead details so far: {lead_context}"},
            *request.recent_turns,
        ]
        if not request.recent_turns or request.recent_turns[-1].get("content") != request.latest_text:
            messages.append({"role": "user", "content": request.latest_text})
        return messages

    def build_payload(self, request: GenerationRequest) -> dict[str, Any]:
        return {
            "model": self._model,
            "hide_thinking": True,
            "temperature": self._temperature,
            "max_completion_tokens": self._max_tokens,
            "stream": False,
            "messages": self.build_messages(request),
        }

    async def generate(self, request: GenerationRequest) -> Any:
        if not self._api_key:
            raise GenerationError("ARLIAI_API_KEY is not configured")

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        timeout = min(self._timeout, request.deadline_seconds)
        self._logger.debug("ArliAI model used: %s", self._model)

        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            response = await client.post(self._url, headers=headers, json=self.build_payload(request))

        if response.is_error:
            self._logger.error("ArliAI error status=%s body=%s", response.status_code, response.text[:500])
            raise GenerationError(f"ArliAI returned HTTP {response.status_code}")

        try:
            return response.json()
        except ValueError as exc:
            raise GenerationError("ArliAI returned a non-JSON body") from exc
