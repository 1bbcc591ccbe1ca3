"""WhatsApp Cloud API client for outbound text messages."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from leadbot.clients.base import DeliveryClient, DeliveryResult


class WhatsAppClient(DeliveryClient):
    """Send plain text messages through the Graph API."""

    name = "whatsapp"

    def __init__(
        self,
        access_token: str | None,
        phone_number_id: str | None,
        *,
        api_version: str = "v21.0",
        base_url: str = "https://graph.facebook.com",
        timeout_seconds: float = 6.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._access_token = access_token
        self._phone_number_id = phone_number_id
        self._api_version = api_version
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout_seconds
        self._transport = transport
        self._logger = logging.getLogger("leadbot.clients.whatsapp")

    @property
    def url(self) -> str:
        return f"{self._base_url}/{self._api_version}/{self._phone_number_id}/messages"

    async def send(self, to: str, text: str) -> DeliveryResult:
        if not self._access_token or not self._phone_number_id:
            return DeliveryResult(ok=False, error="not configured")

        payload = {
            "messaging_product": "whatsapp",
            "to": to,
            "type": "text",
            "text": {"body": text},
        }
        headers = {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.post(self.url, headers=headers, json=payload)
        except httpx.HTTPError as exc:
            self._logger.error("WhatsApp send failed: %s", exc.__class__.__name__)
            return DeliveryResult(ok=False, error=str(exc) or exc.__class__.__name__)

        body: dict[str, Any]
        try:
            decoded = response.json()
            body = decoded if isinstance(decoded, dict) else {"data": decoded}
        except ValueError:
            body = {"raw": response.text[:500]}

        self._logger.info("WHATSAPP SEND HTTP ok=%s status=%s", response.is_success, response.status_code)
        if response.is_error:
            self._logger.error("WhatsApp send error status=%s body=%s", response.status_code, body)
            return DeliveryResult(
                ok=False,
                status_code=response.status_code,
                payload=body,
                error=f"HTTP {response.status_code}",
            )
        return DeliveryResult(ok=True, status_code=response.status_code, payload=body)
