"""Fixtures replacing the outbound collaborators of the running app."""

import pytest

from leadbot import main
from leadbot.clients.base import DeliveryResult


@pytest.fixture()
def sent_messages(monkeypatch):
    sent: list[tuple[str, str]] = []

    async def fake_send(to: str, text: str) -> DeliveryResult:
        sent.append((to, text))
        return DeliveryResult(ok=True, status_code=200)

    monkeypatch.setattr(main.delivery_client, "send", fake_send)
    return sent


@pytest.fixture()
def generated_reply(monkeypatch):
    calls = []

    async def fake_generate(request):
        calls.append(request)
        return {"choices": [{"message": {"content": "Lovely. When do you need it ready?"}}]}

    monkeypatch.setattr(main.generation_client, "generate", fake_generate)
    return calls
