from __future__ import annotations

import copy
import json
import uuid
from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def whatsapp_message_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "whatsapp_text_message.json").read_text(encoding="utf-8"))


@pytest.fixture
def whatsapp_status_payload(fixtures_dir: Path) -> dict:
    return json.loads((fixtures_dir / "whatsapp_status_event.json").read_text(encoding="utf-8"))


@pytest.fixture
def make_message_payload(whatsapp_message_payload: dict):
    """Build a webhook payload for a fresh sender, event id and text."""

    def build(text: str | None, *, sender: str | None = None, event_id: str | None = None) -> dict:
        payload = copy.deepcopy(whatsapp_message_payload)
        message = payload["entry"][0]["changes"][0]["value"]["messages"][0]
        message["from"] = sender or f"62{uuid.uuid4().int % 10**10:010d}"
        message["id"] = event_id or f"wamid.{uuid.uuid4().hex}"
        if text is None:
            message.pop("text")
            message["type"] = "image"
        else:
            message["text"] = {"body": text}
        return payload

    return build
