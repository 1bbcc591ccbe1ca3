"""Pydantic models for WhatsApp Cloud API webhook payloads and operator endpoints."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from leadbot.memory.models import InboundEvent


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class TextBody(_Lenient):
    body: Optional[str] = None


class WhatsAppMessage(_Lenient):
    id: Optional[str] = None
    sender: Optional[str] = Field(default=None, alias="from")
    timestamp: Optional[str] = None
    type: Optional[str] = None
    text: Optional[TextBody] = None

    def to_event(self) -> InboundEvent:
        return InboundEvent(
            sender_id=self.sender,
            event_id=self.id,
            timestamp=self.timestamp,
            text=self.text.body if self.text else None,
        )


class ChangeValue(_Lenient):
    messaging_product: Optional[str] = None
    messages: list[WhatsAppMessage] = Field(default_factory=list)
    statuses: list[dict[str, Any]] = Field(default_factory=list)


class Change(_Lenient):
    field: Optional[str] = None
    value: Optional[ChangeValue] = None


class Entry(_Lenient):
    id: Optional[str] = None
    changes: list[Change] = Field(default_factory=list)


class WebhookPayload(_Lenient):
    object: Optional[str] = None
    entry: list[Entry] = Field(default_factory=list)

    def first_value(self) -> ChangeValue | None:
        if not self.entry or not self.entry[0].changes:
            return None
        return self.entry[0].changes[0].value

    def first_message(self) -> WhatsAppMessage | None:
        value = self.first_value()
        if value is None or not value.messages:
            return None
        return value.messages[0]


class ChatRequest(BaseModel):
    sender_id: str = Field(min_length=1)
    text: str = Field(min_length=1)
    event_id: Optional[str] = None
    timestamp: Optional[str] = None


class ChatResponse(BaseModel):
    sender_id: str
    status: str
    reply: Optional[str] = None
    source: Optional[str] = None
    slots: dict[str, str] = Field(default_factory=dict)
    missing_slots: list[str] = Field(default_factory=list)


class LeadSnapshot(BaseModel):
    sender_id: str
    slots: dict[str, str]
    missing_slots: list[str]
    turns: list[dict[str, str]]
