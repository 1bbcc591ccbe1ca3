"""Outbound collaborator exports."""

from .arliai import ArliAIClient
from .base import DeliveryClient, DeliveryResult, GenerationClient
from .whatsapp import WhatsAppClient

__all__ = [
    "ArliAIClient",
    "DeliveryClient",
    "DeliveryResult",
    "GenerationClient",
    "WhatsAppClient",
]
