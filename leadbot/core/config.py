"""Application settings and configuration helpers."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

FAST_DEFAULT_MODEL = "Llama-3.3-27B-Instruct"


class Settings(BaseSettings):
    """Strongly-typed configuration sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = Field(default="Third House Lead Assistant", description="Human-readable service name.")
    environment: str = Field(default="local", description="Deployment environment identifier.")
    log_level: str = Field(default="INFO", description="Application log level.")
    business_name: str = Field(default="The Third House", description="Business the assistant answers for.")

    meta_verify_token: str | None = Field(
        default=None,
        description="Shared token checked during the webhook verification handshake.",
    )
    meta_access_token: str | None = Field(default=None, description="WhatsApp Cloud API access token.")
    phone_number_id: str | None = Field(default=None, description="WhatsApp sender phone number id.")
    graph_api_version: str = Field(default="v21.0", description="Graph API version segment.")
    graph_api_base_url: str = Field(default="https://graph.facebook.com", description="Graph API host.")

    arliai_api_key: str | None = Field(default=None, description="Optional ArliAI API key.")
    arliai_model: str = Field(default=FAST_DEFAULT_MODEL, description="ArliAI model identifier.")
    arliai_base_url: str = Field(default="https://api.arliai.com/v1", description="ArliAI API root.")
    generation_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    generation_max_tokens: int = Field(default=30, ge=1, description="Completion token cap per reply.")

    generation_timeout_ms: int = Field(
        default=6500,
        ge=100,
        description="Deadline for a generated reply before the fallback question is used.",
    )
    delivery_timeout_ms: int = Field(
        default=6500,
        ge=100,
        description="Deadline for handing a reply to the WhatsApp API.",
    )
    http_timeout_ms: int = Field(
        default=6000,
        ge=100,
        description="HTTP-level timeout used inside the outbound clients.",
    )

    dedup_ttl_seconds: float = Field(default=5 * 60, gt=0, description="How long event ids are remembered.")
    conversation_ttl_seconds: float = Field(default=30 * 60, gt=0, description="Idle lifetime of dialogue history.")
    lead_ttl_seconds: float = Field(default=60 * 60, gt=0, description="Idle lifetime of lead slots.")
    max_turns: int = Field(default=8, ge=1, description="Turns retained per sender.")

    fallback_strategy: Literal["slots", "topics"] = Field(
        default="slots",
        description="Deterministic fallback variant: missing lead slots or topics seen in the dialogue.",
    )

    @property
    def generation_enabled(self) -> bool:
        return bool(self.arliai_api_key)

    @property
    def delivery_enabled(self) -> bool:
        return bool(self.meta_access_token and self.phone_number_id)

    @property
    def effective_model(self) -> str:
        """Return the configured model, swapping 70B variants for the fast default."""

        # 70B models cannot answer inside the webhook deadline.
        if not self.arliai_model or "70B" in self.arliai_model:
            return FAST_DEFAULT_MODEL
        return self.arliai_model


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()
