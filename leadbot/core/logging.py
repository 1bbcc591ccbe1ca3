"""Logging utilities for the service."""

from __future__ import annotations

import logging
import uuid
from typing import Callable

from fastapi import Request

from .config import Settings

logger = logging.getLogger("leadbot.request")


def configure_logging(settings: Settings) -> None:
    level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s %(message)s")
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("leadbot.app").info(
        "Logging configured at %s level for %s environment",
        logging.getLevelName(level),
        settings.environment,
    )


def log_environment_check(settings: Settings) -> None:
    """Log which credentials are present without revealing them."""

    logging.getLogger("leadbot.app").info(
        "ENV CHECK has_meta_access_token=%s has_phone_number_id=%s has_arliai_api_key=%s "
        "has_verify_token=%s model=%s",
        bool(settings.meta_access_token),
        bool(settings.phone_number_id),
        bool(settings.arliai_api_key),
        bool(settings.meta_verify_token),
        settings.effective_model,
    )


async def request_id_middleware(request: Request, call_next: Callable):
    request_id = request.headers.get("x-request-id", str(uuid.uuid4()))
    request.state.request_id = request_id

    logger.info("%s %s [rid=%s]", request.method, request.url.path, request_id)

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response
