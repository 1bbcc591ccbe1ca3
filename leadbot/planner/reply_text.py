"""Turn a completion service result into the text sent to the user.

Models sometimes wrap the answer in JSON despite being told not to, so JSON
looking strings are parsed and the usual text fields are preferred.
"""

from __future__ import annotations

import json
from typing import Any, Mapping

DEFAULT_REPLY = "Thanks for your message! What can we help you with today?"

_TEXT_FIELDS = ("reply", "message", "text")


def _completion_content(result: Mapping[str, Any]) -> str | None:
    choices = result.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, Mapping):
        return None
    message = first.get("message")
    content = message.get("content") if isinstance(message, Mapping) else first.get("text")
    if isinstance(content, str) and content.strip():
        return content.strip()
    return None


def _looks_structured(value: str) -> bool:
    return (value.startswith("{") and value.endswith("}")) or (value.startswith("[") and value.endswith("]"))


def _from_string(value: str, default: str | None) -> str | None:
    text = value.strip()
    if not text:
        return default
    if not _looks_structured(text):
        return text

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return text

    if isinstance(parsed, list):
        parsed = parsed[0] if parsed else None
    if not isinstance(parsed, Mapping):
        return default
    for key in _TEXT_FIELDS:
        candidate = parsed.get(key)
        if isinstance(candidate, str) and candidate.strip():
            return candidate.strip()
    return default


def extract_reply_text(result: Any, default: str | None = DEFAULT_REPLY) -> str | None:
    """Return reply text from a raw completion result.

    Mappings prefer ``reply`` and then the chat-completion content; strings are
    used verbatim unless they parse as a JSON object or array, in which case
    ``reply``, ``message`` and ``text`` are tried in that order. ``default`` is
    returned when nothing usable is found.
    """

    if result is None:
        return default

    if isinstance(result, Mapping):
        reply = result.get("reply")
        if isinstance(reply, str) and reply.strip():
            return reply.strip()
        content = _completion_content(result)
        if content is not None:
            return _from_string(content, default)
        return default

    return _from_string(str(result), default)
