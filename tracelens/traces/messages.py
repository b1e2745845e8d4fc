from __future__ import annotations

"""Normalize model responses into role/content message lists."""

import ast
import json
import logging
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Message:
    """Single conversation turn."""
    role: str
    content: Any
    name: str | None = None
    id: str | None = None


def ensure_openai_format(prompt: Any, response: Any) -> list[Message]:
    """Return messages for a response, synthesizing a user/assistant pair if needed."""
    parsed = response
    if isinstance(response, str) and response.strip().startswith(("[", "{")):
        parsed = _parse_response_string(response)

    if isinstance(parsed, list):
        messages = [_to_message(item) for item in parsed if _is_message(item)]
        if messages:
            return messages
        logger.warning("response_array_without_messages", extra={"items": len(parsed)})

    if parsed is not None and not isinstance(response, str):
        logger.warning(
            "response_coerced_to_string",
            extra={"response_type": type(parsed).__name__, "preview": _preview(parsed)},
        )
    assistant_text = response if isinstance(response, str) else _stringify(parsed)
    user_text = prompt if isinstance(prompt, str) else _stringify(prompt)
    return [
        Message(role="user", content=user_text),
        Message(role="assistant", content=assistant_text),
    ]


def _parse_response_string(response: str) -> Any:
    """Parse JSON or a Python repr; return the original string on failure."""
    try:
        return json.loads(response)
    except (ValueError, RecursionError):
        pass
    try:
        return ast.literal_eval(response.strip())
    except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError) as exc:
        logger.warning(
            "response_parse_failed",
            extra={"error": type(exc).__name__, "preview": response[:200]},
        )
    return response


def _is_message(item: Any) -> bool:
    return isinstance(item, dict) and isinstance(item.get("role"), str) and "content" in item


def _to_message(item: dict[str, Any]) -> Message:
    name = item.get("name")
    message_id = item.get("id")
    return Message(
        role=item["role"],
        content=item["content"],
        name=str(name) if name is not None else None,
        id=str(message_id) if message_id is not None else None,
    )


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _preview(value: Any) -> str:
    try:
        return json.dumps(value, default=str)[:200]
    except (TypeError, ValueError, RecursionError):
        return f"<{type(value).__name__}>"
