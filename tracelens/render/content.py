from __future__ import annotations

"""Message content variants and representative-text extraction."""

import ast
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Union

logger = logging.getLogger(__name__)

DEFAULT_TOOL_NAME = "Tool Call"


@dataclass(frozen=True)
class ToolCall:
    """Tool invocation attached to a structured message."""
    name: str | None
    arguments: Any = None

    @property
    def display_name(self) -> str:
        return self.name or DEFAULT_TOOL_NAME

    def formatted_arguments(self) -> str | None:
        """Return arguments verbatim when a string, else pretty JSON."""
        if self.arguments is None or self.arguments == "":
            return None
        if isinstance(self.arguments, str):
            return self.arguments
        dumped = _dump_json(self.arguments, indent=2)
        return str(self.arguments) if dumped is None else dumped


@dataclass(frozen=True)
class PlainText:
    text: str


@dataclass(frozen=True)
class Structured:
    """Object-shaped content with optional text/body fields."""
    text: Any = None
    body: Any = None
    tool_calls: tuple[ToolCall, ...] = ()
    raw: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Opaque:
    value: Any


RawContent = Union[PlainText, Structured, Opaque]


def coerce_content(value: Any) -> RawContent:
    """Classify untyped message content into a content variant."""
    if isinstance(value, (PlainText, Structured, Opaque)):
        return value
    if isinstance(value, str):
        return PlainText(value)
    if isinstance(value, dict):
        return Structured(
            text=value.get("text"),
            body=value.get("body"),
            tool_calls=_coerce_tool_calls(value.get("tool_calls")),
            raw=value,
        )
    return Opaque(value)


def extract_text(content: Any, pretty_print: bool = True) -> str:
    """Return the single representative string for message content.

    Structured content prefers its ``text`` field, then ``body``, and falls
    back to a serialized form of the whole value.
    """
    content = coerce_content(content)
    if isinstance(content, PlainText):
        return pretty_format(content.text) if pretty_print else content.text
    if isinstance(content, Structured):
        for candidate in (content.text, content.body):
            if _has_value(candidate):
                text = str(candidate)
                return pretty_format(text) if pretty_print else text
        return _serialize(content.raw, pretty_print)
    if content.value is None:
        return ""
    if isinstance(content.value, (list, tuple)):
        return _serialize(content.value, pretty_print)
    return str(content.value)


def tool_calls_of(content: Any) -> list[ToolCall]:
    content = coerce_content(content)
    if isinstance(content, Structured):
        return list(content.tool_calls)
    return []


def looks_like_json(text: str) -> bool:
    """Return True when trimmed text is wrapped in a bracket pair."""
    trimmed = text.strip()
    return (trimmed.startswith("{") and trimmed.endswith("}")) or (
        trimmed.startswith("[") and trimmed.endswith("]")
    )


def parse_structured(text: str) -> Any | None:
    """Parse JSON or a Python literal dict/list; return None on failure."""
    trimmed = text.strip()
    try:
        return json.loads(trimmed)
    except (ValueError, RecursionError):
        pass
    try:
        return ast.literal_eval(trimmed)
    except (ValueError, SyntaxError, TypeError, MemoryError, RecursionError):
        return None


def pretty_format(text: str) -> str:
    """Re-indent bracket-wrapped JSON or Python literals; else return as-is."""
    if not looks_like_json(text):
        return text
    parsed = parse_structured(text)
    if not isinstance(parsed, (dict, list, tuple)):
        logger.debug("pretty_print_skipped", extra={"preview": text[:80]})
        return text
    dumped = _dump_json(parsed, indent=2)
    return text if dumped is None else dumped


def _serialize(value: Any, pretty_print: bool) -> str:
    dumped = _dump_json(value, indent=2 if pretty_print else None)
    return str(value) if dumped is None else dumped


def _dump_json(value: Any, indent: int | None) -> str | None:
    """Serialize to JSON, or None when the value has no JSON form."""
    try:
        return json.dumps(value, indent=indent, default=str)
    except (TypeError, ValueError, RecursionError) as exc:
        logger.debug("json_dump_failed", extra={"error": type(exc).__name__})
        return None


def _has_value(value: Any) -> bool:
    return value is not None and value != ""


def _coerce_tool_calls(value: Any) -> tuple[ToolCall, ...]:
    if not isinstance(value, list):
        return ()
    calls: list[ToolCall] = []
    for item in value:
        if not isinstance(item, dict):
            continue
        function = item.get("function") if isinstance(item.get("function"), dict) else {}
        name = item.get("name") or function.get("name")
        arguments = item.get("arguments")
        if arguments is None:
            arguments = function.get("arguments")
        calls.append(ToolCall(name=str(name) if name else None, arguments=arguments))
    return tuple(calls)
