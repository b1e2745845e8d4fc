from __future__ import annotations

"""Build conversation traces and evidence lists from tabular rows."""

import re
from dataclasses import dataclass
from typing import Any, Literal

from tracelens.traces.messages import Message, ensure_openai_format

Method = Literal["single_model", "side_by_side", "unknown"]

SINGLE_MODEL_COLUMNS = ("prompt", "model", "model_response")
SIDE_BY_SIDE_COLUMNS = ("prompt", "model_a", "model_b", "model_a_response", "model_b_response")

_EVIDENCE_SPLIT_RE = re.compile(r"\"\s*,\s*\"|\n|,\s(?=\w)")


@dataclass(frozen=True)
class SingleTrace:
    question_id: str
    prompt: str
    messages: list[Message]


@dataclass(frozen=True)
class SideBySideTrace:
    question_id: str
    prompt: str
    model_a: str
    model_b: str
    messages_a: list[Message]
    messages_b: list[Message]


def detect_method_from_columns(columns: list[str]) -> Method:
    """Infer the comparison method from the available column names."""
    available = set(columns)
    if all(column in available for column in SIDE_BY_SIDE_COLUMNS):
        return "side_by_side"
    if all(column in available for column in SINGLE_MODEL_COLUMNS):
        return "single_model"
    return "unknown"


def format_single_trace_from_row(row: dict[str, Any]) -> SingleTrace:
    prompt = _as_text(row.get("prompt"))
    return SingleTrace(
        question_id=_as_text(row.get("question_id")),
        prompt=prompt,
        messages=ensure_openai_format(prompt, row.get("model_response")),
    )


def format_side_by_side_trace_from_row(row: dict[str, Any]) -> SideBySideTrace:
    prompt = _as_text(row.get("prompt"))
    return SideBySideTrace(
        question_id=_as_text(row.get("question_id")),
        prompt=prompt,
        model_a=_as_text(row.get("model_a"), "Model A"),
        model_b=_as_text(row.get("model_b"), "Model B"),
        messages_a=ensure_openai_format(prompt, row.get("model_a_response")),
        messages_b=ensure_openai_format(prompt, row.get("model_b_response")),
    )


def parse_evidence(raw: Any) -> list[str]:
    """Turn an evidence field (list or delimited string) into terms."""
    if isinstance(raw, (list, tuple)):
        return [str(item).strip() for item in raw if item is not None and str(item).strip()]
    if not isinstance(raw, str):
        return []
    parts = _EVIDENCE_SPLIT_RE.split(raw.strip())
    terms: list[str] = []
    for part in parts:
        cleaned = part.strip()
        if cleaned.startswith('"'):
            cleaned = cleaned[1:]
        if cleaned.endswith('"'):
            cleaned = cleaned[:-1]
        cleaned = cleaned.strip()
        if cleaned:
            terms.append(cleaned)
    return terms


def _as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    return str(value)
