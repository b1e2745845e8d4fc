from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class HighlightRequest(BaseModel):
    text: str
    terms: list[str] = Field(default_factory=list)
    min_similarity: float | None = Field(default=None, ge=0.0, le=1.0)


class SegmentPayload(BaseModel):
    kind: Literal["plain", "highlighted"]
    text: str
    start: int
    end: int
    key: str


class RangePayload(BaseModel):
    start: int
    end: int
    term_index: int | None = None


class TermMatchPayload(BaseModel):
    term: str
    term_index: int
    strategy: Literal["exact", "fuzzy", "none"]
    ranges: list[RangePayload]


class HighlightResponse(BaseModel):
    segments: list[SegmentPayload]
    ranges: list[RangePayload]
    matches: list[TermMatchPayload]
    request_id: str


class ClassifyRequest(BaseModel):
    content: Any = None
    pretty_print: bool | None = None


class ClassifyResponse(BaseModel):
    kind: Literal["json", "markup", "plain"]
    text: str


class MessagePayload(BaseModel):
    role: str = Field(min_length=1)
    content: Any = None
    name: str | None = None
    id: str | None = None


class ToolCallPayload(BaseModel):
    name: str
    arguments: str | None = None


class RenderedMessagePayload(BaseModel):
    role: str
    name: str | None = None
    kind: Literal["json", "markup", "plain"]
    text: str
    html: str
    segments: list[SegmentPayload] = Field(default_factory=list)
    tool_calls: list[ToolCallPayload] = Field(default_factory=list)
    has_json: bool = False
    highlight_count: int = 0


class RenderRequest(BaseModel):
    messages: list[MessagePayload]
    highlights: list[str] = Field(default_factory=list)
    pretty_print: bool | None = None
    min_similarity: float | None = Field(default=None, ge=0.0, le=1.0)


class RenderResponse(BaseModel):
    messages: list[RenderedMessagePayload]
    request_id: str


class RowRenderRequest(BaseModel):
    row: dict[str, Any]
    evidence: Any = None
    target_model: str | None = None
    pretty_print: bool | None = None


class RowRenderResponse(BaseModel):
    method: Literal["single_model", "side_by_side"]
    question_id: str
    evidence: list[str]
    messages: list[RenderedMessagePayload] = Field(default_factory=list)
    model_a: str | None = None
    model_b: str | None = None
    messages_a: list[RenderedMessagePayload] = Field(default_factory=list)
    messages_b: list[RenderedMessagePayload] = Field(default_factory=list)
    request_id: str
