from __future__ import annotations

"""FastAPI application entrypoint for the evidence highlighting service."""

import logging
import uuid

from fastapi import FastAPI, HTTPException, Request

from tracelens.app.dependencies import build_highlighter, get_highlighter
from tracelens.app.metrics import metrics_middleware, metrics_response, record_term_matches
from tracelens.app.schemas import (
    ClassifyRequest,
    ClassifyResponse,
    HighlightRequest,
    HighlightResponse,
    RangePayload,
    RenderedMessagePayload,
    RenderRequest,
    RenderResponse,
    RowRenderRequest,
    RowRenderResponse,
    SegmentPayload,
    TermMatchPayload,
)
from tracelens.app.settings import settings
from tracelens.highlight.engine import EvidenceHighlighter
from tracelens.highlight.ranges import build_segments, merge_ranges
from tracelens.highlight.types import MatchRange, Segment
from tracelens.render.classifier import classify
from tracelens.render.content import extract_text
from tracelens.render.conversation import RenderedMessage, render_message, terms_for_model
from tracelens.traces.messages import Message
from tracelens.traces.rows import (
    detect_method_from_columns,
    format_side_by_side_trace_from_row,
    format_single_trace_from_row,
    parse_evidence,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Tracelens", version="0.1.0")


def _configure_logging() -> None:
    """Configure root logging using environment settings."""
    level_name = settings.log_level.strip().upper()
    level = getattr(logging, level_name, logging.INFO)
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
        )
    logger.setLevel(level)


_configure_logging()


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", str(uuid.uuid4()))


def _resolve_pretty_print(value: bool | None) -> bool:
    return settings.pretty_print if value is None else value


def _validate_terms(terms: list[str]) -> None:
    """Reject term lists above the configured limit."""
    if len(terms) > settings.max_terms:
        raise HTTPException(
            status_code=400,
            detail=f"Too many highlight terms (max {settings.max_terms})",
        )


def _validate_text(text: str) -> None:
    if len(text) > settings.max_text_chars:
        raise HTTPException(
            status_code=400,
            detail=f"Text exceeds maximum size of {settings.max_text_chars} characters",
        )


def _segment_payload(segment: Segment) -> SegmentPayload:
    return SegmentPayload(
        kind=segment.kind.value,
        text=segment.text,
        start=segment.start,
        end=segment.end,
        key=segment.key,
    )


def _range_payload(match: MatchRange) -> RangePayload:
    return RangePayload(start=match.start, end=match.end, term_index=match.term_index)


def _message_payload(rendered: RenderedMessage) -> RenderedMessagePayload:
    return RenderedMessagePayload(
        role=rendered.role,
        name=rendered.name,
        kind=rendered.kind.value,
        text=rendered.text,
        html=rendered.html,
        segments=[_segment_payload(segment) for segment in rendered.segments],
        tool_calls=[
            {"name": call.display_name, "arguments": call.formatted_arguments()}
            for call in rendered.tool_calls
        ],
        has_json=rendered.has_json,
        highlight_count=rendered.highlight_count,
    )


def _render_messages(
    messages: list[Message],
    terms: list[str],
    highlighter: EvidenceHighlighter,
    pretty_print: bool,
) -> list[RenderedMessage]:
    """Extract and size-check every message, then render and count term matches."""
    texts = [extract_text(message.content, pretty_print=pretty_print) for message in messages]
    for text in texts:
        _validate_text(text)
    rendered = [
        render_message(message, terms, highlighter, pretty_print, text=text)
        for message, text in zip(messages, texts)
    ]
    for item in rendered:
        record_term_matches(item.matches)
    return rendered


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Attach or create a request ID for traceability."""
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    request.state.request_id = request_id
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.middleware("http")
async def record_metrics(request: Request, call_next):
    """Capture request metrics before returning the response."""
    return await metrics_middleware(request, call_next)


@app.get("/metrics")
async def metrics():
    """Expose Prometheus-style metrics."""
    return metrics_response()


@app.get("/health")
async def health() -> dict[str, str]:
    """Simple health probe for uptime checks."""
    return {"status": "ok"}


@app.post("/highlight", response_model=HighlightResponse)
async def highlight(request: HighlightRequest, http_request: Request) -> HighlightResponse:
    """Highlight evidence terms in a flat string."""
    _validate_text(request.text)
    _validate_terms(request.terms)
    request_id = _request_id(http_request)
    highlighter = build_highlighter(request.min_similarity)
    matches = highlighter.explain(request.text, request.terms)
    record_term_matches(matches)
    ranges = merge_ranges([item for match in matches for item in match.ranges])
    segments = build_segments(request.text, ranges)
    logger.info(
        "highlight_completed",
        extra={
            "request_id": request_id,
            "term_count": len(request.terms),
            "range_count": len(ranges),
            "strategies": [match.strategy for match in matches],
        },
    )
    return HighlightResponse(
        segments=[_segment_payload(segment) for segment in segments],
        ranges=[_range_payload(item) for item in ranges],
        matches=[
            TermMatchPayload(
                term=match.term,
                term_index=match.term_index,
                strategy=match.strategy,
                ranges=[_range_payload(item) for item in match.ranges],
            )
            for match in matches
        ],
        request_id=request_id,
    )


@app.post("/classify", response_model=ClassifyResponse)
async def classify_content(request: ClassifyRequest) -> ClassifyResponse:
    """Return the renderer chosen for a piece of message content."""
    text = extract_text(request.content, pretty_print=_resolve_pretty_print(request.pretty_print))
    _validate_text(text)
    return ClassifyResponse(kind=classify(text).value, text=text)


@app.post("/render", response_model=RenderResponse)
async def render(request: RenderRequest, http_request: Request) -> RenderResponse:
    """Render a conversation with evidence highlighting."""
    _validate_terms(request.highlights)
    request_id = _request_id(http_request)
    highlighter = build_highlighter(request.min_similarity)
    messages = [
        Message(role=item.role, content=item.content, name=item.name, id=item.id)
        for item in request.messages
    ]
    rendered = _render_messages(
        messages,
        request.highlights,
        highlighter,
        _resolve_pretty_print(request.pretty_print),
    )
    logger.info(
        "render_completed",
        extra={
            "request_id": request_id,
            "message_count": len(rendered),
            "highlight_count": sum(item.highlight_count for item in rendered),
        },
    )
    return RenderResponse(
        messages=[_message_payload(item) for item in rendered],
        request_id=request_id,
    )


@app.post("/render/row", response_model=RowRenderResponse)
async def render_row(request: RowRenderRequest, http_request: Request) -> RowRenderResponse:
    """Render a single-model or side-by-side row with its evidence."""
    request_id = _request_id(http_request)
    method = detect_method_from_columns(list(request.row.keys()))
    if method == "unknown":
        raise HTTPException(status_code=400, detail="Row does not match a known trace layout")
    evidence = parse_evidence(request.evidence)
    _validate_terms(evidence)
    highlighter = get_highlighter()
    pretty_print = _resolve_pretty_print(request.pretty_print)

    if method == "single_model":
        trace = format_single_trace_from_row(request.row)
        messages = _render_messages(trace.messages, evidence, highlighter, pretty_print)
        logger.info(
            "row_rendered",
            extra={"request_id": request_id, "method": method, "evidence_count": len(evidence)},
        )
        return RowRenderResponse(
            method=method,
            question_id=trace.question_id,
            evidence=evidence,
            messages=[_message_payload(item) for item in messages],
            request_id=request_id,
        )

    trace = format_side_by_side_trace_from_row(request.row)
    messages_a = _render_messages(
        trace.messages_a,
        terms_for_model(evidence, request.target_model, trace.model_a),
        highlighter,
        pretty_print,
    )
    messages_b = _render_messages(
        trace.messages_b,
        terms_for_model(evidence, request.target_model, trace.model_b),
        highlighter,
        pretty_print,
    )
    logger.info(
        "row_rendered",
        extra={"request_id": request_id, "method": method, "evidence_count": len(evidence)},
    )
    return RowRenderResponse(
        method=method,
        question_id=trace.question_id,
        evidence=evidence,
        model_a=trace.model_a,
        model_b=trace.model_b,
        messages_a=[_message_payload(item) for item in messages_a],
        messages_b=[_message_payload(item) for item in messages_b],
        request_id=request_id,
    )
