from __future__ import annotations

"""Render conversation messages with evidence highlighting."""

import logging
from dataclasses import dataclass, field
from html import escape

from tracelens.highlight.engine import EvidenceHighlighter
from tracelens.highlight.ranges import build_segments, merge_ranges
from tracelens.highlight.types import Segment, TermMatch
from tracelens.render.classifier import ContentKind, classify, has_json_content
from tracelens.render.content import ToolCall, extract_text, tool_calls_of
from tracelens.render.html import render_html, render_segments
from tracelens.render.markdown import build_tree
from tracelens.traces.messages import Message
from tracelens.traces.rows import SideBySideTrace

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedMessage:
    """Display-ready form of a single message."""
    role: str
    name: str | None
    kind: ContentKind
    text: str
    html: str
    segments: list[Segment] = field(default_factory=list)
    tool_calls: list[ToolCall] = field(default_factory=list)
    has_json: bool = False
    matches: list[TermMatch] = field(default_factory=list)

    @property
    def highlight_count(self) -> int:
        return self.html.count("<mark ")


@dataclass(frozen=True)
class RenderedSideBySide:
    question_id: str
    model_a: str
    model_b: str
    messages_a: list[RenderedMessage]
    messages_b: list[RenderedMessage]


def render_message(
    message: Message,
    terms: list[str] | None = None,
    highlighter: EvidenceHighlighter | None = None,
    pretty_print: bool = True,
    text: str | None = None,
) -> RenderedMessage:
    """Render one message: extract text, classify, then highlight.

    ``text`` skips extraction when the caller already holds it. ``matches``
    describe each term against the extracted text; markup is highlighted
    leaf by leaf, so its marks can be fewer than its matches.
    """
    highlighter = highlighter or EvidenceHighlighter()
    terms = list(terms or [])
    if text is None:
        text = extract_text(message.content, pretty_print=pretty_print)
    tool_calls = tool_calls_of(message.content)
    tool_html = render_tool_calls_html(tool_calls)
    if not text.strip():
        return RenderedMessage(
            role=message.role,
            name=message.name,
            kind=ContentKind.PLAIN,
            text=text,
            html=tool_html,
            tool_calls=tool_calls,
        )

    kind = classify(text)
    matches = highlighter.explain(text, terms) if terms else []
    if kind is ContentKind.MARKUP:
        tree = highlighter.apply_to_tree(build_tree(text), terms)
        html = f'<div class="markup">{render_html(tree)}</div>'
        segments: list[Segment] = []
    else:
        ranges = merge_ranges([item for match in matches for item in match.ranges])
        segments = build_segments(text, ranges)
        tag = "pre" if kind is ContentKind.JSON else "p"
        html = f'<{tag} class="{kind.value}">{render_segments(segments)}</{tag}>'

    rendered = RenderedMessage(
        role=message.role,
        name=message.name,
        kind=kind,
        text=text,
        html=tool_html + html,
        segments=segments,
        tool_calls=tool_calls,
        has_json=has_json_content(text),
        matches=matches,
    )
    logger.debug(
        "message_rendered",
        extra={"role": message.role, "kind": kind.value, "highlights": rendered.highlight_count},
    )
    return rendered


def render_conversation(
    messages: list[Message],
    terms: list[str] | None = None,
    highlighter: EvidenceHighlighter | None = None,
    pretty_print: bool = True,
) -> list[RenderedMessage]:
    highlighter = highlighter or EvidenceHighlighter()
    return [render_message(message, terms, highlighter, pretty_print) for message in messages]


def render_side_by_side(
    trace: SideBySideTrace,
    terms: list[str] | None = None,
    target_model: str | None = None,
    highlighter: EvidenceHighlighter | None = None,
    pretty_print: bool = True,
) -> RenderedSideBySide:
    """Render both sides, highlighting only the side that produced the evidence."""
    terms_a = terms_for_model(terms, target_model, trace.model_a)
    terms_b = terms_for_model(terms, target_model, trace.model_b)
    return RenderedSideBySide(
        question_id=trace.question_id,
        model_a=trace.model_a,
        model_b=trace.model_b,
        messages_a=render_conversation(trace.messages_a, terms_a, highlighter, pretty_print),
        messages_b=render_conversation(trace.messages_b, terms_b, highlighter, pretty_print),
    )


def render_tool_calls_html(tool_calls: list[ToolCall]) -> str:
    parts: list[str] = []
    for call in tool_calls:
        arguments = call.formatted_arguments()
        body = f"<pre>{escape(arguments)}</pre>" if arguments else ""
        parts.append(
            f'<div class="tool-call"><span>{escape(call.display_name)}</span>{body}</div>'
        )
    return "".join(parts)


def terms_for_model(
    terms: list[str] | None, target_model: str | None, model: str
) -> list[str]:
    """Return the terms to highlight for one side of a comparison."""
    if target_model and target_model != model:
        return []
    return list(terms or [])
