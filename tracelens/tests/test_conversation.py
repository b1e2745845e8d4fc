from __future__ import annotations

"""Message and conversation rendering tests."""

from tracelens.highlight.engine import EvidenceHighlighter
from tracelens.render.classifier import ContentKind
from tracelens.render.conversation import (
    render_conversation,
    render_message,
    render_side_by_side,
    terms_for_model,
)
from tracelens.traces.messages import Message
from tracelens.traces.rows import SideBySideTrace


def test_plain_message_is_segmented() -> None:
    rendered = render_message(
        Message(role="assistant", content="The cat sat on the mat"),
        ["cat sat"],
    )

    assert rendered.kind is ContentKind.PLAIN
    assert [s.text for s in rendered.segments if s.highlighted] == ["cat sat"]
    assert rendered.html == '<p class="plain">The <mark data-key="4-11-0">cat sat</mark> on the mat</p>'
    assert rendered.highlight_count == 1


def test_json_message_is_pretty_printed_and_highlighted() -> None:
    rendered = render_message(
        Message(role="tool", content="{'status': 'ok', 'count': 2}"),
        ['"status": "ok"'],
    )

    assert rendered.kind is ContentKind.JSON
    assert rendered.text.startswith('{\n  "status": "ok"')
    assert rendered.has_json
    assert rendered.html.startswith('<pre class="json">')
    assert rendered.highlight_count == 1


def test_markup_message_uses_tree_highlighting() -> None:
    rendered = render_message(
        Message(role="assistant", content="## Plan\n\nWe will **retry the request** later."),
        ["retry the request"],
    )

    assert rendered.kind is ContentKind.MARKUP
    assert rendered.segments == []
    assert "<h2>Plan</h2>" in rendered.html
    assert "<strong><mark" in rendered.html
    assert rendered.highlight_count == 1


def test_no_terms_renders_without_marks() -> None:
    rendered = render_message(Message(role="user", content="Hello there"), [])

    assert rendered.highlight_count == 0
    assert rendered.html == '<p class="plain">Hello there</p>'


def test_blank_message_with_tool_calls() -> None:
    content = {"text": "  ", "tool_calls": [{"name": "search", "arguments": {"q": "x"}}]}
    rendered = render_message(Message(role="assistant", content=content), ["x"])

    assert rendered.kind is ContentKind.PLAIN
    assert rendered.tool_calls[0].display_name == "search"
    assert '<div class="tool-call"><span>search</span>' in rendered.html
    assert rendered.highlight_count == 0


def test_render_conversation_keeps_order() -> None:
    messages = [
        Message(role="user", content="What happened?"),
        Message(role="assistant", content="The deploy failed twice."),
    ]

    rendered = render_conversation(messages, ["deploy failed"], EvidenceHighlighter())

    assert [item.role for item in rendered] == ["user", "assistant"]
    assert rendered[0].highlight_count == 0
    assert rendered[1].highlight_count == 1


def test_side_by_side_highlights_only_target_model() -> None:
    trace = SideBySideTrace(
        question_id="q1",
        prompt="Why?",
        model_a="alpha",
        model_b="beta",
        messages_a=[Message(role="assistant", content="because of caching")],
        messages_b=[Message(role="assistant", content="because of caching")],
    )

    targeted = render_side_by_side(trace, ["caching"], target_model="beta")
    untargeted = render_side_by_side(trace, ["caching"])

    assert targeted.messages_a[0].highlight_count == 0
    assert targeted.messages_b[0].highlight_count == 1
    assert untargeted.messages_a[0].highlight_count == 1
    assert untargeted.messages_b[0].highlight_count == 1


def test_rendered_message_reports_term_matches() -> None:
    message = Message(role="assistant", content="The cache was cold")

    rendered = render_message(message, ["cache", "nowhere to be found"])

    assert [m.strategy for m in rendered.matches] == ["exact", "none"]
    assert rendered.highlight_count == 1
    assert render_message(message).matches == []


def test_render_message_uses_supplied_text() -> None:
    message = Message(role="assistant", content={"image": "x.png"})

    rendered = render_message(message, ["caption"], text="A caption for the image")

    assert rendered.text == "A caption for the image"
    assert rendered.highlight_count == 1


def test_terms_for_model() -> None:
    assert terms_for_model(["a"], None, "alpha") == ["a"]
    assert terms_for_model(["a"], "alpha", "alpha") == ["a"]
    assert terms_for_model(["a"], "beta", "alpha") == []
    assert terms_for_model(None, None, "alpha") == []
