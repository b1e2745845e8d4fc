from __future__ import annotations

"""Text extraction and content coercion tests."""

import json

from tracelens.render.content import (
    Opaque,
    PlainText,
    Structured,
    ToolCall,
    coerce_content,
    extract_text,
    pretty_format,
    tool_calls_of,
)


def test_coerce_content_variants() -> None:
    assert coerce_content("hi") == PlainText("hi")
    assert isinstance(coerce_content({"text": "hi"}), Structured)
    assert coerce_content(42) == Opaque(42)


def test_extraction_prefers_text_then_body_then_serialization() -> None:
    assert extract_text({"text": "from text", "body": "from body"}) == "from text"
    assert extract_text({"body": "from body"}) == "from body"
    serialized = extract_text({"image": "x.png"})
    assert json.loads(serialized) == {"image": "x.png"}
    assert serialized == json.dumps({"image": "x.png"}, indent=2)


def test_extraction_without_pretty_print_is_compact_and_verbatim() -> None:
    assert extract_text({"image": "x.png"}, pretty_print=False) == '{"image": "x.png"}'
    assert extract_text('{"a":1}', pretty_print=False) == '{"a":1}'


def test_json_strings_are_pretty_printed() -> None:
    assert extract_text('{"a":1,"b":[1,2]}') == json.dumps({"a": 1, "b": [1, 2]}, indent=2)


def test_python_literal_strings_are_pretty_printed() -> None:
    text = "{'flag': True, 'missing': None, 'name': 'x'}"
    assert extract_text(text) == json.dumps(
        {"flag": True, "missing": None, "name": "x"}, indent=2
    )


def test_unparseable_bracket_text_is_returned_unchanged() -> None:
    text = "{this is not: parseable}"
    assert pretty_format(text) == text
    assert extract_text(text) == text


def test_structured_text_field_is_pretty_printed_when_json() -> None:
    assert extract_text({"text": "[1, 2]"}) == json.dumps([1, 2], indent=2)


def test_opaque_values() -> None:
    assert extract_text(None) == ""
    assert extract_text(3.5) == "3.5"
    assert json.loads(extract_text([{"a": 1}])) == [{"a": 1}]


def test_tool_calls_are_extracted() -> None:
    content = {
        "text": "Calling tools",
        "tool_calls": [
            {"name": "search", "arguments": {"q": "weather"}},
            {"function": {"name": "lookup", "arguments": "{\"id\": 3}"}},
            {"arguments": "raw"},
            "ignored",
        ],
    }

    calls = tool_calls_of(content)

    assert [call.display_name for call in calls] == ["search", "lookup", "Tool Call"]
    assert calls[0].formatted_arguments() == json.dumps({"q": "weather"}, indent=2)
    assert calls[1].formatted_arguments() == "{\"id\": 3}"
    assert ToolCall(name=None).formatted_arguments() is None
    assert tool_calls_of("plain") == []


def test_literal_with_non_string_keys_is_returned_unchanged() -> None:
    text = "{(1, 2): 'a'}"
    assert pretty_format(text) == text
    assert extract_text(text) == text


def test_deeply_nested_brackets_are_returned_unchanged() -> None:
    text = "[" * 100000 + "]" * 100000
    assert extract_text(text) == text


def test_oversized_integer_literal_does_not_fail_extraction() -> None:
    text = "[" + "9" * 5000 + "]"
    assert "9" * 5000 in extract_text(text)


def test_structured_value_without_json_form_falls_back_to_str() -> None:
    content = {(1, 2): "a"}
    assert extract_text(content) == "{(1, 2): 'a'}"
    assert ToolCall(name="t", arguments={(1, 2): "a"}).formatted_arguments() == "{(1, 2): 'a'}"
