from __future__ import annotations

"""Content classifier tests."""

from tracelens.render.classifier import ContentKind, classify, has_json_content


def test_bracket_wrapped_content_is_json() -> None:
    assert classify('{\n  "a": 1\n}') is ContentKind.JSON
    assert classify("  [1, 2, 3]  ") is ContentKind.JSON


def test_malformed_but_bracket_wrapped_is_still_json() -> None:
    assert classify("{not: valid json at all") is ContentKind.MARKUP
    assert classify("{not: valid, json}") is ContentKind.JSON


def test_currency_is_plain() -> None:
    assert classify("Buy it for $5 today") is ContentKind.PLAIN


def test_markdown_markers_are_markup() -> None:
    assert classify("This is **bold** text") is ContentKind.MARKUP
    assert classify("# Heading") is ContentKind.MARKUP
    assert classify("Use `code` here") is ContentKind.MARKUP
    assert classify("Steps:\n- first\n- second") is ContentKind.MARKUP
    assert classify("Steps:\n1. first\n2. second") is ContentKind.MARKUP


def test_latex_is_markup() -> None:
    assert classify("Energy is $$E = mc^2$$ here") is ContentKind.MARKUP
    assert classify("The value \\frac{1}{2} appears") is ContentKind.MARKUP


def test_single_dollar_math_is_not_detected() -> None:
    assert classify("It costs $3 and then $4 more") is ContentKind.PLAIN


def test_empty_content_is_plain() -> None:
    assert classify("") is ContentKind.PLAIN


def test_has_json_content() -> None:
    assert has_json_content('{\n  "a": 1\n}')
    assert has_json_content('[\n  {"a": 1},\n  {"b": 2}\n] trailing')
    assert not has_json_content("plain words")
