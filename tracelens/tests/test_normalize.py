from __future__ import annotations

"""Normalization and position mapping tests."""

from tracelens.highlight.normalize import map_to_original, normalize_for_matching


def test_normalize_lowercases_and_collapses_whitespace() -> None:
    assert normalize_for_matching("  The\tQuick \n\n Fox  ") == "the quick fox"


def test_normalize_folds_quotes_and_dashes() -> None:
    text = "“It’s” ‘ok’ — fine – done"
    assert normalize_for_matching(text) == "\"it's\" 'ok' - fine - done"


def test_normalize_is_total_on_empty_and_blank() -> None:
    assert normalize_for_matching("") == ""
    assert normalize_for_matching(" \n\t ") == ""


def test_map_recovers_span_after_whitespace_runs() -> None:
    original = "The   quick\n\nbrown fox"
    normalized = normalize_for_matching(original)
    start = normalized.index("quick brown")

    mapped = map_to_original(original, start, len("quick brown"))

    assert mapped is not None
    assert original[mapped.start : mapped.end] == "quick\n\nbrown"


def test_map_skips_leading_whitespace() -> None:
    original = "   Hello world"
    mapped = map_to_original(original, 0, 5)

    assert mapped is not None
    assert original[mapped.start : mapped.end] == "Hello"


def test_map_handles_folded_punctuation() -> None:
    original = "She said “yes” — twice"
    normalized = normalize_for_matching(original)
    start = normalized.index('"yes" - twice')

    mapped = map_to_original(original, start, len('"yes" - twice'))

    assert mapped is not None
    assert original[mapped.start : mapped.end] == "“yes” — twice"


def test_map_rejects_out_of_range_and_empty_spans() -> None:
    assert map_to_original("short", 2, 10) is None
    assert map_to_original("short", 0, 0) is None
    assert map_to_original("short", -1, 2) is None
    assert map_to_original("", 0, 1) is None


def test_map_walks_past_word_final_sigma() -> None:
    original = "ΟΔΟΣ alpha beta"
    assert normalize_for_matching(original) == "οδος alpha beta"

    mapped = map_to_original(original, 5, 10)

    assert mapped is not None
    assert original[mapped.start : mapped.end] == "alpha beta"
