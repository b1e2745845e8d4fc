from __future__ import annotations

"""Comparison-only text normalization and mapping back to original offsets."""

import re

from tracelens.highlight.types import MatchRange

_WHITESPACE_RE = re.compile(r"\s+")
_SINGLE_QUOTES_RE = re.compile("[‘’‚‛]")
_DOUBLE_QUOTES_RE = re.compile("[“”„‟]")
_DASHES_RE = re.compile("[—–]")

# Whole-string lowercasing turns a word-final capital sigma into "ς".
_FOLD_ALTERNATES = {"σ": ("σ", "ς")}


def normalize_for_matching(text: str) -> str:
    """Lowercase, collapse whitespace, fold quotes and dashes, then trim."""
    normalized = text.lower()
    normalized = _WHITESPACE_RE.sub(" ", normalized)
    normalized = _fold_punctuation(normalized)
    return normalized.strip()


def map_to_original(original: str, norm_start: int, norm_len: int) -> MatchRange | None:
    """Translate a span of normalized text back to original character offsets.

    Walks the original and its normalized form in lock-step. An original
    character is consumed only when its own fold equals the next expected
    normalized characters; anything else (extra whitespace in a run, leading
    whitespace) is skipped. Returns None when the walk cannot account for
    the whole requested span.
    """
    if norm_start < 0 or norm_len <= 0:
        return None
    normalized = normalize_for_matching(original)
    norm_last = norm_start + norm_len - 1
    if norm_last >= len(normalized):
        return None

    norm_idx = 0
    found_start = -1
    found_end = -1
    for orig_idx, char in enumerate(original):
        if norm_idx >= len(normalized):
            break
        folded = _fold_char(char)
        width = _consumed_width(normalized, norm_idx, folded)
        if width is None:
            continue
        consumed_end = norm_idx + width
        if found_start < 0 and norm_idx <= norm_start < consumed_end:
            found_start = orig_idx
        if norm_idx <= norm_last < consumed_end:
            found_end = orig_idx + 1
            break
        norm_idx = consumed_end

    if found_start >= 0 and found_end > found_start:
        return MatchRange(start=found_start, end=found_end)
    return None


def _consumed_width(normalized: str, norm_idx: int, folded: str) -> int | None:
    if not folded:
        return None
    for candidate in _FOLD_ALTERNATES.get(folded, (folded,)):
        if normalized.startswith(candidate, norm_idx):
            return len(candidate)
    return None


def _fold_char(char: str) -> str:
    """Normalize a single character without trimming."""
    folded = char.lower()
    if folded.isspace():
        return " "
    return _fold_punctuation(folded)


def _fold_punctuation(text: str) -> str:
    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    return _DASHES_RE.sub("-", text)
