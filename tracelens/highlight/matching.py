from __future__ import annotations

"""Exact and fuzzy evidence matching against free-form text."""

import logging
import math
import re

from tracelens.highlight.normalize import map_to_original, normalize_for_matching
from tracelens.highlight.types import MatchRange

logger = logging.getLogger(__name__)

DEFAULT_MIN_SIMILARITY = 0.75
DEFAULT_WINDOW_FACTOR = 1.5


def find_exact(text: str, term: str) -> list[MatchRange]:
    """Find every case-insensitive literal occurrence of a term."""
    if not term:
        return []
    pattern = re.compile(re.escape(term), re.IGNORECASE)
    return [
        MatchRange(start=match.start(), end=match.end())
        for match in pattern.finditer(text)
        if match.end() > match.start()
    ]


def find_fuzzy(
    text: str,
    term: str,
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    window_factor: float = DEFAULT_WINDOW_FACTOR,
) -> MatchRange | None:
    """Find the best approximate region for a term in text.

    A normalized substring match is tried first. Otherwise a window of words
    slides over the text and the leftmost window with the highest Jaccard
    similarity at or above ``min_similarity`` wins.
    """
    normalized_term = normalize_for_matching(term)
    normalized_text = normalize_for_matching(text)
    if not normalized_term or not normalized_text:
        return None

    exact_idx = normalized_text.find(normalized_term)
    if exact_idx != -1:
        return _map_or_log(text, exact_idx, len(normalized_term), term)

    needle_words = _split_words(normalized_term)
    haystack_words = _split_words(normalized_text)
    if not needle_words or not haystack_words:
        return None

    window_size = max(len(needle_words), math.floor(len(needle_words) * window_factor))
    last_start = len(haystack_words) - min(len(needle_words), len(haystack_words))

    best_window: tuple[int, int] | None = None
    best_score = 0.0
    for idx in range(last_start + 1):
        actual_size = min(window_size, len(haystack_words) - idx)
        window = haystack_words[idx : idx + actual_size]
        score = jaccard_similarity(needle_words, window)
        if score > best_score and score >= min_similarity:
            best_score = score
            best_window = (idx, idx + actual_size)

    if best_window is None:
        return None

    before = " ".join(haystack_words[: best_window[0]])
    matched = " ".join(haystack_words[best_window[0] : best_window[1]])
    norm_start = len(before) + (1 if before else 0)
    logger.debug(
        "fuzzy_window_selected",
        extra={"term": term, "score": best_score, "window": best_window},
    )
    return _map_or_log(text, norm_start, len(matched), term)


def jaccard_similarity(words_a: list[str], words_b: list[str]) -> float:
    """Return |A & B| / |A | B| over the word sets."""
    set_a = set(words_a)
    set_b = set(words_b)
    union = set_a | set_b
    if not union:
        return 0.0
    return len(set_a & set_b) / len(union)


def _split_words(normalized: str) -> list[str]:
    """Split normalized text on its single-space separators."""
    return [word for word in normalized.split(" ") if word]


def _map_or_log(text: str, norm_start: int, norm_len: int, term: str) -> MatchRange | None:
    mapped = map_to_original(text, norm_start, norm_len)
    if mapped is None:
        logger.debug("fuzzy_match_unmapped", extra={"term": term, "norm_start": norm_start})
    return mapped
