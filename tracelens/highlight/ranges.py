from __future__ import annotations

"""Range collection, merging, and segment construction."""

import logging
from dataclasses import replace

from tracelens.highlight.matching import (
    DEFAULT_MIN_SIMILARITY,
    DEFAULT_WINDOW_FACTOR,
    find_exact,
    find_fuzzy,
)
from tracelens.highlight.types import MatchRange, Segment, SegmentKind, TermMatch

logger = logging.getLogger(__name__)


def match_terms(
    text: str,
    terms: list[str],
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    window_factor: float = DEFAULT_WINDOW_FACTOR,
) -> list[TermMatch]:
    """Match each term independently, falling back to fuzzy search."""
    results: list[TermMatch] = []
    for term_index, term in enumerate(terms or []):
        trimmed = str(term or "").strip()
        if not trimmed:
            continue
        exact = [
            replace(match, term_index=term_index) for match in find_exact(text, trimmed)
        ]
        if exact:
            results.append(TermMatch(trimmed, term_index, "exact", tuple(exact)))
            continue
        fuzzy = find_fuzzy(
            text,
            trimmed,
            min_similarity=min_similarity,
            window_factor=window_factor,
        )
        if fuzzy is None:
            results.append(TermMatch(trimmed, term_index, "none"))
            continue
        results.append(
            TermMatch(trimmed, term_index, "fuzzy", (replace(fuzzy, term_index=term_index),))
        )
    return results


def collect_ranges(
    text: str,
    terms: list[str],
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    window_factor: float = DEFAULT_WINDOW_FACTOR,
) -> list[MatchRange]:
    """Return merged highlight ranges for all terms."""
    matches = match_terms(text, terms, min_similarity, window_factor)
    candidates = [match_range for match in matches for match_range in match.ranges]
    return merge_ranges(candidates)


def merge_ranges(ranges: list[MatchRange]) -> list[MatchRange]:
    """Merge overlapping or touching ranges into a sorted disjoint list."""
    if not ranges:
        return []
    ordered = sorted(ranges, key=lambda item: item.start)
    merged: list[MatchRange] = [ordered[0]]
    for current in ordered[1:]:
        last = merged[-1]
        if current.start <= last.end:
            if current.end > last.end:
                merged[-1] = replace(last, end=current.end)
        else:
            merged.append(current)
    return merged


def build_segments(text: str, ranges: list[MatchRange]) -> list[Segment]:
    """Cut text into alternating plain and highlighted segments."""
    if not ranges:
        return [Segment(SegmentKind.PLAIN, text, 0, len(text))]
    segments: list[Segment] = []
    last_end = 0
    for match in ranges:
        if match.start > last_end:
            segments.append(
                Segment(SegmentKind.PLAIN, text[last_end : match.start], last_end, match.start)
            )
        segments.append(
            Segment(
                SegmentKind.HIGHLIGHTED,
                text[match.start : match.end],
                match.start,
                match.end,
                match.term_index,
            )
        )
        last_end = match.end
    if last_end < len(text):
        segments.append(Segment(SegmentKind.PLAIN, text[last_end:], last_end, len(text)))
    return segments


def highlight_text(
    text: str,
    terms: list[str],
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    window_factor: float = DEFAULT_WINDOW_FACTOR,
) -> list[Segment]:
    """Collect, merge, and segment highlights for a flat string."""
    if not terms:
        return build_segments(text, [])
    ranges = collect_ranges(text, terms, min_similarity, window_factor)
    if not ranges:
        logger.debug("highlight_no_matches", extra={"term_count": len(terms)})
    return build_segments(text, ranges)
