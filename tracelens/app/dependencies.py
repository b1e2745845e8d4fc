from __future__ import annotations

from functools import lru_cache

from tracelens.app.settings import settings
from tracelens.highlight.engine import EvidenceHighlighter


@lru_cache
def get_highlighter() -> EvidenceHighlighter:
    return EvidenceHighlighter(
        min_similarity=settings.min_similarity,
        window_factor=settings.window_factor,
    )


def reset_highlighter_cache() -> None:
    get_highlighter.cache_clear()


def build_highlighter(min_similarity: float | None) -> EvidenceHighlighter:
    """Return the shared highlighter, or one with a per-request threshold."""
    highlighter = get_highlighter()
    if min_similarity is None or min_similarity == highlighter.min_similarity:
        return highlighter
    return EvidenceHighlighter(
        min_similarity=min_similarity,
        window_factor=highlighter.window_factor,
    )
