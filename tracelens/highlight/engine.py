from __future__ import annotations

"""Configured entry point for evidence highlighting."""

from dataclasses import dataclass

from tracelens.highlight.matching import DEFAULT_MIN_SIMILARITY, DEFAULT_WINDOW_FACTOR
from tracelens.highlight.ranges import build_segments, match_terms, merge_ranges
from tracelens.highlight.tree import apply_to_tree
from tracelens.highlight.types import MatchRange, RenderNode, Segment, TermMatch


@dataclass(frozen=True)
class EvidenceHighlighter:
    """Highlight evidence terms using a fixed fuzzy-matching configuration."""
    min_similarity: float = DEFAULT_MIN_SIMILARITY
    window_factor: float = DEFAULT_WINDOW_FACTOR

    def explain(self, text: str, terms: list[str]) -> list[TermMatch]:
        return match_terms(text, terms, self.min_similarity, self.window_factor)

    def find_ranges(self, text: str, terms: list[str]) -> list[MatchRange]:
        candidates = [r for match in self.explain(text, terms) for r in match.ranges]
        return merge_ranges(candidates)

    def segments(self, text: str, terms: list[str]) -> list[Segment]:
        if not terms:
            return build_segments(text, [])
        return build_segments(text, self.find_ranges(text, terms))

    def apply_to_tree(self, node: RenderNode, terms: list[str]) -> RenderNode:
        return apply_to_tree(node, terms, self.min_similarity, self.window_factor)
