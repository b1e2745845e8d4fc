from __future__ import annotations

"""Structure-preserving highlighting over render trees."""

from dataclasses import replace

from tracelens.highlight.matching import DEFAULT_MIN_SIMILARITY, DEFAULT_WINDOW_FACTOR
from tracelens.highlight.ranges import highlight_text
from tracelens.highlight.types import Children, Leaf, RenderNode, SegmentGroup, Wrapper


def apply_to_tree(
    node: RenderNode,
    terms: list[str],
    min_similarity: float = DEFAULT_MIN_SIMILARITY,
    window_factor: float = DEFAULT_WINDOW_FACTOR,
) -> RenderNode:
    """Highlight every leaf of a tree without touching its structure.

    Each leaf is matched on its own, so a term that spans two inline nodes
    (for example across an emphasis boundary) is only found where a single
    leaf contains it.
    """
    if not terms:
        return node
    if isinstance(node, Leaf):
        return SegmentGroup(tuple(highlight_text(node.text, terms, min_similarity, window_factor)))
    if isinstance(node, Children):
        return Children(
            tuple(apply_to_tree(child, terms, min_similarity, window_factor) for child in node.nodes)
        )
    if isinstance(node, Wrapper):
        return replace(node, child=apply_to_tree(node.child, terms, min_similarity, window_factor))
    return node


def count_nodes(node: RenderNode) -> tuple[int, int]:
    """Return (text leaf count, structural node count) for a tree."""
    if isinstance(node, (Leaf, SegmentGroup)):
        return 1, 0
    if isinstance(node, Children):
        leaves, structural = 0, 1
        for child in node.nodes:
            child_leaves, child_structural = count_nodes(child)
            leaves += child_leaves
            structural += child_structural
        return leaves, structural
    child_leaves, child_structural = count_nodes(node.child)
    return child_leaves, child_structural + 1


def tree_text(node: RenderNode) -> str:
    """Concatenate the leaf text of a tree in document order."""
    if isinstance(node, (Leaf, SegmentGroup)):
        return node.text
    if isinstance(node, Children):
        return "".join(tree_text(child) for child in node.nodes)
    return tree_text(node.child)
