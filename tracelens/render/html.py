from __future__ import annotations

"""Serialize segments and render trees into escaped HTML."""

from html import escape

from tracelens.highlight.types import Children, Leaf, RenderNode, Segment, SegmentGroup

VOID_TAGS = frozenset({"br", "hr", "img"})


def render_segments(segments: list[Segment] | tuple[Segment, ...]) -> str:
    """Render segments, wrapping highlighted ones in <mark>."""
    parts: list[str] = []
    for segment in segments:
        if segment.highlighted:
            parts.append(f'<mark data-key="{segment.key}">{escape(segment.text)}</mark>')
        else:
            parts.append(escape(segment.text))
    return "".join(parts)


def render_html(node: RenderNode) -> str:
    """Render a tree to HTML, leaving structural tags as they are."""
    if isinstance(node, Leaf):
        return escape(node.text)
    if isinstance(node, SegmentGroup):
        return render_segments(node.segments)
    if isinstance(node, Children):
        return "".join(render_html(child) for child in node.nodes)
    attrs = "".join(
        f' {name}="{escape(str(value))}"' for name, value in node.attrs.items()
    )
    if node.tag in VOID_TAGS:
        return f"<{node.tag}{attrs}>"
    return f"<{node.tag}{attrs}>{render_html(node.child)}</{node.tag}>"
