from __future__ import annotations

"""Adapt markdown-it syntax trees into highlightable render trees."""

from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from tracelens.highlight.types import Children, Leaf, RenderNode, Wrapper


@lru_cache
def get_parser() -> MarkdownIt:
    """Return the shared CommonMark parser with tables and strikethrough."""
    return MarkdownIt("commonmark", {"html": False}).enable(["table", "strikethrough"])


def build_tree(text: str) -> RenderNode:
    """Parse markdown text into Leaf/Children/Wrapper nodes."""
    root = SyntaxTreeNode(get_parser().parse(text))
    return _convert_children(root)


def _convert_children(node: SyntaxTreeNode) -> Children:
    return Children(tuple(_convert(child) for child in node.children))


def _convert(node: SyntaxTreeNode) -> RenderNode:
    node_type = node.type
    if node_type in {"text", "html_inline", "html_block"}:
        return Leaf(node.content)
    if node_type == "softbreak":
        return Leaf("\n")
    if node_type == "hardbreak":
        return Wrapper("br")
    if node_type == "hr":
        return Wrapper("hr")
    if node_type == "inline":
        return _convert_children(node)
    if node_type == "code_inline":
        return Wrapper("code", Leaf(node.content))
    if node_type in {"fence", "code_block"}:
        return Wrapper("pre", Wrapper("code", Leaf(node.content), _code_attrs(node.info)))
    if node_type == "image":
        attrs = {"src": str(node.attrs.get("src", "")), "alt": node.content}
        if node.attrs.get("title"):
            attrs["title"] = str(node.attrs["title"])
        return Wrapper("img", attrs=attrs)
    if node.hidden or not node.tag:
        # Tight list paragraphs render without their <p>.
        return _convert_children(node)
    return Wrapper(node.tag, _convert_children(node), dict(node.attrs))


def _code_attrs(info: str) -> dict[str, str]:
    language = info.strip().split()[0] if info.strip() else ""
    if not language:
        return {}
    return {"class": f"language-{language}"}
