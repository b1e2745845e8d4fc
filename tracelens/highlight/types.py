from __future__ import annotations

"""Core data types for match ranges, segments, and render trees."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


@dataclass(frozen=True)
class MatchRange:
    """Half-open character span in original text."""
    start: int
    end: int
    term_index: int | None = None

    def __post_init__(self) -> None:
        if self.start < 0 or self.end <= self.start:
            raise ValueError(f"Invalid match range: {self.start}-{self.end}")


class SegmentKind(str, Enum):
    PLAIN = "plain"
    HIGHLIGHTED = "highlighted"


@dataclass(frozen=True)
class Segment:
    """Slice of original text, either plain or highlighted."""
    kind: SegmentKind
    text: str
    start: int
    end: int
    term_index: int | None = None

    @property
    def key(self) -> str:
        """Deterministic render key for this slice."""
        if self.term_index is None:
            return f"{self.start}-{self.end}"
        return f"{self.start}-{self.end}-{self.term_index}"

    @property
    def highlighted(self) -> bool:
        return self.kind is SegmentKind.HIGHLIGHTED


@dataclass(frozen=True)
class TermMatch:
    """How a single evidence term matched a text."""
    term: str
    term_index: int
    strategy: str
    ranges: tuple[MatchRange, ...] = ()


@dataclass(frozen=True)
class Leaf:
    """Text-bearing leaf of a render tree."""
    text: str


@dataclass(frozen=True)
class Children:
    """Ordered list of sibling nodes."""
    nodes: tuple["RenderNode", ...] = ()


@dataclass(frozen=True)
class Wrapper:
    """Structural node such as a paragraph, emphasis, or list item."""
    tag: str
    child: "RenderNode" = field(default_factory=Children)
    attrs: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SegmentGroup:
    """Leaf text that has been cut into plain/highlighted segments."""
    segments: tuple[Segment, ...]

    @property
    def text(self) -> str:
        return "".join(segment.text for segment in self.segments)


RenderNode = Union[Leaf, Children, Wrapper, SegmentGroup]
