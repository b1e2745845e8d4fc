from __future__ import annotations

"""Pick a renderer for a block of message text."""

import re
from enum import Enum

from tracelens.render.content import looks_like_json

_MARKDOWN_RE = re.compile(r"[#*`_\[\](){}]|^\s*[-+*]\s|^\s*\d+\.\s", re.MULTILINE)
# Single-dollar math is left out so currency amounts stay plain text.
_LATEX_RE = re.compile(r"\$\$[^$]*\$\$|\\[a-zA-Z]+\{|\\\\\(|\\\\\[")
_INDENTED_JSON_RE = re.compile(r"\n\s+[\"{\[]")


class ContentKind(str, Enum):
    JSON = "json"
    MARKUP = "markup"
    PLAIN = "plain"


def classify(content: str) -> ContentKind:
    """Classify text as structured data, markup, or plain text."""
    if looks_like_json(content):
        return ContentKind.JSON
    if has_markup(content):
        return ContentKind.MARKUP
    return ContentKind.PLAIN


def has_markup(content: str) -> bool:
    return bool(_MARKDOWN_RE.search(content) or _LATEX_RE.search(content))


def has_json_content(content: str) -> bool:
    """Return True when a pretty-print toggle is worth offering."""
    trimmed = content.strip()
    if not trimmed.startswith(("{", "[")):
        return False
    return bool(_INDENTED_JSON_RE.search(trimmed)) or looks_like_json(trimmed)
