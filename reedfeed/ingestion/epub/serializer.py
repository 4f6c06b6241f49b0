"""
HTML Block Serializer

Converts a parsed XHTML spine document into markdown-ish text.

Every element is classified into a closed set of ElementKind values and
serialized by the handler registered for that kind:

    h1-h6      -> "# Title" ... "###### Title" with blank-line padding
    strong, b  -> **bold**
    em, i      -> *italic*
    u          -> _underlined_
    br         -> line break
    p          -> blank-line padded block
    li         -> "- item" line
    ul, ol     -> children wrapped in single newlines
    pre        -> text kept as-is, blank-line padded
    (other)    -> children passed through unchanged

Only block-level children of the body are serialized at the top level;
when the body has none, the whole root is serialized instead.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from enum import Enum

from bs4 import BeautifulSoup, CData, NavigableString, Tag

TOP_LEVEL_BLOCK_TAGS = frozenset(
    {"h1", "h2", "h3", "h4", "h5", "h6", "p", "ul", "ol", "blockquote", "pre"}
)


class ElementKind(str, Enum):
    """Markup-relevant element kinds."""

    HEADING = "heading"
    STRONG = "strong"
    EMPHASIS = "emphasis"
    UNDERLINE = "underline"
    LINE_BREAK = "line_break"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list_item"
    LIST = "list"
    PREFORMATTED = "preformatted"
    OTHER = "other"


_TAG_KINDS: dict[str, ElementKind] = {
    **{f"h{level}": ElementKind.HEADING for level in range(1, 7)},
    "strong": ElementKind.STRONG,
    "b": ElementKind.STRONG,
    "em": ElementKind.EMPHASIS,
    "i": ElementKind.EMPHASIS,
    "u": ElementKind.UNDERLINE,
    "br": ElementKind.LINE_BREAK,
    "p": ElementKind.PARAGRAPH,
    "li": ElementKind.LIST_ITEM,
    "ul": ElementKind.LIST,
    "ol": ElementKind.LIST,
    "pre": ElementKind.PREFORMATTED,
}


def classify(tag_name: str) -> ElementKind:
    """Map a tag name (any case, namespace prefix ignored) to its kind."""
    local_name = tag_name.rsplit(":", 1)[-1].lower()
    return _TAG_KINDS.get(local_name, ElementKind.OTHER)


# -----------------------------------------------------------------------------
# Handlers: (tag, serialized children) -> markup
# -----------------------------------------------------------------------------


def _heading(tag: Tag, inner: str) -> str:
    text = inner.strip()
    if not text:
        return ""
    level = int(tag.name.rsplit(":", 1)[-1][1])
    return f"\n\n{'#' * level} {text}\n\n"


def _inline(marker: str) -> Callable[[Tag, str], str]:
    def handler(tag: Tag, inner: str) -> str:
        core = inner.strip()
        if not core:
            return inner
        leading = inner[: len(inner) - len(inner.lstrip())]
        trailing = inner[len(inner.rstrip()) :]
        return f"{leading}{marker}{core}{marker}{trailing}"

    return handler


def _line_break(tag: Tag, inner: str) -> str:
    return "\n"


def _paragraph(tag: Tag, inner: str) -> str:
    return f"\n\n{inner.strip()}\n\n"


def _list_item(tag: Tag, inner: str) -> str:
    return f"- {inner.strip()}\n"


def _list(tag: Tag, inner: str) -> str:
    return f"\n{inner}\n"


def _preformatted(tag: Tag, inner: str) -> str:
    return f"\n\n{inner.strip(chr(10))}\n\n"


def _passthrough(tag: Tag, inner: str) -> str:
    return inner


_HANDLERS: dict[ElementKind, Callable[[Tag, str], str]] = {
    ElementKind.HEADING: _heading,
    ElementKind.STRONG: _inline("**"),
    ElementKind.EMPHASIS: _inline("*"),
    ElementKind.UNDERLINE: _inline("_"),
    ElementKind.LINE_BREAK: _line_break,
    ElementKind.PARAGRAPH: _paragraph,
    ElementKind.LIST_ITEM: _list_item,
    ElementKind.LIST: _list,
    ElementKind.PREFORMATTED: _preformatted,
    ElementKind.OTHER: _passthrough,
}


# -----------------------------------------------------------------------------
# Serialization
# -----------------------------------------------------------------------------


def serialize_node(node: object, *, preformatted: bool = False) -> str:
    """Recursively serialize a node and its children."""
    if isinstance(node, NavigableString):
        # Comments, doctypes and processing instructions are NavigableString
        # subclasses too
        if type(node) is not NavigableString and not isinstance(node, CData):
            return ""
        text = str(node)
        return text if preformatted else re.sub(r"\s+", " ", text)

    if not isinstance(node, Tag):
        return ""

    kind = classify(node.name)
    inside_pre = preformatted or kind is ElementKind.PREFORMATTED
    inner = "".join(serialize_node(child, preformatted=inside_pre) for child in node.children)
    return _HANDLERS[kind](node, inner)


def normalize_markdown(text: str) -> str:
    """Collapse spaces/tabs, strip indentation after newlines, limit blank runs."""
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n[ \t]+", "\n", text)
    text = re.sub(r"[ \t]+\n", "\n", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def serialize_document(root: Tag | BeautifulSoup) -> str:
    """
    Serialize a body (or document root) to markdown.

    Args:
        root: The ``<body>`` element, or the document root when there is none.
            ``<script>``/``<style>`` should already be removed.

    Returns:
        Normalized markdown text ("" when the document has no text)
    """
    blocks = [
        child
        for child in root.children
        if isinstance(child, Tag)
        and child.name.rsplit(":", 1)[-1].lower() in TOP_LEVEL_BLOCK_TAGS
    ]
    if blocks:
        raw = "\n\n".join(serialize_node(block) for block in blocks)
    else:
        raw = serialize_node(root)
    return normalize_markdown(raw)
