"""Decide how each source node kind is converted.

A node is either *inline-convertible* (flattened into rich-text runs),
*block-convertible* (dispatched into one or more blocks) or unsupported
on its own (only reachable through its parent's rule).  The decision is a
pure function of the node kind, plus one level of lookahead for
``TEXT_BLOCK``: a text block that opens with a task checkbox has to become
a to-do block, so it is not inline-convertible.
"""

from __future__ import annotations

from enum import Enum

from notionmark.converter.source import NodeKind, SourceNode


class Convertibility(str, Enum):
    INLINE = "inline"
    BLOCK = "block"
    UNSUPPORTED = "unsupported"


KIND_CLASSES: dict[NodeKind, Convertibility] = {
    NodeKind.TEXT: Convertibility.INLINE,
    NodeKind.EMPHASIS: Convertibility.INLINE,
    NodeKind.STRIKETHROUGH: Convertibility.INLINE,
    NodeKind.CODE_SPAN: Convertibility.INLINE,
    NodeKind.LINK: Convertibility.INLINE,
    NodeKind.AUTO_LINK: Convertibility.INLINE,
    NodeKind.RAW_HTML: Convertibility.INLINE,
    NodeKind.PARAGRAPH: Convertibility.INLINE,
    NodeKind.TEXT_BLOCK: Convertibility.INLINE,
    NodeKind.HEADING: Convertibility.BLOCK,
    NodeKind.LIST: Convertibility.BLOCK,
    NodeKind.BLOCKQUOTE: Convertibility.BLOCK,
    NodeKind.TABLE: Convertibility.BLOCK,
    NodeKind.THEMATIC_BREAK: Convertibility.BLOCK,
    NodeKind.FENCED_CODE: Convertibility.BLOCK,
    NodeKind.CODE_BLOCK: Convertibility.BLOCK,
    NodeKind.IMAGE: Convertibility.BLOCK,
    NodeKind.HTML_BLOCK: Convertibility.BLOCK,
    NodeKind.LIST_ITEM: Convertibility.UNSUPPORTED,
    NodeKind.TASK_CHECKBOX: Convertibility.UNSUPPORTED,
    NodeKind.TABLE_HEADER_ROW: Convertibility.UNSUPPORTED,
    NodeKind.TABLE_ROW: Convertibility.UNSUPPORTED,
    NodeKind.TABLE_CELL: Convertibility.UNSUPPORTED,
    NodeKind.DOCUMENT: Convertibility.UNSUPPORTED,
}
"""Base classification per kind, before lookahead."""


def is_task_text_block(node: SourceNode) -> bool:
    """True for a ``TEXT_BLOCK`` whose first child is a task checkbox."""
    first = node.first_child
    return (
        node.kind is NodeKind.TEXT_BLOCK
        and first is not None
        and first.kind is NodeKind.TASK_CHECKBOX
    )


def classify(node: SourceNode) -> Convertibility:
    """Return how *node* is converted."""
    if is_task_text_block(node):
        return Convertibility.BLOCK
    return KIND_CLASSES.get(node.kind, Convertibility.UNSUPPORTED)


def is_inline_convertible(node: SourceNode) -> bool:
    return classify(node) is Convertibility.INLINE


def is_block_convertible(node: SourceNode) -> bool:
    return classify(node) is Convertibility.BLOCK
