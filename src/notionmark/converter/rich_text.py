"""Flatten inline subtrees into rich-text builders.

:func:`extract_rich_texts` walks a node's subtree in document order and
returns one :class:`RichTextBuilder` per leaf.  Each child's builders are
decorated according to that child's kind, so decorations accumulate
across nesting levels::

    Hello **[foo](https://x.test)**

    TEXT "Hello "                  -> "Hello "
    EMPHASIS(2) > LINK > TEXT "foo" -> "foo" [link(https://x.test), bold]

Images cannot be flattened.  Extracting one raises
:class:`NotionmarkMustBeBlockError` so the caller can dispatch the node as
a block instead.
"""

from __future__ import annotations

from notionmark.converter.builders import (
    BOLD,
    CODE,
    ITALIC,
    STRIKETHROUGH,
    RichTextBuilder,
    RichTextDecorator,
    decorate_all,
    link,
)
from notionmark.converter.context import ConversionContext
from notionmark.converter.source import LEAF_KINDS, NodeKind, SourceNode
from notionmark.errors import NotionmarkMustBeBlockError, NotionmarkUnsupportedNodeKindError


def decoration_for(node: SourceNode) -> RichTextDecorator | None:
    """Return the decorator a node applies to its own runs, if any."""
    kind = node.kind
    if kind is NodeKind.STRIKETHROUGH:
        return STRIKETHROUGH
    if kind is NodeKind.EMPHASIS:
        return ITALIC if node.level == 1 else BOLD
    if kind is NodeKind.CODE_SPAN:
        return CODE
    if kind is NodeKind.LINK:
        return link(node.destination)
    return None


def extract_rich_texts(
    node: SourceNode,
    context: ConversionContext | None = None,
) -> list[RichTextBuilder]:
    """Flatten *node*'s subtree into rich-text builders.

    Parameters
    ----------
    node:
        The node to flatten.  A node without children yields exactly one
        builder over its own literal.
    context:
        Conversion state; a default context is created when omitted.

    Returns
    -------
    list[RichTextBuilder]
        Builders in document order.  *node*'s own decoration is **not**
        applied; use :func:`extract_decorated` for that.

    Raises
    ------
    NotionmarkMustBeBlockError
        If *node* or any descendant is an image.
    NotionmarkUnsupportedNodeKindError
        If a childless node has no literal content (e.g. a bare checkbox).
    """
    ctx = context if context is not None else ConversionContext()

    if node.kind is NodeKind.IMAGE:
        raise NotionmarkMustBeBlockError(
            message="Images cannot be flattened into rich text",
            context={"node_kind": node.kind.value, "destination": node.destination},
        )

    if not node.children:
        if node.kind not in LEAF_KINDS:
            raise NotionmarkUnsupportedNodeKindError(
                message=f"Cannot extract rich text from empty '{node.kind.value}' node",
                context={"node_kind": node.kind.value},
            )
        builders = [RichTextBuilder(node)]
    else:
        builders = []
        for child in node.children:
            builders.extend(extract_decorated(child, ctx))

    ctx.observer.rich_texts_extracted(node, builders)
    return builders


def extract_decorated(
    node: SourceNode,
    context: ConversionContext | None = None,
) -> list[RichTextBuilder]:
    """Like :func:`extract_rich_texts`, with *node*'s own decoration applied."""
    return decorate_all(extract_rich_texts(node, context), decoration_for(node))
