"""Dispatch source nodes into block builders.

:func:`to_blocks` maps one node onto zero or more :class:`BlockBuilder`
values, using a dispatch table keyed on
:class:`~notionmark.converter.source.NodeKind`:

- heading -> heading_1/2/3 (level 4+ per ``heading_overflow``)
- paragraph, text block -> paragraph
- block quote -> quote
- list -> bulleted_list_item / numbered_list_item per item
- task item -> to_do, at any list depth
- fenced / indented code -> code
- thematic break -> divider
- image -> image with caption
- table -> table with header row first
- HTML block -> paragraph of sanitized text

Paragraphs, quotes and list items share one rule: leading inline children
become the block's rich text until the first child that has to be a
block; from there on every child is dispatched as a nested block.
"""

from __future__ import annotations

from collections.abc import Callable

from notionmark.converter.builders import (
    BOLD,
    BREAK_BEFORE,
    BlockBuilder,
    BlockDecoration,
    BlockType,
    Cell,
    Decoration,
    RichTextBuilder,
    RichTextDecorator,
    decorate_all,
)
from notionmark.converter.classify import is_inline_convertible, is_task_text_block
from notionmark.converter.context import ConversionContext
from notionmark.converter.languages import PLAIN_TEXT, normalize_language
from notionmark.converter.rich_text import decoration_for, extract_decorated, extract_rich_texts
from notionmark.converter.source import LEAF_KINDS, NodeKind, SourceNode
from notionmark.errors import (
    NotionmarkEmptyNodeAtBlockLevelError,
    NotionmarkMustBeBlockError,
    NotionmarkUnsupportedNodeKindError,
)

_UNORDERED_MARKERS: frozenset[str] = frozenset({"-", "+", "*"})

# Kinds that are meaningful without children.
_CHILDLESS_OK: frozenset[NodeKind] = LEAF_KINDS | {
    NodeKind.THEMATIC_BREAK,
    NodeKind.IMAGE,
    NodeKind.BLOCKQUOTE,
}

_PARAGRAPH_KINDS: frozenset[NodeKind] = frozenset({NodeKind.PARAGRAPH, NodeKind.TEXT_BLOCK})


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def build_blocks(
    root: SourceNode,
    context: ConversionContext | None = None,
) -> list[BlockBuilder]:
    """Dispatch every child of a document node."""
    ctx = context if context is not None else ConversionContext()
    builders: list[BlockBuilder] = []
    for child in root.children:
        builders.extend(to_blocks(child, ctx))
    return builders


def to_blocks(
    node: SourceNode,
    context: ConversionContext | None = None,
) -> list[BlockBuilder]:
    """Turn *node* into block builders.

    Parameters
    ----------
    node:
        A block-level node, or an inline node that ended up outside a
        rich-text prefix (it is wrapped in a paragraph).
    context:
        Conversion state; a default context is created when omitted.

    Raises
    ------
    NotionmarkUnsupportedNodeKindError
        If *node*'s kind has no block mapping.
    NotionmarkEmptyNodeAtBlockLevelError
        If *node* is a container without children.
    """
    ctx = context if context is not None else ConversionContext()

    if is_task_text_block(node):
        handler: _Handler | None = _build_task_text_block
    else:
        handler = _BLOCK_HANDLERS.get(node.kind)
        if handler is None and is_inline_convertible(node):
            handler = _wrap_inline
    if handler is None:
        raise NotionmarkUnsupportedNodeKindError(
            message=f"No block mapping for node kind '{node.kind.value}'",
            context={"node_kind": node.kind.value},
        )
    if not node.children and node.kind not in _CHILDLESS_OK:
        raise NotionmarkEmptyNodeAtBlockLevelError(
            message=f"'{node.kind.value}' node without children reached block dispatch",
            context={"node_kind": node.kind.value},
        )

    builders = handler(node, ctx)
    ctx.observer.blocks_dispatched(node, builders)
    return builders


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

def _leading_inline(
    children: list[SourceNode],
    ctx: ConversionContext,
) -> tuple[list[RichTextBuilder], list[BlockBuilder]]:
    """Split *children* into a leading rich-text prefix and nested blocks.

    The prefix ends at the first child that is block-convertible or whose
    extraction reports that it must be a block.  Every later child is
    dispatched, including inline ones.  Consecutive paragraphs inside the
    prefix are joined with a newline.
    """
    runs: list[RichTextBuilder] = []
    blocks: list[BlockBuilder] = []
    in_prefix = True
    for child in children:
        if in_prefix and is_inline_convertible(child):
            try:
                extracted = extract_decorated(child, ctx)
            except NotionmarkMustBeBlockError:
                pass
            else:
                if runs and extracted and child.kind in _PARAGRAPH_KINDS:
                    extracted[0].decorate_with(BREAK_BEFORE)
                runs.extend(extracted)
                continue
        in_prefix = False
        blocks.extend(to_blocks(child, ctx))
    return runs, blocks


def _split_inline(
    children: list[SourceNode],
    ctx: ConversionContext,
) -> tuple[list[RichTextBuilder], list[BlockBuilder]]:
    """Extract *children* as rich text, pulling out only what must be a block.

    Unlike :func:`_leading_inline` the text after an image stays in the
    runs: a wrapper holding an image is split open and its remaining text
    keeps the wrapper's decoration.
    """
    runs: list[RichTextBuilder] = []
    blocks: list[BlockBuilder] = []
    for child in children:
        try:
            runs.extend(extract_decorated(child, ctx))
        except NotionmarkMustBeBlockError:
            if child.kind is NodeKind.IMAGE or not child.children:
                blocks.extend(to_blocks(child, ctx))
                continue
            inner_runs, inner_blocks = _split_inline(child.children, ctx)
            decorator = decoration_for(child)
            runs.extend(decorate_all(inner_runs, decorator))
            blocks.extend(_carry_decoration(inner_blocks, decorator, ctx))
    return runs, blocks


def _carry_decoration(
    blocks: list[BlockBuilder],
    decorator: RichTextDecorator | None,
    ctx: ConversionContext,
) -> list[BlockBuilder]:
    """Apply an enclosing inline decoration to image captions in *blocks*.

    A link around an image without a caption has nowhere to go; it is
    reported as a warning.
    """
    if decorator is None:
        return blocks
    for block in blocks:
        if block.block_type is not BlockType.IMAGE:
            continue
        if block.runs:
            decorate_all(block.runs, decorator)
        elif decorator.decoration is Decoration.LINK:
            ctx.add_warning(
                "LINK_DROPPED",
                "Link around an image without a caption was dropped.",
                destination=decorator.url,
                image=block.attrs.get("url", ""),
            )
    return blocks


def _inline_only(
    children: list[SourceNode],
    ctx: ConversionContext,
    where: str,
) -> list[RichTextBuilder]:
    """Extract *children* where blocks cannot nest, dropping images."""
    runs: list[RichTextBuilder] = []
    for child in children:
        try:
            runs.extend(extract_decorated(child, ctx))
        except NotionmarkMustBeBlockError as exc:
            ctx.add_warning(
                "IMAGE_DROPPED",
                f"Image inside {where} cannot be represented and was dropped.",
                location=where,
                **exc.context,
            )
    return runs


# ---------------------------------------------------------------------------
# Block handlers
# ---------------------------------------------------------------------------

def _build_heading(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    """Headings hold rich text only; images inside move after the heading."""
    trailing: list[BlockBuilder] = []
    try:
        runs = extract_rich_texts(node, ctx)
    except NotionmarkMustBeBlockError:
        runs, trailing = _split_inline(node.children, ctx)

    level = node.level
    if level > 3 and ctx.config.heading_overflow == "paragraph":
        block = BlockBuilder(BlockType.PARAGRAPH, runs=decorate_all(runs, BOLD))
    else:
        block = BlockBuilder(BlockType.HEADING, runs=runs, attrs={"level": min(level, 3)})
    return [block, *trailing]


def _build_paragraph(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    runs, blocks = _leading_inline(node.children, ctx)
    return [BlockBuilder(BlockType.PARAGRAPH, runs=runs, children=blocks)]


def _build_block_quote(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    runs, blocks = _leading_inline(node.children, ctx)
    return [BlockBuilder(BlockType.QUOTE, runs=runs, children=blocks)]


def _wrap_inline(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    """An inline node outside any rich-text prefix becomes its own paragraph.

    A wrapper whose content is all blocks (a linked image) yields those
    blocks directly, with its decoration moved onto image captions.
    """
    if not node.children:
        return [BlockBuilder(BlockType.PARAGRAPH, runs=extract_decorated(node, ctx))]
    decorator = decoration_for(node)
    runs, blocks = _leading_inline(node.children, ctx)
    decorate_all(runs, decorator)
    _carry_decoration(blocks, decorator, ctx)
    if not runs:
        return blocks
    return [BlockBuilder(BlockType.PARAGRAPH, runs=runs, children=blocks)]


def _build_code(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    language = normalize_language(node.info) if node.kind is NodeKind.FENCED_CODE else PLAIN_TEXT
    return [BlockBuilder(
        BlockType.CODE,
        runs=extract_rich_texts(node, ctx),
        attrs={"language": language},
    )]


def _build_divider(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    return [BlockBuilder(BlockType.DIVIDER)]


def _build_image(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    caption = _inline_only(node.children, ctx, "image caption")
    return [BlockBuilder(BlockType.IMAGE, runs=caption, attrs={"url": node.destination})]


def _build_table(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    headers: list[Cell] | None = None
    rows: list[list[Cell]] = []
    for child in node.children:
        if child.kind is NodeKind.TABLE_HEADER_ROW:
            headers = (headers or []) + [_table_cell(c, ctx) for c in child.children]
        elif child.kind is NodeKind.TABLE_ROW:
            rows.append([_table_cell(c, ctx) for c in child.children])
        else:
            raise NotionmarkUnsupportedNodeKindError(
                message=f"Unexpected '{child.kind.value}' node inside a table",
                context={"node_kind": child.kind.value},
            )
    return [BlockBuilder(BlockType.TABLE, headers=headers, rows=rows)]


def _table_cell(cell: SourceNode, ctx: ConversionContext) -> Cell:
    if not cell.children:
        return extract_rich_texts(cell, ctx)
    return _inline_only(cell.children, ctx, "table cell")


def _build_list(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    ordered = node.marker not in _UNORDERED_MARKERS
    builders: list[BlockBuilder] = []
    for item in node.children:
        if item.kind is not NodeKind.LIST_ITEM:
            raise NotionmarkUnsupportedNodeKindError(
                message=f"Unexpected '{item.kind.value}' node inside a list",
                context={"node_kind": item.kind.value},
            )
        builders.append(_build_list_item(item, ordered, ctx))
    return builders


def _build_list_item(item: SourceNode, ordered: bool, ctx: ConversionContext) -> BlockBuilder:
    first = item.first_child
    if first is not None and is_task_text_block(first):
        return _build_todo(first, item.children[1:], ctx)
    runs, blocks = _leading_inline(item.children, ctx)
    block_type = BlockType.NUMBERED_LIST_ITEM if ordered else BlockType.BULLETED_LIST_ITEM
    return BlockBuilder(block_type, runs=runs, children=blocks)


def _build_todo(
    text_block: SourceNode,
    rest: list[SourceNode],
    ctx: ConversionContext,
) -> BlockBuilder:
    """Build a to-do from a checkbox text block and the item's other children."""
    checkbox, *label = text_block.children
    runs, blocks = _leading_inline(label, ctx)
    for child in rest:
        blocks.extend(to_blocks(child, ctx))
    return BlockBuilder(
        BlockType.TO_DO,
        runs=runs,
        children=blocks,
        attrs={"checked": checkbox.checked},
    )


def _build_task_text_block(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    return [_build_todo(node, [], ctx)]


def _build_html_block(node: SourceNode, ctx: ConversionContext) -> list[BlockBuilder]:
    block = BlockBuilder(BlockType.PARAGRAPH, runs=extract_rich_texts(node, ctx))
    block.decorate_with(BlockDecoration.DROP_EMPTY_RUNS)
    return [block]


_Handler = Callable[[SourceNode, ConversionContext], list[BlockBuilder]]

_BLOCK_HANDLERS: dict[NodeKind, _Handler] = {
    NodeKind.HEADING: _build_heading,
    NodeKind.PARAGRAPH: _build_paragraph,
    NodeKind.TEXT_BLOCK: _build_paragraph,
    NodeKind.BLOCKQUOTE: _build_block_quote,
    NodeKind.LIST: _build_list,
    NodeKind.FENCED_CODE: _build_code,
    NodeKind.CODE_BLOCK: _build_code,
    NodeKind.THEMATIC_BREAK: _build_divider,
    NodeKind.IMAGE: _build_image,
    NodeKind.TABLE: _build_table,
    NodeKind.HTML_BLOCK: _build_html_block,
}
