"""Two-phase construction of rich-text runs and blocks.

Walking the source tree decides *what* to build and which decorations
apply; the literal text is only read when a builder is materialized
against the source buffer.  Builders hold a node reference (or child
builders) plus an ordered list of decorator tags.  Decorators are plain
values rather than closures, so tests can inspect them before anything
is materialized.

``materialize`` constructs the value and then applies every decorator in
append order.  It may be called more than once and re-reads the buffer
each time; nothing is cached.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from notionmark.converter.html import sanitize_html
from notionmark.converter.source import NodeKind, SourceNode
from notionmark.models import (
    Annotation,
    Block,
    BulletedListItem,
    Code,
    Divider,
    Heading,
    Image,
    NumberedListItem,
    Paragraph,
    Quote,
    RichText,
    Table,
    TableRow,
    ToDo,
)

# ---------------------------------------------------------------------------
# Rich-text decorators
# ---------------------------------------------------------------------------

class Decoration(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"
    LINK = "link"
    BREAK_BEFORE = "break_before"


_DECORATION_ANNOTATIONS: dict[Decoration, Annotation] = {
    Decoration.BOLD: Annotation.BOLD,
    Decoration.ITALIC: Annotation.ITALIC,
    Decoration.STRIKETHROUGH: Annotation.STRIKETHROUGH,
    Decoration.CODE: Annotation.CODE,
}


@dataclass(frozen=True)
class RichTextDecorator:
    """A post-construction change applied to a run.

    Annotation decorators add to the run's annotation set.  A link
    decorator sets the run's link, replacing any link already present.
    A break decorator puts a newline in front of the run's content.
    """

    decoration: Decoration
    url: str | None = None

    def apply(self, run: RichText) -> RichText:
        if self.decoration is Decoration.LINK:
            return run.with_link(self.url or "")
        if self.decoration is Decoration.BREAK_BEFORE:
            return replace(run, content="\n" + run.content)
        return run.with_annotation(_DECORATION_ANNOTATIONS[self.decoration])

    def describe(self) -> str:
        if self.decoration is Decoration.LINK:
            return f"link({self.url})"
        return self.decoration.value


BOLD = RichTextDecorator(Decoration.BOLD)
ITALIC = RichTextDecorator(Decoration.ITALIC)
STRIKETHROUGH = RichTextDecorator(Decoration.STRIKETHROUGH)
CODE = RichTextDecorator(Decoration.CODE)
BREAK_BEFORE = RichTextDecorator(Decoration.BREAK_BEFORE)


def link(url: str) -> RichTextDecorator:
    return RichTextDecorator(Decoration.LINK, url)


# ---------------------------------------------------------------------------
# Rich-text construction
# ---------------------------------------------------------------------------

_TRIMMED_KINDS: frozenset[NodeKind] = frozenset({
    NodeKind.HEADING,
    NodeKind.LIST_ITEM,
    NodeKind.TABLE_CELL,
})

_CODE_KINDS: frozenset[NodeKind] = frozenset({
    NodeKind.FENCED_CODE,
    NodeKind.CODE_BLOCK,
})

_HTML_KINDS: frozenset[NodeKind] = frozenset({
    NodeKind.RAW_HTML,
    NodeKind.HTML_BLOCK,
})


def _trim_code(text: str) -> str:
    """Drop surrounding blank lines and trailing whitespace, keep indentation."""
    lines = text.rstrip().split("\n")
    while lines and not lines[0].strip():
        lines.pop(0)
    return "\n".join(lines)


def construct_rich_text(node: SourceNode, source: str) -> RichText:
    """Build the undecorated run for a leaf-eligible *node*.

    Inline text keeps its spacing.  Whole-line literals (headings, list
    items, table cells) are trimmed, code keeps its indentation, and raw
    HTML goes through :func:`sanitize_html`.
    """
    text = node.value(source)
    if node.kind in _TRIMMED_KINDS:
        return RichText(text.strip())
    if node.kind in _CODE_KINDS:
        return RichText(_trim_code(text))
    if node.kind in _HTML_KINDS:
        return RichText(sanitize_html(text))
    if node.kind is NodeKind.AUTO_LINK:
        return RichText(text, link=node.destination)
    return RichText(text)


class _Sealable:
    __slots__ = ("_sealed",)

    def _check_open(self) -> None:
        if self._sealed:
            raise RuntimeError("decorators cannot be added after materialization")


class RichTextBuilder(_Sealable):
    """Deferred construction of one :class:`RichText` run."""

    __slots__ = ("decorators", "node")

    def __init__(
        self,
        node: SourceNode,
        decorators: Iterable[RichTextDecorator] = (),
    ) -> None:
        self.node = node
        self.decorators: list[RichTextDecorator] = list(decorators)
        self._sealed = False

    def decorate_with(self, decorator: RichTextDecorator) -> RichTextBuilder:
        self._check_open()
        self.decorators.append(decorator)
        return self

    def materialize(self, source: str) -> RichText:
        self._sealed = True
        run = construct_rich_text(self.node, source)
        for decorator in self.decorators:
            run = decorator.apply(run)
        return run

    def __repr__(self) -> str:
        tags = ", ".join(d.describe() for d in self.decorators)
        return f"RichTextBuilder({self.node.kind.value}, [{tags}])"


def decorate_all(
    builders: list[RichTextBuilder],
    decorator: RichTextDecorator | None,
) -> list[RichTextBuilder]:
    """Append *decorator* to every builder (no-op for ``None``)."""
    if decorator is not None:
        for builder in builders:
            builder.decorate_with(decorator)
    return builders


# ---------------------------------------------------------------------------
# Block builders
# ---------------------------------------------------------------------------

class BlockType(str, Enum):
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    CODE = "code"
    QUOTE = "quote"
    TABLE = "table"
    IMAGE = "image"
    DIVIDER = "divider"


class BlockDecoration(str, Enum):
    DROP_EMPTY_RUNS = "drop_empty_runs"
    """Remove runs whose materialized content is empty."""


Cell = list[RichTextBuilder]


class BlockBuilder(_Sealable):
    """Deferred construction of one block.

    Parameters
    ----------
    block_type:
        The kind of block to build.
    runs:
        Builders for the block's own rich text (the caption for images).
    children:
        Builders for nested blocks.
    attrs:
        Block-specific values: ``level`` (heading), ``language`` (code),
        ``checked`` (to-do), ``url`` (image).
    headers:
        Header cells of a table, or ``None`` when the table has no header.
    rows:
        Body rows of a table, each a list of cells.
    """

    __slots__ = ("attrs", "block_type", "children", "decorations", "headers", "rows", "runs")

    def __init__(
        self,
        block_type: BlockType,
        *,
        runs: list[RichTextBuilder] | None = None,
        children: list[BlockBuilder] | None = None,
        attrs: dict[str, Any] | None = None,
        headers: list[Cell] | None = None,
        rows: list[list[Cell]] | None = None,
    ) -> None:
        self.block_type = block_type
        self.runs: list[RichTextBuilder] = runs if runs is not None else []
        self.children: list[BlockBuilder] = children if children is not None else []
        self.attrs: dict[str, Any] = attrs or {}
        self.headers = headers
        self.rows: list[list[Cell]] = rows if rows is not None else []
        self.decorations: list[BlockDecoration] = []
        self._sealed = False

    def decorate_with(self, decoration: BlockDecoration) -> BlockBuilder:
        self._check_open()
        self.decorations.append(decoration)
        return self

    def materialize(self, source: str) -> Block:
        self._sealed = True
        block = self._construct(source)
        for decoration in self.decorations:
            block = _apply_block_decoration(block, decoration)
        return block

    def _construct(self, source: str) -> Block:
        runs = tuple(b.materialize(source) for b in self.runs)
        children = tuple(materialize_all(self.children, source))
        bt = self.block_type

        if bt is BlockType.HEADING:
            return Heading(level=self.attrs["level"], rich_text=runs)
        if bt is BlockType.PARAGRAPH:
            return Paragraph(rich_text=runs, children=children)
        if bt is BlockType.BULLETED_LIST_ITEM:
            return BulletedListItem(rich_text=runs, children=children)
        if bt is BlockType.NUMBERED_LIST_ITEM:
            return NumberedListItem(rich_text=runs, children=children)
        if bt is BlockType.TO_DO:
            return ToDo(checked=self.attrs.get("checked", False), rich_text=runs, children=children)
        if bt is BlockType.CODE:
            return Code(language=self.attrs.get("language", "plain text"), rich_text=runs)
        if bt is BlockType.QUOTE:
            return Quote(rich_text=runs, children=children)
        if bt is BlockType.IMAGE:
            return Image(url=self.attrs.get("url", ""), caption=runs)
        if bt is BlockType.DIVIDER:
            return Divider()
        return self._construct_table(source)

    def _construct_table(self, source: str) -> Table:
        rows: list[TableRow] = []
        if self.headers is not None:
            rows.append(_materialize_row(self.headers, source))
        rows.extend(_materialize_row(row, source) for row in self.rows)
        return Table(
            width=len(self.headers or []),
            has_header=self.headers is not None,
            rows=tuple(rows),
        )

    def __repr__(self) -> str:
        return (
            f"BlockBuilder({self.block_type.value}, runs={len(self.runs)}, "
            f"children={len(self.children)})"
        )


def _materialize_row(cells: list[Cell], source: str) -> TableRow:
    # Empty cells materialize as an empty run list.
    return TableRow(cells=tuple(
        tuple(run for run in (b.materialize(source) for b in cell) if run.content)
        for cell in cells
    ))


def _apply_block_decoration(block: Block, decoration: BlockDecoration) -> Block:
    if decoration is BlockDecoration.DROP_EMPTY_RUNS and hasattr(block, "rich_text"):
        return replace(block, rich_text=tuple(r for r in block.rich_text if r.content))
    return block


def materialize_all(builders: Iterable[BlockBuilder], source: str) -> list[Block]:
    """Materialize every builder in *builders* against *source*."""
    return [builder.materialize(source) for builder in builders]
