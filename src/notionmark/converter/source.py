"""Source tree consumed by the converter.

The parser adapter turns mistune's token stream into :class:`SourceNode`
values.  Mistune does not report source offsets, so every literal (text,
code, HTML, link labels) is interned into one contiguous *source buffer*
and nodes address it through :class:`Segment` spans.  Literal content is
only read back when builders are materialized against that buffer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from notionmark.errors import NotionmarkUnsupportedNodeKindError


class NodeKind(str, Enum):
    """Closed set of node kinds produced by the parser adapter."""

    DOCUMENT = "document"
    HEADING = "heading"
    PARAGRAPH = "paragraph"
    TEXT_BLOCK = "text_block"
    TEXT = "text"
    EMPHASIS = "emphasis"
    STRIKETHROUGH = "strikethrough"
    CODE_SPAN = "code_span"
    LINK = "link"
    AUTO_LINK = "auto_link"
    RAW_HTML = "raw_html"
    HTML_BLOCK = "html_block"
    IMAGE = "image"
    LIST = "list"
    LIST_ITEM = "list_item"
    TASK_CHECKBOX = "task_checkbox"
    TABLE = "table"
    TABLE_HEADER_ROW = "table_header_row"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    BLOCKQUOTE = "blockquote"
    THEMATIC_BREAK = "thematic_break"
    FENCED_CODE = "fenced_code"
    CODE_BLOCK = "code_block"


LEAF_KINDS: frozenset[NodeKind] = frozenset({
    NodeKind.TEXT,
    NodeKind.FENCED_CODE,
    NodeKind.CODE_BLOCK,
    NodeKind.AUTO_LINK,
    NodeKind.RAW_HTML,
    NodeKind.HTML_BLOCK,
    NodeKind.LIST_ITEM,
    NodeKind.HEADING,
    NodeKind.TABLE_CELL,
})
"""Kinds whose literal content may be read directly from the buffer."""


@dataclass(frozen=True)
class Segment:
    """Half-open ``[start, stop)`` span into the source buffer."""

    start: int
    stop: int


@dataclass
class SourceNode:
    """One node of the parsed document.

    Attributes
    ----------
    kind:
        The node kind.
    children:
        Child nodes in document order.
    segments:
        Spans of literal content for leaf-eligible kinds.
    attrs:
        Kind-specific attributes, read through the accessor properties.
    """

    kind: NodeKind
    children: list[SourceNode] = field(default_factory=list)
    segments: tuple[Segment, ...] = ()
    attrs: dict[str, Any] = field(default_factory=dict)

    @property
    def first_child(self) -> SourceNode | None:
        return self.children[0] if self.children else None

    @property
    def level(self) -> int:
        """Heading level, or emphasis strength (1 = italic, 2 = strong)."""
        return int(self.attrs.get("level", 1))

    @property
    def destination(self) -> str:
        """Target URL of a link, autolink or image."""
        return str(self.attrs.get("destination", ""))

    @property
    def marker(self) -> str:
        """The list marker character (``-``, ``+``, ``*``, ``.`` or ``)``)."""
        return str(self.attrs.get("marker", "-"))

    @property
    def checked(self) -> bool:
        return bool(self.attrs.get("checked", False))

    @property
    def info(self) -> str:
        """Info string of a fenced code block (may be empty)."""
        return str(self.attrs.get("info", "") or "")

    def value(self, source: str) -> str:
        """Return the literal content of a leaf-eligible node.

        Raises
        ------
        NotionmarkUnsupportedNodeKindError
            If the node kind has no literal content of its own.
        """
        if self.kind not in LEAF_KINDS:
            raise NotionmarkUnsupportedNodeKindError(
                message=f"Node kind '{self.kind.value}' has no literal content",
                context={"node_kind": self.kind.value},
            )
        return "".join(source[seg.start:seg.stop] for seg in self.segments)

    def to_dict(self, source: str | None = None) -> dict[str, Any]:
        """Debug representation, optionally resolving literals against *source*."""
        data: dict[str, Any] = {"kind": self.kind.value}
        if self.attrs:
            data["attrs"] = dict(self.attrs)
        if self.segments:
            if source is not None and self.kind in LEAF_KINDS:
                data["value"] = self.value(source)
            else:
                data["segments"] = [[s.start, s.stop] for s in self.segments]
        if self.children:
            data["children"] = [child.to_dict(source) for child in self.children]
        return data


@dataclass
class ParsedDocument:
    """A parsed document: the root node plus the buffer its spans point into."""

    root: SourceNode
    source: str
