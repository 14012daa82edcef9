"""Parse Markdown into the converter's source tree.

This module wraps mistune v3's AST renderer and maps its token stream onto
the closed :class:`~notionmark.converter.source.NodeKind` set.  Literal
text is interned into a single source buffer; nodes only keep
:class:`~notionmark.converter.source.Segment` spans into it.

Token mapping::

    heading          -> HEADING (leaf when the heading is empty)
    paragraph        -> PARAGRAPH
    block_text       -> TEXT_BLOCK      (tight list item content)
    text             -> TEXT (character references decoded)
    softbreak        -> TEXT " "
    linebreak        -> TEXT "\\n"
    emphasis/strong  -> EMPHASIS level 1 / 2
    codespan         -> CODE_SPAN[TEXT]
    strikethrough    -> STRIKETHROUGH
    link             -> LINK, or AUTO_LINK when the label is the URL itself
    inline_html      -> RAW_HTML
    block_html       -> HTML_BLOCK
    image            -> IMAGE
    list             -> LIST (marker from mistune's ``bullet``)
    list_item        -> LIST_ITEM
    task_list_item   -> LIST_ITEM[TEXT_BLOCK[TASK_CHECKBOX, ...], ...]
    table            -> TABLE[TABLE_HEADER_ROW, TABLE_ROW...] of TABLE_CELL
    block_quote      -> BLOCKQUOTE
    thematic_break   -> THEMATIC_BREAK
    block_code       -> FENCED_CODE or CODE_BLOCK
"""

from __future__ import annotations

from typing import Any

import mistune
from mistune.util import unescape

from notionmark.converter.source import NodeKind, ParsedDocument, Segment, SourceNode
from notionmark.errors import NotionmarkUnsupportedNodeKindError

# ---------------------------------------------------------------------------
# Mistune-to-kind mapping
# ---------------------------------------------------------------------------

_CONTAINER_TYPE_MAP: dict[str, NodeKind] = {
    "paragraph": NodeKind.PARAGRAPH,
    "block_text": NodeKind.TEXT_BLOCK,
    "block_quote": NodeKind.BLOCKQUOTE,
    "strikethrough": NodeKind.STRIKETHROUGH,
}

_LITERAL_TYPE_MAP: dict[str, NodeKind] = {
    "text": NodeKind.TEXT,
    "inline_html": NodeKind.RAW_HTML,
    "block_html": NodeKind.HTML_BLOCK,
}

# Types that are silently skipped during normalization
_SKIP_TYPES: frozenset[str] = frozenset({
    "blank_line",
})

_PLUGINS: list[str] = [
    "strikethrough",
    "table",
    "task_lists",
    "url",
]


class _SourceBuffer:
    """Append-only text buffer handing out spans for interned literals."""

    __slots__ = ("_length", "_parts")

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._length = 0

    def intern(self, text: str) -> tuple[Segment, ...]:
        start = self._length
        self._parts.append(text)
        self._length += len(text)
        return (Segment(start, self._length),)

    def getvalue(self) -> str:
        return "".join(self._parts)


class ASTNormalizer:
    """Parse Markdown and build a :class:`ParsedDocument`."""

    def __init__(self) -> None:
        self._parser = mistune.create_markdown(renderer="ast", plugins=_PLUGINS)

    def parse(self, markdown: str) -> ParsedDocument:
        """Parse *markdown* and return the document tree with its buffer."""
        raw_tokens = self._parser(markdown)
        buffer = _SourceBuffer()
        if isinstance(raw_tokens, str):
            raw_tokens = []
        root = SourceNode(
            kind=NodeKind.DOCUMENT,
            children=self._normalize_tokens(raw_tokens, buffer),
        )
        return ParsedDocument(root=root, source=buffer.getvalue())

    def _normalize_tokens(self, tokens: list[dict], buffer: _SourceBuffer) -> list[SourceNode]:
        result: list[SourceNode] = []
        for token in tokens:
            node = self._normalize_token(token, buffer)
            if node is not None:
                result.append(node)
        return result

    def _normalize_token(self, token: dict, buffer: _SourceBuffer) -> SourceNode | None:
        """Normalize a single token, returning None if it should be skipped."""
        raw_type = token.get("type", "")
        attrs: dict[str, Any] = token.get("attrs", {}) or {}

        if raw_type in _SKIP_TYPES:
            return None

        if raw_type in _LITERAL_TYPE_MAP:
            raw = token.get("raw", "")
            if raw_type == "text":
                # The AST keeps character references such as &amp; in text.
                raw = unescape(raw)
            return SourceNode(
                kind=_LITERAL_TYPE_MAP[raw_type],
                segments=buffer.intern(raw),
            )

        if raw_type in _CONTAINER_TYPE_MAP:
            return SourceNode(
                kind=_CONTAINER_TYPE_MAP[raw_type],
                children=self._children(token, buffer),
            )

        if raw_type == "softbreak":
            return SourceNode(kind=NodeKind.TEXT, segments=buffer.intern(" "))

        if raw_type == "linebreak":
            return SourceNode(kind=NodeKind.TEXT, segments=buffer.intern("\n"))

        if raw_type == "heading":
            children = self._children(token, buffer)
            node = SourceNode(
                kind=NodeKind.HEADING,
                children=children,
                attrs={"level": attrs.get("level", 1)},
            )
            if not children:
                node.segments = buffer.intern("")
            return node

        if raw_type in ("emphasis", "strong"):
            return SourceNode(
                kind=NodeKind.EMPHASIS,
                children=self._children(token, buffer),
                attrs={"level": 1 if raw_type == "emphasis" else 2},
            )

        if raw_type == "codespan":
            text = SourceNode(kind=NodeKind.TEXT, segments=buffer.intern(token.get("raw", "")))
            return SourceNode(kind=NodeKind.CODE_SPAN, children=[text])

        if raw_type == "link":
            return self._normalize_link(token, attrs, buffer)

        if raw_type == "image":
            return SourceNode(
                kind=NodeKind.IMAGE,
                children=self._children(token, buffer),
                attrs={"destination": attrs.get("url", "")},
            )

        if raw_type == "list":
            return SourceNode(
                kind=NodeKind.LIST,
                children=self._children(token, buffer),
                attrs={
                    "marker": token.get("bullet", "-"),
                    "ordered": bool(attrs.get("ordered", False)),
                },
            )

        if raw_type == "list_item":
            return self._list_item(self._children(token, buffer), buffer)

        if raw_type == "task_list_item":
            return self._task_list_item(token, attrs, buffer)

        if raw_type == "table":
            return self._normalize_table(token, buffer)

        if raw_type == "thematic_break":
            return SourceNode(kind=NodeKind.THEMATIC_BREAK)

        if raw_type == "block_code":
            kind = NodeKind.FENCED_CODE if token.get("style") == "fenced" else NodeKind.CODE_BLOCK
            node_attrs = {"info": attrs.get("info", "")} if kind is NodeKind.FENCED_CODE else {}
            return SourceNode(
                kind=kind,
                segments=buffer.intern(token.get("raw", "")),
                attrs=node_attrs,
            )

        raise NotionmarkUnsupportedNodeKindError(
            message=f"Unsupported Markdown token type '{raw_type}'",
            context={"node_kind": raw_type},
        )

    # ------------------------------------------------------------------
    # Structured tokens
    # ------------------------------------------------------------------

    def _children(self, token: dict, buffer: _SourceBuffer) -> list[SourceNode]:
        return self._normalize_tokens(token.get("children", []) or [], buffer)

    def _normalize_link(self, token: dict, attrs: dict, buffer: _SourceBuffer) -> SourceNode:
        url = attrs.get("url", "")
        raw_children = token.get("children", []) or []
        # Autolinks and bare URLs arrive as a link whose only child is the URL text.
        if len(raw_children) == 1 and raw_children[0].get("type") == "text":
            label = raw_children[0].get("raw", "")
            if label and url in (label, f"mailto:{label}"):
                return SourceNode(
                    kind=NodeKind.AUTO_LINK,
                    segments=buffer.intern(unescape(label)),
                    attrs={"destination": url},
                )
        return SourceNode(
            kind=NodeKind.LINK,
            children=self._normalize_tokens(raw_children, buffer),
            attrs={"destination": url},
        )

    def _list_item(self, children: list[SourceNode], buffer: _SourceBuffer) -> SourceNode:
        node = SourceNode(kind=NodeKind.LIST_ITEM, children=children)
        if not children:
            node.segments = buffer.intern("")
        return node

    def _task_list_item(self, token: dict, attrs: dict, buffer: _SourceBuffer) -> SourceNode:
        children = self._children(token, buffer)
        checkbox = SourceNode(
            kind=NodeKind.TASK_CHECKBOX,
            attrs={"checked": bool(attrs.get("checked", False))},
        )
        first = children[0] if children else None
        if first is not None and first.kind in (NodeKind.TEXT_BLOCK, NodeKind.PARAGRAPH):
            # Loose task lists wrap the label in a paragraph; the checkbox
            # rule is keyed on TEXT_BLOCK either way.
            first.kind = NodeKind.TEXT_BLOCK
            first.children.insert(0, checkbox)
        else:
            children.insert(0, SourceNode(kind=NodeKind.TEXT_BLOCK, children=[checkbox]))
        return SourceNode(kind=NodeKind.LIST_ITEM, children=children)

    def _normalize_table(self, token: dict, buffer: _SourceBuffer) -> SourceNode:
        rows: list[SourceNode] = []
        for part in token.get("children", []) or []:
            part_type = part.get("type")
            if part_type == "table_head":
                rows.append(SourceNode(
                    kind=NodeKind.TABLE_HEADER_ROW,
                    children=[self._table_cell(c, buffer) for c in part.get("children", [])],
                ))
            elif part_type == "table_body":
                for row in part.get("children", []) or []:
                    rows.append(SourceNode(
                        kind=NodeKind.TABLE_ROW,
                        children=[self._table_cell(c, buffer) for c in row.get("children", [])],
                    ))
            else:
                raise NotionmarkUnsupportedNodeKindError(
                    message=f"Unsupported table part '{part_type}'",
                    context={"node_kind": part_type},
                )
        return SourceNode(kind=NodeKind.TABLE, children=rows)

    def _table_cell(self, token: dict, buffer: _SourceBuffer) -> SourceNode:
        node = SourceNode(kind=NodeKind.TABLE_CELL, children=self._children(token, buffer))
        if not node.children:
            node.segments = buffer.intern("")
        return node
