"""Serialize block values into Notion API payload dicts.

A rich_text segment::

    {
        "type": "text",
        "text": {"content": "hello", "link": {"url": "https://..."}},
        "annotations": {"bold": true, "italic": false, "strikethrough": false,
                         "underline": false, "code": false, "color": "default"}
    }

``link`` and ``annotations`` are only present when set.  Block kinds that
can nest always carry ``"children": []`` even when empty.  Runs longer
than Notion's 2000-character limit are split into several segments with
the same annotations and link.
"""

from __future__ import annotations

from dataclasses import replace
from functools import singledispatch
from typing import Any

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
    ToDo,
)
from notionmark.utils.text_split import split_string

RICH_TEXT_LIMIT = 2000


# ---------------------------------------------------------------------------
# Rich text
# ---------------------------------------------------------------------------

def _annotations(run: RichText) -> dict[str, Any]:
    return {
        "bold": Annotation.BOLD in run.annotations,
        "italic": Annotation.ITALIC in run.annotations,
        "strikethrough": Annotation.STRIKETHROUGH in run.annotations,
        "underline": False,
        "code": Annotation.CODE in run.annotations,
        "color": "default",
    }


def _make_text_segment(content: str, run: RichText) -> dict[str, Any]:
    text: dict[str, Any] = {"content": content}
    if run.link:
        text["link"] = {"url": run.link}
    seg: dict[str, Any] = {"type": "text", "text": text}
    if run.annotations:
        seg["annotations"] = _annotations(run)
    return seg


def split_rich_text(
    runs: tuple[RichText, ...] | list[RichText],
    limit: int = RICH_TEXT_LIMIT,
) -> list[RichText]:
    """Split runs longer than *limit* into consecutive runs that keep the
    original annotations and link.  Empty runs are kept as they are.
    """
    result: list[RichText] = []
    for run in runs:
        chunks = split_string(run.content, limit)
        if len(chunks) <= 1:
            result.append(run)
        else:
            result.extend(replace(run, content=chunk) for chunk in chunks)
    return result


def rich_text_to_payload(
    runs: tuple[RichText, ...] | list[RichText],
    limit: int = RICH_TEXT_LIMIT,
) -> list[dict[str, Any]]:
    """Convert runs into a Notion rich_text array.

    Parameters
    ----------
    runs:
        Materialized runs.
    limit:
        Maximum characters per segment.

    Returns
    -------
    list[dict]
        One segment per run, or several for runs longer than *limit*.
        Runs with empty content produce a single empty segment.
    """
    return [_make_text_segment(run.content, run) for run in split_rich_text(runs, limit)]


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def _block(block_type: str, body: dict[str, Any]) -> dict[str, Any]:
    return {"object": "block", "type": block_type, block_type: body}


def _nesting_body(block: Any) -> dict[str, Any]:
    return {
        "rich_text": rich_text_to_payload(block.rich_text),
        "color": "default",
        "children": blocks_to_payload(block.children),
    }


@singledispatch
def block_to_payload(block: Any) -> dict[str, Any]:
    """Convert one block value into its Notion API dict."""
    raise TypeError(f"Not a block value: {type(block).__name__}")


@block_to_payload.register
def _(block: Heading) -> dict[str, Any]:
    return _block(f"heading_{block.level}", {
        "rich_text": rich_text_to_payload(block.rich_text),
        "color": "default",
        "is_toggleable": False,
    })


@block_to_payload.register
def _(block: Paragraph) -> dict[str, Any]:
    return _block("paragraph", _nesting_body(block))


@block_to_payload.register
def _(block: BulletedListItem) -> dict[str, Any]:
    return _block("bulleted_list_item", _nesting_body(block))


@block_to_payload.register
def _(block: NumberedListItem) -> dict[str, Any]:
    return _block("numbered_list_item", _nesting_body(block))


@block_to_payload.register
def _(block: Quote) -> dict[str, Any]:
    return _block("quote", _nesting_body(block))


@block_to_payload.register
def _(block: ToDo) -> dict[str, Any]:
    body = _nesting_body(block)
    body["checked"] = block.checked
    return _block("to_do", body)


@block_to_payload.register
def _(block: Code) -> dict[str, Any]:
    return _block("code", {
        "rich_text": rich_text_to_payload(block.rich_text),
        "language": block.language,
        "caption": [],
    })


@block_to_payload.register
def _(block: Image) -> dict[str, Any]:
    return _block("image", {
        "type": "external",
        "external": {"url": block.url},
        "caption": rich_text_to_payload(block.caption),
    })


@block_to_payload.register
def _(block: Divider) -> dict[str, Any]:
    return _block("divider", {})


@block_to_payload.register
def _(block: Table) -> dict[str, Any]:
    rows = []
    for row in block.rows:
        cells = [rich_text_to_payload(cell) for cell in row.cells]
        # Notion requires exactly table_width cells per row.
        if block.width:
            cells = (cells + [[] for _ in range(block.width)])[:block.width]
        rows.append(_block("table_row", {"cells": cells}))
    return _block("table", {
        "table_width": block.width,
        "has_column_header": block.has_header,
        "has_row_header": False,
        "children": rows,
    })


def blocks_to_payload(blocks: tuple[Block, ...] | list[Block]) -> list[dict[str, Any]]:
    """Convert a block forest into a list of Notion block dicts."""
    return [block_to_payload(block) for block in blocks]


def title_to_payload(title: list[RichText]) -> dict[str, Any]:
    """Build the ``properties`` dict carrying a page title."""
    return {"title": rich_text_to_payload(title)}
