"""Tests for Notion API payload serialization."""

from __future__ import annotations

import pytest

from notionmark.converter.payload import (
    RICH_TEXT_LIMIT,
    block_to_payload,
    blocks_to_payload,
    rich_text_to_payload,
    split_rich_text,
    title_to_payload,
)
from notionmark.models import (
    Annotation,
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


class TestRichText:
    def test_plain_run_has_no_annotations_or_link(self):
        assert rich_text_to_payload([RichText("hi")]) == [
            {"type": "text", "text": {"content": "hi"}},
        ]

    def test_annotations_emitted_with_every_key(self):
        (seg,) = rich_text_to_payload([RichText("b", frozenset({Annotation.BOLD, Annotation.CODE}))])
        assert seg["annotations"] == {
            "bold": True,
            "italic": False,
            "strikethrough": False,
            "underline": False,
            "code": True,
            "color": "default",
        }

    def test_link(self):
        (seg,) = rich_text_to_payload([RichText("docs", link="https://x.test")])
        assert seg["text"] == {"content": "docs", "link": {"url": "https://x.test"}}

    def test_empty_run_kept(self):
        assert rich_text_to_payload([RichText("")]) == [{"type": "text", "text": {"content": ""}}]

    def test_long_run_split(self):
        run = RichText("x" * (RICH_TEXT_LIMIT * 2 + 5), frozenset({Annotation.ITALIC}), "https://x.test")
        segments = rich_text_to_payload([run])
        assert [len(s["text"]["content"]) for s in segments] == [RICH_TEXT_LIMIT, RICH_TEXT_LIMIT, 5]
        assert all(s["annotations"]["italic"] for s in segments)
        assert all(s["text"]["link"] == {"url": "https://x.test"} for s in segments)

    def test_split_rich_text_custom_limit(self):
        runs = split_rich_text([RichText("abcdef"), RichText("g")], limit=4)
        assert [r.content for r in runs] == ["abcd", "ef", "g"]


class TestBlocks:
    def test_heading(self):
        payload = block_to_payload(Heading(level=2, rich_text=(RichText("T"),)))
        assert payload == {
            "object": "block",
            "type": "heading_2",
            "heading_2": {
                "rich_text": [{"type": "text", "text": {"content": "T"}}],
                "color": "default",
                "is_toggleable": False,
            },
        }

    @pytest.mark.parametrize(("block", "tag"), [
        (Paragraph(), "paragraph"),
        (BulletedListItem(), "bulleted_list_item"),
        (NumberedListItem(), "numbered_list_item"),
        (Quote(), "quote"),
        (ToDo(checked=False), "to_do"),
    ])
    def test_nesting_blocks_always_have_children(self, block, tag):
        payload = block_to_payload(block)
        assert payload["type"] == tag
        assert payload[tag]["children"] == []
        assert payload[tag]["rich_text"] == []

    def test_nested_children_serialized(self):
        block = BulletedListItem(
            rich_text=(RichText("a"),),
            children=(ToDo(checked=True, rich_text=(RichText("b"),)),),
        )
        payload = block_to_payload(block)
        (child,) = payload["bulleted_list_item"]["children"]
        assert child["type"] == "to_do"
        assert child["to_do"]["checked"] is True

    def test_code(self):
        payload = block_to_payload(Code(language="go", rich_text=(RichText("x"),)))
        assert payload["code"]["language"] == "go"
        assert payload["code"]["caption"] == []

    def test_image(self):
        payload = block_to_payload(Image(url="https://x.test/a.png", caption=(RichText("c"),)))
        assert payload["image"]["type"] == "external"
        assert payload["image"]["external"] == {"url": "https://x.test/a.png"}
        assert payload["image"]["caption"][0]["text"]["content"] == "c"

    def test_divider(self):
        assert block_to_payload(Divider()) == {"object": "block", "type": "divider", "divider": {}}

    def test_table_rows_padded_to_width(self):
        table = Table(
            width=2,
            has_header=True,
            rows=(
                TableRow(cells=((RichText("a"),), (RichText("b"),))),
                TableRow(cells=((RichText("1"),),)),
                TableRow(cells=((RichText("x"),), (RichText("y"),), (RichText("z"),))),
            ),
        )
        payload = block_to_payload(table)["table"]
        assert payload["table_width"] == 2
        assert payload["has_column_header"] is True
        assert payload["has_row_header"] is False
        assert [len(r["table_row"]["cells"]) for r in payload["children"]] == [2, 2, 2]
        assert payload["children"][1]["table_row"]["cells"][1] == []

    def test_headerless_table_keeps_cells(self):
        table = Table(width=0, has_header=False, rows=(TableRow(cells=((RichText("a"),),)),))
        payload = block_to_payload(table)["table"]
        assert payload["table_width"] == 0
        assert len(payload["children"][0]["table_row"]["cells"]) == 1

    def test_non_block_raises(self):
        with pytest.raises(TypeError):
            block_to_payload({"type": "paragraph"})

    def test_blocks_to_payload_order(self):
        payloads = blocks_to_payload([Divider(), Paragraph()])
        assert [p["type"] for p in payloads] == ["divider", "paragraph"]


class TestTitle:
    def test_title_property(self):
        assert title_to_payload([RichText("Doc")]) == {
            "title": [{"type": "text", "text": {"content": "Doc"}}],
        }
