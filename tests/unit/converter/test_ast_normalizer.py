"""Tests for the mistune adapter that builds the source tree."""

from __future__ import annotations

import pytest

from notionmark.converter.ast_normalizer import ASTNormalizer
from notionmark.converter.source import NodeKind, SourceNode
from notionmark.errors import NotionmarkUnsupportedNodeKindError


@pytest.fixture
def normalizer() -> ASTNormalizer:
    return ASTNormalizer()


def kinds(nodes: list[SourceNode]) -> list[NodeKind]:
    return [n.kind for n in nodes]


class TestDocument:
    def test_empty_input(self, normalizer):
        doc = normalizer.parse("")
        assert doc.root.kind is NodeKind.DOCUMENT
        assert doc.root.children == []
        assert doc.source == ""

    def test_blank_lines_skipped(self, normalizer):
        doc = normalizer.parse("one\n\n\n\ntwo")
        assert kinds(doc.root.children) == [NodeKind.PARAGRAPH, NodeKind.PARAGRAPH]

    def test_literals_are_interned_into_buffer(self, normalizer):
        doc = normalizer.parse("Hello **foobar**")
        para = doc.root.children[0]
        text, strong = para.children
        assert text.value(doc.source) == "Hello "
        assert strong.children[0].value(doc.source) == "foobar"
        assert "Hello " in doc.source
        assert "foobar" in doc.source


class TestHeadings:
    def test_heading_level_and_text(self, normalizer):
        doc = normalizer.parse("## Section")
        heading = doc.root.children[0]
        assert heading.kind is NodeKind.HEADING
        assert heading.level == 2
        assert heading.children[0].value(doc.source) == "Section"


class TestInline:
    def test_emphasis_levels(self, normalizer):
        doc = normalizer.parse("*a* **b**")
        children = doc.root.children[0].children
        emphases = [c for c in children if c.kind is NodeKind.EMPHASIS]
        assert [e.level for e in emphases] == [1, 2]

    def test_code_span_wraps_text(self, normalizer):
        doc = normalizer.parse("`x = 1`")
        span = doc.root.children[0].children[0]
        assert span.kind is NodeKind.CODE_SPAN
        assert span.children[0].kind is NodeKind.TEXT
        assert span.children[0].value(doc.source) == "x = 1"

    def test_strikethrough(self, normalizer):
        doc = normalizer.parse("~~gone~~")
        strike = doc.root.children[0].children[0]
        assert strike.kind is NodeKind.STRIKETHROUGH
        assert strike.children[0].value(doc.source) == "gone"

    def test_softbreak_becomes_space(self, normalizer):
        doc = normalizer.parse("a\nb")
        para = doc.root.children[0]
        assert "".join(c.value(doc.source) for c in para.children) == "a b"

    def test_character_references_decoded_in_text(self, normalizer):
        doc = normalizer.parse("Tom &amp; Jerry &lt;3 &#169;")
        para = doc.root.children[0]
        assert "".join(c.value(doc.source) for c in para.children) == "Tom & Jerry <3 ©"

    def test_character_references_kept_in_code_span(self, normalizer):
        doc = normalizer.parse("`&amp;`")
        span = doc.root.children[0].children[0]
        assert span.children[0].value(doc.source) == "&amp;"

    def test_link_with_label(self, normalizer):
        doc = normalizer.parse("[site](https://example.com)")
        link = doc.root.children[0].children[0]
        assert link.kind is NodeKind.LINK
        assert link.destination == "https://example.com"
        assert link.children[0].value(doc.source) == "site"

    def test_angle_autolink(self, normalizer):
        doc = normalizer.parse("<https://example.com>")
        auto = doc.root.children[0].children[0]
        assert auto.kind is NodeKind.AUTO_LINK
        assert auto.destination == "https://example.com"
        assert auto.value(doc.source) == "https://example.com"

    def test_inline_html(self, normalizer):
        doc = normalizer.parse("line<br>next")
        children = doc.root.children[0].children
        assert NodeKind.RAW_HTML in kinds(children)

    def test_image(self, normalizer):
        doc = normalizer.parse("![alt](https://example.com/a.png)")
        image = doc.root.children[0].children[0]
        assert image.kind is NodeKind.IMAGE
        assert image.destination == "https://example.com/a.png"
        assert image.children[0].value(doc.source) == "alt"


class TestLists:
    def test_bullet_list(self, normalizer):
        doc = normalizer.parse("- a\n- b")
        lst = doc.root.children[0]
        assert lst.kind is NodeKind.LIST
        assert lst.marker == "-"
        assert kinds(lst.children) == [NodeKind.LIST_ITEM, NodeKind.LIST_ITEM]
        assert lst.children[0].children[0].kind is NodeKind.TEXT_BLOCK

    def test_ordered_list_marker(self, normalizer):
        doc = normalizer.parse("1. a\n2. b")
        assert doc.root.children[0].marker == "."

    def test_task_items_get_checkbox(self, normalizer):
        doc = normalizer.parse("- [ ] A\n- [x] B")
        items = doc.root.children[0].children
        for item, checked, label in zip(items, [False, True], ["A", "B"]):
            assert item.kind is NodeKind.LIST_ITEM
            text_block = item.children[0]
            assert text_block.kind is NodeKind.TEXT_BLOCK
            checkbox, text = text_block.children
            assert checkbox.kind is NodeKind.TASK_CHECKBOX
            assert checkbox.checked is checked
            assert text.value(doc.source) == label


class TestBlocks:
    def test_block_quote(self, normalizer):
        doc = normalizer.parse("> # Title\n> body")
        quote = doc.root.children[0]
        assert quote.kind is NodeKind.BLOCKQUOTE
        assert kinds(quote.children) == [NodeKind.HEADING, NodeKind.PARAGRAPH]

    def test_thematic_break(self, normalizer):
        doc = normalizer.parse("---")
        assert kinds(doc.root.children) == [NodeKind.THEMATIC_BREAK]

    def test_fenced_code(self, normalizer):
        doc = normalizer.parse("```python\nprint(1)\n```")
        code = doc.root.children[0]
        assert code.kind is NodeKind.FENCED_CODE
        assert code.info == "python"
        assert code.value(doc.source) == "print(1)\n"

    def test_fenced_code_without_info(self, normalizer):
        doc = normalizer.parse("```\nplain\n```")
        code = doc.root.children[0]
        assert code.kind is NodeKind.FENCED_CODE
        assert code.info == ""

    def test_indented_code(self, normalizer):
        doc = normalizer.parse("    x = 1")
        code = doc.root.children[0]
        assert code.kind is NodeKind.CODE_BLOCK
        assert code.value(doc.source).strip() == "x = 1"

    def test_html_block(self, normalizer):
        doc = normalizer.parse("<div>hi</div>")
        html = doc.root.children[0]
        assert html.kind is NodeKind.HTML_BLOCK
        assert html.value(doc.source).strip() == "<div>hi</div>"


class TestTables:
    def test_header_and_body_rows(self, normalizer):
        doc = normalizer.parse("| a | b |\n|---|---|\n| 1 | 2 |\n| 3 | 4 |")
        table = doc.root.children[0]
        assert table.kind is NodeKind.TABLE
        assert kinds(table.children) == [
            NodeKind.TABLE_HEADER_ROW,
            NodeKind.TABLE_ROW,
            NodeKind.TABLE_ROW,
        ]
        header = table.children[0]
        assert kinds(header.children) == [NodeKind.TABLE_CELL, NodeKind.TABLE_CELL]
        first_cell = header.children[0]
        assert first_cell.children[0].value(doc.source) == "a"


class TestUnknownTokens:
    def test_unknown_token_raises(self, normalizer):
        with pytest.raises(NotionmarkUnsupportedNodeKindError) as exc_info:
            normalizer._normalize_token({"type": "footnote_ref"}, None)
        assert exc_info.value.context["node_kind"] == "footnote_ref"


class TestToDict:
    def test_resolves_leaf_values(self, normalizer):
        doc = normalizer.parse("# Hi")
        data = doc.root.to_dict(doc.source)
        assert data["kind"] == "document"
        heading = data["children"][0]
        assert heading["kind"] == "heading"
        assert heading["attrs"] == {"level": 1}
        assert heading["children"][0] == {"kind": "text", "value": "Hi"}

    def test_segments_without_source(self, normalizer):
        doc = normalizer.parse("Hi")
        text = doc.root.to_dict()["children"][0]["children"][0]
        assert text["segments"] == [[0, 2]]
