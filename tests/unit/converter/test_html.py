"""Tests for the raw-HTML sanitizer."""

from __future__ import annotations

import pytest

from notionmark.converter.html import sanitize_html


class TestLineBreaks:
    @pytest.mark.parametrize("tag", ["<br>", "<br/>", "<br />", "<BR>", "<Br />", "  <br>\n"])
    def test_line_break_tags(self, tag):
        assert sanitize_html(tag) == "\n"

    def test_br_with_attributes_passes_through(self):
        assert sanitize_html('<br class="x">') == '<br class="x">'


class TestToolingComments:
    @pytest.mark.parametrize("comment", [
        "<!-- markdownlint-disable MD033 -->",
        "<!-- prettier-ignore -->",
        "<!-- prettier-ignore-start -->",
        "<!-- toc -->",
        "<!-- /toc -->",
        "<!-- omit in toc -->",
        "<!-- cspell:disable -->",
        "<!-- textlint-disable -->",
        "<!-- remark-ignore -->",
        "<!-- vale off -->",
        "<!--prettier-ignore-->",
    ])
    def test_stripped(self, comment):
        assert sanitize_html(comment) == ""

    def test_multiline_tooling_comment(self):
        assert sanitize_html("<!-- markdownlint-disable\nMD013 -->\n") == ""

    def test_ordinary_comment_kept(self):
        assert sanitize_html("<!-- note to self -->") == "<!-- note to self -->"


class TestPassThrough:
    def test_trims_whitespace(self):
        assert sanitize_html("  <span>hi</span>\n") == "<span>hi</span>"

    def test_case_preserved(self):
        assert sanitize_html("<DIV>Hi</DIV>") == "<DIV>Hi</DIV>"

    def test_empty(self):
        assert sanitize_html("") == ""
