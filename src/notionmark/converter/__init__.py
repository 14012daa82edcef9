"""Markdown to Notion conversion pipeline.

Public API:

- :class:`MarkdownToNotionConverter` -- Markdown → Notion blocks and title.
- :class:`ASTNormalizer` -- parse Markdown into the source tree.
- :func:`classify` -- inline / block / unsupported decision per node.
- :func:`extract_rich_texts` -- flatten inline subtrees into run builders.
- :func:`to_blocks` -- dispatch one node into block builders.
- :func:`assemble_page` -- extract the title from the first level-1 heading.
- :func:`blocks_to_payload` -- serialize blocks for the Notion API.
"""

from notionmark.converter.ast_normalizer import ASTNormalizer
from notionmark.converter.block_builder import build_blocks, to_blocks
from notionmark.converter.classify import (
    Convertibility,
    classify,
    is_block_convertible,
    is_inline_convertible,
)
from notionmark.converter.context import ConversionContext, LoggingObserver, WalkObserver
from notionmark.converter.md_to_notion import MarkdownToNotionConverter
from notionmark.converter.page import assemble_page
from notionmark.converter.payload import blocks_to_payload, rich_text_to_payload, split_rich_text
from notionmark.converter.rich_text import extract_rich_texts

__all__ = [
    "ASTNormalizer",
    "ConversionContext",
    "Convertibility",
    "LoggingObserver",
    "MarkdownToNotionConverter",
    "WalkObserver",
    "assemble_page",
    "blocks_to_payload",
    "build_blocks",
    "classify",
    "extract_rich_texts",
    "is_block_convertible",
    "is_inline_convertible",
    "rich_text_to_payload",
    "split_rich_text",
    "to_blocks",
]
