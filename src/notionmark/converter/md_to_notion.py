"""Markdown to Notion conversion pipeline.

:class:`MarkdownToNotionConverter` runs the stages in order:

1. **Parse** -- :class:`ASTNormalizer` turns Markdown into a source tree and
   its source buffer.
2. **Dispatch** -- :func:`build_blocks` walks the tree and produces block
   builders, extracting rich text on the way.
3. **Materialize** -- builders are resolved against the source buffer into
   immutable block values.
4. **Assemble** -- :func:`assemble_page` pulls the title out of the first
   level-1 heading.
"""

from __future__ import annotations

import json
import sys

from notionmark.config import NotionmarkConfig
from notionmark.converter.ast_normalizer import ASTNormalizer
from notionmark.converter.block_builder import build_blocks
from notionmark.converter.builders import materialize_all
from notionmark.converter.context import ConversionContext, NoopObserver, WalkObserver
from notionmark.converter.page import assemble_page
from notionmark.converter.payload import blocks_to_payload
from notionmark.models import Block, ConversionResult, ConversionWarning
from notionmark.observability import NoopMetricsHook


class MarkdownToNotionConverter:
    """Convert Markdown text to Notion block values.

    Parameters
    ----------
    config:
        Configuration controlling heading overflow, the default title and
        debug dumps.
    observer:
        Optional :class:`WalkObserver` told about every extraction and
        dispatch step.

    Examples
    --------
    >>> converter = MarkdownToNotionConverter(NotionmarkConfig())
    >>> result = converter.convert("# Hello\\n\\nWorld")
    >>> [run.content for run in result.title]
    ['Hello']
    >>> len(result.blocks)
    1
    """

    def __init__(
        self,
        config: NotionmarkConfig | None = None,
        observer: WalkObserver | None = None,
    ) -> None:
        self._config = config if config is not None else NotionmarkConfig()
        self._observer = observer if observer is not None else NoopObserver()
        self._metrics = self._config.metrics if self._config.metrics is not None else NoopMetricsHook()
        self._normalizer = ASTNormalizer()

    def parse_blocks(self, markdown: str) -> list[Block]:
        """Convert *markdown* into top-level blocks without title extraction."""
        blocks, _ = self._convert_blocks(markdown)
        return blocks

    def convert(self, markdown: str) -> ConversionResult:
        """Full pipeline: parse -> dispatch -> materialize -> assemble title.

        Parameters
        ----------
        markdown:
            Raw Markdown text to convert.

        Returns
        -------
        ConversionResult
            ``blocks`` without the title heading, the ``title`` runs, and
            any non-fatal ``warnings``.

        Raises
        ------
        NotionmarkConversionError
            If the document contains a node the converter cannot map.
        """
        blocks, warnings = self._convert_blocks(markdown)
        blocks, title = assemble_page(blocks, self._config.default_title)

        if self._config.debug_dump_payload:
            print(
                "[notionmark] Notion blocks payload:",
                json.dumps(blocks_to_payload(blocks), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        return ConversionResult(blocks=blocks, title=title, warnings=warnings)

    def _convert_blocks(self, markdown: str) -> tuple[list[Block], list[ConversionWarning]]:
        document = self._normalizer.parse(markdown)

        if self._config.debug_dump_ast:
            print(
                "[notionmark] Source tree:",
                json.dumps(document.root.to_dict(document.source), indent=2, ensure_ascii=False),
                file=sys.stderr,
            )

        ctx = ConversionContext(config=self._config, observer=self._observer)
        builders = build_blocks(document.root, ctx)
        blocks = materialize_all(builders, document.source)

        self._metrics.increment("notionmark.blocks_converted_total", len(blocks))
        if ctx.warnings:
            self._metrics.increment("notionmark.conversion_warnings_total", len(ctx.warnings))
        return blocks, ctx.warnings
