"""Synchronous client that publishes Markdown as Notion pages.

Usage::

    from notionmark import NotionmarkClient

    with NotionmarkClient(token="secret_xxx") as client:
        result = client.create_page_from_markdown(
            parent_id="<page_id>",
            markdown="# Hello\\n\\nWorld",
        )
        print(result.url)
"""

from __future__ import annotations

from typing import Any

from notionmark.config import NotionmarkConfig
from notionmark.converter.context import WalkObserver
from notionmark.converter.md_to_notion import MarkdownToNotionConverter
from notionmark.converter.payload import blocks_to_payload, title_to_payload
from notionmark.models import PageCreateResult, RichText
from notionmark.notion_api.blocks import BlockAPI
from notionmark.notion_api.pages import PageAPI
from notionmark.notion_api.transport import NotionTransport
from notionmark.observability import NoopMetricsHook, get_logger
from notionmark.utils.chunk import chunk_children

log = get_logger("notionmark.client")


class NotionmarkClient:
    """Convert Markdown and create Notion pages from it.

    Parameters
    ----------
    token:
        Notion integration token.
    observer:
        Optional walk observer passed to the converter.
    **kwargs:
        Remaining keyword arguments are forwarded to
        :class:`NotionmarkConfig`.
    """

    def __init__(self, token: str, observer: WalkObserver | None = None, **kwargs: Any) -> None:
        self._config = NotionmarkConfig(token=token, **kwargs)
        self._transport = NotionTransport(self._config)
        self._pages = PageAPI(self._transport)
        self._blocks = BlockAPI(self._transport)
        self._converter = MarkdownToNotionConverter(self._config, observer=observer)
        self._metrics = self._config.metrics if self._config.metrics is not None else NoopMetricsHook()

    @property
    def converter(self) -> MarkdownToNotionConverter:
        return self._converter

    def create_page_from_markdown(
        self,
        parent_id: str,
        markdown: str,
        title: str | None = None,
    ) -> PageCreateResult:
        """Create a child page of *parent_id* holding *markdown*.

        Parameters
        ----------
        parent_id:
            ID of the parent page.
        markdown:
            Raw Markdown text.
        title:
            Explicit page title.  When omitted the first level-1 heading
            becomes the title (and is removed from the content), falling
            back to ``config.default_title``.

        Returns
        -------
        PageCreateResult
        """
        conversion = self._converter.convert(markdown)
        title_runs = [RichText(title)] if title is not None else conversion.title

        children = blocks_to_payload(conversion.blocks)
        batches = chunk_children(children)
        first_batch = batches[0] if batches else []

        page = self._pages.create(
            parent={"page_id": parent_id},
            properties=title_to_payload(title_runs),
            children=first_batch,
        )
        page_id = page["id"]
        for batch in batches[1:]:
            self._blocks.append_children(page_id, batch)

        self._metrics.increment("notionmark.blocks_created_total", len(children))
        log.info(
            "page created",
            extra={"extra_fields": {
                "page_id": page_id,
                "blocks": len(children),
                "batches": len(batches),
                "warnings": len(conversion.warnings),
            }},
        )
        return PageCreateResult(
            page_id=page_id,
            url=page.get("url", ""),
            blocks_created=len(children),
            warnings=list(conversion.warnings),
        )

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> NotionmarkClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
