"""notionmark.notion_api -- Notion API transport and endpoint wrappers.

* :mod:`.retries` -- retry decisions and exponential backoff.
* :mod:`.transport` -- HTTP transport with auth and retries.
* :mod:`.pages` -- page creation.
* :mod:`.blocks` -- appending children.
"""

from __future__ import annotations

from .blocks import BlockAPI
from .pages import PageAPI
from .retries import compute_backoff, should_retry
from .transport import NotionTransport

__all__ = [
    "BlockAPI",
    "NotionTransport",
    "PageAPI",
    "compute_backoff",
    "should_retry",
]
