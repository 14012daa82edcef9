"""notionmark -- Markdown to Notion page converter.

Public re-exports
-----------------

* **Client:** :class:`NotionmarkClient`
* **Converter:** :class:`MarkdownToNotionConverter`
* **Configuration:** :class:`NotionmarkConfig`
* **Errors:** Every :class:`NotionmarkError` subclass and :class:`ErrorCode`
* **Models:** Rich text, block values and result dataclasses

Usage::

    from notionmark import MarkdownToNotionConverter

    result = MarkdownToNotionConverter().convert("# Title\\n\\nHello **world**")
    result.title   # [RichText(content='Title', ...)]
    result.blocks  # [Paragraph(rich_text=(...), children=())]
"""

from __future__ import annotations

# ── Client ─────────────────────────────────────────────────────────────
from notionmark.client import NotionmarkClient

# ── Configuration ───────────────────────────────────────────────────────
from notionmark.config import DEFAULT_TITLE, NotionmarkConfig

# ── Converter ───────────────────────────────────────────────────────────
from notionmark.converter.md_to_notion import MarkdownToNotionConverter

# ── Errors ──────────────────────────────────────────────────────────────
from notionmark.errors import (
    ErrorCode,
    NotionmarkAuthError,
    NotionmarkConversionError,
    NotionmarkEmptyNodeAtBlockLevelError,
    NotionmarkError,
    NotionmarkMustBeBlockError,
    NotionmarkNetworkError,
    NotionmarkNotFoundError,
    NotionmarkPermissionError,
    NotionmarkRetryExhaustedError,
    NotionmarkUnsupportedNodeKindError,
    NotionmarkValidationError,
)

# ── Models ──────────────────────────────────────────────────────────────
from notionmark.models import (
    Annotation,
    Block,
    BulletedListItem,
    Code,
    ConversionResult,
    ConversionWarning,
    Divider,
    Heading,
    Image,
    NumberedListItem,
    PageCreateResult,
    Paragraph,
    Quote,
    RichText,
    Table,
    TableRow,
    ToDo,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_TITLE",
    "Annotation",
    "Block",
    "BulletedListItem",
    "Code",
    "ConversionResult",
    "ConversionWarning",
    "Divider",
    "ErrorCode",
    "Heading",
    "Image",
    "MarkdownToNotionConverter",
    "NotionmarkAuthError",
    "NotionmarkClient",
    "NotionmarkConfig",
    "NotionmarkConversionError",
    "NotionmarkEmptyNodeAtBlockLevelError",
    "NotionmarkError",
    "NotionmarkMustBeBlockError",
    "NotionmarkNetworkError",
    "NotionmarkNotFoundError",
    "NotionmarkPermissionError",
    "NotionmarkRetryExhaustedError",
    "NotionmarkUnsupportedNodeKindError",
    "NotionmarkValidationError",
    "NumberedListItem",
    "PageCreateResult",
    "Paragraph",
    "Quote",
    "RichText",
    "Table",
    "TableRow",
    "ToDo",
    "__version__",
]
