"""Public data models for notionmark.

The converter produces immutable :class:`RichText` runs and block values
(:class:`Heading`, :class:`Paragraph`, ...).  Block values carry tuples so
that whole forests compare structurally and can be hashed.  The payload
module turns them into Notion API dicts; nothing in here knows about JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union

# ---------------------------------------------------------------------------
# Rich text
# ---------------------------------------------------------------------------

class Annotation(str, Enum):
    """Text annotations a rich-text run may carry."""

    BOLD = "bold"
    ITALIC = "italic"
    STRIKETHROUGH = "strikethrough"
    CODE = "code"


@dataclass(frozen=True)
class RichText:
    """A span of text with an annotation set and an optional link.

    Attributes
    ----------
    content:
        The literal text of the run.
    annotations:
        Every annotation applied to the run.  Several may coexist.
    link:
        Target URL when the run is (part of) a hyperlink.
    """

    content: str
    annotations: frozenset[Annotation] = frozenset()
    link: str | None = None

    def with_annotation(self, annotation: Annotation) -> RichText:
        return replace(self, annotations=self.annotations | {annotation})

    def with_link(self, url: str) -> RichText:
        return replace(self, link=url)


def plain_text(runs: tuple[RichText, ...] | list[RichText]) -> str:
    """Concatenate the content of *runs*."""
    return "".join(run.content for run in runs)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Heading:
    level: int
    rich_text: tuple[RichText, ...] = ()


@dataclass(frozen=True)
class Paragraph:
    rich_text: tuple[RichText, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class BulletedListItem:
    rich_text: tuple[RichText, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class NumberedListItem:
    rich_text: tuple[RichText, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class ToDo:
    """A task item.  ``children`` holds content nested under the task."""

    checked: bool
    rich_text: tuple[RichText, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class Code:
    language: str
    rich_text: tuple[RichText, ...] = ()


@dataclass(frozen=True)
class Quote:
    rich_text: tuple[RichText, ...] = ()
    children: tuple[Block, ...] = ()


@dataclass(frozen=True)
class TableRow:
    """One table row; each cell is a tuple of runs."""

    cells: tuple[tuple[RichText, ...], ...] = ()


@dataclass(frozen=True)
class Table:
    """A table block.

    ``width`` is the number of header cells.  When ``has_header`` is true
    the first entry of ``rows`` is the header row.  A table without a
    header has ``width == 0`` even if its rows carry cells.
    """

    width: int
    has_header: bool
    rows: tuple[TableRow, ...] = ()


@dataclass(frozen=True)
class Image:
    url: str
    caption: tuple[RichText, ...] = ()


@dataclass(frozen=True)
class Divider:
    pass


Block = Union[
    Heading,
    Paragraph,
    BulletedListItem,
    NumberedListItem,
    ToDo,
    Code,
    Quote,
    Table,
    Image,
    Divider,
]
"""Every block value the converter can produce."""

NESTING_BLOCKS: tuple[type, ...] = (
    Paragraph,
    BulletedListItem,
    NumberedListItem,
    ToDo,
    Quote,
)
"""Block types that always carry a ``children`` tuple."""


# ---------------------------------------------------------------------------
# Conversion warnings and results
# ---------------------------------------------------------------------------

@dataclass
class ConversionWarning:
    """A non-fatal issue encountered during conversion.

    Attributes
    ----------
    code:
        A machine-readable warning code (e.g. ``"IMAGE_DROPPED"``).
    message:
        A human-readable description of the issue.
    context:
        Arbitrary structured data for diagnostics.
    """

    code: str
    message: str
    context: dict = field(default_factory=dict)


@dataclass
class ConversionResult:
    """Output of :meth:`MarkdownToNotionConverter.convert`.

    Attributes
    ----------
    blocks:
        Top-level blocks, with the title heading (if any) removed.
    title:
        Runs forming the page title.
    warnings:
        Non-fatal issues discovered during conversion.
    """

    blocks: list[Block] = field(default_factory=list)
    title: list[RichText] = field(default_factory=list)
    warnings: list[ConversionWarning] = field(default_factory=list)


@dataclass
class PageCreateResult:
    """Result of creating a Notion page from Markdown.

    Attributes
    ----------
    page_id:
        ID of the created page.
    url:
        URL of the created page.
    blocks_created:
        Number of top-level blocks sent to Notion.
    warnings:
        Conversion warnings carried over from the converter.
    """

    page_id: str
    url: str
    blocks_created: int
    warnings: list[ConversionWarning] = field(default_factory=list)
