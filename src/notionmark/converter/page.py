"""Extract the page title from a converted block list."""

from __future__ import annotations

from notionmark.config import DEFAULT_TITLE
from notionmark.models import Block, Heading, RichText, plain_text


def assemble_page(
    blocks: list[Block],
    default_title: str = DEFAULT_TITLE,
) -> tuple[list[Block], list[RichText]]:
    """Pull the first level-1 heading out of *blocks* and use it as the title.

    Only the first level-1 heading is removed; every other block keeps its
    position.  Without one, or when that heading has no text, the title is
    a single run of *default_title*.

    Parameters
    ----------
    blocks:
        Top-level blocks in document order.  Not modified.
    default_title:
        Title text used when *blocks* has no level-1 heading.

    Returns
    -------
    tuple[list[Block], list[RichText]]
        ``(remaining_blocks, title_runs)``.
    """
    for index, block in enumerate(blocks):
        if isinstance(block, Heading) and block.level == 1:
            # A heading left with no text (e.g. its image moved out) gives no title.
            title = list(block.rich_text) if plain_text(block.rich_text) else [RichText(default_title)]
            return blocks[:index] + blocks[index + 1:], title
    return list(blocks), [RichText(default_title)]
