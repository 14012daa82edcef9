"""Code-point safe string splitting for Notion's rich-text limit."""

from __future__ import annotations


def split_string(text: str, limit: int = 2000) -> list[str]:
    """Split *text* into consecutive chunks of at most *limit* characters.

    Python ``str`` indexing works on code points, so no character is ever
    cut in half.

    Parameters
    ----------
    text:
        The string to split.
    limit:
        Maximum characters per chunk.  Defaults to Notion's 2000-character
        ``text.content`` limit.

    Returns
    -------
    list[str]
        Non-empty chunks whose concatenation is *text*; ``[]`` for ``""``.

    Raises
    ------
    ValueError
        If *limit* is less than 1.

    >>> split_string("notionmark", 4)
    ['noti', 'onma', 'rk']
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    return [text[start:start + limit] for start in range(0, len(text), limit)]
