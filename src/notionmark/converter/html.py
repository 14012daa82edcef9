"""Minimal raw-HTML to text sanitizer.

Notion has no HTML block, and notionmark does not parse HTML.  Raw HTML is
kept as text with two exceptions: line-break tags become a newline, and
comments that only steer Markdown tooling (linters, formatters, TOC
generators) are dropped.
"""

from __future__ import annotations

import re

_LINE_BREAK_RE = re.compile(r"^<br\s*/?>$", re.IGNORECASE)

_TOOLING_COMMENT_RE = re.compile(
    r"^<!--\s*(?:markdownlint|prettier|toc|/toc|omit in toc|cspell|textlint|remark|vale)\b.*?-->$",
    re.IGNORECASE | re.DOTALL,
)


def sanitize_html(raw: str) -> str:
    """Turn raw HTML into the text that should appear in Notion.

    Parameters
    ----------
    raw:
        Raw inline or block HTML exactly as it appeared in the Markdown.

    Returns
    -------
    str
        ``"\\n"`` for a line-break tag, ``""`` for a tooling comment, and
        the trimmed input otherwise.

    Examples
    --------
    >>> sanitize_html("<BR/>")
    '\\n'
    >>> sanitize_html("<!-- prettier-ignore -->")
    ''
    >>> sanitize_html("  <span>hi</span>\\n")
    '<span>hi</span>'
    """
    text = raw.strip()
    if _LINE_BREAK_RE.match(text):
        return "\n"
    if _TOOLING_COMMENT_RE.match(text):
        return ""
    return text
