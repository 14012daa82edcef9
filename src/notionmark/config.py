"""Configuration for notionmark.

:class:`NotionmarkConfig` is a plain dataclass holding every setting used
by the converter, the Notion transport and the CLI.  The same instance is
shared by :class:`~notionmark.client.NotionmarkClient` and
:class:`~notionmark.converter.md_to_notion.MarkdownToNotionConverter`.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Literal
from urllib.parse import urlparse

DEFAULT_TITLE = "Unnamed Document"
"""Page title used when the document has no level-1 heading."""

HEADING_OVERFLOW_MODES = ("downgrade", "paragraph")

_LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})

_NON_NEGATIVE_FIELDS = ("retry_max_attempts", "retry_base_delay", "retry_max_delay")


def _mask_token(token: str) -> str:
    return f"...{token[-4:]}" if len(token) >= 4 else "****"


@dataclass
class NotionmarkConfig:
    """Settings for a conversion or an upload.

    Conversions need no token; uploads need only ``token``.  Every other
    field has a working default.

    Parameters
    ----------
    token:
        Notion integration token.  Masked in ``repr`` and never logged.
    notion_version:
        ``Notion-Version`` header sent with each request.
    base_url:
        Root of the Notion REST API.  Plain ``http`` is only accepted for
        local hosts.
    default_title:
        Page title when the Markdown has no level-1 heading.
    heading_overflow:
        What to do with headings deeper than Notion's three levels.

        * ``"downgrade"`` -- emit them as ``heading_3``.
        * ``"paragraph"`` -- emit a paragraph with bold text.
    retry_max_attempts:
        Attempts per request, counting the first one.
    retry_base_delay:
        Seconds before the first retry; doubled after each attempt.
    retry_max_delay:
        Ceiling in seconds for a single backoff delay.
    retry_jitter:
        Scale each backoff delay by a random factor between 0.5 and 1.
    timeout_seconds:
        Per-request timeout.
    http_proxy:
        Proxy URL passed to httpx, if any.
    metrics:
        Object implementing :class:`~notionmark.observability.MetricsHook`.
        ``None`` means metrics are discarded.
    debug_dump_ast:
        Print the parsed source tree to *stderr* for each conversion.
    debug_dump_payload:
        Print the serialized block payload to *stderr* for each conversion.
    """

    # -- Notion API ----------------------------------------------------------
    token: str = ""
    notion_version: str = "2022-06-28"
    base_url: str = "https://api.notion.com/v1"

    # -- Conversion ----------------------------------------------------------
    default_title: str = DEFAULT_TITLE
    heading_overflow: Literal["downgrade", "paragraph"] = "downgrade"

    # -- Retries and HTTP ----------------------------------------------------
    retry_max_attempts: int = 5
    retry_base_delay: float = 1.0
    retry_max_delay: float = 60.0
    retry_jitter: bool = True
    timeout_seconds: float = 30.0
    http_proxy: str | None = None

    # -- Diagnostics ---------------------------------------------------------
    metrics: Any | None = None
    debug_dump_ast: bool = False
    debug_dump_payload: bool = False

    def __post_init__(self) -> None:
        url = urlparse(self.base_url)
        if url.scheme == "http" and url.hostname not in _LOCAL_HOSTS:
            raise ValueError(
                f"base_url {self.base_url!r} would send the token over insecure HTTP; "
                "use https unless the host is local."
            )
        if self.heading_overflow not in HEADING_OVERFLOW_MODES:
            raise ValueError(
                f"heading_overflow must be one of {HEADING_OVERFLOW_MODES}, "
                f"got {self.heading_overflow!r}"
            )
        for name in _NON_NEGATIVE_FIELDS:
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} cannot be negative (got {value})")
        if self.timeout_seconds <= 0:
            raise ValueError(f"timeout_seconds must be positive (got {self.timeout_seconds})")

    def __repr__(self) -> str:
        fields = ", ".join(
            f"token='{_mask_token(self.token)}'" if f.name == "token"
            else f"{f.name}={getattr(self, f.name)!r}"
            for f in dataclasses.fields(self)
        )
        return f"NotionmarkConfig({fields})"
