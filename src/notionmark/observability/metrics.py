"""Pluggable metrics for notionmark.

Nothing is recorded unless ``NotionmarkConfig(metrics=...)`` is given an
object with the three methods of :class:`MetricsHook`; a StatsD or
Prometheus adapter needs only a few lines.  Without one, calls go to
:class:`NoopMetricsHook`.

Names in use:

* ``notionmark.requests_total`` (counter)
* ``notionmark.retries_total`` (counter)
* ``notionmark.rate_limited_total`` (counter)
* ``notionmark.request_duration_ms`` (timing)
* ``notionmark.blocks_converted_total`` (counter)
* ``notionmark.conversion_warnings_total`` (counter)
* ``notionmark.blocks_created_total`` (counter)
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class MetricsHook(Protocol):
    """Interface a metrics backend implements.

    *tags* maps string keys to string values and may be ``None``.
    """

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        """Add *value* to the counter *name*."""
        ...

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        """Record a duration of *ms* milliseconds."""
        ...

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        """Set *name* to *value*."""
        ...


class NoopMetricsHook:
    """Accepts every call and records nothing."""

    __slots__ = ()

    def increment(self, name: str, value: int = 1, tags: dict[str, str] | None = None) -> None:
        return None

    def timing(self, name: str, ms: float, tags: dict[str, str] | None = None) -> None:
        return None

    def gauge(self, name: str, value: float, tags: dict[str, str] | None = None) -> None:
        return None
