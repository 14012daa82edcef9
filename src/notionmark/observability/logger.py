"""JSON logging for notionmark.

Each record becomes one line of JSON, so the output of the CLI and of the
client can be fed to a log pipeline as is::

    {"ts": "2026-01-05T09:30:00.000000+00:00", "level": "DEBUG",
     "logger": "notionmark.converter", "message": "blocks dispatched",
     "node_kind": "list", "blocks": ["to_do", "to_do"]}

Structured fields travel in ``extra={"extra_fields": {...}}``::

    from notionmark.observability import get_logger

    log = get_logger("notionmark.client")
    log.info("page created", extra={"extra_fields": {"blocks": 12}})
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import IO, Any

_BASE_FIELDS = ("ts", "level", "logger", "message")


class StructuredFormatter(logging.Formatter):
    """Render a :class:`logging.LogRecord` as a single JSON object.

    The object always carries ``ts`` (UTC, ISO-8601), ``level``,
    ``logger`` and ``message``.  Entries of the record's ``extra_fields``
    dict are added at the top level.  Tracebacks go under ``exception``
    and ``stack_info``.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = dict(zip(_BASE_FIELDS, (
            datetime.now(timezone.utc).isoformat(),
            record.levelname,
            record.name,
            record.getMessage(),
        )))
        payload.update(getattr(record, "extra_fields", None) or {})

        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)
        if record.stack_info:
            payload["stack_info"] = self.formatStack(record.stack_info)

        # Enum members, node objects and the like are logged through str().
        return json.dumps(payload, default=str)


# Names that already have a JSON handler attached.
_configured: set[str] = set()


def get_logger(
    name: str = "notionmark",
    *,
    level: int | str = logging.WARNING,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Return the logger *name*, attaching a JSON handler on first use.

    Parameters
    ----------
    name:
        Dotted logger name, ``"notionmark"`` by default.
    level:
        Level set when the logger is first configured, as an ``int`` or a
        level name in any case.  Later calls leave the level alone; use
        :func:`set_level` to change it.
    stream:
        Where the handler writes.  ``sys.stderr`` when omitted.

    Returns
    -------
    logging.Logger
        The configured logger.  It does not propagate to the root logger,
        and calling this again never adds a second handler.
    """
    logger = logging.getLogger(name)
    if name in _configured:
        return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(StructuredFormatter())
    logger.addHandler(handler)
    logger.setLevel(_resolve_level(level))
    logger.propagate = False
    _configured.add(name)
    return logger


def set_level(level: int | str) -> None:
    """Apply *level* to every logger set up by :func:`get_logger`."""
    resolved = _resolve_level(level)
    for name in _configured:
        logging.getLogger(name).setLevel(resolved)


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    return logging.getLevelName(level.upper())
