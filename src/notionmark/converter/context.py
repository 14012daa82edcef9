"""Per-conversion state threaded through the tree walk.

A :class:`ConversionContext` is created for each conversion and passed
explicitly to the extractor and the dispatcher.  It carries the config,
the warnings collected so far, and an optional :class:`WalkObserver` that
is told about every extraction and dispatch step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from notionmark.config import NotionmarkConfig
from notionmark.models import ConversionWarning
from notionmark.observability import get_logger

if TYPE_CHECKING:
    from notionmark.converter.builders import BlockBuilder, RichTextBuilder
    from notionmark.converter.source import SourceNode


@runtime_checkable
class WalkObserver(Protocol):
    """Receives a callback after each step of the conversion walk."""

    def rich_texts_extracted(
        self,
        node: SourceNode,
        builders: list[RichTextBuilder],
    ) -> None:
        ...

    def blocks_dispatched(
        self,
        node: SourceNode,
        builders: list[BlockBuilder],
    ) -> None:
        ...


class NoopObserver:
    """Default observer that ignores every step."""

    __slots__ = ()

    def rich_texts_extracted(self, node: SourceNode, builders: list[RichTextBuilder]) -> None:
        pass

    def blocks_dispatched(self, node: SourceNode, builders: list[BlockBuilder]) -> None:
        pass


class LoggingObserver:
    """Log each walk step at ``DEBUG`` through the structured logger."""

    def __init__(self, name: str = "notionmark.converter") -> None:
        self._log = get_logger(name)

    def rich_texts_extracted(self, node: SourceNode, builders: list[RichTextBuilder]) -> None:
        self._log.debug(
            "rich texts extracted",
            extra={"extra_fields": {
                "node_kind": node.kind.value,
                "runs": len(builders),
                "decorators": [[d.describe() for d in b.decorators] for b in builders],
            }},
        )

    def blocks_dispatched(self, node: SourceNode, builders: list[BlockBuilder]) -> None:
        self._log.debug(
            "blocks dispatched",
            extra={"extra_fields": {
                "node_kind": node.kind.value,
                "blocks": [b.block_type.value for b in builders],
            }},
        )


@dataclass
class ConversionContext:
    """Mutable state owned by a single conversion."""

    config: NotionmarkConfig = field(default_factory=NotionmarkConfig)
    observer: WalkObserver = field(default_factory=NoopObserver)
    warnings: list[ConversionWarning] = field(default_factory=list)

    def add_warning(self, code: str, message: str, **context: Any) -> None:
        self.warnings.append(ConversionWarning(
            code=code, message=message, context=dict(context),
        ))
