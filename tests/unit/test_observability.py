"""Tests for observability/logger.py, observability/metrics.py and the walk observers."""

from __future__ import annotations

import io
import json
import logging
import sys

from notionmark.converter.builders import BOLD, BlockBuilder, BlockType, RichTextBuilder
from notionmark.converter.context import (
    ConversionContext,
    LoggingObserver,
    NoopObserver,
    WalkObserver,
)
from notionmark.converter.source import NodeKind, SourceNode
from notionmark.observability import (
    MetricsHook,
    NoopMetricsHook,
    StructuredFormatter,
    get_logger,
    set_level,
)


def make_record(msg, level=logging.INFO, exc_info=None, extra_fields=None):
    record = logging.LogRecord(
        name="test",
        level=level,
        pathname="",
        lineno=0,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    if extra_fields is not None:
        record.extra_fields = extra_fields
    return record


class TestStructuredFormatter:
    def test_basic_format(self):
        result = json.loads(StructuredFormatter().format(make_record("hello world")))
        assert result["message"] == "hello world"
        assert result["level"] == "INFO"
        assert result["logger"] == "test"
        assert "ts" in result

    def test_extra_fields_merged(self):
        record = make_record("msg", extra_fields={"page_id": "abc", "blocks": 5})
        result = json.loads(StructuredFormatter().format(record))
        assert result["page_id"] == "abc"
        assert result["blocks"] == 5

    def test_exception_included(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = make_record("failed", level=logging.ERROR, exc_info=sys.exc_info())
        result = json.loads(StructuredFormatter().format(record))
        assert "ValueError: boom" in result["exception"]

    def test_non_serializable_values(self):
        record = make_record("m", extra_fields={"kind": NodeKind.TEXT, "obj": object()})
        result = json.loads(StructuredFormatter().format(record))
        assert "obj" in result


class TestGetLogger:
    def test_idempotent(self):
        a = get_logger("notionmark.test.idem")
        b = get_logger("notionmark.test.idem")
        assert a is b
        assert len(a.handlers) == 1
        assert a.propagate is False

    def test_default_level_is_warning(self):
        assert get_logger("notionmark.test.default").level == logging.WARNING

    def test_string_level_and_stream(self):
        stream = io.StringIO()
        log = get_logger("notionmark.test.stream", level="info", stream=stream)
        log.info("hi", extra={"extra_fields": {"n": 1}})
        line = json.loads(stream.getvalue())
        assert line["message"] == "hi"
        assert line["n"] == 1

    def test_set_level_applies_to_configured_loggers(self):
        log = get_logger("notionmark.test.setlevel")
        try:
            set_level("DEBUG")
            assert log.level == logging.DEBUG
        finally:
            set_level(logging.WARNING)
        assert log.level == logging.WARNING


class TestMetrics:
    def test_noop_satisfies_protocol(self):
        hook = NoopMetricsHook()
        assert isinstance(hook, MetricsHook)
        hook.increment("x")
        hook.timing("x", 1.0, tags={"a": "b"})
        hook.gauge("x", 2.0)


class TestWalkObservers:
    def test_observers_satisfy_protocol(self):
        assert isinstance(NoopObserver(), WalkObserver)
        assert isinstance(LoggingObserver(), WalkObserver)

    def test_logging_observer_emits_debug_lines(self):
        stream = io.StringIO()
        get_logger("notionmark.test.walk", stream=stream)
        observer = LoggingObserver("notionmark.test.walk")
        try:
            set_level("DEBUG")
            node = SourceNode(kind=NodeKind.PARAGRAPH)
            observer.rich_texts_extracted(node, [RichTextBuilder(node, [BOLD])])
            observer.blocks_dispatched(node, [BlockBuilder(BlockType.PARAGRAPH)])
        finally:
            set_level("WARNING")
        first, second = [json.loads(line) for line in stream.getvalue().splitlines()]
        assert first["message"] == "rich texts extracted"
        assert first["node_kind"] == "paragraph"
        assert first["decorators"] == [["bold"]]
        assert second["message"] == "blocks dispatched"
        assert second["blocks"] == ["paragraph"]


class TestConversionContext:
    def test_add_warning(self):
        ctx = ConversionContext()
        ctx.add_warning("IMAGE_DROPPED", "dropped", location="table cell")
        (warning,) = ctx.warnings
        assert warning.code == "IMAGE_DROPPED"
        assert warning.context == {"location": "table cell"}

    def test_contexts_do_not_share_warnings(self):
        a, b = ConversionContext(), ConversionContext()
        a.add_warning("X", "x")
        assert b.warnings == []
