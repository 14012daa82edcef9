"""Tests for the notionmark error hierarchy."""

from __future__ import annotations

import pytest

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


class TestCodes:
    @pytest.mark.parametrize(("cls", "code"), [
        (NotionmarkValidationError, ErrorCode.VALIDATION_ERROR),
        (NotionmarkAuthError, ErrorCode.AUTH_ERROR),
        (NotionmarkPermissionError, ErrorCode.PERMISSION_ERROR),
        (NotionmarkNotFoundError, ErrorCode.NOT_FOUND),
        (NotionmarkRetryExhaustedError, ErrorCode.RETRY_EXHAUSTED),
        (NotionmarkNetworkError, ErrorCode.NETWORK_ERROR),
        (NotionmarkUnsupportedNodeKindError, ErrorCode.UNSUPPORTED_NODE_KIND),
        (NotionmarkEmptyNodeAtBlockLevelError, ErrorCode.EMPTY_NODE_AT_BLOCK_LEVEL),
        (NotionmarkMustBeBlockError, ErrorCode.MUST_BE_BLOCK),
    ])
    def test_subclass_code(self, cls, code):
        err = cls("boom")
        assert err.code == code
        assert err.message == "boom"
        assert str(err) == "boom"
        assert err.context == {}
        assert isinstance(err, NotionmarkError)


class TestConversionHierarchy:
    @pytest.mark.parametrize("cls", [
        NotionmarkUnsupportedNodeKindError,
        NotionmarkEmptyNodeAtBlockLevelError,
        NotionmarkMustBeBlockError,
    ])
    def test_conversion_subclasses(self, cls):
        assert issubclass(cls, NotionmarkConversionError)

    def test_api_errors_are_not_conversion_errors(self):
        assert not issubclass(NotionmarkAuthError, NotionmarkConversionError)

    def test_conversion_base_defaults(self):
        err = NotionmarkConversionError()
        assert err.code == ErrorCode.CONVERSION_ERROR
        assert err.message == "Conversion error"


class TestContextAndCause:
    def test_context_kept(self):
        err = NotionmarkUnsupportedNodeKindError("x", context={"node_kind": "footnote"})
        assert err.context["node_kind"] == "footnote"
        assert "footnote" in repr(err)

    def test_cause_chained(self):
        cause = OSError("reset")
        err = NotionmarkNetworkError("net", cause=cause)
        assert err.cause is cause
        assert err.__cause__ is cause

    def test_repr_without_context(self):
        text = repr(NotionmarkAuthError("no"))
        assert text.startswith("NotionmarkAuthError(code=")
        assert text.endswith("message='no')")
        assert "context=" not in text
