"""Exceptions raised by notionmark.

All of them derive from :class:`NotionmarkError` and expose:

``code``
    An :class:`ErrorCode` naming the failure category.
``message``
    Text meant for a developer reading a log or a traceback.
``context``
    A dict of structured details.  The keys a subclass fills in are listed
    in its docstring.
``cause``
    The exception this one wraps, also set as ``__cause__``.

Two families exist.  API errors come out of the Notion transport when a
request is rejected or cannot be completed.  Conversion errors mean the
Markdown tree held something the converter has no rule for; their context
names the offending ``node_kind``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar


class ErrorCode(str, Enum):
    """Stable identifiers for each error class."""

    # API
    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTH_ERROR = "AUTH_ERROR"
    PERMISSION_ERROR = "PERMISSION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RETRY_EXHAUSTED = "RETRY_EXHAUSTED"
    NETWORK_ERROR = "NETWORK_ERROR"

    # Conversion
    CONVERSION_ERROR = "CONVERSION_ERROR"
    UNSUPPORTED_NODE_KIND = "UNSUPPORTED_NODE_KIND"
    EMPTY_NODE_AT_BLOCK_LEVEL = "EMPTY_NODE_AT_BLOCK_LEVEL"
    MUST_BE_BLOCK = "MUST_BE_BLOCK"


class NotionmarkError(Exception):
    """Root of the notionmark exception tree.

    Parameters
    ----------
    message:
        What went wrong.
    context:
        Extra diagnostic data; an empty dict when omitted.
    cause:
        Exception being wrapped, if any.
    code:
        Overrides the class's ``default_code``.  Rarely needed; subclasses
        already pick the right one.
    """

    default_code: ClassVar[str] = ErrorCode.VALIDATION_ERROR

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code: str = code if code is not None else self.default_code
        self.context: dict[str, Any] = dict(context) if context else {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        parts = [f"code={self.code!r}", f"message={self.message!r}"]
        if self.context:
            parts.append(f"context={self.context!r}")
        return f"{type(self).__name__}({', '.join(parts)})"


# -- Notion API ---------------------------------------------------------------

class NotionmarkValidationError(NotionmarkError):
    """The API answered 400, or another 4xx with no dedicated class.

    Context keys: ``status_code``, ``notion_code``, ``body``.
    """

    default_code = ErrorCode.VALIDATION_ERROR


class NotionmarkAuthError(NotionmarkError):
    """The API answered 401; the token is wrong or revoked.

    Context keys: ``status_code``, ``notion_code``.
    """

    default_code = ErrorCode.AUTH_ERROR


class NotionmarkPermissionError(NotionmarkError):
    """The API answered 403; the page is not shared with the integration.

    Context keys: ``status_code``, ``notion_code``, ``operation``.
    """

    default_code = ErrorCode.PERMISSION_ERROR


class NotionmarkNotFoundError(NotionmarkError):
    """The API answered 404.

    Context keys: ``status_code``, ``notion_code``, ``path``.
    """

    default_code = ErrorCode.NOT_FOUND


class NotionmarkRetryExhaustedError(NotionmarkError):
    """A retryable status kept coming back until no attempts were left.

    Context keys: ``attempts``, ``last_status_code``.
    """

    default_code = ErrorCode.RETRY_EXHAUSTED


class NotionmarkNetworkError(NotionmarkError):
    """No response arrived: timeout, refused connection, DNS failure.

    Context keys: ``url``, ``attempt``.
    """

    default_code = ErrorCode.NETWORK_ERROR


# -- Conversion ---------------------------------------------------------------

class NotionmarkConversionError(NotionmarkError):
    """Common parent of the errors raised while building blocks."""

    default_code = ErrorCode.CONVERSION_ERROR

    def __init__(
        self,
        message: str = "Conversion error",
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
        *,
        code: str | None = None,
    ) -> None:
        super().__init__(message, context, cause, code=code)


class NotionmarkUnsupportedNodeKindError(NotionmarkConversionError):
    """No block or rich-text rule exists for a node kind.

    The conversion stops; emitting the rest of the document would lose
    content without saying so.

    Context keys: ``node_kind``.
    """

    default_code = ErrorCode.UNSUPPORTED_NODE_KIND


class NotionmarkEmptyNodeAtBlockLevelError(NotionmarkConversionError):
    """A container with no children was handed to block dispatch.

    Context keys: ``node_kind``.
    """

    default_code = ErrorCode.EMPTY_NODE_AT_BLOCK_LEVEL


class NotionmarkMustBeBlockError(NotionmarkConversionError):
    """Rich-text extraction reached a node that only exists as a block.

    The rich-text extractor raises it; callers redirect the node to block
    dispatch.

    Context keys: ``node_kind``.
    """

    default_code = ErrorCode.MUST_BE_BLOCK
