"""Retry decisions and exponential backoff for the Notion transport."""

from __future__ import annotations

import random

import httpx

# HTTP status codes that are safe to retry.
RETRYABLE_STATUSES: frozenset[int] = frozenset({429, 500, 502, 503, 504})

_RETRYABLE_EXCEPTIONS: tuple[type[Exception], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
)


def should_retry(
    status_code: int | None,
    exception: Exception | None,
    attempt: int,
    max_attempts: int,
) -> bool:
    """Decide whether another attempt should be made.

    Parameters
    ----------
    status_code:
        HTTP status of the failed attempt, or ``None`` when no response
        arrived.
    exception:
        The transport exception, or ``None`` when a response arrived.
    attempt:
        The 0-indexed attempt that just failed.
    max_attempts:
        Total attempts allowed, including the first one.
    """
    if attempt + 1 >= max_attempts:
        return False
    if exception is not None:
        return isinstance(exception, _RETRYABLE_EXCEPTIONS)
    return status_code in RETRYABLE_STATUSES


def compute_backoff(
    attempt: int,
    base: float = 1.0,
    maximum: float = 60.0,
    jitter: bool = True,
    retry_after: float | None = None,
) -> float:
    """Seconds to wait before the next attempt.

    A server-provided ``Retry-After`` wins; otherwise the delay is
    ``base * 2**attempt`` capped at *maximum*.  With *jitter* the delay is
    scaled to a random 50 to 100 % of its value.
    """
    delay = retry_after if retry_after is not None else min(base * (2 ** attempt), maximum)
    if jitter:
        delay *= 0.5 + random.random() * 0.5
    return delay
