"""HTTP transport for the Notion API.

:class:`NotionTransport` sends one logical request and keeps trying until
it gets an answer it can act on:

* ``2xx`` returns the decoded JSON body.
* ``429`` waits for ``Retry-After`` (or the backoff delay) and retries.
* ``5xx``, timeouts and connection failures back off exponentially.
* Any other ``4xx`` raises the matching typed error straight away.

When the attempts run out on a retryable status the transport raises
:class:`NotionmarkRetryExhaustedError`; a network failure on the last
attempt surfaces as :class:`NotionmarkNetworkError`.
"""

from __future__ import annotations

import time
from typing import Any

import httpx

from notionmark.config import NotionmarkConfig
from notionmark.errors import (
    NotionmarkAuthError,
    NotionmarkError,
    NotionmarkNetworkError,
    NotionmarkNotFoundError,
    NotionmarkPermissionError,
    NotionmarkRetryExhaustedError,
    NotionmarkValidationError,
)
from notionmark.observability import NoopMetricsHook, get_logger

from .retries import RETRYABLE_STATUSES, compute_backoff, should_retry

log = get_logger("notionmark.transport")

# Client errors with a dedicated exception; everything else is a validation error.
_STATUS_ERRORS: dict[int, tuple[type[NotionmarkError], str]] = {
    401: (NotionmarkAuthError, "rejected the integration token"),
    403: (NotionmarkPermissionError, "denied access"),
    404: (NotionmarkNotFoundError, "found no such resource"),
}


def _parse_retry_after(response: httpx.Response) -> float | None:
    """Seconds from a numeric ``Retry-After`` header; ``None`` otherwise."""
    value = response.headers.get("retry-after")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _error_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _raise_for_status(response: httpx.Response, method: str, path: str) -> None:
    """Raise the typed error for a client error that must not be retried."""
    status = response.status_code
    body = _error_body(response)
    detail = body.get("message") or response.text[:500]
    context: dict[str, Any] = {"status_code": status, "notion_code": body.get("code", "")}

    error_cls, verb = _STATUS_ERRORS.get(status, (NotionmarkValidationError, ""))
    if error_cls is NotionmarkPermissionError:
        context["operation"] = f"{method} {path}"
    elif error_cls is NotionmarkNotFoundError:
        context["path"] = path
    elif error_cls is NotionmarkValidationError:
        context["body"] = body
        verb = f"returned {status}"
    raise error_cls(message=f"Notion {verb} for {method} {path}: {detail}", context=context)


class NotionTransport:
    """Blocking Notion API client with authentication and retries.

    Parameters
    ----------
    config:
        Supplies the base URL, token, API version, timeout and retry
        settings.
    client:
        An existing :class:`httpx.Client` to send requests through.  When
        omitted one is built from *config*; tests pass a mock here.
    """

    def __init__(self, config: NotionmarkConfig, client: httpx.Client | None = None) -> None:
        self._config = config
        self._metrics = config.metrics or NoopMetricsHook()
        if client is None:
            client = httpx.Client(
                base_url=config.base_url,
                headers={
                    "Authorization": f"Bearer {config.token}",
                    "Notion-Version": config.notion_version,
                    "Content-Type": "application/json",
                },
                timeout=httpx.Timeout(config.timeout_seconds),
                proxy=config.http_proxy,
            )
        self._client = client

    def request(self, method: str, path: str, **kwargs: Any) -> dict:
        """Send *method* *path* and return the decoded JSON response.

        Parameters
        ----------
        method:
            HTTP verb, e.g. ``POST`` or ``PATCH``.
        path:
            Path below ``base_url``, e.g. ``/pages``.
        **kwargs:
            Passed through to :meth:`httpx.Client.request`, typically
            ``json=``.

        Returns
        -------
        dict
            The response body, or ``{}`` when the body is empty.

        Raises
        ------
        NotionmarkAuthError
            401.
        NotionmarkPermissionError
            403.
        NotionmarkNotFoundError
            404.
        NotionmarkValidationError
            400 or any other client error that is not retried.
        NotionmarkNetworkError
            The last attempt failed without a response.
        NotionmarkRetryExhaustedError
            Every attempt got a retryable status.
        """
        attempts = max(self._config.retry_max_attempts, 1)
        status: int | None = None

        for attempt in range(attempts):
            started = time.monotonic()
            try:
                response = self._client.request(method, path, **kwargs)
            except (httpx.TimeoutException, httpx.NetworkError) as exc:
                self._on_network_error(exc, attempt, attempts, method, path)
                continue

            status = response.status_code
            tags = {"method": method, "path": path, "status": str(status)}
            self._metrics.increment("notionmark.requests_total", tags=tags)
            self._metrics.timing(
                "notionmark.request_duration_ms",
                (time.monotonic() - started) * 1000,
                tags=tags,
            )

            if 200 <= status < 300:
                return response.json() if status != 204 and response.content else {}
            if status not in RETRYABLE_STATUSES:
                _raise_for_status(response, method, path)
            if not should_retry(status, None, attempt, attempts):
                break

            if status == 429:
                retry_after = _parse_retry_after(response)
                self._metrics.increment(
                    "notionmark.rate_limited_total",
                    tags={"method": method, "path": path},
                )
                log.warning(
                    "rate limited",
                    extra={"extra_fields": {
                        "method": method,
                        "path": path,
                        "attempt": attempt + 1,
                        "retry_after": retry_after,
                    }},
                )
                self._backoff(attempt, "rate_limited", method, path, retry_after)
            else:
                self._backoff(attempt, "server_error", method, path)

        raise NotionmarkRetryExhaustedError(
            message=f"{method} {path} still failing after {attempts} attempts (last status {status})",
            context={"attempts": attempts, "last_status_code": status},
        )

    def _on_network_error(
        self,
        exc: Exception,
        attempt: int,
        attempts: int,
        method: str,
        path: str,
    ) -> None:
        self._metrics.increment(
            "notionmark.requests_total",
            tags={"method": method, "path": path, "status": "error"},
        )
        log.warning(
            "network error",
            extra={"extra_fields": {
                "method": method,
                "path": path,
                "attempt": attempt + 1,
                "error": str(exc),
            }},
        )
        if not should_retry(None, exc, attempt, attempts):
            raise NotionmarkNetworkError(
                message=f"{method} {path} failed without a response: {exc}",
                context={"url": path, "attempt": attempt + 1},
                cause=exc,
            ) from exc
        self._backoff(attempt, "network_error", method, path)

    def _backoff(
        self,
        attempt: int,
        reason: str,
        method: str,
        path: str,
        retry_after: float | None = None,
    ) -> None:
        cfg = self._config
        delay = compute_backoff(
            attempt,
            base=cfg.retry_base_delay,
            maximum=cfg.retry_max_delay,
            jitter=cfg.retry_jitter,
            retry_after=retry_after,
        )
        self._metrics.increment(
            "notionmark.retries_total",
            tags={"method": method, "path": path, "reason": reason},
        )
        time.sleep(delay)

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> NotionTransport:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
