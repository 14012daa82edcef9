"""Tests for retry decisions and backoff."""

from __future__ import annotations

from unittest.mock import patch

import httpx
import pytest

from notionmark.notion_api.retries import compute_backoff, should_retry


class TestShouldRetry:
    @pytest.mark.parametrize("status", [429, 500, 502, 503, 504])
    def test_retryable_statuses(self, status):
        assert should_retry(status, None, attempt=0, max_attempts=3)

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 409, 501])
    def test_non_retryable_statuses(self, status):
        assert not should_retry(status, None, attempt=0, max_attempts=3)

    def test_last_attempt_never_retried(self):
        assert not should_retry(500, None, attempt=2, max_attempts=3)

    def test_network_exceptions(self):
        assert should_retry(None, httpx.ConnectError("x"), attempt=0, max_attempts=2)
        assert should_retry(None, httpx.ReadTimeout("x"), attempt=0, max_attempts=2)

    def test_other_exceptions(self):
        assert not should_retry(None, ValueError("x"), attempt=0, max_attempts=5)


class TestComputeBackoff:
    def test_exponential(self):
        assert [compute_backoff(a, base=0.5, jitter=False) for a in range(4)] == [0.5, 1.0, 2.0, 4.0]

    def test_capped(self):
        assert compute_backoff(10, base=1.0, maximum=30.0, jitter=False) == 30.0

    def test_retry_after_wins(self):
        assert compute_backoff(0, base=1.0, maximum=2.0, jitter=False, retry_after=9.0) == 9.0

    def test_jitter_range(self):
        with patch("notionmark.notion_api.retries.random.random", return_value=0.0):
            assert compute_backoff(2, base=1.0, jitter=True) == 2.0
        with patch("notionmark.notion_api.retries.random.random", return_value=1.0):
            assert compute_backoff(2, base=1.0, jitter=True) == 4.0
