"""Tests for NotionmarkConfig defaults, validation and repr masking."""

from __future__ import annotations

import pytest

from notionmark.config import DEFAULT_TITLE, NotionmarkConfig


class TestDefaults:
    def test_no_token_needed_for_conversion(self):
        cfg = NotionmarkConfig()
        assert cfg.token == ""
        assert cfg.default_title == DEFAULT_TITLE == "Unnamed Document"
        assert cfg.heading_overflow == "downgrade"
        assert cfg.base_url == "https://api.notion.com/v1"
        assert cfg.notion_version == "2022-06-28"
        assert cfg.metrics is None
        assert cfg.debug_dump_ast is False
        assert cfg.debug_dump_payload is False


class TestValidation:
    def test_insecure_remote_base_url(self):
        with pytest.raises(ValueError, match="insecure HTTP"):
            NotionmarkConfig(base_url="http://api.example.com/v1")

    @pytest.mark.parametrize("host", ["localhost", "127.0.0.1"])
    def test_http_allowed_for_local_hosts(self, host):
        assert NotionmarkConfig(base_url=f"http://{host}:8080/v1").base_url.startswith("http://")

    def test_heading_overflow_value(self):
        with pytest.raises(ValueError, match="heading_overflow"):
            NotionmarkConfig(heading_overflow="drop")

    @pytest.mark.parametrize("field", ["retry_max_attempts", "retry_base_delay", "retry_max_delay"])
    def test_negative_retry_settings(self, field):
        with pytest.raises(ValueError, match=field):
            NotionmarkConfig(**{field: -1})

    @pytest.mark.parametrize("timeout", [0, -5.0])
    def test_timeout_must_be_positive(self, timeout):
        with pytest.raises(ValueError, match="timeout_seconds"):
            NotionmarkConfig(timeout_seconds=timeout)


class TestRepr:
    def test_token_masked(self):
        text = repr(NotionmarkConfig(token="secret_abcdef1234"))
        assert "secret_abcdef1234" not in text
        assert "token='...1234'" in text

    def test_short_token_fully_masked(self):
        assert "token='****'" in repr(NotionmarkConfig(token="abc"))

    def test_other_fields_shown(self):
        assert "heading_overflow='downgrade'" in repr(NotionmarkConfig())
