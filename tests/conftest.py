"""Shared test fixtures for the notionmark test suite."""

from __future__ import annotations

import pytest

from notionmark.config import NotionmarkConfig
from notionmark.converter.md_to_notion import MarkdownToNotionConverter


@pytest.fixture
def config() -> NotionmarkConfig:
    """Default test configuration with a dummy token."""
    return NotionmarkConfig(token="test_token_1234")


@pytest.fixture
def converter(config: NotionmarkConfig) -> MarkdownToNotionConverter:
    """Markdown-to-Notion converter using the default test config."""
    return MarkdownToNotionConverter(config)
