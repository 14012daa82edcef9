"""Command-line entry point: publish a Markdown file as a Notion page.

Settings come from the command line first, then from the environment
(a ``.env`` file in the working directory is loaded if present):

* ``FILE_NAME`` -- Markdown file to publish
* ``NOTION_API_TOKEN`` -- integration token
* ``NOTION_PARENT_PAGE_ID`` -- page under which the new page is created
* ``DEV_MODE`` -- ``true`` enables debug logging of every conversion step
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from notionmark.client import NotionmarkClient
from notionmark.config import NotionmarkConfig
from notionmark.converter.context import LoggingObserver, WalkObserver
from notionmark.converter.md_to_notion import MarkdownToNotionConverter
from notionmark.converter.payload import blocks_to_payload, title_to_payload
from notionmark.errors import NotionmarkConversionError, NotionmarkError
from notionmark.models import RichText
from notionmark.observability import set_level

_TRUTHY = frozenset({"1", "true", "yes", "on"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notionmark",
        description="Publish a Markdown file as a Notion page",
    )
    parser.add_argument("file", nargs="?", help="Markdown file (default: $FILE_NAME)")
    parser.add_argument("--token", help="Notion integration token (default: $NOTION_API_TOKEN)")
    parser.add_argument("--parent-id", help="Parent page ID (default: $NOTION_PARENT_PAGE_ID)")
    parser.add_argument("--title", help="Page title (default: first level-1 heading)")
    parser.add_argument("--dev", action="store_true", help="Log every conversion step (or set DEV_MODE)")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the Notion payload as JSON instead of creating a page",
    )
    return parser


def _fail(what: str, err: object) -> int:
    print(f"{what}: {err}", file=sys.stderr)
    return 1


def _dry_run(markdown: str, title: str | None, observer: WalkObserver | None) -> int:
    converter = MarkdownToNotionConverter(NotionmarkConfig(), observer=observer)
    try:
        result = converter.convert(markdown)
    except NotionmarkConversionError as exc:
        return _fail("failed to convert markdown", exc)
    title_runs = [RichText(title)] if title is not None else result.title
    payload = {
        "properties": title_to_payload(title_runs),
        "children": blocks_to_payload(result.blocks),
    }
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    file_name = args.file or os.environ.get("FILE_NAME")
    dev_mode = args.dev or os.environ.get("DEV_MODE", "").strip().lower() in _TRUTHY

    observer: WalkObserver | None = None
    if dev_mode:
        observer = LoggingObserver()
        set_level("DEBUG")

    if not file_name:
        return _fail("missing markdown file", "pass FILE or set FILE_NAME")
    try:
        markdown = Path(file_name).read_text(encoding="utf-8")
    except OSError as exc:
        return _fail("failed to read markdown file", exc)

    if args.dry_run:
        return _dry_run(markdown, args.title, observer)

    token = args.token or os.environ.get("NOTION_API_TOKEN")
    parent_id = args.parent_id or os.environ.get("NOTION_PARENT_PAGE_ID")
    if not token:
        return _fail("missing Notion token", "pass --token or set NOTION_API_TOKEN")
    if not parent_id:
        return _fail("missing parent page", "pass --parent-id or set NOTION_PARENT_PAGE_ID")

    try:
        with NotionmarkClient(token=token, observer=observer) as client:
            result = client.create_page_from_markdown(parent_id, markdown, title=args.title)
    except NotionmarkConversionError as exc:
        return _fail("failed to convert markdown", exc)
    except NotionmarkError as exc:
        return _fail("failed to create page", exc)

    for warning in result.warnings:
        print(f"warning: {warning.message}", file=sys.stderr)
    print(result.url or result.page_id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
