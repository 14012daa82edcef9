"""Wrapper around the Notion ``/blocks/{id}/children`` endpoint."""

from __future__ import annotations

from typing import Any

from .transport import NotionTransport


class BlockAPI:
    """Append blocks to an existing page or block."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def append_children(
        self,
        block_id: str,
        children: list[dict[str, Any]],
    ) -> dict[str, Any]:
        """Append *children* (at most 100) to the page or block *block_id*.

        Returns
        -------
        dict
            The API response listing the appended blocks.
        """
        return self._transport.request(
            "PATCH", f"/blocks/{block_id}/children", json={"children": children}
        )
