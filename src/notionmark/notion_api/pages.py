"""Wrapper around the Notion ``/pages`` endpoint."""

from __future__ import annotations

from typing import Any

from .transport import NotionTransport


class PageAPI:
    """Create Notion pages through a :class:`NotionTransport`."""

    def __init__(self, transport: NotionTransport) -> None:
        self._transport = transport

    def create(
        self,
        parent: dict[str, Any],
        properties: dict[str, Any],
        children: list[dict[str, Any]] | None = None,
    ) -> dict[str, Any]:
        """Create a new page.

        Parameters
        ----------
        parent:
            Parent object, e.g. ``{"page_id": "..."}``.
        properties:
            Page properties; at least ``{"title": [<rich text>]}``.
        children:
            Up to 100 block objects to create as page content.  Larger
            documents append the rest with :meth:`BlockAPI.append_children`.

        Returns
        -------
        dict
            The created page object.
        """
        body: dict[str, Any] = {"parent": parent, "properties": properties}
        if children is not None:
            body.update(children=children)
        return self._transport.request("POST", "/pages", json=body)
