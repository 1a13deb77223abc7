"""
Pagination cursor.

List, event, graph and search pages carry ``next`` / ``prev`` links such as
``/v0/users?limit=10&afterKey=k10``. A link is opaque: the only thing done
to it is stripping the scheme, host and API version prefix. Its remaining
path and query pairs are carried into a fresh GET request untouched and in
their original order.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import parse_qsl, urlsplit

from orchestrate.core.config import DEFAULT_API_VERSION
from orchestrate.transport.request import RequestDescriptor


class PaginationCursor:
    """
    A follow-up page location.

    Example:
        cursor = PaginationCursor.from_link(page.next)
        request = cursor.to_request()
    """

    def __init__(self, path: str, query: list[tuple[str, str]]):
        self.path = path
        self.query = query

    @classmethod
    def from_link(cls, link: str, api_version: str = DEFAULT_API_VERSION) -> "PaginationCursor":
        """
        Parse a link returned by the server.

        Raises:
            ValueError: If the link is empty
        """
        if not link or not link.strip():
            raise ValueError("Pagination link is empty")

        parts = urlsplit(link.strip())
        path = parts.path.lstrip("/")
        prefix = f"{api_version}/"
        if path.startswith(prefix):
            path = path[len(prefix):]
        elif path == api_version:
            path = ""
        query = parse_qsl(parts.query, keep_blank_values=True)
        return cls(path, query)

    @classmethod
    def next_of(cls, page, api_version: str = DEFAULT_API_VERSION) -> Optional["PaginationCursor"]:
        """Cursor for the page after ``page``, or None when it is the last."""
        link = getattr(page, "next", None)
        return cls.from_link(link, api_version) if link is not None else None

    @classmethod
    def prev_of(cls, page, api_version: str = DEFAULT_API_VERSION) -> Optional["PaginationCursor"]:
        """Cursor for the page before ``page``, or None when it is the first."""
        link = getattr(page, "prev", None)
        return cls.from_link(link, api_version) if link is not None else None

    def to_request(self) -> RequestDescriptor:
        # the path is already percent-encoded as the server sent it
        request = RequestDescriptor().set_method("GET").set_target_path(self.path)
        for name, value in self.query:
            request.add_query_param(name, value)
        return request

    def __repr__(self) -> str:
        return f"PaginationCursor(path={self.path!r}, query={self.query!r})"
