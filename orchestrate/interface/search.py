# coding: utf-8
"""
Search operation.

GET {collection}?query=...&limit=...&offset=...&sort=...

Results come back scored and paged. ``total_count`` counts every match, so
a page with ``count < total_count`` is not the whole answer; follow ``next``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Type, TypeVar

from orchestrate.core.models import SearchResults
from orchestrate.interface.builders import OperationBuilder, require
from orchestrate.transport.interpreter import HTTP_OK

if TYPE_CHECKING:
    from orchestrate.interface.client import Client

T = TypeVar("T")

DEFAULT_QUERY = "*"
SORT_ORDERS = ("asc", "desc")


def sort_clause(prop: str, order: str = "asc") -> str:
    """Format one sort clause: ``value.<prop>:<asc|desc>``."""
    prop = require("sort property", prop)
    order = order.lower()
    if order not in SORT_ORDERS:
        raise ValueError(f"sort order must be one of {SORT_ORDERS}, got {order!r}")
    if not prop.startswith("value."):
        prop = f"value.{prop}"
    return f"{prop}:{order}"


class SearchOperation(OperationBuilder):
    """
    Full-text / field search over a collection.

    Example:
        results = (
            client.search("users")
              .query("name:chad")
              .sort("age", "desc")
              .sort("name")
              .limit(10)
              .exec(User)
        )
    """

    method = "GET"

    def __init__(self, client: "Client", collection: str):
        super().__init__(client, require("collection", collection))
        self._query_text = DEFAULT_QUERY

    def query(self, query: str) -> "SearchOperation":
        self._configure()
        self._query_text = query.strip() or DEFAULT_QUERY
        return self

    def limit(self, limit: int) -> "SearchOperation":
        if limit < 1:
            raise ValueError("limit must be positive")
        self._set_query("limit", limit)
        return self

    def offset(self, offset: int) -> "SearchOperation":
        if offset < 0:
            raise ValueError("offset cannot be negative")
        self._set_query("offset", offset)
        return self

    def sort(self, prop: str, order: str = "asc") -> "SearchOperation":
        """Add a sort clause. Clauses apply in the order they are added."""
        self._query("sort", sort_clause(prop, order))
        return self

    def exec(self, model: Type[T] = Any) -> SearchResults[T]:
        self._set_query("query", self._query_text)
        interpreter = self._client.interpreter
        response = interpreter.expect(self._send(), HTTP_OK)
        return interpreter.decode(response, SearchResults[model])
