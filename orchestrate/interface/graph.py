# coding: utf-8
"""
Graph relation operations.

Relations are named, directed edges between two documents. A traversal
names a chain of relation kinds ("hops") from a source document; each hop
follows one edge kind from every document reached by the previous hop.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Sequence, Type, TypeVar

from orchestrate.core.models import GraphResults
from orchestrate.interface.builders import OperationBuilder, require
from orchestrate.transport.interpreter import HTTP_NO_CONTENT, HTTP_OK

if TYPE_CHECKING:
    from orchestrate.interface.client import Client

T = TypeVar("T")


class GetRelationsOperation(OperationBuilder):
    """
    Walk one or more relation hops from a document.

    Example:
        friends_of_friends = (
            client.relations("users", "chad", "friends", "friends")
              .limit(20)
              .exec(User)
        )
    """

    method = "GET"

    def __init__(self, client: "Client", collection: str, key: str, hops: Sequence[str]):
        if isinstance(hops, str):
            hops = [hops]
        if not hops:
            raise ValueError("at least one relation hop is required")
        self._hops = [require("hop", h) for h in hops]
        super().__init__(
            client,
            require("collection", collection),
            require("key", key),
            "relations",
            *self._hops,
        )

    @property
    def hops(self) -> list[str]:
        return list(self._hops)

    def limit(self, limit: int) -> "GetRelationsOperation":
        if limit < 1:
            raise ValueError("limit must be positive")
        self._set_query("limit", limit)
        return self

    def offset(self, offset: int) -> "GetRelationsOperation":
        if offset < 0:
            raise ValueError("offset cannot be negative")
        self._set_query("offset", offset)
        return self

    def exec(self, model: Type[T] = Any) -> GraphResults[T]:
        interpreter = self._client.interpreter
        response = interpreter.expect(self._send(), HTTP_OK)
        return interpreter.decode(response, GraphResults[model])


class _EdgeOperation(OperationBuilder):
    """One edge: {collection}/{key}/relation/{kind}/{to_collection}/{to_key}."""

    def __init__(self, client: "Client", collection: str, key: str, kind: str,
                 to_collection: str, to_key: str):
        super().__init__(
            client,
            require("collection", collection),
            require("key", key),
            "relation",
            require("kind", kind),
            require("to_collection", to_collection),
            require("to_key", to_key),
        )

    def exec(self) -> bool:
        self._client.interpreter.expect(self._send(), HTTP_NO_CONTENT)
        return True


class PutRelationOperation(_EdgeOperation):
    """Create an edge. No body is sent."""

    method = "PUT"


class DeleteRelationOperation(_EdgeOperation):
    """Remove an edge."""

    method = "DELETE"
