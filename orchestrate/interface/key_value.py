# coding: utf-8
"""
Key/value operations.

Builders for reading, writing and listing documents addressed by
(collection, key[, ref]):

- GetOperation: GET {collection}/{key}[/refs/{ref}] -> 200
- CreateOperation: POST {collection} -> 201, key and ref from Location
- UpdateOperation: PUT {collection}/{key} -> 201, ref from Location
- DeleteOperation: DELETE {collection}/{key} -> 204
- DeleteCollectionOperation: DELETE {collection}?force=true -> 204
- ListOperation: GET {collection} -> 200, paged by key range
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Type, TypeVar

from orchestrate.core.models import KVResult, KVResults, Path
from orchestrate.interface.builders import OperationBuilder, require
from orchestrate.transport.interpreter import HTTP_CREATED, HTTP_NO_CONTENT, HTTP_OK
from orchestrate.transport.request import join_path

if TYPE_CHECKING:
    from orchestrate.interface.client import Client

T = TypeVar("T")


def quoted_ref(ref: str) -> str:
    """Refs travel as quoted entity tags in conditional headers."""
    ref = require("ref", ref)
    if ref.startswith('"') and ref.endswith('"') and len(ref) > 1:
        return ref
    return f'"{ref}"'


class GetOperation(OperationBuilder):
    """
    Fetch one document, optionally at a specific ref.

    Example:
        result = client.get("users", "chad").exec(User)
        result.value.name      # "chad"
        result.path.ref        # ref of the current version
    """

    method = "GET"

    def __init__(self, client: "Client", collection: str, key: str):
        self._collection = require("collection", collection)
        self._key = require("key", key)
        self._ref: Optional[str] = None
        super().__init__(client, self._collection, self._key)

    def ref(self, ref: str) -> "GetOperation":
        """Read a historical version instead of the current one."""
        self._ref = require("ref", ref)
        self._configure().set_target_path(join_path(self._collection, self._key, "refs", self._ref))
        return self

    def exec(self, model: Type[T] = Any) -> KVResult[T]:
        """
        Send the request.

        Raises:
            NotFoundError: If the key (or ref) does not exist
            DomainError: On any other non-200 status
            DecodeError: If the body does not decode as ``model``
            TransportError: If the exchange did not complete
        """
        interpreter = self._client.interpreter
        response = interpreter.expect(self._send(), HTTP_OK)
        value = interpreter.decode(response, model)
        path = interpreter.resolve_path(
            self._collection,
            response,
            "Content-Location",
            key=self._key,
            ref=self._ref,
            required=False,
        )
        return KVResult(path=path, value=value)


class CreateOperation(OperationBuilder):
    """
    Store a new document under a server-generated key.

    Example:
        path = client.create("users", {"name": "chad"}).exec()
        path.key, path.ref     # both taken from the Location header
    """

    method = "POST"

    def __init__(self, client: "Client", collection: str, value: Any):
        self._collection = require("collection", collection)
        super().__init__(client, self._collection)
        self._configure().set_body(client.codec.encode(value))

    def exec(self) -> Path:
        interpreter = self._client.interpreter
        response = interpreter.expect(self._send(), HTTP_CREATED)
        return interpreter.resolve_path(self._collection, response, "Location")


class UpdateOperation(OperationBuilder):
    """
    Store a document at a caller-chosen key.

    Two concurrency modes are available; the server decides the outcome:

    - ``if_match(ref)``: only replace the version named by ``ref`` (412 otherwise)
    - ``if_absent()``: only create, never replace (409 / 412 if the key exists)

    Example:
        path = client.update("users", "chad", user).if_match(old_ref).exec()
    """

    method = "PUT"

    def __init__(self, client: "Client", collection: str, key: str, value: Any):
        self._collection = require("collection", collection)
        self._key = require("key", key)
        super().__init__(client, self._collection, self._key)
        self._configure().set_body(client.codec.encode(value))

    def if_match(self, ref: str) -> "UpdateOperation":
        self._configure().add_header("If-Match", quoted_ref(ref))
        return self

    def if_absent(self) -> "UpdateOperation":
        self._configure().add_header("If-None-Match", "*")
        return self

    def exec(self) -> Path:
        """
        Send the request and return the address of the new version.

        Raises:
            PreconditionFailedError: If ``if_match`` named a stale ref
            ConflictError: If ``if_absent`` was set and the key exists
        """
        interpreter = self._client.interpreter
        response = interpreter.expect(self._send(), HTTP_CREATED)
        return interpreter.resolve_path(self._collection, response, "Location", key=self._key)


class DeleteOperation(OperationBuilder):
    """
    Delete a document.

    By default the current version is tombstoned and history stays
    readable by ref. ``purge()`` removes every version permanently.
    """

    method = "DELETE"

    def __init__(self, client: "Client", collection: str, key: str):
        self._collection = require("collection", collection)
        self._key = require("key", key)
        super().__init__(client, self._collection, self._key)

    def if_match(self, ref: str) -> "DeleteOperation":
        self._configure().add_header("If-Match", quoted_ref(ref))
        return self

    def purge(self) -> "DeleteOperation":
        self._set_query("purge", True)
        return self

    def exec(self) -> bool:
        self._client.interpreter.expect(self._send(), HTTP_NO_CONTENT)
        return True


class DeleteCollectionOperation(OperationBuilder):
    """Drop a whole collection. The API requires ``force=true`` for this."""

    method = "DELETE"

    def __init__(self, client: "Client", collection: str):
        self._collection = require("collection", collection)
        super().__init__(client, self._collection)
        self._set_query("force", True)

    def exec(self) -> bool:
        self._client.interpreter.expect(self._send(), HTTP_NO_CONTENT)
        return True


class ListOperation(OperationBuilder):
    """
    List a collection in key order.

    At most one lower bound (``start_key`` inclusive or ``after_key``
    exclusive) and at most one upper bound (``before_key`` exclusive or
    ``end_key`` inclusive) may be set.

    Example:
        page = client.list("users").limit(10).after_key("k10").exec(User)
        while page.has_next():
            page = client.next_page(page, User)
    """

    method = "GET"

    _LOWER = ("startKey", "afterKey")
    _UPPER = ("beforeKey", "endKey")

    def __init__(self, client: "Client", collection: str):
        self._collection = require("collection", collection)
        super().__init__(client, self._collection)

    def limit(self, limit: int) -> "ListOperation":
        if limit < 1:
            raise ValueError("limit must be positive")
        self._set_query("limit", limit)
        return self

    def start_key(self, key: str) -> "ListOperation":
        return self._bound("startKey", key, self._LOWER)

    def after_key(self, key: str) -> "ListOperation":
        return self._bound("afterKey", key, self._LOWER)

    def before_key(self, key: str) -> "ListOperation":
        return self._bound("beforeKey", key, self._UPPER)

    def end_key(self, key: str) -> "ListOperation":
        return self._bound("endKey", key, self._UPPER)

    def _bound(self, name: str, key: str, pair: tuple[str, str]) -> "ListOperation":
        other = pair[1] if name == pair[0] else pair[0]
        if self._has_query(other):
            raise ValueError(f"{name} cannot be combined with {other}")
        self._set_query(name, require(name, key))
        return self

    def exec(self, model: Type[T] = Any) -> KVResults[T]:
        interpreter = self._client.interpreter
        response = interpreter.expect(self._send(), HTTP_OK)
        return interpreter.decode(response, KVResults[model])
