# coding: utf-8
"""
Main client interface for orchestrate.

Usage:
    ```python
    from orchestrate import Client

    client = Client(token=my_api_key)

    # Key / value
    path = client.create("users", {"name": "chad", "email": "c@x.com"}).exec()
    user = client.get("users", path.key).exec(User)
    client.update("users", path.key, changed).if_match(path.ref).exec()

    # Listing and search, page by page
    page = client.list("users").limit(100).exec(User)
    for page in client.iter_pages(page, User):
        ...

    # Events and graph
    client.create_event("users", path.key, "login", {"ip": "10.0.0.1"}).exec()
    client.put_relation("users", path.key, "friends", "users", other_key).exec()
    friends = client.relations("users", path.key, "friends").exec(User)
    ```

The client itself holds only immutable configuration. Every method returns
a fresh single-use builder; nothing is shared between calls.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional, Type, TypeVar

import requests

from orchestrate.core.codec import DocumentCodec
from orchestrate.core.config import ClientConfig
from orchestrate.interface.events import (
    CreateEventOperation,
    DeleteEventOperation,
    GetEventOperation,
    ListEventsOperation,
)
from orchestrate.interface.graph import (
    DeleteRelationOperation,
    GetRelationsOperation,
    PutRelationOperation,
)
from orchestrate.interface.key_value import (
    CreateOperation,
    DeleteCollectionOperation,
    DeleteOperation,
    GetOperation,
    ListOperation,
    UpdateOperation,
)
from orchestrate.interface.search import SearchOperation
from orchestrate.transport.cursor import PaginationCursor
from orchestrate.transport.executor import Executor
from orchestrate.transport.interpreter import HTTP_OK, ResponseInterpreter
from orchestrate.transport.request import RequestDescriptor

logger = logging.getLogger(__name__)

P = TypeVar("P")


class Client:
    """
    Entry point for the orchestrate REST API.

    Args:
        token: API key; required, there is no default
        host: API host, defaults to api.orchestrate.io
        session: Optional requests.Session used as the transport
        **options: Any other ClientConfig field (scheme, api_version,
            user_agent, timeout)
    """

    def __init__(
        self,
        token: str,
        host: Optional[str] = None,
        session: Optional[requests.Session] = None,
        **options: Any,
    ):
        if host is not None:
            options["host"] = host
        self._config = ClientConfig(token=token, **options)
        self._codec = DocumentCodec()
        self._interpreter = ResponseInterpreter(self._codec)
        self._executor = Executor(self._config, session=session)

    @classmethod
    def from_config(cls, config: ClientConfig, session: Optional[requests.Session] = None) -> "Client":
        return cls(session=session, **config.model_dump())

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def codec(self) -> DocumentCodec:
        return self._codec

    @property
    def interpreter(self) -> ResponseInterpreter:
        return self._interpreter

    @property
    def executor(self) -> Executor:
        return self._executor

    # =========================================================================
    # Key / Value
    # =========================================================================

    def get(self, collection: str, key: str) -> GetOperation:
        """Fetch a document. Chain ``.ref(r)`` to read an older version."""
        return GetOperation(self, collection, key)

    def create(self, collection: str, value: Any) -> CreateOperation:
        """Store a document under a generated key."""
        return CreateOperation(self, collection, value)

    def update(self, collection: str, key: str, value: Any) -> UpdateOperation:
        """Store a document at ``key``; see ``if_match`` / ``if_absent``."""
        return UpdateOperation(self, collection, key, value)

    def delete(self, collection: str, key: str) -> DeleteOperation:
        """Tombstone a document; chain ``.purge()`` to drop all versions."""
        return DeleteOperation(self, collection, key)

    def delete_collection(self, collection: str) -> DeleteCollectionOperation:
        return DeleteCollectionOperation(self, collection)

    def list(self, collection: str) -> ListOperation:
        return ListOperation(self, collection)

    # =========================================================================
    # Search
    # =========================================================================

    def search(self, collection: str) -> SearchOperation:
        return SearchOperation(self, collection)

    # =========================================================================
    # Events
    # =========================================================================

    def event(self, collection: str, key: str, kind: str, timestamp: int, ordinal: int) -> GetEventOperation:
        return GetEventOperation(self, collection, key, kind, timestamp, ordinal)

    def events(self, collection: str, key: str, kind: str) -> ListEventsOperation:
        return ListEventsOperation(self, collection, key, kind)

    def create_event(self, collection: str, key: str, kind: str, value: Any) -> CreateEventOperation:
        return CreateEventOperation(self, collection, key, kind, value)

    def delete_event(self, collection: str, key: str, kind: str, timestamp: int, ordinal: int) -> DeleteEventOperation:
        return DeleteEventOperation(self, collection, key, kind, timestamp, ordinal)

    # =========================================================================
    # Graph
    # =========================================================================

    def relations(self, collection: str, key: str, *hops: str) -> GetRelationsOperation:
        """Traverse ``hops`` relation kinds, in order, starting at (collection, key)."""
        return GetRelationsOperation(self, collection, key, list(hops))

    def put_relation(self, collection: str, key: str, kind: str,
                     to_collection: str, to_key: str) -> PutRelationOperation:
        return PutRelationOperation(self, collection, key, kind, to_collection, to_key)

    def delete_relation(self, collection: str, key: str, kind: str,
                        to_collection: str, to_key: str) -> DeleteRelationOperation:
        return DeleteRelationOperation(self, collection, key, kind, to_collection, to_key)

    # =========================================================================
    # Pagination
    # =========================================================================

    def next_page(self, page: P, model: Type[Any] = Any) -> P:
        """
        Fetch the page after ``page``.

        Raises:
            ValueError: If ``page`` has no next link
        """
        cursor = PaginationCursor.next_of(page, self._config.api_version)
        if cursor is None:
            raise ValueError("page has no next link")
        return self._follow(cursor, page, model)

    def prev_page(self, page: P, model: Type[Any] = Any) -> P:
        """
        Fetch the page before ``page``.

        Raises:
            ValueError: If ``page`` has no prev link
        """
        cursor = PaginationCursor.prev_of(page, self._config.api_version)
        if cursor is None:
            raise ValueError("page has no prev link")
        return self._follow(cursor, page, model)

    def iter_pages(self, first: P, model: Type[Any] = Any) -> Iterator[P]:
        """
        Yield ``first`` and then every following page until one has no next link.

        Stops early if the server hands back a link it already sent.
        """
        page = first
        seen: set[str] = set()
        while True:
            yield page
            link = getattr(page, "next", None)
            if link is None:
                return
            if link in seen:
                logger.warning("Pagination link repeated, stopping: %s", link)
                return
            seen.add(link)
            page = self.next_page(page, model)

    def _follow(self, cursor: PaginationCursor, page: Any, model: Type[Any]) -> Any:
        # same envelope type as the page we came from, re-parametrized for model
        origin = type(page).__pydantic_generic_metadata__["origin"] or type(page)
        response = self._interpreter.expect(self._executor.send(cursor.to_request()), HTTP_OK)
        return self._interpreter.decode(response, origin[model])

    # =========================================================================
    # Misc
    # =========================================================================

    def ping(self) -> bool:
        """
        Check that the host is reachable and the key is accepted.

        Raises:
            DomainError: If the key is rejected (401) or the API is unavailable
            TransportError: If the host cannot be reached
        """
        request = RequestDescriptor().set_method("HEAD").set_target_path("")
        self._interpreter.expect(self._executor.send(request), HTTP_OK)
        return True

    def __repr__(self) -> str:
        return f"Client(host={self._config.host!r})"
