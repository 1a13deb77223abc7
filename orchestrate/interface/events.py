# coding: utf-8
"""
Event stream operations.

Every document can carry named, append-only event streams addressed by
``{collection}/{key}/events/{kind}``. A single event is addressed by its
``timestamp`` and ``ordinal``. Events are immutable once written, so
creating one returns no ref.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Type, TypeVar, Union

from orchestrate.core.models import EventResult, EventResults
from orchestrate.interface.builders import OperationBuilder, require
from orchestrate.transport.interpreter import HTTP_CREATED, HTTP_NO_CONTENT, HTTP_OK
from orchestrate.transport.request import join_path

if TYPE_CHECKING:
    from orchestrate.interface.client import Client

T = TypeVar("T")


def _non_negative(name: str, value: int) -> int:
    if value < 0:
        raise ValueError(f"{name} cannot be negative")
    return value


def event_bound(timestamp: int, ordinal: Optional[int] = None) -> str:
    """Format an event range bound: ``timestamp`` or ``timestamp/ordinal``."""
    _non_negative("timestamp", timestamp)
    if ordinal is None:
        return str(timestamp)
    return f"{timestamp}/{_non_negative('ordinal', ordinal)}"


class _EventOperation(OperationBuilder):

    def __init__(self, client: "Client", collection: str, key: str, kind: str, *tail: object):
        self._collection = require("collection", collection)
        self._key = require("key", key)
        self._kind = require("kind", kind)
        super().__init__(client, self._collection, self._key, "events", self._kind, *tail)


class GetEventOperation(_EventOperation):
    """
    Read one event.

    Example:
        event = client.event("users", "chad", "login", timestamp, ordinal).exec(Login)
    """

    method = "GET"

    def __init__(self, client: "Client", collection: str, key: str, kind: str,
                 timestamp: int, ordinal: int):
        super().__init__(
            client, collection, key, kind,
            _non_negative("timestamp", timestamp),
            _non_negative("ordinal", ordinal),
        )

    def exec(self, model: Type[T] = Any) -> EventResult[T]:
        interpreter = self._client.interpreter
        response = interpreter.expect(self._send(), HTTP_OK)
        return interpreter.decode(response, EventResult[model])


class ListEventsOperation(_EventOperation):
    """
    Read a range of a stream.

    ``start`` / ``end`` bound by timestamp; ``start_event`` / ``after_event``
    and ``before_event`` / ``end_event`` bound by an exact event, inclusive
    or exclusive respectively.

    Example:
        page = client.events("users", "chad", "login").start(t0).limit(50).exec()
    """

    method = "GET"

    def start(self, timestamp: int) -> "ListEventsOperation":
        self._set_query("start", _non_negative("start", timestamp))
        return self

    def end(self, timestamp: int) -> "ListEventsOperation":
        self._set_query("end", _non_negative("end", timestamp))
        return self

    def limit(self, limit: int) -> "ListEventsOperation":
        if limit < 1:
            raise ValueError("limit must be positive")
        self._set_query("limit", limit)
        return self

    def start_event(self, timestamp: int, ordinal: Optional[int] = None) -> "ListEventsOperation":
        self._set_query("startEvent", event_bound(timestamp, ordinal))
        return self

    def after_event(self, timestamp: int, ordinal: Optional[int] = None) -> "ListEventsOperation":
        self._set_query("afterEvent", event_bound(timestamp, ordinal))
        return self

    def before_event(self, timestamp: int, ordinal: Optional[int] = None) -> "ListEventsOperation":
        self._set_query("beforeEvent", event_bound(timestamp, ordinal))
        return self

    def end_event(self, timestamp: int, ordinal: Optional[int] = None) -> "ListEventsOperation":
        self._set_query("endEvent", event_bound(timestamp, ordinal))
        return self

    def exec(self, model: Type[T] = Any) -> EventResults[T]:
        interpreter = self._client.interpreter
        response = interpreter.expect(self._send(), HTTP_OK)
        return interpreter.decode(response, EventResults[model])


class CreateEventOperation(_EventOperation):
    """
    Append an event to a stream.

    The server assigns the timestamp unless one is given with ``timestamp()``.
    """

    method = "POST"

    def __init__(self, client: "Client", collection: str, key: str, kind: str, value: Any):
        super().__init__(client, collection, key, kind)
        self._configure().set_body(client.codec.encode(value))

    def timestamp(self, timestamp: Union[int, float]) -> "CreateEventOperation":
        ts = _non_negative("timestamp", int(timestamp))
        self._configure().set_target_path(join_path(self._collection, self._key, "events", self._kind, ts))
        return self

    def exec(self) -> bool:
        self._client.interpreter.expect(self._send(), HTTP_CREATED)
        return True


class DeleteEventOperation(_EventOperation):
    """Permanently remove one event; the API only supports purging events."""

    method = "DELETE"

    def __init__(self, client: "Client", collection: str, key: str, kind: str,
                 timestamp: int, ordinal: int):
        super().__init__(
            client, collection, key, kind,
            _non_negative("timestamp", timestamp),
            _non_negative("ordinal", ordinal),
        )
        self._set_query("purge", True)

    def exec(self) -> bool:
        self._client.interpreter.expect(self._send(), HTTP_NO_CONTENT)
        return True
