# coding: utf-8
"""
Fluent operation builders.

Every resource operation is a builder that wraps one RequestDescriptor:
configuration calls mutate it and return the builder, and ``exec`` sends it
exactly once. The lifecycle is linear:

    Configuring -> Executed -> (result | DomainError | TransportError | DecodeError)

A builder that has been executed refuses further configuration and a
second ``exec`` with RequestConsumedError.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from orchestrate.core.errors import RequestConsumedError
from orchestrate.transport.executor import RawResponse
from orchestrate.transport.request import RequestDescriptor, join_path

if TYPE_CHECKING:
    from orchestrate.interface.client import Client


def require(name: str, value: Optional[str]) -> str:
    """Reject empty address components before anything is sent."""
    if value is None or not str(value).strip():
        raise ValueError(f"{name} cannot be empty")
    return str(value)


class OperationBuilder:
    """
    Base class for all operation builders.

    Subclasses set method and path in ``__init__`` and implement ``exec``
    in terms of ``_send`` plus the client's ResponseInterpreter.
    """

    method = "GET"

    def __init__(self, client: "Client", *path_segments: object):
        self._client = client
        self._request = RequestDescriptor().set_method(self.method).set_target_path(join_path(*path_segments))
        self._executed = False

    @property
    def request(self) -> RequestDescriptor:
        """The underlying descriptor, for inspection."""
        return self._request

    @property
    def executed(self) -> bool:
        return self._executed

    def header(self, name: str, value: str) -> "OperationBuilder":
        """
        Add a caller header.

        Authorization and User-Agent are always overwritten at send time.
        """
        self._configure().add_header(name, value)
        return self

    def _configure(self) -> RequestDescriptor:
        if self._executed:
            raise RequestConsumedError(f"{type(self).__name__} was already executed")
        return self._request

    def _query(self, name: str, value: object) -> None:
        self._configure().add_query_param(name, value)

    def _set_query(self, name: str, value: object) -> None:
        """Replace any earlier value for a non-repeatable parameter."""
        self._configure().remove_query_param(name).add_query_param(name, value)

    def _has_query(self, name: str) -> bool:
        return bool(self._request.query_values(name))

    def _send(self) -> RawResponse:
        self._configure()
        self._executed = True
        return self._client.executor.send(self._request)

    def __repr__(self) -> str:
        state = "executed" if self._executed else "configuring"
        return f"{type(self).__name__}({self._request.method} /{self._request.target_path}, {state})"
