"""
orchestrate - typed REST client for a document / graph / event store.

Every operation is a single-use fluent builder obtained from a Client:

- Key/value: get, create, update, delete, delete_collection, list
- Search: search
- Events: event, events, create_event, delete_event
- Graph: relations, put_relation, delete_relation

Builders raise TransportError, DecodeError or a DomainError subclass;
nothing is retried or swallowed.
"""
from orchestrate.core.config import ClientConfig
from orchestrate.core.errors import (
    ConflictError,
    DecodeError,
    DomainError,
    NotFoundError,
    OrchestrateError,
    PreconditionFailedError,
    RequestConsumedError,
    TransportError,
)
from orchestrate.core.models import (
    EventPath,
    EventResult,
    EventResults,
    GraphResult,
    GraphResults,
    KVResult,
    KVResults,
    Path,
    SearchResult,
    SearchResults,
)
from orchestrate.core.version import __version__
from orchestrate.interface.client import Client
from orchestrate.transport.cursor import PaginationCursor
from orchestrate.transport.request import RequestDescriptor

__all__ = [
    # Client
    "Client",
    "ClientConfig",
    # Models
    "Path",
    "KVResult",
    "KVResults",
    "EventPath",
    "EventResult",
    "EventResults",
    "GraphResult",
    "GraphResults",
    "SearchResult",
    "SearchResults",
    # Errors
    "OrchestrateError",
    "TransportError",
    "DecodeError",
    "DomainError",
    "NotFoundError",
    "ConflictError",
    "PreconditionFailedError",
    "RequestConsumedError",
    # Request plumbing
    "RequestDescriptor",
    "PaginationCursor",
    "__version__",
]
