# coding: utf-8
"""
Interface layer for orchestrate.

Provides the Client and the fluent operation builders it hands out.
"""

from orchestrate.interface.builders import OperationBuilder
from orchestrate.interface.client import Client
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

__all__ = [
    # Core client
    "Client",
    "OperationBuilder",
    # Key / value
    "GetOperation",
    "CreateOperation",
    "UpdateOperation",
    "DeleteOperation",
    "DeleteCollectionOperation",
    "ListOperation",
    # Search
    "SearchOperation",
    # Events
    "GetEventOperation",
    "ListEventsOperation",
    "CreateEventOperation",
    "DeleteEventOperation",
    # Graph
    "GetRelationsOperation",
    "PutRelationOperation",
    "DeleteRelationOperation",
]
