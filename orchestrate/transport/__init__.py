"""
Request construction and response interpretation.

Shared by every operation builder:
- RequestDescriptor: method, path, headers, ordered query, body
- Authenticator: Basic auth and User-Agent, applied last
- Executor: one blocking exchange through requests
- ResponseInterpreter: status checks, identity headers, decoding
- PaginationCursor: follow-up requests from next / prev links
"""

from orchestrate.transport.auth import Authenticator, Credential
from orchestrate.transport.cursor import PaginationCursor
from orchestrate.transport.executor import Executor, RawResponse
from orchestrate.transport.interpreter import ResponseInterpreter, parse_location
from orchestrate.transport.request import RequestDescriptor

__all__ = [
    "Authenticator",
    "Credential",
    "Executor",
    "PaginationCursor",
    "RawResponse",
    "RequestDescriptor",
    "ResponseInterpreter",
    "parse_location",
]
