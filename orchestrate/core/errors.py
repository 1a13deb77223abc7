"""
Error taxonomy for the orchestrate client.

Every failure an operation can surface is one of:

- TransportError: the exchange never completed at the HTTP level
- DecodeError: the body was not valid JSON or did not fit the expected shape
- DomainError: the exchange completed with a status the operation did not expect

None of these are recovered internally; builders raise them straight to the caller.
"""

from __future__ import annotations

from typing import Optional


class OrchestrateError(Exception):
    """Base class for all client errors."""
    pass


class TransportError(OrchestrateError):
    """Connection or I/O failure below HTTP semantics (DNS, refused, bad URL)."""
    pass


class DecodeError(OrchestrateError):
    """Response body is malformed or does not match the expected shape."""
    pass


class RequestConsumedError(OrchestrateError, RuntimeError):
    """Raised when a request or builder is touched again after it was sent."""
    pass


class DomainError(OrchestrateError):
    """
    The server answered, but not with the status the operation requires.

    Attributes:
        status: HTTP status code of the response
        message: Server supplied message, or the raw body when it is not JSON
        code: Machine readable error code, when the server sends one
    """

    def __init__(self, status: int, message: str, code: Optional[str] = None):
        super().__init__(f"{status}: {message}")
        self.status = status
        self.message = message
        self.code = code

    def to_dict(self) -> dict:
        """Convert to dictionary for logging or re-serialization."""
        result = {"status": self.status, "message": self.message}
        if self.code:
            result["code"] = self.code
        return result


class NotFoundError(DomainError):
    """404: the collection, key, ref or event does not exist."""
    pass


class ConflictError(DomainError):
    """409: `If-None-Match: *` was sent but the key already exists."""
    pass


class PreconditionFailedError(DomainError):
    """412: `If-Match` named a ref that is no longer current."""
    pass


_STATUS_ERRORS = {
    404: NotFoundError,
    409: ConflictError,
    412: PreconditionFailedError,
}


def domain_error_for(status: int, message: str, code: Optional[str] = None) -> DomainError:
    """Build the most specific DomainError subclass for a status code."""
    error_cls = _STATUS_ERRORS.get(status, DomainError)
    return error_cls(status, message, code)
