"""
Request descriptor.

A RequestDescriptor accumulates everything needed for one HTTP exchange
(method, resource-relative path, headers, ordered query parameters, body)
without performing any I/O. It is consumed exactly once by the Executor;
after that every mutator raises RequestConsumedError so a stale
configuration can never be resent by accident.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote, urlencode

from orchestrate.core.codec import CONTENT_TYPE
from orchestrate.core.errors import RequestConsumedError

METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE"})


def join_path(*segments: object) -> str:
    """
    Join path segments, percent-encoding each one.

    Segments are encoded individually so a key containing ``/`` cannot
    change the shape of the path.
    """
    return "/".join(quote(str(s), safe="") for s in segments)


class RequestDescriptor:
    """
    Mutable description of one request.

    Every configuration method returns the descriptor itself:

        req = (
            RequestDescriptor()
              .set_method("GET")
              .set_target_path("users")
              .add_query_param("sort", "value.name:asc")
              .add_query_param("sort", "value.age:desc")
        )
    """

    def __init__(self, method: str = "GET", target_path: str = ""):
        self._method = method
        self._target_path = target_path
        self._headers: dict[str, str] = {}
        self._query: list[tuple[str, str]] = []
        self._body: Optional[bytes] = None
        self._consumed = False

    # =========================================================================
    # Configuration
    # =========================================================================

    def set_method(self, method: str) -> "RequestDescriptor":
        self._check_open()
        method = method.upper()
        if method not in METHODS:
            raise ValueError(f"Unsupported HTTP method: {method}")
        self._method = method
        return self

    def set_target_path(self, path: str) -> "RequestDescriptor":
        """Set the resource-relative path; the versioned prefix is added later."""
        self._check_open()
        self._target_path = path.lstrip("/")
        return self

    def add_header(self, name: str, value: str) -> "RequestDescriptor":
        """Set a header. A later call with the same name (any case) wins."""
        self._check_open()
        for existing in list(self._headers):
            if existing.lower() == name.lower():
                del self._headers[existing]
        self._headers[name] = str(value)
        return self

    def add_query_param(self, name: str, value: object) -> "RequestDescriptor":
        """Append a query parameter. Repeated names are kept in order."""
        self._check_open()
        if isinstance(value, bool):
            value = "true" if value else "false"
        self._query.append((name, str(value)))
        return self

    def remove_query_param(self, name: str) -> "RequestDescriptor":
        """Drop every value of a query parameter."""
        self._check_open()
        self._query = [(k, v) for k, v in self._query if k != name]
        return self

    def set_body(self, body: bytes) -> "RequestDescriptor":
        self._check_open()
        self._body = bytes(body)
        return self

    # =========================================================================
    # Inspection
    # =========================================================================

    @property
    def method(self) -> str:
        return self._method

    @property
    def target_path(self) -> str:
        return self._target_path

    @property
    def query(self) -> list[tuple[str, str]]:
        return list(self._query)

    @property
    def body(self) -> Optional[bytes]:
        return self._body

    @property
    def consumed(self) -> bool:
        return self._consumed

    @property
    def headers(self) -> dict[str, str]:
        """
        Headers as they will be sent, including the body headers.

        Content-Type is fixed to JSON when a body is present and
        Content-Length always reflects the body (0 without one).
        """
        headers = dict(self._headers)
        for name in list(headers):
            if name.lower() in ("content-type", "content-length"):
                del headers[name]
        if self._body is not None:
            headers["Content-Type"] = CONTENT_TYPE
            headers["Content-Length"] = str(len(self._body))
        else:
            headers["Content-Length"] = "0"
        return headers

    def header(self, name: str) -> Optional[str]:
        for existing, value in self.headers.items():
            if existing.lower() == name.lower():
                return value
        return None

    def query_values(self, name: str) -> list[str]:
        return [v for k, v in self._query if k == name]

    def build_url(self, base_url: str) -> str:
        """Render the full URL: base, target path and encoded query string."""
        url = base_url.rstrip("/") + "/" + self._target_path if self._target_path else base_url
        if self._query:
            url = f"{url}?{urlencode(self._query)}"
        return url

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def consume(self) -> "RequestDescriptor":
        """Mark the descriptor as sent. A second call raises."""
        self._check_open()
        self._consumed = True
        return self

    def _check_open(self) -> None:
        if self._consumed:
            raise RequestConsumedError(
                f"{self._method} {self._target_path} was already sent; build a new request"
            )

    def __repr__(self) -> str:
        state = "consumed" if self._consumed else "open"
        return f"RequestDescriptor({self._method} /{self._target_path}, query={self._query}, {state})"
