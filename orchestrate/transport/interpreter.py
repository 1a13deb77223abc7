"""
Response interpretation.

Maps a RawResponse to either decoded data or a DomainError, and derives
document identity from the ``Location`` / ``Content-Location`` headers.

Identity headers look like ``/v0/{collection}/{key}/refs/{ref}``. They are
parsed by locating the literal ``refs`` segment, so a host that mounts the
API under a deeper prefix yields the same (collection, key, ref).
"""

from __future__ import annotations

import logging
from typing import Any, Optional, Type, TypeVar
from urllib.parse import unquote, urlsplit

from orchestrate.core.codec import DocumentCodec
from orchestrate.core.errors import DecodeError, DomainError, domain_error_for
from orchestrate.core.models import ErrorBody, Path
from orchestrate.transport.executor import RawResponse

logger = logging.getLogger(__name__)

T = TypeVar("T")

REFS_SEGMENT = "refs"

HTTP_OK = 200
HTTP_CREATED = 201
HTTP_NO_CONTENT = 204


def parse_location(location: str) -> tuple[str, str, str]:
    """
    Extract (collection, key, ref) from an identity header.

    Raises:
        DecodeError: If the header has no ``{collection}/{key}/refs/{ref}`` run
    """
    path = urlsplit(location).path if "://" in location else location.split("?", 1)[0]
    segments = [unquote(s) for s in path.split("/") if s]

    # the last refs segment wins; a key may itself be the literal "refs"
    for i in range(len(segments) - 2, 1, -1):
        if segments[i] == REFS_SEGMENT:
            return segments[i - 2], segments[i - 1], segments[i + 1]
    raise DecodeError(f"Cannot find a {{collection}}/{{key}}/refs/{{ref}} run in {location!r}")


class ResponseInterpreter:
    """
    Validates status codes and decodes bodies for every operation.

    Usage:
        interpreter = ResponseInterpreter()
        interpreter.expect(response, HTTP_CREATED)
        path = interpreter.resolve_path("users", response, "Location")
    """

    def __init__(self, codec: Optional[DocumentCodec] = None):
        self.codec = codec or DocumentCodec()

    def expect(self, response: RawResponse, status: int) -> RawResponse:
        """
        Require ``status``; anything else raises the matching DomainError.
        """
        if response.status_code == status:
            return response
        raise self.error(response)

    def error(self, response: RawResponse) -> DomainError:
        """Build a DomainError from a response, decoding the body when possible."""
        text = response.text
        message, code = text, None
        if text.strip():
            try:
                body = self.codec.decode(text, ErrorBody)
                message, code = body.message, body.code
            except DecodeError:
                logger.warning(
                    "Error body for status %s is not JSON; keeping raw text",
                    response.status_code,
                )
        else:
            message = f"HTTP {response.status_code}"
        return domain_error_for(response.status_code, message, code)

    def decode(self, response: RawResponse, model: Type[T] = Any) -> T:
        return self.codec.decode(response.body, model)

    def resolve_path(
        self,
        collection: str,
        response: RawResponse,
        header: str = "Location",
        key: Optional[str] = None,
        ref: Optional[str] = None,
        required: bool = True,
    ) -> Path:
        """
        Build the Path of the document a response talks about.

        ``key`` and ``ref`` are what the caller already knows. A known ref is
        never replaced by the header's; a missing key (create) is taken from
        the header.

        Raises:
            DecodeError: If ``required`` and the header is missing, malformed
                or names a different key
        """
        location = response.header(header)
        if not location:
            if required or key is None:
                raise DecodeError(f"Response has no {header} header")
            return Path(collection=collection, key=key, ref=ref)

        _, header_key, header_ref = parse_location(location)
        if key is None:
            key = header_key
        elif header_key != key:
            if required:
                raise DecodeError(f"{header} {location!r} does not name key {key!r}")
            logger.warning("%s points at key %r, expected %r; ignoring its ref", header, header_key, key)
            return Path(collection=collection, key=key, ref=ref)
        return Path(collection=collection, key=key, ref=ref).with_ref(header_ref)
