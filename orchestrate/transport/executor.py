"""
Executor.

Turns a finished RequestDescriptor into exactly one blocking HTTP exchange
using ``requests``. Every completed exchange is returned as a RawResponse,
4xx and 5xx included; only failures below HTTP (DNS, refused connection,
interrupted body, malformed URL) become TransportError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import requests
from requests.structures import CaseInsensitiveDict

from orchestrate.core.config import ClientConfig
from orchestrate.core.errors import TransportError
from orchestrate.transport.auth import Authenticator, Credential
from orchestrate.transport.request import RequestDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    """
    A completed exchange, before interpretation.

    Attributes:
        status_code: HTTP status
        headers: Response headers, looked up case-insensitively
        body: Raw body bytes
    """

    status_code: int
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def header(self, name: str) -> Optional[str]:
        return self.headers.get(name)


class Executor:
    """
    Performs one request per call against ``config.base_url``.

    No retries, no pooling: by default each call goes through
    ``requests.request``. A caller may pass its own ``requests.Session``
    to control adapters, proxies or TLS.
    """

    def __init__(self, config: ClientConfig, session: Optional[requests.Session] = None):
        self._config = config
        self._session = session
        self._authenticator = Authenticator(Credential(config.token), config.user_agent)

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def send(self, request: RequestDescriptor) -> RawResponse:
        """
        Send the request and consume it.

        Raises:
            RequestConsumedError: If the descriptor was already sent
            TransportError: On any failure below the HTTP layer
        """
        self._authenticator.apply(request)
        url = request.build_url(self.base_url)
        method = request.method
        headers = request.headers
        body = request.body
        request.consume()

        logger.debug("%s %s", method, url)
        send = self._session.request if self._session is not None else requests.request
        try:
            response = send(
                method,
                url,
                headers=headers,
                data=body,
                timeout=self._config.timeout,
                allow_redirects=False,
            )
        except requests.RequestException as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise TransportError(f"{method} {url} failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return RawResponse(
            status_code=response.status_code,
            headers=CaseInsensitiveDict(response.headers),
            body=response.content or b"",
        )
