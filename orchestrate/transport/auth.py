"""
Authentication.

The API key is sent as the username of HTTP Basic auth with an empty
password. The Authorization and User-Agent headers are applied after any
caller-supplied headers, so a caller can never shadow them.
"""

from __future__ import annotations

import base64

from orchestrate.transport.request import RequestDescriptor


class Credential:
    """Holds the API key and derives the Basic auth header value."""

    def __init__(self, token: str):
        if not token or not token.strip():
            raise ValueError("API token cannot be empty")
        self._token = token

    @property
    def authorization(self) -> str:
        # b64encode never inserts line breaks
        encoded = base64.b64encode(f"{self._token}:".encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    def __repr__(self) -> str:
        return "Credential(token='***')"


class Authenticator:
    """Injects auth and client identity into a request, last."""

    def __init__(self, credential: Credential, user_agent: str):
        self._credential = credential
        self._user_agent = user_agent

    def apply(self, request: RequestDescriptor) -> RequestDescriptor:
        request.add_header("Authorization", self._credential.authorization)
        request.add_header("User-Agent", self._user_agent)
        return request
