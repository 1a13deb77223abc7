"""
Client configuration.

The token is always passed in explicitly; there is no process-wide default
and nothing is read from the environment here. Callers that keep their key
in an environment variable read it themselves and hand it to ClientConfig.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from orchestrate.core.version import __version__

DEFAULT_HOST = "api.orchestrate.io"
DEFAULT_API_VERSION = "v0"
DEFAULT_USER_AGENT = f"orchestrate-py {__version__}"


class ClientConfig(BaseModel):
    """
    Immutable connection settings shared by every request a Client makes.

    Example:
        config = ClientConfig(token=my_token)
        client = Client.from_config(config)
    """

    token: str = Field(..., min_length=1, description="API key, sent as the Basic auth username")
    host: str = Field(default=DEFAULT_HOST, min_length=1, description="API host name")
    scheme: str = Field(default="https", description="URL scheme used to reach the host")
    api_version: str = Field(default=DEFAULT_API_VERSION, min_length=1, description="Versioned path prefix")
    user_agent: str = Field(default=DEFAULT_USER_AGENT, min_length=1, description="Client identity header")
    timeout: Optional[float] = Field(
        default=None,
        gt=0,
        description="Transport timeout in seconds; None leaves the exchange unbounded",
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("token")
    @classmethod
    def token_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("token cannot be blank")
        return v

    @field_validator("host")
    @classmethod
    def host_without_scheme(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if "://" in v:
            raise ValueError("host must not include a scheme")
        return v

    @property
    def base_url(self) -> str:
        """Root every resource path is appended to, e.g. https://api.orchestrate.io/v0/"""
        return f"{self.scheme}://{self.host}/{self.api_version}/"

    def __repr__(self) -> str:
        # keep the key out of logs and tracebacks
        return f"ClientConfig(host={self.host!r}, api_version={self.api_version!r}, token='***')"
