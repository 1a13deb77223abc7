"""
Core value types for orchestrate.

- ClientConfig: immutable connection settings
- Path and the result envelopes returned by every operation
- The error taxonomy
- DocumentCodec: JSON encoding and typed decoding
"""

from orchestrate.core.codec import DocumentCodec
from orchestrate.core.config import ClientConfig
from orchestrate.core.errors import DecodeError, DomainError, OrchestrateError, TransportError
from orchestrate.core.models import Path

__all__ = [
    "ClientConfig",
    "DocumentCodec",
    "Path",
    "OrchestrateError",
    "TransportError",
    "DecodeError",
    "DomainError",
]
