"""
Document codec.

Encodes arbitrary typed values (pydantic models, dataclasses, dicts, lists)
to JSON bytes and decodes JSON text back into a requested type. Both
directions go through pydantic's TypeAdapter so user models and the
envelope models in core.models share one code path.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError

from orchestrate.core.errors import DecodeError

logger = logging.getLogger(__name__)

T = TypeVar("T")

CONTENT_TYPE = "application/json"


@lru_cache(maxsize=256)
def _adapter(model: Any) -> TypeAdapter:
    return TypeAdapter(model)


class DocumentCodec:
    """
    JSON codec used for request bodies and response envelopes.

    Usage:
        codec = DocumentCodec()
        body = codec.encode(User(name="chad"))
        user = codec.decode(body, User)
    """

    content_type = CONTENT_TYPE

    def encode(self, value: Any) -> bytes:
        """
        Encode a value as JSON bytes.

        Raises:
            TypeError: If the value cannot be represented as JSON
        """
        if isinstance(value, (bytes, bytearray)):
            return bytes(value)
        try:
            return _adapter(Any).dump_json(value, by_alias=True)
        except PydanticSerializationError as e:
            raise TypeError(f"Cannot encode {type(value).__name__} as JSON: {e}") from e

    def decode(self, text: Union[str, bytes], model: Type[T] = Any) -> T:
        """
        Decode JSON text into ``model``.

        Raises:
            DecodeError: If the text is not JSON or does not fit the model
        """
        if not text:
            raise DecodeError("Empty response body")
        try:
            return _adapter(model).validate_json(text)
        except ValidationError as e:
            logger.debug("Failed to decode %s: %s", getattr(model, "__name__", model), e)
            raise DecodeError(f"Response does not match {getattr(model, '__name__', model)}: {e}") from e
