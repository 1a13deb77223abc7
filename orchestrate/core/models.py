"""
Response models for the orchestrate client.

This module defines the value objects every operation hands back:

- Path: the address of one version of a document (collection, key, ref)
- KVResult / KVResults: single documents and listing pages
- EventPath / EventResult / EventResults: entries of a named event stream on a document
- GraphResult / GraphResults: documents reached by walking relations
- SearchResult / SearchResults: scored search hits with paging links

All models are frozen once decoded. Paging links (``next`` / ``prev``) are
kept as the opaque strings the server sent; see transport.cursor for how
they are followed.
"""

from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, Field, field_validator, model_validator

T = TypeVar("T")

_ENVELOPE_CONFIG = {"frozen": True, "extra": "ignore", "populate_by_name": True}


class Path(BaseModel):
    """
    Address of a versioned document.

    ``ref`` is None until a create/update response reveals it or the caller
    names a specific version. Once set it denotes exactly one revision.
    """

    collection: str = Field(..., description="Collection the document lives in")
    key: str = Field(..., description="Key unique within the collection")
    ref: Optional[str] = Field(default=None, description="Version identifier")

    model_config = _ENVELOPE_CONFIG

    @field_validator("collection", "key")
    @classmethod
    def not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("collection and key cannot be empty")
        return v

    def with_ref(self, ref: Optional[str]) -> "Path":
        """Return this path with ``ref`` filled in, unless it already has one."""
        if self.ref is not None or ref is None:
            return self
        return self.model_copy(update={"ref": ref})

    def __str__(self) -> str:
        base = f"{self.collection}/{self.key}"
        return f"{base}/refs/{self.ref}" if self.ref else base


class ErrorBody(BaseModel):
    """JSON body the server sends alongside a non-success status."""

    message: str
    code: Optional[str] = None

    model_config = {"extra": "ignore"}


class _Paged(BaseModel):
    """Mixin for pages that carry a next link."""

    next: Optional[str] = Field(default=None, description="Opaque link to the following page")

    @model_validator(mode="after")
    def count_matches_page(self):
        results = getattr(self, "results", None)
        if results is not None and self.count != len(results):
            raise ValueError(f"count {self.count} does not match {len(results)} results")
        return self

    def has_next(self) -> bool:
        return self.next is not None


# =============================================================================
# Key / Value
# =============================================================================


class KVResult(BaseModel, Generic[T]):
    """A single document together with its address."""

    path: Path
    value: T

    model_config = _ENVELOPE_CONFIG


class KVResults(_Paged, Generic[T]):
    """One page of a collection listing."""

    count: int
    results: list[KVResult[T]]

    model_config = _ENVELOPE_CONFIG


# =============================================================================
# Events
# =============================================================================


class EventPath(BaseModel):
    """Address of one event: the owning document, the stream kind and the entry."""

    collection: str
    key: str
    kind: str
    timestamp: Optional[int] = Field(default=None, ge=0)
    ordinal: Optional[int] = Field(default=None, ge=0)
    ref: Optional[str] = None

    model_config = _ENVELOPE_CONFIG


class EventResult(BaseModel, Generic[T]):
    """One entry of an event stream; (timestamp, ordinal) addresses it."""

    ordinal: int = Field(..., ge=0)
    timestamp: int = Field(..., ge=0)
    value: T
    path: Optional[EventPath] = None

    model_config = _ENVELOPE_CONFIG


class EventResults(_Paged, Generic[T]):
    """A range of entries from an event stream."""

    count: int
    results: list[EventResult[T]]

    model_config = _ENVELOPE_CONFIG


# =============================================================================
# Graph
# =============================================================================


class GraphResult(BaseModel, Generic[T]):
    """A document reached by traversing one or more relation hops."""

    path: Path
    value: T

    model_config = _ENVELOPE_CONFIG


class GraphResults(_Paged, Generic[T]):
    """Documents reached by a relation traversal."""

    count: int
    results: list[GraphResult[T]]
    prev: Optional[str] = None

    model_config = _ENVELOPE_CONFIG

    def has_prev(self) -> bool:
        return self.prev is not None


# =============================================================================
# Search
# =============================================================================


class SearchResult(BaseModel, Generic[T]):
    """A scored search hit."""

    path: Path
    value: T
    score: Optional[float] = None
    distance: Optional[float] = None

    model_config = _ENVELOPE_CONFIG


class SearchResults(_Paged, Generic[T]):
    """
    One page of search hits.

    ``total_count`` is the number of matches across all pages and may exceed
    ``count``, the size of this page.
    """

    count: int
    total_count: int = Field(..., alias="totalCount")
    results: list[SearchResult[T]]
    prev: Optional[str] = None

    model_config = _ENVELOPE_CONFIG

    def has_prev(self) -> bool:
        return self.prev is not None
