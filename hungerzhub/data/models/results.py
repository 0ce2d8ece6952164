from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

from .collections import Collection


class Fresh(BaseModel):
    """Authoritative data just returned by the remote source."""
    kind: Literal["fresh"] = "fresh"
    collection: Collection
    value: List[Any]
    version: int = Field(description="Cache version the value was committed under")

    @property
    def is_degraded(self) -> bool:
        return False


class Cached(BaseModel):
    """Previously known data, from the runtime cache or the local fallback store."""
    kind: Literal["cached"] = "cached"
    collection: Collection
    value: List[Any]
    age: float = Field(description="Seconds since the value was stored")
    source: Literal["memory", "fallback_store"]

    @property
    def is_degraded(self) -> bool:
        return self.source == "fallback_store"


class Default(BaseModel):
    """Built-in seed data used when nothing else is available."""
    kind: Literal["default"] = "default"
    collection: Collection
    value: List[Any]

    @property
    def is_degraded(self) -> bool:
        return True


FetchResult = Union[Fresh, Cached, Default]


class SaveResult(BaseModel):
    """Outcome of a write. The optimistic local state is kept either way."""
    collection: Collection
    ok: bool
    version: int
    error: Optional[str] = None


class RefreshResult(BaseModel):
    """Per-collection outcome of a forced refresh."""
    results: Dict[Collection, FetchResult]

    @property
    def ok(self) -> bool:
        return all(isinstance(result, Fresh) for result in self.results.values())
