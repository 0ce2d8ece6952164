# hungerzhub/data/interface.py
from __future__ import annotations

from typing import Any, Dict, List, Protocol, Union

from .models import Collection

RowId = Union[int, str]


# ---- Remote data source protocol ----

class RemoteDataSource(Protocol):
    """
    Backend-agnostic contract for the system of record.

    Implementations return raw payloads; shape checking and normalization
    happen in the sync layer so every backend is treated alike.
    - Implementations MUST NOT cache. Each call goes to the underlying source.
    - Failures are raised; retries are the caller's job.
    """

    async def list(self, collection: Collection) -> Any:
        """Return every row of a collection."""
        ...

    async def replace(self, collection: Collection, rows: List[Dict[str, Any]]) -> None:
        """Overwrite a whole collection with `rows`."""
        ...

    async def create(self, collection: Collection, row: Dict[str, Any]) -> Any:
        """Insert one row."""
        ...

    async def update(self, collection: Collection, row_id: RowId, row: Dict[str, Any]) -> Any:
        """Replace the row identified by `row_id`."""
        ...

    async def delete(self, collection: Collection, row_id: RowId) -> None:
        """Remove the row identified by `row_id`."""
        ...
