from __future__ import annotations

import json
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from ..data.models import Collection
from ..data.normalize import dump_collection, parse_collection
from ..errors import PayloadShapeError
from ..logging import get_logger

logger = get_logger(__name__)

_SAFE_KEY = re.compile(r"[^A-Za-z0-9_.-]")


class StoredSnapshot(BaseModel):
    """A collection snapshot read back from the fallback store."""
    collection: Collection
    value: List[Any]
    saved_at: datetime = Field(description="When the snapshot was written (UTC)")

    def age(self, now: Optional[datetime] = None) -> float:
        now = now or datetime.now(timezone.utc)
        return max(0.0, (now - self.saved_at).total_seconds())


class LocalFallbackStore:
    """
    Directory-backed key-value store used as an offline copy of each collection.

    Keys are namespaced (``hungerzhub.tables``) and map to one JSON file each.
    Writes are synchronous. A snapshot that cannot be read or validated is
    reported as missing rather than raised.
    """

    def __init__(self, directory: str | Path, namespace: str = "hungerzhub") -> None:
        self.directory = Path(directory)
        self.namespace = namespace

    def key_for(self, collection: Collection) -> str:
        return f"{self.namespace}.{collection.value}"

    def _path(self, key: str) -> Path:
        return self.directory / f"{_SAFE_KEY.sub('_', key)}.json"

    # ---------- key-value API ----------

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def remove_item(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    # ---------- collection snapshots ----------

    def read(self, collection: Collection) -> Optional[StoredSnapshot]:
        raw = self.get_item(self.key_for(collection))
        if raw is None:
            return None
        try:
            document = json.loads(raw)
            return StoredSnapshot(
                collection=collection,
                value=parse_collection(collection, document["value"]),
                saved_at=document["saved_at"],
            )
        except (ValueError, KeyError, TypeError, PayloadShapeError) as e:
            logger.warning(f"Ignoring unreadable fallback snapshot for {collection.value}: {e}")
            return None

    def write(self, collection: Collection, items: List[BaseModel]) -> None:
        document = {
            "saved_at": datetime.now(timezone.utc).isoformat(),
            "value": dump_collection(items),
        }
        self.set_item(self.key_for(collection), json.dumps(document))

    def remove(self, collection: Collection) -> None:
        self.remove_item(self.key_for(collection))

    def clear(self) -> None:
        for collection in Collection:
            self.remove(collection)
