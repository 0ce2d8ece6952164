from __future__ import annotations

import copy
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from ..data.models import Collection


class _Absent:
    """Marker for a collection that has never been populated."""

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT = _Absent()


@dataclass
class _Slot:
    value: Any = ABSENT
    fetched_at: Optional[float] = None
    version: int = 0


class RuntimeCache:
    """
    Single-slot, in-process snapshot store for each collection.

    - `get` hands out deep copies so callers cannot mutate cached state.
    - `put` always bumps the timestamp and version, even for identical values.
    - Versions only ever increase; `clear` drops the value and timestamp but
      keeps the counter.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._slots: Dict[Collection, _Slot] = {c: _Slot() for c in Collection}

    def get(self, collection: Collection) -> Any:
        value = self._slots[collection].value
        if value is ABSENT:
            return ABSENT
        return copy.deepcopy(value)

    def put(self, collection: Collection, value: Any) -> int:
        """Replace the cached value. Returns the new version."""
        slot = self._slots[collection]
        slot.value = copy.deepcopy(value)
        slot.fetched_at = self._clock()
        slot.version += 1
        return slot.version

    def clear(self, collection: Optional[Collection] = None) -> None:
        targets = list(Collection) if collection is None else [collection]
        for target in targets:
            slot = self._slots[target]
            slot.value = ABSENT
            slot.fetched_at = None

    def version(self, collection: Collection) -> int:
        return self._slots[collection].version

    def age(self, collection: Collection) -> Optional[float]:
        """Seconds since the last `put`, or None when empty."""
        fetched_at = self._slots[collection].fetched_at
        if fetched_at is None:
            return None
        return self._clock() - fetched_at

    def is_fresh(self, collection: Collection, max_age_s: float) -> bool:
        age = self.age(collection)
        return age is not None and age < max_age_s
