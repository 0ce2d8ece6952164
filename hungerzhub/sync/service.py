from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Optional

from pydantic import BaseModel

from ..data.interface import RemoteDataSource, RowId
from ..data.models import (
    Cached,
    Collection,
    Default,
    FetchResult,
    Fresh,
    RefreshResult,
    SaveResult,
)
from ..data.normalize import dump_collection, parse_collection
from ..errors import PayloadShapeError, RemoteUnavailableError
from ..logging import get_logger
from ..seed_data import default_collection
from .cache import ABSENT, RuntimeCache
from .events import ChangeBus, Disposer, Handler
from .fallback_store import LocalFallbackStore
from .retry import RetryPolicy, call_with_retry

logger = get_logger(__name__)

Notifier = Callable[[str], None]


class SyncService:
    """
    The only read/write path UI code uses for tables, menu items and orders.

    Reads are served from the runtime cache while it is fresh, otherwise from
    the remote source with retry, then from the local fallback store, then
    from built-in defaults. Writes land in the cache and the fallback store
    before the remote call, and stay there if the remote call fails.
    No public coroutine raises for network or payload problems.
    """

    def __init__(
        self,
        remote: RemoteDataSource,
        cache: Optional[RuntimeCache] = None,
        store: Optional[LocalFallbackStore] = None,
        retry_policy: Optional[RetryPolicy] = None,
        freshness_window_s: float = 5.0,
        poll_interval_s: float = 10.0,
        defaults: Callable[[Collection], List[BaseModel]] = default_collection,
        notifier: Optional[Notifier] = None,
    ) -> None:
        self.remote = remote
        self.cache = cache if cache is not None else RuntimeCache()
        self.store = store
        self.retry_policy = retry_policy or RetryPolicy()
        self.freshness_window_s = freshness_window_s
        self._defaults = defaults
        self._notifier = notifier
        # Cache version produced by the latest optimistic write per collection
        self._write_versions: Dict[Collection, int] = {c: 0 for c in Collection}
        # Rows created locally whose remote create has not succeeded yet
        self._unsent: Dict[Collection, Dict[RowId, BaseModel]] = {c: {} for c in Collection}
        self._bus = ChangeBus(self.force_refresh, interval_s=poll_interval_s)

    # ---------- reads ----------

    async def fetch(self, collection: Collection, force_refresh: bool = False) -> FetchResult:
        if not force_refresh and self.cache.is_fresh(collection, self.freshness_window_s):
            hit = self._memory_hit(collection)
            if hit is not None:
                return hit

        base_version = self.cache.version(collection)
        try:
            items = await call_with_retry(
                lambda: self._pull(collection),
                self.retry_policy,
                f"fetch {collection.value}",
            )
        except RemoteUnavailableError as e:
            logger.warning(f"Serving {collection.value} from fallback: {e}")
            return self._fallback(collection)

        if self._write_versions[collection] > base_version:
            # A local write landed while the request was in flight; it wins.
            logger.info(f"Discarding fetched {collection.value}: superseded by a local write")
            hit = self._memory_hit(collection)
            if hit is not None:
                return hit

        items = self._with_unsent(collection, items)
        version = self.cache.put(collection, items)
        self._persist(collection, items)
        logger.debug(f"Fetched {len(items)} {collection.value} (version {version})")
        return Fresh(collection=collection, value=items, version=version)

    async def force_refresh(self) -> RefreshResult:
        """Drop every cached collection and refetch all of them concurrently."""
        self.cache.clear()
        collections = list(Collection)
        results = await asyncio.gather(*(self.fetch(c, force_refresh=True) for c in collections))
        refresh = RefreshResult(results=dict(zip(collections, results)))
        if not refresh.ok:
            logger.warning("Forced refresh finished with degraded collections")
        return refresh

    def clear_cache(self, include_fallback: bool = False) -> None:
        """Reset the runtime cache; optionally wipe the fallback store too."""
        self.cache.clear()
        if include_fallback:
            for pending in self._unsent.values():
                pending.clear()
            if self.store is not None:
                self.store.clear()
        logger.info("Runtime cache cleared")

    # ---------- writes ----------

    async def save(self, collection: Collection, value: Iterable[Any]) -> SaveResult:
        """Optimistically replace a whole collection, then push it to the remote."""
        try:
            items = parse_collection(collection, list(value))
        except PayloadShapeError as e:
            logger.error(f"Refusing to save {collection.value}: {e}")
            return SaveResult(collection=collection, ok=False, version=self.cache.version(collection), error=str(e))

        version = self._commit_local(collection, items)
        rows = dump_collection(items)
        result = await self._push(
            collection,
            version,
            lambda: self.remote.replace(collection, rows),
            f"save {collection.value}",
        )
        if result.ok:
            self._unsent[collection].clear()
        return result

    async def save_item(self, collection: Collection, item: Any) -> SaveResult:
        """Optimistically insert or replace one row, then create/update it remotely."""
        try:
            (item,) = parse_collection(collection, [item])
        except PayloadShapeError as e:
            logger.error(f"Refusing to save {collection.value} item: {e}")
            return SaveResult(collection=collection, ok=False, version=self.cache.version(collection), error=str(e))

        current = await self._current(collection)
        exists = any(existing.id == item.id for existing in current)
        if exists:
            updated = [item if existing.id == item.id else existing for existing in current]
        else:
            updated = current + [item]

        version = self._commit_local(collection, updated)
        row = item.model_dump(mode="json")
        pending = self._unsent[collection]
        create = not exists or item.id in pending
        if create:
            operation = lambda: self.remote.create(collection, row)
        else:
            operation = lambda: self.remote.update(collection, item.id, row)
        result = await self._push(collection, version, operation, f"save {collection.value} {item.id}")
        if result.ok:
            pending.pop(item.id, None)
        elif create:
            pending[item.id] = item
        return result

    async def delete_item(self, collection: Collection, item_id: RowId) -> SaveResult:
        """Optimistically remove one row, then delete it remotely."""
        current = await self._current(collection)
        remaining = [existing for existing in current if existing.id != item_id]
        if len(remaining) == len(current):
            message = f"{collection.value}: no item with id {item_id!r}"
            logger.warning(message)
            return SaveResult(collection=collection, ok=False, version=self.cache.version(collection), error=message)

        version = self._commit_local(collection, remaining)
        if self._unsent[collection].pop(item_id, None) is not None:
            logger.info(f"{collection.value} {item_id} never reached the remote; removed locally only")
            return SaveResult(collection=collection, ok=True, version=version)
        return await self._push(
            collection,
            version,
            lambda: self.remote.delete(collection, item_id),
            f"delete {collection.value} {item_id}",
        )

    # ---------- change notification ----------

    def subscribe(self, handler: Handler, collection: Optional[Collection] = None) -> Disposer:
        """Call `handler` after every poll cycle. Returns a disposer."""
        return self._bus.subscribe(handler, collection)

    async def poll_once(self) -> RefreshResult:
        return await self._bus.poll_once()

    async def aclose(self) -> None:
        await self._bus.aclose()
        close = getattr(self.remote, "aclose", None)
        if close is not None:
            await close()

    # ---------- helpers ----------

    async def _pull(self, collection: Collection) -> List[BaseModel]:
        payload = await self.remote.list(collection)
        return parse_collection(collection, payload)

    def _memory_hit(self, collection: Collection) -> Optional[Cached]:
        value = self.cache.get(collection)
        if value is ABSENT:
            return None
        return Cached(collection=collection, value=value, age=self.cache.age(collection) or 0.0, source="memory")

    def _fallback(self, collection: Collection) -> FetchResult:
        snapshot = self.store.read(collection) if self.store is not None else None
        if snapshot is not None:
            return Cached(collection=collection, value=snapshot.value, age=snapshot.age(), source="fallback_store")
        logger.warning(f"No stored copy of {collection.value}; using built-in defaults")
        return Default(collection=collection, value=self._defaults(collection))

    async def _current(self, collection: Collection) -> List[BaseModel]:
        value = self.cache.get(collection)
        if value is not ABSENT:
            return value
        loaded = list((await self.fetch(collection)).value)
        # Another writer may have committed while the fetch was pending.
        value = self.cache.get(collection)
        return loaded if value is ABSENT else value

    def _with_unsent(self, collection: Collection, items: List[BaseModel]) -> List[BaseModel]:
        pending = self._unsent[collection]
        if not pending:
            return items
        known = {item.id for item in items}
        for row_id in known & pending.keys():
            del pending[row_id]
        return items + [row for row_id, row in pending.items() if row_id not in known]

    def _commit_local(self, collection: Collection, items: List[BaseModel]) -> int:
        version = self.cache.put(collection, items)
        self._write_versions[collection] = version
        self._persist(collection, items)
        return version

    def _persist(self, collection: Collection, items: List[BaseModel]) -> None:
        if self.store is None:
            return
        try:
            self.store.write(collection, items)
        except OSError as e:
            logger.error(f"Could not persist {collection.value} to the fallback store: {e}")

    async def _push(
        self,
        collection: Collection,
        version: int,
        operation: Callable[[], Awaitable[Any]],
        description: str,
    ) -> SaveResult:
        try:
            await call_with_retry(operation, self.retry_policy, description)
        except RemoteUnavailableError as e:
            logger.error(f"{description} not persisted remotely; keeping local copy: {e}")
            if self._notifier is not None:
                self._notifier(f"Could not sync {collection.value}; changes are saved on this device only.")
            return SaveResult(collection=collection, ok=False, version=version, error=str(e))
        logger.debug(f"{description} persisted (version {version})")
        return SaveResult(collection=collection, ok=True, version=version)
