from __future__ import annotations

import asyncio
import inspect
import itertools
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional

from ..data.models import Collection, RefreshResult
from ..logging import get_logger

logger = get_logger(__name__)

Handler = Callable[[Any], Any]
Disposer = Callable[[], None]


@dataclass
class _Subscription:
    handler: Handler
    collection: Optional[Collection]


class ChangeBus:
    """
    Publish/subscribe over a periodic refresh.

    One polling task serves every subscriber. It starts with the first
    subscription and is cancelled when the last one is disposed. Handlers
    registered for a collection receive that collection's FetchResult;
    handlers registered without one receive the whole RefreshResult.
    """

    def __init__(self, refresh: Callable[[], Awaitable[RefreshResult]], interval_s: float = 10.0) -> None:
        if interval_s <= 0:
            raise ValueError("interval_s must be positive")
        self._refresh = refresh
        self.interval_s = interval_s
        self._subscriptions: Dict[int, _Subscription] = {}
        self._ids = itertools.count(1)
        self._task: Optional[asyncio.Task] = None

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def subscribe(self, handler: Handler, collection: Optional[Collection] = None) -> Disposer:
        """Register `handler`; call the returned disposer to unsubscribe.

        Must be called while an event loop is running.
        """
        sub_id = next(self._ids)
        self._subscriptions[sub_id] = _Subscription(handler=handler, collection=collection)
        if not self.running:
            self._task = asyncio.get_running_loop().create_task(self._run())

        def dispose() -> None:
            if self._subscriptions.pop(sub_id, None) is not None and not self._subscriptions:
                self._stop()

        return dispose

    async def poll_once(self) -> RefreshResult:
        """Run one refresh cycle and deliver it to every subscriber."""
        result = await self._refresh()
        for subscription in list(self._subscriptions.values()):
            if subscription.collection is None:
                payload: Any = result
            else:
                payload = result.results[subscription.collection]
            await self._deliver(subscription, payload)
        return result

    async def aclose(self) -> None:
        self._subscriptions.clear()
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_s)
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Poll cycle failed")

    async def _deliver(self, subscription: _Subscription, payload: Any) -> None:
        try:
            outcome = subscription.handler(payload)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception:
            logger.exception(f"Change handler {subscription.handler!r} failed")

    def _stop(self) -> None:
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
