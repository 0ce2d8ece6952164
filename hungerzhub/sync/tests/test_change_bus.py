import asyncio

import pytest

from hungerzhub.data.models import Collection, Fresh, RefreshResult
from hungerzhub.sync.events import ChangeBus


@pytest.mark.asyncio
async def test_poll_once_delivers_per_collection_and_whole_results(sync_service):
    everything, tables = [], []
    dispose_all = sync_service.subscribe(everything.append)
    dispose_tables = sync_service.subscribe(tables.append, Collection.TABLES)

    result = await sync_service.poll_once()

    assert everything == [result]
    assert isinstance(everything[0], RefreshResult)
    assert len(tables) == 1 and isinstance(tables[0], Fresh)
    assert tables[0].collection is Collection.TABLES
    dispose_all()
    dispose_tables()


@pytest.mark.asyncio
async def test_single_timer_for_many_subscribers(sync_service):
    bus = sync_service._bus
    disposers = [sync_service.subscribe(lambda _: None)]
    task = bus._task
    disposers += [sync_service.subscribe(lambda _: None) for _ in range(2)]
    assert bus.running
    assert bus._task is task

    disposers[0]()
    disposers[1]()
    assert bus.running
    disposers[2]()
    assert not bus.running
    await asyncio.sleep(0)
    assert task.cancelled() or task.done()


@pytest.mark.asyncio
async def test_disposer_is_idempotent(sync_service):
    dispose = sync_service.subscribe(lambda _: None)
    dispose()
    dispose()
    assert sync_service._bus.subscriber_count == 0


@pytest.mark.asyncio
async def test_background_poll_force_refreshes(sync_service, remote):
    cycles = asyncio.Queue()

    async def on_refresh(result):
        await cycles.put(result)

    dispose = sync_service.subscribe(on_refresh)
    first = await asyncio.wait_for(cycles.get(), timeout=2)
    second = await asyncio.wait_for(cycles.get(), timeout=2)
    dispose()
    await sync_service.aclose()

    assert first.ok and second.ok
    assert remote.count("list", Collection.ORDERS) >= 2


@pytest.mark.asyncio
async def test_failing_handler_does_not_stop_others():
    async def refresh():
        return RefreshResult(results={})

    bus = ChangeBus(refresh, interval_s=60)
    seen = []

    def broken(_):
        raise RuntimeError("handler bug")

    bus.subscribe(broken)
    bus.subscribe(seen.append)
    await bus.poll_once()
    await bus.aclose()

    assert len(seen) == 1
    assert not bus.running


def test_interval_must_be_positive():
    async def refresh():
        return RefreshResult(results={})

    with pytest.raises(ValueError):
        ChangeBus(refresh, interval_s=0)
