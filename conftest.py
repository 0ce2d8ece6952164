import asyncio
import copy

import httpx
import pytest

from hungerzhub.config import set_config_for_test
from hungerzhub.data.models import Collection
from hungerzhub.sync import LocalFallbackStore, RetryPolicy, SyncService


MENU_ROWS = [
    {"id": "m1", "name": "Margherita Pizza", "price": {"half": 50, "full": 90}, "category": "pizza", "popular": True},
    {"id": "m2", "name": "Garlic Bread", "price": 100, "category": "garlic-bread"},
]


class FakeRemote:
    """In-memory RemoteDataSource that counts calls and can be told to fail."""

    def __init__(self, payloads=None):
        self.payloads = {
            Collection.TABLES: [1, 2, 3],
            Collection.MENU_ITEMS: copy.deepcopy(MENU_ROWS),
            Collection.ORDERS: [],
        }
        if payloads:
            self.payloads.update(payloads)
        self.calls = []
        self.list_failures = {c: 0 for c in Collection}
        self.write_failures = 0
        self.always_fail = False
        self.list_gate = None
        self.write_gate = None

    def count(self, method, collection=None):
        return sum(1 for m, c in self.calls if m == method and (collection is None or c == collection))

    def _maybe_fail_write(self):
        if self.always_fail or self.write_failures > 0:
            self.write_failures = max(0, self.write_failures - 1)
            raise httpx.ConnectError("remote down")

    async def list(self, collection):
        self.calls.append(("list", collection))
        await asyncio.sleep(0)
        if self.always_fail or self.list_failures[collection] > 0:
            self.list_failures[collection] = max(0, self.list_failures[collection] - 1)
            raise httpx.ConnectError("remote down")
        payload = copy.deepcopy(self.payloads[collection])
        if self.list_gate is not None:
            await self.list_gate.wait()
        return payload

    async def replace(self, collection, rows):
        self.calls.append(("replace", collection))
        if self.write_gate is not None:
            await self.write_gate.wait()
        self._maybe_fail_write()
        self.payloads[collection] = copy.deepcopy(rows)

    async def create(self, collection, row):
        self.calls.append(("create", collection))
        self._maybe_fail_write()
        self.payloads[collection].append(copy.deepcopy(row))
        return row

    async def update(self, collection, row_id, row):
        self.calls.append(("update", collection))
        self._maybe_fail_write()
        self.payloads[collection] = [
            row if (r.get("id") if isinstance(r, dict) else r) == row_id else r
            for r in self.payloads[collection]
        ]
        return row

    async def delete(self, collection, row_id):
        self.calls.append(("delete", collection))
        self._maybe_fail_write()
        self.payloads[collection] = [
            r for r in self.payloads[collection]
            if (r.get("id") if isinstance(r, dict) else r) != row_id
        ]


@pytest.fixture(autouse=True)
def test_config():
    set_config_for_test(log_level="DEBUG", coupons={"PRINCE10": 10.0})


@pytest.fixture
def remote():
    return FakeRemote()


@pytest.fixture
def store(tmp_path):
    return LocalFallbackStore(tmp_path / "store", namespace="hungerzhub")


@pytest.fixture
def notices():
    return []


@pytest.fixture
def sync_service(remote, store, notices):
    return SyncService(
        remote=remote,
        store=store,
        retry_policy=RetryPolicy(attempts=3, backoff_s=0, timeout_s=1.0),
        freshness_window_s=5.0,
        poll_interval_s=0.05,
        notifier=notices.append,
    )


async def settle():
    """Let pending tasks run up to their next suspension point."""
    for _ in range(5):
        await asyncio.sleep(0)
