import pytest

from hungerzhub.data.models import Collection, Table
from hungerzhub.sync.cache import ABSENT, RuntimeCache


class FakeClock:
    def __init__(self):
        self.now = 100.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return RuntimeCache(clock=clock)


def test_never_populated_is_absent(cache):
    assert cache.get(Collection.TABLES) is ABSENT
    assert not cache.is_fresh(Collection.TABLES, 10)
    assert cache.age(Collection.TABLES) is None
    assert cache.version(Collection.TABLES) == 0


def test_get_returns_copy_not_alias(cache):
    cache.put(Collection.TABLES, [Table(id=1)])
    first = cache.get(Collection.TABLES)
    first.append(Table(id=2))
    first[0].id = 99
    assert cache.get(Collection.TABLES) == [Table(id=1)]


def test_put_does_not_keep_callers_reference(cache):
    value = [Table(id=1)]
    cache.put(Collection.TABLES, value)
    value.append(Table(id=2))
    assert len(cache.get(Collection.TABLES)) == 1


def test_put_bumps_version_even_for_identical_value(cache):
    assert cache.put(Collection.TABLES, [Table(id=1)]) == 1
    assert cache.put(Collection.TABLES, [Table(id=1)]) == 2
    assert cache.version(Collection.MENU_ITEMS) == 0


def test_freshness_window(cache, clock):
    cache.put(Collection.ORDERS, [])
    clock.now += 4.9
    assert cache.is_fresh(Collection.ORDERS, 5.0)
    clock.now += 0.1
    assert not cache.is_fresh(Collection.ORDERS, 5.0)


def test_clear_one_collection_keeps_others(cache):
    cache.put(Collection.TABLES, [Table(id=1)])
    cache.put(Collection.ORDERS, [])
    cache.clear(Collection.TABLES)
    assert cache.get(Collection.TABLES) is ABSENT
    assert cache.get(Collection.ORDERS) == []


def test_clear_all_keeps_version_counters(cache):
    cache.put(Collection.TABLES, [Table(id=1)])
    cache.clear()
    assert cache.get(Collection.TABLES) is ABSENT
    assert not cache.is_fresh(Collection.TABLES, 60)
    assert cache.version(Collection.TABLES) == 1
    assert cache.put(Collection.TABLES, []) == 2
