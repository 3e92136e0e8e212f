import threading

import pytest

from game_integrations.cache import DEFAULT_CAPACITY, Cache, is_missing


def test_default_capacity():
    assert Cache().capacity == DEFAULT_CAPACITY == 64


def test_get_returns_default_for_missing_keys():
    cache = Cache()
    assert cache.get("editions") is None
    assert cache.get("editions", ()) == ()


def test_set_overwrites_existing_key_in_place():
    cache = Cache(capacity=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 3)
    assert cache.get("a") == 3
    assert cache.keys() == ("a", "b")
    assert len(cache) == 2


def test_oldest_entry_is_evicted_when_full():
    cache = Cache(capacity=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("c", 3)
    assert "a" not in cache
    assert list(cache) == ["b", "c"]


def test_stored_none_is_distinguishable_from_missing():
    cache = Cache()
    cache.set("details_style/global", None)
    assert not is_missing(cache.lookup("details_style/global"))
    assert is_missing(cache.lookup("details_style/china"))
    assert "details_style/global" in cache


def test_clear():
    cache = Cache()
    cache.set("a", 1)
    cache.clear()
    assert len(cache) == 0


def test_rejects_non_positive_capacity():
    with pytest.raises(ValueError):
        Cache(capacity=0)


def test_concurrent_writers_never_exceed_capacity():
    cache = Cache(capacity=8)

    def writer(offset):
        for index in range(100):
            cache.set((offset, index), index)

    threads = [threading.Thread(target=writer, args=(offset,)) for offset in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(cache) == 8
