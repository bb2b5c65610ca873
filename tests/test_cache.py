from rdf_search.core.cache import ResponseCache

from conftest import FakeClock


def test_hit_within_ttl() -> None:
    clock = FakeClock()
    cache = ResponseCache(ttl_seconds=60, clock=clock)
    cache.set("k", {"items": []})

    clock.advance(60)
    assert cache.get("k") == {"items": []}


def test_expired_entry_is_evicted() -> None:
    clock = FakeClock()
    cache = ResponseCache(ttl_seconds=60, clock=clock)
    cache.set("k", "v")
    cache.set("other", "w")

    clock.advance(60.5)
    assert cache.get("k") is None
    assert len(cache) == 1


def test_missing_key() -> None:
    assert ResponseCache().get("nope") is None


def test_cache_is_wiped_once_over_capacity() -> None:
    cache = ResponseCache(max_entries=3, clock=FakeClock())
    for i in range(4):
        cache.set(f"k{i}", i)
    assert len(cache) == 4

    cache.set("k4", 4)
    assert len(cache) == 1
    assert cache.get("k0") is None
    assert cache.get("k4") == 4


def test_set_refreshes_timestamp() -> None:
    clock = FakeClock()
    cache = ResponseCache(ttl_seconds=60, clock=clock)
    cache.set("k", 1)
    clock.advance(50)
    cache.set("k", 2)
    clock.advance(50)
    assert cache.get("k") == 2
