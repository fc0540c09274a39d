"""Tests for the staleness-window cache."""

import asyncio

import pytest

from coursehub.services.cache import StaleCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


class CountingLoader:
    def __init__(self) -> None:
        self.calls = 0

    async def __call__(self) -> int:
        self.calls += 1
        await asyncio.sleep(0)
        return self.calls


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


async def test_returns_cached_value_inside_window(clock: FakeClock):
    cache = StaleCache(stale_after=300, evict_after=600, clock=clock)
    loader = CountingLoader()

    assert await cache.get_or_refresh("courses", loader) == 1
    clock.now = 299
    assert await cache.get_or_refresh("courses", loader) == 1
    assert loader.calls == 1
    assert cache.is_fresh("courses")


async def test_refreshes_after_window(clock: FakeClock):
    cache = StaleCache(stale_after=300, evict_after=600, clock=clock)
    loader = CountingLoader()

    await cache.get_or_refresh("courses", loader)
    clock.now = 300
    assert not cache.is_fresh("courses")
    assert await cache.get_or_refresh("courses", loader) == 2


async def test_invalidate_single_key_and_all(clock: FakeClock):
    cache = StaleCache(clock=clock)
    a, b = CountingLoader(), CountingLoader()
    await cache.get_or_refresh("a", a)
    await cache.get_or_refresh("b", b)

    cache.invalidate("a")
    assert "a" not in cache
    assert "b" in cache

    cache.invalidate()
    assert "b" not in cache
    await cache.get_or_refresh("b", b)
    assert b.calls == 2


async def test_idle_entries_are_evicted(clock: FakeClock):
    cache = StaleCache(stale_after=1000, evict_after=600, clock=clock)
    loader = CountingLoader()
    await cache.get_or_refresh("courses", loader)

    clock.now = 700
    await cache.get_or_refresh("other", CountingLoader())
    assert "courses" not in cache
    assert await cache.get_or_refresh("courses", loader) == 2


async def test_concurrent_callers_share_one_load(clock: FakeClock):
    cache = StaleCache(clock=clock)
    loader = CountingLoader()

    results = await asyncio.gather(*(cache.get_or_refresh("k", loader) for _ in range(5)))
    assert results == [1] * 5
    assert loader.calls == 1


async def test_loader_errors_propagate_and_keep_previous_value(clock: FakeClock):
    cache = StaleCache(stale_after=10, clock=clock)

    async def ok() -> str:
        return "v1"

    async def boom() -> str:
        raise RuntimeError("backend down")

    await cache.get_or_refresh("k", ok)
    clock.now = 20
    with pytest.raises(RuntimeError):
        await cache.get_or_refresh("k", boom)
    assert "k" in cache


async def test_locks_are_released_with_evicted_entries(clock: FakeClock):
    cache = StaleCache(stale_after=1, evict_after=2, clock=clock)
    for n in range(1000):
        clock.now += 10
        await cache.get_or_refresh(f"course_views:user-{n}", CountingLoader())

    assert len(cache._entries) == 1
    assert len(cache._locks) == 1


async def test_invalidate_releases_locks(clock: FakeClock):
    cache = StaleCache(clock=clock)
    for key in ("a", "b", "c"):
        await cache.get_or_refresh(key, CountingLoader())

    cache.invalidate("a")
    assert set(cache._locks) == {"b", "c"}
    cache.invalidate()
    assert not cache._locks


async def test_failed_first_load_leaves_no_lock(clock: FakeClock):
    cache = StaleCache(clock=clock)

    async def boom() -> str:
        raise RuntimeError("backend down")

    with pytest.raises(RuntimeError):
        await cache.get_or_refresh("k", boom)
    assert "k" not in cache
    assert "k" not in cache._locks
