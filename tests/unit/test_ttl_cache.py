"""Tests for the in-process TTL cache."""

import asyncio
from datetime import timedelta

import pytest

from src.core.infrastructure.cache import CacheKeys, TTLCache

pytestmark = pytest.mark.anyio


def test_get_returns_value_before_expiry(cache, clock) -> None:
    cache.set("k", "v", 300)
    clock.advance(299.9)
    assert cache.get("k") == "v"


def test_get_evicts_expired_entry(cache, clock) -> None:
    cache.set("k", "v", 120)
    clock.advance(120)
    assert cache.get("k") is None
    assert len(cache) == 0


def test_set_replaces_value_and_expiry(cache, clock) -> None:
    cache.set("k", "old", 10)
    clock.advance(5)
    cache.set("k", "new", timedelta(seconds=300))
    clock.advance(10)
    assert cache.get("k") == "new"
    assert cache.ttl("k") == pytest.approx(290)


def test_set_rejects_non_positive_ttl(cache) -> None:
    with pytest.raises(ValueError):
        cache.set("k", "v", 0)


def test_clear_and_delete(cache) -> None:
    cache.set("a", 1, 10)
    cache.set("b", 2, 10)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.clear()
    assert "b" not in cache
    assert len(cache) == 0


def test_purge_expired_removes_only_stale_entries(cache, clock) -> None:
    cache.set("short", 1, 10)
    cache.set("long", 2, 100)
    clock.advance(50)
    assert cache.purge_expired() == 1
    assert cache.get("long") == 2
    assert len(cache) == 1


def test_capacity_evicts_least_recently_used(clock) -> None:
    cache = TTLCache(max_entries=2, clock=clock)
    cache.set("a", 1, 60)
    cache.set("b", 2, 60)
    cache.get("a")
    cache.set("c", 3, 60)

    assert cache.get("a") == 1
    assert cache.get("b") is None
    assert cache.get("c") == 3


def test_capacity_prefers_dropping_expired_entries(clock) -> None:
    cache = TTLCache(max_entries=2, clock=clock)
    cache.set("fresh", 1, 60)
    cache.set("stale", 2, 5)
    cache.get("stale")
    clock.advance(10)
    cache.set("new", 3, 60)

    assert cache.get("fresh") == 1
    assert cache.get("new") == 3


async def test_sweeper_purges_without_reads() -> None:
    now = [0.0]
    cache = TTLCache(clock=lambda: now[0])
    cache.set("k", "v", 1)
    now[0] = 5.0

    cache.start_sweeper(0.01)
    assert cache.sweeper_running
    for _ in range(50):
        if len(cache) == 0:
            break
        await asyncio.sleep(0.01)
    await cache.stop_sweeper()

    assert len(cache) == 0
    assert not cache.sweeper_running


async def test_start_sweeper_is_idempotent(cache) -> None:
    first = cache.start_sweeper(60)
    second = cache.start_sweeper(60)
    assert first is second
    await cache.stop_sweeper()
    assert first.cancelled()


def test_hotnews_key_keeps_order_and_repeats() -> None:
    assert CacheKeys.hotnews([1, 3, 7]) == "hotnews_1_3_7"
    assert CacheKeys.hotnews([7, 3, 1]) == "hotnews_7_3_1"
    assert CacheKeys.hotnews([1, 1]) == "hotnews_1_1"
