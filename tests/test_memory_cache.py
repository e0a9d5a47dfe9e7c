"""
Tests for infrastructure/cache/memory_cache.py.

Covers: set/get/has agreement, TTL boundary, LRU eviction, overwrite,
        clear, stats, value isolation, concurrent access.
"""

import threading
from collections.abc import Mapping

import pytest

from pokeproxy.infrastructure.cache import MemoryCache, freeze
from tests.conftest import FakeClock


# ============================================================
# Basic operations
# ============================================================


class TestBasicOperations:
    def test_get_returns_value_after_set(self, cache):
        cache.set("pokemon:pikachu", {"id": 25})
        assert dict(cache.get("pokemon:pikachu")) == {"id": 25}

    def test_missing_key_is_absent(self, cache):
        assert cache.get("pokemon:missingno") is None
        assert cache.has("pokemon:missingno") is False

    def test_has_and_get_agree(self, cache):
        cache.set("a", 1)
        assert cache.has("a") is True
        assert cache.get("a") == 1

    def test_overwrite_replaces_value(self, cache):
        cache.set("a", {"v": 1})
        cache.set("a", {"v": 2})
        assert cache.get("a")["v"] == 2
        assert cache.size() == 1

    def test_delete(self, cache):
        cache.set("a", 1)
        assert cache.delete("a") is True
        assert cache.delete("a") is False
        assert cache.has("a") is False

    def test_clear_returns_count(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.clear() == 2
        assert cache.size() == 0
        assert cache.get("a") is None

    def test_capacity(self, cache):
        assert cache.capacity() == 10

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            MemoryCache(max_entries=0)

    def test_contains_and_len(self, cache):
        cache.set("a", 1)
        assert "a" in cache
        assert len(cache) == 1


# ============================================================
# Value isolation
# ============================================================


class TestValueIsolation:
    def test_mutating_input_does_not_change_entry(self, cache):
        value = {"types": ["electric"]}
        cache.set("a", value)
        value["types"].append("fire")
        assert cache.get("a")["types"] == ("electric",)

    def test_stored_mapping_is_read_only(self, cache):
        cache.set("a", {"types": ["electric"]})
        with pytest.raises(TypeError):
            cache.get("a")["types"] = []

    def test_stored_list_is_read_only(self, cache):
        cache.set("a", {"types": ["electric"]})
        with pytest.raises(AttributeError):
            cache.get("a")["types"].append("fire")

    def test_get_returns_stored_value_without_copying(self, cache):
        cache.set("a", {"moves": [{"move": {"name": "slam"}}] * 100})
        assert cache.get("a") is cache.get("a")

    def test_nested_values_are_frozen(self):
        frozen = freeze({"sprites": {"other": {"official-artwork": {"front_default": "x"}}}, "ids": [1, [2, 3]]})

        assert isinstance(frozen["sprites"]["other"], Mapping)
        assert frozen["ids"] == (1, (2, 3))
        with pytest.raises(TypeError):
            frozen["sprites"]["other"]["x"] = 1


# ============================================================
# TTL
# ============================================================


class TestExpiry:
    def test_present_just_before_ttl(self, cache, clock):
        cache.set("a", 1)
        clock.advance(60 - 0.001)
        assert cache.has("a") is True
        assert cache.get("a") == 1

    def test_present_exactly_at_ttl(self, cache, clock):
        cache.set("a", 1)
        clock.advance(60)
        assert cache.get("a") == 1

    def test_absent_just_after_ttl(self, cache, clock):
        cache.set("a", 1)
        clock.advance(60 + 0.001)
        assert cache.has("a") is False
        assert cache.get("a") is None

    def test_expired_entry_is_dropped_on_access(self, cache, clock):
        cache.set("a", 1)
        clock.advance(61)
        cache.get("a")
        assert cache.stats.expirations == 1
        assert cache.delete("a") is False

    def test_set_resets_expiry_clock(self, cache, clock):
        cache.set("a", 1)
        clock.advance(50)
        cache.set("a", 2)
        clock.advance(50)
        assert cache.get("a") == 2

    def test_get_does_not_extend_ttl(self, cache, clock):
        cache.set("a", 1)
        clock.advance(40)
        assert cache.get("a") == 1
        clock.advance(21)
        assert cache.get("a") is None

    def test_size_excludes_expired(self, cache, clock):
        cache.set("a", 1)
        clock.advance(30)
        cache.set("b", 2)
        clock.advance(31)
        assert cache.size() == 1

    def test_no_ttl_never_expires(self):
        clock = FakeClock()
        cache = MemoryCache(max_entries=2, ttl=None, clock=clock)
        cache.set("a", 1)
        clock.advance(10 ** 9)
        assert cache.get("a") == 1


# ============================================================
# Capacity / LRU
# ============================================================


class TestEviction:
    def test_never_exceeds_capacity(self, clock):
        cache = MemoryCache(max_entries=3, ttl=60, clock=clock)
        for i in range(4):
            cache.set(f"k{i}", i)
        assert cache.size() == 3

    def test_evicts_least_recently_inserted_without_reads(self, clock):
        cache = MemoryCache(max_entries=3, ttl=60, clock=clock)
        for key in ("a", "b", "c", "d"):
            cache.set(key, key)
        assert cache.has("a") is False
        assert all(cache.has(k) for k in ("b", "c", "d"))

    def test_get_refreshes_recency(self, clock):
        cache = MemoryCache(max_entries=3, ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        cache.get("a")
        cache.set("d", 4)
        assert cache.has("a") is True
        assert cache.has("b") is False
        assert cache.stats.evictions == 1

    def test_has_does_not_refresh_recency(self, clock):
        cache = MemoryCache(max_entries=2, ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.has("a")
        cache.set("c", 3)
        assert cache.has("a") is False
        assert cache.has("b") is True

    def test_overwrite_at_capacity_does_not_evict(self, clock):
        cache = MemoryCache(max_entries=2, ttl=60, clock=clock)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("a", 10)
        assert cache.get("a") == 10
        assert cache.get("b") == 2
        assert cache.stats.evictions == 0

    def test_expired_entries_are_removed_before_live_ones(self, clock):
        cache = MemoryCache(max_entries=2, ttl=60, clock=clock)
        cache.set("old", 1)
        clock.advance(30)
        cache.set("fresh", 2)
        clock.advance(31)
        cache.set("new", 3)
        assert cache.get("fresh") == 2
        assert cache.get("new") == 3
        assert cache.stats.evictions == 0


# ============================================================
# Stats
# ============================================================


class TestStats:
    def test_get_stats_shape(self, cache):
        cache.set("a", 1)
        cache.get("a")
        cache.get("b")
        stats = cache.get_stats()
        assert stats["size"] == 1
        assert stats["capacity"] == 10
        assert stats["max"] == 10
        assert stats["ttl_seconds"] == 60
        assert stats["hits"] == 1
        assert stats["misses"] == 1
        assert stats["hit_rate"] == 0.5


# ============================================================
# Concurrency
# ============================================================


class TestConcurrentAccess:
    def test_parallel_writers_keep_bound(self):
        cache = MemoryCache(max_entries=50, ttl=60)
        errors = []

        def writer(offset: int) -> None:
            try:
                for i in range(200):
                    key = f"k{offset}-{i}"
                    cache.set(key, i)
                    cache.has(key)
                    cache.get(key)
            except Exception as e:  # pragma: no cover - surfaced by the assert below
                errors.append(e)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert cache.size() == 50
