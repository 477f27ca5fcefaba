"""Unit tests for cache utilities."""

from __future__ import annotations

import time

import pytest


class TestLRUCacheTTL:
    """Tests for LRUCacheTTL class."""

    @pytest.fixture
    def cache(self):
        """Create a cache instance for testing."""
        from backend.utils.cache import LRUCacheTTL

        return LRUCacheTTL(maxsize=10, ttl_s=1.0)

    def test_set_and_get(self, cache):
        cache.set("key1", "value1")
        assert cache.get("key1") == "value1"

    def test_get_missing_key_returns_none(self, cache):
        assert cache.get("nonexistent") is None

    def test_maxsize_eviction(self, cache):
        """Oldest entries are evicted once maxsize is exceeded."""
        for i in range(15):
            cache.set(f"key{i}", f"value{i}")

        assert len(cache) == 10
        assert cache.get("key0") is None
        assert cache.get("key14") == "value14"

    def test_ttl_expiration(self):
        from backend.utils.cache import LRUCacheTTL

        cache = LRUCacheTTL(maxsize=10, ttl_s=0.1)  # 100ms TTL
        cache.set("key", "value")

        assert cache.get("key") == "value"

        time.sleep(0.15)  # Wait for TTL to expire
        assert cache.get("key") is None

    @pytest.mark.parametrize("ttl_s", [None, 0, -1])
    def test_non_positive_ttl_never_expires(self, monkeypatch, ttl_s):
        import backend.utils.cache as cache_mod

        now = [0.0]
        monkeypatch.setattr(cache_mod.time, "time", lambda: now[0])
        cache = cache_mod.LRUCacheTTL(maxsize=2, ttl_s=ttl_s)
        cache.set("key", "value")
        now[0] += 10**9
        assert cache.get("key") == "value"

    def test_update_existing_key(self, cache):
        cache.set("key", "value1")
        cache.set("key", "value2")
        assert cache.get("key") == "value2"

    def test_pop_and_clear(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        assert cache.pop("a") == 1
        assert cache.pop("a") is None
        cache.clear()
        assert len(cache) == 0
