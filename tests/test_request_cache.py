"""
Tests for cache policies, scope selection and the in-memory store.
"""

from unittest.mock import MagicMock

import pytest

from sheet_completions import INDEFINITE, InMemoryCacheStore
from sheet_completions.services import CachePolicy, RequestCache, select_cache_store


class TestCachePolicy:
    """Policy derived from the single duration setting."""

    @pytest.mark.parametrize("duration", [0, None])
    def test_disabled(self, duration):
        assert CachePolicy.from_duration(duration) is CachePolicy.DISABLED

    def test_timed(self):
        assert CachePolicy.from_duration(3600) is CachePolicy.TIMED

    def test_indefinite(self):
        assert CachePolicy.from_duration(INDEFINITE) is CachePolicy.INDEFINITE

    def test_invalid(self):
        with pytest.raises(ValueError):
            CachePolicy.from_duration(-2)


class TestRequestCache:
    def test_disabled_never_touches_store(self):
        store = MagicMock()
        cache = RequestCache(store, 0)

        cache.put("k", "value")
        assert cache.get("k") is None
        store.get.assert_not_called()
        store.put.assert_not_called()

    def test_timed_entry_expires(self, clock):
        store = InMemoryCacheStore(clock=clock)
        cache = RequestCache(store, 60)

        cache.put("k", "Hi there")
        assert cache.get("k") == "Hi there"

        clock.advance(59)
        assert cache.get("k") == "Hi there"

        clock.advance(1)
        assert cache.get("k") is None

    def test_indefinite_entry_never_expires(self, clock):
        store = InMemoryCacheStore(clock=clock)
        cache = RequestCache(store, INDEFINITE)

        cache.put("k", "forever")
        clock.advance(10 * 365 * 24 * 3600)
        assert cache.get("k") == "forever"

    def test_ttl_passed_to_store(self):
        store = MagicMock()
        RequestCache(store, 120).put("k", "v")
        RequestCache(store, INDEFINITE).put("k2", "v2")

        store.put.assert_any_call("k", "v", 120)
        store.put.assert_any_call("k2", "v2", None)

    def test_empty_value_not_stored(self):
        store = MagicMock()
        RequestCache(store, 120).put("k", "")
        store.put.assert_not_called()

    def test_missing_store_disables_cache(self):
        cache = RequestCache(None, 3600)
        assert cache.policy is CachePolicy.DISABLED
        assert cache.get("k") is None


class TestSelectCacheStore:
    """Narrower scopes fall back to broader ones without raising."""

    def _scope(self, available: bool):
        scope = MagicMock()
        scope.is_available.return_value = available
        return scope

    def test_first_available_wins(self):
        document, shared, user = self._scope(True), self._scope(True), self._scope(True)
        assert select_cache_store(document, shared, user) is document

    def test_skips_missing_and_unavailable(self):
        shared, user = self._scope(False), self._scope(True)
        assert select_cache_store(None, shared, user) is user

    def test_none_available(self):
        assert select_cache_store(None, self._scope(False)) is None


class TestInMemoryCacheStore:
    def test_get_missing(self):
        assert InMemoryCacheStore().get("nope") is None

    def test_overwrite_last_write_wins(self, clock):
        store = InMemoryCacheStore(clock=clock)
        store.put("k", "first", None)
        store.put("k", "second", None)
        assert store.get("k") == "second"
        assert len(store) == 1

    def test_expired_entry_is_dropped(self, clock):
        store = InMemoryCacheStore(clock=clock)
        store.put("k", "v", 5)
        clock.advance(5)
        assert "k" not in store
        assert len(store) == 0
