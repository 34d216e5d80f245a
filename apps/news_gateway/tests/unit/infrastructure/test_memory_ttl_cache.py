"""MemoryTTLCache Unit Tests."""

from __future__ import annotations

import pytest

from news_gateway.infrastructure.cache import MemoryTTLCache


@pytest.fixture
def cache(clock) -> MemoryTTLCache:
    return MemoryTTLCache(ttl_seconds=900, max_entries=3, clock=clock)


class TestGetSet:
    """조회/저장 테스트."""

    def test_missing_key(self, cache: MemoryTTLCache) -> None:
        assert cache.get("question:nada") is None

    def test_set_then_get(self, cache: MemoryTTLCache) -> None:
        cache.set("question:hola", "Hola mundo")
        assert cache.get("question:hola") == "Hola mundo"

    def test_set_replaces_value(self, cache: MemoryTTLCache) -> None:
        cache.set("k", "uno")
        cache.set("k", "dos")
        assert cache.get("k") == "dos"
        assert cache.size() == 1

    def test_stores_arbitrary_values(self, cache: MemoryTTLCache) -> None:
        payload = {"html": "<div></div>", "total": 3}
        cache.set("news:today:v2", payload)
        assert cache.get("news:today:v2") is payload


class TestExpiry:
    """만료 테스트."""

    def test_fresh_just_before_ttl(self, cache: MemoryTTLCache, clock) -> None:
        cache.set("k", "v")
        clock.advance(899.9)
        assert cache.get("k") == "v"

    def test_expired_after_ttl(self, cache: MemoryTTLCache, clock) -> None:
        """TTL 경과 후 조회하면 없음 + 엔트리 제거."""
        cache.set("k", "v")
        clock.advance(900)

        assert cache.get("k") is None
        assert cache.size() == 0

    def test_set_resets_age(self, cache: MemoryTTLCache, clock) -> None:
        cache.set("k", "v1")
        clock.advance(800)
        cache.set("k", "v2")
        clock.advance(800)
        assert cache.get("k") == "v2"

    def test_sweep_removes_only_expired(self, cache: MemoryTTLCache, clock) -> None:
        cache.set("old", 1)
        clock.advance(500)
        cache.set("new", 2)
        clock.advance(450)

        removed = cache.sweep()

        assert removed == 1
        assert cache.get("old") is None
        assert cache.get("new") == 2


class TestBounds:
    """LRU 상한 테스트."""

    def test_evicts_least_recently_used(self, cache: MemoryTTLCache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)
        cache.get("a")  # a를 최근 사용으로
        cache.set("d", 4)

        assert cache.size() == 3
        assert cache.get("b") is None
        assert cache.get("a") == 1

    def test_invalid_settings(self) -> None:
        with pytest.raises(ValueError):
            MemoryTTLCache(ttl_seconds=0)
        with pytest.raises(ValueError):
            MemoryTTLCache(max_entries=0)


class TestClear:
    """삭제 테스트."""

    def test_clear_returns_count(self, cache: MemoryTTLCache) -> None:
        cache.set("a", 1)
        cache.set("b", 2)

        assert cache.clear() == 2
        assert cache.size() == 0
        assert cache.get("a") is None

    def test_clear_is_idempotent(self, cache: MemoryTTLCache) -> None:
        cache.set("a", 1)
        cache.clear()
        assert cache.clear() == 0

    def test_delete(self, cache: MemoryTTLCache) -> None:
        cache.set("a", 1)
        assert cache.delete("a") is True
        assert cache.delete("a") is False
