"""In-Memory TTL Cache Implementation.

프로세스 로컬 응답 캐시.

정책:
- 읽기 시점 만료 확인 (now - stored_at >= ttl 이면 없음으로 취급)
- LRU 상한 (max_entries 초과 시 가장 오래 사용되지 않은 엔트리 제거)
- sweep()으로 만료 엔트리 주기 정리 (lifespan 백그라운드 태스크에서 호출)
"""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from threading import Lock
from typing import Any

from news_gateway.application.ports.response_cache import ResponseCachePort
from news_gateway.domain.entities import CacheEntry

logger = logging.getLogger(__name__)


class MemoryTTLCache(ResponseCachePort):
    """Thread-safe 인메모리 TTL 캐시.

    Usage:
        cache = MemoryTTLCache(ttl_seconds=900)
        cache.set("question:hola", "...")
        cache.get("question:hola")
    """

    def __init__(
        self,
        ttl_seconds: float = 900.0,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ):
        """초기화.

        Args:
            ttl_seconds: 엔트리 유효 시간 (초)
            max_entries: 최대 엔트리 수 (LRU 제거)
            clock: 단조 시계 (테스트 시 주입)
        """
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")

        self._ttl = ttl_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = Lock()

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get(self, key: str) -> Any | None:
        """캐시 조회."""
        now = self._clock()
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if not entry.is_fresh(now, self._ttl):
                del self._entries[key]
                logger.debug("Cache entry expired", extra={"key": key})
                return None
            self._entries.move_to_end(key)
            return entry.value

    def set(self, key: str, value: Any) -> None:
        """캐시 저장."""
        entry = CacheEntry(key=key, value=value, stored_at=self._clock())
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Cache entry evicted", extra={"key": evicted})

    def delete(self, key: str) -> bool:
        """단일 키 삭제."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        """전체 삭제."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info("Response cache cleared", extra={"removed": removed})
        return removed

    def size(self) -> int:
        """저장된 엔트리 수."""
        with self._lock:
            return len(self._entries)

    def sweep(self) -> int:
        """만료 엔트리 정리."""
        now = self._clock()
        with self._lock:
            expired = [
                key
                for key, entry in self._entries.items()
                if not entry.is_fresh(now, self._ttl)
            ]
            for key in expired:
                del self._entries[key]

        if expired:
            logger.debug("Swept expired cache entries", extra={"count": len(expired)})
        return len(expired)
