"""In-Memory Rate Limiter Implementation.

리셋 기반 윈도우 카운터 (정밀한 sliding log가 아님).

클라이언트마다 카운터 1개와 리셋 시각 1개만 유지한다.
윈도우 경계에서 버스트가 발생할 수 있으나, 목적은 업스트림 할당량 보호.
"""

from __future__ import annotations

import logging
import math
import time
from collections import OrderedDict
from collections.abc import Callable
from threading import Lock

from news_gateway.application.ports.rate_limiter import (
    RateLimitConfig,
    RateLimitDecision,
    RateLimiterPort,
)
from news_gateway.domain.entities import ClientWindow

logger = logging.getLogger(__name__)


class MemoryRateLimiter(RateLimiterPort):
    """클라이언트별 인메모리 Rate Limiter."""

    def __init__(
        self,
        config: RateLimitConfig,
        clock: Callable[[], float] = time.monotonic,
    ):
        """초기화.

        Args:
            config: Rate Limit 설정
            clock: 단조 시계 (테스트 시 주입)
        """
        if config.limit <= 0:
            raise ValueError("limit must be positive")
        if config.window_seconds <= 0:
            raise ValueError("window_seconds must be positive")

        self._config = config
        self._clock = clock
        self._windows: OrderedDict[str, ClientWindow] = OrderedDict()
        self._lock = Lock()

    @property
    def config(self) -> RateLimitConfig:
        return self._config

    def allow(self, client_id: str) -> RateLimitDecision:
        """요청 허용 여부 판정 및 카운터 증가."""
        limit = self._config.limit
        now = self._clock()

        with self._lock:
            window = self._windows.get(client_id)

            if window is None or window.is_expired(now):
                window = ClientWindow(count=1, reset_at=now + self._config.window_seconds)
                self._windows[client_id] = window
                self._windows.move_to_end(client_id)
                self._evict_overflow()
                return RateLimitDecision(
                    permitted=True,
                    remaining=limit - 1,
                    reset_at=window.reset_at,
                )

            self._windows.move_to_end(client_id)

            if window.count < limit:
                window.count += 1
                return RateLimitDecision(
                    permitted=True,
                    remaining=limit - window.count,
                    reset_at=window.reset_at,
                )

            retry_after = max(1, math.ceil(window.reset_at - now))
            current = window.count
            reset_at = window.reset_at

        logger.warning(
            "Rate limit exceeded",
            extra={
                "client_id": client_id,
                "current": current,
                "limit": limit,
                "retry_after": retry_after,
            },
        )
        return RateLimitDecision(
            permitted=False,
            remaining=0,
            reset_at=reset_at,
            retry_after_seconds=retry_after,
        )

    def clear(self) -> int:
        """모든 클라이언트 윈도우 삭제."""
        with self._lock:
            removed = len(self._windows)
            self._windows.clear()
        logger.info("Rate limiter state cleared", extra={"removed": removed})
        return removed

    def size(self) -> int:
        """추적 중인 클라이언트 수."""
        with self._lock:
            return len(self._windows)

    def sweep(self) -> int:
        """리셋 시각이 지난 윈도우 정리."""
        now = self._clock()
        with self._lock:
            expired = [cid for cid, w in self._windows.items() if w.is_expired(now)]
            for cid in expired:
                del self._windows[cid]
        return len(expired)

    def _evict_overflow(self) -> None:
        """max_clients 초과분 제거 (가장 오래 요청이 없던 클라이언트부터). lock 보유 상태에서 호출."""
        while len(self._windows) > self._config.max_clients:
            self._windows.popitem(last=False)
