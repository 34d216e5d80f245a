"""Cache Entry / Client Window Entities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """응답 캐시 엔트리.

    ``now - stored_at < ttl`` 인 동안만 읽을 수 있다.
    """

    key: str
    value: Any
    stored_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.stored_at < ttl


@dataclass
class ClientWindow:
    """클라이언트별 Rate Limit 윈도우.

    Attributes:
        count: 현재 윈도우 내 요청 수
        reset_at: 윈도우 리셋 시각 (clock 기준 초)
    """

    count: int
    reset_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.reset_at
