"""Rate Limiter Port.

클라이언트별 요청 제한 추상화.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate Limit 설정.

    Attributes:
        limit: 윈도우당 최대 요청 수
        window_seconds: 윈도우 크기 (기본 60초)
        max_clients: 추적할 최대 클라이언트 수
    """

    limit: int
    window_seconds: float = 60.0
    max_clients: int = 10_000


@dataclass(frozen=True)
class RateLimitDecision:
    """Rate Limit 판정 결과.

    Attributes:
        permitted: 허용 여부
        remaining: 현재 윈도우의 남은 요청 수
        reset_at: 윈도우 리셋 시각 (clock 기준 초)
        retry_after_seconds: 거부 시 재시도까지 대기 시간 (초, 올림)
    """

    permitted: bool
    remaining: int
    reset_at: float
    retry_after_seconds: int | None = None


class RateLimiterPort(ABC):
    """Rate Limiter 포트."""

    @abstractmethod
    def allow(self, client_id: str) -> RateLimitDecision:
        """요청 허용 여부 판정 및 카운터 증가.

        Args:
            client_id: 클라이언트 식별자 (네트워크 주소)

        Returns:
            판정 결과
        """
        pass

    @abstractmethod
    def clear(self) -> int:
        """모든 클라이언트 윈도우 삭제.

        Returns:
            삭제된 윈도우 수
        """
        pass

    @abstractmethod
    def size(self) -> int:
        """추적 중인 클라이언트 수."""
        pass

    def sweep(self) -> int:
        """만료된 윈도우 정리 (optional)."""
        return 0
