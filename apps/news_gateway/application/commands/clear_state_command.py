"""Clear State Command.

관리용 전체 초기화 UseCase.
응답 캐시와 Rate Limiter 상태를 하나의 임계 구역에서 함께 비운다.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import TYPE_CHECKING

from news_gateway.application.dto.status import ClearStateResult

if TYPE_CHECKING:
    from news_gateway.application.ports.rate_limiter import RateLimiterPort
    from news_gateway.application.ports.response_cache import ResponseCachePort

logger = logging.getLogger(__name__)


class ClearStateCommand:
    """전체 초기화 Command.

    admission_lock은 요청 승인(Rate Limit 판정)과 공유되어,
    새 요청이 절반만 비워진 상태를 관찰하지 않도록 한다.
    """

    def __init__(
        self,
        cache: ResponseCachePort,
        rate_limiter: RateLimiterPort,
        admission_lock: RLock,
    ):
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._admission_lock = admission_lock

    def execute(self) -> ClearStateResult:
        with self._admission_lock:
            cache_removed = self._cache.clear()
            limiter_removed = self._rate_limiter.clear()

        logger.info(
            "Gateway state cleared",
            extra={
                "cache_entries_removed": cache_removed,
                "limiter_entries_removed": limiter_removed,
            },
        )
        return ClearStateResult(
            cache_entries_removed=cache_removed,
            limiter_entries_removed=limiter_removed,
        )
