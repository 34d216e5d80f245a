"""Get Health Query.

캐시/리미터 상태와 업스트림 자격 증명 여부를 읽기 전용으로 보고한다.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from news_gateway.application.dto.status import HealthStatus

if TYPE_CHECKING:
    from news_gateway.application.ports.rate_limiter import RateLimiterPort
    from news_gateway.application.ports.response_cache import ResponseCachePort


class GetHealthQuery:
    """헬스 Query."""

    def __init__(
        self,
        cache: ResponseCachePort,
        rate_limiter: RateLimiterPort,
        has_upstream_credential: bool,
    ):
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._has_upstream_credential = has_upstream_credential

    def execute(self) -> HealthStatus:
        return HealthStatus(
            status="ok",
            cache_entry_count=self._cache.size(),
            limiter_entry_count=self._rate_limiter.size(),
            has_upstream_credential=self._has_upstream_credential,
        )
