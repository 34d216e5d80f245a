"""Fetch Today News Command.

오늘의 뉴스 UseCase.
캐시 확인 → 미스 시 피드 집계 → 캐싱 → 응답 반환.
집계 실패 시 빈 응답 대신 오류 카드가 담긴 degraded 응답을 반환한다.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone, tzinfo
from typing import TYPE_CHECKING

from news_gateway.application.dto.news import AggregatedResult, TodayNewsResponse
from news_gateway.application.exceptions import EmptySourceError, UpstreamError
from news_gateway.application.services.news_renderer import (
    ERROR_CARD_HTML,
    format_long_date,
)
from news_gateway.domain.cache_keys import news_key

if TYPE_CHECKING:
    from news_gateway.application.ports.response_cache import ResponseCachePort
    from news_gateway.application.services.feed_aggregator import FeedAggregatorService

logger = logging.getLogger(__name__)


class FetchTodayNewsCommand:
    """오늘의 뉴스 Command (UseCase).

    category_feeds가 있으면 다중 카테고리 모드, 없으면 단일 피드 모드.
    """

    def __init__(
        self,
        aggregator: FeedAggregatorService,
        cache: ResponseCachePort,
        feed_url: str,
        category_feeds: Mapping[str, str] | None = None,
        max_items: int = 5,
        cache_per_day: bool = False,
        tz: tzinfo = timezone.utc,
        now: Callable[[], datetime] | None = None,
    ):
        """초기화.

        Args:
            aggregator: 피드 집계 서비스
            cache: 응답 캐시
            feed_url: 단일 피드 URL
            category_feeds: 카테고리 → 피드 URL
            max_items: 단일 피드 모드 최대 항목 수
            cache_per_day: True면 날짜별 캐시 키 사용
            tz: 로컬 타임존
            now: 현재 시각 공급자 (테스트 시 주입)
        """
        self._aggregator = aggregator
        self._cache = cache
        self._feed_url = feed_url
        self._category_feeds = dict(category_feeds or {})
        self._max_items = max_items
        self._cache_per_day = cache_per_day
        self._tz = tz
        self._now = now or (lambda: datetime.now(self._tz))

    async def execute(self) -> TodayNewsResponse:
        """Command 실행."""
        cache_key = news_key(self._now().date() if self._cache_per_day else None)

        cached = self._cache.get(cache_key)
        if isinstance(cached, AggregatedResult):
            logger.info("News cache hit", extra={"cache_key": cache_key})
            return self._to_response(cached, cached=True)

        try:
            result = await self._aggregate()
        except (EmptySourceError, UpstreamError) as e:
            logger.error(
                "News aggregation failed",
                extra={"error": e.message, "type": type(e).__name__},
            )
            return TodayNewsResponse(content=ERROR_CARD_HTML, error=True)
        except Exception:
            logger.exception("News aggregation failed unexpectedly")
            return TodayNewsResponse(content=ERROR_CARD_HTML, error=True)

        self._cache.set(cache_key, result)
        return self._to_response(result, cached=False)

    async def _aggregate(self) -> AggregatedResult:
        if self._category_feeds:
            return await self._aggregator.aggregate_categories(self._category_feeds)
        return await self._aggregator.aggregate_feed(self._feed_url, self._max_items)

    @staticmethod
    def _to_response(result: AggregatedResult, cached: bool) -> TodayNewsResponse:
        return TodayNewsResponse(
            content=result.html,
            date=format_long_date(result.generated_at.date()),
            item_count=result.total_count,
            cached=cached,
        )
