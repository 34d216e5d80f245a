"""Feed Aggregator Service.

여러 피드 소스의 결과를 병합/중복 제거하여 하나의 결과로 구성하는 서비스.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable, Mapping
from datetime import date, datetime, timezone, tzinfo
from typing import TYPE_CHECKING

from news_gateway.application.dto.news import AggregatedResult
from news_gateway.application.exceptions import EmptySourceError
from news_gateway.application.services.news_renderer import render_news_cards

if TYPE_CHECKING:
    from news_gateway.application.ports.feed_source import FeedSourcePort
    from news_gateway.domain.entities import FeedItem

logger = logging.getLogger(__name__)


class FeedAggregatorService:
    """피드 집계 서비스.

    정책:
    1. 단일 피드: 정규화 제목 기준 중복 제거 (최초 등장 순서 유지) 후 상한 적용
    2. 다중 카테고리: 카테고리별 병렬 조회, 실패 카테고리는 건너뜀
       - 카테고리마다 오늘 게시된 첫 항목 우선, 없으면 첫 항목
       - 카테고리당 1건, 카테고리 간 중복 제거 없음
    3. 모든 조회가 끝난 뒤에 결과 구성 (부분 스트리밍 없음)
    """

    def __init__(
        self,
        feed_source: FeedSourcePort,
        tz: tzinfo = timezone.utc,
        now: Callable[[], datetime] | None = None,
    ):
        """초기화.

        Args:
            feed_source: 피드 소스
            tz: "오늘" 판정에 쓰는 로컬 타임존
            now: 현재 시각 공급자 (테스트 시 주입)
        """
        self._feed_source = feed_source
        self._tz = tz
        self._now = now or (lambda: datetime.now(self._tz))

    async def aggregate_feed(self, url: str, max_items: int = 5) -> AggregatedResult:
        """단일 피드 집계.

        Args:
            url: 피드 URL
            max_items: 최대 항목 수

        Returns:
            집계 결과

        Raises:
            FeedFetchError: 피드 조회 실패
            EmptySourceError: 피드에 항목이 없음
        """
        items = await self._feed_source.fetch_feed(url)
        if not items:
            raise EmptySourceError()

        unique_items = self.deduplicate(items, max_items=max_items)

        logger.info(
            "Aggregated single feed",
            extra={
                "url": url,
                "total_input": len(items),
                "unique_output": len(unique_items),
            },
        )
        return self._compose(unique_items)

    async def aggregate_categories(self, sources: Mapping[str, str]) -> AggregatedResult:
        """다중 카테고리 집계.

        Args:
            sources: 카테고리 → 피드 URL

        Returns:
            집계 결과 (실패 카테고리는 failed_categories에 기록)

        Raises:
            EmptySourceError: 모든 카테고리가 실패했거나 비어 있음
        """
        categories = list(sources)
        results = await asyncio.gather(
            *(self._feed_source.fetch_feed(sources[c]) for c in categories),
            return_exceptions=True,
        )

        today = self._now().date()
        featured: list[FeedItem] = []
        failed: list[str] = []

        for category, result in zip(categories, results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning(
                    "Feed category failed",
                    extra={"category": category, "error": str(result)},
                )
                failed.append(category)
                continue

            item = self.pick_featured(result, today, self._tz)
            if item is None:
                logger.warning("Feed category empty", extra={"category": category})
                failed.append(category)
                continue

            featured.append(item.with_category(category))

        if not featured:
            raise EmptySourceError()

        logger.info(
            "Aggregated feed categories",
            extra={
                "categories": len(categories),
                "succeeded": len(featured),
                "failed": failed,
            },
        )
        return self._compose(featured, failed)

    @staticmethod
    def deduplicate(
        items: Iterable[FeedItem],
        max_items: int | None = None,
    ) -> list[FeedItem]:
        """정규화 제목 기준 중복 제거.

        Args:
            items: 항목 목록
            max_items: 최대 항목 수 (None이면 무제한)

        Returns:
            최초 등장 순서를 유지한 고유 항목 목록
        """
        seen_titles: set[str] = set()
        unique_items: list[FeedItem] = []

        for item in items:
            if max_items is not None and len(unique_items) >= max_items:
                break
            key = item.title_key
            if key in seen_titles:
                continue
            seen_titles.add(key)
            unique_items.append(item)

        return unique_items

    @staticmethod
    def pick_featured(
        items: list[FeedItem],
        today: date,
        tz: tzinfo | None = None,
    ) -> FeedItem | None:
        """오늘 게시된 첫 항목, 없으면 첫 항목."""
        if not items:
            return None
        for item in items:
            if item.is_published_on(today, tz):
                return item
        return items[0]

    def _compose(
        self,
        items: list[FeedItem],
        failed_categories: list[str] | None = None,
    ) -> AggregatedResult:
        failed = tuple(failed_categories or ())
        return AggregatedResult(
            items=tuple(items),
            html=render_news_cards(items, failed),
            generated_at=self._now(),
            total_count=len(items),
            failed_categories=failed,
        )
