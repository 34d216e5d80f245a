"""News DTOs."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from news_gateway.domain.entities import FeedItem


@dataclass(frozen=True)
class AggregatedResult:
    """피드 집계 결과 (뉴스 요청의 캐시 페이로드).

    Attributes:
        items: 순서가 확정된 항목 목록
        html: 렌더링된 뉴스 카드 HTML
        generated_at: 생성 시각 (로컬 타임존)
        total_count: 항목 수
        failed_categories: 조회에 실패해 제외된 카테고리
    """

    items: tuple[FeedItem, ...]
    html: str
    generated_at: datetime
    total_count: int
    failed_categories: tuple[str, ...] = ()


@dataclass(frozen=True)
class TodayNewsResponse:
    """오늘의 뉴스 응답 DTO."""

    content: str
    date: str | None = None
    item_count: int = 0
    cached: bool = False
    error: bool = False
