"""Feed Item Entity."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, tzinfo


@dataclass(frozen=True)
class FeedItem:
    """뉴스 피드 항목 엔티티.

    Attributes:
        title: 기사 제목
        summary: 기사 요약 (없으면 빈 문자열)
        link: 기사 원문 URL
        source_name: 언론사 이름
        published_at: 게시 시간 (optional)
        category: 소속 카테고리 (다중 소스 모드에서만 설정)
    """

    title: str
    summary: str
    link: str
    source_name: str
    published_at: datetime | None = None
    category: str | None = None

    @property
    def title_key(self) -> str:
        """중복 제거용 정규화 제목."""
        return self.title.strip().casefold()

    def is_published_on(self, day: date, tz: tzinfo | None = None) -> bool:
        """해당 날짜(로컬 달력 기준)에 게시되었는지 여부.

        Args:
            day: 비교할 날짜
            tz: 로컬 타임존 (timezone-aware 게시 시간을 변환할 때 사용)
        """
        if self.published_at is None:
            return False
        published = self.published_at
        if tz is not None and published.tzinfo is not None:
            published = published.astimezone(tz)
        return published.date() == day

    def with_category(self, category: str) -> FeedItem:
        """카테고리가 설정된 새 인스턴스 반환."""
        return replace(self, category=category)
