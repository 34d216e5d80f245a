"""Feed Source Port.

뉴스 피드 소스 추상화 인터페이스.
RSS, 뉴스 API 등 다양한 소스 어댑터 구현 가능.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from news_gateway.domain.entities import FeedItem


class FeedSourcePort(ABC):
    """피드 소스 포트."""

    @property
    @abstractmethod
    def source_name(self) -> str:
        """소스 식별자 (예: "rss", "newsapi")."""
        pass

    @abstractmethod
    async def fetch_feed(self, url: str) -> list[FeedItem]:
        """피드 조회.

        Args:
            url: 피드 URL (소스에 따라 카테고리 식별자로 해석될 수 있음)

        Returns:
            소스 순서 그대로의 항목 목록

        Raises:
            FeedFetchError: 조회 또는 파싱 실패
        """
        pass

    async def close(self) -> None:
        """리소스 정리 (optional)."""
        pass
