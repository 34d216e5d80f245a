"""NewsAPI Client.

NewsAPI top-headlines를 FeedItem 목록으로 변환하는 대체 피드 소스.

API 문서: https://newsapi.org/docs/endpoints/top-headlines

인증:
- X-Api-Key: API 키 (헤더)
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from news_gateway.application.exceptions import FeedFetchError
from news_gateway.application.ports.feed_source import FeedSourcePort
from news_gateway.domain.constants import DEFAULT_SOURCE_NAME
from news_gateway.domain.entities import FeedItem

logger = logging.getLogger(__name__)

NEWSAPI_URL = "https://newsapi.org/v2/top-headlines"


class NewsApiClient(FeedSourcePort):
    """NewsAPI 피드 클라이언트.

    fetch_feed의 인자가 http(s) URL이면 완성된 요청 URL로,
    그 외에는 top-headlines의 category 파라미터로 해석한다.
    """

    def __init__(
        self,
        api_key: str | None,
        http_client: httpx.AsyncClient,
        base_url: str = NEWSAPI_URL,
        country: str = "mx",
        timeout: float = 10.0,
    ):
        """초기화.

        Args:
            api_key: NewsAPI 키
            http_client: HTTP 클라이언트 (외부 주입)
            base_url: top-headlines 엔드포인트
            country: 국가 코드
            timeout: 요청 타임아웃 (초)
        """
        self._api_key = api_key
        self._client = http_client
        self._base_url = base_url
        self._country = country
        self._timeout = timeout

    @property
    def source_name(self) -> str:
        """소스 식별자."""
        return "newsapi"

    async def fetch_feed(self, url: str) -> list[FeedItem]:
        """헤드라인 조회.

        Args:
            url: 요청 URL 또는 카테고리 이름

        Returns:
            응답 순서 그대로의 항목 목록

        Raises:
            FeedFetchError: 키 미설정, HTTP 오류, 비정상 응답
        """
        if not self._api_key:
            raise FeedFetchError(url, "NewsAPI key is not configured")

        if url.startswith(("http://", "https://")):
            request_url, params = url, None
        else:
            request_url = self._base_url
            params = {"country": self._country, "category": url}

        try:
            response = await self._client.get(
                request_url,
                params=params,
                headers={"X-Api-Key": self._api_key},
                timeout=self._timeout,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "NewsAPI HTTP error",
                extra={"status": e.response.status_code, "url": request_url},
            )
            raise FeedFetchError(url, f"HTTP {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("NewsAPI request failed", extra={"error": str(e), "url": request_url})
            raise FeedFetchError(url, type(e).__name__) from e

        if not isinstance(data, dict):
            logger.warning("NewsAPI returned unexpected payload", extra={"url": request_url})
            raise FeedFetchError(url, "unexpected payload")

        if data.get("status") != "ok":
            logger.warning(
                "NewsAPI returned non-ok status",
                extra={"status": data.get("status"), "code": data.get("code")},
            )
            raise FeedFetchError(url, data.get("message") or "non-ok status")

        items = []
        for article in data.get("articles", []):
            item = self._parse_article(article)
            if item:
                items.append(item)

        logger.info(
            "NewsAPI headlines fetched",
            extra={"target": url, "total": data.get("totalResults", 0), "fetched": len(items)},
        )
        return items

    def _parse_article(self, article: dict[str, Any]) -> FeedItem | None:
        title = (article.get("title") or "").strip()
        link = article.get("url") or ""
        if not title or not link:
            return None

        source = article.get("source") or {}
        return FeedItem(
            title=title,
            summary=(article.get("description") or "").strip(),
            link=link,
            source_name=source.get("name") or DEFAULT_SOURCE_NAME,
            published_at=self._parse_date(article.get("publishedAt")),
        )

    @staticmethod
    def _parse_date(value: str | None) -> datetime | None:
        """ISO 8601 날짜 파싱 (예: "2026-10-19T14:30:00Z")."""
        if not value:
            return None
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            logger.debug("Failed to parse date: %s", value)
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt
