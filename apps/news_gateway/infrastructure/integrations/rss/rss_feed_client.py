"""RSS Feed Client.

RSS/Atom 피드를 조회해 FeedItem 목록으로 변환하는 클라이언트.
기본 소스는 Google News RSS (es-419, MX).

파싱: feedparser (RSS 0.9x/1.0/2.0, Atom 지원)
"""

from __future__ import annotations

import calendar
import html
import logging
import re
from datetime import datetime, timezone
from typing import Any

import feedparser
import httpx

from news_gateway.application.exceptions import FeedFetchError
from news_gateway.application.ports.feed_source import FeedSourcePort
from news_gateway.domain.constants import DEFAULT_SOURCE_NAME
from news_gateway.domain.entities import FeedItem

logger = logging.getLogger(__name__)

HTML_TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")


class RssFeedClient(FeedSourcePort):
    """RSS 피드 클라이언트."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        timeout: float = 10.0,
        user_agent: str = "Mozilla/5.0 (NewsBot)",
    ):
        """초기화.

        Args:
            http_client: HTTP 클라이언트 (외부 주입)
            timeout: 요청 타임아웃 (초)
            user_agent: User-Agent 헤더
        """
        self._client = http_client
        self._timeout = timeout
        self._headers = {"User-Agent": user_agent}

    @property
    def source_name(self) -> str:
        """소스 식별자."""
        return "rss"

    async def fetch_feed(self, url: str) -> list[FeedItem]:
        """피드 조회.

        Args:
            url: RSS 피드 URL

        Returns:
            피드 순서 그대로의 항목 목록

        Raises:
            FeedFetchError: HTTP 오류, 타임아웃, 파싱 불가
        """
        try:
            response = await self._client.get(
                url,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error(
                "RSS feed HTTP error",
                extra={"status": e.response.status_code, "url": url},
            )
            raise FeedFetchError(url, f"HTTP {e.response.status_code}") from e
        except httpx.HTTPError as e:
            logger.error("RSS feed request failed", extra={"error": str(e), "url": url})
            raise FeedFetchError(url, type(e).__name__) from e

        parsed = feedparser.parse(response.content)
        if not parsed.entries and (parsed.bozo or not parsed.get("version")):
            reason = str(parsed.get("bozo_exception", "malformed feed"))
            logger.error("RSS feed parse failed", extra={"url": url, "error": reason})
            raise FeedFetchError(url, reason)

        feed_title = self._clean_text(parsed.feed.get("title", ""))
        items = []
        for entry in parsed.entries:
            item = self._parse_entry(entry, feed_title)
            if item:
                items.append(item)

        logger.info(
            "RSS feed fetched",
            extra={"url": url, "entries": len(parsed.entries), "fetched": len(items)},
        )
        return items

    def _parse_entry(self, entry: Any, feed_title: str) -> FeedItem | None:
        """피드 엔트리를 FeedItem으로 변환.

        Args:
            entry: feedparser 엔트리

        Returns:
            FeedItem 또는 None (제목/링크 없음)
        """
        title = self._clean_text(entry.get("title", ""))
        link = entry.get("link", "")
        if not title or not link:
            return None

        source = entry.get("source") or {}
        source_name = self._clean_text(source.get("title", "")) or feed_title

        return FeedItem(
            title=title,
            summary=self._clean_text(entry.get("summary", "")),
            link=link,
            source_name=source_name or DEFAULT_SOURCE_NAME,
            published_at=self._parse_published(entry),
        )

    @staticmethod
    def _clean_text(text: str) -> str:
        """HTML 태그 제거 및 엔티티 변환."""
        clean = HTML_TAG_PATTERN.sub(" ", text or "")
        clean = html.unescape(clean)
        return WHITESPACE_PATTERN.sub(" ", clean).strip()

    @staticmethod
    def _parse_published(entry: Any) -> datetime | None:
        # feedparser는 *_parsed 값을 UTC struct_time으로 정규화
        parsed = entry.get("published_parsed") or entry.get("updated_parsed")
        if not parsed:
            return None
        return datetime.fromtimestamp(calendar.timegm(parsed), tz=timezone.utc)
