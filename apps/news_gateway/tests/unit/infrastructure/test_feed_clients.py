"""Feed Client Unit Tests.

httpx.MockTransport로 외부 HTTP 없이 RSS/NewsAPI 파싱을 검증한다.
"""

from __future__ import annotations

from datetime import datetime, timezone

import httpx
import pytest

from news_gateway.application.exceptions import FeedFetchError
from news_gateway.infrastructure.integrations import NewsApiClient, RssFeedClient

FEED_URL = "https://news.google.com/rss?hl=es-419&gl=MX&ceid=MX:es-419"

RSS_BODY = b"""<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0">
  <channel>
    <title>Google News</title>
    <item>
      <title>Sube el peso frente al d&#243;lar</title>
      <link>https://news.example.com/peso</link>
      <description>&lt;b&gt;El peso&lt;/b&gt; gana terreno &amp;amp; cierra fuerte</description>
      <pubDate>Mon, 19 Oct 2026 14:30:00 GMT</pubDate>
      <source url="https://eluniversal.com.mx">El Universal</source>
    </item>
    <item>
      <title>Nota sin fecha</title>
      <link>https://news.example.com/sin-fecha</link>
    </item>
    <item>
      <title></title>
      <link>https://news.example.com/sin-titulo</link>
    </item>
  </channel>
</rss>
"""


def make_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
class TestRssFeedClient:
    """RssFeedClient 테스트."""

    async def test_parses_entries(self) -> None:
        seen_headers: dict[str, str] = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen_headers.update(request.headers)
            return httpx.Response(200, content=RSS_BODY)

        async with make_client(handler) as http_client:
            client = RssFeedClient(http_client, user_agent="TestBot/1.0")
            items = await client.fetch_feed(FEED_URL)

        assert seen_headers["user-agent"] == "TestBot/1.0"
        assert [i.title for i in items] == ["Sube el peso frente al dólar", "Nota sin fecha"]

        first = items[0]
        assert first.link == "https://news.example.com/peso"
        assert first.source_name == "El Universal"
        assert "<b>" not in first.summary
        assert first.summary.startswith("El peso gana terreno")
        assert first.published_at == datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)

    async def test_source_falls_back_to_feed_title(self) -> None:
        async with make_client(lambda r: httpx.Response(200, content=RSS_BODY)) as http_client:
            items = await RssFeedClient(http_client).fetch_feed(FEED_URL)

        assert items[1].source_name == "Google News"
        assert items[1].published_at is None
        assert items[1].summary == ""

    async def test_http_error_raises(self) -> None:
        async with make_client(lambda r: httpx.Response(503)) as http_client:
            with pytest.raises(FeedFetchError) as exc_info:
                await RssFeedClient(http_client).fetch_feed(FEED_URL)

        assert exc_info.value.url == FEED_URL
        assert "503" in exc_info.value.message

    async def test_network_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timeout", request=request)

        async with make_client(handler) as http_client:
            with pytest.raises(FeedFetchError):
                await RssFeedClient(http_client).fetch_feed(FEED_URL)

    async def test_unparseable_body_raises(self) -> None:
        async with make_client(
            lambda r: httpx.Response(200, content=b"<html><body>not a feed")
        ) as http_client:
            with pytest.raises(FeedFetchError):
                await RssFeedClient(http_client).fetch_feed(FEED_URL)


@pytest.mark.asyncio
class TestNewsApiClient:
    """NewsApiClient 테스트."""

    async def test_category_request(self) -> None:
        captured: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(
                200,
                json={
                    "status": "ok",
                    "totalResults": 2,
                    "articles": [
                        {
                            "source": {"name": "Milenio"},
                            "title": "Gana la selección",
                            "description": "Resumen",
                            "url": "https://milenio.com/1",
                            "publishedAt": "2026-10-19T14:30:00Z",
                        },
                        {"source": {}, "title": None, "url": "https://x.com/2"},
                    ],
                },
            )

        async with make_client(handler) as http_client:
            client = NewsApiClient(api_key="k", http_client=http_client)
            items = await client.fetch_feed("sports")

        request = captured[0]
        assert request.headers["x-api-key"] == "k"
        assert request.url.params["category"] == "sports"
        assert request.url.params["country"] == "mx"
        assert len(items) == 1
        assert items[0].source_name == "Milenio"
        assert items[0].published_at == datetime(2026, 10, 19, 14, 30, tzinfo=timezone.utc)

    async def test_non_ok_status_raises(self) -> None:
        async with make_client(
            lambda r: httpx.Response(200, json={"status": "error", "message": "apiKeyInvalid"})
        ) as http_client:
            with pytest.raises(FeedFetchError):
                await NewsApiClient(api_key="k", http_client=http_client).fetch_feed("general")

    async def test_missing_key_raises(self) -> None:
        async with make_client(lambda r: httpx.Response(200, json={})) as http_client:
            with pytest.raises(FeedFetchError):
                await NewsApiClient(api_key=None, http_client=http_client).fetch_feed("general")

    async def test_non_object_payload_raises(self) -> None:
        async with make_client(lambda r: httpx.Response(200, json=[])) as http_client:
            with pytest.raises(FeedFetchError):
                await NewsApiClient(api_key="k", http_client=http_client).fetch_feed("general")
