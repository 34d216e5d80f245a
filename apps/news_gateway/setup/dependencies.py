"""Dependency Injection.

GatewayContainer는 앱 lifespan에서 생성되어 app.state에 보관되고,
FastAPI 의존성 함수는 request.app.state에서 꺼내 쓴다.
모듈 전역 싱글톤 없이 앱 인스턴스마다 독립된 상태를 가진다.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from threading import RLock
from zoneinfo import ZoneInfo

import httpx
from fastapi import Request

from news_gateway.application.commands import (
    AskQuestionCommand,
    ClearStateCommand,
    FetchTodayNewsCommand,
)
from news_gateway.application.ports.feed_source import FeedSourcePort
from news_gateway.application.ports.rate_limiter import RateLimitConfig
from news_gateway.application.ports.text_generation import TextGenerationPort
from news_gateway.application.queries import GetHealthQuery
from news_gateway.application.services import (
    FeedAggregatorService,
    PromptBuilder,
    RelayMessages,
    SingleFlight,
    StreamRelayService,
)
from news_gateway.infrastructure.cache import MemoryRateLimiter, MemoryTTLCache
from news_gateway.infrastructure.integrations import NewsApiClient, RssFeedClient
from news_gateway.infrastructure.llm import GeminiTextGenerator
from news_gateway.infrastructure.streaming import QueueStreamSink
from news_gateway.setup.config import Settings

logger = logging.getLogger(__name__)


class GatewayContainer:
    """게이트웨이 구성 요소 묶음.

    generator/feed_source를 주입하면 외부 API 없이 동작한다 (테스트용).
    """

    def __init__(
        self,
        settings: Settings,
        generator: TextGenerationPort | None = None,
        feed_source: FeedSourcePort | None = None,
    ):
        self.settings = settings
        self.tz = ZoneInfo(settings.locale_timezone)

        # 상태 (프로세스 메모리)
        self.cache = MemoryTTLCache(
            ttl_seconds=settings.cache_ttl_seconds,
            max_entries=settings.cache_max_entries,
        )
        self.rate_limiter = MemoryRateLimiter(
            RateLimitConfig(
                limit=settings.rate_limit_requests,
                window_seconds=settings.rate_limit_window_seconds,
                max_clients=settings.rate_limit_max_clients,
            )
        )
        self.admission_lock = RLock()

        # 외부 연동
        self.http_client = httpx.AsyncClient(timeout=settings.feed_timeout_seconds)
        self.generator = generator or GeminiTextGenerator(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            use_search=settings.gemini_use_search,
        )
        self.feed_source = feed_source or self._build_feed_source()

        # 서비스
        self.aggregator = FeedAggregatorService(self.feed_source, tz=self.tz)
        self.relay = StreamRelayService(
            generator=self.generator,
            cache=self.cache,
            messages=RelayMessages(
                fallback=settings.fallback_message,
                quota_error=settings.quota_error_message,
                upstream_error=settings.upstream_error_message,
            ),
            single_flight=SingleFlight(),
        )
        self.prompt_builder = PromptBuilder(
            question_template=settings.question_prompt_template,
            system_template=settings.system_instruction,
            tz=self.tz,
        )

        self._sweeper: asyncio.Task[None] | None = None

    def _build_feed_source(self) -> FeedSourcePort:
        settings = self.settings
        if settings.feed_provider == "newsapi":
            return NewsApiClient(
                api_key=settings.newsapi_key,
                http_client=self.http_client,
                base_url=settings.newsapi_url,
                timeout=settings.feed_timeout_seconds,
            )
        if settings.feed_provider != "rss":
            raise ValueError(f"Unknown feed provider: {settings.feed_provider}")
        return RssFeedClient(
            http_client=self.http_client,
            timeout=settings.feed_timeout_seconds,
            user_agent=settings.feed_user_agent,
        )

    # ─────────────────────────────────────────────────────────────
    # UseCase 팩토리
    # ─────────────────────────────────────────────────────────────

    def ask_question_command(self) -> AskQuestionCommand:
        queue_size = self.settings.stream_queue_size
        write_timeout = self.settings.stream_write_timeout_seconds
        return AskQuestionCommand(
            relay=self.relay,
            cache=self.cache,
            prompt_builder=self.prompt_builder,
            sink_factory=lambda: QueueStreamSink(maxsize=queue_size, write_timeout=write_timeout),
            empty_question_message=self.settings.empty_question_message,
        )

    def fetch_today_news_command(self) -> FetchTodayNewsCommand:
        return FetchTodayNewsCommand(
            aggregator=self.aggregator,
            cache=self.cache,
            feed_url=self.settings.news_feed_url,
            category_feeds=self.settings.news_category_feeds,
            max_items=self.settings.news_max_items,
            cache_per_day=self.settings.news_cache_per_day,
            tz=self.tz,
        )

    def clear_state_command(self) -> ClearStateCommand:
        return ClearStateCommand(
            cache=self.cache,
            rate_limiter=self.rate_limiter,
            admission_lock=self.admission_lock,
        )

    def health_query(self) -> GetHealthQuery:
        return GetHealthQuery(
            cache=self.cache,
            rate_limiter=self.rate_limiter,
            has_upstream_credential=self.settings.has_upstream_credential,
        )

    # ─────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────

    def start(self) -> None:
        """만료 항목 주기 정리 시작."""
        if self._sweeper is None:
            self._sweeper = asyncio.create_task(self._sweep_loop(), name="gateway-sweeper")

    async def aclose(self) -> None:
        """리소스 정리."""
        if self._sweeper is not None:
            self._sweeper.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._sweeper
            self._sweeper = None

        await self.relay.shutdown()
        await self.feed_source.close()
        await self.http_client.aclose()

    async def _sweep_loop(self) -> None:
        interval = self.settings.cache_sweep_interval_seconds
        while True:
            await asyncio.sleep(interval)
            with self.admission_lock:
                cache_removed = self.cache.sweep()
                limiter_removed = self.rate_limiter.sweep()
            if cache_removed or limiter_removed:
                logger.debug(
                    "Swept expired entries",
                    extra={"cache": cache_removed, "limiter": limiter_removed},
                )


def build_container(
    settings: Settings,
    generator: TextGenerationPort | None = None,
    feed_source: FeedSourcePort | None = None,
) -> GatewayContainer:
    """컨테이너 생성."""
    return GatewayContainer(settings, generator=generator, feed_source=feed_source)


# ─────────────────────────────────────────────────────────────────
# FastAPI Depends
# ─────────────────────────────────────────────────────────────────


def get_container(request: Request) -> GatewayContainer:
    return request.app.state.container


def get_ask_question_command(request: Request) -> AskQuestionCommand:
    return get_container(request).ask_question_command()


def get_fetch_today_news_command(request: Request) -> FetchTodayNewsCommand:
    return get_container(request).fetch_today_news_command()


def get_clear_state_command(request: Request) -> ClearStateCommand:
    return get_container(request).clear_state_command()


def get_health_query(request: Request) -> GetHealthQuery:
    return get_container(request).health_query()
